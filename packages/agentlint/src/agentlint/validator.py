"""Agent definition validation: checks definitions against the metadata schema."""
from __future__ import annotations

import re
from collections import defaultdict
from typing import TYPE_CHECKING

from agentlint_core.config import SchemaConfig

from agentlint.types import Severity, ValidationIssue

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from agentlint.types import AgentDefinition

_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")


class AgentValidator:
    """Validates agent definitions and collections of them.

    Problems are returned as :class:`ValidationIssue` values, never
    raised, so one bad file cannot stop the others from being checked.
    """

    def __init__(self, config: SchemaConfig | None = None) -> None:
        self._config = config or SchemaConfig()

    def validate(self, agent: AgentDefinition) -> list[ValidationIssue]:
        """Return the issues found in a single definition.

        An empty list means the definition is valid.
        """
        issues: list[ValidationIssue] = []
        issues.extend(self._check_name(agent))
        issues.extend(self._check_description(agent))
        issues.extend(self._check_model(agent))
        issues.extend(self._check_body(agent))
        issues.extend(self._check_extra_fields(agent))
        return issues

    def validate_collection(
        self,
        agents: Iterable[AgentDefinition],
        root: Path | None = None,
    ) -> list[ValidationIssue]:
        """Return duplicate-name issues across *agents*.

        Every file whose name is shared with another file is reported,
        naming the other files relative to *root* when it is given.
        Definitions with an empty name are skipped here; they already
        carry a missing-field issue.
        """
        by_name: dict[str, list[AgentDefinition]] = defaultdict(list)
        for agent in agents:
            if agent.name:
                by_name[agent.name].append(agent)

        issues: list[ValidationIssue] = []
        for name, group in by_name.items():
            if len(group) < 2:
                continue
            for agent in group:
                others = ", ".join(
                    sorted(
                        _relative(other.source_path, root)
                        for other in group
                        if other is not agent
                    )
                )
                issues.append(_issue(
                    agent,
                    "duplicate-name",
                    f"Duplicate agent name '{name}' (also defined in {others}).",
                    field="name",
                ))
        return issues

    def validate_all(
        self,
        agents: Iterable[AgentDefinition],
        root: Path | None = None,
    ) -> list[ValidationIssue]:
        """Validate each definition and then the collection as a whole."""
        agents = list(agents)
        issues: list[ValidationIssue] = []
        for agent in agents:
            issues.extend(self.validate(agent))
        issues.extend(self.validate_collection(agents, root))
        return issues

    # ── Per-field checks ────────────────────────────────────────────

    def _check_name(self, agent: AgentDefinition) -> list[ValidationIssue]:
        if not agent.name:
            return [_missing(agent, "name")]

        issues: list[ValidationIssue] = []
        stem = agent.source_path.stem
        if agent.name != stem:
            issues.append(_issue(
                agent,
                "name-mismatch",
                f"Agent name '{agent.name}' does not match file name '{stem}'.",
                field="name",
            ))

        max_length = self._config.name_max_length
        if len(agent.name) > max_length or not _NAME_PATTERN.match(agent.name):
            issues.append(_issue(
                agent,
                "invalid-name",
                f"Agent name should be lowercase alphanumeric with hyphens "
                f"and at most {max_length} characters: '{agent.name}'.",
                field="name",
                severity=Severity.WARNING,
            ))
        return issues

    def _check_description(self, agent: AgentDefinition) -> list[ValidationIssue]:
        if not agent.description:
            return [_missing(agent, "description")]

        issues: list[ValidationIssue] = []
        max_length = self._config.description_max_length
        if len(agent.description) > max_length:
            issues.append(_issue(
                agent,
                "description-too-long",
                f"Agent description exceeds {max_length} characters "
                f"({len(agent.description)} chars).",
                field="description",
            ))
        if "\n" in agent.description or "\r" in agent.description:
            issues.append(_issue(
                agent,
                "multiline-description",
                "Agent description should be a single line.",
                field="description",
                severity=Severity.WARNING,
            ))
        return issues

    def _check_model(self, agent: AgentDefinition) -> list[ValidationIssue]:
        if not agent.model:
            return [_missing(agent, "model")]

        tiers = self._config.model_tiers
        if agent.model not in tiers:
            return [_issue(
                agent,
                "invalid-model",
                f"Invalid model tier '{agent.model}'. "
                f"Valid values: {', '.join(tiers)}.",
                field="model",
            )]
        return []

    def _check_body(self, agent: AgentDefinition) -> list[ValidationIssue]:
        if agent.body.strip():
            return []
        return [_issue(
            agent,
            "empty-body",
            "Agent body is empty.",
            field="body",
            line=agent.body_line,
        )]

    def _check_extra_fields(self, agent: AgentDefinition) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []

        if "tools" in agent.extra and not _is_tools_value(agent.extra["tools"]):
            issues.append(_issue(
                agent,
                "invalid-tools",
                "Agent tools must be a comma-separated string or a list "
                f"of strings, got {type(agent.extra['tools']).__name__}.",
                field="tools",
                severity=Severity.WARNING,
            ))

        known = set(self._config.known_fields)
        for key in sorted(agent.extra):
            if key not in known:
                issues.append(_issue(
                    agent,
                    "unknown-field",
                    f"Unknown metadata key '{key}'.",
                    field=key,
                    severity=Severity.WARNING,
                ))
        return issues


def _relative(path: Path, root: Path | None) -> str:
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def _is_tools_value(value: object) -> bool:
    if value is None or isinstance(value, str):
        return True
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _missing(agent: AgentDefinition, field: str) -> ValidationIssue:
    return _issue(
        agent,
        "missing-field",
        f"Agent {field} is required.",
        field=field,
    )


def _issue(
    agent: AgentDefinition,
    code: str,
    message: str,
    *,
    field: str | None = None,
    severity: Severity = Severity.ERROR,
    line: int | None = None,
) -> ValidationIssue:
    return ValidationIssue(
        path=agent.source_path,
        severity=severity,
        message=message,
        code=code,
        field=field,
        line=line,
    )
