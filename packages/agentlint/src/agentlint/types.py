"""Agent definition and validation result types."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agentlint_core.errors import ParseError


class Severity(enum.Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class AgentDefinition:
    """A parsed agent definition file.

    Holds the metadata from the YAML frontmatter and the Markdown body
    that follows it.  ``extra`` keeps every frontmatter key that is not
    mapped to a dedicated attribute, so the validator can flag unknown
    keys without the parser having to know about them.
    """

    name: str
    description: str
    model: str
    body: str
    tools: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)
    source_path: Path = field(default_factory=lambda: Path("."))
    body_line: int = 1


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single problem found in an agent definition file."""

    path: Path
    severity: Severity
    message: str
    code: str
    field: str | None = None
    line: int | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def sort_key(self) -> tuple[str, int, str, str, str]:
        return (
            self.path.as_posix(),
            self.line or 0,
            self.field or "",
            self.code,
            self.message,
        )


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Everything the loader found in one directory."""

    definitions: list[AgentDefinition] = field(default_factory=list)
    failures: list[ParseError] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """The sorted outcome of validating a collection of agent definitions."""

    issues: tuple[ValidationIssue, ...] = ()
    files_checked: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if not issue.is_error)

    @property
    def passed(self) -> bool:
        """True when no issue has error severity."""
        return self.error_count == 0
