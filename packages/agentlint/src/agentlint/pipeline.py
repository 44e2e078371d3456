"""Single-pass check of a directory: load, validate, report."""
from __future__ import annotations

from typing import TYPE_CHECKING

from agentlint_core.config import AgentlintConfig
from agentlint_core.logging import get_logger

from agentlint.loader import AgentLoader
from agentlint.report import build_report
from agentlint.types import Severity, ValidationIssue
from agentlint.validator import AgentValidator

if TYPE_CHECKING:
    from pathlib import Path

    from agentlint_core.errors import ParseError

    from agentlint.types import ValidationReport

logger = get_logger("pipeline")


def parse_failure_to_issue(error: ParseError) -> ValidationIssue:
    """Turn a loader ParseError into an error-severity issue on its file."""
    code = "missing-field" if error.field is not None else "parse-error"
    return ValidationIssue(
        path=error.path,
        severity=Severity.ERROR,
        message=error.message,
        code=code,
        field=error.field,
        line=error.line,
    )


def check_directory(
    directory: Path, config: AgentlintConfig | None = None
) -> ValidationReport:
    """Validate every agent definition in *directory*.

    Raises:
        CollectionError: If the directory cannot be read.  Nothing else
            about the input aborts the run.
    """
    config = config or AgentlintConfig()
    loader = AgentLoader(config.loader)
    validator = AgentValidator(config.schema)

    result = loader.load_directory(directory)

    issues = [parse_failure_to_issue(failure) for failure in result.failures]
    issues.extend(validator.validate_all(result.definitions, root=directory))

    report = build_report(issues, files_checked=len(result.files))
    logger.info(
        "Checked %d file(s): %d error(s), %d warning(s)",
        report.files_checked,
        report.error_count,
        report.warning_count,
    )
    return report
