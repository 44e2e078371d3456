"""Report generation: sorts issues and renders them as text or JSON lines."""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from agentlint.types import ValidationReport

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from agentlint.types import ValidationIssue


def build_report(
    issues: Iterable[ValidationIssue], files_checked: int
) -> ValidationReport:
    """Aggregate issues into a deterministic report.

    Issues are ordered by file, then line, field, rule code and message,
    so the same input always yields the same report.
    """
    ordered = tuple(sorted(issues, key=lambda issue: issue.sort_key()))
    return ValidationReport(issues=ordered, files_checked=files_checked)


_CONTROL_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t"})


def render_issue(issue: ValidationIssue, root: Path | None = None) -> str:
    """Render one issue as a single line.

    Line breaks copied from file names or metadata values are escaped,
    so each issue always occupies exactly one line.
    """
    location = _one_line(_display_path(issue.path, root))
    if issue.line is not None:
        location = f"{location}:{issue.line}"
    subject = f"{_one_line(issue.field)}: " if issue.field else ""
    return (
        f"{location}: {issue.severity.value} [{issue.code}] "
        f"{subject}{_one_line(issue.message)}"
    )


def render_text(report: ValidationReport, root: Path | None = None) -> str:
    """Render *report* as plain text, one line per issue plus a summary."""
    lines = [render_issue(issue, root) for issue in report.issues]
    lines.append(summary_line(report))
    return "\n".join(lines)


def render_jsonl(report: ValidationReport, root: Path | None = None) -> str:
    """Render *report* as JSON lines: one record per issue, then a summary."""
    records: list[dict[str, Any]] = [
        {
            "path": _display_path(issue.path, root),
            "line": issue.line,
            "field": issue.field,
            "severity": issue.severity.value,
            "code": issue.code,
            "message": issue.message,
        }
        for issue in report.issues
    ]
    records.append({
        "summary": {
            "passed": report.passed,
            "files_checked": report.files_checked,
            "errors": report.error_count,
            "warnings": report.warning_count,
        }
    })
    return "\n".join(json.dumps(record, sort_keys=True) for record in records)


def summary_line(report: ValidationReport) -> str:
    outcome = "PASS" if report.passed else "FAIL"
    return (
        f"{outcome}: {report.files_checked} file(s) checked, "
        f"{report.error_count} error(s), {report.warning_count} warning(s)"
    )


def _display_path(path: Path, root: Path | None) -> str:
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def _one_line(text: str) -> str:
    return text.translate(_CONTROL_ESCAPES)
