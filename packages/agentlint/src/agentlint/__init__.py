"""Agent definition checks: parsing, loading, validation, and reporting."""
from __future__ import annotations

from agentlint.loader import AgentLoader
from agentlint.parser import REQUIRED_FIELDS, parse_agent_file, parse_agent_text
from agentlint.pipeline import check_directory, parse_failure_to_issue
from agentlint.report import build_report, render_issue, render_jsonl, render_text
from agentlint.types import (
    AgentDefinition,
    LoadResult,
    Severity,
    ValidationIssue,
    ValidationReport,
)
from agentlint.validator import AgentValidator

__all__ = [
    "REQUIRED_FIELDS",
    "AgentDefinition",
    "AgentLoader",
    "AgentValidator",
    "LoadResult",
    "Severity",
    "ValidationIssue",
    "ValidationReport",
    "build_report",
    "check_directory",
    "parse_agent_file",
    "parse_agent_text",
    "parse_failure_to_issue",
    "render_issue",
    "render_jsonl",
    "render_text",
]
