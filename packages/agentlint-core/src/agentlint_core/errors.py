from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class AgentlintError(Exception):
    """Base exception for all agentlint errors."""


# ── Config Errors ────────────────────────────────────────────────────

class ConfigError(AgentlintError):
    """Invalid or missing configuration."""


# ── Collection Errors ────────────────────────────────────────────────

class CollectionError(AgentlintError):
    """The input directory cannot be read; the run cannot continue."""


# ── Agent Definition Errors ─────────────────────────────────────────

class DefinitionError(AgentlintError):
    """Base for errors tied to a single agent definition file."""


class ParseError(DefinitionError):
    """An agent definition file has a malformed metadata block.

    Carries the offending file and 1-based line so the failure can be
    reported as an issue against that file.  ``field`` is set when the
    failure is a missing required key.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        line: int | None = None,
        field: str | None = None,
    ) -> None:
        self.message = message
        self.path = path
        self.line = line
        self.field = field
        location = f"{path}:{line}" if line is not None else str(path)
        super().__init__(f"{location}: {message}")
