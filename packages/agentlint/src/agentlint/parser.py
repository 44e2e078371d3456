"""Agent definition parser: extracts YAML frontmatter and the markdown body."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml
from agentlint_core.errors import ParseError

from agentlint.types import AgentDefinition

if TYPE_CHECKING:
    from pathlib import Path

REQUIRED_FIELDS: tuple[str, ...] = ("name", "description", "model")

_DELIMITER = "---"


def parse_agent_file(path: Path) -> AgentDefinition:
    """Read and parse a single agent definition file.

    Args:
        path: Path to the Markdown file.

    Returns:
        The parsed AgentDefinition.

    Raises:
        FileNotFoundError: If the file does not exist.
        ParseError: If the file cannot be read or decoded, or its
            metadata block is malformed or missing a required key.
    """
    if not path.exists():
        msg = f"Agent definition not found: {path}"
        raise FileNotFoundError(msg)

    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"cannot read file: {exc.strerror or exc}"
        raise ParseError(msg, path) from exc

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        line = raw[: exc.start].count(b"\n") + 1
        msg = f"file is not valid UTF-8 (byte offset {exc.start})"
        raise ParseError(msg, path, line=line) from exc

    return parse_agent_text(text, path)


def parse_agent_text(text: str, path: Path) -> AgentDefinition:
    """Parse agent definition text into an AgentDefinition.

    The format is a YAML metadata block delimited by ``---`` lines at the
    top of the file, followed by a markdown body.  Only structural
    problems and absent required keys are raised here; a key that is
    present with an empty value is left for the validator to report.
    """
    lines = text.split("\n")
    opening, closing = _find_delimiters(lines, path)

    frontmatter = "\n".join(lines[opening + 1 : closing])
    meta = _parse_yaml(frontmatter, path, first_line=opening + 2)

    for key in REQUIRED_FIELDS:
        if key not in meta:
            msg = f"metadata block is missing required key '{key}'"
            raise ParseError(msg, path, line=opening + 1, field=key)

    body = "\n".join(lines[closing + 1 :])

    return AgentDefinition(
        name=_as_str(meta["name"]),
        description=_as_str(meta["description"]),
        model=_as_str(meta["model"]),
        body=body.strip(),
        tools=_as_str_tuple(meta.get("tools")),
        extra={k: v for k, v in meta.items() if k not in REQUIRED_FIELDS},
        source_path=path,
        body_line=closing + 2,
    )


def _find_delimiters(lines: list[str], path: Path) -> tuple[int, int]:
    """Return the 0-based indexes of the opening and closing ``---`` lines."""
    opening = next(
        (i for i, line in enumerate(lines) if line.strip()),
        None,
    )
    if opening is None:
        msg = "file is empty (no metadata block)"
        raise ParseError(msg, path, line=1)

    if lines[opening].rstrip() != _DELIMITER:
        msg = f"missing metadata block (expected opening '{_DELIMITER}')"
        raise ParseError(msg, path, line=opening + 1)

    for index in range(opening + 1, len(lines)):
        if lines[index].rstrip() == _DELIMITER:
            return opening, index

    msg = f"missing closing '{_DELIMITER}' for metadata block"
    raise ParseError(msg, path, line=opening + 1)


def _parse_yaml(frontmatter: str, path: Path, first_line: int) -> dict[str, Any]:
    """Parse the YAML frontmatter string using safe_load.

    ``first_line`` is the file line holding the first frontmatter line, used
    to translate the YAML parser's position into a file line.
    """
    try:
        result = yaml.safe_load(frontmatter)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = first_line + mark.line if mark is not None else first_line - 1
        problem = getattr(exc, "problem", None) or str(exc)
        msg = f"invalid YAML in metadata block: {problem}"
        raise ParseError(msg, path, line=line) from exc

    if result is None:
        return {}

    if not isinstance(result, dict):
        msg = f"metadata block must be a mapping, got {type(result).__name__}"
        raise ParseError(msg, path, line=first_line - 1)

    return {str(key): value for key, value in result.items()}


def _as_str(value: Any) -> str:
    """Coerce a scalar metadata value to a stripped string; None becomes ''."""
    if value is None:
        return ""
    return str(value).strip()


def _as_str_tuple(value: Any) -> tuple[str, ...]:
    """Coerce a tools value to a tuple of names.

    Accepts a comma-separated string or a list; anything else yields an
    empty tuple (the raw value stays in ``extra`` for the validator).
    """
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    if isinstance(value, list):
        return tuple(str(item).strip() for item in value if str(item).strip())
    return ()
