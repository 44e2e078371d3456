"""Tests for agent definition parsing: metadata block splitting and required keys."""
from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest
from agentlint.parser import parse_agent_file, parse_agent_text
from agentlint_core.errors import ParseError
from conftest import agent_md

if TYPE_CHECKING:
    from pathlib import Path


_FULL_AGENT_MD = textwrap.dedent("""\
    ---
    name: code-reviewer
    description: Reviews code for quality and security issues
    model: opus
    tools: Read, Grep, Bash
    color: blue
    ---

    You are a senior code reviewer.

    ## Focus Areas
    - Security
""")


class TestParseAgentText:
    """Tests for parse_agent_text."""

    def test_parse_full_definition(self, tmp_path: Path) -> None:
        """All metadata keys and the body are extracted."""
        path = tmp_path / "code-reviewer.md"

        agent = parse_agent_text(_FULL_AGENT_MD, path)

        assert agent.name == "code-reviewer"
        assert agent.description == "Reviews code for quality and security issues"
        assert agent.model == "opus"
        assert agent.tools == ("Read", "Grep", "Bash")
        assert agent.extra == {"tools": "Read, Grep, Bash", "color": "blue"}
        assert agent.body.startswith("You are a senior code reviewer.")
        assert "## Focus Areas" in agent.body
        assert agent.source_path == path
        assert agent.body_line == 8

    def test_quoted_description(self, tmp_path: Path) -> None:
        agent = parse_agent_text(agent_md(), tmp_path / "foo.md")

        assert agent.name == "foo"
        assert agent.description == "Does X"
        assert agent.model == "sonnet"
        assert agent.body == "You are a helpful agent."

    def test_tools_as_list(self, tmp_path: Path) -> None:
        content = agent_md(extra="""\
            tools:
              - Read
              - Write
        """)

        agent = parse_agent_text(content, tmp_path / "foo.md")

        assert agent.tools == ("Read", "Write")

    def test_leading_blank_lines_allowed(self, tmp_path: Path) -> None:
        agent = parse_agent_text("\n\n" + agent_md(), tmp_path / "foo.md")

        assert agent.name == "foo"

    def test_crlf_line_endings(self, tmp_path: Path) -> None:
        content = agent_md().replace("\n", "\r\n")

        agent = parse_agent_text(content, tmp_path / "foo.md")

        assert agent.name == "foo"
        assert agent.model == "sonnet"
        assert agent.body == "You are a helpful agent."

    def test_empty_value_is_not_a_parse_error(self, tmp_path: Path) -> None:
        """A present-but-empty key is left for the validator to report."""
        content = agent_md(description="")

        agent = parse_agent_text(content, tmp_path / "foo.md")

        assert agent.description == ""

    def test_non_string_values_are_coerced(self, tmp_path: Path) -> None:
        agent = parse_agent_text(agent_md(name="42"), tmp_path / "42.md")

        assert agent.name == "42"

    def test_missing_opening_delimiter(self, tmp_path: Path) -> None:
        """A file without a metadata block fails on its first line."""
        with pytest.raises(ParseError, match="expected opening") as excinfo:
            parse_agent_text("# Just markdown\n", tmp_path / "plain.md")

        assert excinfo.value.line == 1
        assert excinfo.value.field is None

    def test_missing_closing_delimiter(self, tmp_path: Path) -> None:
        content = "---\nname: foo\ndescription: x\nmodel: sonnet\n\nBody\n"

        with pytest.raises(ParseError, match="missing closing") as excinfo:
            parse_agent_text(content, tmp_path / "foo.md")

        assert excinfo.value.line == 1

    def test_empty_file(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="empty"):
            parse_agent_text("", tmp_path / "empty.md")

    def test_invalid_yaml_reports_file_line(self, tmp_path: Path) -> None:
        """YAML errors are located on the offending line of the file."""
        content = textwrap.dedent("""\
            ---
            name: foo
            description: [unclosed
            model: sonnet
            ---

            Body.
        """)

        with pytest.raises(ParseError, match="invalid YAML") as excinfo:
            parse_agent_text(content, tmp_path / "foo.md")

        assert excinfo.value.line is not None
        assert 3 <= excinfo.value.line <= 5

    def test_metadata_not_a_mapping(self, tmp_path: Path) -> None:
        content = "---\n- just\n- a list\n---\n\nBody\n"

        with pytest.raises(ParseError, match="must be a mapping"):
            parse_agent_text(content, tmp_path / "foo.md")

    @pytest.mark.parametrize("missing", ["name", "description", "model"])
    def test_missing_required_key(self, tmp_path: Path, missing: str) -> None:
        """An absent required key raises a ParseError naming the field."""
        values = {
            "name": "name: foo\n",
            "description": "description: Does X\n",
            "model": "model: sonnet\n",
        }
        header = "".join(v for k, v in values.items() if k != missing)
        content = f"---\n{header}---\n\nBody\n"

        with pytest.raises(ParseError, match=f"missing required key '{missing}'") as excinfo:
            parse_agent_text(content, tmp_path / "foo.md")

        assert excinfo.value.field == missing
        assert excinfo.value.line == 1

    def test_empty_metadata_block_reports_name_first(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError) as excinfo:
            parse_agent_text("---\n---\n\nBody\n", tmp_path / "foo.md")

        assert excinfo.value.field == "name"

    def test_error_message_includes_location(self, tmp_path: Path) -> None:
        path = tmp_path / "plain.md"

        with pytest.raises(ParseError) as excinfo:
            parse_agent_text("no header\n", path)

        assert str(excinfo.value).startswith(f"{path}:1: ")


class TestParseAgentFile:
    """Tests for parse_agent_file."""

    def test_reads_utf8_file(self, tmp_path: Path) -> None:
        path = tmp_path / "foo.md"
        path.write_text(agent_md(description='"Résumé writer"'), encoding="utf-8")

        agent = parse_agent_file(path)

        assert agent.description == "Résumé writer"

    def test_utf8_bom_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "foo.md"
        path.write_bytes(b"\xef\xbb\xbf" + agent_md().encode("utf-8"))

        agent = parse_agent_file(path)

        assert agent.name == "foo"

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "foo.md"
        path.write_bytes(b"---\nname: foo\n\xff\xfe\n---\n")

        with pytest.raises(ParseError, match="not valid UTF-8") as excinfo:
            parse_agent_file(path)

        assert excinfo.value.line == 3

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            parse_agent_file(tmp_path / "missing.md")
