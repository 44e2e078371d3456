from __future__ import annotations

import logging
import textwrap
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


def agent_md(
    name: str = "foo",
    description: str = '"Does X"',
    model: str = "sonnet",
    body: str = "You are a helpful agent.\n",
    extra: str = "",
) -> str:
    """Build an agent definition file body with the given metadata values."""
    header = f"name: {name}\ndescription: {description}\nmodel: {model}\n"
    return f"---\n{header}{textwrap.dedent(extra)}---\n\n{body}"


@pytest.fixture
def agents_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "agents"
    directory.mkdir()
    return directory


@pytest.fixture
def write_agent(agents_dir: Path) -> Callable[[str, str], Path]:
    """Write ``<filename>`` with *content* into the agents directory."""

    def _write(filename: str, content: str) -> Path:
        path = agents_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _isolate_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's ~/.agentlint/config.toml out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))


@pytest.fixture(autouse=True)
def _reset_agentlint_logger() -> Iterator[None]:
    logger = logging.getLogger("agentlint")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
