"""Agent definition discovery and loading from a directory."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from agentlint_core.config import LoaderConfig
from agentlint_core.errors import CollectionError, ParseError

from agentlint.parser import parse_agent_file
from agentlint.types import LoadResult

if TYPE_CHECKING:
    from pathlib import Path

    from agentlint.types import AgentDefinition

logger = logging.getLogger("agentlint.loader")


class AgentLoader:
    """Loads every agent definition file in a directory.

    Files are matched by the configured glob pattern (``*.md`` by
    default) and read in sorted order.  Index and overview documents
    listed in ``exclude`` and hidden files are skipped.  A file that
    fails to parse is recorded as a failure and loading continues.
    """

    def __init__(self, config: LoaderConfig | None = None) -> None:
        self._config = config or LoaderConfig()
        self._excluded = {name.casefold() for name in self._config.exclude}

    @property
    def config(self) -> LoaderConfig:
        return self._config

    def iter_files(self, directory: Path) -> list[Path]:
        """Return the candidate definition files under *directory*, sorted.

        Raises:
            CollectionError: If *directory* does not exist, is not a
                directory, or cannot be listed.
        """
        if not directory.exists():
            msg = f"Input directory does not exist: {directory}"
            raise CollectionError(msg)
        if not directory.is_dir():
            msg = f"Input path is not a directory: {directory}"
            raise CollectionError(msg)

        try:
            # Probe first: glob() swallows permission errors on some versions
            next(directory.iterdir(), None)
            candidates = (
                directory.rglob(self._config.pattern)
                if self._config.recursive
                else directory.glob(self._config.pattern)
            )
            files = sorted(candidates)
        except OSError as exc:
            msg = f"Cannot read input directory {directory}: {exc.strerror or exc}"
            raise CollectionError(msg) from exc

        selected: list[Path] = []
        for path in files:
            if not path.is_file():
                continue
            relative = path.relative_to(directory)
            if any(part.startswith(".") for part in relative.parts):
                logger.debug("Skipping hidden file: %s", path)
                continue
            if path.name.casefold() in self._excluded:
                logger.debug("Skipping excluded file: %s", path)
                continue
            selected.append(path)
        return selected

    def load_directory(self, directory: Path) -> LoadResult:
        """Parse every definition file in *directory*.

        Returns:
            A LoadResult holding the parsed definitions, the parse
            failures, and the full list of files that were read.

        Raises:
            CollectionError: If the directory itself cannot be read.
        """
        files = self.iter_files(directory)
        definitions: list[AgentDefinition] = []
        failures: list[ParseError] = []

        for path in files:
            try:
                definitions.append(self.load_file(path))
            except ParseError as exc:
                logger.warning(
                    "Failed to parse agent definition: %s",
                    exc,
                    extra={"agent_file": exc.path, "agent_line": exc.line},
                )
                failures.append(exc)

        logger.info(
            "Loaded %d agent definition(s) from %s (%d failed to parse)",
            len(definitions),
            directory,
            len(failures),
        )
        return LoadResult(definitions=definitions, failures=failures, files=files)

    def load_file(self, path: Path) -> AgentDefinition:
        """Load a single agent definition file.

        Raises:
            FileNotFoundError: If *path* does not exist.
            ParseError: If the file is malformed.
        """
        return parse_agent_file(path)
