"""agentlint core: shared config, errors, and logging."""
from __future__ import annotations

from agentlint_core._version import __version__
from agentlint_core.config import (
    AgentlintConfig,
    LoaderConfig,
    LoggingConfig,
    SchemaConfig,
)
from agentlint_core.errors import (
    AgentlintError,
    CollectionError,
    ConfigError,
    DefinitionError,
    ParseError,
)
from agentlint_core.logging import get_logger, setup_logging

__all__ = [
    # Config
    "AgentlintConfig",
    # Errors
    "AgentlintError",
    "CollectionError",
    "ConfigError",
    "DefinitionError",
    "LoaderConfig",
    "LoggingConfig",
    "ParseError",
    "SchemaConfig",
    # Version
    "__version__",
    # Logging
    "get_logger",
    "setup_logging",
]
