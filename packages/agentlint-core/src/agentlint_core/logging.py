from __future__ import annotations

import json
import logging
import sys

from agentlint_core.errors import ConfigError

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class JSONLogFormatter(logging.Formatter):
    """One JSON object per record.

    Records logged with ``extra={"agent_file": ..., "agent_line": ...}``
    carry the definition file and line they concern as ``file``/``line``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        agent_file = getattr(record, "agent_file", None)
        if agent_file is not None:
            payload["file"] = str(agent_file)
            payload["line"] = getattr(record, "agent_line", None)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def parse_level(level: str) -> int:
    """Map a level name to its ``logging`` constant.

    Raises:
        ConfigError: If *level* is not one of :data:`LOG_LEVELS`.
    """
    name = level.strip().upper()
    if name not in LOG_LEVELS:
        msg = f"Unknown log level '{level}'. Valid levels: {', '.join(LOG_LEVELS)}"
        raise ConfigError(msg)
    return logging.getLevelName(name)


def setup_logging(level: str = "WARNING", json_output: bool = False) -> logging.Logger:
    """Configure and return the root agentlint logger.

    Logs go to stderr so the report on stdout stays machine-readable.
    """
    logger = logging.getLogger("agentlint")
    logger.setLevel(parse_level(level))

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(levelname)s %(name)s: %(message)s",
        ))

    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the agentlint namespace."""
    return logging.getLogger(f"agentlint.{name}")
