from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from agentlint_core.errors import ConfigError
from agentlint_core.logging import parse_level

DEFAULT_MODEL_TIERS: tuple[str, ...] = ("haiku", "sonnet", "opus", "inherit")
DEFAULT_EXCLUDES: tuple[str, ...] = (
    "README.md",
    "INDEX.md",
    "CONTRIBUTING.md",
    "CHANGELOG.md",
    "LICENSE.md",
    "CLAUDE.md",
)
DEFAULT_KNOWN_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "model",
    "tools",
    "color",
)


def _load_toml(path: Path) -> dict:
    """Load a TOML file, returning empty dict if missing."""
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    except OSError as exc:
        msg = f"Cannot read config file {path}: {exc}"
        raise ConfigError(msg) from exc


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base (1 level deep for TOML sections)."""
    merged = dict(base)
    for key, val in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(val, dict)
        ):
            merged[key] = {**merged[key], **val}
        else:
            merged[key] = val
    return merged


def _section(raw: dict, name: str) -> dict:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        msg = f"Config section [{name}] must be a table, got {type(value).__name__}"
        raise ConfigError(msg)
    return value


def _expect(section: dict, key: str, kind: type | tuple[type, ...], where: str) -> Any:
    value = section[key]
    # bool is an int subclass; never accept it for integer settings
    if isinstance(value, bool) and kind is int:
        ok = False
    else:
        ok = isinstance(value, kind)
    if not ok:
        msg = f"Config value {where}.{key} has wrong type: {type(value).__name__}"
        raise ConfigError(msg)
    return value


def _str_tuple(section: dict, key: str, where: str) -> tuple[str, ...]:
    value = _expect(section, key, list, where)
    if not all(isinstance(item, str) for item in value):
        msg = f"Config value {where}.{key} must be a list of strings"
        raise ConfigError(msg)
    return tuple(value)


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    pattern: str = "*.md"
    recursive: bool = False
    exclude: tuple[str, ...] = DEFAULT_EXCLUDES


@dataclass(frozen=True, slots=True)
class SchemaConfig:
    model_tiers: tuple[str, ...] = DEFAULT_MODEL_TIERS
    description_max_length: int = 1024
    name_max_length: int = 64
    known_fields: tuple[str, ...] = DEFAULT_KNOWN_FIELDS


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str = "WARNING"
    json: bool = False


@dataclass(frozen=True, slots=True)
class AgentlintConfig:
    """Top-level configuration, parsed from agentlint.toml."""
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    schema: SchemaConfig = field(default_factory=SchemaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_toml(
        cls, path: Path | str = "agentlint.toml"
    ) -> AgentlintConfig:
        path = Path(path)
        raw = _load_toml(path)
        return cls._from_raw(raw)

    @classmethod
    def load(
        cls, project_dir: Path | str | None = None
    ) -> AgentlintConfig:
        """Load config with global → project layering.

        Resolution order (later wins):
        1. Built-in defaults
        2. ~/.agentlint/config.toml (global)
        3. .agentlint/config.toml or agentlint.toml (project)
        """
        global_path = Path.home() / ".agentlint" / "config.toml"

        project_dir = (
            Path.cwd() if project_dir is None else Path(project_dir)
        )

        # Project config: .agentlint/config.toml takes priority
        project_path = project_dir / ".agentlint" / "config.toml"
        if not project_path.exists():
            project_path = project_dir / "agentlint.toml"

        global_raw = _load_toml(global_path)
        project_raw = _load_toml(project_path)
        merged = _deep_merge(global_raw, project_raw)

        return cls._from_raw(merged)

    @classmethod
    def _from_raw(cls, raw: dict) -> AgentlintConfig:
        """Build AgentlintConfig from a raw TOML dict."""
        loader_raw = _section(raw, "loader")
        schema_raw = _section(raw, "schema")
        logging_raw = _section(raw, "logging")

        loader_kwargs: dict[str, Any] = {}
        if "pattern" in loader_raw:
            loader_kwargs["pattern"] = _expect(loader_raw, "pattern", str, "loader")
        if "recursive" in loader_raw:
            loader_kwargs["recursive"] = _expect(loader_raw, "recursive", bool, "loader")
        if "exclude" in loader_raw:
            loader_kwargs["exclude"] = _str_tuple(loader_raw, "exclude", "loader")

        schema_kwargs: dict[str, Any] = {}
        if "model_tiers" in schema_raw:
            tiers = _str_tuple(schema_raw, "model_tiers", "schema")
            if not tiers:
                msg = "Config value schema.model_tiers must not be empty"
                raise ConfigError(msg)
            schema_kwargs["model_tiers"] = tiers
        for key in ("description_max_length", "name_max_length"):
            if key in schema_raw:
                value = _expect(schema_raw, key, int, "schema")
                if value < 1:
                    msg = f"Config value schema.{key} must be at least 1, got {value}"
                    raise ConfigError(msg)
                schema_kwargs[key] = value
        if "known_fields" in schema_raw:
            schema_kwargs["known_fields"] = _str_tuple(schema_raw, "known_fields", "schema")

        logging_kwargs: dict[str, Any] = {}
        if "level" in logging_raw:
            level = _expect(logging_raw, "level", str, "logging")
            parse_level(level)
            logging_kwargs["level"] = level.strip().upper()
        if "json" in logging_raw:
            logging_kwargs["json"] = _expect(logging_raw, "json", bool, "logging")

        return cls(
            loader=LoaderConfig(**loader_kwargs),
            schema=SchemaConfig(**schema_kwargs),
            logging=LoggingConfig(**logging_kwargs),
        )
