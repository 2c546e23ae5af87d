"""Process-wide pairtree configuration.

The two values that shape every pairtree path, the shorty width and the
path separator, live in a frozen :class:`PairtreeConfig`. A process sets
them once at startup (from ``~/.ptree/config.yaml``, the environment, or
an explicit :func:`configure` call) and treats them as read-only after.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import ConfigError

logger = logging.getLogger(__name__)

PTREE_HOME = Path.home() / ".ptree"
CONFIG_FILE = PTREE_HOME / "config.yaml"

ENV_CONFIG = "PTREE_CONFIG"
ENV_SEGMENT_LENGTH = "PTREE_SEGMENT_LENGTH"
ENV_PATH_SEPARATOR = "PTREE_PATH_SEPARATOR"

# Printable ASCII that the clean transform never emits; only these (or
# non-ASCII characters) can split a path without colliding with a shorty.
SAFE_SEPARATORS = frozenset('"*<>?\\|/:.')


class PairtreeConfig(BaseModel):
    """Shorty width and path separator for pairtree paths."""

    model_config = ConfigDict(frozen=True)

    segment_length: int = Field(default=2, ge=1)
    """Characters per shorty (path segment)."""

    path_separator: str = os.sep
    """Single character joining shorties."""

    @field_validator("path_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("path separator must be a single character")
        if v.isspace() or not v.isprintable():
            raise ValueError("path separator cannot be whitespace or a control character")
        if v.isascii() and v not in SAFE_SEPARATORS:
            raise ValueError(
                f"path separator {v!r} can occur inside a cleaned identifier; "
                f"use one of {''.join(sorted(SAFE_SEPARATORS))}"
            )
        return v

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None, source: str = "configuration") -> "PairtreeConfig":
        """Validate a plain mapping, converting pydantic errors to ConfigError."""
        try:
            return cls(**(data or {}))
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(f"Invalid {source}: {problems}") from e

    @classmethod
    def from_yaml(cls, path: Path) -> "PairtreeConfig":
        """Load and validate configuration from a YAML file.

        Raises:
            ConfigError: On a missing file, invalid YAML, or invalid values
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            location = ""
            if hasattr(e, "problem_mark"):
                mark = e.problem_mark
                location = f" (line {mark.line + 1}, column {mark.column + 1})"
            raise ConfigError(f"Invalid YAML syntax in {path.name}{location}") from e

        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"Configuration in {path.name} must be a mapping")
        return cls.from_mapping(data, source=str(path))

    @staticmethod
    def env_overrides() -> dict[str, Any]:
        """Collect overrides from PTREE_* environment variables."""
        overrides: dict[str, Any] = {}
        length = os.environ.get(ENV_SEGMENT_LENGTH)
        if length:
            try:
                overrides["segment_length"] = int(length)
            except ValueError as e:
                raise ConfigError(f"{ENV_SEGMENT_LENGTH} must be an integer, got {length!r}") from e
        separator = os.environ.get(ENV_PATH_SEPARATOR)
        if separator:
            overrides["path_separator"] = separator
        return overrides

    @classmethod
    def from_env(cls) -> "PairtreeConfig":
        """Defaults overlaid with environment variables."""
        return cls.from_mapping(cls.env_overrides(), source="environment")

    @classmethod
    def load(cls, path: Path | None = None) -> "PairtreeConfig":
        """Load file settings (if any), then apply environment overrides.

        Args:
            path: Explicit config file; defaults to $PTREE_CONFIG or
                ~/.ptree/config.yaml when present

        Returns:
            Validated configuration
        """
        if path is None:
            env_path = os.environ.get(ENV_CONFIG)
            path = Path(env_path) if env_path else CONFIG_FILE
            explicit = bool(env_path)
        else:
            path = Path(path)
            explicit = True

        data: dict[str, Any] = {}
        if path.exists():
            data = cls.from_yaml(path).model_dump()
            logger.debug(f"Loaded pairtree configuration from {path}")
        elif explicit:
            raise ConfigError(f"Configuration file not found: {path}")

        data.update(cls.env_overrides())
        return cls.from_mapping(data)

    def to_yaml(self, path: Path) -> None:
        """Write configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(), f, default_flow_style=False, sort_keys=False)


_lock = threading.Lock()
_config: PairtreeConfig | None = None


def configure(config: PairtreeConfig) -> PairtreeConfig:
    """Install the process-wide configuration.

    May be called before first use, or again with an equal value.

    Raises:
        ConfigError: If a different configuration is already in effect
    """
    global _config
    with _lock:
        if _config is not None and _config != config:
            raise ConfigError(
                f"Pairtree configuration already set ({_config!r}); "
                "it cannot change once in use"
            )
        _config = config
        logger.debug(f"Pairtree configuration set: {config!r}")
        return _config


def get_config() -> PairtreeConfig:
    """Return the process configuration, loading it on first use."""
    global _config
    with _lock:
        if _config is None:
            _config = PairtreeConfig.load()
        return _config


def reset_config() -> None:
    """Forget the process configuration (useful for testing)."""
    global _config
    with _lock:
        _config = None

    from ..codec.ppath import get_codec
    get_codec.cache_clear()


__all__ = [
    "CONFIG_FILE",
    "PairtreeConfig",
    "configure",
    "get_config",
    "reset_config",
]
