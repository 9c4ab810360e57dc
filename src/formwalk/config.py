"""User configuration for the formwalk CLI.

Resolution order (later wins):
1. Built-in defaults
2. ``config.yaml`` in the config home (``formwalk:`` section)
3. ``FORMWALK_*`` environment variables
4. Command line options (applied by the CLI)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("json", "yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class FormwalkConfig:
    """Settings shared by the CLI commands."""

    quiet: bool = False
    output_format: str = "json"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Unsupported output format {self.output_format!r}; expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Unsupported log level {self.log_level!r}")

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "FormwalkConfig":
        if not isinstance(data, dict):
            return cls()

        quiet = data.get("quiet", False)
        if not isinstance(quiet, bool):
            raise ConfigError("'quiet' must be true or false")
        output_format = str(data.get("output_format") or "json").strip().lower()
        log_level = str(data.get("log_level") or "WARNING").strip().upper()
        return cls(quiet=quiet, output_format=output_format, log_level=log_level)


def get_config_home() -> Path:
    """Return the directory holding ``config.yaml``.

    ``FORMWALK_HOME`` takes precedence over the platform config directory.
    """
    if env_home := os.environ.get("FORMWALK_HOME"):
        return Path(env_home)

    from platformdirs import user_config_dir

    return Path(user_config_dir("formwalk"))


def _config_path() -> Path:
    return get_config_home() / "config.yaml"


def _env_flag(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {value!r}")


def load_config() -> FormwalkConfig:
    """Load configuration from the config file and the environment."""
    config_path = _config_path()
    config = FormwalkConfig()

    if config_path.exists():
        yaml = YAML(typ="safe")
        try:
            with config_path.open("r", encoding="utf-8") as handle:
                payload = yaml.load(handle) or {}
        except (OSError, YAMLError) as exc:
            raise ConfigError(f"Failed to parse {config_path}: {exc}") from exc

        section = payload.get("formwalk") if isinstance(payload, dict) else None
        config = FormwalkConfig.from_dict(section if isinstance(section, dict) else None)
        logger.debug("Loaded configuration from %s", config_path)

    if (quiet := os.environ.get("FORMWALK_QUIET")) is not None:
        config = replace(config, quiet=_env_flag("FORMWALK_QUIET", quiet))
    if output_format := os.environ.get("FORMWALK_OUTPUT_FORMAT"):
        config = replace(config, output_format=output_format.strip().lower())
    if log_level := os.environ.get("FORMWALK_LOG_LEVEL"):
        config = replace(config, log_level=log_level.strip().upper())

    return config
