"""Configuration loading from CLI args, env vars, and an optional YAML file."""

import logging
import os
from dataclasses import dataclass, field

import yaml

from src.formatter import COLOR_MODES
from src.timeline import ELLIPSIS, MESSAGE_WIDTH

logger = logging.getLogger(__name__)

ENV_PREFIX = "POD_TIMELINE_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised for configuration that cannot produce a timeline."""


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    pod: str = ""
    stop_after_deletion: bool = False
    message_width: int = MESSAGE_WIDTH
    color: str = "auto"
    log_level: str = "WARNING"
    files: list[str] = field(default_factory=list)

    def validate(self) -> "Config":
        if not self.pod.strip():
            raise ConfigError("No pod provided")
        if self.message_width <= len(ELLIPSIS):
            raise ConfigError(f"message width must exceed {len(ELLIPSIS)}, got {self.message_width}")
        if self.color not in COLOR_MODES:
            raise ConfigError(f"color must be one of {', '.join(COLOR_MODES)}, got {self.color!r}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {self.log_level!r}")
        return self


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def _pick(cli_value, env_name: str, yaml_data: dict, key: str, default, environ):
    """CLI flag > environment variable > YAML key > default."""
    if cli_value is not None:
        return cli_value
    env_value = environ.get(ENV_PREFIX + env_name)
    if env_value is not None and env_value != "":
        return env_value
    if yaml_data.get(key) is not None:
        return yaml_data[key]
    return default


def load_config(cli_args, yaml_data: dict | None = None, environ=None) -> Config:
    """Build a validated Config from parsed CLI args, env vars, and YAML data."""
    yaml_data = yaml_data or {}
    environ = os.environ if environ is None else environ

    def pick(attr, env_name, default):
        return _pick(getattr(cli_args, attr, None), env_name, yaml_data, attr, default, environ)

    try:
        width = int(pick("message_width", "MESSAGE_WIDTH", Config.message_width))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"message width must be an integer: {exc}") from exc

    return Config(
        pod=str(pick("pod", "POD", "")),
        stop_after_deletion=_parse_bool(pick("stop_after_deletion", "STOP_AFTER_DELETION", False)),
        message_width=width,
        color=str(pick("color", "COLOR", Config.color)).lower(),
        log_level=str(pick("log_level", "LOG_LEVEL", Config.log_level)).upper(),
        files=list(getattr(cli_args, "files", None) or []),
    ).validate()
