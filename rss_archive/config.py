from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv

from .exceptions import ConfigError
from .fetcher import DEFAULT_USER_AGENT

DEFAULT_CONFIG_PATH = "config.json"


@dataclass(frozen=True)
class Settings:
    urls: Tuple[str, ...] = ()
    output: str = "feeds.json"
    interval_hours: float = 24.0
    timeout_seconds: float = 20.0
    max_workers: int = 4
    log_level: str = "INFO"
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def interval_seconds(self) -> float:
        return self.interval_hours * 60 * 60


def _number(name: str, value: Any, cast, minimum: float):
    try:
        out = cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e
    if out < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {out}")
    return out


def log_level_name(value: Any, name: str = "log level") -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{name} must be a logging level name, got {value!r}")
    return level


def _urls(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(u, str) for u in value):
        raise ConfigError("urls must be a list of strings")
    return tuple(u.strip() for u in value if u.strip())


def _read_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read config file {path} ({e})") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return raw


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Build Settings from the JSON config file, then apply environment overrides.

    Config file keys: urls, output, interval (hours), timeout (seconds),
    max_workers. A missing file leaves the defaults in place. `.env` is loaded
    first, so RSS_ARCHIVE_* variables may live there.
    """
    load_dotenv()
    config_path = Path(path or os.getenv("RSS_ARCHIVE_CONFIG", DEFAULT_CONFIG_PATH))
    raw = _read_file(config_path)

    settings = Settings()
    if "urls" in raw:
        settings = replace(settings, urls=_urls(raw["urls"]))
    if "output" in raw:
        settings = replace(settings, output=str(raw["output"]))
    if "interval" in raw:
        settings = replace(settings, interval_hours=_number("interval", raw["interval"], float, 0))
    if "timeout" in raw:
        settings = replace(settings, timeout_seconds=_number("timeout", raw["timeout"], float, 1))
    if "max_workers" in raw:
        settings = replace(settings, max_workers=_number("max_workers", raw["max_workers"], int, 1))

    output = os.getenv("RSS_ARCHIVE_OUTPUT")
    if output:
        settings = replace(settings, output=output)
    interval = os.getenv("RSS_ARCHIVE_INTERVAL_HOURS")
    if interval:
        settings = replace(
            settings,
            interval_hours=_number("RSS_ARCHIVE_INTERVAL_HOURS", interval, float, 0),
        )
    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        settings = replace(settings, log_level=log_level_name(log_level, "LOG_LEVEL"))
    return settings
