"""Configuration loader for the briefing service process."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_float(key: str, default: float) -> float:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be a number") from exc


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if value_lower in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean")


# Placeholder endpoint: recognised by the fetcher as "no source configured".
PLACEHOLDER_SHEETS_URL = (
    "https://docs.google.com/spreadsheets/d/EXAMPLE/gviz/tq?tqx=out:csv&sheet="
)

DEFAULT_USER_AGENT = "larp-briefing/1.0"


@dataclass(slots=True)
class AppConfig:
    settings_path: Path
    default_sheets_url: str
    http_timeout: float
    http_user_agent: str
    startup_delay: float
    refresh_on_startup: bool
    log_level: str


def load_config() -> AppConfig:
    settings_path = Path(_get_env("LARP_SETTINGS_PATH", "larp_settings.json"))
    default_sheets_url = _get_env("LARP_SHEETS_URL", PLACEHOLDER_SHEETS_URL)

    http_timeout = _get_float("HTTP_TIMEOUT_SECONDS", 10.0)
    if http_timeout <= 0:
        raise ValueError("HTTP_TIMEOUT_SECONDS must be positive")
    startup_delay = max(0.0, _get_float("STARTUP_DELAY_SECONDS", 0.5))
    refresh_on_startup = _get_bool("REFRESH_ON_STARTUP", True)
    http_user_agent = _get_env("HTTP_USER_AGENT", DEFAULT_USER_AGENT)
    log_level = _get_env("LOG_LEVEL", "INFO").upper()

    return AppConfig(
        settings_path=settings_path,
        default_sheets_url=default_sheets_url,
        http_timeout=http_timeout,
        http_user_agent=http_user_agent,
        startup_delay=startup_delay,
        refresh_on_startup=refresh_on_startup,
        log_level=log_level,
    )
