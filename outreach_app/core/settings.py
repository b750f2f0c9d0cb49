"""Load application settings from YAML (with fallbacks to config defaults)."""

from __future__ import annotations

import logging
from pathlib import Path

import pytz
import yaml

from .config import AppSettings

logger = logging.getLogger(__name__)

_CACHE: AppSettings | None = None


def _coerce(data: dict) -> AppSettings:
    defaults = AppSettings()
    timezone = str(data.get("timezone") or defaults.timezone)
    try:
        pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown timezone %r in settings; using %s", timezone, defaults.timezone)
        timezone = defaults.timezone
    try:
        threshold = int(data.get("goal_event_threshold", defaults.goal_event_threshold))
    except (TypeError, ValueError):
        threshold = defaults.goal_event_threshold
    try:
        max_rows = int(data.get("max_table_rows", defaults.max_table_rows))
    except (TypeError, ValueError):
        max_rows = defaults.max_table_rows
    return AppSettings(
        timezone=timezone,
        goal_event_threshold=threshold,
        ticket_link_base=str(data.get("ticket_link_base") or defaults.ticket_link_base),
        max_table_rows=max_rows,
        download_encoding=str(data.get("download_encoding") or defaults.download_encoding),
    )


def load_settings(base_path: str | Path | None = None) -> AppSettings:
    global _CACHE
    if _CACHE is not None and base_path is None:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    yaml_path = base / "settings.yaml"
    if not yaml_path.exists():
        settings = AppSettings()
    else:
        try:
            data = yaml.safe_load(yaml_path.read_text()) or {}
            if not isinstance(data, dict):
                raise ValueError("settings.yaml must contain a mapping")
            settings = _coerce(data)
        except (yaml.YAMLError, OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable %s: %s", yaml_path, exc)
            settings = AppSettings()
    if base_path is None:
        _CACHE = settings
    return settings


def get_settings() -> AppSettings:
    return load_settings()


def reset_settings_cache() -> None:
    global _CACHE
    _CACHE = None
