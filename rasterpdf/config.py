from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

LOGGER = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
CONFIG_DIR = os.path.join(PROJECT_ROOT, "config")
SETTINGS_PATH = os.path.join(CONFIG_DIR, "settings.json")


@dataclass
class Settings:
    browser_path: Optional[str] = None
    log_level: str = "INFO"


def _resolve_path(base: str, relative: str) -> str:
    return os.path.abspath(os.path.join(base, relative))


def load_settings(path: Optional[str] = None) -> Settings:
    """Load optional settings from config/settings.json.

    A missing or unreadable file is not an error: a warning is logged and the
    defaults are returned.
    """
    settings_path = path or SETTINGS_PATH
    settings = Settings()

    if not os.path.exists(settings_path):
        LOGGER.debug("settings.json not found at %s, using defaults", settings_path)
        return settings

    try:
        with open(settings_path, "r", encoding="utf-8") as settings_file:
            raw = json.load(settings_file) or {}
    except (OSError, ValueError) as exc:
        LOGGER.warning("Could not load settings from %s: %s", settings_path, exc)
        return settings

    browser_rel = raw.get("browser_path")
    if browser_rel:
        browser_abs = _resolve_path(PROJECT_ROOT, str(browser_rel))
        if os.path.exists(browser_abs):
            settings.browser_path = browser_abs
        else:
            LOGGER.warning("Browser path from config does not exist: %s", browser_abs)

    level = raw.get("log_level")
    if isinstance(level, str) and level.strip():
        settings.log_level = level.strip().upper()

    return settings
