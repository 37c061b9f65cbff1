"""Preference store (`~/.repokitrc`).

Why JSON:
- Flat record the user can read and edit by hand.
- Same keys (`defaultOrg`, `defaultVisibility`) as earlier releases wrote.

Reading never fails the caller: a missing or corrupt file means defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core.config import AppSettings
from core.domain.errors import PersistenceError
from core.domain.models import Preferences

logger = logging.getLogger(__name__)


def config_path(settings: AppSettings | None = None) -> Path:
    settings = settings or AppSettings()
    return settings.config_file.expanduser()


def config_exists(settings: AppSettings | None = None) -> bool:
    return config_path(settings).is_file()


def load_preferences(settings: AppSettings | None = None) -> Preferences:
    """Return stored preferences merged over the built-in defaults."""

    path = config_path(settings)
    if not path.exists():
        return Preferences()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return Preferences.model_validate(raw)
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("Could not parse %s, using defaults (%s)", path, exc)
        return Preferences()


def save_preferences(preferences: Preferences, settings: AppSettings | None = None) -> Path:
    """Overwrite the preference file; raises `PersistenceError` if it cannot be written."""

    path = config_path(settings)
    payload = preferences.model_dump(mode="json", by_alias=True)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"Failed to save config to {path}: {exc}") from exc
    return path
