# Path: core/services/settings_store.py
# Purpose: Persist user settings as a JSON document.
# Layer: core/services.
# Details: Validates payloads with pydantic; unreadable files fall back to defaults.

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from config import UserSettings

logger = logging.getLogger(__name__)


class JsonSettingsStore:
    """File-backed SettingsStore."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> UserSettings:
        if not self.path.exists():
            logger.info("No user settings at %s, using defaults", self.path)
            return UserSettings()

        try:
            return UserSettings.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            logger.warning("Ignoring unreadable user settings at %s: %s", self.path, exc)
            return UserSettings()

    def save(self, settings: UserSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Saved user settings to %s", self.path)


__all__ = ["JsonSettingsStore"]
