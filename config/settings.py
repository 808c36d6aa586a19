# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes static application settings, persisted user settings, and logging setup.

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


class SearchSettings(BaseModel):
    """User-adjustable search behaviour shared by every search session."""

    enable_search_history: bool = Field(default=True, description="Record executed queries in the history list.")
    enable_filter_by_default: bool = Field(default=False, description="New search sessions start with filtering on.")


class UserSettings(BaseModel):
    """Settings persisted between application runs through a settings store."""

    search_history: List[str] = Field(default_factory=list, description="Past queries, most recent first.")
    search: SearchSettings = Field(default_factory=SearchSettings)


class AppSettings(BaseModel):
    """Top-level application settings passed explicitly to the orchestrator."""

    settings_path: Path = Field(
        default=Path("storage/user_settings.json"),
        description="Location of the persisted user settings file.",
    )
    preview_saved_delay_ms: int = Field(default=1000, ge=0, description="How long the Saved status stays visible.")
    history_limit: int = Field(default=20, ge=1, description="Maximum number of search history entries.")
    auto_update_index: bool = Field(default=True, description="Initial state of automatic index updates.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")


def configure_logging(settings: AppSettings) -> None:
    """Apply the configured log level to the root logger."""

    level = settings.log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # basicConfig leaves an already-configured root logger untouched.
    logging.getLogger().setLevel(level)


__all__ = ["AppSettings", "SearchSettings", "UserSettings", "configure_logging"]
