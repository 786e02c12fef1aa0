"""Load application settings."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from fastls.config.models import AppSettings
from fastls.paths import settings_path
from fastls.runtime_logging import get_runtime_logger


class SettingsStore:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or settings_path()

    def load(self) -> AppSettings:
        if not self.path.exists():
            return AppSettings()

        try:
            raw = self.path.read_text(encoding="utf-8")
            return AppSettings.model_validate(json.loads(raw))
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            # Listing still works on defaults; the broken file is left as is.
            get_runtime_logger().warning("settings.invalid", path=str(self.path), error=str(exc))
            return AppSettings()
