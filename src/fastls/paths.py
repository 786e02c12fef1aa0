"""XDG path helpers for settings and runtime logs."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "fastls"


def dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=False, roaming=False)


def config_root() -> Path:
    return Path(dirs().user_config_path)


def state_root() -> Path:
    return Path(dirs().user_state_path)


def settings_path() -> Path:
    return config_root() / "settings.json"


def default_log_path() -> Path:
    return state_root() / "logs" / "fastls.runtime.jsonl"
