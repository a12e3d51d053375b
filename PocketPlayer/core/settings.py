"""Persistent settings management for the PocketPlayer application."""
from __future__ import annotations

import json
import os
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

APP_FOLDER_NAME = "PocketPlayer"
SETTINGS_FILE_NAME = "settings.json"
LIBRARY_FOLDER_NAME = "Library"

MIN_POLL_INTERVAL_MS = 50


@dataclass(slots=True)
class WindowGeometry:
    """Container describing the main window geometry."""

    width: int = 960
    height: int = 640
    x: int = 100
    y: int = 100


@dataclass(slots=True)
class PlayerPreferences:
    """Preferences that shape playback behaviour."""

    poll_interval_ms: int = 500
    volume: float = 0.8
    include_demo_tracks: bool = False


DEFAULT_SETTINGS: Dict[str, Any] = {
    "window": asdict(WindowGeometry()),
    "library_root": None,
    "last_import_folder": None,
    "log_level": "INFO",
    "player": asdict(PlayerPreferences()),
}


class SettingsManager:
    """High-level helper around a JSON-backed settings store."""

    def __init__(self, settings_path: Optional[Path] = None) -> None:
        self._lock = threading.RLock()
        self._settings_path = settings_path or self._default_settings_path()
        self._settings_path.parent.mkdir(parents=True, exist_ok=True)
        self._data: Dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._settings_path

    @staticmethod
    def _config_home() -> Path:
        if "APPDATA" in os.environ:
            return Path(os.environ["APPDATA"])
        if "XDG_CONFIG_HOME" in os.environ:
            return Path(os.environ["XDG_CONFIG_HOME"])
        return Path.home() / ".config"

    @classmethod
    def _default_settings_path(cls) -> Path:
        return cls._config_home() / APP_FOLDER_NAME / SETTINGS_FILE_NAME

    def _load(self) -> None:
        with self._lock:
            if not self._settings_path.exists():
                self._data = json.loads(json.dumps(DEFAULT_SETTINGS))
                self._save_locked()
                return
            try:
                data = json.loads(self._settings_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError:
                data = None
            if isinstance(data, dict):
                self._data = data
            else:
                backup_path = self._settings_path.with_suffix(".bak")
                backup_path.write_text(self._settings_path.read_text(encoding="utf-8", errors="ignore"))
                self._data = json.loads(json.dumps(DEFAULT_SETTINGS))
            self._merge_defaults()

    def _merge_defaults(self) -> None:
        for key, value in DEFAULT_SETTINGS.items():
            self._data.setdefault(key, json.loads(json.dumps(value)))

    def save(self) -> None:
        with self._lock:
            self._save_locked()

    def _save_locked(self) -> None:
        temp_path = self._settings_path.with_suffix(".tmp")
        temp_path.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
        temp_path.replace(self._settings_path)

    def _section(self, key: str) -> Dict[str, Any]:
        value = self._data.get(key)
        return value if isinstance(value, dict) else {}

    def get_window_geometry(self) -> WindowGeometry:
        window_data = self._section("window")
        defaults = asdict(WindowGeometry())
        return WindowGeometry(**{**defaults, **window_data})

    def set_window_geometry(self, geometry: WindowGeometry) -> None:
        with self._lock:
            self._data["window"] = asdict(geometry)
            self._save_locked()

    def get_player_preferences(self) -> PlayerPreferences:
        player_data = self._section("player")
        defaults = asdict(PlayerPreferences())
        known = {key: value for key, value in player_data.items() if key in defaults}
        preferences = PlayerPreferences(**{**defaults, **known})
        preferences.poll_interval_ms = max(int(preferences.poll_interval_ms), MIN_POLL_INTERVAL_MS)
        preferences.volume = max(0.0, min(float(preferences.volume), 1.0))
        return preferences

    def get_library_root(self) -> Path:
        """Directory that holds imported audio files."""
        root = self._data.get("library_root")
        if root:
            return Path(root)
        return self._settings_path.parent / LIBRARY_FOLDER_NAME

    def get_last_import_folder(self) -> Optional[Path]:
        folder = self._data.get("last_import_folder")
        return Path(folder) if folder else None

    def set_last_import_folder(self, folder: Optional[Path]) -> None:
        with self._lock:
            self._data["last_import_folder"] = str(folder) if folder else None
            self._save_locked()

    def get_log_level(self) -> str:
        return str(self._data.get("log_level") or "INFO").upper()


__all__ = ["SettingsManager", "WindowGeometry", "PlayerPreferences"]
