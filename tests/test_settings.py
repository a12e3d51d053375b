"""Tests for the JSON-backed SettingsManager."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from PocketPlayer.core.settings import PlayerPreferences, SettingsManager, WindowGeometry


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "settings.json"


class TestDefaults:
    def test_creates_file_with_defaults(self, settings_path: Path) -> None:
        settings = SettingsManager(settings_path)

        assert settings_path.exists()
        assert settings.get_player_preferences() == PlayerPreferences()
        assert settings.get_window_geometry() == WindowGeometry()
        assert settings.get_log_level() == "INFO"
        assert settings.get_last_import_folder() is None

    def test_library_root_defaults_next_to_settings(self, settings_path: Path) -> None:
        settings = SettingsManager(settings_path)

        assert settings.get_library_root() == settings_path.parent / "Library"

    def test_default_location_uses_xdg_config_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("APPDATA", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        settings = SettingsManager()

        assert settings.path == tmp_path / "PocketPlayer" / "settings.json"


class TestPersistence:
    def test_values_survive_reload(self, settings_path: Path, tmp_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(
            json.dumps(
                {
                    "library_root": str(tmp_path / "music"),
                    "player": {"poll_interval_ms": 250, "include_demo_tracks": True},
                }
            )
        )
        settings = SettingsManager(settings_path)
        settings.set_last_import_folder(tmp_path / "downloads")
        settings.set_window_geometry(WindowGeometry(width=800, height=600, x=5, y=6))

        reloaded = SettingsManager(settings_path)

        assert reloaded.get_library_root() == tmp_path / "music"
        assert reloaded.get_last_import_folder() == tmp_path / "downloads"
        assert reloaded.get_player_preferences().poll_interval_ms == 250
        assert reloaded.get_player_preferences().include_demo_tracks is True
        assert reloaded.get_window_geometry().width == 800

    def test_unknown_preference_keys_are_ignored(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({"player": {"crossfade_seconds": 3.0, "volume": 0.5}}))

        preferences = SettingsManager(settings_path).get_player_preferences()

        assert preferences.volume == 0.5
        assert not hasattr(preferences, "crossfade_seconds")

    def test_preferences_are_clamped(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({"player": {"poll_interval_ms": 1, "volume": 4.0}}))

        preferences = SettingsManager(settings_path).get_player_preferences()

        assert preferences.poll_interval_ms == 50
        assert preferences.volume == 1.0


class TestRecovery:
    def test_corrupt_file_is_backed_up(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("{not json")

        settings = SettingsManager(settings_path)

        assert settings_path.with_suffix(".bak").read_text() == "{not json"
        assert settings.get_player_preferences() == PlayerPreferences()

    def test_missing_sections_are_merged(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({"log_level": "debug"}))

        settings = SettingsManager(settings_path)

        assert settings.get_log_level() == "DEBUG"
        assert settings.get_window_geometry() == WindowGeometry()

    @pytest.mark.parametrize("payload", ["[]", '"text"', "42", "null"])
    def test_non_object_file_is_backed_up(self, settings_path: Path, payload: str) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(payload)

        settings = SettingsManager(settings_path)

        assert settings_path.with_suffix(".bak").read_text() == payload
        assert settings.get_window_geometry() == WindowGeometry()
        assert settings.get_player_preferences() == PlayerPreferences()

    def test_non_object_sections_use_defaults(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({"player": [1, 2], "window": "wide"}))

        settings = SettingsManager(settings_path)

        assert settings.get_player_preferences() == PlayerPreferences()
        assert settings.get_window_geometry() == WindowGeometry()
