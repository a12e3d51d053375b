"""Smoke tests for the main window wiring (offscreen Qt platform)."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterator, List, Optional

import pytest

from PocketPlayer.core.library import LibraryStore, Track
from PocketPlayer.core.session import PlaybackStatus, SessionStateMachine
from PocketPlayer.core.settings import SettingsManager
from PocketPlayer.ui.main_window import MainWindow


@pytest.fixture
def window(tmp_path: Path, machine: SessionStateMachine) -> Iterator[MainWindow]:
    settings = SettingsManager(tmp_path / "settings.json")
    store = LibraryStore(tmp_path / "Library")
    main_window = MainWindow(settings, store, machine)
    yield main_window
    main_window.close()


def test_lists_library(window: MainWindow, machine: SessionStateMachine) -> None:
    assert window._track_list.count() == len(machine.library)


def test_activating_row_selects_track(
    window: MainWindow, machine: SessionStateMachine, track_by_title: Callable[[str], Track]
) -> None:
    window._track_list.track_activated.emit(1)

    assert machine.current_track == track_by_title("B")
    assert machine.status is PlaybackStatus.PLAYING
    assert window._now_playing.title_text == "B"
    assert window._controls.previous_button.isEnabled()
    assert window._controls.next_button.isEnabled()


def test_controls_drive_machine(
    window: MainWindow, machine: SessionStateMachine, track_by_title: Callable[[str], Track]
) -> None:
    machine.select(track_by_title("C"))
    assert not window._controls.next_button.isEnabled()

    window._controls.play_pause_clicked.emit()
    assert machine.status is PlaybackStatus.PAUSED

    window._controls.previous_clicked.emit()
    assert machine.current_track == track_by_title("B")

    window._controls.dismiss_clicked.emit()
    assert machine.current_track is None
    assert window._now_playing.title_text == "Not playing"


def test_window_title_tracks_session(
    window: MainWindow, machine: SessionStateMachine, track_by_title: Callable[[str], Track]
) -> None:
    machine.select(track_by_title("A"))

    assert window.windowTitle() == "PocketPlayer - A - Test Artist"


def test_close_stores_geometry(tmp_path: Path, machine: SessionStateMachine, output: Any) -> None:
    settings = SettingsManager(tmp_path / "settings.json")
    main_window = MainWindow(settings, LibraryStore(tmp_path / "Library"), machine)
    main_window.resize(900, 600)

    main_window.close()

    assert SettingsManager(tmp_path / "settings.json").get_window_geometry().width == 900


def test_ticks_leave_artwork_and_selection_alone(
    window: MainWindow,
    machine: SessionStateMachine,
    output: Any,
    track_by_title: Callable[[str], Track],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    machine.select(track_by_title("A"))
    refreshes: List[Optional[Track]] = []
    monkeypatch.setattr(window._now_playing, "update_now_playing", refreshes.append)
    monkeypatch.setattr(window._track_list, "select_track", refreshes.append)

    for position in (1.0, 2.0, 3.0):
        output.last_device.current_time = position
        machine.poller.tick()

    assert refreshes == []
    machine.next()
    assert refreshes == [track_by_title("B"), track_by_title("B")]
