"""Shared fixtures for the PocketPlayer test suite.

- Qt: one offscreen ``QApplication`` for the whole session (timers, widgets)
- Fakes: an in-memory audio output whose devices record every call
- Factories: tracks with or without an audio location
"""
from __future__ import annotations

import os
import random
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from PocketPlayer.core.audio_output import DeviceError, DeviceLoadError
from PocketPlayer.core.library import Library, Track
from PocketPlayer.core.now_playing import LoggingNowPlayingSurface, NowPlayingBridge
from PocketPlayer.core.poller import PositionPoller
from PocketPlayer.core.sequencer import PlaybackSequencer
from PocketPlayer.core.session import SessionStateMachine

# =============================================================================
# Qt
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def qapp() -> Iterator[QApplication]:
    """Provide the process-wide QApplication."""
    app = QApplication.instance() or QApplication([])
    yield app


# =============================================================================
# Fake audio output
# =============================================================================


class FakeDevice:
    """Device double; tests move ``current_time`` and ``is_playing`` by hand.

    Setting ``fail_transport`` makes play and seek raise ``DeviceError``.
    """

    def __init__(self, location: Path, duration: float, fail_transport: Optional[str] = None) -> None:
        self.location = location
        self.duration = duration
        self.current_time = 0.0
        self.is_playing = False
        self.stopped = False
        self.fail_transport = fail_transport
        self.calls: List[str] = []

    def _check_transport(self) -> None:
        if self.fail_transport:
            raise DeviceError(self.fail_transport)

    def play(self) -> None:
        self._check_transport()
        self.calls.append("play")
        self.is_playing = True

    def pause(self) -> None:
        self.calls.append("pause")
        self.is_playing = False

    def stop(self) -> None:
        self.calls.append("stop")
        self.is_playing = False
        self.stopped = True

    def seek(self, position: float) -> None:
        self._check_transport()
        self.calls.append(f"seek:{position}")
        self.current_time = position


class FakeOutput:
    """Audio output double; locations listed in ``broken`` fail to load.

    New devices inherit ``fail_transport``.
    """

    def __init__(self, duration: float = 180.0) -> None:
        self.duration = duration
        self.broken: set[Path] = set()
        self.fail_transport: Optional[str] = None
        self.devices: List[FakeDevice] = []

    def load(self, location: Path) -> FakeDevice:
        if location in self.broken:
            raise DeviceLoadError(location, "corrupt stream")
        device = FakeDevice(location, self.duration, self.fail_transport)
        self.devices.append(device)
        return device

    @property
    def last_device(self) -> Optional[FakeDevice]:
        return self.devices[-1] if self.devices else None


@pytest.fixture
def output() -> FakeOutput:
    return FakeOutput()


# =============================================================================
# Track factories
# =============================================================================


@pytest.fixture
def make_track() -> Callable[..., Track]:
    """Build a track; pass ``playable=False`` for a placeholder."""
    counter = {"value": 0}

    def factory(title: Optional[str] = None, *, playable: bool = True, duration: float = 180.0) -> Track:
        counter["value"] += 1
        title = title or f"Track {counter['value']}"
        location = Path(f"/music/{title}.mp3") if playable else None
        return Track(
            id=f"track-{counter['value']:04d}",
            title=title,
            artist="Test Artist",
            album="Test Album",
            location=location,
            duration_seconds=duration if playable else 0.0,
        )

    return factory


@pytest.fixture
def abc_library(make_track: Callable[..., Track]) -> Library:
    """Library of three playable tracks titled A, B and C."""
    return Library([make_track("A"), make_track("B"), make_track("C")])


# =============================================================================
# Machine wiring
# =============================================================================


@pytest.fixture
def machine(output: FakeOutput, abc_library: Library) -> Iterator[SessionStateMachine]:
    """State machine over [A, B, C] with a seeded shuffle."""
    sequencer = PlaybackSequencer(abc_library, rng=random.Random(7))
    state_machine = SessionStateMachine(output, sequencer, PositionPoller(interval_ms=500))
    yield state_machine
    state_machine.shutdown()


@pytest.fixture
def surface() -> LoggingNowPlayingSurface:
    return LoggingNowPlayingSurface()


@pytest.fixture
def bridge(surface: LoggingNowPlayingSurface, machine: SessionStateMachine) -> NowPlayingBridge:
    return NowPlayingBridge(surface, machine)


@pytest.fixture
def track_by_title(abc_library: Library) -> Callable[[str], Track]:
    titles: Dict[str, Track] = {track.title: track for track in abc_library}
    return titles.__getitem__
