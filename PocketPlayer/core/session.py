"""Playback session state and the state machine that owns it."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from .audio_output import END_OF_TRACK_TOLERANCE, AudioDevice, AudioOutput, DeviceError, DeviceLoadError
from .library import Library, Track
from .poller import DEFAULT_POLL_INTERVAL_MS, PositionPoller
from .sequencer import PlaybackSequencer

LOGGER = logging.getLogger(__name__)


class PlaybackStatus(str, Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(slots=True)
class PlaybackSession:
    """Live playback state. Read it through ``SessionStateMachine.session``."""

    current_track: Optional[Track] = None
    status: PlaybackStatus = PlaybackStatus.STOPPED
    elapsed: float = 0.0
    duration: float = 0.0
    shuffle_enabled: bool = False
    shuffle_order: Tuple[int, ...] = ()
    ended: bool = False

    @property
    def is_playing(self) -> bool:
        return self.status is PlaybackStatus.PLAYING

    @property
    def rate(self) -> float:
        return 1.0 if self.is_playing else 0.0


class SessionStateMachine(QObject):
    """Single writer of the playback session and of the output device.

    Every transport command (local or remote) goes through this class. At
    most one device is loaded at a time; it is stopped and released before
    anything else is loaded, and whenever the session is dismissed.
    """

    session_changed = pyqtSignal(object)
    track_changed = pyqtSignal(object)
    state_changed = pyqtSignal(str)
    position_changed = pyqtSignal(float, float)
    library_changed = pyqtSignal(object)

    def __init__(
        self,
        output: AudioOutput,
        sequencer: Optional[PlaybackSequencer] = None,
        poller: Optional[PositionPoller] = None,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._output = output
        self._sequencer = sequencer or PlaybackSequencer()
        self._poller = poller or PositionPoller(interval_ms=poll_interval_ms, parent=self)
        self._poller.set_callback(self._on_tick)
        self._device: Optional[AudioDevice] = None
        self._session = PlaybackSession(
            shuffle_enabled=self._sequencer.shuffle_enabled,
            shuffle_order=self._sequencer.shuffle_order,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def session(self) -> PlaybackSession:
        return replace(self._session)

    @property
    def library(self) -> Library:
        return self._sequencer.library

    @property
    def sequencer(self) -> PlaybackSequencer:
        return self._sequencer

    @property
    def poller(self) -> PositionPoller:
        return self._poller

    @property
    def current_track(self) -> Optional[Track]:
        return self._session.current_track

    @property
    def status(self) -> PlaybackStatus:
        return self._session.status

    @property
    def has_device(self) -> bool:
        return self._device is not None

    def has_previous(self) -> bool:
        return self._sequencer.has_previous(self._session.current_track)

    def has_next(self) -> bool:
        return self._sequencer.has_next(self._session.current_track)

    # ------------------------------------------------------------------
    # Transport commands
    # ------------------------------------------------------------------
    def select(self, track: Track) -> bool:
        """Make ``track`` current and start playing it when it has audio."""
        library_track = self._sequencer.library.get(track.id)
        if library_track is None:
            LOGGER.warning("Ignoring selection of %r, not in library", track.title)
            return False
        self._release_device()
        self._session.current_track = library_track
        self._session.elapsed = 0.0
        self._session.duration = library_track.duration_seconds
        self._session.ended = False
        self._set_status(PlaybackStatus.STOPPED)
        self.track_changed.emit(library_track)
        if library_track.location is None:
            LOGGER.info("%r has no audio file, showing it without playback", library_track.title)
            self._emit_position()
            self._emit_session()
            return True
        self._load_and_play(library_track)
        return True

    def toggle_play(self) -> PlaybackStatus:
        device = self._device
        if device is None or self._session.status is PlaybackStatus.STOPPED:
            return self._session.status
        playing = self._session.status is PlaybackStatus.PLAYING
        try:
            if playing:
                device.pause()
            else:
                if self._session.ended:
                    device.seek(0.0)
                device.play()
        except DeviceError as exc:
            self._device_failed(exc)
            return self._session.status
        self._session.elapsed = self._clamp(device.current_time)
        if playing:
            self._poller.stop()
            self._set_status(PlaybackStatus.PAUSED)
        else:
            self._session.ended = False
            self._set_status(PlaybackStatus.PLAYING)
            self._poller.start()
        self._emit_position()
        self._emit_session()
        return self._session.status

    def previous(self) -> bool:
        target = self._sequencer.previous(self._session.current_track)
        if target is None:
            LOGGER.debug("No previous track")
            return False
        return self.select(target)

    def next(self) -> bool:
        target = self._sequencer.next(self._session.current_track)
        if target is None:
            LOGGER.debug("No next track")
            return False
        return self.select(target)

    def seek(self, position: float) -> bool:
        device = self._device
        if device is None:
            return False
        position = self._clamp(position)
        try:
            device.seek(position)
        except DeviceError as exc:
            self._device_failed(exc)
            return False
        self._session.elapsed = position
        self._session.ended = False
        self._emit_position()
        self._emit_session()
        return True

    def toggle_shuffle(self) -> bool:
        return self.set_shuffle(not self._sequencer.shuffle_enabled)

    def set_shuffle(self, enabled: bool) -> bool:
        if enabled == self._sequencer.shuffle_enabled:
            return enabled
        if enabled:
            self._sequencer.enable_shuffle(self._session.current_track)
        else:
            self._sequencer.disable_shuffle()
        LOGGER.info("Shuffle %s", "enabled" if enabled else "disabled")
        self._sync_shuffle()
        self._emit_session()
        return enabled

    def dismiss(self) -> None:
        self._release_device()
        self._session.current_track = None
        self._session.elapsed = 0.0
        self._session.duration = 0.0
        self._session.ended = False
        self._set_status(PlaybackStatus.STOPPED)
        self.track_changed.emit(None)
        self._emit_position()
        self._emit_session()

    def set_library(self, library: Library) -> None:
        """Replace the library; a current track that disappeared is dismissed."""
        current = self._session.current_track
        still_present = current is not None and current in library
        self._sequencer.set_library(library, current if still_present else None)
        self._sync_shuffle()
        self.library_changed.emit(library)
        if current is not None and not still_present:
            LOGGER.info("Current track %r left the library", current.title)
            self.dismiss()
            return
        if current is not None:
            self._session.current_track = library.get(current.id)
        self._emit_session()

    def shutdown(self) -> None:
        self._release_device()
        if self._session.status is not PlaybackStatus.STOPPED:
            self._set_status(PlaybackStatus.STOPPED)
            self._emit_session()

    # ------------------------------------------------------------------
    # Remote commands; the return value tells the surface whether it applied
    # ------------------------------------------------------------------
    def remote_play(self) -> bool:
        if self._device is None or self._session.status is not PlaybackStatus.PAUSED:
            return False
        return self.toggle_play() is PlaybackStatus.PLAYING

    def remote_pause(self) -> bool:
        if self._device is None or self._session.status is not PlaybackStatus.PLAYING:
            return False
        return self.toggle_play() is PlaybackStatus.PAUSED

    def remote_toggle(self) -> bool:
        if self._device is None:
            return False
        self.toggle_play()
        return True

    def remote_next(self) -> bool:
        return self.next()

    def remote_previous(self) -> bool:
        return self.previous()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load_and_play(self, track: Track) -> None:
        try:
            device = self._output.load(track.location)
        except DeviceLoadError as exc:
            LOGGER.exception("Failed to play %s: %s", track.location, exc)
            self._emit_position()
            self._emit_session()
            return
        self._device = device
        try:
            device.play()
        except DeviceError as exc:
            self._device_failed(exc)
            return
        if device.duration > 0:
            self._session.duration = device.duration
        self._set_status(PlaybackStatus.PLAYING)
        self._poller.start()
        self._emit_position()
        self._emit_session()

    def _on_tick(self) -> None:
        device = self._device
        if device is None:
            self._poller.stop()
            return
        playing = device.is_playing
        self._session.elapsed = self._clamp(device.current_time)
        if self._session.status is PlaybackStatus.PLAYING and not playing:
            # No finish event exists; a stream that stopped on its own is only
            # visible as "not playing" here.
            self._poller.stop()
            duration = self._session.duration
            tolerance = max(END_OF_TRACK_TOLERANCE, self._poller.interval_ms / 1000.0 * 1.5)
            self._session.ended = duration > 0 and self._session.elapsed >= duration - tolerance
            if self._session.ended:
                self._session.elapsed = duration
                LOGGER.info("Finished %r", self._track_title())
            else:
                LOGGER.info("Playback of %r stopped externally", self._track_title())
            self._set_status(PlaybackStatus.PAUSED)
        self._emit_position()
        self._emit_session()

    def _device_failed(self, exc: DeviceError) -> None:
        LOGGER.error("Playback of %r failed: %s", self._track_title(), exc)
        self._release_device()
        self._session.elapsed = 0.0
        self._session.ended = False
        self._set_status(PlaybackStatus.STOPPED)
        self._emit_position()
        self._emit_session()

    def _release_device(self) -> None:
        self._poller.stop()
        device, self._device = self._device, None
        if device is not None:
            device.stop()

    def _clamp(self, position: float) -> float:
        position = max(0.0, position)
        if self._session.duration > 0:
            position = min(position, self._session.duration)
        return position

    def _sync_shuffle(self) -> None:
        self._session.shuffle_enabled = self._sequencer.shuffle_enabled
        self._session.shuffle_order = self._sequencer.shuffle_order

    def _set_status(self, status: PlaybackStatus) -> None:
        if self._session.status is status:
            return
        self._session.status = status
        self.state_changed.emit(status.value)

    def _track_title(self) -> str:
        track = self._session.current_track
        return track.title if track else ""

    def _emit_position(self) -> None:
        self.position_changed.emit(self._session.elapsed, self._session.duration)

    def _emit_session(self) -> None:
        self.session_changed.emit(self.session)


__all__ = ["PlaybackSession", "PlaybackStatus", "SessionStateMachine"]
