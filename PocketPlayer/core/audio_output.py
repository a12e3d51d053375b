"""Audio output devices built on top of pygame.mixer."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

import pygame

from .metadata_handler import MetadataHandler

LOGGER = logging.getLogger(__name__)

# Within this distance of the end a stopped stream counts as finished.
END_OF_TRACK_TOLERANCE = 0.75


class DeviceError(Exception):
    """Raised when a loaded stream refuses a transport command."""


class DeviceLoadError(DeviceError):
    """Raised when a location cannot be opened for playback."""

    def __init__(self, location: Path, reason: object) -> None:
        super().__init__(f"Unable to load {location}: {reason}")
        self.location = location
        self.reason = reason


class AudioDevice(Protocol):
    """A loaded audio stream bound to one location."""

    @property
    def duration(self) -> float: ...

    @property
    def current_time(self) -> float: ...

    @property
    def is_playing(self) -> bool: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def stop(self) -> None: ...

    def seek(self, position: float) -> None: ...


class AudioOutput(Protocol):
    """Factory for devices; loading may fail with ``DeviceLoadError``."""

    def load(self, location: Path) -> AudioDevice: ...


class PygameAudioDevice:
    """``pygame.mixer.music`` stream.

    pygame reports the time since the last ``play`` call, so the start offset
    of that call is kept alongside it to produce an absolute position.
    """

    def __init__(self, location: Path, duration: float) -> None:
        self._location = location
        self._duration = duration
        self._offset = 0.0
        self._last_position = 0.0
        self._started = False
        self._paused = False
        self._released = False

    @property
    def location(self) -> Path:
        return self._location

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def is_playing(self) -> bool:
        if self._released or not self._started or self._paused:
            return False
        return bool(pygame.mixer.music.get_busy())

    @property
    def current_time(self) -> float:
        if self.is_playing:
            pos_ms = pygame.mixer.music.get_pos()
            if pos_ms >= 0:
                self._last_position = self._clamp(self._offset + pos_ms / 1000.0)
        return self._last_position

    def play(self) -> None:
        if self._released:
            return
        if self._paused:
            pygame.mixer.music.unpause()
            self._paused = False
            return
        self._start_at(self._last_position)

    def pause(self) -> None:
        if not self.is_playing:
            return
        self._last_position = self.current_time
        pygame.mixer.music.pause()
        self._paused = True

    def stop(self) -> None:
        if self._released:
            return
        pygame.mixer.music.stop()
        pygame.mixer.music.unload()
        self._released = True
        self._paused = False
        LOGGER.debug("Released %s", self._location)

    def seek(self, position: float) -> None:
        if self._released:
            return
        position = self._clamp(position)
        was_paused = self._paused or not self.is_playing
        self._start_at(position)
        if was_paused:
            pygame.mixer.music.pause()
            self._paused = True

    def _start_at(self, position: float) -> None:
        try:
            pygame.mixer.music.play(loops=0, start=position)
        except pygame.error as exc:
            raise DeviceError(f"Unable to start {self._location} at {position:.1f}s: {exc}") from exc
        self._offset = position
        self._last_position = position
        self._started = True
        self._paused = False

    def _clamp(self, position: float) -> float:
        position = max(0.0, position)
        if self._duration > 0:
            position = min(position, self._duration)
        return position


class PygameAudioOutput:
    """Loads tracks into the single pygame music stream."""

    def __init__(self, metadata_handler: Optional[MetadataHandler] = None, volume: float = 0.8) -> None:
        self._metadata_handler = metadata_handler or MetadataHandler()
        self._volume = max(0.0, min(volume, 1.0))

    def load(self, location: Path) -> PygameAudioDevice:
        try:
            self._ensure_mixer()
            pygame.mixer.music.load(location.as_posix())
        except (pygame.error, OSError) as exc:
            raise DeviceLoadError(location, exc) from exc
        pygame.mixer.music.set_volume(self._volume)
        duration = self._metadata_handler.read_duration(location)
        LOGGER.info("Loaded %s (%.1fs)", location.name, duration)
        return PygameAudioDevice(location, duration)

    def shutdown(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.quit()

    def _ensure_mixer(self) -> None:
        if pygame.mixer.get_init():
            return
        pygame.mixer.init(buffer=512)
        LOGGER.info("pygame.mixer initialised")


__all__ = [
    "AudioDevice",
    "AudioOutput",
    "DeviceError",
    "DeviceLoadError",
    "END_OF_TRACK_TOLERANCE",
    "PygameAudioDevice",
    "PygameAudioOutput",
]
