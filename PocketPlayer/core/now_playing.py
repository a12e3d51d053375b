"""Mirror the playback session onto a desktop "now playing" surface."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Protocol

from .session import PlaybackSession, SessionStateMachine

LOGGER = logging.getLogger(__name__)

RemoteHandler = Callable[[], bool]


class RemoteCommand(str, Enum):
    PLAY = "play"
    PAUSE = "pause"
    TOGGLE = "toggle"
    NEXT = "next"
    PREVIOUS = "previous"


@dataclass(frozen=True, slots=True)
class NowPlayingInfo:
    """What the surface shows for the current track."""

    title: str
    artist: str
    elapsed: float
    duration: float
    rate: float

    @classmethod
    def from_session(cls, session: PlaybackSession) -> Optional["NowPlayingInfo"]:
        track = session.current_track
        if track is None:
            return None
        return cls(
            title=track.title,
            artist=track.artist,
            elapsed=session.elapsed,
            duration=session.duration,
            rate=session.rate,
        )


class NowPlayingSurface(Protocol):
    """Desktop media surface. ``publish(None)`` clears it."""

    def publish(self, info: Optional[NowPlayingInfo]) -> None: ...

    def on_remote_command(self, kind: RemoteCommand, handler: RemoteHandler) -> None: ...


class LoggingNowPlayingSurface:
    """Headless surface that logs what it is shown.

    Remote commands can be delivered with :meth:`dispatch`, which returns the
    handler's verdict like a real media surface would receive it.
    """

    def __init__(self) -> None:
        self._handlers: Dict[RemoteCommand, RemoteHandler] = {}
        self.last_info: Optional[NowPlayingInfo] = None
        self.publish_count = 0

    def publish(self, info: Optional[NowPlayingInfo]) -> None:
        self.last_info = info
        self.publish_count += 1
        if info is None:
            LOGGER.debug("Now playing cleared")
        else:
            LOGGER.debug(
                "Now playing %s - %s [%.1f/%.1f] rate=%.0f",
                info.artist,
                info.title,
                info.elapsed,
                info.duration,
                info.rate,
            )

    def on_remote_command(self, kind: RemoteCommand, handler: RemoteHandler) -> None:
        self._handlers[kind] = handler

    def dispatch(self, kind: RemoteCommand) -> bool:
        handler = self._handlers.get(kind)
        if handler is None:
            LOGGER.warning("No handler registered for %s", kind.value)
            return False
        return handler()


class NowPlayingBridge:
    """Pushes session changes out and routes remote commands back in."""

    def __init__(self, surface: NowPlayingSurface, machine: SessionStateMachine) -> None:
        self._surface = surface
        self._machine = machine
        handlers: Dict[RemoteCommand, RemoteHandler] = {
            RemoteCommand.PLAY: machine.remote_play,
            RemoteCommand.PAUSE: machine.remote_pause,
            RemoteCommand.TOGGLE: machine.remote_toggle,
            RemoteCommand.NEXT: machine.remote_next,
            RemoteCommand.PREVIOUS: machine.remote_previous,
        }
        for kind, handler in handlers.items():
            surface.on_remote_command(kind, self._logged(kind, handler))
        machine.session_changed.connect(self.publish)

    @property
    def surface(self) -> NowPlayingSurface:
        return self._surface

    def publish(self, session: PlaybackSession) -> None:
        self._surface.publish(NowPlayingInfo.from_session(session))

    def detach(self) -> None:
        self._machine.session_changed.disconnect(self.publish)
        self._surface.publish(None)

    @staticmethod
    def _logged(kind: RemoteCommand, handler: RemoteHandler) -> RemoteHandler:
        def run() -> bool:
            applied = handler()
            LOGGER.info("Remote %s %s", kind.value, "applied" if applied else "rejected")
            return applied

        return run


__all__ = [
    "LoggingNowPlayingSurface",
    "NowPlayingBridge",
    "NowPlayingInfo",
    "NowPlayingSurface",
    "RemoteCommand",
    "RemoteHandler",
]
