"""Core services for PocketPlayer."""
from .audio_output import DeviceLoadError, PygameAudioOutput
from .library import Library, LibraryStore, Track
from .metadata_handler import MetadataHandler
from .now_playing import LoggingNowPlayingSurface, NowPlayingBridge, NowPlayingInfo, RemoteCommand
from .poller import PositionPoller
from .sequencer import PlaybackSequencer
from .session import PlaybackSession, PlaybackStatus, SessionStateMachine
from .settings import PlayerPreferences, SettingsManager, WindowGeometry

__all__ = [
    "DeviceLoadError",
    "Library",
    "LibraryStore",
    "LoggingNowPlayingSurface",
    "MetadataHandler",
    "NowPlayingBridge",
    "NowPlayingInfo",
    "PlaybackSequencer",
    "PlaybackSession",
    "PlaybackStatus",
    "PlayerPreferences",
    "PositionPoller",
    "PygameAudioOutput",
    "RemoteCommand",
    "SessionStateMachine",
    "SettingsManager",
    "Track",
    "WindowGeometry",
]
