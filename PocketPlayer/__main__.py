"""Executable module for PocketPlayer."""
from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .core.audio_output import PygameAudioOutput
from .core.library import LibraryStore
from .core.metadata_handler import MetadataHandler
from .core.now_playing import LoggingNowPlayingSurface, NowPlayingBridge, NowPlayingSurface
from .core.sequencer import PlaybackSequencer
from .core.session import SessionStateMachine
from .core.settings import SettingsManager
from .ui.main_window import MainWindow
from .ui.tray import TrayNowPlayingSurface

LOGGER = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _create_surface() -> NowPlayingSurface:
    if TrayNowPlayingSurface.is_available():
        surface = TrayNowPlayingSurface()
        surface.show()
        return surface
    LOGGER.warning("System tray not available, now playing is logged only")
    return LoggingNowPlayingSurface()


def _shutdown(
    surface: NowPlayingSurface,
    bridge: NowPlayingBridge,
    machine: SessionStateMachine,
    output: PygameAudioOutput,
) -> None:
    bridge.detach()
    if isinstance(surface, TrayNowPlayingSurface):
        surface.hide()
    machine.shutdown()
    output.shutdown()


def main() -> int:
    settings = SettingsManager()
    _configure_logging(settings.get_log_level())
    app = QApplication(sys.argv)
    app.setApplicationName("PocketPlayer")

    preferences = settings.get_player_preferences()
    metadata_handler = MetadataHandler()
    store = LibraryStore(
        settings.get_library_root(),
        metadata_handler,
        include_demo_tracks=preferences.include_demo_tracks,
    )
    output = PygameAudioOutput(metadata_handler, volume=preferences.volume)
    machine = SessionStateMachine(
        output,
        PlaybackSequencer(),
        poll_interval_ms=preferences.poll_interval_ms,
    )
    store.library_changed.connect(machine.set_library)
    surface = _create_surface()
    bridge = NowPlayingBridge(surface, machine)

    window = MainWindow(settings, store, machine)
    store.scan()
    window.show()

    exit_code = app.exec()
    _shutdown(surface, bridge, machine, output)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
