"""System tray implementation of the now playing surface."""
from __future__ import annotations

import logging
from typing import Dict, Optional

from PyQt6.QtCore import QObject
from PyQt6.QtGui import QAction, QIcon
from PyQt6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from ..core.now_playing import NowPlayingInfo, RemoteCommand, RemoteHandler
from ..utils.helpers import format_duration

LOGGER = logging.getLogger(__name__)

APP_NAME = "PocketPlayer"

_MENU_LABELS = {
    RemoteCommand.PLAY: "Play",
    RemoteCommand.PAUSE: "Pause",
    RemoteCommand.PREVIOUS: "Previous",
    RemoteCommand.NEXT: "Next",
}


class TrayNowPlayingSurface(QObject):
    """Shows the current track in the tray tooltip and offers transport actions."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        icon = QIcon.fromTheme("media-playback-start")
        if icon.isNull():
            icon = QApplication.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay)
        self._tray = QSystemTrayIcon(icon, self)
        self._tray.setToolTip(APP_NAME)
        self._handlers: Dict[RemoteCommand, RemoteHandler] = {}
        self._menu = QMenu()
        self._actions: Dict[RemoteCommand, QAction] = {}
        for kind, label in _MENU_LABELS.items():
            action = self._menu.addAction(label)
            action.triggered.connect(lambda _checked=False, k=kind: self.dispatch(k))
            self._actions[kind] = action
        self._menu.addSeparator()
        self._menu.addAction("Quit").triggered.connect(QApplication.quit)
        self._tray.setContextMenu(self._menu)
        self._tray.activated.connect(self._on_activated)
        self._update_actions(None)

    @staticmethod
    def is_available() -> bool:
        return QSystemTrayIcon.isSystemTrayAvailable()

    def show(self) -> None:
        self._tray.show()

    def hide(self) -> None:
        self._tray.hide()

    def publish(self, info: Optional[NowPlayingInfo]) -> None:
        if info is None:
            self._tray.setToolTip(APP_NAME)
        else:
            state = "Playing" if info.rate > 0 else "Paused"
            self._tray.setToolTip(
                f"{state}: {info.title}\n{info.artist}\n"
                f"{format_duration(info.elapsed)} / {format_duration(info.duration)}"
            )
        self._update_actions(info)

    def on_remote_command(self, kind: RemoteCommand, handler: RemoteHandler) -> None:
        self._handlers[kind] = handler

    def dispatch(self, kind: RemoteCommand) -> bool:
        handler = self._handlers.get(kind)
        if handler is None:
            return False
        return handler()

    def _update_actions(self, info: Optional[NowPlayingInfo]) -> None:
        playing = info is not None and info.rate > 0
        self._actions[RemoteCommand.PLAY].setEnabled(info is not None and not playing)
        self._actions[RemoteCommand.PAUSE].setEnabled(playing)
        self._actions[RemoteCommand.PREVIOUS].setEnabled(info is not None)
        self._actions[RemoteCommand.NEXT].setEnabled(info is not None)

    def _on_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.MiddleClick:
            self.dispatch(RemoteCommand.TOGGLE)


__all__ = ["TrayNowPlayingSurface"]
