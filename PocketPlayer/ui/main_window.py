"""Main application window: library list on the left, now playing on the right."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..core.library import Library, LibraryStore, Track
from ..core.metadata_handler import SUPPORTED_EXTENSIONS
from ..core.session import PlaybackSession, SessionStateMachine
from ..core.settings import SettingsManager, WindowGeometry
from ..resources.styles import MAIN_STYLESHEET
from ..utils.helpers import describe_track
from .components import NowPlayingWidget, PlaybackControls, ProgressWidget, TrackList

LOGGER = logging.getLogger(__name__)

SEEK_STEP_SECONDS = 5.0


class MainWindow(QMainWindow):
    """Forwards user intents to the state machine and renders its session."""

    def __init__(
        self,
        settings: SettingsManager,
        store: LibraryStore,
        machine: SessionStateMachine,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings
        self._store = store
        self._machine = machine

        self._build_ui()
        self._connect_signals()
        self._register_shortcuts()
        self._restore_geometry()
        self._on_library_changed(machine.library)
        self._on_track_changed(machine.current_track)
        self._on_session_changed(machine.session)

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self.setWindowTitle("PocketPlayer")
        self.setMinimumSize(820, 520)
        self.setStyleSheet(MAIN_STYLESHEET)

        central = QWidget(self)
        content_row = QHBoxLayout(central)
        content_row.setContentsMargins(24, 24, 24, 24)
        content_row.setSpacing(24)

        library_column = QVBoxLayout()
        library_column.setSpacing(12)
        header_row = QHBoxLayout()
        self._library_label = QLabel("Your Songs", self)
        self._library_label.setObjectName("heading")
        header_row.addWidget(self._library_label, 1)
        self._delete_button = QPushButton("Delete", self)
        header_row.addWidget(self._delete_button)
        self._import_button = QPushButton("Import Files", self)
        self._import_button.setObjectName("accent")
        header_row.addWidget(self._import_button)
        library_column.addLayout(header_row)

        self._track_list = TrackList(self)
        library_column.addWidget(self._track_list, 1)
        content_row.addLayout(library_column, 3)

        player_column = QVBoxLayout()
        player_column.setSpacing(12)
        self._now_playing = NowPlayingWidget(self)
        player_column.addWidget(self._now_playing, 1)
        self._progress = ProgressWidget(self)
        player_column.addWidget(self._progress)
        self._controls = PlaybackControls(self)
        player_column.addWidget(self._controls)
        content_row.addLayout(player_column, 2)

        self.setCentralWidget(central)

    def _connect_signals(self) -> None:
        self._import_button.clicked.connect(self.import_via_dialog)
        self._delete_button.clicked.connect(self.delete_selected)
        self._track_list.track_activated.connect(self._select_row)

        self._progress.seek_requested.connect(self._machine.seek)
        self._controls.previous_clicked.connect(self._machine.previous)
        self._controls.play_pause_clicked.connect(self._machine.toggle_play)
        self._controls.next_clicked.connect(self._machine.next)
        self._controls.shuffle_toggled.connect(self._machine.set_shuffle)
        self._controls.dismiss_clicked.connect(self._machine.dismiss)

        self._machine.library_changed.connect(self._on_library_changed)
        self._machine.track_changed.connect(self._on_track_changed)
        self._machine.session_changed.connect(self._on_session_changed)

    def _register_shortcuts(self) -> None:
        QShortcut(QKeySequence(Qt.Key.Key_Space), self, activated=self._machine.toggle_play)
        QShortcut(QKeySequence(Qt.Key.Key_MediaPlay), self, activated=self._machine.toggle_play)
        QShortcut(QKeySequence(Qt.Key.Key_MediaNext), self, activated=self._machine.next)
        QShortcut(QKeySequence(Qt.Key.Key_MediaPrevious), self, activated=self._machine.previous)
        QShortcut(QKeySequence(Qt.Key.Key_Left), self, activated=lambda: self._nudge_seek(-SEEK_STEP_SECONDS))
        QShortcut(QKeySequence(Qt.Key.Key_Right), self, activated=lambda: self._nudge_seek(SEEK_STEP_SECONDS))
        QShortcut(QKeySequence(Qt.Key.Key_Delete), self, activated=self.delete_selected)
        QShortcut(QKeySequence("Ctrl+O"), self, activated=self.import_via_dialog)

    # ------------------------------------------------------------------
    # Library actions
    # ------------------------------------------------------------------
    def import_via_dialog(self) -> None:
        start_dir = self._settings.get_last_import_folder() or Path.home()
        patterns = " ".join(f"*{extension}" for extension in sorted(SUPPORTED_EXTENSIONS))
        file_names, _ = QFileDialog.getOpenFileNames(
            self,
            "Choose Audio Files",
            str(start_dir),
            f"Audio Files ({patterns})",
        )
        if not file_names:
            return
        paths = [Path(name) for name in file_names]
        self._settings.set_last_import_folder(paths[0].parent)
        self._store.import_files(paths)

    def delete_selected(self) -> None:
        track = self._selected_track() or self._machine.current_track
        if track is None:
            return
        LOGGER.info("Deleting %r", track.title)
        self._store.delete_track(track)

    def _selected_track(self) -> Optional[Track]:
        row = self._track_list.currentRow()
        library = self._machine.library
        if 0 <= row < len(library):
            return library[row]
        return None

    def _select_row(self, row: int) -> None:
        library = self._machine.library
        if 0 <= row < len(library):
            self._machine.select(library[row])

    def _nudge_seek(self, delta: float) -> None:
        if self._machine.has_device:
            self._machine.seek(self._machine.session.elapsed + delta)

    # ------------------------------------------------------------------
    # Machine signal handlers
    # ------------------------------------------------------------------
    def _on_library_changed(self, library: Library) -> None:
        self._track_list.populate(library)
        self._library_label.setText(f"Your Songs ({len(library)})")
        self._on_track_changed(self._machine.current_track)

    def _on_track_changed(self, track: Optional[Track]) -> None:
        self._now_playing.update_now_playing(track)
        self._track_list.select_track(track)

    def _on_session_changed(self, session: PlaybackSession) -> None:
        """Runs on every poll tick, so only cheap widget updates happen here."""
        track = session.current_track
        self._progress.update_position(session.elapsed, session.duration)
        self._progress.set_seekable(self._machine.has_device)
        self._controls.set_playing(session.is_playing)
        self._controls.set_shuffle(session.shuffle_enabled)
        self._controls.set_navigation(
            has_previous=self._machine.has_previous(),
            has_next=self._machine.has_next(),
            can_play=self._machine.has_device,
            has_track=track is not None,
        )
        self.setWindowTitle(f"PocketPlayer - {describe_track(track)}")

    # ------------------------------------------------------------------
    # Geometry persistence
    # ------------------------------------------------------------------
    def _restore_geometry(self) -> None:
        geometry = self._settings.get_window_geometry()
        self.resize(geometry.width, geometry.height)
        self.move(geometry.x, geometry.y)

    def _store_geometry(self) -> None:
        rect = self.geometry()
        geometry = WindowGeometry(width=rect.width(), height=rect.height(), x=rect.x(), y=rect.y())
        self._settings.set_window_geometry(geometry)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        self._store_geometry()
        super().closeEvent(event)


__all__ = ["MainWindow"]
