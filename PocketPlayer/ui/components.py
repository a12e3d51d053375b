"""Reusable PyQt6 widgets used across the PocketPlayer UI."""
from __future__ import annotations

from typing import Iterable, List, Optional

from PIL.ImageQt import ImageQt
from PyQt6.QtCore import QSize, Qt, pyqtSignal
from PyQt6.QtGui import QIcon, QPixmap
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QSlider,
    QStyle,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from ..core.library import Track
from ..utils.helpers import format_duration


class TrackList(QListWidget):
    """Library listing, one row per track in display order."""

    track_activated = pyqtSignal(int)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setIconSize(QSize(40, 40))
        self.setUniformItemSizes(True)
        self.itemActivated.connect(lambda item: self.track_activated.emit(self.row(item)))

    def populate(self, tracks: Iterable[Track]) -> None:
        self.clear()
        for track in tracks:
            subtitle = track.artist
            if track.duration_seconds > 0:
                subtitle = f"{subtitle}  {format_duration(track.duration_seconds)}"
            item = QListWidgetItem(f"{track.title}\n{subtitle}", self)
            item.setIcon(artwork_icon(track, self.style()))
            item.setData(Qt.ItemDataRole.UserRole, track.id)
            if not track.playable:
                item.setToolTip("No audio file")

    def select_track(self, track: Optional[Track]) -> None:
        if track is None:
            self.clearSelection()
            return
        for row in range(self.count()):
            if self.item(row).data(Qt.ItemDataRole.UserRole) == track.id:
                self.blockSignals(True)
                self.setCurrentRow(row)
                self.blockSignals(False)
                return


class PlaybackControls(QWidget):
    """Transport buttons for the now playing panel."""

    previous_clicked = pyqtSignal()
    play_pause_clicked = pyqtSignal()
    next_clicked = pyqtSignal()
    shuffle_toggled = pyqtSignal(bool)
    dismiss_clicked = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)
        layout.addStretch(1)

        self.shuffle_button = self._create_icon_button(
            tooltip="Shuffle",
            theme_icon="media-playlist-shuffle",
            fallback_text="Shuffle",
            checkable=True,
        )
        self.shuffle_button.clicked.connect(lambda checked: self.shuffle_toggled.emit(checked))
        layout.addWidget(self.shuffle_button)

        self.previous_button = self._create_icon_button(
            tooltip="Previous",
            standard_icon=QStyle.StandardPixmap.SP_MediaSkipBackward,
        )
        self.previous_button.clicked.connect(self.previous_clicked.emit)
        layout.addWidget(self.previous_button)

        self.play_button = QPushButton(self)
        self.play_button.setObjectName("accent")
        self.play_button.setFixedSize(56, 56)
        self.play_button.setIconSize(QSize(32, 32))
        self._play_icon = self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay)
        self._pause_icon = self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPause)
        self.play_button.clicked.connect(self.play_pause_clicked.emit)
        layout.addWidget(self.play_button)

        self.next_button = self._create_icon_button(
            tooltip="Next",
            standard_icon=QStyle.StandardPixmap.SP_MediaSkipForward,
        )
        self.next_button.clicked.connect(self.next_clicked.emit)
        layout.addWidget(self.next_button)

        self.dismiss_button = self._create_icon_button(
            tooltip="Dismiss",
            standard_icon=QStyle.StandardPixmap.SP_MediaStop,
        )
        self.dismiss_button.clicked.connect(self.dismiss_clicked.emit)
        layout.addWidget(self.dismiss_button)

        layout.addStretch(1)
        self.set_playing(False)

    def _create_icon_button(
        self,
        *,
        tooltip: str,
        theme_icon: Optional[str] = None,
        standard_icon: Optional[QStyle.StandardPixmap] = None,
        fallback_text: str = "",
        checkable: bool = False,
    ) -> QToolButton:
        button = QToolButton(self)
        button.setCheckable(checkable)
        button.setAutoRaise(True)
        button.setCursor(Qt.CursorShape.PointingHandCursor)
        button.setToolTip(tooltip)
        button.setIconSize(QSize(26, 26))

        icon = QIcon()
        if theme_icon:
            icon = QIcon.fromTheme(theme_icon)
        if icon.isNull() and standard_icon is not None:
            icon = self.style().standardIcon(standard_icon)
        if icon.isNull():
            button.setText(fallback_text or tooltip)
        else:
            button.setIcon(icon)
        return button

    def set_playing(self, playing: bool) -> None:
        self.play_button.setIcon(self._pause_icon if playing else self._play_icon)
        self.play_button.setToolTip("Pause" if playing else "Play")

    def set_shuffle(self, enabled: bool) -> None:
        self.shuffle_button.blockSignals(True)
        self.shuffle_button.setChecked(enabled)
        self.shuffle_button.blockSignals(False)

    def set_navigation(self, *, has_previous: bool, has_next: bool, can_play: bool, has_track: bool) -> None:
        self.previous_button.setEnabled(has_previous)
        self.next_button.setEnabled(has_next)
        self.play_button.setEnabled(can_play)
        self.dismiss_button.setEnabled(has_track)


class ProgressWidget(QWidget):
    """Slider and labels representing track progress."""

    seek_requested = pyqtSignal(float)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setColumnStretch(1, 1)
        self._duration: float = 0.0

        self._elapsed = QLabel("0:00", self)
        layout.addWidget(self._elapsed, 0, 0)

        self._slider = QSlider(Qt.Orientation.Horizontal, self)
        self._slider.setRange(0, 1000)
        self._slider.sliderReleased.connect(self._on_slider_released)
        layout.addWidget(self._slider, 0, 1)

        self._remaining = QLabel("0:00", self)
        self._remaining.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        layout.addWidget(self._remaining, 0, 2)

    def update_position(self, position: float, duration: float) -> None:
        self._duration = duration
        ratio = min(max(position / duration, 0.0), 1.0) if duration > 0 else 0.0
        if not self._slider.isSliderDown():
            self._slider.blockSignals(True)
            self._slider.setValue(int(ratio * self._slider.maximum()))
            self._slider.blockSignals(False)
        self._elapsed.setText(format_duration(position))
        self._remaining.setText(format_duration(max(duration - position, 0.0)))

    def set_seekable(self, seekable: bool) -> None:
        self._slider.setEnabled(seekable)

    def _on_slider_released(self) -> None:
        if self._duration <= 0:
            return
        ratio = self._slider.value() / self._slider.maximum()
        self.seek_requested.emit(ratio * self._duration)


class NowPlayingWidget(QWidget):
    """Artwork, title and artist of the current track."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        self._artwork = QLabel(self)
        self._artwork.setFixedSize(200, 200)
        self._artwork.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._artwork, 0, Qt.AlignmentFlag.AlignHCenter)

        self._title = QLabel("Not playing", self)
        self._title.setObjectName("heading")
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._title)

        self._subtitle = QLabel("", self)
        self._subtitle.setObjectName("subheading")
        self._subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._subtitle)

    @property
    def title_text(self) -> str:
        return self._title.text()

    def update_now_playing(self, track: Optional[Track]) -> None:
        if track is None:
            self._title.setText("Not playing")
            self._subtitle.setText("")
            self._artwork.setPixmap(QPixmap())
            return
        self._title.setText(track.title)
        parts: List[str] = [part for part in (track.artist, track.album) if part]
        self._subtitle.setText(" / ".join(parts))
        pixmap = artwork_icon(track, self.style()).pixmap(self._artwork.size())
        self._artwork.setPixmap(pixmap)


def artwork_icon(track: Track, style: QStyle) -> QIcon:
    """Embedded cover when present, otherwise the track's themed icon."""
    if track.cover is not None:
        return QIcon(QPixmap.fromImage(ImageQt(track.cover)))
    icon = QIcon.fromTheme(track.artwork)
    if icon.isNull():
        icon = style.standardIcon(QStyle.StandardPixmap.SP_MediaVolume)
    return icon


__all__ = ["NowPlayingWidget", "PlaybackControls", "ProgressWidget", "TrackList", "artwork_icon"]
