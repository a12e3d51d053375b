"""Periodic sampling of the output device position."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer

LOGGER = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 500


class PositionPoller(QObject):
    """Repeating timer that invokes ``on_tick`` while started."""

    def __init__(
        self,
        on_tick: Optional[Callable[[], None]] = None,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._on_tick = on_tick
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def set_callback(self, on_tick: Optional[Callable[[], None]]) -> None:
        self._on_tick = on_tick

    def start(self) -> None:
        if not self._timer.isActive():
            LOGGER.debug("Position poller started (%d ms)", self._timer.interval())
        self._timer.start()

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
            LOGGER.debug("Position poller stopped")

    def is_active(self) -> bool:
        return self._timer.isActive()

    def tick(self) -> None:
        if self._on_tick is not None:
            self._on_tick()


__all__ = ["DEFAULT_POLL_INTERVAL_MS", "PositionPoller"]
