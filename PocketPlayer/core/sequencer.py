"""Previous/next ordering over the library in linear or shuffled order."""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .library import Library, Track

LOGGER = logging.getLogger(__name__)


class PlaybackSequencer:
    """Answers which track comes before or after another.

    In linear mode navigation follows library order. With shuffle enabled it
    follows a permutation of library indices built when shuffle was switched
    on. Neither mode wraps around: the first and last positions simply have no
    previous or next track. A track the sequencer cannot place is treated as
    both first and last so navigation is disabled instead of failing.
    """

    def __init__(self, library: Optional[Library] = None, rng: Optional[random.Random] = None) -> None:
        self._library = library if library is not None else Library()
        self._rng = rng or random.Random()
        self._shuffle_enabled = False
        self._shuffle_order: List[int] = []
        self._shuffle_positions: dict[int, int] = {}

    @property
    def library(self) -> Library:
        return self._library

    @property
    def shuffle_enabled(self) -> bool:
        return self._shuffle_enabled

    @property
    def shuffle_order(self) -> Tuple[int, ...]:
        return tuple(self._shuffle_order)

    def set_library(self, library: Library, current: Optional[Track] = None) -> None:
        self._library = library
        if self._shuffle_enabled:
            self._build_shuffle_order(current)

    def enable_shuffle(self, current: Optional[Track] = None) -> None:
        self._shuffle_enabled = True
        self._build_shuffle_order(current)

    def disable_shuffle(self) -> None:
        self._shuffle_enabled = False
        self._shuffle_order = []
        self._shuffle_positions = {}

    def has_previous(self, track: Optional[Track]) -> bool:
        position = self._position_of(track)
        return position is not None and position > 0

    def has_next(self, track: Optional[Track]) -> bool:
        position = self._position_of(track)
        return position is not None and position < len(self._library) - 1

    def previous(self, track: Optional[Track]) -> Optional[Track]:
        if not self.has_previous(track):
            return None
        return self._track_at(self._position_of(track) - 1)

    def next(self, track: Optional[Track]) -> Optional[Track]:
        if not self.has_next(track):
            return None
        return self._track_at(self._position_of(track) + 1)

    def _position_of(self, track: Optional[Track]) -> Optional[int]:
        index = self._library.index_of(track)
        if index is None or not self._shuffle_enabled:
            return index
        return self._shuffle_positions.get(index)

    def _track_at(self, position: int) -> Track:
        index = self._shuffle_order[position] if self._shuffle_enabled else position
        return self._library[index]

    def _build_shuffle_order(self, current: Optional[Track]) -> None:
        order = list(range(len(self._library)))
        self._rng.shuffle(order)
        anchor = self._library.index_of(current)
        if anchor is not None:
            order.remove(anchor)
            order.insert(0, anchor)
        self._shuffle_order = order
        self._shuffle_positions = {index: position for position, index in enumerate(order)}
        LOGGER.debug("Shuffle order rebuilt for %d tracks", len(order))


__all__ = ["PlaybackSequencer"]
