"""Miscellaneous helper utilities for the PocketPlayer app."""
from __future__ import annotations

from typing import Optional

from ..core.library import Track


def format_duration(seconds: float) -> str:
    """Format seconds as ``m:ss`` (or ``h:mm:ss`` for long tracks)."""
    try:
        seconds = max(0, int(seconds))
    except (TypeError, ValueError):
        seconds = 0
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def describe_track(track: Optional[Track]) -> str:
    """One-line label used by the tray tooltip and window title."""
    if track is None:
        return "Nothing playing"
    if track.artist:
        return f"{track.title} - {track.artist}"
    return track.title
