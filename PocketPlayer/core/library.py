"""Track model, the ordered library and the managed storage folder."""
from __future__ import annotations

import logging
import shutil
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from mutagen import MutagenError
from PIL import Image
from PyQt6.QtCore import QObject, pyqtSignal

from .metadata_handler import MetadataHandler, TrackMetadata

LOGGER = logging.getLogger(__name__)

DEFAULT_ARTWORK = "audio-x-generic"


@dataclass(frozen=True, slots=True, eq=False)
class Track:
    """A single audio item. Identity is ``id``; everything else is display data."""

    id: str
    title: str
    artist: str
    album: str = ""
    artwork: str = DEFAULT_ARTWORK
    location: Optional[Path] = None
    duration_seconds: float = 0.0
    cover: Optional[Image.Image] = field(default=None, repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Track):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def playable(self) -> bool:
        return self.location is not None

    @classmethod
    def from_file(cls, location: Path, metadata: TrackMetadata) -> "Track":
        return cls(
            id=track_id_for(location),
            title=metadata.title,
            artist=metadata.artist,
            album=metadata.album,
            location=location,
            duration_seconds=metadata.duration_seconds,
            cover=metadata.album_art_image,
        )


def track_id_for(location: Path) -> str:
    """Stable id for a file so a track survives library rebuilds."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, location.resolve().as_uri()))


def demo_tracks() -> List[Track]:
    """Placeholder entries without audio, shown when demo tracks are enabled."""
    entries = [
        ("Blinding Lights", "The Weeknd", "After Hours", "media-playlist-audio"),
        ("Levitating", "Dua Lipa", "Future Nostalgia", "audio-input-microphone"),
        ("Peaches", "Justin Bieber", "Justice", "audio-x-generic"),
        ("Save Your Tears", "The Weeknd", "After Hours", "audio-headphones"),
        ("Watermelon Sugar", "Harry Styles", "Fine Line", "audio-x-generic"),
    ]
    return [
        Track(id=str(uuid.uuid4()), title=title, artist=artist, album=album, artwork=artwork)
        for title, artist, album, artwork in entries
    ]


class Library(Sequence[Track]):
    """Ordered, immutable collection of tracks with O(1) lookup by id."""

    def __init__(self, tracks: Iterable[Track] = ()) -> None:
        unique: List[Track] = []
        index: Dict[str, int] = {}
        for track in tracks:
            if track.id in index:
                LOGGER.debug("Skipping duplicate track id %s", track.id)
                continue
            index[track.id] = len(unique)
            unique.append(track)
        self._tracks: Tuple[Track, ...] = tuple(unique)
        self._index = index

    def __len__(self) -> int:
        return len(self._tracks)

    def __getitem__(self, position):  # type: ignore[override]
        return self._tracks[position]

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, Track) and item.id in self._index

    def __repr__(self) -> str:
        return f"Library({len(self._tracks)} tracks)"

    def index_of(self, track: Optional[Track]) -> Optional[int]:
        if track is None:
            return None
        return self._index.get(track.id)

    def get(self, track_id: str) -> Optional[Track]:
        position = self._index.get(track_id)
        return self._tracks[position] if position is not None else None


class LibraryStore(QObject):
    """Owns the managed storage folder and rebuilds the library from it."""

    library_changed = pyqtSignal(object)

    def __init__(
        self,
        root: Path,
        metadata_handler: Optional[MetadataHandler] = None,
        *,
        include_demo_tracks: bool = False,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._root = root
        self._metadata_handler = metadata_handler or MetadataHandler()
        self._include_demo_tracks = include_demo_tracks
        self._demo_tracks: List[Track] = demo_tracks() if include_demo_tracks else []
        self._library = Library()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def library(self) -> Library:
        return self._library

    def scan(self) -> Library:
        """Rebuild the library from the storage folder and announce it."""
        tracks = list(self._demo_tracks)
        tracks.extend(self._enumerate_tracks())
        self._library = Library(tracks)
        LOGGER.info("Library rebuilt with %d tracks", len(self._library))
        self.library_changed.emit(self._library)
        return self._library

    def import_files(self, sources: Iterable[Path]) -> List[Path]:
        """Copy files into the storage folder, skipping names already present."""
        imported: List[Path] = []
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            LOGGER.error("Unable to create library folder %s: %s", self._root, exc)
            return imported
        for source in sources:
            if not self._metadata_handler.supports(source):
                LOGGER.info("Skipping unsupported file %s", source)
                continue
            destination = self._root / source.name
            if destination.exists():
                LOGGER.debug("Skipping %s, already in library", source.name)
                continue
            try:
                shutil.copy2(source, destination)
            except OSError as exc:
                LOGGER.warning("Failed to copy %s: %s", source, exc)
                continue
            imported.append(destination)
        if imported:
            LOGGER.info("Imported %d files into %s", len(imported), self._root)
        self.scan()
        return imported

    def delete_track(self, track: Track) -> Library:
        """Remove a track's file (or placeholder) and rebuild the library."""
        if track.location is None:
            self._demo_tracks = [demo for demo in self._demo_tracks if demo != track]
        else:
            try:
                track.location.unlink()
            except FileNotFoundError:
                LOGGER.info("File for %s already gone", track.title)
            except OSError as exc:
                LOGGER.warning("Failed to delete %s: %s", track.location, exc)
        return self.scan()

    def _enumerate_tracks(self) -> Iterator[Track]:
        try:
            entries = sorted(self._root.iterdir())
        except OSError as exc:
            LOGGER.warning("Unable to access library folder %s: %s", self._root, exc)
            return
        for entry in entries:
            if not entry.is_file() or not self._metadata_handler.supports(entry):
                continue
            try:
                metadata = self._metadata_handler.extract(entry)
            except (MutagenError, OSError, ValueError) as exc:
                LOGGER.warning("Failed to read metadata for %s: %s", entry, exc)
                metadata = self._metadata_handler.fallback(entry)
            yield Track.from_file(entry, metadata)


__all__ = ["DEFAULT_ARTWORK", "Library", "LibraryStore", "Track", "demo_tracks", "track_id_for"]
