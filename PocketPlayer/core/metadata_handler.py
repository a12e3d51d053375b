"""Audio metadata extraction helpers."""
from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mutagen import File, MutagenError
from mutagen.flac import FLAC, Picture
from mutagen.mp3 import MP3
from mutagen.oggvorbis import OggVorbis
from PIL import Image, UnidentifiedImageError

LOGGER = logging.getLogger(__name__)

# Formats pygame.mixer.music can stream.
SUPPORTED_EXTENSIONS = {".mp3", ".wav", ".flac", ".ogg", ".oga"}

UNKNOWN_ARTIST = "Unknown Artist"


@dataclass(slots=True)
class TrackMetadata:
    """Tags read from an audio file."""

    title: str
    artist: str
    album: str
    duration_seconds: float
    album_art_image: Optional[Image.Image] = None


class MetadataHandler:
    """Service used to extract metadata for supported audio formats."""

    def supports(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in SUPPORTED_EXTENSIONS

    def extract(self, file_path: Path) -> TrackMetadata:
        if not self.supports(file_path):
            raise ValueError(f"Unsupported audio format: {file_path.suffix}")

        audio = File(file_path, easy=False)
        if audio is None:
            raise ValueError(f"Unable to read audio metadata for {file_path}")

        title = self._extract_tag(audio, ("TIT2", "title")) or file_path.stem
        artist = self._extract_tag(audio, ("TPE1", "artist")) or UNKNOWN_ARTIST
        album = self._extract_tag(audio, ("TALB", "album")) or ""
        duration = float(getattr(audio.info, "length", 0.0) or 0.0)

        return TrackMetadata(
            title=title,
            artist=artist,
            album=album,
            duration_seconds=duration,
            album_art_image=self._extract_album_art(audio),
        )

    def read_duration(self, file_path: Path) -> float:
        """Return the stream length in seconds, or 0.0 when it cannot be read."""
        try:
            audio = File(file_path, easy=False)
        except (MutagenError, OSError) as exc:
            LOGGER.warning("Unable to read duration of %s: %s", file_path, exc)
            return 0.0
        if audio is None:
            return 0.0
        return float(getattr(audio.info, "length", 0.0) or 0.0)

    @staticmethod
    def fallback(file_path: Path) -> TrackMetadata:
        """Metadata derived from the file name alone."""
        return TrackMetadata(title=file_path.stem, artist=UNKNOWN_ARTIST, album="", duration_seconds=0.0)

    def _extract_tag(self, audio: File, keys: tuple[str, ...]) -> Optional[str]:
        tags = getattr(audio, "tags", None)
        if tags is None:
            return None
        for key in keys:
            value = tags.get(key)
            if not value:
                continue
            if isinstance(value, list):
                value = value[0]
            text = getattr(value, "text", value)
            if isinstance(text, list):
                text = text[0] if text else ""
            text = str(text).strip()
            if text:
                return text
        return None

    def _extract_album_art(self, audio: File) -> Optional[Image.Image]:
        data: Optional[bytes] = None
        if isinstance(audio, MP3) and getattr(audio, "tags", None):
            for tag in audio.tags.values():
                if getattr(tag, "FrameID", "") == "APIC":
                    data = tag.data
                    break
        elif isinstance(audio, FLAC) and audio.pictures:
            data = audio.pictures[0].data
        elif isinstance(audio, OggVorbis) and getattr(audio, "tags", None):
            pictures = audio.tags.get("metadata_block_picture")
            if pictures:
                try:
                    data = Picture(base64.b64decode(pictures[0])).data
                except (ValueError, MutagenError) as exc:
                    LOGGER.warning("Invalid embedded picture: %s", exc)
        if not data:
            return None
        try:
            return Image.open(io.BytesIO(data)).convert("RGBA")
        except (UnidentifiedImageError, OSError) as exc:
            LOGGER.warning("Failed to extract album art: %s", exc)
            return None


__all__ = ["MetadataHandler", "TrackMetadata", "SUPPORTED_EXTENSIONS", "UNKNOWN_ARTIST"]
