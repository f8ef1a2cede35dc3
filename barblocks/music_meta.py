"""Metadata handling for MPRIS media players: trimming, parsing and filtering."""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

MPRIS_PREFIX = "org.mpris.MediaPlayer2"


class PlaybackStatus(Enum):
    """Playback status reported by a player."""

    PLAYING = "Playing"
    PAUSED = "Paused"
    STOPPED = "Stopped"
    UNKNOWN = "Unknown"


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _trim_count(overshoot: float, length: int, substance: float) -> int:
    share = _f32(length / substance)
    return math.ceil(_f32(overshoot * share))


def _kept(length: int, trimmed: int) -> int:
    kept = length - trimmed
    return kept if 1 <= kept <= 5000 else 1


def smart_trim(artist: str, title: str, separator: str, max_width: int) -> str:
    """Shorten title and artist in proportion to their lengths to fit max_width.

    When one of them is empty, the other is cut to max_width characters.
    Raises ValueError when both are present and the text is shorter than
    max_width, or too short to trim at all.
    """
    if not title:
        return f"{title}{separator}{artist[:max_width]}"
    if not artist:
        return f"{title[:max_width]}{separator}{artist}"

    tlen = len(title)
    alen = len(artist)
    textlen = tlen + len(separator) + alen
    if textlen < max_width:
        raise ValueError("text is already shorter than the maximum width")
    if textlen < 3:
        raise ValueError("text is too short to trim")

    overshoot = _f32(float(textlen - max_width))
    substance = _f32(float(textlen - 3))

    tnum = _trim_count(overshoot, tlen, substance)
    anum = _trim_count(overshoot, alen, substance)

    # Prefer to trim only one of the title and the artist.
    if anum < tnum and anum <= 3 and tnum + anum < tlen:
        anum = 0
    if tnum < anum and tnum <= 3 and anum + tnum < alen:
        tnum = 0

    title = title[: _kept(tlen, tnum)]
    artist = artist[: _kept(alen, anum)]
    return f"{title}{separator}{artist}"


def combo_text(
    artist: str, title: str, separator: str, max_width: int, use_smart_trim: bool
) -> str:
    """Join title and artist, smart-trimming them when asked and needed."""
    textlen = len(title) + len(separator) + len(artist)
    if textlen < max_width or not use_smart_trim:
        return f"{title}{separator}{artist}"
    return smart_trim(artist, title, separator, max_width)


def player_name(interface_name: str) -> str:
    """Short player name from an MPRIS bus name, e.g. ``spotify``."""
    parts = interface_name.split(".")
    if len(parts) < 4:
        raise ValueError(f"not an MPRIS player name: {interface_name!r}")
    return parts[3]


def extract_playback_status(value: Any) -> PlaybackStatus:
    """Map a PlaybackStatus property value to the enum."""
    if isinstance(value, str):
        try:
            status = PlaybackStatus(value)
        except ValueError:
            return PlaybackStatus.UNKNOWN
        return status
    return PlaybackStatus.UNKNOWN


def extract_artist(value: Any) -> str:
    """Return the artist string, taking the first entry of nested lists."""
    if isinstance(value, str):
        return value
    if not isinstance(value, Iterable):
        raise ValueError("failed to extract artist")
    for item in value:
        return extract_artist(item)
    raise ValueError("failed to extract artist")


def extract_from_metadata(metadata: Any) -> tuple[str | None, str | None]:
    """Return ``(title, artist)`` from an MPRIS Metadata mapping."""
    if not isinstance(metadata, Mapping):
        raise ValueError("failed to extract metadata")
    title: str | None = None
    artist: str | None = None
    for key, value in metadata.items():
        if not isinstance(key, str):
            raise ValueError("failed to extract metadata")
        if key == "xesam:artist":
            artist = extract_artist(value)
        elif key == "xesam:title":
            if not isinstance(value, str):
                raise ValueError("failed to extract metadata")
            title = value
    return title, artist


def ignored_player(
    name: str,
    exclude_patterns: Iterable[str | re.Pattern[str]],
    preferred_player: str | None,
) -> bool:
    """Whether a bus name should not be tracked as a player."""
    if preferred_player is not None and not name.startswith(
        f"{MPRIS_PREFIX}.{preferred_player}"
    ):
        return True
    if not name.startswith(MPRIS_PREFIX):
        return True
    return any(re.search(pattern, name) for pattern in exclude_patterns)