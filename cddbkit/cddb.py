"""Disc id computation, protocol status codes and reading cached entries."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .categories import Categories
from .cdinfo import CDInfo, InfoType
from .config import Config

__all__ = [
    "track_offset_list_to_id",
    "track_offset_list_to_string",
    "status_code",
    "cache_files",
]

_FRAMES_PER_SECOND = 75
_UINT_MASK = 0xFFFFFFFF


def _digit_sum(number: int) -> int:
    return sum(int(digit) for digit in str(number)) if number > 0 else 0


def track_offset_list_to_id(offsets: Sequence[int]) -> str:
    """Return the 8-digit hex CDDB disc id.

    *offsets* holds the start frame of every track followed by the
    lead-out frame. An empty list gives an empty string.
    """
    if not offsets:
        return ""
    num_tracks = len(offsets) - 1
    total = sum(
        _digit_sum(offset // _FRAMES_PER_SECOND) for offset in offsets[:num_tracks]
    )
    length = (
        offsets[num_tracks] // _FRAMES_PER_SECOND - offsets[0] // _FRAMES_PER_SECOND
    ) & _UINT_MASK
    disc_id = (((total % 255) << 24) | (length << 8) | num_tracks) & _UINT_MASK
    return f"{disc_id:08x}"


def track_offset_list_to_string(offsets: Sequence[int]) -> str:
    """Return '<tracks> <offset>... <disc length in seconds>' for a query."""
    if not offsets:
        raise ValueError("offset list must hold at least the lead-out")
    num_tracks = len(offsets) - 1
    parts = [str(num_tracks)]
    parts.extend(str(offset) for offset in offsets[:num_tracks])
    parts.append(str(offsets[num_tracks] // _FRAMES_PER_SECOND))
    return " ".join(parts)


def status_code(line: str) -> int:
    """Return the numeric status at the start of a server response line."""
    tokens = line.split()
    if not tokens:
        return 410
    first = tokens[0]
    if first.startswith("+"):
        first = first[1:]
    if not first.isdigit() or not first.isascii():
        return 0
    value = int(first)
    return value if value <= _UINT_MASK else 0


def cache_files(offsets: Sequence[int], config: Config) -> list[CDInfo]:
    """Return every cached entry for the disc, searching all cache locations."""
    disc_id = track_offset_list_to_id(offsets)
    categories = Categories().cddb_list() + ["user"]
    found: list[CDInfo] = []
    for location in config.cache_locations:
        for category in categories:
            path = Path(location) / category / disc_id
            if not path.is_file():
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except OSError:
                continue
            info = CDInfo()
            info.load(text)
            if category != "user":
                info.set(InfoType.CATEGORY, category)
                info.set("source", "freedb")
            else:
                info.set("source", "user")
            found.append(info)
    return found