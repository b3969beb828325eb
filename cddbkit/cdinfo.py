"""Disc and track information in the CDDB (xmcd) text format."""

from __future__ import annotations

import enum
import re
from typing import Any, Iterable

__all__ = [
    "CLIENT_NAME",
    "CLIENT_VERSION",
    "InfoType",
    "TrackInfo",
    "CDInfo",
    "escape",
    "unescape",
    "create_line",
]

CLIENT_NAME = "libkcddb"
CLIENT_VERSION = "0.5"

_MAX_LINE = 256

_REVISION = re.compile(r"# Revision: ([0-9]+)")
_EOL = re.compile(r"[\r\n]")
_CUSTOM_TRACK_KEY = re.compile(r"^T.*_.*$")
_UINT = re.compile(r"\s*\+?([0-9]+)\s*")
_INT = re.compile(r"\s*([+-]?[0-9]+)\s*")

_CDDB_KEYWORDS = frozenset(
    {
        "DISCID",
        "ARTIST",
        "TITLE",
        "COMMENT",
        "YEAR",
        "GENRE",
        "PLAYORDER",
        "CATEGORY",
        "REVISION",
    }
)
_TRACK_SKIPPED = frozenset({"COMMENT", "TITLE", "ARTIST", "TRACKNUMBER"})


class InfoType(enum.Enum):
    """The most common kinds of information about a disc or track."""

    TITLE = "title"
    COMMENT = "comment"
    ARTIST = "artist"
    GENRE = "genre"
    YEAR = "year"
    LENGTH = "length"
    CATEGORY = "category"


def escape(value: str) -> str:
    """Escape backslashes, newlines and tabs for a CDDB entry."""
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace("\t", "\\t")


def unescape(value: str) -> str:
    """Undo the escaping applied to a CDDB entry value."""
    return value.replace("\\n", "\n").replace("\\t", "\t").replace("\\\\", "\\")


def create_line(name: str, value: str) -> str:
    """Return NAME=VALUE lines, split so that no line exceeds 256 characters."""
    if len(name) >= _MAX_LINE - 2:
        raise ValueError(f"key too long for a CDDB line: {name!r}")
    max_length = _MAX_LINE - len(name) - 2
    rest = escape(value)
    lines = []
    while len(rest) > max_length:
        lines.append(f"{name}={rest[:max_length]}\n")
        rest = rest[max_length:]
    lines.append(f"{name}={rest}\n")
    return "".join(lines)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_uint(text: str) -> int:
    match = _UINT.fullmatch(text)
    if not match:
        return 0
    number = int(match.group(1))
    return number if number <= 0xFFFFFFFF else 0


def _to_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value)
    match = _INT.fullmatch(str(value))
    return int(match.group(1)) if match else 0


def _perl_split(line: str) -> list[str]:
    """Split on the first '=' into at most two parts, dropping empty parts."""
    tokens: list[str] = []
    start = 0
    sep = line.find("=", start)
    while sep != -1 and len(tokens) < 1:
        piece = line[start:sep]
        if piece:
            tokens.append(piece)
        start = sep + 1
        sep = line.find("=", start)
    rest = line[start:]
    if rest:
        tokens.append(rest)
    return tokens


def _key_name(key: InfoType | str) -> str:
    return key.value if isinstance(key, InfoType) else key


def _is_reserved(name: str) -> bool:
    return bool(_CUSTOM_TRACK_KEY.search(name)) or name.upper() == "DTITLE"


class _InfoBase:
    """Case-insensitive key/value storage shared by discs and tracks."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def _get(self, key: InfoType | str) -> Any:
        return self._data.get(_key_name(key).upper())

    def _set(self, key: InfoType | str, value: Any) -> None:
        name = _key_name(key)
        if _CUSTOM_TRACK_KEY.search(name):
            raise ValueError(
                f"custom keys may not start with T and contain '_': {name!r}"
            )
        if name.upper() == "DTITLE":
            raise ValueError("DTITLE is reserved and cannot be set")
        self._data[name.upper()] = value

    def _append(self, key: InfoType | str, text: str) -> None:
        self._set(key, _text(self._get(key)) + text)


class TrackInfo(_InfoBase):
    """Information about one track of a disc."""

    def get(self, key: InfoType | str) -> Any:
        """Return the value stored under *key* (case-insensitive), or None."""
        return self._get(key)

    def set(self, key: InfoType | str, value: Any) -> None:
        """Store *value* under *key* (case-insensitive)."""
        self._set(key, value)

    def clear(self) -> None:
        """Remove all stored information about the track."""
        self._data.clear()

    def to_string(self) -> str:
        """Return the custom track data as CDDB lines (T<KEY>_<n>=value)."""
        number = _to_int(self.get("tracknumber"))
        return "".join(
            create_line(f"T{key}_{number}", _text(value))
            for key, value in sorted(self._data.items())
            if key not in _TRACK_SKIPPED
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrackInfo):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> TrackInfo:
        clone = TrackInfo()
        clone._data = dict(self._data)
        return clone

    def __repr__(self) -> str:
        return f"TrackInfo({self._data!r})"


class CDInfo(_InfoBase):
    """Information about a whole disc and its tracks."""

    def __init__(self) -> None:
        super().__init__()
        self._tracks: list[TrackInfo] = []
        self.set("revision", 0)

    def get(self, key: InfoType | str) -> Any:
        """Return the value stored under *key* (case-insensitive), or None."""
        return self._get(key)

    def set(self, key: InfoType | str, value: Any) -> None:
        """Store *value* under *key* (case-insensitive)."""
        self._set(key, value)

    def load(self, data: str | Iterable[str]) -> None:
        """Replace the contents with a CDDB entry given as text or as lines."""
        if isinstance(data, str):
            lines = [line for line in data.split("\n") if line]
        else:
            lines = list(data)

        self.clear()
        dtitle = ""

        for raw in lines:
            line = _EOL.sub("", raw)

            revision = _REVISION.search(line)
            if revision:
                self.set("revision", _to_uint(revision.group(1)))
                continue

            tokens = _perl_split(line)
            if len(tokens) != 2:
                continue

            key = tokens[0].strip()
            value = unescape(tokens[1])

            if key == "DTITLE":
                dtitle += value
            elif key.startswith("TTITLE"):
                self.track(_to_uint(key[6:]))._append(InfoType.TITLE, value)
            elif key == "EXTD":
                self._append(InfoType.COMMENT, value)
            elif key == "DGENRE":
                self._append(InfoType.GENRE, value)
            elif key == "DYEAR":
                self.set(InfoType.YEAR, value)
            elif key.startswith("EXTT"):
                self.track(_to_uint(key[4:]))._append(InfoType.COMMENT, value)
            elif key.startswith("T"):
                underscore = key.find("_")
                number = _to_uint(key[underscore + 1:])
                track = self.track(number)
                if re.search(rf"^T.*_{number}$", key):
                    name = key[1:underscore]
                    if not _is_reserved(name):
                        track._append(name, value)
            elif not _is_reserved(key):
                self._append(key, value)

        slash = dtitle.find(" / ")
        if slash == -1:
            self.set(InfoType.ARTIST, dtitle)
            self.set(InfoType.TITLE, dtitle)
        else:
            self.set(InfoType.ARTIST, dtitle[:slash].strip())
            self.set(InfoType.TITLE, dtitle[slash + 3:].strip())

        is_sampler = all(
            " / " in _text(track.get(InfoType.TITLE)) for track in self._tracks
        )
        for track in self._tracks:
            if is_sampler:
                title = _text(track.get(InfoType.TITLE))
                delimiter = title.find(" / ")
                track.set(InfoType.ARTIST, title[:delimiter])
                track.set(InfoType.TITLE, title[delimiter + 3:])
            else:
                track.set(InfoType.ARTIST, self.get(InfoType.ARTIST))

        if not _text(self.get(InfoType.GENRE)):
            self.set(InfoType.GENRE, "Unknown")

    def clear(self) -> None:
        """Remove all disc and track information."""
        self._data.clear()
        self._tracks.clear()

    def is_valid(self) -> bool:
        """Return True if the entry has a usable disc id."""
        discid = _text(self.get("DISCID"))
        return bool(discid) and discid != "0"

    def to_string(self, submit: bool = False) -> str:
        """Return the entry as CDDB text; with *submit*, only standard fields."""
        parts: list[str] = []

        revision = self.get("revision")
        if _text(revision) != "0":
            parts.append(f"# Revision: {_text(revision)}\n")

        if submit:
            parts.append("#\n")
            parts.append(f"# Submitted via: {CLIENT_NAME} {CLIENT_VERSION}\n")

        parts.append(create_line("DISCID", _text(self.get("discid"))))
        artist = _text(self.get(InfoType.ARTIST))
        parts.append(
            create_line("DTITLE", f"{artist} / {_text(self.get(InfoType.TITLE))}")
        )
        year = _to_int(self.get(InfoType.YEAR))
        parts.append(f"DYEAR={'' if year == 0 else year}\n")
        genre = _text(self.get(InfoType.GENRE))
        parts.append(create_line("DGENRE", "" if genre == "Unknown" else genre))

        is_sampler = any(
            (track_artist := _text(track.get(InfoType.ARTIST)))
            and track_artist != artist
            for track in self._tracks
        )

        for number, track in enumerate(self._tracks):
            title = _text(track.get(InfoType.TITLE))
            if is_sampler:
                track_artist = _text(track.get(InfoType.ARTIST)) or artist
                title = f"{track_artist} / {title}"
            parts.append(create_line(f"TTITLE{number}", title))

        parts.append(create_line("EXTD", _text(self.get(InfoType.COMMENT))))
        for number, track in enumerate(self._tracks):
            parts.append(
                create_line(f"EXTT{number}", _text(track.get(InfoType.COMMENT)))
            )

        if submit:
            parts.append(create_line("PLAYORDER", ""))
            return "".join(parts)

        parts.append(create_line("PLAYORDER", _text(self.get("playorder"))))

        parts.extend(track.to_string() for track in self._tracks)

        parts.extend(
            create_line(key, _text(value))
            for key, value in sorted(self._data.items())
            if key not in _CDDB_KEYWORDS and key != "SOURCE"
        )
        return "".join(parts)

    def track(self, number: int) -> TrackInfo:
        """Return track *number* (from 0), adding tracks up to it if missing."""
        if number < 0:
            raise IndexError(f"track number must not be negative: {number}")
        while len(self._tracks) <= number:
            track = TrackInfo()
            track.set("tracknumber", len(self._tracks))
            self._tracks.append(track)
        return self._tracks[number]

    def number_of_tracks(self) -> int:
        """Return the number of tracks on the disc."""
        return len(self._tracks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CDInfo):
            return NotImplemented
        return self._data == other._data and self._tracks == other._tracks

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> CDInfo:
        clone = CDInfo.__new__(CDInfo)
        clone._data = dict(self._data)
        clone._tracks = [track.__copy__() for track in self._tracks]
        return clone

    def __repr__(self) -> str:
        return f"CDInfo({self._data!r}, tracks={self._tracks!r})"