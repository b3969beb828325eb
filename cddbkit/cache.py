"""Storing disc entries in, and reading them back from, the local cache."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Iterable, Sequence

from .cddb import cache_files, track_offset_list_to_id
from .cdinfo import CDInfo, InfoType
from .config import Config

__all__ = ["lookup", "store", "store_all"]

_log = logging.getLogger(__name__)


def _text(value: object) -> str:
    return "" if value is None else str(value)


def lookup(offsets: Sequence[int], config: Config) -> list[CDInfo]:
    """Return all cached entries matching the disc."""
    _log.debug("Looking up %s in CDDB cache", track_offset_list_to_id(offsets))
    return cache_files(offsets, config)


def store_all(
    offsets: Sequence[int], infos: Iterable[CDInfo], config: Config
) -> None:
    """Store every entry of *infos* in the cache."""
    for info in infos:
        store(offsets, info, config)


def store(offsets: Sequence[int], info: CDInfo, config: Config) -> None:
    """Store one entry in the first cache location, if one is configured."""
    discid = _text(info.get("discid"))

    # Some freedb entries carry several comma-separated disc ids.
    discids = discid.split(",")
    if len(discids) > 2:
        for new_id in discids:
            single = copy.copy(info)
            single.set("discid", new_id)
            store(offsets, single, config)

    source = _text(info.get("source"))
    entry = copy.copy(info)

    if source == "freedb":
        subdir = _text(info.get(InfoType.CATEGORY))
        file_name = discid
    elif source == "musicbrainz":
        subdir = "musicbrainz"
        file_name = discid
    else:
        if source != "user":
            _log.warning("Unknown source %r for CDInfo", source)
        subdir = "user"
        file_name = track_offset_list_to_id(offsets)
        entry.set("discid", file_name)

    if not config.cache_locations:
        _log.debug("No cache location defined, not storing entry")
        return

    directory = Path(config.cache_locations[0]) / subdir
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError:
        _log.warning("Couldn't create cache directory %s", directory)
        return

    _log.debug("Storing %s in CDDB cache", file_name)
    try:
        with open(directory / file_name, "w", encoding="utf-8", newline="") as fh:
            fh.write(entry.to_string())
    except OSError:
        _log.warning("Couldn't write cache file %s", directory / file_name)