"""Settings that drive lookups, submissions and the local cache."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path

__all__ = ["Transport", "Config"]


class Transport(enum.IntEnum):
    """Protocol used to talk to a freedb-style server."""

    CDDBP = 0
    HTTP = 1


def _default_email() -> str:
    return os.environ.get("EMAIL", "")


def _check_port(name: str, port: int) -> None:
    if not 0 < port < 65536:
        raise ValueError(f"{name} must be between 1 and 65535, got {port}")


@dataclass
class Config:
    """Lookup, submission and cache settings.

    The e-mail address defaults to the EMAIL environment variable.
    """

    cache_lookup_enabled: bool = True
    freedb_lookup_enabled: bool = True
    music_brainz_lookup_enabled: bool = False
    freedb_lookup_transport: Transport = Transport.CDDBP
    hostname: str = "gnudb.gnudb.org"
    port: int = 8880
    cache_locations: list[str] = field(default_factory=list)
    email_address: str = field(default_factory=_default_email)
    http_submit_server: str = "gnudb.gnudb.org"
    http_submit_port: int = 80

    def __post_init__(self) -> None:
        self.freedb_lookup_transport = Transport(self.freedb_lookup_transport)
        self.cache_locations = [str(Path(loc)) for loc in self.cache_locations]
        _check_port("port", self.port)
        _check_port("http_submit_port", self.http_submit_port)