"""Common parts of server lookups: query and read response parsing."""

from __future__ import annotations

import abc
from typing import NamedTuple, Sequence

from .cddb import status_code
from .cdinfo import CDInfo
from .result import CDDBError, Result

__all__ = ["CDDBMatch", "Lookup"]


class CDDBMatch(NamedTuple):
    """A category and disc id that a server reported as matching."""

    category: str
    discid: str


class Lookup(abc.ABC):
    """Base for lookups against a freedb-style server."""

    def __init__(self) -> None:
        self.user = "libkcddb-user"
        self.local_host_name = "localHost"
        self.read_only = False
        self.offsets: list[int] = []
        self.cd_info_list: list[CDInfo] = []
        self.match_list: list[CDDBMatch] = []
        self.category = ""
        self.discid = ""

    @abc.abstractmethod
    def lookup(
        self, hostname: str, port: int, offsets: Sequence[int]
    ) -> list[CDInfo]:
        """Look the disc up on the server; raise CDDBError on failure."""

    def lookup_response(self) -> list[CDInfo]:
        """Return the entries found by the last lookup."""
        return list(self.cd_info_list)

    def parse_query(self, line: str) -> Result:
        """Interpret the first line of a query response."""
        status = status_code(line)
        if status == 200:
            tokens = line.split()
            if len(tokens) < 3:
                return Result.SERVER_ERROR
            self.match_list.append(CDDBMatch(tokens[1], tokens[2]))
            return Result.SUCCESS
        if status in (210, 211):
            return Result.MULTIPLE_RECORD_FOUND
        if status == 202:
            return Result.NO_RECORD_FOUND
        return Result.SERVER_ERROR

    def parse_extra_match(self, line: str) -> None:
        """Record one match line of a multiple-match query response."""
        tokens = line.split()
        if len(tokens) < 2:
            raise CDDBError(Result.SERVER_ERROR, f"malformed match line: {line!r}")
        self.match_list.append(CDDBMatch(tokens[0], tokens[1]))

    def parse_read(self, line: str) -> Result:
        """Interpret the first line of a read response."""
        return Result.SUCCESS if status_code(line) == 210 else Result.SERVER_ERROR