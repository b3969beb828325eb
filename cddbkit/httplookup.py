"""Lookups through the CDDB CGI interface over HTTP."""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Sequence

from .cddb import track_offset_list_to_id, track_offset_list_to_string
from .cdinfo import CLIENT_NAME, CLIENT_VERSION, CDInfo
from .lookup import Lookup
from .result import CDDBError, Result

__all__ = ["HTTPLookup", "build_url"]

_log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
CGI_PATH = "/~cddb/cddb.cgi"
_DEFAULT_USER = "libkcddb-user"
_DEFAULT_HOST = "localHost"


def _make_url(hostname: str, port: int, cmd: str, hello: str) -> str:
    host = f"[{hostname}]" if ":" in hostname else hostname
    # The CGI script expects the parameters in exactly this order.
    query = urllib.parse.urlencode(
        [("cmd", cmd), ("hello", hello), ("proto", "6")],
        quote_via=urllib.parse.quote,
    )
    return f"http://{host}:{port}{CGI_PATH}?{query}"


def build_url(hostname: str, port: int, cmd: str) -> str:
    """Return the CGI URL that sends *cmd* with the default client greeting."""
    hello = f"{_DEFAULT_USER} {_DEFAULT_HOST} {CLIENT_NAME} {CLIENT_VERSION}"
    return _make_url(hostname, port, cmd, hello)


class HTTPLookup(Lookup):
    """Looks discs up through a server's CDDB CGI script."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__()
        self.timeout = timeout
        self.result = Result.SUCCESS

    def _url(self, hostname: str, port: int, cmd: str) -> str:
        hello = f"{self.user} {self.local_host_name} {CLIENT_NAME} {CLIENT_VERSION}"
        return _make_url(hostname, port, cmd, hello)

    def lookup(
        self, hostname: str, port: int, offsets: Sequence[int]
    ) -> list[CDInfo]:
        """Query the server and read every match; raise CDDBError on failure."""
        self.offsets = list(offsets)
        self.cd_info_list = []
        self.match_list = []

        cmd = (
            f"cddb query {track_offset_list_to_id(self.offsets)} "
            f"{track_offset_list_to_string(self.offsets)}"
        )
        self.result = self.handle_query_response(
            self.fetch(self._url(hostname, port, cmd))
        )
        if self.result is not Result.SUCCESS:
            raise CDDBError(self.result)
        _log.debug("Matches found: %d", len(self.match_list))

        while self.match_list:
            match = self.match_list.pop(0)
            self.category, self.discid = match.category, match.discid
            cmd = f"cddb read {self.category} {self.discid}"
            self.handle_read_response(self.fetch(self._url(hostname, port, cmd)))

        if not self.cd_info_list:
            self.result = Result.NO_RECORD_FOUND
            raise CDDBError(self.result)
        self.result = Result.SUCCESS
        return self.lookup_response()

    def handle_query_response(self, data: bytes) -> Result:
        """Parse the body of a query response, recording the matches found."""
        lines = [
            line.rstrip("\r")
            for line in data.decode("utf-8", errors="replace").split("\n")
            if line
        ]
        if not lines:
            return Result.SUCCESS

        result = self.parse_query(lines[0])
        if result in (Result.SERVER_ERROR, Result.NO_RECORD_FOUND):
            return result
        if result is Result.MULTIPLE_RECORD_FOUND:
            for line in lines[1:]:
                if line.startswith("."):
                    break
                self.parse_extra_match(line)
        return Result.SUCCESS

    def handle_read_response(self, data: bytes) -> CDInfo:
        """Parse the body of a read response and add the entry to the results."""
        info = CDInfo()
        info.load(data.decode("utf-8", errors="replace"))
        info.set("category", self.category)
        info.set("discid", self.discid)
        info.set("source", "freedb")
        self.cd_info_list.append(info)
        return info

    def fetch(self, url: str) -> bytes:
        """Return the body at *url*; raise CDDBError if the request fails."""
        _log.debug("About to fetch: %s", url)
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as response:
                return response.read()
        except (OSError, http.client.HTTPException) as exc:
            raise CDDBError(Result.SERVER_ERROR, str(exc)) from exc