"""Lookups over CDDBP, the line-based CDDB protocol spoken over TCP."""

from __future__ import annotations

import enum
import logging
import socket
from typing import Sequence

from .cddb import status_code, track_offset_list_to_id, track_offset_list_to_string
from .cdinfo import CLIENT_NAME, CLIENT_VERSION, CDInfo
from .lookup import Lookup
from .result import CDDBError, Result

__all__ = ["CDDBPState", "CDDBPSession", "CDDBPLookup"]

_log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class CDDBPState(enum.Enum):
    """Where a CDDBP conversation currently stands."""

    IDLE = "Idle"
    WAITING_FOR_CONNECTION = "WaitingForConnection"
    WAITING_FOR_GREETING = "WaitingForGreeting"
    WAITING_FOR_HANDSHAKE = "WaitingForHandshake"
    WAITING_FOR_PROTO_RESPONSE = "WaitingForProtoResponse"
    WAITING_FOR_QUERY_RESPONSE = "WaitingForQueryResponse"
    WAITING_FOR_MORE_MATCHES = "WaitingForMoreMatches"
    WAITING_FOR_CD_INFO_RESPONSE = "WaitingForCDInfoResponse"
    WAITING_FOR_CD_INFO_DATA = "WaitingForCDInfoData"
    WAITING_FOR_QUIT_RESPONSE = "WaitingForQuitResponse"

    def __str__(self) -> str:
        return self.value


class CDDBPSession(Lookup):
    """One CDDBP conversation, independent of any socket.

    The session starts once the connection is up, waiting for the server's
    greeting. Each line the server sends goes to feed_line(), which returns
    the command lines to send back. The conversation is over when the state
    is IDLE; the outcome is then in ``result``.
    """

    def __init__(self, offsets: Sequence[int]) -> None:
        super().__init__()
        self.timeout = DEFAULT_TIMEOUT
        self._reset(offsets)

    def _reset(self, offsets: Sequence[int]) -> None:
        self.offsets = list(offsets)
        self.cd_info_list = []
        self.match_list = []
        self.category = ""
        self.discid = ""
        self.read_only = False
        self.state = CDDBPState.WAITING_FOR_GREETING
        self.result = Result.SUCCESS
        self._buffer: list[str] = []

    def lookup(
        self, hostname: str, port: int, offsets: Sequence[int]
    ) -> list[CDInfo]:
        """Run the conversation with a server; raise CDDBError on failure."""
        self._reset(offsets)
        _converse(self, hostname, port)
        if self.result is not Result.SUCCESS:
            raise CDDBError(self.result)
        return self.lookup_response()

    def feed_line(self, line: str) -> list[str]:
        """Handle one line from the server and return the lines to send."""
        line = line.rstrip("\r\n")
        _log.debug("Read in state %s: %r", self.state, line)

        match self.state:
            case CDDBPState.WAITING_FOR_GREETING:
                if not self._parse_greeting(line):
                    return self._fail(Result.SERVER_ERROR)
                self.state = CDDBPState.WAITING_FOR_HANDSHAKE
                return [
                    f"cddb hello {self.user} {self.local_host_name} "
                    f"{CLIENT_NAME} {CLIENT_VERSION}"
                ]
            case CDDBPState.WAITING_FOR_HANDSHAKE:
                if status_code(line) not in (200, 402):
                    _log.debug("Handshake refused by server")
                    return self._fail(Result.SERVER_ERROR)
                self.state = CDDBPState.WAITING_FOR_PROTO_RESPONSE
                return ["proto 6"]
            case CDDBPState.WAITING_FOR_PROTO_RESPONSE:
                # The response to proto is not checked.
                self.state = CDDBPState.WAITING_FOR_QUERY_RESPONSE
                return [
                    f"cddb query {track_offset_list_to_id(self.offsets)} "
                    f"{track_offset_list_to_string(self.offsets)}"
                ]
            case CDDBPState.WAITING_FOR_QUERY_RESPONSE:
                self.result = self.parse_query(line)
                if self.result is Result.SUCCESS:
                    return self._request_next()
                if self.result is Result.MULTIPLE_RECORD_FOUND:
                    self.state = CDDBPState.WAITING_FOR_MORE_MATCHES
                    return []
                return self._quit()
            case CDDBPState.WAITING_FOR_MORE_MATCHES:
                if line.startswith("."):
                    return self._request_next()
                self.parse_extra_match(line)
                return []
            case CDDBPState.WAITING_FOR_CD_INFO_RESPONSE:
                result = self.parse_read(line)
                if result is not Result.SUCCESS:
                    return self._fail(result)
                self.state = CDDBPState.WAITING_FOR_CD_INFO_DATA
                return []
            case CDDBPState.WAITING_FOR_CD_INFO_DATA:
                if line.startswith("."):
                    self._store_entry()
                    return self._request_next()
                self._buffer.append(line)
                return []
            case CDDBPState.WAITING_FOR_QUIT_RESPONSE:
                self.state = CDDBPState.IDLE
                return []
            case _:
                return []

    def _parse_greeting(self, line: str) -> bool:
        status = status_code(line)
        if status == 200:
            _log.debug("Server response: read-only")
            self.read_only = True
            return True
        if status == 201:
            _log.debug("Server response: read-write")
            return True
        _log.debug("Server refused the connection")
        return False

    def _fail(self, result: Result) -> list[str]:
        self.result = result
        return self._quit()

    def _quit(self) -> list[str]:
        self.state = CDDBPState.WAITING_FOR_QUIT_RESPONSE
        return ["quit"]

    def _request_next(self) -> list[str]:
        if not self.match_list:
            self.result = (
                Result.SUCCESS if self.cd_info_list else Result.NO_RECORD_FOUND
            )
            return self._quit()
        match = self.match_list.pop(0)
        self.category, self.discid = match.category, match.discid
        self.state = CDDBPState.WAITING_FOR_CD_INFO_RESPONSE
        return [f"cddb read {self.category} {self.discid}"]

    def _store_entry(self) -> None:
        info = CDInfo()
        info.load(self._buffer)
        info.set("category", self.category)
        info.set("discid", self.discid)
        info.set("source", "freedb")
        self.cd_info_list.append(info)
        self._buffer = []


def _converse(session: CDDBPSession, hostname: str, port: int) -> None:
    """Drive *session* over a TCP connection until it is idle."""
    try:
        with socket.create_connection(
            (hostname, port), timeout=session.timeout
        ) as sock, sock.makefile("rb") as reader:
            _log.debug("Connected to %s:%s", hostname, port)
            while session.state is not CDDBPState.IDLE:
                raw = reader.readline()
                if not raw:
                    if session.state is CDDBPState.WAITING_FOR_QUIT_RESPONSE:
                        session.state = CDDBPState.IDLE
                        break
                    raise CDDBError(Result.NO_RESPONSE, "connection closed by server")
                for command in session.feed_line(raw.decode("utf-8", errors="replace")):
                    _log.debug("WRITE: [%s]", command)
                    sock.sendall(command.encode("utf-8") + b"\n")
    except socket.gaierror as exc:
        raise CDDBError(Result.HOST_NOT_FOUND, str(exc)) from exc
    except TimeoutError as exc:
        raise CDDBError(Result.NO_RESPONSE, str(exc)) from exc
    except OSError as exc:
        raise CDDBError(Result.UNKNOWN_ERROR, str(exc)) from exc


class CDDBPLookup(Lookup):
    """Looks discs up on a server over CDDBP."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__()
        self.timeout = timeout

    def lookup(
        self, hostname: str, port: int, offsets: Sequence[int]
    ) -> list[CDInfo]:
        """Look the disc up; return its entries or raise CDDBError."""
        self.offsets = list(offsets)
        session = CDDBPSession(offsets)
        session.user = self.user
        session.local_host_name = self.local_host_name
        session.timeout = self.timeout
        try:
            return session.lookup(hostname, port, offsets)
        finally:
            self.cd_info_list = session.cd_info_list
            self.read_only = session.read_only