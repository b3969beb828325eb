import threading
import urllib.parse
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from cddbkit.cddb import track_offset_list_to_id, track_offset_list_to_string
from cddbkit.cdinfo import CLIENT_NAME, CLIENT_VERSION, InfoType
from cddbkit.httplookup import CGI_PATH, HTTPLookup, build_url
from cddbkit.lookup import CDDBMatch
from cddbkit.result import CDDBError, Result

OFFSETS = [150, 20000, 45000]
DISCID = track_offset_list_to_id(OFFSETS)


def test_build_url_layout():
    cmd = "cddb read rock 12345678"
    url = build_url("cddb.example.com", 8080, cmd)
    parts = urllib.parse.urlsplit(url)
    assert parts.scheme == "http"
    assert parts.netloc == "cddb.example.com:8080"
    assert parts.path == CGI_PATH
    assert urllib.parse.parse_qsl(parts.query) == [
        ("cmd", cmd),
        ("hello", f"libkcddb-user localHost {CLIENT_NAME} {CLIENT_VERSION}"),
        ("proto", "6"),
    ]
    assert "+" not in parts.query
    assert "%20" in parts.query


def test_query_single_match():
    lookup = HTTPLookup()
    result = lookup.handle_query_response(b"200 rock 12345678 Artist / Album\r\n")
    assert result is Result.SUCCESS
    assert lookup.match_list == [CDDBMatch("rock", "12345678")]


def test_query_multiple_matches():
    lookup = HTTPLookup()
    data = b"211 close matches\nrock aaaa1111 A / B\nblues bbbb2222 C / D\n.\n"
    assert lookup.handle_query_response(data) is Result.SUCCESS
    assert lookup.match_list == [
        CDDBMatch("rock", "aaaa1111"),
        CDDBMatch("blues", "bbbb2222"),
    ]


def test_query_no_match_and_error():
    lookup = HTTPLookup()
    assert lookup.handle_query_response(b"202 No match\n") is Result.NO_RECORD_FOUND
    assert lookup.handle_query_response(b"500 broken\n") is Result.SERVER_ERROR
    assert lookup.match_list == []


def test_empty_query_response_has_no_matches():
    lookup = HTTPLookup()
    assert lookup.handle_query_response(b"") is Result.SUCCESS
    assert lookup.match_list == []


def test_read_response_adds_entry():
    lookup = HTTPLookup()
    lookup.category, lookup.discid = "jazz", DISCID
    info = lookup.handle_read_response(
        b"210 jazz entry\nDTITLE=Band / Record\nTTITLE0=Intro\n.\n"
    )
    assert lookup.lookup_response() == [info]
    assert info.get("category") == "jazz"
    assert info.get("discid") == DISCID
    assert info.get("source") == "freedb"
    assert info.get(InfoType.ARTIST) == "Band"
    assert info.track(0).get(InfoType.TITLE) == "Intro"


class _CGIHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        parts = urllib.parse.urlsplit(self.path)
        params = dict(urllib.parse.parse_qsl(parts.query))
        cmd = params.get("cmd", "")
        self.server.commands.append(cmd)
        if self.server.fail or parts.path != CGI_PATH:
            self.send_error(404)
            return
        if cmd.startswith("cddb query"):
            body = self.server.query_reply
        else:
            body = f"210 rock {DISCID}\nDTITLE=Artist / Album\nTTITLE0=First\n.\n"
        payload = body.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    srv = ThreadingHTTPServer(("127.0.0.1", 0), _CGIHandler)
    srv.commands = []
    srv.fail = False
    srv.query_reply = f"200 rock {DISCID} Artist / Album\n"
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.shutdown()
    srv.server_close()


def test_lookup_over_http(server):
    host, port = server.server_address
    lookup = HTTPLookup(timeout=5)
    infos = lookup.lookup(host, port, OFFSETS)
    assert len(infos) == 1
    assert infos[0].get(InfoType.TITLE) == "Album"
    assert infos[0].get("category") == "rock"
    assert lookup.result is Result.SUCCESS
    assert server.commands == [
        f"cddb query {DISCID} {track_offset_list_to_string(OFFSETS)}",
        f"cddb read rock {DISCID}",
    ]


def test_lookup_no_record(server):
    server.query_reply = "202 No match\n"
    host, port = server.server_address
    with pytest.raises(CDDBError) as err:
        HTTPLookup(timeout=5).lookup(host, port, OFFSETS)
    assert err.value.result is Result.NO_RECORD_FOUND


def test_fetch_failure_is_server_error(server):
    server.fail = True
    host, port = server.server_address
    lookup = HTTPLookup(timeout=5)
    with pytest.raises(CDDBError) as err:
        lookup.fetch(build_url(host, port, "cddb query x"))
    assert err.value.result is Result.SERVER_ERROR