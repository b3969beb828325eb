# cddbkit

A pure-Python library for the CDDB/freedb database of audio CD
information. It has no dependencies outside the standard library.

## What it does

- **Disc ids.** `cddbkit.cddb.track_offset_list_to_id(offsets)` computes
  the 8-digit hexadecimal CDDB disc id from a disc's track offsets;
  `track_offset_list_to_string(offsets)` gives the
  `<tracks> <offset>... <seconds>` part of a `cddb query` command, and
  `status_code(line)` reads the numeric status at the start of a server
  response line.
- **Records.** `cddbkit.cdinfo.CDInfo` and `TrackInfo` parse and write
  records in the CDDB (xmcd) text format: `DTITLE`, `DYEAR`, `DGENRE`,
  `TTITLEn`, `EXTD`, `EXTTn`, `PLAYORDER`, the `# Revision:` comment,
  and custom disc and track fields. Long values are split over several
  lines of at most 256 characters; `escape`, `unescape` and `create_line`
  are available on their own. Keys are case-insensitive; the common ones
  are also named by `InfoType`. Samplers (every track title in the form
  `Artist / Title`) get per-track artists.
  `CDInfo.to_string(submit=True)` writes only the standard fields.
- **Categories and genres.** `cddbkit.categories.Categories` maps the
  eleven CDDB categories (`blues`, `classical`, ..., `soundtrack`) to
  display names and back, falling back to `misc`.
  `cddbkit.genres.Genres` holds a list of common genre names; unknown
  genres pass through trimmed.
- **Local cache.** `cddbkit.cache.lookup(offsets, config)` returns every
  cached record for a disc, searching each directory in
  `config.cache_locations` under `<location>/<category>/<discid>` for the
  CDDB categories and `user`. `store(offsets, info, config)` and
  `store_all(offsets, infos, config)` write records into the first cache
  location: freedb records under their category, `musicbrainz` records
  under `musicbrainz/`, and everything else under `user/`, named by the
  disc id computed from the offsets.
- **Server lookups.** `cddbkit.cddbplookup.CDDBPLookup` looks a disc up
  over CDDBP (TCP, default port 8880), and
  `cddbkit.httplookup.HTTPLookup` through a server's
  `/~cddb/cddb.cgi` script over HTTP. Both query the server, read every
  match, and return the records as a list of `CDInfo`.
  `cddbkit.cddbplookup.CDDBPSession` is the CDDBP conversation on its
  own, without a socket: feed it each server line with `feed_line()` and
  send back the lines it returns. `cddbkit.httplookup.build_url` builds a
  CGI request URL.
- **Settings.** `cddbkit.config.Config` is a dataclass holding the
  server host and port, the transport (`Transport.CDDBP` or
  `Transport.HTTP`), cache locations and related settings. The e-mail
  address defaults to the `EMAIL` environment variable.

## Installation

```
pip install cddbkit
```

## Usage

Track offsets are the start frames (75 frames per second) of every
track, followed by the frame of the lead-out:

```python
from cddbkit.cddb import track_offset_list_to_id
from cddbkit.cdinfo import CDInfo

offsets = [150, 18901, 39234, 58302, 189412]
disc_id = track_offset_list_to_id(offsets)

info = CDInfo()
info.load("DISCID=0a0a0a04\nDTITLE=Some Artist / Some Album\nTTITLE0=Intro\n")
print(info.get("artist"), "-", info.get("title"))   # Some Artist - Some Album
print(info.track(0).get("title"))                    # Intro
print(info.to_string())
```

Looking a disc up on a server and caching what was found:

```python
from cddbkit import cache
from cddbkit.config import Config
from cddbkit.httplookup import HTTPLookup
from cddbkit.result import CDDBError, result_to_string

config = Config(cache_locations=["/tmp/cddb-cache"])

try:
    records = HTTPLookup().lookup("gnudb.gnudb.org", 80, offsets)
except CDDBError as error:
    print(result_to_string(error.result))
else:
    cache.store_all(offsets, records, config)
    for record in records:
        print(record.get("category"), record.get("title"))
```

Failed lookups raise `cddbkit.result.CDDBError`, whose `result` attribute
holds a `cddbkit.result.Result` value such as `NO_RECORD_FOUND`,
`SERVER_ERROR`, `HOST_NOT_FOUND` or `NO_RESPONSE`; `result_to_string`
turns it into a readable message.

## What it does not do

- It does not submit records to a server.
- It has no MusicBrainz lookup; the `music_brainz_lookup_enabled`
  setting of `Config` is not used by anything in the package.
- There is no client that tries the cache first and then the configured
  server: pick the lookup class and call the cache functions yourself.
- `Config` is not read from or saved to a configuration file.
- There is no command-line program or user interface.

## Running the tests

```
pip install -e ".[test]"
pytest
```