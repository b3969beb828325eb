import copy

import pytest

from cddbkit.cdinfo import (
    CDInfo,
    InfoType,
    TrackInfo,
    create_line,
    escape,
    unescape,
)

SAMPLE = """# xmcd
#
# Revision: 3
DISCID=abcd1234
DTITLE=Some Artist / Some Album
DYEAR=1999
DGENRE=Rock
TTITLE0=First
TTITLE1=Second
EXTD=Disc comment
EXTT0=Track comment
EXTT1=
PLAYORDER=
"""


def loaded(text=SAMPLE):
    info = CDInfo()
    info.load(text)
    return info


def test_escape_rules():
    assert escape("a\nb") == "a\\nb"
    assert escape("a\tb") == "a\\tb"
    assert escape("a\\b") == "a\\\\b"


@pytest.mark.parametrize("text", ["plain", "a\nb\tc", "back\\slash", ""])
def test_escape_round_trip(text):
    assert unescape(escape(text)) == text


def test_create_line_short():
    assert create_line("DTITLE", "x") == "DTITLE=x\n"


def test_create_line_splits_long_values():
    value = "a" * 300
    out = create_line("EXTD", value)
    lines = out.splitlines()
    assert len(lines) == 2
    assert all(len(line) <= 256 for line in lines)
    assert "".join(line[len("EXTD="):] for line in lines) == value


def test_create_line_rejects_long_name():
    with pytest.raises(ValueError):
        create_line("N" * 254, "x")


def test_load_basic_fields():
    info = loaded()
    assert info.get(InfoType.ARTIST) == "Some Artist"
    assert info.get(InfoType.TITLE) == "Some Album"
    assert info.get(InfoType.YEAR) == "1999"
    assert info.get(InfoType.GENRE) == "Rock"
    assert info.get(InfoType.COMMENT) == "Disc comment"
    assert info.get("discid") == "abcd1234"
    assert info.get("revision") == 3
    assert info.number_of_tracks() == 2


def test_load_tracks():
    info = loaded()
    assert info.track(0).get(InfoType.TITLE) == "First"
    assert info.track(1).get(InfoType.TITLE) == "Second"
    assert info.track(0).get(InfoType.COMMENT) == "Track comment"
    assert info.track(1).get(InfoType.ARTIST) == "Some Artist"
    assert info.track(1).get("tracknumber") == 1


def test_load_from_list_of_lines():
    assert loaded(SAMPLE.splitlines()) == loaded()


def test_load_handles_crlf():
    assert loaded(SAMPLE.replace("\n", "\r\n")) == loaded()


def test_sampler_splits_track_artists():
    info = loaded("DTITLE=Various / Hits\nTTITLE0=A / X\nTTITLE1=B / Y\n")
    assert info.track(0).get(InfoType.ARTIST) == "A"
    assert info.track(0).get(InfoType.TITLE) == "X"
    assert info.track(1).get(InfoType.ARTIST) == "B"
    assert info.track(1).get(InfoType.TITLE) == "Y"


def test_not_sampler_when_one_track_lacks_separator():
    info = loaded("DTITLE=Various / Hits\nTTITLE0=A / X\nTTITLE1=Plain\n")
    assert info.track(0).get(InfoType.TITLE) == "A / X"
    assert info.track(0).get(InfoType.ARTIST) == "Various"


def test_dtitle_without_separator_is_artist_and_title():
    info = loaded("DTITLE=Only\n")
    assert info.get(InfoType.ARTIST) == "Only"
    assert info.get(InfoType.TITLE) == "Only"


def test_continuation_lines_are_concatenated():
    info = loaded("DTITLE=Some Art\nDTITLE=ist / Album\nTTITLE0=Fi\nTTITLE0=rst\n")
    assert info.get(InfoType.ARTIST) == "Some Artist"
    assert info.track(0).get(InfoType.TITLE) == "First"


def test_missing_genre_defaults_to_unknown():
    assert loaded("DTITLE=A / B\n").get(InfoType.GENRE) == "Unknown"


def test_round_trip_through_text():
    info = loaded()
    again = CDInfo()
    again.load(info.to_string())
    assert again == info


def test_to_string_contains_expected_lines():
    text = loaded().to_string()
    assert text.startswith("# Revision: 3\n")
    assert "DTITLE=Some Artist / Some Album\n" in text
    assert "DYEAR=1999\n" in text
    assert "TTITLE1=Second\n" in text


def test_to_string_for_submission():
    text = loaded().to_string(submit=True)
    assert "# Submitted via: libkcddb 0.5\n" in text
    assert text.endswith("PLAYORDER=\n")


def test_new_info_has_no_revision_line_and_empty_year():
    text = CDInfo().to_string()
    assert "# Revision" not in text
    assert "DYEAR=\n" in text


def test_custom_disc_data_round_trip():
    info = loaded()
    info.set("mykey", "value")
    text = info.to_string()
    assert "MYKEY=value\n" in text
    assert loaded(text).get("mykey") == "value"


def test_source_is_not_written():
    info = loaded()
    info.set("source", "freedb")
    assert "SOURCE" not in info.to_string()


def test_custom_track_data_round_trip():
    info = loaded()
    info.track(0).set("foo", "bar")
    text = info.to_string()
    assert "TFOO_0=bar\n" in text
    assert loaded(text).track(0).get("foo") == "bar"


def test_sampler_output():
    info = CDInfo()
    info.set(InfoType.ARTIST, "Various")
    info.track(0).set(InfoType.ARTIST, "A")
    info.track(0).set(InfoType.TITLE, "X")
    info.track(1).set(InfoType.TITLE, "Y")
    text = info.to_string()
    assert "TTITLE0=A / X\n" in text
    assert "TTITLE1=Various / Y\n" in text


def test_long_and_escaped_values_round_trip():
    info = loaded()
    info.set(InfoType.COMMENT, "x" * 600 + "\nnext\tline")
    assert loaded(info.to_string()).get(InfoType.COMMENT) == info.get(InfoType.COMMENT)


def test_reserved_keys_are_rejected():
    info = CDInfo()
    with pytest.raises(ValueError):
        info.set("dtitle", "x")
    with pytest.raises(ValueError):
        info.set("Tfoo_bar", "x")


def test_get_is_case_insensitive():
    info = CDInfo()
    info.set("Title", "Album")
    assert info.get("TITLE") == "Album"
    assert info.get(InfoType.TITLE) == "Album"
    assert info.get("missing") is None


@pytest.mark.parametrize("discid,valid", [(None, False), ("0", False), ("abc", True)])
def test_is_valid(discid, valid):
    info = CDInfo()
    if discid is not None:
        info.set("discid", discid)
    assert info.is_valid() is valid


def test_track_creates_missing_tracks():
    info = CDInfo()
    info.track(2)
    assert info.number_of_tracks() == 3
    assert [info.track(n).get("tracknumber") for n in range(3)] == [0, 1, 2]


def test_negative_track_raises():
    with pytest.raises(IndexError):
        CDInfo().track(-1)


def test_clear_removes_everything():
    info = loaded()
    info.clear()
    assert info.number_of_tracks() == 0
    assert info.get(InfoType.TITLE) is None


def test_track_clear_and_equality():
    first = TrackInfo()
    first.set("title", "x")
    second = TrackInfo()
    assert first != second
    first.clear()
    assert first == second


def test_copy_is_independent():
    info = loaded()
    clone = copy.copy(info)
    clone.track(0).set(InfoType.TITLE, "Changed")
    clone.set("discid", "other")
    assert info.track(0).get(InfoType.TITLE) == "First"
    assert info.get("discid") == "abcd1234"


def test_track_to_string_skips_standard_fields():
    track = TrackInfo()
    track.set("tracknumber", 4)
    track.set(InfoType.TITLE, "Song")
    track.set("extra", "data")
    assert track.to_string() == "TEXTRA_4=data\n"