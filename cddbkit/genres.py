"""A list of common genres with display names."""

from __future__ import annotations

__all__ = ["Genres"]

_CDDB = (
    "Unknown", "A Cappella", "Acid Jazz",
    "Acid Punk", "Acid", "Acoustic", "Alternative",
    "Alt. Rock", "Ambient", "Anime", "Avantgarde",
    "Ballad", "Bass", "Beat", "Bebop",
    "Big Band", "Black Metal", "Bluegrass", "Blues",
    "Booty Bass", "BritPop", "Cabaret", "Celtic",
    "Chamber Music", "Chanson", "Chorus", "Christian Gangsta Rap",
    "Christian Rap", "Christian Rock", "Classical", "Classic Rock",
    "Club-house", "Club", "Comedy", "Contemporary Christian",
    "Country", "Crossover", "Cult", "Dance Hall",
    "Dance", "Darkwave", "Death Metal", "Disco",
    "Dream", "Drum & Bass", "Drum Solo", "Duet",
    "Easy Listening", "Electronic", "Ethnic", "Eurodance",
    "Euro-House", "Euro-Techno", "Fast-Fusion", "Folklore",
    "Folk/Rock", "Folk", "Freestyle", "Funk",
    "Fusion", "Game", "Gangsta Rap", "Goa",
    "Gospel", "Gothic Rock", "Gothic", "Grunge",
    "Hardcore", "Hard Rock", "Heavy Metal", "Hip-Hop",
    "House", "Humor", "Indie", "Industrial",
    "Instrumental Pop", "Instrumental Rock", "Instrumental", "Jazz+Funk",
    "Jazz", "JPop", "Jungle", "Latin", "Lo-Fi",
    "Meditative", "Merengue", "Metal", "Musical",
    "National Folk", "Native American", "Negerpunk", "New Age",
    "New Wave", "Noise", "Oldies", "Opera",
    "Other", "Polka", "Polsk Punk", "Pop-Funk",
    "Pop/Funk", "Pop", "Porn Groove", "Power Ballad",
    "Pranks", "Primus", "Progressive Rock", "Psychedelic Rock",
    "Psychedelic", "Punk Rock", "Punk", "R&B",
    "Rap", "Rave", "Reggae", "Retro",
    "Revival", "Rhythmic Soul", "Rock & Roll", "Rock",
    "Salsa", "Samba", "Satire", "Showtunes",
    "Ska", "Slow Jam", "Slow Rock", "Sonata",
    "Soul", "Sound Clip", "Soundtrack", "Southern Rock",
    "Space", "Speech", "Swing", "Symphonic Rock",
    "Symphony", "Synthpop", "Tango", "Techno-Industrial",
    "Techno", "Terror", "Thrash Metal", "Top 40",
    "Trailer", "Trance", "Tribal", "Trip-Hop",
    "Vocal",
)


class Genres:
    """Maps genre names to display names and back; unknown genres pass through."""

    def __init__(self) -> None:
        self._cddb = list(_CDDB)
        # Display names are the untranslated genre names.
        self._i18n = list(_CDDB)

    def cddb_list(self) -> list[str]:
        """Return the genre names as stored in CDDB entries."""
        return list(self._cddb)

    def i18n_list(self) -> list[str]:
        """Return the display names, in the same order as cddb_list()."""
        return list(self._i18n)

    def cddb_to_i18n(self, genre: str) -> str:
        """Return the display name of *genre*, or the trimmed genre if unknown."""
        name = genre.strip()
        try:
            return self._i18n[self._cddb.index(name)]
        except ValueError:
            return name

    def i18n_to_cddb(self, genre: str) -> str:
        """Return the CDDB name of a display name, or the trimmed input if unknown."""
        name = genre.strip()
        try:
            return self._cddb[self._i18n.index(name)]
        except ValueError:
            return name