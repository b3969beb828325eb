"""The fixed set of CDDB categories and their display names."""

from __future__ import annotations

__all__ = ["Categories"]

_CDDB = (
    "blues",
    "classical",
    "country",
    "data",
    "folk",
    "jazz",
    "misc",
    "newage",
    "reggae",
    "rock",
    "soundtrack",
)

_DISPLAY = (
    "Blues",
    "Classical",
    "Country",
    "Data",
    "Folk",
    "Jazz",
    "Miscellaneous",
    "New Age",
    "Reggae",
    "Rock",
    "Soundtrack",
)


class Categories:
    """Maps the eleven CDDB categories to display names and back."""

    def __init__(self) -> None:
        self._cddb = list(_CDDB)
        self._i18n = list(_DISPLAY)

    def cddb_list(self) -> list[str]:
        """Return the CDDB category names."""
        return list(self._cddb)

    def i18n_list(self) -> list[str]:
        """Return the display names, in the same order as cddb_list()."""
        return list(self._i18n)

    def cddb_to_i18n(self, category: str) -> str:
        """Return the display name of *category*, or that of 'misc' if unknown."""
        try:
            return self._i18n[self._cddb.index(category.strip())]
        except ValueError:
            return self._i18n[self._cddb.index("misc")]

    def i18n_to_cddb(self, category: str) -> str:
        """Return the CDDB name for a display name, or 'misc' if unknown."""
        try:
            return self._cddb[self._i18n.index(category.strip())]
        except ValueError:
            return "misc"