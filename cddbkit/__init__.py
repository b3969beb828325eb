"""CDDB disc ids, record parsing and writing, a local cache, and CDDBP/HTTP lookups."""

__version__ = "0.5.0"