"""Database module - PostgreSQL reads and row normalization.

The connection functions live in observatorio.database.connection; they are
not re-exported here because the models import the normalization helpers.
"""

from observatorio.database.normalization import (
    FIELD_ALIASES,
    normalize_row,
    normalize_table,
    normalize_party,
    get_party_color,
    parse_tags,
)

__all__ = [
    "FIELD_ALIASES",
    "normalize_row",
    "normalize_table",
    "normalize_party",
    "get_party_color",
    "parse_tags",
]
