"""Enumerations for blockmessages type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class TableKind(StrEnum):
    """Which resolver table a load operation targets.

    StrEnum provides automatic string conversion: str(TableKind.SYNONYMS) == "synonyms"
    """

    TRANSLATIONS = "translations"
    """Key to message table."""

    SYNONYMS = "synonyms"
    """Alias key to canonical key table."""


class LoadStatus(StrEnum):
    """Outcome of a single resource load attempt.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Resource found, decoded and merged."""

    NOT_FOUND = "not_found"
    """Resource does not exist (expected for optional locale overlays)."""

    ERROR = "error"
    """Resource exists but could not be read or decoded."""


__all__ = [
    "LoadStatus",
    "TableKind",
]
