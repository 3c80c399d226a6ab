"""Hypothesis strategies for blockmessages property-based testing.

Usage:
    from tests.strategies import message_keys, prefixes, raw_entries
"""

from .messages import (
    json_scalars,
    message_keys,
    message_values,
    prefixes,
    raw_entries,
    synonym_entries,
)

__all__ = [
    "json_scalars",
    "message_keys",
    "message_values",
    "prefixes",
    "raw_entries",
    "synonym_entries",
]
