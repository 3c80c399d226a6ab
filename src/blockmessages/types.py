"""Type aliases for the message table domain.

Provides semantic type aliases used throughout the package and by user
code when annotating MessageResolver call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import TypeAlias

__all__ = [
    "LocaleCode",
    "MessageKey",
    "RawEntries",
    "ResourceId",
]

MessageKey: TypeAlias = str
"""Raw or normalized message key (e.g., 'bky_controls_if_msg_if')."""

LocaleCode: TypeAlias = str
"""BCP-47 or POSIX locale code (e.g., 'de', 'pt-BR', 'zh_Hans_CN')."""

ResourceId: TypeAlias = str
"""Loader resource identifier (e.g., 'bky_messages.json', 'de/bky_messages.json')."""

RawEntries: TypeAlias = Mapping[str, object]
"""Parsed key/value data as produced by a SourceLoader, before validation."""
