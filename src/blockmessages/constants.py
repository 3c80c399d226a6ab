"""Shared constants for blockmessages.

Centralized configuration values used by the resolver, the loaders and
the default resource bootstrap.

Constants are grouped by domain:
- Entry handling: reserved keys skipped during loads
- Default resources: the bundled message files and their prefix
- Input limits: size bounds on loaded sources
- Locale detection: environment lookup order and fallback
- Logging: truncation of logged values

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Entry handling
    "METADATA_KEY",
    # Default resources
    "DEFAULT_PREFIX",
    "DEFAULT_TRANSLATION_RESOURCES",
    "DEFAULT_SYNONYM_RESOURCES",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Locale detection
    "FALLBACK_LOCALE",
    "LOCALE_ENV_VARS",
    # Logging
    "LOG_TRUNCATE_LENGTH",
]

# ============================================================================
# ENTRY HANDLING
# ============================================================================

# Reserved key in translation files holding authorship/metadata objects.
# Never inserted into the translation table, even when its value is a string.
METADATA_KEY: str = "@metadata"

# ============================================================================
# DEFAULT RESOURCES
# ============================================================================

# Prefix applied to every key loaded from the default resources.
DEFAULT_PREFIX: str = "bky_"

# Loaded in order; later files override earlier ones on key collisions.
DEFAULT_TRANSLATION_RESOURCES: tuple[str, ...] = (
    "bky_constants.json",
    "bky_messages.json",
)

DEFAULT_SYNONYM_RESOURCES: tuple[str, ...] = ("bky_synonyms.json",)

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum source file size in bytes (10 MB).
# Message catalogs are far below this; anything larger is rejected unread.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# LOCALE DETECTION
# ============================================================================

# Environment variables consulted for the system locale, highest priority first.
LOCALE_ENV_VARS: tuple[str, ...] = ("LC_ALL", "LC_MESSAGES", "LANG")

# Used when neither the OS nor the environment names a real locale.
FALLBACK_LOCALE: str = "en_US"

# ============================================================================
# LOGGING
# ============================================================================

# Maximum characters of a key or value echoed into log records.
LOG_TRUNCATE_LENGTH: int = 80
