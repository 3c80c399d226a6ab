"""blockmessages - Message string resolution for block-based programming toolkits.

Resolves human-readable message strings by key. Keys are case-insensitive,
sources are loaded in prefixed batches that override earlier values, and
synonym keys redirect to a shared canonical message.

Public API:
    MessageResolver - Translation and synonym tables with thread-safe lookup
    JsonFileLoader - Load JSON message files from a directory
    MappingLoader - Serve already-parsed mappings through the loader interface
    SourceLoader - Protocol for custom loaders
    create_default_resolver - Resolver populated with the default bky_ message files
    normalize_key - Canonical lookup form of a key

Exceptions:
    MessageTableError - Base exception class
    ResourceNotFoundError - Named source does not exist
    SourceParseError - Source exists but cannot be decoded into a mapping

Submodules:
    blockmessages.diagnostics - Diagnostic records, codes and formatting
    blockmessages.loading - Loaders and load result types
    blockmessages.locale_utils - Locale normalization and overlay chains
    blockmessages.defaults - Default resource bootstrap
"""

from .defaults import create_default_resolver, load_default_resources
from .diagnostics import (
    Diagnostic,
    DiagnosticCode,
    MessageTableError,
    ResourceNotFoundError,
    SourceParseError,
)
from .keys import normalize_key
from .loading import JsonFileLoader, LoadResult, LoadSummary, MappingLoader, SourceLoader
from .runtime import MessageResolver

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("blockmessages")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "JsonFileLoader",
    "LoadResult",
    "LoadSummary",
    "MappingLoader",
    "MessageResolver",
    "MessageTableError",
    "ResourceNotFoundError",
    "SourceLoader",
    "SourceParseError",
    "__version__",
    "create_default_resolver",
    "load_default_resources",
    "normalize_key",
]
