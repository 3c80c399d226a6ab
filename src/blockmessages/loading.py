"""Source loading infrastructure for MessageResolver.

Provides the protocol for message source loaders, a filesystem JSON
implementation with path-traversal security, an in-memory loader for
inline data and fixtures, and result/summary data structures for tracking
load attempts.

Components:
    SourceLoader - Protocol for loading parsed key/value sources (structural typing)
    JsonFileLoader - Disk-based JSON loader with path-traversal prevention
    MappingLoader - In-memory loader over already-parsed mappings
    LoadResult - Immutable result of one merge into a resolver table
    ResourceLoadResult - Immutable record of a single bootstrap load attempt
    LoadSummary - Immutable aggregate of bootstrap load attempts

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from blockmessages.constants import MAX_SOURCE_SIZE
from blockmessages.enums import LoadStatus, TableKind
from blockmessages.types import RawEntries, ResourceId

if TYPE_CHECKING:
    from blockmessages.diagnostics import Diagnostic

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "SourceLoader",
    # Concrete loaders
    "JsonFileLoader",
    "MappingLoader",
    # Load result types
    "LoadResult",
    "ResourceLoadResult",
    "LoadSummary",
]


class SourceLoader(Protocol):
    """Protocol for loading parsed message sources.

    Implementations return a string-keyed mapping of scalar values for a
    resource identifier. The resolver validates individual values itself;
    a loader only has to produce the mapping or fail.

    Failure contract:
        FileNotFoundError: the resource does not exist
        ValueError: the resource exists but is not a decodable mapping
        OSError: the resource exists but cannot be read

    Any object with matching methods qualifies; no base class is needed.

    Example:
        >>> class ZipLoader:
        ...     def __init__(self, archive: zipfile.ZipFile) -> None:
        ...         self._archive = archive
        ...     def load(self, resource_id: str) -> Mapping[str, object]:
        ...         try:
        ...             return json.loads(self._archive.read(resource_id))
        ...         except KeyError as e:
        ...             raise FileNotFoundError(resource_id) from e
        ...     def describe_path(self, resource_id: str) -> str:
        ...         return f"{self._archive.filename}!{resource_id}"
        ...
        >>> resolver = MessageResolver(ZipLoader(zipfile.ZipFile("msg.zip")))
    """

    def load(self, resource_id: ResourceId) -> RawEntries:
        """Load and decode a resource.

        Args:
            resource_id: Resource identifier (e.g., 'bky_messages.json')

        Returns:
            Mapping of raw keys to decoded values

        Raises:
            FileNotFoundError: If the resource doesn't exist
            ValueError: If the content is not a decodable mapping
            OSError: If the resource cannot be read
        """

    def describe_path(self, resource_id: ResourceId) -> str:
        """Return human-readable path for diagnostics.

        Default implementation returns the resource identifier unchanged.
        Override in concrete loaders that know the physical location.
        """
        return resource_id


@dataclass(frozen=True, slots=True)
class JsonFileLoader:
    """File system loader for JSON message files.

    Implements SourceLoader by reading ``<base_path>/<resource_id>`` as
    UTF-8 JSON. Resource identifiers may contain subdirectories, which is
    how locale overlays are addressed (e.g., 'de/bky_messages.json').

    Security:
        Resource IDs containing "..", absolute paths, leading separators or
        surrounding whitespace are rejected. All resolved paths are validated
        against a fixed root directory. Files larger than max_size are
        rejected before being read.

    Example:
        >>> loader = JsonFileLoader("msg/json")
        >>> entries = loader.load("bky_messages.json")
        # Loads from: msg/json/bky_messages.json

    Attributes:
        base_path: Directory holding the JSON files
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to base_path.
        max_size: Maximum accepted file size in bytes
    """

    base_path: str
    root_dir: str | None = None
    max_size: int = MAX_SOURCE_SIZE
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory at initialization.

        Raises:
            ValueError: If max_size is not positive
        """
        if self.max_size <= 0:
            msg = f"max_size must be positive, got {self.max_size}"
            raise ValueError(msg)
        root = self.root_dir if self.root_dir is not None else self.base_path
        object.__setattr__(self, "_resolved_root", Path(root).resolve())

    @staticmethod
    def _validate_resource_id(resource_id: ResourceId) -> None:
        """Reject resource ids that could address files outside base_path.

        Raises:
            ValueError: If resource_id is empty, padded with whitespace,
                       absolute, or contains a leading separator or ".."
        """
        if not resource_id:
            msg = "Empty resource id"
            raise ValueError(msg)
        if resource_id != resource_id.strip():
            msg = f"Whitespace around resource id {resource_id!r}"
            raise ValueError(msg)
        if resource_id[0] in "/\\" or Path(resource_id).is_absolute():
            msg = f"Resource id {resource_id!r} must be relative to the base path"
            raise ValueError(msg)
        if ".." in resource_id:
            msg = f"Parent directory reference in resource id {resource_id!r}"
            raise ValueError(msg)

    @staticmethod
    def _is_safe_path(root: Path, candidate: Path) -> bool:
        """Check that candidate, with symlinks resolved, lies under root."""
        return candidate.resolve().is_relative_to(root)

    def describe_path(self, resource_id: ResourceId) -> str:
        """Return the joined path string used for diagnostics."""
        base = self.base_path.rstrip("/\\")
        return f"{base}/{resource_id}"

    def load(self, resource_id: ResourceId) -> RawEntries:
        """Load and decode a JSON file from disk.

        Args:
            resource_id: File name relative to base_path

        Returns:
            Decoded top-level JSON object

        Raises:
            ValueError: If resource_id is unsafe, the file is too large,
                       is not valid UTF-8 JSON, or its top level is not an object
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
        """
        self._validate_resource_id(resource_id)

        full_path = (Path(self.base_path).resolve() / resource_id).resolve()
        if not self._is_safe_path(self._resolved_root, full_path):
            msg = f"Path traversal detected: {resource_id!r} resolves outside {self._resolved_root}"
            raise ValueError(msg)

        size = full_path.stat().st_size
        if size > self.max_size:
            msg = f"Source exceeds maximum size ({size} > {self.max_size} bytes): '{resource_id}'"
            raise ValueError(msg)

        data = json.loads(full_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            msg = (
                f"Expected a JSON object at the top level of '{resource_id}', "
                f"got {type(data).__name__}"
            )
            raise ValueError(msg)
        return data


@dataclass(frozen=True, slots=True)
class MappingLoader:
    """In-memory loader serving already-parsed mappings.

    Lets callers feed inline data or test fixtures through the same
    resource-id based load path as files.

    Example:
        >>> loader = MappingLoader({"bky_messages.json": {"HELLO": "Hello"}})
        >>> resolver = MessageResolver(loader)
        >>> resolver.load_translations("bky_", "bky_messages.json")
    """

    resources: Mapping[ResourceId, RawEntries]

    def describe_path(self, resource_id: ResourceId) -> str:
        """Return a pseudo-path marking the resource as in-memory."""
        return f"<memory>/{resource_id}"

    def load(self, resource_id: ResourceId) -> RawEntries:
        """Return the stored mapping for resource_id.

        Raises:
            FileNotFoundError: If no mapping is registered under resource_id
        """
        try:
            return self.resources[resource_id]
        except KeyError:
            msg = f"No in-memory resource named '{resource_id}'"
            raise FileNotFoundError(msg) from None


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Result of merging one batch of entries into a resolver table.

    Attributes:
        table: Table the batch was merged into
        loaded: Number of entries written
        skipped: Diagnostics for entries dropped as malformed
        resource_id: Source resource (None for inline mappings)
        source_path: Human-readable location reported by the loader
    """

    table: TableKind
    loaded: int
    skipped: tuple[Diagnostic, ...] = ()
    resource_id: ResourceId | None = None
    source_path: str | None = None

    @property
    def skipped_count(self) -> int:
        """Number of entries dropped as malformed."""
        return len(self.skipped)

    @property
    def is_clean(self) -> bool:
        """Check if every entry of the batch was accepted."""
        return not self.skipped


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of one load attempt during default resource bootstrap.

    Attributes:
        table: Table the resource targets
        resource_id: Resource identifier (e.g., 'de/bky_messages.json')
        status: Load status (success, not_found, error)
        error: Exception if status is NOT_FOUND or ERROR, None otherwise
        source_path: Human-readable path to resource (if available)
        skipped: Diagnostics for malformed entries dropped from the resource
    """

    table: TableKind
    resource_id: ResourceId
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None
    skipped: tuple[Diagnostic, ...] = ()

    @property
    def is_success(self) -> bool:
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if resource was not found (expected for optional overlays)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Found but unreadable or undecodable."""
        return self.status == LoadStatus.ERROR

    @property
    def has_skipped(self) -> bool:
        return bool(self.skipped)


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable record of a default resource bootstrap.

    Counts and filters are derived from ``results`` on access.

    Attributes:
        results: Load attempts in the order they were made

    Example:
        >>> resolver, summary = create_default_resolver(loader, locale="de")
        >>> for result in summary.get_errors():
        ...     log.error("%s: %s", result.source_path, result.error)
    """

    results: tuple[ResourceLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, ok={self.successful}, "
            f"not_found={self.not_found}, errors={self.errors}, "
            f"skipped={self.skipped_count})"
        )

    def _with_status(self, status: LoadStatus) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.status == status)

    @property
    def total_attempted(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return len(self._with_status(LoadStatus.SUCCESS))

    @property
    def not_found(self) -> int:
        return len(self._with_status(LoadStatus.NOT_FOUND))

    @property
    def errors(self) -> int:
        return len(self._with_status(LoadStatus.ERROR))

    @property
    def skipped_count(self) -> int:
        """Malformed entries dropped across all resources."""
        return sum(len(r.skipped) for r in self.results)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        return self._with_status(LoadStatus.ERROR)

    def get_not_found(self) -> tuple[ResourceLoadResult, ...]:
        return self._with_status(LoadStatus.NOT_FOUND)

    def get_successful(self) -> tuple[ResourceLoadResult, ...]:
        return self._with_status(LoadStatus.SUCCESS)

    def get_by_table(self, table: TableKind) -> tuple[ResourceLoadResult, ...]:
        """Results of loads into one table."""
        return tuple(r for r in self.results if r.table == table)

    def get_with_skipped(self) -> tuple[ResourceLoadResult, ...]:
        """Results that dropped at least one malformed entry."""
        return tuple(r for r in self.results if r.has_skipped)

    @property
    def has_errors(self) -> bool:
        return any(r.is_error for r in self.results)

    @property
    def all_successful(self) -> bool:
        """True if every attempted resource was found and merged.

        Resources with dropped entries still count; see all_clean.
        """
        return all(r.is_success for r in self.results)

    @property
    def all_clean(self) -> bool:
        """True if all_successful holds and no entry was dropped."""
        return self.all_successful and self.skipped_count == 0
