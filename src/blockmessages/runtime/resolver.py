"""Message resolution with translation and synonym tables.

MessageResolver owns two tables:

- translations: normalized key -> message string
- synonyms: normalized alias key -> normalized canonical key

Lookups try the translation table first and fall back to exactly one
synonym hop. Loads are batch overwrites: every accepted entry replaces
whatever the key held before, with no merging and no collision checks.

Loading Behavior:
    Each load call validates its entries into a batch first, then applies
    the batch under the write lock in a single update. Concurrent lookups
    therefore observe the table before or after a batch, never a partial
    write. Entries whose value is not a string are dropped individually
    and reported through the diagnostic sink; the rest of the batch is
    still applied. Resource-id based loads fetch their source through the
    injected SourceLoader before anything is applied, so a missing or
    undecodable source leaves both tables untouched.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from blockmessages.constants import LOG_TRUNCATE_LENGTH, METADATA_KEY
from blockmessages.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    ResourceNotFoundError,
    SourceParseError,
)
from blockmessages.enums import TableKind
from blockmessages.keys import normalize_key, prefixed_key
from blockmessages.loading import LoadResult
from blockmessages.runtime.rwlock import RWLock

if TYPE_CHECKING:
    from blockmessages.loading import SourceLoader
    from blockmessages.types import MessageKey, RawEntries, ResourceId

__all__ = ["MessageResolver"]

logger = logging.getLogger(__name__)

_INLINE_SOURCE = "<inline>"


class MessageResolver:
    """Case-insensitive message table with synonym redirection.

    Construct one per application (or per test) and share it; there is no
    implicit global instance. All methods are thread-safe.

    Example - Inline data:
        >>> resolver = MessageResolver()
        >>> resolver.merge_translations("p_", {"b": "hello"})
        >>> resolver.merge_synonyms("p_", {"a": "b"})
        >>> resolver.translation("P_A")
        'hello'

    Example - Loader-backed:
        >>> resolver = MessageResolver(JsonFileLoader("msg/json"))
        >>> resolver.load_translations("bky_", "bky_messages.json")
        >>> resolver.load_synonyms("bky_", "bky_synonyms.json")
        >>> resolver.translation("bky_controls_if_msg_then")
        'do'
    """

    __slots__ = (
        "_loader",
        "_lock",
        "_metadata_key",
        "_on_diagnostic",
        "_synonyms",
        "_translations",
    )

    def __init__(
        self,
        loader: SourceLoader | None = None,
        *,
        on_diagnostic: Callable[[Diagnostic], None] | None = None,
        metadata_key: str = METADATA_KEY,
    ) -> None:
        """Initialize an empty resolver.

        Args:
            loader: Source loader used by load_translations()/load_synonyms()
            on_diagnostic: Optional sink receiving every non-fatal diagnostic
                (malformed entries). Diagnostics are logged either way.
            metadata_key: Reserved key skipped by translation loads
        """
        self._loader = loader
        self._on_diagnostic = on_diagnostic
        self._metadata_key = metadata_key
        self._translations: dict[MessageKey, str] = {}
        self._synonyms: dict[MessageKey, MessageKey] = {}
        self._lock = RWLock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def merge_translations(
        self,
        prefix: str,
        entries: RawEntries,
        *,
        resource_id: ResourceId | None = None,
        source_path: str | None = None,
    ) -> LoadResult:
        """Merge parsed translation entries under a key prefix.

        Every key is stored as normalize_key(prefix + key), overwriting any
        previous value. The metadata key is always skipped. Entries whose
        value is not a string are dropped with a MALFORMED_ENTRY diagnostic.

        Args:
            prefix: String prepended to every key before normalization
            entries: Parsed key/value mapping
            resource_id: Originating resource, for diagnostics
            source_path: Human-readable location, for diagnostics

        Returns:
            LoadResult with the number of merged entries and any diagnostics
        """
        batch: dict[MessageKey, str] = {}
        skipped: list[Diagnostic] = []
        for key, value in entries.items():
            if key == self._metadata_key:
                logger.debug("Skipped %s entry in %s", key, source_path or _INLINE_SOURCE)
                continue
            if isinstance(value, str):
                batch[prefixed_key(prefix, key)] = value
            else:
                skipped.append(
                    self._malformed_entry(key, value, resource_id, source_path)
                )

        return self._commit(TableKind.TRANSLATIONS, batch, skipped, resource_id, source_path)

    def merge_synonyms(
        self,
        prefix: str,
        entries: RawEntries,
        *,
        resource_id: ResourceId | None = None,
        source_path: str | None = None,
    ) -> LoadResult:
        """Merge parsed synonym entries under a key prefix.

        Both the synonym key and its target receive the prefix, so synonym
        files can be written in terms of un-prefixed local keys:
        {"a": "b"} under prefix "p_" maps "p_a" to "p_b".

        Args:
            prefix: String prepended to keys and targets before normalization
            entries: Parsed key/target mapping
            resource_id: Originating resource, for diagnostics
            source_path: Human-readable location, for diagnostics

        Returns:
            LoadResult with the number of merged entries and any diagnostics
        """
        batch: dict[MessageKey, MessageKey] = {}
        skipped: list[Diagnostic] = []
        for key, target in entries.items():
            if isinstance(target, str):
                batch[prefixed_key(prefix, key)] = prefixed_key(prefix, target)
            else:
                skipped.append(
                    self._malformed_entry(key, target, resource_id, source_path)
                )

        return self._commit(TableKind.SYNONYMS, batch, skipped, resource_id, source_path)

    def load_translations(self, prefix: str, resource_id: ResourceId) -> LoadResult:
        """Load a translation source through the loader and merge it.

        Args:
            prefix: String prepended to every key before normalization
            resource_id: Resource to request from the loader

        Returns:
            LoadResult for the merge

        Raises:
            ResourceNotFoundError: If the loader cannot find the resource
            SourceParseError: If the resource cannot be read or decoded
            ValueError: If the resolver was created without a loader
        """
        entries, source_path = self._fetch(resource_id)
        return self.merge_translations(
            prefix, entries, resource_id=resource_id, source_path=source_path
        )

    def load_synonyms(self, prefix: str, resource_id: ResourceId) -> LoadResult:
        """Load a synonym source through the loader and merge it.

        Raises:
            ResourceNotFoundError: If the loader cannot find the resource
            SourceParseError: If the resource cannot be read or decoded
            ValueError: If the resolver was created without a loader
        """
        entries, source_path = self._fetch(resource_id)
        return self.merge_synonyms(
            prefix, entries, resource_id=resource_id, source_path=source_path
        )

    def add_translations(self, translations: Mapping[MessageKey, str]) -> None:
        """Merge caller-supplied overrides without a prefix.

        Keys are normalized; values are stored as given.
        """
        batch = {normalize_key(key): value for key, value in translations.items()}
        with self._lock.write():
            self._translations.update(batch)
        logger.debug("Added %d translation overrides", len(batch))

    def add_synonyms(self, synonyms: Mapping[MessageKey, MessageKey]) -> None:
        """Merge caller-supplied synonyms without a prefix.

        Keys and targets are both normalized, so targets may be given in
        any letter case.
        """
        batch = {normalize_key(key): normalize_key(target) for key, target in synonyms.items()}
        with self._lock.write():
            self._synonyms.update(batch)
        logger.debug("Added %d synonym overrides", len(batch))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def translation(self, key: MessageKey) -> str | None:
        """Return the message for a key, or None.

        Prioritizes the translation table, then follows one synonym hop.
        Never raises for a missing key.

        Args:
            key: Raw key in any letter case

        Returns:
            The message, the message of the key's synonym target, or None
        """
        lookup_key = normalize_key(key)
        with self._lock.read():
            value = self._translations.get(lookup_key)
            if value is not None:
                return value
            target = self._synonyms.get(lookup_key)
            if target is not None:
                return self._translations.get(target)
        return None

    def has_translation(self, key: MessageKey) -> bool:
        """Check if translation(key) would return a message."""
        return self.translation(key) is not None

    def synonym_target(self, key: MessageKey) -> MessageKey | None:
        """Return the normalized key a synonym redirects to, or None."""
        with self._lock.read():
            return self._synonyms.get(normalize_key(key))

    def dangling_synonyms(self) -> tuple[MessageKey, ...]:
        """Return sorted synonym keys whose target has no translation.

        Dangling synonyms are legal (the target may be loaded later); this
        is a consistency check for tooling, not a validation step of loads.
        """
        with self._lock.read():
            return tuple(
                sorted(
                    key
                    for key, target in self._synonyms.items()
                    if target not in self._translations
                )
            )

    @property
    def translation_count(self) -> int:
        """Number of entries in the translation table."""
        with self._lock.read():
            return len(self._translations)

    @property
    def synonym_count(self) -> int:
        """Number of entries in the synonym table."""
        with self._lock.read():
            return len(self._synonyms)

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> MessageResolver()
            MessageResolver(translations=0, synonyms=0)
        """
        return (
            f"MessageResolver(translations={self.translation_count}, "
            f"synonyms={self.synonym_count})"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(
        self,
        table: TableKind,
        batch: dict[MessageKey, str],
        skipped: list[Diagnostic],
        resource_id: ResourceId | None,
        source_path: str | None,
    ) -> LoadResult:
        """Apply a validated batch, then report its diagnostics.

        Diagnostics are delivered after the write lock is released so a sink
        may safely query the resolver.
        """
        target = self._translations if table == TableKind.TRANSLATIONS else self._synonyms
        with self._lock.write():
            target.update(batch)

        for diagnostic in skipped:
            self._report(diagnostic)

        logger.info(
            "Merged %d %s from %s, %d skipped",
            len(batch),
            table,
            source_path or resource_id or _INLINE_SOURCE,
            len(skipped),
        )
        return LoadResult(
            table=table,
            loaded=len(batch),
            skipped=tuple(skipped),
            resource_id=resource_id,
            source_path=source_path,
        )

    def _fetch(self, resource_id: ResourceId) -> tuple[RawEntries, str]:
        """Obtain a parsed mapping from the loader, translating its failures.

        Returns:
            Tuple of (entries, source_path)
        """
        loader = self._loader
        if loader is None:
            msg = "A SourceLoader is required to load resources by identifier"
            raise ValueError(msg)

        describe = getattr(loader, "describe_path", None)
        source_path = describe(resource_id) if describe is not None else resource_id

        try:
            entries = loader.load(resource_id)
        except FileNotFoundError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.RESOURCE_NOT_FOUND,
                message=f"Could not find '{resource_id}'",
                resource_id=resource_id,
                source_path=source_path,
                hint="Check the loader base path and the resource name",
            )
            raise ResourceNotFoundError(diagnostic) from e
        except ValueError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.SOURCE_PARSE_FAILED,
                message=f"Could not decode '{resource_id}': {e}",
                resource_id=resource_id,
                source_path=source_path,
            )
            raise SourceParseError(diagnostic) from e
        except OSError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.SOURCE_UNREADABLE,
                message=f"Could not read '{resource_id}': {e}",
                resource_id=resource_id,
                source_path=source_path,
            )
            raise SourceParseError(diagnostic) from e

        if not isinstance(entries, Mapping):
            diagnostic = Diagnostic(
                code=DiagnosticCode.SOURCE_NOT_A_MAPPING,
                message=(
                    f"Loader returned {type(entries).__name__} for '{resource_id}', "
                    f"expected a mapping"
                ),
                resource_id=resource_id,
                source_path=source_path,
            )
            raise SourceParseError(diagnostic)

        return entries, source_path

    @staticmethod
    def _malformed_entry(
        key: str,
        value: object,
        resource_id: ResourceId | None,
        source_path: str | None,
    ) -> Diagnostic:
        received = type(value).__name__
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_ENTRY,
            message=f"Unrecognized value type '{received}' for key '{key}'",
            resource_id=resource_id,
            source_path=source_path,
            key=key,
            expected_type="str",
            received_type=received,
            severity="warning",
        )

    def _report(self, diagnostic: Diagnostic) -> None:
        # repr() escapes control characters in keys from untrusted sources
        logger.warning(
            "Dropped entry %s in %s: %s",
            repr(diagnostic.key)[:LOG_TRUNCATE_LENGTH],
            diagnostic.source_path or _INLINE_SOURCE,
            diagnostic.message[:LOG_TRUNCATE_LENGTH],
        )
        if self._on_diagnostic is not None:
            self._on_diagnostic(diagnostic)
