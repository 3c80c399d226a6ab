"""Default message bootstrap.

Loads the toolkit's bundled message files into a resolver: the constant
and message translations, any locale overlays, then the synonyms, all
under the ``bky_`` prefix.

There is no shared module-level resolver. The application creates one at
startup with create_default_resolver() and passes it to whatever needs
it; tests build their own instances.

Bootstrap Behavior:
    Every load attempt is recorded in a LoadSummary instead of raised.
    Missing overlay files are normal (most locales override only some
    files), so NOT_FOUND is logged at DEBUG for overlays and at ERROR for
    the base files. Undecodable files are always logged at ERROR.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from blockmessages.constants import (
    DEFAULT_PREFIX,
    DEFAULT_SYNONYM_RESOURCES,
    DEFAULT_TRANSLATION_RESOURCES,
)
from blockmessages.diagnostics import ResourceNotFoundError, SourceParseError
from blockmessages.enums import LoadStatus, TableKind
from blockmessages.loading import LoadSummary, ResourceLoadResult
from blockmessages.locale_utils import get_system_locale, locale_overlay_chain
from blockmessages.runtime.resolver import MessageResolver

if TYPE_CHECKING:
    from blockmessages.diagnostics import Diagnostic
    from blockmessages.loading import SourceLoader
    from blockmessages.types import LocaleCode, ResourceId

__all__ = ["create_default_resolver", "load_default_resources"]

logger = logging.getLogger(__name__)


def create_default_resolver(
    loader: SourceLoader,
    *,
    locale: LocaleCode | None = None,
    prefix: str = DEFAULT_PREFIX,
    on_diagnostic: Callable[[Diagnostic], None] | None = None,
) -> tuple[MessageResolver, LoadSummary]:
    """Create a resolver populated with the default message files.

    Args:
        loader: Loader serving the default files and locale overlay directories
        locale: Locale whose overlays to apply. None detects the system locale.
        prefix: Prefix applied to every default key
        on_diagnostic: Diagnostic sink passed to the resolver

    Returns:
        Tuple of (resolver, load summary)

    Example:
        >>> resolver, summary = create_default_resolver(JsonFileLoader("msg/json"), locale="de")
        >>> if not summary.all_successful:
        ...     log.warning("Default messages incomplete: %r", summary)
    """
    resolver = MessageResolver(loader, on_diagnostic=on_diagnostic)
    if locale is None:
        locale = get_system_locale()
    summary = load_default_resources(resolver, locale=locale, prefix=prefix)
    return resolver, summary


def load_default_resources(
    resolver: MessageResolver,
    *,
    locale: LocaleCode | None = None,
    prefix: str = DEFAULT_PREFIX,
    translation_resources: Iterable[ResourceId] = DEFAULT_TRANSLATION_RESOURCES,
    synonym_resources: Iterable[ResourceId] = DEFAULT_SYNONYM_RESOURCES,
) -> LoadSummary:
    """Load default translations, locale overlays and synonyms into resolver.

    Order: base translation files, then for each overlay directory in
    locale_overlay_chain(locale) the same files under that directory,
    then the synonym files. Later loads override earlier ones.

    Args:
        resolver: Resolver to populate (must have a loader)
        locale: Locale whose overlays to apply; None applies no overlays
        prefix: Prefix applied to every key
        translation_resources: Translation file names
        synonym_resources: Synonym file names

    Returns:
        LoadSummary of every attempt
    """
    translation_ids = tuple(translation_resources)
    results: list[ResourceLoadResult] = [
        _load_one(resolver, TableKind.TRANSLATIONS, prefix, resource_id, optional=False)
        for resource_id in translation_ids
    ]

    overlays = locale_overlay_chain(locale) if locale else ()
    for overlay in overlays:
        results.extend(
            _load_one(
                resolver,
                TableKind.TRANSLATIONS,
                prefix,
                f"{overlay}/{resource_id}",
                optional=True,
            )
            for resource_id in translation_ids
        )

    results.extend(
        _load_one(resolver, TableKind.SYNONYMS, prefix, resource_id, optional=False)
        for resource_id in synonym_resources
    )

    summary = LoadSummary(results=tuple(results))
    logger.info("Loaded default messages (locale=%s): %r", locale, summary)
    return summary


def _load_one(
    resolver: MessageResolver,
    table: TableKind,
    prefix: str,
    resource_id: ResourceId,
    *,
    optional: bool,
) -> ResourceLoadResult:
    """Load a single default resource and record the result."""
    load = (
        resolver.load_translations
        if table == TableKind.TRANSLATIONS
        else resolver.load_synonyms
    )
    try:
        result = load(prefix, resource_id)
    except ResourceNotFoundError as e:
        if optional:
            logger.debug("No overlay %s", resource_id)
        else:
            logger.error("Could not load default file %s: %s", resource_id, e)
        return ResourceLoadResult(
            table=table,
            resource_id=resource_id,
            status=LoadStatus.NOT_FOUND,
            error=e,
            source_path=_source_path(e, resource_id),
        )
    except SourceParseError as e:
        logger.error("Could not load default file %s: %s", resource_id, e)
        return ResourceLoadResult(
            table=table,
            resource_id=resource_id,
            status=LoadStatus.ERROR,
            error=e,
            source_path=_source_path(e, resource_id),
        )

    return ResourceLoadResult(
        table=table,
        resource_id=resource_id,
        status=LoadStatus.SUCCESS,
        source_path=result.source_path or resource_id,
        skipped=result.skipped,
    )


def _source_path(error: ResourceNotFoundError | SourceParseError, resource_id: ResourceId) -> str:
    diagnostic = error.diagnostic
    if diagnostic is not None and diagnostic.source_path:
        return diagnostic.source_path
    return resource_id
