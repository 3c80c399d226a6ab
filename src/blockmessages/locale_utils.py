"""Locale helpers for message overlays.

A locale selects which overlay directories are layered on top of the
default messages. Codes arrive in either BCP-47 ("pt-BR") or POSIX
("pt_BR") form; Babel parses them into their language, script and
territory parts.

Python 3.13+.
"""

from __future__ import annotations

import functools
import locale as locale_module
import logging
import os
from typing import TYPE_CHECKING

from blockmessages.constants import FALLBACK_LOCALE, LOCALE_ENV_VARS

if TYPE_CHECKING:
    from babel import Locale

    from blockmessages.types import LocaleCode

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "locale_overlay_chain",
    "normalize_locale",
]

logger = logging.getLogger(__name__)

_PSEUDO_LOCALES = frozenset({"C", "POSIX"})


def normalize_locale(locale_code: LocaleCode) -> LocaleCode:
    """Return the POSIX spelling of a locale code.

    Example:
        >>> normalize_locale("zh-Hans-CN")
        'zh_Hans_CN'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=64)
def get_babel_locale(locale_code: LocaleCode) -> Locale:
    """Parse a locale code with Babel, caching the result.

    Raises:
        babel.UnknownLocaleError: If CLDR has no data for the locale
        ValueError: If the code is not a well-formed locale identifier
    """
    # Babel pulls in CLDR data on import; only pay for it when overlays are used
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def _os_locale() -> str | None:
    try:
        language_code, _ = locale_module.getlocale()
    except ValueError:
        return None
    return language_code


def get_system_locale() -> LocaleCode:
    """Detect the user's locale.

    Candidates, first match wins: the OS locale from locale.getlocale(),
    then the LC_ALL, LC_MESSAGES and LANG environment variables. The "C"
    and "POSIX" pseudo-locales are ignored and encoding suffixes such as
    ".UTF-8" are dropped.

    Returns:
        Locale code in POSIX form, or FALLBACK_LOCALE when nothing usable
        is configured
    """
    candidates = [_os_locale(), *(os.environ.get(name) for name in LOCALE_ENV_VARS)]
    for candidate in candidates:
        code = candidate.partition(".")[0] if candidate else ""
        if code and code not in _PSEUDO_LOCALES:
            return normalize_locale(code)
    return FALLBACK_LOCALE


def locale_overlay_chain(locale_code: LocaleCode) -> tuple[LocaleCode, ...]:
    """Expand a locale into overlay directory names, least specific first.

    Overlays are applied in this order, so regional wording overrides the
    language-wide translation. Babel fills in likely subtags ("zh_TW" parses
    as "zh_Hant_TW"), so the code as given is appended last and a directory
    named after it is always tried. A locale Babel does not know degrades
    to its normalized code alone.

    Example:
        >>> locale_overlay_chain("zh-Hans-CN")
        ('zh', 'zh_Hans', 'zh_Hans_CN')
        >>> locale_overlay_chain("zh_TW")
        ('zh', 'zh_Hant', 'zh_Hant_TW', 'zh_TW')
        >>> locale_overlay_chain("de_CH")
        ('de', 'de_CH')
    """
    from babel import UnknownLocaleError  # noqa: PLC0415

    try:
        parsed = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError) as e:
        fallback = normalize_locale(locale_code)
        logger.warning("Unknown locale '%s': %s. Using '%s' overlay only", locale_code, e, fallback)
        return (fallback,)

    chain = [parsed.language]
    if parsed.script:
        chain.append(f"{parsed.language}_{parsed.script}")
    if parsed.territory:
        chain.append(str(parsed))
    chain.append(normalize_locale(locale_code))
    return tuple(dict.fromkeys(chain))
