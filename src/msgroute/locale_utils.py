"""Locale utilities for language-code normalization and Babel lookup.

Centralizes language-code normalization used throughout the codebase so that
catalog keys, cache keys and Babel lookups agree on one canonical form.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from msgroute.constants import MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "language_candidates",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 or POSIX language code to lowercase POSIX form.

    BCP-47 uses hyphens (en-US), POSIX uses underscores (en_US). Both are
    case-insensitive, so the canonical form is lowercased: "en-US", "EN_us"
    and "en_US" all become "en_us".

    Args:
        locale_code: Language code (e.g., "en-US", "pt_BR", "de")

    Returns:
        Normalized code (e.g., "en_us", "pt_br", "de")

    Example:
        >>> normalize_locale("en-US")
        'en_us'
        >>> normalize_locale("zh-Hans-CN")
        'zh_hans_cn'
    """
    return locale_code.strip().replace("-", "_").lower()


def language_candidates(locale_code: str) -> tuple[str, ...]:
    """Return lookup candidates for a language code, most specific first.

    Example:
        >>> language_candidates("en-US")
        ('en_us', 'en')
        >>> language_candidates("de")
        ('de',)
    """
    normalized = normalize_locale(locale_code)
    primary = normalized.split("_", 1)[0]
    if primary and primary != normalized:
        return (normalized, primary)
    return (normalized,)


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the language code once and caches the result, keeping
    Locale.parse() out of the plural-selection hot path.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Language code (BCP-47 or POSIX, any case)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If the language has no CLDR data
        ValueError: If the code is malformed
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Drop all cached Babel Locale objects."""
    get_babel_locale.cache_clear()
