"""Shared constants for msgroute.

Centralizes the pattern syntax, defaults and limits used by the
localization and runtime packages. Placing constants here avoids circular
imports and provides a single source of truth.

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Category patterns
    "CATCH_ALL_PATTERN",
    "WILDCARD",
    # Defaults
    "DEFAULT_LANGUAGE",
    "FALLBACK_LANGUAGE",
    # Formatting
    "ICU_SYNTAX_RE",
    "MAX_FORMAT_DEPTH",
    "MAX_NUMBER_EXPONENT",
    "MAX_TEMPLATE_CACHE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
]

# ============================================================================
# CATEGORY PATTERNS
# ============================================================================

# Wildcard character. A pattern whose first wildcard sits after at least one
# literal character ("app*", "app/*") is a prefix pattern.
WILDCARD: str = "*"

# Pattern matching every category not matched by an exact or prefix binding.
CATCH_ALL_PATTERN: str = "*"

# ============================================================================
# DEFAULTS
# ============================================================================

# Language used by the t() shortcut when the caller does not pass one.
DEFAULT_LANGUAGE: str = "en_us"

# Babel locale used when a requested language has no CLDR data.
FALLBACK_LANGUAGE: str = "en_US"

# ============================================================================
# FORMATTING
# ============================================================================

# ICU argument syntax gate: "{", optional whitespace, an argument name,
# optional whitespace, ",". Matches "{count, plural, ...}" but not "{count}".
# \w is Unicode-aware and already covers digits.
ICU_SYNTAX_RE: re.Pattern[str] = re.compile(r"\{\s*\w+\s*,")

# Maximum nesting of plural/select branches inside one template.
# Legitimate messages nest two or three levels.
MAX_FORMAT_DEPTH: int = 100

# Largest decimal exponent accepted for numeric arguments. Plural rules
# expand the value to an integer, so larger magnitudes are rejected.
MAX_NUMBER_EXPONENT: int = 1000

# Maximum parsed templates kept by the formatter's parse cache.
MAX_TEMPLATE_CACHE_SIZE: int = 512

# Maximum cached Babel Locale objects.
MAX_LOCALE_CACHE_SIZE: int = 128
