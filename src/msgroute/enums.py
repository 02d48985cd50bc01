"""Enumerations for msgroute type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class MatchKind(StrEnum):
    """How a category was matched to a binding.

    StrEnum provides automatic string conversion: str(MatchKind.PREFIX) == "prefix"
    """

    EXACT = "exact"
    """Registry key equals the category: app/errors"""

    PREFIX = "prefix"
    """Prefix wildcard pattern: app/* matches app/errors"""

    CATCH_ALL = "catch_all"
    """The * pattern matched a category nothing else claimed"""


class ArgumentKind(StrEnum):
    """Kind of ICU message argument.

    StrEnum provides automatic string conversion: str(ArgumentKind.PLURAL) == "plural"
    """

    SIMPLE = "simple"
    """Bare argument: {name}"""

    NUMBER = "number"
    """Number argument: {count, number, integer}"""

    DATE = "date"
    """Date argument: {when, date, short}"""

    TIME = "time"
    """Time argument: {when, time}"""

    PLURAL = "plural"
    """Cardinal plural: {count, plural, one{...} other{...}}"""

    SELECTORDINAL = "selectordinal"
    """Ordinal plural: {place, selectordinal, one{#st} other{#th}}"""

    SELECT = "select"
    """Keyword select: {gender, select, female{...} other{...}}"""


__all__ = [
    "ArgumentKind",
    "MatchKind",
]
