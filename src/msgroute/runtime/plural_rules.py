"""CLDR plural rules implementation using Babel.

Provides cardinal and ordinal plural category selection for all locales
using Babel's CLDR data.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from decimal import Decimal

from babel.core import UnknownLocaleError

from msgroute.locale_utils import get_babel_locale

__all__ = ["select_plural_category"]


def select_plural_category(
    n: int | float | Decimal, language: str, *, ordinal: bool = False
) -> str:
    """Select CLDR plural category for a number.

    Args:
        n: Number to categorize
        language: Language code (e.g., "lv_LV", "en-US", "ru")
        ordinal: Use ordinal rules (1st, 2nd, 3rd) instead of cardinal rules

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(0, "lv_LV")
        'zero'
        >>> select_plural_category(5, "ru_RU")
        'many'
        >>> select_plural_category(2, "en", ordinal=True)
        'two'

    Unknown languages fall back to the English-like one/other split for
    cardinals and to "other" for ordinals.
    """
    try:
        locale_obj = get_babel_locale(language)
    except (UnknownLocaleError, ValueError):
        if ordinal:
            return "other"
        return "one" if abs(n) == 1 else "other"

    rule = locale_obj.ordinal_form if ordinal else locale_obj.plural_form
    return rule(n)
