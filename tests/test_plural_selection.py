"""Tests for select_plural_category - CLDR plural categories via Babel.

Property-Based Testing Strategy:
    Hypothesis checks that every result is a CLDR category and that the
    unknown-language fallback mirrors English cardinals.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from msgroute.runtime.plural_rules import select_plural_category

CLDR_CATEGORIES = frozenset(("zero", "one", "two", "few", "many", "other"))

LANGUAGES = st.sampled_from(
    ["en", "en_US", "en-GB", "lv", "lv_LV", "ru", "pl", "ar", "de", "fr", "ja", "cy", "ga"]
)

NUMBERS = st.one_of(
    st.integers(min_value=0, max_value=10**9),
    st.decimals(min_value=0, max_value=10**6, places=2, allow_nan=False, allow_infinity=False),
)


class TestCardinal:
    """Cardinal rules."""

    @pytest.mark.parametrize(
        ("language", "n", "expected"),
        [
            ("en", 1, "one"),
            ("en", 0, "other"),
            ("en", 2, "other"),
            ("lv", 0, "zero"),
            ("lv", 1, "one"),
            ("lv", 11, "zero"),
            ("lv", 21, "one"),
            ("lv", 2, "other"),
            ("ru", 1, "one"),
            ("ru", 2, "few"),
            ("ru", 5, "many"),
            ("ru", 12, "many"),
            ("ru", 22, "few"),
            ("ar", 0, "zero"),
            ("ar", 2, "two"),
            ("ja", 1, "other"),
        ],
    )
    def test_known_values(self, language: str, n: int, expected: str) -> None:
        """Spot checks against CLDR tables."""
        assert select_plural_category(n, language) == expected

    def test_decimal_fraction(self) -> None:
        """Visible fraction digits matter: 1.0 is not 'one' in English."""
        assert select_plural_category(Decimal("1.0"), "en") == "other"
        assert select_plural_category(Decimal("1"), "en") == "one"

    def test_language_code_forms(self) -> None:
        """BCP-47 and POSIX forms select the same rules."""
        assert select_plural_category(5, "ru-RU") == select_plural_category(5, "ru_ru") == "many"


class TestOrdinal:
    """Ordinal rules."""

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(1, "one"), (2, "two"), (3, "few"), (4, "other"), (11, "other"), (22, "two")],
    )
    def test_english(self, n: int, expected: str) -> None:
        """English ordinal categories."""
        assert select_plural_category(n, "en", ordinal=True) == expected


class TestUnknownLanguage:
    """Languages without CLDR data."""

    def test_cardinal_fallback(self) -> None:
        """Cardinals fall back to one/other."""
        assert select_plural_category(1, "xx") == "one"
        assert select_plural_category(-1, "xx") == "one"
        assert select_plural_category(3, "xx") == "other"

    def test_ordinal_fallback(self) -> None:
        """Ordinals fall back to other."""
        assert select_plural_category(1, "xx", ordinal=True) == "other"

    def test_malformed_code(self) -> None:
        """Malformed codes use the same fallback."""
        assert select_plural_category(1, "!!") == "one"


class TestProperties:
    """Hypothesis properties."""

    @given(n=NUMBERS, language=LANGUAGES, ordinal=st.booleans())
    def test_result_is_cldr_category(
        self, n: int | Decimal, language: str, ordinal: bool
    ) -> None:
        """Every result is one of the six CLDR categories."""
        assert select_plural_category(n, language, ordinal=ordinal) in CLDR_CATEGORIES

    @given(n=st.integers(min_value=-(10**6), max_value=10**6))
    def test_unknown_language_mirrors_english_integers(self, n: int) -> None:
        """For integers the fallback agrees with English."""
        assert select_plural_category(n, "xx") == select_plural_category(abs(n), "en")
