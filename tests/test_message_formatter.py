"""Tests for MessageFormatter - Babel-backed ICU message formatting.

Tests verify:
- number/date/time argument styles
- Cardinal plurals (en, ru, lv), exact selectors and offsets
- Ordinal plurals
- select, including nesting inside plurals
- Apostrophe quoting rules
- Error reporting through MessageFormatError diagnostics
- Unknown-language fallback
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from msgroute.diagnostics import DiagnosticCode, MessageFormatError
from msgroute.runtime import MessageFormatter, parse_template
from msgroute.runtime.formatter import Argument, Branching, Pound, Text

FILES = "{n, plural, =0{no files} one{# file} other{# files}}"


@pytest.fixture
def formatter() -> MessageFormatter:
    return MessageFormatter()


def _error_code(excinfo: pytest.ExceptionInfo[MessageFormatError]) -> DiagnosticCode:
    diagnostic = excinfo.value.diagnostic
    assert diagnostic is not None
    return diagnostic.code


class TestParsing:
    """parse_template builds an immutable AST."""

    def test_text_and_simple_argument(self) -> None:
        """Plain text and {name} become Text and Argument nodes."""
        pattern = parse_template("Hi {name}!")

        assert pattern[0] == Text("Hi ")
        assert isinstance(pattern[1], Argument)
        assert pattern[1].name == "name"
        assert pattern[2] == Text("!")

    def test_plural_branches_in_source_order(self) -> None:
        """Branch selectors keep their order; exact values are canonical."""
        (node,) = parse_template("{n, plural, =1.0{a} one{#} other{b}}")

        assert isinstance(node, Branching)
        assert [key for key, _ in node.branches] == ["=1", "one", "other"]
        assert node.branch("one") == (Pound(),)

    def test_parse_is_cached(self) -> None:
        """Parsing the same template twice returns the same object."""
        assert parse_template(FILES) is parse_template(FILES)


class TestNumbers:
    """{name, number[, style]}."""

    def test_default_style(self, formatter: MessageFormatter) -> None:
        """Numbers use the locale's grouping and decimal symbols."""
        assert formatter.format("{n, number}", {"n": 1234.5}, "en") == "1,234.5"
        assert formatter.format("{n, number}", {"n": 1234.5}, "de") == "1.234,5"

    def test_integer_style(self, formatter: MessageFormatter) -> None:
        """integer style rounds away the fraction."""
        assert formatter.format("{n, number, integer}", {"n": 1234.56}, "en") == "1,235"

    def test_percent_style(self, formatter: MessageFormatter) -> None:
        """percent style multiplies by 100."""
        assert formatter.format("{n, number, percent}", {"n": 0.25}, "en") == "25%"

    def test_custom_pattern(self, formatter: MessageFormatter) -> None:
        """Other styles are CLDR number patterns."""
        assert formatter.format("{n, number, #,##0.00}", {"n": 1234.5}, "en") == "1,234.50"

    def test_decimal_and_numeric_string(self, formatter: MessageFormatter) -> None:
        """Decimals and numeric strings are accepted."""
        assert formatter.format("{n, number}", {"n": Decimal("1.50")}, "en") == "1.5"
        assert formatter.format("{n, number}", {"n": "42"}, "en") == "42"

    def test_non_numeric_rejected(self, formatter: MessageFormatter) -> None:
        """Non-numeric values raise ARGUMENT_TYPE_MISMATCH."""
        with pytest.raises(MessageFormatError) as excinfo:
            formatter.format("{n, number}", {"n": "many"}, "en")

        assert _error_code(excinfo) is DiagnosticCode.ARGUMENT_TYPE_MISMATCH

    def test_bool_is_not_a_number(self, formatter: MessageFormatter) -> None:
        """Booleans are rejected for numeric arguments."""
        with pytest.raises(MessageFormatError):
            formatter.format("{n, number}", {"n": True}, "en")


class TestDatesAndTimes:
    """{name, date|time[, style]}."""

    def test_date_styles(self, formatter: MessageFormatter) -> None:
        """Named styles map to CLDR date formats."""
        day = date(2024, 1, 15)

        assert formatter.format("{d, date, short}", {"d": day}, "en") == "1/15/24"
        assert formatter.format("{d, date}", {"d": day}, "en") == "Jan 15, 2024"
        assert formatter.format("{d, date, long}", {"d": day}, "en") == "January 15, 2024"

    def test_date_pattern(self, formatter: MessageFormatter) -> None:
        """Other styles are CLDR date patterns."""
        assert formatter.format("{d, date, yyyy-MM-dd}", {"d": date(2024, 1, 5)}, "en") == (
            "2024-01-05"
        )

    def test_datetime_accepted_for_date(self, formatter: MessageFormatter) -> None:
        """datetime values work for date arguments."""
        value = datetime(2024, 3, 1, 12, 0)

        assert formatter.format("{d, date, yyyy}", {"d": value}, "en") == "2024"

    def test_time_pattern(self, formatter: MessageFormatter) -> None:
        """time arguments accept time values with CLDR patterns."""
        assert formatter.format("{t, time, HH:mm}", {"t": time(14, 30)}, "en") == "14:30"

    def test_wrong_type_rejected(self, formatter: MessageFormatter) -> None:
        """A string is not a date."""
        with pytest.raises(MessageFormatError) as excinfo:
            formatter.format("{d, date}", {"d": "2024-01-01"}, "en")

        assert _error_code(excinfo) is DiagnosticCode.ARGUMENT_TYPE_MISMATCH

    def test_date_is_not_a_time(self, formatter: MessageFormatter) -> None:
        """A bare date has no time of day."""
        with pytest.raises(MessageFormatError):
            formatter.format("{t, time}", {"t": date(2024, 1, 1)}, "en")


class TestPlural:
    """Cardinal plurals."""

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(0, "no files"), (1, "1 file"), (2, "2 files"), (1000, "1,000 files"), (1.5, "1.5 files")],
    )
    def test_english(self, formatter: MessageFormatter, n: object, expected: str) -> None:
        """English one/other with an exact =0 branch."""
        assert formatter.format(FILES, {"n": n}, "en") == expected

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(1, "1 файл"), (3, "3 файла"), (5, "5 файлов"), (21, "21 файл"), (11, "11 файлов")],
    )
    def test_russian(self, formatter: MessageFormatter, n: int, expected: str) -> None:
        """Russian one/few/many."""
        template = "{n, plural, one{# файл} few{# файла} many{# файлов} other{# файла}}"

        assert formatter.format(template, {"n": n}, "ru") == expected

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(0, "0 ābolu"), (1, "1 ābols"), (2, "2 āboli"), (10, "10 ābolu"), (21, "21 ābols")],
    )
    def test_latvian(self, formatter: MessageFormatter, n: int, expected: str) -> None:
        """Latvian zero/one/other."""
        template = "{n, plural, zero{# ābolu} one{# ābols} other{# āboli}}"

        assert formatter.format(template, {"n": n}, "lv") == expected

    def test_exact_selector_beats_keyword(self, formatter: MessageFormatter) -> None:
        """=1 wins over one."""
        template = "{n, plural, one{one} =1{exactly one} other{other}}"

        assert formatter.format(template, {"n": 1}, "en") == "exactly one"

    def test_exact_selector_matches_float(self, formatter: MessageFormatter) -> None:
        """=1 matches 1.0 and "1"."""
        template = "{n, plural, =1{exactly one} other{other}}"

        assert formatter.format(template, {"n": 1.0}, "en") == "exactly one"
        assert formatter.format(template, {"n": "1"}, "en") == "exactly one"

    def test_offset(self, formatter: MessageFormatter) -> None:
        """Keywords and # use value minus offset; =N uses the raw value."""
        template = (
            "{n, plural, offset:1 =0{nobody} =1{just you} "
            "one{you and # other} other{you and # others}}"
        )

        assert formatter.format(template, {"n": 0}, "en") == "nobody"
        assert formatter.format(template, {"n": 1}, "en") == "just you"
        assert formatter.format(template, {"n": 2}, "en") == "you and 1 other"
        assert formatter.format(template, {"n": 4}, "en") == "you and 3 others"

    def test_pound_inside_nested_select(self, formatter: MessageFormatter) -> None:
        """# inside a select nested in a plural renders the plural value."""
        template = "{n, plural, other{{g, select, female{she has #} other{they have #}}}}"

        assert formatter.format(template, {"n": 3, "g": "female"}, "en") == "she has 3"

    def test_missing_argument(self, formatter: MessageFormatter) -> None:
        """plural requires its argument."""
        with pytest.raises(MessageFormatError) as excinfo:
            formatter.format(FILES, {"other": 1}, "en")

        assert _error_code(excinfo) is DiagnosticCode.ARGUMENT_MISSING
        assert excinfo.value.template == FILES
        assert excinfo.value.language == "en"

    @pytest.mark.parametrize(
        "value",
        [
            float("nan"),
            float("inf"),
            float("-inf"),
            Decimal("NaN"),
            Decimal("Infinity"),
            "nan",
            "Infinity",
            "1e5000",
        ],
    )
    @pytest.mark.parametrize("kind", ["plural", "selectordinal"])
    def test_non_finite_values_rejected(
        self, formatter: MessageFormatter, value: object, kind: str
    ) -> None:
        """Values without a plural category are type mismatches."""
        template = f"{{n, {kind}, one{{# file}} other{{# files}}}}"

        with pytest.raises(MessageFormatError) as excinfo:
            formatter.format(template, {"n": value}, "en")

        assert _error_code(excinfo) is DiagnosticCode.ARGUMENT_TYPE_MISMATCH

    def test_large_finite_value_accepted(self, formatter: MessageFormatter) -> None:
        """Magnitudes within the exponent bound still select a category."""
        assert formatter.format(FILES, {"n": "1e20"}, "en").endswith(" files")


class TestSelectOrdinal:
    """Ordinal plurals."""

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (21, "21st"), (112, "112th")],
    )
    def test_english(self, formatter: MessageFormatter, n: int, expected: str) -> None:
        """English ordinal suffixes."""
        template = "{n, selectordinal, one{#st} two{#nd} few{#rd} other{#th}}"

        assert formatter.format(template, {"n": n}, "en") == expected


class TestSelect:
    """Keyword select."""

    TEMPLATE = "{g, select, female{She} male{He} other{They}} replied"

    def test_matching_branch(self, formatter: MessageFormatter) -> None:
        """The branch named by the value is used."""
        assert formatter.format(self.TEMPLATE, {"g": "female"}, "en") == "She replied"

    def test_other_fallback(self, formatter: MessageFormatter) -> None:
        """Unknown and missing values use other."""
        assert formatter.format(self.TEMPLATE, {"g": "robot"}, "en") == "They replied"
        assert formatter.format(self.TEMPLATE, {"x": 1}, "en") == "They replied"

    def test_boolean_values(self, formatter: MessageFormatter) -> None:
        """Booleans select the true/false branches."""
        template = "{flag, select, true{on} false{off} other{?}}"

        assert formatter.format(template, {"flag": True}, "en") == "on"
        assert formatter.format(template, {"flag": False}, "en") == "off"

    def test_duplicate_selector_first_wins(self, formatter: MessageFormatter) -> None:
        """The first branch with a repeated selector is used."""
        template = "{g, select, a{first} a{second} other{other}}"

        assert formatter.format(template, {"g": "a"}, "en") == "first"

    def test_pound_is_literal_outside_plural(self, formatter: MessageFormatter) -> None:
        """# has no meaning in a select that is not inside a plural."""
        assert formatter.format("{g, select, other{#1}}", {"g": "x"}, "en") == "#1"


class TestSimpleArguments:
    """{name} inside ICU templates."""

    def test_values_rendered(self, formatter: MessageFormatter) -> None:
        """Strings verbatim, numbers localized, None empty."""
        template = "{s}|{n}|{z}|{g, select, other{x}}"
        params = {"s": "text", "n": 1234, "z": None, "g": "y"}

        assert formatter.format(template, params, "en") == "text|1,234||x"

    def test_booleans_lowercase(self, formatter: MessageFormatter) -> None:
        """Booleans render as true/false."""
        template = "{a} {b} {g, select, other{x}}"

        assert formatter.format(template, {"a": True, "b": False, "g": 1}, "en") == (
            "true false x"
        )

    def test_non_finite_rendered_plainly(self, formatter: MessageFormatter) -> None:
        """NaN and infinities bypass locale number formatting."""
        template = "{v} {g, select, other{x}}"

        assert formatter.format(template, {"v": float("inf"), "g": 1}, "en") == "inf x"

    def test_missing_left_verbatim(self, formatter: MessageFormatter) -> None:
        """Missing simple arguments survive as {name}."""
        assert formatter.format("{who} has {n, number}", {"n": 2}, "en") == "{who} has 2"


class TestQuoting:
    """Apostrophe quoting."""

    def test_doubled_apostrophe(self, formatter: MessageFormatter) -> None:
        """'' is a literal apostrophe."""
        assert formatter.format("It''s {n, number}", {"n": 5}, "en") == "It's 5"

    def test_lone_apostrophe_is_literal(self, formatter: MessageFormatter) -> None:
        """An apostrophe before ordinary text is literal."""
        assert formatter.format("don't {n, number}", {"n": 1}, "en") == "don't 1"

    def test_quoted_braces(self, formatter: MessageFormatter) -> None:
        """'{...}' is literal text."""
        assert formatter.format("'{n}' = {n, number}", {"n": 7}, "en") == "{n} = 7"

    def test_quoted_pound_in_plural(self, formatter: MessageFormatter) -> None:
        """'#' inside a plural is a literal hash."""
        assert formatter.format("{n, plural, other{'#'#}}", {"n": 2}, "en") == "#2"


class TestErrors:
    """Template errors carry diagnostics."""

    @pytest.mark.parametrize(
        ("template", "code"),
        [
            ("{n, plural, one{x}}", DiagnosticCode.OTHER_BRANCH_MISSING),
            ("{n, currency}", DiagnosticCode.ARGUMENT_KIND_UNKNOWN),
            ("{n, plural, other{x}", DiagnosticCode.TEMPLATE_SYNTAX),
            ("a } {n, number}", DiagnosticCode.TEMPLATE_SYNTAX),
            ("{, number}", DiagnosticCode.TEMPLATE_SYNTAX),
            ("{n, plural, =x{a} other{b}}", DiagnosticCode.TEMPLATE_SYNTAX),
        ],
    )
    def test_syntax_errors(
        self, formatter: MessageFormatter, template: str, code: DiagnosticCode
    ) -> None:
        """Each malformed template reports its diagnostic code."""
        with pytest.raises(MessageFormatError) as excinfo:
            formatter.format(template, {"n": 1}, "en")

        assert _error_code(excinfo) is code
        assert excinfo.value.template == template

    def test_nesting_limit(self, formatter: MessageFormatter) -> None:
        """Nesting beyond the limit is rejected."""
        depth = 101
        template = "{a, select, other{" * depth + "x" + "}}" * depth

        with pytest.raises(MessageFormatError) as excinfo:
            formatter.format(template, {"a": "b"}, "en")

        assert _error_code(excinfo) is DiagnosticCode.TEMPLATE_TOO_DEEP

    def test_reasonable_nesting_allowed(self, formatter: MessageFormatter) -> None:
        """A few levels of nesting are fine."""
        template = "{a, select, other{{b, select, other{{c, select, other{deep}}}}}}"

        assert formatter.format(template, {"a": 1}, "en") == "deep"


class TestLocaleFallback:
    """Unknown languages format with en_US data."""

    def test_unknown_language_falls_back(
        self, formatter: MessageFormatter, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A language without CLDR data logs a warning and still formats."""
        with caplog.at_level(logging.WARNING, logger="msgroute.runtime.formatter"):
            result = formatter.format(FILES, {"n": 1}, "xx")

        assert result == "1 file"
        assert "Unknown language 'xx'" in caplog.text

    def test_language_code_forms(self, formatter: MessageFormatter) -> None:
        """BCP-47 and POSIX codes in any case are accepted."""
        for code in ("de-DE", "de_DE", "DE_de"):
            assert formatter.format("{n, number}", {"n": 1.5}, code) == "1,5"
