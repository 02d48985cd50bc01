"""ICU-style message formatting backed by Babel.

Implements the subset of ICU MessageFormat that translated UI strings use in
practice: plain and typed arguments, cardinal and ordinal plurals, keyword
select, and apostrophe quoting. Locale data (plural rules, number symbols,
date patterns) comes from Babel's CLDR tables.

Supported argument forms:
    {name}
    {name, number}            {name, number, integer|percent|<pattern>}
    {name, date}              {name, date, short|medium|long|full|<pattern>}
    {name, time}              {name, time, short|medium|long|full|<pattern>}
    {name, plural, [offset:N] =N{...} one{...} other{...}}
    {name, selectordinal, one{#st} two{#nd} few{#rd} other{#th}}
    {name, select, female{...} male{...} other{...}}

Inside plural and selectordinal branches "#" renders the (offset-adjusted)
number. Quoting follows ICU: "''" is a literal apostrophe and an apostrophe
directly before "{", "}" or (inside plurals) "#" starts a quoted literal
that runs to the next single apostrophe.

Any failure raises MessageFormatError. A bare {name} whose argument is
absent is left verbatim, matching the simple substitution path.

Python 3.13+. Depends on Babel.
"""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, NoReturn, Protocol

from babel import dates as babel_dates
from babel import numbers as babel_numbers
from babel.core import UnknownLocaleError

from msgroute.constants import (
    FALLBACK_LANGUAGE,
    MAX_FORMAT_DEPTH,
    MAX_NUMBER_EXPONENT,
    MAX_TEMPLATE_CACHE_SIZE,
)
from msgroute.diagnostics import ErrorTemplate, MessageFormatError
from msgroute.enums import ArgumentKind
from msgroute.locale_utils import get_babel_locale
from msgroute.runtime.plural_rules import select_plural_category

if TYPE_CHECKING:
    from collections.abc import Mapping

    from babel import Locale

__all__ = ["Formatter", "MessageFormatter", "format_bool", "parse_template"]

logger = logging.getLogger(__name__)

_BRANCHING = frozenset((ArgumentKind.PLURAL, ArgumentKind.SELECTORDINAL, ArgumentKind.SELECT))
_KINDS = {kind.value: kind for kind in ArgumentKind if kind is not ArgumentKind.SIMPLE}

type Number = int | float | Decimal


def format_bool(value: bool) -> str:
    """Render a boolean the way both formatting paths spell it."""
    return "true" if value else "false"


class Formatter(Protocol):
    """Capability used by MessagePipeline for ICU-syntax templates.

    Implementations return the formatted string or raise MessageFormatError;
    they must not signal failure any other way.
    """

    def format(self, template: str, params: Mapping[str, object], language: str) -> str:
        """Format template with params for language.

        Raises:
            MessageFormatError: If the template cannot be formatted
        """
        ...


# ============================================================================
# TEMPLATE AST
# ============================================================================


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text."""

    value: str


@dataclass(frozen=True, slots=True)
class Pound:
    """The '#' placeholder inside a plural branch."""


@dataclass(frozen=True, slots=True)
class Argument:
    """Non-branching argument: simple, number, date or time."""

    name: str
    kind: ArgumentKind
    style: str | None = None


@dataclass(frozen=True, slots=True)
class Branching:
    """plural, selectordinal or select argument.

    Attributes:
        name: Argument name
        kind: PLURAL, SELECTORDINAL or SELECT
        branches: (selector, pattern) pairs in source order; selectors are
            keywords ("one", "female") or exact values ("=0")
        offset: Plural offset subtracted before category selection
    """

    name: str
    kind: ArgumentKind
    branches: tuple[tuple[str, Pattern], ...]
    offset: Decimal = Decimal(0)

    def branch(self, selector: str) -> Pattern | None:
        """Return the pattern for selector, or None."""
        for key, pattern in self.branches:
            if key == selector:
                return pattern
        return None


type Node = Text | Pound | Argument | Branching
type Pattern = tuple[Node, ...]


# ============================================================================
# PARSER
# ============================================================================


def _exact_selector(value: Number) -> str:
    """Canonical "=N" key, so =1, =1.0 and a runtime 1.0 all agree."""
    return f"={Decimal(str(value)).normalize():f}"


class _TemplateParser:
    """Recursive-descent parser producing a Pattern."""

    __slots__ = ("_pos", "_source")

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0

    def parse(self) -> Pattern:
        pattern = self._parse_pattern(depth=0, in_plural=False)
        if self._pos < len(self._source):
            self._fail("unmatched '}'")
        return pattern

    # -- helpers --------------------------------------------------------------

    def _fail(self, detail: str) -> NoReturn:
        raise MessageFormatError(
            ErrorTemplate.template_syntax(detail, self._pos), template=self._source
        )

    def _peek(self, offset: int = 0) -> str | None:
        index = self._pos + offset
        return self._source[index] if index < len(self._source) else None

    def _skip_whitespace(self) -> None:
        while (ch := self._peek()) is not None and ch.isspace():
            self._pos += 1

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            found = self._peek()
            self._fail(f"expected '{char}', found {'end of input' if found is None else repr(found)}")
        self._pos += 1

    def _read_word(self) -> str:
        start = self._pos
        while (ch := self._peek()) is not None and (ch.isalnum() or ch == "_"):
            self._pos += 1
        return self._source[start : self._pos]

    # -- grammar --------------------------------------------------------------

    def _parse_pattern(self, depth: int, in_plural: bool) -> Pattern:
        """Parse until an unconsumed '}' or end of input."""
        nodes: list[Node] = []
        text: list[str] = []

        def flush() -> None:
            if text:
                nodes.append(Text("".join(text)))
                text.clear()

        while (ch := self._peek()) is not None:
            if ch == "}":
                break
            if ch == "{":
                flush()
                nodes.append(self._parse_argument(depth + 1, in_plural))
            elif ch == "#" and in_plural:
                flush()
                nodes.append(Pound())
                self._pos += 1
            elif ch == "'":
                text.append(self._parse_quoted(in_plural))
            else:
                text.append(ch)
                self._pos += 1
        flush()
        return tuple(nodes)

    def _parse_quoted(self, in_plural: bool) -> str:
        nxt = self._peek(1)
        if nxt == "'":
            self._pos += 2
            return "'"
        if nxt is None or not (nxt in "{}" or (nxt == "#" and in_plural)):
            self._pos += 1
            return "'"

        # Quoted literal: runs to the next lone apostrophe (or end of input)
        self._pos += 1
        chars: list[str] = []
        while (ch := self._peek()) is not None:
            if ch == "'":
                if self._peek(1) == "'":
                    chars.append("'")
                    self._pos += 2
                    continue
                self._pos += 1
                break
            chars.append(ch)
            self._pos += 1
        return "".join(chars)

    def _parse_argument(self, depth: int, in_plural: bool) -> Node:
        if depth > MAX_FORMAT_DEPTH:
            raise MessageFormatError(
                ErrorTemplate.template_too_deep(MAX_FORMAT_DEPTH, self._pos),
                template=self._source,
            )
        start = self._pos
        self._expect("{")
        self._skip_whitespace()
        name = self._read_word()
        if not name:
            self._fail("expected argument name")
        self._skip_whitespace()

        if self._peek() == "}":
            self._pos += 1
            return Argument(name, ArgumentKind.SIMPLE)

        self._expect(",")
        self._skip_whitespace()
        keyword = self._read_word()
        kind = _KINDS.get(keyword.lower())
        if kind is None:
            raise MessageFormatError(
                ErrorTemplate.argument_kind_unknown(name, keyword or "<empty>", start),
                template=self._source,
            )
        self._skip_whitespace()

        if kind in _BRANCHING:
            return self._parse_branching(name, kind, depth, start, in_plural)

        style: str | None = None
        if self._peek() == ",":
            self._pos += 1
            style = self._read_style()
        self._expect("}")
        return Argument(name, kind, style)

    def _read_style(self) -> str | None:
        """Read a number/date style up to the closing brace, honouring quotes."""
        chars: list[str] = []
        while (ch := self._peek()) is not None and ch != "}":
            if ch == "'":
                # Keep quotes: Babel patterns use the same quoting rules
                end = self._source.find("'", self._pos + 1)
                end = len(self._source) - 1 if end < 0 else end
                chars.append(self._source[self._pos : end + 1])
                self._pos = end + 1
                continue
            chars.append(ch)
            self._pos += 1
        style = "".join(chars).strip()
        return style or None

    def _parse_branching(
        self, name: str, kind: ArgumentKind, depth: int, start: int, in_plural: bool
    ) -> Branching:
        self._expect(",")
        self._skip_whitespace()
        offset = Decimal(0)
        if kind is not ArgumentKind.SELECT and self._source.startswith("offset:", self._pos):
            self._pos += len("offset:")
            self._skip_whitespace()
            offset = self._read_number()
            self._skip_whitespace()

        branches: list[tuple[str, Pattern]] = []
        seen: set[str] = set()
        while self._peek() not in ("}", None):
            selector = self._read_selector(kind)
            self._skip_whitespace()
            self._expect("{")
            # select branches inherit '#' handling from an enclosing plural
            body = self._parse_pattern(
                depth, in_plural=in_plural or kind is not ArgumentKind.SELECT
            )
            self._expect("}")
            self._skip_whitespace()
            # First occurrence of a duplicate selector wins, as in ICU
            if selector not in seen:
                seen.add(selector)
                branches.append((selector, body))
        self._expect("}")

        if "other" not in seen:
            raise MessageFormatError(
                ErrorTemplate.other_branch_missing(name, kind.value, start),
                template=self._source,
            )
        return Branching(name, kind, tuple(branches), offset)

    def _read_selector(self, kind: ArgumentKind) -> str:
        if self._peek() == "=" and kind is not ArgumentKind.SELECT:
            self._pos += 1
            return _exact_selector(self._read_number())
        selector = self._read_word()
        if not selector:
            self._fail("expected branch selector")
        return selector

    def _read_number(self) -> Decimal:
        start = self._pos
        if self._peek() in ("-", "+"):
            self._pos += 1
        while (ch := self._peek()) is not None and (ch.isdigit() or ch == "."):
            self._pos += 1
        try:
            return Decimal(self._source[start : self._pos])
        except InvalidOperation:
            self._fail("expected number")


@functools.lru_cache(maxsize=MAX_TEMPLATE_CACHE_SIZE)
def parse_template(template: str) -> Pattern:
    """Parse an ICU template into an immutable Pattern.

    Results are cached; parse failures are not.

    Raises:
        MessageFormatError: If the template is malformed
    """
    return _TemplateParser(template).parse()


# ============================================================================
# RENDERING
# ============================================================================


def _as_number(value: object) -> Number | None:
    """Coerce a parameter to a finite number, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            return None
    if isinstance(value, Decimal):
        if value.is_finite() and abs(value.adjusted()) <= MAX_NUMBER_EXPONENT:
            return value
    return None


class _Renderer:
    """Renders one Pattern against one parameter set."""

    __slots__ = ("_locale", "_params")

    def __init__(self, params: Mapping[str, object], locale: Locale) -> None:
        self._params = params
        self._locale = locale

    def render(self, pattern: Pattern, pound: Number | None = None) -> str:
        parts: list[str] = []
        for node in pattern:
            match node:
                case Text(value=value):
                    parts.append(value)
                case Pound():
                    parts.append("#" if pound is None else self._number(pound))
                case Argument(kind=ArgumentKind.SIMPLE, name=name):
                    if name in self._params:
                        parts.append(self._simple(self._params[name]))
                    else:
                        parts.append(f"{{{name}}}")
                case Argument():
                    parts.append(self._typed(node))
                case Branching(kind=ArgumentKind.SELECT):
                    parts.append(self._select(node, pound))
                case Branching():
                    parts.append(self._plural(node))
        return "".join(parts)

    def _number(self, value: Number, pattern: str | None = None) -> str:
        return str(babel_numbers.format_decimal(value, format=pattern, locale=self._locale))

    def _simple(self, value: object) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return format_bool(value)
        if isinstance(value, (int, float, Decimal)):
            number = _as_number(value)
            # NaN and infinities have no locale form
            return self._number(number) if number is not None else str(value)
        if isinstance(value, datetime):
            return str(babel_dates.format_datetime(value, locale=self._locale))
        if isinstance(value, date):
            return str(babel_dates.format_date(value, locale=self._locale))
        return str(value)

    def _required(self, name: str, kind: ArgumentKind) -> object:
        if name not in self._params or self._params[name] is None:
            raise MessageFormatError(ErrorTemplate.argument_missing(name, kind.value))
        return self._params[name]

    def _typed(self, node: Argument) -> str:
        value = self._required(node.name, node.kind)
        try:
            if node.kind is ArgumentKind.NUMBER:
                number = _as_number(value)
                if number is None:
                    raise MessageFormatError(
                        ErrorTemplate.argument_type_mismatch(
                            node.name, "a number", type(value).__name__
                        )
                    )
                return self._format_number_style(number, node.style)
            return self._format_temporal(node, value)
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            raise MessageFormatError(
                ErrorTemplate.value_formatting_failed(node.name, str(e))
            ) from e

    def _format_number_style(self, number: Number, style: str | None) -> str:
        match style:
            case None:
                return self._number(number)
            case "integer":
                return self._number(number, "#,##0")
            case "percent":
                return str(babel_numbers.format_percent(number, locale=self._locale))
            case _:
                return self._number(number, style)

    def _format_temporal(self, node: Argument, value: object) -> str:
        style = node.style or "medium"
        if node.kind is ArgumentKind.DATE:
            if not isinstance(value, date):
                raise MessageFormatError(
                    ErrorTemplate.argument_type_mismatch(
                        node.name, "a date or datetime", type(value).__name__
                    )
                )
            return str(babel_dates.format_date(value, format=style, locale=self._locale))

        if not isinstance(value, (datetime, time)):
            raise MessageFormatError(
                ErrorTemplate.argument_type_mismatch(
                    node.name, "a time or datetime", type(value).__name__
                )
            )
        return str(babel_dates.format_time(value, format=style, locale=self._locale))

    def _plural(self, node: Branching) -> str:
        value = self._required(node.name, node.kind)
        number = _as_number(value)
        if number is None:
            raise MessageFormatError(
                ErrorTemplate.argument_type_mismatch(node.name, "a number", type(value).__name__)
            )

        # Exact "=N" selectors compare the raw value; keywords use value - offset
        exact = node.branch(_exact_selector(number))
        adjusted: Number = Decimal(str(number)) - node.offset if node.offset else number
        if exact is not None:
            return self.render(exact, adjusted)

        try:
            category = select_plural_category(
                adjusted,
                str(self._locale),
                ordinal=node.kind is ArgumentKind.SELECTORDINAL,
            )
        except (ValueError, OverflowError, ArithmeticError) as e:
            raise MessageFormatError(
                ErrorTemplate.value_formatting_failed(node.name, str(e))
            ) from e
        chosen = node.branch(category)
        if chosen is None:
            chosen = node.branch("other")
        return self.render(chosen if chosen is not None else (), adjusted)

    def _select(self, node: Branching, pound: Number | None) -> str:
        value = self._params.get(node.name)
        key = format_bool(value) if isinstance(value, bool) else str(value)
        chosen = node.branch(key) if value is not None else None
        if chosen is None:
            chosen = node.branch("other")
        return self.render(chosen if chosen is not None else (), pound)


class MessageFormatter:
    """Default ICU formatter.

    Stateless apart from the shared template parse cache, so one instance
    can serve any number of pipelines and threads.

    Example:
        >>> formatter = MessageFormatter()
        >>> formatter.format("{n, plural, one{# file} other{# files}}", {"n": 3}, "en")
        '3 files'
    """

    __slots__ = ()

    def format(self, template: str, params: Mapping[str, object], language: str) -> str:
        """Format template with params using language's CLDR data.

        Args:
            template: ICU message template
            params: Argument values by name
            language: Language code (BCP-47 or POSIX)

        Returns:
            Formatted string

        Raises:
            MessageFormatError: If the template is malformed or an argument
                is missing or unusable
        """
        try:
            pattern = parse_template(template)
            return _Renderer(params, self._resolve_locale(language)).render(pattern)
        except MessageFormatError as e:
            raise MessageFormatError(
                e.diagnostic if e.diagnostic is not None else str(e),
                template=template,
                language=language,
            ) from e

    @staticmethod
    def _resolve_locale(language: str) -> Locale:
        try:
            return get_babel_locale(language)
        except (UnknownLocaleError, ValueError) as e:
            logger.warning(
                "Unknown language '%s': %s. Formatting with %s", language, e, FALLBACK_LANGUAGE
            )
            return get_babel_locale(FALLBACK_LANGUAGE)

    def __repr__(self) -> str:
        return "MessageFormatter()"
