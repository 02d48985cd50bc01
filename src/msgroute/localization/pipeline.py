"""Translate-then-format pipeline.

MessagePipeline ties category resolution, translation lookup and parameter
formatting together:

    translate(category, message, params, language)
        -> CategoryResolver.resolve(category)
        -> MessageSource.translate(category, message, language)
        -> format(translation or message, params, language or source language)

Formatting has two tiers. Templates containing ICU argument syntax
("{name," somewhere) go to the Formatter; everything else gets single-pass
"{name}" substitution. A translation miss or a formatting failure degrades
to less-processed text and is never raised to the caller.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from msgroute.constants import DEFAULT_LANGUAGE, ICU_SYNTAX_RE
from msgroute.diagnostics import MessageFormatError
from msgroute.locale_utils import normalize_locale
from msgroute.localization.factory import SourceFactory
from msgroute.localization.resolver import CategoryResolver, ResolutionInfo, SourceHandle
from msgroute.localization.sources import MessageSource
from msgroute.localization.types import Category, CategoryPattern, LanguageCode, MessageKey
from msgroute.runtime.formatter import Formatter, MessageFormatter, format_bool

__all__ = ["MessagePipeline", "MissInfo"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MissInfo:
    """Information about a translation miss.

    Provided to the on_miss callback when a source has no translation for a
    message in a language other than its source language.

    Attributes:
        category: Category of the message
        message: The untranslated message key
        requested_language: Language the caller asked for
        source_language: Language the message was formatted in instead
    """

    category: Category
    message: MessageKey
    requested_language: LanguageCode
    source_language: LanguageCode


def normalize_params(params: object) -> dict[str, object]:
    """Coerce caller parameters to a name -> value dict.

    None becomes {}, mappings get str keys, lists and tuples become
    positional {"0": ..., "1": ...}, and any other value becomes {"0": value}.

    Example:
        >>> normalize_params(["a", "b"])
        {'0': 'a', '1': 'b'}
        >>> normalize_params(42)
        {'0': 42}
    """
    match params:
        case None:
            return {}
        case Mapping():
            return {str(key): value for key, value in params.items()}
        case list() | tuple():
            return {str(index): value for index, value in enumerate(params)}
        case _:
            return {"0": params}


def substitute(message: str, params: Mapping[str, object]) -> str:
    """Replace each {name} whose name is a key of params.

    One left-to-right pass; at each position the longest matching key wins
    and substituted text is never rescanned. Placeholders without a
    parameter stay verbatim. None renders as the empty string and booleans
    as "true" or "false".
    """
    if not params:
        return message
    keys = sorted(params, key=len, reverse=True)
    placeholder = re.compile(
        "|".join(re.escape("{" + key + "}") for key in keys)
    )

    def replace(match: re.Match[str]) -> str:
        value = params[match.group()[1:-1]]
        if value is None:
            return ""
        return format_bool(value) if isinstance(value, bool) else str(value)

    return placeholder.sub(replace, message)


class MessagePipeline:
    """Resolve, translate and format messages by category.

    Example:
        >>> pipeline = MessagePipeline(
        ...     {
        ...         "app*": {
        ...             "type": "memory",
        ...             "messages": {"de": {"app": {"{n} files": "{n} Dateien"}}},
        ...         },
        ...     }
        ... )
        >>> pipeline.translate("app", "{n} files", {"n": 3}, "de")
        '3 Dateien'
        >>> pipeline.translate("app", "{n} files", {"n": 3}, "fr")
        '3 files'

    Attributes:
        resolver: The CategoryResolver owning the binding registry
        formatter: Formatter for ICU-syntax templates (created lazily)
    """

    __slots__ = ("_formatter", "_formatter_lock", "_on_miss", "_resolver")

    def __init__(
        self,
        bindings: Mapping[CategoryPattern, SourceHandle | Mapping[str, Any]] | None = None,
        *,
        factory: SourceFactory | None = None,
        resolver: CategoryResolver | None = None,
        formatter: Formatter | None = None,
        on_resolve: Callable[[ResolutionInfo], None] | None = None,
        on_miss: Callable[[MissInfo], None] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            bindings: Pattern -> source, descriptor or configuration mapping
            factory: Factory realizing descriptors (default: shared factory)
            resolver: Ready-made resolver; exclusive with bindings, factory
                and on_resolve
            formatter: ICU formatter (default: MessageFormatter, created on
                first use)
            on_resolve: Callback passed to the internally built resolver
            on_miss: Optional callback invoked when a source has no
                translation for the requested language

        Raises:
            ValueError: If resolver is combined with bindings, factory or
                on_resolve
        """
        if resolver is not None:
            if bindings is not None or factory is not None or on_resolve is not None:
                msg = "Pass either a resolver or bindings/factory/on_resolve, not both"
                raise ValueError(msg)
            self._resolver = resolver
        else:
            self._resolver = CategoryResolver(bindings, factory=factory, on_resolve=on_resolve)

        self._formatter: Formatter | None = formatter
        self._formatter_lock = threading.Lock()
        self._on_miss = on_miss

    def translate(
        self,
        category: Category,
        message: MessageKey,
        params: object = None,
        language: LanguageCode = DEFAULT_LANGUAGE,
    ) -> str:
        """Translate message and substitute params.

        On a miss the original message is formatted using the source's
        source_language, so plural rules match the language it is written in.

        Args:
            category: Message category
            message: Message text in the source language
            params: Named parameters (see normalize_params for other shapes)
            language: Target language

        Returns:
            Translated and formatted message

        Raises:
            NoSourceForCategoryError: If no binding matches category
            InvalidDescriptorError: If the matching source cannot be realized
        """
        source = self._resolver.resolve(category)
        translation = source.translate(category, message, language)
        if translation is not None:
            return self.format(translation, params, language)

        if self._on_miss is not None and normalize_locale(language) != normalize_locale(
            source.source_language
        ):
            self._on_miss(MissInfo(category, message, language, source.source_language))
        return self.format(message, params, source.source_language)

    def format(self, message: str, params: object, language: LanguageCode) -> str:
        """Substitute params into message.

        Returns message unchanged when there are no params. ICU-syntax
        messages go to the formatter and come back unformatted if it fails.

        Args:
            message: Template text
            params: Parameters (normalized via normalize_params)
            language: Language for locale-sensitive formatting

        Returns:
            Formatted message; never raises for bad templates
        """
        arguments = normalize_params(params)
        if not arguments:
            return message

        if ICU_SYNTAX_RE.search(message) is None:
            return substitute(message, arguments)

        try:
            return self.get_formatter().format(message, arguments, language)
        except MessageFormatError as e:
            logger.warning("Formatting '%s' for '%s' failed: %s", message, language, e)
            return message

    def get_formatter(self) -> Formatter:
        """Return the formatter, creating the default MessageFormatter if unset."""
        formatter = self._formatter
        if formatter is not None:
            return formatter
        with self._formatter_lock:
            formatter = self._formatter
            if formatter is None:
                formatter = self._formatter = MessageFormatter()
                logger.debug("Created default MessageFormatter")
            return formatter

    def set_formatter(self, formatter: Formatter | None) -> None:
        """Replace the formatter; None restores lazy default construction."""
        with self._formatter_lock:
            self._formatter = formatter

    @property
    def formatter(self) -> Formatter:
        """Formatter used for ICU-syntax templates."""
        return self.get_formatter()

    @formatter.setter
    def formatter(self, formatter: Formatter | None) -> None:
        self.set_formatter(formatter)

    def resolve_source(self, category: Category) -> MessageSource:
        """Return the message source bound to category.

        Raises:
            NoSourceForCategoryError: If no binding matches category
            InvalidDescriptorError: If the matching source cannot be realized
        """
        return self._resolver.resolve(category)

    def register_source(
        self, pattern: CategoryPattern, source: SourceHandle | Mapping[str, Any]
    ) -> None:
        """Add or replace a binding (see CategoryResolver.register)."""
        self._resolver.register(pattern, source)

    @property
    def resolver(self) -> CategoryResolver:
        """The CategoryResolver owning the binding registry."""
        return self._resolver

    def __repr__(self) -> str:
        return f"MessagePipeline(resolver={self._resolver!r})"
