"""Message source protocol and the in-memory implementation.

A message source answers one question: what is the translation of a message
key within a category for a language. It never formats and never raises on
a missing translation; None is the miss signal.

Components:
    MessageSource - Protocol for translation providers (structural typing)
    InMemoryMessageSource - Catalog held in nested Python mappings

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from msgroute.constants import DEFAULT_LANGUAGE
from msgroute.locale_utils import language_candidates, normalize_locale
from msgroute.localization.types import Category, LanguageCode, MessageKey

__all__ = ["InMemoryMessageSource", "MessageSource"]

logger = logging.getLogger(__name__)

type Catalog = Mapping[LanguageCode, Mapping[Category, Mapping[MessageKey, str]]]


class MessageSource(Protocol):
    """Protocol for translation providers bound to category patterns.

    This is a Protocol (structural typing) rather than ABC so that adapters
    around gettext catalogs, database tables or remote services can be bound
    without inheriting from anything in msgroute.

    Example:
        >>> class UppercaseSource:
        ...     source_language = "en_us"
        ...     def translate(self, category, key, language):
        ...         return key.upper() if language == "shout" else None
        >>> pipeline = MessagePipeline({"*": UppercaseSource()})
    """

    @property
    def source_language(self) -> LanguageCode:
        """Language the untranslated message keys are written in."""
        ...

    def translate(
        self, category: Category, key: MessageKey, language: LanguageCode
    ) -> str | None:
        """Return the translation of key, or None when there is none.

        Args:
            category: Category the key belongs to
            key: Message text in the source language
            language: Requested language

        Returns:
            Translated template, or None on a miss
        """
        ...


@dataclass(frozen=True, slots=True)
class InMemoryMessageSource:
    """Message source backed by nested mappings.

    Catalog layout is ``{language: {category: {key: translation}}}``.
    Language keys are normalized at construction, so "de-DE", "de_DE" and
    "de_de" address the same catalog.

    Lookup rules:
        - The normalized requested language is tried first, then its
          primary subtag ("pt_br" falls back to "pt").
        - An empty translation counts as a miss.
        - Requesting source_language is a miss unless force_translation is
          set: keys are already written in that language.

    Example:
        >>> source = InMemoryMessageSource(
        ...     messages={"de": {"app": {"Hello, {name}!": "Hallo, {name}!"}}}
        ... )
        >>> source.translate("app", "Hello, {name}!", "de-AT")
        'Hallo, {name}!'
        >>> source.translate("app", "Hello, {name}!", "en_us") is None
        True

    Attributes:
        source_language: Language of the message keys
        messages: Read-only catalog after construction
        force_translation: Consult the catalog even for source_language
    """

    source_language: LanguageCode = DEFAULT_LANGUAGE
    messages: Catalog = field(default_factory=dict, hash=False)
    force_translation: bool = False

    def __post_init__(self) -> None:
        """Validate source_language and freeze a normalized copy of the catalog.

        Raises:
            ValueError: If source_language is empty or the catalog is malformed
        """
        if not isinstance(self.source_language, str) or not self.source_language.strip():
            msg = f"source_language must be a non-empty string, got {self.source_language!r}"
            raise ValueError(msg)
        if not isinstance(self.messages, Mapping):
            msg = f"messages must be a mapping, got {type(self.messages).__name__}"
            raise ValueError(msg)

        catalog: dict[LanguageCode, dict[Category, dict[MessageKey, str]]] = {}
        for language, categories in self.messages.items():
            if not isinstance(categories, Mapping):
                msg = f"Catalog for language {language!r} must be a mapping of categories"
                raise ValueError(msg)
            merged = catalog.setdefault(normalize_locale(language), {})
            for category, entries in categories.items():
                merged.setdefault(category, {}).update(entries)

        object.__setattr__(
            self,
            "messages",
            MappingProxyType(
                {
                    language: MappingProxyType(
                        {cat: MappingProxyType(entries) for cat, entries in categories.items()}
                    )
                    for language, categories in catalog.items()
                }
            ),
        )

    def translate(
        self, category: Category, key: MessageKey, language: LanguageCode
    ) -> str | None:
        """Look up the translation of key; None on a miss."""
        if not self.force_translation and normalize_locale(language) == normalize_locale(
            self.source_language
        ):
            return None

        for candidate in language_candidates(language):
            translation = self.messages.get(candidate, {}).get(category, {}).get(key)
            if translation:
                return translation

        logger.debug("No '%s' translation for '%s' in category '%s'", language, key, category)
        return None

    @property
    def languages(self) -> tuple[LanguageCode, ...]:
        """Normalized languages present in the catalog."""
        return tuple(self.messages)
