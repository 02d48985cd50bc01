"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating MessagePipeline call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "Category",
    "CategoryPattern",
    "LanguageCode",
    "MessageKey",
    "TypeTag",
]

type Category = str
"""Logical message namespace (e.g., 'app', 'app/errors', 'yii')."""

type CategoryPattern = str
"""Registry key: an exact category, a 'prefix*' wildcard or the catch-all '*'."""

type MessageKey = str
"""Message text in the source language, used as the lookup key."""

type LanguageCode = str
"""BCP-47 or POSIX language code (e.g., 'en_us', 'de-DE', 'ru')."""

type TypeTag = str
"""Name under which a source constructor is registered in a SourceFactory."""
