"""Category-routed localization package.

Provides the full localization stack: type aliases, message sources, the
descriptor factory, the category resolver and the translate-then-format
pipeline.

Submodules:
    types    - PEP 695 type aliases (Category, CategoryPattern, MessageKey, ...)
    sources  - MessageSource protocol, InMemoryMessageSource
    factory  - SourceDescriptor, SourceFactory, default and shared factories
    resolver - CategoryResolver, ResolutionInfo
    pipeline - MessagePipeline, MissInfo
    default  - Optional process-wide pipeline and the t() shortcut

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from msgroute.enums import MatchKind
from msgroute.localization.default import get_instance, release_instance, set_instance, t
from msgroute.localization.factory import (
    SourceConstructor,
    SourceDescriptor,
    SourceFactory,
    create_default_factory,
    get_shared_factory,
)
from msgroute.localization.pipeline import MessagePipeline, MissInfo
from msgroute.localization.resolver import CategoryResolver, ResolutionInfo, SourceHandle
from msgroute.localization.sources import InMemoryMessageSource, MessageSource
from msgroute.localization.types import (
    Category,
    CategoryPattern,
    LanguageCode,
    MessageKey,
    TypeTag,
)

__all__ = [
    # Pipeline and resolution
    "MessagePipeline",
    "CategoryResolver",
    # Sources
    "MessageSource",
    "InMemoryMessageSource",
    # Descriptors and factory
    "SourceConstructor",
    "SourceDescriptor",
    "SourceFactory",
    "SourceHandle",
    "create_default_factory",
    "get_shared_factory",
    # Observability
    "MatchKind",
    "MissInfo",
    "ResolutionInfo",
    # Default instance
    "get_instance",
    "release_instance",
    "set_instance",
    "t",
    # Type aliases for user code type annotations
    "Category",
    "CategoryPattern",
    "LanguageCode",
    "MessageKey",
    "TypeTag",
]
