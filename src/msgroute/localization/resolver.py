"""Category-to-source resolution with lazy realization and caching.

The resolver owns the registry of category pattern -> source bindings. A
binding handle is either a live MessageSource or a SourceDescriptor that is
realized through a SourceFactory the first time a category needs it.

Resolution policy for a category:
    1. Exact: a registry key equal to the category.
    2. Prefix: the first pattern, in registration order, whose first '*' is
       not its first character and whose prefix (trailing '*' stripped) is a
       literal prefix of the category. First match wins, not longest.
    3. Catch-all: the '*' pattern.
    4. Otherwise NoSourceForCategoryError.

A prefix or catch-all hit stores the source under the matched pattern AND
under the category itself, so the next lookup for that category is an exact
hit on the read-locked fast path. Entries are never removed.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from msgroute.constants import CATCH_ALL_PATTERN, WILDCARD
from msgroute.diagnostics import ErrorTemplate, NoSourceForCategoryError
from msgroute.enums import MatchKind
from msgroute.localization.factory import SourceDescriptor, SourceFactory, get_shared_factory
from msgroute.localization.sources import MessageSource
from msgroute.localization.types import Category, CategoryPattern
from msgroute.runtime.rwlock import RWLock

__all__ = ["CategoryResolver", "ResolutionInfo", "SourceHandle"]

logger = logging.getLogger(__name__)

type SourceHandle = MessageSource | SourceDescriptor
"""Registry value: a realized source or a descriptor awaiting realization."""


@dataclass(frozen=True, slots=True)
class ResolutionInfo:
    """Information about a resolution that filled the registry.

    Provided to the on_resolve callback when a category is resolved for the
    first time, or when an exact binding is realized from its descriptor.
    Plain cache hits are not reported.

    Attributes:
        category: The category that was resolved
        pattern: Registry key that matched (equals category for EXACT)
        kind: How the pattern matched

    Example:
        >>> def log_resolution(info: ResolutionInfo) -> None:
        ...     print(f"{info.category} -> {info.pattern} ({info.kind})")
        >>> resolver = CategoryResolver({"app*": source}, on_resolve=log_resolution)
    """

    category: Category
    pattern: CategoryPattern
    kind: MatchKind


def _is_prefix_pattern(pattern: CategoryPattern) -> bool:
    """True when the first wildcard follows at least one literal character."""
    return pattern.find(WILDCARD) > 0


def _coerce_handle(pattern: object, handle: object) -> SourceHandle:
    """Validate a binding and convert plain configuration mappings.

    Raises:
        ValueError: If pattern is not a non-empty string
        TypeError: If handle is neither a source, a descriptor nor a mapping
        InvalidDescriptorError: If a mapping handle has no usable type tag
    """
    if not isinstance(pattern, str) or not pattern:
        msg = f"Category pattern must be a non-empty string, got {pattern!r}"
        raise ValueError(msg)

    match handle:
        case SourceDescriptor():
            return handle
        case Mapping():
            return SourceDescriptor.from_mapping(handle)
        case _ if hasattr(handle, "source_language") and callable(
            getattr(handle, "translate", None)
        ):
            return handle  # type: ignore[return-value]
        case _:
            msg = (
                f"Binding for '{pattern}' must be a MessageSource, SourceDescriptor "
                f"or configuration mapping, got {type(handle).__name__}"
            )
            raise TypeError(msg)


class CategoryResolver:
    """Resolves categories to message sources.

    Thread-safe via double-checked locking on an RWLock: a category whose
    registry slot already holds a live source is served under the read lock;
    scanning, realization and cache insertion happen under the write lock
    after re-checking the slot. Two threads racing on the same new category
    realize its source once.

    Example:
        >>> resolver = CategoryResolver(
        ...     {
        ...         "app/errors": {"type": "memory"},
        ...         "app*": {"type": "memory", "source_language": "de"},
        ...         "*": {"type": "memory"},
        ...     }
        ... )
        >>> resolver.resolve("app/forms").source_language
        'de'
        >>> resolver.is_realized("app/forms")
        True
    """

    __slots__ = ("_factory", "_lock", "_on_resolve", "_registry")

    def __init__(
        self,
        bindings: Mapping[CategoryPattern, SourceHandle | Mapping[str, Any]] | None = None,
        *,
        factory: SourceFactory | None = None,
        on_resolve: Callable[[ResolutionInfo], None] | None = None,
    ) -> None:
        """Initialize the registry from bindings.

        Args:
            bindings: Pattern -> source, descriptor or configuration mapping,
                in priority order for prefix matching
            factory: Factory realizing descriptors (default: shared factory)
            on_resolve: Optional callback invoked after a resolution fills
                the registry; receives a ResolutionInfo

        Raises:
            ValueError: If a pattern is empty or not a string
            TypeError: If a handle has an unsupported type
            InvalidDescriptorError: If a configuration mapping lacks a type tag
        """
        self._registry: dict[CategoryPattern, SourceHandle] = {}
        for pattern, handle in (bindings or {}).items():
            self._registry[pattern] = _coerce_handle(pattern, handle)
        self._factory = factory if factory is not None else get_shared_factory()
        self._on_resolve = on_resolve
        self._lock = RWLock()

    def resolve(self, category: Category) -> MessageSource:
        """Return the message source bound to category.

        Args:
            category: Category to resolve

        Returns:
            Live message source

        Raises:
            NoSourceForCategoryError: If no exact, prefix or catch-all
                binding matches
            InvalidDescriptorError: If the matching descriptor cannot be
                realized
        """
        # Fast path: category already cached as a live source
        with self._lock.read():
            handle = self._registry.get(category)
            if handle is not None and not isinstance(handle, SourceDescriptor):
                return handle

        with self._lock.write():
            source, info = self._resolve_locked(category)

        if info is not None and self._on_resolve is not None:
            self._on_resolve(info)
        return source

    def _resolve_locked(self, category: Category) -> tuple[MessageSource, ResolutionInfo | None]:
        """Resolve under the write lock. Returns the source and what was filled."""
        handle = self._registry.get(category)
        if handle is not None:
            if isinstance(handle, SourceDescriptor):
                source = self._realize(category, handle)
                return source, ResolutionInfo(category, category, MatchKind.EXACT)
            # Another thread filled the slot between our read and write locks
            return handle, None

        matched = next(
            (
                pattern
                for pattern in self._registry
                if _is_prefix_pattern(pattern) and category.startswith(pattern.rstrip(WILDCARD))
            ),
            None,
        )
        if matched is not None:
            return self._bind(category, matched, MatchKind.PREFIX)

        if CATCH_ALL_PATTERN in self._registry:
            return self._bind(category, CATCH_ALL_PATTERN, MatchKind.CATCH_ALL)

        logger.error("Unable to locate message source for category '%s'", category)
        raise NoSourceForCategoryError(
            ErrorTemplate.no_source_for_category(category), category=category
        )

    def _bind(
        self, category: Category, pattern: CategoryPattern, kind: MatchKind
    ) -> tuple[MessageSource, ResolutionInfo]:
        handle = self._registry[pattern]
        if isinstance(handle, SourceDescriptor):
            source = self._realize(pattern, handle)
        else:
            source = handle
        self._registry[category] = source
        logger.debug("Category '%s' resolved via %s pattern '%s'", category, kind, pattern)
        return source, ResolutionInfo(category, pattern, kind)

    def _realize(self, pattern: CategoryPattern, descriptor: SourceDescriptor) -> MessageSource:
        source = self._factory.create(descriptor)
        self._registry[pattern] = source
        logger.info("Realized '%s' message source for pattern '%s'", descriptor.type, pattern)
        return source

    def register(
        self, pattern: CategoryPattern, source: SourceHandle | Mapping[str, Any]
    ) -> None:
        """Add or replace a binding.

        A new pattern is appended, so it loses prefix ties against existing
        patterns. Replacing a pattern keeps its position. Categories already
        resolved through an earlier binding keep their cached source.

        Raises:
            ValueError: If pattern is not a non-empty string
            TypeError: If source has an unsupported type
            InvalidDescriptorError: If a configuration mapping lacks a type tag
        """
        handle = _coerce_handle(pattern, source)
        with self._lock.write():
            self._registry[pattern] = handle
        logger.debug("Registered message source binding: %s", pattern)

    @property
    def bindings(self) -> dict[CategoryPattern, SourceHandle]:
        """Snapshot of the registry in registration order, cache entries included."""
        with self._lock.read():
            return dict(self._registry)

    def is_realized(self, pattern: CategoryPattern) -> bool:
        """Check whether the slot for pattern holds a live source.

        Raises:
            KeyError: If pattern is not in the registry
        """
        with self._lock.read():
            return not isinstance(self._registry[pattern], SourceDescriptor)

    def __contains__(self, pattern: object) -> bool:
        with self._lock.read():
            return pattern in self._registry

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._registry)

    def __repr__(self) -> str:
        with self._lock.read():
            realized = sum(
                1 for handle in self._registry.values() if not isinstance(handle, SourceDescriptor)
            )
            total = len(self._registry)
        return f"CategoryResolver(bindings={total}, realized={realized})"
