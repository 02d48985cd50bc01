"""Source descriptors and the type-tag factory that realizes them.

A binding may name its message source lazily, as configuration, instead of
as a live object. The configuration is a SourceDescriptor: a type tag plus
constructor options. A SourceFactory maps type tags to constructors and
turns descriptors into sources on demand. Only registered constructors can
ever be invoked; nothing is imported or looked up by name.

Components:
    SourceDescriptor - Inert (type, options) pair
    SourceFactory - Registry of type tag -> constructor
    create_default_factory - Fresh factory with the built-in "memory" type
    get_shared_factory - Frozen process-wide default factory

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from msgroute.diagnostics import ErrorTemplate, InvalidDescriptorError
from msgroute.localization.sources import InMemoryMessageSource, MessageSource
from msgroute.localization.types import TypeTag

__all__ = [
    "SourceConstructor",
    "SourceDescriptor",
    "SourceFactory",
    "create_default_factory",
    "get_shared_factory",
]

logger = logging.getLogger(__name__)

type SourceConstructor = Callable[..., MessageSource]
"""Callable accepting descriptor options as keyword arguments."""

# Key holding the type tag in plain configuration mappings.
TYPE_KEY = "type"


@dataclass(frozen=True, slots=True)
class SourceDescriptor:
    """Unrealized message source: a type tag and constructor options.

    Example:
        >>> SourceDescriptor("memory", {"source_language": "en"})
        SourceDescriptor(type='memory', options=...)
        >>> SourceDescriptor.from_mapping({"type": "memory", "force_translation": True})
        SourceDescriptor(type='memory', options=...)

    Attributes:
        type: Factory type tag naming the constructor
        options: Keyword arguments passed to the constructor
    """

    type: TypeTag
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        """Validate the tag and freeze a copy of the options.

        Raises:
            InvalidDescriptorError: If type is not a non-empty string
        """
        if not isinstance(self.type, str) or not self.type.strip():
            raise InvalidDescriptorError(
                ErrorTemplate.descriptor_type_missing(), descriptor=self.options
            )
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> SourceDescriptor:
        """Split a configuration mapping into tag and options.

        Every key other than "type" becomes a constructor option.

        Raises:
            InvalidDescriptorError: If the "type" element is missing, empty
                or not a string
        """
        type_tag = config.get(TYPE_KEY)
        if not isinstance(type_tag, str) or not type_tag.strip():
            raise InvalidDescriptorError(ErrorTemplate.descriptor_type_missing(), descriptor=config)
        return cls(type_tag, {key: value for key, value in config.items() if key != TYPE_KEY})


class SourceFactory:
    """Registry of message source constructors keyed by type tag.

    Supports dict-like introspection:
        - __contains__: Check if a tag is registered (supports 'in' operator)
        - __iter__: Iterate over registered tags
        - __len__: Count registered tags

    Example:
        >>> factory = SourceFactory()
        >>> factory.register("memory", InMemoryMessageSource)
        >>> factory.create(SourceDescriptor("memory", {"source_language": "de"}))
        InMemoryMessageSource(source_language='de', ...)
    """

    __slots__ = ("_constructors", "_frozen")

    def __init__(self) -> None:
        """Initialize empty factory."""
        self._constructors: dict[TypeTag, SourceConstructor] = {}
        self._frozen = False

    def register(self, type_tag: TypeTag, constructor: SourceConstructor) -> None:
        """Register constructor under type_tag, replacing any previous one.

        Raises:
            TypeError: If the factory is frozen or constructor is not callable
            ValueError: If type_tag is empty
        """
        if self._frozen:
            msg = (
                "Cannot modify frozen SourceFactory. "
                "Use create_default_factory() or copy() for a mutable factory."
            )
            raise TypeError(msg)
        if not isinstance(type_tag, str) or not type_tag.strip():
            msg = f"Type tag must be a non-empty string, got {type_tag!r}"
            raise ValueError(msg)
        if not callable(constructor):
            msg = f"Constructor for '{type_tag}' must be callable"
            raise TypeError(msg)

        self._constructors[type_tag] = constructor
        logger.debug("Registered message source type: %s", type_tag)

    def create(self, descriptor: SourceDescriptor | Mapping[str, Any]) -> MessageSource:
        """Construct the message source a descriptor describes.

        Args:
            descriptor: SourceDescriptor, or a plain mapping with a "type" key

        Returns:
            Newly constructed message source

        Raises:
            InvalidDescriptorError: If the tag is missing or unknown, or the
                constructor rejects the options
        """
        if not isinstance(descriptor, SourceDescriptor):
            descriptor = SourceDescriptor.from_mapping(descriptor)

        constructor = self._constructors.get(descriptor.type)
        if constructor is None:
            raise InvalidDescriptorError(
                ErrorTemplate.source_type_unknown(descriptor.type, tuple(self._constructors)),
                descriptor=descriptor,
            )

        try:
            source = constructor(**descriptor.options)
        except (TypeError, ValueError) as e:
            raise InvalidDescriptorError(
                ErrorTemplate.source_construction_failed(descriptor.type, str(e)),
                descriptor=descriptor,
            ) from e

        logger.info("Created message source of type '%s'", descriptor.type)
        return source

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        """True once freeze() has been called."""
        return self._frozen

    def copy(self) -> SourceFactory:
        """Return an unfrozen shallow copy sharing the same constructors."""
        new_factory = SourceFactory()
        new_factory._constructors = self._constructors.copy()
        return new_factory

    def __contains__(self, type_tag: object) -> bool:
        return type_tag in self._constructors

    def __iter__(self) -> Iterator[TypeTag]:
        return iter(self._constructors)

    def __len__(self) -> int:
        return len(self._constructors)

    def __repr__(self) -> str:
        frozen = ", frozen" if self._frozen else ""
        return f"SourceFactory(types={list(self._constructors)!r}{frozen})"


def create_default_factory() -> SourceFactory:
    """Create a new SourceFactory with the built-in source types registered.

    Registered types:
        memory: InMemoryMessageSource(source_language=..., messages=...,
            force_translation=...)

    See Also:
        get_shared_factory: Returns the frozen process-wide factory.
    """
    factory = SourceFactory()
    factory.register("memory", InMemoryMessageSource)
    return factory


# Initialized lazily on first access to avoid import-time side effects.
_SHARED_FACTORY: SourceFactory | None = None


def get_shared_factory() -> SourceFactory:
    """Get the shared, frozen SourceFactory with the built-in source types.

    The returned factory is FROZEN: register() raises TypeError. To add
    custom types use copy() or create_default_factory().
    """
    global _SHARED_FACTORY  # noqa: PLW0603
    if _SHARED_FACTORY is None:
        factory = create_default_factory()
        factory.freeze()
        _SHARED_FACTORY = factory
    return _SHARED_FACTORY
