"""msgroute - category-routed message translation with ICU formatting.

Resolves a message category to the message source bound to it (exact name,
"prefix*" wildcard or the "*" catch-all), looks up the translation of a
message in that source and substitutes parameters, using Babel-backed ICU
MessageFormat when the message contains ICU argument syntax.

Public API:
    MessagePipeline - translate(category, message, params, language)
    CategoryResolver - Category -> message source resolution and caching
    InMemoryMessageSource - Message source backed by Python mappings
    SourceDescriptor - Lazy source configuration (type tag + options)
    SourceFactory - Type tag -> constructor registry realizing descriptors
    MessageFormatter - Default ICU formatter
    t - Translate through the process-wide pipeline (see get_instance)

Exceptions:
    MessageRouteError - Base exception class
    NoSourceForCategoryError - No binding matches a category
    InvalidDescriptorError - A descriptor cannot be realized
    MessageFormatError - A formatter failed (handled inside the pipeline)

Submodules:
    msgroute.localization - Pipeline, resolver, sources, factory, default holder
    msgroute.runtime - Formatter, plural rules, RWLock
    msgroute.diagnostics - Error types and diagnostic codes
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .diagnostics import (
    InvalidDescriptorError,
    MessageFormatError,
    MessageRouteError,
    NoSourceForCategoryError,
)
from .localization import (
    CategoryResolver,
    InMemoryMessageSource,
    MessagePipeline,
    MessageSource,
    SourceDescriptor,
    SourceFactory,
    get_instance,
    release_instance,
    set_instance,
    t,
)
from .runtime import Formatter, MessageFormatter

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("msgroute")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CategoryResolver",
    "Formatter",
    "InMemoryMessageSource",
    "InvalidDescriptorError",
    "MessageFormatError",
    "MessageFormatter",
    "MessagePipeline",
    "MessageRouteError",
    "MessageSource",
    "NoSourceForCategoryError",
    "SourceDescriptor",
    "SourceFactory",
    "__version__",
    "get_instance",
    "release_instance",
    "set_instance",
    "t",
]
