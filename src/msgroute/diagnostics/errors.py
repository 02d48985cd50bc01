"""msgroute exception hierarchy with structured diagnostics.

Two kinds of failure exist. Misconfiguration (no source for a category, an
unusable source descriptor) is fatal and propagates to the caller. Data
problems (translation miss, bad template, unmatched placeholder) degrade to
unformatted text; MessageFormatError exists only so formatters can report
failure to the pipeline, which never lets it escape.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .codes import Diagnostic


class MessageRouteError(Exception):
    """Base exception for all msgroute errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MessageRouteError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class NoSourceForCategoryError(MessageRouteError):
    """No registered pattern (exact, prefix or catch-all) matches a category.

    Attributes:
        category: The category that could not be resolved
    """

    def __init__(self, message: str | Diagnostic, *, category: str) -> None:
        super().__init__(message)
        self.category = category


class InvalidDescriptorError(MessageRouteError):
    """A source descriptor cannot be turned into a message source.

    Raised when the type tag is missing, unknown to the factory, or the
    registered constructor rejects the descriptor options.

    Attributes:
        descriptor: The offending descriptor or raw configuration mapping
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        descriptor: object | Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.descriptor = descriptor


class MessageFormatError(MessageRouteError):
    """A formatter could not format a template.

    The pipeline catches this and returns the unformatted template.

    Attributes:
        template: The template being formatted ("" when unknown)
        language: Language the template was formatted for ("" when unknown)
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        template: str = "",
        language: str = "",
    ) -> None:
        super().__init__(message)
        self.template = template
        self.language = language
