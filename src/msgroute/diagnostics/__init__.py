"""Diagnostic system for msgroute errors.

Provides structured error diagnostics with codes and hints, and the
exception hierarchy that carries them.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    InvalidDescriptorError,
    MessageFormatError,
    MessageRouteError,
    NoSourceForCategoryError,
)
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "InvalidDescriptorError",
    "MessageFormatError",
    "MessageRouteError",
    "NoSourceForCategoryError",
]
