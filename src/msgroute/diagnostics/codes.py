"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
msgroute exception.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Resolution errors (category has no message source)
        2000-2999: Configuration errors (descriptors, factory)
        3000-3999: Formatting errors (ICU templates and arguments)
    """

    # Resolution errors (1000-1999)
    NO_SOURCE_FOR_CATEGORY = 1001

    # Configuration errors (2000-2999)
    DESCRIPTOR_TYPE_MISSING = 2001
    SOURCE_TYPE_UNKNOWN = 2002
    SOURCE_CONSTRUCTION_FAILED = 2003

    # Formatting errors (3000-3999)
    TEMPLATE_SYNTAX = 3001
    TEMPLATE_TOO_DEEP = 3002
    ARGUMENT_MISSING = 3003
    ARGUMENT_TYPE_MISMATCH = 3004
    ARGUMENT_KIND_UNKNOWN = 3005
    OTHER_BRANCH_MISSING = 3006
    VALUE_FORMATTING_FAILED = 3007


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        position: Character offset in the template (formatting errors only)
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    position: int | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[NO_SOURCE_FOR_CATEGORY]: Unable to locate message source for category 'billing'
              = help: Register an exact, prefix ('billing*') or catch-all ('*') binding

        Returns:
            Formatted error message
        """
        lines = [f"error[{self.code.name}]: {self.message}"]
        if self.position is not None:
            lines.append(f"  --> position {self.position}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
