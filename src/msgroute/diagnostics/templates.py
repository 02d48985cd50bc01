"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here, so exception constructors never
    build their own text and every failure mode is listed in one place.
    """

    @staticmethod
    def no_source_for_category(category: str) -> Diagnostic:
        """No exact, prefix or catch-all binding matched.

        Args:
            category: The category that could not be resolved

        Returns:
            Diagnostic for NO_SOURCE_FOR_CATEGORY
        """
        msg = f"Unable to locate message source for category '{category}'"
        return Diagnostic(
            code=DiagnosticCode.NO_SOURCE_FOR_CATEGORY,
            message=msg,
            hint=f"Register an exact, prefix ('{category}*') or catch-all ('*') binding",
        )

    @staticmethod
    def descriptor_type_missing() -> Diagnostic:
        """Descriptor configuration has no type tag."""
        return Diagnostic(
            code=DiagnosticCode.DESCRIPTOR_TYPE_MISSING,
            message="Source configuration must contain a non-empty 'type' element",
            hint="Add a type tag such as {'type': 'memory', ...}",
        )

    @staticmethod
    def source_type_unknown(type_tag: str, known: tuple[str, ...]) -> Diagnostic:
        """Type tag not registered in the factory.

        Args:
            type_tag: The unknown tag
            known: Tags the factory does know

        Returns:
            Diagnostic for SOURCE_TYPE_UNKNOWN
        """
        msg = f"Unknown message source type '{type_tag}'"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TYPE_UNKNOWN,
            message=msg,
            hint=f"Known types: {', '.join(known) or '<none>'}",
        )

    @staticmethod
    def source_construction_failed(type_tag: str, reason: str) -> Diagnostic:
        """Constructor rejected the descriptor options.

        Args:
            type_tag: Tag of the constructor that failed
            reason: Error text reported by the constructor

        Returns:
            Diagnostic for SOURCE_CONSTRUCTION_FAILED
        """
        msg = f"Cannot construct message source '{type_tag}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_CONSTRUCTION_FAILED,
            message=msg,
            hint="Check the option names and values in the source configuration",
        )

    @staticmethod
    def template_syntax(detail: str, position: int) -> Diagnostic:
        """Malformed ICU template.

        Args:
            detail: What the parser expected or found
            position: Character offset of the problem

        Returns:
            Diagnostic for TEMPLATE_SYNTAX
        """
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_SYNTAX,
            message=f"Invalid message template: {detail}",
            position=position,
        )

    @staticmethod
    def template_too_deep(max_depth: int, position: int) -> Diagnostic:
        """Template nesting exceeded the configured limit."""
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_TOO_DEEP,
            message=f"Message template nesting exceeds {max_depth} levels",
            position=position,
        )

    @staticmethod
    def argument_missing(name: str, kind: str) -> Diagnostic:
        """Selector or typed argument was not supplied.

        Args:
            name: Argument name
            kind: Argument kind (plural, select, number, ...)

        Returns:
            Diagnostic for ARGUMENT_MISSING
        """
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_MISSING,
            message=f"Argument '{name}' required by '{kind}' was not provided",
            hint=f"Pass '{name}' in the message parameters",
        )

    @staticmethod
    def argument_type_mismatch(name: str, expected: str, received: str) -> Diagnostic:
        """Argument value has the wrong type for its kind."""
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_TYPE_MISMATCH,
            message=f"Argument '{name}' must be {expected}, got {received}",
        )

    @staticmethod
    def argument_kind_unknown(name: str, kind: str, position: int) -> Diagnostic:
        """Argument uses a type keyword outside the supported set."""
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_KIND_UNKNOWN,
            message=f"Unsupported argument type '{kind}' for '{name}'",
            hint="Supported types: number, date, time, plural, selectordinal, select",
            position=position,
        )

    @staticmethod
    def other_branch_missing(name: str, kind: str, position: int) -> Diagnostic:
        """plural/select argument without the mandatory 'other' branch."""
        return Diagnostic(
            code=DiagnosticCode.OTHER_BRANCH_MISSING,
            message=f"'{kind}' argument '{name}' has no 'other' branch",
            position=position,
        )

    @staticmethod
    def value_formatting_failed(name: str, reason: str) -> Diagnostic:
        """Babel rejected a value or a style pattern."""
        return Diagnostic(
            code=DiagnosticCode.VALUE_FORMATTING_FAILED,
            message=f"Formatting argument '{name}' failed: {reason}",
        )
