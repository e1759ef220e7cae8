"""Domain exception hierarchy for validated strings.

Exceptions carry a machine-readable error code and structured context so
callers can report a rejected input consistently without re-deriving what
went wrong.

Example:
    >>> from verba.foundation.domain import Handle, ParseFailure
    >>> try:
    ...     Handle.parse(".bad")
    ... except ParseFailure as exc:
    ...     exc.kind, exc.original_input
    (<Kind.HANDLE: 'handle'>, '.bad')
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from verba.foundation.domain.kinds import Kind

__all__ = [
    "ConfigurationError",
    "DomainError",
    "ParseFailure",
    "ValidationError",
]


class DomainError(Exception):
    """Base class for all domain errors.

    Attributes:
        error_code: Machine-readable error code for client handling.
        message: Human-readable error description.
        context: Structured debugging information (kind, field names).

    Example:
        >>> raise DomainError("Operation failed", context={"kind": "handle"})
        DomainError: Operation failed (kind=handle)
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize domain error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Structured debugging information. Keys should be snake_case.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class ValidationError(DomainError):
    """Raised when input fails domain validation rules.

    Attributes:
        error_code: "VALIDATION_ERROR" (class constant).
        field: Field or kind that failed validation.
        reason: Human-readable validation failure reason.

    Example:
        >>> raise ValidationError("bio", "Bio must not contain lone surrogates")
        ValidationError: Validation failed for 'bio': Bio must not contain lone surrogates
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        field: str,
        reason: str,
        **extra_context: Any,
    ) -> None:
        """Initialize validation error.

        Args:
            field: Field path that failed validation. Supports dot notation
                   for nested fields (e.g., "profile.handle").
            reason: Human-readable validation failure reason.
            **extra_context: Additional debugging context.
        """
        self.field = field
        self.reason = reason
        message = f"Validation failed for '{field}': {reason}"
        context = {
            "field": field,
            "reason": reason,
            **extra_context,
        }
        super().__init__(message, context)


class ParseFailure(ValidationError, ValueError):
    """Raised when raw input does not match a kind's grammar end to end.

    Also a ``ValueError``, so it surfaces as a regular validation error
    inside pydantic validators.

    Attributes:
        error_code: "PARSE_FAILURE" (class constant).
        kind: The kind whose grammar rejected the input.
        original_input: The exact input that was rejected, unmodified.

    Example:
        >>> raise ParseFailure(Kind.HANDLE, ".bad")
        ParseFailure: Validation failed for 'handle': input does not match the handle grammar
    """

    error_code: str = "PARSE_FAILURE"

    def __init__(self, kind: Kind, original_input: str | bytes | object) -> None:
        """Initialize parse failure.

        Args:
            kind: Kind whose grammar rejected the input.
            original_input: The rejected input, kept verbatim.
        """
        self.kind = kind
        self.original_input = original_input
        super().__init__(
            str(kind),
            f"input does not match the {kind} grammar",
            kind=str(kind),
            original_input=repr(original_input),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseFailure):
            return NotImplemented
        return self.kind == other.kind and self.original_input == other.original_input

    def __hash__(self) -> int:
        try:
            return hash((self.kind, self.original_input))
        except TypeError:
            # Unhashable input: equal failures still share the kind.
            return hash(self.kind)

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (self.kind, self.original_input))


class ConfigurationError(DomainError):
    """Raised when validated kinds or generators are wired up incorrectly.

    Raised while classes, strategies or generators are being composed, never
    while parsing input.

    Attributes:
        error_code: "CONFIGURATION_ERROR" (class constant).
        reason: Description of the misconfiguration.

    Example:
        >>> raise ConfigurationError("Kind has no complement grammar", kind="free_text")
        ConfigurationError: Configuration error: Kind has no complement grammar (kind=free_text)
    """

    error_code: str = "CONFIGURATION_ERROR"

    def __init__(self, reason: str, **context: Any) -> None:
        """Initialize configuration error.

        Args:
            reason: Description of the misconfiguration.
            **context: Additional debugging context (e.g., kind, class_name).
        """
        self.reason = reason
        super().__init__(f"Configuration error: {reason}", context)
