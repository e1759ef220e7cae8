"""Verba Foundation Domain -- validated domain string types.

This package provides the runtime surface: kinds, composable character-class
grammars, the validated string value objects built on them, and the domain
exception hierarchy.
"""

from verba.foundation.domain.exceptions import (
    ConfigurationError,
    DomainError,
    ParseFailure,
    ValidationError,
)
from verba.foundation.domain.grammar import (
    ANY_CHAR,
    ASCII_ALPHANUMERIC,
    SCALAR_VALUE,
    UNDERSCORE,
    CharClass,
    Complement,
    Grammar,
    Term,
    many,
    one,
)
from verba.foundation.domain.kinds import (
    FREE_TEXT_GRAMMAR,
    HANDLE_COMPLEMENT,
    HANDLE_GRAMMAR,
    Kind,
)
from verba.foundation.domain.string_value_objects import (
    FreeText,
    Handle,
    ValidatedString,
    kind_type,
    registered_kinds,
)

__all__ = [
    "ANY_CHAR",
    "ASCII_ALPHANUMERIC",
    "FREE_TEXT_GRAMMAR",
    "HANDLE_COMPLEMENT",
    "HANDLE_GRAMMAR",
    "SCALAR_VALUE",
    "UNDERSCORE",
    "CharClass",
    "Complement",
    "ConfigurationError",
    "DomainError",
    "FreeText",
    "Grammar",
    "Handle",
    "Kind",
    "ParseFailure",
    "Term",
    "ValidatedString",
    "ValidationError",
    "kind_type",
    "many",
    "one",
    "registered_kinds",
]
