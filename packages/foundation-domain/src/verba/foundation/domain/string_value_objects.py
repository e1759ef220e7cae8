"""Validated string value objects.

Immutable, validated domain primitives. All validation occurs at
construction time, so holding a ``Handle`` means holding text that already
satisfies the handle grammar.

Each concrete kind is its own class carrying its grammar as class
constants. Classes register themselves by kind when they are defined.

Example:
    >>> Handle.parse("Ab1_2")
    Handle(value='Ab1_2')
    >>> str(FreeText.parse(""))
    ''
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic_core import core_schema

from verba.foundation.domain.exceptions import ConfigurationError, ParseFailure
from verba.foundation.domain.grammar import Complement, Grammar
from verba.foundation.domain.kinds import (
    FREE_TEXT_GRAMMAR,
    HANDLE_COMPLEMENT,
    HANDLE_GRAMMAR,
    Kind,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pydantic import GetCoreSchemaHandler

logger = logging.getLogger(__name__)

_REGISTRY: dict[Kind, type[ValidatedString]] = {}


@dataclass(frozen=True, slots=True)
class ValidatedString:
    """Text known to satisfy the grammar of its kind.

    Subclasses declare ``kind`` and ``grammar`` (and optionally
    ``complement``). The wrapped text is read-only: any change goes through
    ``parse`` again and yields a new instance.

    Attributes:
        value: The validated text, exactly as it was given.

    Raises:
        ParseFailure: If the text does not match the grammar end to end.
    """

    value: str

    kind: ClassVar[Kind]
    grammar: ClassVar[Grammar]
    complement: ClassVar[Complement | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        # slots=True rebuilds this class, so zero-argument super() binds the old one.
        super(ValidatedString, cls).__init_subclass__(**kwargs)
        kind = getattr(cls, "kind", None)
        if not isinstance(kind, str) or not isinstance(getattr(cls, "grammar", None), Grammar):
            msg = f"{cls.__name__} must declare a kind and a grammar"
            raise ConfigurationError(msg, class_name=cls.__name__)
        registered = _REGISTRY.get(kind)
        if registered is not None and _qualified_name(registered) != _qualified_name(cls):
            msg = f"Kind '{kind}' is already bound to {registered.__name__}"
            raise ConfigurationError(msg, kind=str(kind), class_name=cls.__name__)
        _REGISTRY[kind] = cls

    def __post_init__(self) -> None:
        if type(self) is ValidatedString:
            msg = "ValidatedString is abstract; use a concrete kind"
            raise ConfigurationError(msg)
        if not isinstance(self.value, str) or not self.grammar.accepts(self.value):
            raise ParseFailure(self.kind, self.value)

    @classmethod
    def parse(cls, raw: str | bytes) -> Self:
        """Validate *raw* and wrap it.

        ``bytes`` are decoded as strict UTF-8 first. The resulting value holds
        the input text verbatim: no trimming, case folding or normalization.

        Args:
            raw: Untrusted input.

        Returns:
            A validated instance of this kind.

        Raises:
            ParseFailure: If *raw* is not valid text or does not match the
                grammar. ``original_input`` is *raw* itself.
        """
        try:
            text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            return cls(text)
        except (ParseFailure, UnicodeDecodeError):
            logger.debug(
                "validated_string_rejected",
                extra={
                    "kind": str(cls.kind),
                    "input_type": type(raw).__name__,
                    "input_length": len(raw) if isinstance(raw, str | bytes) else None,
                },
            )
            raise ParseFailure(cls.kind, raw) from None

    @classmethod
    def is_valid(cls, raw: str | bytes) -> bool:
        """Return True if ``parse(raw)`` would succeed."""
        try:
            cls.parse(raw)
        except ParseFailure:
            return False
        return True

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        """Validate from plain text through ``parse`` and dump back to it."""
        return core_schema.no_info_plain_validator_function(
            cls._from_field,
            json_schema_input_schema=core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _from_field(cls, value: Any) -> Self:
        if isinstance(value, cls):
            return value
        return cls.parse(value)

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)

    def __iter__(self) -> Iterator[str]:
        return iter(self.value)

    def __contains__(self, item: str) -> bool:
        return item in self.value


class Handle(ValidatedString):
    """A user handle: ASCII letters, digits and underscores.

    The first character must be a letter or digit.

    Example:
        >>> Handle("a_")
        Handle(value='a_')
        >>> Handle.is_valid("_a")
        False
    """

    __slots__ = ()

    kind = Kind.HANDLE
    grammar = HANDLE_GRAMMAR
    complement = HANDLE_COMPLEMENT


class FreeText(ValidatedString):
    """Any valid Unicode text, including the empty string.

    Rejects strings carrying lone surrogates and bytes that are not UTF-8.
    """

    __slots__ = ()

    kind = Kind.FREE_TEXT
    grammar = FREE_TEXT_GRAMMAR


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def kind_type(kind: Kind) -> type[ValidatedString]:
    """Return the class registered for *kind*.

    Raises:
        ConfigurationError: If no class is registered for *kind*.
    """
    try:
        return _REGISTRY[kind]
    except KeyError:
        msg = f"No validated string type registered for kind '{kind}'"
        raise ConfigurationError(msg, kind=str(kind)) from None


def registered_kinds() -> tuple[Kind, ...]:
    """Return every kind with a registered class, in definition order."""
    return tuple(_REGISTRY)
