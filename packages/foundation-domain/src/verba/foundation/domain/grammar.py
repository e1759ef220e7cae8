"""Composable character-class grammars.

A grammar is a sequence of terms, each matching either exactly one character
of a class (``one``) or zero or more of them (``many``). Matching is total:
the whole input has to be consumed for a grammar to accept it, so a value can
never carry trailing characters the grammar did not look at.

Every class also knows its regular-expression atom, which lets test tooling
derive string strategies from the same definitions the validator uses.

Example:
    >>> word = Grammar("word", (one(ASCII_ALPHANUMERIC), many(ASCII_ALPHANUMERIC)))
    >>> word.accepts("abc1")
    True
    >>> word.accepts("abc!")
    False
    >>> word.to_regex()
    '[a-zA-Z0-9][a-zA-Z0-9]*'
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from verba.foundation.domain.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "ANY_CHAR",
    "ASCII_ALPHANUMERIC",
    "SCALAR_VALUE",
    "UNDERSCORE",
    "CharClass",
    "Complement",
    "Grammar",
    "Term",
    "many",
    "one",
]


@dataclass(frozen=True, slots=True)
class CharClass:
    """A named predicate over a single character.

    Attributes:
        name: Human-readable class name, used in diagnostics.
        members: Body of the equivalent regex bracket expression.
        predicate: Membership test for one character.
            Part of equality, so classes built with different predicates
            never compare equal.
        negated: Whether the bracket expression is negated (``[^...]``).
    """

    name: str
    members: str
    predicate: Callable[[str], bool] = field(repr=False)
    negated: bool = False

    @classmethod
    def literal(cls, char: str) -> CharClass:
        """Build a class containing exactly one character."""
        if len(char) != 1:
            msg = f"Literal character class needs exactly one character, got {char!r}"
            raise ConfigurationError(msg, char=char)
        return cls(repr(char), re.escape(char), predicate=char.__eq__)

    @property
    def pattern(self) -> str:
        """Regular-expression atom matching one member of this class."""
        return f"[{'^' if self.negated else ''}{self.members}]"

    def __call__(self, char: str) -> bool:
        return self.predicate(char)

    def __or__(self, other: CharClass) -> CharClass:
        if self.negated or other.negated:
            msg = "Union is only supported between non-negated character classes"
            raise ConfigurationError(msg, left=self.name, right=other.name)
        left, right = self.predicate, other.predicate
        return CharClass(
            f"{self.name} | {other.name}",
            self.members + other.members,
            predicate=lambda char: left(char) or right(char),
        )

    def __invert__(self) -> CharClass:
        inner = self.predicate
        return CharClass(
            f"not ({self.name})",
            self.members,
            negated=not self.negated,
            predicate=lambda char: not inner(char),
        )


def _is_ascii_alphanumeric(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _is_scalar_value(char: str) -> bool:
    return not 0xD800 <= ord(char) <= 0xDFFF


ASCII_ALPHANUMERIC = CharClass(
    "ascii_alphanumeric", "a-zA-Z0-9", predicate=_is_ascii_alphanumeric
)
UNDERSCORE = CharClass.literal("_")
# Any code point, surrogates included.
ANY_CHAR = CharClass("any", r"\s\S", predicate=lambda char: True)
# Any Unicode scalar value: every code point except the surrogate range.
SCALAR_VALUE = CharClass(
    "scalar_value", r"\ud800-\udfff", negated=True, predicate=_is_scalar_value
)


@dataclass(frozen=True, slots=True)
class Term:
    """One step of a grammar: a class matched once or repeatedly."""

    char_class: CharClass
    repeated: bool = False

    @property
    def pattern(self) -> str:
        return self.char_class.pattern + ("*" if self.repeated else "")


def one(char_class: CharClass) -> Term:
    """Match exactly one character of *char_class*."""
    return Term(char_class)


def many(char_class: CharClass) -> Term:
    """Match zero or more characters of *char_class*."""
    return Term(char_class, repeated=True)


@dataclass(frozen=True, slots=True)
class Grammar:
    """Stateless acceptor for a sequence of terms anchored at both ends.

    Attributes:
        name: Grammar name, used in diagnostics.
        terms: Terms matched left to right.
    """

    name: str
    terms: tuple[Term, ...]

    def accepts(self, text: str) -> bool:
        """Return True if *text* is consumed in full by this grammar."""
        states = self._follow_empty({0})
        for char in text:
            states = self._follow_empty(
                {
                    index if self.terms[index].repeated else index + 1
                    for index in states
                    if index < len(self.terms) and self.terms[index].char_class(char)
                }
            )
            if not states:
                return False
        return len(self.terms) in states

    def to_regex(self) -> str:
        """Render the grammar as a regex intended for full matching."""
        return "".join(term.pattern for term in self.terms)

    def _follow_empty(self, states: set[int]) -> frozenset[int]:
        # A repeated term may match nothing, so the term after it is reachable too.
        reached = set(states)
        pending = list(states)
        while pending:
            index = pending.pop()
            if index < len(self.terms) and self.terms[index].repeated and index + 1 not in reached:
                reached.add(index + 1)
                pending.append(index + 1)
        return frozenset(reached)


@dataclass(frozen=True, slots=True)
class Complement:
    """Union of grammars describing every input a kind rejects.

    Kept next to the positive grammar of its kind so the two change together.

    Attributes:
        name: Complement name, used in diagnostics.
        alternatives: Grammars whose union is the rejected language.
    """

    name: str
    alternatives: tuple[Grammar, ...]

    def accepts(self, text: str) -> bool:
        """Return True if any alternative accepts *text*."""
        return any(alternative.accepts(text) for alternative in self.alternatives)

    def to_regex(self) -> str:
        return "|".join(f"(?:{alternative.to_regex()})" for alternative in self.alternatives)
