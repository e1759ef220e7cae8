"""Validated string kinds and their grammars.

Each kind owns one grammar and may own a complement: a second grammar for
the inputs it rejects, written out explicitly so that test data for the
rejection path is not biased towards near-valid strings. Free text declares
no complement; the only inputs it rejects are malformed Unicode.
"""

from __future__ import annotations

from enum import StrEnum

from verba.foundation.domain.grammar import (
    ANY_CHAR,
    ASCII_ALPHANUMERIC,
    SCALAR_VALUE,
    UNDERSCORE,
    Complement,
    Grammar,
    many,
    one,
)


class Kind(StrEnum):
    """Validated string variants.

    Uses StrEnum so the tag renders as plain text in errors and logs.
    """

    HANDLE = "handle"
    FREE_TEXT = "free_text"


_HANDLE_TAIL = ASCII_ALPHANUMERIC | UNDERSCORE

# Lead: ASCII letter or digit. Tail: ASCII letters, digits, underscores.
HANDLE_GRAMMAR = Grammar(
    "handle",
    (one(ASCII_ALPHANUMERIC), many(_HANDLE_TAIL)),
)

HANDLE_COMPLEMENT = Complement(
    "not handle",
    (
        Grammar("empty", ()),
        Grammar("bad lead", (one(~ASCII_ALPHANUMERIC), many(ANY_CHAR))),
        Grammar(
            "bad character",
            (many(ANY_CHAR), one(~_HANDLE_TAIL), many(ANY_CHAR)),
        ),
    ),
)

FREE_TEXT_GRAMMAR = Grammar("free_text", (many(SCALAR_VALUE),))
