"""Tests for seeded valid and invalid input generators."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, ClassVar
from unittest.mock import patch

import pytest
from hypothesis import given

from verba.foundation.domain import (
    ASCII_ALPHANUMERIC,
    HANDLE_GRAMMAR,
    Complement,
    ConfigurationError,
    FreeText,
    Grammar,
    Handle,
    Kind,
    ParseFailure,
    ValidatedString,
    many,
    one,
    registered_kinds,
)
from verba.foundation.domain import string_value_objects
from verba.foundation.testing.generators import (
    generate_invalid,
    generate_valid,
    repair_handle,
    require_complement,
)
from verba.foundation.testing.settings import GenerationSettings
from verba.foundation.testing.strategies import seeds

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture()
def isolated_registry() -> Iterator[None]:
    """Drop kinds registered during a test once it finishes."""
    with patch.dict(string_value_objects._REGISTRY):
        yield


# =============================================================================
# Handle repair
# =============================================================================


@pytest.mark.unit
class TestRepairHandle:
    def test_dots_become_underscores(self) -> None:
        assert repair_handle("john.smith", random.Random(0)) == "john_smith"

    def test_valid_text_untouched(self) -> None:
        assert repair_handle("ada_l1", random.Random(0)) == "ada_l1"

    def test_other_characters_become_underscores(self) -> None:
        assert repair_handle("a-b c", random.Random(0)) == "a_b_c"

    def test_bad_lead_gets_letter_prefix(self) -> None:
        repaired = repair_handle(".ada", random.Random(0))
        assert repaired.endswith("_ada")
        assert len(repaired) == 5
        assert repaired[0].isascii()
        assert repaired[0].isalpha()

    def test_empty_gets_letter(self) -> None:
        repaired = repair_handle("", random.Random(0))
        assert len(repaired) == 1
        assert Handle.is_valid(repaired)

    def test_prefix_is_seeded(self) -> None:
        assert repair_handle("_x", random.Random(9)) == repair_handle("_x", random.Random(9))


# =============================================================================
# Valid values
# =============================================================================


@pytest.mark.unit
class TestGenerateValid:
    def test_handle_is_deterministic(self) -> None:
        assert generate_valid(Handle, 42) == generate_valid(Handle, 42)

    def test_free_text_is_deterministic(self) -> None:
        assert generate_valid(FreeText, 42) == generate_valid(FreeText, 42)

    def test_returns_kind_instance(self) -> None:
        assert isinstance(generate_valid(Handle, 1), Handle)
        assert isinstance(generate_valid(FreeText, 1), FreeText)

    def test_handles_vary_with_seed(self) -> None:
        handles = {generate_valid(Handle, seed) for seed in range(50)}
        assert len(handles) >= 40

    def test_free_text_varies_with_seed(self) -> None:
        texts = {generate_valid(FreeText, seed) for seed in range(50)}
        assert len(texts) >= 45

    def test_does_not_touch_global_random(self) -> None:
        random.seed(1234)
        expected = random.random()
        random.seed(1234)
        generate_valid(Handle, 5)
        generate_valid(FreeText, 5)
        assert random.random() == expected

    def test_free_text_empty_when_no_words_allowed(self) -> None:
        settings = GenerationSettings(free_text_max_words=0)
        assert generate_valid(FreeText, 3, settings) == FreeText("")

    def test_free_text_word_count_bounded(self) -> None:
        settings = GenerationSettings(free_text_max_words=5)
        for seed in range(20):
            assert len(generate_valid(FreeText, seed, settings).value.split()) <= 5

    def test_locale_setting_used(self) -> None:
        settings = GenerationSettings(faker_locale="de_DE")
        assert Handle.is_valid(str(generate_valid(Handle, 8, settings)))

    @pytest.mark.usefixtures("isolated_registry")
    def test_kind_without_source_sampled_from_grammar(self) -> None:
        class Token(ValidatedString):
            kind: ClassVar[Kind] = "token"  # type: ignore[assignment]
            grammar: ClassVar[Grammar] = Grammar(
                "token", (one(ASCII_ALPHANUMERIC), many(ASCII_ALPHANUMERIC))
            )

        token = generate_valid(Token, 4)
        assert isinstance(token, Token)
        assert token == generate_valid(Token, 4)
        assert "token" in registered_kinds()


@pytest.mark.property
class TestGenerateValidProperties:
    @given(seed=seeds())
    def test_handle_round_trips(self, seed: int) -> None:
        handle = generate_valid(Handle, seed)
        assert Handle.parse(str(handle)) == handle

    @given(seed=seeds())
    def test_free_text_round_trips(self, seed: int) -> None:
        text = generate_valid(FreeText, seed)
        assert FreeText.parse(str(text)) == text


# =============================================================================
# Invalid values
# =============================================================================


@pytest.mark.unit
class TestGenerateInvalid:
    def test_is_deterministic(self) -> None:
        assert generate_invalid(Handle, 42) == generate_invalid(Handle, 42)

    def test_returns_plain_text(self) -> None:
        assert isinstance(generate_invalid(Handle, 1), str)

    def test_free_text_has_no_complement(self) -> None:
        with pytest.raises(ConfigurationError, match="no complement") as exc_info:
            generate_invalid(FreeText, 1)
        assert exc_info.value.context["kind"] == "free_text"

    def test_require_complement(self) -> None:
        assert require_complement(Handle) is Handle.complement
        with pytest.raises(ConfigurationError):
            require_complement(FreeText)

    def test_complement_out_of_step_detected(self) -> None:
        # A "complement" that is really the grammar itself.
        wrong = Complement("wrong", (HANDLE_GRAMMAR,))
        with pytest.raises(ConfigurationError, match="accepts") as exc_info:
            generate_invalid(Handle, 3, complement=wrong)
        assert exc_info.value.context["seed"] == 3

    def test_explicit_complement_used(self) -> None:
        empty_only = Complement("empty_only", (Grammar("empty", ()),))
        assert generate_invalid(Handle, 3, complement=empty_only) == ""

    def test_max_repeat_setting_bounds_length(self) -> None:
        settings = GenerationSettings(max_repeat=2)
        for seed in range(30):
            assert len(generate_invalid(Handle, seed, settings)) <= 5

    def test_generation_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="verba"):
            generate_invalid(Handle, 6)
        records = [r for r in caplog.records if r.getMessage() == "invalid_sample_generated"]
        assert len(records) == 1
        assert records[0].seed == 6  # type: ignore[attr-defined]


@pytest.mark.property
class TestGenerateInvalidProperties:
    @given(seed=seeds())
    def test_handle_rejects_with_exact_payload(self, seed: int) -> None:
        raw = generate_invalid(Handle, seed)
        with pytest.raises(ParseFailure) as exc_info:
            Handle.parse(raw)
        assert exc_info.value.kind is Kind.HANDLE
        assert exc_info.value.original_input == raw
