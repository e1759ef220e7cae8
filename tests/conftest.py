"""Shared fixtures for integration tests."""

from __future__ import annotations

import pytest

from verba.foundation.testing import GenerationSettings


@pytest.fixture()
def generation_settings() -> GenerationSettings:
    """Settings that keep generated bios short."""
    return GenerationSettings(free_text_max_words=12)


@pytest.fixture()
def profile_payload() -> dict[str, object]:
    """A payload that passes every field grammar."""
    return {"handle": "ada_l", "bio": "Counted things before computers did."}
