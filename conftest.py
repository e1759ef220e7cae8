"""Hypothesis profiles shared by every test suite in the repository.

Select one with ``HYPOTHESIS_PROFILE`` (``dev`` by default, ``ci`` in CI).
"""

from __future__ import annotations

import os

from hypothesis import HealthCheck, settings

# Faker builds its providers on first use, which blows the default deadline.
settings.register_profile(
    "dev",
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    derandomize=True,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))
