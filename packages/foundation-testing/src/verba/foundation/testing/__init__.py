"""Verba Foundation Testing -- seeded test data for validated strings.

Installed with the ``testing`` extra. Runtime code never imports this
package: it exists to drive property-based tests of the validation surface
with both conforming and non-conforming input.
"""

from verba.foundation.testing.generators import (
    generate_invalid,
    generate_valid,
    repair_handle,
    require_complement,
)
from verba.foundation.testing.sampling import CANDIDATE_POOL, candidates, sample
from verba.foundation.testing.settings import GenerationSettings, get_generation_settings
from verba.foundation.testing.strategies import (
    complement_text,
    invalid_values,
    matching_text,
    register_strategies,
    seeds,
    valid_values,
)

__all__ = [
    "CANDIDATE_POOL",
    "GenerationSettings",
    "candidates",
    "complement_text",
    "generate_invalid",
    "generate_valid",
    "get_generation_settings",
    "invalid_values",
    "matching_text",
    "register_strategies",
    "repair_handle",
    "require_complement",
    "sample",
    "seeds",
    "valid_values",
]
