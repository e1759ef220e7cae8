"""Profile domain model: a pydantic model built from validated strings.

Demonstrates the persistence hook: fields typed as ``Handle`` and
``FreeText`` validate from plain JSON strings through ``parse`` and dump
back to the same plain strings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from verba.foundation.domain import FreeText, Handle, ParseFailure, ValidationError
from verba.infra.observability import get_logger

logger = get_logger(__name__)


class Profile(BaseModel):
    """A public profile.

    Example:
        >>> profile = Profile.model_validate({"handle": "ada_l", "bio": "Counts."})
        >>> profile.model_dump(mode="json")
        {'handle': 'ada_l', 'bio': 'Counts.'}
    """

    model_config = ConfigDict(frozen=True)

    handle: Handle
    bio: FreeText = FreeText("")


def register_profile(payload: dict[str, object]) -> Profile:
    """Build a Profile from an untrusted payload.

    Raises:
        ValidationError: If a field fails its grammar. The field name is the
            one from the payload.
    """
    try:
        profile = Profile.model_validate(payload)
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raw = error.get("input")
        logger.info(
            "profile_rejected",
            field=field,
            input_type=type(raw).__name__,
            input_length=len(raw) if isinstance(raw, str | bytes) else None,
        )
        cause = error.get("ctx", {}).get("error")
        if isinstance(cause, ParseFailure):
            raise ValidationError(field, cause.reason, kind=str(cause.kind)) from exc
        raise ValidationError(field, error["msg"]) from exc
    logger.info("profile_registered", handle=str(profile.handle), bio_length=len(profile.bio))
    return profile
