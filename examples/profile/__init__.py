"""Profile: minimal example consumer of the validated string types.

Modules:
    domain: Profile model and register_profile()
"""

from .domain import Profile, register_profile

__all__ = ["Profile", "register_profile"]
