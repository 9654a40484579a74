"""Profile models and the registry store.

A profile is either an :class:`ApiKeyProfile` carrying a literal key or
a :class:`MaxProfile` marking OAuth/Max plan authentication.  Profiles
are kept by name in a JSON registry managed by :class:`ProfileStore`,
which also records the active profile.
"""

from .models import ApiKeyProfile, MaxProfile, Profile, ProfileEntry, ProfileRegistry  # noqa: F401
from .store import ProfileStore, profile_exists  # noqa: F401

__all__ = [
    "ApiKeyProfile",
    "MaxProfile",
    "Profile",
    "ProfileEntry",
    "ProfileRegistry",
    "ProfileStore",
    "profile_exists",
]
