"""Pydantic models for the profile registry.

The registry document stored at ``~/.claude-profiles.json`` has the
shape::

    {
      "profiles": {
        "work": {"type": "api-key", "key": "sk-ant-..."},
        "personal": {"type": "max"}
      },
      "active": "work"
    }

A profile is a tagged union discriminated on ``type``.  Profile names
are case-sensitive and the mapping keeps its insertion order, which is
the order ``list`` reports them in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ApiKeyProfile(BaseModel):
    """Authenticates with a literal Anthropic API key."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: Literal["api-key"] = "api-key"
    key: str


class MaxProfile(BaseModel):
    """Authenticates through the Max plan (OAuth); carries no secret."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: Literal["max"] = "max"


Profile = Annotated[Union[ApiKeyProfile, MaxProfile], Field(discriminator="type")]


class ProfileRegistry(BaseModel):
    """All known profiles plus the name of the active one.

    ``active`` may name a profile that no longer exists when the file
    was edited by hand.  Readers treat that as "active profile not
    found" rather than failing validation.

    Keys this tool does not know about, here or inside a profile, are
    kept and written back on save.
    """

    model_config = ConfigDict(extra="allow")

    profiles: Dict[str, Profile] = Field(default_factory=dict)
    active: Optional[str] = None


@dataclass(frozen=True)
class ProfileEntry:
    """One row of :meth:`ProfileStore.list_profiles`."""

    name: str
    profile: Union[ApiKeyProfile, MaxProfile]
    is_active: bool


__all__ = [
    "ApiKeyProfile",
    "MaxProfile",
    "Profile",
    "ProfileRegistry",
    "ProfileEntry",
]
