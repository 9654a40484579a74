"""Persistence layer for the profile registry.

The registry is a single pretty-printed JSON document (by default
``~/.claude-profiles.json``).  Every operation on :class:`ProfileStore`
is one read-modify-write of that document.  There is no locking:
concurrent invocations race and the last writer wins.

A missing file reads as an empty registry.  A file that is not valid
JSON (including bytes that are not UTF-8), or does not match the
registry schema, raises
:class:`~claude_profile.errors.CorruptConfigError`; it is never reset
silently.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..config import profiles_path
from ..errors import CorruptConfigError
from ..jsonio import MISSING, load_json, save_json
from .models import Profile, ProfileEntry, ProfileRegistry

logger = logging.getLogger(__name__)


def profile_exists(registry: ProfileRegistry, name: str) -> bool:
    """Return True if ``name`` is a key of ``registry.profiles``.

    Callers use this to reject duplicates before calling
    :meth:`ProfileStore.add_profile`, which itself overwrites.
    """
    return name in registry.profiles


class ProfileStore:
    """Read and write the profile registry at a fixed path.

    Args:
        path: Registry location.  Defaults to :func:`claude_profile.config.profiles_path`,
            which honours ``CLAUDE_PROFILES_PATH``.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else profiles_path()

    def __repr__(self) -> str:
        return f"ProfileStore(path={str(self.path)!r})"

    def load(self) -> ProfileRegistry:
        """Load the registry from disk.

        Returns:
            The parsed registry, or an empty one when the file does not
            exist.

        Raises:
            CorruptConfigError: If the file is not valid JSON or does not
                match the registry schema.
        """
        try:
            data = load_json(self.path)
        except ValueError as exc:
            raise CorruptConfigError(self.path, details=str(exc), original_error=exc) from exc
        if data is MISSING:
            logger.debug("Profile registry %s not found; using empty registry", self.path)
            return ProfileRegistry()
        try:
            registry = ProfileRegistry.model_validate(data)
        except ValidationError as exc:
            raise CorruptConfigError(self.path, details=str(exc), original_error=exc) from exc
        logger.debug("Loaded %d profile(s) from %s", len(registry.profiles), self.path)
        return registry

    def save(self, registry: ProfileRegistry) -> None:
        """Overwrite the registry file with ``registry``."""
        save_json(self.path, registry.model_dump(mode="json"))
        logger.debug("Saved %d profile(s) to %s", len(registry.profiles), self.path)

    def get_profile(self, name: str) -> Optional[Profile]:
        """Return the profile called ``name`` or ``None`` if unknown."""
        return self.load().profiles.get(name)

    def add_profile(self, name: str, profile: Profile) -> None:
        """Store ``profile`` under ``name``.

        An existing profile with the same name is replaced.  Callers are
        expected to have rejected duplicates with :func:`profile_exists`.
        """
        registry = self.load()
        registry.profiles[name] = profile
        self.save(registry)
        logger.info("Added profile '%s' (%s)", name, profile.type)

    def remove_profile(self, name: str) -> bool:
        """Delete the profile called ``name``.

        When the removed profile was active, ``active`` is cleared.

        Returns:
            True if a profile was removed, False if ``name`` was unknown
            (in which case nothing is written).
        """
        registry = self.load()
        if name not in registry.profiles:
            return False
        del registry.profiles[name]
        if registry.active == name:
            registry.active = None
        self.save(registry)
        logger.info("Removed profile '%s'", name)
        return True

    def set_active_profile(self, name: str) -> None:
        """Mark ``name`` as active.  No existence check is performed here."""
        registry = self.load()
        registry.active = name
        self.save(registry)
        logger.info("Active profile set to '%s'", name)

    def get_active_profile(self) -> Optional[str]:
        """Return the active profile name, which may no longer exist."""
        return self.load().active

    def list_profiles(self) -> List[ProfileEntry]:
        """Return every profile in registry order with its active flag."""
        registry = self.load()
        return [
            ProfileEntry(name=name, profile=profile, is_active=registry.active == name)
            for name, profile in registry.profiles.items()
        ]


__all__ = ["ProfileStore", "profile_exists"]
