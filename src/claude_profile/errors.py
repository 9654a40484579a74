"""Exceptions raised by claude-profile.

Profile errors describe problems with the names a user asked for.
Store errors describe a managed JSON document that could not be read;
they are fatal and surfaced as-is, the file is never repaired or reset.
A missing file is not an error for either store.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ClaudeProfileError(Exception):
    """Base exception for all claude-profile errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ProfileError(ClaudeProfileError):
    """Base exception for profile lookups and mutations."""

    def __init__(self, message: str, profile_name: Optional[str] = None, details: Optional[str] = None) -> None:
        self.profile_name = profile_name
        super().__init__(message, details)


class ProfileNotFoundError(ProfileError):
    """Raised when a named profile is not in the registry."""

    def __init__(self, profile_name: str, available: Optional[list[str]] = None) -> None:
        self.available = list(available or [])
        details = f"Available profiles: {', '.join(self.available)}" if self.available else None
        super().__init__(f"Profile '{profile_name}' not found", profile_name=profile_name, details=details)


class DuplicateProfileError(ProfileError):
    """Raised when adding a profile under a name that already exists."""

    def __init__(self, profile_name: str) -> None:
        super().__init__(
            f"Profile '{profile_name}' already exists. Use a different name",
            profile_name=profile_name,
        )


class InvalidApiKeyError(ProfileError):
    """Raised when an API key does not carry the expected prefix."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        super().__init__(f"API key should start with '{prefix}'")


class StoreError(ClaudeProfileError):
    """Base exception for unreadable JSON documents.

    Attributes:
        path: Location of the offending file.
        original_error: The parse or validation error, when there is one.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        details: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.path = path
        self.original_error = original_error
        super().__init__(f"{message} ({path})", details)


class CorruptConfigError(StoreError):
    """Raised when the profile registry is not valid JSON or does not match its schema."""

    def __init__(self, path: Path, details: Optional[str] = None, original_error: Optional[Exception] = None) -> None:
        super().__init__("Profile registry is corrupt", path, details, original_error)


class CorruptSettingsError(StoreError):
    """Raised when the Claude settings document is not a JSON object."""

    def __init__(self, path: Path, details: Optional[str] = None, original_error: Optional[Exception] = None) -> None:
        super().__init__("Claude settings file is corrupt", path, details, original_error)


__all__ = [
    "ClaudeProfileError",
    "ProfileError",
    "ProfileNotFoundError",
    "DuplicateProfileError",
    "InvalidApiKeyError",
    "StoreError",
    "CorruptConfigError",
    "CorruptSettingsError",
]
