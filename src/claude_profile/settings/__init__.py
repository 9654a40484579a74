"""Access to the Claude CLI settings document."""

from .store import Settings, SettingsStore  # noqa: F401

__all__ = ["Settings", "SettingsStore"]
