"""Top-level package for claude-profile.

This package provides a command-line interface via :mod:`claude_profile.cli`,
the profile registry in :mod:`claude_profile.profiles`, access to the
Claude settings document in :mod:`claude_profile.settings` and the pure
formatting/apply logic in :mod:`claude_profile.applier`.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "cli",
    "profiles",
    "settings",
    "applier",
    "switcher",
]
