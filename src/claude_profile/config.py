"""
Configuration constants for claude-profile.

This module centralises the names and locations used across the
application: the two JSON documents the tool manages, the environment
variables it reads and the API key prefix accepted by ``add``.  New
values should be added here deliberately.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Mapping, Optional

PROJECT_NAME: Final[str] = "claude-profile"

# Environment variable exported/unset by the shell commands and shown
# (masked) by ``current``.
API_KEY_ENV_VAR: Final[str] = "ANTHROPIC_API_KEY"

# Set by the fish shell in every interactive session.  A non-empty value
# selects fish syntax for generated shell commands.
FISH_VERSION_ENV_VAR: Final[str] = "FISH_VERSION"

# Overrides for the two managed files.  The CLI options
# ``--profiles-file`` / ``--settings-file`` take precedence over these.
PROFILES_PATH_ENV_VAR: Final[str] = "CLAUDE_PROFILES_PATH"
SETTINGS_PATH_ENV_VAR: Final[str] = "CLAUDE_SETTINGS_PATH"

# Literal prefix every Anthropic API key starts with.
API_KEY_PREFIX: Final[str] = "sk-ant-"

# Key in the Claude settings document owned by this tool.
API_KEY_HELPER_FIELD: Final[str] = "apiKeyHelper"

PROFILES_FILE_NAME: Final[str] = ".claude-profiles.json"
SETTINGS_DIR_NAME: Final[str] = ".claude"
SETTINGS_FILE_NAME: Final[str] = "settings.json"

# Both documents are written with this indentation and a trailing newline.
JSON_INDENT: Final[int] = 2


def default_profiles_path() -> Path:
    """Return ``~/.claude-profiles.json``."""
    return Path.home() / PROFILES_FILE_NAME


def default_settings_path() -> Path:
    """Return ``~/.claude/settings.json``."""
    return Path.home() / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME


def _from_env(var: str, environ: Optional[Mapping[str, str]]) -> Optional[Path]:
    env = os.environ if environ is None else environ
    value = env.get(var)
    if not value:
        return None
    return Path(value).expanduser()


def profiles_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Resolve the profile registry location.

    ``CLAUDE_PROFILES_PATH`` wins when set to a non-empty value,
    otherwise the home-directory default is used.
    """
    return _from_env(PROFILES_PATH_ENV_VAR, environ) or default_profiles_path()


def settings_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Resolve the Claude settings location.

    ``CLAUDE_SETTINGS_PATH`` wins when set to a non-empty value,
    otherwise the home-directory default is used.
    """
    return _from_env(SETTINGS_PATH_ENV_VAR, environ) or default_settings_path()


__all__ = [
    "PROJECT_NAME",
    "API_KEY_ENV_VAR",
    "FISH_VERSION_ENV_VAR",
    "PROFILES_PATH_ENV_VAR",
    "SETTINGS_PATH_ENV_VAR",
    "API_KEY_PREFIX",
    "API_KEY_HELPER_FIELD",
    "JSON_INDENT",
    "default_profiles_path",
    "default_settings_path",
    "profiles_path",
    "settings_path",
]
