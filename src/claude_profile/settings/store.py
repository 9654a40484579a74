"""Persistence for the Claude settings document.

``~/.claude/settings.json`` belongs to the Claude CLI.  This tool owns a
single key in it, ``apiKeyHelper``; every other key is read and written
back untouched.  The location is passed in explicitly so tests and the
``--settings-file`` option can point at a scratch file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import API_KEY_HELPER_FIELD, settings_path
from ..errors import CorruptSettingsError
from ..jsonio import MISSING, load_json, save_json

logger = logging.getLogger(__name__)

Settings = Dict[str, Any]


class SettingsStore:
    """Read and write the Claude settings document.

    Args:
        path: Settings location.  Defaults to :func:`claude_profile.config.settings_path`,
            which honours ``CLAUDE_SETTINGS_PATH``.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else settings_path()

    def __repr__(self) -> str:
        return f"SettingsStore(path={str(self.path)!r})"

    def load(self) -> Settings:
        """Return the settings object, or ``{}`` when the file is missing.

        Raises:
            CorruptSettingsError: If the file is not valid JSON, its
                top-level value is not an object, or ``apiKeyHelper`` is
                neither a string nor null.
        """
        try:
            data = load_json(self.path)
        except ValueError as exc:
            raise CorruptSettingsError(self.path, details=str(exc), original_error=exc) from exc
        if data is MISSING:
            logger.debug("Settings file %s not found; using empty settings", self.path)
            return {}
        if not isinstance(data, dict):
            raise CorruptSettingsError(self.path, details=f"expected a JSON object, got {type(data).__name__}")
        helper = data.get(API_KEY_HELPER_FIELD)
        if helper is not None and not isinstance(helper, str):
            raise CorruptSettingsError(
                self.path, details=f"{API_KEY_HELPER_FIELD} must be a string, got {type(helper).__name__}"
            )
        return data

    def save(self, settings: Settings) -> None:
        """Overwrite the settings file with ``settings``."""
        save_json(self.path, settings)
        logger.debug("Wrote settings to %s", self.path)


__all__ = ["Settings", "SettingsStore"]
