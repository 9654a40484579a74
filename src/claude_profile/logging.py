"""Logging helpers for claude-profile.

Log output always goes to stderr: stdout of ``claude-profile env`` is
meant to be ``eval``-ed by the shell.  API keys never appear in log
records; :class:`SecretRedactionFilter` masks anything that looks like
one as a last line of defence.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Optional

from .config import API_KEY_PREFIX

PACKAGE_LOGGER = "claude_profile"
LOG_LEVEL_ENV_VAR = "CLAUDE_PROFILE_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_SECRET_PATTERN = re.compile(re.escape(API_KEY_PREFIX) + r"[A-Za-z0-9_\-]+")


def _redact(message: str) -> str:
    return _SECRET_PATTERN.sub(f"{API_KEY_PREFIX}[REDACTED]", message)


class SecretRedactionFilter(logging.Filter):
    """Replace API keys in the formatted message with a placeholder."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(verbose: bool = False, log_level: Optional[str] = None) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Priority for the level: ``--verbose`` (DEBUG), then ``log_level``,
    then ``CLAUDE_PROFILE_LOG_LEVEL``, then WARNING.  Calling this again
    replaces the previous handler.
    """
    if verbose:
        level_name = "DEBUG"
    else:
        level_name = (log_level or os.environ.get(LOG_LEVEL_ENV_VAR) or "WARNING").upper()
    if level_name not in _VALID_LEVELS:
        level_name = "WARNING"

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SecretRedactionFilter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level_name))
    logger.propagate = False
    return logger


__all__ = ["SecretRedactionFilter", "configure_logging"]
