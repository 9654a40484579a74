"""Shared fixtures for the claude-profile test suite.

Every test runs against scratch files under ``tmp_path``: the two
path environment variables are pointed there and the shell/API key
variables are cleared so the developer's real environment never leaks
into assertions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from claude_profile.profiles.store import ProfileStore
from claude_profile.settings.store import SettingsStore


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.setenv("CLAUDE_PROFILES_PATH", str(tmp_path / ".claude-profiles.json"))
    monkeypatch.setenv("CLAUDE_SETTINGS_PATH", str(tmp_path / ".claude" / "settings.json"))
    for var in ("ANTHROPIC_API_KEY", "FISH_VERSION", "CLAUDE_PROFILE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    yield
    # CliRunner swaps stderr per invocation; drop handlers bound to it.
    logger = logging.getLogger("claude_profile")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


@pytest.fixture
def profiles_path(tmp_path: Path) -> Path:
    return tmp_path / ".claude-profiles.json"


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / ".claude" / "settings.json"


@pytest.fixture
def profile_store(profiles_path: Path) -> ProfileStore:
    return ProfileStore(profiles_path)


@pytest.fixture
def settings_store(settings_path: Path) -> SettingsStore:
    return SettingsStore(settings_path)
