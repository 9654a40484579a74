"""Tests for the claude-profile command-line interface.

Every command runs through :class:`click.testing.CliRunner` against the
scratch registry and settings files set up in ``conftest.py``.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from claude_profile import __version__
from claude_profile.cli import cli
from claude_profile.profiles import ApiKeyProfile, MaxProfile, ProfileStore

LONG_KEY = "sk-ant-REDACTED"


def _seed(store: ProfileStore, active: str | None = None) -> None:
    store.add_profile("work", ApiKeyProfile(key=LONG_KEY))
    store.add_profile("personal", MaxProfile())
    if active:
        store.set_active_profile(active)


def _read(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands() -> None:
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    for command in ("switch", "add", "list", "remove", "current", "env"):
        assert command in result.output


# -- add ---------------------------------------------------------------------


def test_add_api_key_profile(profile_store: ProfileStore) -> None:
    result = CliRunner().invoke(cli, ["add", "work", "--api-key", "sk-ant-work123"])
    assert result.exit_code == 0, result.output
    assert "Added profile 'work' (API key)" in result.output
    assert profile_store.get_profile("work") == ApiKeyProfile(key="sk-ant-work123")


def test_add_max_profile(profile_store: ProfileStore) -> None:
    result = CliRunner().invoke(cli, ["add", "personal", "--max"])
    assert result.exit_code == 0, result.output
    assert "Added profile 'personal' (Max plan)" in result.output
    assert profile_store.get_profile("personal") == MaxProfile()


def test_add_duplicate_name_fails(profile_store: ProfileStore) -> None:
    profile_store.add_profile("work", MaxProfile())
    result = CliRunner().invoke(cli, ["add", "work", "--api-key", "sk-ant-other"])
    assert result.exit_code == 1
    assert "Profile 'work' already exists" in result.output
    # The existing profile is not overwritten
    assert profile_store.get_profile("work") == MaxProfile()


def test_add_rejects_key_without_prefix(profile_store: ProfileStore) -> None:
    result = CliRunner().invoke(cli, ["add", "work", "--api-key", "not-a-key"])
    assert result.exit_code == 1
    assert "should start with 'sk-ant-'" in result.output
    assert profile_store.get_profile("work") is None


def test_add_rejects_both_type_flags() -> None:
    result = CliRunner().invoke(cli, ["add", "work", "--max", "--api-key", "sk-ant-x"])
    assert result.exit_code == 2
    assert "either --max or --api-key" in result.output


def test_add_interactive_reprompts_invalid_input(profile_store: ProfileStore) -> None:
    profile_store.add_profile("taken", MaxProfile())
    # Empty input is re-asked silently; duplicate name, then a valid one; bad key, then a good one
    user_input = "\ntaken\nwork\napi-key\nbad-key\nsk-ant-interactive\n"
    result = CliRunner().invoke(cli, ["add"], input=user_input)
    assert result.exit_code == 0, result.output
    assert "Profile 'taken' already exists" in result.output
    assert "API key should start with 'sk-ant-'" in result.output
    assert profile_store.get_profile("work") == ApiKeyProfile(key="sk-ant-interactive")


def test_add_with_name_prompts_for_type(profile_store: ProfileStore) -> None:
    result = CliRunner().invoke(cli, ["add", "personal"], input="max\n")
    assert result.exit_code == 0, result.output
    assert profile_store.get_profile("personal") == MaxProfile()


# -- list --------------------------------------------------------------------


def test_list_empty() -> None:
    result = CliRunner().invoke(cli, ["list"])
    assert result.exit_code == 0
    assert "No profiles configured. Run 'claude-profile add' to create one." in result.output


def test_list_marks_active_profile(profile_store: ProfileStore) -> None:
    _seed(profile_store, active="personal")
    result = CliRunner().invoke(cli, ["list"])
    assert result.exit_code == 0
    assert "  work (api-key)\n" in result.output
    assert "  personal (max) *\n" in result.output
    assert "* = active profile" in result.output
    # Keys are never printed by list
    assert LONG_KEY not in result.output


# -- switch ------------------------------------------------------------------


def test_switch_without_profiles_fails() -> None:
    result = CliRunner().invoke(cli, ["switch", "work"])
    assert result.exit_code == 1
    assert "No profiles configured" in result.output


def test_switch_unknown_profile_lists_available(profile_store: ProfileStore) -> None:
    _seed(profile_store)
    result = CliRunner().invoke(cli, ["switch", "nope"])
    assert result.exit_code == 1
    assert "Profile 'nope' not found" in result.output
    assert "Available profiles: work, personal" in result.output


def test_switch_api_key_updates_settings_and_active(
    profile_store: ProfileStore, settings_path: Path
) -> None:
    _seed(profile_store)
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({"customSetting": "preserved", "anotherField": 123}), encoding="utf-8")

    result = CliRunner().invoke(cli, ["switch", "work"])

    assert result.exit_code == 0, result.output
    assert "Switched to profile 'work' (API key)" in result.output
    assert f"Updated: {settings_path}" in result.output
    assert _read(settings_path) == {
        "customSetting": "preserved",
        "anotherField": 123,
        "apiKeyHelper": f"echo '{LONG_KEY}'",
    }
    assert profile_store.get_active_profile() == "work"


def test_switch_to_max_removes_helper(profile_store: ProfileStore, settings_path: Path) -> None:
    _seed(profile_store, active="work")
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({"apiKeyHelper": "echo 'x'", "theme": "dark"}), encoding="utf-8")

    result = CliRunner().invoke(cli, ["switch", "personal"])

    assert result.exit_code == 0, result.output
    assert "Switched to profile 'personal' (Max plan)" in result.output
    assert _read(settings_path) == {"theme": "dark"}
    assert profile_store.get_active_profile() == "personal"


def test_switch_unchanged_settings_skips_update_message(profile_store: ProfileStore, settings_path: Path) -> None:
    _seed(profile_store)
    result = CliRunner().invoke(cli, ["switch", "personal"])
    assert result.exit_code == 0, result.output
    assert "Updated:" not in result.output
    assert not settings_path.exists()


def test_switch_dry_run_reports_without_writing(profile_store: ProfileStore, settings_path: Path) -> None:
    _seed(profile_store)
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({"keep": 1}), encoding="utf-8")
    before = settings_path.read_text(encoding="utf-8")

    result = CliRunner().invoke(cli, ["switch", "work", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "Dry run for profile 'work':" in result.output
    assert f"File: {settings_path}" in result.output
    assert "apiKeyHelper: (not set - using OAuth) → echo 'sk-ant-api...123456'" in result.output
    assert "No changes made (dry run)" in result.output
    assert LONG_KEY not in result.output
    assert settings_path.read_text(encoding="utf-8") == before
    assert profile_store.get_active_profile() is None


def test_switch_dry_run_already_set(profile_store: ProfileStore) -> None:
    _seed(profile_store)
    result = CliRunner().invoke(cli, ["switch", "personal", "-d"])
    assert result.exit_code == 0, result.output
    assert "No changes needed (already set)" in result.output


def test_switch_interactive_pick_defaults_to_active(profile_store: ProfileStore) -> None:
    _seed(profile_store, active="personal")
    # Accept the default (the active profile)
    result = CliRunner().invoke(cli, ["switch"], input="\n")
    assert result.exit_code == 0, result.output
    assert "1) work (api-key)" in result.output
    assert "2) personal (max) (active)" in result.output
    assert "Switched to profile 'personal'" in result.output


def test_bare_invocation_switches_interactively(profile_store: ProfileStore) -> None:
    _seed(profile_store)
    result = CliRunner().invoke(cli, [], input="1\n")
    assert result.exit_code == 0, result.output
    assert "Switched to profile 'work' (API key)" in result.output
    assert profile_store.get_active_profile() == "work"


def test_switch_reports_corrupt_registry(profiles_path: Path) -> None:
    profiles_path.write_text("{", encoding="utf-8")
    result = CliRunner().invoke(cli, ["switch", "work"])
    assert result.exit_code == 1
    assert "Profile registry is corrupt" in result.output


def test_switch_reports_corrupt_settings(profile_store: ProfileStore, settings_path: Path) -> None:
    _seed(profile_store)
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("nope", encoding="utf-8")
    result = CliRunner().invoke(cli, ["switch", "work"])
    assert result.exit_code == 1
    assert "Claude settings file is corrupt" in result.output
    # Nothing was activated since the apply failed
    assert profile_store.get_active_profile() is None


def test_list_reports_registry_that_is_not_utf8(profiles_path: Path) -> None:
    profiles_path.write_bytes(b'{"profiles": {"\xff": {"type": "max"}}, "active": null}')
    result = CliRunner().invoke(cli, ["list"])
    assert result.exit_code == 1
    assert "Profile registry is corrupt" in result.output
    assert not isinstance(result.exception, UnicodeDecodeError)


def test_dry_run_reports_non_string_helper(profile_store: ProfileStore, settings_path: Path) -> None:
    _seed(profile_store)
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({"apiKeyHelper": 123}), encoding="utf-8")
    for args in (["switch", "work", "--dry-run"], ["switch", "work"]):
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == 1
        assert "apiKeyHelper must be a string" in result.output
    assert _read(settings_path) == {"apiKeyHelper": 123}


def test_path_options_override_environment(tmp_path: Path) -> None:
    registry = tmp_path / "custom" / "profiles.json"
    settings = tmp_path / "custom" / "settings.json"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--profiles-file", str(registry), "--settings-file", str(settings), "add", "work", "--api-key", "sk-ant-w"],
    )
    assert result.exit_code == 0, result.output
    result = runner.invoke(cli, ["--profiles-file", str(registry), "--settings-file", str(settings), "switch", "work"])
    assert result.exit_code == 0, result.output
    assert _read(registry)["active"] == "work"
    assert _read(settings) == {"apiKeyHelper": "echo 'sk-ant-w'"}


# -- remove ------------------------------------------------------------------


def test_remove_unknown_profile_fails() -> None:
    result = CliRunner().invoke(cli, ["remove", "ghost", "--yes"])
    assert result.exit_code == 1
    assert "Profile 'ghost' not found" in result.output


def test_remove_confirmed_clears_active(profile_store: ProfileStore) -> None:
    _seed(profile_store, active="work")
    result = CliRunner().invoke(cli, ["remove", "work"], input="y\n")
    assert result.exit_code == 0, result.output
    assert "Removed profile 'work'." in result.output
    assert profile_store.get_profile("work") is None
    assert profile_store.get_active_profile() is None


def test_remove_declined_keeps_profile(profile_store: ProfileStore) -> None:
    _seed(profile_store)
    result = CliRunner().invoke(cli, ["remove", "work"], input="\n")
    assert result.exit_code == 0, result.output
    assert "Cancelled." in result.output
    assert profile_store.get_profile("work") is not None


# -- current -----------------------------------------------------------------


def test_current_without_active_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", LONG_KEY)
    result = CliRunner().invoke(cli, ["current"])
    assert result.exit_code == 0
    assert "No active profile set." in result.output
    assert "Current ANTHROPIC_API_KEY: sk-ant-api...123456" in result.output


def test_current_with_dangling_active(profiles_path: Path) -> None:
    profiles_path.write_text(json.dumps({"profiles": {}, "active": "gone"}), encoding="utf-8")
    result = CliRunner().invoke(cli, ["current"])
    assert result.exit_code == 0
    assert "Active profile 'gone' not found in config." in result.output


def test_current_shows_profile_env_and_helper(monkeypatch: pytest.MonkeyPatch, profile_store: ProfileStore) -> None:
    _seed(profile_store)
    runner = CliRunner()
    assert runner.invoke(cli, ["switch", "work"]).exit_code == 0

    result = runner.invoke(cli, ["current"])
    assert result.exit_code == 0, result.output
    assert "Profile: work (API key)" in result.output
    assert "ANTHROPIC_API_KEY: (not set - using OAuth)" in result.output
    assert "Credentials: sk-ant-api...123456" in result.output
    assert "apiKeyHelper: echo 'sk-ant-api...123456'" in result.output

    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-short")
    result = runner.invoke(cli, ["current"])
    assert "ANTHROPIC_API_KEY: sk-ant-short" in result.output


# -- env ---------------------------------------------------------------------


def test_env_defaults_to_active_profile(profile_store: ProfileStore) -> None:
    _seed(profile_store, active="work")
    result = CliRunner().invoke(cli, ["env", "--shell", "posix"])
    assert result.exit_code == 0, result.output
    assert result.output == f"export ANTHROPIC_API_KEY='{LONG_KEY}'\n"


def test_env_detects_fish(monkeypatch: pytest.MonkeyPatch, profile_store: ProfileStore) -> None:
    _seed(profile_store)
    monkeypatch.setenv("FISH_VERSION", "3.6.0")
    result = CliRunner().invoke(cli, ["env", "personal"])
    assert result.exit_code == 0, result.output
    assert result.output == "set -e ANTHROPIC_API_KEY\n"


def test_env_dry_run_masks_key(profile_store: ProfileStore) -> None:
    _seed(profile_store)
    result = CliRunner().invoke(cli, ["env", "work", "--shell", "fish", "--dry-run"])
    assert result.exit_code == 0, result.output
    assert result.output == "Would set (fish): ANTHROPIC_API_KEY=sk-ant-api...123456\n"


def test_env_without_active_profile_fails(profile_store: ProfileStore) -> None:
    _seed(profile_store)
    result = CliRunner().invoke(cli, ["env"])
    assert result.exit_code == 1
    assert "No active profile set" in result.output


def test_env_unknown_profile_fails(profile_store: ProfileStore) -> None:
    _seed(profile_store)
    result = CliRunner().invoke(cli, ["env", "ghost"])
    assert result.exit_code == 1
    assert "Profile 'ghost' not found" in result.output


def test_verbose_logging_goes_to_stderr_and_redacts_keys(profile_store: ProfileStore) -> None:
    result = CliRunner().invoke(cli, ["--verbose", "add", "work", "--api-key", "sk-ant-secretvalue"])
    assert result.exit_code == 0, result.output
    assert "Added profile 'work'" in result.output
    assert "sk-ant-secretvalue" not in result.output
