"""Command-line interface for claude-profile.

This module uses the :mod:`click` library to expose the profile
commands::

    claude-profile                  # pick a profile interactively and switch
    claude-profile switch work      # switch by name (--dry-run to preview)
    claude-profile add work --api-key sk-ant-...
    claude-profile add personal --max
    claude-profile list
    claude-profile remove work
    claude-profile current
    eval "$(claude-profile env)"    # export/unset ANTHROPIC_API_KEY

Switching writes ``apiKeyHelper`` into the Claude settings file and
records the active profile in the registry.  Errors from the stores
and the profile lookups are reported as :class:`click.ClickException`
(exit status 1).
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import click

from . import __version__
from .applier import (
    SHELL_KINDS,
    display_api_key_helper,
    display_profile,
    dry_run_description,
    mask_secret,
    profile_type_label,
    shell_command,
)
from .config import (
    API_KEY_ENV_VAR,
    API_KEY_HELPER_FIELD,
    API_KEY_PREFIX,
    PROFILES_PATH_ENV_VAR,
    PROJECT_NAME,
    SETTINGS_PATH_ENV_VAR,
)
from .errors import (
    ClaudeProfileError,
    DuplicateProfileError,
    InvalidApiKeyError,
    ProfileNotFoundError,
)
from .logging import configure_logging
from .profiles.models import ApiKeyProfile, MaxProfile, Profile, ProfileRegistry
from .profiles.store import ProfileStore, profile_exists
from .settings.store import SettingsStore
from .switcher import apply_profile, dry_run_apply_profile

F = TypeVar("F", bound=Callable[..., Any])

NO_PROFILES_MESSAGE = f"No profiles configured. Run '{PROJECT_NAME} add' to create one."


@dataclass
class AppContext:
    """Stores shared by every subcommand, built once by the group."""

    profiles: ProfileStore
    settings: SettingsStore


def _surface_errors(func: F) -> F:
    """Turn domain errors into ``click.ClickException`` (exit status 1)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ClaudeProfileError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper  # type: ignore[return-value]


def _validate_api_key(value: str) -> str:
    key = value.strip()
    if not key:
        raise click.UsageError("API key cannot be empty")
    if not key.startswith(API_KEY_PREFIX):
        raise InvalidApiKeyError(API_KEY_PREFIX)
    return key


def _prompt_api_key() -> str:
    def _check(value: str) -> str:
        try:
            return _validate_api_key(value)
        except InvalidApiKeyError as exc:
            # click hides the message of errors raised for hidden input
            click.echo(str(exc), err=True)
            raise click.UsageError(str(exc)) from exc

    return click.prompt("API key", hide_input=True, value_proc=_check)


def _prompt_profile_name(registry: ProfileRegistry) -> str:
    def _check(value: str) -> str:
        name = value.strip()
        if not name:
            raise click.UsageError("Name cannot be empty")
        if profile_exists(registry, name):
            raise click.UsageError(f"Profile '{name}' already exists")
        return name

    return click.prompt("Profile name", value_proc=_check)


def _prompt_for_profile(registry: ProfileRegistry) -> str:
    """Show a numbered list of profiles and return the chosen name."""
    names = list(registry.profiles)
    click.echo("Select a profile to switch to:")
    for index, name in enumerate(names, start=1):
        profile = registry.profiles[name]
        active_label = " (active)" if registry.active == name else ""
        click.echo(f"  {index}) {name} ({profile_type_label(profile, short=True)}){active_label}")
    default = names.index(registry.active) + 1 if registry.active in registry.profiles else None
    choice = click.prompt("Profile", type=click.IntRange(1, len(names)), default=default)
    return names[choice - 1]


@click.group(invoke_without_command=True)
@click.option(
    "--profiles-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=PROFILES_PATH_ENV_VAR,
    default=None,
    help=f"Profile registry to use (defaults to ~/.claude-profiles.json, or ${PROFILES_PATH_ENV_VAR}).",
)
@click.option(
    "--settings-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=SETTINGS_PATH_ENV_VAR,
    default=None,
    help=f"Claude settings file to update (defaults to ~/.claude/settings.json, or ${SETTINGS_PATH_ENV_VAR}).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log file reads and writes to stderr.")
@click.version_option(__version__, prog_name=PROJECT_NAME)
@click.pass_context
def cli(ctx: click.Context, profiles_file: Optional[Path], settings_file: Optional[Path], verbose: bool) -> None:
    """Switch Claude CLI authentication profiles.

    Run without a command to pick a profile interactively.
    """
    configure_logging(verbose=verbose)
    ctx.obj = AppContext(profiles=ProfileStore(profiles_file), settings=SettingsStore(settings_file))
    if ctx.invoked_subcommand is None:
        ctx.invoke(switch_command, name=None, dry_run=False)


@cli.command("switch")
@click.argument("name", required=False)
@click.option("-d", "--dry-run", is_flag=True, default=False, help="Show what would change without modifying files.")
@click.pass_obj
@_surface_errors
def switch_command(app: AppContext, name: Optional[str], dry_run: bool) -> None:
    """Switch to profile NAME (prompts when NAME is omitted)."""
    registry = app.profiles.load()
    if not registry.profiles:
        raise click.ClickException(NO_PROFILES_MESSAGE)
    if name is None:
        name = _prompt_for_profile(registry)
    elif name not in registry.profiles:
        raise ProfileNotFoundError(name, list(registry.profiles))
    profile = registry.profiles[name]

    if dry_run:
        result = dry_run_apply_profile(profile, app.settings)
        click.echo(f"\nDry run for profile '{name}':\n")
        click.echo(f"File: {result.settings_path}")
        click.echo(
            f"  apiKeyHelper: {display_api_key_helper(result.old_helper)} "
            f"→ {display_api_key_helper(result.new_helper)}"
        )
        if result.changed:
            click.echo("\nNo changes made (dry run)")
        else:
            click.echo("\nNo changes needed (already set)")
        return

    result = apply_profile(profile, app.settings)
    app.profiles.set_active_profile(name)
    click.echo(f"Switched to profile '{name}' ({profile_type_label(profile)})")
    if result.changed:
        click.echo(f"Updated: {result.settings_path}")


@cli.command("add")
@click.argument("name", required=False)
@click.option("--max", "use_max", is_flag=True, default=False, help="Create a Max plan (OAuth) profile.")
@click.option("--api-key", "api_key", default=None, metavar="KEY", help=f"Create an API key profile (must start with {API_KEY_PREFIX}).")
@click.pass_obj
@_surface_errors
def add_command(app: AppContext, name: Optional[str], use_max: bool, api_key: Optional[str]) -> None:
    """Add a new profile.

    With NAME and --max or --api-key the profile is created directly,
    otherwise the missing details are prompted for.
    """
    if use_max and api_key is not None:
        raise click.UsageError("Use either --max or --api-key, not both")
    registry = app.profiles.load()

    if name is None:
        name = _prompt_profile_name(registry)
    elif profile_exists(registry, name):
        raise DuplicateProfileError(name)

    profile: Profile
    if use_max:
        profile = MaxProfile()
    elif api_key is not None:
        profile = ApiKeyProfile(key=_validate_api_key(api_key))
    else:
        profile_type = click.prompt(
            "Profile type",
            type=click.Choice(["max", "api-key"]),
            default="max",
        )
        profile = MaxProfile() if profile_type == "max" else ApiKeyProfile(key=_prompt_api_key())

    app.profiles.add_profile(name, profile)
    click.echo(f"Added profile '{name}' ({profile_type_label(profile)})")


@cli.command("list")
@click.pass_obj
@_surface_errors
def list_command(app: AppContext) -> None:
    """List all profiles."""
    entries = app.profiles.list_profiles()
    if not entries:
        click.echo(NO_PROFILES_MESSAGE)
        return
    click.echo("\nProfiles:\n")
    for entry in entries:
        marker = " *" if entry.is_active else ""
        click.echo(f"  {entry.name} ({profile_type_label(entry.profile, short=True)}){marker}")
    click.echo("\n* = active profile")


@cli.command("remove")
@click.argument("name")
@click.option("-y", "--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
@click.pass_obj
@_surface_errors
def remove_command(app: AppContext, name: str, yes: bool) -> None:
    """Remove profile NAME."""
    if app.profiles.get_profile(name) is None:
        raise ProfileNotFoundError(name)
    if not yes and not click.confirm(f"Remove profile '{name}'?", default=False):
        click.echo("Cancelled.")
        return
    app.profiles.remove_profile(name)
    click.echo(f"Removed profile '{name}'.")


@cli.command("current")
@click.pass_obj
@_surface_errors
def current_command(app: AppContext) -> None:
    """Show the active profile and the credentials currently in effect."""
    active = app.profiles.get_active_profile()
    env_key = os.environ.get(API_KEY_ENV_VAR)

    if not active:
        click.echo("No active profile set.")
        if env_key:
            click.echo(f"Current {API_KEY_ENV_VAR}: {mask_secret(env_key)}")
        return

    profile = app.profiles.get_profile(active)
    if profile is None:
        click.echo(f"Active profile '{active}' not found in config.")
        return

    click.echo(f"Profile: {active} ({profile_type_label(profile)})")
    click.echo(f"Credentials: {display_profile(profile)}")
    if env_key:
        click.echo(f"{API_KEY_ENV_VAR}: {mask_secret(env_key)}")
    else:
        click.echo(f"{API_KEY_ENV_VAR}: (not set - using OAuth)")
    helper = app.settings.load().get(API_KEY_HELPER_FIELD)
    click.echo(f"{API_KEY_HELPER_FIELD}: {display_api_key_helper(helper)}")


@cli.command("env")
@click.argument("name", required=False)
@click.option(
    "--shell",
    type=click.Choice(SHELL_KINDS),
    default=None,
    help="Shell syntax to emit (detected from FISH_VERSION when omitted).",
)
@click.option("-d", "--dry-run", is_flag=True, default=False, help="Describe the change instead of printing the command.")
@click.pass_obj
@_surface_errors
def env_command(app: AppContext, name: Optional[str], shell: Optional[str], dry_run: bool) -> None:
    """Print the shell command applying profile NAME (default: active).

    Add to your shell profile:

    \b
        eval "$(claude-profile env)"
    """
    registry = app.profiles.load()
    target = name or registry.active
    if not target:
        raise click.ClickException("No active profile set. Pass a profile name.")
    profile = registry.profiles.get(target)
    if profile is None:
        raise ProfileNotFoundError(target, list(registry.profiles))
    if dry_run:
        click.echo(dry_run_description(profile, shell))  # type: ignore[arg-type]
    else:
        click.echo(shell_command(profile, shell))  # type: ignore[arg-type]


__all__ = ["cli", "AppContext"]
