"""Pure computations that turn a profile into its observable effect.

Nothing here touches the filesystem.  The functions build the shell
snippets that export or unset ``ANTHROPIC_API_KEY``, the ``apiKeyHelper``
value written into the Claude settings document, and the masked strings
shown on the terminal.

Two ways of applying a profile coexist:

* ``apiKeyHelper`` in ``~/.claude/settings.json`` (``echo '<key>'`` for
  API key profiles, removed for Max profiles), used by ``switch``.
* Shell commands for ``eval "$(claude-profile env)"``, used by ``env``.

Keys are interpolated verbatim between single quotes.  A key that
itself contains ``'`` produces a broken snippet; Anthropic keys never
do.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Literal, Mapping, Optional

from .config import API_KEY_ENV_VAR, API_KEY_HELPER_FIELD, FISH_VERSION_ENV_VAR
from .profiles.models import ApiKeyProfile, Profile
from .settings.store import Settings

ShellKind = Literal["posix", "fish"]

SHELL_KINDS: tuple[str, ...] = ("posix", "fish")

# Human-readable shell family names used in dry-run output.
SHELL_LABELS: dict[str, str] = {"posix": "bash/zsh", "fish": "fish"}

# Secrets longer than this are shown as head...tail.
MASK_THRESHOLD = 20
MASK_HEAD = 10
MASK_TAIL = 6

# Helper strings that are not ``echo '...'`` are truncated past this length.
HELPER_DISPLAY_MAX = 40
HELPER_DISPLAY_KEEP = 37

HELPER_NOT_SET = "(not set - using OAuth)"
MAX_PROFILE_DISPLAY = "(Max plan / OAuth)"

_ECHO_HELPER = re.compile(r"echo '(.*)'", re.DOTALL)


@dataclass(frozen=True)
class ApplyPlan:
    """Outcome of comparing the current ``apiKeyHelper`` with a profile's."""

    old_helper: Optional[str]
    new_helper: Optional[str]
    changed: bool


def detect_shell(environ: Optional[Mapping[str, str]] = None) -> ShellKind:
    """Return ``"fish"`` when ``FISH_VERSION`` is set and non-empty, else ``"posix"``."""
    env = os.environ if environ is None else environ
    return "fish" if env.get(FISH_VERSION_ENV_VAR) else "posix"


def shell_command(profile: Profile, shell: Optional[ShellKind] = None) -> str:
    """Return the command that applies ``profile`` to the current shell.

    Args:
        profile: Profile to apply.
        shell: ``"posix"`` or ``"fish"``; detected from the environment
            when omitted.

    Returns:
        ``export``/``set -gx`` for API key profiles, ``unset``/``set -e``
        for Max profiles.
    """
    kind = shell or detect_shell()
    if isinstance(profile, ApiKeyProfile):
        if kind == "fish":
            return f"set -gx {API_KEY_ENV_VAR} '{profile.key}'"
        return f"export {API_KEY_ENV_VAR}='{profile.key}'"
    if kind == "fish":
        return f"set -e {API_KEY_ENV_VAR}"
    return f"unset {API_KEY_ENV_VAR}"


def mask_secret(key: str) -> str:
    """Shorten long secrets to their first 10 and last 6 characters."""
    if len(key) > MASK_THRESHOLD:
        return f"{key[:MASK_HEAD]}...{key[-MASK_TAIL:]}"
    return key


def display_profile(profile: Profile) -> str:
    if isinstance(profile, ApiKeyProfile):
        return mask_secret(profile.key)
    return MAX_PROFILE_DISPLAY


def profile_type_label(profile: Profile, short: bool = False) -> str:
    """Return ``"API key"``/``"Max plan"``, or ``"api-key"``/``"max"`` when ``short``."""
    if short:
        return profile.type
    return "API key" if isinstance(profile, ApiKeyProfile) else "Max plan"


def display_api_key_helper(helper: Optional[str]) -> str:
    """Render an ``apiKeyHelper`` value without leaking the key.

    ``echo '<key>'`` keeps its shape with the key masked.  Any other
    command longer than 40 characters is cut to 37 plus ``...``.
    """
    if helper is None:
        return HELPER_NOT_SET
    match = _ECHO_HELPER.fullmatch(helper)
    if match:
        return f"echo '{mask_secret(match.group(1))}'"
    if len(helper) > HELPER_DISPLAY_MAX:
        return f"{helper[:HELPER_DISPLAY_KEEP]}..."
    return helper


def dry_run_description(profile: Profile, shell: Optional[ShellKind] = None) -> str:
    """Describe what :func:`shell_command` would do, with the key masked."""
    label = SHELL_LABELS[shell or detect_shell()]
    if isinstance(profile, ApiKeyProfile):
        return f"Would set ({label}): {API_KEY_ENV_VAR}={mask_secret(profile.key)}"
    return f"Would unset ({label}): {API_KEY_ENV_VAR} (use OAuth)"


def api_key_helper_for(profile: Profile) -> Optional[str]:
    """Return the ``apiKeyHelper`` command for ``profile``, ``None`` for Max."""
    if isinstance(profile, ApiKeyProfile):
        return f"echo '{profile.key}'"
    return None


def compute_apply(profile: Profile, settings: Settings) -> ApplyPlan:
    """Compare the settings' current helper with the one ``profile`` needs.

    Shared by the real and the dry-run switch so both report the same
    change.
    """
    old_helper = settings.get(API_KEY_HELPER_FIELD)
    new_helper = api_key_helper_for(profile)
    return ApplyPlan(old_helper=old_helper, new_helper=new_helper, changed=old_helper != new_helper)


def apply_plan(settings: Settings, plan: ApplyPlan) -> Settings:
    """Return a copy of ``settings`` with ``apiKeyHelper`` set or removed."""
    updated = dict(settings)
    if plan.new_helper is None:
        updated.pop(API_KEY_HELPER_FIELD, None)
    else:
        updated[API_KEY_HELPER_FIELD] = plan.new_helper
    return updated


__all__ = [
    "ApplyPlan",
    "ShellKind",
    "SHELL_KINDS",
    "detect_shell",
    "shell_command",
    "mask_secret",
    "display_profile",
    "profile_type_label",
    "display_api_key_helper",
    "dry_run_description",
    "api_key_helper_for",
    "compute_apply",
    "apply_plan",
]
