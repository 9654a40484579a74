"""Apply a profile to the Claude settings document.

:func:`apply_profile` and :func:`dry_run_apply_profile` run the same
:func:`~claude_profile.applier.compute_apply` step; only the former
writes, and only when the helper actually changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .applier import ApplyPlan, apply_plan, compute_apply
from .profiles.models import Profile
from .settings.store import SettingsStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyResult:
    """What an apply did (or, for a dry run, would do)."""

    settings_path: Path
    plan: ApplyPlan
    dry_run: bool = False

    @property
    def old_helper(self) -> Optional[str]:
        return self.plan.old_helper

    @property
    def new_helper(self) -> Optional[str]:
        return self.plan.new_helper

    @property
    def changed(self) -> bool:
        return self.plan.changed


def apply_profile(profile: Profile, store: SettingsStore) -> ApplyResult:
    """Write ``profile``'s ``apiKeyHelper`` into the settings file.

    Settings keys other than ``apiKeyHelper`` are preserved.  The file
    is left untouched when the helper is already correct.
    """
    settings = store.load()
    plan = compute_apply(profile, settings)
    if plan.changed:
        store.save(apply_plan(settings, plan))
        logger.info("Updated apiKeyHelper in %s", store.path)
    else:
        logger.debug("apiKeyHelper in %s already up to date", store.path)
    return ApplyResult(settings_path=store.path, plan=plan)


def dry_run_apply_profile(profile: Profile, store: SettingsStore) -> ApplyResult:
    """Report what :func:`apply_profile` would change without writing."""
    plan = compute_apply(profile, store.load())
    return ApplyResult(settings_path=store.path, plan=plan, dry_run=True)


__all__ = ["ApplyResult", "apply_profile", "dry_run_apply_profile"]
