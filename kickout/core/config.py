"""Runtime settings for a kickout run.

Command-line flags are the primary configuration surface (see
kickout.release.model.Options). The settings here cover what the flags do
not: the manifest file name, defaults, and a few environment switches.

Environment:
    NO_COLOR            any non-empty value disables colored output
    NO_UPDATE_NOTIFIER  any non-empty value disables the update check
    CI                  any non-empty value disables the update check
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

__all__ = [
    "DEFAULT_DIST_TAG",
    "MANIFEST_NAME",
    "UPDATE_CHECK_INTERVAL_SECONDS",
    "Settings",
    "load_settings",
]

MANIFEST_NAME = "package.json"
DEFAULT_DIST_TAG = "latest"

# Two days, same cadence as the npm-side update notifier.
UPDATE_CHECK_INTERVAL_SECONDS = 2 * 24 * 60 * 60.0


@dataclass(frozen=True, slots=True)
class Settings:
    """Effective settings for one run."""

    manifest_name: str = MANIFEST_NAME
    default_tag: str = DEFAULT_DIST_TAG
    no_color: bool = False
    update_check: bool = True
    update_check_interval: float = UPDATE_CHECK_INTERVAL_SECONDS


def _flag(environ: Mapping[str, str], key: str) -> bool:
    return bool(environ.get(key, "").strip())


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from the environment (os.environ if not given)."""
    env = os.environ if environ is None else environ
    return Settings(
        no_color=_flag(env, "NO_COLOR"),
        update_check=not (_flag(env, "NO_UPDATE_NOTIFIER") or _flag(env, "CI")),
    )
