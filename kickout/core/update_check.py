"""Notify the operator when a newer kickout is available.

The latest version is looked up on PyPI at most once per check interval.
The result is remembered in a small dedicated file:

  <user-config-dir>/update-check.toml

with content like:

  last_check = 1760000000.0
  latest = "1.1.0"

Nothing here can fail a release: errors only mean no notice is shown.
"""

from __future__ import annotations

import re
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path

from kickout.core.config import Settings
from kickout.core.result import Err, Ok, Result
from kickout.core.structured import get_float, get_str, get_table
from kickout.output.console import ConsoleProtocol
from kickout.platform.http import HttpClient, RealHttpClient
from kickout.platform.paths import APP_NAME, user_config_dir

__all__ = [
    "PYPI_URL",
    "UpdateCheckError",
    "UpdateState",
    "check_for_update",
    "notify_update",
    "read_state",
    "update_state_path",
    "write_state",
]

PYPI_URL = f"https://pypi.org/pypi/{APP_NAME}/json"

_RELEASE_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True, slots=True)
class UpdateState:
    last_check: float = 0.0
    latest: str | None = None


@dataclass(frozen=True, slots=True)
class UpdateCheckError:
    message: str
    path: Path | None = None


def update_state_path() -> Path:
    return user_config_dir() / "update-check.toml"


def _release_tuple(version: str) -> tuple[int, int, int] | None:
    m = _RELEASE_RE.match(version.strip())
    if m is None:
        return None
    return (int(m.group(1)), int(m.group(2)), int(m.group(3)))


def read_state(path: Path) -> Result[UpdateState, UpdateCheckError]:
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return Ok(UpdateState())
    except OSError as e:
        return Err(UpdateCheckError(f"Error reading {path}: {e}", path=path))

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        return Err(UpdateCheckError(f"Invalid update state: {e}", path=path))

    return Ok(
        UpdateState(
            last_check=get_float(data, "last_check") or 0.0,
            latest=get_str(data, "latest"),
        )
    )


def write_state(path: Path, state: UpdateState) -> Result[None, UpdateCheckError]:
    lines = [f"last_check = {float(state.last_check)!r}"]
    if state.latest is not None and _release_tuple(state.latest) is not None:
        lines.append(f'latest = "{state.latest}"')
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8", newline="\n")
    except OSError as e:
        return Err(UpdateCheckError(f"Could not write {path}: {e}", path=path))
    return Ok(None)


def check_for_update(
    *,
    current: str,
    settings: Settings,
    client: HttpClient,
    path: Path,
    now: float,
) -> Result[str | None, UpdateCheckError]:
    """Return the newer released version, or None if current is up to date.

    PyPI is only asked when the remembered answer is older than the
    interval. A failed lookup still counts as a check.
    """
    loaded = read_state(path)
    state = loaded.value if isinstance(loaded, Ok) else UpdateState()

    if now - state.last_check >= settings.update_check_interval:
        latest = state.latest
        fetched = client.get_json(PYPI_URL)
        if isinstance(fetched, Ok):
            info = get_table(fetched.value, "info") or {}
            latest = get_str(info, "version") or latest
        state = UpdateState(last_check=now, latest=latest)
        saved = write_state(path, state)
        if isinstance(saved, Err):
            return saved

    if state.latest is None:
        return Ok(None)
    latest_t = _release_tuple(state.latest)
    current_t = _release_tuple(current)
    if latest_t is None or current_t is None or latest_t <= current_t:
        return Ok(None)
    return Ok(state.latest)


def notify_update(
    console: ConsoleProtocol,
    *,
    current: str,
    settings: Settings,
    client: HttpClient | None = None,
    path: Path | None = None,
) -> None:
    if not settings.update_check:
        return

    result = check_for_update(
        current=current,
        settings=settings,
        client=client or RealHttpClient(),
        path=path or update_state_path(),
        now=time.time(),
    )
    if isinstance(result, Ok) and result.value is not None:
        console.warning(
            f"{APP_NAME} {result.value} is available (installed: {current}); "
            f"upgrade with: pip install -U {APP_NAME}"
        )
