"""package.json loading and version rewriting.

The manifest is never re-serialized. The version bump is a scoped text
substitution on the raw file content, so key order, indentation, trailing
newline and line endings all stay exactly as the author left them.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from kickout.core.result import Err, Ok, Result
from kickout.core.structured import StrDict, as_str_dict, get_str, get_table
from kickout.platform.files import atomic_write_text
from kickout.release.errors import (
    ManifestInvalidError,
    ManifestNotFoundError,
    ManifestRewriteError,
)

__all__ = [
    "PREPUBLISH_SCRIPTS",
    "Manifest",
    "load_manifest",
    "prepublish_script",
    "rewrite_version",
    "write_manifest",
]

# Checked in order; the first one declared wins.
PREPUBLISH_SCRIPTS = ("prepublish", "prepublishOnly")

_WS = r"[ \t\r\n]*"


@dataclass(frozen=True, slots=True)
class Manifest:
    """A loaded package.json.

    Attributes:
        path: File the manifest was read from
        raw_text: Exact file content; the only thing ever written back
        data: Parsed JSON object (read-only)
    """

    path: Path
    raw_text: str
    data: StrDict

    @property
    def name(self) -> str:
        return get_str(self.data, "name") or ""

    @property
    def version(self) -> str:
        # unstripped: rewrite_version matches it literally
        value = self.data.get("version")
        return value if isinstance(value, str) else ""

    @property
    def scripts(self) -> dict[str, str]:
        table = get_table(self.data, "scripts") or {}
        return {k: v for k, v in table.items() if isinstance(v, str)}


def load_manifest(
    directory: Path, file_name: str
) -> Result[Manifest, ManifestNotFoundError | ManifestInvalidError]:
    path = directory / file_name
    if not path.is_file():
        return Err(ManifestNotFoundError(path=path))

    try:
        # newline="" keeps "\r\n" intact for the later byte-exact rewrite
        with path.open("r", encoding="utf-8", newline="") as handle:
            raw_text = handle.read()
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestInvalidError(path=path, reason=str(e)))

    try:
        obj: object = json.loads(raw_text)
    except json.JSONDecodeError as e:
        return Err(ManifestInvalidError(path=path, reason=f"invalid JSON: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(ManifestInvalidError(path=path, reason="expected a JSON object"))
    for key in ("name", "version"):
        if get_str(data, key) is None:
            return Err(ManifestInvalidError(path=path, reason=f'missing string field "{key}"'))

    return Ok(Manifest(path=path, raw_text=raw_text, data=data))


def prepublish_script(manifest: Manifest) -> str | None:
    """Name of the pre-publish script to run, if the package declares one."""
    scripts = manifest.scripts
    for name in PREPUBLISH_SCRIPTS:
        if name in scripts:
            return name
    return None


def rewrite_version(raw_text: str, old: str, new: str) -> Result[str, ManifestRewriteError]:
    """Replace the first quoted "version": "<old>" value with new.

    The key may use single or double quotes, with any whitespace (including
    newlines) around the colon. old is matched literally. Only the text
    between the value's quotes changes.
    """
    pattern = re.compile(
        r"""((?P<kq>["'])version(?P=kq)"""
        + _WS
        + ":"
        + _WS
        + r"""(?P<vq>["']))"""
        + re.escape(old)
        + r"(?P=vq)"
    )
    new_text = pattern.sub(lambda m: f"{m.group(1)}{new}{m.group('vq')}", raw_text, count=1)
    if new_text == raw_text:
        return Err(ManifestRewriteError(old=old, new=new))
    return Ok(new_text)


def write_manifest(manifest: Manifest, text: str) -> Result[None, ManifestInvalidError]:
    try:
        atomic_write_text(manifest.path, text)
    except OSError as e:
        return Err(ManifestInvalidError(path=manifest.path, reason=f"cannot write: {e}"))
    return Ok(None)
