from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from kickout.core.config import DEFAULT_DIST_TAG
from kickout.core.result import Err, Ok, Result
from kickout.release.errors import InvalidArgumentError

BumpKind = Literal["major", "minor", "patch"]

_BUMP_RE = re.compile(r"(?:major|minor|patch|[0-9]+\.[0-9]+\.[0-9]+)")


@dataclass(frozen=True, slots=True)
class Options:
    """What the operator asked for on the command line.

    bump is either a BumpKind or an explicit "X.Y.Z" version.
    """

    bump: str
    noop: bool = False
    message: str | None = None
    tag: str = DEFAULT_DIST_TAG
    no_color: bool = False

    @classmethod
    def parse(
        cls,
        *,
        bump: str,
        noop: bool = False,
        message: str | None = None,
        tag: str = DEFAULT_DIST_TAG,
        no_color: bool = False,
    ) -> Result[Options, InvalidArgumentError]:
        if _BUMP_RE.fullmatch(bump) is None:
            return Err(InvalidArgumentError("invalid bumping mode"))
        if not tag.strip():
            return Err(InvalidArgumentError("invalid NPM package tag"))
        return Ok(
            cls(
                bump=bump,
                noop=noop,
                message=message or None,
                tag=tag,
                no_color=no_color,
            )
        )
