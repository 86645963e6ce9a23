from __future__ import annotations

import re
from dataclasses import dataclass, field

from kickout.core.result import Err, Ok, Result
from kickout.release.errors import InvalidVersionError, VersionMismatchError
from kickout.release.model import BumpKind

# Loose syntax: "v1.2.3", "=1.2.3", "01.2.3", "1.2.3beta.1" are all accepted.
_LOOSE_RE = re.compile(
    r"^[v=\s]*"
    r"(\d+)\.(\d+)\.(\d+)"
    r"(?:-?([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

Identifier = int | str


def _identifiers(text: str | None) -> tuple[Identifier, ...]:
    if not text:
        return ()
    return tuple(int(part) if part.isdigit() else part for part in text.split("."))


@dataclass(frozen=True, slots=True)
class SemVer:
    """A parsed semantic version.

    Equality follows semver precedence: numeric parts and prerelease count,
    build metadata does not (1.0.0+a == 1.0.0+b, 1.0.0-rc.1 != 1.0.0).
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[Identifier, ...] = ()
    build: tuple[Identifier, ...] = field(default=(), compare=False)

    @property
    def core(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(str(p) for p in self.prerelease)
        return text

    def bump(self, kind: BumpKind) -> SemVer:
        """Return the successor version for kind.

        A prerelease of the version the bump would produce is promoted to
        that release instead of skipping past it: 1.3.0-rc.1 + minor is
        1.3.0, 1.2.3-beta + patch is 1.2.3.
        """
        match kind:
            case "major":
                if self.prerelease and self.minor == 0 and self.patch == 0:
                    return SemVer(self.major, 0, 0)
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                if self.prerelease and self.patch == 0:
                    return SemVer(self.major, self.minor, 0)
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                if self.prerelease:
                    return SemVer(self.major, self.minor, self.patch)
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_version(text: str) -> SemVer | None:
    m = _LOOSE_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(
        int(m.group(1)),
        int(m.group(2)),
        int(m.group(3)),
        prerelease=_identifiers(m.group(4)),
        build=_identifiers(m.group(5)),
    )


def resolve_version(
    *, current: str, published: str, bump: str
) -> Result[str, VersionMismatchError | InvalidVersionError]:
    """Compute the version to release.

    current (from package.json) must equal published (from the registry).
    bump is a BumpKind, or an explicit "X.Y.Z" which is returned verbatim,
    with no check that it is greater than current.
    """
    current_v = parse_version(current)
    if current_v is None:
        return Err(InvalidVersionError(version=current, source="package.json"))
    published_v = parse_version(published)
    if published_v is None:
        return Err(InvalidVersionError(version=published, source="published"))

    if current_v != published_v:
        return Err(VersionMismatchError(current=current, published=published))

    match bump:
        case "major" | "minor" | "patch":
            return Ok(str(current_v.bump(bump)))
        case _:
            return Ok(bump)
