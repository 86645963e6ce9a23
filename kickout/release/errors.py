from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from kickout.platform.process import CommandExecutionError

__all__ = [
    "CommandExecutionError",
    "InvalidArgumentError",
    "InvalidVersionError",
    "ManifestInvalidError",
    "ManifestNotFoundError",
    "ManifestRewriteError",
    "ReleaseFailure",
    "VersionMismatchError",
    "WorkingCopyNotCleanError",
    "WorkingCopyStatus",
]

WorkingCopyStatus = Literal["clean", "changes", "error"]


@dataclass(frozen=True, slots=True)
class ManifestNotFoundError:
    path: Path

    @property
    def message(self) -> str:
        return f'cannot find NPM package configuration file "{self.path.name}"'


@dataclass(frozen=True, slots=True)
class ManifestInvalidError:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f'invalid NPM package configuration file "{self.path.name}": {self.reason}'


@dataclass(frozen=True, slots=True)
class WorkingCopyNotCleanError:
    status: WorkingCopyStatus

    @property
    def message(self) -> str:
        return f"Git working copy status: {self.status}"


@dataclass(frozen=True, slots=True)
class VersionMismatchError:
    current: str
    published: str

    @property
    def message(self) -> str:
        return (
            "latest published NPM package version not equal current version in package.json "
            f"(published: {self.published}, current: {self.current})"
        )


@dataclass(frozen=True, slots=True)
class InvalidVersionError:
    version: str
    source: str

    @property
    def message(self) -> str:
        return f'invalid {self.source} version "{self.version}"'


@dataclass(frozen=True, slots=True)
class ManifestRewriteError:
    old: str
    new: str

    @property
    def message(self) -> str:
        return f'failed to update package configuration from version "{self.old}" to "{self.new}"'


@dataclass(frozen=True, slots=True)
class InvalidArgumentError:
    reason: str

    @property
    def message(self) -> str:
        return self.reason


ReleaseFailure = (
    ManifestNotFoundError
    | ManifestInvalidError
    | WorkingCopyNotCleanError
    | CommandExecutionError
    | VersionMismatchError
    | InvalidVersionError
    | ManifestRewriteError
    | InvalidArgumentError
)
