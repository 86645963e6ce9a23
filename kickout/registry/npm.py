"""npm registry operations for a release."""

from __future__ import annotations

import re

from kickout.core.result import Err, Ok, Result
from kickout.platform.process import CommandExecutionError, CommandResult, CommandRunner

__all__ = ["Registry"]

_TRAILING_NEWLINE_RE = re.compile(r"\r?\n\Z")


class Registry:
    """The npm CLI, as seen from the package directory."""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def run_script(
        self, name: str, *, dry_run: bool
    ) -> Result[CommandResult, CommandExecutionError]:
        return self._runner.run(f"npm run {name}", dry_run=dry_run)

    def published_version(self, package: str) -> Result[str, CommandExecutionError]:
        """Latest published version of package.

        This is a read-only lookup and is always executed, even in dry-run.
        """
        result = self._runner.run(f"npm view {package} version", dry_run=False)
        match result:
            case Err(e):
                return Err(e)
            case Ok(output):
                return Ok(_TRAILING_NEWLINE_RE.sub("", output.stdout, count=1))

    def publish(self, tag: str, *, dry_run: bool) -> Result[CommandResult, CommandExecutionError]:
        """Publish the package under distribution tag."""
        return self._runner.run(f"npm publish --tag={tag}", dry_run=dry_run)
