"""Git operations for a release.

The Repository wraps the handful of git command lines a release needs.
The command lines are fixed strings so they can be audited in dry-run output.

Usage:
    repo = Repository(runner)
    if repo.status() != "clean":
        ...
    repo.commit("release version 1.0.1", "package.json", dry_run=False)
"""

from __future__ import annotations

from kickout.core.result import Err, Ok, Result
from kickout.platform.process import CommandExecutionError, CommandResult, CommandRunner
from kickout.release.errors import WorkingCopyStatus

__all__ = [
    "Repository",
    "classify_status",
    "escape_commit_message",
]

STATUS_COMMAND = "git status --porcelain"
PUSH_COMMAND = "git push && git push --tags"

# Characters with special meaning inside a double-quoted POSIX shell string.
_SHELL_DQUOTE_SPECIAL = ("\\", '"', "$", "`")


def classify_status(result: Result[CommandResult, CommandExecutionError]) -> WorkingCopyStatus:
    """Classify `git status --porcelain` output.

    Nothing on either stream is clean, stdout alone means uncommitted
    changes, anything on stderr (or a failed command) is an error.
    """
    match result:
        case Err(_):
            return "error"
        case Ok(output):
            if output.stdout == "" and output.stderr == "":
                return "clean"
            if output.stderr == "":
                return "changes"
            return "error"


def escape_commit_message(message: str) -> str:
    """Escape message for use inside double quotes on a shell command line."""
    for ch in _SHELL_DQUOTE_SPECIAL:
        message = message.replace(ch, "\\" + ch)
    return message


class Repository:
    """Git working copy in the current directory."""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def status(self) -> WorkingCopyStatus:
        """Query working-copy cleanliness. Always executed, even in dry-run."""
        return classify_status(self._runner.run(STATUS_COMMAND, dry_run=False))

    def commit(
        self, message: str, path: str, *, dry_run: bool
    ) -> Result[CommandResult, CommandExecutionError]:
        """Commit only path, with message."""
        return self._runner.run(
            f'git commit -m "{escape_commit_message(message)}" {path}',
            dry_run=dry_run,
        )

    def tag(self, name: str, *, dry_run: bool) -> Result[CommandResult, CommandExecutionError]:
        return self._runner.run(f"git tag {name}", dry_run=dry_run)

    def push(self, *, dry_run: bool) -> Result[CommandResult, CommandExecutionError]:
        """Push commits, then tags, to the upstream remote."""
        return self._runner.run(PUSH_COMMAND, dry_run=dry_run)
