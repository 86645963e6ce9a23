"""Shell command execution with Result-based error handling.

Every external command kickout runs (git, npm) goes through a
CommandRunner. The real ShellRunner hands the command line to the shell,
streams the child's output live to our own stdout/stderr so the operator sees
progress, and also buffers it so callers can inspect it (e.g. the output of
`npm view`).

Usage:
    runner = ShellRunner(console)
    match runner.run("npm view kickout version", dry_run=False):
        case Ok(result):
            print(result.stdout)
        case Err(error):
            print(error.message)

There is no timeout: a hung command hangs the release.
"""

from __future__ import annotations

import codecs
import subprocess
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import IO, Protocol

from kickout.core.result import Err, Ok, Result
from kickout.output.console import ConsoleProtocol

__all__ = [
    "CommandExecutionError",
    "CommandResult",
    "CommandRunner",
    "MockRunner",
    "ShellRunner",
]

_CHUNK_SIZE = 4096


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Buffered output of a finished command."""

    stdout: str = ""
    stderr: str = ""
    succeeded: bool = True


@dataclass(frozen=True, slots=True)
class CommandExecutionError:
    """A command could not be started or exited non-zero.

    Both cases are deliberately the same error: callers get no exit status
    or diagnostics, only the command line that failed.
    """

    command: str

    @property
    def message(self) -> str:
        return f"shell command failed: {self.command}"


class CommandRunner(Protocol):
    def run(
        self, command_line: str, *, dry_run: bool = False
    ) -> Result[CommandResult, CommandExecutionError]:
        """Run command_line, or only echo it when dry_run is set."""
        ...


def _echo(sink: IO[str], text: str) -> bool:
    """Write text to sink. Returns False once sink can no longer be written."""
    try:
        try:
            sink.write(text)
        except UnicodeEncodeError:
            encoding = getattr(sink, "encoding", None) or "ascii"
            sink.write(text.encode(encoding, "replace").decode(encoding))
        sink.flush()
    except (OSError, ValueError):
        return False
    return True


def _tee(source: IO[bytes], sink: IO[str], chunks: list[str]) -> None:
    # Keeps draining into chunks after sink fails, so the child never blocks.
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    read = getattr(source, "read1", source.read)
    live = True
    while True:
        data = read(_CHUNK_SIZE)
        text = decoder.decode(data, final=not data)
        if text:
            chunks.append(text)
            if live:
                live = _echo(sink, text)
        if not data:
            break
    source.close()


def _checked(
    command_line: str, result: CommandResult
) -> Result[CommandResult, CommandExecutionError]:
    if not result.succeeded:
        return Err(CommandExecutionError(command_line))
    return Ok(result)


class ShellRunner:
    """Run command lines through the system shell.

    The child inherits our environment and working directory. One command
    runs at a time; the two reader threads only exist so that a chatty
    stderr cannot block a child whose stdout we are still draining.
    """

    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ) -> None:
        self._console = console
        self._stdout = stdout
        self._stderr = stderr

    def run(
        self, command_line: str, *, dry_run: bool = False
    ) -> Result[CommandResult, CommandExecutionError]:
        self._console.command(command_line, noop=dry_run)
        if dry_run:
            return Ok(CommandResult())

        try:
            proc = subprocess.Popen(
                command_line,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError:
            return Err(CommandExecutionError(command_line))

        assert proc.stdout is not None and proc.stderr is not None
        out_chunks: list[str] = []
        err_chunks: list[str] = []
        readers = [
            threading.Thread(
                target=_tee,
                args=(proc.stdout, self._stdout or sys.stdout, out_chunks),
                daemon=True,
            ),
            threading.Thread(
                target=_tee,
                args=(proc.stderr, self._stderr or sys.stderr, err_chunks),
                daemon=True,
            ),
        ]
        for reader in readers:
            reader.start()
        for reader in readers:
            reader.join()

        return _checked(
            command_line,
            CommandResult(
                stdout="".join(out_chunks),
                stderr="".join(err_chunks),
                succeeded=proc.wait() == 0,
            ),
        )


def _no_calls() -> list[tuple[str, bool]]:
    return []


@dataclass
class MockRunner:
    """Scripted CommandRunner for tests.

    Responses are keyed by exact command line; anything unscripted succeeds
    with empty output. A scripted CommandResult with succeeded=False fails
    the same way a non-zero exit does. Dry-run calls never consult the
    script, matching ShellRunner which does not execute them.

    Usage:
        runner = MockRunner(responses={
            "npm view pkg version": CommandResult(stdout="1.0.0\\n"),
            "git tag 1.0.1": CommandExecutionError("git tag 1.0.1"),
        })
    """

    responses: Mapping[str, CommandResult | CommandExecutionError] = field(default_factory=dict)
    console: ConsoleProtocol | None = None
    calls: list[tuple[str, bool]] = field(default_factory=_no_calls)

    def run(
        self, command_line: str, *, dry_run: bool = False
    ) -> Result[CommandResult, CommandExecutionError]:
        self.calls.append((command_line, dry_run))
        if self.console is not None:
            self.console.command(command_line, noop=dry_run)
        if dry_run:
            return Ok(CommandResult())

        response = self.responses.get(command_line, CommandResult())
        if isinstance(response, CommandExecutionError):
            return Err(response)
        return _checked(command_line, response)

    @property
    def commands(self) -> list[str]:
        """Every command line seen, executed or not."""
        return [cmd for cmd, _ in self.calls]

    @property
    def executed(self) -> list[str]:
        """Command lines that were actually run (not dry-run)."""
        return [cmd for cmd, dry_run in self.calls if not dry_run]
