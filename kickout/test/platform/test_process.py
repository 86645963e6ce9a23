"""Tests for kickout.platform.process module."""

from __future__ import annotations

import io
import shlex
import sys
from pathlib import Path

import pytest

from kickout.core.result import Err, Ok
from kickout.output.console import MockConsole
from kickout.platform.process import (
    CommandExecutionError,
    CommandResult,
    MockRunner,
    ShellRunner,
)


def _python(code: str) -> str:
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


class _AsciiSink(io.StringIO):
    """A text stream that cannot encode anything beyond ASCII."""

    encoding = "ascii"

    def write(self, s: str) -> int:
        s.encode("ascii")
        return super().write(s)


class _BrokenSink(io.StringIO):
    def write(self, s: str) -> int:
        raise OSError("broken pipe")


def _runner() -> tuple[ShellRunner, MockConsole, io.StringIO, io.StringIO]:
    console = MockConsole()
    out = io.StringIO()
    err = io.StringIO()
    return ShellRunner(console, stdout=out, stderr=err), console, out, err


class TestCommandExecutionError:
    def test_message_names_command(self) -> None:
        error = CommandExecutionError("git tag 1.0.1")
        assert error.message == "shell command failed: git tag 1.0.1"

    def test_frozen(self) -> None:
        error = CommandExecutionError("git push")
        with pytest.raises(AttributeError):
            error.command = "x"  # type: ignore[misc]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell quoting")
class TestShellRunner:
    def test_success_buffers_and_streams_stdout(self) -> None:
        runner, _, out, _ = _runner()

        result = runner.run(_python("print('hello')"))

        assert isinstance(result, Ok)
        assert result.value.stdout.strip() == "hello"
        assert result.value.succeeded is True
        assert out.getvalue().strip() == "hello"

    def test_stderr_is_buffered_and_streamed_separately(self) -> None:
        runner, _, out, err = _runner()

        result = runner.run(_python("import sys; sys.stderr.write('warn')"))

        assert isinstance(result, Ok)
        assert result.value.stdout == ""
        assert result.value.stderr == "warn"
        assert err.getvalue() == "warn"
        assert out.getvalue() == ""

    def test_runs_through_shell(self) -> None:
        runner, _, _, _ = _runner()

        result = runner.run("echo one && echo two")

        assert isinstance(result, Ok)
        assert result.value.stdout.split() == ["one", "two"]

    def test_nonzero_exit_is_error(self) -> None:
        runner, _, _, _ = _runner()
        cmd = _python("import sys; sys.exit(3)")

        assert runner.run(cmd) == Err(CommandExecutionError(cmd))

    def test_command_not_found_is_same_error(self) -> None:
        runner, _, _, _ = _runner()

        result = runner.run("nonexistent_command_12345")

        assert result == Err(CommandExecutionError("nonexistent_command_12345"))

    def test_echoes_command(self) -> None:
        runner, console, _, _ = _runner()

        runner.run("echo hi")

        assert console.commands == ["$ echo hi"]

    def test_dry_run_executes_nothing(self, tmp_path: Path) -> None:
        runner, console, out, _ = _runner()
        marker = tmp_path / "marker"

        result = runner.run(f"touch {shlex.quote(str(marker))}", dry_run=True)

        assert result == Ok(CommandResult())
        assert not marker.exists()
        assert out.getvalue() == ""
        assert console.commands == [f"$ # touch {shlex.quote(str(marker))}"]

    def test_large_output_on_both_streams(self) -> None:
        runner, _, out, err = _runner()
        code = "import sys\nfor _ in range(2000):\n    sys.stdout.write('o' * 50)\n    sys.stderr.write('e' * 50)"

        result = runner.run(_python(code))

        assert isinstance(result, Ok)
        assert len(result.value.stdout) == 100_000
        assert len(result.value.stderr) == 100_000
        assert out.getvalue() == result.value.stdout
        assert err.getvalue() == result.value.stderr

    def test_unencodable_output_is_replaced_on_sink(self) -> None:
        out = _AsciiSink()
        runner = ShellRunner(MockConsole(), stdout=out, stderr=io.StringIO())

        code = "import sys; sys.stdout.buffer.write(b'h\\xc3\\xa9llo\\nafter\\n')"

        result = runner.run(_python(code))

        assert isinstance(result, Ok)
        assert result.value.stdout == "h\u00e9llo\nafter\n"
        assert out.getvalue() == "h?llo\nafter\n"

    def test_failing_sink_keeps_draining(self) -> None:
        runner = ShellRunner(MockConsole(), stdout=_BrokenSink(), stderr=io.StringIO())

        result = runner.run(_python("import sys; sys.stdout.write('o' * 100_000)"))

        assert isinstance(result, Ok)
        assert result.value.stdout == "o" * 100_000


class TestMockRunner:
    def test_unscripted_commands_succeed_empty(self) -> None:
        runner = MockRunner()
        assert runner.run("git tag 1.0.0") == Ok(CommandResult())

    def test_scripted_result(self) -> None:
        runner = MockRunner(responses={"npm view x version": CommandResult(stdout="1.0.0\n")})
        result = runner.run("npm view x version")
        assert isinstance(result, Ok)
        assert result.value.stdout == "1.0.0\n"

    def test_scripted_failure(self) -> None:
        error = CommandExecutionError("git push")
        runner = MockRunner(responses={"git push": error})
        assert runner.run("git push") == Err(error)

    def test_unsucceeded_result_is_failure(self) -> None:
        runner = MockRunner(responses={"git tag 1.0.1": CommandResult(succeeded=False)})
        assert runner.run("git tag 1.0.1") == Err(CommandExecutionError("git tag 1.0.1"))

    def test_dry_run_ignores_script(self) -> None:
        runner = MockRunner(responses={"git push": CommandExecutionError("git push")})
        assert runner.run("git push", dry_run=True) == Ok(CommandResult())
        assert runner.commands == ["git push"]
        assert runner.executed == []

    def test_echoes_to_console(self) -> None:
        console = MockConsole()
        runner = MockRunner(console=console)
        runner.run("git tag 1.0.0", dry_run=True)
        assert console.commands == ["$ # git tag 1.0.0"]
