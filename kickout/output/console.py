"""Console output abstraction.

Services talk to a ConsoleProtocol instead of printing directly. RichConsole
is what the CLI uses; MockConsole captures output for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    COMMAND = auto()  # Echo of an external command line

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for operator-facing output."""

    def command(self, command_line: str, *, noop: bool = False) -> None:
        """Echo an external command line ("$ cmd", or "$ # cmd" when not executed)."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None:
        """Print an error message to standard error."""
        ...

    def warning(self, message: str) -> None: ...


class RichConsole:
    """Console implementation using Rich.

    With no_color the consoles are built without a color system, so no ANSI
    sequences are written at all.
    """

    def __init__(self, *, no_color: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        color_system = None if no_color else "auto"
        self._console = Console(
            color_system=color_system, emoji=False, highlight=False, soft_wrap=True
        )
        self._err_console = Console(
            stderr=True, color_system=color_system, emoji=False, highlight=False, soft_wrap=True
        )

    @staticmethod
    def _escape(text: str) -> str:
        from rich.markup import escape

        return escape(text)

    def command(self, command_line: str, *, noop: bool = False) -> None:
        shown = f"# {command_line}" if noop else command_line
        self._console.print(f"$ [blue]{self._escape(shown)}[/blue]")

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {self._escape(message)}")

    def error(self, message: str) -> None:
        self._err_console.print(f"[red bold]ERROR:[/red bold] {self._escape(message)}")

    def warning(self, message: str) -> None:
        self._err_console.print(f"[yellow]WARNING:[/yellow] {self._escape(message)}")


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def command(self, command_line: str, *, noop: bool = False) -> None:
        shown = f"# {command_line}" if noop else command_line
        self.outputs.append(OutputRecord(f"$ {shown}", Style.COMMAND))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"ERROR: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"WARNING: {message}", Style.WARNING))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    @property
    def commands(self) -> list[str]:
        """Echoed command lines, including the "$ " prefix."""
        return [o.message for o in self.outputs if o.style == Style.COMMAND]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
