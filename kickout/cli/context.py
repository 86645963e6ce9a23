from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from kickout.core.config import Settings, load_settings
from kickout.output.console import ConsoleProtocol, RichConsole
from kickout.platform.process import CommandRunner, ShellRunner


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path
    settings: Settings
    console: ConsoleProtocol
    runner: CommandRunner


def build_context(*, no_color: bool = False) -> CLIContext:
    settings = load_settings()
    console = RichConsole(no_color=no_color or settings.no_color)
    return CLIContext(
        cwd=Path.cwd(),
        settings=settings,
        console=console,
        runner=ShellRunner(console),
    )
