"""Error presentation.

Every failure, whatever its kind, becomes a single "ERROR: <message>" line on
stderr and exit code 1. There is no machine-readable error output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kickout.core.errors import ErrorCode

if TYPE_CHECKING:
    from kickout.output.console import ConsoleProtocol
    from kickout.release.errors import ReleaseFailure

__all__ = ["report_failure"]


def report_failure(error: ReleaseFailure, console: ConsoleProtocol) -> int:
    """Print error and return the exit code to use."""
    console.error(error.message)
    return int(ErrorCode.FAILURE)
