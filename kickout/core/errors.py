"""Exit codes for the kickout command.

Any runtime failure of a release exits with FAILURE. Usage errors (unknown
flags, a wrong argument count) are reported by click with its own code 2.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. These values are part of the CLI contract."""

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()
