"""Result type for explicit error handling.

Every fallible step of a release returns a Result instead of raising, so the
whole workflow can be driven (and tested) without anything calling
sys.exit() halfway through. Only the CLI layer turns an Err into an exit code.

Usage:
    def parse_bump(text: str) -> Result[str, InvalidArgumentError]:
        if text not in {"major", "minor", "patch"}:
            return Err(InvalidArgumentError("invalid bumping mode"))
        return Ok(text)

    match parse_bump("minor"):
        case Ok(bump):
            print(f"bumping {bump}")
        case Err(error):
            print(f"ERROR: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
