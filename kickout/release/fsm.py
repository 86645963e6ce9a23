from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from kickout.core.result import Err, Ok, Result

S = TypeVar("S")
E = TypeVar("E")

StepHandler = Callable[[S], Result[S, E]]
EnterStep = Callable[[S, str], S]


@dataclass(frozen=True, slots=True)
class Step(Generic[S, E]):
    name: str
    handler: StepHandler[S, E]


@dataclass(frozen=True, slots=True)
class StepFailed(Generic[E]):
    """Terminal failure: the step that failed and why."""

    step: str
    error: E


def run_steps(
    *,
    initial_state: S,
    steps: Sequence[Step[S, E]],
    enter: EnterStep[S],
) -> Result[S, StepFailed[E]]:
    """Run steps in order, threading the state through each handler.

    enter is called before each handler to move the state's cursor. The first
    Err stops the run; later steps never execute.
    """
    current = initial_state

    for step in steps:
        current = enter(current, step.name)
        outcome = step.handler(current)
        if isinstance(outcome, Err):
            return Err(StepFailed(step=step.name, error=outcome.error))
        current = outcome.value

    return Ok(current)
