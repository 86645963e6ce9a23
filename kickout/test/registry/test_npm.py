"""Tests for kickout.registry.npm module."""

from __future__ import annotations

import pytest

from kickout.core.result import Err, Ok
from kickout.platform.process import CommandExecutionError, CommandResult, MockRunner
from kickout.registry.npm import Registry


class TestPublishedVersion:
    @pytest.mark.parametrize("stdout", ["1.0.0\n", "1.0.0\r\n", "1.0.0"])
    def test_trims_one_trailing_newline(self, stdout: str) -> None:
        runner = MockRunner(responses={"npm view pkg version": CommandResult(stdout=stdout)})
        assert Registry(runner).published_version("pkg") == Ok("1.0.0")

    def test_only_the_last_newline_is_trimmed(self) -> None:
        runner = MockRunner(responses={"npm view pkg version": CommandResult(stdout="1.0.0\n\n")})
        assert Registry(runner).published_version("pkg") == Ok("1.0.0\n")

    def test_executes_even_when_releasing_in_dry_run(self) -> None:
        runner = MockRunner()
        Registry(runner).published_version("@scope/pkg")
        assert runner.calls == [("npm view @scope/pkg version", False)]

    def test_failure(self) -> None:
        error = CommandExecutionError("npm view pkg version")
        runner = MockRunner(responses={"npm view pkg version": error})
        assert Registry(runner).published_version("pkg") == Err(error)


def test_run_script() -> None:
    runner = MockRunner()
    Registry(runner).run_script("prepublishOnly", dry_run=True)
    assert runner.calls == [("npm run prepublishOnly", True)]


def test_publish_uses_tag() -> None:
    runner = MockRunner()
    Registry(runner).publish("next", dry_run=False)
    assert runner.executed == ["npm publish --tag=next"]
