"""Tests for kickout.release.model module."""

from __future__ import annotations

import pytest

from kickout.core.result import Err, Ok
from kickout.release.errors import InvalidArgumentError
from kickout.release.model import Options


class TestOptionsParse:
    @pytest.mark.parametrize("bump", ["major", "minor", "patch", "1.2.3", "10.0.42"])
    def test_valid_bump(self, bump: str) -> None:
        result = Options.parse(bump=bump)

        assert isinstance(result, Ok)
        assert result.value.bump == bump
        assert result.value.tag == "latest"

    @pytest.mark.parametrize(
        "bump",
        [
            "huge",
            "Patch",
            "1.2",
            "v1.2.3",
            "1.2.3-rc.1",
            " patch",
            "patch\n",
            "1.2.3\n",
            "١.٢.٣",
        ],
    )
    def test_invalid_bump(self, bump: str) -> None:
        assert Options.parse(bump=bump) == Err(InvalidArgumentError("invalid bumping mode"))

    @pytest.mark.parametrize("tag", ["", "   "])
    def test_blank_tag(self, tag: str) -> None:
        assert Options.parse(bump="patch", tag=tag) == Err(
            InvalidArgumentError("invalid NPM package tag")
        )

    def test_empty_message_means_default(self) -> None:
        result = Options.parse(bump="patch", message="")

        assert isinstance(result, Ok)
        assert result.value.message is None

    def test_frozen(self) -> None:
        result = Options.parse(bump="minor", noop=True, tag="beta")

        assert isinstance(result, Ok)
        with pytest.raises(AttributeError):
            result.value.noop = False  # type: ignore[misc]
