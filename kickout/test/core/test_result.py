"""Tests for kickout.core.result module."""

from __future__ import annotations

import pytest

from kickout.core.result import Err, Ok, Result


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


class TestOk:
    def test_value(self) -> None:
        assert Ok(3).value == 3

    def test_equality(self) -> None:
        assert Ok(3) == Ok(3)
        assert Ok(3) != Err(3)

    def test_repr(self) -> None:
        assert repr(Ok("1.0.1")) == "Ok('1.0.1')"

    def test_frozen(self) -> None:
        ok = Ok(3)
        with pytest.raises(AttributeError):
            ok.value = 4  # type: ignore[misc]


class TestErr:
    def test_error(self) -> None:
        assert Err("boom").error == "boom"

    def test_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"

    def test_frozen(self) -> None:
        err = Err("boom")
        with pytest.raises(AttributeError):
            err.error = "bang"  # type: ignore[misc]


def test_isinstance_narrowing() -> None:
    assert isinstance(_half(4), Ok)
    assert isinstance(_half(3), Err)


def test_pattern_matching() -> None:
    match _half(3):
        case Ok(value):
            pytest.fail(f"unexpected Ok({value})")
        case Err(error):
            assert error == "3 is odd"
