"""Tests for kickout.core.update_check module."""

from __future__ import annotations

from pathlib import Path

from kickout.core.config import Settings
from kickout.core.result import Err, Ok
from kickout.core.update_check import (
    PYPI_URL,
    UpdateState,
    check_for_update,
    notify_update,
    read_state,
    write_state,
)
from kickout.output.console import MockConsole
from kickout.platform.http import HttpError, MockHttpClient

_DAY = 24 * 60 * 60.0


def _pypi(version: str) -> MockHttpClient:
    client = MockHttpClient()
    client.set_json(PYPI_URL, {"info": {"version": version}})
    return client


class TestState:
    def test_missing_file_is_fresh_state(self, tmp_path: Path) -> None:
        assert read_state(tmp_path / "missing.toml") == Ok(UpdateState())

    def test_write_then_read(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "update-check.toml"
        assert isinstance(write_state(path, UpdateState(last_check=12.5, latest="1.2.0")), Ok)
        assert read_state(path) == Ok(UpdateState(last_check=12.5, latest="1.2.0"))

    def test_invalid_latest_is_not_written(self, tmp_path: Path) -> None:
        path = tmp_path / "update-check.toml"
        write_state(path, UpdateState(last_check=1.0, latest='1.0.0"\nevil = "x'))
        assert "latest" not in path.read_text(encoding="utf-8")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "update-check.toml"
        path.write_text("last_check = = 3\n", encoding="utf-8")
        result = read_state(path)
        assert isinstance(result, Err)
        assert result.error.path == path


class TestCheckForUpdate:
    def test_newer_version_reported(self, tmp_path: Path) -> None:
        path = tmp_path / "update-check.toml"
        result = check_for_update(
            current="1.0.0", settings=Settings(), client=_pypi("1.1.0"), path=path, now=10 * _DAY
        )
        assert result == Ok("1.1.0")
        assert read_state(path) == Ok(UpdateState(last_check=10 * _DAY, latest="1.1.0"))

    def test_same_version_not_reported(self, tmp_path: Path) -> None:
        result = check_for_update(
            current="1.0.0",
            settings=Settings(),
            client=_pypi("1.0.0"),
            path=tmp_path / "u.toml",
            now=10 * _DAY,
        )
        assert result == Ok(None)

    def test_older_remote_not_reported(self, tmp_path: Path) -> None:
        result = check_for_update(
            current="2.0.0",
            settings=Settings(),
            client=_pypi("1.9.9"),
            path=tmp_path / "u.toml",
            now=10 * _DAY,
        )
        assert result == Ok(None)

    def test_within_interval_uses_cached_answer(self, tmp_path: Path) -> None:
        path = tmp_path / "u.toml"
        write_state(path, UpdateState(last_check=10 * _DAY, latest="1.5.0"))
        client = _pypi("9.9.9")

        result = check_for_update(
            current="1.0.0", settings=Settings(), client=client, path=path, now=11 * _DAY
        )

        assert result == Ok("1.5.0")
        assert client.calls == []

    def test_after_interval_asks_again(self, tmp_path: Path) -> None:
        path = tmp_path / "u.toml"
        write_state(path, UpdateState(last_check=1 * _DAY, latest="1.5.0"))
        client = _pypi("1.6.0")

        result = check_for_update(
            current="1.0.0", settings=Settings(), client=client, path=path, now=4 * _DAY
        )

        assert result == Ok("1.6.0")
        assert client.calls == [PYPI_URL]

    def test_failed_lookup_counts_as_check(self, tmp_path: Path) -> None:
        path = tmp_path / "u.toml"
        client = MockHttpClient()
        client.set_json(PYPI_URL, HttpError(url=PYPI_URL, status=0, message="offline"))

        result = check_for_update(
            current="1.0.0", settings=Settings(), client=client, path=path, now=10 * _DAY
        )

        assert result == Ok(None)
        assert read_state(path) == Ok(UpdateState(last_check=10 * _DAY, latest=None))


class TestNotifyUpdate:
    def test_disabled_by_settings(self, tmp_path: Path) -> None:
        console = MockConsole()
        client = _pypi("9.0.0")
        notify_update(
            console,
            current="1.0.0",
            settings=Settings(update_check=False),
            client=client,
            path=tmp_path / "u.toml",
        )
        assert console.outputs == []
        assert client.calls == []

    def test_prints_warning(self, tmp_path: Path) -> None:
        console = MockConsole()
        notify_update(
            console,
            current="1.0.0",
            settings=Settings(),
            client=_pypi("1.2.0"),
            path=tmp_path / "u.toml",
        )
        assert len(console.find("kickout 1.2.0 is available")) == 1
