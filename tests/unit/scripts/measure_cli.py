"""Unit tests for the msak-measure command line."""

from __future__ import annotations

import pytest

from msak.scripts.measure import _parse_args, main


def test_metadata_flags_are_collected() -> None:
    args = _parse_args(["--metadata", "site=lab", "--metadata", "note=a=b", "--phase", "upload"])
    assert args.metadata == [("site", "lab"), ("note", "a=b")]
    assert args.phase == "upload"


def test_malformed_metadata_is_rejected() -> None:
    with pytest.raises(SystemExit):
        _parse_args(["--metadata", "novalue"])


def test_log_level_is_case_insensitive() -> None:
    assert _parse_args(["--log-level", "debug"]).log_level == "DEBUG"


def test_unknown_log_level_is_rejected() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--log-level", "bogus"])
    assert exc_info.value.code == 2


def test_invalid_config_exits_with_one() -> None:
    assert main(["--server", "127.0.0.1:1", "--streams", "9", "--log-level", "WARNING"]) == 1


def test_invalid_server_exits_with_one() -> None:
    assert main(["--server", "bad/host", "--scheme", "ws", "--log-level", "WARNING"]) == 1
