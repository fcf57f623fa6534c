import logging
import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.config import _canon_prefix, _positive_int


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, "/api"),
        ("", "/api"),
        ("api/", "/api"),
        ("/api/", "/api"),
        ("bowling", "/bowling"),
        ("/", "/"),
    ],
)
def test_canon_prefix(raw, expected):
    assert _canon_prefix(raw) == expected


def test_positive_int_reads_environment(monkeypatch):
    monkeypatch.setenv("MAX_PLAYERS_PER_GAME", "4")

    assert _positive_int("MAX_PLAYERS_PER_GAME", 8) == 4


def test_positive_int_defaults_when_unset(monkeypatch):
    monkeypatch.delenv("MAX_PLAYERS_PER_GAME", raising=False)

    assert _positive_int("MAX_PLAYERS_PER_GAME", 8) == 8


@pytest.mark.parametrize(
    "raw, message",
    [("lots", "not a valid integer"), ("0", "must be at least 1"), ("-3", "must be at least 1")],
)
def test_positive_int_falls_back_with_warning(monkeypatch, caplog, raw, message):
    monkeypatch.setenv("MAX_PLAYERS_PER_GAME", raw)

    with caplog.at_level(logging.WARNING, logger="app.config"):
        value = _positive_int("MAX_PLAYERS_PER_GAME", 8)

    assert value == 8
    assert any(
        message in r.message and "MAX_PLAYERS_PER_GAME" in r.message
        for r in caplog.records
    )
