import importlib
import os
import sys

import pytest


def _cleanup_app_modules():
    for module in [name for name in sys.modules if name == "app" or name.startswith("app.")]:
        sys.modules.pop(module, None)


@pytest.fixture(autouse=True)
def app_import_isolation(monkeypatch):
    app_path = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    cleanup = _cleanup_app_modules
    saved = {
        name: module
        for name, module in sys.modules.items()
        if name == "app" or name.startswith("app.")
    }
    cleanup()
    monkeypatch.syspath_prepend(app_path)
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    try:
        yield
    finally:
        cleanup()
        sys.modules.update(saved)


def test_rejects_wildcard_origin(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")
    monkeypatch.setenv("ALLOW_CREDENTIALS", "true")
    with pytest.raises(ValueError):
        importlib.import_module("app.main")


def test_requires_allowed_origins(monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    monkeypatch.delenv("ALLOW_CREDENTIALS", raising=False)
    with pytest.raises(ValueError):
        importlib.import_module("app.main")


def test_rejects_blank_origin_list(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", " , ,")
    with pytest.raises(ValueError, match="at least one"):
        importlib.import_module("app.main")


def test_parses_origins_and_mounts_games(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("ALLOW_CREDENTIALS", "false")
    monkeypatch.delenv("API_PREFIX", raising=False)

    main = importlib.import_module("app.main")

    assert main.ALLOWED_ORIGINS == ["http://a.example", "http://b.example"]
    assert main.ALLOW_CREDENTIALS is False
    assert main.app.url_path_for("create_game") == "/api/v0/games"
    assert main.app.url_path_for("roll", game_id="g1") == "/api/v0/games/g1/roll"
    assert main.app.url_path_for("root_healthz") == "/healthz"
