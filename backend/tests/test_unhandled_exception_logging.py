import logging
import os
import sys
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure the app package is importable
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Avoid startup validation error when importing the app
os.environ.setdefault("ALLOW_CREDENTIALS", "false")
os.environ.setdefault("ALLOWED_ORIGINS", "http://testserver")
from app.main import unhandled_exception_handler


def test_unhandled_exception_logs_traceback_and_path(caplog):
    app = FastAPI()
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.post("/games/{game_id}/roll")
    def broken_roll(game_id: str):
        raise ValueError("expected frames numbered 1..10")

    client = TestClient(app, raise_server_exceptions=False)
    with caplog.at_level(logging.ERROR):
        response = client.post("/games/g1/roll")

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/problem+json")
    problem = response.json()
    assert problem["code"] == "internal_server_error"
    assert problem["instance"] == "/games/g1/roll"
    record = next(
        (r for r in caplog.records if r.message.startswith("Unhandled exception")),
        None,
    )
    assert record is not None
    assert record.message == "Unhandled exception on POST /games/g1/roll"
    assert record.exc_info[0] is ValueError
    assert "ValueError: expected frames numbered 1..10" in caplog.text
