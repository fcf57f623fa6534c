from fastapi import HTTPException
from pydantic import BaseModel
from typing import Optional

from .scoring.bowling import RollError


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        super().__init__(detail or title)
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class GameNotFound(DomainException):
    def __init__(self, game_id: str) -> None:
        super().__init__(
            status_code=404,
            title="Game not found",
            detail=f"game '{game_id}' not found",
            code="game_not_found",
        )


class PlayerNotFound(DomainException):
    def __init__(self, player_id: str) -> None:
        super().__init__(
            status_code=404,
            title="Player not found",
            detail=f"player '{player_id}' not found in this game",
            code="player_not_found",
        )


_ROLL_TITLES = {
    "invalid_pin_count": "Invalid pin count",
    "invalid_roll": "Invalid roll",
    "game_already_complete": "Game already complete",
}


class RollRejected(DomainException):
    """Client-facing wrapper around a :class:`RollError` from the engine."""

    def __init__(self, error: RollError) -> None:
        super().__init__(
            status_code=400,
            title=_ROLL_TITLES.get(error.code, "Roll rejected"),
            detail=error.detail,
            code=error.code,
        )


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc
