from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator, ConfigDict

from .config import MAX_PLAYERS_PER_GAME

MAX_PLAYER_NAME_LENGTH = 50


class GameCreate(BaseModel):
    players: List[str] = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")

    @field_validator("players", mode="before")
    @classmethod
    def _validate_players(cls, value: List[str]) -> List[str]:
        if not isinstance(value, list):
            raise ValueError("players must be a list of names")
        if len(value) > MAX_PLAYERS_PER_GAME:
            raise ValueError(
                f"a game allows at most {MAX_PLAYERS_PER_GAME} players"
            )
        names = []
        for i, name in enumerate(value, start=1):
            if not isinstance(name, str):
                raise ValueError(f"player #{i} name must be a string")
            trimmed = name.strip()
            if not trimmed:
                raise ValueError(f"player #{i} name must not be empty")
            if len(trimmed) > MAX_PLAYER_NAME_LENGTH:
                raise ValueError(
                    f"player #{i} name must be at most {MAX_PLAYER_NAME_LENGTH} characters"
                )
            names.append(trimmed)
        return names


class RollIn(BaseModel):
    player_id: str = Field(..., alias="playerId", min_length=1)
    # Range is checked by the scoring engine so it can report a roll error.
    pins: int = Field(..., strict=True)

    model_config = ConfigDict(populate_by_name=True)


class FrameOut(BaseModel):
    number: int
    roll1: Optional[int] = None
    roll2: Optional[int] = None
    roll3: Optional[int] = None
    score: Optional[int] = None


class PlayerOut(BaseModel):
    id: str
    game_id: str = Field(alias="gameId")
    name: str
    frames: List[FrameOut]
    total: Optional[int] = None
    complete: bool = False

    model_config = ConfigDict(populate_by_name=True)


class GameOut(BaseModel):
    id: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    players: List[PlayerOut]

    model_config = ConfigDict(populate_by_name=True)
