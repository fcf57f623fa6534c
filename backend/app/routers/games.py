import logging
import uuid
from typing import Sequence

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..db import get_session
from ..exceptions import GameNotFound, PlayerNotFound, ProblemDetail, RollRejected
from ..locks import player_roll_locks
from ..models import Frame, Game, Player
from ..schemas import FrameOut, GameCreate, GameOut, PlayerOut, RollIn
from ..scoring import bowling
from ..time_utils import coerce_utc, utcnow_naive

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={404: {"model": ProblemDetail}},
)


def _to_engine_frames(rows: Sequence[Frame]) -> list[bowling.Frame]:
    return [
        bowling.Frame(
            number=r.number,
            roll1=r.roll1,
            roll2=r.roll2,
            roll3=r.roll3,
            score=r.score,
        )
        for r in rows
    ]


def _to_player_out(player: Player, rows: Sequence[Frame]) -> PlayerOut:
    frames = _to_engine_frames(rows)
    return PlayerOut(
        id=player.id,
        game_id=player.game_id,
        name=player.name,
        frames=[
            FrameOut(
                number=f.number,
                roll1=f.roll1,
                roll2=f.roll2,
                roll3=f.roll3,
                score=f.score,
            )
            for f in frames
        ],
        total=bowling.final_score(frames),
        complete=bowling.is_game_complete(frames),
    )


def _to_game_out(game: Game) -> GameOut:
    return GameOut(
        id=game.id,
        created_at=coerce_utc(game.created_at),
        players=[_to_player_out(p, p.frames) for p in game.players],
    )


async def _get_player(session: AsyncSession, game_id: str, player_id: str) -> Player:
    game_exists = (
        await session.execute(select(Game.id).where(Game.id == game_id))
    ).scalar_one_or_none()
    if game_exists is None:
        raise GameNotFound(game_id)

    player = (
        await session.execute(
            select(Player).where(Player.id == player_id, Player.game_id == game_id)
        )
    ).scalar_one_or_none()
    if player is None:
        raise PlayerNotFound(player_id)
    return player


async def _load_frames(
    session: AsyncSession, player_id: str, *, for_update: bool = False
) -> list[Frame]:
    stmt = select(Frame).where(Frame.player_id == player_id).order_by(Frame.number)
    if for_update:
        stmt = stmt.with_for_update()
    return list((await session.execute(stmt)).scalars().all())


# POST /api/v0/games
@router.post("", response_model=GameOut, status_code=status.HTTP_201_CREATED)
async def create_game(
    body: GameCreate,
    session: AsyncSession = Depends(get_session),
) -> GameOut:
    game = Game(id=uuid.uuid4().hex, created_at=utcnow_naive())
    for position, name in enumerate(body.players):
        player = Player(id=uuid.uuid4().hex, game_id=game.id, name=name, position=position)
        for f in bowling.new_frames():
            player.frames.append(
                Frame(id=uuid.uuid4().hex, player_id=player.id, number=f.number)
            )
        game.players.append(player)

    session.add(game)
    await session.commit()
    logger.info("Created game %s with %d player(s)", game.id, len(game.players))
    return _to_game_out(game)


# GET /api/v0/games/{game_id}
@router.get("/{game_id}", response_model=GameOut)
async def get_game(
    game_id: str,
    session: AsyncSession = Depends(get_session),
) -> GameOut:
    game = (
        await session.execute(
            select(Game)
            .where(Game.id == game_id)
            .options(selectinload(Game.players).selectinload(Player.frames))
        )
    ).scalar_one_or_none()
    if game is None:
        raise GameNotFound(game_id)
    return _to_game_out(game)


# GET /api/v0/games/{game_id}/players/{player_id}
@router.get("/{game_id}/players/{player_id}", response_model=PlayerOut)
async def get_player(
    game_id: str,
    player_id: str,
    session: AsyncSession = Depends(get_session),
) -> PlayerOut:
    player = await _get_player(session, game_id, player_id)
    rows = await _load_frames(session, player.id)
    return _to_player_out(player, rows)


# POST /api/v0/games/{game_id}/roll
@router.post(
    "/{game_id}/roll",
    response_model=PlayerOut,
    responses={400: {"model": ProblemDetail}},
)
async def roll(
    game_id: str,
    body: RollIn,
    session: AsyncSession = Depends(get_session),
) -> PlayerOut:
    async with player_roll_locks.hold(body.player_id):
        player = await _get_player(session, game_id, body.player_id)
        player_id = player.id
        rows = await _load_frames(session, player_id, for_update=True)

        try:
            updated = bowling.record_roll(_to_engine_frames(rows), body.pins)
        except bowling.RollError as exc:
            await session.rollback()
            logger.info(
                "Rejected roll of %r pins for player %s in game %s (%s)",
                body.pins,
                player_id,
                game_id,
                exc.code,
            )
            raise RollRejected(exc)

        for row, frame in zip(rows, bowling.apply_scores(updated)):
            row.roll1 = frame.roll1
            row.roll2 = frame.roll2
            row.roll3 = frame.roll3
            row.score = frame.score
        await session.commit()

    logger.info(
        "Recorded %d pins for player %s in game %s", body.pins, player_id, game_id
    )
    return _to_player_out(player, rows)
