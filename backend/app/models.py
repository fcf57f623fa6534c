from sqlalchemy.orm import relationship
from sqlalchemy import (
    Column,
    String,
    DateTime,
    ForeignKey,
    Integer,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from .db import Base


class Game(Base):
    __tablename__ = "game"
    id = Column(String, primary_key=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    players = relationship(
        "Player",
        cascade="all, delete-orphan",
        order_by="Player.position",
        back_populates="game",
    )


class Player(Base):
    __tablename__ = "player"
    id = Column(String, primary_key=True)
    game_id = Column(
        String, ForeignKey("game.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)  # entry order within the game

    game = relationship("Game", back_populates="players")
    frames = relationship(
        "Frame",
        cascade="all, delete-orphan",
        order_by="Frame.number",
        back_populates="player",
    )


class Frame(Base):
    __tablename__ = "frame"
    id = Column(String, primary_key=True)
    player_id = Column(
        String, ForeignKey("player.id", ondelete="CASCADE"), nullable=False
    )
    number = Column(Integer, nullable=False)  # 1..10
    roll1 = Column(Integer, nullable=True)
    roll2 = Column(Integer, nullable=True)
    roll3 = Column(Integer, nullable=True)
    score = Column(Integer, nullable=True)  # cumulative, null until resolvable

    player = relationship("Player", back_populates="frames")

    __table_args__ = (
        UniqueConstraint("player_id", "number", name="uq_frame_player_id_number"),
        CheckConstraint("number BETWEEN 1 AND 10", name="ck_frame_number_range"),
    )
