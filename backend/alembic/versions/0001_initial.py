from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "game",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "player",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "game_id",
            sa.String(),
            sa.ForeignKey("game.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_player_game_id", "player", ["game_id"])
    op.create_table(
        "frame",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "player_id",
            sa.String(),
            sa.ForeignKey("player.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("roll1", sa.Integer(), nullable=True),
        sa.Column("roll2", sa.Integer(), nullable=True),
        sa.Column("roll3", sa.Integer(), nullable=True),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.UniqueConstraint("player_id", "number", name="uq_frame_player_id_number"),
        sa.CheckConstraint("number BETWEEN 1 AND 10", name="ck_frame_number_range"),
    )


def downgrade():
    op.drop_table("frame")
    op.drop_index("ix_player_game_id", table_name="player")
    op.drop_table("player")
    op.drop_table("game")
