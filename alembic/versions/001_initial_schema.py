"""Initial schema - users, habits, habit_completions, friends

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    # Habits
    op.create_table(
        "habits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_habits"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_habits_user_id_users", ondelete="CASCADE"),
    )
    op.create_index("ix_habits_user_id", "habits", ["user_id"])

    # Habit completions
    op.create_table(
        "habit_completions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("habit_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_habit_completions"),
        sa.ForeignKeyConstraint(
            ["habit_id"], ["habits.id"], name="fk_habit_completions_habit_id_habits", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_habit_completions_user_id_users", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_habit_completions_habit_id", "habit_completions", ["habit_id"])
    op.create_index("ix_habit_completions_user_id", "habit_completions", ["user_id"])

    # Friends
    op.create_table(
        "friends",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("friend_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_friends"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_friends_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["friend_id"], ["users.id"], name="fk_friends_friend_id_users", ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "friend_id", name="uq_friends_pair"),
        sa.CheckConstraint("user_id <> friend_id", name="ck_friends_not_self"),
        sa.CheckConstraint("status IN ('pending', 'accepted')", name="ck_friends_status"),
    )
    op.create_index("ix_friends_user_id", "friends", ["user_id"])
    op.create_index("ix_friends_friend_id", "friends", ["friend_id"])


def downgrade() -> None:
    op.drop_table("friends")
    op.drop_table("habit_completions")
    op.drop_table("habits")
    op.drop_table("users")
