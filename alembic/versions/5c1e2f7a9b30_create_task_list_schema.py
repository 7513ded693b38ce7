"""create task list schema

Revision ID: 5c1e2f7a9b30
Revises:
Create Date: 2026-10-19 09:12:04.118203

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e2f7a9b30"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("avatar", sa.String(length=2048), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "task_lists",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_task_lists_id"), "task_lists", ["id"], unique=False)

    op.create_table(
        "task_list_collaborators",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "task_list_id",
            sa.Integer(),
            sa.ForeignKey("task_lists.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.UniqueConstraint("task_list_id", "user_id", name="uq_task_list_collaborator"),
    )
    op.create_index(
        op.f("ix_task_list_collaborators_id"), "task_list_collaborators", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_task_list_collaborators_task_list_id"),
        "task_list_collaborators",
        ["task_list_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_task_list_collaborators_user_id"),
        "task_list_collaborators",
        ["user_id"],
        unique=False,
    )

    op.create_table(
        "todos",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "task_list_id",
            sa.Integer(),
            sa.ForeignKey("task_lists.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.String(length=2000), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index(op.f("ix_todos_id"), "todos", ["id"], unique=False)
    op.create_index(op.f("ix_todos_task_list_id"), "todos", ["task_list_id"], unique=False)
    op.create_index(op.f("ix_todos_is_completed"), "todos", ["is_completed"], unique=False)


def downgrade() -> None:
    op.drop_table("todos")
    op.drop_table("task_list_collaborators")
    op.drop_table("task_lists")
    op.drop_table("users")
