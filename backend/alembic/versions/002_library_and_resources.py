"""Library and resources — authors, books, articles and per-page resource links.

Revision ID: 002_library_and_resources
Revises: 001_initial
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_library_and_resources"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _contributor_fk() -> sa.Column:
    return sa.Column(
        "user_id", sa.Integer,
        sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "authors",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("birth_year", sa.Integer, nullable=True),
        sa.Column("death_year", sa.Integer, nullable=True),
        sa.Column("nationality", sa.String(255), nullable=True),
        sa.Column("link", sa.String(255), nullable=True),
        sa.Column("image", sa.String(255), nullable=True),
        _contributor_fk(),
        _created_at(),
    )

    op.create_table(
        "books",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("author", sa.String(255), nullable=True),
        sa.Column("link", sa.String(255), nullable=True),
        sa.Column("image", sa.String(255), nullable=True),
        _contributor_fk(),
        _created_at(),
    )

    op.create_table(
        "articles",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("author", sa.String(255), nullable=False, server_default=""),
        sa.Column("link", sa.String(255), nullable=False, server_default=""),
        _contributor_fk(),
        _created_at(),
    )

    op.create_table(
        "resources",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("link", sa.String(255), nullable=False),
        sa.Column("page", sa.String(50), nullable=False),
        _contributor_fk(),
        _created_at(),
    )
    op.create_index("ix_resources_page", "resources", ["page"])


def downgrade() -> None:
    op.drop_index("ix_resources_page", table_name="resources")
    op.drop_table("resources")
    op.drop_table("articles")
    op.drop_table("books")
    op.drop_table("authors")
