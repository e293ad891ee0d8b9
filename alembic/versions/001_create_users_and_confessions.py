"""Create users and confessions tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the two tables the API reads and writes.
       - users(id, username UNIQUE, password)
       - confessions(id, text, votes DEFAULT 0)

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(255), nullable=False, comment="Login name"),
        sa.Column(
            "password",
            sa.String(255),
            nullable=False,
            comment="Salted bcrypt hash of the password",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    op.create_table(
        "confessions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("text", sa.Text(), nullable=False, comment="Free-form confession text"),
        sa.Column(
            "votes",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Upvotes minus downvotes",
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("confessions")
    op.drop_table("users")
