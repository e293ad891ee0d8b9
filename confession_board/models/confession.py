"""
Confession Board — Confession SQLAlchemy Model
===============================================

What:  ORM model representing the `confessions` table.
Who:   Used by ConfessionService and by Alembic.

Confessions are anonymous: there is no foreign key to `users`.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from confession_board.database import Base


class Confession(Base):
    """
    An anonymous post with a vote counter.

    Lifecycle:
        1. Created by POST /confessions with votes = 0 (server default)
        2. votes moves by exactly +1/-1 per upvote/downvote call
        3. Never deleted
    """

    __tablename__ = "confessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free-form confession text",
    )

    votes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        server_default="0",
        comment="Upvotes minus downvotes",
    )

    def __repr__(self) -> str:
        return f"<Confession(id={self.id}, votes={self.votes})>"
