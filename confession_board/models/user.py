"""
Confession Board — User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table.
Who:   Used by UserService for registration and login, and by Alembic.

Table Design:
    - id: Integer primary key, generated by the database
    - username: Unique at the schema level; handlers never check it themselves
    - password: bcrypt hash, never the plaintext
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from confession_board.database import Base


class User(Base):
    """
    A registered account.

    Lifecycle:
        Created by POST /register; never updated or deleted by the API.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Login name",
    )

    # bcrypt output is 60 characters ($2b$10$...)
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Salted bcrypt hash of the password",
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
