"""
Confession Board — User Service (Registration & Login)
=======================================================

What:  Business logic behind POST /register and POST /login.
How:   One SQL statement per operation through the request's AsyncSession;
       password hashing/verification through the injected PasswordHasher.
Who:   Called by the auth route handlers.

Error Handling Strategy:
    - Unknown username / wrong password → AuthenticationError (401)
    - Anything else (hashing, constraint violation, connectivity) is logged
      with its traceback and re-raised as DatabaseError (500). Registration
      failures answer in plain text, login failures in JSON.
"""

import logging
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from confession_board.exceptions import (
    GENERIC_TEXT_MESSAGE,
    AuthenticationError,
    DatabaseError,
)
from confession_board.models.user import User
from confession_board.schemas.user import UserRow
from confession_board.security import PasswordHasher

logger = logging.getLogger(__name__)


class UserService:
    """
    Stateless: the session and hasher are passed in for every call.
    """

    async def register(
        self,
        db: AsyncSession,
        hasher: PasswordHasher,
        username: Any,
        password: Any,
    ) -> UserRow:
        """
        Hash the password and insert a new user.

        Query:
            INSERT INTO users (username, password) VALUES (:username, :hash)
            RETURNING *

        Returns:
            The inserted row, hash included.

        Raises:
            DatabaseError (plain text): hashing or the INSERT failed
        """
        try:
            hashed = await hasher.hash_async(password)
            result = await db.execute(
                insert(User)
                .values(username=username, password=hashed)
                .returning(User)
            )
            user = result.scalar_one()
            await db.commit()
            logger.info("Registered user %s", user.id)
            return UserRow.model_validate(user)
        except Exception as e:
            logger.error("Registration failed: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=GENERIC_TEXT_MESSAGE,
                plain_text=True,
                context={"operation": "register", "error_type": type(e).__name__},
            )

    async def login(
        self,
        db: AsyncSession,
        hasher: PasswordHasher,
        username: Any,
        password: Any,
    ) -> UserRow:
        """
        Check a username/password pair against the stored hash.

        Query:
            SELECT * FROM users WHERE username = :username  (first row wins)

        Returns:
            The matching user row on success.

        Raises:
            AuthenticationError: "Invalid username" or "Authentication failed"
            DatabaseError: the lookup or the hash comparison failed
        """
        try:
            result = await db.execute(select(User).where(User.username == username))
            user = result.scalars().first()
        except Exception as e:
            logger.error("Login lookup failed: %s", str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": "login", "error_type": type(e).__name__},
            )

        if user is None:
            raise AuthenticationError(message="Invalid username")

        try:
            valid = await hasher.verify_async(password, user.password)
        except Exception as e:
            logger.error("Password verification failed for user %s: %s", user.id, str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": "login", "error_type": type(e).__name__},
            )

        if not valid:
            logger.info("Rejected login for user %s: wrong password", user.id)
            raise AuthenticationError(message="Authentication failed")

        return UserRow.model_validate(user)


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
