"""
Confession Board — Password Hashing
====================================

What:  bcrypt hashing and verification for user passwords.
How:   passlib's CryptContext with the bcrypt scheme and a fixed cost factor.
       Both operations are CPU-bound; the async helpers run
       them in Starlette's thread pool instead of on the event loop.
Who:   Used by UserService for registration and login.
"""

from typing import Any

from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool


class PasswordHasher:
    """
    Salted one-way hashing with a configurable bcrypt cost.

    Non-string input (None, numbers, objects) raises TypeError from passlib;
    callers treat that like any other failure of the operation.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: Any) -> str:
        return self._context.hash(password)

    def verify(self, password: Any, hashed: str) -> bool:
        return self._context.verify(password, hashed)

    async def hash_async(self, password: Any) -> str:
        return await run_in_threadpool(self.hash, password)

    async def verify_async(self, password: Any, hashed: str) -> bool:
        return await run_in_threadpool(self.verify, password, hashed)
