"""
Confession Board — Registration & Login Routes
===============================================

What:  POST /register and POST /login.
How:   Extracts the JSON body, delegates to UserService, serializes the user
       row. There are no tokens or sessions: a successful login simply
       returns the user row.

Error responses (handled by global exception handlers):
    401 {"message": "Invalid username" | "Authentication failed"}   login only
    500 text "An error occurred. Check server logs."                register
    500 {"message": "An error occurred"}                             login
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from confession_board.config import Settings
from confession_board.database import get_db_session
from confession_board.dependencies import get_app_settings, get_password_hasher
from confession_board.schemas.common import MessageResponse
from confession_board.schemas.user import CredentialsRequest, credentials_or_empty
from confession_board.security import PasswordHasher
from confession_board.services.user_service import user_service

router = APIRouter(tags=["Auth"])


@router.post(
    "/register",
    responses={
        200: {"description": "The inserted user row"},
        500: {"description": "Registration failed", "content": {"text/plain": {}}},
    },
    summary="Register a user",
)
async def register(
    payload: Optional[CredentialsRequest] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    credentials = credentials_or_empty(payload)
    user = await user_service.register(
        db=db,
        hasher=hasher,
        username=credentials.username,
        password=credentials.password,
    )
    return user.to_response(settings.expose_password_hash)


@router.post(
    "/login",
    responses={
        200: {"description": "The matching user row"},
        401: {"description": "Unknown username or wrong password", "model": MessageResponse},
        500: {"description": "Server error", "model": MessageResponse},
    },
    summary="Check a username/password pair",
)
async def login(
    payload: Optional[CredentialsRequest] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    credentials = credentials_or_empty(payload)
    user = await user_service.login(
        db=db,
        hasher=hasher,
        username=credentials.username,
        password=credentials.password,
    )
    return user.to_response(settings.expose_password_hash)
