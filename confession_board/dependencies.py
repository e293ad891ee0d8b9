"""
Confession Board — Request-Scoped Dependencies
===============================================

What:  FastAPI dependencies that hand per-app objects to route handlers.
How:   The app factory attaches settings and the password hasher to
       `app.state`; these helpers read them back from the current request,
       so handlers never touch module-level globals.
"""

from fastapi import Request

from confession_board.config import Settings
from confession_board.security import PasswordHasher


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher
