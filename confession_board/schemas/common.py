"""
Confession Board — Shared Response Schemas
===========================================

What:  Small response bodies shared by several routes.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """{"message": ...} body used by 401/404/500 JSON responses."""
    message: str


class RootResponse(BaseModel):
    """Body of GET /."""
    msg: str
