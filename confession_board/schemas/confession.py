"""
Confession Board — Confession Pydantic Schemas
===============================================

What:  Request body for POST /confessions and the row model every
       confession endpoint returns.
"""

from typing import Any

from pydantic import BaseModel, Field


class CreateConfessionRequest(BaseModel):
    """Body of POST /confessions. `text` is forwarded to the INSERT as-is."""
    text: Any = Field(default=None, description="Confession text")


class ConfessionRow(BaseModel):
    """A full `confessions` row."""
    id: int = Field(description="Server-generated confession id")
    text: str = Field(description="Confession text")
    votes: int = Field(description="Upvotes minus downvotes")

    model_config = {"from_attributes": True}
