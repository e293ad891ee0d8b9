"""
Confession Board — Confession Routes
=====================================

What:  Create, list, fetch, upvote and downvote confessions.
How:   Parses the path id, delegates to ConfessionService, returns rows.

Missing confessions:
    By default GET /confessions/{id} and the vote routes answer 200 with a
    JSON null body when no row matches (and for ids with no leading digits).
    With STRICT_NOT_FOUND=true they raise NotFoundError (404) instead.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from confession_board.config import Settings
from confession_board.database import get_db_session
from confession_board.dependencies import get_app_settings
from confession_board.exceptions import NotFoundError
from confession_board.schemas.common import MessageResponse
from confession_board.schemas.confession import ConfessionRow, CreateConfessionRequest
from confession_board.services.confession_service import (
    confession_service,
    parse_confession_id,
)

router = APIRouter(prefix="/confessions", tags=["Confessions"])

_ERRORS = {500: {"description": "Server error", "model": MessageResponse}}
_MAYBE_MISSING = {
    **_ERRORS,
    404: {"description": "No such confession (STRICT_NOT_FOUND only)", "model": MessageResponse},
}


def _found_or_null(
    row: Optional[ConfessionRow], raw_id: str, settings: Settings
) -> Optional[ConfessionRow]:
    if row is None and settings.strict_not_found:
        raise NotFoundError(resource="confession", resource_id=raw_id)
    return row


@router.post("", response_model=ConfessionRow, responses=_ERRORS, summary="Post a confession")
async def create_confession(
    payload: Optional[CreateConfessionRequest] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> ConfessionRow:
    text = payload.text if payload is not None else None
    return await confession_service.create_confession(db=db, text=text)


@router.get("", response_model=List[ConfessionRow], responses=_ERRORS, summary="List all confessions")
async def list_confessions(
    db: AsyncSession = Depends(get_db_session),
) -> List[ConfessionRow]:
    return await confession_service.list_confessions(db=db)


@router.get(
    "/{confession_id}",
    response_model=Optional[ConfessionRow],
    responses=_MAYBE_MISSING,
    summary="Get one confession",
)
async def get_confession(
    confession_id: str,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> Optional[ConfessionRow]:
    row = await confession_service.get_confession(db=db, confession_id=parse_confession_id(confession_id))
    return _found_or_null(row, confession_id, settings)


@router.put(
    "/{confession_id}/upvote",
    response_model=Optional[ConfessionRow],
    responses=_MAYBE_MISSING,
    summary="Add one vote",
)
async def upvote_confession(
    confession_id: str,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> Optional[ConfessionRow]:
    row = await confession_service.upvote(db=db, confession_id=parse_confession_id(confession_id))
    return _found_or_null(row, confession_id, settings)


@router.put(
    "/{confession_id}/downvote",
    response_model=Optional[ConfessionRow],
    responses=_MAYBE_MISSING,
    summary="Remove one vote",
)
async def downvote_confession(
    confession_id: str,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> Optional[ConfessionRow]:
    row = await confession_service.downvote(db=db, confession_id=parse_confession_id(confession_id))
    return _found_or_null(row, confession_id, settings)
