"""
Confession Board — Root Route
==============================

What:  GET / greeting. Carries no data; useful as a smoke test.
"""

from fastapi import APIRouter

from confession_board.schemas.common import RootResponse

router = APIRouter(tags=["Root"])


@router.get("/", response_model=RootResponse, summary="Greeting")
async def root() -> RootResponse:
    return RootResponse(msg="Hello! There's nothing interesting for GET /")
