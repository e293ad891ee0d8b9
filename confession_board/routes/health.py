"""
Confession Board — Health Check Route
======================================

What:  Liveness/readiness probe covering database connectivity.
How:   Runs SELECT CURRENT_TIMESTAMP on a pooled connection.
Who:   Called by container health checks, load balancers and monitoring.

Responses (plain text):
    200 "system ok"                               database answered
    500 "An error occurred. Check server logs."   database unreachable
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from confession_board.database import Database
from confession_board.exceptions import GENERIC_TEXT_MESSAGE, DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health-check",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Database reachable", "content": {"text/plain": {}}},
        500: {"description": "Database unreachable", "content": {"text/plain": {}}},
    },
    summary="Service health check",
)
async def health_check(request: Request) -> PlainTextResponse:
    database: Database = request.app.state.database
    try:
        await database.ping()
    except Exception as e:
        logger.error("Health check: database unreachable: %s", str(e), exc_info=True)
        raise DatabaseError(
            message=GENERIC_TEXT_MESSAGE,
            plain_text=True,
            context={"operation": "health_check", "error_type": type(e).__name__},
        )
    return PlainTextResponse("system ok", status_code=200)
