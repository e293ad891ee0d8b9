"""
Confession Board — Confession Service
======================================

What:  Business logic for creating, listing, fetching and voting on
       confessions.
How:   Each operation is exactly one SQL statement on the request's
       AsyncSession; writes are committed immediately after they run.
Who:   Called by the confession route handlers.

Vote atomicity:
    Votes are applied with a single
        UPDATE confessions SET votes = votes + 1 WHERE id = :id RETURNING *
    The new value is computed from the row inside the statement, so the
    database's row lock serializes concurrent votes and none are lost.
    Never split this into a SELECT followed by an UPDATE.

Missing rows:
    get/upvote/downvote return None when no row matches; the route decides
    whether that becomes 200 null or 404.
"""

import logging
import re
from typing import Any, List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from confession_board.exceptions import DatabaseError
from confession_board.models.confession import Confession
from confession_board.schemas.confession import ConfessionRow

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_confession_id(raw: str) -> Optional[int]:
    """
    Parse a path id by its leading integer, ignoring any trailing text.

    "12" → 12, " 7" → 7, "12abc" → 12, "-3" → -3, "abc" → None, "" → None

    None is the not-a-number value: it is still handed to the query, where
    it matches no row.
    """
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


class ConfessionService:
    """Stateless; one instance is shared by all requests."""

    async def create_confession(self, db: AsyncSession, text: Any) -> ConfessionRow:
        """
        INSERT INTO confessions (text) VALUES (:text) RETURNING *

        votes comes from the column's server default (0).
        """
        try:
            result = await db.execute(
                insert(Confession).values(text=text).returning(Confession)
            )
            confession = result.scalar_one()
            await db.commit()
            logger.info("Created confession %s", confession.id)
            return ConfessionRow.model_validate(confession)
        except Exception as e:
            logger.error("Error creating confession: %s", str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": "create_confession", "error_type": type(e).__name__},
            )

    async def list_confessions(self, db: AsyncSession) -> List[ConfessionRow]:
        """SELECT * FROM confessions (no ordering, no pagination)."""
        try:
            result = await db.execute(select(Confession))
            return [ConfessionRow.model_validate(c) for c in result.scalars().all()]
        except Exception as e:
            logger.error("Error listing confessions: %s", str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": "list_confessions", "error_type": type(e).__name__},
            )

    async def get_confession(
        self, db: AsyncSession, confession_id: Optional[int]
    ) -> Optional[ConfessionRow]:
        """SELECT * FROM confessions WHERE id = :id; None when nothing matches."""
        try:
            result = await db.execute(
                select(Confession).where(Confession.id == confession_id)
            )
            confession = result.scalars().first()
        except Exception as e:
            logger.error("Error fetching confession %s: %s", confession_id, str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": "get_confession", "confession_id": confession_id},
            )
        if confession is None:
            return None
        return ConfessionRow.model_validate(confession)

    async def upvote(
        self, db: AsyncSession, confession_id: Optional[int]
    ) -> Optional[ConfessionRow]:
        return await self._apply_vote(db, confession_id, 1)

    async def downvote(
        self, db: AsyncSession, confession_id: Optional[int]
    ) -> Optional[ConfessionRow]:
        return await self._apply_vote(db, confession_id, -1)

    async def _apply_vote(
        self, db: AsyncSession, confession_id: Optional[int], delta: int
    ) -> Optional[ConfessionRow]:
        """
        UPDATE confessions SET votes = votes + :delta WHERE id = :id RETURNING *

        Returns the updated row, or None when the update touched no rows.
        """
        try:
            result = await db.execute(
                update(Confession)
                .where(Confession.id == confession_id)
                .values(votes=Confession.votes + delta)
                .returning(Confession)
                .execution_options(synchronize_session=False)
            )
            confession = result.scalars().first()
            await db.commit()
        except Exception as e:
            logger.error(
                "Error applying vote %+d to confession %s: %s",
                delta,
                confession_id,
                str(e),
                exc_info=True,
            )
            raise DatabaseError(
                context={
                    "operation": "vote",
                    "confession_id": confession_id,
                    "delta": delta,
                    "error_type": type(e).__name__,
                },
            )
        if confession is None:
            return None
        return ConfessionRow.model_validate(confession)


# ── Singleton Instance ────────────────────────────────────────────────────
confession_service = ConfessionService()
