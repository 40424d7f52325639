"""Metrics service — monotonic usage counters."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession

from prd_creator.models.metric import Metric

AI_CALLS = "ai_calls"
FALLBACKS = "fallbacks"
PRD_GENERATED = "prd_generated"


async def increment_metric(db: AsyncSession, name: str, by: int = 1) -> None:
    """Insert the counter with ``by`` or add ``by`` to it, in one statement."""
    if by < 0:
        raise ValueError("Metrics can only be incremented")
    stmt = insert(Metric).values(name=name, count=by)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Metric.name],
        set_={"count": Metric.count + stmt.excluded.count},
    )
    await db.execute(stmt)
    await db.commit()


async def get_metrics(db: AsyncSession) -> list[Metric]:
    result = await db.execute(select(Metric).order_by(Metric.name))
    return list(result.scalars().all())
