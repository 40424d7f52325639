"""Usage counter tests."""

import pytest

from prd_creator.services import metrics_service


async def _counts(session) -> dict[str, int]:
    return {m.name: m.count for m in await metrics_service.get_metrics(session)}


@pytest.mark.asyncio
async def test_increments_accumulate(session):
    for _ in range(5):
        await metrics_service.increment_metric(session, metrics_service.AI_CALLS)

    assert await _counts(session) == {"ai_calls": 5}


@pytest.mark.asyncio
async def test_counters_are_independent(session):
    await metrics_service.increment_metric(session, metrics_service.FALLBACKS)
    await metrics_service.increment_metric(session, metrics_service.PRD_GENERATED)
    await metrics_service.increment_metric(session, metrics_service.PRD_GENERATED)

    assert await _counts(session) == {"fallbacks": 1, "prd_generated": 2}


@pytest.mark.asyncio
async def test_increment_by(session):
    await metrics_service.increment_metric(session, "custom", by=3)
    await metrics_service.increment_metric(session, "custom", by=4)
    assert (await _counts(session))["custom"] == 7


@pytest.mark.asyncio
async def test_negative_increment_rejected(session):
    with pytest.raises(ValueError):
        await metrics_service.increment_metric(session, "custom", by=-1)


@pytest.mark.asyncio
async def test_metrics_listed_by_name(session):
    for name in ("prd_generated", "ai_calls", "fallbacks"):
        await metrics_service.increment_metric(session, name)
    assert [m.name for m in await metrics_service.get_metrics(session)] == ["ai_calls", "fallbacks", "prd_generated"]


@pytest.mark.asyncio
async def test_counts_survive_new_sessions(database):
    async with database.session() as first:
        await metrics_service.increment_metric(first, metrics_service.AI_CALLS)
    async with database.session() as second:
        await metrics_service.increment_metric(second, metrics_service.AI_CALLS)
        assert await _counts(second) == {"ai_calls": 2}
