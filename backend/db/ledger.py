"""
Run ledger: the audit row per invocation plus its output batch.

A run row is committed as 'running' before any computation. Finalizing writes
the whole batch and flips the status in the same transaction, so a completed
run never shows a partial batch and a failed run never shows one at all.
"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from db.rebalance import AllocationRecommendation, RebalanceRun, RebalanceSuggestion

logger = logging.getLogger(__name__)

RUN_RUNNING = "running"
RUN_COMPLETED = "completed"
RUN_FAILED = "failed"

MAX_ERROR_LENGTH = 2000


class RunAlreadyFinalized(RuntimeError):
    pass


class RunNotFound(LookupError):
    def __init__(self, run_id: UUID):
        super().__init__(f"Run {run_id} not found")
        self.run_id = run_id


async def create_run(db: AsyncSession, tenant_id: str, run_type: str, user_id: Optional[str] = None) -> RebalanceRun:
    run = RebalanceRun(
        tenant_id=tenant_id,
        run_type=run_type,
        run_date=date.today(),
        status=RUN_RUNNING,
        created_by=user_id,
        total_suggestions=0,
        total_units=0,
        push_units=0,
        lateral_units=0,
    )
    db.add(run)
    await db.commit()
    await db.refresh(run)
    return run


async def _finalize(db: AsyncSession, run_id: UUID, values: dict) -> None:
    res = await db.execute(
        update(RebalanceRun)
        .where(RebalanceRun.id == run_id)
        .where(RebalanceRun.status == RUN_RUNNING)
        .values(completed_at=func.now(), **values)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount != 1:
        raise RunAlreadyFinalized(f"Run {run_id} is not running")


async def complete_run(
    db: AsyncSession,
    run_id: UUID,
    *,
    suggestion_rows: Optional[List[dict]] = None,
    recommendation_rows: Optional[List[dict]] = None,
    total_suggestions: int = 0,
    total_units: int = 0,
    push_units: int = 0,
    lateral_units: int = 0,
) -> None:
    """Bulk insert the batch and mark the run completed in one commit."""
    if suggestion_rows:
        await db.execute(insert(RebalanceSuggestion), suggestion_rows)
    if recommendation_rows:
        await db.execute(insert(AllocationRecommendation), recommendation_rows)
    await _finalize(
        db,
        run_id,
        {
            "status": RUN_COMPLETED,
            "total_suggestions": int(total_suggestions),
            "total_units": int(total_units),
            "push_units": int(push_units),
            "lateral_units": int(lateral_units),
        },
    )
    await db.commit()


async def fail_run(db: AsyncSession, run_id: UUID, message: str) -> None:
    # Drop anything the failed attempt left in the session first.
    await db.rollback()
    await _finalize(
        db,
        run_id,
        {"status": RUN_FAILED, "error_message": (message or "unknown error")[:MAX_ERROR_LENGTH]},
    )
    await db.commit()


async def get_run(db: AsyncSession, run_id: UUID) -> Optional[RebalanceRun]:
    # populate_existing: finalize updates bypass the identity map
    res = await db.execute(
        select(RebalanceRun)
        .where(RebalanceRun.id == run_id)
        .execution_options(populate_existing=True)
    )
    return res.scalar_one_or_none()


async def require_run(db: AsyncSession, run_id: UUID) -> RebalanceRun:
    run = await get_run(db, run_id)
    if run is None:
        raise RunNotFound(run_id)
    return run


async def list_runs(db: AsyncSession, tenant_id: str, limit: int = 20) -> List[RebalanceRun]:
    res = await db.execute(
        select(RebalanceRun)
        .where(RebalanceRun.tenant_id == tenant_id)
        .order_by(RebalanceRun.started_at.desc(), RebalanceRun.id.desc())
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    return list(res.scalars().all())


async def list_suggestions(
    db: AsyncSession,
    run_id: UUID,
    transfer_type: Optional[str] = None,
    priority: Optional[str] = None,
) -> List[RebalanceSuggestion]:
    stmt = select(RebalanceSuggestion).where(RebalanceSuggestion.run_id == run_id)
    if transfer_type:
        stmt = stmt.where(RebalanceSuggestion.transfer_type == transfer_type)
    if priority:
        stmt = stmt.where(RebalanceSuggestion.priority == priority)
    stmt = stmt.order_by(
        RebalanceSuggestion.priority.asc(),
        RebalanceSuggestion.net_benefit.desc(),
        RebalanceSuggestion.fc_id.asc(),
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_recommendations(db: AsyncSession, run_id: UUID) -> List[AllocationRecommendation]:
    res = await db.execute(
        select(AllocationRecommendation)
        .where(AllocationRecommendation.run_id == run_id)
        .order_by(AllocationRecommendation.priority.asc(), AllocationRecommendation.fc_id.asc())
    )
    return list(res.scalars().all())
