"""
One engine invocation: open a run, load inputs, plan, persist, finalize.

All-or-nothing per run. Any exception after the run row exists marks the run
failed, writes no batch, and is re-raised as RunFailedError.

The synchronous planners run in the threadpool, off the event loop.
"""

import logging
from typing import Dict, Optional
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from core.converters import recommendation_to_row, suggestion_to_row
from core.engine import build_allocation_plan, build_rebalance_plan, build_recall_plan
from core.pricing import PriceProvider, TransferCosts
from db import ledger
from db.repository import load_snapshot

logger = logging.getLogger(__name__)

ACTION_REBALANCE = "rebalance"
ACTION_ALLOCATE = "allocate"
ACTION_RECALL = "recall"
ENGINE_ACTIONS = (ACTION_REBALANCE, ACTION_ALLOCATE, ACTION_RECALL)


class RunFailedError(RuntimeError):
    def __init__(self, run_id: UUID, message: str):
        super().__init__(message)
        self.run_id = run_id


async def _run_rebalance(db: AsyncSession, run_id: UUID, tenant_id: str, prices, costs) -> Dict:
    snapshot = await load_snapshot(db, tenant_id)
    plan = await run_in_threadpool(build_rebalance_plan, snapshot, prices=prices, costs=costs)
    rows = [suggestion_to_row(run_id, tenant_id, s) for s in plan.suggestions]
    await ledger.complete_run(
        db,
        run_id,
        suggestion_rows=rows,
        total_suggestions=len(rows),
        total_units=plan.total_units,
        push_units=plan.push_units,
        lateral_units=plan.lateral_units,
    )
    return {
        "run_id": run_id,
        "total_suggestions": len(rows),
        "push_suggestions": len(plan.push),
        "lateral_suggestions": len(plan.lateral),
        "push_units": plan.push_units,
        "lateral_units": plan.lateral_units,
    }


async def _run_allocate(db: AsyncSession, run_id: UUID, tenant_id: str, prices, costs) -> Dict:
    snapshot = await load_snapshot(db, tenant_id)
    recs = await run_in_threadpool(build_allocation_plan, snapshot, prices=prices)
    rows = [recommendation_to_row(run_id, tenant_id, r) for r in recs]
    total_units = sum(r.recommended_qty for r in recs)
    await ledger.complete_run(
        db,
        run_id,
        recommendation_rows=rows,
        total_suggestions=len(rows),
        total_units=total_units,
    )
    return {"run_id": run_id, "recommendations": len(rows), "total_units": total_units}


async def _run_recall(db: AsyncSession, run_id: UUID, tenant_id: str, prices, costs) -> Dict:
    snapshot = await load_snapshot(db, tenant_id)
    suggestions = await run_in_threadpool(build_recall_plan, snapshot, prices=prices, costs=costs)
    rows = [suggestion_to_row(run_id, tenant_id, s) for s in suggestions]
    total_units = sum(s.qty for s in suggestions)
    await ledger.complete_run(
        db,
        run_id,
        suggestion_rows=rows,
        total_suggestions=len(rows),
        total_units=total_units,
    )
    return {"run_id": run_id, "total_suggestions": len(rows), "total_units": total_units}


_HANDLERS = {
    ACTION_REBALANCE: _run_rebalance,
    ACTION_ALLOCATE: _run_allocate,
    ACTION_RECALL: _run_recall,
}


async def execute_run(
    db: AsyncSession,
    tenant_id: str,
    action: str,
    user_id: Optional[str] = None,
    prices: Optional[PriceProvider] = None,
    costs: Optional[TransferCosts] = None,
) -> Dict:
    handler = _HANDLERS.get(action)
    if handler is None:
        # Callers validate first; this guards direct use.
        raise ValueError(f"Unknown action '{action}'. Expected one of {list(ENGINE_ACTIONS)}")

    run = await ledger.create_run(db, tenant_id, action, user_id=user_id)
    run_id = run.id
    logger.info("Run %s started: tenant=%s action=%s", run_id, tenant_id, action)

    try:
        result = await handler(db, run_id, tenant_id, prices, costs)
    except Exception as e:
        logger.exception("Run %s failed", run_id)
        await ledger.fail_run(db, run_id, str(e) or e.__class__.__name__)
        raise RunFailedError(run_id, str(e) or e.__class__.__name__) from e

    logger.info("Run %s completed: %s", run_id, {k: v for k, v in result.items() if k != "run_id"})
    return result
