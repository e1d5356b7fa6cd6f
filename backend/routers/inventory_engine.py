import logging
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.converters import recommendation_model_to_schema, run_to_schema, suggestion_model_to_schema
from core.runner import ACTION_ALLOCATE, ACTION_REBALANCE, RunFailedError, execute_run
from db import ledger
from db.database import get_async_session
from schemas.engine import (
    AllocateRunResponse,
    AllocationRecommendationRead,
    EngineRunRequest,
    RebalanceRunResponse,
    RecallRunResponse,
    RunRead,
    TransferSuggestionRead,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/run", response_model=Union[RebalanceRunResponse, AllocateRunResponse, RecallRunResponse])
async def run_engine(
    payload: EngineRunRequest,
    db: AsyncSession = Depends(get_async_session),
):
    try:
        result = await execute_run(db, payload.tenant_id, payload.action, user_id=payload.user_id)
    except HTTPException:
        raise
    except RunFailedError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": str(e), "run_id": str(e.run_id)},
        )
    except Exception as e:
        # Run row could not even be created.
        await db.rollback()
        logger.exception("Engine run could not start for tenant %s", payload.tenant_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail={"error": str(e)})

    if payload.action == ACTION_REBALANCE:
        return RebalanceRunResponse(**result)
    if payload.action == ACTION_ALLOCATE:
        return AllocateRunResponse(**result)
    return RecallRunResponse(**result)


@router.get("/runs", response_model=List[RunRead])
async def list_runs(
    tenant_id: str = Query(..., min_length=1),
    limit: int = Query(20, ge=1, le=200),
    db: AsyncSession = Depends(get_async_session),
):
    runs = await ledger.list_runs(db, tenant_id.strip(), limit=limit)
    return [RunRead(**run_to_schema(r)) for r in runs]


async def _require_run(db: AsyncSession, run_id: UUID):
    try:
        return await ledger.require_run(db, run_id)
    except ledger.RunNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Run not found")


@router.get("/runs/{run_id}", response_model=RunRead)
async def get_run(run_id: UUID, db: AsyncSession = Depends(get_async_session)):
    run = await _require_run(db, run_id)
    return RunRead(**run_to_schema(run))


@router.get("/runs/{run_id}/suggestions", response_model=List[TransferSuggestionRead])
async def list_run_suggestions(
    run_id: UUID,
    transfer_type: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    await _require_run(db, run_id)
    items = await ledger.list_suggestions(db, run_id, transfer_type=transfer_type, priority=priority)
    return [TransferSuggestionRead(**suggestion_model_to_schema(m)) for m in items]


@router.get("/runs/{run_id}/recommendations", response_model=List[AllocationRecommendationRead])
async def list_run_recommendations(run_id: UUID, db: AsyncSession = Depends(get_async_session)):
    await _require_run(db, run_id)
    items = await ledger.list_recommendations(db, run_id)
    return [AllocationRecommendationRead(**recommendation_model_to_schema(m)) for m in items]
