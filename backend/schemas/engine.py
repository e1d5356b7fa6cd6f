from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from core.runner import ENGINE_ACTIONS


class EngineRunRequest(BaseModel):
    tenant_id: str
    user_id: Optional[str] = None
    action: str

    @field_validator("tenant_id")
    @classmethod
    def _tenant_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("tenant_id is required")
        return v

    @field_validator("user_id")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("action")
    @classmethod
    def _known_action(cls, v: str) -> str:
        if v not in ENGINE_ACTIONS:
            raise ValueError(f"action must be one of {list(ENGINE_ACTIONS)}")
        return v


class RebalanceRunResponse(BaseModel):
    run_id: UUID
    total_suggestions: int
    push_suggestions: int
    lateral_suggestions: int
    push_units: int
    lateral_units: int


class AllocateRunResponse(BaseModel):
    run_id: UUID
    recommendations: int
    total_units: int


class RecallRunResponse(BaseModel):
    run_id: UUID
    total_suggestions: int
    total_units: int


class RunRead(BaseModel):
    id: UUID
    tenant_id: str
    run_type: str
    run_date: date
    status: str
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    total_suggestions: int
    total_units: int
    push_units: int
    lateral_units: int
    error_message: Optional[str] = None
    created_by: Optional[str] = None


class TransferSuggestionRead(BaseModel):
    id: UUID
    run_id: UUID
    transfer_type: str
    item_id: str
    from_location: str
    from_location_name: Optional[str] = None
    to_location: str
    to_location_name: Optional[str] = None
    qty: int
    reason: Optional[str] = None
    from_weeks_cover: Optional[float] = None
    to_weeks_cover: Optional[float] = None
    from_weeks_cover_after: Optional[float] = None
    to_weeks_cover_after: Optional[float] = None
    priority: str
    potential_revenue_gain: float
    logistics_cost_estimate: float
    net_benefit: float
    status: str


class AllocationRecommendationRead(BaseModel):
    id: UUID
    run_id: UUID
    item_id: str
    store_id: str
    store_name: Optional[str] = None
    recommended_qty: int
    current_on_hand: float
    current_weeks_cover: Optional[float] = None
    projected_weeks_cover: Optional[float] = None
    sales_velocity: float
    priority: str
    reason: Optional[str] = None
    potential_revenue: float
    status: str
