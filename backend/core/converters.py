from typing import Dict
from uuid import UUID

from core.records import AllocationRecommendation, TransferSuggestion
from db.rebalance import AllocationRecommendation as AllocationRecommendationModel
from db.rebalance import RebalanceRun as RebalanceRunModel
from db.rebalance import RebalanceSuggestion as RebalanceSuggestionModel


def suggestion_to_row(run_id: UUID, tenant_id: str, s: TransferSuggestion) -> Dict:
    """Planner output to an insert row for inv_rebalance_suggestions"""
    return {
        "run_id": run_id,
        "tenant_id": tenant_id,
        "transfer_type": s.transfer_type,
        "fc_id": s.item_id,
        "from_location": s.from_location,
        "from_location_name": s.from_location_name,
        "to_location": s.to_location,
        "to_location_name": s.to_location_name,
        "qty": int(s.qty),
        "reason": s.reason,
        "from_weeks_cover": s.from_weeks_cover,
        "to_weeks_cover": s.to_weeks_cover,
        "from_weeks_cover_after": s.from_weeks_cover_after,
        "to_weeks_cover_after": s.to_weeks_cover_after,
        "priority": s.priority,
        "potential_revenue_gain": s.potential_revenue_gain,
        "logistics_cost_estimate": s.logistics_cost_estimate,
        "net_benefit": s.net_benefit,
        "status": s.status,
    }


def recommendation_to_row(run_id: UUID, tenant_id: str, r: AllocationRecommendation) -> Dict:
    """Planner output to an insert row for inv_allocation_recommendations"""
    return {
        "run_id": run_id,
        "tenant_id": tenant_id,
        "fc_id": r.item_id,
        "store_id": r.store_id,
        "store_name": r.store_name,
        "recommended_qty": int(r.recommended_qty),
        "current_on_hand": r.current_on_hand,
        "current_weeks_cover": r.current_weeks_cover,
        "projected_weeks_cover": r.projected_weeks_cover,
        "sales_velocity": r.sales_velocity,
        "priority": r.priority,
        "reason": r.reason,
        "potential_revenue": r.potential_revenue,
        "status": r.status,
    }


def run_to_schema(run: RebalanceRunModel) -> Dict:
    return {
        "id": run.id,
        "tenant_id": run.tenant_id,
        "run_type": run.run_type,
        "run_date": run.run_date,
        "status": run.status,
        "started_at": run.started_at,
        "completed_at": run.completed_at,
        "total_suggestions": int(run.total_suggestions or 0),
        "total_units": int(run.total_units or 0),
        "push_units": int(run.push_units or 0),
        "lateral_units": int(run.lateral_units or 0),
        "error_message": run.error_message,
        "created_by": run.created_by,
    }


def suggestion_model_to_schema(m: RebalanceSuggestionModel) -> Dict:
    return {
        "id": m.id,
        "run_id": m.run_id,
        "transfer_type": m.transfer_type,
        "item_id": m.fc_id,
        "from_location": m.from_location,
        "from_location_name": m.from_location_name,
        "to_location": m.to_location,
        "to_location_name": m.to_location_name,
        "qty": int(m.qty),
        "reason": m.reason,
        "from_weeks_cover": m.from_weeks_cover,
        "to_weeks_cover": m.to_weeks_cover,
        "from_weeks_cover_after": m.from_weeks_cover_after,
        "to_weeks_cover_after": m.to_weeks_cover_after,
        "priority": m.priority,
        "potential_revenue_gain": float(m.potential_revenue_gain or 0),
        "logistics_cost_estimate": float(m.logistics_cost_estimate or 0),
        "net_benefit": float(m.net_benefit or 0),
        "status": m.status,
    }


def recommendation_model_to_schema(m: AllocationRecommendationModel) -> Dict:
    return {
        "id": m.id,
        "run_id": m.run_id,
        "item_id": m.fc_id,
        "store_id": m.store_id,
        "store_name": m.store_name,
        "recommended_qty": int(m.recommended_qty),
        "current_on_hand": float(m.current_on_hand or 0),
        "current_weeks_cover": m.current_weeks_cover,
        "projected_weeks_cover": m.projected_weeks_cover,
        "sales_velocity": float(m.sales_velocity or 0),
        "priority": m.priority,
        "reason": m.reason,
        "potential_revenue": float(m.potential_revenue or 0),
        "status": m.status,
    }
