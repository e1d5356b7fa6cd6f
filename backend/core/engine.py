"""
Pure planning entry points, one per run type.

These take an InventorySnapshot and return plans; persistence and run status
live in core.runner.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from core.allocation import recommend_allocations
from core.constraints import RebalanceConstraints
from core.lateral_planner import plan_lateral
from core.position_ledger import PositionLedger
from core.pricing import PriceProvider, TransferCosts
from core.push_planner import plan_push
from core.recall_planner import plan_recall
from core.records import AllocationRecommendation, InventorySnapshot, TransferSuggestion


@dataclass
class RebalancePlan:
    push: List[TransferSuggestion] = field(default_factory=list)
    lateral: List[TransferSuggestion] = field(default_factory=list)

    @property
    def suggestions(self) -> List[TransferSuggestion]:
        return self.push + self.lateral

    @property
    def push_units(self) -> int:
        return sum(s.qty for s in self.push)

    @property
    def lateral_units(self) -> int:
        return sum(s.qty for s in self.lateral)

    @property
    def total_units(self) -> int:
        return self.push_units + self.lateral_units


def build_rebalance_plan(
    snapshot: InventorySnapshot,
    prices: Optional[PriceProvider] = None,
    costs: Optional[TransferCosts] = None,
) -> RebalancePlan:
    if snapshot.is_empty:
        return RebalancePlan()
    constraints = RebalanceConstraints.from_settings(snapshot.constraints)
    ledger = PositionLedger(snapshot.positions)
    push = plan_push(snapshot, constraints, ledger, prices=prices, costs=costs)
    lateral = plan_lateral(snapshot, constraints, ledger, prices=prices, costs=costs)
    return RebalancePlan(push=push, lateral=lateral)


def build_allocation_plan(
    snapshot: InventorySnapshot,
    prices: Optional[PriceProvider] = None,
) -> List[AllocationRecommendation]:
    if snapshot.is_empty:
        return []
    return recommend_allocations(snapshot, prices=prices)


def build_recall_plan(
    snapshot: InventorySnapshot,
    prices: Optional[PriceProvider] = None,
    costs: Optional[TransferCosts] = None,
) -> List[TransferSuggestion]:
    if snapshot.is_empty:
        return []
    return plan_recall(snapshot, prices=prices, costs=costs)
