"""
In-memory records the planners work on.

The repository adapter turns database rows into these; the planners never
see ORM objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

CENTRAL_WAREHOUSE = "central_warehouse"
STORE = "store"

TRANSFER_PUSH = "push"
TRANSFER_LATERAL = "lateral"
TRANSFER_RECALL = "recall"


def demand_key(location_id: str, item_id: str) -> str:
    return f"{location_id}:{item_id}"


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    location_type: str = STORE
    is_active: bool = True
    region: Optional[str] = None

    @property
    def is_central_warehouse(self) -> bool:
        return self.location_type == CENTRAL_WAREHOUSE


@dataclass(frozen=True)
class Position:
    location_id: str
    item_id: str
    on_hand: float = 0
    reserved: float = 0
    safety_stock: float = 0
    # Precomputed by the source system for some rows.
    available: Optional[float] = None

    @property
    def available_quantity(self) -> float:
        if self.available is not None:
            return float(self.available)
        return float(self.on_hand or 0) - float(self.reserved or 0)


@dataclass(frozen=True)
class DemandSignal:
    location_id: str
    item_id: str
    daily_velocity: float = 0

    @property
    def key(self) -> str:
        return demand_key(self.location_id, self.item_id)


@dataclass(frozen=True)
class ConstraintSetting:
    name: str
    value: object
    is_active: bool = True


@dataclass
class InventorySnapshot:
    """Everything one run reads, loaded once at run start."""

    tenant_id: str
    locations: List[Location] = field(default_factory=list)
    positions: List[Position] = field(default_factory=list)
    demand: List[DemandSignal] = field(default_factory=list)
    constraints: List[ConstraintSetting] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._velocity: Dict[str, float] = {}
        for d in self.demand:
            self._velocity[d.key] = float(d.daily_velocity or 0)

    @property
    def is_empty(self) -> bool:
        return not self.active_locations or not self.positions

    @property
    def active_locations(self) -> List[Location]:
        return [loc for loc in self.locations if loc.is_active]

    @property
    def warehouses(self) -> List[Location]:
        return [loc for loc in self.active_locations if loc.is_central_warehouse]

    @property
    def stores(self) -> List[Location]:
        return [loc for loc in self.active_locations if not loc.is_central_warehouse]

    def velocity(self, location_id: str, item_id: str) -> float:
        return self._velocity.get(demand_key(location_id, item_id), 0.0)


@dataclass(frozen=True)
class TransferSuggestion:
    transfer_type: str
    item_id: str
    from_location: str
    from_location_name: str
    to_location: str
    to_location_name: str
    qty: int
    reason: str
    from_weeks_cover: float
    to_weeks_cover: float
    from_weeks_cover_after: float
    to_weeks_cover_after: float
    priority: str
    potential_revenue_gain: float
    logistics_cost_estimate: float
    net_benefit: float
    status: str = "pending"


@dataclass(frozen=True)
class AllocationRecommendation:
    item_id: str
    store_id: str
    store_name: str
    recommended_qty: int
    current_on_hand: float
    current_weeks_cover: float
    projected_weeks_cover: float
    sales_velocity: float
    priority: str
    reason: str
    potential_revenue: float
    status: str = "pending"
