from dataclasses import dataclass
from typing import Optional, Protocol

from core.config import settings
from core.coverage import DAYS_PER_WEEK


class PriceProvider(Protocol):
    def unit_price(self, item_id: str) -> float:
        ...


@dataclass(frozen=True)
class ConstantPriceProvider:
    """Values every item at the same average price."""

    price: float = settings.unit_price_proxy

    def unit_price(self, item_id: str) -> float:
        return float(self.price)


@dataclass(frozen=True)
class TransferCosts:
    push_cost_per_unit: float = settings.push_cost_per_unit
    same_region_cost_per_unit: float = settings.lateral_same_region_cost_per_unit
    cross_region_cost_per_unit: float = settings.lateral_cross_region_cost_per_unit

    def lateral_rate(self, from_region: Optional[str], to_region: Optional[str]) -> float:
        if from_region and to_region and from_region == to_region:
            return float(self.same_region_cost_per_unit)
        return float(self.cross_region_cost_per_unit)


def estimate_revenue_gain(qty: int, daily_velocity: float, unit_price: float) -> float:
    return float(qty) * float(daily_velocity) * DAYS_PER_WEEK * float(unit_price)
