import logging
from typing import List, Optional

from core.coverage import priority_for_cover, units_for_weeks, weeks_of_cover
from core.position_ledger import PositionLedger
from core.pricing import ConstantPriceProvider, PriceProvider, estimate_revenue_gain
from core.records import AllocationRecommendation, InventorySnapshot

logger = logging.getLogger(__name__)

# Advisory only: below this cover a store gets a restock recommendation
# sized to reach the target.
ADVISORY_THRESHOLD_WEEKS = 2.0
ADVISORY_TARGET_WEEKS = 3.0


def recommend_allocations(
    snapshot: InventorySnapshot,
    ledger: Optional[PositionLedger] = None,
    prices: Optional[PriceProvider] = None,
) -> List[AllocationRecommendation]:
    """
    Restock recommendations for every store/item pair that has a position row.

    Warehouse stock is never consulted and no store is paired with another.
    """
    ledger = ledger or PositionLedger(snapshot.positions)
    prices = prices or ConstantPriceProvider()
    out: List[AllocationRecommendation] = []

    for store in snapshot.stores:
        for item_id in ledger.items_at(store.id):
            on_hand = ledger.get(store.id, item_id).on_hand
            velocity = snapshot.velocity(store.id, item_id)
            cover = weeks_of_cover(on_hand, velocity)
            if cover >= ADVISORY_THRESHOLD_WEEKS:
                continue

            qty = units_for_weeks(ADVISORY_TARGET_WEEKS - cover, velocity)
            if qty <= 0:
                continue

            projected = weeks_of_cover(on_hand + qty, velocity)
            out.append(
                AllocationRecommendation(
                    item_id=item_id,
                    store_id=store.id,
                    store_name=store.name,
                    recommended_qty=int(qty),
                    current_on_hand=float(on_hand),
                    current_weeks_cover=round(cover, 2),
                    projected_weeks_cover=round(projected, 2),
                    sales_velocity=float(velocity),
                    priority=priority_for_cover(cover),
                    reason=(
                        f"{cover:.1f} weeks of cover at {velocity:g}/day; "
                        f"restock {qty} units to reach {ADVISORY_TARGET_WEEKS:g} weeks"
                    ),
                    potential_revenue=round(estimate_revenue_gain(qty, velocity, prices.unit_price(item_id)), 2),
                )
            )

    logger.info("Allocation planned %d recommendations (%d units)", len(out), sum(r.recommended_qty for r in out))
    return out
