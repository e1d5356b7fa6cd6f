"""
Phase 1: push stock from central warehouses to stores below minimum cover.
"""

import logging
import math
from typing import List, Optional

from core.constraints import RebalanceConstraints
from core.coverage import priority_for_cover, units_for_weeks, weeks_of_cover
from core.position_ledger import PositionLedger
from core.pricing import ConstantPriceProvider, PriceProvider, TransferCosts, estimate_revenue_gain
from core.records import TRANSFER_PUSH, InventorySnapshot, TransferSuggestion

logger = logging.getLogger(__name__)


def plan_push(
    snapshot: InventorySnapshot,
    constraints: RebalanceConstraints,
    ledger: PositionLedger,
    prices: Optional[PriceProvider] = None,
    costs: Optional[TransferCosts] = None,
) -> List[TransferSuggestion]:
    """
    Walk every (warehouse, item) pair and fill the most urgent store shortages
    first, never sending more than the warehouse can spare.

    Planned moves are written into `ledger` so later pairs and the lateral
    phase see them.
    """
    prices = prices or ConstantPriceProvider()
    costs = costs or TransferCosts()
    min_cover = float(constraints.min_cover_weeks)
    stores = snapshot.stores
    out: List[TransferSuggestion] = []

    for wh in snapshot.warehouses:
        for item_id in ledger.items_at(wh.id):
            level = ledger.get(wh.id, item_id)
            available_to_push = int(math.floor(level.on_hand - level.reserved - level.safety_stock))
            if available_to_push <= 0:
                continue

            # (cover, index, store, quantity, velocity); index keeps the sort stable
            shortages = []
            for idx, store in enumerate(stores):
                qty_at_store = ledger.adjusted_available(store.id, item_id)
                velocity = snapshot.velocity(store.id, item_id)
                cover = weeks_of_cover(qty_at_store, velocity)
                if cover < min_cover:
                    shortages.append((cover, idx, store, qty_at_store, velocity))
            shortages.sort(key=lambda s: (s[0], s[1]))

            remaining = available_to_push
            unit_price = prices.unit_price(item_id)
            wh_velocity = snapshot.velocity(wh.id, item_id)

            for cover, _idx, store, qty_at_store, velocity in shortages:
                desired = units_for_weeks(min_cover - cover, velocity)
                qty = min(desired, remaining)
                if qty <= 0:
                    continue

                wh_before = weeks_of_cover(ledger.adjusted_on_hand(wh.id, item_id), wh_velocity)
                ledger.record_transfer(item_id, wh.id, store.id, qty)
                wh_after = weeks_of_cover(ledger.adjusted_on_hand(wh.id, item_id), wh_velocity)
                store_after = weeks_of_cover(qty_at_store + qty, velocity)

                revenue = estimate_revenue_gain(qty, velocity, unit_price)
                cost = float(qty) * float(costs.push_cost_per_unit)

                out.append(
                    TransferSuggestion(
                        transfer_type=TRANSFER_PUSH,
                        item_id=item_id,
                        from_location=wh.id,
                        from_location_name=wh.name,
                        to_location=store.id,
                        to_location_name=store.name,
                        qty=int(qty),
                        reason=(
                            f"{store.name} has {cover:.1f} weeks of cover, below the "
                            f"{min_cover:g}-week minimum; push {qty} units from {wh.name}"
                        ),
                        from_weeks_cover=round(wh_before, 2),
                        to_weeks_cover=round(cover, 2),
                        from_weeks_cover_after=round(wh_after, 2),
                        to_weeks_cover_after=round(store_after, 2),
                        priority=priority_for_cover(cover),
                        potential_revenue_gain=round(revenue, 2),
                        logistics_cost_estimate=round(cost, 2),
                        net_benefit=round(revenue - cost, 2),
                    )
                )

                remaining -= qty
                if remaining <= 0:
                    break

    logger.info("Push phase planned %d transfers (%d units)", len(out), sum(s.qty for s in out))
    return out
