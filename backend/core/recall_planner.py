"""
Recall: send stale, slow or overstocked store inventory back to the central
warehouse.
"""

import logging
from typing import List, Optional

from core.coverage import DAYS_PER_WEEK, weeks_of_cover
from core.position_ledger import PositionLedger
from core.pricing import ConstantPriceProvider, PriceProvider, TransferCosts
from core.records import TRANSFER_RECALL, InventorySnapshot, TransferSuggestion

logger = logging.getLogger(__name__)

MIN_KEEP_UNITS = 1
STALE_DAYS = 90
SLOW_DAYS = 60
SLOW_VELOCITY = 0.05
OVERSTOCK_WEEKS = 16
# Share of the recalled stock value counted as freed capital.
CAPITAL_RELEASE_RATE = 0.1


def _classify(on_hand: float, velocity: float, weeks: float):
    days = weeks * DAYS_PER_WEEK
    if days > STALE_DAYS and on_hand >= 3:
        return "P1", f"{days:.0f} days of cover at {velocity:.3f}/day; stock has sat too long"
    if days > SLOW_DAYS and velocity < SLOW_VELOCITY and on_hand >= 3:
        return "P2", f"{days:.0f} days of cover at {velocity:.3f}/day; slow seller"
    if weeks > OVERSTOCK_WEEKS and on_hand >= 5:
        return "P2", f"{weeks:.1f} weeks of cover at {velocity:.3f}/day; overstocked"
    return None, None


def plan_recall(
    snapshot: InventorySnapshot,
    ledger: Optional[PositionLedger] = None,
    prices: Optional[PriceProvider] = None,
    costs: Optional[TransferCosts] = None,
) -> List[TransferSuggestion]:
    warehouses = snapshot.warehouses
    if not warehouses:
        logger.info("No active central warehouse; nothing to recall into")
        return []
    wh = warehouses[0]

    ledger = ledger or PositionLedger(snapshot.positions)
    prices = prices or ConstantPriceProvider()
    costs = costs or TransferCosts()
    out: List[TransferSuggestion] = []

    for store in snapshot.stores:
        for item_id in ledger.items_at(store.id):
            on_hand = ledger.get(store.id, item_id).on_hand
            if on_hand <= MIN_KEEP_UNITS:
                continue
            velocity = snapshot.velocity(store.id, item_id)
            weeks = weeks_of_cover(on_hand, velocity)
            priority, reason = _classify(on_hand, velocity, weeks)
            if priority is None:
                continue

            qty = max(1, int(on_hand - MIN_KEEP_UNITS))
            wh_velocity = snapshot.velocity(wh.id, item_id)
            wh_before = weeks_of_cover(ledger.adjusted_on_hand(wh.id, item_id), wh_velocity)
            ledger.record_transfer(item_id, store.id, wh.id, qty)
            wh_after = weeks_of_cover(ledger.adjusted_on_hand(wh.id, item_id), wh_velocity)

            cost = float(qty) * float(costs.push_cost_per_unit)
            out.append(
                TransferSuggestion(
                    transfer_type=TRANSFER_RECALL,
                    item_id=item_id,
                    from_location=store.id,
                    from_location_name=store.name,
                    to_location=wh.id,
                    to_location_name=wh.name,
                    qty=qty,
                    reason=reason,
                    from_weeks_cover=round(weeks, 2),
                    to_weeks_cover=round(wh_before, 2),
                    from_weeks_cover_after=round(weeks_of_cover(on_hand - qty, velocity), 2),
                    to_weeks_cover_after=round(wh_after, 2),
                    priority=priority,
                    potential_revenue_gain=0.0,
                    logistics_cost_estimate=round(cost, 2),
                    net_benefit=round(qty * prices.unit_price(item_id) * CAPITAL_RELEASE_RATE, 2),
                )
            )

    logger.info("Recall planned %d transfers (%d units)", len(out), sum(s.qty for s in out))
    return out
