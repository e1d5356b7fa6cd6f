"""
Phase 2: store-to-store transfers, surplus to shortage.

Runs after the push phase and sees its planned moves through the shared
PositionLedger. A pairing is only proposed when its net benefit clears the
tenant's `min_lateral_net_benefit`.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from core.constraints import RebalanceConstraints
from core.coverage import priority_for_cover, units_for_weeks, weeks_of_cover
from core.position_ledger import PositionLedger
from core.pricing import ConstantPriceProvider, PriceProvider, TransferCosts, estimate_revenue_gain
from core.records import TRANSFER_LATERAL, InventorySnapshot, Location, TransferSuggestion

logger = logging.getLogger(__name__)


@dataclass
class _Candidate:
    store: Location
    order: int
    cover: float
    velocity: float
    remaining: int


def _same_region(a: Location, b: Location) -> bool:
    return bool(a.region) and bool(b.region) and a.region == b.region


def plan_lateral(
    snapshot: InventorySnapshot,
    constraints: RebalanceConstraints,
    ledger: PositionLedger,
    prices: Optional[PriceProvider] = None,
    costs: Optional[TransferCosts] = None,
) -> List[TransferSuggestion]:
    if not constraints.lateral_enabled:
        logger.info("Lateral phase disabled by constraint")
        return []

    prices = prices or ConstantPriceProvider()
    costs = costs or TransferCosts()
    high = float(constraints.threshold_high_weeks)
    low = float(constraints.threshold_low_weeks)
    min_benefit = float(constraints.min_lateral_net_benefit)
    stores = snapshot.stores
    out: List[TransferSuggestion] = []
    skipped_low_benefit = 0

    for item_id in ledger.items():
        surpluses: List[_Candidate] = []
        shortages: List[_Candidate] = []

        for idx, store in enumerate(stores):
            on_hand = ledger.adjusted_on_hand(store.id, item_id)
            velocity = snapshot.velocity(store.id, item_id)
            cover = weeks_of_cover(on_hand, velocity)

            if cover > high:
                # Stock with no demand at all is left where it is.
                if velocity <= 0:
                    continue
                safety = ledger.get(store.id, item_id).safety_stock
                surplus = int(math.floor(on_hand - safety - units_for_weeks(high, velocity)))
                if surplus > 0:
                    surpluses.append(_Candidate(store, idx, cover, velocity, surplus))
            elif cover < low:
                shortage = units_for_weeks(low - cover, velocity)
                if shortage > 0:
                    shortages.append(_Candidate(store, idx, cover, velocity, shortage))

        if not surpluses or not shortages:
            continue

        shortages.sort(key=lambda c: (c.cover, c.order))
        unit_price = prices.unit_price(item_id)

        for dest in shortages:
            sources = [s for s in surpluses if _same_region(s.store, dest.store)]
            sources += [s for s in surpluses if not _same_region(s.store, dest.store)]

            for src in sources:
                if dest.remaining <= 0:
                    break
                if src.remaining <= 0:
                    continue

                qty = min(dest.remaining, src.remaining)
                rate = costs.lateral_rate(src.store.region, dest.store.region)
                revenue = estimate_revenue_gain(qty, dest.velocity, unit_price)
                cost = float(qty) * rate
                net = revenue - cost
                if net < min_benefit:
                    skipped_low_benefit += 1
                    continue

                from_before = weeks_of_cover(ledger.adjusted_on_hand(src.store.id, item_id), src.velocity)
                to_before = weeks_of_cover(ledger.adjusted_on_hand(dest.store.id, item_id), dest.velocity)
                ledger.record_transfer(item_id, src.store.id, dest.store.id, qty)
                from_after = weeks_of_cover(ledger.adjusted_on_hand(src.store.id, item_id), src.velocity)
                to_after = weeks_of_cover(ledger.adjusted_on_hand(dest.store.id, item_id), dest.velocity)

                region_note = "same region" if _same_region(src.store, dest.store) else "cross region"
                out.append(
                    TransferSuggestion(
                        transfer_type=TRANSFER_LATERAL,
                        item_id=item_id,
                        from_location=src.store.id,
                        from_location_name=src.store.name,
                        to_location=dest.store.id,
                        to_location_name=dest.store.name,
                        qty=int(qty),
                        reason=(
                            f"{src.store.name} holds {src.cover:.1f} weeks of cover, "
                            f"{dest.store.name} only {to_before:.1f}; move {qty} units ({region_note})"
                        ),
                        from_weeks_cover=round(from_before, 2),
                        to_weeks_cover=round(to_before, 2),
                        from_weeks_cover_after=round(from_after, 2),
                        to_weeks_cover_after=round(to_after, 2),
                        priority=priority_for_cover(to_before),
                        potential_revenue_gain=round(revenue, 2),
                        logistics_cost_estimate=round(cost, 2),
                        net_benefit=round(net, 2),
                    )
                )

                src.remaining -= qty
                dest.remaining -= qty

    logger.info(
        "Lateral phase planned %d transfers (%d units), %d pairings below net benefit threshold",
        len(out),
        sum(s.qty for s in out),
        skipped_low_benefit,
    )
    return out
