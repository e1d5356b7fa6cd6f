"""
Aggregated stock per (location, item) plus the moves planned during a run.

Nothing here touches the database: planned moves are bookkeeping that lets a
later phase see what an earlier phase already decided.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from core.records import Position

Key = Tuple[str, str]


@dataclass
class StockLevel:
    on_hand: float = 0
    reserved: float = 0
    safety_stock: float = 0
    available: float = 0


class PositionLedger:
    def __init__(self, positions: Iterable[Position] = ()):
        self._levels: Dict[Key, StockLevel] = {}
        self._inbound: Dict[Key, float] = {}
        self._outbound: Dict[Key, float] = {}
        self._items: Dict[str, None] = {}
        for p in positions:
            self._add(p)

    def _add(self, p: Position) -> None:
        key = (p.location_id, p.item_id)
        level = self._levels.setdefault(key, StockLevel())
        level.on_hand += float(p.on_hand or 0)
        level.reserved += float(p.reserved or 0)
        level.safety_stock += float(p.safety_stock or 0)
        level.available += p.available_quantity
        self._items.setdefault(p.item_id, None)

    def get(self, location_id: str, item_id: str) -> StockLevel:
        return self._levels.get((location_id, item_id)) or StockLevel()

    def items(self) -> List[str]:
        """Every item with at least one row, in first-seen order."""
        return list(self._items.keys())

    def items_at(self, location_id: str) -> List[str]:
        return [item for (loc, item) in self._levels.keys() if loc == location_id]

    def inbound(self, location_id: str, item_id: str) -> float:
        return self._inbound.get((location_id, item_id), 0.0)

    def outbound(self, location_id: str, item_id: str) -> float:
        return self._outbound.get((location_id, item_id), 0.0)

    def record_transfer(self, item_id: str, from_location: str, to_location: str, qty: float) -> None:
        if qty <= 0:
            raise ValueError("planned transfer quantity must be > 0")
        out_key = (from_location, item_id)
        in_key = (to_location, item_id)
        self._outbound[out_key] = self._outbound.get(out_key, 0.0) + float(qty)
        self._inbound[in_key] = self._inbound.get(in_key, 0.0) + float(qty)
        self._items.setdefault(item_id, None)

    def adjusted_on_hand(self, location_id: str, item_id: str) -> float:
        return self.get(location_id, item_id).on_hand + self.inbound(location_id, item_id) - self.outbound(location_id, item_id)

    def adjusted_available(self, location_id: str, item_id: str) -> float:
        return self.get(location_id, item_id).available + self.inbound(location_id, item_id) - self.outbound(location_id, item_id)
