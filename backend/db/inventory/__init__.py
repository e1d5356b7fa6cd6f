"""
Engine inputs, written by the inventory feeds and read once per run.

Models:
- Store (central warehouse or retail store)
- InventoryPosition (stock rows per store and item, possibly several per pair)
- DemandState (daily sales velocity per store and item)
- ConstraintRegistry (tenant tunables)
"""

from .constraint import ConstraintRegistry
from .demand import DemandState
from .location import Store
from .position import InventoryPosition

__all__ = ["ConstraintRegistry", "DemandState", "InventoryPosition", "Store"]
