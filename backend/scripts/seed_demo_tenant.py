"""
Seed a demo tenant: one central warehouse, three stores in two regions, stock,
demand and constraints, so the engine endpoints return something interesting.

Run locally:
  python backend/scripts/seed_demo_tenant.py [tenant_id]

It uses the same DATABASE_* env vars as the backend (dotenv supported by core.config).
Re-running replaces the tenant's existing input rows.
"""

from __future__ import annotations

import asyncio
import sys
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import delete

from db.database import async_session_maker, create_db_and_tables
from db.inventory import ConstraintRegistry, DemandState, InventoryPosition, Store

DEFAULT_TENANT = "demo-tenant"


@dataclass(frozen=True)
class SeedLocation:
    code: str
    name: str
    location_type: str
    region: Optional[str]


@dataclass(frozen=True)
class SeedStock:
    location_code: str
    fc_id: str
    on_hand: int
    reserved: int = 0
    safety_stock: int = 0
    daily_sales: Optional[float] = None


SEED_LOCATIONS: list[SeedLocation] = [
    SeedLocation(code="WH-01", name="Central Warehouse", location_type="central_warehouse", region=None),
    SeedLocation(code="ST-N1", name="North Mall", location_type="store", region="north"),
    SeedLocation(code="ST-N2", name="North Station", location_type="store", region="north"),
    SeedLocation(code="ST-S1", name="South Plaza", location_type="store", region="south"),
]

SEED_STOCK: list[SeedStock] = [
    # Warehouse supply for push
    SeedStock("WH-01", "FC-JACKET", on_hand=40, reserved=5, safety_stock=5),
    SeedStock("WH-01", "FC-SNEAKER", on_hand=12, safety_stock=2),
    SeedStock("WH-01", "FC-SCARF", on_hand=30),
    # Store short on jackets, long on sneakers
    SeedStock("ST-N1", "FC-JACKET", on_hand=2, daily_sales=1.5),
    SeedStock("ST-N1", "FC-SNEAKER", on_hand=60, safety_stock=2, daily_sales=1.0),
    # Same-region neighbour short on sneakers
    SeedStock("ST-N2", "FC-JACKET", on_hand=10, daily_sales=0.5),
    SeedStock("ST-N2", "FC-SNEAKER", on_hand=1, daily_sales=2.0),
    # Other region, slow mover and a zero-velocity line
    SeedStock("ST-S1", "FC-SNEAKER", on_hand=3, daily_sales=1.0),
    SeedStock("ST-S1", "FC-SCARF", on_hand=8, daily_sales=0.0),
]

SEED_CONSTRAINTS: dict[str, object] = {
    "min_cover_weeks": 2,
    "lateral_enabled": True,
    "min_lateral_net_benefit": 500000,
    "threshold_high_weeks": 6,
    "threshold_low_weeks": 1,
}


def build_demo_rows(tenant_id: str = DEFAULT_TENANT) -> list:
    """Model instances for the whole demo tenant, not yet attached to a session."""
    stores = {}
    rows: list = []
    for loc in SEED_LOCATIONS:
        s = Store(
            id=uuid.uuid4(),
            tenant_id=tenant_id,
            store_name=loc.name,
            store_code=loc.code,
            location_type=loc.location_type,
            region=loc.region,
            is_active=True,
        )
        stores[loc.code] = s
        rows.append(s)

    for st in SEED_STOCK:
        store = stores[st.location_code]
        rows.append(
            InventoryPosition(
                tenant_id=tenant_id,
                store_id=store.id,
                fc_id=st.fc_id,
                sku=f"{st.fc_id}-{st.location_code}",
                on_hand=st.on_hand,
                reserved=st.reserved,
                safety_stock=st.safety_stock,
            )
        )
        if st.daily_sales is not None:
            rows.append(
                DemandState(
                    tenant_id=tenant_id,
                    store_id=store.id,
                    fc_id=st.fc_id,
                    avg_daily_sales=st.daily_sales,
                    total_sold=int(round(st.daily_sales * 30)),
                )
            )

    for key, value in SEED_CONSTRAINTS.items():
        rows.append(
            ConstraintRegistry(
                tenant_id=tenant_id,
                constraint_key=key,
                constraint_value={"value": value},
                is_active=True,
            )
        )
    return rows


async def main(tenant_id: str = DEFAULT_TENANT) -> None:
    await create_db_and_tables()
    async with async_session_maker() as db:
        # Children first; the cascade is ORM-side only.
        for model in (DemandState, InventoryPosition, ConstraintRegistry, Store):
            await db.execute(delete(model).where(model.tenant_id == tenant_id))

        rows = build_demo_rows(tenant_id)
        db.add_all(rows)
        await db.commit()

        print(
            f"Done. Tenant '{tenant_id}': {len(SEED_LOCATIONS)} locations, "
            f"{len(SEED_STOCK)} positions, {len(SEED_CONSTRAINTS)} constraints."
        )


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_TENANT))
