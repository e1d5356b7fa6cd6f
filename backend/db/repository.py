"""
Read-only adapter that loads one tenant's engine inputs.

Each run calls `load_snapshot` once; the planners then work on the returned
records only. Reads are not paginated: the snapshot is the complete set.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.records import ConstraintSetting, DemandSignal, InventorySnapshot, Location, Position
from db.inventory import ConstraintRegistry, DemandState, InventoryPosition, Store

logger = logging.getLogger(__name__)


async def load_locations(db: AsyncSession, tenant_id: str) -> list[Location]:
    res = await db.execute(
        select(Store)
        .where(Store.tenant_id == tenant_id)
        .where(Store.is_active == True)  # noqa: E712
        .order_by(func.lower(Store.store_name).asc(), Store.id.asc())
    )
    return [
        Location(
            id=str(s.id),
            name=s.store_name or s.store_code or str(s.id),
            location_type=s.location_type or "store",
            is_active=bool(s.is_active),
            region=(s.region or "").strip() or None,
        )
        for s in res.scalars().all()
    ]


async def load_positions(db: AsyncSession, tenant_id: str) -> list[Position]:
    res = await db.execute(
        select(InventoryPosition)
        .where(InventoryPosition.tenant_id == tenant_id)
        .order_by(InventoryPosition.store_id.asc(), InventoryPosition.fc_id.asc(), InventoryPosition.id.asc())
    )
    return [
        Position(
            location_id=str(p.store_id),
            item_id=p.fc_id,
            on_hand=int(p.on_hand or 0),
            reserved=int(p.reserved or 0),
            safety_stock=int(p.safety_stock or 0),
            available=int(p.available) if p.available is not None else None,
        )
        for p in res.scalars().all()
    ]


async def load_demand(db: AsyncSession, tenant_id: str) -> list[DemandSignal]:
    res = await db.execute(
        select(DemandState)
        .where(DemandState.tenant_id == tenant_id)
        .order_by(DemandState.store_id.asc(), DemandState.fc_id.asc(), DemandState.id.asc())
    )
    return [
        DemandSignal(
            location_id=str(d.store_id),
            item_id=d.fc_id,
            daily_velocity=float(d.avg_daily_sales or 0),
        )
        for d in res.scalars().all()
    ]


async def load_constraints(db: AsyncSession, tenant_id: str) -> list[ConstraintSetting]:
    res = await db.execute(
        select(ConstraintRegistry)
        .where(ConstraintRegistry.tenant_id == tenant_id)
        .where(ConstraintRegistry.is_active == True)  # noqa: E712
        .order_by(ConstraintRegistry.constraint_key.asc(), ConstraintRegistry.id.asc())
    )
    return [
        ConstraintSetting(name=c.constraint_key, value=c.constraint_value, is_active=bool(c.is_active))
        for c in res.scalars().all()
    ]


async def load_snapshot(db: AsyncSession, tenant_id: str) -> InventorySnapshot:
    snapshot = InventorySnapshot(
        tenant_id=tenant_id,
        locations=await load_locations(db, tenant_id),
        positions=await load_positions(db, tenant_id),
        demand=await load_demand(db, tenant_id),
        constraints=await load_constraints(db, tenant_id),
    )
    logger.info(
        "Loaded snapshot for tenant %s: %d locations, %d positions, %d demand signals, %d constraints",
        tenant_id,
        len(snapshot.locations),
        len(snapshot.positions),
        len(snapshot.demand),
        len(snapshot.constraints),
    )
    return snapshot
