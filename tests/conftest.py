import asyncio
import os

# Must be set before core.config is imported anywhere.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from core.records import ConstraintSetting, DemandSignal, InventorySnapshot, Location, Position
from db.database import create_db_and_tables


@pytest.fixture
def db_engine(tmp_path):
    # NullPool: TestClient and asyncio.run each bring their own event loop.
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'engine.db'}", poolclass=NullPool)
    asyncio.run(create_db_and_tables(bind=engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_maker(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


def warehouse(loc_id="wh", name="Central", region=None):
    return Location(id=loc_id, name=name, location_type="central_warehouse", region=region)


def store(loc_id, name=None, region=None, is_active=True):
    return Location(id=loc_id, name=name or loc_id.upper(), location_type="store", region=region, is_active=is_active)


def snapshot(locations, stock=(), velocities=None, constraints=None, tenant_id="t1"):
    """
    stock: (location_id, item_id, on_hand[, reserved, safety_stock]) tuples
    velocities: {(location_id, item_id): daily_velocity}
    constraints: {name: value}
    """
    positions = [Position(s[0], s[1], *s[2:]) for s in stock]
    demand = [DemandSignal(loc, item, v) for (loc, item), v in (velocities or {}).items()]
    settings = [ConstraintSetting(k, v) for k, v in (constraints or {}).items()]
    return InventorySnapshot(
        tenant_id=tenant_id,
        locations=list(locations),
        positions=positions,
        demand=demand,
        constraints=settings,
    )
