import asyncio
import uuid

import pytest
from fastapi.testclient import TestClient

import core.runner
from db.database import get_async_session
from main import app
from scripts.seed_demo_tenant import build_demo_rows


@pytest.fixture
def client(session_maker):
    async def override_session():
        async with session_maker() as session:
            yield session

    async def seed():
        async with session_maker() as db:
            db.add_all(build_demo_rows("demo"))
            await db.commit()

    asyncio.run(seed())
    app.dependency_overrides[get_async_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_invalid_requests_create_no_run(client):
    assert client.post("/inventory-engine/run", json={"tenant_id": "  ", "action": "rebalance"}).status_code == 422
    assert client.post("/inventory-engine/run", json={"tenant_id": "demo", "action": "explode"}).status_code == 422
    assert client.post("/inventory-engine/run", json={"action": "rebalance"}).status_code == 422
    assert client.post("/inventory-engine/run", json={"tenant_id": "demo", "action": "REBALANCE"}).status_code == 422
    assert client.post("/inventory-engine/run", json={"tenant_id": "demo", "action": " rebalance "}).status_code == 422

    response = client.get("/inventory-engine/runs", params={"tenant_id": "demo"})
    assert response.status_code == 200
    assert response.json() == []


def test_rebalance_run_and_read_back(client):
    response = client.post("/inventory-engine/run", json={"tenant_id": "demo", "action": "rebalance"})
    assert response.status_code == 200
    data = response.json()
    assert data["push_suggestions"] == 2
    assert data["lateral_suggestions"] == 2
    run_id = data["run_id"]

    run = client.get(f"/inventory-engine/runs/{run_id}").json()
    assert run["status"] == "completed"
    assert run["run_type"] == "rebalance"
    assert run["total_suggestions"] == 4

    pushes = client.get(f"/inventory-engine/runs/{run_id}/suggestions", params={"transfer_type": "push"}).json()
    assert len(pushes) == 2
    assert all(p["transfer_type"] == "push" for p in pushes)
    assert {p["item_id"] for p in pushes} == {"FC-JACKET", "FC-SNEAKER"}

    runs = client.get("/inventory-engine/runs", params={"tenant_id": "demo"}).json()
    assert [r["id"] for r in runs] == [run_id]


def test_allocate_run(client):
    response = client.post("/inventory-engine/run", json={"tenant_id": "demo", "action": "allocate"})
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"run_id", "recommendations", "total_units"}

    recs = client.get(f"/inventory-engine/runs/{data['run_id']}/recommendations").json()
    assert len(recs) == data["recommendations"]
    assert sum(r["recommended_qty"] for r in recs) == data["total_units"]


def test_recall_run(client):
    response = client.post("/inventory-engine/run", json={"tenant_id": "demo", "action": "recall"})
    assert response.status_code == 200
    data = response.json()
    suggestions = client.get(f"/inventory-engine/runs/{data['run_id']}/suggestions").json()
    assert len(suggestions) == data["total_suggestions"]
    assert all(s["transfer_type"] == "recall" for s in suggestions)


def test_unknown_run_is_404(client):
    missing = uuid.uuid4()
    assert client.get(f"/inventory-engine/runs/{missing}").status_code == 404
    assert client.get(f"/inventory-engine/runs/{missing}/suggestions").status_code == 404


def test_failure_marks_run_failed(client, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("planner exploded")

    monkeypatch.setattr(core.runner, "build_rebalance_plan", boom)

    response = client.post("/inventory-engine/run", json={"tenant_id": "demo", "action": "rebalance"})
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "planner exploded"

    run = client.get(f"/inventory-engine/runs/{detail['run_id']}").json()
    assert run["status"] == "failed"
    assert run["error_message"] == "planner exploded"
    assert run["total_suggestions"] == 0
    assert client.get(f"/inventory-engine/runs/{detail['run_id']}/suggestions").json() == []
