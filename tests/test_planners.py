from conftest import snapshot, store, warehouse

from core.allocation import recommend_allocations
from core.constraints import RebalanceConstraints
from core.engine import build_allocation_plan, build_rebalance_plan, build_recall_plan
from core.lateral_planner import plan_lateral
from core.position_ledger import PositionLedger
from core.pricing import ConstantPriceProvider, TransferCosts
from core.push_planner import plan_push
from core.recall_planner import plan_recall
from core.records import InventorySnapshot


def _push(snap, **kw):
    return plan_push(snap, RebalanceConstraints(**kw), PositionLedger(snap.positions))


def _lateral(snap, **kw):
    return plan_lateral(snap, RebalanceConstraints(**kw), PositionLedger(snap.positions))


# ----------------------------
# Push
# ----------------------------

def test_push_caps_at_warehouse_availability():
    snap = snapshot(
        [warehouse(), store("s1")],
        stock=[("wh", "x", 100), ("s1", "x", 0)],
        velocities={("s1", "x"): 10},
    )
    out = _push(snap)
    assert len(out) == 1
    s = out[0]
    assert s.transfer_type == "push"
    assert (s.from_location, s.to_location, s.item_id) == ("wh", "s1", "x")
    assert s.qty == 100
    assert s.priority == "P1"
    assert s.to_weeks_cover == 0
    assert s.to_weeks_cover_after == 1.43
    assert s.from_weeks_cover == 99.0
    assert s.from_weeks_cover_after == 0
    assert s.potential_revenue_gain == 100 * 10 * 7 * 350000
    assert s.logistics_cost_estimate == 100 * 5000
    assert s.net_benefit == s.potential_revenue_gain - s.logistics_cost_estimate
    assert s.status == "pending"


def test_push_respects_reserved_and_safety_stock():
    snap = snapshot(
        [warehouse(), store("s1")],
        stock=[("wh", "x", 30, 5, 5)],
        velocities={("s1", "x"): 10},
    )
    out = _push(snap)
    assert [s.qty for s in out] == [20]


def test_push_serves_lowest_cover_first():
    snap = snapshot(
        [warehouse(), store("s1"), store("s2")],
        stock=[("wh", "x", 50), ("s1", "x", 35), ("s2", "x", 0)],
        velocities={("s1", "x"): 10, ("s2", "x"): 5},
    )
    out = _push(snap)
    assert [(s.to_location, s.qty) for s in out] == [("s2", 50)]


def test_push_skips_store_without_demand_or_stock():
    snap = snapshot(
        [warehouse(), store("s1")],
        stock=[("wh", "x", 100)],
    )
    assert _push(snap) == []


def test_push_nothing_to_give():
    snap = snapshot(
        [warehouse(), store("s1")],
        stock=[("wh", "x", 10, 6, 4), ("s1", "x", 0)],
        velocities={("s1", "x"): 3},
    )
    assert _push(snap) == []


def test_push_never_exceeds_availability_across_stores():
    snap = snapshot(
        [warehouse(), store("s1"), store("s2"), store("s3")],
        stock=[("wh", "x", 25, 3, 2)],
        velocities={("s1", "x"): 1, ("s2", "x"): 2, ("s3", "x"): 4},
    )
    out = _push(snap)
    assert sum(s.qty for s in out) == 20
    assert all(s.qty > 0 for s in out)


# ----------------------------
# Lateral
# ----------------------------

def test_lateral_skips_pairing_below_net_benefit():
    snap = snapshot(
        [store("src", region="north"), store("dst", region="south")],
        stock=[("src", "x", 200), ("dst", "x", 0)],
        velocities={("src", "x"): 1, ("dst", "x"): 5},
    )
    ledger = PositionLedger(snap.positions)
    out = plan_lateral(
        snap,
        RebalanceConstraints(),
        ledger,
        prices=ConstantPriceProvider(price=100),
        costs=TransferCosts(cross_region_cost_per_unit=15000),
    )
    assert out == []
    assert ledger.outbound("src", "x") == 0


def test_lateral_moves_surplus_to_shortage():
    snap = snapshot(
        [store("src", region="north"), store("dst", region="south")],
        stock=[("src", "x", 200), ("dst", "x", 0)],
        velocities={("src", "x"): 1, ("dst", "x"): 5},
    )
    out = _lateral(snap)
    assert len(out) == 1
    s = out[0]
    assert s.transfer_type == "lateral"
    assert s.qty == 35
    assert s.priority == "P1"
    assert s.logistics_cost_estimate == 35 * 15000
    assert "cross region" in s.reason
    assert s.to_weeks_cover_after == 1.0


def test_lateral_disabled():
    snap = snapshot(
        [store("src"), store("dst")],
        stock=[("src", "x", 200), ("dst", "x", 0)],
        velocities={("src", "x"): 1, ("dst", "x"): 5},
    )
    assert _lateral(snap, lateral_enabled=False) == []


def test_lateral_prefers_same_region_source():
    snap = snapshot(
        [store("dst", region="north"), store("far", region="south"), store("near", region="north")],
        stock=[("dst", "x", 0), ("far", "x", 100), ("near", "x", 100)],
        velocities={("dst", "x"): 1, ("far", "x"): 1, ("near", "x"): 1},
    )
    out = _lateral(snap)
    assert [(s.from_location, s.to_location, s.qty) for s in out] == [("near", "dst", 7)]
    assert out[0].logistics_cost_estimate == 7 * 5000
    assert "same region" in out[0].reason


def test_lateral_never_gives_more_than_surplus():
    snap = snapshot(
        [store("src"), store("d1"), store("d2")],
        stock=[("src", "x", 50), ("d1", "x", 0), ("d2", "x", 0)],
        velocities={("src", "x"): 1, ("d1", "x"): 1, ("d2", "x"): 2},
    )
    out = _lateral(snap)
    # surplus = 50 - ceil(6 * 1 * 7) = 8
    assert [(s.to_location, s.qty) for s in out] == [("d1", 7), ("d2", 1)]
    assert sum(s.qty for s in out) == 8


def test_lateral_leaves_zero_velocity_stock_alone():
    snap = snapshot(
        [store("dead"), store("dst")],
        stock=[("dead", "x", 100), ("dst", "x", 0)],
        velocities={("dst", "x"): 2},
    )
    assert _lateral(snap) == []


def test_lateral_sees_push_moves():
    stores = [store("s1"), store("s2")]
    stock = [("s1", "x", 0), ("s2", "x", 100)]
    velocities = {("s1", "x"): 1, ("s2", "x"): 1}

    without_wh = build_rebalance_plan(snapshot(stores, stock, velocities))
    assert without_wh.push == []
    assert [(s.from_location, s.to_location, s.qty) for s in without_wh.lateral] == [("s2", "s1", 7)]

    with_wh = build_rebalance_plan(snapshot([warehouse()] + stores, stock + [("wh", "x", 100)], velocities))
    assert [(s.to_location, s.qty) for s in with_wh.push] == [("s1", 14)]
    assert with_wh.lateral == []
    assert with_wh.push_units == 14
    assert with_wh.lateral_units == 0
    assert with_wh.total_units == 14


# ----------------------------
# Engine
# ----------------------------

def test_empty_snapshot_produces_nothing():
    empty = InventorySnapshot(tenant_id="t1")
    plan = build_rebalance_plan(empty)
    assert plan.suggestions == []
    assert plan.total_units == 0
    assert build_allocation_plan(empty) == []
    assert build_recall_plan(empty) == []


def test_inactive_locations_only_is_empty():
    snap = snapshot([store("s1", is_active=False)], stock=[("s1", "x", 5)])
    assert snap.is_empty
    assert build_rebalance_plan(snap).suggestions == []


def test_rebalance_is_deterministic():
    def make():
        return snapshot(
            [warehouse(), store("a", region="r1"), store("b", region="r1"), store("c", region="r2")],
            stock=[("wh", "x", 40), ("a", "x", 1), ("b", "x", 90), ("c", "x", 0), ("wh", "y", 10), ("c", "y", 2)],
            velocities={("a", "x"): 2, ("b", "x"): 1, ("c", "x"): 3, ("c", "y"): 1},
        )

    assert build_rebalance_plan(make()).suggestions == build_rebalance_plan(make()).suggestions


# ----------------------------
# Allocation
# ----------------------------

def test_allocation_is_advisory_only():
    snap = snapshot(
        [warehouse(), store("s1"), store("s2"), store("s3")],
        stock=[("wh", "x", 0), ("s1", "x", 7), ("s2", "x", 0), ("s3", "x", 100)],
        velocities={("s1", "x"): 1, ("s2", "x"): 2, ("s3", "x"): 1},
    )
    out = recommend_allocations(snap)
    by_store = {r.store_id: r for r in out}
    assert set(by_store) == {"s1", "s2"}

    r1 = by_store["s1"]
    assert r1.recommended_qty == 14
    assert r1.current_weeks_cover == 1.0
    assert r1.projected_weeks_cover == 3.0
    assert r1.priority == "P3"
    assert r1.potential_revenue == 14 * 1 * 7 * 350000

    r2 = by_store["s2"]
    assert r2.recommended_qty == 42
    assert r2.priority == "P1"


def test_allocation_skips_zero_velocity():
    snap = snapshot([store("s1")], stock=[("s1", "x", 0)])
    assert recommend_allocations(snap) == []


# ----------------------------
# Recall
# ----------------------------

def test_recall_classifies_slow_and_stale_stock():
    snap = snapshot(
        [warehouse(), store("stale"), store("slow"), store("ok"), store("tiny")],
        stock=[("stale", "x", 20), ("slow", "x", 3), ("ok", "x", 10), ("tiny", "x", 1)],
        velocities={("slow", "x"): 0.04, ("ok", "x"): 1},
    )
    out = plan_recall(snap)
    by_store = {s.from_location: s for s in out}
    assert set(by_store) == {"stale", "slow"}

    stale = by_store["stale"]
    assert stale.transfer_type == "recall"
    assert stale.to_location == "wh"
    assert stale.qty == 19
    assert stale.priority == "P1"
    assert stale.potential_revenue_gain == 0
    assert stale.logistics_cost_estimate == 19 * 5000
    assert stale.net_benefit == round(19 * 350000 * 0.1, 2)

    slow = by_store["slow"]
    assert slow.qty == 2
    assert slow.priority == "P2"


def test_recall_needs_a_warehouse():
    snap = snapshot([store("s1")], stock=[("s1", "x", 50)])
    assert plan_recall(snap) == []


def test_push_draws_on_every_warehouse_row():
    snap = snapshot(
        [warehouse("wh1", "North DC"), warehouse("wh2", "South DC"), store("s1")],
        stock=[("wh1", "x", 10, 2, 0), ("wh1", "x", 5, 0, 1), ("wh2", "x", 20)],
        velocities={("s1", "x"): 10},
    )
    out = _push(snap)
    # wh1 spares (10 - 2) + (5 - 1) = 12; wh2 then tops up against the new cover
    assert [(s.from_location, s.qty) for s in out] == [("wh1", 12), ("wh2", 20)]
    assert out[1].to_weeks_cover == 0.17


def test_second_warehouse_sees_first_warehouse_push():
    snap = snapshot(
        [warehouse("wh1"), warehouse("wh2"), store("s1")],
        stock=[("wh1", "x", 200), ("wh2", "x", 200)],
        velocities={("s1", "x"): 10},
    )
    out = _push(snap)
    assert [(s.from_location, s.qty) for s in out] == [("wh1", 140)]


def test_lateral_conserves_units_per_item():
    snap = snapshot(
        [store("a", region="r1"), store("b", region="r1"), store("c", region="r2"), store("d", region="r2")],
        stock=[
            ("a", "x", 120), ("b", "x", 0), ("c", "x", 90, 0, 5), ("d", "x", 1),
            ("a", "y", 2), ("b", "y", 80), ("c", "y", 0),
        ],
        velocities={
            ("a", "x"): 1, ("b", "x"): 3, ("c", "x"): 1, ("d", "x"): 2,
            ("a", "y"): 1, ("b", "y"): 1, ("c", "y"): 1,
        },
    )
    ledger = PositionLedger(snap.positions)
    before = {item: sum(ledger.adjusted_on_hand(s.id, item) for s in snap.stores) for item in ledger.items()}

    out = plan_lateral(snap, RebalanceConstraints(), ledger)
    assert out

    for item in ledger.items():
        moved_out = sum(s.qty for s in out if s.item_id == item)
        assert moved_out == sum(ledger.outbound(s.id, item) for s in snap.stores)
        assert moved_out == sum(ledger.inbound(s.id, item) for s in snap.stores)
        after = sum(ledger.adjusted_on_hand(s.id, item) for s in snap.stores)
        assert after == before[item]

    # no source dips below its safety stock plus the high threshold
    for s in out:
        level = ledger.get(s.from_location, s.item_id)
        kept = ledger.adjusted_on_hand(s.from_location, s.item_id)
        assert kept >= level.safety_stock + 6 * 7 * snap.velocity(s.from_location, s.item_id)
