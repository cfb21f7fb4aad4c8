import asyncio
import random

import pytest

from src.fleet_planner.models.domain import Coordinate, Site, TransportTask
from src.fleet_planner.services.routing.progressive import CancellationToken, optimize_with_progress
from src.fleet_planner.services.routing.stages import member_randomness, stage_for_generation

DEPOT = Coordinate(-37.7950, 144.9631)


def _site(sid: str, lat: float, lon: float, label: str = "Delivery") -> Site:
    return Site(site_id=sid, location=Coordinate(lat, lon), transport_tasks=(TransportTask(label),))


def _sites(count: int = 14) -> list[Site]:
    return [_site(f"S{i}", -37.85 + (i % 5) * 0.011, 144.92 + (i // 5) * 0.02) for i in range(count)]


def _run(sites, vehicles, **kwargs):
    snapshots = []
    best = asyncio.run(
        optimize_with_progress(sites, DEPOT, vehicles, snapshots.append, delay_seconds=0, **kwargs)
    )
    return best, snapshots


def test_stage_table_thresholds():
    early = stage_for_generation(1)
    assert early.randomness == 0.4 and not early.apply_two_opt
    assert stage_for_generation(4).apply_two_opt is False
    assert stage_for_generation(5).iteration_budget == 30
    assert stage_for_generation(8).randomness == 0.2
    assert stage_for_generation(9).iteration_budget == 30
    assert stage_for_generation(10).iteration_budget == 50
    assert stage_for_generation(25).randomness == 0.05


def test_member_randomness_scales_and_caps():
    assert member_randomness(0.2, 0, step=0.3) == pytest.approx(0.2)
    assert member_randomness(0.2, 1, step=0.3) == pytest.approx(0.26)
    assert member_randomness(0.4, 7, step=0.3) == 1.0


def test_empty_sites_emit_trivial_snapshots():
    best, snapshots = _run([], 4, generations=10)

    assert [snapshot.generation for snapshot in snapshots] == list(range(1, 11))
    assert all(snapshot.routes == [] for snapshot in snapshots)
    assert all(snapshot.total_distance_km == 0 for snapshot in snapshots)
    assert [snapshot.is_best for snapshot in snapshots] == [True] + [False] * 9
    assert best.routes == []
    assert best.total_distance_km == 0


def test_global_best_is_monotone():
    best, snapshots = _run(_sites(), 3, rng=random.Random(8))

    assert [snapshot.generation for snapshot in snapshots] == list(range(1, 11))
    running = float("inf")
    for snapshot in snapshots:
        assert snapshot.is_best == (snapshot.total_distance_km < running)
        running = min(running, snapshot.total_distance_km)
    assert best.total_distance_km == pytest.approx(min(s.total_distance_km for s in snapshots))


def test_snapshot_routes_keep_depot_endpoints_and_partition():
    sites = _sites()
    _, snapshots = _run(sites, 4, rng=random.Random(21))

    for snapshot in snapshots:
        routed = [sid for route in snapshot.routes for sid in route.site_ids]
        assert sorted(routed) == sorted(site.site_id for site in sites)
        for route in snapshot.routes:
            assert route.route[0] == DEPOT and route.route[-1] == DEPOT
            assert route.generation == snapshot.generation
        assert snapshot.total_distance_km == pytest.approx(sum(route.distance_km for route in snapshot.routes))


def test_cancellation_stops_at_generation_boundary():
    token = CancellationToken()
    snapshots = []

    def on_progress(snapshot):
        snapshots.append(snapshot)
        if snapshot.generation == 3:
            token.cancel()

    best = asyncio.run(
        optimize_with_progress(
            _sites(),
            DEPOT,
            2,
            on_progress,
            delay_seconds=0,
            rng=random.Random(4),
            cancel_token=token,
        )
    )

    assert [snapshot.generation for snapshot in snapshots] == [1, 2, 3]
    assert best.total_distance_km == pytest.approx(min(s.total_distance_km for s in snapshots))


def test_async_progress_callback_is_awaited():
    seen = []

    async def on_progress(snapshot):
        await asyncio.sleep(0)
        seen.append(snapshot.generation)

    asyncio.run(
        optimize_with_progress(_sites(6), DEPOT, 2, on_progress, generations=3, delay_seconds=0, rng=random.Random(1))
    )

    assert seen == [1, 2, 3]


def test_weekly_capacity_applies_to_progressive_runs():
    sites = _sites(12) + [_site("RIVAL", -37.80, 144.99, "competitor_rental")]

    best, _ = _run(sites, 2, weekly_capacity=5, generations=2, rng=random.Random(3))

    routed = [sid for route in best.routes for sid in route.site_ids]
    assert len(routed) == 5
    assert "RIVAL" in routed


def test_event_loop_keeps_running_during_generations():
    async def scenario():
        gaps = []
        running = True

        async def heartbeat():
            loop = asyncio.get_running_loop()
            last = loop.time()
            while running:
                await asyncio.sleep(0.01)
                now = loop.time()
                gaps.append(now - last)
                last = now

        beat = asyncio.create_task(heartbeat())
        await optimize_with_progress(
            _sites(43),
            DEPOT,
            1,
            lambda snapshot: None,
            generations=10,
            delay_seconds=0,
            rng=random.Random(5),
        )
        running = False
        await beat
        return gaps

    gaps = asyncio.run(scenario())

    assert len(gaps) > 1
    assert max(gaps) < 0.25
