from src.fleet_planner.models.domain import Coordinate, Site, TaskKind, TransportTask
from src.fleet_planner.services.tasks import (
    classify_task,
    consolidate_sites,
    priority_score,
    select_priority_sites,
    summarize_consolidation,
)


def _site(sid: str, *labels: str, lat: float = -37.81, lon: float = 144.96) -> Site:
    return Site(
        site_id=sid,
        location=Coordinate(lat, lon),
        transport_tasks=tuple(TransportTask(task_type=label) for label in labels),
    )


def test_classify_task_labels():
    assert classify_task("Delivery-Standard") is TaskKind.DELIVERY
    assert classify_task("URGENT COLLECTION") is TaskKind.COLLECTION
    assert classify_task("competitor_rental") is TaskKind.COMPETITOR_RENTAL
    assert classify_task("Competitor_Rental") is TaskKind.OTHER
    assert classify_task("Inspection") is TaskKind.OTHER
    assert classify_task(None) is TaskKind.OTHER


def test_consolidate_sites_drops_sites_without_tasks():
    sites = [
        _site("S1", "Delivery"),
        Site(site_id="S2", location=Coordinate(0, 0), transport_tasks=None),
        _site("S3"),
        Site(site_id="S4", location=Coordinate(0, 0), transport_tasks="Delivery"),
        _site("S5", "Collection", "Collection"),
    ]

    result = consolidate_sites(sites)

    assert [site.site_id for site in result] == ["S1", "S5"]


def test_priority_score_examples():
    mixed = _site("S1", "Delivery-Standard", "Collection-Urgent")
    competitor = _site("S2", "competitor_rental")
    plain = _site("S3", "Inspection")

    assert priority_score(mixed) == 70
    assert priority_score(competitor) == 110
    assert priority_score(plain) == 10


def test_priority_score_counts_bonuses_once():
    site = _site("S1", "Delivery", "delivery x 12", "Delivery-Express")
    assert priority_score(site) == 30 + 50


def test_select_priority_sites_ranks_competitor_rental_first():
    mixed = _site("S1", "Delivery-Standard", "Collection-Urgent")
    competitor = _site("S2", "competitor_rental")
    plain = _site("S3", "Inspection")

    selected = select_priority_sites([plain, mixed, competitor], capacity=2)

    assert [site.site_id for site in selected] == ["S2", "S1"]


def test_select_priority_sites_is_stable_for_equal_scores():
    sites = [_site(f"S{i}", "Delivery") for i in range(6)] + [_site("TOP", "competitor_rental", "Delivery")]

    selected = select_priority_sites(sites, capacity=4)

    assert [site.site_id for site in selected] == ["TOP", "S0", "S1", "S2"]


def test_select_priority_sites_keeps_order_when_under_capacity():
    sites = [_site("S1", "Inspection"), _site("S2", "competitor_rental"), _site("S3", "Delivery")]

    selected = select_priority_sites(sites, capacity=43)

    assert [site.site_id for site in selected] == ["S1", "S2", "S3"]


def test_select_priority_sites_never_exceeds_capacity():
    sites = [_site(f"S{i}", "Collection") for i in range(60)]

    assert len(select_priority_sites(sites, capacity=43)) == 43
    assert select_priority_sites(sites, capacity=0) == []
    assert select_priority_sites([], capacity=5) == []


def test_summarize_consolidation_counts_tasks_and_visits():
    sites = [
        _site("S1", "Delivery x 164 Armorzones", "Delivery", "Collection"),
        _site("S2", "competitor_rental"),
        _site("S3"),
    ]

    summary = summarize_consolidation(sites)

    assert summary["total_historical_tasks"] == 4
    assert summary["unique_sites"] == 2
    assert summary["consolidated_operations"] == 2
    assert summary["task_kinds"]["delivery"] == 2
    assert summary["task_kinds"]["competitor_rental"] == 1
    assert "4 historical task records consolidated into 2 site visits" in summary["explanation"]
