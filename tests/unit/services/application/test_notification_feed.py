import pytest

from conftest import make_plant, make_snapshot
from smartgrow.domain.exceptions import NotFoundError
from smartgrow.services.application.notification_feed import NotificationFeed


@pytest.fixture()
def violating_zone(zone_catalog, snapshot_source):
    """Two plants in zone1, each with a light violation."""
    zone_catalog.plants["zone1"] = [make_plant("p1"), make_plant("p2", moisture_pin=35)]
    snapshot_source.snapshots["zone1"] = make_snapshot(light=5)


def test_apply_replaces_contents(feed, engine, violating_zone):
    feed.apply(engine.run())

    assert [n.plant_id for n in feed.notifications()] == ["p1", "p2"]
    assert feed.unread_count() == 2


def test_read_state_carries_forward_by_dedup_key(feed, engine, violating_zone):
    feed.apply(engine.run())
    first_id = feed.notifications()[0].id

    feed.mark_as_read(first_id)
    feed.apply(engine.run())

    refreshed = feed.notifications()
    assert refreshed[0].id != first_id
    assert refreshed[0].is_read is True
    assert refreshed[1].is_read is False
    assert feed.stats().unread == 1


def test_read_state_is_forgotten_once_violation_clears(feed, engine, violating_zone, snapshot_source):
    feed.apply(engine.run())
    feed.mark_all_as_read()

    snapshot_source.snapshots["zone1"] = make_snapshot()
    feed.apply(engine.run())
    snapshot_source.snapshots["zone1"] = make_snapshot(light=5)
    feed.apply(engine.run())

    assert feed.unread_count() == 2


def test_dismissed_notifications_stay_hidden_while_active(feed, engine, violating_zone):
    feed.apply(engine.run())
    feed.dismiss(feed.notifications()[0].id)

    feed.apply(engine.run())

    assert [n.plant_id for n in feed.notifications()] == ["p2"]


def test_mark_all_as_read_counts_changes(feed, engine, violating_zone):
    feed.apply(engine.run())

    assert feed.mark_all_as_read() == 2
    assert feed.mark_all_as_read() == 0
    assert feed.unread_count() == 0


def test_clear_all_empties_until_next_run(feed, engine, violating_zone):
    feed.apply(engine.run())

    assert feed.clear_all() == 2
    assert feed.notifications() == []

    feed.apply(engine.run())
    assert len(feed.notifications()) == 2


def test_unknown_id_raises_not_found(feed):
    with pytest.raises(NotFoundError):
        feed.mark_as_read("missing")
    with pytest.raises(NotFoundError):
        feed.dismiss("missing")


def test_feed_is_capped(engine, zone_catalog, snapshot_source):
    zone_catalog.plants["zone1"] = [make_plant(f"p{i}") for i in range(5)]
    snapshot_source.snapshots["zone1"] = make_snapshot(light=5)
    feed = NotificationFeed(max_size=3)

    feed.apply(engine.run())

    assert len(feed.notifications()) == 3


def test_apply_records_system_thresholds(feed, engine, threshold_source):
    run = engine.run()
    feed.apply(run)

    assert feed.system_thresholds == threshold_source.thresholds
    assert feed.applied_at == run.completed_at
