import threading
from unittest.mock import MagicMock

import pytest

from conftest import RUN_TIME, make_plant, make_snapshot
from smartgrow.domain.exceptions import EngineUnavailableError
from smartgrow.domain.notification import NotificationRun, NotificationStats
from smartgrow.domain.thresholds import SystemThresholds
from smartgrow.enums.notifications import RefreshTrigger
from smartgrow.services.application.refresh_coordinator import RefreshCoordinator


def _run(total: int) -> NotificationRun:
    return NotificationRun(
        notifications=(),
        stats=NotificationStats(total=total),
        system_thresholds=SystemThresholds.defaults(),
        started_at=RUN_TIME,
        completed_at=RUN_TIME,
    )


class ControlledEngine:
    """Engine stub whose runs finish only when released."""

    def __init__(self):
        self._lock = threading.Lock()
        self.plan = []
        self.started = threading.Event()

    def add(self, result):
        release = threading.Event()
        self.plan.append((release, result))
        return release

    def run(self):
        with self._lock:
            release, result = self.plan.pop(0)
        self.started.set()
        assert release.wait(5)
        if isinstance(result, Exception):
            raise result
        return result


def test_successful_refresh_publishes_to_listeners(coordinator, zone_catalog, snapshot_source):
    zone_catalog.plants["zone1"] = [make_plant("p1")]
    snapshot_source.snapshots["zone1"] = make_snapshot(light=5)
    listener = MagicMock()
    coordinator.subscribe(listener)

    run = coordinator.refresh(RefreshTrigger.MANUAL)

    assert run is not None
    assert coordinator.latest is run
    listener.assert_called_once_with(run)
    status = coordinator.status()
    assert status.generation == 1
    assert status.last_trigger == RefreshTrigger.MANUAL
    assert status.refreshing is False
    assert status.error is None


def test_unsubscribe_stops_delivery(coordinator):
    listener = MagicMock()
    unsubscribe = coordinator.subscribe(listener)
    unsubscribe()
    unsubscribe()

    coordinator.refresh()

    listener.assert_not_called()


def test_listener_errors_do_not_fail_refresh(coordinator):
    good = MagicMock()
    coordinator.subscribe(MagicMock(side_effect=RuntimeError("listener broke")))
    coordinator.subscribe(good)

    run = coordinator.refresh()

    assert run is not None
    good.assert_called_once_with(run)


def test_failure_keeps_previous_result():
    engine = MagicMock()
    first = _run(1)
    engine.run.side_effect = [first, EngineUnavailableError("backend down")]
    coordinator = RefreshCoordinator(engine)
    listener = MagicMock()
    coordinator.subscribe(listener)

    coordinator.refresh(RefreshTrigger.STARTUP)
    with pytest.raises(EngineUnavailableError):
        coordinator.refresh(RefreshTrigger.PERIODIC)

    assert coordinator.latest is first
    assert coordinator.last_error == "backend down"
    assert coordinator.status().error == "backend down"
    listener.assert_called_once_with(first)


def test_success_clears_previous_error():
    engine = MagicMock()
    engine.run.side_effect = [EngineUnavailableError("down"), _run(2)]
    coordinator = RefreshCoordinator(engine)

    with pytest.raises(EngineUnavailableError):
        coordinator.refresh()
    coordinator.refresh()

    assert coordinator.last_error is None


def test_older_run_completing_late_is_discarded():
    engine = ControlledEngine()
    stale, fresh = _run(1), _run(2)
    release_stale = engine.add(stale)
    release_fresh = engine.add(fresh)
    coordinator = RefreshCoordinator(engine)
    listener = MagicMock()
    coordinator.subscribe(listener)

    results = {}
    worker = threading.Thread(target=lambda: results.setdefault("stale", coordinator.refresh()))
    worker.start()
    assert engine.started.wait(5)
    assert coordinator.status().refreshing is True

    release_fresh.set()
    results["fresh"] = coordinator.refresh()
    release_stale.set()
    worker.join(5)

    assert results["fresh"] is fresh
    assert results["stale"] is None
    assert coordinator.latest is fresh
    listener.assert_called_once_with(fresh)
    assert coordinator.status().generation == 2
    assert coordinator.status().refreshing is False


def test_run_superseded_during_publication_is_not_delivered_late():
    engine = MagicMock()
    first, second = _run(1), _run(2)
    engine.run.side_effect = [first, second]
    coordinator = RefreshCoordinator(engine)
    delivered = []
    results = {}

    def refresh_again(run):
        if run is first:
            results["second"] = coordinator.refresh(RefreshTrigger.PERIODIC)

    coordinator.subscribe(refresh_again)
    coordinator.subscribe(lambda run: delivered.append(run.stats.total))

    results["first"] = coordinator.refresh(RefreshTrigger.MANUAL)

    assert results["second"] is second
    assert results["first"] is None
    assert coordinator.latest is second
    assert delivered == [2]


def test_superseded_failure_does_not_set_error():
    engine = ControlledEngine()
    release_failing = engine.add(EngineUnavailableError("late failure"))
    release_ok = engine.add(_run(3))
    coordinator = RefreshCoordinator(engine)

    errors = []

    def refresh_old():
        try:
            coordinator.refresh()
        except EngineUnavailableError as e:
            errors.append(e)

    worker = threading.Thread(target=refresh_old)
    worker.start()
    assert engine.started.wait(5)

    release_ok.set()
    coordinator.refresh()
    release_failing.set()
    worker.join(5)

    assert len(errors) == 1
    assert coordinator.last_error is None
    assert coordinator.latest.stats.total == 3


def test_status_to_dict(coordinator):
    coordinator.refresh(RefreshTrigger.PERIODIC)

    payload = coordinator.status().to_dict()

    assert payload["last_trigger"] == "periodic"
    assert payload["generation"] == 1
    assert payload["last_refreshed_at"].startswith("2026-01-01T12:05:01")
