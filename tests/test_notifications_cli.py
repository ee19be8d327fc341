import json
from unittest.mock import patch

from conftest import make_plant, make_snapshot
from smartgrow.domain.exceptions import EngineUnavailableError
from smartgrow.workers import notifications_cli


class _Container:
    def __init__(self, engine):
        self.engine = engine
        self.shutdown_called = False

    def shutdown(self):
        self.shutdown_called = True


def test_cli_prints_run_as_json(engine, zone_catalog, snapshot_source, capsys, monkeypatch):
    monkeypatch.setenv("SMARTGROW_LOG_PATH", "")
    zone_catalog.plants["zone1"] = [make_plant("p1")]
    snapshot_source.snapshots["zone1"] = make_snapshot(light=5)
    container = _Container(engine)

    with patch.object(notifications_cli.ServiceContainer, "build", return_value=container) as build:
        exit_code = notifications_cli.main(["--concurrent", "--pretty"])

    assert exit_code == 0
    assert build.call_args.args[0].zone_workers == 4
    assert container.shutdown_called
    output = json.loads(capsys.readouterr().out)
    assert output["stats"]["total"] == 1
    assert output["notifications"][0]["sensor"] == "light"
    assert output["thresholdsDefaulted"] is False


def test_cli_returns_error_code_when_engine_unavailable(engine, monkeypatch):
    monkeypatch.setenv("SMARTGROW_LOG_PATH", "")
    def _unavailable():
        raise EngineUnavailableError("down")

    monkeypatch.setattr(engine, "run", _unavailable)
    container = _Container(engine)

    with patch.object(notifications_cli.ServiceContainer, "build", return_value=container):
        assert notifications_cli.main([]) == 1

    assert container.shutdown_called
