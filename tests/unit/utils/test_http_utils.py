from flask import Flask

from smartgrow.domain.exceptions import FetchError, NotFoundError
from smartgrow.utils.http import safe_route, success_response


def _app():
    app = Flask(__name__)

    @app.get("/backend")
    @safe_route("Failed to load plants")
    def backend():
        raise FetchError("connection refused to 10.0.0.5")

    @app.get("/missing")
    @safe_route("Failed to load notification")
    def missing():
        raise NotFoundError("Notification n1 not found")

    @app.get("/boom")
    @safe_route("Failed to build stats")
    def boom():
        raise RuntimeError("internal detail")

    @app.get("/fine")
    @safe_route()
    def fine():
        return success_response({"value": 1})

    return app


def test_backend_error_uses_neutral_message():
    response = _app().test_client().get("/backend")

    assert response.status_code == 502
    body = response.get_json()
    assert body["ok"] is False
    assert body["message"] == "SmartGrow backend error"
    assert "10.0.0.5" not in response.get_data(as_text=True)


def test_client_error_echoes_message():
    response = _app().test_client().get("/missing")

    assert response.status_code == 404
    assert response.get_json()["message"] == "Notification n1 not found"


def test_unexpected_error_is_generic_500():
    response = _app().test_client().get("/boom")

    assert response.status_code == 500
    assert response.get_json()["message"] == "An internal error occurred"


def test_success_envelope():
    response = _app().test_client().get("/fine")

    assert response.get_json() == {"ok": True, "data": {"value": 1}, "error": None}
