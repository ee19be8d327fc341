import pytest

from smartgrow.config import DEFAULT_API_BASE_URL, AppConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "SMARTGROW_ENV",
        "SMARTGROW_SECRET_KEY",
        "SMARTGROW_API_BASE_URL",
        "SMARTGROW_ZONE_WORKERS",
        "SMARTGROW_REFRESH_INTERVAL",
        "SMARTGROW_HTTP_TIMEOUT",
        "SMARTGROW_SCHEDULER_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = AppConfig()
    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.http_timeout_seconds == 30
    assert config.refresh_interval_seconds == 600
    assert config.zone_workers == 1
    assert config.scheduler_enabled is True
    assert config.feed_max_size == 100


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SMARTGROW_ZONE_WORKERS", "4")
    monkeypatch.setenv("SMARTGROW_SCHEDULER_ENABLED", "off")
    monkeypatch.setenv("SMARTGROW_API_BASE_URL", "http://localhost:3000/api/v1")

    config = AppConfig()

    assert config.zone_workers == 4
    assert config.scheduler_enabled is False
    assert config.as_flask_config()["SMARTGROW_API_BASE_URL"] == "http://localhost:3000/api/v1"


def test_non_integer_env_is_rejected(monkeypatch):
    monkeypatch.setenv("SMARTGROW_HTTP_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="SMARTGROW_HTTP_TIMEOUT"):
        AppConfig()


@pytest.mark.parametrize(
    "overrides",
    [{"zone_workers": 0}, {"zone_workers": 5}, {"http_timeout_seconds": 0}, {"refresh_interval_seconds": 5}],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValueError):
        AppConfig(**overrides)


def test_default_secret_forbidden_in_production():
    with pytest.raises(RuntimeError, match="SECURITY ERROR"):
        AppConfig(environment="production")
    assert AppConfig(environment="production", secret_key="s3cr3t").environment == "production"
