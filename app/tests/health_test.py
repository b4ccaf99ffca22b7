import logging

from app.core.logging_config import NOISY_LOGGERS, configure_logging
from app.core.config import Settings
from app.services.storage import ObjectStorage


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ready(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"ready": True, "details": {"db": "ok"}}


def make_settings(**overrides):
    values = dict(
        DATABASE_URL="sqlite://",
        PUBLIC_BASE_URL="https://sho.rt/",
        STORAGE_ACCESS_KEY_ID="key",
        STORAGE_SECRET_ACCESS_KEY="secret",
        STORAGE_BUCKET="exports",
    )
    values.update(overrides)
    return Settings(**values)


def test_settings_derive_r2_endpoint():
    settings = make_settings(STORAGE_ACCOUNT_ID="acct")
    assert settings.base_url == "https://sho.rt"
    assert settings.base_host == "sho.rt"
    assert settings.storage_endpoint == "https://acct.r2.cloudflarestorage.com"


def test_explicit_endpoint_wins():
    settings = make_settings(STORAGE_ACCOUNT_ID="acct", STORAGE_ENDPOINT_URL="http://localhost:9000")
    assert settings.storage_endpoint == "http://localhost:9000"


def test_storage_from_settings():
    storage = ObjectStorage.from_settings(make_settings(STORAGE_ENDPOINT_URL="http://localhost:9000"))
    assert storage.bucket == "exports"
    assert storage.client.meta.endpoint_url == "http://localhost:9000"


def test_configure_logging_quiets_client_libraries():
    logger = configure_logging("DEBUG", logger_name="link_registry.test")
    assert logger.name == "link_registry.test"
    assert logging.getLogger().level == logging.DEBUG
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
    assert logging.getLogger("uvicorn.access").disabled
    configure_logging("INFO")
