import pytest
from unittest.mock import Mock

from core import config as core_config


@pytest.fixture(scope="session", autouse=True)
def test_settings():
    core_config.settings.JWT_SECRET = "test-secret"
    core_config.settings.ADMIN_USERNAME = "admin"
    core_config.settings.ADMIN_PASSWORD = "admin123"
    core_config.settings.MIDTRANS_IS_PRODUCTION = False
    yield


@pytest.fixture
def gateway_keys(monkeypatch):
    monkeypatch.setattr(core_config.settings, "MIDTRANS_SERVER_KEY", "SB-Mid-server-TESTKEY0000000000")
    monkeypatch.setattr(core_config.settings, "MIDTRANS_CLIENT_KEY", "SB-Mid-client-TESTKEY0000000000")


@pytest.fixture
def no_gateway_keys(monkeypatch):
    monkeypatch.setattr(core_config.settings, "MIDTRANS_SERVER_KEY", "")
    monkeypatch.setattr(core_config.settings, "MIDTRANS_CLIENT_KEY", "")


@pytest.fixture
def make_response():
    """Factory for fake requests responses."""
    return _make_response


def _make_response(status_code=200, json_body=None, text=None):
    resp = Mock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    if json_body is None:
        resp.json.side_effect = ValueError("No JSON")
        resp.text = text or ""
    else:
        resp.json.return_value = json_body
        resp.text = text if text is not None else str(json_body)
    return resp
