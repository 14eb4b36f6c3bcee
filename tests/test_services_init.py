"""Tests for service wiring and configuration."""

import pytest
from pydantic import ValidationError

from orderdesk.auth import SessionManager
from orderdesk.config import AppConfig
from orderdesk.services import create_services
from orderdesk.services.auth_service import AuthService
from orderdesk.services.order_search import OrderSearchService


def test_create_services_wires_everything(db, config, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    session = SessionManager()
    services = create_services(db, config, session)

    assert set(services) == {
        "api_service",
        "app_settings_service",
        "session_store_service",
        "activity_service",
        "auth_service",
        "order_search_service",
    }
    assert isinstance(services["auth_service"], AuthService)
    assert isinstance(services["order_search_service"], OrderSearchService)
    assert services["session_store_service"].storage_key == config.SESSION_STORAGE_KEY


def test_wired_services_share_the_session(db, config, tmp_path, monkeypatch):
    """Logging in through the container authenticates the shared session."""
    monkeypatch.chdir(tmp_path)
    session = SessionManager()
    services = create_services(db, config, session)

    result = services["auth_service"].login("jane.smith@example.com", "secret")

    assert result.success is True
    assert session.get_current_user().full_name == "Jane Smith"
    assert services["session_store_service"].load() == result.user
    assert services["order_search_service"].load_orders().data == 28


def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "25")
    monkeypatch.setenv("SESSION_STORAGE_KEY", "custom_key")
    config = AppConfig()
    assert config.DEFAULT_PAGE_SIZE == 25
    assert config.SESSION_STORAGE_KEY == "custom_key"


def test_config_rejects_negative_delay():
    with pytest.raises(ValidationError):
        AppConfig(API_DELAY_S=-1)
