"""Tests for environment-driven configuration."""

import importlib

import pytest

import config
from src.services.product_store import ProductStore

_VARS = (
    "SUPABASE_URL", "VITE_SUPABASE_URL", "SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY",
    "SUPABASE_SERVICE_KEY", "STORE_HAS_ACTIVE_FLAG", "STORE_TIMEOUT", "LOW_STOCK_THRESHOLD",
)


@pytest.fixture
def load_config(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)

    def _load(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _load
    monkeypatch.undo()
    importlib.reload(config)


def test_unconfigured_without_connection_vars(load_config):
    cfg = load_config()
    assert cfg.is_configured() is False
    assert cfg.REQUIRED_ENV_VARS == ("SUPABASE_URL", "SUPABASE_ANON_KEY")


def test_vite_names_are_accepted(load_config):
    cfg = load_config(
        VITE_SUPABASE_URL="https://demo.supabase.co/",
        VITE_SUPABASE_ANON_KEY="anon",
    )
    assert cfg.SUPABASE_URL == "https://demo.supabase.co"
    assert cfg.SUPABASE_ANON_KEY == "anon"
    assert cfg.is_configured() is True


def test_plain_names_win_over_vite_names(load_config):
    cfg = load_config(SUPABASE_URL="https://a.supabase.co", VITE_SUPABASE_URL="https://b.supabase.co")
    assert cfg.SUPABASE_URL == "https://a.supabase.co"


@pytest.mark.parametrize("raw,expected", [
    ("true", True),
    ("FALSE", False),
    ("auto", None),
    ("", None),
])
def test_active_flag_capability(load_config, raw, expected):
    assert load_config(STORE_HAS_ACTIVE_FLAG=raw).STORE_HAS_ACTIVE_FLAG is expected


def test_numeric_settings(load_config):
    cfg = load_config(STORE_TIMEOUT="2.5", LOW_STOCK_THRESHOLD="oops")
    assert cfg.STORE_TIMEOUT == 2.5
    assert cfg.LOW_STOCK_THRESHOLD == 10


def test_timeout_defaults_to_none(load_config):
    assert load_config().STORE_TIMEOUT is None


def test_store_from_config_picks_key(monkeypatch):
    monkeypatch.setattr(config, "SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setattr(config, "SUPABASE_ANON_KEY", "anon")
    monkeypatch.setattr(config, "SUPABASE_SERVICE_KEY", "service")
    monkeypatch.setattr(config, "STORE_HAS_ACTIVE_FLAG", False)

    anon = ProductStore.from_config()
    service = ProductStore.from_config(use_service_key=True)

    assert anon.api_key == "anon"
    assert service.api_key == "service"
    assert anon.rest_url == "https://demo.supabase.co/rest/v1"
    assert anon.capabilities.has_active_flag is False
