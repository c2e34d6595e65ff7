import logging

import pytest

from payment_factory.integrations import GatewayMode, LiveGateway, MockGateway, build_gateway
from payment_factory.integrations.gateway_factory import MODE_ENV, resolve_mode
from payment_factory.utils.config_loader import FactoryConfig, GatewayConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv(MODE_ENV, raising=False)
    monkeypatch.delenv("CIRCLE_API_KEY", raising=False)


def _config(**gateway) -> FactoryConfig:
    return FactoryConfig(gateway=GatewayConfig(**gateway))


def test_default_config_builds_mock_gateway():
    assert isinstance(build_gateway(FactoryConfig()), MockGateway)


def test_live_mode_with_key_builds_live_gateway(monkeypatch):
    monkeypatch.setenv("CIRCLE_API_KEY", "sk-test")

    gateway = build_gateway(_config(mode="live", timeout_seconds=5))

    assert isinstance(gateway, LiveGateway)
    assert gateway.base_url == "https://api.circle.com"
    assert gateway.timeout_seconds == 5


def test_sandbox_base_url_and_explicit_key():
    gateway = build_gateway(_config(mode="live", use_sandbox=True), api_key="sk-explicit")

    assert isinstance(gateway, LiveGateway)
    assert gateway.base_url == "https://api-sandbox.circle.com"


def test_live_mode_without_key_falls_back_to_mock(caplog):
    with caplog.at_level(logging.WARNING):
        gateway = build_gateway(_config(mode="live"))

    assert isinstance(gateway, MockGateway)
    assert "CIRCLE_API_KEY is not set" in caplog.text


def test_api_key_env_name_is_configurable(monkeypatch):
    monkeypatch.setenv("SANDBOX_KEY", "sk-sandbox")

    assert isinstance(build_gateway(_config(mode="live", api_key_env="SANDBOX_KEY")), LiveGateway)


def test_environment_overrides_configured_mode(monkeypatch):
    monkeypatch.setenv("CIRCLE_API_KEY", "sk-test")

    monkeypatch.setenv(MODE_ENV, "mock")
    assert isinstance(build_gateway(_config(mode="live")), MockGateway)

    monkeypatch.setenv(MODE_ENV, "LIVE")
    assert isinstance(build_gateway(_config(mode="mock")), LiveGateway)


def test_unknown_override_is_ignored(monkeypatch, caplog):
    monkeypatch.setenv(MODE_ENV, "staging")

    with caplog.at_level(logging.WARNING):
        assert resolve_mode("mock") is GatewayMode.MOCK

    assert "staging" in caplog.text
