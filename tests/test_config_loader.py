import pytest
from pydantic import ValidationError

from payment_factory.routing import Route
from payment_factory.utils.config_loader import CONFIG_PATH_ENV, default_config_path, load_factory_config


def test_repository_config_loads():
    cfg = load_factory_config()

    assert cfg.gateway.mode == "mock"
    assert cfg.gateway.wallet_id == "wallet-corp-001"
    assert cfg.quotes.ttl_seconds == 30
    assert [rule.name for rule in cfg.routing.address_rules] == ["evm", "solana"]
    assert "MX" in cfg.routing.corridors["US"]
    assert cfg.travel_rule.originator.name == "Acme Corporation"


def test_routing_tables_come_from_yaml(tmp_path):
    config_file = tmp_path / "factory.yml"
    config_file.write_text(
        """
routing:
  source_country: gb
  corridors:
    GB: [NG, IN]
  address_rules:
    - name: evm
      chain: evm
      pattern: "0x[a-fA-F0-9]{40}"
""",
        encoding="utf-8",
    )

    cfg = load_factory_config(config_file)
    classifier = cfg.routing.build_classifier()

    assert cfg.routing.source_country == "GB"
    assert cfg.gateway.mode == "mock"
    assert classifier.classify("ACC-1", "NG", "GBP").route is Route.CPN
    assert classifier.classify("ACC-1", "MX", "GBP").route is Route.TRADITIONAL
    # Solana is not configured, so a Base58 account is just an account.
    assert classifier.classify("7EcDhSYGxXyscszYEp35KHN8vvw3svAuLKTzXwCFLtV", None, "USDC").route is Route.TRADITIONAL

    decision = classifier.classify("0x742d35Cc6634C0532925a3b844Bc454e4438f44e", None, "USDC")
    assert decision.chain == "EVM"
    assert decision.reason == "Creditor account matches evm address pattern"


def test_empty_file_uses_defaults(tmp_path):
    config_file = tmp_path / "empty.yml"
    config_file.write_text("", encoding="utf-8")

    cfg = load_factory_config(config_file)

    assert cfg.gateway.effective_base_url == "https://api.circle.com"
    assert cfg.routing.build_classifier().classify("ACC-1", "PH", "USD").route is Route.CPN


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_factory_config(tmp_path / "nope.yml")


def test_invalid_values_raise(tmp_path):
    config_file = tmp_path / "bad.yml"
    config_file.write_text("gateway:\n  mode: turbo\n  timeout_seconds: 0\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_factory_config(config_file)


def test_config_path_env_override(monkeypatch, tmp_path):
    target = tmp_path / "other.yml"
    monkeypatch.setenv(CONFIG_PATH_ENV, str(target))

    assert default_config_path() == target
