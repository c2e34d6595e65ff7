"""
Configuration loader for the payment factory (gateway, routing tables, quotes, travel rule).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from payment_factory.routing.classifier import RouteClassifier
from payment_factory.routing.rules import (
    DEFAULT_ADDRESS_RULES,
    DEFAULT_CORRIDORS,
    DEFAULT_SOURCE_COUNTRY,
    AddressRule,
)

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "PAYMENT_FACTORY_CONFIG"


class GatewayConfig(BaseModel):
    """Payments API gateway configuration"""

    mode: Literal["mock", "live"] = "mock"
    base_url: str = "https://api.circle.com"
    sandbox_url: str = "https://api-sandbox.circle.com"
    use_sandbox: bool = False
    api_key_env: str = "CIRCLE_API_KEY"
    timeout_seconds: float = Field(default=20.0, gt=0.0, le=300.0)
    wallet_id: str = "wallet-corp-001"

    @property
    def effective_base_url(self) -> str:
        return (self.sandbox_url if self.use_sandbox else self.base_url).rstrip("/")


class AddressRuleConfig(BaseModel):
    name: str
    chain: str
    pattern: str
    label: Optional[str] = None


class RoutingConfig(BaseModel):
    """Route classifier reference tables"""

    source_country: str = Field(default=DEFAULT_SOURCE_COUNTRY, min_length=2, max_length=2)
    corridors: Dict[str, List[str]] = Field(
        default_factory=lambda: {source: sorted(dests) for source, dests in DEFAULT_CORRIDORS.items()}
    )
    address_rules: List[AddressRuleConfig] = Field(
        default_factory=lambda: [
            AddressRuleConfig(name=r.name, chain=r.chain, pattern=r.pattern.pattern, label=r.label)
            for r in DEFAULT_ADDRESS_RULES
        ]
    )

    @field_validator("source_country")
    @classmethod
    def _upper_source(cls, value: str) -> str:
        return value.strip().upper()

    def build_rules(self) -> Tuple[AddressRule, ...]:
        return tuple(
            AddressRule.from_pattern(rule.name, rule.chain, rule.pattern, rule.label)
            for rule in self.address_rules
        )

    def build_classifier(self) -> RouteClassifier:
        return RouteClassifier(
            rules=self.build_rules(),
            corridors=self.corridors,
            default_source_country=self.source_country,
        )


class QuoteConfig(BaseModel):
    ttl_seconds: int = Field(default=30, ge=1, le=3600)


class OriginatorConfig(BaseModel):
    """Corporate originator sent with every travel rule payload"""

    name: str = "Acme Corporation"
    address: str = "123 Financial District, New York, NY 10004, USA"
    country: str = "US"
    tax_id: str = "12-3456789"
    lei: str = "549300EXAMPLE0001"
    wallet_address: str = "0x8ba1f109551bD432803012645Ac136ddd64DBA72"


class TravelRuleConfig(BaseModel):
    algorithm: str = "RSA-OAEP-256"
    encryption: str = "A256GCM"
    key_id: str = "circle-pub-key-001"
    originator: OriginatorConfig = Field(default_factory=OriginatorConfig)


class FactoryConfig(BaseModel):
    """Complete payment factory configuration"""

    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    quotes: QuoteConfig = Field(default_factory=QuoteConfig)
    travel_rule: TravelRuleConfig = Field(default_factory=TravelRuleConfig)


def default_config_path() -> Path:
    override = os.getenv(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return Path(__file__).parent.parent.parent / "config" / "factory_config.yml"


def load_factory_config(config_path: Optional[Path] = None) -> FactoryConfig:
    """
    Load and validate the factory configuration from a YAML file

    Args:
        config_path: Path to config file. Defaults to $PAYMENT_FACTORY_CONFIG,
            then config/factory_config.yml

    Returns:
        Validated FactoryConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = default_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = FactoryConfig(**data)
        logger.info("Successfully loaded factory config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Factory config validation failed: %s", e)
        raise
