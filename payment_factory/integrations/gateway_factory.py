"""
Gateway selection.

The mock/live decision is made once, at startup, and the chosen
PaymentsGateway is injected wherever it is needed.
"""

from __future__ import annotations

import logging
import os
from datetime import timedelta
from typing import Optional

from payment_factory.integrations.clients.mocks.gateway import MockGateway
from payment_factory.integrations.clients.real_http.circle import LiveGateway
from payment_factory.integrations.contracts.interfaces import GatewayMode, PaymentsGateway
from payment_factory.utils.config_loader import FactoryConfig

logger = logging.getLogger(__name__)

MODE_ENV = "PAYMENT_FACTORY_MODE"


def resolve_mode(configured: str) -> GatewayMode:
    override = os.getenv(MODE_ENV, "").strip().lower()
    if override in {"live", "real"}:
        return GatewayMode.LIVE
    if override in {"mock", "test"}:
        return GatewayMode.MOCK
    if override:
        logger.warning("Ignoring unknown %s=%r", MODE_ENV, override)
    return GatewayMode(configured)


def build_gateway(cfg: FactoryConfig, api_key: Optional[str] = None) -> PaymentsGateway:
    gateway_cfg = cfg.gateway
    mode = resolve_mode(gateway_cfg.mode)
    quote_ttl = timedelta(seconds=cfg.quotes.ttl_seconds)

    if mode is GatewayMode.LIVE:
        key = api_key or os.getenv(gateway_cfg.api_key_env, "")
        if key:
            logger.info("Using live Circle gateway at %s", gateway_cfg.effective_base_url)
            return LiveGateway(
                api_key=key,
                base_url=gateway_cfg.effective_base_url,
                timeout_seconds=gateway_cfg.timeout_seconds,
            )
        logger.warning("Live mode requested but %s is not set; falling back to mock gateway", gateway_cfg.api_key_env)

    return MockGateway(quote_ttl=quote_ttl)
