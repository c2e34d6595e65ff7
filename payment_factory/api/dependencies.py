import os
import hmac
import logging

from fastapi import Header, HTTPException, status, Request

from payment_factory.compliance.travel_rule import TravelRuleEncryptor
from payment_factory.integrations.contracts.interfaces import PaymentsGateway
from payment_factory.routing.classifier import RouteClassifier
from payment_factory.utils.config_loader import FactoryConfig

logger = logging.getLogger(__name__)

_ALLOWLIST_PATHS = {
    "/",
    "/health",
    "/docs",
    "/docs/oauth2-redirect",
    "/openapi.json",
    "/redoc",
}


def get_api_keys():
    keys = os.getenv("API_KEYS", "")
    return [k.strip() for k in keys.split(",") if k.strip()]


async def api_key_protection(
    request: Request = None,  # keep Request type so FastAPI injects it; default None for direct calls/tests
    x_api_key: str = Header(default=None, alias="X-API-KEY"),
):
    valid_keys = get_api_keys()
    if not valid_keys:
        # No keys configured: the demo runs open.
        return

    if request is not None and request.url.path in _ALLOWLIST_PATHS:
        return

    candidate = (x_api_key or "").strip()
    ok = bool(candidate) and any(hmac.compare_digest(candidate, k) for k in valid_keys)
    if not ok:
        path = request.url.path if request is not None else "<no-request>"
        logger.info("API key check failed: path=%s header_present=%s", path, bool(x_api_key))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API Key",
        )


# Components are built once at startup (api/main.py) and kept on app.state.

def get_gateway(request: Request) -> PaymentsGateway:
    return request.app.state.gateway


def get_classifier(request: Request) -> RouteClassifier:
    return request.app.state.classifier


def get_encryptor(request: Request) -> TravelRuleEncryptor:
    return request.app.state.encryptor


def get_config(request: Request) -> FactoryConfig:
    return request.app.state.config
