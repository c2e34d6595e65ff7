"""Error handling helpers for the payment factory API."""
from typing import Any, Dict, Tuple
import logging

import httpx

from payment_factory.integrations.clients.real_http.circle import CircleAPIError
from payment_factory.integrations.policy.response_wrappers import IntegrationResponseError

logger = logging.getLogger(__name__)

GATEWAY_ERRORS = (CircleAPIError, IntegrationResponseError, httpx.HTTPError)


class ErrorHandler:
    def gateway_error(self, exc: Exception, context: Dict[str, Any] = None) -> Tuple[int, Dict[str, Any]]:
        """Map a payments gateway failure to a 502 status and response body."""
        context = context or {}
        if isinstance(exc, CircleAPIError):
            logger.warning("Circle API error %s on %s: %s", exc.status, context.get("path"), exc)
            detail = {"message": str(exc), "status": exc.status, "code": exc.code}
        elif isinstance(exc, IntegrationResponseError):
            logger.warning("Gateway response rejected on %s: %s", context.get("path"), exc)
            detail = {"message": str(exc), "stage": "gateway_response", "payload": exc.payload}
        else:
            logger.warning("Payments gateway unreachable on %s: %s", context.get("path"), exc)
            detail = {"message": "Payments gateway unreachable", "error": str(exc)}
        return 502, {"detail": detail}

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception in payment factory: %s", exc, exc_info=True)
        return {
            "message": "An internal error occurred while processing the payment request. Please try again later.",
            "fallback": True,
            "metadata": {"error": str(exc), "error_type": type(exc).__name__, "context": context or {}},
        }
