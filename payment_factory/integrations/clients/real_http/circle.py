"""
Circle payments API: LIVE gateway.

Used when the gateway mode is "live" and an API key is configured.
Every call is a single request: no retry, no rate limiting, no token refresh.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from decimal import Decimal
from typing import Any, Dict, List, Optional

import httpx

from payment_factory.integrations.contracts.interfaces import (
    CorridorQuote,
    CpnPayment,
    CpnPaymentRequest,
    FeeEstimate,
    FeeEstimateRequest,
    GatewayMode,
    PaymentsGateway,
    QuoteRequest,
    Transfer,
    TransferRequest,
    WalletBalances,
)
from payment_factory.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    normalize_cpn_payment,
    normalize_fee_estimate,
    normalize_quotes,
    normalize_transfer,
    normalize_wallet_balances,
)

logger = logging.getLogger(__name__)


class CircleAPIError(Exception):
    """Non-2xx response from the Circle API."""

    def __init__(self, status: int, data: Optional[Dict[str, Any]] = None) -> None:
        self.status = status
        self.data = data or {}
        self.code = self.data.get("code")
        super().__init__(self.data.get("message") or "Circle API Error")


class LiveGateway(PaymentsGateway):
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.circle.com",
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise ValueError("LiveGateway requires an API key.")
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._api_key = api_key
        self._transport = transport

    @property
    def mode(self) -> GatewayMode:
        return GatewayMode.LIVE

    async def request(self, method: str, endpoint: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """Send one request and return the unwrapped ``data`` envelope."""
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}{endpoint}"
        body = json.dumps(payload, default=_json_default) if payload is not None else None

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.request(method, url, content=body, headers=headers)
                if response.is_error:
                    raise CircleAPIError(response.status_code, _error_body(response))
                data = _json_body(response)
        except (CircleAPIError, IntegrationResponseError, httpx.HTTPError) as exc:
            logger.error("[CIRCLE API] %s %s failed: %s", method, endpoint, exc)
            raise

        if isinstance(data, dict) and "data" in data:
            return data["data"]
        return data

    # ------------------------------------------------------------------
    # Wallets
    # ------------------------------------------------------------------

    async def get_balances(self, wallet_id: str) -> WalletBalances:
        data = await self.request("GET", f"/v1/wallets/{wallet_id}/balances")
        return normalize_wallet_balances(data or {}, fallback_wallet_id=wallet_id)

    async def estimate_fee(self, request: FeeEstimateRequest) -> FeeEstimate:
        data = await self.request("POST", "/v1/transfers/estimateFee", _camel_payload(asdict(request)))
        return normalize_fee_estimate(data or {}, fallback_chain=request.blockchain)

    async def create_transfer(self, request: TransferRequest) -> Transfer:
        data = await self.request("POST", "/v1/transfers", _camel_payload(asdict(request)))
        return normalize_transfer(data or {}, request=request)

    # ------------------------------------------------------------------
    # CPN
    # ------------------------------------------------------------------

    async def create_quote(self, request: QuoteRequest) -> List[CorridorQuote]:
        payload = {
            "senderCountry": request.sender_country,
            "destinationCountry": request.destination_country,
            "sourceAmount": {"amount": str(request.source_amount), "currency": request.source_currency},
        }
        if request.destination_currency:
            payload["destinationCurrency"] = request.destination_currency
        data = await self.request("POST", "/v1/cpn/quotes", payload)
        return normalize_quotes(data or [], request=request)

    async def create_payment(self, request: CpnPaymentRequest) -> CpnPayment:
        payload: Dict[str, Any] = {
            "quoteId": request.quote_id,
            "sourceAmount": {"amount": str(request.source_amount), "currency": request.source_currency},
            "beneficiary": request.beneficiary,
            "metadata": request.metadata,
        }
        if request.destination_amount is not None:
            payload["destinationAmount"] = {
                "amount": str(request.destination_amount),
                "currency": request.destination_currency,
            }
        if request.travel_rule:
            payload["travelRule"] = request.travel_rule
        data = await self.request("POST", "/v1/cpn/payments", payload)
        return normalize_cpn_payment(data or {}, fallback_quote_id=request.quote_id)

    async def get_payment(self, payment_id: str) -> CpnPayment:
        data = await self.request("GET", f"/v1/cpn/payments/{payment_id}")
        return normalize_cpn_payment(data or {})


def _json_body(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError as exc:
        raise IntegrationResponseError(
            "Circle API returned a non-JSON body.",
            payload={"status": response.status_code, "text": response.text[:200]},
        ) from exc


def _error_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {"message": response.text or response.reason_phrase}
    return body if isinstance(body, dict) else {"message": str(body)}


def _camel_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        head, *rest = key.split("_")
        out[head + "".join(part.capitalize() for part in rest)] = value
    return out


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
