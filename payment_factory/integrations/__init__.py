"""
Integrations layer.
This package contains all code used to communicate with the Circle payments API:
- wallet balances, fee estimates and on-chain transfers
- CPN corridor quotes and payments

Key rule:
- API endpoints MUST NOT call the Circle API directly.
- They call the PaymentsGateway chosen at startup (integrations/gateway_factory.py).
- MockGateway serves seed data; LiveGateway talks to Circle over HTTP.
"""

from .contracts import (
    CorridorQuote,
    CpnPayment,
    CpnPaymentRequest,
    FeeEstimate,
    FeeEstimateRequest,
    GatewayMode,
    PaymentsGateway,
    PaymentStatus,
    QuoteRequest,
    Transfer,
    TransferRequest,
    WalletBalances,
)
from .clients.mocks import MockGateway
from .clients.real_http import CircleAPIError, LiveGateway
from .gateway_factory import build_gateway
from .policy.response_wrappers import IntegrationResponseError

__all__ = [
    # contracts
    "CorridorQuote", "CpnPayment", "CpnPaymentRequest", "FeeEstimate",
    "FeeEstimateRequest", "GatewayMode", "PaymentsGateway", "PaymentStatus",
    "QuoteRequest", "Transfer", "TransferRequest", "WalletBalances",
    # gateways
    "MockGateway", "LiveGateway", "CircleAPIError", "build_gateway",
    "IntegrationResponseError",
]
