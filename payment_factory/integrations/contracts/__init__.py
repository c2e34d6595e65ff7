"""
Contracts (data models).

This folder defines the request/response shapes for the payments API, e.g.:
- wallet balances, fee estimates and on-chain transfers
- CPN corridor quotes and payments

Both the mock and the live gateway return these types.
"""

from .interfaces import (
    ChainBalance,
    CorridorQuote,
    CpnPayment,
    CpnPaymentRequest,
    FeeEstimate,
    FeeEstimateRequest,
    GatewayMode,
    PaymentEvent,
    PaymentsGateway,
    PaymentStatus,
    QuoteRequest,
    Transfer,
    TransferRequest,
    WalletBalances,
)
from .quotes import (
    compute_total_received,
    is_quote_expired,
    quote_expiry,
    validate_quote_request,
)

__all__ = [
    "ChainBalance", "CorridorQuote", "CpnPayment", "CpnPaymentRequest",
    "FeeEstimate", "FeeEstimateRequest", "GatewayMode", "PaymentEvent",
    "PaymentsGateway", "PaymentStatus", "QuoteRequest", "Transfer",
    "TransferRequest", "WalletBalances",
    "compute_total_received", "is_quote_expired",
    "quote_expiry", "validate_quote_request",
]
