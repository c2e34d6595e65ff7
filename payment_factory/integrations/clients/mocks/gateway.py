"""
Circle payments API: MOCK gateway.

Returns the seed data in reference_data.py shaped through the same
normalisers the live gateway uses, so callers see identical contract types
in both modes. No network calls are made.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Set

from payment_factory.integrations.contracts.interfaces import (
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
from payment_factory.integrations.contracts.quotes import DEFAULT_QUOTE_TTL, is_quote_expired, quote_expiry
from payment_factory.integrations.policy.response_wrappers import (
    normalize_fee_estimate,
    normalize_quotes,
    normalize_wallet_balances,
)

from . import reference_data

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MockGateway(PaymentsGateway):
    """
    Mock Circle gateway.

    Parameters
    ----------
    clock : callable
        Returns the current time; used for ids, creation dates and quote expiry.
    quote_ttl : timedelta
        How long a quote stays valid. Default 30 seconds.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        quote_ttl: timedelta = DEFAULT_QUOTE_TTL,
    ):
        self._clock = clock or _utcnow
        self._quote_ttl = quote_ttl

        # In-memory stores (reset on restart)
        self._payments: Dict[str, CpnPayment] = {}
        self._quotes: Dict[str, CorridorQuote] = {}
        self._issued_ids: Set[str] = set()

        logger.info("[CIRCLE MOCK] Gateway initialised (quote_ttl=%ss)", int(quote_ttl.total_seconds()))

    @property
    def mode(self) -> GatewayMode:
        return GatewayMode.MOCK

    def _new_id(self, prefix: str, now: datetime) -> str:
        """`{prefix}-{epoch_ms}`, suffixed with a counter when the millisecond is already taken."""
        base = f"{prefix}-{int(now.timestamp() * 1000)}"
        candidate, n = base, 1
        while candidate in self._issued_ids:
            n += 1
            candidate = f"{base}-{n}"
        self._issued_ids.add(candidate)
        return candidate

    # ------------------------------------------------------------------
    # Wallets
    # ------------------------------------------------------------------

    async def get_balances(self, wallet_id: str) -> WalletBalances:
        logger.info("[CIRCLE MOCK] Returning seed balances for wallet=%s", wallet_id)
        return normalize_wallet_balances(reference_data.BALANCES, fallback_wallet_id=wallet_id)

    async def estimate_fee(self, request: FeeEstimateRequest) -> FeeEstimate:
        chain = (request.blockchain or "ETH").strip().upper()
        estimate = reference_data.FEE_ESTIMATES.get(chain)
        if estimate is None:
            raise ValueError(f"[CIRCLE MOCK] No fee estimate for chain '{chain}'.")
        return normalize_fee_estimate({"chain": chain, **estimate}, fallback_chain=chain)

    async def create_transfer(self, request: TransferRequest) -> Transfer:
        now = self._clock()
        transfer = Transfer(
            id=self._new_id("transfer", now),
            status=PaymentStatus.PENDING,
            create_date=now,
            wallet_id=request.wallet_id,
            destination_address=request.destination_address,
            amount=request.amount,
            currency=request.currency,
            blockchain=request.blockchain,
            metadata=dict(request.metadata),
        )
        logger.info("[CIRCLE MOCK] Transfer %s created amount=%s %s on %s",
                    transfer.id, request.amount, request.currency, request.blockchain)
        return transfer

    # ------------------------------------------------------------------
    # CPN
    # ------------------------------------------------------------------

    async def create_quote(self, request: QuoteRequest) -> List[CorridorQuote]:
        seeds = reference_data.QUOTES.get(request.corridor, [])
        if not seeds:
            logger.info("[CIRCLE MOCK] No quotes for corridor %s", request.corridor)
            return []

        expires_at = quote_expiry(self._clock(), self._quote_ttl)
        quotes = normalize_quotes(
            [{**seed, "expiresAt": expires_at} for seed in seeds],
            request=request,
        )
        for quote in quotes:
            self._quotes[quote.quote_id] = quote
        logger.info("[CIRCLE MOCK] %d quotes for corridor %s amount=%s",
                    len(quotes), request.corridor, request.source_amount)
        return quotes

    async def create_payment(self, request: CpnPaymentRequest) -> CpnPayment:
        now = self._clock()
        quote = self._quotes.get(request.quote_id)
        if quote is not None and is_quote_expired(quote, now):
            raise ValueError(f"[CIRCLE MOCK] Quote '{request.quote_id}' has expired.")
        payment = CpnPayment(
            id=self._new_id("cpn-payment", now),
            status=PaymentStatus.PENDING,
            quote_id=request.quote_id,
            source_amount=request.source_amount,
            destination_amount=request.destination_amount,
            create_date=now,
        )
        self._payments[payment.id] = payment
        logger.info("[CIRCLE MOCK] CPN payment %s created for quote %s", payment.id, request.quote_id)
        return payment

    async def get_payment(self, payment_id: str) -> CpnPayment:
        known = self._payments.get(payment_id)
        return CpnPayment(
            id=payment_id,
            status=PaymentStatus.COMPLETED,
            quote_id=known.quote_id if known else None,
            source_amount=known.source_amount if known else None,
            destination_amount=known.destination_amount if known else None,
            create_date=known.create_date if known else None,
            events=[PaymentEvent(**event) for event in reference_data.PAYMENT_EVENTS],
        )
