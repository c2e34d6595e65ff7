"""
Contracts (data models) shared by the mock and live payments gateways.

Both gateway implementations return these types, so the API layer and the
demo never branch on which one is wired in.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class GatewayMode(str, Enum):
    MOCK = "mock"
    LIVE = "live"


# ---------------------------------------------------------------------------
# Wallets
# ---------------------------------------------------------------------------

@dataclass
class ChainBalance:
    chain: str                           # ETH / MATIC / ARB / BASE / SOL
    chain_name: str
    balance: Decimal
    percentage: float
    avg_gas: Decimal
    last_activity: Optional[str] = None  # ISO timestamp
    color: Optional[str] = None


@dataclass
class WalletBalances:
    wallet_id: str
    total_usdc: Decimal
    chains: List[ChainBalance] = field(default_factory=list)


@dataclass
class FeeEstimateRequest:
    blockchain: str = "ETH"
    amount: Optional[Decimal] = None
    destination_address: Optional[str] = None


@dataclass
class FeeEstimate:
    chain: str
    gas: Decimal
    time: str
    congestion: str


@dataclass
class TransferRequest:
    wallet_id: str
    destination_address: str
    amount: Decimal
    currency: str = "USDC"
    blockchain: str = "ETH"
    idempotency_key: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Transfer:
    id: str
    status: PaymentStatus
    create_date: datetime
    wallet_id: str
    destination_address: str
    amount: Decimal
    currency: str
    blockchain: str
    metadata: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# CPN corridor quotes and payments
# ---------------------------------------------------------------------------

@dataclass
class QuoteRequest:
    sender_country: str
    destination_country: str
    source_amount: Decimal
    source_currency: str = "USD"
    destination_currency: Optional[str] = None

    @property
    def corridor(self) -> str:
        return f"{self.sender_country.strip().upper()}-{self.destination_country.strip().upper()}"


@dataclass
class CorridorQuote:
    quote_id: str
    bfi_name: str
    rate: Decimal
    inverse_rate: Decimal
    fee: Decimal
    total_received: Decimal
    settlement_minutes: int
    expires_at: Optional[datetime]
    payment_method: str
    bfi_logo: Optional[str] = None
    historical_comparison: Dict[str, float] = field(default_factory=dict)


@dataclass
class PaymentEvent:
    timestamp: str
    type: str
    description: str
    status: str


@dataclass
class CpnPaymentRequest:
    quote_id: str
    source_amount: Decimal
    source_currency: str = "USD"
    destination_amount: Optional[Decimal] = None
    destination_currency: Optional[str] = None
    beneficiary: Dict[str, Any] = field(default_factory=dict)
    travel_rule: Optional[Dict[str, Any]] = None   # EncryptedTravelRule.to_dict()
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CpnPayment:
    id: str
    status: PaymentStatus
    quote_id: Optional[str] = None
    source_amount: Optional[Decimal] = None
    destination_amount: Optional[Decimal] = None
    create_date: Optional[datetime] = None
    events: List[PaymentEvent] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Abstract gateway interface
# ---------------------------------------------------------------------------

class PaymentsGateway(ABC):
    """Every payments gateway (mock or live) must implement this interface."""

    @property
    @abstractmethod
    def mode(self) -> GatewayMode:
        """Return which implementation this is."""

    @property
    def is_live(self) -> bool:
        return self.mode is GatewayMode.LIVE

    # -- Wallets --

    @abstractmethod
    async def get_balances(self, wallet_id: str) -> WalletBalances:
        """Return the per-chain USDC balances for a wallet."""

    @abstractmethod
    async def estimate_fee(self, request: FeeEstimateRequest) -> FeeEstimate:
        """Estimate the network fee for an on-chain transfer."""

    @abstractmethod
    async def create_transfer(self, request: TransferRequest) -> Transfer:
        """Create an on-chain transfer from a wallet."""

    # -- CPN --

    @abstractmethod
    async def create_quote(self, request: QuoteRequest) -> List[CorridorQuote]:
        """Return every provider quote for the request's corridor."""

    @abstractmethod
    async def create_payment(self, request: CpnPaymentRequest) -> CpnPayment:
        """Submit a corridor payment against an accepted quote."""

    @abstractmethod
    async def get_payment(self, payment_id: str) -> CpnPayment:
        """Fetch a corridor payment with its lifecycle events."""
