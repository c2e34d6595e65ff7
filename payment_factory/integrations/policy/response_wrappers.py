from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from payment_factory.integrations.contracts.interfaces import (
    ChainBalance,
    CorridorQuote,
    CpnPayment,
    FeeEstimate,
    PaymentEvent,
    PaymentStatus,
    QuoteRequest,
    Transfer,
    TransferRequest,
    WalletBalances,
)
from payment_factory.integrations.contracts.quotes import compute_total_received


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class ChainBalanceModel(BaseModel):
    chain: str
    chain_name: str
    balance: Decimal
    percentage: float = 0.0
    avg_gas: Decimal = Decimal("0")
    last_activity: Optional[str] = None
    color: Optional[str] = None


class FeeEstimateModel(BaseModel):
    chain: str
    gas: Decimal
    time: str = "unknown"
    congestion: str = "unknown"


class TransferModel(BaseModel):
    id: str
    status: PaymentStatus
    create_date: datetime
    amount: Decimal
    currency: str
    raw: Dict[str, Any] = Field(default_factory=dict)


class CorridorQuoteModel(BaseModel):
    quote_id: str
    bfi_name: str
    rate: Decimal
    inverse_rate: Decimal
    fee: Decimal
    total_received: Decimal
    settlement_minutes: int = 0
    expires_at: Optional[datetime] = None
    payment_method: str = "UNKNOWN"
    bfi_logo: Optional[str] = None
    historical_comparison: Dict[str, float] = Field(default_factory=dict)


class PaymentEventModel(BaseModel):
    timestamp: str
    type: str
    description: str = ""
    status: str = "completed"


class CpnPaymentModel(BaseModel):
    id: str
    status: PaymentStatus
    quote_id: Optional[str] = None
    source_amount: Optional[Decimal] = None
    destination_amount: Optional[Decimal] = None
    create_date: Optional[datetime] = None
    events: List[PaymentEventModel] = Field(default_factory=list)


def normalize_wallet_balances(raw: Dict[str, Any], *, fallback_wallet_id: str) -> WalletBalances:
    wallet_id = str(_first_non_empty(raw, "walletId", "wallet_id", "id", default=fallback_wallet_id))
    entries = _first_non_empty(raw, "chains", "balances", default=[])
    if not isinstance(entries, list):
        raise IntegrationResponseError("Wallet balances must be a list.", payload=raw)

    chains = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise IntegrationResponseError("Wallet balance entries must be objects.", payload=raw)
        chain = str(_first_non_empty(entry, "chain", "blockchain")).upper()
        model = _build_model(
            ChainBalanceModel,
            {
                "chain": chain,
                "chain_name": str(_first_non_empty(entry, "chainName", "chain_name", default=chain)),
                "balance": _coerce_amount(_first_non_empty(entry, "balance", "amount"), "chain balance"),
                "percentage": _first_non_empty(entry, "percentage", default=0.0),
                "avg_gas": _coerce_amount(_first_non_empty(entry, "avgGas", "avg_gas", default="0"), "average gas"),
                "last_activity": entry.get("lastActivity") or entry.get("last_activity"),
                "color": entry.get("color"),
            },
            raw,
        )
        chains.append(ChainBalance(**model.model_dump()))

    total = _first_non_empty(raw, "totalUSDC", "total_usdc", default=None)
    total_usdc = _coerce_amount(total, "total USDC") if total is not None else sum((c.balance for c in chains), Decimal("0"))
    return WalletBalances(wallet_id=wallet_id, total_usdc=total_usdc, chains=chains)


def normalize_fee_estimate(raw: Dict[str, Any], *, fallback_chain: str) -> FeeEstimate:
    model = _build_model(
        FeeEstimateModel,
        {
            "chain": str(_first_non_empty(raw, "chain", "blockchain", default=fallback_chain)).upper(),
            "gas": _coerce_amount(_first_non_empty(raw, "gas", "fee", "amount"), "network fee"),
            "time": str(_first_non_empty(raw, "time", "estimatedTime", default="unknown")),
            "congestion": str(_first_non_empty(raw, "congestion", default="unknown")),
        },
        raw,
    )
    return FeeEstimate(**model.model_dump())


def normalize_transfer(raw: Dict[str, Any], *, request: TransferRequest) -> Transfer:
    amount_value = raw.get("amount")
    if isinstance(amount_value, dict):
        amount_value = amount_value.get("amount")

    model = _build_model(
        TransferModel,
        {
            "id": str(_first_non_empty(raw, "id", "transferId")),
            "status": _map_payment_status(_first_non_empty(raw, "status", default="pending")),
            "create_date": _first_non_empty(raw, "createDate", "create_date"),
            "amount": _coerce_amount(amount_value if amount_value is not None else request.amount, "transfer amount"),
            "currency": str(_first_non_empty(raw, "currency", default=request.currency)).upper(),
            "raw": raw,
        },
        raw,
    )
    return Transfer(
        id=model.id,
        status=model.status,
        create_date=model.create_date,
        wallet_id=request.wallet_id,
        destination_address=request.destination_address,
        amount=model.amount,
        currency=model.currency,
        blockchain=request.blockchain,
        metadata={**request.metadata, "gateway_raw": model.raw},
    )


def normalize_quotes(raw: Any, *, request: QuoteRequest) -> List[CorridorQuote]:
    if isinstance(raw, dict):
        items = raw.get("quotes") if isinstance(raw.get("quotes"), list) else [raw]
    elif isinstance(raw, list):
        items = raw
    else:
        raise IntegrationResponseError(f"Unexpected quote payload type {type(raw).__name__}.")

    quotes = []
    for item in items:
        if not isinstance(item, dict):
            raise IntegrationResponseError("Quote entries must be objects.")
        rate = _coerce_positive_amount(_first_non_empty(item, "rate", "exchangeRate"), "quote rate")
        fee_value = _first_non_empty(item, "fee", "fees", default="0")
        if isinstance(fee_value, dict):
            fee_value = fee_value.get("amount", "0")
        fee = _coerce_amount(fee_value, "quote fee")
        total = _first_non_empty(item, "totalReceived", "total_received", default=None)
        if total is None and isinstance(item.get("destinationAmount"), dict):
            total = item["destinationAmount"].get("amount")

        model = _build_model(
            CorridorQuoteModel,
            {
                "quote_id": str(_first_non_empty(item, "quoteId", "quote_id", "id")),
                "bfi_name": str(_first_non_empty(item, "bfiName", "bfi_name", "provider", default="unknown")),
                "rate": rate,
                "inverse_rate": _coerce_amount(
                    _first_non_empty(item, "inverseRate", "inverse_rate", default=Decimal("1") / rate),
                    "inverse rate",
                ),
                "fee": fee,
                "total_received": (
                    _coerce_amount(total, "total received")
                    if total is not None
                    else compute_total_received(request.source_amount, fee, rate)
                ),
                "settlement_minutes": _first_non_empty(item, "settlementMinutes", "settlement_minutes", default=0),
                "expires_at": item.get("expiresAt") or item.get("quoteExpiry"),
                "payment_method": str(_first_non_empty(item, "paymentMethod", "payment_method", default="UNKNOWN")),
                "bfi_logo": item.get("bfiLogo"),
                "historical_comparison": item.get("historicalComparison") or {},
            },
            item,
        )
        quotes.append(CorridorQuote(**model.model_dump()))
    return quotes


def normalize_cpn_payment(raw: Dict[str, Any], *, fallback_quote_id: Optional[str] = None) -> CpnPayment:
    model = _build_model(
        CpnPaymentModel,
        {
            "id": str(_first_non_empty(raw, "id", "paymentId")),
            "status": _map_payment_status(_first_non_empty(raw, "status", default="pending")),
            "quote_id": raw.get("quoteId") or raw.get("quote_id") or fallback_quote_id,
            "source_amount": _money_or_none(raw.get("sourceAmount"), "source amount"),
            "destination_amount": _money_or_none(raw.get("destinationAmount"), "destination amount"),
            "create_date": raw.get("createDate") or raw.get("create_date"),
            "events": raw.get("events") if isinstance(raw.get("events"), list) else [],
        },
        raw,
    )
    return CpnPayment(
        id=model.id,
        status=model.status,
        quote_id=model.quote_id,
        source_amount=model.source_amount,
        destination_amount=model.destination_amount,
        create_date=model.create_date,
        events=[PaymentEvent(**event.model_dump()) for event in model.events],
    )


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = ...) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not ...:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _coerce_amount(value: Any, label: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise IntegrationResponseError(f"Invalid {label}: {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise IntegrationResponseError(f"{label.capitalize()} must be >= 0; got {value!r}.")
    return amount


def _coerce_positive_amount(value: Any, label: str) -> Decimal:
    amount = _coerce_amount(value, label)
    if amount <= 0:
        raise IntegrationResponseError(f"{label.capitalize()} must be > 0; got {amount}.")
    return amount


def _money_or_none(value: Any, label: str) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("amount")
    return _coerce_amount(value, label) if value is not None else None


def _map_payment_status(raw_status: Any) -> PaymentStatus:
    value = str(raw_status or "").strip().lower()
    mapping = {
        "pending": PaymentStatus.PENDING,
        "created": PaymentStatus.PENDING,
        "processing": PaymentStatus.PROCESSING,
        "in_progress": PaymentStatus.PROCESSING,
        "complete": PaymentStatus.COMPLETED,
        "completed": PaymentStatus.COMPLETED,
        "paid": PaymentStatus.COMPLETED,
        "failed": PaymentStatus.FAILED,
        "error": PaymentStatus.FAILED,
    }
    if value not in mapping:
        raise IntegrationResponseError(f"Unsupported payment status '{value}'.")
    return mapping[value]


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
