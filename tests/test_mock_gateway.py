from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from payment_factory.integrations import (
    CpnPaymentRequest,
    FeeEstimateRequest,
    GatewayMode,
    MockGateway,
    PaymentStatus,
    QuoteRequest,
    TransferRequest,
)
from payment_factory.integrations.contracts.quotes import is_quote_expired

FIXED_NOW = datetime(2026, 1, 16, 10, 42, 15, tzinfo=timezone.utc)
FIXED_MS = int(FIXED_NOW.timestamp() * 1000)


def test_mock_gateway_reports_mock_mode(mock_gateway):
    assert mock_gateway.mode is GatewayMode.MOCK
    assert mock_gateway.is_live is False


@pytest.mark.asyncio
async def test_balances_come_from_seed_data(mock_gateway):
    balances = await mock_gateway.get_balances("wallet-corp-001")

    assert balances.wallet_id == "wallet-corp-001"
    assert balances.total_usdc == Decimal("1247500.00")
    assert [c.chain for c in balances.chains] == ["ETH", "MATIC", "ARB", "BASE", "SOL"]
    assert balances.chains[0].balance == Decimal("850000.00")
    assert balances.chains[0].chain_name == "Ethereum"


@pytest.mark.asyncio
async def test_fee_estimate_per_chain(mock_gateway):
    default = await mock_gateway.estimate_fee(FeeEstimateRequest())
    polygon = await mock_gateway.estimate_fee(FeeEstimateRequest(blockchain="matic"))

    assert default.chain == "ETH"
    assert default.gas == Decimal("2.40")
    assert default.congestion == "normal"
    assert polygon.chain == "MATIC"
    assert polygon.gas == Decimal("0.02")


@pytest.mark.asyncio
async def test_fee_estimate_unknown_chain_raises(mock_gateway):
    with pytest.raises(ValueError, match="DOGE"):
        await mock_gateway.estimate_fee(FeeEstimateRequest(blockchain="DOGE"))


@pytest.mark.asyncio
async def test_quotes_compute_total_received_and_expiry(mock_gateway):
    quotes = await mock_gateway.create_quote(
        QuoteRequest(sender_country="US", destination_country="MX", source_amount=Decimal("25000"))
    )

    assert [q.bfi_name for q in quotes] == ["Bitso", "Mercado Pago", "Ripio"]
    bitso = quotes[0]
    assert bitso.rate == Decimal("17.85")
    assert bitso.fee == Decimal("25.00")
    assert bitso.total_received == Decimal("445803.75")
    assert bitso.payment_method == "SPEI"
    assert bitso.settlement_minutes == 15
    assert all(q.expires_at == FIXED_NOW + timedelta(seconds=30) for q in quotes)


@pytest.mark.asyncio
async def test_quote_ttl_is_configurable(fixed_clock):
    gateway = MockGateway(clock=fixed_clock, quote_ttl=timedelta(seconds=90))

    quotes = await gateway.create_quote(
        QuoteRequest(sender_country="US", destination_country="NG", source_amount=Decimal("1000"))
    )

    assert len(quotes) == 1
    assert quotes[0].expires_at == FIXED_NOW + timedelta(seconds=90)
    assert quotes[0].total_received == (Decimal("1000") - Decimal("50.00")) * Decimal("1580.50")
    assert not is_quote_expired(quotes[0], FIXED_NOW + timedelta(seconds=89))
    assert is_quote_expired(quotes[0], FIXED_NOW + timedelta(seconds=90))


@pytest.mark.asyncio
async def test_unknown_corridor_has_no_quotes(mock_gateway):
    quotes = await mock_gateway.create_quote(
        QuoteRequest(sender_country="US", destination_country="JP", source_amount=Decimal("100"))
    )

    assert quotes == []


@pytest.mark.asyncio
async def test_transfer_is_created_pending(mock_gateway):
    transfer = await mock_gateway.create_transfer(
        TransferRequest(
            wallet_id="wallet-corp-001",
            destination_address="0x742d35Cc6634C0532925a3b844Bc454e4438f44e",
            amount=Decimal("1500"),
            blockchain="MATIC",
            metadata={"invoice": "INV-7"},
        )
    )

    assert transfer.id == f"transfer-{FIXED_MS}"
    assert transfer.status is PaymentStatus.PENDING
    assert transfer.create_date == FIXED_NOW
    assert transfer.blockchain == "MATIC"
    assert transfer.metadata == {"invoice": "INV-7"}


@pytest.mark.asyncio
async def test_payment_lifecycle(mock_gateway):
    created = await mock_gateway.create_payment(
        CpnPaymentRequest(quote_id="q-bitso-001", source_amount=Decimal("25000"), destination_amount=Decimal("445803.75"))
    )

    assert created.id == f"cpn-payment-{FIXED_MS}"
    assert created.status is PaymentStatus.PENDING

    fetched = await mock_gateway.get_payment(created.id)

    assert fetched.status is PaymentStatus.COMPLETED
    assert fetched.quote_id == "q-bitso-001"
    assert fetched.destination_amount == Decimal("445803.75")
    assert [e.type for e in fetched.events][0] == "payment.created"
    assert [e.type for e in fetched.events][-1] == "payment.completed"
    assert len(fetched.events) == 6


@pytest.mark.asyncio
async def test_unknown_payment_still_reports_the_canned_lifecycle(mock_gateway):
    fetched = await mock_gateway.get_payment("cpn-payment-unknown")

    assert fetched.id == "cpn-payment-unknown"
    assert fetched.status is PaymentStatus.COMPLETED
    assert fetched.quote_id is None
    assert len(fetched.events) == 6


@pytest.mark.asyncio
async def test_ids_stay_unique_within_one_millisecond(mock_gateway):
    request = CpnPaymentRequest(quote_id="q-bitso-001", source_amount=Decimal("100"))

    first = await mock_gateway.create_payment(request)
    second = await mock_gateway.create_payment(request)
    transfer = await mock_gateway.create_transfer(
        TransferRequest(wallet_id="wallet-corp-001", destination_address="0xabc", amount=Decimal("1"))
    )
    other = await mock_gateway.create_transfer(
        TransferRequest(wallet_id="wallet-corp-001", destination_address="0xabc", amount=Decimal("2"))
    )

    assert first.id == f"cpn-payment-{FIXED_MS}"
    assert second.id == f"cpn-payment-{FIXED_MS}-2"
    assert transfer.id == f"transfer-{FIXED_MS}"
    assert other.id == f"transfer-{FIXED_MS}-2"
    assert (await mock_gateway.get_payment(first.id)).source_amount == Decimal("100")
    assert (await mock_gateway.get_payment(second.id)).quote_id == "q-bitso-001"


@pytest.mark.asyncio
async def test_payment_against_expired_quote_is_rejected():
    now = [FIXED_NOW]
    gateway = MockGateway(clock=lambda: now[0])
    quotes = await gateway.create_quote(
        QuoteRequest(sender_country="US", destination_country="MX", source_amount=Decimal("25000"))
    )

    now[0] = FIXED_NOW + timedelta(seconds=30)

    with pytest.raises(ValueError, match="q-bitso-001.*expired"):
        await gateway.create_payment(
            CpnPaymentRequest(quote_id=quotes[0].quote_id, source_amount=Decimal("25000"))
        )


@pytest.mark.asyncio
async def test_payment_against_live_quote_is_accepted():
    now = [FIXED_NOW]
    gateway = MockGateway(clock=lambda: now[0])
    quotes = await gateway.create_quote(
        QuoteRequest(sender_country="US", destination_country="MX", source_amount=Decimal("25000"))
    )

    now[0] = FIXED_NOW + timedelta(seconds=29)
    payment = await gateway.create_payment(
        CpnPaymentRequest(quote_id=quotes[0].quote_id, source_amount=Decimal("25000"))
    )

    assert payment.status is PaymentStatus.PENDING
    assert payment.quote_id == "q-bitso-001"
