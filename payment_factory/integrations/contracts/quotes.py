from datetime import datetime, timedelta
from decimal import Decimal
from typing import List

from .interfaces import CorridorQuote, QuoteRequest

"""
Quote and payment contract helpers.

Quote arithmetic lives here so the mock gateway and any future provider
ranking compute "total received" the same way.
"""


DEFAULT_QUOTE_TTL = timedelta(seconds=30)


def compute_total_received(source_amount: Decimal, fee: Decimal, rate: Decimal) -> Decimal:
    """Destination amount the beneficiary receives: (source - fee) * rate."""
    return (Decimal(source_amount) - Decimal(fee)) * Decimal(rate)


def quote_expiry(now: datetime, ttl: timedelta = DEFAULT_QUOTE_TTL) -> datetime:
    return now + ttl


def is_quote_expired(quote: CorridorQuote, now: datetime) -> bool:
    return quote.expires_at is not None and now >= quote.expires_at


def validate_quote_request(request: QuoteRequest) -> List[str]:
    """
    Return a list of validation errors.
    Empty list means the request is valid.
    """
    errors: List[str] = []

    if len((request.sender_country or "").strip()) != 2:
        errors.append("sender_country must be a two-letter country code")
    if len((request.destination_country or "").strip()) != 2:
        errors.append("destination_country must be a two-letter country code")
    if request.source_amount is None or request.source_amount <= 0:
        errors.append("source_amount must be greater than zero")
    if not request.source_currency:
        errors.append("source_currency is required")

    return errors
