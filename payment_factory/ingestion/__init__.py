"""
Ingestion package.

Turns payment-initiation messages (ISO 20022 pain.001.001.03) into
PaymentInstruction records for the route classifier.
"""

from .pain001 import (
    GroupHeader,
    Pain001Parser,
    ParsedMessage,
    ParsedPayment,
    ParseError,
    parse_pain001,
)

__all__ = ["GroupHeader", "Pain001Parser", "ParsedMessage", "ParsedPayment", "ParseError", "parse_pain001"]
