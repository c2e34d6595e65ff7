"""
Payment route classification.

Maps a payment instruction to a settlement route (Blockchain, CPN or
Traditional) using an ordered address-rule table and a corridor eligibility
table. See classifier.py for the decision order.
"""

from .classifier import RouteClassifier, classify
from .models import CHAIN_EVM, CHAIN_SOL, PaymentInstruction, Route, RouteDecision
from .rules import (
    DEFAULT_ADDRESS_RULES,
    DEFAULT_CORRIDORS,
    AddressRule,
    validate_evm_address,
)

__all__ = [
    "RouteClassifier", "classify",
    "PaymentInstruction", "Route", "RouteDecision", "CHAIN_EVM", "CHAIN_SOL",
    "AddressRule", "DEFAULT_ADDRESS_RULES", "DEFAULT_CORRIDORS", "validate_evm_address",
]
