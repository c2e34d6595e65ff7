"""Routing data models: what goes into the classifier and what comes out."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class Route(str, Enum):
    BLOCKCHAIN = "Blockchain"
    CPN = "CPN"
    TRADITIONAL = "Traditional"


# Chain tags produced by the default address rules. Custom rule tables may add more.
CHAIN_EVM = "EVM"
CHAIN_SOL = "SOL"


@dataclass(frozen=True)
class PaymentInstruction:
    """One credit transfer, as read from a payment-initiation message."""
    end_to_end_id: str
    creditor_account: str
    creditor_country: Optional[str]      # absent for blockchain-style accounts
    currency: str                        # fiat or token code, e.g. USD / USDC
    amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class RouteDecision:
    """Result of routing classification."""
    route: Route
    reason: str
    chain: Optional[str] = None          # only set for Route.BLOCKCHAIN

    def __post_init__(self) -> None:
        if self.route is Route.BLOCKCHAIN and not self.chain:
            raise ValueError("Blockchain decisions must name a chain")
        if self.route is not Route.BLOCKCHAIN and self.chain is not None:
            raise ValueError(f"{self.route.value} decisions cannot carry a chain")

    @property
    def is_blockchain(self) -> bool:
        return self.route is Route.BLOCKCHAIN

    def to_dict(self) -> Dict[str, Any]:
        return {"route": self.route.value, "chain": self.chain, "reason": self.reason}
