"""
Routing reference tables.

Two tables drive classification:
- address rules: ordered (pattern, chain) pairs. The first rule whose pattern
  matches the whole creditor account wins, so list order is the tie-break.
- corridor eligibility: source country -> destination countries that settle
  through the CPN corridor network.

Both are plain data so they can be replaced from configuration
(see utils/config_loader.py) without touching the classifier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from .models import CHAIN_EVM, CHAIN_SOL


@dataclass(frozen=True)
class AddressRule:
    name: str
    chain: str
    pattern: "re.Pattern[str]"
    label: str                           # used in the decision reason

    @classmethod
    def from_pattern(cls, name: str, chain: str, pattern: str, label: Optional[str] = None) -> "AddressRule":
        return cls(
            name=name,
            chain=chain.strip().upper(),
            pattern=re.compile(pattern),
            label=label or f"{name} address pattern",
        )

    def matches(self, account: str) -> bool:
        return self.pattern.fullmatch(account) is not None


EVM_ADDRESS_PATTERN = r"0x[a-fA-F0-9]{40}"
# Base58 alphabet: alphanumerics without 0, O, I and l. No whitespace by construction.
SOLANA_ADDRESS_PATTERN = r"[1-9A-HJ-NP-Za-km-z]{32,44}"

DEFAULT_ADDRESS_RULES: Tuple[AddressRule, ...] = (
    AddressRule.from_pattern("evm", CHAIN_EVM, EVM_ADDRESS_PATTERN, "EVM blockchain address pattern (0x...)"),
    AddressRule.from_pattern("solana", CHAIN_SOL, SOLANA_ADDRESS_PATTERN, "Solana address pattern (Base58)"),
)

DEFAULT_CORRIDORS: Dict[str, FrozenSet[str]] = {
    "US": frozenset({"MX", "BR", "CO", "NG", "HK", "CN", "IN", "PH"}),
    "GB": frozenset({"MX", "BR", "NG", "IN", "PH"}),
    "EU": frozenset({"MX", "BR", "CO", "NG"}),
}

DEFAULT_SOURCE_COUNTRY = "US"


def freeze_corridors(corridors: Mapping[str, Iterable[str]]) -> Dict[str, FrozenSet[str]]:
    """Normalise a corridor mapping to upper-case codes and frozensets."""
    return {
        source.strip().upper(): frozenset(dest.strip().upper() for dest in destinations)
        for source, destinations in corridors.items()
    }


def validate_evm_address(address: str) -> List[str]:
    """
    Return a list of validation errors for an EVM address.
    Empty list means the address is well-formed.

    Only the shape is checked; the EIP-55 mixed-case checksum is not verified.
    """
    if not address:
        return ["address is required"]
    if not re.fullmatch(EVM_ADDRESS_PATTERN, address):
        return [f"'{address}' is not a 0x-prefixed 40 hex character address"]
    return []
