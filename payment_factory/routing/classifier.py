"""
Payment route classifier.

Decides how a single payment instruction settles:
  1. Blockchain, when the creditor account matches an address rule
     (rules are tried in table order; EVM before Solana by default)
  2. CPN, when the destination country is an eligible corridor for the source country
  3. Traditional banking rails otherwise

classify() is total: malformed or empty accounts never raise, they fall through
to the corridor check and then to Traditional.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple

from .models import PaymentInstruction, Route, RouteDecision
from .rules import (
    DEFAULT_ADDRESS_RULES,
    DEFAULT_CORRIDORS,
    DEFAULT_SOURCE_COUNTRY,
    AddressRule,
    freeze_corridors,
)

logger = logging.getLogger(__name__)

TRADITIONAL_REASON = "No Circle route available, use traditional banking rails"


class RouteClassifier:
    """Stateless classifier over an ordered address-rule list and a corridor table."""

    def __init__(
        self,
        rules: Sequence[AddressRule] = DEFAULT_ADDRESS_RULES,
        corridors: Mapping[str, Iterable[str]] = DEFAULT_CORRIDORS,
        default_source_country: str = DEFAULT_SOURCE_COUNTRY,
    ):
        self._rules: Tuple[AddressRule, ...] = tuple(rules)
        self._corridors: Dict[str, FrozenSet[str]] = freeze_corridors(corridors)
        self._default_source_country = default_source_country.strip().upper()

    @property
    def rules(self) -> Tuple[AddressRule, ...]:
        return self._rules

    @property
    def default_source_country(self) -> str:
        return self._default_source_country

    def is_corridor_eligible(self, source_country: Optional[str], dest_country: Optional[str]) -> bool:
        source, dest = _normalize_country(source_country), _normalize_country(dest_country)
        if not source or not dest:
            return False
        return dest in self._corridors.get(source, frozenset())

    def match_rule(self, account: Optional[str]) -> Optional[AddressRule]:
        candidate = account if isinstance(account, str) else ""
        for rule in self._rules:
            if rule.matches(candidate):
                return rule
        return None

    def classify(
        self,
        account: Optional[str],
        dest_country: Optional[str],
        currency: Optional[str],
        source_country: Optional[str] = None,
    ) -> RouteDecision:
        rule = self.match_rule(account)
        if rule is not None:
            decision = RouteDecision(
                route=Route.BLOCKCHAIN,
                chain=rule.chain,
                reason=f"Creditor account matches {rule.label}",
            )
        elif self.is_corridor_eligible(source_country or self._default_source_country, dest_country):
            decision = RouteDecision(
                route=Route.CPN,
                reason=f"Destination country {_normalize_country(dest_country)} + {currency} = CPN corridor supported",
            )
        else:
            decision = RouteDecision(route=Route.TRADITIONAL, reason=TRADITIONAL_REASON)

        logger.debug("Routed account=%r country=%r -> %s", account, dest_country, decision.route.value)
        return decision

    def classify_instruction(
        self,
        instruction: PaymentInstruction,
        source_country: Optional[str] = None,
    ) -> RouteDecision:
        return self.classify(
            instruction.creditor_account,
            instruction.creditor_country,
            instruction.currency,
            source_country,
        )


def _normalize_country(code: Optional[str]) -> str:
    if not isinstance(code, str):
        return ""
    return code.strip().upper()


_default_classifier = RouteClassifier()


def classify(
    account: Optional[str],
    dest_country: Optional[str],
    currency: Optional[str],
    source_country: str = DEFAULT_SOURCE_COUNTRY,
) -> RouteDecision:
    """Classify with the built-in reference tables."""
    return _default_classifier.classify(account, dest_country, currency, source_country)
