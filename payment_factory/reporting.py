"""Batch routing report: every parsed payment paired with its route decision, in document order."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from payment_factory.ingestion.pain001 import ParsedMessage, ParsedPayment
from payment_factory.routing.classifier import RouteClassifier
from payment_factory.routing.models import Route, RouteDecision
from payment_factory.utils.formatting import format_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutedPayment:
    payment: ParsedPayment
    decision: RouteDecision

    def to_dict(self) -> Dict[str, Any]:
        instruction = self.payment.instruction
        return {
            "id": self.payment.id,
            "paymentId": self.payment.payment_info_id,
            "endToEndId": instruction.end_to_end_id,
            "debtorName": self.payment.debtor_name,
            "debtorAccount": self.payment.debtor_account,
            "creditorName": self.payment.creditor_name,
            "creditorAccount": instruction.creditor_account,
            "creditorCountry": instruction.creditor_country,
            "amount": str(instruction.amount),
            "displayAmount": format_amount(instruction.amount, instruction.currency),
            "currency": instruction.currency,
            "remittanceInfo": self.payment.remittance_info,
            "route": self.decision.route.value,
            "routeReason": self.decision.reason,
            "chain": self.decision.chain,
        }


@dataclass
class RoutingReport:
    message: ParsedMessage
    rows: List[RoutedPayment] = field(default_factory=list)

    def by_route(self, route: Route) -> List[RoutedPayment]:
        return [row for row in self.rows if row.decision.route is route]

    def summary(self) -> Dict[str, Any]:
        counts = Counter(row.decision.route.value for row in self.rows)
        totals: Dict[str, Decimal] = {}
        for row in self.rows:
            instruction = row.payment.instruction
            totals[instruction.currency] = totals.get(instruction.currency, Decimal("0")) + instruction.amount
        return {
            "payments": len(self.rows),
            "routes": {route.value: counts.get(route.value, 0) for route in Route},
            "totals": {currency: str(amount) for currency, amount in sorted(totals.items())},
            "countMatchesHeader": self.message.count_matches_header,
        }

    def to_dict(self) -> Dict[str, Any]:
        header = self.message.header
        return {
            "header": {
                "messageId": header.message_id,
                "creationDateTime": header.creation_date_time,
                "numberOfTransactions": header.number_of_transactions,
                "controlSum": str(header.control_sum),
            },
            "payments": [row.to_dict() for row in self.rows],
            "summary": self.summary(),
        }


def route_message(
    message: ParsedMessage,
    classifier: RouteClassifier,
    source_country: Optional[str] = None,
) -> RoutingReport:
    rows = [
        RoutedPayment(payment=payment, decision=classifier.classify_instruction(payment.instruction, source_country))
        for payment in message.payments
    ]
    report = RoutingReport(message=message, rows=rows)
    logger.info("Routed %d payments: %s", len(rows), report.summary()["routes"])
    return report
