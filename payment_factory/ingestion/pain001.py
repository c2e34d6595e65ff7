"""
pain.001.001.03 (Customer Credit Transfer Initiation) reader.

Reads the one fixed structure the payment factory accepts:

    Document/CstmrCdtTrfInitn
        GrpHdr            MsgId, CreDtTm, NbOfTxs, CtrlSum
        PmtInf*           PmtInfId, Dbtr/Nm, DbtrAcct/Id/(IBAN|Othr/Id)
            CdtTrfTxInf*  PmtId/EndToEndId, Amt/InstdAmt[@Ccy], Cdtr/Nm,
                          Cdtr/PstlAdr/Ctry, CdtrAcct/Id/(IBAN|Othr/Id), RmtInf/Ustrd

Elements are looked up in the pain.001.001.03 namespace first and then
without a namespace. Lookups search descendants and take the first match.

Any malformed element raises ParseError; a partially parsed batch is never returned.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

from lxml import etree

from payment_factory.routing.models import PaymentInstruction

logger = logging.getLogger(__name__)

PAIN001_NAMESPACE = "urn:iso:std:iso:20022:tech:xsd:pain.001.001.03"
DEFAULT_CURRENCY = "USD"
# Plain decimal notation only: no exponents, separators or underscores.
_AMOUNT_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")


class ParseError(ValueError):
    """Raised when a payment-initiation message cannot be read."""

    def __init__(self, element: str, message: str) -> None:
        super().__init__(f"{element}: {message}")
        self.element = element
        self.message = message


@dataclass(frozen=True)
class GroupHeader:
    message_id: Optional[str]
    creation_date_time: Optional[str]
    number_of_transactions: int = 0
    control_sum: Decimal = Decimal("0")


@dataclass(frozen=True)
class ParsedPayment:
    """One credit transfer plus the display fields around it."""
    id: str                              # PMT-001, PMT-002, ... in document order
    instruction: PaymentInstruction
    payment_info_id: Optional[str] = None
    debtor_name: Optional[str] = None
    debtor_account: Optional[str] = None
    creditor_name: Optional[str] = None
    remittance_info: Optional[str] = None


@dataclass(frozen=True)
class ParsedMessage:
    header: GroupHeader
    payments: List[ParsedPayment] = field(default_factory=list)

    @property
    def instructions(self) -> List[PaymentInstruction]:
        return [p.instruction for p in self.payments]

    @property
    def count_matches_header(self) -> bool:
        return self.header.number_of_transactions == len(self.payments)


class Pain001Parser:
    def __init__(self, namespace: str = PAIN001_NAMESPACE):
        self.namespace = namespace
        self._xml_parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)

    # ------------------------------------------------------------------
    # Element helpers
    # ------------------------------------------------------------------

    def _find(self, parent, local_name: str):
        if parent is None:
            return None
        found = next(parent.iter(f"{{{self.namespace}}}{local_name}"), None)
        if found is None:
            found = next(parent.iter(local_name), None)
        return found

    def _find_all(self, parent, local_name: str) -> list:
        namespaced = list(parent.iter(f"{{{self.namespace}}}{local_name}"))
        return namespaced or list(parent.iter(local_name))

    def _text(self, parent, local_name: str) -> Optional[str]:
        element = self._find(parent, local_name)
        if element is None:
            return None
        return "".join(element.itertext()).strip()

    def _account(self, parent, local_name: str) -> Optional[str]:
        account_id = self._find(self._find(parent, local_name), "Id")
        return self._text(account_id, "IBAN") or self._text(self._find(account_id, "Othr"), "Id")

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, xml_content: Union[str, bytes]) -> ParsedMessage:
        root = self._parse_document(xml_content)

        grp_hdr = self._find(root, "GrpHdr")
        if grp_hdr is None:
            raise ParseError("GrpHdr", "group header is missing")

        header = GroupHeader(
            message_id=self._text(grp_hdr, "MsgId"),
            creation_date_time=self._text(grp_hdr, "CreDtTm"),
            number_of_transactions=_int_or_zero(self._text(grp_hdr, "NbOfTxs")),
            control_sum=_decimal_or_zero(self._text(grp_hdr, "CtrlSum")),
        )

        payments: List[ParsedPayment] = []
        for pmt_inf in self._find_all(root, "PmtInf"):
            payment_info_id = self._text(pmt_inf, "PmtInfId")
            debtor_name = self._text(self._find(pmt_inf, "Dbtr"), "Nm")
            debtor_account = self._account(pmt_inf, "DbtrAcct")

            for tx in self._find_all(pmt_inf, "CdtTrfTxInf"):
                payments.append(
                    self._parse_transaction(
                        tx,
                        sequence=len(payments) + 1,
                        payment_info_id=payment_info_id,
                        debtor_name=debtor_name,
                        debtor_account=debtor_account,
                    )
                )

        message = ParsedMessage(header=header, payments=payments)
        if not message.count_matches_header:
            logger.warning(
                "pain.001 %s declares NbOfTxs=%d but contains %d transactions",
                header.message_id, header.number_of_transactions, len(payments),
            )
        logger.info("Parsed pain.001 %s with %d payments", header.message_id, len(payments))
        return message

    def _parse_document(self, xml_content: Union[str, bytes]):
        data = xml_content.encode("utf-8") if isinstance(xml_content, str) else xml_content
        if not data or not data.strip():
            raise ParseError("document", "empty payload")
        try:
            return etree.fromstring(data, parser=self._xml_parser)
        except etree.XMLSyntaxError as exc:
            raise ParseError("document", f"invalid XML: {exc}") from exc

    def _parse_transaction(
        self,
        tx,
        *,
        sequence: int,
        payment_info_id: Optional[str],
        debtor_name: Optional[str],
        debtor_account: Optional[str],
    ) -> ParsedPayment:
        end_to_end_id = self._text(self._find(tx, "PmtId"), "EndToEndId")

        instd_amt = self._find(self._find(tx, "Amt"), "InstdAmt")
        amount = _parse_amount(instd_amt, sequence)
        currency = (instd_amt.get("Ccy") if instd_amt is not None else None) or DEFAULT_CURRENCY

        cdtr = self._find(tx, "Cdtr")
        creditor_country = self._text(self._find(cdtr, "PstlAdr"), "Ctry")

        instruction = PaymentInstruction(
            end_to_end_id=end_to_end_id or "",
            creditor_account=self._account(tx, "CdtrAcct") or "",
            creditor_country=creditor_country or None,
            currency=currency.strip().upper(),
            amount=amount,
        )
        return ParsedPayment(
            id=f"PMT-{sequence:03d}",
            instruction=instruction,
            payment_info_id=payment_info_id,
            debtor_name=debtor_name,
            debtor_account=debtor_account,
            creditor_name=self._text(cdtr, "Nm"),
            remittance_info=self._text(self._find(tx, "RmtInf"), "Ustrd"),
        )


def _parse_amount(instd_amt, sequence: int) -> Decimal:
    if instd_amt is None:
        return Decimal("0")
    raw = "".join(instd_amt.itertext()).strip()
    if not _AMOUNT_RE.fullmatch(raw):
        raise ParseError("InstdAmt", f"transaction {sequence} has non-numeric amount {raw!r}")
    amount = Decimal(raw)
    if amount < 0:
        raise ParseError("InstdAmt", f"transaction {sequence} has invalid amount {raw!r}")
    return amount


def _int_or_zero(value: Optional[str]) -> int:
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


def _decimal_or_zero(value: Optional[str]) -> Decimal:
    try:
        return Decimal(value) if value else Decimal("0")
    except InvalidOperation:
        return Decimal("0")


def parse_pain001(xml_content: Union[str, bytes]) -> ParsedMessage:
    return Pain001Parser().parse(xml_content)
