"""
Travel rule payload "encryption" for the demo.

Produces a JWE-shaped string and a masked preview of originator and
beneficiary data. This is NOT real encryption: the payload is base64 encoded
and truncated. A production build would encrypt with Circle's public key.
"""

from __future__ import annotations

import base64
import json
import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# National ID formats by beneficiary country, used before a CPN payment is submitted.
BENEFICIARY_ID_FORMATS: Dict[str, Dict[str, Any]] = {
    "MX": {"name": "Mexico", "currency": "MXN", "format": "CURP/RFC",
           "pattern": re.compile(r"[A-Z]{4}\d{6}[A-Z]{6}\d{2}|[A-Z&]{3,4}\d{6}[A-Z0-9]{3}")},
    "BR": {"name": "Brazil", "currency": "BRL", "format": "CPF",
           "pattern": re.compile(r"\d{3}\.\d{3}\.\d{3}-\d{2}|\d{11}")},
    "CO": {"name": "Colombia", "currency": "COP", "format": "CC", "pattern": re.compile(r"\d{6,10}")},
    "NG": {"name": "Nigeria", "currency": "NGN", "format": "NIN", "pattern": re.compile(r"\d{11}")},
    "HK": {"name": "Hong Kong", "currency": "HKD", "format": "HKID",
           "pattern": re.compile(r"[A-Z]{1,2}\d{6}\([0-9A]\)")},
    "CN": {"name": "China", "currency": "CNY", "format": "ID Card", "pattern": re.compile(r"\d{18}|\d{15}")},
    "IN": {"name": "India", "currency": "INR", "format": "Aadhaar/PAN",
           "pattern": re.compile(r"\d{12}|[A-Z]{5}\d{4}[A-Z]")},
    "PH": {"name": "Philippines", "currency": "PHP", "format": "TIN", "pattern": re.compile(r"\d{9,12}")},
    "US": {"name": "United States", "currency": "USD", "format": "SSN/EIN", "pattern": re.compile(r"\d{9}")},
    "GB": {"name": "United Kingdom", "currency": "GBP", "format": "NI Number",
           "pattern": re.compile(r"[A-Z]{2}\d{6}[A-Z]")},
    "DE": {"name": "Germany", "currency": "EUR", "format": "Tax ID", "pattern": re.compile(r"\d{11}")},
}

_PAYLOAD_PREVIEW_CHARS = 50


@dataclass
class EncryptedTravelRule:
    jwe: str
    algorithm: str
    key_id: str
    preview: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TravelRuleEncryptor:
    def __init__(self, algorithm: str = "RSA-OAEP-256", key_id: str = "circle-pub-key-001", encryption: str = "A256GCM"):
        self.algorithm = algorithm
        self.key_id = key_id
        self.encryption = encryption

    def _protected_header(self) -> str:
        header = json.dumps({"alg": self.algorithm, "enc": self.encryption}, separators=(",", ":"))
        return base64.urlsafe_b64encode(header.encode("utf-8")).decode("ascii").rstrip("=")

    def encrypt(self, data: Dict[str, Any]) -> EncryptedTravelRule:
        serialized = json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=str)
        encoded = base64.b64encode(serialized.encode("utf-8")).decode("ascii")
        logger.debug("Travel rule payload prepared (%d bytes)", len(serialized))
        return EncryptedTravelRule(
            jwe=f"{self._protected_header()}.{encoded[:_PAYLOAD_PREVIEW_CHARS]}...encrypted",
            algorithm=self.algorithm,
            key_id=self.key_id,
            preview=self.preview(data),
        )

    @staticmethod
    def preview(data: Dict[str, Any]) -> Dict[str, Any]:
        originator = data.get("originator") or {}
        beneficiary = data.get("beneficiary") or {}
        return {
            "originator": {"name": _mask(originator.get("name")), "country": originator.get("country")},
            "beneficiary": {"name": _mask(beneficiary.get("name")), "country": beneficiary.get("country")},
            "fields_encrypted": len(beneficiary),
        }


def _mask(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    return "***" + str(name)[-4:]


def validate_beneficiary_id(country: Optional[str], id_number: Optional[str]) -> List[str]:
    """
    Return a list of validation errors for a beneficiary national ID.
    Empty list means the ID is valid for the country (or the country has no known format).
    """
    errors: List[str] = []
    code = (country or "").strip().upper()
    value = (id_number or "").strip()

    if not code:
        errors.append("beneficiary country is required")
    if not value:
        errors.append("beneficiary id_number is required")
    if errors:
        return errors

    id_format = BENEFICIARY_ID_FORMATS.get(code)
    if id_format is None:
        logger.debug("No ID format known for country %s; skipping format check", code)
        return errors

    if not id_format["pattern"].fullmatch(value):
        errors.append(f"id_number does not look like a valid {id_format['format']} for {id_format['name']}")
    return errors
