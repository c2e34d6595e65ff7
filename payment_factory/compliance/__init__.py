"""
Compliance helpers: travel rule payload preparation and beneficiary ID checks.
"""

from .travel_rule import (
    BENEFICIARY_ID_FORMATS,
    EncryptedTravelRule,
    TravelRuleEncryptor,
    validate_beneficiary_id,
)

__all__ = ["BENEFICIARY_ID_FORMATS", "EncryptedTravelRule", "TravelRuleEncryptor", "validate_beneficiary_id"]
