from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from payment_factory.api.dependencies import get_config, get_encryptor
from payment_factory.compliance.travel_rule import TravelRuleEncryptor, validate_beneficiary_id
from payment_factory.utils.config_loader import FactoryConfig

api = APIRouter()
travel_rule_api = api


class TravelRuleBody(BaseModel):
    beneficiary: Dict[str, Any] = Field(..., description="name, country, id_number, address, ...")
    originator: Optional[Dict[str, Any]] = Field(default=None, description="Defaults to the configured originator")


@api.post("/travel-rule/encrypt", tags=["Travel Rule"])
async def encrypt_travel_rule(
    body: TravelRuleBody,
    encryptor: TravelRuleEncryptor = Depends(get_encryptor),
    cfg: FactoryConfig = Depends(get_config),
):
    errors = validate_beneficiary_id(body.beneficiary.get("country"), body.beneficiary.get("id_number"))
    if errors:
        raise HTTPException(status_code=422, detail={"message": "Invalid beneficiary", "errors": errors})

    originator = body.originator or cfg.travel_rule.originator.model_dump()
    return encryptor.encrypt({"originator": originator, "beneficiary": body.beneficiary}).to_dict()
