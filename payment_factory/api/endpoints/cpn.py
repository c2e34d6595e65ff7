from decimal import Decimal
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from payment_factory.api.dependencies import get_classifier, get_config, get_encryptor, get_gateway
from payment_factory.compliance.travel_rule import TravelRuleEncryptor, validate_beneficiary_id
from payment_factory.integrations.clients.mocks.reference_data import CURRENCY_PAIRS
from payment_factory.integrations.contracts.interfaces import CpnPaymentRequest, PaymentsGateway, QuoteRequest
from payment_factory.integrations.contracts.quotes import validate_quote_request
from payment_factory.integrations.policy.response_wrappers import IntegrationResponseError
from payment_factory.routing.classifier import RouteClassifier
from payment_factory.utils.config_loader import FactoryConfig

api = APIRouter()
cpn_api = api


class QuoteBody(BaseModel):
    sender_country: str = Field(default="US", description="Two-letter source country")
    destination_country: str = Field(..., description="Two-letter destination country")
    source_amount: Decimal = Field(..., gt=0)
    source_currency: str = "USD"
    destination_currency: Optional[str] = None


class CpnPaymentBody(BaseModel):
    quote_id: str
    source_amount: Decimal = Field(..., gt=0)
    source_currency: str = "USD"
    destination_amount: Optional[Decimal] = Field(default=None, gt=0)
    destination_currency: Optional[str] = None
    beneficiary: Dict[str, Any] = Field(default_factory=dict, description="name, country, id_number, account, ...")
    travel_rule: Optional[Dict[str, Any]] = Field(default=None, description="Pre-encrypted travel rule payload")
    metadata: Dict[str, Any] = Field(default_factory=dict)


@api.get("/cpn/corridors", tags=["CPN"])
async def list_corridors(classifier: RouteClassifier = Depends(get_classifier)):
    pairs = [
        {**pair, "eligible": classifier.is_corridor_eligible(*pair["corridor"].split("-"))}
        for pair in CURRENCY_PAIRS
    ]
    return {"source_country": classifier.default_source_country, "currency_pairs": pairs}


@api.post("/cpn/quotes", tags=["CPN"])
async def create_quote(body: QuoteBody, gateway: PaymentsGateway = Depends(get_gateway)):
    request = QuoteRequest(
        sender_country=body.sender_country.strip().upper(),
        destination_country=body.destination_country.strip().upper(),
        source_amount=body.source_amount,
        source_currency=body.source_currency.strip().upper(),
        destination_currency=body.destination_currency,
    )
    errors = validate_quote_request(request)
    if errors:
        raise HTTPException(status_code=422, detail={"message": "Invalid quote request", "errors": errors})

    quotes = await gateway.create_quote(request)
    return {"corridor": request.corridor, "quotes": quotes}


@api.post("/cpn/payments", tags=["CPN"])
async def create_payment(
    body: CpnPaymentBody,
    gateway: PaymentsGateway = Depends(get_gateway),
    encryptor: TravelRuleEncryptor = Depends(get_encryptor),
    cfg: FactoryConfig = Depends(get_config),
):
    travel_rule = body.travel_rule
    if travel_rule is None and body.beneficiary:
        errors = validate_beneficiary_id(body.beneficiary.get("country"), body.beneficiary.get("id_number"))
        if errors:
            raise HTTPException(status_code=422, detail={"message": "Invalid beneficiary", "errors": errors})
        travel_rule = encryptor.encrypt(
            {"originator": cfg.travel_rule.originator.model_dump(), "beneficiary": body.beneficiary}
        ).to_dict()

    try:
        return await gateway.create_payment(
            CpnPaymentRequest(
                quote_id=body.quote_id,
                source_amount=body.source_amount,
                source_currency=body.source_currency.strip().upper(),
                destination_amount=body.destination_amount,
                destination_currency=body.destination_currency,
                beneficiary=body.beneficiary,
                travel_rule=travel_rule,
                metadata=body.metadata,
            )
        )
    except IntegrationResponseError:
        raise
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


@api.get("/cpn/payments/{payment_id}", tags=["CPN"])
async def get_payment(payment_id: str, gateway: PaymentsGateway = Depends(get_gateway)):
    return await gateway.get_payment(payment_id)
