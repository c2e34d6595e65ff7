import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field

from payment_factory.api.dependencies import get_classifier
from payment_factory.ingestion.pain001 import ParseError, Pain001Parser
from payment_factory.reporting import route_message
from payment_factory.routing.classifier import RouteClassifier

logger = logging.getLogger(__name__)

api = APIRouter()
routing_api = api


class ClassifyBody(BaseModel):
    account: str = Field(..., description="Creditor account (IBAN, wallet address, ...)")
    dest_country: Optional[str] = Field(default=None, description="Two-letter creditor country")
    currency: str = "USD"
    source_country: Optional[str] = Field(default=None, description="Defaults to the configured source country")


@api.post("/routing/classify", tags=["Routing"])
async def classify_payment(body: ClassifyBody, classifier: RouteClassifier = Depends(get_classifier)):
    decision = classifier.classify(body.account, body.dest_country, body.currency, body.source_country)
    return decision.to_dict()


@api.post("/routing/pain001", tags=["Routing"])
async def route_pain001(
    request: Request,
    source_country: Optional[str] = Query(default=None, min_length=2, max_length=2),
    classifier: RouteClassifier = Depends(get_classifier),
):
    """
    Parse a pain.001.001.03 document sent as the raw request body and route every payment in it.
    """
    payload = await request.body()
    try:
        message = Pain001Parser().parse(payload)
    except ParseError as e:
        logger.info("Rejected pain.001 upload: %s", e)
        raise HTTPException(status_code=422, detail={"message": e.message, "element": e.element}) from e

    return route_message(message, classifier, source_country).to_dict()
