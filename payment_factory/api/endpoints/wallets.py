from decimal import Decimal
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from payment_factory.api.dependencies import get_config, get_gateway
from payment_factory.integrations.contracts.interfaces import (
    FeeEstimateRequest,
    PaymentsGateway,
    TransferRequest,
)
from payment_factory.integrations.policy.response_wrappers import IntegrationResponseError
from payment_factory.routing.rules import validate_evm_address
from payment_factory.utils.config_loader import FactoryConfig

api = APIRouter()
wallets_api = api

# Chains whose addresses are 0x-prefixed EVM accounts.
EVM_CHAINS = {"ETH", "MATIC", "ARB", "BASE"}


class FeeEstimateBody(BaseModel):
    blockchain: str = "ETH"
    amount: Optional[Decimal] = Field(default=None, gt=0)
    destination_address: Optional[str] = None


class TransferBody(BaseModel):
    destination_address: str
    amount: Decimal = Field(..., gt=0)
    wallet_id: Optional[str] = Field(default=None, description="Defaults to the configured corporate wallet")
    currency: str = "USDC"
    blockchain: str = "ETH"
    idempotency_key: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


@api.get("/wallets/{wallet_id}/balances", tags=["Wallets"])
async def get_balances(wallet_id: str, gateway: PaymentsGateway = Depends(get_gateway)):
    return await gateway.get_balances(wallet_id)


@api.post("/wallets/fee-estimate", tags=["Wallets"])
async def estimate_fee(body: FeeEstimateBody, gateway: PaymentsGateway = Depends(get_gateway)):
    try:
        return await gateway.estimate_fee(
            FeeEstimateRequest(
                blockchain=body.blockchain.strip().upper(),
                amount=body.amount,
                destination_address=body.destination_address,
            )
        )
    except IntegrationResponseError:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@api.post("/transfers", tags=["Wallets"])
async def create_transfer(
    body: TransferBody,
    gateway: PaymentsGateway = Depends(get_gateway),
    cfg: FactoryConfig = Depends(get_config),
):
    blockchain = body.blockchain.strip().upper()
    if blockchain in EVM_CHAINS:
        errors = validate_evm_address(body.destination_address)
        if errors:
            raise HTTPException(status_code=422, detail={"message": "Invalid destination address", "errors": errors})

    return await gateway.create_transfer(
        TransferRequest(
            wallet_id=body.wallet_id or cfg.gateway.wallet_id,
            destination_address=body.destination_address,
            amount=body.amount,
            currency=body.currency.strip().upper(),
            blockchain=blockchain,
            idempotency_key=body.idempotency_key,
            metadata=body.metadata,
        )
    )
