"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payment_factory import __version__
from payment_factory.api.dependencies import api_key_protection
from payment_factory.api.endpoints import cpn_api, routing_api, travel_rule_api, wallets_api
from payment_factory.compliance.travel_rule import TravelRuleEncryptor
from payment_factory.error_handler import GATEWAY_ERRORS, ErrorHandler
from payment_factory.integrations.gateway_factory import build_gateway
from payment_factory.utils.config_loader import load_factory_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Payment Factory API",
    description="Routes corporate payments to blockchain, CPN corridor or traditional rails",
    version=__version__,
    dependencies=[Depends(api_key_protection)],  # protect everything by default
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

# Load configuration and pick the gateway once per process
factory_cfg = load_factory_config()

app.state.config = factory_cfg
app.state.gateway = build_gateway(factory_cfg)
app.state.classifier = factory_cfg.routing.build_classifier()
app.state.encryptor = TravelRuleEncryptor(
    algorithm=factory_cfg.travel_rule.algorithm,
    key_id=factory_cfg.travel_rule.key_id,
    encryption=factory_cfg.travel_rule.encryption,
)

error_handler = ErrorHandler()

app.include_router(routing_api, prefix="/api/v1")
app.include_router(wallets_api, prefix="/api/v1")
app.include_router(cpn_api, prefix="/api/v1")
app.include_router(travel_rule_api, prefix="/api/v1")


# ============================================================================
# ERROR MAPPING
# ============================================================================
async def gateway_error_handler(request: Request, exc: Exception):
    status_code, body = error_handler.gateway_error(exc, {"path": request.url.path})
    return JSONResponse(status_code=status_code, content=body)


for _exc_type in GATEWAY_ERRORS:
    app.add_exception_handler(_exc_type, gateway_error_handler)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content=error_handler.handle_exception(exc, {"path": request.url.path, "method": request.method}),
    )


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {"service": "Payment Factory API", "status": "healthy", "version": __version__, "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Reports which gateway mode the process started in."""
    gateway = request.app.state.gateway
    return {"status": "healthy", "gateway": gateway.mode.value, "timestamp": datetime.now().isoformat()}


@app.on_event("startup")
async def startup_event():
    logger.info("Starting Payment Factory API (gateway=%s)...", app.state.gateway.mode.value)
