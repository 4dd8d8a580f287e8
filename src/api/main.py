"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.api.dependencies import get_proxy_config
from src.api.endpoints.orders import orders_api
from src.api.endpoints.payments import payments_api
from src.api.endpoints.products import products_api
from src.api.endpoints.shipping import shipping_api

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Request URLs carry the WooCommerce consumer secret as a query parameter
logging.getLogger("httpx").setLevel(logging.WARNING)

config = get_proxy_config()

# Initialize FastAPI app
app = FastAPI(
    title="Storefront Proxy API",
    description="Proxy between the storefront and the WooCommerce REST API, with shipping rate resolution",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


app.include_router(products_api, prefix="/api")
app.include_router(payments_api, prefix="/api")
app.include_router(orders_api, prefix="/api")
app.include_router(shipping_api, prefix="/api")


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    """Service banner."""
    return {"service": "Storefront Proxy API", "status": "healthy", "version": "1.0.0", "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "ok"}


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info("Starting Storefront Proxy API on port %s...", config.server.port)
    if config.use_real_integrations():
        logger.info("API URL: %s", config.upstream.api_url or "<not set>")
        if not (config.upstream.consumer_key and config.upstream.consumer_secret):
            logger.warning("WC_CONSUMER_KEY / WC_CONSUMER_SECRET not set; upstream calls will be rejected")
    else:
        logger.info("WC_API_URL not set; using in-memory mock WooCommerce client")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Storefront Proxy API...")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.api.main:app", host="0.0.0.0", port=config.server.port)
