"""
FastAPI Application - Name Service Scraper API

Triggers scrapes of the supported DEX backends and exposes the resulting
registries.

Endpoints:
    - GET  /                                 API information
    - GET  /health                           Exchange health
    - GET  /exchanges                        Supported exchanges
    - POST /networks/{network_id}/scrape     Run exchanges against a network
    - GET  /networks/{network_id}/registry   Current registry contents

Usage:
    uvicorn app.main:app --reload --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Query

from core.config import settings, validate_configuration
from core.exchange_manager import get_manager
from core.logging import logger
from core.schemas import ScrapeReport
from networks import AssetListClient, Network


manager = get_manager()
asset_lists = AssetListClient()
networks: Dict[str, Network] = {}


def get_network(network_id: str) -> Network:
    """
    Network for a chain id, created on first use.

    Raises:
        HTTPException: 404 if the chain id is not configured
    """
    chain_names = settings.networks_map
    if network_id not in chain_names:
        raise HTTPException(
            status_code=404,
            detail=f"Network '{network_id}' is not supported. Available: {', '.join(chain_names)}"
        )
    if network_id not in networks:
        networks[network_id] = Network(network_id, chain_names[network_id], asset_lists)
    return networks[network_id]


# ============================================
# Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    logger.info("=== Application Starting ===")
    validate_configuration()
    await asset_lists.__aenter__()
    await manager.initialize_all()
    logger.info("=== Started Successfully ===")

    yield

    logger.info("=== Shutting Down ===")
    await manager.shutdown_all()
    await asset_lists.__aexit__(None, None, None)
    logger.info("=== Shutdown Complete ===")


# ============================================
# FastAPI Application
# ============================================

app = FastAPI(
    title="ANS Scraper API",
    description=(
        "Scrapes DEX pool metadata into the name service registries.\n\n"
        "- `POST /networks/{network_id}/scrape` - Run exchanges (optional ?exchange=osmosis)\n"
        "- `GET /networks/{network_id}/registry` - Assets, pools, pending pools, contracts\n"
        "- `GET /exchanges` - List supported exchanges\n"
        "- `GET /health` - Health check"
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)


# ============================================
# System Endpoints
# ============================================

@app.get("/", tags=["System"])
async def root():
    """API information."""
    return {
        "name": "ANS Scraper API",
        "version": "1.0.0",
        "status": "operational",
        "docs": "/docs",
        "exchanges": manager.list_exchanges(),
        "networks": list(settings.networks_map)
    }


@app.get("/health", tags=["System"])
async def health_check():
    """Health check of all exchange backends."""
    health = await manager.health_check_all()
    return {
        "status": "healthy" if all(health.values()) else "degraded",
        "exchanges": health
    }


@app.get("/exchanges", tags=["System"])
async def list_exchanges():
    """List all supported exchanges."""
    return {"exchanges": manager.list_exchanges()}


# ============================================
# Scrape Endpoints
# ============================================

@app.post("/networks/{network_id}/scrape", response_model=Dict[str, ScrapeReport], tags=["Scrape"])
async def scrape_network(
    network_id: str,
    exchange: Optional[str] = Query(default=None, description="Single exchange to run (default: all)")
):
    """
    Register assets, contracts and pools of the selected exchanges.

    Exchanges that fail (e.g. their pool list cannot be fetched) report an
    `error`; the others still run.
    """
    network = get_network(network_id)

    if exchange is not None and not manager.has_exchange(exchange):
        raise HTTPException(status_code=404, detail=f"Exchange '{exchange}' is not supported")

    return await manager.scrape(network, [exchange] if exchange else None)


@app.get("/networks/{network_id}/registry", tags=["Scrape"])
async def get_registry(network_id: str):
    """Current registry contents of a network."""
    return get_network(network_id).export()
