"""Energy Market API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EnergyMarketError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Marketplace (and its ledger store) created on startup, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Marketplace stored on app.state instead of a module global: tests swap it per test
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from energy_market.api.error_handlers import register_error_handlers
from energy_market.api.routes import (
    consumers, health, producers, trades, transactions,
)
from energy_market.config import get_settings
from energy_market.infrastructure.observability import setup_logging
from energy_market.services.marketplace import Marketplace, build_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.marketplace = Marketplace(build_store(settings))
    logger.info("Energy Market API started")
    yield
    logger.info("Energy Market API shutting down")
    app.state.marketplace.close()
    app.state.marketplace = None


app = FastAPI(
    title="Energy Market API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(producers.router)
app.include_router(consumers.router)
app.include_router(trades.router)
app.include_router(transactions.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "energy_market.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
