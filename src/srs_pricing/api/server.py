"""FastAPI server — state store + quote engine over HTTP.

Run with:
    uvicorn srs_pricing.api.server:app --port 3000

Or:
    srs-pricing-server

Endpoints:
    GET  /api/health            — liveness
    GET  /api/state             — {config, ui}
    PUT  /api/state             — store {config, ui}
    GET  /api/config            — stored config blob
    PUT  /api/config            — replace stored config blob
    GET  /api/ui                — stored UI-state blob
    PUT  /api/ui                — replace stored UI-state blob
    GET  /api/lock-password     — shared password for the margins view
    GET  /api/config/defaults   — baseline EngineConfig as JSON
    POST /api/quote             — price one scenario
    POST /api/quote/terms       — price every offered contract length
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from srs_pricing.api.settings import ServiceSettings, get_settings
from srs_pricing.config.engine import EngineConfig
from srs_pricing.config.loader import config_from_overrides, load_engine_config
from srs_pricing.config.quote import QuoteScenario
from srs_pricing.engine.quote import compute_quote, compute_term_table
from srs_pricing.errors import PricingError
from srs_pricing.models.results import QuoteResult, TermQuote
from srs_pricing.persistence.store import SettingsStore, open_store
from srs_pricing.utils.logger import setup_logging

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="SRS Contract Pricing API",
    version="3.0",
    description=(
        "Stores the pricing page's configuration and UI state, and prices "
        "multi-year hardware + support contracts with the installed-base "
        "cost-plus engine."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Dependencies
# ═══════════════════════════════════════════════════════════════════════════

@lru_cache()
def _default_store() -> SettingsStore:
    settings = get_settings()
    return open_store(settings.db_path, settings.resolved_state_path, settings.store_backend)


def get_store() -> SettingsStore:
    return _default_store()


@lru_cache()
def _baseline_config() -> EngineConfig:
    settings = get_settings()
    if settings.config_path is not None:
        logger.info("Loading engine config from %s", settings.config_path)
        return load_engine_config(settings.config_path)
    return EngineConfig()


def get_engine_config() -> EngineConfig:
    return _baseline_config()


# ═══════════════════════════════════════════════════════════════════════════
# Request models
# ═══════════════════════════════════════════════════════════════════════════

class StateBody(BaseModel):
    """Body for PUT /api/state. Both blobs are opaque to the server."""
    config: dict[str, Any] | None = None
    ui: dict[str, Any] | None = None


class QuoteRequest(BaseModel):
    """Body for POST /api/quote."""
    scenario: QuoteScenario
    config: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial EngineConfig overrides merged onto the baseline. "
                    "Example: {'pricing': {'rounding_increment': 50}}",
    )


class TermsRequest(BaseModel):
    """Body for POST /api/quote/terms."""
    monthly_rate: float = Field(gt=0)
    commit_years: float = Field(gt=0)
    existing_fleet_units: float | None = Field(default=None, ge=0)
    config: dict[str, Any] = Field(default_factory=dict)


# ═══════════════════════════════════════════════════════════════════════════
# Error handlers
# ═══════════════════════════════════════════════════════════════════════════

@app.exception_handler(PricingError)
async def _pricing_error(request: Request, exc: PricingError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": type(exc).__name__})


@app.exception_handler(ValidationError)
async def _config_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("%s %s invalid configuration: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": "ConfigurationError"})


# ═══════════════════════════════════════════════════════════════════════════
# State endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/api/health")
def health_check():
    return {"ok": True}


@app.get("/api/state")
def get_state(store: SettingsStore = Depends(get_store)):
    return {"config": store.get("config", {}), "ui": store.get("ui", {})}


@app.put("/api/state")
def put_state(body: StateBody, store: SettingsStore = Depends(get_store)):
    store.set("config", body.config or {})
    store.set("ui", body.ui or {})
    return {"ok": True}


@app.get("/api/config")
def get_config(store: SettingsStore = Depends(get_store)):
    return store.get("config", {})


@app.put("/api/config")
def put_config(body: dict[str, Any] | None = Body(default=None), store: SettingsStore = Depends(get_store)):
    store.set("config", body or {})
    return {"ok": True}


@app.get("/api/ui")
def get_ui(store: SettingsStore = Depends(get_store)):
    return store.get("ui", {})


@app.put("/api/ui")
def put_ui(body: dict[str, Any] | None = Body(default=None), store: SettingsStore = Depends(get_store)):
    store.set("ui", body or {})
    return {"ok": True}


@app.get("/api/lock-password")
def lock_password(settings: ServiceSettings = Depends(get_settings)):
    """The single shared password that unlocks the internal margins view."""
    return {"password": settings.lock_password}


# ═══════════════════════════════════════════════════════════════════════════
# Engine endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/api/config/defaults")
def get_config_defaults(base: EngineConfig = Depends(get_engine_config)):
    return base.model_dump(mode="json")


@app.post("/api/quote", response_model=QuoteResult)
def quote(req: QuoteRequest, base: EngineConfig = Depends(get_engine_config)):
    config = config_from_overrides(req.config, base)
    return compute_quote(config, req.scenario)


@app.post("/api/quote/terms", response_model=list[TermQuote])
def quote_terms(req: TermsRequest, base: EngineConfig = Depends(get_engine_config)):
    config = config_from_overrides(req.config, base)
    return compute_term_table(config, req.monthly_rate, req.commit_years, req.existing_fleet_units)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry points
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("SRS pricing service listening on port %s", settings.port)
    uvicorn.run("srs_pricing.api.server:app", host=settings.host, port=settings.port)


def clear_state_main():
    """Remove stored state files (run before a clean deploy)."""
    from srs_pricing.persistence.store import clear_state

    settings = get_settings()
    setup_logging(settings.log_level)
    clear_state(settings.data_dir)


if __name__ == "__main__":
    main()
