"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool

from clearhouse.api.routes import business_days, health, nacha
from clearhouse.core.config import AppSettings
from clearhouse.core.log import configure_logging
from clearhouse.persistence import create_persistence
from clearhouse.services.engine import Engine, build_engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the engine unless one was injected, then warm the holiday calendar."""
    settings: AppSettings = app.state.settings
    configure_logging(settings)
    if getattr(app.state, "engine", None) is None:
        holiday_provider, _cache, file_store = create_persistence(settings)
        app.state.engine = build_engine(
            settings, holiday_provider=holiday_provider, file_store=file_store
        )
    engine: Engine = app.state.engine
    if engine.holidays is not None:
        await run_in_threadpool(engine.holidays.refresh_if_needed)
    yield


def create_app(settings: AppSettings | None = None, engine: Engine | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Clearhouse ACH/NACHA Engine",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or AppSettings()
    app.state.engine = engine
    app.include_router(health.router)
    app.include_router(business_days.router, prefix="/business-days")
    app.include_router(nacha.router, prefix="/nacha")
    return app
