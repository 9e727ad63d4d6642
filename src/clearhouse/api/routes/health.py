"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(request: Request) -> dict[str, object]:
    engine = request.app.state.engine
    holidays = engine.holidays if engine is not None else None
    return {
        "status": "ready" if engine is not None else "starting",
        "holidays_loaded": len(engine.calendar.calendar) if engine is not None else 0,
        "holidays_refreshed_at": (
            holidays.last_updated.isoformat() if holidays and holidays.last_updated else None
        ),
        "encryption": engine is not None and engine.envelope is not None,
    }
