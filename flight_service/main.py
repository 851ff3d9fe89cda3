from __future__ import annotations
from typing import List, Optional

from contextlib import asynccontextmanager
import logging
import random

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from flight_service.config import Settings, get_settings
from flight_service.models import Flight, HealthResponse
from flight_service.sources import Clock, SystemClock
from flight_service.store import FlightStore

logger = logging.getLogger(__name__)

SERVICE_NAME = "flight-service"


def build_store(settings: Settings, clock: Clock) -> FlightStore:
    rng = random.Random(settings.random_seed)
    return FlightStore.populate(
        clock.now_ms(),
        rng,
        count=settings.flight_count,
        callsign_prefix=settings.callsign_prefix,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the fleet on startup unless one was injected."""
    if app.state.store is None:
        app.state.store = build_store(app.state.settings, app.state.clock)
    logger.info("%s ready with %d flights", SERVICE_NAME, len(app.state.store))
    yield


# -------------------------
# Dependencies
# -------------------------
def get_store(request: Request) -> FlightStore:
    store = request.app.state.store
    if store is None:
        raise HTTPException(status_code=503, detail="Flight store not initialised")
    return store


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


# -------------------------
# API routes
# -------------------------
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", service=SERVICE_NAME)


@router.get("/api/flights", response_model=List[Flight])
def list_flights(store: FlightStore = Depends(get_store), clock: Clock = Depends(get_clock)):
    return store.list_flights(clock.now_ms())


@router.get("/api/flights/{flight_id}", response_model=Flight)
def get_flight(flight_id: str, store: FlightStore = Depends(get_store), clock: Clock = Depends(get_clock)):
    f = store.get_flight(flight_id, clock.now_ms())
    if f is None:
        raise HTTPException(status_code=404, detail="Not found")
    return f


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[FlightStore] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """Application factory; serve with ``uvicorn --factory flight_service.main:create_app``."""
    settings = settings or get_settings()

    app = FastAPI(title="Flight Service", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.clock = clock or SystemClock()
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
