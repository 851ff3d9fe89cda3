from __future__ import annotations
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from flight_service.sources import RandomSource


class CatalogError(ValueError):
    """The airport catalog cannot produce a route (fewer than two airports)."""


class Airport(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    lat: float
    lon: float


# Mirrors the airport service so the flight service has no startup ordering on it
AIRPORTS: Tuple[Airport, ...] = (
    Airport(code="JFK", name="John F. Kennedy Intl", lat=40.6413, lon=-73.7781),
    Airport(code="LAX", name="Los Angeles Intl", lat=33.9416, lon=-118.4085),
    Airport(code="ORD", name="Chicago O'Hare Intl", lat=41.9742, lon=-87.9073),
    Airport(code="DFW", name="Dallas/Fort Worth Intl", lat=32.8998, lon=-97.0403),
    Airport(code="YYZ", name="Toronto Pearson", lat=43.6777, lon=-79.6248),
    Airport(code="CDG", name="Paris Charles de Gaulle", lat=49.0097, lon=2.5479),
    Airport(code="LHR", name="London Heathrow", lat=51.4700, lon=-0.4543),
    Airport(code="DXB", name="Dubai Intl", lat=25.2532, lon=55.3657),
    Airport(code="HND", name="Tokyo Haneda", lat=35.5494, lon=139.7798),
    Airport(code="SYD", name="Sydney", lat=-33.9399, lon=151.1753),
)


def ensure_routable(airports: Sequence[Airport]) -> None:
    if len(airports) < 2:
        raise CatalogError(f"need at least 2 airports to build a route, got {len(airports)}")


def find_airport(code: str, airports: Sequence[Airport] = AIRPORTS) -> Optional[Airport]:
    for a in airports:
        if a.code == code:
            return a
    return None


def _pick(rng: RandomSource, airports: Sequence[Airport]) -> Airport:
    return airports[int(rng.random() * len(airports))]


def pick_route(rng: RandomSource, airports: Sequence[Airport] = AIRPORTS) -> Tuple[Airport, Airport]:
    """Uniformly pick an (origin, destination) pair, resampling until they differ."""
    ensure_routable(airports)
    origin = _pick(rng, airports)
    destination = _pick(rng, airports)
    while destination.code == origin.code:
        destination = _pick(rng, airports)
    return origin, destination
