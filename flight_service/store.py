from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence

from threading import Lock

import logging
import random
import secrets

from flight_service.airports import AIRPORTS, Airport, ensure_routable
from flight_service.flights import generate_flight, tick
from flight_service.models import Flight
from flight_service.sources import RandomSource

logger = logging.getLogger(__name__)

FLIGHT_COUNT = 20


def new_flight_id() -> str:
    """8-character URL-safe identifier."""
    return secrets.token_urlsafe(6)


class FlightStore:
    """In-memory flights keyed by id.

    Flights advance only when they are read. Each id has its own lock so two
    concurrent reads never double-advance the same flight; different flights
    tick independently.
    """

    def __init__(
        self,
        flights: Iterable[Flight] = (),
        rng: Optional[RandomSource] = None,
        airports: Sequence[Airport] = AIRPORTS,
    ):
        ensure_routable(airports)
        self._airports = tuple(airports)
        self._rng = rng if rng is not None else random.Random()
        self._flights: Dict[str, Flight] = {}
        self._locks: Dict[str, Lock] = {}
        self._registry_lock = Lock()
        for f in flights:
            self.add(f)

    @classmethod
    def populate(
        cls,
        now_ms: int,
        rng: RandomSource,
        count: int = FLIGHT_COUNT,
        airports: Sequence[Airport] = AIRPORTS,
        callsign_prefix: str = "CC",
    ) -> "FlightStore":
        store = cls(rng=rng, airports=airports)
        for _ in range(count):
            fid = new_flight_id()
            while fid in store:
                fid = new_flight_id()
            store.add(generate_flight(fid, now_ms, rng, store._airports, callsign_prefix))
        logger.info("Flight store populated with %d flights", len(store))
        return store

    def add(self, flight: Flight) -> None:
        with self._registry_lock:
            if flight.id in self._flights:
                raise ValueError(f"duplicate flight id: {flight.id}")
            self._flights[flight.id] = flight
            self._locks[flight.id] = Lock()

    def __len__(self) -> int:
        return len(self._flights)

    def __contains__(self, flight_id: object) -> bool:
        return flight_id in self._flights

    def ids(self) -> List[str]:
        with self._registry_lock:
            return list(self._flights)

    def _tick(self, flight_id: str, now_ms: int) -> Flight:
        # snapshot under the lock so callers never serialize a half-ticked flight
        with self._locks[flight_id]:
            return tick(self._flights[flight_id], now_ms, self._rng, self._airports).model_copy()

    def list_flights(self, now_ms: int) -> List[Flight]:
        """Tick and return every flight, in insertion order."""
        return [self._tick(fid, now_ms) for fid in self.ids()]

    def get_flight(self, flight_id: str, now_ms: int) -> Optional[Flight]:
        """Tick and return one flight, or None when the id is unknown."""
        if flight_id not in self._flights:
            return None
        return self._tick(flight_id, now_ms)
