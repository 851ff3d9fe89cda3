from __future__ import annotations
from typing import Sequence

import logging
import math

from flight_service.airports import AIRPORTS, Airport, find_airport, pick_route
from flight_service.geo import bearing_deg, destination_point, haversine_km, normalize_heading
from flight_service.models import Flight
from flight_service.sources import RandomSource

logger = logging.getLogger(__name__)

KT_TO_KMH = 1.852
MS_PER_HOUR = 3_600_000
ARRIVAL_RADIUS_KM = 30.0
HEADING_JITTER_DEG = 2.0

SPEED_MIN_KTS = 380
SPEED_SPAN_KTS = 180
ALTITUDE_MIN_FT = 28000
ALTITUDE_SPAN_FT = 12000
START_OFFSET_MIN_KM = 10.0
START_OFFSET_SPAN_KM = 50.0


# -------------------------
# Generator
# -------------------------
def generate_flight(
    flight_id: str,
    now_ms: int,
    rng: RandomSource,
    airports: Sequence[Airport] = AIRPORTS,
    callsign_prefix: str = "CC",
) -> Flight:
    """Create a flight already airborne a short way out of its origin."""
    origin, destination = pick_route(rng, airports)
    heading = bearing_deg(origin.lat, origin.lon, destination.lat, destination.lon)
    speed_kts = math.floor(SPEED_MIN_KTS + rng.random() * SPEED_SPAN_KTS)
    altitude_ft = math.floor(ALTITUDE_MIN_FT + rng.random() * ALTITUDE_SPAN_FT)
    callsign = f"{callsign_prefix}{math.floor(rng.random() * 10000):04d}"

    offset_km = START_OFFSET_MIN_KM + rng.random() * START_OFFSET_SPAN_KM
    lat, lon = destination_point(origin.lat, origin.lon, heading, offset_km)

    return Flight(
        id=flight_id,
        callsign=callsign,
        origin=origin.code,
        destination=destination.code,
        lat=lat,
        lon=lon,
        heading=heading,
        speed_kts=speed_kts,
        altitude_ft=altitude_ft,
        created_at=now_ms,
        updated_at=now_ms,
    )


# -------------------------
# Tick (dead reckoning)
# -------------------------
def tick(
    f: Flight,
    now_ms: int,
    rng: RandomSource,
    airports: Sequence[Airport] = AIRPORTS,
) -> Flight:
    """Advance a flight along its heading by the time elapsed since its last update.

    Mutates and returns ``f``. When the new position is within
    ``ARRIVAL_RADIUS_KM`` of the destination the flight is retargeted onto a
    fresh route from where it stands. A small heading wander is applied on
    every tick that moves the flight.
    """
    dt_hours = max(0, now_ms - f.updated_at) / MS_PER_HOUR
    if dt_hours <= 0:
        return f

    step_km = f.speed_kts * KT_TO_KMH * dt_hours
    f.lat, f.lon = destination_point(f.lat, f.lon, f.heading, step_km)
    f.updated_at = now_ms
    logger.debug("flight %s moved %.2f km to (%.4f, %.4f)", f.id, step_km, f.lat, f.lon)

    dest = find_airport(f.destination, airports)
    if dest is not None and haversine_km(f.lat, f.lon, dest.lat, dest.lon) < ARRIVAL_RADIUS_KM:
        origin, destination = pick_route(rng, airports)
        logger.info(
            "flight %s (%s) reached %s, re-routed %s -> %s",
            f.id, f.callsign, f.destination, origin.code, destination.code,
        )
        f.origin = origin.code
        f.destination = destination.code
        f.heading = bearing_deg(origin.lat, origin.lon, destination.lat, destination.lon)

    # small wander so tracks are not ruler-straight
    f.heading = normalize_heading(f.heading + (rng.random() * 2 - 1) * HEADING_JITTER_DEG)
    return f
