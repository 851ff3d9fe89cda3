from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# -------------------------
# Pydantic models
# -------------------------
class Flight(BaseModel):
    """A simulated flight. Serialized with the camelCase wire names."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    callsign: str
    origin: str = Field(alias="from")
    destination: str = Field(alias="to")
    lat: float
    lon: float
    heading: float
    speed_kts: int = Field(alias="speedKts")
    altitude_ft: int = Field(alias="altitudeFt")
    created_at: int = Field(alias="createdAt")  # ms since epoch
    updated_at: int = Field(alias="updatedAt")  # ms since epoch


class HealthResponse(BaseModel):
    status: str
    service: str
