"""Location input schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ResolveLocationRequest(BaseModel):
    input: str = Field(..., description="Raw 'lat,lng', map link or shortened map link.")


class CoordinateModel(BaseModel):
    latitude: float
    longitude: float
    map_link: str
