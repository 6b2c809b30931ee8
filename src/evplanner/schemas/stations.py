"""Station request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class StationModel(BaseModel):
    id: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    power_kw: float = Field(..., ge=0)
    price_per_kwh: float = Field(..., ge=0)
    free_slots: int = Field(..., ge=0)
    total_slots: int = Field(..., ge=0)
    estimated_wait_minutes: Optional[float] = Field(default=None, ge=0)
    name: Optional[str] = None
    address: Optional[str] = None
    connector_type: Optional[str] = None
    rating: Optional[float] = None
    status: Optional[str] = None


class StationFiltersModel(BaseModel):
    connector_types: List[str] = Field(default_factory=list)
    min_power_kw: float = Field(default=0.0, ge=0)
    max_price_per_kwh: Optional[float] = Field(default=None, ge=0)
    min_rating: float = Field(default=0.0, ge=0)


class NearbyStationModel(StationModel):
    distance_km: Optional[float] = None


class StationListResponse(BaseModel):
    count: int
    stations: List[NearbyStationModel]
    metadata: dict
