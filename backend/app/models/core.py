"""Core data models for the Road Trip geo API.

Stable response contracts returned to callers, decoupled from the upstream
WeatherAPI.com, Geoapify and OpenRouteService schemas.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Keeps upstream integers as integers in the serialized payload.
Number = Union[int, float]


class WeatherPayload(BaseModel):
    """Current conditions for a location."""

    location: str = Field(..., description="Resolved location name")
    region: str = Field("", description="Region or state")
    country: str = Field("", description="Country name")
    temp_c: Number = Field(..., description="Temperature in Celsius")
    temp_f: Number = Field(..., description="Temperature in Fahrenheit")
    condition: str = Field(..., description="Condition text, e.g. 'Cloudy'")
    icon: str = Field(..., description="Protocol-relative icon URL")
    humidity: Number = Field(..., description="Relative humidity in percent")
    wind_kph: Number = Field(..., description="Wind speed in km/h")
    feels_like_c: Number = Field(..., description="Feels-like temperature in Celsius")
    last_updated: str = Field(..., description="Local time of the observation")


class DaySummary(BaseModel):
    maxtemp_c: Number
    mintemp_c: Number
    condition: str
    chance_of_rain: Number = Field(..., ge=0, le=100, description="Rain probability in percent")


class ForecastDay(BaseModel):
    date: str = Field(..., description="ISO date of the forecast day")
    day: DaySummary


class ForecastPayload(BaseModel):
    """Current conditions plus per-day summaries (max 7 days)."""

    location: str
    current: WeatherPayload
    forecast: list[ForecastDay] = Field(default_factory=list, max_length=7)


class Place(BaseModel):
    """A nearby point of interest."""

    id: str = Field(..., description="Geoapify place identifier")
    name: str = Field(..., min_length=1)
    address: str = ""
    category: str = Field(..., description="Most relevant Geoapify category")
    coordinates: list[float] = Field(..., min_length=2, max_length=2, description="[lon, lat]")
    distance: Optional[Number] = Field(None, description="Distance from the search center in meters")
    rating: Optional[Number] = None
    opening_hours: Optional[Any] = None


class PlacesPayload(BaseModel):
    location: str = Field(..., description="Formatted address of the search center")
    coordinates: list[float] = Field(..., min_length=2, max_length=2, description="[lon, lat]")
    places: list[Place] = Field(default_factory=list)


class RouteStep(BaseModel):
    """A single turn instruction."""

    instruction: str
    distance: str = Field(..., description="Kilometers, 2 decimal places")
    duration: str = Field(..., description="Minutes, 1 decimal place")


class RouteEndpoint(BaseModel):
    name: str
    coordinates: list[float] = Field(..., min_length=2, max_length=2, description="[lon, lat]")


class RoutePayload(BaseModel):
    """A computed route between two named locations."""

    model_config = ConfigDict(populate_by_name=True)

    distance: str = Field(..., description="Kilometers, 2 decimal places")
    duration: str = Field(..., description="Hours, 2 decimal places")
    polyline: list[list[float]] = Field(..., description="[lat, lon] pairs")
    instructions: list[RouteStep] = Field(default_factory=list)
    start_location: RouteEndpoint = Field(..., alias="startLocation")
    end_location: RouteEndpoint = Field(..., alias="endLocation")


class RouteRequest(BaseModel):
    """Body of a route computation request.

    Fields are optional here so that missing values are reported by the
    route service with its own validation messages.
    """

    model_config = ConfigDict(populate_by_name=True)

    start_location_name: Optional[str] = Field(None, alias="startLocationName")
    end_location_name: Optional[str] = Field(None, alias="endLocationName")
    profile: str = Field("driving-car", description="OpenRouteService routing profile")
