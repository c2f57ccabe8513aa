"""OpenRouteService directions normalization."""

import logging
from typing import Any

from app.models import RouteEndpoint, RoutePayload, RouteStep
from app.utils.polyline import decode_polyline

logger = logging.getLogger(__name__)


def meters_to_km(meters: float) -> str:
    return f"{meters / 1000:.2f}"


def seconds_to_hours(seconds: float) -> str:
    return f"{seconds / 3600:.2f}"


def seconds_to_minutes(seconds: float) -> str:
    return f"{seconds / 60:.1f}"


def straight_line(start_coords: list[float], end_coords: list[float]) -> list[list[float]]:
    """Two-point ``[lat, lon]`` line between ``[lon, lat]`` endpoints."""
    return [
        [start_coords[1], start_coords[0]],
        [end_coords[1], end_coords[0]],
    ]


def route_geometry(geometry: Any, start_coords: list[float], end_coords: list[float]) -> list[list[float]]:
    """Decode the route polyline, falling back to a straight line."""
    try:
        points = decode_polyline(geometry)
    except (ValueError, TypeError) as e:
        logger.warning(f"[ROUTE] Polyline decode failed, using straight line: {e}")
        return straight_line(start_coords, end_coords)
    if not points:
        logger.warning("[ROUTE] Route has no geometry, using straight line")
        return straight_line(start_coords, end_coords)
    return points


def normalize_steps(route: dict[str, Any]) -> list[RouteStep]:
    segments = route.get("segments") or []
    if not segments:
        return []
    return [
        RouteStep(
            instruction=step.get("instruction", ""),
            distance=meters_to_km(step.get("distance", 0)),
            duration=seconds_to_minutes(step.get("duration", 0)),
        )
        for step in segments[0].get("steps") or []
    ]


def normalize_route(
    route: dict[str, Any],
    start_name: str,
    end_name: str,
    start_coords: list[float],
    end_coords: list[float],
) -> RoutePayload:
    """Reshape the first route of a directions response."""
    summary = route["summary"]
    return RoutePayload(
        distance=meters_to_km(summary.get("distance", 0)),
        duration=seconds_to_hours(summary.get("duration", 0)),
        polyline=route_geometry(route.get("geometry"), start_coords, end_coords),
        instructions=normalize_steps(route),
        start_location=RouteEndpoint(name=start_name, coordinates=start_coords),
        end_location=RouteEndpoint(name=end_name, coordinates=end_coords),
    )
