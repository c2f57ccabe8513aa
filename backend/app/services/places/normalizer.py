"""Geoapify response normalization."""

from typing import Any, Optional

from app.models import Place, PlacesPayload

FALLBACK_CATEGORY = "Attraction"
UNNAMED_PLACE = "Unnamed Place"


def primary_category(categories: Optional[list[str]]) -> str:
    """Pick the most relevant category.

    Tourism categories win, then whatever Geoapify listed first.
    """
    if not categories:
        return FALLBACK_CATEGORY
    for category in categories:
        if category.startswith("tourism"):
            return category
    return categories[0]


def normalize_place(feature: dict[str, Any]) -> Place | None:
    """Convert a Geoapify feature into a ``Place``; None if it has no name."""
    props = feature["properties"]
    name = (props.get("name") or "").strip() or UNNAMED_PLACE
    if name == UNNAMED_PLACE:
        return None

    place_id = props.get("place_id")
    return Place(
        id="" if place_id is None else str(place_id),
        name=name,
        address=props.get("address_line2") or props.get("address_line1") or "",
        category=primary_category(props.get("categories")),
        coordinates=list(feature["geometry"]["coordinates"][:2]),
        distance=props.get("distance"),
        rating=props.get("rating"),
        opening_hours=props.get("opening_hours"),
    )


def normalize_places(geocode_feature: dict[str, Any], places_payload: dict[str, Any]) -> PlacesPayload:
    """Combine the resolved search center with its nearby places."""
    center = geocode_feature["properties"]
    places = [normalize_place(feature) for feature in places_payload.get("features", [])]
    return PlacesPayload(
        location=center.get("formatted", ""),
        coordinates=[center["lon"], center["lat"]],
        places=[place for place in places if place is not None],
    )
