"""Places service module.

Geoapify geocoding plus nearby points-of-interest search.
"""

from .normalizer import normalize_place, normalize_places, primary_category
from .service import DEFAULT_LIMIT, DEFAULT_RADIUS, PlacesService

__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_RADIUS",
    "PlacesService",
    "normalize_place",
    "normalize_places",
    "primary_category",
]
