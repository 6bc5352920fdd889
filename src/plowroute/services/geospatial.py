"""Geospatial helper functions."""

from __future__ import annotations

import math

from ..errors import CoordinateValidationError
from ..models.domain import Coordinate

EARTH_RADIUS_MILES = 3959.0


def validate_coordinate(coordinate: Coordinate) -> Coordinate:
    """Return the coordinate unchanged, or raise if it is outside the valid range."""

    lat, lon = coordinate.latitude, coordinate.longitude
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise CoordinateValidationError(f"Coordinate ({lat}, {lon}) is not finite.")
    if not -90.0 <= lat <= 90.0:
        raise CoordinateValidationError(f"Latitude {lat} is outside [-90, 90].")
    if not -180.0 <= lon <= 180.0:
        raise CoordinateValidationError(f"Longitude {lon} is outside [-180, 180].")
    return coordinate


def haversine_miles(origin: Coordinate, destination: Coordinate) -> float:
    """Compute the great-circle distance between two coordinates in miles."""

    validate_coordinate(origin)
    validate_coordinate(destination)

    phi1, phi2 = math.radians(origin.latitude), math.radians(destination.latitude)
    d_phi = math.radians(destination.latitude - origin.latitude)
    d_lambda = math.radians(destination.longitude - origin.longitude)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c
