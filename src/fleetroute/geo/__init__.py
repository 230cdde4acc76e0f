"""
geo module

Great-circle distances between ports and helpers that turn routes into
coordinates for map rendering.
"""

from .distance import (
    EARTH_RADIUS_KM,
    KM_TO_NM,
    coordinate_array,
    haversine_distance,
    haversine_matrix,
    route_distance,
    great_circle_points,
    route_path,
    sailing_time,
    voyage_fuel,
)

__all__ = [
    'EARTH_RADIUS_KM',
    'KM_TO_NM',
    'coordinate_array',
    'haversine_distance',
    'haversine_matrix',
    'route_distance',
    'great_circle_points',
    'route_path',
    'sailing_time',
    'voyage_fuel',
]
