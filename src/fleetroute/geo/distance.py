"""
Great-circle distance, interpolation and voyage estimates.

Every optimization decision goes through :func:`haversine_matrix`, so pairwise
distances computed for clustering and routing use the same formula as the
scalar :func:`haversine_distance`. Distances are in nautical miles on a sphere
of radius 6371 km.
"""
import math
from numbers import Real
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from sklearn.metrics.pairwise import haversine_distances

from fleetroute.exceptions import InvalidCoordinateError
from fleetroute.models import Location, Route, Vessel

EARTH_RADIUS_KM = 6371.0
KM_TO_NM = 0.539957

# Multiplicative adjustments to sailing time
CURRENT_FACTORS = {'against': 1.15, 'with': 0.9}
WEATHER_FACTORS = {'stormy': 1.3, 'calm': 0.95}


def _coordinates(point) -> Tuple[float, float]:
    """Extract a validated ``(lat, lng)`` pair from a port, location, mapping or pair."""
    source = point
    if hasattr(point, 'location'):
        point = point.location
    if isinstance(point, Location):
        lat, lng = point.as_tuple()
    elif isinstance(point, Mapping):
        lat = point.get('lat', point.get('latitude'))
        lng = point.get('lng', point.get('longitude'))
    else:
        try:
            lat, lng = point
        except (TypeError, ValueError):
            raise InvalidCoordinateError(f"Invalid coordinates: {source!r}", source) from None

    for value in (lat, lng):
        if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
            raise InvalidCoordinateError(
                f"Invalid coordinates: lat={lat!r}, lng={lng!r}", source
            )
    return float(lat), float(lng)


def coordinate_array(points) -> np.ndarray:
    """
    Convert points to an ``(n, 2)`` array of ``[lat, lng]`` degrees.

    Args:
        points: Sequence of ports, locations, ``{lat, lng}`` mappings or
            ``(lat, lng)`` pairs, or an existing ``(n, 2)`` array.

    Returns:
        Float array of shape ``(n, 2)``.

    Raises:
        InvalidCoordinateError: If any latitude or longitude is missing or
            not a finite number.
    """
    if isinstance(points, np.ndarray):
        coords = np.asarray(points, dtype=float).reshape(-1, 2)
        if not np.isfinite(coords).all():
            bad = coords[~np.isfinite(coords).all(axis=1)][0]
            raise InvalidCoordinateError(f"Invalid coordinates: {bad.tolist()}", bad.tolist())
        return coords
    pairs = [_coordinates(point) for point in points]
    if not pairs:
        return np.empty((0, 2))
    return np.array(pairs, dtype=float)


def haversine_matrix(origins, destinations=None) -> np.ndarray:
    """
    Pairwise great-circle distances in nautical miles.

    Args:
        origins: Points accepted by :func:`coordinate_array`.
        destinations: Points for the columns; defaults to ``origins``.

    Returns:
        Array of shape ``(len(origins), len(destinations))``.
    """
    rows = np.radians(coordinate_array(origins))
    cols = rows if destinations is None else np.radians(coordinate_array(destinations))
    if len(rows) == 0 or len(cols) == 0:
        return np.zeros((len(rows), len(cols)))
    return haversine_distances(rows, cols) * EARTH_RADIUS_KM * KM_TO_NM


def haversine_distance(a, b) -> float:
    """Great-circle distance between two points in nautical miles."""
    return float(haversine_matrix([a], [b])[0, 0])


def route_distance(points: Sequence) -> float:
    """Sum of the legs between consecutive points, in nautical miles."""
    if len(points) < 2:
        return 0.0
    distances = haversine_matrix(points)
    return float(sum(distances[i, i + 1] for i in range(len(points) - 1)))


def great_circle_points(a, b, n: int = 10) -> List[Location]:
    """
    Interpolate ``n + 1`` points along the great circle from ``a`` to ``b``.

    Used to draw routes on a map; the optimizer never uses these points.

    Args:
        a: Start point.
        b: End point.
        n: Number of segments.

    Returns:
        Locations from ``a`` to ``b`` inclusive.
    """
    if n < 1:
        raise ValueError(f"n must be a positive integer. Got: {n}")
    lat1, lng1 = _coordinates(a)
    lat2, lng2 = _coordinates(b)
    phi1, lam1, phi2, lam2 = np.radians([lat1, lng1, lat2, lng2])

    delta = 2 * np.arcsin(np.sqrt(
        np.sin((phi2 - phi1) / 2) ** 2
        + np.cos(phi1) * np.cos(phi2) * np.sin((lam2 - lam1) / 2) ** 2
    ))
    if delta == 0:
        return [Location(lat1, lng1) for _ in range(n + 1)]
    if abs(np.sin(delta)) < 1e-12:
        raise ValueError("Great-circle path between antipodal points is not unique")

    fraction = np.linspace(0.0, 1.0, n + 1)
    weight_a = np.sin((1 - fraction) * delta) / np.sin(delta)
    weight_b = np.sin(fraction * delta) / np.sin(delta)

    x = weight_a * np.cos(phi1) * np.cos(lam1) + weight_b * np.cos(phi2) * np.cos(lam2)
    y = weight_a * np.cos(phi1) * np.sin(lam1) + weight_b * np.cos(phi2) * np.sin(lam2)
    z = weight_a * np.sin(phi1) + weight_b * np.sin(phi2)

    lats = np.degrees(np.arctan2(z, np.sqrt(x ** 2 + y ** 2)))
    lngs = np.degrees(np.arctan2(y, x))
    return [Location(float(lat), float(lng)) for lat, lng in zip(lats, lngs)]


def route_path(route: Route, points_per_leg: int = 10) -> List[Dict[str, float]]:
    """
    Coordinates of a route for map rendering.

    The path follows the visiting sequence along great circles and includes
    the closing leg when the route returns to its first port.

    Returns:
        List of ``{'lat': ..., 'lng': ...}`` dictionaries.
    """
    stops = list(route.ports)
    if route.returns_to_start and len(stops) > 1:
        stops.append(stops[0])
    if not stops:
        return []
    if len(stops) == 1:
        return [stops[0].location.to_dict()]

    path = [stops[0].location.to_dict()]
    for origin, destination in zip(stops, stops[1:]):
        leg = great_circle_points(origin, destination, points_per_leg)
        path.extend(point.to_dict() for point in leg[1:])
    return path


def sailing_time(distance: float, speed: float,
                 current: Optional[str] = None, weather: Optional[str] = None) -> float:
    """
    Sailing time in hours adjusted for sea conditions.

    Unknown condition labels leave the estimate unchanged. Returns 0 for a
    non-positive speed.
    """
    if speed <= 0:
        return 0.0
    adjustment = CURRENT_FACTORS.get(current, 1.0) * WEATHER_FACTORS.get(weather, 1.0)
    return distance / speed * adjustment


def voyage_fuel(distance: float, vessel: Vessel, port_days: float = 1.0,
                current: Optional[str] = None, weather: Optional[str] = None) -> Dict[str, float]:
    """Estimated fuel in tons for a voyage: at sea, at port and total."""
    if vessel.speed <= 0:
        return {'at_sea': 0.0, 'at_port': 0.0, 'total': 0.0}
    days_at_sea = sailing_time(distance, vessel.speed, current, weather) / 24
    at_sea = days_at_sea * vessel.fuel_consumption.at_sea
    at_port = port_days * vessel.fuel_consumption.at_port
    return {'at_sea': at_sea, 'at_port': at_port, 'total': at_sea + at_port}
