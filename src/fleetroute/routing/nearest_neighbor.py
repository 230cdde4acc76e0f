"""
Route construction for a single vessel.

A nearest-neighbor heuristic with soft time windows: from the current port
the vessel sails to the closest unvisited port whose daily window is open at
the projected arrival hour. When no window is open it sails to the closest
unvisited port regardless, so every port in the cluster is always reached.
"""
import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from fleetroute.config.parameters import Parameters
from fleetroute.costing.model import route_cost, single_port_cost
from fleetroute.geo.distance import haversine_distance, haversine_matrix
from fleetroute.models import (
    Constraints, Port, Route, TimeWindow, Vessel, normalize_time_windows
)
from fleetroute.utils.deadline import Deadline

logger = logging.getLogger(__name__)


def arrival_hour(distance: float, speed: float) -> float:
    """Hour of day (0-24) after sailing ``distance`` NM at ``speed`` knots from hour 0."""
    if speed <= 0:
        return 0.0
    return (distance / speed) % 24


def build_route(
    vessel: Vessel,
    ports: Sequence[Port],
    distance: float,
    params: Optional[Parameters] = None,
    closing_distance: float = 0.0,
    returns_to_start: bool = False
) -> Route:
    """Derive time, fuel and cost for a visiting sequence of known length."""
    time = distance / max(vessel.speed, 1)
    return Route(
        vessel_id=vessel.id,
        ports=tuple(ports),
        distance=distance,
        time=time,
        cost=route_cost(time, len(ports), vessel, params),
        fuel_consumption=(time / 24) * vessel.fuel_consumption.at_sea,
        closing_distance=closing_distance,
        returns_to_start=returns_to_start,
    )


def _nearest_neighbor_order(
    distances: np.ndarray,
    ports: Sequence[Port],
    speed: float,
    windows: Mapping[Any, TimeWindow],
    default_window: TimeWindow,
    deadline: Deadline,
    vessel_id: Any = None
) -> Tuple[List[int], float]:
    """
    Visiting order over ``ports`` starting at index 0.

    Returns:
        Tuple containing:
        - port indices in visiting order
        - distance sailed along that order (no closing leg)
    """
    n = len(ports)
    visited = [False] * n
    visited[0] = True
    order = [0]
    current = 0
    travelled = 0.0

    while len(order) < n:
        deadline.check('route construction')
        arrival = arrival_hour(travelled, speed)

        # Strict comparison keeps the earliest index on ties
        candidate = None
        for idx in range(n):
            if visited[idx]:
                continue
            window = windows.get(ports[idx].id, default_window)
            if not window.contains(arrival):
                continue
            if candidate is None or distances[current, idx] < distances[current, candidate]:
                candidate = idx

        if candidate is None:
            candidate = min(
                (idx for idx in range(n) if not visited[idx]),
                key=lambda idx: distances[current, idx]
            )
            logger.warning(
                f"No time window open at hour {arrival:.2f} for vessel {vessel_id} "
                f"after {ports[current].name}; falling back to nearest port {ports[candidate].name}"
            )

        visited[candidate] = True
        order.append(candidate)
        travelled += float(distances[current, candidate])
        current = candidate

    return order, travelled


def solve_route(
    vessel: Vessel,
    ports: Sequence[Port],
    time_windows: Optional[Mapping] = None,
    constraints: Optional[Constraints] = None,
    params: Optional[Parameters] = None,
    deadline: Optional[Deadline] = None
) -> Route:
    """
    Build the route of one vessel through one cluster of ports.

    The route starts at the cluster's first port in input order. With
    ``constraints.return_to_start`` the distance of the leg back to the first
    port is added, but the first port is not repeated in the visiting
    sequence.

    Args:
        vessel: Vessel sailing the route.
        ports: Ports of the cluster, in input order.
        time_windows: ``port_id -> TimeWindow`` (or ``{open, close}``) mapping;
            ports without an entry use ``params.default_time_window``.
        constraints: Routing options.
        params: Cost rates and defaults.
        deadline: Optional time limit checked at every step.

    Returns:
        The constructed route.
    """
    ports = tuple(ports)
    constraints = constraints or Constraints()
    params = params or Parameters()
    deadline = deadline or Deadline()

    if not ports:
        return Route(vessel_id=vessel.id)

    if len(ports) == 1:
        return Route(
            vessel_id=vessel.id,
            ports=ports,
            cost=single_port_cost(vessel, ports[0], params),
        )

    if vessel.speed <= 0:
        logger.warning(
            f"Vessel {vessel.id} has non-positive speed {vessel.speed}; "
            "time estimates assume 1 knot and every arrival falls at hour 0"
        )

    distances = haversine_matrix(ports)
    order, travelled = _nearest_neighbor_order(
        distances,
        ports,
        vessel.speed,
        normalize_time_windows(time_windows),
        params.time_window,
        deadline,
        vessel_id=vessel.id
    )

    closing = 0.0
    if constraints.return_to_start:
        closing = float(distances[order[-1], order[0]])

    route = build_route(
        vessel,
        [ports[idx] for idx in order],
        travelled + closing,
        params,
        closing_distance=closing,
        returns_to_start=constraints.return_to_start,
    )
    logger.debug(
        f"Route for {vessel.id}: {route.port_sequence} "
        f"({route.distance:.1f} NM, {route.time:.1f} h)"
    )
    return route


def merge_routes(vessel: Vessel, routes: Sequence[Route],
                 params: Optional[Parameters] = None) -> Route:
    """
    Combine several routes of one vessel into a single multi-leg itinerary.

    Legs are sailed in the given order. Each leg contributes its open
    distance, a connecting run joins the last port of one leg to the first
    port of the next, and when any leg returns to start a single closing leg
    runs from the final port back to the first port of the itinerary. Time,
    fuel and cost are recomputed over the whole itinerary.
    """
    routes = [route for route in routes if route.ports]
    if not routes:
        return Route(vessel_id=vessel.id)
    if len(routes) == 1:
        return routes[0]

    ports: List[Port] = []
    distance = 0.0
    for route in routes:
        if ports:
            distance += haversine_distance(ports[-1], route.ports[0])
        ports.extend(route.ports)
        distance += route.distance - route.closing_distance

    returns_to_start = any(route.returns_to_start for route in routes)
    closing = haversine_distance(ports[-1], ports[0]) if returns_to_start else 0.0

    logger.info(f"Merged {len(routes)} routes of vessel {vessel.id} into one itinerary")
    return build_route(
        vessel,
        ports,
        distance + closing,
        params,
        closing_distance=closing,
        returns_to_start=returns_to_start,
    )
