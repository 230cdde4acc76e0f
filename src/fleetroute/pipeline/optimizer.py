"""
Fleet routing pipeline: validate, cluster, assign, route, aggregate.
"""
import logging
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from fleetroute.assignment import assign_vessels
from fleetroute.clustering import cluster_ports
from fleetroute.config.parameters import Parameters
from fleetroute.costing import vessel_utilization
from fleetroute.exceptions import InputError
from fleetroute.geo import coordinate_array
from fleetroute.models import (
    Constraints, OptimizationResult, Port, Route, TimeWindow, Vessel, normalize_time_windows
)
from fleetroute.reporting import OVERLOAD_FACTOR, demand_capacity_estimate, evaluate_constraints
from fleetroute.routing import merge_routes, solve_route
from fleetroute.utils.deadline import Deadline

logger = logging.getLogger(__name__)


def _unique(records: Sequence, kind: str) -> None:
    seen = set()
    for record in records:
        if record.id in seen:
            raise InputError(f"Duplicate {kind} id {record.id!r}")
        seen.add(record.id)


def _prepare_inputs(
    vessels,
    ports,
    time_windows,
    constraints,
    demands
) -> Tuple[List[Vessel], List[Port], Dict[Any, TimeWindow], Constraints, Dict[Any, float]]:
    """Normalize and validate every input before any computation."""
    if not vessels:
        raise InputError("No vessels provided")
    if not ports:
        raise InputError("No ports provided")

    vessels = [Vessel.from_dict(vessel) for vessel in vessels]
    ports = [Port.from_dict(port) for port in ports]
    _unique(vessels, 'vessel')
    _unique(ports, 'port')

    # Raises InvalidCoordinateError on the first bad coordinate
    coordinate_array(ports)

    windows = normalize_time_windows(time_windows)
    port_ids = {port.id for port in ports}
    unknown = [port_id for port_id in windows if port_id not in port_ids]
    if unknown:
        logger.debug(f"Ignoring time windows for ports not in this run: {unknown}")

    if demands is not None and not isinstance(demands, Mapping):
        raise InputError(f"Demands must be a mapping of port id to tons, got {demands!r}")
    demands = dict(demands or {})
    for port_id, demand in demands.items():
        if isinstance(demand, bool) or not isinstance(demand, Real) or demand < 0:
            raise InputError(f"Demand for port {port_id!r} must be a non-negative number, got {demand!r}")

    for vessel in vessels:
        if vessel.speed <= 0:
            logger.warning(f"Vessel {vessel.id} has non-positive speed {vessel.speed}")

    return vessels, ports, windows, Constraints.from_dict(constraints), demands


def _merge_shared_vessels(routes: Sequence[Route], vessels: Sequence[Vessel],
                          params: Parameters) -> List[Route]:
    """Merge routes sharing a vessel into one itinerary, keeping first-seen order."""
    lookup = {vessel.id: vessel for vessel in vessels}
    grouped: Dict[Any, List[Route]] = {}
    for route in routes:
        grouped.setdefault(route.vessel_id, []).append(route)
    return [
        merge_routes(lookup[vessel_id], vessel_routes, params)
        for vessel_id, vessel_routes in grouped.items()
    ]


def optimize(
    vessels: Sequence,
    ports: Sequence,
    time_windows: Optional[Mapping] = None,
    constraints=None,
    demands: Optional[Mapping[Any, float]] = None,
    params: Optional[Parameters] = None,
    time_limit: Optional[float] = None
) -> OptimizationResult:
    """
    Assign vessels to ports and build one route per assignment.

    Args:
        vessels: :class:`Vessel` instances or vessel records.
        ports: :class:`Port` instances or port records.
        time_windows: ``port_id -> {open, close}`` daily windows.
        constraints: :class:`Constraints` or a mapping such as
            ``{'returnToStart': True}``.
        demands: Optional ``port_id -> tons`` overrides used to rank clusters.
        params: Cost rates and algorithm settings.
        time_limit: Optional limit in seconds for the whole run.

    Returns:
        The routes and fleet totals. ``total_time`` is in days.

    Raises:
        InputError: If vessels or ports are empty or malformed.
        InvalidCoordinateError: If a port has missing or non-finite coordinates.
        OptimizationTimeout: If ``time_limit`` is exceeded; no partial result
            is returned.
    """
    vessels, ports, windows, constraints, demands = _prepare_inputs(
        vessels, ports, time_windows, constraints, demands
    )
    params = params or Parameters()
    deadline = Deadline(time_limit)

    logger.info(f"Optimizing routes for {len(vessels)} vessels across {len(ports)} ports")

    estimate = demand_capacity_estimate(vessels, ports, demands)
    if estimate.overloaded:
        logger.warning(
            f"Demand {estimate.total_demand:,.0f} t exceeds {OVERLOAD_FACTOR:g}x the fleet capacity "
            f"of {estimate.total_capacity:,.0f} t; routes will not carry the full demand"
        )

    clusters = cluster_ports(
        ports,
        len(vessels),
        max_iterations=params.max_cluster_iterations,
        deadline=deadline
    )
    deadline.check('assignment')
    assignments = assign_vessels(vessels, clusters, demands)

    routes = []
    for assignment in assignments:
        deadline.check('route construction')
        routes.append(solve_route(
            assignment.vessel,
            assignment.ports,
            windows,
            constraints,
            params,
            deadline
        ))

    if constraints.merge_shared_vessels:
        routes = _merge_shared_vessels(routes, vessels, params)

    deadline.check('aggregation')
    utilization = vessel_utilization(routes, vessels)
    advisories = evaluate_constraints(routes, assignments, utilization, constraints)

    result = OptimizationResult(
        routes=tuple(routes),
        total_cost=sum(route.cost for route in routes),
        total_distance=sum(route.distance for route in routes),
        total_time=sum(route.time for route in routes) / 24,
        vessel_utilization=utilization,
        advisories=tuple(advisories),
    )
    logger.info(
        f"Built {len(routes)} routes: {result.total_distance:,.1f} NM, "
        f"${result.total_cost:,.2f}, utilization {utilization:.1f}%"
    )
    return result
