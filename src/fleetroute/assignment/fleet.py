"""Pairing vessels with port clusters."""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from fleetroute.exceptions import InputError
from fleetroute.models import Assignment, Port, Vessel

logger = logging.getLogger(__name__)


def _port_demand(port: Port, demands: Optional[Mapping[Any, float]]) -> float:
    if demands and port.id in demands:
        return float(demands[port.id])
    return float(port.solar_demand)


def cluster_demand(cluster: Sequence[Port], demands: Optional[Mapping[Any, float]] = None) -> float:
    """Aggregate solar demand of a cluster, with optional per-port overrides."""
    return sum(_port_demand(port, demands) for port in cluster)


def assign_vessels(
    vessels: Sequence[Vessel],
    clusters: Sequence[Sequence[Port]],
    demands: Optional[Mapping[Any, float]] = None
) -> List[Assignment]:
    """
    Pair vessels with clusters by capacity and demand rank.

    The largest vessel serves the cluster with the highest demand, the second
    largest the second, and so on. Clusters left over when there are more
    clusters than vessels all go to the largest vessel, each as its own
    assignment. Sorting is stable, so ties keep input order.

    Args:
        vessels: Fleet to assign.
        clusters: Port groups produced by the clusterer.
        demands: Optional ``port_id -> demand`` overrides of ``Port.solar_demand``.

    Returns:
        Assignments in cluster-demand order.
    """
    if not vessels:
        raise InputError("Cannot assign clusters without vessels")

    ranked_vessels = sorted(vessels, key=lambda vessel: vessel.capacity, reverse=True)
    ranked_clusters = sorted(
        ((index, tuple(cluster), cluster_demand(cluster, demands))
         for index, cluster in enumerate(clusters)),
        key=lambda item: item[2],
        reverse=True
    )

    assignments = []
    for rank, (index, ports, demand) in enumerate(ranked_clusters):
        if rank < len(ranked_vessels):
            vessel = ranked_vessels[rank]
        else:
            vessel = ranked_vessels[0]
            logger.info(
                f"More clusters than vessels: cluster {index} ({len(ports)} ports) "
                f"also assigned to {vessel.id}"
            )
        assignments.append(Assignment(vessel=vessel, ports=ports, cluster_index=index, demand=demand))

    return assignments
