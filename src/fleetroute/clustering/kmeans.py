"""
Proximity-based port clustering.

Ports are partitioned with a k-means style loop whose representatives are
always real ports (a medoid-like update), because every representative must
be a stop a vessel can actually visit.
"""
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from sklearn.metrics import pairwise_distances

from fleetroute.exceptions import InputError
from fleetroute.geo.distance import coordinate_array, haversine_matrix
from fleetroute.models import Port
from fleetroute.utils.deadline import Deadline

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100


def _kmeans(
    coords: np.ndarray,
    k: int,
    max_iterations: int = MAX_ITERATIONS,
    deadline: Optional[Deadline] = None
) -> Tuple[np.ndarray, List[int], int]:
    """
    Partition coordinates around ``k`` representative points.

    Args:
        coords: ``(n, 2)`` array of ``[lat, lng]`` with ``n > k``.
        k: Number of representatives; the first ``k`` rows seed them.
        max_iterations: Upper bound on assignment/update rounds.
        deadline: Checked before every round.

    Returns:
        Tuple containing:
        - cluster label per row (index of its representative)
        - row index of each representative
        - number of rounds performed
    """
    deadline = deadline or Deadline()
    representatives = list(range(k))
    labels = np.zeros(len(coords), dtype=int)
    rounds = 0

    while rounds < max_iterations:
        deadline.check('clustering')
        rounds += 1

        # argmin returns the first minimum, so ties go to the earliest representative
        distances = haversine_matrix(coords, coords[representatives])
        labels = np.argmin(distances, axis=1)

        changed = False
        for idx in range(k):
            members = np.flatnonzero(labels == idx)
            if members.size == 0:
                continue
            mean = coords[members].mean(axis=0, keepdims=True)
            offsets = pairwise_distances(coords[members], mean, metric='euclidean').ravel()
            closest = int(members[np.argmin(offsets)])
            if closest != representatives[idx]:
                representatives[idx] = closest
                changed = True

        logger.debug(f"Clustering round {rounds}: representatives {representatives}")
        if not changed:
            break

    return labels, representatives, rounds


def cluster_ports(
    ports: Sequence[Port],
    k: int,
    max_iterations: int = MAX_ITERATIONS,
    deadline: Optional[Deadline] = None
) -> List[List[Port]]:
    """
    Group ports into at most ``k`` non-empty spatial clusters.

    When there are no more ports than clusters every port becomes its own
    cluster. Otherwise the first ``k`` ports seed the representatives and the
    partition is refined until no representative changes or
    ``max_iterations`` rounds have run. Members keep their input order.

    Args:
        ports: Ports to cluster.
        k: Maximum number of clusters (usually the number of vessels).
        max_iterations: Upper bound on refinement rounds.
        deadline: Optional time limit checked between rounds.

    Returns:
        List of port groups; every port appears in exactly one group.
    """
    if not isinstance(k, (int, np.integer)) or k < 1:
        raise InputError(f"Number of clusters must be a positive integer. Got: {k}")
    if max_iterations < 1:
        raise InputError(f"max_iterations must be positive. Got: {max_iterations}")

    ports = list(ports)
    if len(ports) <= k:
        logger.debug(f"{len(ports)} ports for {k} clusters: one cluster per port")
        return [[port] for port in ports]

    coords = coordinate_array(ports)
    labels, representatives, rounds = _kmeans(coords, k, max_iterations, deadline)

    clusters = [
        [ports[i] for i in np.flatnonzero(labels == idx)]
        for idx in range(k)
    ]
    clusters = [cluster for cluster in clusters if cluster]
    logger.debug(
        f"Clustered {len(ports)} ports into {len(clusters)} clusters in {rounds} rounds"
    )
    return clusters
