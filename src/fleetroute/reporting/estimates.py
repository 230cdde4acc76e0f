"""
Pre-run comparison of fleet capacity against total port demand.

The estimate is computed before clustering so a run whose demand far exceeds
what the fleet can carry is flagged up front. It is advisory only.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from fleetroute.assignment import cluster_demand
from fleetroute.models import Port, Vessel

logger = logging.getLogger(__name__)

# Demand above this multiple of fleet capacity is reported as overloaded
OVERLOAD_FACTOR = 2.0


@dataclass(frozen=True)
class DemandEstimate:
    """Fleet-level demand and capacity figures for one run.

    ``estimated_trips`` and ``min_vessels_needed`` are ``None`` when the
    fleet has no capacity at all.
    """
    total_demand: float
    total_capacity: float
    utilization: float
    estimated_trips: Optional[int]
    min_vessels_needed: Optional[int]

    @property
    def overloaded(self) -> bool:
        return self.total_demand > self.total_capacity * OVERLOAD_FACTOR

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalDemand': self.total_demand,
            'totalCapacity': self.total_capacity,
            'utilization': self.utilization,
            'estimatedTrips': self.estimated_trips,
            'minVesselsNeeded': self.min_vessels_needed,
        }


def demand_capacity_estimate(
    vessels: Sequence,
    ports: Sequence,
    demands: Optional[Mapping[Any, float]] = None
) -> DemandEstimate:
    """
    Compare the total solar demand of ``ports`` with the fleet's capacity.

    Args:
        vessels: :class:`Vessel` instances or vessel records.
        ports: :class:`Port` instances or port records.
        demands: Optional ``port_id -> tons`` overrides of ``Port.solar_demand``.

    Returns:
        Total demand and capacity in tons, demand as a percentage of capacity,
        the number of full-fleet trips needed and the number of largest
        vessels needed to carry the demand in one trip each.
    """
    vessels = [Vessel.from_dict(vessel) for vessel in vessels]
    ports = [Port.from_dict(port) for port in ports]

    total_demand = cluster_demand(ports, demands)
    total_capacity = float(sum(vessel.capacity for vessel in vessels))
    largest = max((vessel.capacity for vessel in vessels), default=0)

    if total_capacity > 0:
        utilization = total_demand / total_capacity * 100
        estimated_trips = math.ceil(total_demand / total_capacity)
        min_vessels_needed = math.ceil(total_demand / largest)
    else:
        utilization = math.inf if total_demand > 0 else 0.0
        estimated_trips = None
        min_vessels_needed = None

    estimate = DemandEstimate(
        total_demand=total_demand,
        total_capacity=total_capacity,
        utilization=utilization,
        estimated_trips=estimated_trips,
        min_vessels_needed=min_vessels_needed,
    )
    logger.debug(
        f"Demand {total_demand:,.0f} t against fleet capacity {total_capacity:,.0f} t "
        f"({utilization:.1f}%)"
    )
    return estimate
