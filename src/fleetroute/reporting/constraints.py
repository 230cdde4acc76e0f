"""
Advisory checks for the constraints the heuristic does not enforce.

``max_days_per_trip``, ``min_vessel_utilization`` and ``min_cargo_fill_rate``
are evaluated after the routes are built. Violations are logged and returned
as advisories; they never change the routes.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from fleetroute.models import Assignment, Constraints, Route

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConstraintAdvisory:
    """A constraint that the computed plan does not meet."""
    constraint: str
    subject: Any
    actual: float
    limit: float
    message: str

    def to_dict(self) -> Dict:
        return {
            'constraint': self.constraint,
            'subject': self.subject,
            'actual': self.actual,
            'limit': self.limit,
            'message': self.message,
        }


def cargo_fill_rate(assignment: Assignment) -> float:
    """Percentage of the vessel's capacity the cluster's demand would fill."""
    capacity = assignment.vessel.capacity
    if capacity <= 0:
        return 0.0
    return min(assignment.demand, capacity) / capacity * 100


def evaluate_constraints(
    routes: Sequence[Route],
    assignments: Sequence[Assignment],
    utilization: float,
    constraints: Constraints
) -> List[ConstraintAdvisory]:
    """
    Compare a plan against the advisory constraints.

    Args:
        routes: Routes of the plan.
        assignments: Vessel/cluster pairs the routes were built from.
        utilization: Fleet utilization in percent.
        constraints: Routing options holding the limits.

    Returns:
        One advisory per violated limit, in route/assignment order.
    """
    advisories = []

    if constraints.max_days_per_trip is not None:
        for route in routes:
            days = route.time / 24
            if days > constraints.max_days_per_trip:
                advisories.append(ConstraintAdvisory(
                    constraint='max_days_per_trip',
                    subject=route.vessel_id,
                    actual=days,
                    limit=constraints.max_days_per_trip,
                    message=(
                        f"Route of {route.vessel_id} takes {days:.1f} days, "
                        f"above the {constraints.max_days_per_trip} day limit"
                    ),
                ))

    if constraints.min_vessel_utilization is not None:
        if utilization < constraints.min_vessel_utilization:
            advisories.append(ConstraintAdvisory(
                constraint='min_vessel_utilization',
                subject='fleet',
                actual=utilization,
                limit=constraints.min_vessel_utilization,
                message=(
                    f"Fleet utilization {utilization:.1f}% is below "
                    f"{constraints.min_vessel_utilization}%"
                ),
            ))

    if constraints.min_cargo_fill_rate is not None:
        for assignment in assignments:
            fill = cargo_fill_rate(assignment)
            if fill < constraints.min_cargo_fill_rate:
                advisories.append(ConstraintAdvisory(
                    constraint='min_cargo_fill_rate',
                    subject=assignment.vessel.id,
                    actual=fill,
                    limit=constraints.min_cargo_fill_rate,
                    message=(
                        f"Cluster {assignment.cluster_index} fills {fill:.1f}% of "
                        f"{assignment.vessel.id}, below {constraints.min_cargo_fill_rate}%"
                    ),
                ))

    for advisory in advisories:
        logger.warning(f"Advisory ({advisory.constraint}): {advisory.message}")
    return advisories
