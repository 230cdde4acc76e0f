"""
Cost model for vessel routes.

A route costs fuel, port charges, operating and crew expenses, all
proportional to voyage days except port charges, which are per call. The
fleet breakdown adds a maintenance component per nautical mile and an
advisory savings figure used only in reports.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

import pandas as pd

from fleetroute.config.parameters import Parameters
from fleetroute.exceptions import InputError
from fleetroute.geo.distance import voyage_fuel
from fleetroute.models import Port, Route, Vessel


CATEGORIES = ('fuel', 'port_charges', 'operating', 'crew', 'maintenance')


def route_cost_components(
    time_hours: float,
    stops: int,
    vessel: Vessel,
    params: Optional[Parameters] = None
) -> Dict[str, float]:
    """
    Cost components of a voyage in USD.

    Args:
        time_hours: Sailing time in hours.
        stops: Number of port calls.
        vessel: Vessel sailing the route.
        params: Cost rates; defaults to :class:`Parameters`.

    Returns:
        Dictionary with ``fuel``, ``port_charges``, ``operating`` and ``crew``.
    """
    params = params or Parameters()
    days = time_hours / 24
    return {
        'fuel': days * vessel.fuel_consumption.at_sea * params.fuel_price,
        'port_charges': stops * params.avg_port_charge,
        'operating': days * vessel.daily_operating_cost,
        'crew': days * vessel.crew * params.crew_day_rate,
    }


def route_cost(time_hours: float, stops: int, vessel: Vessel,
               params: Optional[Parameters] = None) -> float:
    """Total cost of a voyage in USD."""
    return sum(route_cost_components(time_hours, stops, vessel, params).values())


def single_port_cost_components(vessel: Vessel, port: Port,
                                params: Optional[Parameters] = None) -> Dict[str, float]:
    """Cost of serving a single port: its berthing fee plus one day of operation and crew."""
    params = params or Parameters()
    berthing = port.berthing_fee if port.berthing_fee is not None else params.avg_port_charge
    return {
        'fuel': 0.0,
        'port_charges': float(berthing),
        'operating': float(vessel.daily_operating_cost),
        'crew': vessel.crew * params.crew_day_rate,
    }


def single_port_cost(vessel: Vessel, port: Port, params: Optional[Parameters] = None) -> float:
    return sum(single_port_cost_components(vessel, port, params).values())


def route_components(route: Route, vessel: Vessel,
                     params: Optional[Parameters] = None) -> Dict[str, float]:
    """Split an existing route's cost into its components (maintenance excluded)."""
    if route.stops == 0:
        return {'fuel': 0.0, 'port_charges': 0.0, 'operating': 0.0, 'crew': 0.0}
    if route.stops == 1:
        return single_port_cost_components(vessel, route.ports[0], params)
    return route_cost_components(route.time, route.stops, vessel, params)


def _vessel_lookup(vessels: Sequence[Vessel]) -> Dict:
    return {vessel.id: vessel for vessel in vessels}


def _route_vessel(route: Route, lookup: Dict) -> Vessel:
    try:
        return lookup[route.vessel_id]
    except KeyError:
        raise InputError(f"Route references unknown vessel {route.vessel_id!r}") from None


@dataclass
class CostBreakdown:
    """Fleet cost per category in USD."""
    fuel: float = 0.0
    port_charges: float = 0.0
    operating: float = 0.0
    crew: float = 0.0
    maintenance: float = 0.0
    savings_potential: float = 0.0
    savings_by_category: Dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return sum(getattr(self, category) for category in CATEGORIES)

    def shares(self) -> Dict[str, float]:
        """Percentage of the total per category (all zero when the total is zero)."""
        total = self.total
        return {
            category: (getattr(self, category) / total * 100) if total > 0 else 0.0
            for category in CATEGORIES
        }

    def to_dict(self) -> Dict:
        data = {category: getattr(self, category) for category in CATEGORIES}
        data.update({
            'total': self.total,
            'shares': self.shares(),
            'savings_potential': self.savings_potential,
        })
        return data

    def to_dataframe(self) -> pd.DataFrame:
        shares = self.shares()
        return pd.DataFrame([
            {'Category': category, 'Cost': getattr(self, category), 'Share_Pct': shares[category]}
            for category in CATEGORIES
        ])


def fleet_cost_breakdown(
    routes: Sequence[Route],
    vessels: Sequence[Vessel],
    params: Optional[Parameters] = None
) -> CostBreakdown:
    """
    Aggregate route costs by category for reporting.

    The savings potential is an advisory figure (a share of fuel, port charges
    and the total) that never feeds back into route construction.
    """
    params = params or Parameters()
    lookup = _vessel_lookup(vessels)
    breakdown = CostBreakdown()

    for route in routes:
        vessel = _route_vessel(route, lookup)
        for category, cost in route_components(route, vessel, params).items():
            setattr(breakdown, category, getattr(breakdown, category) + cost)
        breakdown.maintenance += route.distance * params.maintenance_per_nm

    rates = params.savings_rates
    breakdown.savings_by_category = {
        'fuel': breakdown.fuel * rates['fuel'],
        'port_charges': breakdown.port_charges * rates['port_charges'],
        'total': breakdown.total * rates['total'],
    }
    breakdown.savings_potential = sum(breakdown.savings_by_category.values())
    return breakdown


def vessel_utilization(routes: Sequence[Route], vessels: Sequence[Vessel]) -> float:
    """
    Share of fleet capacity that received at least one route, in percent.

    This is the activated share of the fleet, not a cargo load factor. A
    vessel with several routes counts once.
    """
    total_capacity = sum(vessel.capacity for vessel in vessels)
    if total_capacity <= 0:
        return 0.0
    routed = {route.vessel_id for route in routes}
    used_capacity = sum(vessel.capacity for vessel in vessels if vessel.id in routed)
    return used_capacity / total_capacity * 100


def efficiency_label(cost_per_nm: float) -> str:
    if cost_per_nm < 50:
        return 'Excellent'
    if cost_per_nm < 80:
        return 'Good'
    if cost_per_nm < 120:
        return 'Average'
    return 'Needs Improvement'


def vessel_cost_summary(
    routes: Sequence[Route],
    vessels: Sequence[Vessel],
    params: Optional[Parameters] = None
) -> pd.DataFrame:
    """
    One row per route with its cost components, maintenance and efficiency.

    ``Est_Fuel_Tons`` adds port-call burn (``params.port_days_per_call`` days per
    stop) to the sailing burn.
    """
    params = params or Parameters()
    lookup = _vessel_lookup(vessels)
    rows = []
    for route in routes:
        vessel = _route_vessel(route, lookup)
        components = route_components(route, vessel, params)
        maintenance = route.distance * params.maintenance_per_nm
        total = sum(components.values()) + maintenance
        # Routes without sailing have no per-mile figure; rate them as average
        cost_per_nm = total / route.distance if route.distance > 0 else 100.0
        rows.append({
            'Vessel_ID': vessel.id,
            'Vessel_Name': vessel.name,
            'Stops': route.stops,
            'Distance_NM': route.distance,
            'Fuel': components['fuel'],
            'Port_Charges': components['port_charges'],
            'Operating': components['operating'],
            'Crew': components['crew'],
            'Maintenance': maintenance,
            'Est_Fuel_Tons': voyage_fuel(
                route.distance, vessel, port_days=params.port_days_per_call * route.stops
            )['total'],
            'Total': total,
            'Cost_Per_NM': cost_per_nm,
            'Efficiency': efficiency_label(cost_per_nm),
        })
    return pd.DataFrame(rows, columns=[
        'Vessel_ID', 'Vessel_Name', 'Stops', 'Distance_NM', 'Fuel', 'Port_Charges',
        'Operating', 'Crew', 'Maintenance', 'Est_Fuel_Tons', 'Total', 'Cost_Per_NM', 'Efficiency'
    ])
