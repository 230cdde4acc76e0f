"""
costing module

Turns routes into monetary and fuel figures and aggregates them per fleet.
"""

from .model import (
    CATEGORIES,
    CostBreakdown,
    route_cost_components,
    route_cost,
    route_components,
    single_port_cost_components,
    single_port_cost,
    fleet_cost_breakdown,
    vessel_utilization,
    vessel_cost_summary,
    efficiency_label,
)

__all__ = [
    'CATEGORIES',
    'CostBreakdown',
    'route_cost_components',
    'route_cost',
    'route_components',
    'single_port_cost_components',
    'single_port_cost',
    'fleet_cost_breakdown',
    'vessel_utilization',
    'vessel_cost_summary',
    'efficiency_label',
]
