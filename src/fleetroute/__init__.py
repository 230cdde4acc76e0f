"""
fleetroute

Heuristic fleet routing for vessels serving demand ports: ports are clustered
by proximity, clusters are paired with vessels by capacity and demand, and
each vessel's route is built with a time-window-aware nearest-neighbor
heuristic and priced with a simple cost model.
"""

from .exceptions import (
    FleetRouteError,
    InputError,
    InvalidCoordinateError,
    OptimizationTimeout,
)
from .models import (
    Location,
    Port,
    FuelConsumption,
    Vessel,
    TimeWindow,
    Constraints,
    Assignment,
    Route,
    OptimizationResult,
)
from .config import Parameters
from .pipeline import optimize

__version__ = '0.1.0'

__all__ = [
    'FleetRouteError',
    'InputError',
    'InvalidCoordinateError',
    'OptimizationTimeout',
    'Location',
    'Port',
    'FuelConsumption',
    'Vessel',
    'TimeWindow',
    'Constraints',
    'Assignment',
    'Route',
    'OptimizationResult',
    'Parameters',
    'optimize',
]
