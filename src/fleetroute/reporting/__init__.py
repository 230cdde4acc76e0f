"""
reporting module

Advisory evaluation of constraints that route construction does not enforce,
and the pre-run estimate of demand against fleet capacity.
"""

from .constraints import ConstraintAdvisory, cargo_fill_rate, evaluate_constraints
from .estimates import OVERLOAD_FACTOR, DemandEstimate, demand_capacity_estimate

__all__ = [
    'ConstraintAdvisory',
    'cargo_fill_rate',
    'evaluate_constraints',
    'OVERLOAD_FACTOR',
    'DemandEstimate',
    'demand_capacity_estimate',
]
