"""
assignment module

Pairs vessels with port clusters by capacity and demand ranking.
"""

from .fleet import assign_vessels, cluster_demand

__all__ = [
    'assign_vessels',
    'cluster_demand',
]
