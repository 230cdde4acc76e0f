"""
routing module

Builds per-vessel visiting sequences with a time-window-aware nearest-neighbor
heuristic.
"""

from .nearest_neighbor import (
    arrival_hour,
    build_route,
    solve_route,
    merge_routes,
)

__all__ = [
    'arrival_hour',
    'build_route',
    'solve_route',
    'merge_routes',
]
