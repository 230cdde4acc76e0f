"""
clustering module

This module groups demand ports into spatial clusters, one per vessel.
"""

from .kmeans import cluster_ports, MAX_ITERATIONS

__all__ = [
    'cluster_ports',
    'MAX_ITERATIONS',
]
