"""Configuration for the routing engine."""

from .parameters import Parameters, DEFAULT_CONFIG_PATH

__all__ = ['Parameters', 'DEFAULT_CONFIG_PATH']
