"""
pipeline module

Runs the full routing pipeline over caller-supplied vessels and ports.
"""

from .optimizer import optimize

__all__ = ['optimize']
