"""Exceptions raised by the routing engine."""


class FleetRouteError(Exception):
    """Base class for every error raised by fleetroute."""


class InputError(FleetRouteError, ValueError):
    """Raised when vessels, ports or options are missing or malformed."""


class InvalidCoordinateError(InputError):
    """Raised when a latitude or longitude is missing or not a finite number."""

    def __init__(self, message: str, point=None):
        super().__init__(message)
        self.point = point


class OptimizationTimeout(FleetRouteError, TimeoutError):
    """Raised when an optimization run exceeds its caller-supplied time limit."""

    def __init__(self, stage: str, elapsed: float, limit: float):
        super().__init__(
            f"Optimization exceeded its time limit of {limit:.3f}s "
            f"during {stage} (elapsed {elapsed:.3f}s)"
        )
        self.stage = stage
        self.elapsed = elapsed
        self.limit = limit
