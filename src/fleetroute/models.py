"""
Data model for the routing engine.

Ports, vessels, time windows and constraints are caller-owned inputs and are
never mutated. Routes and results are created fresh by every optimization
call. Each input record can be built from the dictionary shape used by the
dashboard (camelCase keys, nested ``location``/``demand``/``charges``) through
its ``from_dict`` constructor.
"""
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Tuple

from fleetroute.exceptions import InputError

PORT_TYPES = ('main_port', 'oil_terminal', 'transit_port', 'river_port')
VESSEL_STATUSES = ('available', 'loading', 'in_transit')

DEFAULT_FUEL_AT_SEA = 20.0         # tons/day
DEFAULT_FUEL_AT_PORT = 2.0         # tons/day
DEFAULT_DAILY_OPERATING_COST = 10000.0  # USD/day
DEFAULT_CREW = 15


def _pick(data: Mapping, *keys, default=None):
    """Return the value of the first key present in ``data``."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _number(value, name: str, owner, minimum: Optional[float] = None) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise InputError(f"{owner}: {name} must be a finite number, got {value!r}")
    if minimum is not None and value < minimum:
        raise InputError(f"{owner}: {name} must be >= {minimum}, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class Location:
    """A latitude/longitude pair in decimal degrees."""
    lat: float
    lng: float

    @classmethod
    def from_dict(cls, data) -> 'Location':
        if isinstance(data, cls):
            return data
        if isinstance(data, Mapping):
            return cls(
                lat=_pick(data, 'lat', 'latitude'),
                lng=_pick(data, 'lng', 'lon', 'longitude'),
            )
        try:
            lat, lng = data
        except (TypeError, ValueError):
            raise InputError(f"Cannot interpret {data!r} as a location") from None
        return cls(lat=lat, lng=lng)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lng)

    def to_dict(self) -> Dict:
        return {'lat': self.lat, 'lng': self.lng}


@dataclass(frozen=True)
class Port:
    """A demand port.

    ``berthing_fee`` of ``None`` means the port has no published fee and the
    average port charge from :class:`~fleetroute.config.parameters.Parameters`
    applies.
    """
    id: Any
    name: str
    location: Location
    code: str = ''
    solar_demand: float = 0.0
    depth: Optional[float] = None
    loading_rate: Optional[float] = None
    berthing_fee: Optional[float] = None
    operating_hours: str = '24/7'
    type: str = 'main_port'

    def __post_init__(self):
        if self.type not in PORT_TYPES:
            raise InputError(f"Port {self.id!r}: unknown port type {self.type!r}")
        _number(self.solar_demand, 'solar demand', f"Port {self.id!r}", minimum=0)
        if self.berthing_fee is not None:
            _number(self.berthing_fee, 'berthing fee', f"Port {self.id!r}", minimum=0)

    @classmethod
    def from_dict(cls, data) -> 'Port':
        """Build a port from a dashboard-style record."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping) or data.get('id') is None:
            raise InputError(f"Port record must be a mapping with an 'id', got {data!r}")

        location = data.get('location')
        if location is None:
            location = {
                'lat': _pick(data, 'lat', 'latitude'),
                'lng': _pick(data, 'lng', 'lon', 'longitude'),
            }

        demand = data.get('demand', {})
        if isinstance(demand, Mapping):
            demand = demand.get('solar', 0)
        demand = _pick(data, 'solar_demand', default=demand)

        capacity = data.get('capacity') or {}
        charges = data.get('charges') or {}
        return cls(
            id=data['id'],
            name=str(data.get('name', data['id'])),
            location=Location.from_dict(location),
            code=str(data.get('code', '')),
            solar_demand=demand or 0,
            depth=_pick(capacity, 'depth', default=data.get('depth')),
            loading_rate=_pick(capacity, 'loadingRate', 'loading_rate', 'berth',
                               default=data.get('loading_rate')),
            berthing_fee=_pick(charges, 'berthing', default=data.get('berthing_fee')),
            operating_hours=str(_pick(data, 'operatingHours', 'operating_hours', default='24/7')),
            type=data.get('type', 'main_port'),
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'code': self.code,
            'name': self.name,
            'location': self.location.to_dict(),
            'demand': {'solar': self.solar_demand},
            'capacity': {'depth': self.depth, 'loadingRate': self.loading_rate},
            'charges': {'berthing': self.berthing_fee},
            'operatingHours': self.operating_hours,
            'type': self.type,
        }


@dataclass(frozen=True)
class FuelConsumption:
    """Fuel burn in tons per day."""
    at_sea: float = DEFAULT_FUEL_AT_SEA
    at_port: float = DEFAULT_FUEL_AT_PORT


@dataclass(frozen=True)
class Vessel:
    """A vessel of the fleet.

    Attributes:
        id: Unique identifier.
        capacity: Cargo capacity in tons.
        speed: Service speed in knots. Non-positive speeds are tolerated by the
            engine but degrade time estimates.
        fuel_consumption: Fuel burn at sea and at port (tons/day).
        daily_operating_cost: USD per day.
        crew: Headcount.
    """
    id: Any
    capacity: float
    speed: float
    name: str = ''
    fuel_consumption: FuelConsumption = field(default_factory=FuelConsumption)
    daily_operating_cost: float = DEFAULT_DAILY_OPERATING_COST
    crew: int = DEFAULT_CREW
    status: str = 'available'
    type: str = ''

    def __post_init__(self):
        owner = f"Vessel {self.id!r}"
        _number(self.capacity, 'capacity', owner, minimum=0)
        _number(self.speed, 'speed', owner)
        _number(self.daily_operating_cost, 'daily operating cost', owner, minimum=0)
        _number(self.crew, 'crew', owner, minimum=0)
        _number(self.fuel_consumption.at_sea, 'fuel consumption at sea', owner, minimum=0)
        _number(self.fuel_consumption.at_port, 'fuel consumption at port', owner, minimum=0)
        if self.status not in VESSEL_STATUSES:
            raise InputError(f"{owner}: unknown status {self.status!r}")

    @classmethod
    def from_dict(cls, data) -> 'Vessel':
        """Build a vessel from a dashboard-style record, applying defaults."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping) or data.get('id') is None:
            raise InputError(f"Vessel record must be a mapping with an 'id', got {data!r}")
        if data.get('speed') is None:
            raise InputError(f"Vessel {data['id']!r}: speed is required")

        fuel = data.get('fuelConsumption', data.get('fuel_consumption')) or {}
        return cls(
            id=data['id'],
            name=str(data.get('name', '')),
            capacity=_pick(data, 'capacity', default=0),
            speed=data['speed'],
            fuel_consumption=FuelConsumption(
                at_sea=_pick(fuel, 'atSea', 'at_sea', default=DEFAULT_FUEL_AT_SEA),
                at_port=_pick(fuel, 'atPort', 'at_port', default=DEFAULT_FUEL_AT_PORT),
            ),
            daily_operating_cost=_pick(data, 'dailyOperatingCost', 'daily_operating_cost',
                                       default=DEFAULT_DAILY_OPERATING_COST),
            crew=_pick(data, 'crew', default=DEFAULT_CREW),
            status=data.get('status', 'available'),
            type=str(data.get('type', '')),
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'capacity': self.capacity,
            'speed': self.speed,
            'fuelConsumption': {
                'atSea': self.fuel_consumption.at_sea,
                'atPort': self.fuel_consumption.at_port,
            },
            'dailyOperatingCost': self.daily_operating_cost,
            'crew': self.crew,
            'status': self.status,
        }


@dataclass(frozen=True)
class TimeWindow:
    """Daily visiting window in hours on a recurring 24-hour cycle.

    A window whose ``open`` is later than its ``close`` wraps past midnight,
    e.g. ``TimeWindow(22, 6)`` accepts arrivals from 22:00 to 06:00.
    """
    open: float = 0.0
    close: float = 24.0

    def __post_init__(self):
        for name in ('open', 'close'):
            value = _number(getattr(self, name), name, 'Time window')
            if not 0 <= value <= 24:
                raise InputError(f"Time window {name} must be within [0, 24], got {value}")

    def contains(self, hour: float) -> bool:
        if self.open <= self.close:
            return self.open <= hour <= self.close
        return hour >= self.open or hour <= self.close

    @classmethod
    def from_dict(cls, data) -> 'TimeWindow':
        if isinstance(data, cls):
            return data
        if isinstance(data, Mapping):
            return cls(open=data.get('open', 0.0), close=data.get('close', 24.0))
        try:
            opens, closes = data
        except (TypeError, ValueError):
            raise InputError(f"Cannot interpret {data!r} as a time window") from None
        return cls(open=opens, close=closes)

    def to_dict(self) -> Dict:
        return {'open': self.open, 'close': self.close}


def normalize_time_windows(windows: Optional[Mapping]) -> Dict[Any, TimeWindow]:
    """Convert a ``port_id -> window`` mapping into :class:`TimeWindow` values."""
    if not windows:
        return {}
    if not isinstance(windows, Mapping):
        raise InputError(f"Time windows must be a mapping of port id to window, got {windows!r}")
    return {port_id: TimeWindow.from_dict(window) for port_id, window in windows.items()}


# camelCase keys used by the dashboard, mapped to field names
_CONSTRAINT_KEYS = {
    'returnToStart': 'return_to_start',
    'maxDaysPerTrip': 'max_days_per_trip',
    'minVesselUtilization': 'min_vessel_utilization',
    'minCargoFillRate': 'min_cargo_fill_rate',
    'mergeSharedVessels': 'merge_shared_vessels',
}


@dataclass(frozen=True)
class Constraints:
    """Routing options.

    Only ``return_to_start`` and ``merge_shared_vessels`` change how routes are
    built. ``max_days_per_trip``, ``min_vessel_utilization`` (percent) and
    ``min_cargo_fill_rate`` (percent) are advisory: they are checked after the
    routes are built and reported, never enforced. Unrecognized keys are kept
    in ``extra``.
    """
    return_to_start: bool = False
    max_days_per_trip: Optional[float] = None
    min_vessel_utilization: Optional[float] = None
    min_cargo_fill_rate: Optional[float] = None
    merge_shared_vessels: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        for flag in ('return_to_start', 'merge_shared_vessels'):
            value = getattr(self, flag)
            if not isinstance(value, bool):
                raise InputError(f"Constraints: {flag} must be true or false, got {value!r}")
        if self.max_days_per_trip is not None:
            _number(self.max_days_per_trip, 'max days per trip', 'Constraints', minimum=0)
        for name in ('min_vessel_utilization', 'min_cargo_fill_rate'):
            value = getattr(self, name)
            if value is not None and not 0 <= _number(value, name, 'Constraints') <= 100:
                raise InputError(f"Constraints: {name} must be a percentage in [0, 100], got {value}")

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> 'Constraints':
        if isinstance(data, cls):
            return data
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise InputError(f"Constraints must be a mapping, got {data!r}")
        known = {}
        extra = {}
        for key, value in data.items():
            name = _CONSTRAINT_KEYS.get(key, key)
            if name in _CONSTRAINT_KEYS.values():
                known[name] = value
            else:
                extra[key] = value
        return cls(extra=extra, **known)


@dataclass(frozen=True)
class Assignment:
    """A vessel paired with the cluster of ports it serves."""
    vessel: Vessel
    ports: Tuple[Port, ...]
    cluster_index: int
    demand: float = 0.0


@dataclass(frozen=True)
class Route:
    """Visiting sequence of one vessel with its distance, time and cost.

    ``distance`` is in nautical miles and includes the closing leg back to the
    first port when ``returns_to_start`` is set; the first port is not
    repeated in ``ports``. ``time`` is in hours, ``fuel_consumption`` in tons.
    """
    vessel_id: Any
    ports: Tuple[Port, ...] = ()
    distance: float = 0.0
    time: float = 0.0
    cost: float = 0.0
    fuel_consumption: float = 0.0
    closing_distance: float = 0.0
    returns_to_start: bool = False

    @property
    def stops(self) -> int:
        return len(self.ports)

    @property
    def port_sequence(self) -> str:
        return ' → '.join(port.name for port in self.ports)

    def to_dict(self) -> Dict:
        """Convert route to dictionary format."""
        return {
            'Vessel_ID': self.vessel_id,
            'Ports': [port.id for port in self.ports],
            'Port_Sequence': self.port_sequence,
            'Stops': self.stops,
            'Distance_NM': self.distance,
            'Closing_Distance_NM': self.closing_distance,
            'Time_Hours': self.time,
            'Cost': self.cost,
            'Fuel_Consumption': self.fuel_consumption,
            'Returns_To_Start': self.returns_to_start,
        }


@dataclass(frozen=True)
class OptimizationResult:
    """Fleet-level outcome of one optimization call.

    ``total_time`` is in days; ``vessel_utilization`` is the percentage of
    fleet capacity that received at least one route.
    """
    routes: Tuple[Route, ...]
    total_cost: float
    total_distance: float
    total_time: float
    vessel_utilization: float
    advisories: Tuple[Any, ...] = ()

    def to_dict(self) -> Dict:
        return {
            'routes': [route.to_dict() for route in self.routes],
            'totalCost': self.total_cost,
            'totalDistance': self.total_distance,
            'totalTime': self.total_time,
            'vesselUtilization': self.vessel_utilization,
            'advisories': [advisory.to_dict() for advisory in self.advisories],
        }
