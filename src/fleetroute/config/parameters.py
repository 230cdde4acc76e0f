from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict
import yaml

from fleetroute.models import TimeWindow

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'default_config.yaml'

DEFAULT_SAVINGS_RATES = {'fuel': 0.15, 'port_charges': 0.10, 'total': 0.08}


@dataclass
class Parameters:
    """Cost rates and algorithm settings for the routing engine.

    The dataclass defaults mirror ``default_config.yaml`` so the engine can run
    without touching the filesystem.
    """
    fuel_price: float = 600.0
    avg_port_charge: float = 5000.0
    crew_day_rate: float = 150.0
    maintenance_per_nm: float = 0.8
    max_cluster_iterations: int = 100
    port_days_per_call: float = 1.0
    savings_rates: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_SAVINGS_RATES))
    default_time_window: Dict[str, float] = field(default_factory=lambda: {'open': 0.0, 'close': 24.0})

    @classmethod
    def from_yaml(cls, path: Path | str = None) -> 'Parameters':
        """Load parameters from YAML file"""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        with open(path) as f:
            data = yaml.safe_load(f) or {}
            return cls(**data)

    def __post_init__(self):
        """Validate parameters after initialization"""
        for name in ('fuel_price', 'avg_port_charge', 'crew_day_rate',
                     'maintenance_per_nm', 'port_days_per_call'):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"{name} must be a non-negative number. Got: {value}")

        if not isinstance(self.max_cluster_iterations, int) or self.max_cluster_iterations <= 0:
            raise ValueError(
                f"max_cluster_iterations must be a positive integer. Got: {self.max_cluster_iterations}"
            )

        # Partial overrides keep the remaining default shares
        self.savings_rates = {**DEFAULT_SAVINGS_RATES, **(self.savings_rates or {})}
        unknown = set(self.savings_rates) - set(DEFAULT_SAVINGS_RATES)
        if unknown:
            raise ValueError(f"Unknown savings categories: {sorted(unknown)}")
        for category, rate in self.savings_rates.items():
            if not 0 <= rate <= 1:
                raise ValueError(f"Savings rate for {category} must be within [0, 1]. Got: {rate}")

        # Raises InputError (a ValueError) on malformed hours
        TimeWindow.from_dict(self.default_time_window)

    @property
    def time_window(self) -> TimeWindow:
        """Window applied to ports without their own time window."""
        return TimeWindow.from_dict(self.default_time_window)
