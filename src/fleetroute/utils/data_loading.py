"""Loading routing scenarios from YAML or JSON files."""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from fleetroute.exceptions import InputError
from fleetroute.models import Constraints, Port, TimeWindow, Vessel, normalize_time_windows

logger = logging.getLogger(__name__)


def data_dir() -> Path:
    return Path(__file__).resolve().parent.parent / 'data'


def default_scenario_path() -> Path:
    """Bundled example: solar (diesel fuel) distribution across Indonesian ports."""
    return data_dir() / 'indonesia_solar.yaml'


@dataclass
class Scenario:
    """Inputs of one optimization run."""
    vessels: List[Vessel]
    ports: List[Port]
    time_windows: Dict[Any, TimeWindow] = field(default_factory=dict)
    constraints: Constraints = field(default_factory=Constraints)
    demands: Dict[Any, float] = field(default_factory=dict)


def load_scenario(path: Path | str) -> Scenario:
    """
    Load vessels, ports, time windows, constraints and demand overrides.

    Files ending in ``.json`` are parsed as JSON, everything else as YAML.
    Keys may use the dashboard's camelCase (``timeWindows``) or snake_case.

    Args:
        path: Scenario file.

    Returns:
        Normalized :class:`Scenario`.

    Raises:
        FileNotFoundError: If the file does not exist.
        InputError: If the file is not a mapping or a record is malformed.
    """
    path = Path(path)
    logger.info(f"Loading scenario from {path}")
    with open(path, encoding='utf-8') as f:
        if path.suffix.lower() == '.json':
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if not isinstance(data, Mapping):
        raise InputError(f"Scenario file {path} must contain a mapping at the top level")

    windows = data.get('time_windows', data.get('timeWindows'))
    return Scenario(
        vessels=[Vessel.from_dict(record) for record in data.get('vessels') or []],
        ports=[Port.from_dict(record) for record in data.get('ports') or []],
        time_windows=normalize_time_windows(windows),
        constraints=Constraints.from_dict(data.get('constraints')),
        demands=dict(data.get('demands') or {}),
    )
