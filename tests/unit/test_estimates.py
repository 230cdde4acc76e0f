import logging
import math

import pytest

from fleetroute.models import Vessel
from fleetroute.reporting import DemandEstimate, demand_capacity_estimate
from conftest import make_port


@pytest.fixture
def fleet():
    return [
        Vessel(id='V1', capacity=3000, speed=12),
        Vessel(id='V2', capacity=1000, speed=10),
    ]


@pytest.fixture
def demand_ports():
    return [
        make_port('P1', 0, 0, solar_demand=2500),
        make_port('P2', 0, 1, solar_demand=3500),
        make_port('P3', 0, 2),
    ]


def test_estimate_figures(fleet, demand_ports):
    estimate = demand_capacity_estimate(fleet, demand_ports)

    assert estimate.total_demand == 6000
    assert estimate.total_capacity == 4000
    assert estimate.utilization == pytest.approx(150)
    assert estimate.estimated_trips == 2
    assert estimate.min_vessels_needed == 2
    assert not estimate.overloaded


def test_estimate_applies_demand_overrides(fleet, demand_ports):
    estimate = demand_capacity_estimate(fleet, demand_ports, demands={'P3': 7000})

    assert estimate.total_demand == 13000
    assert estimate.estimated_trips == 4
    assert estimate.min_vessels_needed == 5
    assert estimate.overloaded


def test_estimate_accepts_records():
    estimate = demand_capacity_estimate(
        [{'id': 'V1', 'capacity': 500, 'speed': 10}],
        [{'id': 'A', 'location': {'lat': 0, 'lng': 0}, 'demand': {'solar': 250}}],
    )
    assert estimate.utilization == pytest.approx(50)
    assert estimate.to_dict() == {
        'totalDemand': 250,
        'totalCapacity': 500,
        'utilization': pytest.approx(50),
        'estimatedTrips': 1,
        'minVesselsNeeded': 1,
    }


def test_overload_threshold_is_exclusive():
    at_limit = DemandEstimate(2000, 1000, 200.0, 2, 2)
    above = DemandEstimate(2001, 1000, 200.1, 3, 3)
    assert not at_limit.overloaded
    assert above.overloaded


@pytest.mark.parametrize("demand, utilization", [(0, 0.0), (100, math.inf)])
def test_fleet_without_capacity(demand, utilization):
    estimate = demand_capacity_estimate(
        [Vessel(id='V0', capacity=0, speed=10)],
        [make_port('P', 0, 0, solar_demand=demand)],
    )
    assert estimate.utilization == utilization
    assert estimate.estimated_trips is None
    assert estimate.min_vessels_needed is None
    assert estimate.overloaded == (demand > 0)


def test_empty_demand_needs_no_trips(fleet):
    estimate = demand_capacity_estimate(fleet, [make_port('P', 0, 0)])
    assert estimate.estimated_trips == 0
    assert estimate.min_vessels_needed == 0


def test_estimate_is_logged_at_debug(fleet, demand_ports, caplog):
    with caplog.at_level(logging.DEBUG, logger='fleetroute.reporting'):
        demand_capacity_estimate(fleet, demand_ports)
    assert "fleet capacity 4,000 t (150.0%)" in caplog.text
