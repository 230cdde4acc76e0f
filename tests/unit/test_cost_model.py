import pytest
from hypothesis import given, strategies as st

from fleetroute.config.parameters import Parameters
from fleetroute.costing import (
    CATEGORIES,
    efficiency_label,
    fleet_cost_breakdown,
    route_cost,
    route_cost_components,
    single_port_cost,
    vessel_cost_summary,
    vessel_utilization,
)
from fleetroute.exceptions import InputError
from fleetroute.models import FuelConsumption, Route, Vessel
from fleetroute.routing import build_route
from conftest import make_port


def test_route_cost_components(vessel):
    components = route_cost_components(48, 3, vessel)
    assert components == pytest.approx({
        'fuel': 24000,
        'port_charges': 15000,
        'operating': 20000,
        'crew': 4500,
    })
    assert route_cost(48, 3, vessel) == pytest.approx(63500)


def test_route_cost_uses_vessel_profile():
    vessel = Vessel(
        id='V2', capacity=15000, speed=13,
        fuel_consumption=FuelConsumption(at_sea=30, at_port=3),
        daily_operating_cost=12000, crew=20
    )
    params = Parameters(fuel_price=500, avg_port_charge=1000, crew_day_rate=100)
    # One day: fuel 30*500, ports 2*1000, operating 12000, crew 20*100
    assert route_cost(24, 2, vessel, params) == pytest.approx(15000 + 2000 + 12000 + 2000)


def test_zero_crew_stays_zero():
    vessel = Vessel(id='V', capacity=100, speed=10, crew=0)
    assert route_cost_components(24, 1, vessel)['crew'] == 0


def test_single_port_cost(vessel):
    assert single_port_cost(vessel, make_port('P', 0, 0, berthing_fee=3000)) == pytest.approx(15250)
    assert single_port_cost(vessel, make_port('P', 0, 0)) == pytest.approx(17250)


def test_fleet_cost_breakdown(vessel):
    port = make_port('P', 0, 0, berthing_fee=5000)
    singleton = Route(vessel_id='V1', ports=(port,), cost=17250)
    breakdown = fleet_cost_breakdown([singleton], [vessel])

    assert breakdown.port_charges == pytest.approx(5000)
    assert breakdown.operating == pytest.approx(10000)
    assert breakdown.crew == pytest.approx(2250)
    assert breakdown.fuel == 0
    assert breakdown.maintenance == 0
    assert breakdown.total == pytest.approx(singleton.cost)
    assert breakdown.savings_by_category == pytest.approx({
        'fuel': 0.0,
        'port_charges': 500.0,
        'total': 17250 * 0.08,
    })
    assert breakdown.savings_potential == pytest.approx(500 + 1380)


def test_breakdown_matches_route_costs_plus_maintenance(vessel, equator_ports):
    route = build_route(vessel, equator_ports, distance=480)
    breakdown = fleet_cost_breakdown([route], [vessel])
    assert breakdown.total == pytest.approx(route.cost + 480 * 0.8)
    assert sum(breakdown.shares().values()) == pytest.approx(100)
    assert set(breakdown.to_dict()['shares']) == set(CATEGORIES)


def test_empty_breakdown_has_zero_shares():
    breakdown = fleet_cost_breakdown([], [])
    assert breakdown.total == 0
    assert all(share == 0 for share in breakdown.shares().values())


def test_breakdown_unknown_vessel(vessel):
    with pytest.raises(InputError):
        fleet_cost_breakdown([Route(vessel_id='ghost')], [vessel])


def test_vessel_utilization_counts_each_vessel_once():
    vessels = [Vessel(id='V1', capacity=5000, speed=14), Vessel(id='V2', capacity=15000, speed=13)]
    routes = [Route(vessel_id='V2'), Route(vessel_id='V2')]
    assert vessel_utilization(routes, vessels) == pytest.approx(75)
    assert vessel_utilization([], vessels) == 0
    assert vessel_utilization(routes, [Vessel(id='V2', capacity=0, speed=1)]) == 0


@given(
    st.lists(st.floats(min_value=0, max_value=1e6, allow_nan=False), min_size=1, max_size=8),
    st.data(),
)
def test_vessel_utilization_is_a_percentage(capacities, data):
    vessels = [Vessel(id=i, capacity=c, speed=10) for i, c in enumerate(capacities)]
    routed = data.draw(st.lists(st.sampled_from(range(len(vessels)))))
    utilization = vessel_utilization([Route(vessel_id=i) for i in routed], vessels)
    assert 0 <= utilization <= 100 + 1e-9


@pytest.mark.parametrize("cost_per_nm, label", [
    (10, 'Excellent'),
    (50, 'Good'),
    (79.9, 'Good'),
    (100, 'Average'),
    (120, 'Needs Improvement'),
])
def test_efficiency_label(cost_per_nm, label):
    assert efficiency_label(cost_per_nm) == label


def test_vessel_cost_summary(vessel, equator_ports):
    sailing = build_route(vessel, equator_ports, distance=480)
    singleton = Route(vessel_id='V1', ports=(equator_ports[0],))
    df = vessel_cost_summary([sailing, singleton], [vessel])

    assert list(df['Stops']) == [3, 1]
    assert df.loc[0, 'Total'] == pytest.approx(sailing.cost + 480 * 0.8)
    assert df.loc[0, 'Cost_Per_NM'] == pytest.approx(df.loc[0, 'Total'] / 480)
    assert df.loc[1, 'Cost_Per_NM'] == 100
    assert df.loc[1, 'Efficiency'] == 'Average'
    # Two days at sea plus one day at berth per stop
    assert df.loc[0, 'Est_Fuel_Tons'] == pytest.approx(2 * 20 + 3 * 2)
