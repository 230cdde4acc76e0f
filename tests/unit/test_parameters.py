import pytest

from fleetroute.config.parameters import Parameters, DEFAULT_CONFIG_PATH
from fleetroute.exceptions import InputError
from fleetroute.models import TimeWindow


def test_default_yaml_matches_dataclass_defaults():
    assert Parameters.from_yaml() == Parameters()
    assert Parameters.from_yaml(DEFAULT_CONFIG_PATH).fuel_price == 600


def test_empty_yaml_gives_defaults(tmp_path):
    empty = tmp_path / 'empty.yaml'
    empty.write_text("")
    assert Parameters.from_yaml(str(empty)) == Parameters()


def test_partial_savings_rates_keep_defaults():
    params = Parameters(savings_rates={'fuel': 0.2})
    assert params.savings_rates == {'fuel': 0.2, 'port_charges': 0.10, 'total': 0.08}


@pytest.mark.parametrize("kwargs", [
    {'fuel_price': -1},
    {'avg_port_charge': 'cheap'},
    {'max_cluster_iterations': 0},
    {'max_cluster_iterations': 2.5},
    {'savings_rates': {'insurance': 0.1}},
    {'savings_rates': {'fuel': 1.5}},
])
def test_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        Parameters(**kwargs)


def test_invalid_default_time_window():
    with pytest.raises(InputError):
        Parameters(default_time_window={'open': -2, 'close': 24})


def test_unknown_yaml_key(tmp_path):
    bad_yaml = tmp_path / 'bad.yaml'
    bad_yaml.write_text("fuel_price: 600\nwarp_speed: 9\n")
    with pytest.raises(TypeError):
        Parameters.from_yaml(str(bad_yaml))


def test_time_window_property():
    params = Parameters(default_time_window={'open': 6, 'close': 18})
    assert params.time_window == TimeWindow(6, 18)
