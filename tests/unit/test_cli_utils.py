import pytest
import yaml
from argparse import Namespace

from fleetroute.utils.cli import parse_args, get_parameter_overrides, load_parameters
from fleetroute.config.parameters import Parameters


def test_get_parameter_overrides_filters_none_and_keys():
    args = Namespace(
        config=None,
        scenario='ports.yaml',
        fuel_price=650.0,
        avg_port_charge=None,
        crew_day_rate=None,
        maintenance_per_nm=None,
        max_cluster_iterations=20,
        return_to_start=True,
        merge_shared_vessels=None,
        time_limit=5.0,
        verbose=True,
        format='json',
        output=None,
        info=False,
        help_params=False
    )
    overrides = get_parameter_overrides(args)
    # Only include non-None and parameter keys
    assert overrides == {'fuel_price': 650.0, 'max_cluster_iterations': 20}


def test_parse_args_invalid_choice():
    parser = parse_args()
    with pytest.raises(SystemExit):
        parser.parse_args(['--format', 'csv'])


def test_parse_args_flags_default_to_none():
    args = parse_args().parse_args([])
    assert args.return_to_start is None
    assert args.merge_shared_vessels is None
    assert get_parameter_overrides(args) == {}


def test_load_parameters_from_config(tmp_path):
    yaml_path = tmp_path / 'cfg.yaml'
    with open(yaml_path, 'w') as f:
        yaml.safe_dump({'fuel_price': 700, 'crew_day_rate': 200}, f)
    args = parse_args().parse_args(['--config', str(yaml_path), '--crew-day-rate', '175'])
    params = load_parameters(args)
    assert isinstance(params, Parameters)
    assert params.fuel_price == 700
    assert params.crew_day_rate == 175
    assert params.avg_port_charge == 5000


def test_load_parameters_rejects_invalid_override():
    args = parse_args().parse_args(['--fuel-price', '-1'])
    with pytest.raises(ValueError):
        load_parameters(args)
