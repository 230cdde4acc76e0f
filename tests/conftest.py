import pytest
from pathlib import Path

from fleetroute.models import Location, Port, Vessel

# Define project root for path fixtures
repo_root = Path(__file__).resolve().parent.parent


def make_port(port_id, lat, lng, **kwargs):
    return Port(id=port_id, name=kwargs.pop('name', port_id), location=Location(lat, lng), **kwargs)


@pytest.fixture(scope="session")
def bundled_scenario_path():
    """Path to the example scenario shipped with the package"""
    return repo_root / "src" / "fleetroute" / "data" / "indonesia_solar.yaml"


@pytest.fixture(autouse=True)
def tmp_results_dir(tmp_path, monkeypatch):
    """Redirect the results directory into a temp folder"""
    fake_results = tmp_path / "results"
    fake_results.mkdir()
    monkeypatch.setenv("FLEETROUTE_RESULTS_DIR", str(fake_results))
    return fake_results


@pytest.fixture
def equator_ports():
    """Three ports on the equator, 1 and 2 degrees of longitude apart"""
    return [
        make_port('P1', 0.0, 0.0),
        make_port('P2', 0.0, 1.0),
        make_port('P3', 0.0, 3.0),
    ]


@pytest.fixture
def vessel():
    return Vessel(id='V1', name='Test Tanker', capacity=5000, speed=10)


@pytest.fixture
def abc_ports():
    """Three Indonesian ports used in end-to-end runs"""
    return [
        {'id': 'A', 'name': 'A', 'location': {'lat': -6.10, 'lng': 106.80}},
        {'id': 'B', 'name': 'B', 'location': {'lat': -7.25, 'lng': 112.75}},
        {'id': 'C', 'name': 'C', 'location': {'lat': -1.27, 'lng': 116.83}},
    ]
