import json

import pytest

from fleetroute.exceptions import InputError
from fleetroute.models import TimeWindow
from fleetroute.utils.data_loading import default_scenario_path, load_scenario


def test_bundled_scenario(bundled_scenario_path):
    assert default_scenario_path().name == bundled_scenario_path.name

    scenario = load_scenario(default_scenario_path())
    assert [vessel.id for vessel in scenario.vessels] == ['V001', 'V002', 'V003']
    assert len(scenario.ports) == 7
    assert scenario.constraints.return_to_start is True
    assert scenario.constraints.max_days_per_trip == 14
    assert scenario.time_windows['P007'] == TimeWindow(22, 10)

    pontianak = next(port for port in scenario.ports if port.name == 'Pontianak')
    assert pontianak.berthing_fee is None
    assert pontianak.operating_hours == '06:00-18:00'


def test_json_scenario_with_camel_case_keys(tmp_path):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps({
        'vessels': [{'id': 'V1', 'capacity': 100, 'speed': 10}],
        'ports': [{'id': 'A', 'lat': 0, 'lng': 0}],
        'timeWindows': {'A': {'open': 6, 'close': 18}},
        'constraints': {'mergeSharedVessels': True},
        'demands': {'A': 50},
    }))
    scenario = load_scenario(path)
    assert scenario.time_windows == {'A': TimeWindow(6, 18)}
    assert scenario.constraints.merge_shared_vessels is True
    assert scenario.demands == {'A': 50}


def test_missing_sections_default_to_empty(tmp_path):
    path = tmp_path / "scenario.yaml"
    path.write_text("vessels: []\n")
    scenario = load_scenario(str(path))
    assert scenario.ports == []
    assert scenario.time_windows == {}


@pytest.mark.parametrize("content", ["- just\n- a list\n", ""])
def test_non_mapping_file(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(InputError):
        load_scenario(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_scenario(tmp_path / "missing.yaml")
