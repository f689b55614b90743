import json

import pytest

from habitatlayout.model.io import design_to_dict, dumps_design, export_design
from habitatlayout.model.state import AutoPartition, DesignState, reduce


@pytest.fixture
def state():
    return DesignState.initial()


def test_payload_layout(state):
    payload = design_to_dict(state)
    assert payload["envelope"] == {"type": "cylinder", "radius_m": 3.0, "height_m": 8.0}
    assert payload["crew"] == {"size": 4, "mission_days": 30}
    assert [z["id"] for z in payload["zones"]] == ["z-sleep", "z-work", "z-eclss", "z-storage"]
    assert payload["zones"][0] == {
        "id": "z-sleep",
        "name": "Sleep",
        "start": 0.0,
        "end": 90.0,
        "color": "#60a5fa",
        "purpose": "sleep",
    }


def test_axial_rank_exported_once_assigned(state):
    partitioned = reduce(state, AutoPartition(2))
    zones = design_to_dict(partitioned)["zones"]
    assert [z["axialRank"] for z in zones] == [0, 1, 0, 1]


def test_dumps_is_indented_json(state):
    text = dumps_design(state)
    assert text.startswith('{\n  "envelope"')
    assert json.loads(text) == design_to_dict(state)


def test_export_design_writes_file(tmp_path, state):
    target = tmp_path / "habitat_design.json"
    written = export_design(state, target)
    assert written == str(target)
    assert json.loads(target.read_text(encoding="utf-8")) == design_to_dict(state)


def test_export_design_propagates_os_errors(tmp_path, state):
    with pytest.raises(OSError):
        export_design(state, tmp_path / "missing-dir" / "habitat_design.json")


def test_export_design_default_file_name(tmp_path, monkeypatch, state):
    monkeypatch.chdir(tmp_path)
    written = export_design(state)
    assert written == "habitat_design.json"
    payload = json.loads((tmp_path / "habitat_design.json").read_text(encoding="utf-8"))
    assert payload == design_to_dict(state)
