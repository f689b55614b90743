from dataclasses import FrozenInstanceError, replace

import pytest

from habitatlayout.model.state import (
    AddZone,
    AutoPartition,
    DesignState,
    DragBoundary,
    Envelope,
    MissionParameters,
    RemoveSelectedZone,
    RemoveZone,
    SelectZone,
    SetEnvelope,
    SetMission,
    UpdateZone,
    ZoneFactory,
    reduce,
)
from habitatlayout.model.zones import ColorPalette, Handle, ZoneIdGenerator, ZonePurpose


@pytest.fixture
def state():
    return DesignState.initial()


def test_initial_state(state):
    assert state.envelope == Envelope(3.0, 8.0)
    assert state.mission == MissionParameters(4, 30)
    assert [z.id for z in state.zones] == ["z-sleep", "z-work", "z-eclss", "z-storage"]
    assert state.selected_zone_id == "z-sleep"
    assert state.selected_zone.name == "Sleep"


@pytest.mark.parametrize("radius, expected", [(0.1, 0.5), (5.5, 5.5), (99.0, 20.0)])
def test_set_envelope_clamps_radius(state, radius, expected):
    new = reduce(state, SetEnvelope(radius_m=radius))
    assert new.envelope.radius_m == expected
    assert new.envelope.height_m == 8.0


@pytest.mark.parametrize("height, expected", [(0.0, 0.5), (12.0, 12.0), (100.0, 60.0)])
def test_set_envelope_clamps_height(state, height, expected):
    assert reduce(state, SetEnvelope(height_m=height)).envelope.height_m == expected


def test_set_mission_clamps(state):
    new = reduce(state, SetMission(crew_size=0, mission_days=10_000))
    assert new.mission == MissionParameters(1, 3650)
    assert reduce(state, SetMission(crew_size=50)).mission.crew_size == 20


def test_unchanged_values_return_same_snapshot(state):
    assert reduce(state, SetEnvelope(radius_m=3.0)) is state
    assert reduce(state, SetMission(crew_size=4)) is state
    assert reduce(state, SelectZone("z-sleep")) is state
    assert reduce(state, AutoPartition(0)) is state
    assert reduce(state, RemoveZone("missing")) is state


def test_add_zone_uses_injected_factory(state):
    factory = ZoneFactory(ZoneIdGenerator(prefix="zone-"), ColorPalette(["#abcdef"]))
    new = reduce(state, AddZone(name="Gym", purpose=ZonePurpose.WORK), factory)
    zone = new.zones[-1]
    assert (zone.id, zone.name, zone.color, zone.purpose) == ("zone-1", "Gym", "#abcdef", ZonePurpose.WORK)
    assert new.zones[:-1] == state.zones
    assert state.zones == DesignState.initial().zones


def test_add_zone_to_empty_design():
    empty = DesignState(zones=())
    new = reduce(empty, AddZone())
    assert len(new.zones) == 1
    assert new.zones[0].start == 0.0


def test_add_then_remove_round_trip(state):
    added = reduce(state, AddZone())
    removed = reduce(added, RemoveZone(added.zones[-1].id))
    assert removed.zones == state.zones


def test_remove_selected_zone_clears_selection(state):
    new = reduce(state, RemoveSelectedZone())
    assert [z.id for z in new.zones] == ["z-work", "z-eclss", "z-storage"]
    assert new.selected_zone_id is None
    assert reduce(new, RemoveSelectedZone()) is new


def test_remove_other_zone_keeps_selection(state):
    new = reduce(state, RemoveZone("z-work"))
    assert new.selected_zone_id == "z-sleep"


def test_remove_selected_by_id_clears_selection(state):
    assert reduce(state, RemoveZone("z-sleep")).selected_zone_id is None


def test_select_zone(state):
    assert reduce(state, SelectZone("z-eclss")).selected_zone_id == "z-eclss"
    assert reduce(state, SelectZone(None)).selected_zone_id is None
    assert reduce(state, SelectZone("unknown")) is state


def test_update_zone(state):
    new = reduce(state, UpdateZone("z-eclss", "end", 500))
    assert new.zones[2].end == 360.0
    assert new.zones[:2] == state.zones[:2]


def test_drag_boundary(state):
    new = reduce(state, DragBoundary(0, Handle.END, 0.0, 20.0))
    assert new.zones[0].end == pytest.approx(180.0)


def test_auto_partition(state):
    new = reduce(state, AutoPartition(2))
    assert [z.axial_rank for z in new.zones] == [0, 1, 0, 1]


def test_unknown_action_raises(state):
    with pytest.raises(TypeError):
        reduce(state, object())


def test_snapshots_are_immutable(state):
    with pytest.raises(FrozenInstanceError):
        state.selected_zone_id = "z-work"
    assert replace(state, selected_zone_id="z-work") != state
