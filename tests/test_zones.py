import random

import pytest

from habitatlayout.model.zones import (
    ColorPalette,
    Handle,
    Zone,
    ZoneIdGenerator,
    ZonePurpose,
    add_zone,
    auto_axial_partition,
    clamp,
    default_zones,
    drag_boundary,
    find_zone,
    remove_zone,
    update_zone,
    zone_index_at,
)


@pytest.fixture
def zones():
    return default_zones()


def test_add_zone_continues_from_last_end(zones):
    result = add_zone(zones, ZoneIdGenerator(), ColorPalette(["#123456"]))
    assert result[:4] == zones
    new = result[-1]
    assert new.id == "z-1"
    assert new.name == "New Zone"
    assert (new.start, new.end) == (0.0, 60.0)   # last end 360 wraps to 0
    assert new.color == "#123456"
    assert new.purpose is ZonePurpose.OTHER


def test_add_zone_on_empty_collection_starts_at_zero():
    result = add_zone((), ZoneIdGenerator(), ColorPalette())
    assert len(result) == 1
    assert (result[0].start, result[0].end) == (0.0, 60.0)


def test_add_zone_wrapping_past_north_keeps_end_after_start():
    zones = (Zone("a", "A", 300.0, 330.0, "#fff"),)
    new = add_zone(zones, ZoneIdGenerator(), ColorPalette())[-1]
    assert new.start == 330.0
    assert new.end == 390.0


def test_id_generator_is_monotonic_and_skips_taken():
    ids = ZoneIdGenerator()
    assert ids(["z-1", "z-2"]) == "z-3"
    assert ids() == "z-4"


def test_palette_cycles_deterministically():
    palette = ColorPalette(["#a", "#b"])
    assert [palette() for _ in range(3)] == ["#a", "#b", "#a"]
    with pytest.raises(ValueError):
        ColorPalette([])


def test_add_then_remove_restores_collection(zones):
    added = add_zone(zones, ZoneIdGenerator(), ColorPalette())
    assert remove_zone(added, added[-1].id) == zones


def test_remove_unknown_zone_is_noop(zones):
    assert remove_zone(zones, "nope") == zones


def test_update_zone_only_touches_target(zones):
    result = update_zone(zones, "z-work", "name", "Galley")
    assert find_zone(result, "z-work").name == "Galley"
    assert [z for z in result if z.id != "z-work"] == [z for z in zones if z.id != "z-work"]


@pytest.mark.parametrize("field, value, expected", [
    ("start", -20, 0.0),
    ("start", 400, 359.0),
    ("end", 0, 1.0),
    ("end", 720, 360.0),
    ("end", 123.5, 123.5),
])
def test_update_zone_clamps_angles(zones, field, value, expected):
    result = update_zone(zones, "z-sleep", field, value)
    assert getattr(find_zone(result, "z-sleep"), field) == expected


def test_update_zone_purpose_and_color(zones):
    result = update_zone(zones, "z-storage", "purpose", "sleep")
    result = update_zone(result, "z-storage", "color", "#000000")
    zone = find_zone(result, "z-storage")
    assert zone.purpose is ZonePurpose.SLEEP
    assert zone.color == "#000000"


def test_update_zone_rejects_unknown_field(zones):
    with pytest.raises(ValueError):
        update_zone(zones, "z-sleep", "id", "other")


def test_drag_end_to_the_right(zones):
    # pointer straight right of the centre is 90° on the compass
    result = drag_boundary(zones, 0, Handle.END, 10.0, 0.0)
    assert result[0].end == pytest.approx(90.0)
    result = drag_boundary(zones, 0, "end", 0.0, 10.0)
    assert result[0].end == pytest.approx(180.0)
    assert result[1:] == zones[1:]


def test_drag_start_past_end_bumps_end(zones):
    # start dragged to 180°, beyond the sleep zone's end at 90°
    result = drag_boundary(zones, 0, Handle.START, 0.0, 5.0)
    assert result[0].start == pytest.approx(180.0)
    assert result[0].end == pytest.approx(181.0)


def test_drag_end_onto_start_bumps_end(zones):
    # work zone starts at 90°; dragging its end to 90° collapses the span
    result = drag_boundary(zones, 1, Handle.END, 7.0, 0.0)
    assert result[1].end == pytest.approx(result[1].start + 1.0)


@pytest.mark.parametrize("index, handle", [(-1, "start"), (4, "end"), (0, "middle")])
def test_drag_with_invalid_target_is_noop(zones, index, handle):
    assert drag_boundary(zones, index, handle, 1.0, 1.0) == zones


def test_any_drag_sequence_keeps_end_after_start(zones):
    rng = random.Random(7)
    for _ in range(500):
        index = rng.randrange(len(zones))
        handle = rng.choice([Handle.START, Handle.END])
        zones = drag_boundary(zones, index, handle, rng.uniform(-1, 1), rng.uniform(-1, 1))
        assert all(z.end > z.start for z in zones)


def test_auto_partition_assigns_ranks(zones):
    result = auto_axial_partition(zones, 2)
    assert [z.axial_rank for z in result] == [0, 1, 0, 1]
    assert [(z.start, z.end) for z in result] == [(z.start, z.end) for z in zones]


def test_auto_partition_three_and_noop(zones):
    assert [z.axial_rank for z in auto_axial_partition(zones, 3)] == [0, 1, 2, 0]
    assert auto_axial_partition(zones, 0) == zones


def test_zone_index_at(zones):
    assert zone_index_at(zones, 45.0) == 0
    assert zone_index_at(zones, 90.0) == 1
    assert zone_index_at(zones, 359.9) == 3
    assert zone_index_at((), 10.0) is None


def test_zone_index_at_wrapped_and_overlapping():
    zones = (
        Zone("a", "A", 0.0, 180.0, "#fff"),
        Zone("b", "B", 330.0, 390.0, "#000"),
    )
    assert zone_index_at(zones, 10.0) == 1     # topmost wins the overlap
    assert zone_index_at(zones, 100.0) == 0
    assert zone_index_at(zones, 200.0) is None


def test_zone_index_at_reversed_zone_after_edit(zones):
    # Work edited to (90, 50) is drawn over 50..90 and must be hit there
    edited = update_zone(zones, "z-work", "end", 50)
    assert (edited[1].start, edited[1].end) == (90.0, 50.0)
    assert zone_index_at(edited, 70.0) == 1
    assert zone_index_at(edited, 30.0) == 0
    assert zone_index_at(edited, 150.0) is None


@pytest.mark.parametrize("value, expected", [(-5, 0.0), (12.5, 12.5), ("400", 359.0)])
def test_clamp(value, expected):
    assert clamp(value, 0.0, 359.0) == expected
