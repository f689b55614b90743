import pytest

from habitatlayout.app.state import Store
from habitatlayout.model.state import (
    AddZone,
    DesignState,
    DragBoundary,
    RemoveSelectedZone,
    SelectZone,
    SetEnvelope,
    ZoneFactory,
)
from habitatlayout.model.zones import ColorPalette, Handle, ZoneIdGenerator


@pytest.fixture
def store(qt_core_app):
    return Store()


@pytest.fixture
def received(store):
    events = {"design": [], "selection": []}
    store.design_changed.connect(events["design"].append)
    store.selection_changed.connect(events["selection"].append)
    return events


def test_store_starts_with_initial_design(store):
    assert store.state == DesignState.initial()
    assert store.metrics().sleep_ok is False


def test_dispatch_emits_design_changed(store, received):
    new = store.dispatch(SetEnvelope(radius_m=4.0))
    assert store.state is new
    assert received["design"] == [new]
    assert received["selection"] == []


def test_noop_dispatch_emits_nothing(store, received):
    before = store.state
    store.dispatch(SetEnvelope(radius_m=3.0))
    store.dispatch(SelectZone("z-sleep"))
    assert store.state is before
    assert received == {"design": [], "selection": []}


def test_selection_changes_are_signalled(store, received):
    store.dispatch(SelectZone("z-work"))
    store.dispatch(RemoveSelectedZone())
    assert received["selection"] == ["z-work", None]
    assert len(received["design"]) == 2


def test_store_uses_its_factory_across_adds(qt_core_app):
    store = Store(factory=ZoneFactory(ZoneIdGenerator(), ColorPalette(["#111111", "#222222"])))
    store.dispatch(AddZone())
    store.dispatch(AddZone())
    added = store.state.zones[-2:]
    assert [z.id for z in added] == ["z-1", "z-2"]
    assert [z.color for z in added] == ["#111111", "#222222"]


def test_drag_keeps_invariant_through_store(store):
    for dx, dy in [(1, 0), (0, 1), (-1, 0), (0, -1), (1, 1)]:
        store.dispatch(DragBoundary(0, Handle.START, dx, dy))
        assert all(z.end > z.start for z in store.state.zones)
