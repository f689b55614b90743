"""
Design State (Data Model)
=========================
This module defines the immutable snapshot of a habitat design and the
reducer that derives the next snapshot from a user action.

Why is this file needed?
------------------------
1. State Management: Envelope, mission parameters, zones and the selection
   live in one frozen object, so views can never hold diverging copies.
2. Pure transitions: `reduce(state, action)` has no side effects; the Qt
   store only swaps snapshots and emits signals.
3. Export: This object is what gets serialized by `model.io`.

Classes:
    Envelope: Cylinder dimensions.
    MissionParameters: Crew size and mission duration.
    DesignState: The complete snapshot.
    ZoneFactory: Identifier and color source for new zones.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Optional, Union

from habitatlayout.config import CREW_RANGE, HEIGHT_RANGE_M, MISSION_DAYS_RANGE, RADIUS_RANGE_M
from habitatlayout.model.zones import (
    ColorPalette,
    Handle,
    Zone,
    ZoneIdGenerator,
    ZonePurpose,
    Zones,
    add_zone,
    auto_axial_partition,
    clamp,
    default_zones,
    drag_boundary,
    find_zone,
    remove_zone,
    update_zone,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Envelope:
    radius_m: float = 3.0
    height_m: float = 8.0


@dataclass(frozen=True)
class MissionParameters:
    crew_size: int = 4
    mission_days: int = 30


@dataclass(frozen=True)
class DesignState:
    envelope: Envelope = field(default_factory=Envelope)
    mission: MissionParameters = field(default_factory=MissionParameters)
    zones: Zones = field(default_factory=default_zones)
    selected_zone_id: Optional[str] = None

    @classmethod
    def initial(cls) -> DesignState:
        """Startup design with the first zone selected."""
        state = cls()
        if state.zones:
            state = replace(state, selected_zone_id=state.zones[0].id)
        return state

    @property
    def selected_zone(self) -> Optional[Zone]:
        return find_zone(self.zones, self.selected_zone_id)


@dataclass
class ZoneFactory:
    """Identifier and color source used when a zone is added."""
    ids: ZoneIdGenerator = field(default_factory=ZoneIdGenerator)
    palette: ColorPalette = field(default_factory=ColorPalette)


# -------------------------------------------------------------------------------
# Actions
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class SetEnvelope:
    radius_m: Optional[float] = None
    height_m: Optional[float] = None


@dataclass(frozen=True)
class SetMission:
    crew_size: Optional[int] = None
    mission_days: Optional[int] = None


@dataclass(frozen=True)
class AddZone:
    name: str = "New Zone"
    purpose: ZonePurpose = ZonePurpose.OTHER


@dataclass(frozen=True)
class RemoveZone:
    zone_id: str


@dataclass(frozen=True)
class RemoveSelectedZone:
    pass


@dataclass(frozen=True)
class UpdateZone:
    zone_id: str
    field: str
    value: object


@dataclass(frozen=True)
class DragBoundary:
    index: int
    handle: Handle
    dx: float
    dy: float


@dataclass(frozen=True)
class AutoPartition:
    n: int


@dataclass(frozen=True)
class SelectZone:
    zone_id: Optional[str]


Action = Union[
    SetEnvelope, SetMission, AddZone, RemoveZone, RemoveSelectedZone,
    UpdateZone, DragBoundary, AutoPartition, SelectZone,
]


def _clamp_int(x: float, lo: int, hi: int) -> int:
    return int(max(lo, min(hi, int(x))))


def _without_zone(state: DesignState, zone_id: str) -> DesignState:
    selected = None if state.selected_zone_id == zone_id else state.selected_zone_id
    return replace(state, zones=remove_zone(state.zones, zone_id), selected_zone_id=selected)


def reduce(state: DesignState, action: Action, factory: Optional[ZoneFactory] = None) -> DesignState:
    """
    Apply one action to a snapshot and return the next snapshot.

    Args:
        state: Current snapshot (never modified).
        action: One of the action dataclasses above.
        factory: Source of identifiers/colors for `AddZone`. A fresh
            deterministic factory is used when omitted.

    Returns:
        The next snapshot. Actions that change nothing return `state` itself.

    Raises:
        TypeError: If `action` is not a known action.
    """
    match action:
        case SetEnvelope(radius_m=radius, height_m=height):
            env = state.envelope
            if radius is not None:
                env = replace(env, radius_m=clamp(radius, *RADIUS_RANGE_M))
            if height is not None:
                env = replace(env, height_m=clamp(height, *HEIGHT_RANGE_M))
            return state if env == state.envelope else replace(state, envelope=env)

        case SetMission(crew_size=crew, mission_days=days):
            mission = state.mission
            if crew is not None:
                mission = replace(mission, crew_size=_clamp_int(crew, *CREW_RANGE))
            if days is not None:
                mission = replace(mission, mission_days=_clamp_int(days, *MISSION_DAYS_RANGE))
            return state if mission == state.mission else replace(state, mission=mission)

        case AddZone(name=name, purpose=purpose):
            factory = factory or ZoneFactory()
            zones = add_zone(state.zones, factory.ids, factory.palette, name=name, purpose=purpose)
            return replace(state, zones=zones)

        case RemoveZone(zone_id=zone_id):
            if find_zone(state.zones, zone_id) is None:
                return state
            return _without_zone(state, zone_id)

        case RemoveSelectedZone():
            if state.selected_zone_id is None:
                return state
            return _without_zone(state, state.selected_zone_id)

        case UpdateZone(zone_id=zone_id, field=name, value=value):
            zones = update_zone(state.zones, zone_id, name, value)
            return state if zones == state.zones else replace(state, zones=zones)

        case DragBoundary(index=index, handle=handle, dx=dx, dy=dy):
            zones = drag_boundary(state.zones, index, handle, dx, dy)
            return state if zones == state.zones else replace(state, zones=zones)

        case AutoPartition(n=n):
            zones = auto_axial_partition(state.zones, n)
            return state if zones == state.zones else replace(state, zones=zones)

        case SelectZone(zone_id=zone_id):
            if zone_id is not None and find_zone(state.zones, zone_id) is None:
                logger.warning(f"Cannot select unknown zone '{zone_id}'.")
                return state
            if zone_id == state.selected_zone_id:
                return state
            return replace(state, selected_zone_id=zone_id)

    raise TypeError(f"Unknown action: {action!r}")
