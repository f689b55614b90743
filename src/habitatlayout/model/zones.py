"""
Zone Model
==========
Angular zones of the envelope cross-section and the pure transforms that
mutate an ordered zone collection.

Every operation takes a tuple of zones and returns a new tuple; nothing is
modified in place. Overlapping or gapped zones are allowed and not detected.

Classes:
    ZonePurpose: Function assigned to a zone at creation time.
    Zone: Immutable angular sector.
    ZoneIdGenerator: Monotonic identifier source for new zones.
    ColorPalette: Deterministic color source for new zones.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import itertools
import logging
from typing import Iterable, Iterator, Optional, Sequence

from habitatlayout.config import (
    DEFAULT_PALETTE,
    MIN_ZONE_SPAN_DEG,
    NEW_ZONE_SPAN_DEG,
    ZONE_END_RANGE_DEG,
    ZONE_START_RANGE_DEG,
)
from habitatlayout.model.geometry import normalize_angle, point_to_angle

logger = logging.getLogger(__name__)

Zones = tuple["Zone", ...]


class ZonePurpose(str, Enum):
    SLEEP = "sleep"
    WORK = "work"
    LIFE_SUPPORT = "life_support"
    STORAGE = "storage"
    OTHER = "other"


class Handle(str, Enum):
    """Which boundary of a zone is being dragged."""
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Zone:
    """
    One angular sector of the envelope, spanning its full height.

    Angles are compass degrees. Drags and additions keep `end > start`; `end`
    may exceed 360 when a zone wraps past north. Inspector edits can leave
    `end` below `start`, in which case the zone covers `end..start`.
    """
    id: str
    name: str
    start: float
    end: float
    color: str
    purpose: ZonePurpose = ZonePurpose.OTHER
    axial_rank: Optional[int] = None

    @property
    def span(self) -> float:
        return self.end - self.start

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2.0


def clamp(x: float, lo: float, hi: float) -> float:
    return float(max(lo, min(hi, float(x))))


class ZoneIdGenerator:
    """Produces ``z-1``, ``z-2``, ... skipping identifiers already taken."""

    def __init__(self, prefix: str = "z-", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self, taken: Iterable[str] = ()) -> str:
        taken = set(taken)
        while True:
            candidate = f"{self._prefix}{next(self._counter)}"
            if candidate not in taken:
                return candidate


class ColorPalette:
    """Cycles through a fixed list of display colors."""

    def __init__(self, colors: Sequence[str] = DEFAULT_PALETTE) -> None:
        if not colors:
            raise ValueError("Palette needs at least one color.")
        self._colors: Iterator[str] = itertools.cycle(colors)

    def __call__(self) -> str:
        return next(self._colors)


def default_zones() -> Zones:
    """The four-sector layout shown on startup."""
    return (
        Zone("z-sleep", "Sleep", 0.0, 90.0, "#60a5fa", ZonePurpose.SLEEP),
        Zone("z-work", "Work/Kitchen", 90.0, 210.0, "#34d399", ZonePurpose.WORK),
        Zone("z-eclss", "ECLSS/Tech", 210.0, 270.0, "#f59e0b", ZonePurpose.LIFE_SUPPORT),
        Zone("z-storage", "Stowage", 270.0, 360.0, "#f87171", ZonePurpose.STORAGE),
    )


def find_zone(zones: Zones, zone_id: Optional[str]) -> Optional[Zone]:
    for zone in zones:
        if zone.id == zone_id:
            return zone
    return None


def add_zone(
    zones: Zones,
    id_factory: ZoneIdGenerator,
    palette: ColorPalette,
    name: str = "New Zone",
    purpose: ZonePurpose = ZonePurpose.OTHER,
) -> Zones:
    """
    Append a 60° zone starting where the last zone ends.

    An empty collection starts the new zone at 0°. Both boundaries are wrapped
    into [0, 360); when the wrapped end falls at or before the start, the end
    is kept unwrapped so the zone still spans forward.
    """
    start = normalize_angle(zones[-1].end) if zones else 0.0
    end = normalize_angle(start + NEW_ZONE_SPAN_DEG)
    if end <= start:
        end = start + NEW_ZONE_SPAN_DEG

    zone = Zone(
        id=id_factory(z.id for z in zones),
        name=name,
        start=start,
        end=end,
        color=palette(),
        purpose=purpose,
    )
    logger.debug(f"Adding zone {zone.id} [{start:.1f}°, {end:.1f}°]")
    return zones + (zone,)


def remove_zone(zones: Zones, zone_id: str) -> Zones:
    """Drop the zone with the given identifier. Unknown ids leave the collection as is."""
    return tuple(z for z in zones if z.id != zone_id)


_NUMERIC_RANGES = {
    "start": ZONE_START_RANGE_DEG,
    "end": ZONE_END_RANGE_DEG,
}
_EDITABLE_FIELDS = ("name", "start", "end", "color", "purpose")


def update_zone(zones: Zones, zone_id: str, field: str, value: object) -> Zones:
    """
    Replace one field on the matching zone, leaving all others untouched.

    Numeric fields are clamped to their entry range before assignment
    (start to [0, 359], end to [1, 360]).

    Raises:
        ValueError: If `field` is not an editable zone field.
    """
    if field not in _EDITABLE_FIELDS:
        raise ValueError(f"Zone field '{field}' cannot be edited.")

    if field in _NUMERIC_RANGES:
        value = clamp(value, *_NUMERIC_RANGES[field])
    elif field == "purpose":
        value = ZonePurpose(value)
    else:
        value = str(value)

    return tuple(replace(z, **{field: value}) if z.id == zone_id else z for z in zones)


def drag_boundary(zones: Zones, index: int, handle: Handle | str, dx: float, dy: float) -> Zones:
    """
    Move one boundary of a zone to the pointer position.

    Args:
        zones: Current collection.
        index: Position of the dragged zone in the collection.
        handle: ``"start"`` or ``"end"``.
        dx: Pointer x offset from the diagram centre.
        dy: Pointer y offset from the diagram centre (y down).

    Returns:
        New collection. If the drag would leave `end <= start`, `end` is
        bumped to ``start + 1°``. Invalid index or handle is a no-op.
    """
    if not 0 <= index < len(zones):
        return zones
    try:
        handle = Handle(handle)
    except ValueError:
        return zones

    angle = point_to_angle(dx, dy)
    zone = zones[index]
    if handle is Handle.START:
        zone = replace(zone, start=angle)
    else:
        zone = replace(zone, end=angle)

    if zone.end <= zone.start:
        zone = replace(zone, end=zone.start + MIN_ZONE_SPAN_DEG)

    return zones[:index] + (zone,) + zones[index + 1:]


def auto_axial_partition(zones: Zones, n: int) -> Zones:
    """Label zones with ``axial_rank = index mod n``. Angles are untouched; n < 1 is a no-op."""
    if n < 1:
        return zones
    return tuple(replace(z, axial_rank=i % n) for i, z in enumerate(zones))


def zone_index_at(zones: Zones, angle_deg: float) -> Optional[int]:
    """
    Index of the topmost (last drawn) zone covering a compass angle.

    Zones whose `end` runs past 360° wrap around north. A zone whose `end`
    was edited below its `start` covers the same range it is drawn with,
    ``min(start, end)..max(start, end)``.
    """
    angle = normalize_angle(angle_deg)
    for i in range(len(zones) - 1, -1, -1):
        zone = zones[i]
        lo = min(zone.start, zone.end)
        span = abs(zone.span)
        if span >= 360.0 or (angle - lo) % 360.0 < span:
            return i
    return None
