"""
Metrics & Rule Evaluation
=========================
Derived quantities of a design. Nothing here is cached: every evaluation
recomputes from the current envelope and zones.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Optional, TYPE_CHECKING

from habitatlayout.config import (
    DECK_DEDUCTION_M,
    MIN_ZONE_HEIGHT_M,
    SLEEP_AREA_PER_CREW_M2,
    WALL_THICKNESS_M,
)
from habitatlayout.model.geometry import sector_area, usable_cylinder_volume, usable_floor_area
from habitatlayout.model.zones import Zone, ZonePurpose, Zones

if TYPE_CHECKING:
    from habitatlayout.model.state import DesignState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneMetrics:
    zone: Zone
    area: float
    volume: float
    share: float  # fraction of the total usable volume


@dataclass(frozen=True)
class DesignMetrics:
    floor_area: float
    volume: float
    zones: tuple[ZoneMetrics, ...]
    sleep_ok: bool

    def for_zone(self, zone_id: str) -> Optional[ZoneMetrics]:
        for zm in self.zones:
            if zm.zone.id == zone_id:
                return zm
        return None


def zone_area(zone: Zone, radius: float) -> float:
    return sector_area(max(0.0, radius - WALL_THICKNESS_M), zone.start, zone.end)


def zone_volume(area: float, height: float) -> float:
    """Approximate zone volume assuming the zone spans the full height minus a deck deduction."""
    return area * max(MIN_ZONE_HEIGHT_M, height - DECK_DEDUCTION_M)


def find_sleep_zone(zones: Zones) -> Optional[Zone]:
    """
    Locate the sleeping quarters.

    The purpose tag wins; zones created without one are matched by a
    case-insensitive "sleep" in their name.
    """
    for zone in zones:
        if zone.purpose is ZonePurpose.SLEEP:
            return zone
    for zone in zones:
        if "sleep" in zone.name.lower():
            return zone
    return None


def sleep_area_ok(area: Optional[float], crew_size: int) -> bool:
    if area is None:
        return False
    return area >= crew_size * SLEEP_AREA_PER_CREW_M2


def evaluate(state: DesignState) -> DesignMetrics:
    """Compute all derived metrics for a design snapshot."""
    radius = state.envelope.radius_m
    height = state.envelope.height_m
    total_volume = usable_cylinder_volume(radius, height)

    per_zone: list[ZoneMetrics] = []
    for zone in state.zones:
        area = zone_area(zone, radius)
        volume = zone_volume(area, height)
        share = volume / total_volume if total_volume > 0 else 0.0
        per_zone.append(ZoneMetrics(zone, area, volume, share))

    sleep_zone = find_sleep_zone(state.zones)
    sleep_area = zone_area(sleep_zone, radius) if sleep_zone is not None else None

    return DesignMetrics(
        floor_area=usable_floor_area(radius),
        volume=total_volume,
        zones=tuple(per_zone),
        sleep_ok=sleep_area_ok(sleep_area, state.mission.crew_size),
    )


# -------------------------------------------------------------------------------
# Rule checks
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class RuleResult:
    key: str
    title: str
    passed: bool
    message: str


RuleFn = Callable[["DesignState"], RuleResult]

_RULES: dict[str, RuleFn] = {}


def register_rule(key: str) -> Callable[[RuleFn], RuleFn]:
    """Decorator registering a habitability rule under `key`."""
    def decorator(fn: RuleFn) -> RuleFn:
        if key in _RULES:
            raise ValueError(f"Rule '{key}' is already registered")
        _RULES[key] = fn
        return fn
    return decorator


def list_rules() -> list[str]:
    return list(_RULES.keys())


def run_rule_checks(state: DesignState) -> list[RuleResult]:
    results = [rule(state) for rule in _RULES.values()]
    failed = sum(not r.passed for r in results)
    logger.info(f"Rule check: {len(results) - failed}/{len(results)} passed.")
    return results


@register_rule("sleep-area")
def _sleep_area_rule(state: DesignState) -> RuleResult:
    title = "Sleep area per crew"
    required = state.mission.crew_size * SLEEP_AREA_PER_CREW_M2
    zone = find_sleep_zone(state.zones)
    if zone is None:
        return RuleResult("sleep-area", title, False, "No sleep zone defined.")

    area = zone_area(zone, state.envelope.radius_m)
    passed = sleep_area_ok(area, state.mission.crew_size)
    verdict = "OK" if passed else "Too small"
    return RuleResult(
        "sleep-area",
        title,
        passed,
        f"{verdict}: '{zone.name}' has {area:.2f} m², {required:.2f} m² required "
        f"for {state.mission.crew_size} crew.",
    )
