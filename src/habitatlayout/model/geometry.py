"""
Geometry Utilities
==================
Closed-form trigonometry for the cylindrical envelope and its angular zones.

Angles follow the compass convention used by both views: 0° points "up" on the
plan and angles grow clockwise (screen coordinates, y pointing down).
"""
from __future__ import annotations

from dataclasses import dataclass
from math import atan2, cos, degrees, pi, radians, sin
from typing import TYPE_CHECKING, Iterable

import numpy as np

from habitatlayout.config import MIN_PREVIEW_SIZE_M, WALL_THICKNESS_M

if TYPE_CHECKING:
    from numpy import typing as npt

    from habitatlayout.model.zones import Zone


def usable_cylinder_volume(radius: float, height: float, wall_thickness: float = WALL_THICKNESS_M) -> float:
    """
    Volume of a right circular cylinder after removing the pressure wall.

    The wall is subtracted once from the radius and twice from the height
    (both end caps). The result is never negative.

    Args:
        radius: Outer radius in metres.
        height: Outer height (length) in metres.
        wall_thickness: Wall thickness in metres.

    Returns:
        Usable volume in m³.
    """
    r = max(0.0, radius - wall_thickness)
    h = max(0.0, height - 2.0 * wall_thickness)
    return pi * r * r * h


def usable_floor_area(radius: float, wall_thickness: float = WALL_THICKNESS_M) -> float:
    """Top-down area of the usable cross-section in m²."""
    r = max(0.0, radius - wall_thickness)
    return pi * r * r


def sector_area(radius: float, start_deg: float, end_deg: float) -> float:
    """
    Area of a circular sector (pie slice).

    The span is taken as ``|end_deg - start_deg|`` so the result does not
    depend on argument order.

    Args:
        radius: Sector radius in metres.
        start_deg: Start angle in degrees.
        end_deg: End angle in degrees.

    Returns:
        Area in m².
    """
    theta = radians(abs(end_deg - start_deg))
    return 0.5 * radius * radius * theta


def normalize_angle(angle_deg: float) -> float:
    """Wrap an angle into [0, 360)."""
    return angle_deg % 360.0


def angle_to_point(
    angle_deg: float,
    radius: float,
    scale: float = 1.0,
    center: tuple[float, float] = (0.0, 0.0)
) -> tuple[float, float]:
    """
    Map a compass angle and a radial distance to planar coordinates.

    Args:
        angle_deg: Compass angle in degrees (0° = up, clockwise positive).
        radius: Radial distance in metres.
        scale: Pixels (or any unit) per metre.
        center: Coordinates of the envelope axis in the target space.

    Returns:
        (x, y) in the target space.
    """
    a = radians(angle_deg - 90.0)
    cx, cy = center
    return cx + cos(a) * radius * scale, cy + sin(a) * radius * scale


def point_to_angle(dx: float, dy: float) -> float:
    """
    Inverse of `angle_to_point`: compass angle of an offset from the centre.

    Args:
        dx: Horizontal offset from the centre.
        dy: Vertical offset from the centre (screen coordinates, y down).

    Returns:
        Angle in degrees, normalised to [0, 360).
    """
    return normalize_angle(degrees(atan2(dy, dx)) + 90.0)


def sector_polyline(
    start_deg: float,
    end_deg: float,
    radius: float,
    n_points: int = 64,
    scale: float = 1.0,
    center: tuple[float, float] = (0.0, 0.0)
) -> npt.NDArray[np.float64]:
    """
    Discretize a pie slice into a closed (N, 2) polyline.

    The outline starts at the centre, runs along the arc from `start_deg` to
    `end_deg` and closes back at the centre.

    Args:
        start_deg: Start angle (compass convention).
        end_deg: End angle, expected greater than `start_deg`.
        radius: Radius of the slice in metres.
        n_points: Number of points along the arc (including endpoints).
        scale: Units per metre of the target space.
        center: Centre of the slice in the target space.

    Returns:
        Array of shape (n_points + 2, 2).
    """
    cx, cy = center
    angles = np.radians(np.linspace(start_deg, end_deg, n_points) - 90.0)
    arc = np.column_stack((cx + np.cos(angles) * radius * scale, cy + np.sin(angles) * radius * scale))
    return np.vstack([(cx, cy), arc, (cx, cy)])


@dataclass(frozen=True)
class LabelPlacement:
    """
    Position and heading of a zone's label in the 3D preview.

    `x`/`y` are plan coordinates (y down, as in the 2D view); `heading_deg`
    is the compass angle the label faces.
    """
    zone_id: str
    name: str
    x: float
    y: float
    heading_deg: float
    color: str


def preview_radius(radius: float) -> float:
    """Radius of the transparent cylinder shown in the 3D preview."""
    return max(MIN_PREVIEW_SIZE_M, radius - WALL_THICKNESS_M)


def label_placements(radius: float, zones: Iterable[Zone], offset: float = 0.1) -> list[LabelPlacement]:
    """
    Place one label per zone just outside the preview cylinder.

    Each label sits at the zone's angular midpoint ``(start + end) / 2`` and
    faces outward along that angle. No collision or overlap handling.

    Args:
        radius: Envelope radius in metres.
        zones: Zones to label, in display order.
        offset: Radial distance of the labels beyond the cylinder wall.

    Returns:
        One `LabelPlacement` per zone.
    """
    label_r = preview_radius(radius) + offset
    placements: list[LabelPlacement] = []
    for zone in zones:
        mid = (zone.start + zone.end) / 2.0
        x, y = angle_to_point(mid, label_r)
        placements.append(LabelPlacement(zone.id, zone.name, x, y, mid, zone.color))
    return placements
