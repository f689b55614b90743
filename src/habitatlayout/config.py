"""
Configuration & Constants
=========================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: The placeholder numbers used by the geometry and the
   habitability rule live in one place instead of being scattered through
   the model and the widgets.
2. Entry ranges: The panels and the reducer clamp user input against the
   same bounds.

Exports:
    WALL_THICKNESS_M (float): Assumed pressure-wall thickness.
    EXPORT_FILENAME (str): Default name of the exported design.
"""

# Geometry
WALL_THICKNESS_M: float = 0.05
DECK_DEDUCTION_M: float = 0.05     # floor/ceiling thickness taken off the zone height
MIN_ZONE_HEIGHT_M: float = 0.95
MIN_PREVIEW_SIZE_M: float = 0.1

# Entry ranges (values are clamped, never rejected)
RADIUS_RANGE_M: tuple[float, float] = (0.5, 20.0)
HEIGHT_RANGE_M: tuple[float, float] = (0.5, 60.0)
CREW_RANGE: tuple[int, int] = (1, 20)
MISSION_DAYS_RANGE: tuple[int, int] = (1, 3650)
ZONE_START_RANGE_DEG: tuple[float, float] = (0.0, 359.0)
ZONE_END_RANGE_DEG: tuple[float, float] = (1.0, 360.0)

# Zones
NEW_ZONE_SPAN_DEG: float = 60.0
MIN_ZONE_SPAN_DEG: float = 1.0
DEFAULT_PALETTE: tuple[str, ...] = (
    "#a78bfa", "#f472b6", "#22d3ee", "#facc15", "#4ade80", "#fb923c", "#94a3b8",
)

# Habitability (placeholder, not a validated requirement)
SLEEP_AREA_PER_CREW_M2: float = 3.0

# Export
EXPORT_FILENAME: str = "habitat_design.json"
