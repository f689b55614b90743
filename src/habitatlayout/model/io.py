"""
Export Manager (JSON)
Writes a DesignState to the one-way ``habitat_design.json`` format.
Export-only: nothing reads this format back.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any
from importlib.metadata import version, PackageNotFoundError

from habitatlayout.config import EXPORT_FILENAME
from habitatlayout.model.state import DesignState
from habitatlayout.model.zones import Zone

logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("habitatlayout")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"


def zone_to_dict(zone: Zone) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": zone.id,
        "name": zone.name,
        "start": zone.start,
        "end": zone.end,
        "color": zone.color,
        "purpose": zone.purpose.value,
    }
    if zone.axial_rank is not None:
        data["axialRank"] = zone.axial_rank
    return data


def design_to_dict(state: DesignState) -> dict[str, Any]:
    """Build the export payload: envelope, crew and zones in display order."""
    return {
        "envelope": {
            "type": "cylinder",
            "radius_m": state.envelope.radius_m,
            "height_m": state.envelope.height_m,
        },
        "crew": {
            "size": state.mission.crew_size,
            "mission_days": state.mission.mission_days,
        },
        "zones": [zone_to_dict(z) for z in state.zones],
    }


def dumps_design(state: DesignState) -> str:
    return json.dumps(design_to_dict(state), indent=2, ensure_ascii=False)


def export_design(state: DesignState, filepath: str | os.PathLike[str] = EXPORT_FILENAME) -> str:
    """
    Write the design to `filepath` as UTF-8 JSON.

    Returns:
        The path that was written.

    Raises:
        OSError: If the file cannot be written.
    """
    filepath = os.fspath(filepath)
    logger.info(f"Exporting design (v{APP_VERSION}) to: {filepath}")
    try:
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(dumps_design(state))
    except OSError as e:
        logger.exception(f"Failed to export design: {e}")
        raise
    logger.info(f"Exported {len(state.zones)} zones.")
    return filepath
