"""
Side panels of the main window. Each panel reads from and dispatches to the global Store.
"""
from __future__ import annotations

from habitatlayout.app.ui.panels.envelope import EnvelopePanel, MissionPanel
from habitatlayout.app.ui.panels.inspector import ZoneInspector
from habitatlayout.app.ui.panels.zones import MetricsPanel, ZoneActionsPanel

__all__ = ["EnvelopePanel", "MissionPanel", "ZoneInspector", "MetricsPanel", "ZoneActionsPanel"]
