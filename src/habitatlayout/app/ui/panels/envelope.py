from __future__ import annotations

from PySide6.QtCore import Slot
from PySide6.QtWidgets import QWidget

from habitatlayout.app.state import Store
from habitatlayout.app.ui.panels.base import FormPanel
from habitatlayout.config import CREW_RANGE, HEIGHT_RANGE_M, MISSION_DAYS_RANGE, RADIUS_RANGE_M
from habitatlayout.model.state import DesignState, SetEnvelope, SetMission


class EnvelopePanel(FormPanel):
    """Cylinder dimensions."""
    TITLE = "Envelope: Cylinder"

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)
        env = store.state.envelope
        self.radius = self._add_spin(
            "Radius:", min_value=RADIUS_RANGE_M[0], max_value=RADIUS_RANGE_M[1],
            default=env.radius_m, suffix="m"
        )
        self.height = self._add_spin(
            "Length / Height:", min_value=HEIGHT_RANGE_M[0], max_value=HEIGHT_RANGE_M[1],
            default=env.height_m, suffix="m"
        )
        self.radius.valueChanged.connect(lambda v: self.store.dispatch(SetEnvelope(radius_m=v)))
        self.height.valueChanged.connect(lambda v: self.store.dispatch(SetEnvelope(height_m=v)))
        self.store.design_changed.connect(self._on_design_changed)

    @Slot(object)
    def _on_design_changed(self, state: DesignState) -> None:
        self._set_silently(self.radius, state.envelope.radius_m)
        self._set_silently(self.height, state.envelope.height_m)


class MissionPanel(FormPanel):
    """Crew size and mission duration feeding the habitability rule."""
    TITLE = "Mission parameters"

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)
        mission = store.state.mission
        self.crew = self._add_int_spin(
            "Crew size:", min_value=CREW_RANGE[0], max_value=CREW_RANGE[1], default=mission.crew_size
        )
        self.days = self._add_int_spin(
            "Mission days:", min_value=MISSION_DAYS_RANGE[0], max_value=MISSION_DAYS_RANGE[1],
            default=mission.mission_days, suffix="d"
        )
        self.crew.valueChanged.connect(lambda v: self.store.dispatch(SetMission(crew_size=v)))
        self.days.valueChanged.connect(lambda v: self.store.dispatch(SetMission(mission_days=v)))
        self.store.design_changed.connect(self._on_design_changed)

    @Slot(object)
    def _on_design_changed(self, state: DesignState) -> None:
        self._set_silently(self.crew, state.mission.crew_size)
        self._set_silently(self.days, state.mission.mission_days)
