from __future__ import annotations

from PySide6.QtCore import Signal, Slot
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QWidget, QLineEdit, QPushButton, QColorDialog, QComboBox, QLabel

from habitatlayout.app.state import Store
from habitatlayout.app.ui.panels.base import FormPanel
from habitatlayout.config import ZONE_END_RANGE_DEG, ZONE_START_RANGE_DEG
from habitatlayout.model.state import DesignState, UpdateZone
from habitatlayout.model.zones import ZonePurpose

PURPOSE_LABELS = {
    ZonePurpose.SLEEP: "Sleep",
    ZonePurpose.WORK: "Work",
    ZonePurpose.LIFE_SUPPORT: "Life support",
    ZonePurpose.STORAGE: "Storage",
    ZonePurpose.OTHER: "Other",
}


class ZoneInspector(FormPanel):
    """
    Editor for the selected zone: name, boundaries, color and purpose.

    Edits are pushed to the store as `UpdateZone` actions; the store's
    clamped values are echoed back into the editors.
    """
    TITLE = "Zone inspector"
    rule_check_requested = Signal()

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        self.hint = QLabel(self.tr("No zone selected"), self.box)
        self.grid.addWidget(self.hint, self._next_row(), 0, 1, 2)

        self.name = self._add_row("Name:", QLineEdit(self.box))
        self.start = self._add_spin(
            "Start:", min_value=ZONE_START_RANGE_DEG[0], max_value=ZONE_START_RANGE_DEG[1],
            step=1.0, decimals=0, suffix="°"
        )
        # `end` may run past 360 after a drag that wraps north
        self.end = self._add_spin("End:", min_value=0.0, max_value=720.0, step=1.0, decimals=0, suffix="°")
        self.purpose = self._add_row("Purpose:", QComboBox(self.box))
        for purpose, label in PURPOSE_LABELS.items():
            self.purpose.addItem(self.tr(label), userData=purpose.value)
        self.color = self._add_row("Color:", QPushButton(self.box))

        self.btn_rules = QPushButton(self.tr("Run Rule Check"), self.box)
        self.grid.addWidget(self.btn_rules, self._next_row(), 0, 1, 2)

        self._editors: list[QWidget] = [self.name, self.start, self.end, self.purpose, self.color]
        self._shown_id: str | None = None

        # wiring
        self.name.editingFinished.connect(lambda: self._update("name", self.name.text()))
        self.start.valueChanged.connect(lambda v: self._update("start", v))
        self.end.valueChanged.connect(lambda v: self._update("end", min(ZONE_END_RANGE_DEG[1], v)))
        self.purpose.currentIndexChanged.connect(lambda _: self._update("purpose", self.purpose.currentData()))
        self.color.clicked.connect(self._pick_color)
        self.btn_rules.clicked.connect(self.rule_check_requested.emit)

        self.store.design_changed.connect(self._on_design_changed)
        self._on_design_changed(self.store.state)

    def _update(self, field: str, value: object) -> None:
        zone_id = self.store.state.selected_zone_id
        if zone_id is None:
            return
        self.store.dispatch(UpdateZone(zone_id, field, value))

    @Slot()
    def _pick_color(self) -> None:
        zone = self.store.state.selected_zone
        if zone is None:
            return
        color = QColorDialog.getColor(QColor(zone.color), self, self.tr("Zone color"))
        if color.isValid():
            self._update("color", color.name())

    @Slot(object)
    def _on_design_changed(self, state: DesignState) -> None:
        zone = state.selected_zone
        for w in self._editors:
            w.setEnabled(zone is not None)
        self.hint.setVisible(zone is None)
        if zone is None:
            return

        if self.name.text() != zone.name and (zone.id != self._shown_id or not self.name.hasFocus()):
            self.name.setText(zone.name)
        self._set_silently(self.start, round(zone.start))
        self._set_silently(self.end, round(zone.end))

        index = self.purpose.findData(zone.purpose.value)
        if index != self.purpose.currentIndex():
            self.purpose.blockSignals(True)
            self.purpose.setCurrentIndex(index)
            self.purpose.blockSignals(False)

        self.color.setText(zone.color)
        self.color.setStyleSheet(f"background-color: {zone.color};")
        self._shown_id = zone.id
