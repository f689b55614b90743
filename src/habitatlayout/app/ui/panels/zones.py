from __future__ import annotations

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtGui import QColor, QIcon, QPixmap
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QPushButton, QListWidget, QListWidgetItem,
    QGridLayout, QLabel
)

from habitatlayout.app.state import Store
from habitatlayout.model.metrics import DesignMetrics
from habitatlayout.app.ui.panels.base import BasePanel
from habitatlayout.model.state import AddZone, AutoPartition, DesignState, RemoveSelectedZone, SelectZone


def _swatch(color: str, size: int = 14) -> QIcon:
    pix = QPixmap(size, size)
    pix.fill(QColor(color))
    return QIcon(pix)


class ZoneActionsPanel(BasePanel):
    """Buttons for partitioning, adding/removing zones and exporting the design."""
    export_requested = Signal()

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        box = QGroupBox(self.tr("Zones"), self)
        v = QVBoxLayout(box)

        row = QHBoxLayout()
        for n in (2, 3):
            btn = QPushButton(self.tr("Auto partition ({n})").format(n=n), box)
            btn.clicked.connect(lambda _=False, n=n: self.store.dispatch(AutoPartition(n)))
            row.addWidget(btn)
        v.addLayout(row)

        self.btn_add = QPushButton(self.tr("Add zone"), box)
        self.btn_add.clicked.connect(lambda: self.store.dispatch(AddZone()))
        v.addWidget(self.btn_add)

        self.btn_remove = QPushButton(self.tr("Remove selected zone"), box)
        self.btn_remove.clicked.connect(lambda: self.store.dispatch(RemoveSelectedZone()))
        v.addWidget(self.btn_remove)
        root.addWidget(box)

        export_box = QGroupBox(self.tr("Export"), self)
        ev = QVBoxLayout(export_box)
        self.btn_export = QPushButton(self.tr("Export JSON"), export_box)
        self.btn_export.clicked.connect(self.export_requested.emit)
        ev.addWidget(self.btn_export)
        root.addWidget(export_box)

        self.store.selection_changed.connect(self._on_selection_changed)
        self._on_selection_changed(self.store.state.selected_zone_id)

    @Slot(object)
    def _on_selection_changed(self, zone_id: str | None) -> None:
        self.btn_remove.setEnabled(zone_id is not None)


class MetricsPanel(BasePanel):
    """Quick metrics: totals, zone count, sleep rule, and the zone list with per-zone figures."""
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        box = QGroupBox(self.tr("Quick metrics"), self)
        grid = QGridLayout(box)
        self._values: dict[str, QLabel] = {}
        rows = [
            ("floor_area", self.tr("Total usable floor area")),
            ("volume", self.tr("Total usable volume")),
            ("count", self.tr("Zones")),
            ("sleep", self.tr("Sleep rule")),
        ]
        for i, (key, text) in enumerate(rows):
            grid.addWidget(QLabel(text, box), i, 0)
            value = QLabel("", box)
            value.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            grid.addWidget(value, i, 1)
            self._values[key] = value
        root.addWidget(box)

        self.zone_list = QListWidget(self)
        self.zone_list.itemClicked.connect(self._on_item_clicked)
        root.addWidget(self.zone_list, 1)

        self.store.design_changed.connect(self._on_design_changed)
        self._on_design_changed(self.store.state)

    @Slot(object)
    def _on_design_changed(self, state: DesignState) -> None:
        metrics = self.store.metrics()
        self._update_summary(state, metrics)
        self._update_list(state, metrics)

    def _update_summary(self, state: DesignState, metrics: DesignMetrics) -> None:
        self._values["floor_area"].setText(f"{metrics.floor_area:.2f} m²")
        self._values["volume"].setText(f"{metrics.volume:.2f} m³")
        self._values["count"].setText(str(len(state.zones)))
        self._values["sleep"].setText(self.tr("OK") if metrics.sleep_ok else self.tr("Too small"))

    def _update_list(self, state: DesignState, metrics: DesignMetrics) -> None:
        self.zone_list.blockSignals(True)
        self.zone_list.clear()
        for zm in metrics.zones:
            text = (
                f"{zm.zone.name}\n"
                f"Area: {zm.area:.2f} m² • Vol: {zm.volume:.2f} m³ • {100 * zm.share:.0f}%"
            )
            item = QListWidgetItem(_swatch(zm.zone.color), text)
            item.setData(Qt.ItemDataRole.UserRole, zm.zone.id)
            self.zone_list.addItem(item)
            if zm.zone.id == state.selected_zone_id:
                item.setSelected(True)
        self.zone_list.blockSignals(False)

    @Slot(QListWidgetItem)
    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        self.store.dispatch(SelectZone(item.data(Qt.ItemDataRole.UserRole)))
