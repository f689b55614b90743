from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QSplitter, QVBoxLayout

from habitatlayout.app.state import Store
from habitatlayout.app.ui.panels import MetricsPanel
from habitatlayout.app.ui.plan_editor import PlanEditor
from habitatlayout.app.ui.preview import Preview3D


class WorkArea(QWidget):
    """2D plan and 3D preview side by side, metrics below."""
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        v = QVBoxLayout(self)
        vertical = QSplitter(Qt.Orientation.Vertical, self)
        vertical.setChildrenCollapsible(False)
        v.addWidget(vertical, 1)

        views = QSplitter(Qt.Orientation.Horizontal, vertical)
        views.setChildrenCollapsible(False)
        self.plan = PlanEditor(store, views)
        self.preview = Preview3D(store, views)
        views.addWidget(self.plan)
        views.addWidget(self.preview)
        views.setStretchFactor(0, 1)
        views.setStretchFactor(1, 1)

        self.metrics = MetricsPanel(store, vertical)
        vertical.addWidget(views)
        vertical.addWidget(self.metrics)
        vertical.setStretchFactor(0, 3)
        vertical.setStretchFactor(1, 1)
