from __future__ import annotations

from PySide6.QtWidgets import (
    QWidget, QGroupBox, QGridLayout, QLabel, QDoubleSpinBox, QSpinBox, QSizePolicy, QVBoxLayout
)

from habitatlayout.app.state import Store


class BasePanel(QWidget):
    """Base class for side panels. Holds a reference to the global store."""
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store


class FormPanel(BasePanel):
    """Panel with a titled group box laid out as a label/editor grid."""
    TITLE: str = "Parameters"

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)
        self.box = QGroupBox(self.tr(self.TITLE), self)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.box)
        self.grid = QGridLayout(self.box)
        self.grid.setVerticalSpacing(8)
        self._row = 0

    # ---- utilities ----

    def _next_row(self) -> int:
        r = self._row
        self._row += 1
        return r

    def _add_row(self, label: str, widget: QWidget) -> QWidget:
        row = self._next_row()
        self.grid.addWidget(QLabel(self.tr(label), self.box), row, 0)
        widget.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.grid.addWidget(widget, row, 1)
        return widget

    def _add_spin(
        self,
        label: str,
        *,
        min_value: float = -1e9,
        max_value: float = 1e9,
        step: float = 0.1,
        default: float = 0.0,
        suffix: str = "",
        decimals: int = 2
    ) -> QDoubleSpinBox:
        w = QDoubleSpinBox(self.box)
        w.setRange(min_value, max_value)
        w.setSingleStep(step)
        w.setDecimals(decimals)
        w.setValue(default)
        w.setKeyboardTracking(False)
        if suffix:
            w.setSuffix(f" {suffix}")
        self._add_row(label, w)
        return w

    def _add_int_spin(
        self,
        label: str,
        *,
        min_value: int = 0,
        max_value: int = 1_000_000,
        default: int = 0,
        suffix: str = ""
    ) -> QSpinBox:
        w = QSpinBox(self.box)
        w.setRange(min_value, max_value)
        w.setValue(default)
        w.setKeyboardTracking(False)
        if suffix:
            w.setSuffix(f" {suffix}")
        self._add_row(label, w)
        return w

    @staticmethod
    def _set_silently(widget: QDoubleSpinBox | QSpinBox, value: float) -> None:
        """Sync an editor with the store without echoing a change back."""
        if widget.value() != value:
            widget.blockSignals(True)
            widget.setValue(value)
            widget.blockSignals(False)
