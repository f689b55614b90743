"""
Main Application Window
=======================
The primary GUI container: envelope/mission/zone controls on the left, the 2D
plan and 3D preview in the centre, the zone inspector on the right and a log
console at the bottom.
"""
from __future__ import annotations

from datetime import datetime
import logging

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QDockWidget, QScrollArea, QPlainTextEdit,
    QFileDialog, QMessageBox
)

from habitatlayout.app.application import VISIBLE_APP_NAME
from habitatlayout.app.state import Store
from habitatlayout.app.ui.panels import EnvelopePanel, MissionPanel, ZoneActionsPanel, ZoneInspector
from habitatlayout.app.ui.workarea import WorkArea
from habitatlayout.config import EXPORT_FILENAME
from habitatlayout.model.io import export_design
from habitatlayout.model.metrics import run_rule_checks

logger = logging.getLogger(__name__)


class Console(QPlainTextEdit):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)

    def _log(self, level: str, msg: str) -> None:
        self.appendPlainText(f"{datetime.now().strftime('%d.%m.%Y %H:%M:%S')} [{level}] {msg}")

    def info(self, msg: str) -> None:
        self._log("info", msg)

    def warn(self, msg: str) -> None:
        self._log("warn", msg)

    def error(self, msg: str) -> None:
        self._log("error", msg)


class ConsoleLogHandler(logging.Handler):
    """Mirrors records of the 'habitatlayout' logger into the console dock (GUI thread only)."""
    def __init__(self, console: Console) -> None:
        super().__init__(level=logging.INFO)
        self._console = console

    def emit(self, record: logging.LogRecord) -> None:
        msg = record.getMessage()
        if record.levelno >= logging.ERROR:
            self._console.error(msg)
        elif record.levelno >= logging.WARNING:
            self._console.warn(msg)
        else:
            self._console.info(msg)


class MainWindow(QMainWindow):
    def __init__(self, store: Store) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        self.store = store

        # ---- Central: plan + preview + metrics ----
        self.work_area = WorkArea(self.store, self)
        self.setCentralWidget(self.work_area)

        # ---- Left: envelope, mission, zone actions ----
        left = QWidget(self)
        lv = QVBoxLayout(left)
        lv.addWidget(EnvelopePanel(self.store, left))
        lv.addWidget(MissionPanel(self.store, left))
        self.zone_actions = ZoneActionsPanel(self.store, left)
        lv.addWidget(self.zone_actions)
        lv.addStretch()
        scroll = QScrollArea(self)
        scroll.setWidget(left)
        scroll.setWidgetResizable(True)
        self._add_dock(self.tr("Design"), scroll, Qt.DockWidgetArea.LeftDockWidgetArea)

        # ---- Right: inspector ----
        self.inspector = ZoneInspector(self.store, self)
        self._add_dock(self.tr("Properties"), self.inspector, Qt.DockWidgetArea.RightDockWidgetArea)

        # ---- Bottom: console ----
        self.console = Console(self)
        self.console.setPlaceholderText(self.tr("Log output will appear here…"))
        self._add_dock(self.tr("Console"), self.console, Qt.DockWidgetArea.BottomDockWidgetArea)
        self._log_handler = ConsoleLogHandler(self.console)
        logging.getLogger("habitatlayout").addHandler(self._log_handler)

        # wiring
        self.zone_actions.export_requested.connect(self.on_export)
        self.inspector.rule_check_requested.connect(self.on_rule_check)

        self.statusBar().showMessage(self.tr("Drag the dots on the rim to resize zones."))

    def _add_dock(self, title: str, widget: QWidget, area: Qt.DockWidgetArea) -> QDockWidget:
        dock = QDockWidget(title, self)
        dock.setObjectName(title)
        dock.setWidget(widget)
        dock.setFeatures(QDockWidget.DockWidgetFeature.DockWidgetMovable | QDockWidget.DockWidgetFeature.DockWidgetFloatable)
        self.addDockWidget(area, dock)
        return dock

    # ---------- Export ----------

    @Slot()
    def on_export(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self,
            self.tr("Export Design"),
            EXPORT_FILENAME,
            self.tr("JSON (*.json);;All Files (*)"),
        )
        if not path:
            return
        try:
            export_design(self.store.state, path)
        except OSError as e:
            QMessageBox.critical(self, self.tr("Export failed"), str(e))
            return
        self.statusBar().showMessage(self.tr("Exported to {path}").format(path=path), 5000)

    # ---------- Rules ----------

    @Slot()
    def on_rule_check(self) -> None:
        results = run_rule_checks(self.store.state)
        for r in results:
            (logger.info if r.passed else logger.warning)(f"{r.title}: {r.message}")

        text = "\n".join(f"{'✔' if r.passed else '✘'} {r.title}: {r.message}" for r in results)
        if all(r.passed for r in results):
            QMessageBox.information(self, self.tr("Rule check"), text)
        else:
            QMessageBox.warning(self, self.tr("Rule check"), text)

    def closeEvent(self, event) -> None:
        logging.getLogger("habitatlayout").removeHandler(self._log_handler)
        self.work_area.preview.close()
        super().closeEvent(event)
