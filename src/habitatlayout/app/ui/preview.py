from __future__ import annotations

import logging

import numpy as np
import pyvista as pv
from PySide6.QtCore import QTimer, Slot
from pyvistaqt import QtInteractor
from PySide6.QtWidgets import QWidget, QVBoxLayout

from habitatlayout.app.state import Store
from habitatlayout.config import MIN_PREVIEW_SIZE_M
from habitatlayout.model.geometry import LabelPlacement, label_placements, preview_radius
from habitatlayout.model.state import DesignState

logger = logging.getLogger(__name__)

LABEL_BOX_SIZE = (0.18, 0.02, 0.08)  # tangential, radial, vertical (m)
INITIAL_CAMERA = [(0.0, -8.0, 6.0), (0.0, 0.0, 0.0), (0.0, 0.0, 1.0)]


def plan_to_world(x: float, y: float, z: float = 0.0) -> tuple[float, float, float]:
    """Plan coordinates (y down) to the preview's world frame (Z up, north = +Y)."""
    return x, -y, z


def label_box(placement: LabelPlacement) -> pv.PolyData:
    """A small box at the placement, its long side tangential to the cylinder."""
    center = plan_to_world(placement.x, placement.y)
    box = pv.Cube(center=center, x_length=LABEL_BOX_SIZE[0], y_length=LABEL_BOX_SIZE[1], z_length=LABEL_BOX_SIZE[2])
    # compass angles run clockwise seen from above, VTK rotates counter-clockwise
    return box.rotate_z(-placement.heading_deg, point=center, inplace=False)


class Preview3D(QWidget):
    """
    PyVista/Qt preview of the envelope:
      - transparent cylinder at the usable radius,
      - one colored box (and name) per zone at its angular midpoint,
      - orbit-style camera (trackball), kept across redraws.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent=parent)
        self.store = store

        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(layout)

        self.plotter: QtInteractor | None = None
        self._init_plotter()
        layout.addWidget(self.plotter.interactor)

        # actors state
        self._envelope_actor: pv.Actor | None = None
        self._label_actors: dict[str, pv.Actor] = {}
        self._name_actor: pv.Actor | None = None
        self._camera_initialized = False

        # coalesce bursts of changes (pointer drags) into one render
        self._redraw_timer = QTimer(self)
        self._redraw_timer.setSingleShot(True)
        self._redraw_timer.setInterval(30)
        self._redraw_timer.timeout.connect(self._redraw)

        self.store.design_changed.connect(self._schedule_redraw)
        self._redraw()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_design(self, state: DesignState) -> None:
        """Rebuild the scene for the given snapshot."""
        self._clear_preview()

        r = preview_radius(state.envelope.radius_m)
        h = max(MIN_PREVIEW_SIZE_M, state.envelope.height_m)
        cylinder = pv.Cylinder(center=(0.0, 0.0, 0.0), direction=(0.0, 0.0, 1.0), radius=r, height=h, resolution=48)
        self._envelope_actor = self.plotter.add_mesh(
            cylinder,
            color="#cbd5e1",
            opacity=0.22,
            smooth_shading=True,
            pickable=False,
            show_scalar_bar=False,
        )

        placements = label_placements(state.envelope.radius_m, state.zones)
        for placement in placements:
            self._label_actors[placement.zone_id] = self.plotter.add_mesh(
                label_box(placement),
                color=placement.color,
                pickable=False,
                show_scalar_bar=False,
            )

        if placements:
            points = np.array([plan_to_world(p.x, p.y, LABEL_BOX_SIZE[2]) for p in placements])
            self._name_actor = self.plotter.add_point_labels(
                points,
                [p.name for p in placements],
                font_size=10,
                text_color="black",
                shape_opacity=0.6,
                show_points=False,
                always_visible=True,
            )

        if not self._camera_initialized:
            self.plotter.camera_position = INITIAL_CAMERA
            self.plotter.reset_camera()
            self._camera_initialized = True

        self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        """Lazy initialization of the plotter."""
        if self.plotter is not None:
            return
        self.plotter = QtInteractor(self)
        self.plotter.set_background("white")
        self.plotter.enable_trackball_style()
        self.plotter.add_light(pv.Light(position=(5.0, 5.0, 10.0), intensity=0.6))
        self.plotter.add_axes()

    @Slot(object)
    def _schedule_redraw(self, _state: DesignState) -> None:
        self._redraw_timer.start()

    def _redraw(self) -> None:
        self.set_design(self.store.state)

    def _clear_preview(self) -> None:
        """Remove all preview actors."""
        actors = list(self._label_actors.values()) + [self._envelope_actor, self._name_actor]
        for act in actors:
            if act is not None:
                self.plotter.remove_actor(act, render=False)
        self._label_actors.clear()
        self._envelope_actor = None
        self._name_actor = None

    def closeEvent(self, event) -> None:
        self._redraw_timer.stop()
        self.plotter.close()
        super().closeEvent(event)
