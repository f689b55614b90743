from __future__ import annotations

from dataclasses import dataclass
from math import hypot
import logging

from PySide6.QtCore import Qt, QPointF, QRectF, Slot
from PySide6.QtGui import QBrush, QColor, QMouseEvent, QPainter, QPaintEvent, QPen, QPolygonF
from PySide6.QtWidgets import QSizePolicy, QWidget

from habitatlayout.app.state import Store
from habitatlayout.model.geometry import angle_to_point, point_to_angle, sector_polyline
from habitatlayout.model.state import DesignState, DragBoundary, SelectZone
from habitatlayout.model.zones import Handle, zone_index_at

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Drag:
    """Transient drag state: which zone boundary follows the pointer."""
    index: int
    handle: Handle


class PlanEditor(QWidget):
    """
    Top-down 2D plan of the envelope with one pie slice per zone.

      - click a slice to select the zone,
      - drag the dots on the rim to move a zone's start/end boundary,
      - everything is repainted from the store's snapshot.
    """
    MARGIN_PX = 20
    HANDLE_RADIUS_PX = 6
    HANDLE_PICK_PX = 9

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self._drag: _Drag | None = None

        self.setMinimumSize(320, 320)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMouseTracking(False)

        self.store.design_changed.connect(self._on_design_changed)

    # ------------------------------------------------------------------------------
    # Layout helpers
    # ------------------------------------------------------------------------------

    def _center(self) -> tuple[float, float]:
        return self.width() / 2.0, self.height() / 2.0

    def _scale(self) -> float:
        """Pixels per metre so the envelope fits the widget with a margin."""
        side = min(self.width(), self.height())
        return max(1.0, side / 2.0 - self.MARGIN_PX) / self.store.state.envelope.radius_m

    def _handle_pos(self, angle_deg: float) -> tuple[float, float]:
        radius = self.store.state.envelope.radius_m
        return angle_to_point(angle_deg, radius, self._scale(), self._center())

    def _handle_at(self, x: float, y: float) -> _Drag | None:
        """Topmost handle under the pointer, if any."""
        zones = self.store.state.zones
        for i in range(len(zones) - 1, -1, -1):
            for handle, angle in ((Handle.END, zones[i].end), (Handle.START, zones[i].start)):
                hx, hy = self._handle_pos(angle)
                if hypot(x - hx, y - hy) <= self.HANDLE_PICK_PX:
                    return _Drag(i, handle)
        return None

    # ------------------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------------------

    @Slot(object)
    def _on_design_changed(self, _state: DesignState) -> None:
        self.update()

    def paintEvent(self, event: QPaintEvent) -> None:
        state = self.store.state
        radius = state.envelope.radius_m
        scale = self._scale()
        cx, cy = self._center()
        r_px = radius * scale

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor("white"))

        # envelope
        painter.setPen(QPen(QColor("#0f172a"), 1))
        painter.setBrush(QBrush(QColor("#f8fafc")))
        painter.drawEllipse(QRectF(cx - r_px, cy - r_px, 2 * r_px, 2 * r_px))

        # zones
        for zone in state.zones:
            outline = sector_polyline(zone.start, zone.end, radius, scale=scale, center=(cx, cy))
            fill = QColor(zone.color)
            fill.setAlphaF(0.9 if zone.id == state.selected_zone_id else 0.75)
            painter.setPen(QPen(QColor("#0b1220"), 1))
            painter.setBrush(QBrush(fill))
            painter.drawPolygon(QPolygonF([QPointF(x, y) for x, y in outline]))

        # handles
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor("#111827")))
        for zone in state.zones:
            for angle in (zone.start, zone.end):
                hx, hy = angle_to_point(angle, radius, scale, (cx, cy))
                painter.drawEllipse(QPointF(hx, hy), self.HANDLE_RADIUS_PX, self.HANDLE_RADIUS_PX)

        # centre marker
        painter.drawEllipse(QPointF(cx, cy), 4, 4)

        painter.setPen(QColor("#0f172a"))
        painter.drawText(QPointF(12, 20), self.tr("Top-down plan (radius: {r:g} m)").format(r=radius))
        painter.end()

    # ------------------------------------------------------------------------------
    # Pointer interaction
    # ------------------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return

        pos = event.position()
        self._drag = self._handle_at(pos.x(), pos.y())
        if self._drag is not None:
            logger.debug(f"Drag start: zone #{self._drag.index} {self._drag.handle.value}")
            return

        cx, cy = self._center()
        dx, dy = pos.x() - cx, pos.y() - cy
        if hypot(dx, dy) > self.store.state.envelope.radius_m * self._scale():
            return
        zones = self.store.state.zones
        index = zone_index_at(zones, point_to_angle(dx, dy))
        if index is not None:
            self.store.dispatch(SelectZone(zones[index].id))

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._drag is None:
            return
        cx, cy = self._center()
        pos = event.position()
        self.store.dispatch(DragBoundary(self._drag.index, self._drag.handle, pos.x() - cx, pos.y() - cy))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        self._drag = None
        super().mouseReleaseEvent(event)
