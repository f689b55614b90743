from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from habitatlayout.model.metrics import DesignMetrics, evaluate
from habitatlayout.model.state import Action, DesignState, ZoneFactory, reduce

logger = logging.getLogger(__name__)


class Store(QObject):
    """Central state store with signals for panel/preview sync."""
    design_changed = Signal(object)
    selection_changed = Signal(object)

    def __init__(self, state: Optional[DesignState] = None, factory: Optional[ZoneFactory] = None) -> None:
        super().__init__()
        self._state = state if state is not None else DesignState.initial()
        self._factory = factory if factory is not None else ZoneFactory()

    @property
    def state(self) -> DesignState:
        return self._state

    def metrics(self) -> DesignMetrics:
        return evaluate(self._state)

    def dispatch(self, action: Action) -> DesignState:
        """Reduce `action` into a new snapshot and notify listeners if anything changed."""
        previous = self._state
        new = reduce(previous, action, self._factory)
        if new is previous:
            return new

        self._state = new
        logger.debug(f"{type(action).__name__} applied.")
        if new.selected_zone_id != previous.selected_zone_id:
            self.selection_changed.emit(new.selected_zone_id)
        self.design_changed.emit(new)
        return new
