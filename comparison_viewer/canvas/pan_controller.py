"""
Pan Controller - Handles drag panning for the comparison viewport

A drag records where the pointer grabbed the view relative to the current
offset; every move then places the offset so the grabbed point follows the
pointer.
"""

import logging

from PyQt5.QtCore import QPointF, pyqtSignal

from ..core.base_protocols import BaseComponent

logger = logging.getLogger(__name__)


class PanController(BaseComponent):
    """Controls the translation applied to every comparison image."""

    # Pan-specific signals
    panChanged = pyqtSignal(object)  # QPointF offset
    panStarted = pyqtSignal(object)  # QPointF start_pos
    panEnded = pyqtSignal(object)  # QPointF offset
    panReset = pyqtSignal()

    def __init__(self, name: str = "pan_controller", version: str = "1.0.0"):
        super().__init__(name, version)

        self._pan_offset: QPointF = QPointF(0, 0)
        self._drag_origin: QPointF = QPointF(0, 0)
        self._is_panning: bool = False

    @property
    def is_panning(self) -> bool:
        return self._is_panning

    def get_pan_offset(self) -> QPointF:
        """Get current pan offset."""
        return QPointF(self._pan_offset)

    def set_pan_offset(self, offset: QPointF) -> bool:
        """Set pan offset."""
        if offset == self._pan_offset:
            return False

        self._pan_offset = QPointF(offset)
        self.panChanged.emit(QPointF(self._pan_offset))
        self.emit_state_changed({'pan_offset': (offset.x(), offset.y())})
        return True

    def start_pan(self, x: float, y: float) -> bool:
        """Start a drag at pointer position (x, y)."""
        if self._is_panning:
            return False

        self._is_panning = True
        self._drag_origin = QPointF(x - self._pan_offset.x(), y - self._pan_offset.y())

        self.panStarted.emit(QPointF(x, y))
        return True

    def update_pan(self, x: float, y: float) -> bool:
        """Follow the pointer while a drag is in progress."""
        if not self._is_panning:
            return False

        return self.set_pan_offset(QPointF(x - self._drag_origin.x(), y - self._drag_origin.y()))

    def end_pan(self) -> bool:
        """Finish the current drag."""
        if not self._is_panning:
            return False

        self._is_panning = False
        logger.debug(f"Pan ended at ({self._pan_offset.x()}, {self._pan_offset.y()})")
        self.panEnded.emit(QPointF(self._pan_offset))
        return True

    def reset_pan(self) -> None:
        """Return to the origin and cancel any drag."""
        self._is_panning = False
        self.set_pan_offset(QPointF(0, 0))
        logger.debug("Pan reset")
        self.panReset.emit()
