"""
Zoom Controller - Handles zoom for the comparison viewport

Zoom moves in fixed additive steps and is clamped to configurable bounds.
"""

import logging
from typing import Tuple

from PyQt5.QtCore import pyqtSignal

from ..core.base_protocols import BaseComponent

logger = logging.getLogger(__name__)


class ZoomController(BaseComponent):
    """Controls the scale applied to every comparison image."""

    # Zoom-specific signals
    zoomChanged = pyqtSignal(float)  # scale
    zoomReset = pyqtSignal()

    def __init__(self, name: str = "zoom_controller", version: str = "1.0.0"):
        super().__init__(name, version)

        self._scale: float = 1.0
        self._min_scale: float = 0.3
        self._max_scale: float = 2.5
        self._zoom_step: float = 0.1

    def initialize(self, **kwargs) -> bool:
        """Initialize zoom controller."""
        self.set_zoom_limits(kwargs.get('min_scale', 0.3), kwargs.get('max_scale', 2.5))
        self.set_zoom_step(kwargs.get('zoom_step', 0.1))

        return super().initialize(**kwargs)

    @property
    def scale(self) -> float:
        return self._scale

    def set_scale(self, scale: float) -> bool:
        """Set the scale, clamped to the zoom limits."""
        # Additive steps accumulate float error
        scale = round(max(self._min_scale, min(self._max_scale, scale)), 4)

        if scale == self._scale:
            return False

        self._scale = scale
        self.zoomChanged.emit(scale)
        self.emit_state_changed({'scale': scale})
        return True

    def zoom_in(self) -> bool:
        """Zoom in by one step."""
        return self.set_scale(self._scale + self._zoom_step)

    def zoom_out(self) -> bool:
        """Zoom out by one step."""
        return self.set_scale(self._scale - self._zoom_step)

    def reset_zoom(self) -> bool:
        """Reset scale to 1.0."""
        changed = self.set_scale(1.0)
        self.zoomReset.emit()
        return changed

    def set_zoom_limits(self, min_scale: float, max_scale: float) -> None:
        """Set zoom limits and clamp the current scale into them."""
        if min_scale <= 0 or max_scale < min_scale:
            raise ValueError(f"Invalid zoom limits: {min_scale}..{max_scale}")

        self._min_scale = min_scale
        self._max_scale = max_scale
        self.set_scale(self._scale)

    def get_zoom_limits(self) -> Tuple[float, float]:
        return (self._min_scale, self._max_scale)

    def set_zoom_step(self, step: float) -> None:
        if step <= 0:
            raise ValueError(f"Zoom step must be positive, got {step}")
        self._zoom_step = step

    def get_zoom_step(self) -> float:
        return self._zoom_step

    def get_zoom_percentage(self) -> int:
        """Scale as the rounded percentage shown in the toolbar."""
        return round(self._scale * 100)
