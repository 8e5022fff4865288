"""
Layer Controls - Opacity of analysis layers and global image adjustments

Holds the per-layer opacity of the tracing, landmark and measurement layers
and the brightness/contrast adjustments applied to every comparison image.
"""

import logging
from typing import Callable, Dict, Union

from PyQt5.QtCore import pyqtSignal

from ..core.base_protocols import BaseComponent

logger = logging.getLogger(__name__)

DEFAULT_LAYER_OPACITY: Dict[str, float] = {
    'tracing': 100,
    'landmarks': 100,
    'measurements': 100,
}

DEFAULT_IMAGE_CONTROLS: Dict[str, float] = {
    'brightness': 0,
    'contrast': 0,
}

IMAGE_CONTROL_RANGE = (-100, 100)

ValueOrUpdater = Union[float, Callable[[float], float]]


class LayerControls(BaseComponent):
    """Layer opacity and image adjustment state."""

    layerOpacityChanged = pyqtSignal(str, float)  # layer, opacity
    imageControlChanged = pyqtSignal(str, float)  # control, value
    controlsReset = pyqtSignal()

    def __init__(self, name: str = "layer_controls", version: str = "1.0.0"):
        super().__init__(name, version)

        self._layer_opacity: Dict[str, float] = dict(DEFAULT_LAYER_OPACITY)
        self._image_controls: Dict[str, float] = dict(DEFAULT_IMAGE_CONTROLS)
        self._show_layer_controls: bool = False

    @property
    def layer_opacity(self) -> Dict[str, float]:
        return dict(self._layer_opacity)

    @property
    def image_controls(self) -> Dict[str, float]:
        return dict(self._image_controls)

    @property
    def brightness(self) -> float:
        return self._image_controls['brightness']

    @property
    def contrast(self) -> float:
        return self._image_controls['contrast']

    @property
    def show_layer_controls(self) -> bool:
        return self._show_layer_controls

    def set_show_layer_controls(self, show: bool) -> None:
        """Show or hide the layer control panel."""
        self._show_layer_controls = show
        self.emit_state_changed({'show_layer_controls': show})

    def update_layer_opacity(self, layer: str, value_or_fn: ValueOrUpdater) -> float:
        """
        Update the opacity of an analysis layer.

        Args:
            layer: One of 'tracing', 'landmarks', 'measurements'
            value_or_fn: New value, or a function of the previous value

        Returns:
            The stored opacity

        Raises:
            KeyError: If the layer is unknown
        """
        if layer not in self._layer_opacity:
            raise KeyError(f"Unknown layer: {layer}")

        value = self._resolve(self._layer_opacity[layer], value_or_fn)
        self._layer_opacity[layer] = value

        logger.debug(f"Layer '{layer}' opacity: {value}")
        self.layerOpacityChanged.emit(layer, float(value))
        self.emit_state_changed({'layer': layer, 'opacity': value})
        return value

    def update_image_control(self, control: str, value_or_fn: ValueOrUpdater) -> float:
        """
        Update brightness or contrast.

        Values are clamped to the -100..100 slider range.

        Raises:
            KeyError: If the control is unknown
        """
        if control not in self._image_controls:
            raise KeyError(f"Unknown image control: {control}")

        value = self._resolve(self._image_controls[control], value_or_fn)
        low, high = IMAGE_CONTROL_RANGE
        value = max(low, min(high, value))
        self._image_controls[control] = value

        logger.debug(f"Image control '{control}': {value}")
        self.imageControlChanged.emit(control, float(value))
        self.emit_state_changed({'control': control, 'value': value})
        return value

    def reset_all_controls(self) -> None:
        """Restore default layer opacity and image adjustments."""
        self._layer_opacity = dict(DEFAULT_LAYER_OPACITY)
        self._image_controls = dict(DEFAULT_IMAGE_CONTROLS)

        logger.debug("Layer and image controls reset")
        self.controlsReset.emit()
        self.emit_state_changed({'reset': True})

    def get_state(self) -> Dict[str, object]:
        return {
            'layer_opacity': self.layer_opacity,
            'image_controls': self.image_controls,
            'show_layer_controls': self._show_layer_controls,
        }

    @staticmethod
    def _resolve(previous: float, value_or_fn: ValueOrUpdater) -> float:
        if callable(value_or_fn):
            return value_or_fn(previous)
        return value_or_fn
