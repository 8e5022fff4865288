"""
Color Filters - Named color filter presets for comparison images

Each preset maps a swatch name to the filter string applied to an image.
The "none" preset clears the filter.
"""

import logging
from typing import Dict, List, Optional

from PyQt5.QtCore import pyqtSignal

from ..core.base_protocols import BaseComponent

logger = logging.getLogger(__name__)

DEFAULT_COLOR_FILTERS: Dict[str, Optional[str]] = {
    'none': None,
    'green': 'hue-rotate(120deg)',
    'blue': 'hue-rotate(180deg)',
    'red': 'hue-rotate(0deg) sepia(1) hue-rotate(310deg) saturate(3)',
}


class ColorFilterPresets(BaseComponent):
    """Registry of named color filter presets."""

    presetAdded = pyqtSignal(str)  # preset_name

    def __init__(self, presets: Optional[Dict[str, Optional[str]]] = None,
                 name: str = "color_filter_presets", version: str = "1.0.0"):
        super().__init__(name, version)

        self._presets: Dict[str, Optional[str]] = dict(DEFAULT_COLOR_FILTERS)
        for preset_name, value in (presets or {}).items():
            self.add_preset(preset_name, value)

    def get_filter(self, preset_name: str) -> Optional[str]:
        """
        Get the filter string for a preset.

        Raises:
            KeyError: If the preset is unknown
        """
        if preset_name not in self._presets:
            raise KeyError(f"Unknown color filter preset: {preset_name}")
        return self._presets[preset_name]

    def name_for_filter(self, color_filter: Optional[str]) -> Optional[str]:
        """Reverse lookup; None or "" map to the preset without a filter."""
        color_filter = color_filter or None
        for preset_name, value in self._presets.items():
            if value == color_filter:
                return preset_name
        return None

    def list_presets(self) -> List[str]:
        return list(self._presets.keys())

    def add_preset(self, preset_name: str, color_filter: Optional[str]) -> None:
        """Add or replace a preset."""
        if not preset_name:
            raise ValueError("Preset name cannot be empty")

        self._presets[preset_name] = color_filter or None
        logger.debug(f"Color filter preset '{preset_name}': {color_filter}")
        self.presetAdded.emit(preset_name)
