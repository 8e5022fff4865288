"""
UI - Presentation presets for the comparison view
"""

from .color_filters import ColorFilterPresets, DEFAULT_COLOR_FILTERS

__all__ = ['ColorFilterPresets', 'DEFAULT_COLOR_FILTERS']
