"""
Data - Comparison state independent of any widget

- overlay_registry: Ordered comparison images, active selection and layout mode
- layer_controls: Analysis layer opacity and global image adjustments
"""

from .overlay_registry import OverlayImage, ComparisonMode, OverlayRegistry
from .layer_controls import LayerControls

__all__ = [
    'OverlayImage',
    'ComparisonMode',
    'OverlayRegistry',
    'LayerControls',
]
