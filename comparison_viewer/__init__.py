"""
Comparison Viewer - Cephalometric image comparison state for PyQt5 surfaces

Key Modules:
- core: Base component and protocols
- data: Overlay registry and layer/image controls
- canvas: Zoom and pan controllers for the comparison viewport
- display: Render plan handed to the drawing surface
- ui: Color filter presets
- session: Per-session wiring of all of the above
- utils: YAML configuration and logging helpers
"""

__version__ = "0.1.0"

from .data.overlay_registry import OverlayImage, ComparisonMode, OverlayRegistry
from .data.layer_controls import LayerControls
from .session.comparison_session import ComparisonSession

__all__ = [
    'OverlayImage',
    'ComparisonMode',
    'OverlayRegistry',
    'LayerControls',
    'ComparisonSession',
]
