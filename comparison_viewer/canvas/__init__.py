"""
Canvas - Viewport controllers for the comparison view

- zoom_controller: Additive zoom steps with bounds
- pan_controller: Drag-to-pan offset tracking
"""

from .zoom_controller import ZoomController
from .pan_controller import PanController

__all__ = ['ZoomController', 'PanController']
