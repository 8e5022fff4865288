"""
Render Plan - What the comparison surface should draw

Turns registry, control and viewport state into a flat description of the
layers to paint: one layer per visible image in insertion order, each with
its blend opacity, filter chain and stacking index.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

from ..canvas.pan_controller import PanController
from ..canvas.zoom_controller import ZoomController
from ..data.layer_controls import LayerControls
from ..data.overlay_registry import ComparisonMode, OverlayImage, OverlayRegistry

HIGH_CONTRAST_FILTER = "brightness(120%) contrast(140%) grayscale(20%)"


@dataclass
class RenderLayer:
    """One image as it should be painted."""
    image_id: str
    url: Optional[str]
    label: str
    opacity: float
    filter: str
    z_index: int
    is_active: bool = False


@dataclass
class RenderPlan:
    """Complete drawing description for one frame."""
    mode: ComparisonMode
    layers: List[RenderLayer] = field(default_factory=list)
    scale: float = 1.0
    offset: Tuple[float, float] = (0.0, 0.0)
    comparison_active: bool = False
    empty: bool = True

    @property
    def columns(self) -> int:
        return 2 if self.mode is ComparisonMode.SIDE_BY_SIDE else 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mode': self.mode.value,
            'layers': [asdict(layer) for layer in self.layers],
            'scale': self.scale,
            'offset': self.offset,
            'columns': self.columns,
            'comparison_active': self.comparison_active,
            'empty': self.empty,
        }


def compose_filter(image: OverlayImage, brightness: float = 0, contrast: float = 0,
                   high_contrast: bool = False) -> str:
    """Build the filter chain for one image."""
    parts = [f"brightness({100 + brightness:g}%)", f"contrast({100 + contrast:g}%)"]
    if image.color_filter:
        parts.append(image.color_filter)
    if high_contrast:
        parts.append(HIGH_CONTRAST_FILTER)
    return " ".join(parts)


def build_render_plan(registry: OverlayRegistry,
                      controls: Optional[LayerControls] = None,
                      zoom: Optional[ZoomController] = None,
                      pan: Optional[PanController] = None,
                      high_contrast: bool = False) -> RenderPlan:
    """
    Describe what the comparison surface should draw.

    Args:
        registry: Source of images, active selection and layout mode
        controls: Global brightness/contrast; defaults to neutral
        zoom: Viewport scale; defaults to 1.0
        pan: Viewport offset; defaults to the origin
        high_contrast: Append the high contrast filter to every layer

    Returns:
        RenderPlan with one layer per visible image
    """
    state = registry.get_state()
    brightness = controls.brightness if controls is not None else 0
    contrast = controls.contrast if controls is not None else 0

    layers = []
    # Single snapshot so layers and selection agree
    for image in (OverlayImage.from_dict(data) for data in state['images']):
        if not image.visible:
            continue
        layers.append(RenderLayer(
            image_id=image.id,
            url=image.url,
            label=image.display_name,
            opacity=image.opacity / 100,
            filter=compose_filter(image, brightness, contrast, high_contrast),
            z_index=len(layers),
            is_active=image.id == state['active_image_id'],
        ))

    offset = (0.0, 0.0)
    if pan is not None:
        point = pan.get_pan_offset()
        offset = (point.x(), point.y())

    return RenderPlan(
        mode=ComparisonMode(state['mode']),
        layers=layers,
        scale=zoom.scale if zoom is not None else 1.0,
        offset=offset,
        comparison_active=state['active'],
        empty=not state['images'],
    )
