"""
Comparison Session - Lifecycle of one comparison viewing session.

Creates a fresh overlay registry, layer controls and viewport controllers
for each session, seeds it with the initial images and the configured
catalog, and discards all of it when the session closes.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from ..canvas.pan_controller import PanController
from ..core.base_protocols import ComponentProtocol
from ..canvas.zoom_controller import ZoomController
from ..data.layer_controls import LayerControls
from ..data.overlay_registry import OverlayImage, OverlayRegistry
from ..display.render_plan import RenderPlan, build_render_plan
from ..ui.color_filters import ColorFilterPresets
from ..utils.config_loader import default_viewer_config, validate_viewer_config
from ..utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


class ComparisonSession:
    """
    Owns the comparison state for one patient while the view is open.

    Handles:
    - Registry, controls and viewport creation
    - Initial images and the catalog of images offered for comparison
    - Render plan assembly
    - Teardown on close
    """

    def __init__(
        self,
        patient_id: str,
        config: Optional[dict] = None,
        initial_images: Optional[Iterable[OverlayImage]] = None
    ):
        """
        Initialize ComparisonSession.

        Args:
            patient_id: Patient whose images are compared
            config: Viewer configuration; defaults to the built-in one
            initial_images: Images loaded into the registry on start

        Raises:
            ValueError: If the configuration is invalid
        """
        config = config if config is not None else default_viewer_config()
        is_valid, error_msg = validate_viewer_config(config)
        if not is_valid:
            raise ValueError(f"Invalid viewer config: {error_msg}")

        self.patient_id = patient_id
        self.config = config
        self.high_contrast: bool = config.get('high_contrast', False)

        level = config.get('logging', {}).get('level')
        if level:
            configure_logging(level)

        self.registry = OverlayRegistry()
        self.controls = LayerControls()
        self.color_filters = ColorFilterPresets(config['color_filters'])

        self.zoom = ZoomController()
        self.zoom.initialize(
            min_scale=config['zoom']['min'],
            max_scale=config['zoom']['max'],
            zoom_step=config['zoom']['step']
        )
        self.pan = PanController()

        self.catalog: List[OverlayImage] = [
            replace(OverlayImage.from_dict(entry), patient_id=patient_id)
            for entry in config['catalog']
        ]

        self._closed = False

        initial_images = list(initial_images or [])
        for image in initial_images:
            self.registry.add_image(image)
        if len(initial_images) > 1:
            self.registry.toggle_active()

        logger.info(
            f"Comparison session started for patient {patient_id} "
            f"with {len(self.registry)} image(s)"
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def components(self) -> Tuple[ComponentProtocol, ...]:
        """Components owned by this session."""
        return (self.registry, self.controls, self.zoom, self.pan, self.color_filters)

    def available_images(self) -> List[OverlayImage]:
        """Catalog images not yet added to the comparison."""
        return self.registry.available_images(self.catalog)

    def add_from_catalog(self, image_id: str) -> bool:
        """
        Add a catalog image to the comparison.

        Returns:
            True if added, False if it was already registered

        Raises:
            KeyError: If the id is not in the catalog
            RuntimeError: If the session is closed
        """
        self._ensure_open()

        for image in self.catalog:
            if image.id == image_id:
                return self.registry.add_image(image)

        raise KeyError(f"Image not in catalog: {image_id}")

    def apply_color_preset(self, image_id: str, preset_name: str) -> bool:
        """Apply a named color filter preset to one image."""
        self._ensure_open()
        return self.registry.set_image_color_filter(
            image_id, self.color_filters.get_filter(preset_name)
        )

    def set_high_contrast(self, enabled: bool) -> None:
        self._ensure_open()
        self.high_contrast = enabled

    def reset_view(self) -> None:
        """Reset zoom and pan."""
        self._ensure_open()
        self.zoom.reset_zoom()
        self.pan.reset_pan()

    def render_plan(self) -> RenderPlan:
        """Describe what the comparison surface should draw now."""
        self._ensure_open()
        return build_render_plan(
            self.registry,
            controls=self.controls,
            zoom=self.zoom,
            pan=self.pan,
            high_contrast=self.high_contrast
        )

    def close(self) -> None:
        """Discard all comparison state."""
        if self._closed:
            return

        self.registry.clear_images()
        self.controls.reset_all_controls()
        for component in self.components:
            component.cleanup()

        self._closed = True
        logger.info(f"Comparison session closed for patient {self.patient_id}")

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Comparison session is closed")
