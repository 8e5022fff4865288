"""
Overlay Registry - Centralized state for comparison overlay images

This module owns the ordered collection of comparison images shown by the
viewer, which of them is active, the comparison layout mode and whether the
comparison display is switched on. It is independent of any widget: the
rendering surface reads its state and calls its operations in response to
user gestures.
"""

import logging
import threading
from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from PyQt5.QtCore import pyqtSignal

from ..core.base_protocols import BaseComponent

logger = logging.getLogger(__name__)


class ComparisonMode(Enum):
    """Layout used when more than one image is compared."""
    OVERLAY = "overlay"
    SIDE_BY_SIDE = "sideBySide"


# Keys used by the web client for the same record
_CAMEL_CASE_FIELDS = {
    'colorFilter': 'color_filter',
    'patientId': 'patient_id',
    'imageType': 'image_type',
}


@dataclass
class OverlayImage:
    """Single comparison image with its own display controls."""
    id: str
    visible: bool = True
    opacity: float = 100
    color_filter: Optional[str] = None

    # Opaque payload supplied by the caller
    patient_id: Optional[str] = None
    image_type: Optional[str] = None
    timestamp: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None

    def __post_init__(self):
        if self.color_filter == "":
            self.color_filter = None

    @property
    def display_name(self) -> str:
        return self.description or self.image_type or self.id

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OverlayImage':
        """Create from a dictionary, accepting snake_case or camelCase keys."""
        fields = {}
        for key, value in data.items():
            fields[_CAMEL_CASE_FIELDS.get(key, key)] = value
        return cls(**fields)


class OverlayRegistry(BaseComponent):
    """
    Ordered registry of comparison images for one viewing session.

    Invariants kept by every operation:
    - image ids are unique and insertion order is preserved
    - the active id always names a registered image, and is None when empty
    - the first image added becomes active
    - removing the active image activates the first remaining image
    - mode and comparison activity only change when toggled

    Unknown ids are ignored rather than raised, since UI callbacks may still
    reference an image that was just removed. Each operation runs under a
    lock owned by the registry; signals are emitted once the state is
    consistent again.
    """

    # Signals
    image_added = pyqtSignal(str)  # image_id
    image_removed = pyqtSignal(str)  # image_id
    image_changed = pyqtSignal(str)  # image_id
    active_image_changed = pyqtSignal(object)  # image_id or None
    mode_changed = pyqtSignal(str)  # ComparisonMode value
    comparison_toggled = pyqtSignal(bool)  # active

    def __init__(self, name: str = "overlay_registry", version: str = "1.0.0"):
        super().__init__(name, version)

        self._images: List[OverlayImage] = []
        self._active_image_id: Optional[str] = None
        self._mode: ComparisonMode = ComparisonMode.OVERLAY
        self._active: bool = False

        self._lock = threading.RLock()

    # Reads

    @property
    def images(self) -> Tuple[OverlayImage, ...]:
        """Copies of the registered images in insertion order."""
        with self._lock:
            return tuple(replace(image) for image in self._images)

    @property
    def active_image_id(self) -> Optional[str]:
        return self._active_image_id

    @property
    def active_image(self) -> Optional[OverlayImage]:
        with self._lock:
            if self._active_image_id is None:
                return None
            return self.get_image(self._active_image_id)

    @property
    def mode(self) -> ComparisonMode:
        return self._mode

    @property
    def active(self) -> bool:
        return self._active

    def __len__(self) -> int:
        return len(self._images)

    def __contains__(self, image_id: object) -> bool:
        with self._lock:
            return self._find(image_id) is not None

    def get_image(self, image_id: str) -> Optional[OverlayImage]:
        """Get a copy of a registered image by id."""
        with self._lock:
            image = self._find(image_id)
            return replace(image) if image is not None else None

    def visible_images(self) -> List[OverlayImage]:
        """Copies of the visible images in insertion order."""
        with self._lock:
            return [replace(image) for image in self._images if image.visible]

    def available_images(self, catalog: Iterable[OverlayImage]) -> List[OverlayImage]:
        """Catalog entries that have not been registered yet."""
        with self._lock:
            registered = {image.id for image in self._images}
        return [image for image in catalog if image.id not in registered]

    def get_state(self) -> Dict[str, Any]:
        """Snapshot of the full registry state."""
        with self._lock:
            return {
                'images': [image.to_dict() for image in self._images],
                'active_image_id': self._active_image_id,
                'mode': self._mode.value,
                'active': self._active,
            }

    def get_statistics(self) -> Dict[str, Any]:
        """Get registry statistics."""
        with self._lock:
            return {
                'total': len(self._images),
                'visible': sum(1 for image in self._images if image.visible),
                'filtered': sum(1 for image in self._images if image.color_filter),
                'mode': self._mode.value,
                'active': self._active,
            }

    # Collection mutations

    def add_image(self, image: OverlayImage) -> bool:
        """
        Register an image at the end of the collection.

        Args:
            image: Image to add; the registry stores its own copy

        Returns:
            True if added, False if an image with the same id already exists
        """
        with self._lock:
            if self._find(image.id) is not None:
                logger.debug(f"Image '{image.id}' already registered, ignoring add")
                return False

            self._images.append(replace(image))
            count = len(self._images)
            first_image = count == 1
            if first_image:
                self._active_image_id = image.id

        logger.debug(f"Added comparison image '{image.id}'")
        self.image_added.emit(image.id)
        if first_image:
            self.active_image_changed.emit(image.id)
        self.emit_state_changed({'images': count, 'added': image.id})
        return True

    def remove_image(self, image_id: str) -> bool:
        """
        Remove an image, keeping the order of the rest.

        If the removed image was active, the first remaining image becomes
        active, or nothing when the registry is now empty.

        Returns:
            True if removed, False if not found
        """
        with self._lock:
            image = self._find(image_id)
            if image is None:
                logger.debug(f"Image '{image_id}' not registered, ignoring remove")
                return False

            self._images.remove(image)
            active_changed = False
            if self._active_image_id == image_id:
                self._active_image_id = self._images[0].id if self._images else None
                active_changed = True
            new_active = self._active_image_id
            count = len(self._images)

        logger.debug(f"Removed comparison image '{image_id}'")
        self.image_removed.emit(image_id)
        if active_changed:
            self.active_image_changed.emit(new_active)
        self.emit_state_changed({'images': count, 'removed': image_id})
        return True

    def clear_images(self) -> None:
        """Remove all images."""
        with self._lock:
            removed = [image.id for image in self._images]
            self._images.clear()
            had_active = self._active_image_id is not None
            self._active_image_id = None

        for image_id in removed:
            self.image_removed.emit(image_id)
        if had_active:
            self.active_image_changed.emit(None)
        if removed:
            self.emit_state_changed({'images': 0, 'cleared': True})

    # Per-image display controls

    def set_image_visibility(self, image_id: str, visible: bool) -> bool:
        """Show or hide one image."""
        return self._update_image(image_id, visible=visible)

    def toggle_image_visibility(self, image_id: str) -> bool:
        """Flip the visibility of one image."""
        with self._lock:
            image = self._find(image_id)
            if image is None:
                logger.debug(f"Image '{image_id}' not registered, ignoring visibility toggle")
                return False
            image.visible = not image.visible
            visible = image.visible

        self._emit_image_changed(image_id, {'visible': visible})
        return True

    def set_image_opacity(self, image_id: str, opacity: float) -> bool:
        """Set the blend opacity of one image; clamping is left to the renderer."""
        return self._update_image(image_id, opacity=opacity)

    def set_image_color_filter(self, image_id: str, color_filter: Optional[str]) -> bool:
        """Set or clear the color filter of one image. An empty string clears it."""
        return self._update_image(image_id, color_filter=color_filter or None)

    def _update_image(self, image_id: str, **changes) -> bool:
        with self._lock:
            image = self._find(image_id)
            if image is None:
                logger.debug(f"Image '{image_id}' not registered, ignoring update {changes}")
                return False
            for key, value in changes.items():
                setattr(image, key, value)

        self._emit_image_changed(image_id, changes)
        return True

    def _emit_image_changed(self, image_id: str, changes: Dict[str, Any]) -> None:
        self.image_changed.emit(image_id)
        self.emit_state_changed({'changed': image_id, **changes})

    # Selection

    def set_active_image(self, image_id: Optional[str]) -> bool:
        """
        Make an image the active one.

        Unknown ids are rejected and leave the state unchanged. None is only
        accepted while the registry is empty.

        Returns:
            True if the active image is now image_id, False if rejected
        """
        with self._lock:
            if image_id is None:
                valid = not self._images
            else:
                valid = self._find(image_id) is not None

            if not valid:
                message = f"Cannot activate unknown comparison image '{image_id}'"
                logger.warning(message)
            else:
                changed = self._active_image_id != image_id
                self._active_image_id = image_id

        if not valid:
            self.emit_error(message)
            return False

        if changed:
            self.active_image_changed.emit(image_id)
            self.emit_state_changed({'active_image_id': image_id})
        return True

    # Comparison display

    def toggle_mode(self) -> ComparisonMode:
        """Switch between overlay and side-by-side layout."""
        with self._lock:
            if self._mode is ComparisonMode.OVERLAY:
                self._mode = ComparisonMode.SIDE_BY_SIDE
            else:
                self._mode = ComparisonMode.OVERLAY
            mode = self._mode

        logger.debug(f"Comparison mode: {mode.value}")
        self.mode_changed.emit(mode.value)
        self.emit_state_changed({'mode': mode.value})
        return mode

    def toggle_active(self) -> bool:
        """Switch the comparison display on or off."""
        with self._lock:
            self._active = not self._active
            active = self._active

        logger.debug(f"Comparison {'enabled' if active else 'disabled'}")
        self.comparison_toggled.emit(active)
        self.emit_state_changed({'active': active})
        return active

    def _find(self, image_id: object) -> Optional[OverlayImage]:
        for image in self._images:
            if image.id == image_id:
                return image
        return None
