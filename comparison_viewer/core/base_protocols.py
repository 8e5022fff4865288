"""
Base Protocols - Interface definitions for all comparison viewer modules

This module defines the protocol every component follows and the QObject
base class that gives each component its common signals.
"""

from typing import Protocol, Dict, Any, runtime_checkable

from PyQt5.QtCore import QObject, pyqtSignal


@runtime_checkable
class ComponentProtocol(Protocol):
    """Protocol for all viewer components."""

    @property
    def name(self) -> str:
        """Component name."""
        ...

    @property
    def version(self) -> str:
        """Component version."""
        ...

    def initialize(self, **kwargs) -> bool:
        """Initialize the component."""
        ...

    def cleanup(self) -> None:
        """Clean up component resources."""
        ...


class BaseComponent(QObject):
    """Base class for all viewer components."""

    # Common signals
    stateChanged = pyqtSignal(dict)
    errorOccurred = pyqtSignal(str)

    def __init__(self, name: str, version: str = "1.0.0"):
        super().__init__()
        self._name = name
        self._version = version
        self._initialized = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return self._version

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self, **kwargs) -> bool:
        """Initialize the component."""
        self._initialized = True
        return True

    def cleanup(self) -> None:
        """Clean up resources."""
        self._initialized = False

    def emit_state_changed(self, state: Dict[str, Any]) -> None:
        """Emit state changed signal."""
        self.stateChanged.emit(state)

    def emit_error(self, error: str) -> None:
        """Emit error signal."""
        self.errorOccurred.emit(error)
