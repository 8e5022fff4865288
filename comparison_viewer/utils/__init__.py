"""
Utility modules for configuration loading and logging setup.
"""

from .config_loader import (
    load_viewer_config,
    validate_viewer_config,
    default_viewer_config,
    save_config_to_yaml
)
from .logging_utils import configure_logging

__all__ = [
    'load_viewer_config',
    'validate_viewer_config',
    'default_viewer_config',
    'save_config_to_yaml',
    'configure_logging',
]
