"""
Configuration loading and validation utilities.

Handles loading the YAML configuration of the comparison viewer: zoom
limits, color filter presets and the catalog of images offered for
comparison.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

_CATALOG_KEYS = {
    'id', 'visible', 'opacity', 'color_filter', 'colorFilter',
    'patient_id', 'patientId', 'image_type', 'imageType',
    'timestamp', 'description', 'url',
}

_DEFAULT_CONFIG: Dict[str, Any] = {
    'zoom': {
        'min': 0.3,
        'max': 2.5,
        'step': 0.1,
    },
    'high_contrast': False,
    'color_filters': {
        'none': None,
        'green': 'hue-rotate(120deg)',
        'blue': 'hue-rotate(180deg)',
        'red': 'hue-rotate(0deg) sepia(1) hue-rotate(310deg) saturate(3)',
    },
    'catalog': [
        {
            'id': 'ceph-before',
            'image_type': 'ceph',
            'timestamp': '2025-01-15',
            'description': 'Before Treatment',
            'url': '/images/cephalometric.png',
            'visible': True,
            'opacity': 100,
        },
        {
            'id': 'ceph-after',
            'image_type': 'ceph',
            'timestamp': '2025-03-15',
            'description': 'After Treatment',
            'url': '/images/cephalometric.png',
            'visible': True,
            'opacity': 100,
            'color_filter': 'hue-rotate(180deg)',
        },
        {
            'id': 'profile-before',
            'image_type': 'profile',
            'timestamp': '2025-01-15',
            'description': 'Profile - Before',
            'url': '/images/profile.png',
            'visible': True,
            'opacity': 100,
        },
    ],
}


def default_viewer_config() -> dict:
    """Return a fresh copy of the built-in viewer configuration."""
    return copy.deepcopy(_DEFAULT_CONFIG)


def load_viewer_config(path: str) -> dict:
    """
    Load viewer configuration from YAML file.

    Args:
        path: Path to viewer config YAML file

    Returns:
        Dictionary with viewer configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If validation fails
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Viewer config not found: {path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    is_valid, error_msg = validate_viewer_config(config)
    if not is_valid:
        raise ValueError(f"Invalid viewer config: {error_msg}")

    return config


def validate_viewer_config(config: dict) -> Tuple[bool, str]:
    """
    Validate viewer configuration structure and values.

    Args:
        config: Viewer configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(config, dict):
        return False, "Config must be a dictionary"

    # Required top-level keys
    required_keys = ['zoom', 'color_filters', 'catalog']
    for key in required_keys:
        if key not in config:
            return False, f"Missing required key: {key}"

    # Validate zoom
    zoom = config['zoom']
    if not isinstance(zoom, dict):
        return False, "zoom must be a dictionary"

    for key in ['min', 'max', 'step']:
        if key not in zoom:
            return False, f"Missing required zoom key: {key}"
        value = zoom[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            return False, f"zoom.{key} must be a positive number"

    if zoom['min'] >= zoom['max']:
        return False, "zoom.min must be smaller than zoom.max"

    # Validate color filters
    if not isinstance(config['color_filters'], dict):
        return False, "color_filters must be a dictionary"

    for name, value in config['color_filters'].items():
        if value is not None and not isinstance(value, str):
            return False, f"Color filter {name} must be a string or null"

    # Validate catalog
    if not isinstance(config['catalog'], list):
        return False, "catalog must be a list"

    seen_ids = set()
    for i, entry in enumerate(config['catalog']):
        if not isinstance(entry, dict):
            return False, f"Catalog entry {i} must be a dictionary"
        if not entry.get('id'):
            return False, f"Catalog entry {i} is missing an id"
        if entry['id'] in seen_ids:
            return False, f"Duplicate catalog id: {entry['id']}"
        seen_ids.add(entry['id'])
        unknown_keys = set(entry) - _CATALOG_KEYS
        if unknown_keys:
            return False, f"Catalog entry {entry['id']} has unknown keys: {sorted(unknown_keys)}"
        if 'opacity' in entry and (isinstance(entry['opacity'], bool)
                                   or not isinstance(entry['opacity'], (int, float))):
            return False, f"Catalog entry {entry['id']} opacity must be a number"
        if 'visible' in entry and not isinstance(entry['visible'], bool):
            return False, f"Catalog entry {entry['id']} visible must be a boolean"

    # Optional keys
    if 'high_contrast' in config and not isinstance(config['high_contrast'], bool):
        return False, "high_contrast must be a boolean"

    if 'logging' in config:
        if not isinstance(config['logging'], dict):
            return False, "logging must be a dictionary"
        level = config['logging'].get('level')
        if level is not None and not isinstance(level, str):
            return False, "logging.level must be a string"

    return True, ""


def save_config_to_yaml(config: dict, path: str) -> None:
    """
    Save configuration dictionary to YAML file.

    Args:
        config: Configuration dictionary to save
        path: Output path for YAML file
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
