"""
Configuration loading for the tracking controller and simulation harness.

Built-in defaults are deep-merged with an optional YAML file. A missing
file yields the defaults; an unreadable or malformed file is logged and
the defaults are used.
"""

import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml

from .profiles import WeaponProfile

logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    'profile': 'DEFAULT',
    'filter': {
        'measurement_noise': 0.003,
        'process_noise': 0.0005,
        'speed_window': 5,
        'noise_gain': 0.1,
    },
    'motion': {
        'history_size': 8,
        'min_dt': 0.001,
    },
    'prediction': {
        'horizon': 0.05,
    },
    'shaping': {
        'velocity_compensation_constant': 0.01,
        'snap_gain': 2.0,
        'velocity_gain_slope': 10.0,
        'max_velocity_gain': 3.0,
    },
    'skip': {
        'enabled': True,
        'speed_threshold': 0.01,
        'interval': 2,
    },
    'simulation': {
        'rate_hz': 120.0,
        'duration_s': 5.0,
        'report_interval': 60,
    },
    'profiles': {},
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` into `base` (in place) and return it."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file on top of the defaults.

    Args:
        config_path: Path to config file (None for defaults only)

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if not config_path:
        return config

    if not os.path.exists(config_path):
        logger.warning(f"Config file {config_path} not found, using defaults")
        return config

    try:
        with open(config_path, 'r') as f:
            loaded_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load config from {config_path}: {e}")
        return config

    if not isinstance(loaded_config, dict):
        logger.warning(f"Config file {config_path} is not a mapping, using defaults")
        return config

    return merge_config(loaded_config)


def merge_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge partial overrides onto a fresh copy of the defaults.

    Unknown top-level sections, and non-mapping values given for mapping
    sections, are logged and dropped.

    Args:
        overrides: Partial configuration dictionary

    Returns:
        Complete configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not overrides:
        return config

    known = {}
    for section, value in overrides.items():
        if section not in DEFAULT_CONFIG:
            logger.warning(f"Ignoring unknown config section '{section}'")
            continue
        if isinstance(DEFAULT_CONFIG[section], dict) and not isinstance(value, dict):
            logger.warning(
                f"Ignoring config section '{section}': expected a mapping, got {type(value).__name__}"
            )
            continue
        known[section] = copy.deepcopy(value)

    return _deep_merge(config, known)


def build_profiles(config: Dict[str, Any]) -> Dict[str, WeaponProfile]:
    """
    Build the extra profiles declared under the `profiles` section.

    Args:
        config: Configuration dictionary from load_config()

    Returns:
        Mapping of profile name to WeaponProfile

    Raises:
        ValueError: If a declared profile is not a mapping, or has unknown
            fields or invalid values
    """
    profiles = {}
    for name, values in (config.get('profiles') or {}).items():
        if values is not None and not isinstance(values, dict):
            raise ValueError(f"Profile '{name}' must be a mapping of field values")
        profiles[str(name)] = WeaponProfile.from_dict(values or {})
    return profiles
