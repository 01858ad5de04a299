"""
aimtrack: predictive single-target tracking with adaptive noise filtering.

Subpackages:
- core: value types, profiles, configuration, response shaping and the
  tracking controller
- perception: adaptive Kalman filtering, motion estimation and prediction
- scenarios: fixed-cadence simulation harness
"""

from .core import (
    Vector3,
    WeaponProfile,
    TrackingController,
    ControllerState,
    load_config,
)

__all__ = [
    'Vector3',
    'WeaponProfile',
    'TrackingController',
    'ControllerState',
    'load_config',
]
