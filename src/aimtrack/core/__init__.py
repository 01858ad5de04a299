"""
Core tracking modules.
Provides the vector type, weapon profiles, configuration loading, response
shaping and the per-cycle tracking controller.
"""

from .vector3 import Vector3
from .ring_buffer import RingBuffer
from .profiles import WeaponProfile, ProfileName, BUILTIN_PROFILES, select_profile
from .config import DEFAULT_CONFIG, load_config, merge_config, build_profiles
from .response_shaper import ResponseShaper
from .tracking_controller import TrackingController, ControllerState

__all__ = [
    'Vector3',
    'RingBuffer',
    'WeaponProfile',
    'ProfileName',
    'BUILTIN_PROFILES',
    'select_profile',
    'DEFAULT_CONFIG',
    'load_config',
    'merge_config',
    'build_profiles',
    'ResponseShaper',
    'TrackingController',
    'ControllerState',
]
