"""
Weapon profiles: named, immutable bundles of tuning gains.

A controller selects one profile by name at construction. Unknown names
fall back to the DEFAULT profile; the fallback is reported to the caller
and logged rather than raised.
"""

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class ProfileName(Enum):
    """Built-in profile names"""
    DEFAULT = "DEFAULT"
    M1887 = "M1887"


@dataclass(frozen=True)
class WeaponProfile:
    """Tunable gains for one controller instance"""
    recoil_compensation_scale: float
    sensitivity: float
    lock_strength: float
    accuracy_boost: float
    prediction_scale: float
    smoothing_factor: float
    snap_threshold: float
    velocity_compensation_scale: float

    def __post_init__(self):
        if not 0.0 <= self.smoothing_factor <= 1.0:
            raise ValueError(
                f"smoothing_factor must be in [0, 1], got {self.smoothing_factor}"
            )
        if self.snap_threshold < 0.0:
            raise ValueError(f"snap_threshold must be >= 0, got {self.snap_threshold}")

    @classmethod
    def from_dict(cls, values: Dict[str, float], base: Optional["WeaponProfile"] = None) -> "WeaponProfile":
        """
        Build a profile from a mapping, filling missing fields from `base`.

        Args:
            values: Field name to value
            base: Profile supplying defaults (DEFAULT profile if None)

        Returns:
            New WeaponProfile

        Raises:
            ValueError: On unknown field names or out-of-range values
        """
        base = base or BUILTIN_PROFILES[ProfileName.DEFAULT.value]
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")

        merged = {name: getattr(base, name) for name in known}
        merged.update({k: float(v) for k, v in values.items()})
        return cls(**merged)


BUILTIN_PROFILES: Dict[str, WeaponProfile] = {
    ProfileName.M1887.value: WeaponProfile(
        recoil_compensation_scale=1.2,
        sensitivity=3.8,
        lock_strength=2.5,
        accuracy_boost=2.8,
        prediction_scale=1.6,
        smoothing_factor=0.85,
        snap_threshold=0.15,
        velocity_compensation_scale=1.4,
    ),
    ProfileName.DEFAULT.value: WeaponProfile(
        recoil_compensation_scale=0.8,
        sensitivity=2.0,
        lock_strength=2.0,
        accuracy_boost=2.0,
        prediction_scale=1.0,
        smoothing_factor=0.7,
        snap_threshold=0.1,
        velocity_compensation_scale=1.0,
    ),
}


def select_profile(
    name: Optional[str],
    extra_profiles: Optional[Dict[str, WeaponProfile]] = None
) -> Tuple[WeaponProfile, bool]:
    """
    Look up a profile by name.

    Args:
        name: Profile name (built-in or from extra_profiles)
        extra_profiles: Additional named profiles, e.g. loaded from config

    Returns:
        Tuple of (profile, fell_back) where fell_back is True if the
        DEFAULT profile was substituted for an unrecognized name
    """
    registry = dict(BUILTIN_PROFILES)
    if extra_profiles:
        registry.update(extra_profiles)

    if name in registry:
        return registry[name], False

    logger.warning(
        f"Unknown profile '{name}', falling back to {ProfileName.DEFAULT.value}"
    )
    return registry[ProfileName.DEFAULT.value], True
