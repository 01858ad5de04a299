"""
Immutable 3D vector used throughout the tracking pipeline.

Every operation returns a new Vector3; instances are never mutated by
arithmetic. Conversion helpers allow interop with numpy arrays.
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """3D value type with arithmetic, interpolation, magnitude and distance."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @staticmethod
    def zero() -> "Vector3":
        """Return the zero vector."""
        return Vector3(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Vector3":
        """
        Build a vector from any 3-element sequence or numpy array.

        Args:
            values: Components [x, y, z]

        Returns:
            New Vector3
        """
        arr = np.asarray(values, dtype=float).reshape(3)
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def as_array(self) -> np.ndarray:
        """Return components as a float numpy array [x, y, z]."""
        return np.array([self.x, self.y, self.z], dtype=float)

    def add(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def multiply_scalar(self, s: float) -> "Vector3":
        return Vector3(self.x * s, self.y * s, self.z * s)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> "Vector3":
        """
        Return the unit vector in the same direction.

        The zero vector normalizes to the zero vector.
        """
        mag = self.magnitude()
        if mag > 0:
            return self.multiply_scalar(1.0 / mag)
        return Vector3.zero()

    def distance(self, other: "Vector3") -> float:
        """Euclidean distance to another vector."""
        return self.subtract(other).magnitude()

    def lerp(self, other: "Vector3", t: float) -> "Vector3":
        """
        Linear interpolation toward another vector.

        Values of t outside [0, 1] extrapolate; no clamping is applied.

        Args:
            other: Target vector
            t: Interpolation parameter

        Returns:
            self + (other - self) * t
        """
        return self.add(other.subtract(self).multiply_scalar(t))

    def is_finite(self) -> bool:
        """True if no component is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return self.add(other)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return self.subtract(other)

    def __mul__(self, s: float) -> "Vector3":
        return self.multiply_scalar(s)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __str__(self) -> str:
        return f"({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"
