"""
Tests for vector3 module
"""

import dataclasses
import math

import pytest
import numpy as np
from aimtrack.core.vector3 import Vector3


class TestArithmetic:
    """Test basic vector arithmetic"""

    def test_add_subtract(self):
        """Test component-wise add and subtract"""
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(0.5, -1.0, 2.0)

        assert a.add(b) == Vector3(1.5, 1.0, 5.0)
        assert a.subtract(b) == Vector3(0.5, 3.0, 1.0)
        assert a + b == a.add(b)
        assert a - b == a.subtract(b)

    def test_multiply_scalar(self):
        """Test scalar multiplication from both sides"""
        a = Vector3(1.0, -2.0, 0.5)
        assert a.multiply_scalar(2.0) == Vector3(2.0, -4.0, 1.0)
        assert a * 2.0 == 2.0 * a
        assert -a == Vector3(-1.0, 2.0, -0.5)

    def test_operations_return_new_instances(self):
        """Test that arithmetic never mutates operands"""
        a = Vector3(1.0, 1.0, 1.0)
        b = Vector3(2.0, 2.0, 2.0)
        a.add(b)
        a.lerp(b, 0.5)
        a.normalize()

        assert a == Vector3(1.0, 1.0, 1.0)
        assert b == Vector3(2.0, 2.0, 2.0)

    def test_frozen(self):
        """Test that components cannot be reassigned"""
        a = Vector3(1.0, 2.0, 3.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            a.x = 5.0


class TestMagnitude:
    """Test magnitude, normalize and distance"""

    def test_magnitude(self):
        """Test Euclidean length"""
        assert Vector3(3.0, 4.0, 0.0).magnitude() == 5.0
        assert Vector3.zero().magnitude() == 0.0

    def test_normalize(self):
        """Test unit vector direction and length"""
        unit = Vector3(0.0, 3.0, 4.0).normalize()
        assert math.isclose(unit.magnitude(), 1.0)
        assert math.isclose(unit.y, 0.6)
        assert math.isclose(unit.z, 0.8)

    def test_normalize_zero_vector(self):
        """Test that the zero vector normalizes to zero without error"""
        result = Vector3.zero().normalize()
        assert result == Vector3.zero()
        assert result.is_finite()

    def test_distance(self):
        """Test distance between points"""
        a = Vector3(1.0, 1.0, 1.0)
        b = Vector3(4.0, 5.0, 1.0)
        assert a.distance(b) == 5.0
        assert b.distance(a) == 5.0


class TestLerp:
    """Test linear interpolation"""

    def test_endpoints(self):
        """Test t=0 and t=1"""
        a = Vector3(0.0, 0.0, 0.0)
        b = Vector3(2.0, -2.0, 4.0)
        assert a.lerp(b, 0.0) == a
        assert a.lerp(b, 1.0) == b

    def test_midpoint(self):
        """Test t=0.5"""
        a = Vector3(0.0, 0.0, 0.0)
        b = Vector3(2.0, -2.0, 4.0)
        assert a.lerp(b, 0.5) == Vector3(1.0, -1.0, 2.0)

    def test_extrapolation_not_clamped(self):
        """Test that t outside [0, 1] extrapolates"""
        a = Vector3(0.0, 0.0, 0.0)
        b = Vector3(1.0, 0.0, 0.0)
        assert a.lerp(b, 2.0) == Vector3(2.0, 0.0, 0.0)
        assert a.lerp(b, -1.0) == Vector3(-1.0, 0.0, 0.0)


class TestNumpyInterop:
    """Test conversion to and from numpy arrays"""

    def test_as_array(self):
        """Test array conversion"""
        arr = Vector3(1.0, 2.0, 3.0).as_array()
        assert isinstance(arr, np.ndarray)
        assert np.allclose(arr, [1.0, 2.0, 3.0])

    def test_from_array(self):
        """Test construction from array and list"""
        assert Vector3.from_array(np.array([1.0, 2.0, 3.0])) == Vector3(1.0, 2.0, 3.0)
        assert Vector3.from_array([4, 5, 6]) == Vector3(4.0, 5.0, 6.0)

    def test_is_finite(self):
        """Test NaN and infinity detection"""
        assert Vector3(1.0, 2.0, 3.0).is_finite()
        assert not Vector3(float('nan'), 0.0, 0.0).is_finite()
        assert not Vector3(0.0, float('inf'), 0.0).is_finite()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
