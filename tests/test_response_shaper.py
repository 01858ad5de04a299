"""
Tests for response_shaper module
"""

import dataclasses

import pytest
import numpy as np
from aimtrack.core.profiles import BUILTIN_PROFILES
from aimtrack.core.response_shaper import ResponseShaper
from aimtrack.core.vector3 import Vector3


@pytest.fixture
def default_profile():
    return BUILTIN_PROFILES['DEFAULT']


@pytest.fixture
def shaper(default_profile):
    return ResponseShaper(default_profile)


class TestCompensation:
    """Test disturbance compensation"""

    def test_subtracts_scaled_disturbance(self, shaper):
        """Test recoil scaling with no velocity"""
        result = shaper.compensate(
            Vector3(1.0, 1.0, 1.0), Vector3(0.1, 0.2, 0.0), Vector3.zero()
        )
        assert np.isclose(result.x, 1.0 - 0.1 * 0.8)
        assert np.isclose(result.y, 1.0 - 0.2 * 0.8)
        assert result.z == 1.0

    def test_adds_velocity_lead(self, shaper):
        """Test the small velocity-proportional term"""
        result = shaper.compensate(
            Vector3(1.0, 1.0, 1.0), Vector3(0.1, 0.0, 0.0), Vector3(1.0, 0.0, 0.0)
        )
        assert np.isclose(result.x, 1.0 - 0.08 + 0.01)

    def test_zero_inputs_passthrough(self, shaper):
        """Test that zero disturbance and velocity leave the position alone"""
        p = Vector3(0.4, -0.1, 2.0)
        assert shaper.compensate(p, Vector3.zero(), Vector3.zero()) == p


class TestCorrectionGain:
    """Test distance- and speed-adaptive gain"""

    def test_snap_threshold_gain_exact(self, shaper, default_profile):
        """Test gain inside the snap threshold is exactly 2x sensitivity"""
        gain = shaper.correction_gain(
            Vector3.zero(), Vector3(0.05, 0.0, 0.0), Vector3(5.0, 0.0, 0.0)
        )
        assert gain == 2.0 * default_profile.sensitivity

    def test_far_stationary_gain(self, shaper, default_profile):
        """Test lower bound of 1x sensitivity outside the threshold"""
        gain = shaper.correction_gain(Vector3.zero(), Vector3(1.0, 0.0, 0.0), Vector3.zero())
        assert gain == default_profile.sensitivity

    def test_far_moving_gain(self, shaper, default_profile):
        """Test speed-scaled gain below the cap"""
        gain = shaper.correction_gain(
            Vector3.zero(), Vector3(1.0, 0.0, 0.0), Vector3(0.1, 0.0, 0.0)
        )
        assert np.isclose(gain, default_profile.sensitivity * 2.0)

    def test_gain_capped(self, shaper, default_profile):
        """Test speed multiplier cap of 3x"""
        gain = shaper.correction_gain(
            Vector3.zero(), Vector3(1.0, 0.0, 0.0), Vector3(50.0, 0.0, 0.0)
        )
        assert gain == default_profile.sensitivity * 3.0

    def test_apply_gain(self, shaper):
        """Test current + (target - current) * gain"""
        result = shaper.apply_gain(Vector3(1.0, 0.0, 0.0), Vector3(2.0, 0.0, 0.0), Vector3.zero())
        assert np.isclose(result.x, 1.0 + 1.0 * 2.0)


class TestSmoothing:
    """Test exponential smoothing of the output"""

    @pytest.mark.parametrize("factor", [0.0, 0.25, 0.7, 1.0])
    def test_no_overshoot(self, default_profile, factor):
        """Test smoothed output lies on the segment to the new target"""
        profile = dataclasses.replace(default_profile, smoothing_factor=factor)
        shaper = ResponseShaper(profile)
        targets = [Vector3(1.0, 0.0, 0.0), Vector3(-2.0, 3.0, 1.0), Vector3(0.5, 0.5, -4.0)]

        for target in targets:
            previous = shaper.smoothed
            result = shaper.smooth(target)
            span = previous.distance(target)
            assert np.isclose(previous.distance(result) + result.distance(target), span)
            assert previous.distance(result) <= span + 1e-12

    def test_smoothing_state_carried(self, shaper):
        """Test that smoothing runs from the previous smoothed value"""
        first = shaper.smooth(Vector3(1.0, 0.0, 0.0))
        second = shaper.smooth(Vector3(1.0, 0.0, 0.0))
        assert np.isclose(first.x, 0.7)
        assert np.isclose(second.x, 0.7 + 0.3 * 0.7)


class TestApply:
    """Test the full shaping pipeline"""

    def test_pipeline_order(self, shaper):
        """Test compensation, snap gain and smoothing together"""
        result = shaper.apply(
            Vector3(0.05, 0.0, 0.0), Vector3.zero(), Vector3.zero(), Vector3.zero()
        )
        # Inside snap threshold: gain 4.0 -> 0.2, smoothed by 0.7 -> 0.14
        assert np.isclose(result.x, 0.14)
        assert shaper.smoothed == result


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
