"""
Response shaping: disturbance compensation, distance-adaptive gain and
temporal smoothing of the correction vector.

The three transforms run in sequence each cycle. Only the smoothing
step carries state (the running smoothed target).
"""

from .profiles import WeaponProfile
from .vector3 import Vector3


class ResponseShaper:
    """
    Turns a filtered target position into the next output vector.

    Pipeline:
        compensated = filtered - disturbance * recoil_scale + velocity * vel_scale * c
        gained      = current + (compensated - current) * gain
        smoothed    = lerp(smoothed, gained, smoothing_factor)
    """

    def __init__(
        self,
        profile: WeaponProfile,
        velocity_compensation_constant: float = 0.01,
        snap_gain: float = 2.0,
        velocity_gain_slope: float = 10.0,
        max_velocity_gain: float = 3.0
    ):
        """
        Args:
            profile: Active weapon profile
            velocity_compensation_constant: Constant c in the velocity term
            snap_gain: Sensitivity multiplier inside the snap threshold
            velocity_gain_slope: Sensitivity multiplier growth per unit of speed
            max_velocity_gain: Upper bound of the speed-based multiplier
        """
        self.profile = profile
        self.velocity_compensation_constant = velocity_compensation_constant
        self.snap_gain = snap_gain
        self.velocity_gain_slope = velocity_gain_slope
        self.max_velocity_gain = max_velocity_gain

        self.smoothed = Vector3.zero()

    def compensate(self, filtered: Vector3, disturbance: Vector3, velocity: Vector3) -> Vector3:
        """
        Subtract the scaled disturbance and add a small velocity lead.

        Args:
            filtered: Filtered target position
            disturbance: External disturbance (recoil) offset
            velocity: Current target velocity

        Returns:
            Compensated target position
        """
        recoil = disturbance.multiply_scalar(self.profile.recoil_compensation_scale)
        lead = velocity.multiply_scalar(
            self.profile.velocity_compensation_scale * self.velocity_compensation_constant
        )
        return filtered.subtract(recoil).add(lead)

    def correction_gain(self, current: Vector3, target: Vector3, velocity: Vector3) -> float:
        """
        Distance- and speed-adaptive gain.

        Inside the snap threshold the gain is sensitivity * snap_gain.
        Otherwise it is sensitivity scaled by 1 + speed * slope, capped at
        max_velocity_gain.
        """
        distance = current.distance(target)
        if distance < self.profile.snap_threshold:
            return self.profile.sensitivity * self.snap_gain

        velocity_factor = min(
            velocity.magnitude() * self.velocity_gain_slope + 1.0,
            self.max_velocity_gain
        )
        return self.profile.sensitivity * velocity_factor

    def apply_gain(self, current: Vector3, target: Vector3, velocity: Vector3) -> Vector3:
        gain = self.correction_gain(current, target, velocity)
        return current.add(target.subtract(current).multiply_scalar(gain))

    def smooth(self, new_target: Vector3) -> Vector3:
        """Move the running smoothed target toward new_target."""
        self.smoothed = self.smoothed.lerp(new_target, self.profile.smoothing_factor)
        return self.smoothed

    def apply(
        self,
        filtered: Vector3,
        disturbance: Vector3,
        current: Vector3,
        velocity: Vector3
    ) -> Vector3:
        """
        Run compensation, gain and smoothing in order.

        Args:
            filtered: Filtered target position
            disturbance: External disturbance offset
            current: Current output (baseline for the gain step)
            velocity: Current target velocity

        Returns:
            New smoothed output
        """
        compensated = self.compensate(filtered, disturbance, velocity)
        gained = self.apply_gain(current, compensated, velocity)
        return self.smooth(gained)
