"""
Adaptive-noise Kalman filtering for target position smoothing.

Each axis runs a single-state Kalman filter (identity transition and
observation models) whose measurement noise grows with the average of
recently observed target speeds. Slow targets get heavy smoothing, fast
targets a more responsive estimate. Velocity is not part of the filter
state; it is estimated separately by the MotionEstimator.
"""

from typing import Optional

from ..core.ring_buffer import RingBuffer
from ..core.vector3 import Vector3


class AdaptiveKalmanFilter1D:
    """
    1D Kalman filter with speed-adaptive measurement noise.

    State: scalar position estimate
    Measurement: scalar position

    adaptive_r = R * (1 + mean(recent speeds) * noise_gain)
    """

    def __init__(
        self,
        measurement_noise: float = 0.005,
        process_noise: float = 0.0008,
        speed_window: int = 5,
        noise_gain: float = 0.1
    ):
        """
        Initialize adaptive filter.

        Args:
            measurement_noise: Base measurement noise (R), lower = more responsive
            process_noise: Process noise (Q), lower = smoother
            speed_window: Number of recent speed samples averaged
            noise_gain: Slope of adaptive_r against mean speed
        """
        self.R = measurement_noise
        self.Q = process_noise
        self.noise_gain = noise_gain

        self.x: Optional[float] = None
        self.cov: Optional[float] = None
        self.adaptive_r = measurement_noise
        self.speed_buffer = RingBuffer(speed_window)

    @property
    def initialized(self) -> bool:
        return self.x is not None

    def update(self, observed_speed: float):
        """
        Record a speed sample and recompute the adaptive measurement noise.

        Args:
            observed_speed: Current target speed magnitude
        """
        self.speed_buffer.append(observed_speed)
        avg_speed = float(self.speed_buffer.mean()[0])
        self.adaptive_r = self.R * (1.0 + avg_speed * self.noise_gain)

    def filter(self, measurement: float, observed_speed: float = 0.0) -> float:
        """
        Run one predict/update step.

        The first call initializes the estimate to the measurement and
        returns it unchanged.

        Args:
            measurement: Observed position on this axis
            observed_speed: Current target speed magnitude

        Returns:
            Filtered position estimate
        """
        self.update(observed_speed)

        if self.x is None:
            self.x = measurement
            self.cov = self.adaptive_r
            return measurement

        # Predict (A = 1)
        pred_x = self.x
        pred_cov = self.cov + self.Q

        # Update (C = 1)
        gain = pred_cov / (pred_cov + self.adaptive_r)
        self.x = pred_x + gain * (measurement - pred_x)
        self.cov = pred_cov * (1.0 - gain)

        return self.x

    def reset(self):
        """Return to the uninitialized state and empty the speed window."""
        self.x = None
        self.cov = None
        self.adaptive_r = self.R
        self.speed_buffer.clear()


class AdaptiveKalmanFilter3D:
    """Three independent AdaptiveKalmanFilter1D instances, one per axis."""

    def __init__(
        self,
        measurement_noise: float = 0.005,
        process_noise: float = 0.0008,
        speed_window: int = 5,
        noise_gain: float = 0.1
    ):
        self.kf_x = AdaptiveKalmanFilter1D(measurement_noise, process_noise, speed_window, noise_gain)
        self.kf_y = AdaptiveKalmanFilter1D(measurement_noise, process_noise, speed_window, noise_gain)
        self.kf_z = AdaptiveKalmanFilter1D(measurement_noise, process_noise, speed_window, noise_gain)

    @property
    def initialized(self) -> bool:
        return self.kf_x.initialized and self.kf_y.initialized and self.kf_z.initialized

    def filter(self, position: Vector3, speed: float = 0.0) -> Vector3:
        """
        Filter a 3D position, informing every axis with the same speed.

        Args:
            position: Measured (or extrapolated) position
            speed: Current target speed magnitude

        Returns:
            Filtered position
        """
        return Vector3(
            self.kf_x.filter(position.x, speed),
            self.kf_y.filter(position.y, speed),
            self.kf_z.filter(position.z, speed),
        )

    def estimate(self) -> Optional[Vector3]:
        """Current estimate, or None before the first measurement."""
        if not self.initialized:
            return None
        return Vector3(self.kf_x.x, self.kf_y.x, self.kf_z.x)

    def reset(self):
        """Reset all three axis filters."""
        self.kf_x.reset()
        self.kf_y.reset()
        self.kf_z.reset()
