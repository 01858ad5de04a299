"""
Tracking controller: per-cycle orchestration of the tracking pipeline.

Each cycle ingests a raw target position, updates the motion estimate,
extrapolates a short distance ahead, filters the extrapolated position
per axis, then compensates, gains and smooths it into the next output
vector. The controller never reads the clock or applies the output
itself; the caller supplies timestamps and consumes the returned vector.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from .config import build_profiles, merge_config
from .profiles import select_profile
from .response_shaper import ResponseShaper
from .vector3 import Vector3
from ..perception.adaptive_filter import AdaptiveKalmanFilter3D
from ..perception.motion_estimator import MotionEstimator
from ..perception.predictor import MotionPredictor


class ControllerState(Enum):
    """Controller lifecycle states"""
    UNINITIALIZED = "uninitialized"
    TRACKING = "tracking"


class TrackingController:
    """
    Single-target tracking controller.

    Owns three adaptive axis filters, a motion estimator and a response
    shaper. Instances share no state, so independent targets need
    independent controllers.

    Attributes:
        profile: Active WeaponProfile
        profile_fallback: True if the requested profile name was unknown
        cycle_count: Number of run_cycle() calls, skipped ones included
        skipped_cycles: Number of cycles skipped for a near-stationary target
        last_output: Most recently emitted vector
    """

    def __init__(self, profile_name: Optional[str] = None, config: Optional[Dict[str, Any]] = None):
        """
        Initialize tracking controller

        Args:
            profile_name: Name of the weapon profile to use (the config's
                `profile` entry if None)
            config: Configuration overrides (see aimtrack.core.config)
        """
        self.logger = logging.getLogger("TrackingController")
        self.config = merge_config(config)

        if profile_name is None:
            profile_name = self.config['profile']
        self.profile_name = profile_name
        self.profile, self.profile_fallback = select_profile(
            profile_name, build_profiles(self.config)
        )

        filter_cfg = self.config['filter']
        self.filter = AdaptiveKalmanFilter3D(
            filter_cfg['measurement_noise'],
            filter_cfg['process_noise'],
            int(filter_cfg['speed_window']),
            filter_cfg['noise_gain'],
        )

        motion_cfg = self.config['motion']
        self.motion = MotionEstimator(
            history_size=int(motion_cfg['history_size']),
            min_dt=motion_cfg['min_dt'],
        )

        self.predictor = MotionPredictor(horizon=self.config['prediction']['horizon'])

        shaping_cfg = self.config['shaping']
        self.shaper = ResponseShaper(
            self.profile,
            velocity_compensation_constant=shaping_cfg['velocity_compensation_constant'],
            snap_gain=shaping_cfg['snap_gain'],
            velocity_gain_slope=shaping_cfg['velocity_gain_slope'],
            max_velocity_gain=shaping_cfg['max_velocity_gain'],
        )

        skip_cfg = self.config['skip']
        self.skip_enabled = bool(skip_cfg['enabled'])
        self.skip_speed_threshold = skip_cfg['speed_threshold']
        self.skip_interval = max(1, int(skip_cfg['interval']))

        self.cycle_count = 0
        self.skipped_cycles = 0
        self.last_output = Vector3.zero()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "TrackingController":
        """Build a controller using the profile named in the configuration."""
        return cls(config=config)

    @property
    def state(self) -> ControllerState:
        if self.motion.previous_position is None:
            return ControllerState.UNINITIALIZED
        return ControllerState.TRACKING

    @property
    def velocity(self) -> Vector3:
        return self.motion.velocity

    @property
    def acceleration(self) -> Vector3:
        return self.motion.acceleration

    def should_skip_cycle(self) -> bool:
        """
        Advance the cycle counter and decide whether to skip this cycle.

        Near-stationary targets are processed on every skip_interval-th
        cycle only.
        """
        self.cycle_count += 1
        if not self.skip_enabled:
            return False
        return (
            self.motion.speed < self.skip_speed_threshold
            and self.cycle_count % self.skip_interval == 0
        )

    def run_cycle(
        self,
        observed_position: Vector3,
        disturbance: Vector3,
        current_output: Vector3,
        timestamp: float
    ) -> Optional[Vector3]:
        """
        Execute one tracking cycle.

        Args:
            observed_position: Raw target position sample
            disturbance: Current disturbance (recoil) offset
            current_output: Current output baseline, usually the previous emission
            timestamp: Sample time in milliseconds

        Returns:
            New output vector, or None if the cycle was skipped. A skipped
            cycle leaves all state untouched, including last_output.
        """
        if self.should_skip_cycle():
            self.skipped_cycles += 1
            return None

        self.motion.observe(observed_position, timestamp)

        predicted = self.predictor.predict(
            observed_position,
            self.motion.velocity,
            self.motion.acceleration,
            self.profile.prediction_scale,
        )

        speed = self.motion.speed
        tracked = self.filter.filter(predicted, speed)

        shaped = self.shaper.apply(tracked, disturbance, current_output, self.motion.velocity)
        self._emit(shaped)
        return shaped

    def _emit(self, output: Vector3):
        self.last_output = output
        if self.logger.isEnabledFor(logging.DEBUG):
            reference = self.motion.previous_position or Vector3.zero()
            self.logger.debug(
                f"Lock [{self.profile_name}] | Pos: {output} | "
                f"Vel: {self.motion.speed:.3f} | Dist: {output.distance(reference):.4f}"
            )

    def aim_accuracy(self) -> float:
        """
        Closeness of the last output to the last observed position.

        Returns:
            max(0, 1 - distance * 10), or 0.0 before the first sample
        """
        if self.motion.previous_position is None:
            return 0.0
        distance = self.last_output.distance(self.motion.previous_position)
        return max(0.0, 1.0 - distance * 10.0)

    def reset(self):
        """
        Return filters and motion estimates to their initial state.

        The last observed position and timestamp, the selected profile,
        the smoothed output and the cycle counters are kept.
        """
        self.filter.reset()
        self.motion.reset()
        self.logger.info("Tracking reset")
