"""
Velocity and acceleration estimation from consecutive position samples.

Finite differences over the sample interval give velocity and
acceleration. Intervals are floored to a small epsilon so duplicate or
out-of-order timestamps never produce NaN or infinite values.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..core.ring_buffer import RingBuffer
from ..core.vector3 import Vector3


@dataclass(frozen=True)
class MotionSample:
    """One entry of the motion history"""
    position: Vector3
    velocity: Vector3
    timestamp: float  # milliseconds


class MotionEstimator:
    """
    Tracks previous position, velocity, acceleration and a bounded history.

    Timestamps are in milliseconds; velocity is in units per second.
    """

    # Row layout in the history buffer: position (3), velocity (3), timestamp (1)
    _ROW_WIDTH = 7

    def __init__(self, history_size: int = 8, min_dt: float = 0.001):
        """
        Args:
            history_size: Number of samples kept in history
            min_dt: Lower bound on the sample interval in seconds
        """
        self.logger = logging.getLogger("MotionEstimator")
        self.min_dt = min_dt

        self.previous_position: Optional[Vector3] = None
        self.velocity = Vector3.zero()
        self.acceleration = Vector3.zero()
        self.previous_velocity = Vector3.zero()
        self.last_timestamp: Optional[float] = None

        self._history = RingBuffer(history_size, self._ROW_WIDTH)

    @property
    def speed(self) -> float:
        return self.velocity.magnitude()

    @property
    def history_size(self) -> int:
        return self._history.capacity

    def observe(self, position: Vector3, timestamp: float):
        """
        Ingest a position sample.

        Args:
            position: Observed target position
            timestamp: Sample time in milliseconds
        """
        if self.previous_position is not None:
            elapsed = timestamp - self.last_timestamp
            dt = max(elapsed / 1000.0, self.min_dt)
            if elapsed <= 0:
                self.logger.debug(f"Non-increasing timestamp ({elapsed:.3f} ms), dt floored to {dt}")

            new_velocity = position.subtract(self.previous_position).multiply_scalar(1.0 / dt)
            self.acceleration = new_velocity.subtract(self.velocity).multiply_scalar(1.0 / dt)
            self.previous_velocity = self.velocity
            self.velocity = new_velocity

            self._history.append(np.concatenate((
                position.as_array(),
                new_velocity.as_array(),
                [timestamp],
            )))

        self.previous_position = position
        self.last_timestamp = timestamp

    def history(self) -> List[MotionSample]:
        """Recorded samples, oldest first."""
        return [
            MotionSample(
                position=Vector3.from_array(row[0:3]),
                velocity=Vector3.from_array(row[3:6]),
                timestamp=float(row[6]),
            )
            for row in self._history.values()
        ]

    def reset(self):
        """
        Clear history and zero velocity and acceleration.

        The previous position and timestamp are kept, so the next sample
        still yields a finite-difference velocity.
        """
        self._history.clear()
        self.velocity = Vector3.zero()
        self.acceleration = Vector3.zero()
        self.previous_velocity = Vector3.zero()
