"""
Short-horizon motion extrapolation (constant-acceleration model).
"""

from ..core.vector3 import Vector3

DEFAULT_HORIZON = 0.05  # seconds


def predict_position(
    current_position: Vector3,
    velocity: Vector3,
    acceleration: Vector3,
    horizon: float = DEFAULT_HORIZON,
    prediction_scale: float = 1.0
) -> Vector3:
    """
    Extrapolate a future position.

    p + v * (horizon * prediction_scale) + a * 0.5 * horizon^2

    Args:
        current_position: Latest observed position
        velocity: Current velocity estimate (units/s)
        acceleration: Current acceleration estimate (units/s^2)
        horizon: Look-ahead time in seconds
        prediction_scale: Profile gain applied to the velocity term only

    Returns:
        Predicted position
    """
    velocity_term = velocity.multiply_scalar(horizon * prediction_scale)
    acceleration_term = acceleration.multiply_scalar(0.5 * horizon * horizon)
    return current_position.add(velocity_term).add(acceleration_term)


class MotionPredictor:
    """Holds the prediction horizon for a controller."""

    def __init__(self, horizon: float = DEFAULT_HORIZON):
        """
        Args:
            horizon: Look-ahead time in seconds
        """
        self.horizon = horizon

    def predict(
        self,
        current_position: Vector3,
        velocity: Vector3,
        acceleration: Vector3,
        prediction_scale: float = 1.0
    ) -> Vector3:
        return predict_position(
            current_position, velocity, acceleration, self.horizon, prediction_scale
        )
