"""
Perception modules: turn raw position samples into filtered, extrapolated
target estimates.
"""

from .adaptive_filter import AdaptiveKalmanFilter1D, AdaptiveKalmanFilter3D
from .motion_estimator import MotionEstimator, MotionSample
from .predictor import MotionPredictor, predict_position, DEFAULT_HORIZON

__all__ = [
    # Adaptive Filter
    'AdaptiveKalmanFilter1D',
    'AdaptiveKalmanFilter3D',

    # Motion Estimator
    'MotionEstimator',
    'MotionSample',

    # Predictor
    'MotionPredictor',
    'predict_position',
    'DEFAULT_HORIZON',
]
