"""
Scenario harnesses that drive the tracking controller at a fixed cadence.
"""

from .simulation import (
    SyntheticTarget,
    RecoilPattern,
    SimulatedClock,
    SimulationReport,
    run_simulation,
)

__all__ = [
    'SyntheticTarget',
    'RecoilPattern',
    'SimulatedClock',
    'SimulationReport',
    'run_simulation',
]
