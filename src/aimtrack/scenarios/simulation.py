"""
Fixed-cadence simulation harness for the tracking controller.

Drives a TrackingController against a synthetic moving target and a
random disturbance pattern, hands every emitted vector to an output sink
and logs rate and accuracy periodically. Time is simulated by default so
runs are deterministic; pass realtime=True to pace cycles on the wall
clock.
"""

import logging
import math
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..core.config import load_config
from ..core.tracking_controller import TrackingController
from ..core.vector3 import Vector3

logger = logging.getLogger(__name__)

# Head bone position the synthetic target oscillates around
DEFAULT_TARGET_BASE = Vector3(-0.0456970781, -0.004478302, -0.0200432576)


class SyntheticTarget:
    """Target oscillating around a base position on three independent sinusoids."""

    def __init__(
        self,
        base: Vector3 = DEFAULT_TARGET_BASE,
        amplitude: Vector3 = Vector3(0.01, 0.008, 0.005),
        angular_rate: Vector3 = Vector3(2.0, 1.5, 0.8)
    ):
        """
        Args:
            base: Center of the motion
            amplitude: Per-axis oscillation amplitude
            angular_rate: Per-axis angular frequency (rad/s)
        """
        self.base = base
        self.amplitude = amplitude
        self.angular_rate = angular_rate

    def position_at(self, t: float) -> Vector3:
        """
        Target position at time t.

        Args:
            t: Time in seconds

        Returns:
            base + (sin(wx t) ax, cos(wy t) ay, sin(wz t) az)
        """
        return Vector3(
            self.base.x + math.sin(t * self.angular_rate.x) * self.amplitude.x,
            self.base.y + math.cos(t * self.angular_rate.y) * self.amplitude.y,
            self.base.z + math.sin(t * self.angular_rate.z) * self.amplitude.z,
        )


class RecoilPattern:
    """Uniform random disturbance, zero-mean on x and y, none on z."""

    def __init__(self, x_range: float = 0.001, y_range: float = 0.0015, seed: Optional[int] = None):
        """
        Args:
            x_range: Half-width of the x offset distribution
            y_range: Half-width of the y offset distribution
            seed: Seed for the random generator (None for nondeterministic)
        """
        self.x_range = x_range
        self.y_range = y_range
        self.rng = np.random.default_rng(seed)

    def sample(self) -> Vector3:
        dx, dy = self.rng.uniform(-1.0, 1.0, size=2)
        return Vector3(float(dx) * self.x_range, float(dy) * self.y_range, 0.0)


class SimulatedClock:
    """Millisecond clock advanced explicitly by the harness."""

    def __init__(self, start_ms: float = 0.0):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, delta_ms: float):
        self.now_ms += delta_ms


def wall_clock_ms() -> float:
    return time.time() * 1000.0


@dataclass
class SimulationReport:
    """Summary of a simulation run"""
    cycles: int
    emitted: int
    skipped: int
    final_output: Vector3
    final_accuracy: float
    non_finite_outputs: int = 0


def run_simulation(
    controller: TrackingController,
    cycles: int,
    rate_hz: float = 120.0,
    target: Optional[SyntheticTarget] = None,
    recoil: Optional[RecoilPattern] = None,
    baseline: Vector3 = Vector3.zero(),
    sink: Optional[Callable[[Vector3], None]] = None,
    clock: Optional[Callable[[], float]] = None,
    report_interval: int = 60,
    realtime: bool = False
) -> SimulationReport:
    """
    Run the controller for a fixed number of cycles.

    Args:
        controller: Controller to drive
        cycles: Number of cycles to run
        rate_hz: Cycle rate
        target: Target motion source (SyntheticTarget() if None)
        recoil: Disturbance source (RecoilPattern() if None)
        baseline: Externally tracked output baseline passed every cycle
        sink: Called with every emitted vector
        clock: Returns the current time in milliseconds. Defaults to a
            simulated clock advancing 1000 / rate_hz per cycle, or to the
            wall clock when realtime is set
        report_interval: Log rate and accuracy every N cycles (0 disables)
        realtime: Sleep between cycles to hold the cycle rate

    Returns:
        SimulationReport for the run
    """
    if rate_hz <= 0:
        raise ValueError(f"rate_hz must be positive, got {rate_hz}")

    target = target or SyntheticTarget()
    recoil = recoil or RecoilPattern()
    period_ms = 1000.0 / rate_hz

    sim_clock: Optional[SimulatedClock] = None
    if clock is None:
        if realtime:
            clock = wall_clock_ms
        else:
            sim_clock = SimulatedClock()
            clock = sim_clock

    emitted = 0
    non_finite = 0
    last_report_time: Optional[float] = None
    start_skipped = controller.skipped_cycles

    for i in range(cycles):
        now = clock()
        position = target.position_at(now / 1000.0)
        output = controller.run_cycle(position, recoil.sample(), baseline, now)

        if output is not None:
            emitted += 1
            if not output.is_finite():
                non_finite += 1
                logger.error(f"Non-finite output at cycle {i}: {output}")
            if sink is not None:
                sink(output)

        if report_interval and (i + 1) % report_interval == 0:
            if last_report_time is not None and now > last_report_time:
                rate = report_interval * 1000.0 / (now - last_report_time)
            else:
                rate = rate_hz
            last_report_time = now
            logger.info(
                f"Performance: {rate:.1f} Hz | Accuracy: {controller.aim_accuracy() * 100:.1f}%"
            )

        if realtime:
            time.sleep(period_ms / 1000.0)
        if sim_clock is not None:
            sim_clock.advance(period_ms)

    return SimulationReport(
        cycles=cycles,
        emitted=emitted,
        skipped=controller.skipped_cycles - start_skipped,
        final_output=controller.last_output,
        final_accuracy=controller.aim_accuracy(),
        non_finite_outputs=non_finite,
    )


def main():
    """Main entry point: run the simulation from an optional YAML config."""
    logging.basicConfig(
        level=logging.INFO,
        format='[%(asctime)s] %(name)s - %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    config_path = sys.argv[1] if len(sys.argv) > 1 else None
    config = load_config(config_path)
    sim_cfg = config['simulation']

    controller = TrackingController.from_config(config)
    cycles = int(sim_cfg['rate_hz'] * sim_cfg['duration_s'])

    logger.info(f"Starting tracking simulation with profile {controller.profile_name}")
    report = run_simulation(
        controller,
        cycles=cycles,
        rate_hz=sim_cfg['rate_hz'],
        report_interval=int(sim_cfg['report_interval']),
        realtime=True,
    )
    logger.info(
        f"Done: {report.emitted} emitted, {report.skipped} skipped, "
        f"final output {report.final_output}, accuracy {report.final_accuracy * 100:.1f}%"
    )


if __name__ == "__main__":
    main()
