"""Diagnostics for harmonic oscillator sample sequences."""

import warnings
from typing import Sequence

import numpy as np

from sho_sim.physics.oscillator import OscillatorParameters


class Diagnostics:
    """Compare generated samples against the analytic solution and track energy.

    All methods are read-only: they never modify the samples or stop a run.
    """

    def __init__(self, params: OscillatorParameters):
        """Initialize diagnostics.

        Args:
            params: Parameters the samples were generated with (dt must match)
        """
        self.params = params

    def analytic_solution(self, points: np.ndarray) -> np.ndarray:
        """Evaluate y(t) = A cos(omega (t - D)) + C at each sample's time.

        Args:
            points: Samples (n, 2), x = time + horizontal shift

        Returns:
            Analytic displacement (n,)
        """
        p = self.params
        t = np.asarray(points, dtype=np.float64)[:, 0] - p.horizontal_shift
        return p.amplitude * np.cos(p.angular_frequency * (t - p.phase_shift)) + p.vertical_shift

    def compute_errors(self, points: np.ndarray) -> np.ndarray:
        """Absolute displacement error of each sample against the analytic solution."""
        points = np.asarray(points, dtype=np.float64)
        if len(points) == 0:
            return np.zeros(0)
        return np.abs(points[:, 1] - self.analytic_solution(points))

    def max_error(self, points: np.ndarray) -> float:
        """Largest absolute displacement error (0.0 for an empty sequence)."""
        errors = self.compute_errors(points)
        if len(errors) == 0:
            return 0.0
        return float(np.max(errors))

    def compute_energies(self, points: np.ndarray) -> np.ndarray:
        """Total mechanical energy per interior sample.

        E = 0.5 * v^2 + 0.5 * k * y^2, with v reconstructed by central
        differences: v_i = (y_{i+1} - y_{i-1}) / (2 dt). The first and last
        samples have no central difference and are skipped.

        Args:
            points: Samples (n, 2) spaced by params.time_step

        Returns:
            Energies (n - 2,), empty when n < 3
        """
        points = np.asarray(points, dtype=np.float64)
        if len(points) < 3:
            return np.zeros(0)
        y = points[:, 1]
        dt = self.params.time_step
        v = (y[2:] - y[:-2]) / (2.0 * dt)
        return 0.5 * v ** 2 + 0.5 * self.params.stiffness * y[1:-1] ** 2

    def energy_drift(self, points: np.ndarray) -> float:
        """Maximum relative deviation of energy from its initial value.

        Returns:
            max |E - E0| / |E0| (absolute deviation when E0 is zero)
        """
        energies = self.compute_energies(points)
        if len(energies) == 0:
            return 0.0
        e0 = energies[0]
        deviation = np.max(np.abs(energies - e0))
        return float(deviation / abs(e0)) if e0 != 0 else float(deviation)

    def energy_trend(self, points: np.ndarray) -> float:
        """Secular energy change: mean of the last tenth minus the first tenth, relative to E0.

        Bounded integrators give a value near zero; an integrator that pumps
        energy into the oscillator gives a clearly positive value.
        """
        energies = self.compute_energies(points)
        if len(energies) == 0:
            return 0.0
        window = max(1, len(energies) // 10)
        head = np.mean(energies[:window])
        tail = np.mean(energies[-window:])
        e0 = energies[0]
        return float((tail - head) / abs(e0)) if e0 != 0 else float(tail - head)


def convergence_order(errors: Sequence[float], refinement: float = 2.0) -> np.ndarray:
    """Observed order of accuracy between successive step-size refinements.

    For errors e_i measured at dt, dt/r, dt/r^2, ... the order is
    log(e_i / e_{i+1}) / log(r).

    Args:
        errors: Global errors, one per step size, coarsest first
        refinement: Ratio between successive step sizes

    Returns:
        Orders (len(errors) - 1,)
    """
    errors = np.asarray(errors, dtype=np.float64)
    return np.log(errors[:-1] / errors[1:]) / np.log(refinement)


def check_finite(points: np.ndarray, label: str = "samples") -> bool:
    """Warn if any sample is NaN or infinite.

    Diagnostic only; the samples are returned to the caller unchanged.

    Args:
        points: Samples to check
        label: Name used in the warning message

    Returns:
        True if all values are finite
    """
    points = np.asarray(points, dtype=np.float64)
    finite = np.isfinite(points)
    if finite.all():
        return True
    n_bad = int(np.count_nonzero(~finite.all(axis=-1))) if points.ndim > 1 else int(np.count_nonzero(~finite))
    warnings.warn(
        f"{label}: {n_bad} of {len(points)} samples are not finite. "
        f"Step size or angular frequency is likely too large for a stable integration.",
        RuntimeWarning
    )
    return False
