"""Main simulator controller."""

import time
from enum import Enum
from typing import Optional, Union

import numpy as np

from sho_sim.physics.diagnostics import check_finite as warn_if_not_finite
from sho_sim.physics.integrators.base import Method, EulerVariant
from sho_sim.physics.integrators.euler import (
    initialize_euler, euler_step,
    initialize_forward_euler, forward_euler_step
)
from sho_sim.physics.integrators.verlet import initialize_verlet, verlet_step
from sho_sim.physics.integrators.rk4 import initialize_rk4, rk4_step
from sho_sim.physics.oscillator import OscillatorParameters


class SequenceMode(Enum):
    """How repeated generate_sequence calls treat the sample buffer.

    FIXED_WINDOW recomputes the buffer from a fresh state on every call.
    ACCUMULATING keeps the state and appends until reset.
    """
    FIXED_WINDOW = "fixed-window"
    ACCUMULATING = "accumulating"

    @classmethod
    def from_name(cls, name: str) -> "SequenceMode":
        try:
            return cls(name.lower().replace("_", "-"))
        except ValueError:
            raise ValueError(f"Unknown sequence mode: {name}. Available: {[m.value for m in cls]}")


class Simulator:
    """Integrator core for the simple harmonic oscillator.

    Owns oscillator parameters and the state of the active integration
    method, and produces ordered (x, y) sample sequences. Each instance is
    independent; run several side by side to compare methods.
    """

    def __init__(
        self,
        params: Optional[OscillatorParameters] = None,
        method: Union[Method, str] = Method.EULER,
        mode: Union[SequenceMode, str] = SequenceMode.FIXED_WINDOW,
        euler_variant: Union[EulerVariant, str] = EulerVariant.ANALYTIC,
        max_points: Optional[int] = None,
        check_finite: bool = True
    ):
        """Initialize simulator.

        Args:
            params: Oscillator parameters (None leaves the core unconfigured)
            method: Integration method (default: Euler)
            mode: Sequence mode (default: fixed-window)
            euler_variant: Analytic or forward Euler (default: analytic)
            max_points: In accumulating mode, keep at most this many samples
            check_finite: Warn when a batch contains NaN or infinite values
        """
        self.params = params
        self.method = Method.from_name(method) if isinstance(method, str) else method
        self.mode = SequenceMode.from_name(mode) if isinstance(mode, str) else mode
        self.euler_variant = (
            EulerVariant.from_name(euler_variant) if isinstance(euler_variant, str) else euler_variant
        )
        self.max_points = max_points
        self.check_finite = check_finite

        self.time = 0.0
        self.step_count = 0
        self.state = None
        self._points = np.zeros((0, 2))

        # Profiling: last batch timing (ms)
        self._last_batch_ms: Optional[float] = None
        self._profile: bool = False

        if self.params is not None:
            self.reset()

    @classmethod
    def from_config(cls, config) -> "Simulator":
        """Build a simulator from a Config object."""
        return cls(
            params=config.to_parameters(),
            method=config.method,
            mode=config.mode,
            euler_variant=config.euler_variant,
            max_points=config.max_points,
            check_finite=config.check_finite,
        )

    @property
    def is_configured(self) -> bool:
        return self.params is not None

    @property
    def current_method(self) -> Method:
        return self.method

    @property
    def style(self) -> str:
        """Style tag for the active method, for use by a renderer."""
        return self.method.style

    @property
    def points(self) -> np.ndarray:
        """Copy of the current sample buffer (n, 2)."""
        return self._points.copy()

    def set_profiling(self, enabled: bool = True):
        """Enable or disable per-batch timing (get_timing())."""
        self._profile = enabled

    def get_timing(self) -> dict:
        """Return last batch timing in ms. Only valid when profiling is enabled."""
        return {"batch_ms": self._last_batch_ms}

    def configure(self, params: OscillatorParameters):
        """Set oscillator parameters and reset state.

        Args:
            params: New parameters (no range validation is performed)
        """
        self.params = params
        self.reset()

    def select_method(self, method: Union[Method, str]):
        """Switch integration method; state and sample buffer are reset.

        Args:
            method: Method or its name ('euler', 'verlet', 'rk4')
        """
        self.method = Method.from_name(method) if isinstance(method, str) else method
        if self.is_configured:
            self.reset()

    def cycle_method(self) -> Method:
        """Switch to the next method (Euler -> Verlet -> RK4 -> Euler)."""
        self.select_method(self.method.next())
        return self.method

    def set_euler_variant(self, variant: Union[EulerVariant, str]):
        self.euler_variant = EulerVariant.from_name(variant) if isinstance(variant, str) else variant
        if self.is_configured:
            self.reset()

    def set_mode(self, mode: Union[SequenceMode, str]):
        """Switch sequence mode; state and sample buffer are reset."""
        self.mode = SequenceMode.from_name(mode) if isinstance(mode, str) else mode
        if self.is_configured:
            self.reset()

    def set_timestep(self, dt: float):
        """Set time step and reset state (the Verlet bootstrap depends on dt)."""
        if not self.is_configured:
            raise RuntimeError("Simulator is not configured. Call configure() first.")
        self.configure(self.params.with_time_step(dt))

    def reset(self):
        """Re-initialize the active method's state and clear the sample buffer."""
        if not self.is_configured:
            raise RuntimeError("Simulator is not configured. Call configure() first.")
        self.state = self._initialize_state()
        self._points = np.zeros((0, 2))
        self.time = 0.0
        self.step_count = 0

    def _initialize_state(self):
        if self.method is Method.EULER:
            if self.euler_variant is EulerVariant.FORWARD:
                return initialize_forward_euler(self.params)
            return initialize_euler(self.params)
        elif self.method is Method.VERLET:
            return initialize_verlet(self.params)
        else:
            return initialize_rk4(self.params)

    def _step(self, state):
        if self.method is Method.EULER:
            if self.euler_variant is EulerVariant.FORWARD:
                return forward_euler_step(state, self.params)
            return euler_step(state, self.params)
        elif self.method is Method.VERLET:
            return verlet_step(state, self.params)
        else:
            return rk4_step(state, self.params)

    def generate_sequence(self, step_count: int) -> np.ndarray:
        """Advance the active method step_count times and return the samples.

        In fixed-window mode the state is re-initialized first and exactly
        step_count samples are returned. In accumulating mode the state
        carries over from the previous call and the whole accumulated
        buffer is returned (trimmed to max_points if set).

        Args:
            step_count: Number of steps (negative values are treated as 0)

        Returns:
            Samples (n, 2) of (time + horizontal_shift, displacement)
        """
        if not self.is_configured:
            raise RuntimeError("Simulator is not configured. Call configure() first.")

        if self.mode is SequenceMode.FIXED_WINDOW:
            self.reset()

        n = max(0, int(step_count))
        if self._profile:
            t0 = time.perf_counter()

        batch = np.empty((n, 2), dtype=np.float64)
        state = self.state
        for i in range(n):
            state, batch[i] = self._step(state)
        self.state = state

        if self._profile:
            self._last_batch_ms = (time.perf_counter() - t0) * 1000.0

        self.step_count += n
        self.time = self.step_count * self.params.time_step

        if self.check_finite and n > 0:
            warn_if_not_finite(batch, label=f"{self.method.label} batch")

        if self.mode is SequenceMode.FIXED_WINDOW:
            self._points = batch
            return batch.copy()

        self._points = np.concatenate([self._points, batch])
        if self.max_points is not None and len(self._points) > self.max_points:
            self._points = self._points[len(self._points) - self.max_points:]
        return self._points.copy()

