"""Simple harmonic oscillator model: parameters, closed-form solution and force law."""

import math
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class OscillatorParameters:
    """Parameters of a single-spring, unit-mass oscillator.

    The closed-form solution is y(t) = A * cos(omega * (t - D)) + C.
    No validation is performed: zero or negative omega and dt are allowed
    and simply produce degenerate or divergent trajectories.

    Attributes:
        amplitude: A
        angular_frequency: omega
        phase_shift: D
        vertical_shift: C
        horizontal_shift: Offset added to the x coordinate of every emitted sample
        spring_constant: Optional spring constant k; when None, k = omega^2
        time_step: Integration step size dt
    """
    amplitude: float = 1.0
    angular_frequency: float = 1.0
    phase_shift: float = 0.0
    vertical_shift: float = 0.0
    horizontal_shift: float = 0.0
    spring_constant: Optional[float] = None
    time_step: float = 0.01

    @property
    def stiffness(self) -> float:
        """Restoring-force coefficient k (mass is 1, so k = omega^2 unless overridden)."""
        if self.spring_constant is not None:
            return self.spring_constant
        return self.angular_frequency ** 2

    def displacement(self, t: float) -> float:
        """Analytic displacement y(t) = A cos(omega (t - D)) + C."""
        return self.amplitude * math.cos(self.angular_frequency * (t - self.phase_shift)) + self.vertical_shift

    def velocity(self, t: float) -> float:
        """Analytic velocity dy/dt = -A omega sin(omega (t - D))."""
        omega = self.angular_frequency
        return -self.amplitude * omega * math.sin(omega * (t - self.phase_shift))

    def with_time_step(self, dt: float) -> "OscillatorParameters":
        """Return a copy with a different step size."""
        return replace(self, time_step=dt)


def compute_acceleration(y: float, stiffness: float) -> float:
    """Linear restoring force a = -k * y."""
    return -stiffness * y
