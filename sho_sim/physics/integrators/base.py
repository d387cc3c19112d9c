"""Integration method tags shared by the integrators and the simulator."""

from enum import Enum
from typing import Tuple

import numpy as np

# Emitted sample: (time + horizontal_shift, displacement)
Sample = Tuple[float, float]


class Method(Enum):
    """Closed set of integration methods.

    Each member carries its display name, order of accuracy and the
    style tag a renderer should use for it.
    """
    EULER = ("euler", 1, "red")
    VERLET = ("verlet", 2, "blue")
    RK4 = ("rk4", 4, "green")

    def __init__(self, label: str, order: int, style: str):
        self.label = label
        self.order = order
        self.style = style

    @classmethod
    def from_name(cls, name: str) -> "Method":
        """Look up a method by its name (case-insensitive)."""
        for method in cls:
            if method.label == name.lower():
                return method
        raise ValueError(f"Unknown integrator: {name}. Available: {[m.label for m in cls]}")

    def next(self) -> "Method":
        """Return the method after this one in Euler -> Verlet -> RK4 order."""
        members = list(Method)
        return members[(members.index(self) + 1) % len(members)]


class EulerVariant(Enum):
    """How the Euler method produces samples.

    ANALYTIC evaluates the closed-form solution at each sample time.
    FORWARD performs explicit forward-Euler integration of the ODE.
    """
    ANALYTIC = "analytic"
    FORWARD = "forward"

    @classmethod
    def from_name(cls, name: str) -> "EulerVariant":
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown Euler variant: {name}. Available: {[v.value for v in cls]}")


def vec2(x: float, y: float) -> np.ndarray:
    """Create a 2D float vector."""
    return np.array([x, y], dtype=np.float64)
