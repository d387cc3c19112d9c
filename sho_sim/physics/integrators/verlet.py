"""Störmer-Verlet integrator (position-based, symplectic, O(h²) accuracy)."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from sho_sim.physics.integrators.base import Sample, vec2
from sho_sim.physics.oscillator import OscillatorParameters, compute_acceleration


@dataclass
class VerletState:
    """Two most recent positions; x of each holds simulated time."""
    previous: np.ndarray
    current: np.ndarray


def initialize_verlet(params: OscillatorParameters) -> VerletState:
    """Two-point bootstrap from the analytic solution.

    The recurrence needs a position one step in the past, so the state is
    seeded with y(0) as current and y(-dt) as previous. The previous sample
    carries the velocity information that Verlet never stores explicitly.

    Args:
        params: Oscillator parameters (dt taken from params.time_step)

    Returns:
        Initialized VerletState
    """
    dt = params.time_step
    return VerletState(
        previous=vec2(-dt, params.displacement(-dt)),
        current=vec2(0.0, params.displacement(0.0)),
    )


def verlet_step(state: VerletState, params: OscillatorParameters) -> Tuple[VerletState, Sample]:
    """Störmer-Verlet step.

    Computes:
    - a = -k * y_current
    - y_next = 2*y_current - y_previous + a*dt^2
    - x_next = x_current + dt

    Args:
        state: Current VerletState
        params: Oscillator parameters

    Returns:
        Tuple of (new_state, sample) where sample is (x_next + h, y_next)
    """
    dt = params.time_step
    current = state.current
    previous = state.previous

    # Acceleration only acts on the y axis
    acceleration_y = compute_acceleration(current[1], params.stiffness)

    next_position = vec2(
        current[0] + dt,
        2.0 * current[1] - previous[1] + acceleration_y * dt * dt,
    )

    sample = (float(next_position[0]) + params.horizontal_shift, float(next_position[1]))
    return VerletState(previous=current, current=next_position), sample
