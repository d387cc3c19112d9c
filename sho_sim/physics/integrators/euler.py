"""Euler method (analytic per-sample evaluation, or forward integration O(h))."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from sho_sim.physics.integrators.base import Sample, vec2
from sho_sim.physics.oscillator import OscillatorParameters, compute_acceleration


@dataclass
class EulerState:
    """Elapsed simulated time for the analytic Euler variant."""
    time: float = 0.0


@dataclass
class ForwardEulerState:
    """Position and velocity for the forward Euler variant.

    x of both vectors tracks time; only y is dynamically integrated.
    """
    position: np.ndarray
    velocity: np.ndarray


def initialize_euler(params: OscillatorParameters) -> EulerState:
    return EulerState(time=0.0)


def euler_step(state: EulerState, params: OscillatorParameters) -> Tuple[EulerState, Sample]:
    """Evaluate the closed-form solution at the current time, then advance it.

    The sample is exact regardless of step size; no error accumulates.

    Returns:
        Tuple of (new_state, sample)
    """
    t = state.time
    sample = (t + params.horizontal_shift, params.displacement(t))
    return EulerState(time=t + params.time_step), sample


def initialize_forward_euler(params: OscillatorParameters) -> ForwardEulerState:
    """Seed position and velocity from the analytic solution at t = 0."""
    return ForwardEulerState(
        position=vec2(0.0, params.displacement(0.0)),
        velocity=vec2(0.0, params.velocity(0.0)),
    )


def forward_euler_step(
    state: ForwardEulerState,
    params: OscillatorParameters
) -> Tuple[ForwardEulerState, Sample]:
    """Forward Euler step: y_new = y + v*dt, v_new = v + a(y)*dt.

    Returns:
        Tuple of (new_state, sample)
    """
    dt = params.time_step
    acceleration = vec2(0.0, compute_acceleration(state.position[1], params.stiffness))

    new_position = state.position + state.velocity * dt
    # x advances linearly with time
    new_position[0] = state.position[0] + dt
    new_velocity = state.velocity + acceleration * dt

    sample = (float(new_position[0]) + params.horizontal_shift, float(new_position[1]))
    return ForwardEulerState(position=new_position, velocity=new_velocity), sample
