"""Runge-Kutta 4th order integrator (high accuracy, O(h⁴))."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from sho_sim.physics.integrators.base import Sample, vec2
from sho_sim.physics.oscillator import OscillatorParameters, compute_acceleration


@dataclass
class RK4State:
    """Position and velocity; x of position holds simulated time."""
    position: np.ndarray
    velocity: np.ndarray


def initialize_rk4(params: OscillatorParameters) -> RK4State:
    """Seed position and velocity from the analytic solution at t = 0."""
    return RK4State(
        position=vec2(0.0, params.displacement(0.0)),
        velocity=vec2(0.0, params.velocity(0.0)),
    )


def _acceleration(position: np.ndarray, stiffness: float) -> np.ndarray:
    return vec2(0.0, compute_acceleration(position[1], stiffness))


def rk4_step(state: RK4State, params: OscillatorParameters) -> Tuple[RK4State, Sample]:
    """RK4 step using the standard 4-stage method.

    For the system dy/dt = v, dv/dt = a(y), with increments scaled by dt:
    k1 = dt*v                      k1a = dt*a(y)
    k2 = dt*(v + k1a/2)            k2a = dt*a(y + k1/2)
    k3 = dt*(v + k2a/2)            k3a = dt*a(y + k2/2)
    k4 = dt*(v + k3a)              k4a = dt*a(y + k3)

    y_new = y + (k1 + 2*k2 + 2*k3 + k4)/6
    v_new = v + (k1a + 2*k2a + 2*k3a + k4a)/6

    Only y is integrated; x advances by dt outside the blend.

    Returns:
        Tuple of (new_state, sample)
    """
    dt = params.time_step
    k = params.stiffness
    position = state.position
    velocity = state.velocity

    # k1: current state
    k1 = dt * velocity
    k1a = dt * _acceleration(position, k)

    # k2: midpoint using k1
    k2 = dt * (velocity + 0.5 * k1a)
    k2a = dt * _acceleration(position + 0.5 * k1, k)

    # k3: midpoint using k2
    k3 = dt * (velocity + 0.5 * k2a)
    k3a = dt * _acceleration(position + 0.5 * k2, k)

    # k4: endpoint using k3
    k4 = dt * (velocity + k3a)
    k4a = dt * _acceleration(position + k3, k)

    new_position = vec2(
        position[0] + dt,
        position[1] + (k1[1] + 2.0 * k2[1] + 2.0 * k3[1] + k4[1]) / 6.0,
    )
    new_velocity = velocity + (k1a + 2.0 * k2a + 2.0 * k3a + k4a) / 6.0

    sample = (float(new_position[0]) + params.horizontal_shift, float(new_position[1]))
    return RK4State(position=new_position, velocity=new_velocity), sample
