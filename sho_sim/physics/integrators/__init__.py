"""Numerical integrators for the harmonic oscillator."""

from sho_sim.physics.integrators.base import Method, EulerVariant
from sho_sim.physics.integrators.euler import (
    EulerState, ForwardEulerState, initialize_euler, euler_step,
    initialize_forward_euler, forward_euler_step
)
from sho_sim.physics.integrators.verlet import VerletState, initialize_verlet, verlet_step
from sho_sim.physics.integrators.rk4 import RK4State, initialize_rk4, rk4_step

__all__ = [
    "Method", "EulerVariant",
    "EulerState", "ForwardEulerState", "initialize_euler", "euler_step",
    "initialize_forward_euler", "forward_euler_step",
    "VerletState", "initialize_verlet", "verlet_step",
    "RK4State", "initialize_rk4", "rk4_step",
]
