"""
SHO Simulator - numerical integration of a simple harmonic oscillator.

Features:
- Multiple integrators (Euler, Verlet, RK4)
- Analytic or forward-integrated Euler
- Fixed-window or accumulating sample sequences
- Energy and accuracy diagnostics
- Export to NPZ/JSON
- CLI interface
"""

__version__ = "0.1.0"

from sho_sim.physics.oscillator import OscillatorParameters
from sho_sim.physics.simulator import Simulator, SequenceMode
from sho_sim.physics.integrators.base import Method, EulerVariant

__all__ = [
    "OscillatorParameters",
    "Simulator",
    "SequenceMode",
    "Method",
    "EulerVariant",
]
