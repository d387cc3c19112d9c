"""Physics engine for the simple harmonic oscillator."""

from sho_sim.physics.oscillator import OscillatorParameters
from sho_sim.physics.simulator import Simulator, SequenceMode
from sho_sim.physics.diagnostics import Diagnostics

__all__ = ["OscillatorParameters", "Simulator", "SequenceMode", "Diagnostics"]
