"""Basic example of using the oscillator simulator."""

import math

from sho_sim import OscillatorParameters, Simulator
from sho_sim.physics.diagnostics import Diagnostics


def main():
    """Generate one period with each method and report the error."""
    params = OscillatorParameters(
        amplitude=1.0,
        angular_frequency=2 * math.pi,
        time_step=0.01
    )
    diagnostics = Diagnostics(params)

    sim = Simulator(params)
    for _ in range(3):
        points = sim.generate_sequence(100)
        print(f"{sim.current_method.label:<8} ({sim.style}): "
              f"last sample = ({points[-1, 0]:.3f}, {points[-1, 1]:.6f}), "
              f"max error = {diagnostics.max_error(points):.3e}")
        sim.cycle_method()


if __name__ == "__main__":
    main()
