"""CLI main entry point."""

import argparse
import sys
from dataclasses import replace

from sho_sim.physics.simulator import Simulator
from sho_sim.physics.diagnostics import Diagnostics
from sho_sim.physics.integrators.base import Method
from sho_sim.io.sequence_io import save_sequence
from sho_sim.utils.config import Config, load_config


# CLI flag -> Config field
_OVERRIDES = {
    'amplitude': 'amplitude',
    'omega': 'angular_frequency',
    'phase': 'phase_shift',
    'vertical_shift': 'vertical_shift',
    'horizontal_shift': 'horizontal_shift',
    'spring_constant': 'spring_constant',
    'dt': 'dt',
    'steps': 'num_points',
    'method': 'method',
    'euler_variant': 'euler_variant',
    'mode': 'mode',
    'max_points': 'max_points',
    'output': 'output_path',
}


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_config(args) -> Config:
    """Merge an optional config file with command-line overrides."""
    config = load_config(args.config) if args.config else Config()
    overrides = {}
    for arg_name, field_name in _OVERRIDES.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            overrides[field_name] = value
    return replace(config, **overrides)


def print_header():
    print(f"{'Method':<10} {'Samples':<10} {'Final t':<12} {'Max error':<14} {'Energy drift':<14} {'Style':<8}")
    print("-" * 72)


def print_summary(sim: Simulator, points):
    diagnostics = Diagnostics(sim.params)
    max_error = diagnostics.max_error(points)
    drift = diagnostics.energy_drift(points)
    print(f"{sim.current_method.label:<10} {len(points):<10} {sim.time:<12.4f} "
          f"{max_error:<14.3e} {drift:<14.3e} {sim.style:<8}")


def run_simulation(config: Config, passes: int = 1):
    """Run the configured method and print a summary.

    Args:
        config: Simulation configuration
        passes: Number of generate_sequence calls (only meaningful in accumulating mode)

    Returns:
        Final sample sequence
    """
    sim = Simulator.from_config(config)

    points = sim.points
    for _ in range(passes):
        points = sim.generate_sequence(config.num_points)

    print_header()
    print_summary(sim, points)

    if config.output_path:
        save_sequence(points, config.output_path, metadata={
            'method': sim.current_method.label,
            'euler_variant': sim.euler_variant.value,
            'mode': sim.mode.value,
            'dt': config.dt,
            'steps': sim.step_count,
            'time': sim.time,
        })
        print(f"Sequence saved to {config.output_path}")

    return points


def run_comparison(config: Config):
    """Run every method with the same parameters and print one row each.

    Returns:
        Dict mapping method name to its sample sequence
    """
    results = {}
    print_header()
    for method in Method:
        sim = Simulator.from_config(replace(config, method=method.label))
        points = sim.generate_sequence(config.num_points)
        print_summary(sim, points)
        results[method.label] = points
    return results


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="SHO Simulator - simple harmonic oscillator integration")

    parser.add_argument('--config', type=str, default=None,
                       help='Config file (.json or .yaml); command-line flags override it')

    # Oscillator parameters
    parser.add_argument('--amplitude', type=float, default=None,
                       help='Amplitude A (default: 1.0)')
    parser.add_argument('--omega', type=float, default=None,
                       help='Angular frequency (default: 1.0)')
    parser.add_argument('--phase', type=float, default=None,
                       help='Phase shift D (default: 0.0)')
    parser.add_argument('--vertical-shift', type=float, default=None,
                       help='Vertical shift C (default: 0.0)')
    parser.add_argument('--horizontal-shift', type=float, default=None,
                       help='Offset added to every sample x (default: 0.0)')
    parser.add_argument('--spring-constant', type=float, default=None,
                       help='Spring constant k for the restoring force (default: omega^2)')

    # Simulation parameters
    parser.add_argument('--steps', type=int, default=None,
                       help='Samples per batch (default: 100)')
    parser.add_argument('--dt', type=float, default=None,
                       help='Time step (default: 0.01)')
    parser.add_argument('--method', type=str, default=None,
                       choices=['euler', 'verlet', 'rk4'],
                       help='Integration method (default: euler)')
    parser.add_argument('--euler-variant', type=str, default=None,
                       choices=['analytic', 'forward'],
                       help='Euler flavour: closed-form samples or forward integration (default: analytic)')
    parser.add_argument('--mode', type=str, default=None,
                       choices=['fixed-window', 'accumulating'],
                       help='Sequence mode (default: fixed-window)')
    parser.add_argument('--max-points', type=int, default=None,
                       help='Trim accumulated sequences to this many samples')
    parser.add_argument('--passes', type=positive_int, default=1,
                       help='Number of batches to generate (accumulating mode)')

    # Output
    parser.add_argument('--output', type=str, default=None,
                       help='Save the sequence to this file (.npz or .json)')
    parser.add_argument('--compare', action='store_true',
                       help='Run all methods with the same parameters and compare')

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}")
        sys.exit(1)

    if args.compare:
        run_comparison(config)
    else:
        run_simulation(config, passes=args.passes)


if __name__ == '__main__':
    main()
