"""Tests for the simulator controller."""

import math
import warnings

import numpy as np
import pytest
from sho_sim.physics.oscillator import OscillatorParameters
from sho_sim.physics.simulator import Simulator, SequenceMode
from sho_sim.physics.integrators.base import Method, EulerVariant
from sho_sim.physics.integrators.verlet import VerletState
from sho_sim.utils.config import Config


def test_euler_example_sequence():
    """One period at omega = 2*pi sampled every 0.01."""
    params = OscillatorParameters(amplitude=1.0, angular_frequency=2 * math.pi, time_step=0.01)
    sim = Simulator(params, method=Method.EULER)

    points = sim.generate_sequence(100)

    assert points.shape == (100, 2)
    assert points[0, 0] == 0.0
    assert points[0, 1] == pytest.approx(1.0)
    assert points[50, 0] == pytest.approx(0.5)
    assert points[50, 1] == pytest.approx(math.cos(math.pi), abs=1e-9)


@pytest.mark.parametrize("method", list(Method))
def test_sequence_spacing(method):
    """Samples are spaced by dt and offset by the horizontal shift."""
    params = OscillatorParameters(horizontal_shift=3.0, time_step=0.02)
    sim = Simulator(params, method=method)

    points = sim.generate_sequence(250)

    assert len(points) == 250
    assert np.allclose(np.diff(points[:, 0]), 0.02)
    first_t = 0.0 if method is Method.EULER else 0.02
    assert points[0, 0] == pytest.approx(first_t + 3.0)


def test_fixed_window_recomputes():
    """Fixed-window mode returns the same N samples on every call."""
    params = OscillatorParameters(angular_frequency=2.0, time_step=0.01)
    sim = Simulator(params, method=Method.RK4, mode=SequenceMode.FIXED_WINDOW)

    first = sim.generate_sequence(80)
    second = sim.generate_sequence(80)

    assert first.shape == (80, 2)
    assert np.array_equal(first, second)
    assert sim.step_count == 80
    assert sim.time == pytest.approx(0.8)


@pytest.mark.parametrize("method", list(Method))
def test_accumulating_continues(method):
    """Accumulating mode carries state over and appends samples."""
    params = OscillatorParameters(angular_frequency=1.5, time_step=0.01)
    sim = Simulator(params, method=method, mode="accumulating")
    single = Simulator(params, method=method).generate_sequence(200)

    sim.generate_sequence(120)
    points = sim.generate_sequence(80)

    assert points.shape == (200, 2)
    assert np.allclose(points, single)
    assert sim.step_count == 200


def test_accumulating_trim():
    """max_points keeps only the newest samples."""
    params = OscillatorParameters(time_step=0.01)
    sim = Simulator(params, mode=SequenceMode.ACCUMULATING, max_points=150)

    for _ in range(3):
        points = sim.generate_sequence(100)

    assert len(points) == 150
    assert points[-1, 0] == pytest.approx(2.99)
    assert points[0, 0] == pytest.approx(1.50)


def test_reset_clears_sequence():
    """Reset re-initializes state and empties the accumulated buffer."""
    params = OscillatorParameters(time_step=0.01)
    sim = Simulator(params, method=Method.VERLET, mode=SequenceMode.ACCUMULATING)
    sim.generate_sequence(50)

    sim.reset()

    assert len(sim.points) == 0
    assert sim.step_count == 0
    assert isinstance(sim.state, VerletState)
    assert np.allclose(sim.state.current, [0.0, 1.0])
    points = sim.generate_sequence(10)
    assert len(points) == 10
    assert points[0, 0] == pytest.approx(0.01)


@pytest.mark.parametrize("source", list(Method))
@pytest.mark.parametrize("target", list(Method))
def test_method_switch_resets_state(source, target):
    """The first sample after a switch comes from a fresh state, never a stale one."""
    params = OscillatorParameters(amplitude=1.3, angular_frequency=2.0, phase_shift=0.2, time_step=0.01)
    sim = Simulator(params, method=source, mode=SequenceMode.ACCUMULATING)
    sim.generate_sequence(37)

    sim.select_method(target)
    points = sim.generate_sequence(1)

    assert points.shape == (1, 2)
    t = 0.0 if target is Method.EULER else 0.01
    assert points[0, 0] == pytest.approx(t)
    assert abs(points[0, 1] - params.displacement(t)) < 1e-4


def test_cycle_method_and_style():
    """Cycling walks Euler -> Verlet -> RK4 -> Euler with matching styles."""
    sim = Simulator(OscillatorParameters())
    seen = []
    for _ in range(3):
        seen.append((sim.current_method, sim.style))
        sim.cycle_method()

    assert seen == [(Method.EULER, "red"), (Method.VERLET, "blue"), (Method.RK4, "green")]
    assert sim.current_method is Method.EULER


def test_unconfigured_simulator():
    """Generating before configure() is a usage error."""
    sim = Simulator()
    assert not sim.is_configured
    sim.select_method("verlet")

    with pytest.raises(RuntimeError):
        sim.generate_sequence(10)

    sim.configure(OscillatorParameters())
    assert len(sim.generate_sequence(10)) == 10


def test_zero_and_negative_step_count():
    """Empty batches for zero or negative step counts."""
    sim = Simulator(OscillatorParameters(), method=Method.RK4)
    assert sim.generate_sequence(0).shape == (0, 2)
    assert sim.generate_sequence(-5).shape == (0, 2)


def test_independent_instances():
    """Interleaved simulators do not share state."""
    params = OscillatorParameters(angular_frequency=3.0, time_step=0.01)
    a = Simulator(params, method=Method.VERLET, mode=SequenceMode.ACCUMULATING)
    b = Simulator(params.with_time_step(0.02), method=Method.VERLET, mode=SequenceMode.ACCUMULATING)

    for _ in range(4):
        a.generate_sequence(25)
        b.generate_sequence(25)

    expected = Simulator(params, method=Method.VERLET).generate_sequence(100)
    assert np.allclose(a.points, expected)


def test_forward_euler_variant():
    """The forward variant integrates instead of evaluating the closed form."""
    params = OscillatorParameters(time_step=0.1)
    sim = Simulator(params, euler_variant=EulerVariant.FORWARD)

    points = sim.generate_sequence(2)

    assert points[0, 0] == pytest.approx(0.1)
    assert points[1, 1] == pytest.approx(1.0 - 0.1 ** 2)

    sim.set_euler_variant("analytic")
    assert sim.generate_sequence(1)[0, 0] == 0.0


def test_divergence_warns_without_raising():
    """Unstable parameters produce non-finite samples and a warning, not an error."""
    params = OscillatorParameters(angular_frequency=1000.0, time_step=1.0)
    sim = Simulator(params, method=Method.VERLET)

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        points = sim.generate_sequence(500)
    assert not np.all(np.isfinite(points))

    with pytest.warns(RuntimeWarning, match="not finite"):
        sim.generate_sequence(500)


def test_finite_check_can_be_disabled():
    """check_finite=False suppresses the diagnostic warning."""
    params = OscillatorParameters(angular_frequency=1000.0, time_step=1.0)
    sim = Simulator(params, method=Method.VERLET, check_finite=False)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        sim.generate_sequence(500)

    assert not any("not finite" in str(w.message) for w in caught)


def test_set_timestep():
    """Changing dt resets state and changes sample spacing."""
    sim = Simulator(OscillatorParameters(time_step=0.01), method=Method.VERLET)
    sim.generate_sequence(10)

    sim.set_timestep(0.05)
    points = sim.generate_sequence(10)

    assert np.allclose(np.diff(points[:, 0]), 0.05)
    assert np.allclose(sim.state.previous[0], 0.45)


def test_profiling():
    """Batch timing is recorded when profiling is on."""
    sim = Simulator(OscillatorParameters())
    assert sim.get_timing()["batch_ms"] is None

    sim.set_profiling(True)
    sim.generate_sequence(50)

    assert sim.get_timing()["batch_ms"] >= 0.0


def test_from_config():
    """Simulator settings come from a Config."""
    config = Config(
        amplitude=2.0, dt=0.05, method="rk4", mode="accumulating",
        euler_variant="forward", max_points=30
    )
    sim = Simulator.from_config(config)

    assert sim.current_method is Method.RK4
    assert sim.mode is SequenceMode.ACCUMULATING
    assert sim.euler_variant is EulerVariant.FORWARD
    assert sim.params.time_step == 0.05
    assert len(sim.generate_sequence(50)) == 30

    with pytest.raises(ValueError):
        SequenceMode.from_name("ring-buffer")


def test_set_mode_resets():
    """Switching sequence mode on a running simulator clears buffer and state."""
    params = OscillatorParameters(time_step=0.01)
    sim = Simulator(params, method=Method.VERLET, mode=SequenceMode.ACCUMULATING)
    sim.generate_sequence(40)

    sim.set_mode("fixed-window")

    assert sim.mode is SequenceMode.FIXED_WINDOW
    assert len(sim.points) == 0
    assert sim.step_count == 0
    assert np.allclose(sim.state.current, [0.0, 1.0])
    assert np.allclose(sim.state.previous, [-0.01, params.displacement(-0.01)])

    sim.set_mode(SequenceMode.ACCUMULATING)
    sim.generate_sequence(10)
    assert len(sim.generate_sequence(10)) == 20


def test_set_timestep_unconfigured():
    """Changing dt before configure() is a usage error."""
    with pytest.raises(RuntimeError):
        Simulator().set_timestep(0.1)
