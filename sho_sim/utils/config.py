"""Configuration management."""

import json
from typing import Optional, get_args
from pathlib import Path
from dataclasses import dataclass, asdict, fields

import yaml

from sho_sim.physics.oscillator import OscillatorParameters


@dataclass
class Config:
    """Simulation configuration."""
    # Oscillator parameters
    amplitude: float = 1.0
    angular_frequency: float = 1.0
    phase_shift: float = 0.0
    vertical_shift: float = 0.0
    horizontal_shift: float = 0.0
    spring_constant: Optional[float] = None

    # Simulation parameters
    dt: float = 0.01
    num_points: int = 100
    method: str = "euler"
    euler_variant: str = "analytic"

    # Sequence buffer
    mode: str = "fixed-window"
    max_points: Optional[int] = None

    # Diagnostics
    check_finite: bool = True

    # Export parameters
    output_path: Optional[str] = None

    def to_parameters(self) -> OscillatorParameters:
        """Build the oscillator parameters described by this config."""
        return OscillatorParameters(
            amplitude=self.amplitude,
            angular_frequency=self.angular_frequency,
            phase_shift=self.phase_shift,
            vertical_shift=self.vertical_shift,
            horizontal_shift=self.horizontal_shift,
            spring_constant=self.spring_constant,
            time_step=self.dt,
        )


def _coerce(field, value):
    """Convert numeric config values to the field's type.

    YAML 1.1 reads exponent floats without a dot (`1e-3`) as strings.
    """
    if value is None:
        return None
    field_type = field.type
    args = [arg for arg in get_args(field_type) if arg is not type(None)]
    if args:
        field_type = args[0]
    if field_type in (int, float) and not isinstance(value, bool):
        try:
            if field_type is int and isinstance(value, str):
                value = float(value)
            return field_type(value)
        except (TypeError, ValueError):
            raise ValueError(f"Config key '{field.name}' must be a number, got {value!r}")
    return value


def load_config(config_path: str) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        Config object

    Raises:
        ValueError: If the file contains keys that are not Config fields,
            or a numeric field holds a non-numeric value
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix == '.yaml' or config_path.suffix == '.yml':
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    data = data or {}
    known = {field.name for field in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {unknown}")

    coerced = {field.name: _coerce(field, data[field.name]) for field in fields(Config) if field.name in data}
    return Config(**coerced)


def save_config(config: Config, output_path: str):
    """Save configuration to file.

    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)

    with open(output_path, 'w') as f:
        if output_path.suffix == '.yaml' or output_path.suffix == '.yml':
            yaml.dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
