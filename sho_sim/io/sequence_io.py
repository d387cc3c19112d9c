"""Export and import of generated sample sequences."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np


def save_sequence(
    points: np.ndarray,
    output_path: str,
    metadata: Optional[Dict[str, Any]] = None
):
    """Write a sample sequence to file for an external plotting tool.

    Args:
        points: Samples (n, 2)
        output_path: Output file path (.npz or .json)
        metadata: Optional metadata (method, dt, ...); only scalar values
            are kept in .npz files
    """
    output_path = Path(output_path)
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)

    if output_path.suffix == '.npz':
        save_dict = {'points': points}
        if metadata:
            for key, value in metadata.items():
                if isinstance(value, (int, float, str)):
                    save_dict[f'metadata_{key}'] = value
        np.savez_compressed(output_path, **save_dict)

    elif output_path.suffix == '.json':
        sequence_dict = {
            'points': points.tolist(),
            'metadata': metadata or {}
        }
        with open(output_path, 'w') as f:
            json.dump(sequence_dict, f, indent=2)

    else:
        raise ValueError(f"Unsupported file format: {output_path.suffix}. Use .npz or .json")


def load_sequence(input_path: str) -> Tuple[np.ndarray, Dict[str, Any]]:
    """Read a sample sequence written by save_sequence.

    Args:
        input_path: Input file path

    Returns:
        Tuple of (points, metadata)
    """
    input_path = Path(input_path)

    if input_path.suffix == '.npz':
        with np.load(input_path) as data:
            points = data['points']
            metadata = {}
            for key in data.keys():
                if key.startswith('metadata_'):
                    metadata[key[9:]] = data[key].item()
        return points, metadata

    elif input_path.suffix == '.json':
        with open(input_path, 'r') as f:
            sequence_dict = json.load(f)

        points = np.array(sequence_dict['points'], dtype=np.float64).reshape(-1, 2)
        metadata = sequence_dict.get('metadata', {})
        return points, metadata

    else:
        raise ValueError(f"Unsupported file format: {input_path.suffix}. Use .npz or .json")
