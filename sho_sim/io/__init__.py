"""I/O utilities for exporting sample sequences."""

from sho_sim.io.sequence_io import save_sequence, load_sequence

__all__ = ["save_sequence", "load_sequence"]
