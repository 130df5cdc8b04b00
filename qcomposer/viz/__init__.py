"""Bloch sphere projections of simulated states."""

from .bloch import (
    BlochPoint,
    bloch_phase_degrees,
    bloch_point,
    bloch_point_from_density,
    bloch_state_label,
    reduced_density_matrix,
)

__all__ = [
    "BlochPoint",
    "bloch_point",
    "bloch_state_label",
    "bloch_phase_degrees",
    "reduced_density_matrix",
    "bloch_point_from_density",
]
