"""State-vector simulation backend."""

from .simulator import check_scale, simulate
from .statevector import (
    amplitudes,
    apply_cx,
    apply_cz,
    apply_gate,
    apply_swap,
    marginal_probabilities,
    measure_probs,
    probability_distribution,
    reduced_amplitude,
    zero_state,
)

__all__ = [
    "simulate",
    "check_scale",
    "zero_state",
    "apply_gate",
    "apply_cx",
    "apply_cz",
    "apply_swap",
    "measure_probs",
    "probability_distribution",
    "reduced_amplitude",
    "marginal_probabilities",
    "amplitudes",
]
