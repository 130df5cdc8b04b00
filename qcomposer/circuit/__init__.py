"""Circuit IR for quantum circuits."""

from .core import Circuit, Gate, add_gate, new_circuit, remove_gate, set_qubit_count

__all__ = [
    "Circuit",
    "Gate",
    "new_circuit",
    "add_gate",
    "remove_gate",
    "set_qubit_count",
]
