"""qcomposer - build small quantum circuits, simulate them exactly, and
translate them to and from OpenQASM 2, Qiskit, Cirq, Q# and Quil."""

__version__ = "0.1.0"

# Simulation
from .backend import (
    amplitudes,
    marginal_probabilities,
    probability_distribution,
    reduced_amplitude,
    simulate,
)

# Circuit IR
from .circuit import Circuit, Gate, add_gate, new_circuit, remove_gate, set_qubit_count

# Configuration
from .config import ComposerConfig, config_context, get_config, set_config
from .core import Complex, Device, default_device, device

# Diagnostics
from .diagnostics import (
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)
from .errors import ParseError, QComposerError, UnsupportedScaleError, ValidationError

# Gate catalog
from .gates import CATALOG, Dialect, GateKind, is_unitary

# Codecs
from .io import (
    ParseDiagnostic,
    ParseResult,
    circuit_to_json,
    generate,
    json_to_circuit,
    parse,
    parse_with_diagnostics,
)
from .logging import configure_logging, get_logger, set_log_level

# Bloch projection
from .viz import bloch_phase_degrees, bloch_point, bloch_state_label, reduced_density_matrix

__all__ = [
    "__version__",
    # Circuit IR
    "Circuit",
    "Gate",
    "new_circuit",
    "add_gate",
    "remove_gate",
    "set_qubit_count",
    # Gate catalog
    "CATALOG",
    "Dialect",
    "GateKind",
    "is_unitary",
    # Simulation
    "simulate",
    "probability_distribution",
    "reduced_amplitude",
    "marginal_probabilities",
    "amplitudes",
    "Complex",
    "Device",
    "device",
    "default_device",
    # Bloch projection
    "bloch_point",
    "bloch_state_label",
    "bloch_phase_degrees",
    "reduced_density_matrix",
    # Codecs
    "generate",
    "parse",
    "parse_with_diagnostics",
    "ParseResult",
    "ParseDiagnostic",
    "circuit_to_json",
    "json_to_circuit",
    # Errors
    "QComposerError",
    "ValidationError",
    "UnsupportedScaleError",
    "ParseError",
    # Configuration
    "ComposerConfig",
    "get_config",
    "set_config",
    "config_context",
    # Diagnostics
    "state_norm",
    "assert_normalized",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
