"""JSON IR schema definition and validation for circuits.

Schema Structure:
    {
        "version": "qcomposer-json-1.0",
        "title": <string>,                     # optional
        "qubits": <integer>,                   # 1 .. config.max_qubits
        "depth": <integer>,                    # optional, informational
        "gates": [
            {
                "type": <string>,              # gate kind, e.g. "H", "CX"
                "qubit": <integer>,            # control qubit for CX/CZ
                "column": <integer>,
                "parameters": {"angle": <number>}   # optional, RX/RY/RZ
            },
            ...
        ],
        "metadata": {...}                      # optional
    }

Two-qubit gates act on ``qubit`` and ``qubit + 1``; the second qubit is not
stored.
"""

from __future__ import annotations

import math
from typing import Any

from qcomposer.config import get_config
from qcomposer.errors import ValidationError
from qcomposer.gates.catalog import GateKind, coerce_kind

JSON_IR_VERSION = "qcomposer-json-1.0"


def json_circuit_schema() -> dict:
    """
    Return a structural description of the JSON IR format.

    This is not a full JSON Schema document; it lists the fields, their
    types and constraints for documentation and tooling.
    """
    return {
        "version": {
            "type": "string",
            "description": f"Schema version identifier, e.g. '{JSON_IR_VERSION}'",
            "required": True,
        },
        "title": {
            "type": "string",
            "description": "Human readable circuit title",
            "required": False,
        },
        "qubits": {
            "type": "integer",
            "description": "Number of qubits in the circuit",
            "required": True,
            "min": 1,
            "max": get_config().max_qubits,
        },
        "depth": {
            "type": "integer",
            "description": "Number of occupied columns (ignored on load)",
            "required": False,
        },
        "gates": {
            "type": "list",
            "description": "Gates in execution order",
            "required": True,
            "items": {
                "type": {
                    "type": "string",
                    "description": "Gate kind",
                    "required": True,
                    "enum": [kind.value for kind in GateKind],
                },
                "qubit": {"type": "integer", "required": True, "min": 0},
                "column": {"type": "integer", "required": True, "min": 0},
                "parameters": {
                    "type": "dict",
                    "description": "Gate parameters; 'angle' in radians for rotations",
                    "required": False,
                },
            },
        },
        "metadata": {
            "type": "dict",
            "description": "Optional metadata (producer, timestamp, notes, etc.)",
            "required": False,
        },
    }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_json_circuit(obj: dict) -> None:
    """
    Validate a JSON circuit object against the schema.

    Checks required fields, types and index ranges. Circuit invariants that
    depend on several gates (such as replacement at the same position) are
    left to the circuit itself.

    Raises
    ------
    ValidationError
        If the object does not conform to the schema.
    """
    if not isinstance(obj, dict):
        raise ValidationError("JSON circuit must be a dictionary object.")

    if not isinstance(obj.get("version"), str):
        raise ValidationError("JSON circuit requires a string field 'version'.")
    if "title" in obj and not isinstance(obj["title"], str):
        raise ValidationError("Field 'title' must be a string.")

    n_qubits = obj.get("qubits")
    if not _is_int(n_qubits):
        raise ValidationError("JSON circuit requires an integer field 'qubits'.")
    limit = get_config().max_qubits
    if n_qubits < 1 or n_qubits > limit:
        raise ValidationError(f"Field 'qubits' must be in [1, {limit}], got {n_qubits}.")

    gates = obj.get("gates")
    if not isinstance(gates, list):
        raise ValidationError("JSON circuit requires a list field 'gates'.")

    for i, gate in enumerate(gates):
        if not isinstance(gate, dict):
            raise ValidationError(f"Gate at index {i} must be a dictionary object.")
        if not isinstance(gate.get("type"), str):
            raise ValidationError(f"Gate at index {i}: field 'type' must be a string.")
        kind = coerce_kind(gate["type"])

        for name in ("qubit", "column"):
            value = gate.get(name)
            if not _is_int(value):
                raise ValidationError(f"Gate at index {i}: field '{name}' must be an integer.")
            if value < 0:
                raise ValidationError(f"Gate at index {i}: field '{name}' must be >= 0, got {value}.")
        if gate["qubit"] >= n_qubits:
            raise ValidationError(
                f"Gate at index {i}: qubit {gate['qubit']} is out of range [0, {n_qubits})."
            )

        parameters = gate.get("parameters")
        if parameters is None:
            continue
        if not isinstance(parameters, dict):
            raise ValidationError(f"Gate at index {i}: field 'parameters' must be a dictionary.")
        angle = parameters.get("angle")
        if angle is None:
            continue
        if not isinstance(angle, (int, float)) or isinstance(angle, bool) or not math.isfinite(angle):
            raise ValidationError(f"Gate at index {i}: angle must be a finite number.")
        if kind not in (GateKind.RX, GateKind.RY, GateKind.RZ):
            raise ValidationError(f"Gate at index {i}: {kind.value} gate does not take an angle.")

    if "metadata" in obj and not isinstance(obj["metadata"], dict):
        raise ValidationError("Field 'metadata' must be a dictionary.")


__all__ = ["JSON_IR_VERSION", "json_circuit_schema", "validate_json_circuit"]
