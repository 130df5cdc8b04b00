"""JSON IR import and export for circuits.

The JSON form is the gate-list shape stored by the composer application:
one object per gate with its ``type``, ``qubit``, ``column`` and, for
rotations, ``parameters.angle``. See schema.py for the full layout.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from qcomposer.circuit.core import Circuit
from qcomposer.errors import ValidationError

from .schema import JSON_IR_VERSION, validate_json_circuit


def circuit_to_json(
    circuit: Circuit,
    metadata: Optional[dict] = None,
    title: Optional[str] = None,
) -> dict:
    """
    Convert a circuit to JSON IR format.

    Parameters
    ----------
    circuit : Circuit
        Circuit to convert.
    metadata : dict, optional
        JSON-serializable metadata (producer, timestamp, notes, etc.).
    title : str, optional
        Circuit title.

    Returns
    -------
    dict
        JSON IR object; gates are listed in execution order.
    """
    gates = []
    for gate in circuit.ordered_gates():
        gate_obj: Dict[str, Any] = {
            "type": gate.kind.value,
            "qubit": gate.qubit,
            "column": gate.column,
        }
        if gate.angle is not None:
            gate_obj["parameters"] = {"angle": float(gate.angle)}
        gates.append(gate_obj)

    result: Dict[str, Any] = {"version": JSON_IR_VERSION}
    if title is not None:
        result["title"] = title
    result["qubits"] = circuit.n_qubits
    result["depth"] = circuit.depth()
    result["gates"] = gates
    if metadata:
        result["metadata"] = metadata
    return result


def json_to_circuit(obj: dict) -> Circuit:
    """
    Convert a JSON IR object to a circuit.

    Gates are added in list order, so a later gate at the same
    ``(column, qubit)`` replaces an earlier one.

    Raises
    ------
    ValidationError
        If the object is invalid or a gate violates a circuit invariant.
    """
    validate_json_circuit(obj)

    circuit = Circuit(obj["qubits"])
    for gate_obj in obj["gates"]:
        angle = (gate_obj.get("parameters") or {}).get("angle")
        circuit.add_gate(gate_obj["type"], gate_obj["qubit"], gate_obj["column"], angle)
    return circuit


def dump_json_circuit(circuit: Circuit, path: str, **kwargs: Any) -> None:
    """
    Write a circuit to a JSON file.

    Extra keyword arguments are passed to :func:`circuit_to_json`.
    """
    obj = circuit_to_json(circuit, **kwargs)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)


def load_json_circuit(path: str) -> Circuit:
    """
    Load a circuit from a JSON file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValidationError
        If the file is not valid JSON IR.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"JSON circuit file not found: {path}")
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in file {path}: {e}")

    return json_to_circuit(obj)


__all__ = [
    "circuit_to_json",
    "json_to_circuit",
    "dump_json_circuit",
    "load_json_circuit",
]
