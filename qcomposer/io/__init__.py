"""Dialect generators/parsers and JSON IR import/export."""

from .cirq import export_circuit_to_cirq, parse_cirq_string
from .dialect import DialectCodec, LineTemplates, ParseDiagnostic, ParseResult
from .json_ir import circuit_to_json, dump_json_circuit, json_to_circuit, load_json_circuit
from .qasm2 import export_circuit_to_qasm, parse_qasm_file, parse_qasm_string
from .qiskit import export_circuit_to_qiskit, parse_qiskit_string
from .qsharp import export_circuit_to_qsharp, parse_qsharp_string
from .quil import export_circuit_to_quil, parse_quil_string
from .registry import CODECS, generate, get_codec, parse, parse_with_diagnostics
from .schema import JSON_IR_VERSION, json_circuit_schema, validate_json_circuit

__all__ = [
    "generate",
    "parse",
    "parse_with_diagnostics",
    "get_codec",
    "CODECS",
    "DialectCodec",
    "LineTemplates",
    "ParseDiagnostic",
    "ParseResult",
    "export_circuit_to_qasm",
    "parse_qasm_string",
    "parse_qasm_file",
    "export_circuit_to_qiskit",
    "parse_qiskit_string",
    "export_circuit_to_cirq",
    "parse_cirq_string",
    "export_circuit_to_qsharp",
    "parse_qsharp_string",
    "export_circuit_to_quil",
    "parse_quil_string",
    "circuit_to_json",
    "json_to_circuit",
    "dump_json_circuit",
    "load_json_circuit",
    "JSON_IR_VERSION",
    "json_circuit_schema",
    "validate_json_circuit",
]
