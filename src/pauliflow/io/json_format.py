"""
Structured JSON circuit format.

A circuit is written as its qubit count and an externally tagged gate list::

    {
      "num_qubits": 2,
      "gates": [
        {"Single": {"qubit": 0, "gate": "H"}},
        {"Two": {"CNOT": {"control": 0, "target": 1}}}
      ]
    }

Single-qubit kinds are ``I, X, Y, Z, H, S, Sdg``; two-qubit gates are
``CNOT``/``CZ`` with ``control``/``target`` or ``SWAP`` with
``qubit1``/``qubit2``.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from pauliflow.core.circuit import Circuit
from pauliflow.core.gates import (
    CNOT,
    CZ,
    SWAP,
    Gate,
    SingleGateKind,
    SingleQubitGate,
)


class CircuitFormatError(ValueError):
    """Raised when a circuit document is structurally malformed."""


_TWO_FIELDS = {
    "CNOT": (CNOT, ("control", "target")),
    "CZ": (CZ, ("control", "target")),
    "SWAP": (SWAP, ("qubit1", "qubit2")),
}


def gate_to_dict(gate: Gate) -> Dict[str, Any]:
    if isinstance(gate, SingleQubitGate):
        return {"Single": {"qubit": gate.qubit, "gate": gate.kind.value}}
    for tag, (cls, fields) in _TWO_FIELDS.items():
        if type(gate) is cls:
            return {"Two": {tag: {f: getattr(gate, f) for f in fields}}}
    raise CircuitFormatError(f"Cannot serialize gate {gate!r}")


def _require_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CircuitFormatError(f"{where} must be an integer, got {value!r}")
    return value


def _only_entry(entry: Dict[str, Any], tag: str, where: str) -> Any:
    if not isinstance(entry, dict) or len(entry) != 1:
        raise CircuitFormatError(f"{where}: expected an object with one {tag} key")
    return next(iter(entry.items()))


def gate_from_dict(entry: Any, index: int = 0) -> Gate:
    """Decode one externally tagged gate entry."""
    where = f"gates[{index}]"
    variant, body = _only_entry(entry, "'Single'/'Two'", where)

    if variant == "Single":
        if not isinstance(body, dict):
            raise CircuitFormatError(f"{where}.Single must be an object")
        try:
            kind = SingleGateKind(body["gate"])
        except KeyError as e:
            raise CircuitFormatError(f"{where}.Single is missing {e}") from None
        except ValueError:
            raise CircuitFormatError(
                f"{where}: unknown single-qubit gate {body['gate']!r}"
            ) from None
        if "qubit" not in body:
            raise CircuitFormatError(f"{where}.Single is missing 'qubit'")
        return SingleQubitGate(_require_int(body["qubit"], f"{where}.qubit"), kind)

    if variant == "Two":
        tag, fields_body = _only_entry(body, "two-qubit gate", f"{where}.Two")
        if tag not in _TWO_FIELDS:
            raise CircuitFormatError(f"{where}: unknown two-qubit gate {tag!r}")
        if not isinstance(fields_body, dict):
            raise CircuitFormatError(f"{where}.Two.{tag} must be an object")
        cls, fields = _TWO_FIELDS[tag]
        missing = [f for f in fields if f not in fields_body]
        if missing:
            raise CircuitFormatError(f"{where}.Two.{tag} is missing {missing}")
        return cls(*(_require_int(fields_body[f], f"{where}.{f}") for f in fields))

    raise CircuitFormatError(f"{where}: unknown gate variant {variant!r}")


def circuit_to_dict(circuit: Circuit) -> Dict[str, Any]:
    return {
        "num_qubits": circuit.num_qubits,
        "gates": [gate_to_dict(g) for g in circuit],
    }


def circuit_from_dict(data: Any) -> Circuit:
    """
    Build a Circuit from a decoded JSON document.

    Raises
    ------
    CircuitFormatError
        If the document does not have the expected structure.
    ValueError
        If a gate is well formed but acts outside the circuit.
    """
    if not isinstance(data, dict):
        raise CircuitFormatError("Circuit document must be a JSON object")
    if "num_qubits" not in data:
        raise CircuitFormatError("Circuit document is missing 'num_qubits'")
    num_qubits = _require_int(data["num_qubits"], "num_qubits")
    gates = data.get("gates", [])
    if not isinstance(gates, list):
        raise CircuitFormatError("'gates' must be a list")

    circuit = Circuit(num_qubits)
    for i, entry in enumerate(gates):
        circuit.add_gate(gate_from_dict(entry, i))
    return circuit


def export_json(circuit: Circuit, indent: int = 2) -> str:
    """Serialize ``circuit`` to a JSON string."""
    return json.dumps(circuit_to_dict(circuit), indent=indent)


def import_json(text: str) -> Circuit:
    """Parse a JSON string produced by :func:`export_json`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CircuitFormatError(f"Invalid JSON: {e}") from e
    return circuit_from_dict(data)
