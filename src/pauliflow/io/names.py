"""
String-tag dispatch between gate names and Gate objects.

Used by the text importers, the command line and the HTTP layer. The core
gate model never looks gates up by name.
"""

from __future__ import annotations

from typing import Dict, Sequence, Type

from pauliflow.core.gates import (
    CNOT,
    CZ,
    SWAP,
    Gate,
    SingleGateKind,
    SingleQubitGate,
    TwoQubitGate,
)

_SINGLE_TAGS: Dict[str, SingleGateKind] = {
    "i": SingleGateKind.I,
    "id": SingleGateKind.I,
    "x": SingleGateKind.X,
    "y": SingleGateKind.Y,
    "z": SingleGateKind.Z,
    "h": SingleGateKind.H,
    "s": SingleGateKind.S,
    "sdg": SingleGateKind.SDG,
}

_TWO_TAGS: Dict[str, Type[TwoQubitGate]] = {
    "cx": CNOT,
    "cnot": CNOT,
    "cz": CZ,
    "swap": SWAP,
}

# Canonical tag per gate, used for export.
_CANONICAL_TWO = {CNOT: "cx", CZ: "cz", SWAP: "swap"}

GATE_NAMES = tuple(_SINGLE_TAGS) + tuple(_TWO_TAGS)


def gate_arity(name: str) -> int:
    """Number of qubits the named gate acts on."""
    key = name.strip().lower()
    if key in _SINGLE_TAGS:
        return 1
    if key in _TWO_TAGS:
        return 2
    raise ValueError(f"Unknown gate '{name}'. Supported: {', '.join(GATE_NAMES)}")


def gate_from_name(name: str, qubits: Sequence[int]) -> Gate:
    """
    Build a gate from a case-insensitive tag and its operands.

    >>> gate_from_name("CX", [0, 1])
    CNOT(control=0, target=1)

    Raises
    ------
    ValueError
        On an unknown tag or a wrong number of operands.
    """
    key = name.strip().lower()
    arity = gate_arity(key)
    if len(qubits) != arity:
        raise ValueError(
            f"Gate '{name}' takes {arity} qubit(s), got {len(qubits)}"
        )
    if arity == 1:
        return SingleQubitGate(qubits[0], _SINGLE_TAGS[key])
    return _TWO_TAGS[key](qubits[0], qubits[1])


def gate_name(gate: Gate) -> str:
    """Canonical lowercase tag of ``gate`` (``"h"``, ``"sdg"``, ``"cx"``...)."""
    if isinstance(gate, SingleQubitGate):
        return gate.kind.value.lower()
    try:
        return _CANONICAL_TWO[type(gate)]
    except KeyError:
        raise ValueError(f"Unsupported gate: {gate!r}") from None
