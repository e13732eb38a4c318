"""Core Pauli frame components: operators, gates, circuits and conjugation rules."""
from .pauli import MAX_QUBITS, Phase, SinglePauli, PauliString
from .gates import (
    SingleGateKind,
    Gate,
    SingleQubitGate,
    TwoQubitGate,
    CNOT,
    CZ,
    SWAP,
)
from .circuit import Circuit
from .propagation import apply_gate, apply_single_gate, apply_two_gate

__all__ = [
    'MAX_QUBITS',
    'Phase',
    'SinglePauli',
    'PauliString',
    'SingleGateKind',
    'Gate',
    'SingleQubitGate',
    'TwoQubitGate',
    'CNOT',
    'CZ',
    'SWAP',
    'Circuit',
    'apply_gate',
    'apply_single_gate',
    'apply_two_gate',
]
