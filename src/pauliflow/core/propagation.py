"""
Gate conjugation rules for Pauli error propagation.

Each rule maps an error operator P to U P U† in place, reading the bit pair
of the affected qubit(s) before touching anything:

  I    → no change
  X    → phase ×(−1) iff z
  Z    → phase ×(−1) iff x
  Y    → phase ×(−1) iff exactly one of x, z is set
  H    → swap x ↔ z, phase ×(−1) on Y
  S    → when x: toggle z; phase ×i from X, imaginary phases rotate toward +1 from Y
  S†   → mirror of S with i ↔ −i
  CNOT → X spreads control → target, Z spreads target → control
  CZ   → an X on either qubit drags a Z onto the other
  SWAP → exchange the two bit pairs

Operands are trusted to be validated by ``Circuit``; an out-of-range qubit
or a CNOT/CZ on a single qubit still raises, but as a contract violation.
"""

from __future__ import annotations

from pauliflow.core.gates import (
    CNOT,
    CZ,
    SWAP,
    Gate,
    SingleGateKind,
    SingleQubitGate,
    TwoQubitGate,
)
from pauliflow.core.pauli import PauliString, Phase

# Phase update when S (resp. S†) turns a Y component back into X. Real phases
# pass through unchanged.
_S_FROM_Y = {Phase.PLUS_I: Phase.MINUS_I, Phase.MINUS_I: Phase.PLUS_ONE}
_SDG_FROM_Y = {Phase.MINUS_I: Phase.PLUS_I, Phase.PLUS_I: Phase.PLUS_ONE}


def _check_operands(pauli: PauliString, *qubits: int) -> None:
    for q in qubits:
        if not 0 <= q < pauli.num_qubits:
            raise IndexError(
                f"Qubit index {q} out of range [0, {pauli.num_qubits})"
            )


def _flip_sign(pauli: PauliString) -> None:
    pauli.phase = pauli.phase.negate()


def _apply_phase_gate(pauli: PauliString, qubit: int, dagger: bool) -> None:
    x, z = pauli.x_bit(qubit), pauli.z_bit(qubit)
    if not x:
        return
    pauli.z_bits ^= 1 << qubit
    if not z:
        pauli.phase = pauli.phase * (Phase.MINUS_I if dagger else Phase.PLUS_I)
    else:
        table = _SDG_FROM_Y if dagger else _S_FROM_Y
        pauli.phase = table.get(pauli.phase, pauli.phase)


def apply_single_gate(pauli: PauliString, qubit: int, kind: SingleGateKind) -> None:
    """Conjugate ``pauli`` by a single-qubit gate on ``qubit``."""
    _check_operands(pauli, qubit)
    x, z = pauli.x_bit(qubit), pauli.z_bit(qubit)

    if kind is SingleGateKind.I:
        return
    if kind is SingleGateKind.X:
        if z:
            _flip_sign(pauli)
    elif kind is SingleGateKind.Z:
        if x:
            _flip_sign(pauli)
    elif kind is SingleGateKind.Y:
        if x ^ z:
            _flip_sign(pauli)
    elif kind is SingleGateKind.H:
        mask = 1 << qubit
        pauli.x_bits = (pauli.x_bits & ~mask) | (z << qubit)
        pauli.z_bits = (pauli.z_bits & ~mask) | (x << qubit)
        if x and z:
            _flip_sign(pauli)
    elif kind is SingleGateKind.S:
        _apply_phase_gate(pauli, qubit, dagger=False)
    elif kind is SingleGateKind.SDG:
        _apply_phase_gate(pauli, qubit, dagger=True)
    else:
        raise ValueError(f"Unsupported single-qubit gate: {kind!r}")


def apply_two_gate(pauli: PauliString, gate: TwoQubitGate) -> None:
    """Conjugate ``pauli`` by a CNOT, CZ or SWAP."""
    _check_operands(pauli, *gate.qubits)

    if isinstance(gate, CNOT):
        c, t = gate.control, gate.target
        if c == t:
            raise ValueError("CNOT control and target must be different")
        x_c, z_t = pauli.x_bit(c), pauli.z_bit(t)
        # X on the target survives an incoming X from the control.
        if x_c:
            pauli.x_bits |= 1 << t
        if z_t:
            pauli.z_bits ^= 1 << c
        if x_c and z_t:
            _flip_sign(pauli)

    elif isinstance(gate, CZ):
        c, t = gate.control, gate.target
        if c == t:
            raise ValueError("CZ control and target must be different")
        x_c, x_t = pauli.x_bit(c), pauli.x_bit(t)
        if x_c:
            pauli.z_bits ^= 1 << t
        if x_t:
            pauli.z_bits ^= 1 << c
        if x_c and x_t:
            _flip_sign(pauli)

    elif isinstance(gate, SWAP):
        a, b = gate.qubit1, gate.qubit2
        if a == b:
            return
        xa, za = pauli.x_bit(a), pauli.z_bit(a)
        xb, zb = pauli.x_bit(b), pauli.z_bit(b)
        mask = ~((1 << a) | (1 << b))
        pauli.x_bits = (pauli.x_bits & mask) | (xb << a) | (xa << b)
        pauli.z_bits = (pauli.z_bits & mask) | (zb << a) | (za << b)

    else:
        raise ValueError(f"Unsupported two-qubit gate: {gate!r}")


def apply_gate(pauli: PauliString, gate: Gate) -> None:
    """Dispatch ``gate`` to the matching conjugation rule."""
    if isinstance(gate, SingleQubitGate):
        apply_single_gate(pauli, gate.qubit, gate.kind)
    elif isinstance(gate, TwoQubitGate):
        apply_two_gate(pauli, gate)
    else:
        raise TypeError(f"Expected a Gate, got {type(gate).__name__}")
