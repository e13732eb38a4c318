"""
Clifford circuit representation.

Provides a builder-style API for constructing circuits over a fixed number
of qubits. Gates are applied strictly one at a time: a gate's position in
the list is its time step, and the depth is the number of gates.

Example
-------
>>> from pauliflow import Circuit
>>> qc = Circuit(2).h(0).cx(0, 1)
>>> qc.depth
2
>>> print(qc.gates[1])
CNOT(0, 1)
"""

from __future__ import annotations

from typing import Iterator, Sequence

from pauliflow.core.gates import (
    CNOT,
    CZ,
    SWAP,
    Gate,
    SingleGateKind,
    SingleQubitGate,
)
from pauliflow.core.pauli import MAX_QUBITS


class Circuit:
    """
    Ordered list of Clifford gates over ``num_qubits`` qubits.

    Every gate is validated on insertion; a gate touching a qubit outside
    ``[0, num_qubits)`` is rejected with ``ValueError`` and never enters
    the circuit.

    Parameters
    ----------
    num_qubits : int
        Number of qubits, between 1 and 64.
    name : str, optional
        Circuit name used in exported documents.
    """

    def __init__(self, num_qubits: int, name: str = "circuit") -> None:
        if not 1 <= num_qubits <= MAX_QUBITS:
            raise ValueError(
                f"Need between 1 and {MAX_QUBITS} qubits, got {num_qubits}"
            )
        self.num_qubits = num_qubits
        self.name = name
        self._gates: list[Gate] = []

    # -- Properties ---------------------------------------------------------

    @property
    def gates(self) -> tuple[Gate, ...]:
        """Gates in application order."""
        return tuple(self._gates)

    @property
    def depth(self) -> int:
        """Number of time steps, one gate per step."""
        return len(self._gates)

    def gates_at_time(self, time: int) -> list[Gate]:
        """Gates applied at ``time``: a single gate, or none past the end."""
        if 0 <= time < len(self._gates):
            return [self._gates[time]]
        return []

    # -- Validation ---------------------------------------------------------

    def _validate(self, gate: Gate) -> None:
        if not isinstance(gate, Gate):
            raise TypeError(f"Expected a Gate, got {type(gate).__name__}")
        for q in gate.qubits:
            if isinstance(q, bool) or not isinstance(q, int):
                raise ValueError(f"Qubit index must be an int, got {q!r} in {gate}")
            if not 0 <= q < self.num_qubits:
                raise ValueError(
                    f"Gate {gate} acts on qubit {q} but circuit has only "
                    f"{self.num_qubits} qubits"
                )
        if isinstance(gate, (CNOT, CZ)) and gate.control == gate.target:
            raise ValueError(f"{gate}: control and target must differ")

    def add_gate(self, gate: Gate) -> Circuit:
        """Validate and append ``gate``; returns self for chaining."""
        self._validate(gate)
        self._gates.append(gate)
        return self

    def extend(self, gates: Sequence[Gate]) -> Circuit:
        for gate in gates:
            self.add_gate(gate)
        return self

    def _single(self, kind: SingleGateKind, qubit: int) -> Circuit:
        return self.add_gate(SingleQubitGate(qubit, kind))

    # -- Single-qubit gates -------------------------------------------------

    def i(self, qubit: int) -> Circuit:
        """Identity gate."""
        return self._single(SingleGateKind.I, qubit)

    def x(self, qubit: int) -> Circuit:
        """Pauli-X gate."""
        return self._single(SingleGateKind.X, qubit)

    def y(self, qubit: int) -> Circuit:
        """Pauli-Y gate."""
        return self._single(SingleGateKind.Y, qubit)

    def z(self, qubit: int) -> Circuit:
        """Pauli-Z gate."""
        return self._single(SingleGateKind.Z, qubit)

    def h(self, qubit: int) -> Circuit:
        """Hadamard gate."""
        return self._single(SingleGateKind.H, qubit)

    def s(self, qubit: int) -> Circuit:
        """S gate."""
        return self._single(SingleGateKind.S, qubit)

    def sdg(self, qubit: int) -> Circuit:
        """S-dagger gate."""
        return self._single(SingleGateKind.SDG, qubit)

    # -- Two-qubit gates ----------------------------------------------------

    def cx(self, control: int, target: int) -> Circuit:
        """Controlled-NOT (CNOT) gate."""
        return self.add_gate(CNOT(control, target))

    def cnot(self, control: int, target: int) -> Circuit:
        """Alias for cx."""
        return self.cx(control, target)

    def cz(self, control: int, target: int) -> Circuit:
        """Controlled-Z gate."""
        return self.add_gate(CZ(control, target))

    def swap(self, qubit1: int, qubit2: int) -> Circuit:
        """SWAP gate."""
        return self.add_gate(SWAP(qubit1, qubit2))

    # -- Composition --------------------------------------------------------

    def inverse(self) -> Circuit:
        """Return the adjoint circuit (reversed order, S ↔ S†)."""
        inv = Circuit(self.num_qubits, name=f"{self.name}_inv")
        for gate in reversed(self._gates):
            if isinstance(gate, SingleQubitGate):
                gate = SingleQubitGate(gate.qubit, gate.kind.inverse)
            inv._gates.append(gate)
        return inv

    def copy(self) -> Circuit:
        new = Circuit(self.num_qubits, name=self.name)
        new._gates = list(self._gates)
        return new

    # -- Container protocol -------------------------------------------------

    def __len__(self) -> int:
        return len(self._gates)

    def __iter__(self) -> Iterator[Gate]:
        return iter(self._gates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Circuit):
            return NotImplemented
        return self.num_qubits == other.num_qubits and self._gates == other._gates

    __hash__ = None

    def __repr__(self) -> str:
        return f"Circuit(num_qubits={self.num_qubits}, depth={self.depth})"

    def draw(self) -> str:
        """ASCII diagram of the circuit."""
        from pauliflow.visualization import draw_circuit

        return draw_circuit(self)
