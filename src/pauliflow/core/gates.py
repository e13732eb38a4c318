"""
Clifford gate model.

Gates form a closed set of frozen dataclasses:

  SingleQubitGate(qubit, kind)   kind ∈ {I, X, Y, Z, H, S, SDG}
  CNOT(control, target)
  CZ(control, target)
  SWAP(qubit1, qubit2)

Every gate exposes ``qubits``, the tuple of operands in the order they were
given. Building gates from string tags is the job of the I/O layer
(``pauliflow.io.names``), not of this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class SingleGateKind(Enum):
    """Single-qubit Clifford gates supported by the propagation rules."""

    I = "I"
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    SDG = "Sdg"

    @property
    def inverse(self) -> "SingleGateKind":
        if self is SingleGateKind.S:
            return SingleGateKind.SDG
        if self is SingleGateKind.SDG:
            return SingleGateKind.S
        return self


class Gate:
    """Base class for all gates."""

    __slots__ = ()

    @property
    def qubits(self) -> Tuple[int, ...]:
        raise NotImplementedError

    @property
    def num_qubits(self) -> int:
        return len(self.qubits)


@dataclass(frozen=True)
class SingleQubitGate(Gate):
    """A single-qubit Clifford gate acting on ``qubit``."""

    qubit: int
    kind: SingleGateKind

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.qubit,)

    def __str__(self) -> str:
        return f"{self.kind.value}({self.qubit})"


class TwoQubitGate(Gate):
    """Base class for CNOT, CZ and SWAP."""

    __slots__ = ()
    label = ""


@dataclass(frozen=True)
class CNOT(TwoQubitGate):
    """Controlled-NOT. X spreads control → target, Z spreads target → control."""

    control: int
    target: int
    label = "CNOT"

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.control, self.target)

    def __str__(self) -> str:
        return f"CNOT({self.control}, {self.target})"


@dataclass(frozen=True)
class CZ(TwoQubitGate):
    """Controlled-Z. Symmetric: an X on either qubit drags a Z onto the other."""

    control: int
    target: int
    label = "CZ"

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.control, self.target)

    def __str__(self) -> str:
        return f"CZ({self.control}, {self.target})"


@dataclass(frozen=True)
class SWAP(TwoQubitGate):
    """Exchange the states of two qubits."""

    qubit1: int
    qubit2: int
    label = "SWAP"

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.qubit1, self.qubit2)

    def __str__(self) -> str:
        return f"SWAP({self.qubit1}, {self.qubit2})"
