"""
Pauli operators in bit-packed symplectic form.

An n-qubit Pauli operator is stored as two integers used as bit vectors
plus a global phase from the group {+1, +i, -1, -i}:

  x_bits : bit j = 1 if the operator has an X component on qubit j
  z_bits : bit j = 1 if the operator has a Z component on qubit j

  (x_j, z_j) = (0, 0) → I on qubit j
  (x_j, z_j) = (1, 0) → X on qubit j
  (x_j, z_j) = (0, 1) → Z on qubit j
  (x_j, z_j) = (1, 1) → Y on qubit j

Both bit vectors fit a 64-bit machine word, so every operation below is
O(1) in the number of qubits.

Usage:
    >>> from pauliflow.core.pauli import PauliString, Phase
    >>> x = PauliString.from_pattern("X", 1)
    >>> z = PauliString.from_pattern("Z", 1)
    >>> (x * z).to_label(), (x * z).phase
    ('Y', <Phase.PLUS_I: 1>)
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Tuple, Union

import numpy as np

MAX_QUBITS = 64


def _popcount(value: int) -> int:
    return bin(value).count("1")


# ---------------------------------------------------------------------------
# Phase: the cyclic group Z/4 written multiplicatively
# ---------------------------------------------------------------------------

class Phase(IntEnum):
    """
    Global phase factor i^k, stored as the exponent k in 0..3.

    Multiplying phases adds exponents mod 4.
    """

    PLUS_ONE = 0
    PLUS_I = 1
    MINUS_ONE = 2
    MINUS_I = 3

    @classmethod
    def from_exponent(cls, k: int) -> "Phase":
        """Return i^k, reducing k mod 4 (negative k allowed)."""
        return cls(k % 4)

    def multiply(self, other: "Phase") -> "Phase":
        return Phase((self.value + Phase(other).value) % 4)

    def negate(self) -> "Phase":
        return Phase((self.value + 2) % 4)

    def conjugate(self) -> "Phase":
        return Phase((-self.value) % 4)

    @property
    def is_real(self) -> bool:
        return self.value % 2 == 0

    def to_complex(self) -> complex:
        return (1, 1j, -1, -1j)[self.value]

    # Phases compose like the group they model, not like integers.
    def __mul__(self, other: object) -> "Phase":
        if isinstance(other, Phase):
            return self.multiply(other)
        return NotImplemented

    def __neg__(self) -> "Phase":
        return self.negate()

    def __str__(self) -> str:
        return ("", "i", "−", "−i")[self.value]


class SinglePauli(Enum):
    """Single-qubit Pauli operator without phase."""

    I = "I"
    X = "X"
    Y = "Y"
    Z = "Z"

    @classmethod
    def from_bits(cls, x: int, z: int) -> "SinglePauli":
        return _BITS_TO_PAULI[(x & 1, z & 1)]

    @classmethod
    def parse(cls, value: Union["SinglePauli", str]) -> "SinglePauli":
        """Accept a SinglePauli or its letter (case-insensitive)."""
        if isinstance(value, SinglePauli):
            return value
        text = str(value).strip()
        if len(text) != 1 or text not in "IXYZixyz":
            raise ValueError(f"Invalid Pauli {value!r}. Must be one of I, X, Y, Z.")
        return cls(text.upper())

    @property
    def bits(self) -> Tuple[int, int]:
        """The (x, z) bit pair encoding this Pauli."""
        return _PAULI_TO_BITS[self]

    def __str__(self) -> str:
        return self.value


_PAULI_TO_BITS = {
    SinglePauli.I: (0, 0),
    SinglePauli.X: (1, 0),
    SinglePauli.Z: (0, 1),
    SinglePauli.Y: (1, 1),
}
_BITS_TO_PAULI = {bits: p for p, bits in _PAULI_TO_BITS.items()}

_PAULI_MATRICES = {
    SinglePauli.I: np.eye(2, dtype=complex),
    SinglePauli.X: np.array([[0, 1], [1, 0]], dtype=complex),
    SinglePauli.Y: np.array([[0, -1j], [1j, 0]], dtype=complex),
    SinglePauli.Z: np.array([[1, 0], [0, -1]], dtype=complex),
}


# ---------------------------------------------------------------------------
# PauliString
# ---------------------------------------------------------------------------

class PauliString:
    """
    Multi-qubit Pauli operator: phase · P_0 ⊗ P_1 ⊗ ... ⊗ P_{n-1}.

    Parameters
    ----------
    num_qubits : int
        Number of qubits, at most ``MAX_QUBITS``. The operator starts as the
        identity with phase +1.

    Notes
    -----
    Qubit indices passed to accessors must lie in ``[0, num_qubits)``; an
    out-of-range index is a caller bug and raises ``IndexError``.
    """

    __slots__ = ("_x", "_z", "_phase", "_n")

    def __init__(self, num_qubits: int):
        if num_qubits < 0:
            raise ValueError(f"num_qubits must be ≥ 0, got {num_qubits}")
        if num_qubits > MAX_QUBITS:
            raise ValueError(
                f"PauliString supports up to {MAX_QUBITS} qubits, got {num_qubits}"
            )
        self._n = num_qubits
        self._x = 0
        self._z = 0
        self._phase = Phase.PLUS_ONE

    @classmethod
    def from_pattern(cls, pattern: str, num_qubits: int) -> "PauliString":
        """
        Parse a per-qubit pattern such as ``"XIZ"`` or ``"x i z"``.

        Character j describes qubit j. Whitespace is dropped before the
        length check; letters are case-insensitive.

        Raises
        ------
        ValueError
            If the pattern length differs from ``num_qubits`` or contains a
            character other than I, X, Y, Z.
        """
        chars = [c for c in pattern if not c.isspace()]
        if len(chars) != num_qubits:
            raise ValueError(
                f"Pattern length {len(chars)} doesn't match num_qubits {num_qubits}"
            )
        p = cls(num_qubits)
        for q, ch in enumerate(chars):
            if ch not in "IXYZixyz":
                raise ValueError(f"Invalid Pauli character: {ch!r}")
            x, z = SinglePauli(ch.upper()).bits
            p._x |= x << q
            p._z |= z << q
        return p

    # -- Properties ---------------------------------------------------------

    @property
    def num_qubits(self) -> int:
        return self._n

    @property
    def x_bits(self) -> int:
        return self._x

    @x_bits.setter
    def x_bits(self, value: int) -> None:
        self._x = value & self._mask

    @property
    def z_bits(self) -> int:
        return self._z

    @z_bits.setter
    def z_bits(self, value: int) -> None:
        self._z = value & self._mask

    @property
    def phase(self) -> Phase:
        return self._phase

    @phase.setter
    def phase(self, value: Phase) -> None:
        self._phase = Phase(value)

    @property
    def _mask(self) -> int:
        return (1 << self._n) - 1

    # -- Per-qubit access ---------------------------------------------------

    def _check_qubit(self, qubit: int) -> None:
        if not 0 <= qubit < self._n:
            raise IndexError(f"Qubit index {qubit} out of range [0, {self._n})")

    def x_bit(self, qubit: int) -> int:
        self._check_qubit(qubit)
        return (self._x >> qubit) & 1

    def z_bit(self, qubit: int) -> int:
        self._check_qubit(qubit)
        return (self._z >> qubit) & 1

    def get_pauli(self, qubit: int) -> SinglePauli:
        """Return the Pauli acting on ``qubit``."""
        self._check_qubit(qubit)
        return SinglePauli.from_bits(self._x >> qubit, self._z >> qubit)

    def set_pauli(self, qubit: int, pauli: Union[SinglePauli, str]) -> None:
        """Overwrite the component on ``qubit``; the phase is untouched."""
        self._check_qubit(qubit)
        x, z = SinglePauli.parse(pauli).bits
        clear = ~(1 << qubit)
        self._x = (self._x & clear) | (x << qubit)
        self._z = (self._z & clear) | (z << qubit)

    # -- Group operations ---------------------------------------------------

    def multiply(self, other: "PauliString") -> "PauliString":
        """
        Return the product ``self · other``.

        The phase picks up i^ω with
        ω = popcount(x₁ ∧ z₂) − popcount(z₁ ∧ x₂) (mod 4), so that
        X·Z = iY and Z·X = −iY.

        Raises
        ------
        ValueError
            If the operators act on different numbers of qubits.
        """
        if self._n != other._n:
            raise ValueError(
                "Cannot multiply Pauli strings with different qubit counts "
                f"({self._n} vs {other._n})"
            )
        omega = _popcount(self._x & other._z) - _popcount(self._z & other._x)
        result = PauliString(self._n)
        result._x = self._x ^ other._x
        result._z = self._z ^ other._z
        result._phase = self._phase * other._phase * Phase.from_exponent(omega)
        return result

    def __mul__(self, other: object) -> "PauliString":
        if isinstance(other, PauliString):
            return self.multiply(other)
        return NotImplemented

    def commutes_with(self, other: "PauliString") -> bool:
        """
        True iff the symplectic inner product with ``other`` is even.

        Operators on different numbers of qubits are reported as not
        commuting rather than raising.
        """
        if self._n != other._n:
            return False
        product = (self._x & other._z) ^ (self._z & other._x)
        return _popcount(product) % 2 == 0

    # -- Queries ------------------------------------------------------------

    def weight(self) -> int:
        """Number of qubits carrying a non-identity Pauli."""
        return _popcount(self._x | self._z)

    def is_identity(self) -> bool:
        return self._x == 0 and self._z == 0

    def to_label(self) -> str:
        """Compact letters without phase, e.g. ``"XIZ"``."""
        return "".join(self.get_pauli(q).value for q in range(self._n))

    def to_symplectic(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return the (x, z) components as length-n ``uint8`` arrays."""
        qubits = np.arange(self._n, dtype=np.uint64)
        x = ((np.uint64(self._x) >> qubits) & np.uint64(1)).astype(np.uint8)
        z = ((np.uint64(self._z) >> qubits) & np.uint64(1)).astype(np.uint8)
        return x, z

    def to_matrix(self) -> np.ndarray:
        """
        Dense matrix of the operator including its phase.

        Qubit 0 is the leftmost tensor factor. Exponential memory, so only
        allowed for up to 10 qubits.
        """
        if self._n > 10:
            raise ValueError(
                f"to_matrix() with {self._n} qubits would build a "
                f"{2 ** self._n}×{2 ** self._n} matrix. Use n ≤ 10."
            )
        mat = np.array([[1.0]], dtype=complex)
        for q in range(self._n):
            mat = np.kron(mat, _PAULI_MATRICES[self.get_pauli(q)])
        return self._phase.to_complex() * mat

    # -- Copy & comparison --------------------------------------------------

    def copy(self) -> "PauliString":
        p = PauliString.__new__(PauliString)
        p._n = self._n
        p._x = self._x
        p._z = self._z
        p._phase = self._phase
        return p

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PauliString):
            return NotImplemented
        return (self._n, self._x, self._z, self._phase) == (
            other._n, other._x, other._z, other._phase
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"PauliString({self.to_label()!r}, phase={self._phase.name}, "
            f"num_qubits={self._n})"
        )

    def __str__(self) -> str:
        return str(self._phase) + " ".join(
            self.get_pauli(q).value for q in range(self._n)
        )
