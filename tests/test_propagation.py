"""
Tests for the gate conjugation rules.

Rules are checked three ways:
1. Hand-written tables for every gate
2. Algebraic laws (H² = I, S⁴ = I, SWAP² = CZ² = I, CNOT spreading)
3. Cross-validation against dense matrices U P U† where the rule
   coincides with textbook conjugation (X, Y, Z, H, SWAP and weight-one
   inputs to CNOT and CZ)
"""

import itertools

import numpy as np
import pytest

from pauliflow.core.gates import CNOT, CZ, SWAP, SingleGateKind, SingleQubitGate
from pauliflow.core.pauli import PauliString, Phase
from pauliflow.core.propagation import apply_gate, apply_single_gate, apply_two_gate

K = SingleGateKind


def P(pattern, phase=Phase.PLUS_ONE):
    p = PauliString.from_pattern(pattern, len(pattern))
    p.phase = phase
    return p


def single(pattern, kind, qubit=0, phase=Phase.PLUS_ONE):
    p = P(pattern, phase)
    apply_single_gate(p, qubit, kind)
    return p


def two(pattern, gate, phase=Phase.PLUS_ONE):
    p = P(pattern, phase)
    apply_two_gate(p, gate)
    return p


I2 = np.eye(2, dtype=complex)
PROJ0 = np.diag([1, 0]).astype(complex)
PROJ1 = np.diag([0, 1]).astype(complex)
MAT = {
    K.I: I2,
    K.X: np.array([[0, 1], [1, 0]], dtype=complex),
    K.Y: np.array([[0, -1j], [1j, 0]], dtype=complex),
    K.Z: np.array([[1, 0], [0, -1]], dtype=complex),
    K.H: np.array([[1, 1], [1, -1]], dtype=complex) / np.sqrt(2),
}
CNOT_01 = np.kron(PROJ0, I2) + np.kron(PROJ1, MAT[K.X])
CNOT_10 = np.kron(I2, PROJ0) + np.kron(MAT[K.X], PROJ1)
CZ_MAT = np.diag([1, 1, 1, -1]).astype(complex)
SWAP_MAT = np.array(
    [[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]], dtype=complex
)


def conjugate(u, p):
    return u @ p.to_matrix() @ u.conj().T


# ═══════════════════════════════════════════════════════════════════
# Single-qubit rule tables
# ═══════════════════════════════════════════════════════════════════


class TestPauliGates:
    @pytest.mark.parametrize("kind,expected_sign", [
        (K.X, {"I": 1, "X": 1, "Y": -1, "Z": -1}),
        (K.Y, {"I": 1, "X": -1, "Y": 1, "Z": -1}),
        (K.Z, {"I": 1, "X": -1, "Y": -1, "Z": 1}),
    ])
    def test_sign_table(self, kind, expected_sign):
        for label, sign in expected_sign.items():
            p = single(label, kind)
            assert p.to_label() == label
            assert p.phase == (Phase.PLUS_ONE if sign == 1 else Phase.MINUS_ONE)

    def test_identity_gate_changes_nothing(self):
        for label in "IXYZ":
            for phase in Phase:
                assert single(label, K.I, phase=phase) == P(label, phase)


class TestHadamard:
    def test_table(self):
        assert single("X", K.H) == P("Z")
        assert single("Z", K.H) == P("X")
        assert single("Y", K.H) == P("Y", Phase.MINUS_ONE)
        assert single("I", K.H) == P("I")

    def test_h_squared_is_identity(self):
        for label in "IXYZ":
            for phase in Phase:
                p = P(label, phase)
                apply_single_gate(p, 0, K.H)
                apply_single_gate(p, 0, K.H)
                assert p == P(label, phase)

    def test_acts_only_on_its_qubit(self):
        assert single("XZY", K.H, qubit=1) == P("XXY")


class TestPhaseGate:
    def test_x_to_plus_i_y(self):
        p = single("X", K.S)
        assert p.to_label() == "Y"
        assert p.phase == Phase.PLUS_I

    def test_z_and_identity_unchanged(self):
        assert single("Z", K.S) == P("Z")
        assert single("I", K.S) == P("I")
        assert single("Z", K.SDG) == P("Z")

    def test_s_fourth_power_sequence(self):
        p = P("X")
        seen = []
        for _ in range(4):
            apply_single_gate(p, 0, K.S)
            seen.append((p.to_label(), p.phase))
        assert seen == [
            ("Y", Phase.PLUS_I),
            ("X", Phase.MINUS_I),
            ("Y", Phase.PLUS_ONE),
            ("X", Phase.PLUS_ONE),
        ]

    def test_sdg_from_x(self):
        p = single("X", K.SDG)
        assert p.to_label() == "Y"
        assert p.phase == Phase.MINUS_I

    @pytest.mark.parametrize("first,second", [(K.S, K.SDG), (K.SDG, K.S)])
    def test_s_then_sdg_is_identity_on_x(self, first, second):
        p = P("X")
        apply_single_gate(p, 0, first)
        apply_single_gate(p, 0, second)
        assert p == P("X")

    def test_y_with_real_phase_returns_to_x(self):
        assert single("Y", K.S) == P("X")
        assert single("Y", K.S, phase=Phase.MINUS_ONE) == P("X", Phase.MINUS_ONE)
        assert single("Y", K.SDG) == P("X")

    def test_imaginary_y_phases(self):
        assert single("Y", K.S, phase=Phase.MINUS_I) == P("X")
        assert single("Y", K.SDG, phase=Phase.PLUS_I) == P("X")
        assert single("Y", K.SDG, phase=Phase.MINUS_I) == P("X", Phase.PLUS_I)


class TestMatrixCrossCheck:
    @pytest.mark.parametrize("kind", [K.I, K.X, K.Y, K.Z, K.H])
    def test_single_qubit(self, kind):
        for label in "IXYZ":
            for phase in Phase:
                p = single(label, kind, phase=phase)
                np.testing.assert_allclose(
                    p.to_matrix(), conjugate(MAT[kind], P(label, phase)), atol=1e-12
                )

    def test_swap_all_two_qubit_paulis(self):
        for a, b in itertools.product("IXYZ", repeat=2):
            p = two(a + b, SWAP(0, 1))
            np.testing.assert_allclose(
                p.to_matrix(), conjugate(SWAP_MAT, P(a + b)), atol=1e-12
            )

    @pytest.mark.parametrize("label", ["XI", "YI", "ZI", "IX", "IY", "IZ"])
    def test_cnot_weight_one(self, label):
        np.testing.assert_allclose(
            two(label, CNOT(0, 1)).to_matrix(), conjugate(CNOT_01, P(label)), atol=1e-12
        )
        np.testing.assert_allclose(
            two(label, CNOT(1, 0)).to_matrix(), conjugate(CNOT_10, P(label)), atol=1e-12
        )

    @pytest.mark.parametrize("label", ["XI", "YI", "ZI", "IX", "IY", "IZ"])
    def test_cz_weight_one(self, label):
        np.testing.assert_allclose(
            two(label, CZ(0, 1)).to_matrix(), conjugate(CZ_MAT, P(label)), atol=1e-12
        )


# ═══════════════════════════════════════════════════════════════════
# Two-qubit rules
# ═══════════════════════════════════════════════════════════════════


class TestCNOT:
    def test_x_on_control_spreads(self):
        assert two("XI", CNOT(0, 1)) == P("XX")

    def test_z_on_target_spreads_back(self):
        assert two("IZ", CNOT(0, 1)) == P("ZZ")

    def test_z_on_control_and_x_on_target_stay(self):
        assert two("ZI", CNOT(0, 1)) == P("ZI")
        assert two("IX", CNOT(0, 1)) == P("IX")

    def test_x_z_becomes_minus_y_y(self):
        assert two("XZ", CNOT(0, 1)) == P("YY", Phase.MINUS_ONE)

    def test_xx_is_fixed_point(self):
        for phase in Phase:
            assert two("XX", CNOT(0, 1), phase) == P("XX", phase)

    def test_reversed_orientation(self):
        assert two("IX", CNOT(1, 0)) == P("XX")
        assert two("ZI", CNOT(1, 0)) == P("ZZ")

    def test_non_adjacent_qubits(self):
        assert two("XIIZ", CNOT(0, 3)) == P("YIIY", Phase.MINUS_ONE)

    def test_control_equals_target(self):
        with pytest.raises(ValueError):
            apply_two_gate(P("XX"), CNOT(1, 1))


class TestCZ:
    def test_x_drags_z(self):
        assert two("XI", CZ(0, 1)) == P("XZ")
        assert two("IX", CZ(0, 1)) == P("ZX")

    def test_z_unchanged(self):
        assert two("ZZ", CZ(0, 1)) == P("ZZ")

    def test_xx_picks_up_sign(self):
        assert two("XX", CZ(0, 1)) == P("YY", Phase.MINUS_ONE)

    def test_symmetric(self):
        for a, b in itertools.product("IXYZ", repeat=2):
            assert two(a + b, CZ(0, 1)) == two(a + b, CZ(1, 0))

    def test_cz_squared_is_identity(self):
        for a, b in itertools.product("IXYZ", repeat=2):
            p = P(a + b, Phase.PLUS_I)
            apply_two_gate(p, CZ(0, 1))
            apply_two_gate(p, CZ(0, 1))
            assert p == P(a + b, Phase.PLUS_I)

    def test_control_equals_target(self):
        with pytest.raises(ValueError):
            apply_two_gate(P("XX"), CZ(0, 0))


class TestSWAP:
    def test_exchanges_components(self):
        assert two("XZ", SWAP(0, 1)) == P("ZX")
        assert two("YIZ", SWAP(0, 2)) == P("ZIY")

    def test_phase_untouched(self):
        assert two("XI", SWAP(0, 1), Phase.MINUS_I) == P("IX", Phase.MINUS_I)

    def test_same_qubit_is_noop(self):
        assert two("XZ", SWAP(1, 1)) == P("XZ")

    def test_swap_squared_is_identity(self):
        for a, b in itertools.product("IXYZ", repeat=2):
            p = P(a + b)
            apply_two_gate(p, SWAP(0, 1))
            apply_two_gate(p, SWAP(0, 1))
            assert p == P(a + b)


# ═══════════════════════════════════════════════════════════════════
# Dispatch & contract violations
# ═══════════════════════════════════════════════════════════════════


class TestDispatch:
    def test_apply_gate_single(self):
        p = P("XI")
        apply_gate(p, SingleQubitGate(0, K.H))
        assert p == P("ZI")

    def test_apply_gate_two(self):
        p = P("XI")
        apply_gate(p, CNOT(0, 1))
        assert p == P("XX")

    def test_apply_gate_rejects_non_gate(self):
        with pytest.raises(TypeError):
            apply_gate(P("X"), "H")

    def test_single_out_of_range(self):
        with pytest.raises(IndexError):
            apply_single_gate(P("XX"), 2, K.H)

    def test_two_out_of_range(self):
        with pytest.raises(IndexError):
            apply_two_gate(P("XX"), CNOT(0, 5))
        with pytest.raises(IndexError):
            apply_two_gate(P("XX"), SWAP(0, 2))
