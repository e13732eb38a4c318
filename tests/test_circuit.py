"""Tests for Circuit and the gate model."""

import dataclasses

import pytest

from pauliflow.core.circuit import Circuit
from pauliflow.core.gates import CNOT, CZ, SWAP, SingleGateKind, SingleQubitGate


# ---------------------------------------------------------------------------
# Basic construction
# ---------------------------------------------------------------------------

def test_empty_circuit():
    qc = Circuit(3)
    assert qc.num_qubits == 3
    assert qc.depth == 0
    assert len(qc) == 0
    assert qc.gates == ()


@pytest.mark.parametrize("n", [0, -1, 65])
def test_invalid_qubit_count(n):
    with pytest.raises(ValueError):
        Circuit(n)


def test_max_qubits():
    qc = Circuit(64).h(63).cx(0, 63)
    assert qc.depth == 2


def test_method_chaining():
    qc = Circuit(2)
    result = qc.h(0).cx(0, 1)
    assert result is qc
    assert qc.depth == 2


def test_gate_order_is_time_order():
    qc = Circuit(2).x(0).h(1).cz(0, 1)
    assert qc.gates == (
        SingleQubitGate(0, SingleGateKind.X),
        SingleQubitGate(1, SingleGateKind.H),
        CZ(0, 1),
    )


def test_gates_at_time():
    qc = Circuit(2).h(0).cx(0, 1)
    assert qc.gates_at_time(0) == [SingleQubitGate(0, SingleGateKind.H)]
    assert qc.gates_at_time(1) == [CNOT(0, 1)]
    assert qc.gates_at_time(2) == []
    assert qc.gates_at_time(-1) == []


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def test_invalid_qubit_index():
    qc = Circuit(2)
    with pytest.raises(ValueError):
        qc.h(2)
    with pytest.raises(ValueError):
        qc.h(-1)
    assert qc.depth == 0


def test_two_qubit_out_of_range():
    qc = Circuit(2)
    with pytest.raises(ValueError, match="acts on qubit 5"):
        qc.cx(0, 5)
    with pytest.raises(ValueError):
        qc.swap(3, 0)


def test_duplicate_qubits():
    qc = Circuit(2)
    with pytest.raises(ValueError):
        qc.cx(0, 0)
    with pytest.raises(ValueError):
        qc.cz(1, 1)


def test_swap_same_qubit_allowed():
    qc = Circuit(2).swap(1, 1)
    assert qc.gates == (SWAP(1, 1),)


def test_non_integer_qubit():
    qc = Circuit(2)
    with pytest.raises(ValueError):
        qc.h(1.0)
    with pytest.raises(ValueError):
        qc.h(True)


def test_add_gate_rejects_non_gate():
    with pytest.raises(TypeError):
        Circuit(1).add_gate("h")


def test_extend_stops_at_invalid_gate():
    qc = Circuit(2).h(0)
    with pytest.raises(ValueError):
        qc.extend([CNOT(0, 1), CNOT(0, 7)])
    assert qc.gates == (SingleQubitGate(0, SingleGateKind.H), CNOT(0, 1))


# ---------------------------------------------------------------------------
# Gate coverage
# ---------------------------------------------------------------------------

def test_all_single_qubit_gates():
    qc = Circuit(1).i(0).x(0).y(0).z(0).h(0).s(0).sdg(0)
    kinds = [g.kind for g in qc]
    assert kinds == [
        SingleGateKind.I, SingleGateKind.X, SingleGateKind.Y, SingleGateKind.Z,
        SingleGateKind.H, SingleGateKind.S, SingleGateKind.SDG,
    ]


def test_all_two_qubit_gates():
    qc = Circuit(3).cx(0, 1).cnot(1, 2).cz(0, 2).swap(2, 0)
    assert qc.gates == (CNOT(0, 1), CNOT(1, 2), CZ(0, 2), SWAP(2, 0))


def test_gate_qubits():
    assert SingleQubitGate(2, SingleGateKind.H).qubits == (2,)
    assert CNOT(3, 1).qubits == (3, 1)
    assert SWAP(0, 4).num_qubits == 2


def test_gates_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        CNOT(0, 1).control = 2


def test_gate_str():
    assert str(SingleQubitGate(0, SingleGateKind.SDG)) == "Sdg(0)"
    assert str(CNOT(0, 1)) == "CNOT(0, 1)"
    assert str(CZ(2, 0)) == "CZ(2, 0)"
    assert str(SWAP(1, 3)) == "SWAP(1, 3)"


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def test_inverse_basic():
    qc = Circuit(2).h(0).s(1).cx(0, 1)
    inv = qc.inverse()
    assert inv.gates == (
        CNOT(0, 1),
        SingleQubitGate(1, SingleGateKind.SDG),
        SingleQubitGate(0, SingleGateKind.H),
    )


def test_copy_independent():
    qc = Circuit(2).h(0)
    qc2 = qc.copy()
    qc2.x(1)
    assert qc.depth == 1
    assert qc2.depth == 2


def test_equality():
    assert Circuit(2).h(0).cx(0, 1) == Circuit(2).h(0).cx(0, 1)
    assert Circuit(2).h(0) != Circuit(3).h(0)
    assert Circuit(2).h(0) != Circuit(2).h(1)


def test_draw_returns_string():
    diagram = Circuit(2).h(0).cx(0, 1).draw()
    assert isinstance(diagram, str)
    assert "q0" in diagram and "q1" in diagram
    assert "[H]" in diagram and "●" in diagram and "⊕" in diagram


def test_repr():
    assert repr(Circuit(2).h(0)) == "Circuit(num_qubits=2, depth=1)"
