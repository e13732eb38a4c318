"""Tests for the JSON and LaTeX circuit formats and gate-name dispatch."""

import json

import pytest

from pauliflow.core.circuit import Circuit
from pauliflow.core.gates import CNOT, CZ, SWAP, SingleGateKind, SingleQubitGate
from pauliflow.io import (
    GATE_NAMES,
    CircuitFormatError,
    circuit_from_dict,
    circuit_to_dict,
    export_json,
    export_latex,
    export_latex_simple,
    gate_from_name,
    gate_name,
    import_json,
)
from pauliflow.io.names import gate_arity


def sample_circuit():
    return Circuit(3).h(0).sdg(1).cx(0, 1).cz(2, 1).swap(0, 2).i(1)


# ---------------------------------------------------------------------------
# Gate names
# ---------------------------------------------------------------------------

def test_gate_names_cover_clifford_set():
    for name in ("id", "i", "x", "y", "z", "h", "s", "sdg", "cx", "cnot", "cz", "swap"):
        assert name in GATE_NAMES


def test_gate_from_name_single():
    assert gate_from_name("H", [2]) == SingleQubitGate(2, SingleGateKind.H)
    assert gate_from_name("id", [0]) == SingleQubitGate(0, SingleGateKind.I)
    assert gate_from_name("Sdg", [1]).kind is SingleGateKind.SDG


def test_gate_from_name_two():
    assert gate_from_name("cx", [0, 1]) == CNOT(0, 1)
    assert gate_from_name("CNOT", [1, 0]) == CNOT(1, 0)
    assert gate_from_name("cz", [0, 2]) == CZ(0, 2)
    assert gate_from_name("swap", [2, 0]) == SWAP(2, 0)


def test_gate_from_name_unknown():
    with pytest.raises(ValueError, match="Unknown gate"):
        gate_from_name("t", [0])


def test_gate_from_name_wrong_arity():
    with pytest.raises(ValueError, match="takes 1 qubit"):
        gate_from_name("h", [0, 1])


def test_gate_arity():
    assert gate_arity("s") == 1
    assert gate_arity("SWAP") == 2


def test_gate_name_is_canonical():
    assert [gate_name(g) for g in sample_circuit()] == ["h", "sdg", "cx", "cz", "swap", "i"]


def test_gate_name_roundtrip():
    for gate in sample_circuit():
        assert gate_from_name(gate_name(gate), list(gate.qubits)) == gate


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def test_json_document_shape():
    data = circuit_to_dict(Circuit(2).h(0).cx(0, 1).swap(1, 0))
    assert data == {
        "num_qubits": 2,
        "gates": [
            {"Single": {"qubit": 0, "gate": "H"}},
            {"Two": {"CNOT": {"control": 0, "target": 1}}},
            {"Two": {"SWAP": {"qubit1": 1, "qubit2": 0}}},
        ],
    }


def test_json_sdg_tag():
    data = circuit_to_dict(Circuit(1).sdg(0))
    assert data["gates"][0] == {"Single": {"qubit": 0, "gate": "Sdg"}}


def test_json_roundtrip_keeps_identity():
    qc = sample_circuit()
    assert import_json(export_json(qc)) == qc


def test_export_json_is_valid_json():
    text = export_json(sample_circuit(), indent=None)
    assert "\n" not in text
    assert json.loads(text)["num_qubits"] == 3


def test_json_empty_gate_list():
    qc = circuit_from_dict({"num_qubits": 4})
    assert qc.num_qubits == 4
    assert qc.depth == 0


@pytest.mark.parametrize("doc,message", [
    ([], "JSON object"),
    ({"gates": []}, "num_qubits"),
    ({"num_qubits": "2"}, "integer"),
    ({"num_qubits": True}, "integer"),
    ({"num_qubits": 2, "gates": {}}, "list"),
    ({"num_qubits": 2, "gates": [{"Triple": {}}]}, "unknown gate variant"),
    ({"num_qubits": 2, "gates": [{"Single": {"qubit": 0, "gate": "T"}}]},
     "unknown single-qubit gate"),
    ({"num_qubits": 2, "gates": [{"Single": {"gate": "H"}}]}, "missing 'qubit'"),
    ({"num_qubits": 2, "gates": [{"Single": {"qubit": 0}}]}, "missing"),
    ({"num_qubits": 2, "gates": [{"Two": {"ISWAP": {}}}]}, "unknown two-qubit gate"),
    ({"num_qubits": 2, "gates": [{"Two": {"CNOT": {"control": 0}}}]}, "missing"),
    ({"num_qubits": 2, "gates": [{"Single": {}, "Two": {}}]}, "one"),
])
def test_malformed_documents(doc, message):
    with pytest.raises(CircuitFormatError, match=message):
        circuit_from_dict(doc)


def test_invalid_json_text():
    with pytest.raises(CircuitFormatError, match="Invalid JSON"):
        import_json("{not json")


def test_gate_out_of_range_is_value_error():
    doc = {"num_qubits": 2, "gates": [{"Single": {"qubit": 5, "gate": "X"}}]}
    with pytest.raises(ValueError):
        circuit_from_dict(doc)


def test_format_error_is_value_error():
    assert issubclass(CircuitFormatError, ValueError)


# ---------------------------------------------------------------------------
# LaTeX
# ---------------------------------------------------------------------------

def test_latex_document_structure():
    tex = export_latex(Circuit(2).h(0).cx(0, 1))
    assert tex.startswith("\\documentclass{article}\n\\usepackage{qcircuit}\n")
    assert "\\Qcircuit @C=1em @R=.7em {" in tex
    assert tex.rstrip().endswith("\\end{document}")


def test_latex_rows():
    tex = export_latex(Circuit(2).h(0).cx(0, 1))
    assert "\\gate{H} & \\ctrl{1} & \\qw \\\\" in tex
    assert "\\qw & \\targ & \\qw \\\\" in tex


def test_latex_control_distance_is_signed():
    tex = export_latex(Circuit(3).cx(2, 0))
    rows = [line for line in tex.splitlines() if line.endswith("\\\\")]
    assert rows == [
        "\\targ & \\qw \\\\",
        "\\qw & \\qw \\\\",
        "\\ctrl{-2} & \\qw \\\\",
    ]


def test_latex_cz_and_swap():
    tex = export_latex(Circuit(2).cz(0, 1).swap(0, 1))
    assert "\\ctrl{1} & \\qswap \\qwx[1] & \\qw \\\\" in tex
    assert "\\control \\qw & \\qswap & \\qw \\\\" in tex


def test_latex_single_qubit_macros():
    tex = export_latex(Circuit(1).i(0).x(0).y(0).z(0).s(0).sdg(0))
    assert (
        "\\qw & \\gate{X} & \\gate{Y} & \\gate{Z} & \\gate{S} & "
        "\\gate{S^\\dagger} & \\qw \\\\"
    ) in tex


def test_latex_empty_circuit():
    tex = export_latex(Circuit(2))
    assert tex.count("\\qw \\\\") == 2


def test_latex_simple_listing():
    tex = export_latex_simple(Circuit(2).h(0).cx(0, 1))
    assert "Circuit with 2 qubits and 2 gates:" in tex
    assert "\\begin{verbatim}\nGate 0: H(0)\nGate 1: CNOT(0, 1)\n\\end{verbatim}" in tex
    assert "qcircuit" not in tex
