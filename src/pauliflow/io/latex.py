"""LaTeX export: a ``qcircuit`` diagram and a plain gate listing."""

from __future__ import annotations

from typing import List

from pauliflow.core.circuit import Circuit
from pauliflow.core.gates import CNOT, CZ, SWAP, Gate, SingleGateKind, SingleQubitGate

_SINGLE_MACROS = {
    SingleGateKind.I: r"\qw",
    SingleGateKind.X: r"\gate{X}",
    SingleGateKind.Y: r"\gate{Y}",
    SingleGateKind.Z: r"\gate{Z}",
    SingleGateKind.H: r"\gate{H}",
    SingleGateKind.S: r"\gate{S}",
    SingleGateKind.SDG: r"\gate{S^\dagger}",
}


def _cell(gate: Gate, qubit: int) -> str:
    """qcircuit entry for ``qubit`` in the column of ``gate``."""
    if isinstance(gate, SingleQubitGate):
        return _SINGLE_MACROS[gate.kind] if gate.qubit == qubit else r"\qw"
    if isinstance(gate, CNOT):
        if qubit == gate.control:
            return rf"\ctrl{{{gate.target - gate.control}}}"
        if qubit == gate.target:
            return r"\targ"
    elif isinstance(gate, CZ):
        if qubit == gate.control:
            return rf"\ctrl{{{gate.target - gate.control}}}"
        if qubit == gate.target:
            return r"\control \qw"
    elif isinstance(gate, SWAP):
        if gate.qubit1 != gate.qubit2:
            if qubit == gate.qubit1:
                return rf"\qswap \qwx[{gate.qubit2 - gate.qubit1}]"
            if qubit == gate.qubit2:
                return r"\qswap"
    return r"\qw"


def export_latex(circuit: Circuit) -> str:
    """
    Render ``circuit`` as a standalone LaTeX document using ``qcircuit``.

    One column per gate, one row per qubit, closed by a trailing wire.
    """
    rows: List[str] = []
    for q in range(circuit.num_qubits):
        cells = [_cell(g, q) for g in circuit]
        cells.append(r"\qw")
        rows.append(" & ".join(cells) + r" \\")

    return (
        "\\documentclass{article}\n"
        "\\usepackage{qcircuit}\n"
        "\\begin{document}\n"
        "\\begin{equation*}\n"
        "\\Qcircuit @C=1em @R=.7em {\n"
        + "\n".join(rows)
        + "\n}\n"
        "\\end{equation*}\n"
        "\\end{document}\n"
    )


def export_latex_simple(circuit: Circuit) -> str:
    """Plain listing of the gates, for when qcircuit is not installed."""
    listing = "".join(f"Gate {i}: {gate}\n" for i, gate in enumerate(circuit))
    return (
        "\\documentclass{article}\n"
        "\\begin{document}\n"
        f"Circuit with {circuit.num_qubits} qubits and {circuit.depth} gates:\n\n"
        "\\begin{verbatim}\n"
        f"{listing}"
        "\\end{verbatim}\n"
        "\\end{document}\n"
    )
