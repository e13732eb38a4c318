"""OpenQASM 2.0 export for pauliflow circuits."""

from __future__ import annotations

from pauliflow.core.circuit import Circuit
from pauliflow.core.gates import SingleGateKind, SingleQubitGate
from pauliflow.io.names import gate_name

_HEADER = 'OPENQASM 2.0;\ninclude "qelib1.inc";\n'


def export_qasm(circuit: Circuit) -> str:
    """
    Render ``circuit`` as OpenQASM 2.0 on a single register ``q``.

    Identity gates have no effect on the error pattern and are left out.

    >>> print(export_qasm(Circuit(2).h(0).cx(0, 1)), end="")
    OPENQASM 2.0;
    include "qelib1.inc";
    qreg q[2];
    <BLANKLINE>
    h q[0];
    cx q[0],q[1];
    """
    lines = [_HEADER, f"qreg q[{circuit.num_qubits}];\n", "\n"]
    for gate in circuit:
        if isinstance(gate, SingleQubitGate) and gate.kind is SingleGateKind.I:
            continue
        operands = ",".join(f"q[{q}]" for q in gate.qubits)
        lines.append(f"{gate_name(gate)} {operands};\n")
    return "".join(lines)
