"""
pauliflow: Pauli error propagation through Clifford circuits.

Features:
- Bit-packed Pauli operators (up to 64 qubits) with exact phase tracking
- Fluent API: Circuit(2).h(0).cx(0, 1)
- Step forward and backward through a circuit and watch an error spread
- Circuit I/O: JSON, OpenQASM 2.0, LaTeX
- ASCII diagrams, error timelines and an optional web dashboard

Quick Start:
    >>> from pauliflow import Circuit, Simulator
    >>> qc = Circuit(2).h(0).cx(0, 1)
    >>> sim = Simulator(qc)
    >>> sim.inject_error(0, "X")
    >>> sim.run()
    2
    >>> print(sim.error_pattern)
    Z I

Visualization:
    >>> from pauliflow import draw_circuit, show_timeline
    >>> print(draw_circuit(qc))   # ASCII circuit diagram
    >>> print(show_timeline(sim))  # error pattern at every time step
"""
__version__ = "0.1.0"

# Core components
from .core import (
    MAX_QUBITS,
    Phase,
    SinglePauli,
    PauliString,
    SingleGateKind,
    Gate,
    SingleQubitGate,
    TwoQubitGate,
    CNOT,
    CZ,
    SWAP,
    Circuit,
    apply_gate,
)
from .simulator import Simulator, Snapshot

# Visualization
from .visualization import (
    draw_circuit,
    show_timeline,
    CircuitDrawer,
    TimelineVisualizer,
)

__all__ = [
    # Core
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
    # Simulation
    'Simulator',
    'Snapshot',
    # Visualization
    'draw_circuit',
    'show_timeline',
    'CircuitDrawer',
    'TimelineVisualizer',
]
