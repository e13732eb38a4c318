"""
Circuit and error-timeline visualization.

Features:
- ASCII circuit diagrams (no dependencies)
- ASCII timeline of the error pattern after every gate
- Timeline heat map saved as PNG (requires matplotlib)
"""
import os
from typing import List

import numpy as np

from pauliflow.core.gates import CNOT, CZ, SWAP, SingleQubitGate

try:
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend
    import matplotlib.pyplot as plt
    from matplotlib.colors import ListedColormap
    HAS_MPL = True
except ImportError:
    HAS_MPL = False


class CircuitDrawer:
    """
    Draw Clifford circuits as ASCII art.

    Example output:
        q0: ──[H]───●─────
                    │
        q1: ────────⊕─────
    """

    GATE_SYMBOLS = {
        'I': 'I', 'X': 'X', 'Y': 'Y', 'Z': 'Z',
        'H': 'H', 'S': 'S', 'SDG': 'S†',
    }

    def __init__(self, num_qubits: int):
        self.num_qubits = num_qubits
        self.columns: List[List[str]] = []

    def _spanning_column(self, a: int, b: int) -> List[str]:
        return ['│' if min(a, b) < i < max(a, b) else '─'
                for i in range(self.num_qubits)]

    def add_single_gate(self, gate: str, qubit: int) -> None:
        col = ['─'] * self.num_qubits
        symbol = self.GATE_SYMBOLS.get(gate.upper(), gate)
        col[qubit] = f'[{symbol}]'
        self.columns.append(col)

    def add_cx(self, control: int, target: int) -> None:
        col = self._spanning_column(control, target)
        col[control] = '●'
        col[target] = '⊕'
        self.columns.append(col)

    def add_cz(self, control: int, target: int) -> None:
        col = self._spanning_column(control, target)
        col[control] = '●'
        col[target] = '●'
        self.columns.append(col)

    def add_swap(self, q1: int, q2: int) -> None:
        col = self._spanning_column(q1, q2)
        col[q1] = '✕'
        col[q2] = '✕'
        self.columns.append(col)

    def add_gate(self, gate) -> None:
        """Add a column for any pauliflow gate."""
        if isinstance(gate, SingleQubitGate):
            self.add_single_gate(gate.kind.name, gate.qubit)
        elif isinstance(gate, CNOT):
            self.add_cx(gate.control, gate.target)
        elif isinstance(gate, CZ):
            self.add_cz(gate.control, gate.target)
        elif isinstance(gate, SWAP):
            self.add_swap(gate.qubit1, gate.qubit2)
        else:
            raise TypeError(f"Cannot draw {gate!r}")

    def draw(self) -> str:
        """Generate ASCII circuit diagram."""
        if not self.columns:
            return "Empty circuit"

        label_width = len(f'q{self.num_qubits - 1}: ')
        lines = []
        for q in range(self.num_qubits):
            line = f'q{q}: '.ljust(label_width)
            for col in self.columns:
                cell = col[q]
                if cell == '─':
                    line += '─────'
                elif cell == '│':
                    line += '  │  '
                elif cell.startswith('['):
                    line += cell.center(5, '─')
                else:
                    line += f'──{cell}──'
            line += '──'
            lines.append(line)

        return '\n'.join(lines)


class TimelineVisualizer:
    """
    Tabulate how the error pattern evolves through a simulation.

    Reads patterns only through ``get_pauli`` and ``phase``.

    Example output:
        t   gate         phase  q0 q1
        ─────────────────────────────
        0   (initial)           X  I
        1   H(0)                Z  I
        2   CNOT(0, 1)          Z  I
    """

    def __init__(self, simulator):
        self.simulator = simulator

    @staticmethod
    def _phase_text(pattern) -> str:
        text = str(pattern.phase)
        return text if text else '+'

    def rows(self):
        for time, gate, pattern in self.simulator.history():
            yield (
                str(time),
                str(gate) if gate is not None else '(initial)',
                self._phase_text(pattern),
                [pattern.get_pauli(q).value for q in range(pattern.num_qubits)],
            )

    def draw(self) -> str:
        n = self.simulator.num_qubits
        rows = list(self.rows())
        gate_width = max([len('gate')] + [len(r[1]) for r in rows])
        qubit_width = max(len(f'q{n - 1}'), 1)

        header = (
            f"{'t':<4}{'gate':<{gate_width + 2}}{'phase':<7}"
            + ' '.join(f'q{q}'.ljust(qubit_width) for q in range(n))
        )
        lines = [header, '─' * len(header)]
        for time, gate, phase, paulis in rows:
            marker = ' ◀' if int(time) == self.simulator.current_time else ''
            lines.append(
                f"{time:<4}{gate:<{gate_width + 2}}{phase:<7}"
                + ' '.join(p.ljust(qubit_width) for p in paulis)
                + marker
            )
        return '\n'.join(lines)


class TimelinePlotter:
    """
    Render the error timeline as a qubit × time grid of Pauli components.

    Each cell is coloured by the Pauli acting on that qubit after that time
    step, with the letter written on top.
    """

    PAULI_INDEX = {'I': 0, 'X': 1, 'Y': 2, 'Z': 3}
    COLORS = ['#161B22', '#FF5722', '#9C27B0', '#2196F3']

    def __init__(self, output_dir: str = '.'):
        if not HAS_MPL:
            raise ImportError("matplotlib required: pip install matplotlib")
        self.output_dir = output_dir

    def grid(self, simulator) -> np.ndarray:
        """Array of shape (num_qubits, len(timeline)) holding Pauli indices."""
        timeline = simulator.timeline
        data = np.zeros((simulator.num_qubits, len(timeline)), dtype=int)
        for t, snap in enumerate(timeline):
            for q in range(simulator.num_qubits):
                data[q, t] = self.PAULI_INDEX[snap.error_pattern.get_pauli(q).value]
        return data

    def plot(self, simulator, filename: str = 'timeline.png',
             save: bool = True) -> str:
        """Draw the timeline of ``simulator`` and save it; returns the path."""
        data = self.grid(simulator)
        n, steps = data.shape

        fig, ax = plt.subplots(figsize=(max(4, steps * 0.7), max(2, n * 0.6)))
        ax.imshow(data, cmap=ListedColormap(self.COLORS), vmin=0, vmax=3,
                  aspect='auto')
        letters = 'IXYZ'
        for q in range(n):
            for t in range(steps):
                ax.text(t, q, letters[data[q, t]], ha='center', va='center',
                        color='white', fontsize=10, fontweight='bold')

        labels = ['init'] + [str(g) for g in simulator.circuit.gates][:steps - 1]
        ax.set_xticks(range(steps))
        ax.set_xticklabels(labels, rotation=45, ha='right', fontsize=8)
        ax.set_yticks(range(n))
        ax.set_yticklabels([f'q{q}' for q in range(n)])
        ax.set_xlabel('Time step')
        ax.set_title('Error propagation', fontweight='bold')

        plt.tight_layout()
        path = os.path.join(self.output_dir, filename)
        if save:
            fig.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return path


# Convenience functions
def draw_circuit(circuit) -> str:
    """Draw a circuit as ASCII."""
    drawer = CircuitDrawer(circuit.num_qubits)
    for gate in circuit:
        drawer.add_gate(gate)
    return drawer.draw()


def show_timeline(simulator) -> str:
    """Show the recorded error timeline as an ASCII table."""
    return TimelineVisualizer(simulator).draw()


def plot_timeline(simulator, path: str) -> str:
    """Save the timeline heat map to ``path`` (requires matplotlib)."""
    directory, filename = os.path.split(os.path.abspath(path))
    return TimelinePlotter(directory).plot(simulator, filename)
