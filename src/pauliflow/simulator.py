"""
Stepping error-propagation simulator.

Wraps a Circuit and a live PauliString, applying one gate per step and
recording the error pattern after every step so that stepping backward is
an exact restore rather than an inverse-gate computation.

Example
-------
>>> from pauliflow import Circuit, Simulator
>>> sim = Simulator(Circuit(1).s(0))
>>> sim.inject_error(0, "X")
>>> sim.step_forward()
True
>>> sim.error_pattern.to_label(), sim.error_pattern.phase
('Y', <Phase.PLUS_I: 1>)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from pauliflow.core.circuit import Circuit
from pauliflow.core.gates import Gate
from pauliflow.core.pauli import PauliString, SinglePauli
from pauliflow.core.propagation import apply_gate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """
    Error pattern recorded at one point of the timeline.

    Attributes
    ----------
    time : int
        Number of gates applied when the snapshot was taken.
    error_pattern : PauliString
        Independent copy of the live pattern at that time.
    gate_applied : int or None
        Index of the gate that produced this state, None for the initial one.
    """

    time: int
    error_pattern: PauliString
    gate_applied: Optional[int] = None


def _copy_snapshot(snap: Snapshot) -> Snapshot:
    return dataclasses.replace(snap, error_pattern=snap.error_pattern.copy())


class Simulator:
    """
    Track a Pauli error through a Clifford circuit one gate at a time.

    Parameters
    ----------
    circuit : Circuit
        The circuit to step through. The simulator keeps its own copy, so
        later edits to ``circuit`` do not affect it.

    Notes
    -----
    ``len(timeline) == current_time + 1`` holds after every operation.
    Errors can only be injected at the current cursor; injecting overwrites
    the newest timeline entry instead of appending one.
    """

    def __init__(self, circuit: Circuit):
        if not isinstance(circuit, Circuit):
            raise TypeError(f"Expected a Circuit, got {type(circuit).__name__}")
        self._circuit = circuit.copy()
        self._pattern = PauliString(circuit.num_qubits)
        self._current_time = 0
        self._timeline: list = []
        self._record(None)

    # ─── Internal ────────────────────────────────────────────────────

    def _record(self, gate_index: Optional[int]) -> None:
        self._timeline.append(
            Snapshot(self._current_time, self._pattern.copy(), gate_index)
        )

    # ─── Properties ──────────────────────────────────────────────────

    @property
    def circuit(self) -> Circuit:
        """A copy of the circuit being simulated."""
        return self._circuit.copy()

    @property
    def num_qubits(self) -> int:
        return self._circuit.num_qubits

    @property
    def current_time(self) -> int:
        """Number of gates applied so far."""
        return self._current_time

    @property
    def depth(self) -> int:
        return self._circuit.depth

    @property
    def error_pattern(self) -> PauliString:
        """Copy of the live error pattern."""
        return self._pattern.copy()

    @property
    def timeline(self) -> Tuple[Snapshot, ...]:
        """Copies of the recorded snapshots, oldest first."""
        return tuple(_copy_snapshot(s) for s in self._timeline)

    @property
    def is_finished(self) -> bool:
        return self._current_time >= self._circuit.depth

    # ─── Operations ──────────────────────────────────────────────────

    def inject_error(self, qubit: int, pauli: Union[SinglePauli, str]) -> None:
        """
        Set the component on ``qubit`` of the live pattern.

        The newest snapshot is rewritten to match, so the error appears to
        have been present at the current time step.

        Raises
        ------
        IndexError
            If ``qubit`` is outside the circuit.
        ValueError
            If ``pauli`` is not one of I, X, Y, Z.
        """
        pauli = SinglePauli.parse(pauli)
        self._pattern.set_pauli(qubit, pauli)
        self._timeline[-1] = dataclasses.replace(
            self._timeline[-1], error_pattern=self._pattern.copy()
        )
        logger.debug(
            "Injected %s on qubit %d at t=%d", pauli, qubit, self._current_time
        )

    def step_forward(self) -> bool:
        """Apply the next gate. Returns False if the circuit is exhausted."""
        if self.is_finished:
            return False
        index = self._current_time
        gate = self._circuit.gates[index]
        apply_gate(self._pattern, gate)
        self._current_time += 1
        self._record(index)
        logger.debug("t=%d: applied %s -> %s", self._current_time, gate, self._pattern)
        return True

    def step_backward(self) -> bool:
        """Undo the last gate. Returns False at time 0."""
        if self._current_time == 0:
            return False
        self._timeline.pop()
        self._current_time -= 1
        self._pattern = self._timeline[-1].error_pattern.copy()
        logger.debug("Stepped back to t=%d", self._current_time)
        return True

    def reset(self) -> None:
        """Return to time 0 with no error, discarding the whole history."""
        self._current_time = 0
        self._pattern = PauliString(self._circuit.num_qubits)
        self._timeline = []
        self._record(None)
        logger.debug("Simulator reset")

    def run(self) -> int:
        """Step forward until the end; returns the number of gates applied."""
        steps = 0
        while self.step_forward():
            steps += 1
        return steps

    def get_snapshot(self, time: int) -> Optional[Snapshot]:
        if 0 <= time < len(self._timeline):
            return _copy_snapshot(self._timeline[time])
        return None

    def history(self) -> Iterator[Tuple[int, Optional[Gate], PauliString]]:
        """Yield ``(time, gate, pattern)`` for every recorded snapshot."""
        gates = self._circuit.gates
        for snap in self._timeline:
            gate = gates[snap.gate_applied] if snap.gate_applied is not None else None
            yield snap.time, gate, snap.error_pattern.copy()

    def __repr__(self) -> str:
        return (
            f"Simulator(num_qubits={self.num_qubits}, depth={self.depth}, "
            f"current_time={self._current_time})"
        )
