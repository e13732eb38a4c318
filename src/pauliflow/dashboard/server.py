"""
pauliflow Dashboard Server.

A Flask application providing a JSON API over error-propagation sessions:
- gate catalog and preset circuits
- one Simulator per session, created from a JSON, QASM or gate-list circuit
- inject / step forward / step backward / reset / run
- circuit export to JSON, OpenQASM and LaTeX

Usage:
    from pauliflow.dashboard import launch
    launch(port=8888)

    # Or via CLI:
    # pauliflow serve --port 8888
"""

from __future__ import annotations

import logging
import threading
import uuid
import webbrowser
from collections import OrderedDict
from typing import Any, Dict, Mapping, Optional

from pauliflow import __version__
from pauliflow.core.circuit import Circuit
from pauliflow.core.pauli import PauliString, Phase
from pauliflow.io.json_format import circuit_from_dict, export_json
from pauliflow.io.latex import export_latex, export_latex_simple
from pauliflow.io.names import gate_from_name
from pauliflow.qasm import export_qasm, parse_qasm
from pauliflow.simulator import Simulator

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 256


# ---------------------------------------------------------------------------
# Gate metadata for the frontend
# ---------------------------------------------------------------------------

GATE_CATALOG = [
    {"name": "i",   "label": "I",   "category": "single", "n_qubits": 1,
     "description": "Identity", "color": "#868e96"},
    {"name": "x",   "label": "X",   "category": "single", "n_qubits": 1,
     "description": "Pauli-X (bit flip)", "color": "#ff6b6b"},
    {"name": "y",   "label": "Y",   "category": "single", "n_qubits": 1,
     "description": "Pauli-Y", "color": "#51cf66"},
    {"name": "z",   "label": "Z",   "category": "single", "n_qubits": 1,
     "description": "Pauli-Z (phase flip)", "color": "#845ef7"},
    {"name": "h",   "label": "H",   "category": "single", "n_qubits": 1,
     "description": "Hadamard: exchanges X and Z errors", "color": "#00d4ff"},
    {"name": "s",   "label": "S",   "category": "single", "n_qubits": 1,
     "description": "Phase gate: turns X errors into Y", "color": "#fab005"},
    {"name": "sdg", "label": "S†",  "category": "single", "n_qubits": 1,
     "description": "Inverse phase gate", "color": "#fab005"},

    {"name": "cx",   "label": "CX",   "category": "multi", "n_qubits": 2,
     "description": "CNOT: X spreads forward, Z spreads backward", "color": "#00d4ff"},
    {"name": "cz",   "label": "CZ",   "category": "multi", "n_qubits": 2,
     "description": "Controlled-Z: an X drags a Z onto the partner", "color": "#845ef7"},
    {"name": "swap", "label": "SWAP", "category": "multi", "n_qubits": 2,
     "description": "Swap two qubits and their errors", "color": "#fab005"},
]


PRESETS = {
    "bell_pair": {
        "name": "Bell Pair",
        "description": "H then CNOT; an X on q0 becomes Z and stays put",
        "num_qubits": 2,
        "gates": [
            {"name": "h", "qubits": [0]},
            {"name": "cx", "qubits": [0, 1]},
        ],
    },
    "ghz_3": {
        "name": "GHZ State (3 qubits)",
        "description": "An X on the control fans out to every qubit",
        "num_qubits": 3,
        "gates": [
            {"name": "cx", "qubits": [0, 1]},
            {"name": "cx", "qubits": [0, 2]},
        ],
    },
    "phase_cycle": {
        "name": "Phase Cycle",
        "description": "Four S gates take X through Y and back",
        "num_qubits": 1,
        "gates": [{"name": "s", "qubits": [0]} for _ in range(4)],
    },
    "bit_flip_code": {
        "name": "Bit-Flip Code Encoder",
        "description": "3-qubit repetition code encoder",
        "num_qubits": 3,
        "gates": [
            {"name": "cx", "qubits": [0, 1]},
            {"name": "cx", "qubits": [0, 2]},
        ],
    },
    "phase_flip_code": {
        "name": "Phase-Flip Code Encoder",
        "description": "Repetition code in the Hadamard basis; Z errors become X",
        "num_qubits": 3,
        "gates": [
            {"name": "cx", "qubits": [0, 1]},
            {"name": "cx", "qubits": [0, 2]},
            {"name": "h", "qubits": [0]},
            {"name": "h", "qubits": [1]},
            {"name": "h", "qubits": [2]},
        ],
    },
    "swap_chain": {
        "name": "SWAP Chain",
        "description": "Move an error from q0 to q3",
        "num_qubits": 4,
        "gates": [
            {"name": "swap", "qubits": [0, 1]},
            {"name": "swap", "qubits": [1, 2]},
            {"name": "swap", "qubits": [2, 3]},
        ],
    },
}


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------

_PHASE_TEXT = {
    Phase.PLUS_ONE: "",
    Phase.PLUS_I: "i",
    Phase.MINUS_ONE: "-",
    Phase.MINUS_I: "-i",
}


def _gate_list_circuit(num_qubits: Any, gates: Any) -> Circuit:
    if isinstance(num_qubits, bool) or not isinstance(num_qubits, int):
        raise ValueError(f"num_qubits must be an integer, got {num_qubits!r}")
    if not isinstance(gates, list):
        raise ValueError("'gates' must be a list")
    qc = Circuit(num_qubits)
    for g in gates:
        if not isinstance(g, dict) or "name" not in g:
            raise ValueError(f"Gate entry must have a 'name': {g!r}")
        qc.add_gate(gate_from_name(str(g["name"]), list(g.get("qubits", []))))
    return qc


def circuit_from_payload(data: Optional[Mapping[str, Any]]) -> Circuit:
    """
    Build a Circuit from a request body.

    Accepts ``{"circuit": <JSON format>}``, ``{"qasm": "..."}``,
    ``{"preset": "bell_pair"}`` or ``{"num_qubits": n, "gates": [{"name",
    "qubits"}]}``.
    """
    if not isinstance(data, Mapping):
        raise ValueError("Request body must be a JSON object")
    if "circuit" in data:
        return circuit_from_dict(data["circuit"])
    if "qasm" in data:
        return parse_qasm(str(data["qasm"]))
    if "preset" in data:
        preset = PRESETS.get(data["preset"])
        if preset is None:
            raise ValueError(f"Unknown preset {data['preset']!r}")
        return _gate_list_circuit(preset["num_qubits"], preset["gates"])
    if "num_qubits" in data:
        return _gate_list_circuit(data["num_qubits"], data.get("gates", []))
    raise ValueError("Expected one of 'circuit', 'qasm', 'preset' or 'num_qubits'")


def pattern_to_dict(pattern: PauliString) -> Dict[str, Any]:
    paulis = [pattern.get_pauli(q).value for q in range(pattern.num_qubits)]
    return {
        "paulis": paulis,
        "phase": _PHASE_TEXT[pattern.phase],
        "label": "".join(paulis),
    }


def session_state(session_id: str, sim: Simulator) -> Dict[str, Any]:
    return {
        "session_id": session_id,
        "num_qubits": sim.num_qubits,
        "depth": sim.depth,
        "current_time": sim.current_time,
        "is_finished": sim.is_finished,
        "error_pattern": pattern_to_dict(sim.error_pattern),
        "timeline": [
            {
                "time": snap.time,
                "error_pattern": pattern_to_dict(snap.error_pattern),
                "gate_applied": snap.gate_applied,
            }
            for snap in sim.timeline
        ],
    }


# ---------------------------------------------------------------------------
# Session store
# ---------------------------------------------------------------------------

class SessionStore:
    """
    Thread-safe map of session id → Simulator.

    Holds at most ``max_sessions`` simulators; creating one more evicts the
    oldest. Every access to a Simulator happens while holding the lock.
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS):
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be ≥ 1, got {max_sessions}")
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, Simulator]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def create(self, circuit: Circuit) -> str:
        session_id = uuid.uuid4().hex
        sim = Simulator(circuit)
        with self._lock:
            self._sessions[session_id] = sim
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted session %s", evicted)
        logger.info(
            "Created session %s (%d qubits, depth %d)",
            session_id, circuit.num_qubits, circuit.depth,
        )
        return session_id

    def delete(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info("Deleted session %s", session_id)
        return removed

    def apply(self, session_id: str, action) -> Any:
        """
        Run ``action(simulator)`` under the lock.

        Raises
        ------
        KeyError
            If the session does not exist.
        """
        with self._lock:
            sim = self._sessions[session_id]
            return action(sim)


# ---------------------------------------------------------------------------
# Flask Application
# ---------------------------------------------------------------------------

def create_app(config: Optional[Mapping[str, Any]] = None) -> Any:
    """
    Create and configure the Flask application.

    Parameters
    ----------
    config : mapping, optional
        Merged into ``app.config``. ``MAX_SESSIONS`` bounds the number of
        live sessions (default 256).
    """
    try:
        from flask import Flask, jsonify, request
    except ImportError:
        raise ImportError(
            "Flask is required for the dashboard. Install it with:\n"
            "  pip install flask\n"
            "Or install pauliflow with dashboard extras:\n"
            "  pip install pauliflow[dashboard]"
        )

    app = Flask(__name__)
    app.json.sort_keys = False
    app.config['MAX_SESSIONS'] = DEFAULT_MAX_SESSIONS
    if config:
        app.config.update(config)

    store = SessionStore(app.config['MAX_SESSIONS'])
    app.extensions['pauliflow_sessions'] = store

    def _body() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _with_session(session_id: str, action, status: int = 200):
        try:
            result = store.apply(session_id, action)
        except KeyError:
            return jsonify({"error": f"Unknown session '{session_id}'"}), 404
        except (ValueError, IndexError, TypeError) as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(result), status

    # ---- Routes ----

    @app.route("/")
    def index():
        return jsonify({
            "name": "pauliflow",
            "version": __version__,
            "endpoints": sorted(
                str(rule) for rule in app.url_map.iter_rules()
                if str(rule).startswith("/api/")
            ),
        })

    @app.route("/api/gates")
    def api_gates():
        return jsonify(GATE_CATALOG)

    @app.route("/api/presets")
    def api_presets():
        """Return preset circuits."""
        return jsonify(PRESETS)

    @app.route("/api/sessions", methods=["POST"])
    def api_create_session():
        try:
            circuit = circuit_from_payload(_body())
        except (ValueError, TypeError) as e:
            return jsonify({"error": str(e)}), 400
        session_id = store.create(circuit)
        return _with_session(
            session_id, lambda sim: session_state(session_id, sim), status=201
        )

    @app.route("/api/sessions/<session_id>", methods=["GET"])
    def api_get_session(session_id):
        return _with_session(session_id, lambda sim: session_state(session_id, sim))

    @app.route("/api/sessions/<session_id>", methods=["DELETE"])
    def api_delete_session(session_id):
        if not store.delete(session_id):
            return jsonify({"error": f"Unknown session '{session_id}'"}), 404
        return jsonify({"deleted": session_id})

    @app.route("/api/sessions/<session_id>/inject", methods=["POST"])
    def api_inject(session_id):
        data = _body()
        if "qubit" not in data or "pauli" not in data:
            return jsonify({"error": "Expected 'qubit' and 'pauli'"}), 400
        qubit = data["qubit"]
        if isinstance(qubit, bool) or not isinstance(qubit, int):
            return jsonify({"error": f"qubit must be an integer, got {qubit!r}"}), 400

        def action(sim):
            sim.inject_error(qubit, data["pauli"])
            return session_state(session_id, sim)

        return _with_session(session_id, action)

    def _stepper(method_name: str):
        def action_for(session_id):
            def action(sim):
                moved = getattr(sim, method_name)()
                state = session_state(session_id, sim)
                state["moved"] = moved
                return state
            return _with_session(session_id, action)
        return action_for

    app.add_url_rule("/api/sessions/<session_id>/forward", "api_forward",
                     _stepper("step_forward"), methods=["POST"])
    app.add_url_rule("/api/sessions/<session_id>/backward", "api_backward",
                     _stepper("step_backward"), methods=["POST"])

    @app.route("/api/sessions/<session_id>/reset", methods=["POST"])
    def api_reset(session_id):
        def action(sim):
            sim.reset()
            return session_state(session_id, sim)
        return _with_session(session_id, action)

    @app.route("/api/sessions/<session_id>/run", methods=["POST"])
    def api_run(session_id):
        def action(sim):
            steps = sim.run()
            state = session_state(session_id, sim)
            state["steps"] = steps
            return state
        return _with_session(session_id, action)

    @app.route("/api/export", methods=["POST"])
    def api_export():
        data = _body()
        fmt = str(data.get("format", "json")).lower()
        exporters = {
            "json": export_json,
            "qasm": export_qasm,
            "latex": export_latex,
            "latex-simple": export_latex_simple,
        }
        if fmt not in exporters:
            return jsonify({"error": f"Unknown format '{fmt}'"}), 400
        try:
            circuit = circuit_from_payload(data)
        except (ValueError, TypeError) as e:
            return jsonify({"error": str(e)}), 400
        return jsonify({"format": fmt, "content": exporters[fmt](circuit)})

    return app


def launch(port: int = 8888, host: str = "127.0.0.1", debug: bool = False,
           open_browser: bool = True):
    """
    Launch the pauliflow dashboard API.

    Parameters
    ----------
    port : int
        Port to serve on (default 8888).
    host : str
        Host address (default localhost).
    debug : bool
        Enable Flask debug mode.
    open_browser : bool
        Automatically open browser.
    """
    app = create_app()

    url = f"http://{host}:{port}"
    print(f"""
╔══════════════════════════════════════════════════════╗
║          pauliflow ⚛ Error Propagation Lab           ║
╠══════════════════════════════════════════════════════╣
║                                                      ║
║   API: {url:<45s} ║
║                                                      ║
║   Create a session, inject a Pauli error and         ║
║   step it through your circuit.                      ║
║                                                      ║
║   Press Ctrl+C to stop the server.                   ║
╚══════════════════════════════════════════════════════╝
""")

    if open_browser:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()

    app.run(host=host, port=port, debug=debug)
