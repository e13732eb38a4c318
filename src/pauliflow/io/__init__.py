"""Circuit file formats: JSON, LaTeX and gate-name dispatch."""

from pauliflow.io.json_format import (
    CircuitFormatError,
    circuit_from_dict,
    circuit_to_dict,
    export_json,
    import_json,
)
from pauliflow.io.latex import export_latex, export_latex_simple
from pauliflow.io.names import GATE_NAMES, gate_from_name, gate_name

__all__ = [
    "CircuitFormatError",
    "circuit_from_dict",
    "circuit_to_dict",
    "export_json",
    "import_json",
    "export_latex",
    "export_latex_simple",
    "GATE_NAMES",
    "gate_from_name",
    "gate_name",
]
