"""OpenQASM 2.0 import and export for pauliflow."""

from pauliflow.qasm.parser import parse_qasm, QasmParser, QasmParseError
from pauliflow.qasm.exporter import export_qasm

__all__ = ["parse_qasm", "QasmParser", "QasmParseError", "export_qasm"]
