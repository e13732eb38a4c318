"""
Pure-Python OpenQASM 2.0 parser for Clifford circuits.

Parses the Clifford subset of OpenQASM 2.0 into pauliflow Circuit objects.
No external dependencies.

Supported features:
    - OPENQASM 2.0 header
    - include "qelib1.inc" (ignored, gates are built-in)
    - qreg, creg declarations (several qregs are laid out in order)
    - Clifford gates: id, x, y, z, h, s, sdg, cx (CX, cnot), cz, swap
    - Register broadcast: ``h q;`` applies h to every qubit of q
    - Custom gate definitions (gate ... { ... }) expanded inline
    - Single-line (//) and multi-line comments

Ignored statements (nothing to propagate through):
    measure, barrier, reset, if, opaque

Rejected:
    Parameterised gates (rx, u3, ...) and anything outside the Clifford set.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pauliflow.core.circuit import Circuit
from pauliflow.io.names import GATE_NAMES, gate_arity, gate_from_name

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

@dataclass
class Token:
    kind: str  # KEYWORD, IDENT, NUMBER, LPAREN, RPAREN, etc.
    value: str
    line: int

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, line={self.line})"


# Token patterns (order matters)
_TOKEN_PATTERNS = [
    ("COMMENT_ML", r"/\*.*?\*/"),
    ("COMMENT", r"//[^\n]*"),
    ("NUMBER", r"\d+(?:\.\d*)?(?:[eE][+-]?\d+)?"),
    ("ARROW", r"->"),
    ("SEMICOLON", r";"),
    ("COMMA", r","),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("LBRACKET", r"\["),
    ("RBRACKET", r"\]"),
    ("LBRACE", r"\{"),
    ("RBRACE", r"\}"),
    ("EQUALS", r"=="),
    ("OP", r"[+\-*/^]"),
    ("STRING", r'"[^"]*"'),
    ("IDENT", r"[a-zA-Z_][a-zA-Z0-9_]*"),
    ("NEWLINE", r"\n"),
    ("SKIP", r"[ \t\r]+"),
    ("MISMATCH", r"."),
]

_TOKEN_RE = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_PATTERNS),
    re.DOTALL,
)

_KEYWORDS = {
    "OPENQASM", "include", "qreg", "creg", "gate", "measure",
    "barrier", "if", "reset", "opaque",
}

_IGNORED = ("measure", "barrier", "reset", "if", "opaque")


class QasmParseError(ValueError):
    """Error during QASM parsing."""

    def __init__(self, message: str, line: int = 0) -> None:
        super().__init__(f"Line {line}: {message}" if line else message)
        self.line = line


def _tokenize(source: str) -> List[Token]:
    """Tokenize OpenQASM source into a list of tokens."""
    tokens = []
    line = 1

    for match in _TOKEN_RE.finditer(source):
        kind = match.lastgroup
        value = match.group()

        if kind == "NEWLINE":
            line += 1
            continue
        if kind in ("SKIP", "COMMENT", "COMMENT_ML"):
            line += value.count("\n")
            continue
        if kind == "MISMATCH":
            raise QasmParseError(f"Unexpected character {value!r}", line)

        if kind == "IDENT" and value in _KEYWORDS:
            kind = "KEYWORD"

        tokens.append(Token(kind, value, line))

    return tokens


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

# (register, index) where index None means the whole register
QubitRef = Tuple[str, Optional[int]]


@dataclass
class _GateDef:
    """User-defined gate from a 'gate' declaration."""
    name: str
    qubits: List[str]  # formal qubit names
    body: List[Token]  # tokens inside { }
    line: int


@dataclass
class _Instruction:
    name: str
    qubits: List[int]
    line: int


class QasmParser:
    """
    Pure-Python OpenQASM 2.0 parser for the Clifford gate set.

    Example
    -------
    >>> from pauliflow.qasm import QasmParser
    >>> qasm = '''
    ... OPENQASM 2.0;
    ... include "qelib1.inc";
    ... qreg q[2];
    ... h q[0];
    ... cx q[0],q[1];
    ... '''
    >>> circuit = QasmParser().parse(qasm)
    >>> circuit.depth
    2
    """

    def __init__(self) -> None:
        self._qregs: Dict[str, Tuple[int, int]] = {}  # name → (offset, size)
        self._num_qubits = 0
        self._gate_defs: Dict[str, _GateDef] = {}
        self._tokens: List[Token] = []
        self._pos = 0

    def parse(self, source: str) -> Circuit:
        """
        Parse OpenQASM 2.0 source and return a Circuit.

        Raises
        ------
        QasmParseError
            On a syntax error, an unsupported or parameterised gate, an
            unknown register, an index out of range, or a program that
            declares no qreg.
        """
        self._tokens = _tokenize(source)
        self._pos = 0
        self._qregs = {}
        self._num_qubits = 0
        self._gate_defs = {}

        self._parse_header()

        instructions: List[_Instruction] = []
        while self._pos < len(self._tokens):
            self._parse_statement(instructions)

        if not self._qregs:
            raise QasmParseError("No qreg declared")

        try:
            circuit = Circuit(self._num_qubits)
        except ValueError as e:
            raise QasmParseError(str(e)) from e

        for inst in instructions:
            try:
                circuit.add_gate(gate_from_name(inst.name, inst.qubits))
            except ValueError as e:
                raise QasmParseError(str(e), inst.line) from e

        return circuit

    # -- Header parsing -----------------------------------------------------

    def _parse_header(self) -> None:
        """Parse OPENQASM version and include statements."""
        if self._peek_keyword("OPENQASM"):
            self._advance()
            version = self._expect("NUMBER")
            if not version.startswith("2"):
                raise QasmParseError(f"Unsupported OpenQASM version {version}")
            self._expect("SEMICOLON")

        while self._peek_keyword("include"):
            self._advance()
            self._expect("STRING")
            self._expect("SEMICOLON")

    # -- Statement parsing --------------------------------------------------

    def _parse_statement(self, instructions: List[_Instruction]) -> None:
        tok = self._current()
        if tok is None:
            return

        if tok.kind == "KEYWORD":
            if tok.value == "qreg":
                self._parse_qreg()
            elif tok.value == "creg":
                self._parse_creg()
            elif tok.value == "gate":
                self._parse_gate_def()
            elif tok.value in _IGNORED:
                logger.debug("Line %d: ignoring '%s' statement", tok.line, tok.value)
                self._skip_to_semicolon()
            elif tok.value == "include":
                self._advance()
                self._expect("STRING")
                self._expect("SEMICOLON")
            else:
                raise QasmParseError(f"Unexpected keyword '{tok.value}'", tok.line)
        elif tok.kind == "IDENT":
            self._parse_gate_application(instructions)
        elif tok.kind == "SEMICOLON":
            self._advance()
        else:
            raise QasmParseError(f"Unexpected token: {tok}", tok.line)

    def _parse_register_decl(self) -> Tuple[str, int]:
        self._advance()  # qreg / creg
        name = self._expect("IDENT")
        self._expect("LBRACKET")
        size = self._expect_int()
        self._expect("RBRACKET")
        self._expect("SEMICOLON")
        return name, size

    def _parse_qreg(self) -> None:
        line = self._current().line
        name, size = self._parse_register_decl()
        if name in self._qregs:
            raise QasmParseError(f"Register '{name}' declared twice", line)
        self._qregs[name] = (self._num_qubits, size)
        self._num_qubits += size

    def _parse_creg(self) -> None:
        # Classical bits play no part in error propagation.
        self._parse_register_decl()

    def _parse_gate_def(self) -> None:
        """Parse: gate name(params) qubits { body }"""
        line = self._advance().line  # gate
        name = self._expect("IDENT")

        # Parameter names are accepted so that library files parse; calling
        # the gate with arguments is rejected later.
        if self._peek("LPAREN"):
            self._advance()
            while not self._peek("RPAREN"):
                self._expect("IDENT")
                if self._peek("COMMA"):
                    self._advance()
            self._advance()

        qubits = []
        while not self._peek("LBRACE"):
            qubits.append(self._expect("IDENT"))
            if self._peek("COMMA"):
                self._advance()

        self._expect("LBRACE")
        body: List[Token] = []
        while not self._peek("RBRACE"):
            tok = self._advance()
            if tok is None:
                raise QasmParseError("Unexpected end of file in gate definition", line)
            body.append(tok)
        self._advance()  # }

        self._gate_defs[name] = _GateDef(name=name, qubits=qubits, body=body, line=line)

    def _parse_gate_application(self, instructions: List[_Instruction]) -> None:
        """Parse: gate_name qubit_list;"""
        name_tok = self._advance()
        if self._peek("LPAREN"):
            raise QasmParseError(
                f"Parameterised gate '{name_tok.value}' is not a Clifford gate",
                name_tok.line,
            )

        refs: List[QubitRef] = []
        while not self._peek("SEMICOLON"):
            refs.append(self._parse_qubit_ref())
            if self._peek("COMMA"):
                self._advance()
        self._expect("SEMICOLON")

        for qubits in self._broadcast(refs, name_tok.line):
            self._emit(name_tok.value, qubits, name_tok.line, instructions)

    def _parse_qubit_ref(self) -> QubitRef:
        """Parse 'reg[index]' or 'reg'."""
        name = self._expect("IDENT")
        if self._peek("LBRACKET"):
            self._advance()
            idx = self._expect_int()
            self._expect("RBRACKET")
            return name, idx
        return name, None

    # -- Qubit resolution ---------------------------------------------------

    def _resolve(self, ref: QubitRef, line: int) -> List[int]:
        name, idx = ref
        if name not in self._qregs:
            raise QasmParseError(f"Unknown register '{name}'", line)
        offset, size = self._qregs[name]
        if idx is None:
            return list(range(offset, offset + size))
        if idx >= size:
            raise QasmParseError(
                f"Index {idx} out of range for register '{name}' of size {size}",
                line,
            )
        return [offset + idx]

    def _broadcast(self, refs: List[QubitRef], line: int) -> List[List[int]]:
        """Expand whole-register arguments into one operand list per qubit."""
        resolved = [self._resolve(ref, line) for ref in refs]
        sizes = {len(r) for r, (_, idx) in zip(resolved, refs) if idx is None}
        if not sizes:
            return [[r[0] for r in resolved]]
        if len(sizes) > 1:
            raise QasmParseError("Registers in a broadcast must have equal size", line)
        width = sizes.pop()
        return [
            [r[k] if idx is None else r[0]
             for r, (_, idx) in zip(resolved, refs)]
            for k in range(width)
        ]

    # -- Gate emission ------------------------------------------------------

    def _emit(
        self,
        name: str,
        qubits: List[int],
        line: int,
        instructions: List[_Instruction],
        depth: int = 0,
    ) -> None:
        if name in self._gate_defs and name.lower() not in GATE_NAMES:
            self._expand_gate_def(self._gate_defs[name], qubits, line, instructions, depth)
            return
        try:
            arity = gate_arity(name)
        except ValueError:
            raise QasmParseError(f"Unknown gate: '{name}'", line) from None
        if len(qubits) != arity:
            raise QasmParseError(
                f"Gate '{name}' takes {arity} qubit(s), got {len(qubits)}", line
            )
        instructions.append(_Instruction(name.lower(), qubits, line))

    def _expand_gate_def(
        self,
        gate_def: _GateDef,
        qubits: List[int],
        line: int,
        instructions: List[_Instruction],
        depth: int,
    ) -> None:
        """Expand a user-defined gate definition inline."""
        if depth > 32:
            raise QasmParseError(f"Gate '{gate_def.name}' expands recursively", line)
        if len(qubits) != len(gate_def.qubits):
            raise QasmParseError(
                f"Gate '{gate_def.name}' takes {len(gate_def.qubits)} qubit(s), "
                f"got {len(qubits)}",
                line,
            )
        qubit_map = dict(zip(gate_def.qubits, qubits))

        statement: List[Token] = []
        for tok in gate_def.body:
            if tok.kind != "SEMICOLON":
                statement.append(tok)
                continue
            if not statement:
                continue
            head, args = statement[0], statement[1:]
            statement = []
            if head.value in _IGNORED:
                continue
            if args and args[0].kind == "LPAREN":
                raise QasmParseError(
                    f"Parameterised gate '{head.value}' is not a Clifford gate",
                    head.line,
                )
            sub_qubits = []
            for arg in args:
                if arg.kind == "COMMA":
                    continue
                if arg.kind != "IDENT" or arg.value not in qubit_map:
                    raise QasmParseError(
                        f"Unknown qubit '{arg.value}' in gate '{gate_def.name}'",
                        arg.line,
                    )
                sub_qubits.append(qubit_map[arg.value])
            self._emit(head.value, sub_qubits, line, instructions, depth + 1)

    # -- Token helpers ------------------------------------------------------

    def _current(self) -> Optional[Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _advance(self) -> Optional[Token]:
        tok = self._current()
        self._pos += 1
        return tok

    def _peek(self, kind: str) -> bool:
        tok = self._current()
        return tok is not None and tok.kind == kind

    def _peek_keyword(self, value: str) -> bool:
        tok = self._current()
        return tok is not None and tok.kind == "KEYWORD" and tok.value == value

    def _expect(self, kind: str) -> str:
        tok = self._current()
        if tok is None:
            raise QasmParseError(f"Unexpected end of file, expected {kind}")
        if tok.kind != kind:
            raise QasmParseError(
                f"Expected {kind}, got {tok.kind} ('{tok.value}')", tok.line
            )
        self._advance()
        return tok.value

    def _expect_int(self) -> int:
        tok = self._current()
        value = self._expect("NUMBER")
        if not value.isdigit():
            raise QasmParseError(f"Expected an integer, got '{value}'", tok.line)
        return int(value)

    def _skip_to_semicolon(self) -> None:
        while self._pos < len(self._tokens):
            if self._tokens[self._pos].kind == "SEMICOLON":
                self._pos += 1
                return
            self._pos += 1


# ---------------------------------------------------------------------------
# Convenience function
# ---------------------------------------------------------------------------

def parse_qasm(source: str) -> Circuit:
    """
    Parse OpenQASM 2.0 source into a Circuit.

    Example
    -------
    >>> from pauliflow.qasm import parse_qasm
    >>> qc = parse_qasm('''
    ...     OPENQASM 2.0;
    ...     include "qelib1.inc";
    ...     qreg q[2];
    ...     h q[0];
    ...     cx q[0],q[1];
    ... ''')
    >>> print(qc)
    Circuit(num_qubits=2, depth=2)
    """
    return QasmParser().parse(source)
