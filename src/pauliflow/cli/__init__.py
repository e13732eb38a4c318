"""
Command-line interface for pauliflow.

Usage:
    pauliflow run circuit.qasm --inject 0:X --steps 2
    pauliflow run circuit.json --inject 0:X --inject 2:Z --plot timeline.png
    pauliflow convert circuit.qasm --to latex -o circuit.tex
    pauliflow serve --port 8888
    pauliflow info
"""
import argparse
import logging
import os
import sys

logger = logging.getLogger(__name__)


def load_circuit(path):
    """Load a circuit from a ``.json`` or ``.qasm`` file."""
    from ..io import import_json
    from ..qasm import parse_qasm

    with open(path, encoding='utf-8') as f:
        text = f.read()
    ext = os.path.splitext(path)[1].lower()
    if ext == '.json':
        return import_json(text)
    if ext in ('.qasm', '.qasm2'):
        return parse_qasm(text)
    raise ValueError(f"Unknown circuit format '{ext}' (expected .json or .qasm)")


def parse_injection(text):
    """Parse ``Q:P`` (e.g. ``0:X``) into ``(qubit, pauli)``."""
    qubit, sep, pauli = text.partition(':')
    if not sep or not qubit.strip().isdigit():
        raise argparse.ArgumentTypeError(
            f"Invalid injection '{text}', expected QUBIT:PAULI such as 0:X"
        )
    pauli = pauli.strip().upper()
    if pauli not in ('I', 'X', 'Y', 'Z'):
        raise argparse.ArgumentTypeError(f"Invalid Pauli '{pauli}' in '{text}'")
    return int(qubit), pauli


def cmd_run(args):
    """Propagate injected errors through a circuit file."""
    from ..simulator import Simulator
    from ..visualization import draw_circuit, show_timeline

    circuit = load_circuit(args.file)
    sim = Simulator(circuit)
    for qubit, pauli in args.inject:
        sim.inject_error(qubit, pauli)

    if args.steps is None:
        sim.run()
    else:
        for _ in range(args.steps):
            if not sim.step_forward():
                break

    print(f"Circuit ({circuit.num_qubits} qubits, depth {circuit.depth}):")
    print(draw_circuit(circuit))
    print()
    print(show_timeline(sim))
    print()
    print(f"Error after t={sim.current_time}: {sim.error_pattern}")

    if args.plot:
        from ..visualization import plot_timeline
        path = plot_timeline(sim, args.plot)
        print(f"Saved: {path}")


def cmd_convert(args):
    """Convert a circuit file to another format."""
    from ..io import export_json, export_latex, export_latex_simple
    from ..qasm import export_qasm

    exporters = {
        'json': export_json,
        'qasm': export_qasm,
        'latex': export_latex,
        'latex-simple': export_latex_simple,
    }
    circuit = load_circuit(args.file)
    text = exporters[args.to](circuit)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text)
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(text if text.endswith('\n') else text + '\n')


def cmd_serve(args):
    """Start the dashboard API."""
    from ..dashboard import launch

    launch(port=args.port, host=args.host, debug=args.debug,
           open_browser=not args.no_browser)


def cmd_info(args):
    """Show pauliflow information."""
    from .. import __version__

    print(f"""
pauliflow v{__version__}
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Pauli error propagation through Clifford circuits.

Gates:
  I X Y Z H S Sdg   CNOT CZ SWAP   (up to 64 qubits)

Formats:
  JSON, OpenQASM 2.0 (import/export), LaTeX (export)

Usage:
  pauliflow run bell.qasm --inject 0:X
  pauliflow convert bell.qasm --to json
  pauliflow serve
""")


def build_parser():
    parser = argparse.ArgumentParser(
        prog='pauliflow',
        description='Track Pauli errors through Clifford circuits'
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Run command
    run_parser = subparsers.add_parser('run', help='Propagate errors through a circuit')
    run_parser.add_argument('file', help='Circuit file (.json or .qasm)')
    run_parser.add_argument('--inject', type=parse_injection, action='append',
                            default=[], metavar='Q:P',
                            help='Inject Pauli P on qubit Q before stepping (repeatable)')
    run_parser.add_argument('--steps', type=int, default=None,
                            help='Number of gates to apply (default: all)')
    run_parser.add_argument('--plot', metavar='PNG',
                            help='Save a timeline chart (requires matplotlib)')
    run_parser.set_defaults(func=cmd_run)

    # Convert command
    convert_parser = subparsers.add_parser('convert', help='Convert a circuit file')
    convert_parser.add_argument('file', help='Circuit file (.json or .qasm)')
    convert_parser.add_argument('--to', required=True,
                                choices=['json', 'qasm', 'latex', 'latex-simple'],
                                help='Output format')
    convert_parser.add_argument('-o', '--output', help='Output file (default: stdout)')
    convert_parser.set_defaults(func=cmd_convert)

    # Serve command
    serve_parser = subparsers.add_parser('serve', help='Start the dashboard API')
    serve_parser.add_argument('--host', default='127.0.0.1', help='Host address')
    serve_parser.add_argument('--port', type=int, default=8888, help='Port')
    serve_parser.add_argument('--debug', action='store_true', help='Flask debug mode')
    serve_parser.add_argument('--no-browser', action='store_true',
                              help='Do not open a browser')
    serve_parser.set_defaults(func=cmd_serve)

    # Info command
    info_parser = subparsers.add_parser('info', help='Show pauliflow info')
    info_parser.set_defaults(func=cmd_info)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (ValueError, IndexError, OSError, ImportError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
