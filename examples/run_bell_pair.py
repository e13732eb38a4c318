"""Example: follow an X error through a Bell-pair circuit."""
import sys
sys.path.insert(0, 'src')

from pauliflow import Circuit, Simulator, draw_circuit, show_timeline

print("=" * 50)
print("pauliflow: Bell Pair Example")
print("=" * 50)

circuit = Circuit(2).h(0).cx(0, 1)
print(draw_circuit(circuit))

sim = Simulator(circuit)
sim.inject_error(0, "X")
sim.run()

print("\nTimeline:")
print(show_timeline(sim))

print(f"\nFinal error: {sim.error_pattern}")
print("Expected: Z I (H turns X into Z, and Z on the control passes through CNOT)")
