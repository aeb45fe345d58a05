"""Marginals of entangled and product two-party states.

Builds a Bell state and a product state on two qubits, traces out each
subsystem in turn and reports the purity of what is left. The Bell state has
maximally mixed marginals while the product state factors back into its
parts.
"""

from __future__ import annotations

import math

import numpy as np
import torch

import qdensity as qd


def main() -> None:
    """Print marginals of a Bell state, a product state and a random state."""
    qubit = qd.HilbertSpace(2)
    pair = qd.HilbertSpace.tensor(qubit, qubit)

    # (|00> + |11>) / sqrt(2)
    bell_ket = (pair.basis_vector([0, 0]) + pair.basis_vector([1, 1])) / math.sqrt(2.0)
    bell = qd.QuantumState(bell_ket, pair)
    print(f"Bell state: {bell}")
    for index in range(pair.rank):
        marginal = bell.partial_trace(index)
        print(f"  trace out {index}: purity {marginal.purity():.3f}")

    zero = qd.QuantumState(torch.tensor([[1.0], [0.0]]), qubit)
    plus = qd.QuantumState(torch.tensor([[1.0], [1.0]]), qubit)
    product = qd.QuantumState.tensor(zero, plus)
    print(f"Product state: {product}")
    print(f"  trace out 1 gives |0><0|: {product.partial_trace(1) == zero}")
    print(f"  trace out 0 gives |+><+|: {product.partial_trace(0) == plus}")

    rng = np.random.default_rng(0)
    qutrit_qubit = qd.HilbertSpace([3, 2])
    state = qd.random_pure_state(qutrit_qubit, rng=rng)
    qutrit = state.partial_trace(1)
    print(f"Random pure state on {qutrit_qubit}: qutrit marginal spectrum")
    print("  " + ", ".join(f"{value:.4f}" for value in qutrit.eigenvalues.tolist()))


if __name__ == "__main__":
    main()
