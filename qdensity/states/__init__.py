"""Quantum states and random state generators."""

from .quantum_state import QuantumState
from .random import (
    random_density_matrix,
    random_mixed_state,
    random_pure_state,
    random_statevector,
)

__all__ = [
    "QuantumState",
    "random_statevector",
    "random_density_matrix",
    "random_pure_state",
    "random_mixed_state",
]
