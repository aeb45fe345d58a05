"""Numeric backend for density-matrix operations."""

from .density_matrix import (
    approx_equal,
    as_complex_matrix,
    dm_from_statevector,
    hermitian_eigh,
    kron,
    matrix_trace,
    measure_probs_dm,
    normalize_statevector,
)

__all__ = [
    "as_complex_matrix",
    "normalize_statevector",
    "dm_from_statevector",
    "kron",
    "matrix_trace",
    "hermitian_eigh",
    "approx_equal",
    "measure_probs_dm",
]
