"""Seeded random quantum states.

Amplitudes are drawn from a ``numpy.random.Generator`` so that results are
reproducible across torch versions and devices.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import torch

from ..backend.density_matrix import as_complex_matrix
from ..space.hilbert import HilbertSpace
from .quantum_state import QuantumState, SpaceLike, _as_space


def _resolve_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _checked_dimension(space: HilbertSpace) -> int:
    if space.total_dimension < 1:
        raise ValueError(f"Cannot draw random states on {space!r}")
    return space.total_dimension


def _ginibre(rows: int, cols: int, rng: np.random.Generator) -> np.ndarray:
    return rng.standard_normal((rows, cols)) + 1j * rng.standard_normal((rows, cols))


def random_statevector(
    space: SpaceLike,
    rng: Optional[np.random.Generator] = None,
) -> torch.Tensor:
    """
    Draw a Haar-random pure state vector.

    Args:
        space: Target Hilbert space (or its dimensions).
        rng: Source of randomness. A fresh unseeded generator if None.

    Returns:
        Complex column tensor of shape (total_dimension, 1) with unit norm.

    Raises:
        ValueError: If the space is the empty placeholder.
    """
    dim = _checked_dimension(_as_space(space))
    amplitudes = _ginibre(dim, 1, _resolve_rng(rng))
    amplitudes /= np.linalg.norm(amplitudes)
    return as_complex_matrix(amplitudes)


def random_density_matrix(
    space: SpaceLike,
    rank: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> torch.Tensor:
    """
    Draw a random density matrix from the induced (Ginibre) measure.

    ``G`` is a ``D x rank`` complex Gaussian matrix and the result is
    ``G G^dagger / tr(G G^dagger)``, exactly Hermitian and with its trace
    pinned to one.

    Args:
        space: Target Hilbert space (or its dimensions).
        rank: Rank of the result, between 1 and D. Defaults to D.
        rng: Source of randomness. A fresh unseeded generator if None.

    Returns:
        Complex tensor of shape (D, D).

    Raises:
        ValueError: If rank is outside [1, D] or the space is the placeholder.
    """
    dim = _checked_dimension(_as_space(space))
    if rank is None:
        rank = dim
    if not 1 <= rank <= dim:
        raise ValueError(f"rank must be in [1, {dim}], got {rank}")

    g = _ginibre(dim, rank, _resolve_rng(rng))
    rho = g @ g.conj().T
    rho = 0.5 * (rho + rho.conj().T)
    rho /= np.trace(rho).real
    rho = as_complex_matrix(rho)

    # Absorb the rounding residue of the trace into the largest diagonal entry
    diag = rho.diagonal().real
    k = int(torch.argmax(diag))
    residue = 1.0 - float(diag.sum())
    rho[k, k] = float(diag[k]) + residue
    return rho


def random_pure_state(
    space: SpaceLike,
    rng: Optional[np.random.Generator] = None,
) -> QuantumState:
    """Return a :class:`QuantumState` built from :func:`random_statevector`."""
    return QuantumState(random_statevector(space, rng=rng), space)


def random_mixed_state(
    space: SpaceLike,
    rank: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> QuantumState:
    """Return a :class:`QuantumState` built from :func:`random_density_matrix`."""
    return QuantumState.from_density_matrix(
        random_density_matrix(space, rank=rank, rng=rng), space
    )
