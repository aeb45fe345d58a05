"""Validation predicates shared by spaces and states.

Every predicate has a raising ``assert_*`` counterpart. The predicates never
raise on malformed input; they simply return False.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import torch

from ..logging import get_logger

if TYPE_CHECKING:
    from ..space.hilbert import HilbertSpace

logger = get_logger(__name__)

# Numerical slack used by every approximate comparison in the package.
DEFAULT_ATOL = 1e-15


def state_norm(state: torch.Tensor) -> torch.Tensor:
    """
    Compute the Euclidean norm of a state vector.

    Parameters
    ----------
    state:
        Complex tensor with shape (..., dim). A column vector of shape
        (dim, 1) should be flattened first.

    Returns
    -------
    torch.Tensor
        Real tensor with shape (...) giving the norm for each batch element.

    Raises
    ------
    ValueError
        If state has fewer than 1 dimension.
    """
    if state.dim() < 1:
        raise ValueError("state_norm expects a tensor with at least 1 dimension.")

    norm_sq = (state.conj() * state).sum(dim=-1).real
    return torch.sqrt(norm_sq)


def is_square(mat: torch.Tensor) -> bool:
    """Return True if ``mat`` is a 2-D tensor with as many rows as columns."""
    return mat.dim() == 2 and mat.shape[0] == mat.shape[1]


def is_self_adjoint(mat: torch.Tensor, atol: float = DEFAULT_ATOL) -> bool:
    """
    Check whether a square matrix equals its conjugate transpose.

    Parameters
    ----------
    mat:
        Complex tensor with shape (n, n).
    atol:
        Largest allowed elementwise deviation ``|M - M^dagger|``.

    Returns
    -------
    bool
        True if mat is Hermitian within the tolerance, False otherwise
        (including for non-square or non-finite input).
    """
    if not is_square(mat):
        return False
    if mat.numel() == 0:
        return True

    diff = mat - mat.conj().transpose(-2, -1)
    max_dev = diff.abs().max()
    if not torch.isfinite(max_dev):
        return False

    return bool(max_dev <= atol)


def is_density(
    rho: torch.Tensor,
    eigenvalues: torch.Tensor,
    atol: float = DEFAULT_ATOL,
) -> bool:
    """
    Check the spectral and trace conditions of a density matrix.

    Hermiticity is a precondition here: ``eigenvalues`` must already be the
    spectrum of ``rho`` as returned by a Hermitian eigensolver.

    Parameters
    ----------
    rho:
        Square complex matrix.
    eigenvalues:
        Real eigenvalues of ``rho``.
    atol:
        Eigenvalues down to ``-atol`` count as zero, and the trace may differ
        from one by at most ``atol``.

    Returns
    -------
    bool
        True if every eigenvalue is >= -atol and |tr(rho) - 1| <= atol.
    """
    if not is_square(rho):
        return False
    if eigenvalues.numel() and bool((eigenvalues < -atol).any()):
        return False

    trace = rho.diagonal().sum()
    return bool(torch.abs(trace - 1.0) <= atol)


def matches_space(mat: torch.Tensor, space: "HilbertSpace") -> bool:
    """Return True if the row count of ``mat`` equals the space's total dimension."""
    return mat.dim() >= 1 and mat.shape[0] == space.total_dimension


def assert_square(mat: torch.Tensor) -> None:
    """
    Raise unless ``mat`` is square.

    Raises
    ------
    ValueError
        If mat is not a 2-D square tensor.
    """
    if not is_square(mat):
        logger.debug("Rejected matrix of shape %s: not square", tuple(mat.shape))
        raise ValueError(
            f"Matrix must be square, got shape {tuple(mat.shape)}."
        )


def assert_self_adjoint(mat: torch.Tensor, atol: float = DEFAULT_ATOL) -> None:
    """
    Raise unless ``mat`` is Hermitian within ``atol``.

    Raises
    ------
    ValueError
        If the matrix is not self-adjoint within the tolerance.
    """
    if not is_self_adjoint(mat, atol=atol):
        logger.debug("Rejected matrix of shape %s: not self-adjoint", tuple(mat.shape))
        raise ValueError(
            f"Matrix is not self-adjoint within tolerance {atol}."
        )


def assert_density(
    rho: torch.Tensor,
    eigenvalues: torch.Tensor,
    atol: float = DEFAULT_ATOL,
) -> None:
    """
    Raise unless ``rho`` has a non-negative spectrum and unit trace.

    Raises
    ------
    ValueError
        Naming the first violated condition: a negative eigenvalue or a trace
        different from one.
    """
    if eigenvalues.numel():
        smallest = float(eigenvalues.min())
        if smallest < -atol:
            logger.debug("Rejected density matrix: eigenvalue %.3e", smallest)
            raise ValueError(
                "Matrix is not a density matrix: it has a negative "
                f"eigenvalue {smallest:.3e}."
            )

    trace = complex(rho.diagonal().sum())
    if abs(trace - 1.0) > atol:
        logger.debug("Rejected density matrix: trace %s", trace)
        raise ValueError(
            f"Density matrix must have unit trace within {atol}, got {trace}."
        )


def assert_matches_space(mat: torch.Tensor, space: "HilbertSpace") -> None:
    """
    Raise unless the size of ``mat`` agrees with ``space``.

    Raises
    ------
    ValueError
        If mat has a row count different from space.total_dimension.
    """
    if not matches_space(mat, space):
        logger.debug(
            "Rejected matrix of shape %s for space %r", tuple(mat.shape), space
        )
        raise ValueError(
            f"Matrix of shape {tuple(mat.shape)} does not match the total "
            f"dimension {space.total_dimension} of {space!r}."
        )
