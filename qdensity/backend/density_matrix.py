"""Dense linear-algebra backend for density matrices.

Thin wrappers over PyTorch providing exactly what the state layer needs:
coercion of user input into complex matrices, state-vector normalization and
outer products, the Kronecker product, traces, a Hermitian eigensolver with
an explicit failure mode, and elementwise approximate comparison.

Everything operates on single (unbatched) matrices. Storage precision and
placement follow :func:`qdensity.core.device.default_device`.
"""

from __future__ import annotations

from typing import Any, Tuple

import torch

from ..core.device import Device, default_device, device as device_factory
from ..diagnostics.core import DEFAULT_ATOL, state_norm
from ..logging import get_logger

logger = get_logger(__name__)


def _resolve_device(device: Device | str | None) -> Device:
    if device is None:
        return default_device()
    if isinstance(device, Device):
        return device
    if isinstance(device, str):
        return device_factory(device)
    raise TypeError(f"device must be Device, str, or None, got {type(device)}")


def as_complex_matrix(
    data: Any,
    device: Device | str | None = None,
) -> torch.Tensor:
    """
    Convert ``data`` into a fresh complex tensor.

    Accepts torch tensors, numpy arrays and nested sequences of numbers. The
    result never shares storage with ``data``.

    Args:
        data: Matrix-like input with one or two dimensions.
        device: Device specification. Defaults to :func:`default_device`.

    Returns:
        A complex tensor of the device's complex dtype with the same shape as
        the input.

    Raises:
        ValueError: If the input is not one- or two-dimensional.
    """
    qdevice = _resolve_device(device)
    target = {"dtype": qdevice.complex_dtype, "device": qdevice.as_torch_device()}
    if isinstance(data, torch.Tensor):
        tensor = data.detach().to(**target)
    else:
        # Python complex literals would otherwise land in complex64
        tensor = torch.as_tensor(data, **target)
    tensor = tensor.clone()

    if tensor.dim() not in (1, 2):
        raise ValueError(
            f"Expected a vector or a matrix, got a tensor of shape {tuple(tensor.shape)}"
        )
    return tensor


def normalize_statevector(state: torch.Tensor) -> torch.Tensor:
    """
    Scale a state vector to unit Euclidean norm.

    Args:
        state: Complex tensor of shape (dim,) or (dim, 1).

    Returns:
        A new tensor of the same shape with norm one.

    Raises:
        ValueError: If the vector has zero or non-finite norm.
    """
    norm = state_norm(state.reshape(-1))
    if not torch.isfinite(norm) or float(norm) == 0.0:
        raise ValueError(
            f"Cannot normalize a state vector with norm {float(norm)}."
        )
    return state / norm


def dm_from_statevector(state: torch.Tensor) -> torch.Tensor:
    """
    Convert a pure state vector |psi> into the density matrix |psi><psi|.

    The bra is the conjugate transpose of the ket, so complex amplitudes give a
    Hermitian result. No normalization is applied here.

    Args:
        state: Complex tensor of shape (dim,) or (dim, 1).

    Returns:
        A complex tensor of shape (dim, dim).

    Raises:
        ValueError: If state is not complex or not a vector.
    """
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")
    if state.dim() == 2 and state.shape[1] != 1:
        raise ValueError(
            f"state must be a vector or a single column, got shape {tuple(state.shape)}"
        )

    ket = state.reshape(-1)
    return torch.outer(ket, ket.conj())


def kron(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """
    Kronecker product of two matrices.

    Block (i, j) of the result, of size rows(b) x cols(b), equals a[i, j] * b,
    so ``a`` occupies the high-order part of every row and column index.

    Args:
        a: Matrix of shape (m, n).
        b: Matrix of shape (p, q).

    Returns:
        Matrix of shape (m*p, n*q).
    """
    if a.dim() != 2 or b.dim() != 2:
        raise ValueError(
            f"kron expects two matrices, got shapes {tuple(a.shape)} and {tuple(b.shape)}"
        )
    return torch.kron(a, b)


def matrix_trace(mat: torch.Tensor) -> complex:
    """Return the trace of a square matrix as a Python complex."""
    return complex(mat.diagonal().sum())


def hermitian_eigh(mat: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Diagonalize a Hermitian matrix.

    Only the lower triangle of ``mat`` is read, so Hermiticity must be checked
    by the caller beforehand.

    Args:
        mat: Hermitian complex matrix of shape (n, n).

    Returns:
        Tuple ``(eigenvalues, eigenvectors)``: real eigenvalues in ascending
        order and a unitary matrix whose columns are the eigenvectors.

    Raises:
        RuntimeError: If the eigensolver does not converge or produces
            non-finite values.
    """
    try:
        eigenvalues, eigenvectors = torch.linalg.eigh(mat)
    except torch.linalg.LinAlgError as exc:
        logger.debug("Eigensolver failed on matrix of shape %s", tuple(mat.shape))
        raise RuntimeError(f"Hermitian eigensolver failed: {exc}") from exc

    if not (
        torch.isfinite(eigenvalues).all() and torch.isfinite(eigenvectors).all()
    ):
        raise RuntimeError("Hermitian eigensolver returned non-finite values.")

    return eigenvalues, eigenvectors


def approx_equal(
    a: torch.Tensor,
    b: torch.Tensor,
    atol: float = DEFAULT_ATOL,
) -> bool:
    """
    Elementwise approximate equality: same shape and ``|a - b| <= atol``.

    Args:
        a: First tensor.
        b: Second tensor.
        atol: Absolute tolerance per element.

    Returns:
        True if the tensors agree within the tolerance.
    """
    if a.shape != b.shape:
        return False
    return bool(torch.allclose(a, b.to(a.dtype), rtol=0.0, atol=atol))


def measure_probs_dm(rho: torch.Tensor) -> torch.Tensor:
    """
    Return probabilities of computational basis outcomes from a density matrix.

    The probability of basis state |i> is the diagonal element rho[i, i].

    Args:
        rho: Density matrix of shape (dim, dim).

    Returns:
        A real tensor of shape (dim,).

    Raises:
        ValueError: If rho is not square.
    """
    if rho.dim() != 2 or rho.shape[0] != rho.shape[1]:
        raise ValueError(f"rho must be a square matrix, got shape {tuple(rho.shape)}")

    return rho.diagonal().real.clone()
