"""Density-operator representation of quantum states on composite spaces."""

from __future__ import annotations

from typing import Any, Iterable, Sequence, Tuple, Union

import torch

from ..backend.density_matrix import (
    approx_equal,
    as_complex_matrix,
    dm_from_statevector,
    hermitian_eigh,
    kron,
    matrix_trace,
    measure_probs_dm,
    normalize_statevector,
)
from ..diagnostics.core import (
    DEFAULT_ATOL,
    assert_density,
    assert_matches_space,
    assert_self_adjoint,
    assert_square,
)
from ..diagnostics.debug_mode import is_debug_enabled
from ..logging import get_logger
from ..space.hilbert import HilbertSpace

logger = get_logger(__name__)

SpaceLike = Union[HilbertSpace, int, Sequence[int]]


def _as_space(space: SpaceLike) -> HilbertSpace:
    if isinstance(space, HilbertSpace):
        return space.copy()
    return HilbertSpace(space)


def _validated_spectrum(
    rho: torch.Tensor, space: HilbertSpace
) -> Tuple[torch.Tensor, torch.Tensor]:
    """Run every density-matrix check on ``rho`` and return its spectrum."""
    assert_square(rho)
    if rho.numel() == 0:
        raise ValueError("Density matrix cannot be empty.")
    assert_matches_space(rho, space)
    assert_self_adjoint(rho, atol=DEFAULT_ATOL)

    eigenvalues, eigenvectors = hermitian_eigh(rho)
    assert_density(rho, eigenvalues, atol=DEFAULT_ATOL)

    if is_debug_enabled():
        logger.debug(
            "Validated density matrix on %r with eigenvalues %s",
            space,
            eigenvalues.tolist(),
        )
    return eigenvalues, eigenvectors


class QuantumState:
    """
    A quantum state given by its density matrix on a composite Hilbert space.

    The density matrix ``rho`` is Hermitian, positive semidefinite and of unit
    trace, all within :data:`~qdensity.diagnostics.DEFAULT_ATOL`. Its spectrum
    is computed on every assignment and cached.

    Args:
        matrix: Either a state vector |psi> (1-D, or a single column), which
            is normalized and turned into |psi><psi|, or a square density
            matrix. Tensors, numpy arrays and nested sequences are accepted;
            the data is always copied.
        space: The Hilbert space the state lives on, or anything
            :class:`HilbertSpace` accepts as dimensions.

    Raises:
        ValueError: If the matrix is not square, not self-adjoint, has a
            negative eigenvalue, does not have unit trace, does not match the
            space, or is a zero state vector.
        RuntimeError: If the Hermitian eigensolver fails.

    Example:
        >>> plus = QuantumState([[1.0], [1.0]], HilbertSpace(2))
        >>> plus.is_pure()
        True
        >>> QuantumState.tensor(plus, plus).space
        HilbertSpace([2, 2])
    """

    def __init__(self, matrix: Any, space: SpaceLike) -> None:
        space = _as_space(space)
        mat = as_complex_matrix(matrix)

        if mat.dim() == 1 or mat.shape[1] == 1:
            mat = dm_from_statevector(normalize_statevector(mat))

        eigenvalues, eigenvectors = _validated_spectrum(mat, space)
        self._space = space
        self._density = mat
        self._eigenvalues = eigenvalues
        self._eigenvectors = eigenvectors

    @classmethod
    def from_density_matrix(cls, matrix: Any, space: SpaceLike) -> "QuantumState":
        """
        Build a state from a square density matrix.

        Unlike the constructor, a 1x1 input is taken as a matrix rather than
        as a state vector, so it must already equal ``[[1]]``.
        """
        space = _as_space(space)
        mat = as_complex_matrix(matrix)
        eigenvalues, eigenvectors = _validated_spectrum(mat, space)

        state = cls.__new__(cls)
        state._space = space
        state._density = mat
        state._eigenvalues = eigenvalues
        state._eigenvectors = eigenvectors
        return state

    def set_matrix(self, matrix: Any) -> None:
        """
        Replace the density matrix, keeping the current space.

        The new matrix is fully validated before anything is replaced, so a
        failing call leaves the state unchanged.

        Raises:
            ValueError: As for construction from a square matrix.
            RuntimeError: If the Hermitian eigensolver fails.
        """
        mat = as_complex_matrix(matrix)
        eigenvalues, eigenvectors = _validated_spectrum(mat, self._space)
        self._density = mat
        self._eigenvalues = eigenvalues
        self._eigenvectors = eigenvectors

    @staticmethod
    def tensor(first: "QuantumState", second: "QuantumState") -> "QuantumState":
        """
        Return the product state ``first ⊗ second``.

        The factors of ``first`` become the leading (most significant)
        subsystems of the result.
        """
        space = HilbertSpace.tensor(first._space, second._space)
        logger.debug("Tensoring %r with %r", first._space, second._space)
        return QuantumState.from_density_matrix(
            kron(first._density, second._density), space
        )

    def partial_trace(self, index: int) -> "QuantumState":
        """
        Trace out subsystem ``index`` and return the reduced state.

        For every pair of reduced multi-indices ``(i', j')`` and every value
        ``t`` of the traced factor, the entry
        ``rho[insert(i', index, t), insert(j', index, t)]`` is added to
        ``rho'[i', j']``. The reduced space is the current one with factor
        ``index`` removed; tracing out the last remaining factor leaves the
        trivial one-dimensional space.

        Raises:
            ValueError: If index is negative or not smaller than the rank.
        """
        rank = self._space.rank
        if index < 0:
            raise ValueError(
                f"Cannot take a partial trace over negative subsystem {index}"
            )
        if index >= rank:
            raise ValueError(
                f"Subsystem {index} does not exist in a state of rank {rank}"
            )

        traced_dim = self._space.dimension(index)
        reduced_space = self._space.without(index)
        logger.debug(
            "Tracing out subsystem %d (dimension %d) of %r",
            index,
            traced_dim,
            self._space,
        )

        reduced_labels = list(reduced_space.multi_indices())
        reduced = torch.zeros(
            (reduced_space.total_dimension, reduced_space.total_dimension),
            dtype=self._density.dtype,
            device=self._density.device,
        )
        for t in range(traced_dim):
            # Row/column of rho for each reduced basis state with factor index = t
            full = torch.tensor(
                [
                    self._space.multi_index_to_index(label[:index] + (t,) + label[index:])
                    for label in reduced_labels
                ],
                dtype=torch.long,
                device=self._density.device,
            )
            reduced += self._density.index_select(0, full).index_select(1, full)

        if is_debug_enabled():
            drift = abs(matrix_trace(reduced) - matrix_trace(self._density))
            if drift > DEFAULT_ATOL:
                logger.warning(
                    "Partial trace over subsystem %d changed the trace by %.3e",
                    index,
                    drift,
                )

        return QuantumState.from_density_matrix(reduced, reduced_space)

    def trace_out(self, indices: Iterable[int]) -> "QuantumState":
        """
        Trace out several subsystems at once.

        Indices refer to the subsystems of this state and must be distinct.
        They are traced out from the highest down, so earlier removals do not
        shift the positions of the remaining ones.

        Raises:
            ValueError: If an index is out of range or repeated.
        """
        indices = list(indices)
        if len(set(indices)) != len(indices):
            raise ValueError(f"Subsystem indices must be distinct, got {indices}")
        for index in indices:
            if not 0 <= index < self._space.rank:
                raise ValueError(
                    f"Subsystem {index} does not exist in a state of rank {self._space.rank}"
                )

        state = self
        for index in sorted(indices, reverse=True):
            state = state.partial_trace(index)
        return state if indices else self.copy()

    def purity(self) -> float:
        """Return ``tr(rho^2)``."""
        return matrix_trace(self._density @ self._density).real

    def is_pure(self) -> bool:
        """Return True if ``|tr(rho^2) - 1| <= DEFAULT_ATOL``."""
        square_trace = matrix_trace(self._density @ self._density)
        return abs(square_trace - 1.0) <= DEFAULT_ATOL

    def probabilities(self) -> torch.Tensor:
        """Return the computational-basis outcome probabilities (diagonal of rho)."""
        return measure_probs_dm(self._density)

    @property
    def space(self) -> HilbertSpace:
        """A copy of the state's Hilbert space."""
        return self._space.copy()

    @property
    def density_matrix(self) -> torch.Tensor:
        """A copy of the density matrix."""
        return self._density.clone()

    @property
    def eigenvalues(self) -> torch.Tensor:
        """Eigenvalues of the density matrix, ascending."""
        return self._eigenvalues.clone()

    @property
    def eigenvectors(self) -> torch.Tensor:
        """Eigenvectors of the density matrix as columns, in eigenvalue order."""
        return self._eigenvectors.clone()

    def copy(self) -> "QuantumState":
        """Return an independent copy of this state."""
        state = QuantumState.__new__(QuantumState)
        state._space = self._space.copy()
        state._density = self._density.clone()
        state._eigenvalues = self._eigenvalues.clone()
        state._eigenvectors = self._eigenvectors.clone()
        return state

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuantumState):
            return NotImplemented
        return self._space == other._space and approx_equal(
            self._density, other._density, atol=DEFAULT_ATOL
        )

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"QuantumState(space={self._space!r}, purity={self.purity():.6f})"
