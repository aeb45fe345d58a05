"""Tests for the random state generators."""

import numpy as np
import pytest
import torch

from qdensity import (
    HilbertSpace,
    QuantumState,
    random_density_matrix,
    random_mixed_state,
    random_pure_state,
    random_statevector,
)
from qdensity.diagnostics import is_self_adjoint


class TestRandomStatevector:
    """Tests for random_statevector."""

    def test_shape_and_norm(self, rng):
        """Test a unit-norm column of the right length."""
        psi = random_statevector(HilbertSpace([2, 3]), rng=rng)
        assert psi.shape == (6, 1)
        assert psi.dtype == torch.complex128
        assert float(torch.linalg.vector_norm(psi)) == pytest.approx(1.0)

    def test_reproducible_with_seed(self):
        """Test the same seed gives the same vector."""
        a = random_statevector([2, 2], rng=np.random.default_rng(7))
        b = random_statevector([2, 2], rng=np.random.default_rng(7))
        assert torch.equal(a, b)

    def test_placeholder_space(self):
        """Test the placeholder space has no states."""
        with pytest.raises(ValueError, match="Cannot draw"):
            random_statevector(HilbertSpace())


class TestRandomDensityMatrix:
    """Tests for random_density_matrix."""

    def test_full_rank_by_default(self, rng):
        """Test the default draw is Hermitian, unit trace and full rank."""
        rho = random_density_matrix(HilbertSpace([2, 2]), rng=rng)
        assert rho.shape == (4, 4)
        assert is_self_adjoint(rho)
        assert abs(complex(rho.diagonal().sum()) - 1.0) <= 1e-15
        assert float(torch.linalg.eigvalsh(rho).min()) > 0.0

    @pytest.mark.parametrize("rank", [1, 2, 3])
    def test_requested_rank(self, rank, rng):
        """Test the rank argument controls the number of nonzero eigenvalues."""
        rho = random_density_matrix(HilbertSpace(4), rank=rank, rng=rng)
        eigenvalues = torch.linalg.eigvalsh(rho)
        assert int((eigenvalues > 1e-10).sum()) == rank

    @pytest.mark.parametrize("rank", [0, 5, -1])
    def test_invalid_rank(self, rank):
        """Test that ranks outside [1, D] are rejected."""
        with pytest.raises(ValueError, match="rank must be"):
            random_density_matrix(HilbertSpace(4), rank=rank)


class TestRandomStates:
    """Tests for random_pure_state and random_mixed_state."""

    def test_pure_state(self, rng):
        """Test random_pure_state builds a valid pure state."""
        state = random_pure_state(HilbertSpace(2), rng=rng)
        assert isinstance(state, QuantumState)
        assert state.is_pure()

    def test_mixed_state(self, rng):
        """Test random_mixed_state builds a valid mixed state on the given space."""
        state = random_mixed_state([3, 2], rng=rng)
        assert state.space == HilbertSpace([3, 2])
        assert state.purity() < 1.0

    def test_mixed_state_of_rank_one_is_pure(self, rng):
        """Test a rank-one draw has purity one."""
        state = random_mixed_state(HilbertSpace(2), rank=1, rng=rng)
        assert state.purity() == pytest.approx(1.0)
