"""Composite Hilbert spaces and their basis index algebra."""

from __future__ import annotations

import numbers
from typing import Iterable, Optional, Sequence, Tuple, Union

import torch

from ..core.device import default_device


def _checked_dimension(value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"Dimensions must be integers, got {value!r}")
    if value < 1:
        raise ValueError(f"Dimension cannot be zero or negative, got {value}")
    return int(value)


def _product(dims: Iterable[int]) -> int:
    total = 1
    for d in dims:
        total *= d
    return total


class HilbertSpace:
    """
    A finite-dimensional Hilbert space with a tensor-product factorization.

    The space is described by an ordered list of factor dimensions
    ``d_0, d_1, ..., d_{r-1}``. A flat basis index ``idx`` in
    ``[0, total_dimension)`` corresponds to the multi-index ``(v_0, ..., v_{r-1})``
    in big-endian mixed radix: ``d_0`` is the most significant factor and
    ``d_{r-1}`` the least significant one, so that

        idx = v_0 * (d_1 * ... * d_{r-1}) + ... + v_{r-2} * d_{r-1} + v_{r-1}.

    This matches the Kronecker product layout: in ``A ⊗ B`` the factors of
    ``A`` come first.

    Args:
        dimensions: ``None`` for the empty placeholder space (rank 0, total
            dimension 0), a single positive int, or a sequence of positive
            ints. An empty sequence gives the trivial space of rank 0 and
            total dimension 1.

    Raises:
        ValueError: If any dimension is zero or negative.
        TypeError: If any dimension is not an integer.

    Example:
        >>> space = HilbertSpace([2, 3])
        >>> space.total_dimension
        6
        >>> space.index_to_multi_index(4)
        (1, 1)
        >>> space.multi_index_to_index((1, 1))
        4
    """

    def __init__(
        self, dimensions: Optional[Union[int, Sequence[int]]] = None
    ) -> None:
        if dimensions is None:
            # Placeholder: no matrix can ever match a zero total dimension
            self._dimensions: list[int] = []
            self._total = 0
            return

        if isinstance(dimensions, numbers.Integral) and not isinstance(dimensions, bool):
            dims = [_checked_dimension(dimensions)]
        else:
            dims = [_checked_dimension(d) for d in dimensions]

        self._dimensions = dims
        self._total = _product(dims)

    @staticmethod
    def tensor(first: "HilbertSpace", second: "HilbertSpace") -> "HilbertSpace":
        """Return the space ``first ⊗ second`` without modifying either operand."""
        space = first.copy()
        space.tensor_with(second)
        return space

    def tensor_with(self, other: "HilbertSpace") -> "HilbertSpace":
        """
        Append the factors of ``other`` on the right, in place.

        Tensoring onto the placeholder space yields ``other``'s factors with
        their proper total dimension.

        Returns:
            ``self``, to allow chaining.
        """
        self._dimensions.extend(other._dimensions)
        if self._dimensions:
            self._total = _product(self._dimensions)
        else:
            self._total *= other._total
        return self

    def copy(self) -> "HilbertSpace":
        """Return an independent copy of this space."""
        clone = HilbertSpace.__new__(HilbertSpace)
        clone._dimensions = list(self._dimensions)
        clone._total = self._total
        return clone

    @property
    def rank(self) -> int:
        """Number of tensor factors."""
        return len(self._dimensions)

    @property
    def dimensions(self) -> Tuple[int, ...]:
        """Factor dimensions, most significant first."""
        return tuple(self._dimensions)

    @property
    def total_dimension(self) -> int:
        """Product of the factor dimensions (0 for the placeholder space)."""
        return self._total

    def dimension(self, index: int) -> int:
        """
        Return the dimension of factor ``index``.

        Raises:
            IndexError: If index is negative or not smaller than the rank.
        """
        if index < 0:
            raise IndexError(f"Factor index cannot be negative, got {index}")
        if index >= self.rank:
            raise IndexError(
                f"Factor index {index} out of range for a space of rank {self.rank}"
            )
        return self._dimensions[index]

    def without(self, index: int) -> "HilbertSpace":
        """
        Return a copy of this space with factor ``index`` removed.

        Raises:
            IndexError: If index is out of range.
        """
        self.dimension(index)
        return HilbertSpace(self._dimensions[:index] + self._dimensions[index + 1:])

    def index_to_multi_index(self, index: int) -> Tuple[int, ...]:
        """
        Decompose a flat basis index into one index per factor.

        Digits are peeled off least significant first: ``v_{r-1} = idx mod
        d_{r-1}``, then ``idx //= d_{r-1}``, continuing down to ``v_0``.

        Raises:
            ValueError: If index is outside ``[0, total_dimension)``.
        """
        if not 0 <= index < self._total:
            raise ValueError(
                f"Basis index {index} out of range [0, {self._total})"
            )

        digits = [0] * self.rank
        for i in range(self.rank - 1, -1, -1):
            index, digits[i] = divmod(index, self._dimensions[i])
        return tuple(digits)

    def multi_index_to_index(self, multi_index: Sequence[int]) -> int:
        """
        Combine one index per factor into a flat basis index.

        Components are not range-checked; a component outside
        ``[0, d_i)`` yields an index outside the space.

        Raises:
            ValueError: If the multi-index length differs from the rank.
        """
        if len(multi_index) != self.rank:
            raise ValueError(
                f"Multi-index length {len(multi_index)} must equal the space rank {self.rank}"
            )

        index = 0
        multiplier = 1
        for i in range(self.rank - 1, -1, -1):
            index += int(multi_index[i]) * multiplier
            multiplier *= self._dimensions[i]
        return index

    def basis_vector(self, multi_index: Sequence[int]) -> torch.Tensor:
        """
        Return the computational basis ket labelled by ``multi_index``.

        Returns:
            Complex column tensor of shape (total_dimension, 1) with a single
            one at ``multi_index_to_index(multi_index)``.
        """
        index = self.multi_index_to_index(multi_index)
        if not 0 <= index < self._total:
            raise ValueError(
                f"Multi-index {tuple(multi_index)} lies outside {self!r}"
            )

        dev = default_device()
        vec = torch.zeros(
            (self._total, 1),
            dtype=dev.complex_dtype,
            device=dev.as_torch_device(),
        )
        vec[index, 0] = 1.0
        return vec

    def multi_indices(self) -> Iterable[Tuple[int, ...]]:
        """Yield every multi-index of the space in flat-index order."""
        for index in range(self._total):
            yield self.index_to_multi_index(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HilbertSpace):
            return NotImplemented
        return self._dimensions == other._dimensions

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    # Mutable through tensor_with, so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self._dimensions and self._total == 0:
            return "HilbertSpace()"
        return f"HilbertSpace({list(self._dimensions)})"
