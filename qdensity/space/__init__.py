"""Composite state spaces."""

from .hilbert import HilbertSpace

__all__ = ["HilbertSpace"]
