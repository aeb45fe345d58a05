"""Pytest configuration and shared fixtures for qdensity tests.

This module provides:
- A deterministic numpy RNG fixture for random states
- Per-test global seeding of numpy and torch
- Fixtures that restore the process-wide debug flag and log level
"""

import logging
import os

import numpy as np
import pytest
import torch

from qdensity.diagnostics import is_debug_enabled, set_debug_enabled
from qdensity.logging import configure_logging


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed numpy and torch globally before every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture(scope="function")
def restore_debug_flag():
    """Restore the debug flag after a test that toggles it."""
    original = is_debug_enabled()
    yield
    set_debug_enabled(original)


@pytest.fixture(scope="function")
def restore_logging():
    """Reset qdensity logging to WARNING on stderr after the test."""
    yield
    configure_logging(level=logging.WARNING)
