"""qdensity - density-matrix quantum states on composite Hilbert spaces."""

__version__ = "0.1.0"

from .backend import (
    approx_equal,
    as_complex_matrix,
    dm_from_statevector,
    hermitian_eigh,
    kron,
    matrix_trace,
    measure_probs_dm,
    normalize_statevector,
)
from .core import Device, default_device, device
from .diagnostics import (
    DEFAULT_ATOL,
    assert_density,
    assert_matches_space,
    assert_self_adjoint,
    assert_square,
    debug_context,
    is_debug_enabled,
    is_density,
    is_self_adjoint,
    is_square,
    matches_space,
    set_debug_enabled,
    state_norm,
)
from .logging import configure_logging, get_logger, set_log_level
from .space import HilbertSpace
from .states import (
    QuantumState,
    random_density_matrix,
    random_mixed_state,
    random_pure_state,
    random_statevector,
)

__all__ = [
    "__version__",
    # Spaces and states
    "HilbertSpace",
    "QuantumState",
    "random_statevector",
    "random_density_matrix",
    "random_pure_state",
    "random_mixed_state",
    # Backend
    "as_complex_matrix",
    "normalize_statevector",
    "dm_from_statevector",
    "kron",
    "matrix_trace",
    "hermitian_eigh",
    "approx_equal",
    "measure_probs_dm",
    # Configuration
    "Device",
    "device",
    "default_device",
    # Diagnostics
    "DEFAULT_ATOL",
    "state_norm",
    "is_square",
    "is_self_adjoint",
    "is_density",
    "matches_space",
    "assert_square",
    "assert_self_adjoint",
    "assert_density",
    "assert_matches_space",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
