"""Tests for logging utilities."""

import logging
from io import StringIO

from qdensity import HilbertSpace, QuantumState
from qdensity.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


def test_get_logger_returns_namespaced_logger():
    """Test that get_logger returns a logger under the qdensity namespace."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "qdensity.test_module"


def test_get_logger_keeps_package_names():
    """Test that module names already under qdensity are not prefixed twice."""
    assert get_logger("qdensity.states.quantum_state").name == "qdensity.states.quantum_state"
    assert get_logger().name == "qdensity"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    assert get_logger("test_module") is get_logger("test_module")


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2


def test_logger_has_single_handler():
    """Test that repeated lookups do not stack handlers."""
    for _ in range(3):
        logger = get_logger("handler_check")
    assert len(logger.handlers) == 1


def test_set_log_level_accepts_names(restore_logging):
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")

    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG

    set_log_level("ERROR")
    assert logger.level == logging.ERROR
    assert all(h.level == logging.ERROR for h in logger.handlers)


def test_configure_logging_redirects_output(restore_logging):
    """Test configure_logging swaps the stream of existing loggers."""
    get_logger("test_module")
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    get_logger("test_module").debug("Debug message")

    assert "[DEBUG] qdensity.test_module: Debug message" in stream.getvalue()


def test_configure_logging_custom_format(restore_logging):
    """Test configure_logging honours a custom format string."""
    get_logger("test_module")
    stream = StringIO()
    configure_logging(level=logging.INFO, format_string="%(name)s|%(message)s", stream=stream)

    get_logger("test_module").info("hello")

    assert stream.getvalue().strip() == "qdensity.test_module|hello"


def test_partial_trace_is_logged_at_debug(restore_logging):
    """Test that library operations report through the package loggers."""
    state = QuantumState([[1.0], [0.0], [0.0], [0.0]], HilbertSpace([2, 2]))
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    state.partial_trace(1)

    assert "Tracing out subsystem 1" in stream.getvalue()


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    assert get_logger("test_module").propagate is False
