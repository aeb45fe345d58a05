"""Tests for device configuration."""

import pytest
import torch

import qdensity as qd
from qdensity.core.device import Device, default_device, device


class TestDevice:
    """Tests for Device class."""

    def test_device_creation(self):
        """Test Device can be created with all parameters."""
        dev = Device(
            name="test",
            torch_device=torch.device("cpu"),
            dtype=torch.float32,
            complex_dtype=torch.complex64,
        )
        assert dev.name == "test"
        assert dev.torch_device == torch.device("cpu")
        assert dev.dtype == torch.float32
        assert dev.complex_dtype == torch.complex64

    def test_device_defaults_to_double_precision(self):
        """Test Device defaults to float64/complex128."""
        dev = Device(name="test", torch_device=torch.device("cpu"))
        assert dev.dtype == torch.float64
        assert dev.complex_dtype == torch.complex128

    def test_device_rejects_real_complex_dtype(self):
        """Test that complex_dtype must be complex."""
        with pytest.raises(ValueError, match="complex dtype"):
            Device(name="bad", torch_device=torch.device("cpu"), complex_dtype=torch.float64)

    def test_device_repr(self):
        """Test Device __repr__."""
        repr_str = repr(device("dm_cpu"))
        assert "dm_cpu" in repr_str
        assert "complex128" in repr_str

    def test_as_torch_device(self):
        """Test as_torch_device returns correct device."""
        assert device("dm_cpu").as_torch_device() == torch.device("cpu")


class TestDeviceFactory:
    """Tests for device factory function."""

    def test_device_dm_cpu(self):
        """Test device('dm_cpu') returns the double-precision CPU device."""
        dev = device("dm_cpu")
        assert dev.name == "dm_cpu"
        assert dev.torch_device == torch.device("cpu")
        assert dev.complex_dtype == torch.complex128

    def test_device_unsupported_name(self):
        """Test device() raises for unsupported device names."""
        with pytest.raises(ValueError, match="Unsupported device name"):
            device("dm_cuda")

    def test_default_device(self):
        """Test default_device is dm_cpu and exported at package level."""
        assert default_device().name == "dm_cpu"
        assert qd.default_device().complex_dtype == torch.complex128

    def test_states_use_default_device_dtype(self):
        """Test that states are stored in the default complex dtype."""
        state = qd.QuantumState([[1.0], [0.0]], qd.HilbertSpace(2))
        assert state.density_matrix.dtype == default_device().complex_dtype
        assert state.eigenvalues.dtype == torch.float64
