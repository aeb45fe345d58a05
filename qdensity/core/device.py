"""Device and dtype configuration for density-matrix storage."""

from __future__ import annotations

import torch


class Device:
    """
    Describes where and in which precision quantum-state tensors are stored.

    A Device pairs a PyTorch device with the real and complex dtypes used for
    eigenvalues and density matrices respectively. Its attributes should not
    be modified after construction.
    """

    def __init__(
        self,
        name: str,
        torch_device: torch.device,
        dtype: torch.dtype = torch.float64,
        complex_dtype: torch.dtype = torch.complex128,
    ) -> None:
        """
        Initialize a Device.

        Args:
            name: Logical device name (e.g., "dm_cpu").
            torch_device: Underlying PyTorch device.
            dtype: Real dtype used for spectra and probabilities.
            complex_dtype: Complex dtype used for state vectors and density matrices.

        Raises:
            ValueError: If complex_dtype is not a complex dtype.
        """
        if not complex_dtype.is_complex:
            raise ValueError(
                f"complex_dtype must be a complex dtype, got {complex_dtype}"
            )
        self.name = name
        self.torch_device = torch_device
        self.dtype = dtype
        self.complex_dtype = complex_dtype

    def __repr__(self) -> str:
        return (
            f"Device(name={self.name!r}, torch_device={self.torch_device}, "
            f"complex_dtype={self.complex_dtype})"
        )

    def as_torch_device(self) -> torch.device:
        """Return the underlying PyTorch device."""
        return self.torch_device


def device(name: str) -> Device:
    """
    Create a Device instance from a device name.

    Supported device names:
        - "dm_cpu": dense double-precision storage on the CPU

    Args:
        name: Device name string.

    Returns:
        A Device instance.

    Raises:
        ValueError: If the device name is not supported.
    """
    if name == "dm_cpu":
        return Device(
            name="dm_cpu",
            torch_device=torch.device("cpu"),
            dtype=torch.float64,
            complex_dtype=torch.complex128,
        )
    supported = ["dm_cpu"]
    raise ValueError(
        f"Unsupported device name: {name!r}. Supported devices: {supported}"
    )


def default_device() -> Device:
    """Return the default device ("dm_cpu")."""
    return device("dm_cpu")
