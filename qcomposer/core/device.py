"""Device abstraction for state-vector simulation."""

from __future__ import annotations

import torch


class Device:
    """
    A logical simulation device: an underlying PyTorch device plus the complex
    dtype used for amplitudes.

    Attributes are not meant to be modified after construction.
    """

    def __init__(
        self,
        name: str,
        torch_device: torch.device,
        complex_dtype: torch.dtype = torch.complex128,
    ) -> None:
        """
        Initialize a Device.

        Args:
            name: Logical device name (e.g., "sv_cpu", "sv_cuda").
            torch_device: Underlying PyTorch device.
            complex_dtype: Complex dtype for amplitude vectors.
        """
        if not complex_dtype.is_complex:
            raise ValueError(f"complex_dtype must be complex, got {complex_dtype}")
        self.name = name
        self.torch_device = torch_device
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
        - "sv_cpu": CPU state vector, complex128
        - "sv_cuda": CUDA state vector, complex128 (only if CUDA is available)

    Raises:
        RuntimeError: If "sv_cuda" is requested but CUDA is not available.
        ValueError: If the device name is not supported.
    """
    if name == "sv_cpu":
        return Device(name="sv_cpu", torch_device=torch.device("cpu"))
    if name == "sv_cuda":
        if not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA device requested but torch.cuda.is_available() is False"
            )
        return Device(name="sv_cuda", torch_device=torch.device("cuda"))
    supported = ["sv_cpu", "sv_cuda"]
    raise ValueError(
        f"Unsupported device name: {name!r}. Supported devices: {supported}"
    )


def default_device() -> Device:
    """Return the default device (CPU state vector)."""
    return device("sv_cpu")


def resolve_device(spec: "Device | str | None") -> Device:
    """Turn a Device, a device name or None into a Device."""
    if spec is None:
        return default_device()
    if isinstance(spec, Device):
        return spec
    if isinstance(spec, str):
        return device(spec)
    raise TypeError(f"device must be Device, str, or None, got {type(spec)}")


__all__ = ["Device", "device", "default_device", "resolve_device"]
