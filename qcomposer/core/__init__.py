"""Core value types and device handling."""

from .complex import Complex
from .device import Device, default_device, device, resolve_device

__all__ = ["Complex", "Device", "device", "default_device", "resolve_device"]
