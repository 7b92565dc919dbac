"""
Touchscreen device discovery.
"""

from .device_manager import DeviceManager

__all__ = ["DeviceManager"]
