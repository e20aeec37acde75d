"""
Core building blocks (backend-agnostic).
"""

from .tensor import (
    Device,
    DeviceType,
    Dtype,
    HOST,
    device_of,
    dtype_of,
    shape_of,
)
from .layout import to_column_major, from_column_major

__all__ = [
    "Device",
    "DeviceType",
    "Dtype",
    "HOST",
    "device_of",
    "dtype_of",
    "shape_of",
    "to_column_major",
    "from_column_major",
]
