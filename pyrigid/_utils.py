"""
Utility functions.
"""

from ._core.tensor import Device, Dtype, device_of, dtype_of, shape_of
from .exceptions import DeviceMismatchError, ShapeError, UnsupportedDtypeError


def check_shape(x, shape, name='X'):
    """Validate exact operand shape."""
    actual = shape_of(x)
    if actual != tuple(shape):
        raise ShapeError(
            f"Tensor {name} must have shape {tuple(shape)}, but got {actual}",
            shape=actual,
            expected=tuple(shape),
        )


def check_dtype(x, dtype: Dtype, name='X'):
    """Validate operand dtype."""
    actual = dtype_of(x)
    if actual is not dtype:
        raise UnsupportedDtypeError(
            f"Tensor {name} has dtype {actual}, but is expected to have {dtype}",
            dtype=actual,
            supported=(dtype,),
        )


def check_device(x, device: Device, name='X'):
    """Validate operand device."""
    actual = device_of(x)
    if actual != device:
        raise DeviceMismatchError(
            f"Tensor {name} is on device {actual}, but is expected to be on {device}",
            expected=device,
            actual=actual,
        )
