"""
Device and dtype model over NumPy arrays and PyTorch tensors.

NumPy arrays always live on the host. PyTorch is optional: a value is only
treated as a torch tensor when torch has already been imported by the
caller, so this module never imports torch just to inspect an argument.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

import numpy as np

from ..exceptions import UnimplementedBackendError, UnsupportedDtypeError


class DeviceType(Enum):
    """Compute device categories with a numeric backend."""
    CPU = "cpu"
    CUDA = "cuda"


@dataclass(frozen=True)
class Device:
    """
    A (category, index) pair identifying where a buffer lives.

    Attributes:
        device_type: Device category
        index: Device ordinal within the category
    """
    device_type: DeviceType
    index: int = 0

    def __str__(self) -> str:
        return f"{self.device_type.name}:{self.index}"

    @property
    def is_host(self) -> bool:
        """True if buffers on this device are directly addressable by NumPy."""
        return self.device_type is DeviceType.CPU


HOST = Device(DeviceType.CPU, 0)


class Dtype(Enum):
    """Element dtypes, named after their NumPy/PyTorch spelling."""
    Bool = "bool"
    UInt8 = "uint8"
    Int8 = "int8"
    Int16 = "int16"
    Int32 = "int32"
    Int64 = "int64"
    Float16 = "float16"
    Float32 = "float32"
    Float64 = "float64"
    Complex64 = "complex64"
    Complex128 = "complex128"

    def __str__(self) -> str:
        return self.name

    def to_numpy(self) -> np.dtype:
        return np.dtype(self.value)

    def to_torch(self):
        import torch
        return getattr(torch, self.value)


def _torch():
    return sys.modules.get("torch")


def is_tensor(x: Any) -> bool:
    """True if x is a torch.Tensor."""
    torch = _torch()
    return torch is not None and isinstance(x, torch.Tensor)


def as_array(x: Any) -> Any:
    """Pass tensors and ndarrays through; convert anything else with NumPy."""
    if is_tensor(x) or isinstance(x, np.ndarray):
        return x
    return np.asarray(x)


def torch_device(device: Device):
    """Translate a Device into a torch.device."""
    import torch
    if device.device_type is DeviceType.CPU:
        return torch.device("cpu")
    return torch.device(device.device_type.value, device.index)


def device_of(x: Any) -> Device:
    """Device holding x's buffer."""
    if not is_tensor(x):
        return HOST
    kind = x.device.type
    if kind == "cpu":
        return HOST
    if kind == "cuda":
        return Device(DeviceType.CUDA, x.device.index or 0)
    raise UnimplementedBackendError(
        f"Unimplemented backend {x.device}", device=str(x.device)
    )


def dtype_name(x: Any) -> str:
    """Library-neutral spelling of x's element dtype, e.g. 'float32'."""
    if is_tensor(x):
        return str(x.dtype).replace("torch.", "")
    return x.dtype.name


def describe_dtype(name: str) -> str:
    """Dtype enum name for known dtypes, the raw spelling otherwise."""
    try:
        return Dtype(name).name
    except ValueError:
        return name


def dtype_of(x: Any) -> Dtype:
    """Element dtype of x."""
    name = dtype_name(x)
    try:
        return Dtype(name)
    except ValueError:
        raise UnsupportedDtypeError(
            f"Unsupported element dtype {name}", dtype=name
        ) from None


def shape_of(x: Any) -> Tuple[int, ...]:
    return tuple(int(d) for d in x.shape)


def zeros(shape: Tuple[int, ...], dtype: Dtype, device: Device, like: Any = None):
    """
    Zero-filled buffer.

    Host buffers are NumPy arrays unless `like` is a torch tensor; accelerator
    buffers are always torch tensors.
    """
    if device.is_host and not is_tensor(like):
        return np.zeros(shape, dtype=dtype.to_numpy())
    import torch
    return torch.zeros(shape, dtype=dtype.to_torch(), device=torch_device(device))


def eye(n: int, dtype: Dtype, device: Device, like: Any = None):
    """Identity matrix, allocated like `zeros`."""
    if device.is_host and not is_tensor(like):
        return np.eye(n, dtype=dtype.to_numpy())
    import torch
    return torch.eye(n, dtype=dtype.to_torch(), device=torch_device(device))


def transpose_copy(x: Any, device: Device):
    """
    Fresh C-contiguous copy of x with its axes reversed, placed on `device`.

    The result never shares memory with x.
    """
    if is_tensor(x):
        reversed_axes = tuple(reversed(range(x.ndim)))
        copy = x.detach().permute(reversed_axes).clone(
            memory_format=_torch().contiguous_format
        )
        return copy.to(torch_device(device))
    return np.array(x.T, order="C")


def to_host(x: Any) -> np.ndarray:
    """NumPy view (host tensors) or copy (accelerator tensors) of x."""
    if is_tensor(x):
        return x.detach().cpu().numpy()
    return np.asarray(x)


def set_block(target: Any, key, value: Any) -> None:
    """Slice assignment `target[key] = value` across array libraries."""
    if is_tensor(target):
        import torch
        target[key] = torch.as_tensor(value, dtype=target.dtype, device=target.device)
    else:
        target[key] = to_host(value)
