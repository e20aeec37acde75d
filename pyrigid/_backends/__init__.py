"""
Backend selection and management.

One numeric backend per device category: CPU (SciPy LAPACK) always, and
NVIDIA GPU (PyTorch CUDA) when PyTorch is installed with CUDA support.
The table is built once on first use and never changes afterwards.
"""

import threading
from types import MappingProxyType
from typing import Union
import warnings

from .._core.tensor import Device, DeviceType
from ..exceptions import UnimplementedBackendError
from .base import BackendBase
from .precision_detector import detect_gpu_capabilities, GPUCapabilities

# Try importing CPU backend (always available)
try:
    from .cpu_backend import CPUBackend
    CPU_AVAILABLE = True
except ImportError:
    CPU_AVAILABLE = False
    warnings.warn("CPU backend unavailable - installation error!")

# Try importing PyTorch backend (NVIDIA GPU)
try:
    from .cuda_backend import CUDABackend
    TORCH_AVAILABLE = True
except ImportError:
    TORCH_AVAILABLE = False


_REGISTRY = None
_REGISTRY_LOCK = threading.Lock()


def _build_registry() -> MappingProxyType:
    if not CPU_AVAILABLE:
        raise RuntimeError("CPU backend unavailable!")

    table = {DeviceType.CPU: CPUBackend()}
    if TORCH_AVAILABLE and detect_gpu_capabilities().gpu_type == 'cuda':
        table[DeviceType.CUDA] = CUDABackend()
    return MappingProxyType(table)


def _registry() -> MappingProxyType:
    """Device category -> backend table, built exactly once."""
    global _REGISTRY
    if _REGISTRY is None:
        with _REGISTRY_LOCK:
            if _REGISTRY is None:
                _REGISTRY = _build_registry()
    return _REGISTRY


def _as_device_type(device: Union[Device, DeviceType, str]) -> DeviceType:
    if isinstance(device, Device):
        return device.device_type
    if isinstance(device, DeviceType):
        return device
    try:
        return DeviceType(str(device).lower())
    except ValueError:
        raise ValueError(
            f"Unknown backend: '{device}'\n"
            f"Valid options: 'cpu', 'cuda'"
        ) from None


def get_backend(device: Union[Device, DeviceType, str] = 'cpu') -> BackendBase:
    """
    Get the numeric backend serving a device.

    Parameters
    ----------
    device : Device, DeviceType or str
        Device, device category, or category name ('cpu', 'cuda')

    Returns
    -------
    BackendBase
        Backend instance shared by all callers

    Raises
    ------
    UnimplementedBackendError
        If no backend is available for the device category
    ValueError
        If a category name is not recognised

    Examples
    --------
    >>> backend = get_backend('cpu')
    >>> backend = get_backend(DeviceType.CUDA)  # needs CUDA-enabled PyTorch
    """
    device_type = _as_device_type(device)
    registry = _registry()

    if device_type is DeviceType.CPU:
        return registry[DeviceType.CPU]

    elif device_type is DeviceType.CUDA:
        backend = registry.get(DeviceType.CUDA)
        if backend is None:
            raise UnimplementedBackendError(
                f"Unimplemented backend {device}.\n"
                "Options:\n"
                "  - Move operands to the CPU\n"
                "  - Install CUDA-enabled PyTorch",
                device=device,
            )
        return backend

    raise UnimplementedBackendError(f"Unimplemented backend {device}", device=device)


def list_available_backends() -> list:
    """List names of available backends."""
    return [device_type.value for device_type in _registry()]


def print_backend_info():
    """Print detailed backend information (diagnostic)."""
    caps = detect_gpu_capabilities()
    available = list_available_backends()

    print("PyRigid Backend Status")
    print("=" * 50)
    print(f"\nAvailable Backends:")
    print(f"  CPU (SciPy LAPACK):  {'✓' if 'cpu' in available else '✗'} - LU with partial pivoting")
    print(f"  CUDA (PyTorch):      {'✓' if 'cuda' in available else '✗'} - LU with partial pivoting")

    print(f"\nHardware Detection:")
    if caps.has_gpu:
        print(f"  GPU Type: {caps.gpu_type}")
        print(f"  GPU Name: {caps.gpu_name}")
        print(f"  FP64 Support: {caps.fp64_support.value}")
        if caps.gpu_type == 'mps':
            print(f"  Note: no solver backend for Apple Metal, keep operands on the CPU")
    else:
        print(f"  No GPU detected")


# Export main interface
__all__ = [
    'get_backend',
    'list_available_backends',
    'print_backend_info',
    'BackendBase',
    'detect_gpu_capabilities',
    'GPUCapabilities',
    'CPU_AVAILABLE',
    'TORCH_AVAILABLE',
]


if __name__ == "__main__":
    print_backend_info()
