"""
GPU backend using PyTorch on NVIDIA CUDA.

Factors with torch.linalg.lu_factor_ex and back-substitutes with
torch.linalg.lu_solve. Buffers stay on the GPU; only the pivots are
copied back to the host pivot buffer.
"""

import numpy as np
import torch

from .._core.tensor import DeviceType, Dtype
from .base import BackendBase, check_info
from .precision_detector import detect_gpu_capabilities, warn_if_slow_fp64


class CUDABackend(BackendBase):
    """
    PyTorch GPU backend.

    Requirements:
    - NVIDIA GPU with CUDA support
    - PyTorch with CUDA enabled
    """

    def __init__(self):
        self.name = "cuda"
        self.device_type = DeviceType.CUDA

        if not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA backend requires an NVIDIA CUDA GPU.\n"
                "Options:\n"
                "  1. Keep operands on the CPU\n"
                "  2. Install CUDA-enabled PyTorch"
            )

        self.capabilities = detect_gpu_capabilities()

    def gesv(self, dtype: Dtype, a, b, ipiv: np.ndarray, n: int, m: int) -> None:
        """
        Solve in place on the GPU.

        A row-major (n, n) view of the column-major buffer is A transposed,
        so `.T` recovers A itself as a strided view over the same memory.
        """
        if dtype is Dtype.Float64:
            warn_if_slow_fp64(self.capabilities)

        a_mat = a.view(n, n).T
        b_mat = b.view(m, n).T

        LU, pivots, info = torch.linalg.lu_factor_ex(a_mat)
        # .item() synchronizes with the device
        check_info(int(info.item()))

        x = torch.linalg.lu_solve(LU, pivots, b_mat)

        a_mat.copy_(LU)
        b_mat.copy_(x)
        # PyTorch pivots are already 1-based
        ipiv[:] = pivots.cpu().numpy()

    def get_device_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': 'cuda',
            'device': self.capabilities.gpu_name,
            'fp64_support': self.capabilities.fp64_support.value,
            'library': f'PyTorch {torch.__version__}',
        }
