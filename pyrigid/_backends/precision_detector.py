"""
Accelerator capability detection for PyRigid.

Detects the GPU and classifies its FP64 throughput, so Float64 solves on
consumer hardware can be flagged.
"""

import warnings
from dataclasses import dataclass
from typing import Optional
from enum import Enum


class PrecisionSupport(Enum):
    """FP64 support level for hardware."""
    NO_GPU = "no_gpu"            # No GPU available
    NO_FP64 = "no_fp64"          # GPU exists but no FP64 (Apple Metal)
    GIMPED_FP64 = "gimped_fp64"  # FP64 exists but slow (consumer NVIDIA)
    FULL_FP64 = "full_fp64"      # Full-speed FP64 (A100, H100)


@dataclass(frozen=True)
class GPUCapabilities:
    """
    GPU capability information.

    Attributes
    ----------
    has_gpu : bool
        Whether any GPU is available
    gpu_name : str
        Human-readable GPU name
    gpu_type : str
        'cuda', 'mps', or 'none'
    fp64_support : PrecisionSupport
        Level of FP64 support
    fp64_throughput_ratio : float
        Ratio of FP64 to FP32 throughput
    """
    has_gpu: bool
    gpu_name: str
    gpu_type: str
    fp64_support: PrecisionSupport
    fp64_throughput_ratio: float


NO_GPU = GPUCapabilities(
    has_gpu=False,
    gpu_name="CPU only",
    gpu_type="none",
    fp64_support=PrecisionSupport.NO_GPU,
    fp64_throughput_ratio=1.0,
)


def detect_gpu_capabilities() -> GPUCapabilities:
    """
    Detect GPU hardware and FP64 capabilities.

    Returns
    -------
    GPUCapabilities
        Detected hardware capabilities
    """
    cuda_caps = _detect_cuda_capabilities()
    if cuda_caps is not None:
        return cuda_caps

    metal_caps = _detect_metal_capabilities()
    if metal_caps is not None:
        return metal_caps

    return NO_GPU


def _detect_cuda_capabilities() -> Optional[GPUCapabilities]:
    """Detect NVIDIA CUDA GPU capabilities."""
    try:
        import torch
    except ImportError:
        return None

    if not torch.cuda.is_available():
        return None

    gpu_name = torch.cuda.get_device_name(0)
    support, ratio = classify_nvidia_gpu(gpu_name)

    return GPUCapabilities(
        has_gpu=True,
        gpu_name=gpu_name,
        gpu_type="cuda",
        fp64_support=support,
        fp64_throughput_ratio=ratio,
    )


def _detect_metal_capabilities() -> Optional[GPUCapabilities]:
    """Detect Apple Metal GPU (reported only; no solver backend)."""
    try:
        import torch
    except ImportError:
        return None

    if not (hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()):
        return None

    return GPUCapabilities(
        has_gpu=True,
        gpu_name="Apple Metal GPU",
        gpu_type="mps",
        fp64_support=PrecisionSupport.NO_FP64,
        fp64_throughput_ratio=0.0,
    )


def classify_nvidia_gpu(gpu_name: str) -> tuple[PrecisionSupport, float]:
    """
    Classify NVIDIA GPU FP64 capabilities.

    Parameters
    ----------
    gpu_name : str
        GPU name from torch.cuda.get_device_name()

    Returns
    -------
    (support_level, throughput_ratio)
    """
    gpu_upper = gpu_name.upper()

    # Data center GPUs with full FP64
    full_fp64_models = [
        'A100', 'A800',
        'H100', 'H800',
        'V100',
        'P100',
    ]

    for model in full_fp64_models:
        if model in gpu_upper:
            return PrecisionSupport.FULL_FP64, 0.5

    # RTX 30/40/50 series - 1/64 ratio
    for series in ('RTX 50', 'RTX 40', 'RTX 30'):
        if series in gpu_upper:
            return PrecisionSupport.GIMPED_FP64, 1/64

    # RTX 20 series and GTX - 1/32 ratio
    if 'RTX 20' in gpu_upper or 'GTX' in gpu_upper:
        return PrecisionSupport.GIMPED_FP64, 1/32

    warnings.warn(
        f"Unknown NVIDIA GPU '{gpu_name}'. Assuming gimped FP64."
    )
    return PrecisionSupport.GIMPED_FP64, 1/32


def warn_if_slow_fp64(capabilities: GPUCapabilities) -> None:
    """
    Warn that a Float64 solve is about to run on gimped FP64 hardware.

    Warns
    -----
    UserWarning
        If the GPU has gimped FP64 throughput
    """
    if capabilities.fp64_support == PrecisionSupport.GIMPED_FP64:
        warnings.warn(
            f"Float64 solve on {capabilities.gpu_name} with gimped FP64 "
            f"(ratio: {capabilities.fp64_throughput_ratio:.3f}). "
            f"This will be ~{int(1/capabilities.fp64_throughput_ratio)}x slower than Float32. "
            f"Consider Float32 operands for better performance.",
            UserWarning
        )
