"""
PyRigid: device-agnostic dense solves and rigid-body transformations.

Copyright (C) 2024 SGCX
Licensed under GPL-3.0
"""

__version__ = "1.0.0"

# Import main user-facing API
from .linalg import solve, inv
from .transformation import (
    compute_transformation_from_rt,
    compute_transformation_from_pose,
)
from ._core.tensor import Device, DeviceType, Dtype
from .exceptions import (
    PyRigidError,
    ValidationError,
    DeviceMismatchError,
    DtypeMismatchError,
    UnsupportedDtypeError,
    ShapeError,
    DimensionMismatchError,
    UnimplementedBackendError,
    NumericalError,
    SingularMatrixError,
    BackendError,
)

# Import backend utilities (for advanced users)
from ._backends import get_backend, list_available_backends

__all__ = [
    'solve',
    'inv',
    'compute_transformation_from_rt',
    'compute_transformation_from_pose',
    'Device',
    'DeviceType',
    'Dtype',
    'get_backend',
    'list_available_backends',
    'PyRigidError',
    'ValidationError',
    'DeviceMismatchError',
    'DtypeMismatchError',
    'UnsupportedDtypeError',
    'ShapeError',
    'DimensionMismatchError',
    'UnimplementedBackendError',
    'NumericalError',
    'SingularMatrixError',
    'BackendError',
]
