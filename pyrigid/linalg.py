"""
Dense linear systems on any supported device.

    >>> import numpy as np
    >>> from pyrigid import solve
    >>> solve(np.array([[2., 0.], [0., 3.]]), np.array([[4.], [9.]]))
    array([[2.],
           [3.]])

Operands may be NumPy arrays or PyTorch tensors (CPU or CUDA). The result
has B's shape, dtype, device and array type, and never shares memory with
A or B.
"""

from ._backends import get_backend
from ._core.layout import from_column_major, to_column_major
from ._core.tensor import (
    HOST,
    Dtype,
    as_array,
    describe_dtype,
    device_of,
    dtype_name,
    dtype_of,
    eye,
    shape_of,
    zeros,
)
from .exceptions import (
    DeviceMismatchError,
    DimensionMismatchError,
    DtypeMismatchError,
    ShapeError,
    UnsupportedDtypeError,
)

SUPPORTED_DTYPES = (Dtype.Float32, Dtype.Float64)


def _check_square(A_shape):
    if len(A_shape) != 2:
        raise ShapeError(
            f"Tensor A must be 2D, but got {len(A_shape)}D",
            shape=A_shape,
            expected="2D",
        )
    if A_shape[0] != A_shape[1]:
        raise ShapeError(
            f"Tensor A must be square, but got {A_shape[0]} x {A_shape[1]}",
            shape=A_shape,
            expected="square",
        )


def solve(A, B):
    """
    Solve the linear system A X = B.

    Parameters
    ----------
    A : ndarray or Tensor, shape (n, n)
        Coefficient matrix, Float32 or Float64
    B : ndarray or Tensor, shape (n,) or (n, m)
        Right-hand side, same dtype and device as A

    Returns
    -------
    X : ndarray or Tensor
        Solution with B's shape, dtype and device

    Raises
    ------
    DeviceMismatchError
        If A and B live on different devices
    DtypeMismatchError
        If A and B have different dtypes
    UnsupportedDtypeError
        If the dtype is not Float32 or Float64
    ShapeError
        If A is not a square matrix or B is not a vector or matrix
    DimensionMismatchError
        If A's columns do not match B's rows
    UnimplementedBackendError
        If no backend serves the operands' device
    SingularMatrixError
        If A is exactly singular

    Notes
    -----
    All checks run before anything is allocated. The backends factor in
    place in column-major storage, so both operands are copied through the
    layout adapter first; the pivot buffer always lives on the host.
    """
    A = as_array(A)
    B = as_array(B)

    # Check devices
    device = device_of(A)
    device_b = device_of(B)
    if device != device_b:
        raise DeviceMismatchError(
            f"Tensor A device {device} and Tensor B device {device_b} mismatch",
            expected=device,
            actual=device_b,
        )

    # Check dtypes, by name so dtypes outside Dtype still compare
    name_a = describe_dtype(dtype_name(A))
    name_b = describe_dtype(dtype_name(B))
    if name_a != name_b:
        raise DtypeMismatchError(
            f"Tensor A dtype {name_a} and Tensor B dtype {name_b} mismatch",
            expected=name_a,
            actual=name_b,
        )
    dtype = dtype_of(A)
    if dtype not in SUPPORTED_DTYPES:
        raise UnsupportedDtypeError(
            f"Only tensors with Float32 or Float64 are supported, but received {dtype}",
            dtype=dtype,
            supported=SUPPORTED_DTYPES,
        )

    # Check dimensions
    A_shape = shape_of(A)
    B_shape = shape_of(B)
    _check_square(A_shape)
    if len(B_shape) not in (1, 2):
        raise ShapeError(
            f"Tensor B must be 1D (vector) or 2D (matrix), but got {len(B_shape)}D",
            shape=B_shape,
            expected="1D or 2D",
        )
    if A_shape[1] != B_shape[0]:
        raise DimensionMismatchError(
            f"Tensor A columns {A_shape[1]} mismatch with Tensor B rows {B_shape[0]}",
            a_shape=A_shape,
            b_shape=B_shape,
        )

    n = A_shape[0]
    m = B_shape[1] if len(B_shape) == 2 else 1

    backend = get_backend(device)

    a = to_column_major(A, device)
    b = to_column_major(B, device)
    ipiv = zeros((n,), Dtype.Int32, HOST)

    # LAPACK rejects zero-sized operands; an empty system has an empty solution
    if n > 0 and m > 0:
        backend.gesv(dtype, a, b, ipiv, n, m)

    return from_column_major(b, B_shape)


def inv(A):
    """
    Inverse of a square matrix, computed as solve(A, I).

    Parameters
    ----------
    A : ndarray or Tensor, shape (n, n)
        Float32 or Float64 matrix

    Returns
    -------
    ndarray or Tensor, shape (n, n)
        A^-1 on A's device with A's dtype
    """
    A = as_array(A)
    A_shape = shape_of(A)
    _check_square(A_shape)

    dtype = dtype_of(A)
    if dtype not in SUPPORTED_DTYPES:
        raise UnsupportedDtypeError(
            f"Only tensors with Float32 or Float64 are supported, but received {dtype}",
            dtype=dtype,
            supported=SUPPORTED_DTYPES,
        )

    identity = eye(A_shape[0], dtype, device_of(A), like=A)
    return solve(A, identity)
