"""
Row-major <-> column-major layout adapter.

Callers hand over row-major (C order) matrices, while the LAPACK-style
kernels behind every backend read and write column-major (Fortran order)
storage. Rather than teaching the array types about Fortran order, the
conversion is an explicit transpose-and-copy at the solver boundary:

    to_column_major(M)   ->  flat buffer holding M column by column
    from_column_major(b) ->  matrix with the caller's shape, row-major view

The kernels overwrite their inputs, so the copy made on the way in is also
what keeps caller data from being aliased.
"""

from typing import Any, Tuple

from .tensor import Device, transpose_copy


def to_column_major(x: Any, device: Device):
    """
    Flat column-major copy of a vector or matrix on `device`.

    Parameters
    ----------
    x : ndarray or Tensor, shape (n,) or (n, m)
        Row-major operand
    device : Device
        Device the copy is materialised on

    Returns
    -------
    buffer : ndarray or Tensor, shape (n * m,)
        Fresh contiguous buffer; element (i, j) of x sits at i + j * n
    """
    return transpose_copy(x, device).reshape(-1)


def from_column_major(buffer: Any, shape: Tuple[int, ...]):
    """
    Reinterpret a flat column-major buffer as a matrix of `shape`.

    Parameters
    ----------
    buffer : ndarray or Tensor, shape (n * m,)
        Column-major storage, typically a kernel output
    shape : tuple
        Target logical shape, (n,) or (n, m)

    Returns
    -------
    ndarray or Tensor
        View over `buffer` with the requested shape. No copy is made, so the
        result shares memory with `buffer` only.
    """
    if len(shape) == 1:
        return buffer.reshape(shape)
    n, m = shape
    # Row-major (m, n) storage is the column-major (n, m) matrix transposed.
    return buffer.reshape(m, n).T
