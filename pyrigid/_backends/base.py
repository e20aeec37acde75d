"""
Abstract base classes for backends.

Defines the interface all backends must implement.
"""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from .._core.tensor import DeviceType, Dtype
from ..exceptions import BackendError, SingularMatrixError


class BackendBase(ABC):
    """Abstract base class for all backends."""

    name: str
    device_type: DeviceType

    @abstractmethod
    def gesv(
        self,
        dtype: Dtype,
        a: Any,
        b: Any,
        ipiv: np.ndarray,
        n: int,
        m: int,
    ) -> None:
        """
        Solve A X = B in place by LU factorization with partial pivoting.

        Backends receive raw column-major buffers already resident on their
        device and work on them directly; nothing is returned.

        Parameters
        ----------
        dtype : Dtype
            Element dtype of `a` and `b` (Float32 or Float64)
        a : ndarray or Tensor, shape (n * n,)
            Column-major coefficient matrix. Overwritten with the L and U
            factors.
        b : ndarray or Tensor, shape (n * m,)
            Column-major right-hand side. Overwritten with the solution.
        ipiv : ndarray of int32, shape (n,)
            Host buffer receiving the 1-based row interchanges.
        n : int
            Order of A
        m : int
            Number of right-hand sides

        Raises
        ------
        SingularMatrixError
            If U has an exactly zero diagonal element
        BackendError
            If the kernel rejects its arguments
        """
        pass

    @abstractmethod
    def get_device_info(self) -> dict:
        """Get backend information."""
        pass


def check_info(info: int) -> None:
    """Translate a LAPACK-style status code into an exception."""
    if info > 0:
        raise SingularMatrixError(
            f"Matrix A is singular: U({info},{info}) is exactly zero, "
            f"so the solution could not be computed",
            matrix_name="A",
            pivot=info,
        )
    if info < 0:
        raise BackendError(
            f"Argument {-info} to gesv had an illegal value",
            info=info,
        )
