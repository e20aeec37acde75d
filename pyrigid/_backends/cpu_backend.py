"""
CPU backend using NumPy + SciPy.

Calls LAPACK ?gesv directly so the factorization happens in the buffers
handed over by the dispatcher.
"""

import numpy as np
from scipy.linalg import get_lapack_funcs

from .._core.tensor import DeviceType, Dtype, is_tensor
from .base import BackendBase, check_info


def _host_view(buffer) -> np.ndarray:
    """NumPy view over a host buffer, sharing memory with torch CPU tensors."""
    if is_tensor(buffer):
        return buffer.numpy()
    return buffer


class CPUBackend(BackendBase):
    """
    CPU backend using SciPy's LAPACK bindings.

    Reference implementation; serves both NumPy arrays and PyTorch
    CPU tensors.
    """

    def __init__(self):
        self.name = "cpu"
        self.device_type = DeviceType.CPU

    def gesv(self, dtype: Dtype, a, b, ipiv: np.ndarray, n: int, m: int) -> None:
        """
        Solve in place with LAPACK sgesv/dgesv.

        The flat buffers are viewed in Fortran order, which is what LAPACK
        expects, so with overwrite enabled f2py passes them through untouched.
        """
        a_mat = _host_view(a).reshape((n, n), order='F')
        b_mat = _host_view(b).reshape((n, m), order='F')

        gesv, = get_lapack_funcs(('gesv',), (a_mat, b_mat))
        lu, piv, x, info = gesv(a_mat, b_mat, overwrite_a=1, overwrite_b=1)
        check_info(info)

        # f2py may have worked on a temporary; make the results land in place
        a_mat[...] = lu
        b_mat[...] = x
        # SciPy reports 0-based pivots, LAPACK's convention is 1-based
        ipiv[:] = piv + 1

    def get_device_info(self) -> dict:
        """Get backend information."""
        import scipy
        return {
            'backend': 'cpu',
            'device': 'CPU:0',
            'library': f'NumPy {np.__version__}, SciPy {scipy.__version__}',
        }
