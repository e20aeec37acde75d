"""
Test the solve dispatcher on the CPU backend.

Validates results against NumPy and checks every precondition failure.
"""

import pytest
import numpy as np

from pyrigid import (
    DeviceMismatchError,
    DimensionMismatchError,
    DtypeMismatchError,
    PyRigidError,
    ShapeError,
    SingularMatrixError,
    UnimplementedBackendError,
    UnsupportedDtypeError,
    inv,
    solve,
)


FP64_TOL = 1e-10
FP32_TOL = 1e-4


def well_conditioned(n, dtype=np.float64, seed=42):
    """Random diagonally dominant matrix."""
    rng = np.random.default_rng(seed)
    A = rng.standard_normal((n, n)) + n * np.eye(n)
    return A.astype(dtype)


class TestSolve:
    """Test numerical results."""

    def test_diagonal_scenario(self):
        """A = diag(2, 3), B = [[4], [9]] gives X = [[2], [3]]."""
        A = np.array([[2.0, 0.0], [0.0, 3.0]])
        B = np.array([[4.0], [9.0]])

        X = solve(A, B)

        np.testing.assert_allclose(X, [[2.0], [3.0]])

    def test_vector_rhs(self):
        A = well_conditioned(5)
        b = np.arange(5, dtype=np.float64)

        x = solve(A, b)

        assert x.shape == (5,)
        np.testing.assert_allclose(A @ x, b, atol=FP64_TOL)

    def test_matrix_rhs(self):
        A = well_conditioned(6)
        B = np.random.default_rng(0).standard_normal((6, 3))

        X = solve(A, B)

        assert X.shape == (6, 3)
        np.testing.assert_allclose(X, np.linalg.solve(A, B), atol=FP64_TOL)

    def test_non_symmetric(self):
        """Row-major input must not be read as its transpose."""
        A = np.array([[1.0, 2.0], [3.0, 4.0]])
        B = np.array([5.0, 11.0])

        np.testing.assert_allclose(solve(A, B), [1.0, 2.0], atol=FP64_TOL)

    def test_identity(self):
        B = np.random.default_rng(1).standard_normal((4, 2))

        np.testing.assert_allclose(solve(np.eye(4), B), B, atol=FP64_TOL)

    def test_inverse_via_identity(self):
        A = well_conditioned(4)

        A_inv = solve(A, np.eye(4))

        np.testing.assert_allclose(A @ A_inv, np.eye(4), atol=FP64_TOL)

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_dtype_preserved(self, dtype):
        A = well_conditioned(3, dtype=dtype)
        B = np.ones((3, 2), dtype=dtype)

        X = solve(A, B)

        assert X.dtype == dtype
        tol = FP32_TOL if dtype == np.float32 else FP64_TOL
        np.testing.assert_allclose(A @ X, B, atol=tol)

    def test_accepts_nested_lists(self):
        X = solve([[2.0, 0.0], [0.0, 4.0]], [2.0, 2.0])

        np.testing.assert_allclose(X, [1.0, 0.5])

    def test_inputs_untouched(self):
        A = well_conditioned(4)
        B = np.ones((4, 2))
        A_before, B_before = A.copy(), B.copy()

        X = solve(A, B)

        np.testing.assert_array_equal(A, A_before)
        np.testing.assert_array_equal(B, B_before)
        assert not np.shares_memory(X, A)
        assert not np.shares_memory(X, B)

    def test_result_is_independent(self):
        B = np.ones(3)
        X = solve(np.eye(3), B)

        X[0] = 42.0

        assert B[0] == 1.0

    def test_singular(self):
        A = np.array([[1.0, 2.0], [2.0, 4.0]])

        with pytest.raises(SingularMatrixError):
            solve(A, np.ones(2))

    def test_empty_system(self):
        """A 0 x 0 system has an empty solution."""
        X = solve(np.zeros((0, 0)), np.zeros(0))

        assert X.shape == (0,)
        assert X.dtype == np.float64

    def test_empty_rhs_columns(self):
        X = solve(well_conditioned(3), np.zeros((3, 0)))

        assert X.shape == (3, 0)


class TestSolveValidation:
    """Test precondition failures."""

    def test_dtype_mismatch(self):
        A = np.eye(3, dtype=np.float32)
        B = np.ones(3, dtype=np.float64)

        with pytest.raises(DtypeMismatchError, match="Float32.*Float64"):
            solve(A, B)

    @pytest.mark.skipif(np.dtype(np.longdouble) == np.float64,
                        reason="longdouble is float64 on this platform")
    def test_dtype_mismatch_with_unknown_dtype(self):
        """Mismatch is reported even when one dtype has no Dtype member."""
        A = np.eye(2, dtype=np.longdouble)
        B = np.ones(2, dtype=np.float64)

        with pytest.raises(DtypeMismatchError, match="Float64") as excinfo:
            solve(A, B)
        assert excinfo.value.expected == np.dtype(np.longdouble).name
        assert excinfo.value.actual == 'Float64'

    @pytest.mark.skipif(np.dtype(np.longdouble) == np.float64,
                        reason="longdouble is float64 on this platform")
    def test_matching_unknown_dtype(self):
        A = np.eye(2, dtype=np.longdouble)

        with pytest.raises(UnsupportedDtypeError):
            solve(A, np.ones(2, dtype=np.longdouble))

    def test_unsupported_dtype(self):
        A = np.eye(3, dtype=np.int32)
        B = np.ones(3, dtype=np.int32)

        with pytest.raises(UnsupportedDtypeError, match="Float32 or Float64"):
            solve(A, B)

    def test_complex_rejected(self):
        A = np.eye(2, dtype=np.complex128)

        with pytest.raises(UnsupportedDtypeError):
            solve(A, A)

    def test_non_square(self):
        A = np.ones((3, 2))

        with pytest.raises(ShapeError, match="square, but got 3 x 2"):
            solve(A, np.ones(3))

    def test_a_not_2d(self):
        with pytest.raises(ShapeError, match="must be 2D, but got 1D"):
            solve(np.ones(3), np.ones(3))

    def test_b_rank(self):
        with pytest.raises(ShapeError, match="1D \\(vector\\) or 2D"):
            solve(np.eye(2), np.ones((2, 2, 2)))

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError) as excinfo:
            solve(np.eye(3), np.ones((4, 1)))
        assert excinfo.value.a_shape == (3, 3)
        assert excinfo.value.b_shape == (4, 1)

    def test_validation_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            solve(np.eye(3), np.ones(4))
        with pytest.raises(PyRigidError):
            solve(np.eye(3), np.ones(4))


class TestTorchCPU:
    """Test PyTorch CPU tensors through the CPU backend."""

    def test_tensor_in_tensor_out(self):
        torch = pytest.importorskip("torch")
        A = torch.tensor([[2.0, 0.0], [0.0, 3.0]], dtype=torch.float64)
        B = torch.tensor([[4.0], [9.0]], dtype=torch.float64)

        X = solve(A, B)

        assert isinstance(X, torch.Tensor)
        assert X.device.type == 'cpu'
        assert X.dtype == torch.float64
        np.testing.assert_allclose(X.numpy(), [[2.0], [3.0]])

    def test_mixed_numpy_and_tensor(self):
        """Host operands may mix array types; the result follows B."""
        torch = pytest.importorskip("torch")
        A = np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.float32)
        B = torch.tensor([5.0, 11.0])

        X = solve(A, B)

        assert isinstance(X, torch.Tensor)
        np.testing.assert_allclose(X.numpy(), [1.0, 2.0], atol=FP32_TOL)

    def test_requires_grad_input(self):
        torch = pytest.importorskip("torch")
        A = torch.eye(3, dtype=torch.float64, requires_grad=True)
        B = torch.ones(3, dtype=torch.float64)

        X = solve(A, B)

        np.testing.assert_allclose(X.numpy(), np.ones(3))

    def test_dtype_mismatch_bfloat16(self):
        torch = pytest.importorskip("torch")
        A = torch.eye(2, dtype=torch.bfloat16)
        B = torch.ones(2, dtype=torch.float32)

        with pytest.raises(DtypeMismatchError, match="bfloat16.*Float32"):
            solve(A, B)

    def test_meta_device_unimplemented(self):
        """Torch devices outside the CPU/CUDA categories have no backend."""
        torch = pytest.importorskip("torch")
        A = torch.eye(2, device="meta")
        B = torch.ones(2, device="meta")

        with pytest.raises(UnimplementedBackendError, match="meta"):
            solve(A, B)


class TestInverse:
    """Test inv() built on solve()."""

    def test_inverse(self):
        A = well_conditioned(5)

        np.testing.assert_allclose(inv(A) @ A, np.eye(5), atol=FP64_TOL)

    def test_inverse_float32(self):
        A = well_conditioned(3, dtype=np.float32)

        A_inv = inv(A)

        assert A_inv.dtype == np.float32
        np.testing.assert_allclose(A @ A_inv, np.eye(3), atol=FP32_TOL)

    def test_inverse_non_square(self):
        with pytest.raises(ShapeError):
            inv(np.ones((2, 3)))

    def test_inverse_integer(self):
        with pytest.raises(UnsupportedDtypeError):
            inv(np.eye(2, dtype=np.int64))
