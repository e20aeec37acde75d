"""
Exception hierarchy for PyRigid.

All exceptions inherit from PyRigidError so callers can catch any
library-specific error. Validation errors also inherit ValueError and are
always raised before any buffer is allocated or any backend is called.

Exceptions carry the offending values as attributes, and messages state
actual vs expected values.
"""


class PyRigidError(Exception):
    """Base exception for all PyRigid errors."""
    pass


class ValidationError(PyRigidError, ValueError):
    """
    Input validation failed.

    Raised when operands fail a precondition check.
    """
    pass


class DeviceMismatchError(ValidationError):
    """
    Operands live on different devices.

    Attributes:
        expected: Device of the reference operand
        actual: Device of the offending operand
    """

    def __init__(self, message: str, expected=None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class DtypeMismatchError(ValidationError):
    """
    Operands have different element dtypes.

    Attributes:
        expected: Dtype name of the reference operand
        actual: Dtype name of the offending operand
    """

    def __init__(self, message: str, expected=None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class UnsupportedDtypeError(ValidationError):
    """
    Operand dtype is not supported by the operation.

    Attributes:
        dtype: The rejected dtype
        supported: Tuple of accepted dtypes
    """

    def __init__(self, message: str, dtype=None, supported: tuple = ()):
        super().__init__(message)
        self.dtype = dtype
        self.supported = supported


class ShapeError(ValidationError):
    """
    Operand has the wrong rank or shape.

    Raised for wrong rank, non-square matrices, and fixed-shape
    operands (rotation, translation, pose) of the wrong size.

    Attributes:
        shape: Actual shape
        expected: Expected shape or description, if known
    """

    def __init__(self, message: str, shape: tuple | None = None, expected=None):
        super().__init__(message)
        self.shape = shape
        self.expected = expected


class DimensionMismatchError(ValidationError):
    """
    Operand shapes are individually valid but incompatible.

    Attributes:
        a_shape: Shape of the coefficient matrix
        b_shape: Shape of the right-hand side
    """

    def __init__(self, message: str, a_shape: tuple | None = None,
                 b_shape: tuple | None = None):
        super().__init__(message)
        self.a_shape = a_shape
        self.b_shape = b_shape


class UnimplementedBackendError(PyRigidError, NotImplementedError):
    """
    No numeric backend is registered for the operand device.

    Attributes:
        device: The device that could not be served
    """

    def __init__(self, message: str, device=None):
        super().__init__(message)
        self.device = device


class NumericalError(PyRigidError):
    """
    Numeric backend failed.

    Base class for errors raised by the backend kernels themselves.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is exactly singular.

    Raised when LU factorization produces a zero pivot, so the
    system has no unique solution.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot: 1-based index of the zero diagonal element of U
    """

    def __init__(self, message: str, matrix_name: str | None = None,
                 pivot: int | None = None):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot = pivot


class BackendError(NumericalError):
    """
    Backend kernel rejected its arguments.

    Attributes:
        info: Raw status code reported by the kernel
    """

    def __init__(self, message: str, info: int | None = None):
        super().__init__(message)
        self.info = info
