"""
Rigid-body homogeneous transformations.

Builds 4x4 Float32 transforms from a rotation/translation pair or from a
6-parameter pose vector [rx, ry, rz, tx, ty, tz]. Results are allocated on
the input's device with the input's array type.

Scale is not supported: the bottom row is always [0, 0, 0, 1].
"""

import numpy as np

from ._core.tensor import Dtype, as_array, device_of, set_block, to_host, zeros
from ._utils import check_device, check_dtype, check_shape

ROTATION = (slice(0, 3), slice(0, 3))
TRANSLATION = (slice(0, 3), slice(3, 4))


def compute_transformation_from_rt(R, t):
    """
    Assemble a homogeneous transform from rotation and translation.

    Parameters
    ----------
    R : ndarray or Tensor, shape (3, 3), Float32
        Rotation matrix (orthonormality is not checked)
    t : ndarray or Tensor, shape (3,), Float32
        Translation, on R's device

    Returns
    -------
    transformation : ndarray or Tensor, shape (4, 4), Float32
        [[R, t], [0, 1]] on R's device
    """
    R = as_array(R)
    t = as_array(t)
    device = device_of(R)
    check_shape(R, (3, 3), 'R')
    check_dtype(R, Dtype.Float32, 'R')
    check_shape(t, (3,), 't')
    check_device(t, device, 't')
    check_dtype(t, Dtype.Float32, 't')

    transformation = zeros((4, 4), Dtype.Float32, device, like=R)
    set_block(transformation, ROTATION, R)
    # Scale is assumed to be 1
    set_block(transformation, TRANSLATION, t.reshape(3, 1))
    transformation[3, 3] = 1
    return transformation


def compute_transformation_from_pose(X):
    """
    Assemble a homogeneous transform from a pose vector.

    The rotation is Rz(rz) @ Ry(ry) @ Rx(rx), written out in closed form
    and evaluated in Float32.

    Parameters
    ----------
    X : ndarray or Tensor, shape (6,), Float32
        Pose [rx, ry, rz, tx, ty, tz], angles in radians

    Returns
    -------
    transformation : ndarray or Tensor, shape (4, 4), Float32
        Transform on X's device
    """
    X = as_array(X)
    check_shape(X, (6,), 'X')
    check_dtype(X, Dtype.Float32, 'X')
    device = device_of(X)

    angles = to_host(X)[:3]
    sx, sy, sz = np.sin(angles)
    cx, cy, cz = np.cos(angles)

    rotation = np.array([
        [cz * cy, -sz * cx + cz * sy * sx,  sz * sx + cz * sy * cx],
        [sz * cy,  cz * cx + sz * sy * sx, -cz * sx + sz * sy * cx],
        [-sy,      cy * sx,                 cy * cx],
    ], dtype=np.float32)

    transformation = zeros((4, 4), Dtype.Float32, device, like=X)
    set_block(transformation, ROTATION, rotation)
    set_block(transformation, TRANSLATION, X[3:6].reshape(3, 1))
    # No scale term
    transformation[3, 3] = 1
    return transformation
