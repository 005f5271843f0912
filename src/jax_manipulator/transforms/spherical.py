"""Spherical-to-Cartesian link displacements in JAX.

A link of length r oriented by (pitch, yaw) displaces its tip from its root by

    (r cos(yaw) sin(pitch), r sin(yaw) sin(pitch), r cos(pitch))

so pitch is measured from the +Z axis and yaw around it from +X. Roll spins a
link about its own axis and never moves the tip. All functions are pure,
JIT-able and broadcast over leading batch dimensions.
"""

import jax
import jax.numpy as jnp
from typing import Union

Array = jax.Array
Scalar = Union[float, Array]


def displacement(length: Scalar, pitch: Scalar, yaw: Scalar) -> Array:
    """
    Relative displacement of link tip(s) from their root.

    Args:
        length: (...) link lengths
        pitch: (...) pitch angles in radians
        yaw: (...) yaw angles in radians

    Returns:
        (..., 3) array of [dx, dy, dz]
    """
    length, pitch, yaw = jnp.broadcast_arrays(
        jnp.asarray(length, dtype=float), jnp.asarray(pitch, dtype=float), jnp.asarray(yaw, dtype=float)
    )
    sin_pitch = jnp.sin(pitch)
    return jnp.stack([
        length * jnp.cos(yaw) * sin_pitch,
        length * jnp.sin(yaw) * sin_pitch,
        length * jnp.cos(pitch),
    ], axis=-1)


def accumulate(displacements: Array) -> Array:
    """
    Absolute positions from a root-to-tip sequence of displacements.

    The base sits at the origin, so position i is the sum of displacements 0..i.

    Args:
        displacements: (..., N, 3) relative displacements in chain order

    Returns:
        (..., N, 3) absolute positions
    """
    return jnp.cumsum(displacements, axis=-2)


def pairwise_distances(points: Array) -> Array:
    """
    Euclidean distance between every pair of points.

    Args:
        points: (..., N, 3) points

    Returns:
        (..., N, N) symmetric distance matrix with a zero diagonal
    """
    diff = points[..., :, None, :] - points[..., None, :, :]
    return jnp.sqrt(jnp.sum(diff * diff, axis=-1))
