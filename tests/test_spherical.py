"""Tests for the spherical transforms module."""

import hypothesis
import jax
import jax.numpy as jnp
import numpy as np
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_manipulator.transforms import spherical

# Use hypothesis profile for CI
hypothesis.settings.register_profile("ci", max_examples=10, deadline=None)

angles = st.floats(min_value=-2 * np.pi, max_value=2 * np.pi, allow_nan=False)
lengths = st.floats(min_value=0.0, max_value=10.0, allow_nan=False)


# Basic tests
def test_displacement_straight_up():
    """Zero pitch points the link along +Z regardless of yaw."""
    for yaw in (0.0, 0.7, np.pi):
        d = spherical.displacement(2.0, 0.0, yaw)
        np.testing.assert_allclose(d, jnp.array([0.0, 0.0, 2.0]), atol=1e-12)


def test_displacement_horizontal():
    """Pitch of pi/2 lays the link in the XY plane, rotated by yaw."""
    d = spherical.displacement(1.0, np.pi / 2, 0.0)
    np.testing.assert_allclose(d, jnp.array([1.0, 0.0, 0.0]), atol=1e-12)

    d = spherical.displacement(1.0, np.pi / 2, np.pi / 2)
    np.testing.assert_allclose(d, jnp.array([0.0, 1.0, 0.0]), atol=1e-12)


def test_displacement_batched():
    """Displacement broadcasts over a batch of links."""
    lengths_ = jnp.array([1.0, 2.0, 0.0])
    pitches = jnp.array([0.0, np.pi / 2, 1.0])
    yaws = jnp.array([0.0, np.pi, 2.0])

    d = spherical.displacement(lengths_, pitches, yaws)

    assert d.shape == (3, 3)
    np.testing.assert_allclose(d[0], [0.0, 0.0, 1.0], atol=1e-12)
    np.testing.assert_allclose(d[1], [-2.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(d[2], [0.0, 0.0, 0.0], atol=1e-12)


def test_accumulate_is_running_sum():
    """Absolute positions are prefix sums of displacements."""
    displacements = jnp.array([[0.0, 0.0, 1.0], [1.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
    positions = spherical.accumulate(displacements)
    expected = jnp.array([[0.0, 0.0, 1.0], [1.0, 0.0, 1.0], [1.0, 2.0, 1.0]])
    np.testing.assert_allclose(positions, expected, atol=1e-12)


def test_pairwise_distances():
    """Distance matrix is symmetric with a zero diagonal."""
    points = jnp.array([[0.0, 0.0, 0.0], [3.0, 4.0, 0.0], [0.0, 0.0, 1.0]])
    D = spherical.pairwise_distances(points)

    assert D.shape == (3, 3)
    np.testing.assert_allclose(jnp.diagonal(D), jnp.zeros(3), atol=1e-12)
    np.testing.assert_allclose(D, D.T, atol=1e-12)
    np.testing.assert_allclose(D[0, 1], 5.0, atol=1e-12)
    np.testing.assert_allclose(D[0, 2], 1.0, atol=1e-12)


# JIT tests
def test_displacement_jit():
    """Displacement is JIT-compilable."""
    jitted = jax.jit(spherical.displacement)
    d = jitted(jnp.array(1.0), jnp.array(np.pi / 2), jnp.array(0.0))
    np.testing.assert_allclose(d, jnp.array([1.0, 0.0, 0.0]), atol=1e-12)


def test_float64_enabled():
    """Importing the package enables double precision."""
    d = spherical.displacement(1.0, 0.3, 0.2)
    assert d.dtype == jnp.float64


# Property-based tests with hypothesis
@given(lengths, angles, angles)
@settings(deadline=None)
def test_displacement_norm_equals_length(r, pitch, yaw):
    """A link tip is always exactly one link length from its root."""
    d = spherical.displacement(r, pitch, yaw)
    np.testing.assert_allclose(jnp.linalg.norm(d), r, rtol=1e-9, atol=1e-9)


@given(lengths, angles, angles)
@settings(deadline=None)
def test_displacement_matches_formula(r, pitch, yaw):
    """Each component follows the spherical-to-Cartesian formula."""
    d = np.asarray(spherical.displacement(r, pitch, yaw))
    expected = np.array([
        r * np.cos(yaw) * np.sin(pitch),
        r * np.sin(yaw) * np.sin(pitch),
        r * np.cos(pitch),
    ])
    np.testing.assert_allclose(d, expected, rtol=1e-9, atol=1e-9)
