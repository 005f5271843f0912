"""Core kinematics algorithms: chain resolution, forward kinematics and collisions.

This module implements the heart of the jax_manipulator library. A target
link's ancestry is resolved into a root-to-target chain, per-link spherical
displacements are accumulated into absolute positions, and the chain is
validated against the base-link angular domain and the minimum link distance.
"""

from typing import Dict, Mapping, Optional, Tuple

import jax
import jax.numpy as jnp
import numpy as np
from jax import Array

from .config import ManipulatorConfig
from .core.chain_model import ChainModel
from .core.link import Link
from .errors import CollisionError, DomainViolationError, IncompleteChainError, ManipulatorError, UnknownIdError
from .transforms import spherical


def resolve_chain(links: Mapping[int, Link], target_id: int, base_id: int = 0) -> Tuple[int, ...]:
    """Walk ``prev_id`` references from ``target_id`` back to the base.

    Args:
        links: Registry mapping from link id to link
        target_id: Link whose chain is wanted
        base_id: Sentinel id of the fixed base

    Returns:
        Tuple of link ids in root-to-target order, empty for the base itself

    Raises:
        UnknownIdError: ``target_id`` is not registered
        IncompleteChainError: the walk hits an unregistered id or a cycle
    """
    if target_id == base_id:
        return ()
    if target_id not in links:
        raise UnknownIdError(target_id)

    chain = []
    visited = set()
    current_id = target_id
    while current_id != base_id:
        if current_id not in links:
            raise IncompleteChainError(target_id, current_id)
        if current_id in visited:
            raise IncompleteChainError(target_id, current_id, cycle=True)
        visited.add(current_id)
        chain.append(current_id)
        current_id = links[current_id].prev_id

    chain.reverse()
    return tuple(chain)


def forward_kinematics_world(model: ChainModel) -> Array:
    """Absolute positions of every link tip in the chain.

    JIT-compatible: the chain layout is static on the model.

    Args:
        model: ChainModel snapshot of a resolved chain

    Returns:
        Array of shape (num_links, 3); row i is the tip of ``model.link_ids[i]``
    """
    displacements = spherical.displacement(model.lengths, model.pitches, model.yaws)
    return spherical.accumulate(displacements)


def forward_kinematics(model: ChainModel) -> Dict[int, Array]:
    """Compute forward kinematics for all links of the chain.

    Returns:
        Dictionary mapping link ids to their (3,) world positions
    """
    positions = forward_kinematics_world(model)
    return {link_id: positions[i] for i, link_id in enumerate(model.link_ids)}


def collision_mask(positions: Array, min_distance: float) -> Array:
    """Pairs of chain links that are too close.

    Entry (i, j) is True when j < i and the two links are closer than
    ``min_distance``. The upper triangle and diagonal are always False.

    Args:
        positions: (N, 3) absolute positions in chain order
        min_distance: Minimum allowed distance between two links

    Returns:
        (N, N) boolean array
    """
    n = positions.shape[-2]
    earlier = jnp.tril(jnp.ones((n, n), dtype=bool), k=-1)
    return earlier & (spherical.pairwise_distances(positions) < min_distance)


def first_collision(positions: Array, min_distance: float) -> Optional[Tuple[int, int]]:
    """Earliest collision met while placing links in chain order.

    Link i is checked against every earlier link j < i, in order of j, once
    link i has been placed. The first link is never checked on its own.

    Returns:
        ``(i, j)`` chain indices of the first offending pair, or None
    """
    mask = np.asarray(collision_mask(positions, min_distance))
    hits = np.argwhere(mask)
    if hits.size == 0:
        return None
    # argwhere is row-major, so the first hit has the smallest i then smallest j
    i, j = hits[0]
    return int(i), int(j)


def domain_violation(model: ChainModel, config: ManipulatorConfig) -> Optional[DomainViolationError]:
    """Check the base-attached link's angles if it is part of the chain."""
    if config.base_link_id not in model.link_ids:
        return None
    i = model.index(config.base_link_id)
    pitch = float(model.pitches[i])
    yaw = float(model.yaws[i])
    if pitch > config.base_pitch_limit or yaw > config.base_yaw_limit:
        return DomainViolationError(
            config.base_link_id, pitch, yaw, config.base_pitch_limit, config.base_yaw_limit
        )
    return None


def evaluate_chain(model: ChainModel, config: ManipulatorConfig) -> Tuple[Array, Optional[ManipulatorError]]:
    """Forward kinematics with validation, in the order a link-by-link walk meets errors.

    The base-attached link is validated before it is placed; every later link
    is checked for collisions right after it is placed. Whichever error the
    walk would hit first is reported.

    Returns:
        (positions, error) where positions has shape (num_links, 3) and error
        is None for a valid chain
    """
    positions = forward_kinematics_world(model)
    domain_error = domain_violation(model, config)
    collision = first_collision(positions, config.min_link_distance)

    if domain_error is not None:
        if collision is None or collision[0] >= model.index(config.base_link_id):
            return positions, domain_error
    if collision is not None:
        i, j = collision
        p_i = np.asarray(positions[i])
        distance = float(np.linalg.norm(p_i - np.asarray(positions[j])))
        return positions, CollisionError(
            model.link_ids[i],
            model.link_ids[j],
            tuple(float(c) for c in p_i),
            distance,
            config.min_link_distance,
        )
    return positions, None


def position_jacobian(model: ChainModel, link_id: int) -> Array:
    """Jacobian of a chain link's position w.r.t. the chain's angles.

    Uses JAX forward-mode automatic differentiation.

    Args:
        model: ChainModel snapshot of a resolved chain
        link_id: Link of the chain whose tip position is differentiated

    Returns:
        (3, 2 * num_links) matrix; columns are ordered
        (pitch_0, yaw_0, pitch_1, yaw_1, ...)
    """
    # Find target link index
    link_idx = model.index(link_id)

    def tip_position(angles: Array) -> Array:
        """Closure to compute the target's position from interleaved angles."""
        moved = model.replace(pitches=angles[0::2], yaws=angles[1::2])
        return forward_kinematics_world(moved)[link_idx]

    angles = jnp.stack([model.pitches, model.yaws], axis=-1).reshape(-1)
    J = jax.jacfwd(tip_position)(angles)  # (3, 2 * num_links)
    return J
