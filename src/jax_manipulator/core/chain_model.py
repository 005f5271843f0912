"""ChainModel PyTree data structure for a resolved link chain.

This module defines an immutable snapshot of one base-to-target chain, in a
format that is fully compatible with JAX transformations.
"""

import jax.numpy as jnp
from jax import Array
from flax import struct
from typing import Mapping, Sequence, Tuple

from .link import Link


@struct.dataclass
class ChainModel:
    """Immutable PyTree representation of a base-to-target link chain.

    Index i of every array refers to ``link_ids[i]``; index 0 is the link
    attached to the base and the last index is the target link.

    Attributes:
        link_ids: Tuple of link ids in root-to-target order.
                  Marked as a static field for JIT compilation.
        lengths: Array of shape (num_links,) with link lengths.
        pitches: Array of shape (num_links,) with pitch angles in radians.
        yaws: Array of shape (num_links,) with yaw angles in radians.
    """
    link_ids: Tuple[int, ...] = struct.field(pytree_node=False)
    lengths: Array
    pitches: Array
    yaws: Array

    @classmethod
    def from_links(cls, links: Mapping[int, Link], chain: Sequence[int]) -> "ChainModel":
        """Snapshot the current state of ``chain`` from a registry mapping."""
        members = [links[link_id] for link_id in chain]
        return cls(
            link_ids=tuple(chain),
            lengths=jnp.array([link.length for link in members], dtype=float),
            pitches=jnp.array([link.orientation.pitch for link in members], dtype=float),
            yaws=jnp.array([link.orientation.yaw for link in members], dtype=float),
        )

    @property
    def num_links(self) -> int:
        return len(self.link_ids)

    def index(self, link_id: int) -> int:
        try:
            return self.link_ids.index(link_id)
        except ValueError:
            raise ValueError(f"Link '{link_id}' not found in chain {self.link_ids}")
