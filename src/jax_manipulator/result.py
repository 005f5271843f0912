"""Explicit success/failure result of a position computation."""

from typing import Optional, Tuple

import jax
from flax import struct

from .errors import ManipulatorError

Array = jax.Array


@struct.dataclass
class PositionResult:
    """Outcome of :meth:`Manipulator.calculate_position`.

    Exactly one of ``position`` and ``error`` is set. A successful result at
    the base carries the origin; a failed result carries no position at all.

    Attributes:
        link_id: The link whose position was requested.
        chain: Root-to-target link ids that were walked (empty if resolution failed).
        position: (3,) absolute position on success, else None.
        error: The abort reason on failure, else None.
    """
    link_id: int = struct.field(pytree_node=False)
    chain: Tuple[int, ...] = struct.field(pytree_node=False)
    position: Optional[Array] = None
    error: Optional[ManipulatorError] = struct.field(pytree_node=False, default=None)

    @classmethod
    def success(cls, link_id: int, chain: Tuple[int, ...], position: Array) -> "PositionResult":
        return cls(link_id=link_id, chain=tuple(chain), position=position)

    @classmethod
    def failure(cls, link_id: int, error: ManipulatorError, chain: Tuple[int, ...] = ()) -> "PositionResult":
        return cls(link_id=link_id, chain=tuple(chain), error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Array:
        """Return the position, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.position
