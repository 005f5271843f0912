"""Static configuration for a manipulator."""

import math

from flax import struct


@struct.dataclass
class ManipulatorConfig:
    """Immutable kinematic limits of a manipulator.

    All fields are static (not PyTree leaves), so a config can be closed over
    by jitted functions without retracing.

    Attributes:
        base_id: Sentinel id of the fixed base every chain must reach.
        base_link_id: Id of the base-attached link whose angles are restricted.
        base_pitch_limit: Largest pitch (radians) allowed on the base-attached link.
        base_yaw_limit: Largest yaw (radians) allowed on the base-attached link.
        min_link_distance: Two links of a chain closer than this collide.
    """
    base_id: int = struct.field(pytree_node=False, default=0)
    base_link_id: int = struct.field(pytree_node=False, default=1)
    base_pitch_limit: float = struct.field(pytree_node=False, default=math.pi / 2)
    base_yaw_limit: float = struct.field(pytree_node=False, default=math.pi / 2)
    min_link_distance: float = struct.field(pytree_node=False, default=0.1)

    def __post_init__(self):
        if self.min_link_distance < 0:
            raise ValueError(
                f"min_link_distance must be non-negative, got {self.min_link_distance}"
            )
