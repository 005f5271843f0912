"""Link entities of a manipulator.

Links form a closed set of variants. Every variant shares the kinematic state
(length, orientation, parent id); variants only add capability-specific state
and declare the capabilities they support, so callers query
:meth:`Link.supports` instead of checking types.
"""

import logging
import math
from enum import Enum
from typing import FrozenSet, Optional

from flax import struct

logger = logging.getLogger(__name__)


class Capability(Enum):
    """Optional behaviors a link variant may support."""

    GRIPPER = "gripper"
    CAMERA = "camera"


@struct.dataclass
class Orientation:
    """Spherical orientation of a link, in radians.

    Roll is kept for completeness but does not displace the link tip.
    """
    pitch: float = struct.field(pytree_node=False, default=0.0)
    yaw: float = struct.field(pytree_node=False, default=0.0)
    roll: float = struct.field(pytree_node=False, default=0.0)


class Link:
    """A rigid link of fixed length attached to a parent link or the base.

    Attributes:
        id: Positive identifier, unique within a manipulator.
        length: Non-negative link length.
        prev_id: Id of the parent link, 0 when attached to the base.
        orientation: Current (pitch, yaw, roll).
    """

    capabilities: FrozenSet[Capability] = frozenset()
    kind = "link"

    def __init__(
        self,
        link_id: int,
        length: float,
        prev_id: int = 0,
        pitch: float = 0.0,
        yaw: float = 0.0,
        roll: float = 0.0,
    ) -> None:
        if link_id <= 0:
            raise ValueError(f"link id must be positive, got {link_id}")
        if not math.isfinite(length) or length < 0:
            raise ValueError(f"link length must be finite and non-negative, got {length}")
        if prev_id < 0:
            raise ValueError(f"prev_id must be non-negative, got {prev_id}")
        self._id = int(link_id)
        self._length = float(length)
        self._prev_id = int(prev_id)
        self._orientation = Orientation(float(pitch), float(yaw), float(roll))

    @property
    def id(self) -> int:
        return self._id

    @property
    def length(self) -> float:
        return self._length

    @property
    def prev_id(self) -> int:
        return self._prev_id

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    def set_direction(self, pitch: float, yaw: float, roll: float = 0.0) -> None:
        """Replace the orientation. Angles are not range-checked here."""
        self._orientation = Orientation(float(pitch), float(yaw), float(roll))

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def describe(self) -> str:
        o = self._orientation
        return (
            f"{self.kind.capitalize()} {self._id} (prev {self._prev_id}): r={self._length:g}, "
            f"pitch={o.pitch:g}, yaw={o.yaw:g}, roll={o.roll:g}"
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(link_id={self._id}, length={self._length}, "
            f"prev_id={self._prev_id}, orientation={self._orientation})"
        )


class Gripper(Link):
    """Link ending in a gripper whose jaws open to an aperture angle."""

    capabilities = frozenset({Capability.GRIPPER})
    kind = "gripper"

    def __init__(
        self,
        link_id: int,
        length: float,
        prev_id: int = 0,
        pitch: float = 0.0,
        yaw: float = 0.0,
        roll: float = 0.0,
    ) -> None:
        super().__init__(link_id, length, prev_id, pitch, yaw, roll)
        self._aperture = 0.0

    @property
    def aperture(self) -> float:
        return self._aperture

    @property
    def is_open(self) -> bool:
        return self._aperture > 0.0

    def open(self, angle: float) -> None:
        if angle < 0:
            raise ValueError(f"gripper angle must be non-negative, got {angle}")
        self._aperture = float(angle)
        logger.debug("Gripper %d opened to %g rad", self.id, self._aperture)

    def close(self) -> None:
        self._aperture = 0.0
        logger.debug("Gripper %d closed", self.id)

    def describe(self) -> str:
        return f"{super().describe()}, aperture={self._aperture:g}"


class Camera(Link):
    """Link carrying a camera. Captures record the orientation they were taken at."""

    capabilities = frozenset({Capability.CAMERA})
    kind = "camera"

    def __init__(
        self,
        link_id: int,
        length: float,
        prev_id: int = 0,
        pitch: float = 0.0,
        yaw: float = 0.0,
        roll: float = 0.0,
    ) -> None:
        super().__init__(link_id, length, prev_id, pitch, yaw, roll)
        self._photo_count = 0
        self._last_capture: Optional[Orientation] = None

    @property
    def photo_count(self) -> int:
        return self._photo_count

    @property
    def last_capture(self) -> Optional[Orientation]:
        return self._last_capture

    def take_photo(self) -> int:
        """Record a capture and return its 1-based photo number."""
        self._photo_count += 1
        self._last_capture = self.orientation
        logger.debug("Camera %d took photo #%d", self.id, self._photo_count)
        return self._photo_count

    def describe(self) -> str:
        return f"{super().describe()}, photos={self._photo_count}"
