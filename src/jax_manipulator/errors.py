"""Error taxonomy for manipulator operations.

Reported conditions (duplicate ids, wrong capabilities) are returned to the
caller; abort conditions of a position computation travel inside a
:class:`~jax_manipulator.result.PositionResult`. Operations addressed to an
unknown id raise :class:`UnknownIdError`.
"""

import math
from typing import Optional, Tuple


class ManipulatorError(Exception):
    """Base class for every manipulator error."""

    def __init__(self, message: str, link_id: int):
        super().__init__(message)
        self.link_id = link_id


class DuplicateIdError(ManipulatorError):
    def __init__(self, link_id: int):
        super().__init__(f"Link with id {link_id} already exists", link_id)


class UnknownIdError(ManipulatorError, LookupError):
    def __init__(self, link_id: int):
        super().__init__(f"Link with id {link_id} doesn't exist", link_id)


class WrongCapabilityError(ManipulatorError):
    """The link exists but is not the variant the operation needs."""

    def __init__(self, link_id: int, capability):
        super().__init__(f"Link {link_id} is not a {capability.value}", link_id)
        self.capability = capability


class IncompleteChainError(ManipulatorError):
    """The ancestry of a link does not resolve to the base.

    Attributes:
        missing_id: The id at which the walk stopped. For a dangling chain this
            is the unregistered parent id, for a cycle the first revisited id.
        cycle: True when the walk stopped on a revisited id.
    """

    def __init__(self, link_id: int, missing_id: int, cycle: bool = False):
        reason = "cycle through" if cycle else "missing link"
        super().__init__(
            f"Incomplete chain to link {link_id} ({reason} {missing_id})", link_id
        )
        self.missing_id = missing_id
        self.cycle = cycle


class DomainViolationError(ManipulatorError, ValueError):
    def __init__(self, link_id: int, pitch: float, yaw: float, pitch_limit: float, yaw_limit: float):
        if pitch_limit == yaw_limit == math.pi / 2:
            bound = f"Pitch and yaw of link {link_id} can't be greater than pi/2"
        else:
            bound = (
                f"Pitch of link {link_id} can't be greater than {pitch_limit:.6g} "
                f"and yaw can't be greater than {yaw_limit:.6g}"
            )
        super().__init__(f"{bound}: pitch={pitch}, yaw={yaw}", link_id)
        self.pitch_limit = pitch_limit
        self.yaw_limit = yaw_limit
        self.pitch = pitch
        self.yaw = yaw


class CollisionError(ManipulatorError):
    """Two links of a chain resolved to (nearly) the same point.

    Attributes:
        other_id: The earlier chain link that is too close.
        position: Absolute position of the colliding link.
        distance: Distance between the two links.
    """

    def __init__(
        self,
        link_id: int,
        other_id: int,
        position: Tuple[float, float, float],
        distance: float,
        min_distance: Optional[float] = None,
    ):
        x, y, z = position
        message = (
            f"Collision detected for link {link_id} at position ({x:.6g}, {y:.6g}, {z:.6g}): "
            f"distance {distance:.6g} to link {other_id}"
        )
        if min_distance is not None:
            message += f" is below {min_distance:.6g}"
        super().__init__(message, link_id)
        self.other_id = other_id
        self.position = position
        self.distance = distance
