"""
JAX Manipulator: forward kinematics for trees of spherical-joint links.

Links hang off a fixed base through `prev_id` back-references. Positions are
computed by summing per-link spherical displacements along the chain, with a
domain check on the base-attached link and a point-proximity collision check.
"""

import jax
jax.config.update("jax_enable_x64", True)

from . import transforms
from . import core
from .config import ManipulatorConfig
from .core import Camera, Capability, ChainModel, Gripper, Link, Manipulator, Orientation
from .errors import (
    CollisionError,
    DomainViolationError,
    DuplicateIdError,
    IncompleteChainError,
    ManipulatorError,
    UnknownIdError,
    WrongCapabilityError,
)
from .result import PositionResult

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "ManipulatorConfig",
    "Camera",
    "Capability",
    "ChainModel",
    "Gripper",
    "Link",
    "Manipulator",
    "Orientation",
    "CollisionError",
    "DomainViolationError",
    "DuplicateIdError",
    "IncompleteChainError",
    "ManipulatorError",
    "UnknownIdError",
    "WrongCapabilityError",
    "PositionResult",
]
