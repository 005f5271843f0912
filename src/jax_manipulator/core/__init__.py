"""Core data structures for JAX Manipulator.

This module provides the link variants, the immutable chain snapshot used by
the kinematics functions, and the Manipulator registry that owns the links.
"""

from .link import Camera, Capability, Gripper, Link, Orientation
from .chain_model import ChainModel
from .manipulator import Manipulator

__all__ = ["Camera", "Capability", "Gripper", "Link", "Orientation", "ChainModel", "Manipulator"]
