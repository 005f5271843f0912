"""
JAX transforms for spherical-joint link chains.

This module provides pure, JIT-compilable implementations of:
- spherical-to-Cartesian link displacements (spherical module)
- chain accumulation and point distances

All functions are stateless and operate on JAX arrays.
"""

from . import spherical

__all__ = [
    "spherical",
]
