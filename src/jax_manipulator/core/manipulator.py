"""Manipulator: registry of links and entry point for position queries."""

import logging
import threading
from typing import Dict, Iterator, List, Optional, Union

import jax.numpy as jnp
from jax import Array

from ..chain import evaluate_chain, position_jacobian, resolve_chain
from ..config import ManipulatorConfig
from ..errors import DuplicateIdError, ManipulatorError, UnknownIdError, WrongCapabilityError
from ..result import PositionResult
from .chain_model import ChainModel
from .link import Capability, Link

logger = logging.getLogger(__name__)


class Manipulator:
    """Owns every link of a manipulator, keyed by link id.

    Registry order never influences results: positions depend only on the
    ``prev_id`` chain of the queried link. A single re-entrant lock covers
    insertion, orientation updates and position reads.
    """

    def __init__(self, config: Optional[ManipulatorConfig] = None) -> None:
        self.config = config if config is not None else ManipulatorConfig()
        self._links: Dict[int, Link] = {}
        self._lock = threading.RLock()

    # Registry
    def add_link(self, link: Link) -> Optional[DuplicateIdError]:
        """Register ``link`` under its own id.

        Returns:
            None on success, or the DuplicateIdError when the id is taken. The
            registered link is left untouched in that case.
        """
        with self._lock:
            if link.id in self._links:
                error = DuplicateIdError(link.id)
                logger.warning("%s", error)
                return error
            self._links[link.id] = link
        logger.debug("Added %r", link)
        return None

    def get_link(self, link_id: int) -> Optional[Link]:
        with self._lock:
            return self._links.get(link_id)

    def _require(self, link_id: int) -> Link:
        link = self._links.get(link_id)
        if link is None:
            raise UnknownIdError(link_id)
        return link

    def set_direction(self, link_id: int, pitch: float, yaw: float, roll: float = 0.0) -> None:
        """Update a link's orientation. Range checks happen at position time."""
        with self._lock:
            self._require(link_id).set_direction(pitch, yaw, roll)
        logger.debug("Link %d direction set to pitch=%g yaw=%g roll=%g", link_id, pitch, yaw, roll)

    @property
    def link_ids(self) -> List[int]:
        with self._lock:
            return sorted(self._links)

    def links(self) -> List[Link]:
        """Registered links in ascending id order."""
        with self._lock:
            return [self._links[link_id] for link_id in sorted(self._links)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)

    def __contains__(self, link_id: object) -> bool:
        with self._lock:
            return link_id in self._links

    def __iter__(self) -> Iterator[Link]:
        return iter(self.links())

    # Capabilities
    def _capable(self, link_id: int, capability: Capability):
        link = self._require(link_id)
        if not link.supports(capability):
            error = WrongCapabilityError(link_id, capability)
            logger.warning("%s", error)
            return None, error
        return link, None

    def open_gripper(self, link_id: int, angle: float) -> Optional[WrongCapabilityError]:
        with self._lock:
            gripper, error = self._capable(link_id, Capability.GRIPPER)
            if gripper is not None:
                gripper.open(angle)
            return error

    def close_gripper(self, link_id: int) -> Optional[WrongCapabilityError]:
        with self._lock:
            gripper, error = self._capable(link_id, Capability.GRIPPER)
            if gripper is not None:
                gripper.close()
            return error

    def take_photo(self, link_id: int) -> Union[int, WrongCapabilityError]:
        """Take a photo with a camera link.

        Returns:
            The photo number, or a WrongCapabilityError if the link has no camera.
        """
        with self._lock:
            camera, error = self._capable(link_id, Capability.CAMERA)
            if camera is None:
                return error
            return camera.take_photo()

    # Kinematics
    def chain_model(self, link_id: int) -> ChainModel:
        """Resolve and snapshot the chain from the base to ``link_id``."""
        with self._lock:
            chain = resolve_chain(self._links, link_id, self.config.base_id)
            return ChainModel.from_links(self._links, chain)

    def calculate_position(self, link_id: int) -> PositionResult:
        """Absolute position of ``link_id`` in the base frame.

        Never raises for kinematic failures: an unknown id, an incomplete
        chain, a base-link domain violation or a collision all come back as a
        failed PositionResult.
        """
        try:
            model = self.chain_model(link_id)
        except ManipulatorError as error:
            logger.warning("%s", error)
            return PositionResult.failure(link_id, error)

        if model.num_links == 0:
            return PositionResult.success(link_id, (), jnp.zeros(3))

        positions, error = evaluate_chain(model, self.config)
        if error is not None:
            logger.warning("%s", error)
            return PositionResult.failure(link_id, error, model.link_ids)
        return PositionResult.success(link_id, model.link_ids, positions[-1])

    def link_positions(self, link_id: int) -> Dict[int, Array]:
        """Validated absolute positions of every link on the chain to ``link_id``.

        Raises:
            ManipulatorError: any error calculate_position would report
        """
        model = self.chain_model(link_id)
        positions, error = evaluate_chain(model, self.config)
        if error is not None:
            raise error
        return {chain_id: positions[i] for i, chain_id in enumerate(model.link_ids)}

    def position_jacobian(self, link_id: int) -> Array:
        """(3, 2n) Jacobian of the link position w.r.t. its chain's (pitch, yaw) pairs."""
        return position_jacobian(self.chain_model(link_id), link_id)

    # Structure
    def describe_structure(self) -> str:
        lines = ["--- Manipulator Structure ---"]
        lines.extend(link.describe() for link in self.links())
        lines.append("-" * 30)
        return "\n".join(lines)

    def log_structure(self, level: int = logging.INFO) -> None:
        logger.log(level, "\n%s", self.describe_structure())

    def __repr__(self) -> str:
        return f"Manipulator(links={self.link_ids}, config={self.config})"
