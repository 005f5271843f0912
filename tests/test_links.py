"""Tests for link variants."""

import pytest

from jax_manipulator.core import Camera, Capability, Gripper, Link, Orientation


def test_link_construction():
    """Links keep their static state and start with the given orientation."""
    link = Link(3, 1.5, prev_id=2, pitch=0.1, yaw=0.2, roll=0.3)

    assert link.id == 3
    assert link.length == 1.5
    assert link.prev_id == 2
    assert link.orientation == Orientation(0.1, 0.2, 0.3)
    assert link.capabilities == frozenset()


def test_link_defaults_attach_to_base():
    link = Link(1, 1.0)
    assert link.prev_id == 0
    assert link.orientation == Orientation(0.0, 0.0, 0.0)


@pytest.mark.parametrize("link_id", [0, -1])
def test_link_rejects_non_positive_id(link_id):
    with pytest.raises(ValueError, match="link id must be positive"):
        Link(link_id, 1.0)


def test_link_rejects_negative_length():
    with pytest.raises(ValueError, match="non-negative"):
        Link(1, -0.5)


@pytest.mark.parametrize("length", [float("nan"), float("inf"), float("-inf")])
def test_link_rejects_non_finite_length(length):
    """NaN and infinite lengths never reach the kinematics."""
    with pytest.raises(ValueError, match="finite and non-negative"):
        Link(1, length)


def test_link_rejects_negative_prev_id():
    with pytest.raises(ValueError, match="prev_id"):
        Link(2, 1.0, prev_id=-1)


def test_static_fields_are_read_only():
    """Id, length and parent cannot be reassigned after construction."""
    link = Link(1, 1.0)
    with pytest.raises(AttributeError):
        link.id = 5
    with pytest.raises(AttributeError):
        link.length = 2.0
    with pytest.raises(AttributeError):
        link.prev_id = 3


def test_set_direction_accepts_any_angles():
    """Orientation updates are not range-checked."""
    link = Link(1, 1.0)
    link.set_direction(10.0, -4.0, 7.0)
    assert link.orientation == Orientation(10.0, -4.0, 7.0)


def test_gripper_open_close():
    gripper = Gripper(4, 0.2, prev_id=3)

    assert gripper.supports(Capability.GRIPPER)
    assert not gripper.supports(Capability.CAMERA)
    assert not gripper.is_open

    gripper.open(0.5)
    assert gripper.aperture == 0.5
    assert gripper.is_open

    gripper.close()
    assert gripper.aperture == 0.0
    assert not gripper.is_open


def test_gripper_rejects_negative_angle():
    gripper = Gripper(4, 0.2, prev_id=3)
    with pytest.raises(ValueError, match="non-negative"):
        gripper.open(-0.1)
    assert gripper.aperture == 0.0


def test_gripper_accepts_initial_orientation():
    gripper = Gripper(2, 0.5, prev_id=1, pitch=0.4, yaw=0.1)
    assert gripper.orientation == Orientation(0.4, 0.1, 0.0)


def test_variants_accept_positional_orientation():
    """Variants take pitch, yaw and roll positionally, like a plain link."""
    gripper = Gripper(2, 0.5, 1, 0.4, 0.1, 0.2)
    camera = Camera(3, 0.5, 1, 0.3)

    assert gripper.prev_id == 1
    assert gripper.orientation == Orientation(0.4, 0.1, 0.2)
    assert camera.orientation == Orientation(0.3, 0.0, 0.0)


def test_camera_records_captures():
    """Each photo bumps the counter and remembers the orientation."""
    camera = Camera(5, 0.1, prev_id=2)

    assert camera.supports(Capability.CAMERA)
    assert not camera.supports(Capability.GRIPPER)
    assert camera.photo_count == 0
    assert camera.last_capture is None

    assert camera.take_photo() == 1
    camera.set_direction(0.3, 0.2)
    assert camera.take_photo() == 2

    assert camera.photo_count == 2
    assert camera.last_capture == Orientation(0.3, 0.2, 0.0)


def test_describe():
    """Descriptions name the variant and its state."""
    assert Link(1, 1.0).describe().startswith("Link 1 (prev 0): r=1")
    assert "aperture=0" in Gripper(2, 0.5, prev_id=1).describe()
    assert "photos=0" in Camera(3, 0.5, prev_id=1).describe()
