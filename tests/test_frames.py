"""Tests for world/local frame conversion."""

import numpy as np
import pytest

from partspace.scene.node import SceneNode
from partspace.scene.transform import Transform3D
from partspace.spatial.frames import local_to_world, world_to_local


def make_chain():
    """Root -> arm -> hand with translation, rotation and scale."""
    root = SceneNode(name="root", transform=Transform3D(position=(10.0, 0.0, 0.0)))
    arm = root.add_child(SceneNode(
        name="arm",
        transform=Transform3D(rotation=(0.0, 0.0, 90.0), scale=2.0),
    ))
    hand = arm.add_child(SceneNode(
        name="hand",
        transform=Transform3D(position=(1.0, 0.0, 0.0), rotation=(30.0, -15.0, 60.0), scale=(1.0, 0.5, 3.0)),
    ))
    return root, arm, hand


class TestLocalToWorld:
    """Test local-to-world conversion."""

    def test_translation(self):
        """Test a root translation shifts points."""
        root, _, _ = make_chain()
        result = local_to_world([1.0, 2.0, 3.0], root)
        np.testing.assert_array_almost_equal(result, [11.0, 2.0, 3.0])

    def test_rotation_and_scale_chain(self):
        """Test ancestors are composed root to node."""
        root, arm, _ = make_chain()

        # Scale 2, rotate x -> y, then translate by 10 along x
        result = local_to_world([1.0, 0.0, 0.0], arm)

        np.testing.assert_array_almost_equal(result, [10.0, 2.0, 0.0])

    def test_input_not_mutated(self):
        """Test the point is copied, not transformed in place."""
        root, _, hand = make_chain()
        point = np.array([1.0, 1.0, 1.0])

        local_to_world(point, hand)

        np.testing.assert_array_equal(point, [1.0, 1.0, 1.0])


class TestWorldToLocal:
    """Test world-to-local conversion."""

    def test_inverse_of_translation(self):
        """Test the frame origin maps to the local origin."""
        root, _, _ = make_chain()
        result = world_to_local([10.0, 0.0, 0.0], root)
        np.testing.assert_array_almost_equal(result, [0.0, 0.0, 0.0])

    def test_inverse_of_chain(self):
        """Test world-to-local undoes the composed transform."""
        root, arm, _ = make_chain()
        result = world_to_local([10.0, 2.0, 0.0], arm)
        np.testing.assert_array_almost_equal(result, [1.0, 0.0, 0.0])

    @pytest.mark.parametrize("point", [
        (0.0, 0.0, 0.0),
        (1.5, -2.0, 7.25),
        (-100.0, 42.0, 0.001),
    ])
    def test_round_trip(self, point):
        """Test localToWorld(worldToLocal(p)) == p for every frame."""
        root, arm, hand = make_chain()

        for frame in (root, arm, hand):
            local = world_to_local(point, frame)
            back = local_to_world(local, frame)
            np.testing.assert_array_almost_equal(back, point, decimal=9)

    def test_uses_current_transform(self):
        """Test an ancestor edit is picked up without manual refresh."""
        root, arm, _ = make_chain()
        world_to_local([0.0, 0.0, 0.0], arm)

        root.transform.position = (0.0, 0.0, 0.0)
        result = world_to_local([0.0, 2.0, 0.0], arm)

        np.testing.assert_array_almost_equal(result, [1.0, 0.0, 0.0])

    def test_singular_frame_raises(self):
        """Test a zero scale makes the frame non-invertible."""
        root = SceneNode(name="root")
        flat = root.add_child(SceneNode(name="flat", transform=Transform3D(scale=(1.0, 0.0, 1.0))))

        with pytest.raises(np.linalg.LinAlgError):
            world_to_local([1.0, 1.0, 1.0], flat)
