"""Tests for JSON scene descriptions."""

import gc

import numpy as np
import pytest
from pydantic import ValidationError

from partspace.scene.description import BoxDescription, NodeDescription, SceneDescription
from partspace.scene.transform import Transform3D
from partspace.spatial.bounds import compute_precise_world_bounds


def make_description():
    """Fridge body with a door hinge group and one door panel."""
    return SceneDescription(
        name="Fridge",
        root=NodeDescription(
            name="fridge",
            children=[
                NodeDescription(name="body", box=BoxDescription(min=(-1, 0, -1), max=(1, 4, 1))),
                NodeDescription(
                    name="hinge",
                    transform=Transform3D(position=(1.0, 2.0, 1.0)),
                    children=[
                        NodeDescription(
                            name="door",
                            box=BoxDescription(min=(-2, -2, 0), max=(0, 2, 0.1)),
                        ),
                    ],
                ),
            ],
        ),
    )


class TestSceneDescription:
    """Test building and persisting described scenes."""

    def test_build_tree(self):
        """Test the node tree mirrors the description."""
        root = make_description().build()

        assert root.name == "fridge"
        assert [c.name for c in root.children] == ["body", "hinge"]
        assert root.mesh is None

        door = root.find("door")
        assert door.parent is root.find("hinge")
        assert door.mesh is not None

    def test_built_bounds(self):
        """Test built geometry lands where the description places it."""
        root = make_description().build()

        box = compute_precise_world_bounds(root.find("door"))

        np.testing.assert_array_almost_equal(box.min, [-1, 0, 1])
        np.testing.assert_array_almost_equal(box.max, [1, 4, 1.1])

    def test_build_does_not_share_transforms(self):
        """Test editing a built node leaves the description unchanged."""
        desc = make_description()
        root = desc.build()

        root.find("hinge").transform.position = (0.0, 0.0, 0.0)

        assert desc.root.children[1].transform.position == (1.0, 2.0, 1.0)

    def test_held_node_keeps_ancestor_transforms(self):
        """Test a node taken from a built tree still sees its ancestors."""
        desc = SceneDescription(
            root=NodeDescription(
                name="root",
                transform=Transform3D(position=(10.0, 0.0, 0.0)),
                children=[NodeDescription(name="part", box=BoxDescription(min=(-1, -1, -1), max=(1, 1, 1)))],
            ),
        )

        part = desc.build().find("part")
        gc.collect()

        assert part.parent is not None
        assert part.parent.name == "root"
        np.testing.assert_array_almost_equal(compute_precise_world_bounds(part).center, [10, 0, 0])

    def test_save_load(self, tmp_path):
        """Test JSON persistence."""
        desc = make_description()
        path = tmp_path / "scene.json"

        desc.save(path)
        loaded = SceneDescription.load(path)

        assert loaded.name == "Fridge"
        assert loaded.root.children[1].children[0].box.max == (0.0, 2.0, 0.1)
        assert loaded.root.children[1].transform.position == (1.0, 2.0, 1.0)

    def test_inverted_box_rejected(self):
        """Test min must not exceed max."""
        with pytest.raises(ValidationError):
            BoxDescription(min=(0, 0, 1), max=(1, 1, 0))
