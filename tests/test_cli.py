"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from partspace.cli import main
from partspace.core.config import PartspaceConfig
from partspace.scene.description import BoxDescription, NodeDescription, SceneDescription
from partspace.scene.transform import Transform3D


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def scene_file(tmp_path):
    """Two unit cubes five units apart and an empty marker."""
    cube = BoxDescription(min=(-0.5, -0.5, -0.5), max=(0.5, 0.5, 0.5))
    desc = SceneDescription(
        name="Test",
        root=NodeDescription(
            name="root",
            children=[
                NodeDescription(name="a", box=cube),
                NodeDescription(name="b", transform=Transform3D(position=(3.0, 4.0, 0.0)), box=cube),
                NodeDescription(name="marker", transform=Transform3D(position=(0.0, 2.0, 0.0), scale=2.0)),
            ],
        ),
    )
    path = tmp_path / "scene.json"
    desc.save(path)
    return str(path)


class TestSceneCommands:
    """Test the measurement commands."""

    def test_measure(self, runner, scene_file):
        """Test measure lists every node."""
        result = runner.invoke(main, ["measure", scene_file])

        assert result.exit_code == 0
        assert "marker" in result.output

    def test_measure_single_node(self, runner, scene_file):
        """Test measure can be limited to a subtree."""
        result = runner.invoke(main, ["measure", scene_file, "--node", "b"])

        assert result.exit_code == 0
        assert "marker" not in result.output

    def test_distance(self, runner, scene_file):
        """Test distance between cube centers."""
        result = runner.invoke(main, ["distance", scene_file, "a", "b"])

        assert result.exit_code == 0
        assert "5.0000" in result.output

    def test_offset(self, runner, scene_file):
        """Test offset is reported in the source parent's frame."""
        result = runner.invoke(main, ["offset", scene_file, "a", "b"])

        assert result.exit_code == 0
        assert "root frame" in result.output
        assert "(3.000, 4.000, 0.000)" in result.output

    def test_extreme(self, runner, scene_file):
        """Test extreme point along +X."""
        result = runner.invoke(main, ["extreme", scene_file, "b", "--direction", "1", "0", "0"])

        assert result.exit_code == 0
        assert "(3.500, 4.000, 0.000)" in result.output

    def test_extreme_zero_direction(self, runner, scene_file):
        """Test a zero direction aborts."""
        result = runner.invoke(main, ["extreme", scene_file, "b", "-d", "0", "0", "0"])

        assert result.exit_code != 0

    def test_to_local(self, runner, scene_file):
        """Test world-to-local through a scaled node."""
        result = runner.invoke(main, ["to-local", scene_file, "marker", "2", "2", "0"])

        assert result.exit_code == 0
        assert "(1.000, 0.000, 0.000)" in result.output

    def test_to_world(self, runner, scene_file):
        """Test local-to-world through a scaled node."""
        result = runner.invoke(main, ["to-world", scene_file, "marker", "1", "0", "0"])

        assert result.exit_code == 0
        assert "(2.000, 2.000, 0.000)" in result.output

    def test_unknown_node(self, runner, scene_file):
        """Test an unknown node name aborts."""
        result = runner.invoke(main, ["distance", scene_file, "a", "missing"])

        assert result.exit_code != 0
        assert "not found" in result.output

    def test_invalid_scene(self, runner, tmp_path):
        """Test a malformed scene file aborts."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        result = runner.invoke(main, ["measure", str(path)])

        assert result.exit_code != 0


class TestClassifyCommand:
    """Test the damper classification command."""

    def test_left(self, runner):
        """Test a left damper command."""
        result = runner.invoke(main, ["classify", "open left damper"])

        assert result.exit_code == 0
        assert "top_left" in result.output
        assert "bottom_left" in result.output

    def test_config_default_side(self, runner, tmp_path):
        """Test the default side is read from the config file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"commands": {"default_side": "right"}}))

        result = runner.invoke(main, ["-c", str(path), "classify", "open damper"])

        assert result.exit_code == 0
        assert "top_right" in result.output

    def test_missing_keyword_warns(self, runner):
        """Test a warning when the keyword is absent."""
        result = runner.invoke(main, ["classify", "open door"])

        assert result.exit_code == 0
        assert "No 'damper' keyword" in result.output


class TestInitConfig:
    """Test config file generation."""

    def test_writes_default_config(self, runner, tmp_path):
        """Test the written file loads back as the default config."""
        output = tmp_path / "partspace.json"

        result = runner.invoke(main, ["init-config", "-o", str(output)])

        assert result.exit_code == 0
        assert PartspaceConfig.from_file(output) == PartspaceConfig.default()
