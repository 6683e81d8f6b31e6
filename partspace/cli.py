"""Command-line interface for partspace.

Usage:
    partspace measure scene.json [--node NAME]
    partspace distance scene.json A B
    partspace offset scene.json SOURCE TARGET
    partspace extreme scene.json NODE --direction X Y Z
    partspace to-local scene.json NODE X Y Z
    partspace to-world scene.json NODE X Y Z
    partspace classify "open left damper"
    partspace init-config
"""

from __future__ import annotations

import logging
from typing import Sequence

import click
import numpy as np
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .commands.damper import get_damper_animation_commands, is_damper_command
from .core.config import PartspaceConfig
from .scene.description import SceneDescription
from .scene.node import SceneNode
from .spatial.queries import SpatialQueries

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False)],
    )


def _fmt(vec: Sequence[float]) -> str:
    return f"({vec[0]:.3f}, {vec[1]:.3f}, {vec[2]:.3f})"


def _load_scene(scene_file: str) -> SceneNode:
    """Load a scene description and build its node tree."""
    try:
        return SceneDescription.load(scene_file).build()
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[red]Error loading scene: {e}[/red]")
        raise click.Abort()


def _find_node(root: SceneNode, name: str) -> SceneNode:
    """Find a node by name or abort with an error."""
    node = root.find(name)
    if node is None:
        console.print(f"[red]Node '{name}' not found in scene[/red]")
        raise click.Abort()
    return node


def _relative_depth(node: SceneNode, start: SceneNode) -> int:
    depth = 0
    while node is not start and node.parent is not None:
        node = node.parent
        depth += 1
    return depth


def _queries(ctx: click.Context) -> SpatialQueries:
    cfg: PartspaceConfig = ctx.obj["config"]
    return SpatialQueries(cfg.bounds)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """partspace - World-space measurements for assembly scene graphs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)

    try:
        ctx.obj["config"] = PartspaceConfig.from_file(config) if config else PartspaceConfig.default()
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise click.Abort()


@main.command()
@click.argument("scene_file", type=click.Path(exists=True))
@click.option("--node", "-n", "node_name", default=None, help="Only measure this node's subtree")
@click.pass_context
def measure(ctx: click.Context, scene_file: str, node_name: str | None) -> None:
    """Show world-space center and size of every node.

    SCENE_FILE: Path to the scene description (JSON)
    """
    root = _load_scene(scene_file)
    start = _find_node(root, node_name) if node_name else root
    queries = _queries(ctx)

    table = Table(title=f"World bounds: {start.name or '<root>'}")
    table.add_column("Node", style="cyan")
    table.add_column("Center", style="green")
    table.add_column("Size", style="yellow")
    table.add_column("Mesh", style="dim")

    for node in start.iter_nodes():
        box = queries.compute_precise_world_bounds(node)
        indent = "  " * _relative_depth(node, start)
        size = box.size
        table.add_row(
            f"{indent}{node.name or '<unnamed>'}",
            _fmt(box.center),
            f"{size[0]:.3f} x {size[1]:.3f} x {size[2]:.3f}",
            "yes" if node.mesh is not None else "",
        )

    console.print(table)


@main.command()
@click.argument("scene_file", type=click.Path(exists=True))
@click.argument("first")
@click.argument("second")
@click.pass_context
def distance(ctx: click.Context, scene_file: str, first: str, second: str) -> None:
    """Show the distance between two nodes' world centers.

    SCENE_FILE: Path to the scene description (JSON)
    """
    root = _load_scene(scene_file)
    a = _find_node(root, first)
    b = _find_node(root, second)

    dist = _queries(ctx).get_world_distance(a, b)
    console.print(f"[cyan]{first}[/cyan] -> [cyan]{second}[/cyan]: [green]{dist:.4f}[/green]")


@main.command()
@click.argument("scene_file", type=click.Path(exists=True))
@click.argument("source")
@click.argument("target")
@click.pass_context
def offset(ctx: click.Context, scene_file: str, source: str, target: str) -> None:
    """Show the local position that moves SOURCE onto TARGET's center.

    SCENE_FILE: Path to the scene description (JSON)
    """
    root = _load_scene(scene_file)
    src = _find_node(root, source)
    dst = _find_node(root, target)

    local = _queries(ctx).get_local_offset(src, dst)
    frame = src.parent.name if src.parent is not None else "world"
    console.print(f"[cyan]Offset ({frame} frame):[/cyan] [green]{_fmt(local)}[/green]")


@main.command()
@click.argument("scene_file", type=click.Path(exists=True))
@click.argument("node_name")
@click.option(
    "--direction", "-d",
    nargs=3, type=float,
    default=(0.0, 1.0, 0.0),
    help="World direction (X Y Z)",
)
@click.pass_context
def extreme(
    ctx: click.Context,
    scene_file: str,
    node_name: str,
    direction: tuple[float, float, float],
) -> None:
    """Show the bounding-box surface point of a node in a world direction.

    SCENE_FILE: Path to the scene description (JSON)
    """
    root = _load_scene(scene_file)
    node = _find_node(root, node_name)

    try:
        point = _queries(ctx).get_extreme_world_position(node, direction)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()

    console.print(f"[cyan]Extreme point {_fmt(direction)}:[/cyan] [green]{_fmt(point)}[/green]")


@main.command("to-local")
@click.argument("scene_file", type=click.Path(exists=True))
@click.argument("node_name")
@click.argument("point", nargs=3, type=float)
@click.pass_context
def to_local(
    ctx: click.Context,
    scene_file: str,
    node_name: str,
    point: tuple[float, float, float],
) -> None:
    """Convert a world-space POINT into NODE_NAME's local frame.

    SCENE_FILE: Path to the scene description (JSON)
    """
    root = _load_scene(scene_file)
    node = _find_node(root, node_name)

    try:
        local = _queries(ctx).world_to_local(point, node)
    except np.linalg.LinAlgError:
        console.print(f"[red]Node '{node_name}' has a singular world transform[/red]")
        raise click.Abort()

    console.print(f"[cyan]Local ({node_name}):[/cyan] [green]{_fmt(local)}[/green]")


@main.command("to-world")
@click.argument("scene_file", type=click.Path(exists=True))
@click.argument("node_name")
@click.argument("point", nargs=3, type=float)
@click.pass_context
def to_world(
    ctx: click.Context,
    scene_file: str,
    node_name: str,
    point: tuple[float, float, float],
) -> None:
    """Convert a POINT in NODE_NAME's local frame into world space.

    SCENE_FILE: Path to the scene description (JSON)
    """
    root = _load_scene(scene_file)
    node = _find_node(root, node_name)

    world = _queries(ctx).local_to_world(point, node)
    console.print(f"[cyan]World:[/cyan] [green]{_fmt(world)}[/green]")


@main.command()
@click.argument("text")
@click.pass_context
def classify(ctx: click.Context, text: str) -> None:
    """Show the damper animation commands for a free-text input.

    TEXT: Command text, e.g. "open left damper"
    """
    params = ctx.obj["config"].commands

    if not is_damper_command(text, params.trigger_keyword):
        console.print(f"[yellow]No '{params.trigger_keyword}' keyword in input[/yellow]")

    commands = get_damper_animation_commands(
        text,
        keyword=params.trigger_keyword,
        default_side=params.default_side,
    )

    table = Table(title="Animation commands")
    table.add_column("Door", style="cyan")
    table.add_column("Action", style="green")
    table.add_column("Degrees", style="yellow")
    table.add_column("Speed", style="magenta")

    for cmd in commands:
        table.add_row(
            cmd.door.value,
            cmd.action.value,
            "" if cmd.degrees is None else f"{cmd.degrees:g}",
            "" if cmd.speed is None else f"{cmd.speed:g}",
        )

    console.print(table)


@main.command()
@click.option(
    "--output", "-o",
    type=click.Path(),
    default="partspace_config.json",
    help="Output path for config file",
)
def init_config(output: str) -> None:
    """Generate a default configuration file."""
    try:
        cfg = PartspaceConfig.default()
        cfg.to_file(output)
        console.print(f"[green]Created config file: {output}[/green]")
        console.print(f"Fallback box size: {cfg.bounds.fallback_box_size}")
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()


if __name__ == "__main__":
    main()
