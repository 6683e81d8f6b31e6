"""Damper animation command classification.

Free-text input such as "open right damper" is mapped onto one of two fixed
command tables. The side is taken from the text preceding the trigger
keyword; when neither side is named, the default side (left) is used.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Literal, Sequence

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

Side = Literal["left", "right"]

DEFAULT_KEYWORD = "damper"


class DoorType(str, Enum):
    """Doors an animation command can target."""

    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


class AnimationAction(str, Enum):
    """What an animation command does to its door."""

    OPEN = "open"
    CLOSE = "close"
    SET_DEGREES = "set_degrees"
    SET_SPEED = "set_speed"


class AnimationCommand(BaseModel):
    """A single door animation step."""

    door: DoorType
    action: AnimationAction
    degrees: float | None = Field(default=None, description="Target opening angle in degrees")
    speed: float | None = Field(default=None, gt=0, description="Animation speed factor")

    model_config = {"frozen": True}


DAMPER_COMMANDS: dict[str, tuple[AnimationCommand, ...]] = {
    "left": (
        AnimationCommand(door=DoorType.TOP_LEFT, action=AnimationAction.OPEN, degrees=45, speed=3),
        AnimationCommand(door=DoorType.BOTTOM_LEFT, action=AnimationAction.OPEN, degrees=180, speed=3),
    ),
    "right": (
        AnimationCommand(door=DoorType.TOP_RIGHT, action=AnimationAction.OPEN, degrees=45, speed=3),
        AnimationCommand(door=DoorType.BOTTOM_RIGHT, action=AnimationAction.OPEN, degrees=180, speed=3),
    ),
}


def _normalize(text: str) -> str:
    return " ".join(text.lower().split())


def detect_side(text: str, keyword: str = DEFAULT_KEYWORD) -> Side | None:
    """Return the side named before the keyword, or None if not named.

    If the keyword does not occur, the whole text is searched.
    """
    normalized = _normalize(text)
    index = normalized.find(keyword.lower())
    before = normalized if index < 0 else normalized[:index]

    if "left" in before:
        return "left"
    if "right" in before:
        return "right"
    return None


def get_damper_animation_commands(
    text: str,
    keyword: str = DEFAULT_KEYWORD,
    default_side: Side = "left",
) -> list[AnimationCommand]:
    """Map free-text input to the damper command table for its side.

    Args:
        text: User input, e.g. "open left damper"
        keyword: Trigger keyword that the side modifier precedes
        default_side: Side used when the text names neither side

    Returns:
        A new list with the side's commands
    """
    side = detect_side(text, keyword)
    if side is None:
        logger.debug(f"No side in {text!r}, defaulting to {default_side}")
        side = default_side
    else:
        logger.debug(f"Detected {side} damper in {text!r}")
    return list(DAMPER_COMMANDS[side])


def is_damper_command(text: str, keyword: str = DEFAULT_KEYWORD) -> bool:
    """Check whether the input mentions the trigger keyword."""
    return keyword.lower() in _normalize(text)


def are_damper_commands(commands: Sequence[AnimationCommand]) -> bool:
    """Check whether commands are exactly one side's damper table (any order)."""
    for table in DAMPER_COMMANDS.values():
        if len(commands) == len(table) and all(cmd in commands for cmd in table):
            return True
    return False
