"""Free-text animation command classification."""

from .damper import (
    DAMPER_COMMANDS,
    AnimationAction,
    AnimationCommand,
    DoorType,
    are_damper_commands,
    detect_side,
    get_damper_animation_commands,
    is_damper_command,
)

__all__ = [
    "DAMPER_COMMANDS",
    "AnimationAction",
    "AnimationCommand",
    "DoorType",
    "are_damper_commands",
    "detect_side",
    "get_damper_animation_commands",
    "is_damper_command",
]
