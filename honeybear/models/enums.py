"""
HoneyBear enumerations.
"""

from enum import Enum


class GameStatus(str, Enum):
    """Stored run status of the simulation.

    GAME_OVER is not a member: it is computed from the bear
    (absent or out of lives) by GameController.is_game_over().

    Attributes:
        PAUSED: Movers and ticks are no-ops
        RUNNING: Movers advance entities, ticks spawn and resolve collisions
    """
    PAUSED = "paused"
    RUNNING = "running"


class Direction(str, Enum):
    """One discrete bear step."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class GameEvent(str, Enum):
    """Notifications delivered to status observers.

    Attributes:
        STATUS_CHANGED: Status moved between PAUSED and RUNNING
        GAME_OVER: A tick found the bear dead; the game has been paused
    """
    STATUS_CHANGED = "status_changed"
    GAME_OVER = "game_over"
