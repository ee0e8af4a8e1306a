"""
HoneyBear game engine.

- controller: GameController, the operation contract for the presentation layer
- spawner: spawn policy and lane selection
- movers: background bee/honey movers
- collisions: consumption rules
- persistence: save file codec
"""

from .controller import GameController, TickResult
from .persistence import (
    GameSnapshot,
    PersistenceError,
    PersistenceReadError,
    PersistenceWriteError,
    PersistenceCleanupError,
    SaveFile,
)

__all__ = [
    'GameController',
    'TickResult',
    'GameSnapshot',
    'PersistenceError',
    'PersistenceReadError',
    'PersistenceWriteError',
    'PersistenceCleanupError',
    'SaveFile',
]
