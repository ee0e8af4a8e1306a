"""
Data models for HoneyBear.

- Primitives: geometric types (Point2D, Size, Rectangle)
- Enums: GameStatus, Direction, GameEvent
- Entities: Bear, Bee, Honey
- Scores: HighScore, HighScoreTable

Usage:
    >>> from honeybear.models import Bear, Bee, HighScore
    >>> from honeybear.models.primitives import Rectangle
"""

from .primitives import (
    Point2D,
    Size,
    Rectangle,
)

from .enums import (
    GameStatus,
    Direction,
    GameEvent,
)

from .entities import (
    LaneEntity,
    Bear,
    Bee,
    Honey,
)

from .scores import (
    HighScore,
    HighScoreTable,
)

__all__ = [
    # Primitives
    'Point2D',
    'Size',
    'Rectangle',
    # Enums
    'GameStatus',
    'Direction',
    'GameEvent',
    # Entities
    'LaneEntity',
    'Bear',
    'Bee',
    'Honey',
    # Scores
    'HighScore',
    'HighScoreTable',
]
