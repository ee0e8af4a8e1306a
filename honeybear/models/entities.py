"""
HoneyBear - Field entities.

The bear is driven by the player; bees and honey pots slide right to left
along lanes and are recycled at the right edge once they leave the field.
Entities are mutable and compare by identity, so two pots sharing a
position are still distinct.
"""
from dataclasses import dataclass

from .primitives import Point2D, Rectangle


@dataclass(eq=False)
class LaneEntity:
    """Anything with a sprite-sized box on the field.

    Movement speed derives from size: one horizontal step is
    ``width / step_divisor`` pixels.
    """
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0
    step_divisor: float = 40.0

    @property
    def position(self) -> Point2D:
        """Current top-left position."""
        return Point2D(x=self.x, y=self.y)

    def horizontal_step(self) -> float:
        """Pixels moved per horizontal step."""
        return self.width / self.step_divisor

    def bounds(self) -> Rectangle:
        """Bounding box for collision detection."""
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)

    def is_at(self, x: float, y: float) -> bool:
        """Exact position match, used for spawn uniqueness."""
        return self.x == x and self.y == y

    def recycle(self, window_width: float, lane: float) -> None:
        """Teleport to the right edge of the field on a new lane."""
        self.x = window_width + self.width
        self.y = lane


@dataclass(eq=False)
class Bee(LaneEntity):
    """Hazard: costs the bear a life on contact."""


@dataclass(eq=False)
class Honey(LaneEntity):
    """Collectible: counts towards the score when eaten."""


@dataclass(eq=False)
class Bear(LaneEntity):
    """The player character.

    Attributes:
        lives: Remaining lives; the game is over at zero
        eaten_honey: Honey pots eaten this game (the score)
    """
    step_divisor: float = 5.0
    lives: int = 3
    eaten_honey: int = 0

    @property
    def is_alive(self) -> bool:
        return self.lives > 0

    def vertical_step(self) -> float:
        """Pixels moved per vertical step."""
        return self.height / self.step_divisor

    def eat_honey(self) -> None:
        self.eaten_honey += 1

    def sting(self) -> None:
        self.lives -= 1
