"""
Geometry value types for the field.

Screen coordinates: x grows to the right, y grows downwards, and an
entity's position is the top-left corner of its sprite box.
"""

from pydantic import BaseModel, field_validator, computed_field, ConfigDict


class Point2D(BaseModel):
    """A position on the field.

    Negative x is normal for bees and honey pots that are sliding off
    the left edge.

    Examples:
        >>> Point2D(x=70.0, y=250.0).y
        250.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"


class Size(BaseModel):
    """Sprite box handed in by the presentation layer.

    Step lengths are derived from it, so a bigger sprite moves further
    per step.

    Attributes:
        width: Box width in pixels (> 0)
        height: Box height in pixels (> 0)
    """
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f'Size dimensions must be positive, got {v}')
        return v

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.width:.0f}x{self.height:.0f}"


class Rectangle(BaseModel):
    """Collision box of an entity at its current position.

    Examples:
        >>> bear = Rectangle(x=0.0, y=260.0, width=80.0, height=80.0)
        >>> bee = Rectangle(x=80.0, y=250.0, width=50.0, height=40.0)
        >>> bear.intersects(bee)
        True
    """
    x: float
    y: float
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f'Rectangle dimensions must be positive, got {v}')
        return v

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def right(self) -> float:
        return self.x + self.width

    @computed_field
    @property
    def bottom(self) -> float:
        return self.y + self.height

    def intersects(self, other: 'Rectangle') -> bool:
        """Axis-aligned overlap test.

        Boxes that only touch along an edge or at a corner overlap, so a
        bee grazing the bear still stings.
        """
        separated = (
            other.x > self.right
            or other.right < self.x
            or other.y > self.bottom
            or other.bottom < self.y
        )
        return not separated
