"""
HoneyBear - Entity spawner.

Introduces bees and honey pots up to their caps at randomized spawn
points, and picks lanes for recycled entities.
"""
import random
from typing import List, Optional, Type, TypeVar

from honeybear.config import FieldSettings
from honeybear.logging import get_logger
from honeybear.models import Bee, Honey, LaneEntity, Point2D, Size

log = get_logger('spawner')

E = TypeVar('E', bound=LaneEntity)


class EntitySpawner:
    """Spawn policy for bees and honey.

    Each call draws one candidate spawn point: x from the fixed spawn
    offsets shifted by the entity width, y from the lanes. The candidate is
    used both for the uniqueness check and for the placement.
    """

    def __init__(self, settings: FieldSettings, rng: Optional[random.Random] = None):
        """Initialize the spawner.

        Args:
            settings: Field geometry, lanes and caps
            rng: Random source; a fresh unseeded one if omitted
        """
        self.settings = settings
        self._rng = rng or random.Random()

    def random_lane(self) -> float:
        """Pick a lane uniformly from the configured set."""
        return self._rng.choice(self.settings.lanes)

    def spawn_point(self, width: float) -> Point2D:
        """Draw a candidate spawn point for an entity of the given width."""
        x = self._rng.choice(self.settings.spawn_x_offsets) + width
        return Point2D(x=x, y=self.random_lane())

    def maybe_spawn(
        self,
        entities: List[E],
        cap: int,
        entity_type: Type[E],
        size: Size,
        step_divisor: float,
    ) -> Optional[E]:
        """Append a new entity unless the cap is reached or the spot is taken.

        Args:
            entities: Current collection, appended to in place
            cap: Maximum number of entities in the collection
            entity_type: Bee or Honey
            size: Sprite size of the new entity
            step_divisor: Speed divisor of the new entity

        Returns:
            The new entity, or None if nothing was spawned
        """
        if len(entities) >= cap:
            return None

        point = self.spawn_point(size.width)
        if any(entity.is_at(point.x, point.y) for entity in entities):
            log.trace("%s spawn point %s occupied", entity_type.__name__, point)
            return None

        entity = entity_type(
            width=size.width,
            height=size.height,
            x=point.x,
            y=point.y,
            step_divisor=step_divisor,
        )
        entities.append(entity)
        log.debug("Spawned %s at %s", entity_type.__name__, point)
        return entity

    def spawn_bee(self, bees: List[Bee], size: Size) -> Optional[Bee]:
        """Spawn a bee if fewer than max_bees are on the field."""
        return self.maybe_spawn(
            bees, self.settings.max_bees, Bee, size, self.settings.bee_step_divisor
        )

    def spawn_honey(self, honey: List[Honey], size: Size) -> Optional[Honey]:
        """Spawn a honey pot if fewer than max_honey are on the field."""
        return self.maybe_spawn(
            honey, self.settings.max_honey, Honey, size, self.settings.honey_step_divisor
        )
