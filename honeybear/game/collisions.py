"""
HoneyBear - Collision and consumption rules.

The bear eats every honey pot it overlaps and is stung by every bee it
overlaps. Both collections are scanned in full before anything is removed;
the survivors are rebuilt from the scan instead of deleting in place.
"""
from dataclasses import dataclass, field
from typing import List, Sequence

from honeybear.models import Bear, Bee, Honey, LaneEntity


def overlaps(a: LaneEntity, b: LaneEntity) -> bool:
    """Axis-aligned bounding box test on the entities' current positions."""
    return a.bounds().intersects(b.bounds())


@dataclass
class CollisionResult:
    """Outcome of one consumption pass."""
    eaten: List[Honey] = field(default_factory=list)
    stung_by: List[Bee] = field(default_factory=list)
    remaining_honey: List[Honey] = field(default_factory=list)
    remaining_bees: List[Bee] = field(default_factory=list)

    @property
    def honey_eaten(self) -> int:
        return len(self.eaten)

    @property
    def stings(self) -> int:
        return len(self.stung_by)


def resolve_collisions(
    bear: Bear,
    bees: Sequence[Bee],
    honey: Sequence[Honey],
) -> CollisionResult:
    """Apply one consumption pass to the bear.

    Each overlapping honey pot adds one to ``bear.eaten_honey``; each
    overlapping bee takes one life. The bear's counters are updated in
    place; the input collections are not modified.

    Returns:
        CollisionResult with the consumed entities and the survivors
    """
    eaten = [pot for pot in honey if overlaps(bear, pot)]
    for _ in eaten:
        bear.eat_honey()

    stung_by = [bee for bee in bees if overlaps(bear, bee)]
    for _ in stung_by:
        bear.sting()

    eaten_ids = {id(pot) for pot in eaten}
    stung_ids = {id(bee) for bee in stung_by}

    return CollisionResult(
        eaten=eaten,
        stung_by=stung_by,
        remaining_honey=[pot for pot in honey if id(pot) not in eaten_ids],
        remaining_bees=[bee for bee in bees if id(bee) not in stung_ids],
    )
