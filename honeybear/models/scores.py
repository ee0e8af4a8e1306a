"""
High score models.

High scores live for the session only; they are never written to the
save file.
"""
import threading
from typing import List, Optional

from pydantic import BaseModel, field_validator, ConfigDict


class HighScore(BaseModel):
    """Immutable high score entry.

    Attributes:
        name: Player name or identifier
        score: Honey pots eaten (non-negative)

    Examples:
        >>> entry = HighScore(name="Bamse", score=12)
        >>> entry.score
        12
    """
    name: str
    score: int

    @field_validator('score')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate score is non-negative.

        Raises:
            ValueError: If score is negative
        """
        if v < 0:
            raise ValueError(f'Score must be non-negative, got {v}')
        return v

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.name}: {self.score}"


class HighScoreTable:
    """High score list kept sorted by score, highest first.

    Order among equal scores is unspecified.
    """

    def __init__(self):
        self._entries: List[HighScore] = []
        self._lock = threading.Lock()

    def add(self, entry: HighScore) -> None:
        """Insert an entry and re-sort descending by score."""
        with self._lock:
            self._entries.append(entry)
            self._entries.sort(key=lambda e: e.score, reverse=True)

    @property
    def entries(self) -> List[HighScore]:
        """Snapshot of the entries, highest score first."""
        with self._lock:
            return list(self._entries)

    @property
    def best(self) -> Optional[HighScore]:
        with self._lock:
            return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
