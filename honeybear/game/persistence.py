"""
HoneyBear - Save game persistence.

A save is a plain text file with one semicolon-separated record per line,
no header:

    Bear;<eatenHoney:int>;<lives:int>;<x:float>;<y:float>
    Honey;<x:float>;<y:float>
    Bee;<x:float>;<y:float>

Exactly one Bear record is written first, then one record per honey pot
and per bee. Honey and Bee fields are x then y on both write and read.

Saves are single use: the controller deletes the file once it is loaded.
"""
import math
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from honeybear.logging import get_logger

log = get_logger('persistence')

FIELD_SEPARATOR = ';'
ENCODING = 'utf-8'

BEAR_RECORD = 'Bear'
HONEY_RECORD = 'Honey'
BEE_RECORD = 'Bee'


class PersistenceError(Exception):
    """Base class for save file failures."""


class PersistenceReadError(PersistenceError):
    """Save file is unreadable or malformed."""


class PersistenceWriteError(PersistenceError):
    """Save file could not be written."""


class PersistenceCleanupError(PersistenceError):
    """Save file could not be deleted."""


class BearRecord(BaseModel):
    """Persisted bear state. A saved bear always has lives left."""
    eaten_honey: int = Field(ge=0)
    lives: int = Field(ge=1)
    x: float
    y: float

    @field_validator('x', 'y')
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f'Coordinate must be finite, got {v}')
        return v

    model_config = ConfigDict(frozen=True)


class PositionRecord(BaseModel):
    """Persisted position of a honey pot or bee."""
    x: float
    y: float

    @field_validator('x', 'y')
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f'Coordinate must be finite, got {v}')
        return v

    model_config = ConfigDict(frozen=True)


class GameSnapshot(BaseModel):
    """Everything a save file holds."""
    bear: BearRecord
    honey: List[PositionRecord] = Field(default_factory=list)
    bees: List[PositionRecord] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


def _format_float(value: float) -> str:
    return repr(float(value))


def encode(snapshot: GameSnapshot) -> bytes:
    """Serialize a snapshot to the save file format."""
    bear = snapshot.bear
    lines = [FIELD_SEPARATOR.join((
        BEAR_RECORD,
        str(bear.eaten_honey),
        str(bear.lives),
        _format_float(bear.x),
        _format_float(bear.y),
    ))]

    for kind, records in ((HONEY_RECORD, snapshot.honey), (BEE_RECORD, snapshot.bees)):
        for record in records:
            lines.append(FIELD_SEPARATOR.join((
                kind, _format_float(record.x), _format_float(record.y),
            )))

    return ('\n'.join(lines) + '\n').encode(ENCODING)


def _expect_fields(tokens: List[str], count: int, line_no: int) -> None:
    if len(tokens) != count:
        raise PersistenceReadError(
            f"Line {line_no}: {tokens[0]} record needs {count - 1} fields, got {len(tokens) - 1}"
        )


def decode(data: bytes) -> GameSnapshot:
    """Parse a save file.

    Blank lines are ignored. Anything else that is not a well-formed
    record fails the whole decode.

    Raises:
        PersistenceReadError: If the data is malformed
    """
    try:
        text = data.decode(ENCODING)
    except UnicodeDecodeError as e:
        raise PersistenceReadError(f"Save file is not valid text: {e}") from e

    bear = None
    honey: List[PositionRecord] = []
    bees: List[PositionRecord] = []

    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        tokens = line.strip().split(FIELD_SEPARATOR)
        kind = tokens[0]

        try:
            if kind == BEAR_RECORD:
                _expect_fields(tokens, 5, line_no)
                if bear is not None:
                    raise PersistenceReadError(f"Line {line_no}: duplicate Bear record")
                bear = BearRecord(
                    eaten_honey=int(tokens[1]),
                    lives=int(tokens[2]),
                    x=float(tokens[3]),
                    y=float(tokens[4]),
                )
            elif kind in (HONEY_RECORD, BEE_RECORD):
                _expect_fields(tokens, 3, line_no)
                record = PositionRecord(x=float(tokens[1]), y=float(tokens[2]))
                (honey if kind == HONEY_RECORD else bees).append(record)
            else:
                raise PersistenceReadError(f"Line {line_no}: unknown record kind {kind!r}")
        except ValueError as e:
            raise PersistenceReadError(f"Line {line_no}: {e}") from e

    if bear is None:
        raise PersistenceReadError("Save file has no Bear record")

    return GameSnapshot(bear=bear, honey=honey, bees=bees)


class SaveFile:
    """The single save slot on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> GameSnapshot:
        """Read and decode the save file.

        Raises:
            PersistenceReadError: If the file cannot be read or is malformed
        """
        try:
            data = self.path.read_bytes()
        except OSError as e:
            raise PersistenceReadError(f"Cannot read {self.path}: {e}") from e
        return decode(data)

    def write(self, snapshot: GameSnapshot) -> None:
        """Replace any existing save with this snapshot.

        Raises:
            PersistenceWriteError: If the file cannot be written
        """
        self.delete()
        try:
            self.path.write_bytes(encode(snapshot))
        except OSError as e:
            raise PersistenceWriteError(f"Cannot write {self.path}: {e}") from e
        log.debug("Saved game to %s", self.path)

    def remove(self) -> None:
        """Delete the save file if present.

        Raises:
            PersistenceCleanupError: If the file exists but cannot be deleted
        """
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceCleanupError(f"Cannot delete {self.path}: {e}") from e

    def delete(self) -> bool:
        """Best-effort delete; failures are logged, not raised.

        Returns:
            True if no save file remains
        """
        try:
            self.remove()
        except PersistenceCleanupError as e:
            log.warning("%s", e)
            return False
        return True
