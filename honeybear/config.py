"""
HoneyBear - Configuration loader.

Field dimensions, lanes, spawn limits and mover periods. Every value can be
overridden from the environment or from a .env file next to this package.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


def _get_float_list(key: str, default: Tuple[float, ...]) -> Tuple[float, ...]:
    """Get comma separated floats from environment."""
    raw = os.getenv(key)
    if not raw:
        return default
    return tuple(float(part) for part in raw.split(',') if part.strip())


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 800)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 600)

# Lanes entities travel in (y coordinates)
LANES = _get_float_list('LANES', (50.0, 150.0, 250.0, 350.0, 450.0))

# Spawn x coordinates, offset by the entity width at spawn time
SPAWN_X_OFFSETS = _get_float_list('SPAWN_X_OFFSETS', (20.0, 200.0, 350.0, 500.0, 650.0, 770.0))

# Capacity
MAX_BEES = _get_int('MAX_BEES', 3)
MAX_HONEY = _get_int('MAX_HONEY', 4)

# Mover periods (seconds); bees move faster than honey
BEE_MOVE_PERIOD = _get_float('BEE_MOVE_PERIOD', 0.007)
HONEY_MOVE_PERIOD = _get_float('HONEY_MOVE_PERIOD', 0.010)

# Spawn/collision tick period used by the headless runner
TICK_INTERVAL = _get_float('TICK_INTERVAL', 1 / 60)

# Game rules
DEFAULT_LIVES = _get_int('DEFAULT_LIVES', 3)

# Sprite dimensions (pixels)
BEAR_WIDTH = _get_float('BEAR_WIDTH', 80.0)
BEAR_HEIGHT = _get_float('BEAR_HEIGHT', 80.0)
BEE_WIDTH = _get_float('BEE_WIDTH', 50.0)
BEE_HEIGHT = _get_float('BEE_HEIGHT', 40.0)
HONEY_WIDTH = _get_float('HONEY_WIDTH', 40.0)
HONEY_HEIGHT = _get_float('HONEY_HEIGHT', 45.0)

# Step lengths are the sprite size divided by these
BEAR_STEP_DIVISOR = _get_float('BEAR_STEP_DIVISOR', 5.0)
BEE_STEP_DIVISOR = _get_float('BEE_STEP_DIVISOR', 40.0)
HONEY_STEP_DIVISOR = _get_float('HONEY_STEP_DIVISOR', 40.0)

# Persistence
SAVE_FILE = os.getenv('SAVE_FILE', 'gamestate')


@dataclass
class FieldSettings:
    """Field geometry and tuning shared by every engine component."""
    window_width: float = SCREEN_WIDTH
    window_height: float = SCREEN_HEIGHT
    lanes: Tuple[float, ...] = LANES
    spawn_x_offsets: Tuple[float, ...] = SPAWN_X_OFFSETS
    max_bees: int = MAX_BEES
    max_honey: int = MAX_HONEY
    bee_move_period: float = BEE_MOVE_PERIOD
    honey_move_period: float = HONEY_MOVE_PERIOD
    default_lives: int = DEFAULT_LIVES
    bear_step_divisor: float = BEAR_STEP_DIVISOR
    bee_step_divisor: float = BEE_STEP_DIVISOR
    honey_step_divisor: float = HONEY_STEP_DIVISOR
    save_file: Path = field(default_factory=lambda: Path(SAVE_FILE))

    def __post_init__(self) -> None:
        if not self.lanes:
            raise ValueError("At least one lane is required")
        if not self.spawn_x_offsets:
            raise ValueError("At least one spawn x offset is required")
        self.save_file = Path(self.save_file)


def default_settings() -> FieldSettings:
    """Settings built from the environment-backed constants."""
    return FieldSettings()
