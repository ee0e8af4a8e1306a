"""Shared fixtures for HoneyBear tests."""
import random

import pytest

from honeybear.config import FieldSettings
from honeybear.game import GameController
from honeybear.logging import configure_logging, disable_logging
from honeybear.models import Size


BEAR_SIZE = Size(width=80.0, height=80.0)
BEE_SIZE = Size(width=50.0, height=40.0)
HONEY_SIZE = Size(width=40.0, height=45.0)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep engine logging out of test output."""
    disable_logging()
    yield
    configure_logging(level='INFO')


@pytest.fixture
def settings(tmp_path):
    """800x600 field with five lanes and a save file in tmp_path."""
    return FieldSettings(
        window_width=800,
        window_height=600,
        lanes=(50.0, 150.0, 250.0, 350.0, 450.0),
        spawn_x_offsets=(20.0, 200.0, 350.0, 500.0, 650.0, 770.0),
        max_bees=3,
        max_honey=4,
        bee_move_period=0.007,
        honey_move_period=0.010,
        default_lives=3,
        bear_step_divisor=5.0,
        bee_step_divisor=40.0,
        honey_step_divisor=40.0,
        save_file=tmp_path / 'gamestate',
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def controller(settings, rng):
    """Controller with movers stopped; tests drive movers by hand."""
    game = GameController(
        bear_size=BEAR_SIZE,
        bee_size=BEE_SIZE,
        honey_size=HONEY_SIZE,
        settings=settings,
        rng=rng,
        autostart=False,
    )
    yield game
    game.shutdown()


@pytest.fixture
def running(controller):
    """Controller with a fresh game in progress."""
    controller.new_game()
    return controller
