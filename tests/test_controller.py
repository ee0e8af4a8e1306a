"""
Tests for GameController.

Covers the status machine, player movement bounds, the tick, observer
notifications and the save/load policies. Movers are driven by hand
except in the threaded tests at the end.
"""

import random
from unittest.mock import Mock

import pytest

from honeybear.game import GameController, SaveFile
from honeybear.game.persistence import BearRecord, GameSnapshot, PositionRecord
from honeybear.models import (
    Bee,
    Direction,
    GameEvent,
    GameStatus,
    HighScore,
    Honey,
    Size,
)

BEAR_SIZE = Size(width=80.0, height=80.0)
BEE_SIZE = Size(width=50.0, height=40.0)
HONEY_SIZE = Size(width=40.0, height=45.0)


def place_bee_on_bear(controller):
    bear = controller.bear
    bee = Bee(width=50.0, height=40.0, x=bear.x + 10.0, y=bear.y + 10.0)
    controller._bees.append(bee)
    return bee


# ============================================================================
# Status
# ============================================================================


class TestStatus:
    """Test the PAUSED/RUNNING state machine."""

    def test_initial_state(self, controller):
        assert controller.status == GameStatus.PAUSED
        assert controller.bear is None
        assert controller.is_game_over()
        assert controller.bees == []
        assert controller.honey_pots == []

    def test_resume_without_game_rejected(self, controller):
        assert controller.resume() is False
        assert controller.is_paused()

    def test_new_game(self, controller):
        controller.new_game()
        bear = controller.bear
        assert controller.is_game_running()
        assert bear.lives == 3
        assert bear.eaten_honey == 0
        assert (bear.x, bear.y) == (0.0, 260.0)
        assert controller.score == 0

    def test_new_game_clears_field(self, running):
        place_bee_on_bear(running)
        running._honey.append(Honey(width=40.0, height=45.0, x=300.0, y=50.0))
        running.new_game()
        assert running.bees == []
        assert running.honey_pots == []

    def test_pause_and_resume(self, running):
        running.pause()
        assert running.is_paused()
        assert running.resume() is True
        assert running.is_game_running()

    def test_resume_rejected_when_game_over(self, running):
        running.pause()
        running.bear.lives = 0
        assert running.resume() is False
        assert running.status == GameStatus.PAUSED

    @pytest.mark.parametrize('lives,over', [(3, False), (1, False), (0, True), (-1, True)])
    def test_game_over_iff_no_lives(self, running, lives, over):
        running.bear.lives = lives
        assert running.is_game_over() is over

    def test_collections_are_snapshots(self, running):
        place_bee_on_bear(running)
        running.bees.clear()
        assert len(running.bees) == 1


# ============================================================================
# Player movement
# ============================================================================


class TestMovePlayer:
    """Test bear steps and field bounds."""

    def test_steps(self, running):
        bear = running.bear
        assert running.move_player(Direction.RIGHT)
        assert bear.x == 16.0
        assert running.move_player(Direction.DOWN)
        assert bear.y == 276.0
        assert running.move_player(Direction.UP)
        assert running.move_player(Direction.LEFT)
        assert (bear.x, bear.y) == (0.0, 260.0)

    def test_left_edge(self, running):
        assert running.move_player(Direction.LEFT) is False
        assert running.bear.x == 0.0

    def test_top_edge(self, running):
        running.bear.y = 10.0
        assert running.move_player(Direction.UP) is False
        assert running.bear.y == 10.0

    def test_bottom_edge(self, running):
        """Test that y may not pass window height minus one vertical step."""
        running.bear.y = 568.0
        assert running.move_player(Direction.DOWN) is True
        assert running.bear.y == 584.0
        assert running.move_player(Direction.DOWN) is False

    def test_right_edge(self, running):
        running.bear.x = 720.0
        assert running.move_player(Direction.RIGHT) is False
        assert running.bear.x == 720.0

    def test_ignored_while_paused(self, running):
        running.pause()
        assert running.move_player(Direction.RIGHT) is False
        assert running.bear.x == 0.0

    def test_out_of_bounds_y_does_not_block_horizontal_moves(self, controller, settings):
        """Test that a bear loaded below the field can still move sideways."""
        settings.save_file.write_bytes(b"Bear;0;3;100.0;590.0\n")
        controller.load_game()

        assert controller.move_player(Direction.RIGHT) is True
        assert controller.bear.x == 116.0
        assert controller.bear.y == 590.0

    def test_out_of_bounds_x_does_not_block_vertical_moves(self, controller, settings):
        settings.save_file.write_bytes(b"Bear;0;3;900.0;300.0\n")
        controller.load_game()

        assert controller.move_player(Direction.UP) is True
        assert controller.bear.y == 284.0
        assert controller.bear.x == 900.0

    def test_random_walk_stays_on_field(self, running):
        rng = random.Random(99)
        bear = running.bear
        for _ in range(1000):
            running.move_player(rng.choice(list(Direction)))
            assert 0 <= bear.x <= 800 - bear.width
            assert 0 <= bear.y <= 600 - bear.vertical_step()


# ============================================================================
# Movers and spawning
# ============================================================================


class TestSimulation:
    """Test spawning, movers and consumption through the controller."""

    def test_spawn_respects_caps(self, running):
        running.bear.y = 584.0
        for _ in range(100):
            running.spawn()
        assert len(running.bees) == 3
        assert len(running.honey_pots) == 4

    def test_spawn_ignored_while_paused(self, running):
        running.pause()
        assert running.spawn() == (None, None)
        assert running.bees == []

    def test_movers_noop_while_paused(self, running):
        bee = Bee(width=50.0, height=40.0, x=400.0, y=50.0)
        running._bees.append(bee)
        running.pause()
        assert running.move_bees() == 0
        assert running.move_honey() == 0
        assert bee.x == 400.0

    def test_move_bees(self, running):
        bee = Bee(width=50.0, height=40.0, x=400.0, y=50.0)
        running._bees.append(bee)
        running.move_bees()
        assert bee.x == 398.75

    def test_recycled_bee_lands_on_a_lane(self, running, settings):
        bee = Bee(width=50.0, height=40.0, x=-49.0, y=50.0)
        running._bees.append(bee)
        assert running.move_bees() == 1
        assert bee.x == 850.0
        assert bee.y in settings.lanes

    def test_consume_sting(self, running):
        """Test one overlapping bee costs one life and only it is removed."""
        stinger = place_bee_on_bear(running)
        bystander = Bee(width=50.0, height=40.0, x=600.0, y=50.0)
        running._bees.append(bystander)

        result = running.consume()

        assert result.stings == 1
        assert running.bear.lives == 2
        assert running.bees == [bystander]
        assert stinger not in running.bees

    def test_consume_honey(self, running):
        running._honey.append(Honey(width=40.0, height=45.0, x=20.0, y=270.0))
        result = running.consume()
        assert result.honey_eaten == 1
        assert running.score == 1
        assert running.honey_pots == []

    def test_tick_spawns_and_consumes(self, running):
        running.bear.y = 584.0
        result = running.tick()
        assert result.spawned_bee in running.bees
        assert result.spawned_honey in running.honey_pots
        assert not result.game_over

    def test_tick_while_paused(self, running):
        running.pause()
        result = running.tick()
        assert result.spawned_bee is None
        assert not result.game_over
        assert running.bees == []

    def test_caps_hold_over_many_ticks(self, running, settings):
        rng = random.Random(5)
        for _ in range(500):
            running.move_player(rng.choice(list(Direction)))
            running.tick()
            running.move_bees()
            running.move_honey()
            assert len(running.bees) <= settings.max_bees
            assert len(running.honey_pots) <= settings.max_honey


# ============================================================================
# Observers
# ============================================================================


class TestObservers:
    """Test STATUS_CHANGED and GAME_OVER notifications."""

    def test_status_changes_notified(self, controller):
        listener = Mock()
        controller.subscribe(listener)

        controller.new_game()
        listener.assert_called_once_with(
            GameEvent.STATUS_CHANGED, GameStatus.PAUSED, GameStatus.RUNNING
        )

        controller.pause()
        listener.assert_called_with(
            GameEvent.STATUS_CHANGED, GameStatus.RUNNING, GameStatus.PAUSED
        )

    def test_no_notification_without_change(self, running):
        listener = Mock()
        running.subscribe(listener)
        running.resume()
        listener.assert_not_called()

    def test_unsubscribe(self, controller):
        listener = Mock()
        unsubscribe = controller.subscribe(listener)
        unsubscribe()
        controller.new_game()
        listener.assert_not_called()

    def test_failing_listener_does_not_break_others(self, controller):
        controller.subscribe(Mock(side_effect=RuntimeError("boom")))
        listener = Mock()
        controller.subscribe(listener)
        controller.new_game()
        listener.assert_called_once()
        assert controller.is_game_running()

    def test_game_over_on_last_sting(self, running):
        """Test that losing the last life pauses and notifies in the same tick."""
        listener = Mock()
        running.subscribe(listener)
        running.bear.lives = 1
        place_bee_on_bear(running)

        result = running.tick()

        assert result.game_over
        assert running.is_game_over()
        assert running.status == GameStatus.PAUSED
        listener.assert_called_once_with(
            GameEvent.GAME_OVER, GameStatus.RUNNING, GameStatus.PAUSED
        )

    def test_tick_ends_game_with_dead_bear(self, running):
        listener = Mock()
        running.subscribe(listener)
        running.bear.lives = 0

        result = running.tick()

        assert result.game_over
        assert running.is_paused()
        listener.assert_called_once_with(
            GameEvent.GAME_OVER, GameStatus.RUNNING, GameStatus.PAUSED
        )

    def test_game_over_notified_once(self, running):
        listener = Mock()
        running.subscribe(listener)
        running.bear.lives = 0
        running.tick()
        running.tick()
        assert listener.call_count == 1


# ============================================================================
# High scores
# ============================================================================


class TestHighScores:
    def test_sorted_descending(self, controller):
        for score in [50, 200, 10]:
            controller.add_high_score(HighScore(name="bear", score=score))
        assert [e.score for e in controller.high_scores] == [200, 50, 10]


# ============================================================================
# Save and load
# ============================================================================


class TestSaveLoad:
    """Test the save/load policies."""

    def test_round_trip(self, running, settings):
        """Test bear stats and honey positions survive a save and load."""
        bear = running.bear
        bear.eaten_honey, bear.lives, bear.x, bear.y = 3, 2, 10.0, 20.0
        running._honey.append(Honey(width=40.0, height=45.0, x=5.0, y=15.0))

        assert running.save_game() is True
        assert settings.save_file.exists()

        other = GameController(BEAR_SIZE, BEE_SIZE, HONEY_SIZE, settings=settings, autostart=False)
        assert other.can_load_game()
        assert other.load_game() is True

        loaded = other.bear
        assert (loaded.eaten_honey, loaded.lives, loaded.x, loaded.y) == (3, 2, 10.0, 20.0)
        assert [(h.x, h.y) for h in other.honey_pots] == [(5.0, 15.0)]
        assert other.bees == []
        assert other.is_game_running()
        assert not settings.save_file.exists()

    def test_loaded_entities_keep_their_speed(self, controller, settings):
        SaveFile(settings.save_file).write(GameSnapshot(
            bear=BearRecord(eaten_honey=0, lives=3, x=0.0, y=0.0),
            bees=[PositionRecord(x=400.0, y=50.0)],
        ))
        controller.load_game()
        controller.move_bees()
        assert controller.bees[0].x == 398.75

    def test_load_without_save_is_noop(self, controller):
        assert controller.can_load_game() is False
        assert controller.load_game() is False
        assert controller.is_paused()
        assert controller.bear is None

    def test_malformed_save_starts_new_game(self, controller, settings):
        settings.save_file.write_bytes(b"Bear;x;2;1.0;2.0\n")

        assert controller.load_game() is False

        assert controller.is_game_running()
        assert controller.bear.lives == 3
        assert controller.score == 0
        assert not settings.save_file.exists()

    def test_save_skipped_when_game_over(self, running, settings):
        running.bear.lives = 0
        assert running.save_game() is False
        assert not settings.save_file.exists()

    def test_save_skipped_without_bear(self, controller, settings):
        assert controller.save_game() is False
        assert not settings.save_file.exists()

    def test_save_replaces_old_file(self, running, settings):
        settings.save_file.write_bytes(b"stale")
        running.save_game()
        assert settings.save_file.read_bytes().startswith(b"Bear;0;3;")

    def test_save_failure_is_reported(self, running, settings):
        settings.save_file.mkdir()
        assert running.save_game() is False

    def test_new_game_discards_save(self, running, settings):
        running.save_game()
        running.new_game()
        assert not running.can_load_game()

    def test_exit_saves_and_stops(self, running, settings):
        listener = Mock()
        running.subscribe(listener)

        with pytest.raises(SystemExit) as exc_info:
            running.exit()

        assert exc_info.value.code == 0
        assert running.is_paused()
        assert settings.save_file.exists()
        assert not running.movers_running
        listener.assert_called_once_with(
            GameEvent.STATUS_CHANGED, GameStatus.RUNNING, GameStatus.PAUSED
        )


# ============================================================================
# Threaded movers
# ============================================================================


class TestThreadedMovers:
    """Test the controller with its background movers running."""

    def test_autostart_and_shutdown(self, settings):
        game = GameController(BEAR_SIZE, BEE_SIZE, HONEY_SIZE, settings=settings)
        try:
            assert game.movers_running
        finally:
            game.shutdown()
        assert not game.movers_running

    def test_ticks_while_movers_run(self, settings):
        game = GameController(
            BEAR_SIZE, BEE_SIZE, HONEY_SIZE,
            settings=settings, rng=random.Random(11),
        )
        game.new_game()
        try:
            for _ in range(300):
                game.tick()
                for bee in game.bees:
                    assert -bee.width <= bee.x <= settings.window_width + bee.width
                    assert bee.y in settings.lanes
                assert len(game.bees) <= settings.max_bees
                assert len(game.honey_pots) <= settings.max_honey
        finally:
            game.shutdown()
