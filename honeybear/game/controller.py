"""
HoneyBear - Game controller.

The controller is the single entry point for the presentation layer. It
owns the bear, the bee and honey collections, the run status, the high
score table and the two background movers.

Concurrency:
    The movers run on their own threads. Every read or write of the
    entity collections, the bear and the status happens under one
    re-entrant lock, and a tick (spawn plus consumption) holds it for its
    whole duration so a hit is never counted twice against a bee that is
    moving concurrently.

Usage:
    controller = GameController(bear_size, bee_size, honey_size)
    if controller.can_load_game():
        controller.load_game()
    else:
        controller.new_game()

    # each frame
    controller.move_player(Direction.UP)
    controller.tick()

    controller.shutdown()
"""
import random
import sys
import threading
from dataclasses import dataclass
from typing import Callable, List, NoReturn, Optional, Tuple

from honeybear import config
from honeybear.config import FieldSettings
from honeybear.game.collisions import resolve_collisions
from honeybear.game.movers import MoverScheduler, advance
from honeybear.game.persistence import (
    BearRecord,
    GameSnapshot,
    PersistenceReadError,
    PersistenceWriteError,
    PositionRecord,
    SaveFile,
)
from honeybear.game.spawner import EntitySpawner
from honeybear.logging import get_logger
from honeybear.models import (
    Bear,
    Bee,
    Direction,
    GameEvent,
    GameStatus,
    HighScore,
    HighScoreTable,
    Honey,
    Size,
)

log = get_logger('controller')

StatusListener = Callable[[GameEvent, GameStatus, GameStatus], None]


@dataclass
class TickResult:
    """Summary of one tick."""
    spawned_bee: Optional[Bee] = None
    spawned_honey: Optional[Honey] = None
    honey_eaten: int = 0
    stings: int = 0
    game_over: bool = False


class GameController:
    """Game state machine for one bear on one field.

    Status is PAUSED or RUNNING; game over is computed from the bear.
    """

    def __init__(
        self,
        bear_size: Optional[Size] = None,
        bee_size: Optional[Size] = None,
        honey_size: Optional[Size] = None,
        settings: Optional[FieldSettings] = None,
        rng: Optional[random.Random] = None,
        autostart: bool = True,
    ):
        """Initialize the controller.

        Args:
            bear_size: Bear sprite size (defaults from config)
            bee_size: Bee sprite size (defaults from config)
            honey_size: Honey sprite size (defaults from config)
            settings: Field geometry and tuning (defaults from config)
            rng: Random source for lanes and spawn points
            autostart: Start the background movers immediately
        """
        self.settings = settings or config.default_settings()
        self.bear_size = bear_size or Size(width=config.BEAR_WIDTH, height=config.BEAR_HEIGHT)
        self.bee_size = bee_size or Size(width=config.BEE_WIDTH, height=config.BEE_HEIGHT)
        self.honey_size = honey_size or Size(width=config.HONEY_WIDTH, height=config.HONEY_HEIGHT)

        self._lock = threading.RLock()
        self._status = GameStatus.PAUSED
        self._bear: Optional[Bear] = None
        self._bees: List[Bee] = []
        self._honey: List[Honey] = []
        self._high_scores = HighScoreTable()
        self._listeners: List[StatusListener] = []

        self._spawner = EntitySpawner(self.settings, rng)
        self._save_file = SaveFile(self.settings.save_file)
        self._scheduler = MoverScheduler(
            move_bees=self.move_bees,
            move_honey=self.move_honey,
            bee_period=self.settings.bee_move_period,
            honey_period=self.settings.honey_move_period,
        )

        if autostart:
            self._scheduler.start()

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def bear(self) -> Optional[Bear]:
        """The live bear object. The presentation layer must not mutate it."""
        return self._bear

    @property
    def bees(self) -> List[Bee]:
        """Snapshot of the bees on the field."""
        with self._lock:
            return list(self._bees)

    @property
    def honey_pots(self) -> List[Honey]:
        """Snapshot of the honey pots on the field."""
        with self._lock:
            return list(self._honey)

    @property
    def high_scores(self) -> List[HighScore]:
        """High scores, best first."""
        return self._high_scores.entries

    @property
    def score(self) -> int:
        bear = self._bear
        return bear.eaten_honey if bear is not None else 0

    @property
    def movers_running(self) -> bool:
        return self._scheduler.is_running

    def is_game_running(self) -> bool:
        return self._status == GameStatus.RUNNING

    def is_paused(self) -> bool:
        return self._status == GameStatus.PAUSED

    def is_game_over(self) -> bool:
        bear = self._bear
        return bear is None or bear.lives <= 0

    def can_load_game(self) -> bool:
        return self._save_file.exists()

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a status listener.

        Listeners are called as ``listener(event, old_status, new_status)``
        on the thread that caused the change, after the lock is released.

        Returns:
            Unsubscribe function
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: GameEvent, old: GameStatus, new: GameStatus) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, old, new)
            except Exception:
                log.exception("Error in status listener")

    def _set_status(self, status: GameStatus) -> Optional[Tuple[GameStatus, GameStatus]]:
        """Change status; returns (old, new) if it changed. Caller holds the lock."""
        old = self._status
        if old == status:
            return None
        self._status = status
        log.info("Status %s -> %s", old.name, status.name)
        return old, status

    # =========================================================================
    # State transitions
    # =========================================================================

    def pause(self) -> None:
        with self._lock:
            change = self._set_status(GameStatus.PAUSED)
        if change:
            self._notify(GameEvent.STATUS_CHANGED, *change)

    def resume(self) -> bool:
        """Set RUNNING unless the game is over.

        Returns:
            True if the game is running afterwards
        """
        with self._lock:
            if self.is_game_over():
                log.debug("Resume rejected: game is over")
                return False
            change = self._set_status(GameStatus.RUNNING)
        if change:
            self._notify(GameEvent.STATUS_CHANGED, *change)
        return True

    def _default_bear(self) -> Bear:
        size = self.bear_size
        return Bear(
            width=size.width,
            height=size.height,
            x=0.0,
            y=max(0.0, (self.settings.window_height - size.height) / 2),
            step_divisor=self.settings.bear_step_divisor,
            lives=self.settings.default_lives,
        )

    def new_game(self) -> None:
        """Discard any save and start over with a fresh bear."""
        self._save_file.delete()
        with self._lock:
            self._bees.clear()
            self._honey.clear()
            self._bear = self._default_bear()
            change = self._set_status(GameStatus.RUNNING)
        log.info("New game started")
        if change:
            self._notify(GameEvent.STATUS_CHANGED, *change)

    def add_high_score(self, entry: HighScore) -> None:
        self._high_scores.add(entry)
        log.debug("High score added: %s", entry)

    # =========================================================================
    # Persistence
    # =========================================================================

    def _snapshot(self) -> GameSnapshot:
        bear = self._bear
        return GameSnapshot(
            bear=BearRecord(
                eaten_honey=bear.eaten_honey,
                lives=bear.lives,
                x=bear.x,
                y=bear.y,
            ),
            honey=[PositionRecord(x=pot.x, y=pot.y) for pot in self._honey],
            bees=[PositionRecord(x=bee.x, y=bee.y) for bee in self._bees],
        )

    def save_game(self) -> bool:
        """Write the current game to the save file.

        Nothing is written once the game is over. Write failures are
        logged and otherwise ignored.

        Returns:
            True if a save file was written
        """
        with self._lock:
            if self.is_game_over():
                log.debug("Game over, nothing to save")
                return False
            snapshot = self._snapshot()

        try:
            self._save_file.write(snapshot)
        except PersistenceWriteError as e:
            log.warning("Save failed: %s", e)
            return False
        return True

    def load_game(self) -> bool:
        """Restore the saved game, or start a new one if the save is bad.

        Does nothing when there is no save file. A loaded save is deleted.

        Returns:
            True if a save was loaded
        """
        if not self.can_load_game():
            return False

        try:
            snapshot = self._save_file.read()
        except PersistenceReadError as e:
            log.warning("Could not load save, starting a new game: %s", e)
            self.new_game()
            return False

        settings = self.settings
        with self._lock:
            self._bear = Bear(
                width=self.bear_size.width,
                height=self.bear_size.height,
                x=snapshot.bear.x,
                y=snapshot.bear.y,
                step_divisor=settings.bear_step_divisor,
                lives=snapshot.bear.lives,
                eaten_honey=snapshot.bear.eaten_honey,
            )
            self._honey = [
                Honey(width=self.honey_size.width, height=self.honey_size.height,
                      x=r.x, y=r.y, step_divisor=settings.honey_step_divisor)
                for r in snapshot.honey
            ]
            self._bees = [
                Bee(width=self.bee_size.width, height=self.bee_size.height,
                    x=r.x, y=r.y, step_divisor=settings.bee_step_divisor)
                for r in snapshot.bees
            ]
            change = self._set_status(GameStatus.RUNNING)

        self._save_file.delete()
        log.info(
            "Loaded save: %d honey eaten, %d lives, %d bees, %d honey pots",
            snapshot.bear.eaten_honey, snapshot.bear.lives,
            len(snapshot.bees), len(snapshot.honey),
        )
        if change:
            self._notify(GameEvent.STATUS_CHANGED, *change)
        return True

    def shutdown(self) -> None:
        """Stop the background movers."""
        self._scheduler.shutdown()

    def exit(self) -> NoReturn:
        """Pause, save, stop the movers and end the process."""
        if not self.is_paused():
            self.pause()
        self.save_game()
        self.shutdown()
        log.info("Exiting")
        sys.exit(0)

    # =========================================================================
    # Simulation
    # =========================================================================

    def move_player(self, direction: Direction) -> bool:
        """Take one bear step; a step that would leave the field is dropped.

        Returns:
            True if the bear moved
        """
        with self._lock:
            bear = self._bear
            if bear is None or not self.is_game_running():
                return False

            # Only the axis being moved is bounds-checked
            if direction in (Direction.UP, Direction.DOWN):
                step = bear.vertical_step()
                y = bear.y - step if direction == Direction.UP else bear.y + step
                if not 0 <= y <= self.settings.window_height - step:
                    return False
                bear.y = y
            else:
                step = bear.horizontal_step()
                x = bear.x - step if direction == Direction.LEFT else bear.x + step
                if not 0 <= x <= self.settings.window_width - bear.width:
                    return False
                bear.x = x
            return True

    def move_bees(self) -> int:
        """One bee mover step. Returns the number of bees recycled."""
        with self._lock:
            if not self.is_game_running():
                return 0
            return advance(self._bees, self.settings.window_width, self._spawner.random_lane)

    def move_honey(self) -> int:
        """One honey mover step. Returns the number of pots recycled."""
        with self._lock:
            if not self.is_game_running():
                return 0
            return advance(self._honey, self.settings.window_width, self._spawner.random_lane)

    def spawn(self) -> Tuple[Optional[Bee], Optional[Honey]]:
        """Apply the spawn policy once for bees and once for honey."""
        with self._lock:
            if not self.is_game_running():
                return None, None
            bee = self._spawner.spawn_bee(self._bees, self.bee_size)
            honey = self._spawner.spawn_honey(self._honey, self.honey_size)
            return bee, honey

    def _consume(self) -> Tuple[TickResult, Optional[Tuple[GameStatus, GameStatus]]]:
        """Consumption pass. Caller holds the lock and has checked RUNNING."""
        result = resolve_collisions(self._bear, self._bees, self._honey)
        self._honey[:] = result.remaining_honey
        self._bees[:] = result.remaining_bees

        if result.honey_eaten:
            log.debug("Ate %d honey (total %d)", result.honey_eaten, self._bear.eaten_honey)
        if result.stings:
            log.info("Stung by %d bee(s), %d lives left", result.stings, self._bear.lives)

        change = self._end_if_over()
        return TickResult(
            honey_eaten=result.honey_eaten,
            stings=result.stings,
            game_over=change is not None,
        ), change

    def _end_if_over(self) -> Optional[Tuple[GameStatus, GameStatus]]:
        """Pause a running game whose bear is dead. Caller holds the lock."""
        if self.is_game_over() and self.is_game_running():
            log.info("Game over with score %d", self.score)
            return self._set_status(GameStatus.PAUSED)
        return None

    def consume(self) -> TickResult:
        """Resolve bear contact with honey and bees.

        Eaten honey and stinging bees are removed after both collections
        have been scanned. If the bear runs out of lives the game is
        paused and GAME_OVER observers are notified.
        """
        with self._lock:
            if not self.is_game_running() or self._bear is None:
                return TickResult()
            result, change = self._consume()

        if change:
            self._notify(GameEvent.GAME_OVER, *change)
        return result

    def tick(self) -> TickResult:
        """One simulation tick: spawn, then consume, atomically.

        A running game whose bear is already dead is paused and GAME_OVER
        observers are notified instead.
        """
        with self._lock:
            change = self._end_if_over()
            if change is None:
                if not self.is_game_running():
                    return TickResult(game_over=self.is_game_over())
                bee = self._spawner.spawn_bee(self._bees, self.bee_size)
                honey = self._spawner.spawn_honey(self._honey, self.honey_size)
                result, change = self._consume()
                result.spawned_bee = bee
                result.spawned_honey = honey
            else:
                result = TickResult(game_over=True)

        if change:
            self._notify(GameEvent.GAME_OVER, *change)
        return result
