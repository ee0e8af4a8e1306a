"""
HoneyBear - Background movers.

Bees and honey pots are advanced by two independent periodic tasks, each on
its own daemon thread. The tasks are owned by a MoverScheduler which the
game controller starts and shuts down explicitly.
"""
import threading
import time
from typing import Callable, Iterable, Optional

from honeybear.logging import get_logger
from honeybear.models import LaneEntity

log = get_logger('movers')


def advance(
    entities: Iterable[LaneEntity],
    window_width: float,
    pick_lane: Callable[[], float],
) -> int:
    """Move every entity one step to the left.

    An entity whose next position would be fully off the left edge
    (``new_x <= -width``) is recycled to ``window_width + width`` on a
    freshly picked lane instead.

    Args:
        entities: Entities to move in place
        window_width: Field width in pixels
        pick_lane: Returns the lane for a recycled entity

    Returns:
        Number of entities recycled
    """
    recycled = 0
    for entity in entities:
        new_x = entity.x - entity.horizontal_step()
        if new_x > -entity.width:
            entity.x = new_x
        else:
            entity.recycle(window_width, pick_lane())
            recycled += 1
    return recycled


class PeriodicTask:
    """Runs an action at a fixed rate on a daemon thread until stopped."""

    def __init__(self, name: str, period: float, action: Callable[[], None]):
        if period <= 0:
            raise ValueError(f"Period must be positive, got {period}")
        self.name = name
        self.period = period
        self._action = action
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            log.warning("%s already running", self.name)
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        log.debug("%s started (period %.3fs)", self.name, self.period)

    def stop(self, timeout: float = 1.0) -> None:
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            # Keep the reference so start() cannot launch a second thread
            log.warning("%s did not stop within %.1fs", self.name, timeout)
            return
        self._thread = None
        log.debug("%s stopped", self.name)

    def _run(self) -> None:
        next_run = time.monotonic() + self.period

        while not self._stop_event.wait(max(0.0, next_run - time.monotonic())):
            try:
                self._action()
            except Exception:
                log.exception("%s action failed", self.name)

            next_run += self.period
            now = time.monotonic()
            if next_run < now:
                # Fell behind; drop the missed runs instead of bursting
                next_run = now + self.period


class MoverScheduler:
    """Owns the bee mover and the honey mover.

    Both run concurrently with each other and with the caller's thread.
    """

    def __init__(
        self,
        move_bees: Callable[[], None],
        move_honey: Callable[[], None],
        bee_period: float,
        honey_period: float,
    ):
        self._tasks = [
            PeriodicTask('bee-mover', bee_period, move_bees),
            PeriodicTask('honey-mover', honey_period, move_honey),
        ]

    @property
    def is_running(self) -> bool:
        return any(task.is_running for task in self._tasks)

    def start(self) -> None:
        for task in self._tasks:
            task.start()

    def shutdown(self, timeout: float = 1.0) -> None:
        """Stop both movers and wait for their threads to finish."""
        for task in self._tasks:
            task.stop(timeout=timeout)
