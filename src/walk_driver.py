"""The walk itself: one step per tick until every cell is covered.

WalkDriver owns all walk state and talks to the outside world through two
callables:

    paint(coord, color)   color is an HSLA tuple, or None to erase the cell
    done(total_steps)     fired once, on the step that completes coverage

Steps are chained through a StepScheduler: each step queues the next one
``speed`` milliseconds after it finishes. Nothing runs concurrently, so
cancelling is just a flag plus a generation number that stale steps check.
"""

import heapq
import itertools
import logging
import time
from functools import partial

from walk_config import hsl_color, merge_settings
from walk_coverage import CoverageTracker
from walk_grid import clamp
from walk_history import PathHistory
from walk_walker import make_rng, next_coordinate

logger = logging.getLogger(__name__)

# --- Driver states ---
IDLE = "idle"
RUNNING = "running"
PAUSED = "paused"
COMPLETED = "completed"

DEFAULT_START = (0, 0)


def monotonic_ms():
    return time.monotonic() * 1000.0


# --- Scheduler ---


class StepScheduler:
    """Delayed callbacks on a single thread, fired by whoever polls."""

    def __init__(self, clock=monotonic_ms):
        self.clock = clock
        self._queue = []
        self._order = itertools.count()

    @property
    def pending(self):
        return len(self._queue)

    def schedule(self, delay_ms, callback):
        due = self.clock() + max(0.0, delay_ms)
        heapq.heappush(self._queue, (due, next(self._order), callback))

    def cancel_all(self):
        self._queue.clear()

    def poll(self):
        """Fire every callback that was due when the poll began."""
        now = self.clock()
        due = []
        while self._queue and self._queue[0][0] <= now:
            due.append(heapq.heappop(self._queue))
        for _, _, callback in due:
            callback()
        return len(due)

    def run_next(self):
        """Fire the earliest callback without waiting for it."""
        if not self._queue:
            return False
        _, _, callback = heapq.heappop(self._queue)
        callback()
        return True


# --- State ---


class WalkState:
    def __init__(self):
        self.current_position = None
        self.tick_count = 0
        self.is_running = False
        self.generation = 0


# --- Driver ---


class WalkDriver:
    def __init__(self, paint, done=None, on_restart=None, scheduler=None, rng=None):
        self.paint = paint
        self.done = done
        self.on_restart = on_restart
        self.scheduler = scheduler if scheduler is not None else StepScheduler()
        self.rng = rng if rng is not None else make_rng()

        self.settings = merge_settings()
        self.coverage = CoverageTracker(self.settings["grid_count"])
        self.history = PathHistory()
        self.state = WalkState()
        self.status = IDLE

    # --- Controls ---

    def restart(self, options=None, start=DEFAULT_START):
        """Apply ``options`` over the current settings and begin a fresh walk."""
        self.state.generation += 1
        self.scheduler.cancel_all()

        self.settings = merge_settings(options, base=self.settings)
        self.coverage.reset(self.settings["grid_count"])
        self.history.clear()
        self.state.tick_count = 0
        self.state.current_position = None
        start = start if start is not None else DEFAULT_START
        if self.on_restart is not None:
            self.on_restart(self.settings)

        logger.info(
            "Restarting walk: %dx%d grid, format=%s, minimum_opacity=%s",
            self.settings["grid_count"],
            self.settings["grid_count"],
            self.settings["format"],
            self.settings["minimum_opacity"],
        )
        self.state.is_running = True
        self.status = RUNNING
        self.step(start, generation=self.state.generation)

    def pause(self):
        if self.status != RUNNING:
            return
        self.state.is_running = False
        self.status = PAUSED
        logger.info("Paused at %s after %d steps", self.state.current_position, self.state.tick_count)

    def play(self, coord=None):
        """Resume a paused walk from where it stopped, or from ``coord``."""
        if self.status != PAUSED:
            logger.debug("play() ignored while %s", self.status)
            return
        # Anything still queued from before the pause belongs to the old chain.
        self.state.generation += 1
        self.state.is_running = True
        self.status = RUNNING
        logger.info("Resuming from %s", self.state.current_position)
        self.step(coord, generation=self.state.generation)

    def on_lattice(self, coord):
        """Pull an externally supplied coordinate onto the current lattice."""
        last = self.settings["grid_count"] - 1
        return (clamp(coord[0], 0, last), clamp(coord[1], 0, last))

    # --- Stepping ---

    def step(self, coord=None, generation=None):
        state = self.state
        if not state.is_running:
            return
        if generation is not None and generation != state.generation:
            return

        settings = self.settings
        if coord is None:
            coord = next_coordinate(state.current_position, settings["grid_count"], self.rng)
        else:
            coord = self.on_lattice(coord)

        evicted, still_present = self.history.push(coord, settings["path_limit"])
        if evicted is not None and not still_present and settings["format"] == "border":
            self.paint(evicted, None)

        color = hsl_color(state.tick_count * settings["hue_shift"], settings)
        self.paint(coord, color)
        state.tick_count += 1

        self.coverage.record(coord, color, settings["opacity"])
        state.current_position = coord

        if self.coverage.is_complete(settings["minimum_opacity"]):
            self._finish()
            return

        self.scheduler.schedule(
            settings["speed"], partial(self.step, generation=state.generation)
        )

    def _finish(self):
        if self.settings["format"] == "border":
            for coord in self.history:
                self.paint(coord, None)

        self.state.is_running = False
        self.status = COMPLETED
        logger.info("Walk complete after %d steps", self.state.tick_count)
        if self.done is not None:
            self.done(self.state.tick_count)

    # --- Progress ---

    def cells_remaining(self):
        return self.coverage.cells_below(self.settings["minimum_opacity"])

    @property
    def is_running(self):
        return self.state.is_running
