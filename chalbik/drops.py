"""
Drops, the Column Drop Tracker and the Drop Spawner.

Each column owns at most one active drop, a head that is still inside the
grid. Once the head falls past the bottom row the drop moves to the
column's fading list, where its trail keeps decaying until it is gone.
Columns never share state, so they can be processed in any order.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .config import RainSpeed
from .constants import SpeedTuning, Timing

logger = logging.getLogger(__name__)


@dataclass
class Drop:
    """One falling trail in one column."""
    column: int
    spawn_time: float
    speed_factor: float  # rows per second
    head_row: int = 0

    def advance(self, elapsed: float) -> int:
        """Recompute the head row for the given elapsed time."""
        rows = (elapsed - self.spawn_time) * self.speed_factor
        # Saturate; also absorbs inf from a runaway clock
        rows = min(max(rows, 0.0), float(Timing.MAX_HEAD_ROW))
        self.head_row = max(self.head_row, int(rows))
        return self.head_row

    def time_at_row(self, row: int) -> float:
        """Elapsed-time instant at which the head first reached ``row``."""
        return self.spawn_time + row / self.speed_factor

    def trail_rows(self, lifespan: float) -> int:
        """Rows the trail spans before it has fully decayed."""
        rows = min(max(0.0, lifespan) * self.speed_factor, float(Timing.MAX_HEAD_ROW))
        return int(math.ceil(rows))


@dataclass
class ColumnState:
    """Drops owned by a single column."""
    active: Optional[Drop] = None
    fading: List[Drop] = field(default_factory=list)

    def drops(self) -> List[Drop]:
        if self.active is None:
            return list(self.fading)
        return self.fading + [self.active]


class ColumnDropTracker:
    """Maps each column to its active and fading drops."""

    def __init__(self, width: int = 0, height: int = 0):
        self.width = 0
        self.height = 0
        self._columns: List[ColumnState] = []
        self.resize(width, height)

    def resize(self, width: int, height: int):
        """Adopt new grid dimensions, keeping drops in surviving columns."""
        width = max(0, width)
        height = max(0, height)
        if width < len(self._columns):
            del self._columns[width:]
        else:
            self._columns.extend(ColumnState() for _ in range(width - len(self._columns)))
        if (width, height) != (self.width, self.height):
            logger.debug(f"Tracker resized {self.width}x{self.height} -> {width}x{height}")
        self.width = width
        self.height = height

    def clear(self):
        self._columns = [ColumnState() for _ in range(self.width)]

    def column(self, column: int) -> ColumnState:
        if not 0 <= column < self.width:
            raise IndexError(f"Column {column} outside grid of width {self.width}")
        return self._columns[column]

    def active(self, column: int) -> Optional[Drop]:
        return self.column(column).active

    def fading(self, column: int) -> List[Drop]:
        return list(self.column(column).fading)

    def drops(self, column: int) -> List[Drop]:
        return self.column(column).drops()

    def active_count(self) -> int:
        return sum(1 for state in self._columns if state.active is not None)

    def spawn(self, column: int, elapsed: float, speed_factor: float) -> Optional[Drop]:
        """
        Start a new drop in ``column`` unless one is already active there.

        Returns:
            The new drop, or None when the column is gated
        """
        state = self.column(column)
        if state.active is not None:
            return None
        state.active = Drop(column=column, spawn_time=elapsed, speed_factor=speed_factor)
        return state.active

    def advance_column(self, column: int, elapsed: float, lifespan: float):
        """Move heads forward, retire heads that left the grid, evict dead trails."""
        state = self.column(column)

        if state.active is not None:
            if state.active.advance(elapsed) >= self.height:
                # Every in-grid row was lit more recently by this drop, so
                # older fading trails can no longer show through
                state.fading = [state.active]
                state.active = None

        if state.fading:
            survivors = []
            for drop in state.fading:
                drop.advance(elapsed)
                if drop.head_row <= self.height + drop.trail_rows(lifespan):
                    survivors.append(drop)
            state.fading = survivors

    def advance(self, elapsed: float, lifespan: float):
        for column in range(self.width):
            self.advance_column(column, elapsed, lifespan)


class DropSpawner:
    """Decides, once per column per frame, whether an idle column starts a drop."""

    def __init__(self, rng: Optional[random.Random] = None,
                 probability: Optional[float] = None,
                 variance: float = SpeedTuning.SPEED_VARIANCE):
        """
        Args:
            rng: Random source; inject a seeded instance for repeatable rain
            probability: Per-frame spawn chance overriding the speed tier's
            variance: Fractional +/- spread of per-drop fall speed
        """
        self.rng = rng or random.Random()
        self.probability = probability
        self.variance = variance

    def spawn_probability(self, speed: RainSpeed) -> float:
        if self.probability is not None:
            return self.probability
        return speed.spawn_probability

    def speed_factor(self, speed: RainSpeed) -> float:
        """Rows per second for a new drop in the given tier."""
        jitter = 1.0 + self.variance * self.rng.uniform(-1.0, 1.0)
        return max(SpeedTuning.MIN_ROWS_PER_SEC, speed.rows_per_second * jitter)

    def maybe_spawn(self, tracker: ColumnDropTracker, column: int,
                    elapsed: float, speed: RainSpeed) -> Optional[Drop]:
        """Roll for a new drop in ``column``; no roll is made while a head is active."""
        if tracker.active(column) is not None:
            return None
        if self.rng.random() >= self.spawn_probability(speed):
            return None
        return tracker.spawn(column, elapsed, self.speed_factor(speed))
