"""
Frame Compositor - turns drop state into a full grid of cells.

One compose() call per host-loop iteration. For every column the spawner
gets a chance to start a drop, the tracker advances that column, and then
each row is lit (or not) according to the decay model. Work per frame is
bounded by width * height.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .config import RainConfig
from .constants import Timing
from .decay import TrailDecayModel
from .drops import ColumnDropTracker, DropSpawner
from .glyphs import GlyphCatalog

logger = logging.getLogger(__name__)


class Cell(NamedTuple):
    """A lit grid cell."""
    glyph: str
    color: Tuple[int, int, int]
    intensity: float
    head: bool = False


@dataclass
class Frame:
    """Grid of cells for one frame; None marks empty background."""
    width: int
    height: int
    rows: List[List[Optional[Cell]]]

    @classmethod
    def empty(cls, width: int, height: int) -> 'Frame':
        width = max(0, width)
        height = max(0, height)
        return cls(width, height, [[None] * width for _ in range(height)])

    def cell(self, column: int, row: int) -> Optional[Cell]:
        return self.rows[row][column]

    def lit_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield (column, row, cell) for every non-empty cell."""
        for row, cells in enumerate(self.rows):
            for column, cell in enumerate(cells):
                if cell is not None:
                    yield column, row, cell

    def lit_count(self) -> int:
        return sum(1 for _ in self.lit_cells())


class FrameCompositor:
    """Combines spawner, tracker, decay model and catalog into frames."""

    def __init__(self, catalog: GlyphCatalog,
                 tracker: Optional[ColumnDropTracker] = None,
                 spawner: Optional[DropSpawner] = None,
                 decay: Optional[TrailDecayModel] = None,
                 rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.rng = rng or random.Random()
        self.tracker = tracker or ColumnDropTracker()
        self.spawner = spawner or DropSpawner(rng=self.rng)
        self.decay = decay or TrailDecayModel()

        # Per-cell glyph memory for flicker: (glyph, expires_at)
        self._glyphs: List[List[Optional[Tuple[str, float]]]] = []
        self._cache_size = (0, 0)
        self._frames = 0
        self._resize(self.tracker.width, self.tracker.height)

    def reset(self):
        """Forget all drops and cached glyphs."""
        self.tracker.clear()
        self._resize(self.tracker.width, self.tracker.height)

    def _resize(self, width: int, height: int):
        self.tracker.resize(width, height)
        self._glyphs = [[None] * width for _ in range(height)]
        self._cache_size = (width, height)

    def _glyph_for(self, column: int, row: int, elapsed: float, noise_interval: float) -> str:
        """Reuse the cell's glyph until it expires, then pick a fresh one."""
        cached = self._glyphs[row][column]
        if cached is not None and elapsed < cached[1]:
            return cached[0]
        glyph = self.catalog.pick(self.rng)
        jitter = self.rng.uniform(1.0 - Timing.NOISE_JITTER, 1.0 + Timing.NOISE_JITTER)
        self._glyphs[row][column] = (glyph, elapsed + noise_interval * jitter)
        return glyph

    def compose(self, elapsed: float, width: int, height: int, config: RainConfig) -> Frame:
        """
        Produce the full grid for one frame.

        Args:
            elapsed: Seconds since the rain started (non-decreasing)
            width: Grid columns
            height: Grid rows
            config: Colors, speed, lifespan and flicker settings

        Returns:
            Frame of exactly width x height cells
        """
        width = max(0, width)
        height = max(0, height)
        elapsed = max(0.0, elapsed)
        size = (width, height)
        # The tracker may have been resized on its own
        if size != self._cache_size or size != (self.tracker.width, self.tracker.height):
            self._resize(width, height)

        frame = Frame.empty(width, height)
        self._frames += 1
        if width == 0 or height == 0:
            return frame

        lifespan = config.tail_lifespan
        for column in range(width):
            self.spawner.maybe_spawn(self.tracker, column, elapsed, config.speed)
            self.tracker.advance_column(column, elapsed, lifespan)
            drops = self.tracker.drops(column)

            for row in range(height):
                if not drops:
                    self._glyphs[row][column] = None
                    continue
                intensity, head = self.decay.column_intensity(
                    drops, row, elapsed, lifespan, config.fade_curve
                )
                if intensity <= 0:
                    # Dark cells pick a new glyph next time they light up
                    self._glyphs[row][column] = None
                    continue
                glyph = self._glyph_for(column, row, elapsed, config.noise_interval)
                color = self.decay.cell_color(intensity, head, config)
                frame.rows[row][column] = Cell(glyph, color, intensity, head)

        if self._frames % 200 == 0:
            logger.debug(f"Frame {self._frames}: {self.tracker.active_count()} active drops "
                         f"in {width}x{height}")
        return frame
