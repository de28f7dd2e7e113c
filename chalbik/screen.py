"""
Curses host for the rain.

Owns the terminal: enters curses, polls for the quit keys between frames
and writes each composed frame to the screen. The rain engine itself never
touches curses.

Keyboard Shortcuts:
    [q] Quit
    [Esc] Quit
"""

import locale
import logging
import random
import sys
import time
from typing import Optional

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from .colors import ColorPairs
from .compositor import Frame, FrameCompositor
from .config import RainConfig
from .constants import Timing
from .drops import DropSpawner
from .errors import ChalbikError
from .glyphs import GlyphCatalog, klingon_catalog

logger = logging.getLogger(__name__)

QUIT_KEYS = (ord('q'), ord('Q'), 27)  # 27 = Esc

# Cells dimmer than this get A_DIM
DIM_THRESHOLD = 0.35


class RainScreen:
    """
    Full-screen rain until the user quits.

    Runs single-threaded: compose a frame, draw it, then wait up to one
    frame interval for a key.
    """

    def __init__(self, config: RainConfig, catalog: Optional[GlyphCatalog] = None,
                 seed: Optional[int] = None,
                 frame_interval_ms: int = Timing.FRAME_INTERVAL_MS):
        self.config = config
        self.catalog = catalog or klingon_catalog()
        self.rng = random.Random(seed)
        self.compositor = FrameCompositor(
            self.catalog,
            spawner=DropSpawner(rng=self.rng),
            rng=self.rng,
        )
        self.color_pairs = ColorPairs()
        self.frame_interval_ms = frame_interval_ms
        self.running = False
        self.screen = None
        self.frames_drawn = 0

    def run(self):
        """Enter curses and animate until a quit key is pressed."""
        if not CURSES_AVAILABLE:
            raise ChalbikError(
                "curses library not available"
                + (" (try: pip install windows-curses)" if sys.platform == 'win32' else "")
            )
        # Needed for curses to emit non-ASCII glyphs
        locale.setlocale(locale.LC_ALL, '')
        curses.wrapper(self._main_loop)
        logger.info(f"Rain stopped after {self.frames_drawn} frames")

    def _main_loop(self, screen):
        """Main curses loop."""
        self.screen = screen
        self.running = True

        try:
            curses.curs_set(0)  # Hide cursor
        except curses.error:
            pass
        self.color_pairs.init_colors()
        screen.timeout(self.frame_interval_ms)

        start = time.monotonic()
        while self.running:
            try:
                height, width = screen.getmaxyx()
                frame = self.compositor.compose(
                    time.monotonic() - start, width, height, self.config
                )
                self.draw_frame(screen, frame)

                # Wait for input with timeout
                key = screen.getch()
                self.handle_key(key)
            except KeyboardInterrupt:
                self.running = False

    def handle_key(self, key: int):
        if key in QUIT_KEYS:
            self.running = False
        elif CURSES_AVAILABLE and key == curses.KEY_RESIZE:
            logger.debug("Terminal resized")

    def cell_attr(self, cell) -> int:
        attr = self.color_pairs.attr(cell.color)
        if cell.head:
            attr |= curses.A_BOLD
        elif not self.color_pairs.extended and cell.intensity < DIM_THRESHOLD:
            # Without a 256-color palette the fade is carried by A_DIM
            attr |= curses.A_DIM
        return attr

    def draw_frame(self, screen, frame: Frame):
        """Write every lit cell of ``frame``; empty cells stay background."""
        screen.erase()
        for column, row, cell in frame.lit_cells():
            attr = self.cell_attr(cell)
            try:
                screen.addstr(row, column, cell.glyph, attr)
            except curses.error:
                # Bottom-right cell cannot be written without scrolling
                pass
        screen.refresh()
        self.frames_drawn += 1


def run_rain(config: RainConfig, seed: Optional[int] = None):
    """
    Run the rain.

    Args:
        config: Rain configuration
        seed: Optional seed for repeatable rain
    """
    logger.info(f"Starting rain: {config.to_dict()}")
    RainScreen(config, seed=seed).run()
