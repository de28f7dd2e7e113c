"""
Tests for the curses host.

The screen is a MagicMock and the curses module is patched, so these run
without a terminal.
"""

import os
import sys
from unittest.mock import MagicMock, patch

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chalbik.colors import ColorPairs
from chalbik.compositor import Cell, Frame
from chalbik.config import RainConfig
from chalbik.errors import ChalbikError
from chalbik.screen import QUIT_KEYS, RainScreen


class FakeCursesError(Exception):
    pass


def fake_curses():
    mock = MagicMock()
    mock.error = FakeCursesError
    mock.A_BOLD = 0x100
    mock.A_DIM = 0x200
    mock.KEY_RESIZE = 410
    mock.color_pair.side_effect = lambda n: n << 16
    return mock


@pytest.fixture
def rain_screen():
    with patch('chalbik.screen.curses', fake_curses()):
        screen = RainScreen(RainConfig(), seed=1)
        screen.color_pairs.attr = MagicMock(return_value=0)
        yield screen


# ===========================================================================
# Drawing Tests
# ===========================================================================

class TestDrawFrame:
    def test_draws_only_lit_cells(self, rain_screen):
        frame = Frame.empty(4, 3)
        frame.rows[0][1] = Cell('a', (255, 255, 0), 1.0, True)
        frame.rows[2][3] = Cell('b', (64, 0, 0), 0.5)
        screen = MagicMock()

        rain_screen.draw_frame(screen, frame)

        screen.erase.assert_called_once()
        screen.refresh.assert_called_once()
        assert screen.addstr.call_count == 2
        assert screen.addstr.call_args_list[0][0][:3] == (0, 1, 'a')
        assert screen.addstr.call_args_list[1][0][:3] == (2, 3, 'b')
        assert rain_screen.frames_drawn == 1

    def test_curses_error_on_cell_is_ignored(self, rain_screen):
        frame = Frame.empty(2, 2)
        frame.rows[1][1] = Cell('a', (1, 1, 1), 1.0)
        frame.rows[0][0] = Cell('b', (1, 1, 1), 1.0)
        screen = MagicMock()
        screen.addstr.side_effect = [None, FakeCursesError()]

        rain_screen.draw_frame(screen, frame)

        assert screen.addstr.call_count == 2
        screen.refresh.assert_called_once()

    def test_color_error_is_not_hidden_by_draw(self, rain_screen):
        frame = Frame.empty(1, 1)
        frame.rows[0][0] = Cell('a', (1, 1, 1), 1.0)
        rain_screen.color_pairs.attr.side_effect = FakeCursesError()

        with pytest.raises(FakeCursesError):
            rain_screen.draw_frame(MagicMock(), frame)

    def test_head_is_bold(self, rain_screen):
        attr = rain_screen.cell_attr(Cell('a', (1, 1, 1), 1.0, True))
        assert attr & 0x100

    def test_faint_cell_dim_without_256_colors(self, rain_screen):
        rain_screen.color_pairs.extended = False
        assert rain_screen.cell_attr(Cell('a', (1, 1, 1), 0.1)) & 0x200
        assert not rain_screen.cell_attr(Cell('a', (1, 1, 1), 0.9)) & 0x200

    def test_faint_cell_not_dim_with_256_colors(self, rain_screen):
        rain_screen.color_pairs.extended = True
        assert not rain_screen.cell_attr(Cell('a', (1, 1, 1), 0.1)) & 0x200


# ===========================================================================
# Input Tests
# ===========================================================================

class TestHandleKey:
    @pytest.mark.parametrize("key", QUIT_KEYS)
    def test_quit_keys(self, rain_screen, key):
        rain_screen.running = True
        rain_screen.handle_key(key)
        assert rain_screen.running is False

    @pytest.mark.parametrize("key", [-1, ord('x'), ord(' ')])
    def test_other_keys_keep_running(self, rain_screen, key):
        rain_screen.running = True
        rain_screen.handle_key(key)
        assert rain_screen.running is True


# ===========================================================================
# Main Loop Tests
# ===========================================================================

class TestMainLoop:
    def test_runs_until_quit(self, rain_screen):
        screen = MagicMock()
        screen.getmaxyx.return_value = (6, 10)
        screen.getch.side_effect = [-1, -1, ord('q')]
        rain_screen.color_pairs.init_colors = MagicMock()

        with patch('chalbik.screen.curses', fake_curses()):
            rain_screen._main_loop(screen)

        assert rain_screen.frames_drawn == 3
        assert rain_screen.running is False
        screen.timeout.assert_called_once_with(50)
        assert rain_screen.compositor.tracker.width == 10

    def test_keyboard_interrupt_stops(self, rain_screen):
        screen = MagicMock()
        screen.getmaxyx.return_value = (4, 4)
        screen.getch.side_effect = KeyboardInterrupt
        rain_screen.color_pairs.init_colors = MagicMock()

        with patch('chalbik.screen.curses', fake_curses()):
            rain_screen._main_loop(screen)

        assert rain_screen.running is False
        assert rain_screen.frames_drawn == 1

    def test_run_without_curses(self, rain_screen):
        with patch('chalbik.screen.CURSES_AVAILABLE', False):
            with pytest.raises(ChalbikError):
                rain_screen.run()


# ===========================================================================
# Color Pair Tests
# ===========================================================================

class TestColorPairs:
    def test_pairs_allocated_once_per_palette_index(self):
        mock = fake_curses()
        with patch('chalbik.colors.curses', mock):
            pairs = ColorPairs()
            pairs.default_colors = True
            pairs.extended = True
            pairs._max_pairs = 3
            assert pairs.pair_number((255, 0, 0)) == 1
            assert pairs.pair_number((255, 0, 0)) == 1
            assert pairs.pair_number((0, 255, 0)) == 2
            # Pairs exhausted
            assert pairs.pair_number((0, 0, 255)) == 0
        assert mock.init_pair.call_count == 2
        mock.init_pair.assert_any_call(1, 196, -1)

    def test_basic_palette(self):
        pairs = ColorPairs()
        pairs.extended = False
        assert pairs.palette_index((128, 0, 0)) == 1

    def test_black_background_without_default_colors(self):
        mock = fake_curses()
        mock.use_default_colors.side_effect = FakeCursesError()
        mock.COLORS = 256
        mock.COLOR_PAIRS = 64
        mock.COLOR_BLACK = 0
        with patch('chalbik.colors.curses', mock):
            pairs = ColorPairs()
            pairs.init_colors()
            assert pairs.default_colors is False
            assert pairs.pair_number((255, 0, 0)) == 1
        mock.init_pair.assert_called_once_with(1, 196, 0)

    def test_default_background_when_supported(self):
        mock = fake_curses()
        mock.COLORS = 8
        mock.COLOR_PAIRS = 64
        with patch('chalbik.colors.curses', mock):
            pairs = ColorPairs()
            pairs.init_colors()
            assert pairs.default_colors is True
            pairs.pair_number((128, 0, 0))
        mock.init_pair.assert_called_once_with(1, 1, -1)
