"""Terminal application showing the chart of the logs."""

from __future__ import annotations

import curses
import queue
from itertools import groupby
from typing import Optional, Union

from plotmon.colormap import Color
from plotmon.datasets import draw_datasets
from plotmon.logs import Logs

_POLL_MS = 100
_EXIT_KEYS = frozenset({"q", "\x1b", "\x03"})

_CURSES_COLORS = {
    Color.BLUE: curses.COLOR_BLUE,
    Color.GREEN: curses.COLOR_GREEN,
    Color.RED: curses.COLOR_RED,
    Color.YELLOW: curses.COLOR_YELLOW,
    Color.MAGENTA: curses.COLOR_MAGENTA,
    Color.CYAN: curses.COLOR_CYAN,
}


class App:
    """Redraws the chart whenever the logs change or a key is pressed."""

    def __init__(self, logs: Logs):
        self.logs = logs
        self.exit_requested = False
        self._attrs: dict[Color, int] = {}

    def handle_key(self, key: Union[int, str]) -> None:
        """Request exit on ``q``, Esc or Ctrl+C."""
        if isinstance(key, int):
            if not 0 <= key < 0x110000:
                return
            key = chr(key)
        if key in _EXIT_KEYS:
            self.exit_requested = True

    def run(self, screen) -> None:
        """Draw and handle events on the curses ``screen`` until exit is requested."""
        self._setup_terminal()
        screen.timeout(_POLL_MS)
        while not self.exit_requested:
            self._draw(screen)
            self._wait(screen)

    def _setup_terminal(self) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        try:
            curses.raw()
        except curses.error:
            pass
        self._attrs = {}
        try:
            if not curses.has_colors():
                return
            curses.start_color()
            background = curses.COLOR_BLACK
            try:
                curses.use_default_colors()
                background = -1
            except curses.error:
                pass
            for pair, color in enumerate(Color, start=1):
                curses.init_pair(pair, _CURSES_COLORS[color], background)
                self._attrs[color] = curses.color_pair(pair)
        except curses.error:
            self._attrs = {}

    def _attr(self, color: Optional[Color]) -> int:
        return self._attrs.get(color, 0) if color is not None else 0

    def _draw(self, screen) -> None:
        height, width = screen.getmaxyx()
        cells = draw_datasets(self.logs, width, height)
        screen.erase()
        for row, line in enumerate(cells):
            col = 0
            for color, group in groupby(line, key=lambda cell: cell[1]):
                text = "".join(char for char, _ in group)
                try:
                    screen.addstr(row, col, text, self._attr(color))
                except curses.error:
                    # Writing the bottom-right cell moves the cursor off screen.
                    pass
                col += len(text)
        screen.refresh()

    def _drain_updates(self) -> bool:
        updated = False
        while True:
            try:
                self.logs.updates.get_nowait()
            except queue.Empty:
                return updated
            updated = True

    def _wait(self, screen) -> None:
        """Block until a key is pressed, the terminal resizes or the logs change."""
        while True:
            key = screen.getch()
            if key != -1:
                if key != curses.KEY_RESIZE:
                    self.handle_key(key)
                return
            if self._drain_updates():
                return


def run(logs: Logs) -> None:
    """Run the terminal application on ``logs``, restoring the terminal after."""
    curses.wrapper(App(logs).run)