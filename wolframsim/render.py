"""Renderers: turn windowed rows into terminal text, curses output or images."""

import curses
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, TextIO, Tuple

import numpy as np
from PIL import Image

from .automaton import Rule

GLYPHS = (" ", "#")

# Dead cells: dark gray, live cells: white
DEAD_COLOR = (30, 30, 30)
LIVE_COLOR = (255, 255, 255)


def glyph(value: int) -> str:
    """Printable character for a cell value."""
    return GLYPHS[1] if value else GLYPHS[0]


def row_to_text(row: np.ndarray) -> str:
    return "".join(glyph(v) for v in row)


def rule_label(rule: Rule) -> List[str]:
    """Banner printed above each rule."""
    return [
        "=" * 20,
        f"||    Rule {rule.number:3d}    ||",
        "=" * 20,
    ]


class Renderer:
    """Output surface for the generation loop.

    Rows passed to ``draw_row`` are read-only views and are only valid for
    the duration of the call.
    """

    def begin(self, rule: Rule):
        pass

    def draw_row(self, row: np.ndarray, x: int, y: int):
        raise NotImplementedError

    def end(self):
        pass

    def pause(self, seconds: float) -> bool:
        """Wait between rules. Return False to stop the sequence."""
        return True

    def finish(self):
        """Called once after the last rule has been drawn."""

    def surface_size(self) -> Optional[Tuple[int, Optional[int]]]:
        """(width, height) of the surface, or None when unbounded.

        A height of None means output scrolls and only the width is bounded.
        """
        return None


class TextRenderer(Renderer):
    """Plain text printer, one line per row."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        sleep: Callable[[float], None] = time.sleep,
        label: bool = True,
        width: Optional[int] = None,
    ):
        self.stream = stream or sys.stdout
        self.sleep = sleep
        self.label = label
        self.width = width

    def begin(self, rule: Rule):
        if self.label:
            self.stream.write("\n" + "\n".join(rule_label(rule)) + "\n\n")

    def draw_row(self, row: np.ndarray, x: int, y: int):
        self.stream.write(" " * x + row_to_text(row) + "\n")

    def end(self):
        self.stream.flush()

    def pause(self, seconds: float) -> bool:
        if seconds > 0:
            self.sleep(seconds)
        return True

    def surface_size(self) -> Optional[Tuple[int, Optional[int]]]:
        # output scrolls, so only the width is bounded
        if self.width is None:
            return None
        return self.width, None


class CursesRenderer(Renderer):
    """Colored, interactive renderer. Press q to quit."""

    PALETTE = (
        curses.COLOR_CYAN,
        curses.COLOR_MAGENTA,
        curses.COLOR_YELLOW,
        curses.COLOR_GREEN,
        curses.COLOR_BLUE,
        curses.COLOR_RED,
    )
    QUIT_KEYS = (ord("q"), ord("Q"), 27)
    LIVE_GLYPH = "█"
    HEADER_HEIGHT = 2
    FOOTER_HEIGHT = 1

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.pair = 0
        curses.curs_set(0)
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            for i, color in enumerate(self.PALETTE, start=1):
                curses.init_pair(i, color, -1)

    def _addstr(self, y: int, x: int, text: str, attr: int = 0):
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen.
            pass

    def begin(self, rule: Rule):
        self.stdscr.erase()
        if curses.has_colors():
            self.pair = 1 + rule.number % len(self.PALETTE)
        self._addstr(0, 0, f"Rule {rule.number:3d}  {rule.to_bits()}", curses.A_BOLD)

    def draw_row(self, row: np.ndarray, x: int, y: int):
        attr = curses.color_pair(self.pair)
        for i, value in enumerate(row):
            if value:
                self._addstr(y + self.HEADER_HEIGHT, x + i, self.LIVE_GLYPH, attr)

    def end(self):
        self.stdscr.refresh()

    def pause(self, seconds: float) -> bool:
        self.stdscr.timeout(int(seconds * 1000))
        key = self.stdscr.getch()
        return key not in self.QUIT_KEYS

    def finish(self):
        max_y, _ = self.stdscr.getmaxyx()
        self._addstr(max_y - 1, 0, "press any key to exit", curses.A_DIM)
        self.stdscr.refresh()
        self.stdscr.timeout(-1)
        self.stdscr.getch()

    def surface_size(self) -> Optional[Tuple[int, int]]:
        max_y, max_x = self.stdscr.getmaxyx()
        return max_x, max_y - self.HEADER_HEIGHT - self.FOOTER_HEIGHT


def render_rows(rows: np.ndarray, cell_size: int = 4) -> np.ndarray:
    """Render a (generations, width) array of cells as an RGB image array."""
    h, w = rows.shape

    img = np.empty((h * cell_size, w * cell_size, 3), dtype=np.uint8)
    img[:] = DEAD_COLOR

    upscaled = np.repeat(np.repeat(rows, cell_size, axis=0), cell_size, axis=1)
    img[upscaled == 1] = LIVE_COLOR

    return img


def save_image(rows: np.ndarray, filepath: str, cell_size: int = 4):
    """Save the rows of one rule as a PNG image."""
    Image.fromarray(render_rows(rows, cell_size)).save(filepath)


class ImageRenderer(Renderer):
    """Collects a rule's rows and writes them to ``output_dir/rule_NNN.png``."""

    def __init__(self, output_dir: str = "output", cell_size: int = 4):
        self.output_dir = Path(output_dir)
        self.cell_size = cell_size
        self.paths: List[Path] = []
        self._rule: Optional[Rule] = None
        self._rows: List[np.ndarray] = []

    def begin(self, rule: Rule):
        self._rule = rule
        self._rows = []

    def draw_row(self, row: np.ndarray, x: int, y: int):
        self._rows.append(np.array(row, dtype=np.uint8))

    def end(self):
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"rule_{self._rule.number:03d}.png"
        save_image(np.stack(self._rows), str(path), cell_size=self.cell_size)
        self.paths.append(path)
