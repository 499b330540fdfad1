"""Cycling colours for the plotted series."""

from __future__ import annotations

from enum import Enum
from typing import Iterator


class Color(str, Enum):
    """Terminal colours used for series."""

    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    MAGENTA = "magenta"
    CYAN = "cyan"


COLORS: tuple[Color, ...] = (
    Color.BLUE,
    Color.GREEN,
    Color.RED,
    Color.YELLOW,
    Color.MAGENTA,
    Color.CYAN,
)


class Colormap:
    """Endless iterator over :data:`COLORS`, starting again after the last."""

    def __init__(self) -> None:
        self._index = 0

    def __iter__(self) -> Iterator[Color]:
        return self

    def __next__(self) -> Color:
        color = COLORS[self._index]
        self._index = (self._index + 1) % len(COLORS)
        return color