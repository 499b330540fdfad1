"""Turning the monitored logs into a drawable chart."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from plotmon.colormap import Color, Colormap
from plotmon.filter import Point
from plotmon.logs import Logs

Cell = tuple[str, Optional[Color]]
Screen = list[list[Cell]]

_BRAILLE_BASE = 0x2800
# Dot bits indexed by [row within cell][column within cell].
_BRAILLE_DOTS = ((0x01, 0x08), (0x02, 0x10), (0x04, 0x20), (0x40, 0x80))


class _Unavailable(LookupError):
    """No chart can be drawn; the message is shown instead."""


@dataclass
class Dataset:
    """One named series drawn as a line in a given colour."""

    name: str
    points: Sequence[Point]
    color: Color


def to_dataset(name: str, points: Sequence[Point], color: Color) -> Dataset:
    """Make a line dataset out of a series of points."""
    return Dataset(name=name, points=points, color=color)


def _blank(width: int, height: int) -> Screen:
    return [[(" ", None)] * width for _ in range(height)]


def _put(screen: Screen, row: int, col: int, text: str, color: Optional[Color] = None) -> None:
    if not 0 <= row < len(screen):
        return
    line = screen[row]
    for offset, char in enumerate(text):
        x = col + offset
        if 0 <= x < len(line):
            line[x] = (char, color)


def _put_centered(
    screen: Screen, row: int, left: int, width: int, text: str, color: Optional[Color] = None
) -> None:
    if width <= 0:
        return
    text = text[:width]
    _put(screen, row, left + (width - len(text)) // 2, text, color)


def _format_exp(value: float) -> str:
    """Scientific notation with two decimals and a bare exponent, as in ``1.50e-3``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    mantissa, _, exponent = f"{value:.2e}".partition("e")
    return f"{mantissa}e{int(exponent)}"


def _scale(value: float, low: float, high: float, size: int) -> float:
    if high == low:
        return (size - 1) / 2
    return (value - low) / (high - low) * (size - 1)


def _clip(x0: float, y0: float, x1: float, y1: float, xmax: float, ymax: float):
    """Clip a segment to the box [0, xmax] x [0, ymax]; None if it lies outside."""
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0), (dx, xmax - x0), (-dy, y0), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy


@dataclass
class Chart:
    """A line chart of several datasets with labelled axes."""

    title: str
    datasets: list[Dataset]
    x_bounds: tuple[float, float]
    y_bounds: tuple[float, float]
    x_labels: list[str]
    y_labels: list[str]
    x_title: str = "Epochs"
    y_title: str = "Value"
    _unused: list = field(default_factory=list, repr=False, compare=False)

    def render(self, width: int, height: int) -> Screen:
        """Draw the chart on a grid of ``height`` rows of ``width`` cells."""
        screen = _blank(width, height)
        if width <= 0 or height <= 0:
            return screen
        _put_centered(screen, 0, 0, width, self.title)

        left, right = 1, width - 1
        label_width = max(len(label) for label in self.y_labels)
        axis_col = left + label_width
        plot_left = axis_col + 1
        plot_width = right - plot_left
        plot_top = 2
        axis_row = height - 3
        plot_height = axis_row - plot_top
        if plot_width < 1 or plot_height < 1:
            return screen

        _put(screen, 1, left, self.y_title)
        y_min_label, y_mid_label, y_max_label = self.y_labels
        plot_bottom = plot_top + plot_height - 1
        for row, label in (
            (plot_bottom, y_min_label),
            (plot_top + (plot_height - 1) // 2, y_mid_label),
            (plot_top, y_max_label),
        ):
            _put(screen, row, axis_col - len(label), label)

        for row in range(plot_top, axis_row):
            _put(screen, row, axis_col, "│")
        _put(screen, axis_row, axis_col, "└" + "─" * plot_width)

        x_min_label, x_mid_label, x_max_label = self.x_labels
        labels_row = axis_row + 1
        _put(screen, labels_row, plot_left, x_min_label)
        _put_centered(screen, labels_row, plot_left, plot_width, x_mid_label)
        _put(screen, labels_row, right - len(x_max_label), x_max_label)
        _put(screen, axis_row + 2, right - len(self.x_title), self.x_title)

        self._plot(screen, plot_left, plot_top, plot_width, plot_height)
        self._legend(screen, plot_top, plot_height, plot_width, right)
        return screen

    def _plot(self, screen: Screen, left: int, top: int, width: int, height: int) -> None:
        dots_x = width * 2
        dots_y = height * 4
        bits = [[0] * width for _ in range(height)]
        colors: list[list[Optional[Color]]] = [[None] * width for _ in range(height)]
        x_low, x_high = self.x_bounds
        y_low, y_high = self.y_bounds

        def to_dot(point: Point) -> tuple[float, float]:
            x, y = point
            return (
                _scale(x, x_low, x_high, dots_x),
                (dots_y - 1) - _scale(y, y_low, y_high, dots_y),
            )

        def set_dot(dx: int, dy: int, color: Color) -> None:
            if 0 <= dx < dots_x and 0 <= dy < dots_y:
                cell_row, cell_col = dy // 4, dx // 2
                bits[cell_row][cell_col] |= _BRAILLE_DOTS[dy % 4][dx % 2]
                colors[cell_row][cell_col] = color

        for dataset in self.datasets:
            dots = [to_dot(point) for point in dataset.points]
            segments = list(zip(dots, dots[1:])) or [(dot, dot) for dot in dots]
            for (ax, ay), (bx, by) in segments:
                if not all(math.isfinite(v) for v in (ax, ay, bx, by)):
                    continue
                clipped = _clip(ax, ay, bx, by, dots_x - 1, dots_y - 1)
                if clipped is None:
                    continue
                sx, sy, ex, ey = (round(v) for v in clipped)
                steps = max(abs(ex - sx), abs(ey - sy))
                for step in range(steps + 1):
                    if steps:
                        set_dot(
                            sx + round((ex - sx) * step / steps),
                            sy + round((ey - sy) * step / steps),
                            dataset.color,
                        )
                    else:
                        set_dot(sx, sy, dataset.color)

        for row, (row_bits, row_colors) in enumerate(zip(bits, colors)):
            for col, (cell_bits, color) in enumerate(zip(row_bits, row_colors)):
                if cell_bits:
                    screen[top + row][left + col] = (chr(_BRAILLE_BASE | cell_bits), color)

    def _legend(self, screen: Screen, top: int, height: int, width: int, right: int) -> None:
        if len(self.datasets) > height:
            return
        if max(len(dataset.name) for dataset in self.datasets) > width:
            return
        for row, dataset in enumerate(self.datasets, start=top):
            _put(screen, row, right - len(dataset.name), dataset.name, dataset.color)


def error_screen(file: str, msg: str, width: int, height: int) -> Screen:
    """Draw ``msg`` in red, centred halfway down, under the file name."""
    screen = _blank(width, height)
    if width <= 0 or height <= 0:
        return screen
    _put_centered(screen, 0, 0, width, file)
    _put_centered(screen, 1 + height // 2, 1, width - 2, msg, Color.RED)
    return screen


def build_chart(logs: Logs) -> Chart:
    """Build the chart of the shown series.

    Raises :class:`LookupError` with ``FILE NOT FOUND`` when the file cannot
    be read and ``NO DATA`` when no series is left to draw.
    """
    view = logs.lock_iter()
    if view is None:
        raise _Unavailable("FILE NOT FOUND")

    x_min, x_max = math.inf, -math.inf
    y_min, y_max = math.inf, -math.inf
    colormap = Colormap()
    datasets: list[Dataset] = []
    with view:
        for name, points in view:
            if not points:
                continue
            x_min = min(x_min, points[0][0])
            x_max = max(x_max, points[-1][0])
            values = [value for _, value in points]
            y_min = min(y_min, min(values))
            y_max = max(y_max, max(values))
            datasets.append(to_dataset(name, list(points), next(colormap)))
        opts = logs.filter

    if not datasets:
        raise _Unavailable("NO DATA")
    if opts.min_y is not None:
        y_min = opts.min_y
    if opts.max_y is not None:
        y_max = opts.max_y

    return Chart(
        title=logs.file.name,
        datasets=datasets,
        x_bounds=(x_min, x_max),
        y_bounds=(y_min, y_max),
        x_labels=[str(int(x_min)), str(int((x_max + x_min) / 2)), str(int(x_max))],
        y_labels=[
            _format_exp(y_min),
            _format_exp((y_max + y_min) / 2),
            _format_exp(y_max),
        ],
    )


def draw_datasets(logs: Logs, width: int, height: int) -> Screen:
    """Draw the chart of ``logs``, or an error screen when there is none."""
    try:
        chart = build_chart(logs)
    except _Unavailable as err:
        return error_screen(logs.file.name, str(err), width, height)
    return chart.render(width, height)