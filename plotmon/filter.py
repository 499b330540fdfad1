"""Selection and trimming of plotted series."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Optional, Sequence

Point = tuple[float, float]


def _lower_bound(points: Sequence[Point], epoch: float) -> int:
    """Index of the first point whose epoch is not below ``epoch``."""
    return bisect_left(points, epoch, key=lambda point: point[0])


@dataclass
class FilterOpts:
    """Filter parameters for the displayed series."""

    only: Optional[list[str]] = None
    """Only include series with these names."""
    exclude: Optional[list[str]] = None
    """Leave out series with these names."""
    min_x: Optional[float] = None
    """Minimum epoch to display."""
    max_x: Optional[float] = None
    """Maximum epoch to display (exclusive)."""
    max_y: Optional[float] = None
    """Upper bound of the y axis; only used for display."""
    min_y: Optional[float] = None
    """Lower bound of the y axis; only used for display."""
    span: Optional[float] = None
    """Maximum span of epochs to display, counted back from the last point."""

    def apply(self, name: str) -> bool:
        """Tell whether the series called ``name`` is shown.

        ``exclude`` takes precedence over ``only``: when it is set,
        ``only`` is ignored.
        """
        if self.exclude is not None:
            return name not in self.exclude
        if self.only is not None:
            return name in self.only
        return True

    def trim(self, points: Sequence[Point]) -> Sequence[Point]:
        """Return the slice of ``points`` that falls within the epoch bounds.

        The points must be sorted by epoch. ``span`` takes precedence over
        ``min_x`` and ``max_x``.
        """
        if self.span is not None:
            if not points:
                raise ValueError("cannot trim an empty series by span")
            start_value = points[-1][0] - self.span
            return points[_lower_bound(points, start_value):]

        start = 0
        end = len(points)
        if self.min_x is not None:
            start = _lower_bound(points, self.min_x)
        if self.max_x is not None:
            end = _lower_bound(points, self.max_x)
        if start > end:
            raise ValueError(
                f"epoch range is inverted: min_x={self.min_x} > max_x={self.max_x}"
            )
        return points[start:end]