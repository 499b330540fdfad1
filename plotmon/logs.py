"""Thread-safe holder of the monitored logs."""

from __future__ import annotations

import os
import queue
import threading
from typing import Callable, Iterator, Optional, Sequence, Union

from plotmon.filter import FilterOpts, Point
from plotmon.parse import Series
from plotmon.watch import Watched, start_watcher


class LogsIterable:
    """Locked view over the filtered series.

    The locks on the points and the filter are held until :meth:`release`
    is called or the ``with`` block ends, and must be released by the
    thread that took them.
    """

    def __init__(self, points: Series, filter_opts: FilterOpts, release: Callable[[], None]):
        self._points = points
        self._filter = filter_opts
        self._release = release
        self._released = False

    def iter(self) -> Iterator[tuple[str, Sequence[Point]]]:
        """Yield ``(name, points)`` for each shown series, trimmed to the bounds."""
        for name, points in self._points.items():
            if self._filter.apply(name):
                yield name, self._filter.trim(points)

    def __iter__(self) -> Iterator[tuple[str, Sequence[Point]]]:
        return self.iter()

    def release(self) -> None:
        """Release the held locks; later calls do nothing."""
        if not self._released:
            self._released = True
            self._release()

    def __enter__(self) -> "LogsIterable":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


class Logs:
    """A watched log file together with its filter.

    Shared between a background reloading thread and the renderer. Each
    reload puts ``True`` on the ``updates`` queue.
    """

    def __init__(
        self,
        filepath: Union[str, os.PathLike],
        filter_opts: Optional[FilterOpts] = None,
        *,
        watch: bool = True,
    ):
        self.file = Watched(filepath)
        self._filter = filter_opts if filter_opts is not None else FilterOpts()
        self._filter_lock = threading.RLock()
        self.updates: "queue.Queue[bool]" = queue.Queue()
        self._observer = start_watcher(self.file, self.updates) if watch else None
        self.file.refresh()

    @property
    def filter(self) -> FilterOpts:
        """Current filter parameters."""
        with self._filter_lock:
            return self._filter

    @filter.setter
    def filter(self, value: FilterOpts) -> None:
        with self._filter_lock:
            self._filter = value

    def lock_iter(self) -> Optional[LogsIterable]:
        """Lock the points and the filter and return a view over them.

        Returns None, holding no lock, when the file could not be read.
        """
        self.file.lock.acquire()
        points = self.file.points
        if points is None:
            self.file.lock.release()
            return None
        self._filter_lock.acquire()

        def release() -> None:
            self._filter_lock.release()
            self.file.lock.release()

        return LogsIterable(points, self._filter, release)

    def close(self) -> None:
        """Stop watching the file."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def __enter__(self) -> "Logs":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()