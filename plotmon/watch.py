"""Watching the log file and reloading it on change."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Optional, Union

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from plotmon.parse import Series, parse_file

_RELEVANT_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_DELETED, EVENT_TYPE_MOVED}
)


class Watched:
    """A watched log file and the points last read from it.

    ``points`` is None while the file cannot be opened. Readers and the
    refreshing thread share it under ``lock``.
    """

    def __init__(self, filepath: Union[str, os.PathLike]):
        path = Path(filepath)
        if path.name in ("", ".."):
            raise ValueError(f"path has no file name: {os.fspath(filepath)!r}")
        self.name: str = path.name
        self.path: Path = path
        self.points: Optional[Series] = None
        self.lock = threading.Lock()

    def refresh(self) -> None:
        """Reload the points from the file, or clear them if it cannot be opened."""
        try:
            result = parse_file(self.path)
        except OSError:
            result = None
        with self.lock:
            self.points = result


def is_event_about_file(filename: str, event: FileSystemEvent) -> bool:
    """Tell whether ``event`` creates, changes, moves or removes ``filename``."""
    if event.event_type not in _RELEVANT_EVENTS:
        return False
    paths = (event.src_path, getattr(event, "dest_path", ""))
    return any(
        path and os.path.basename(os.fsdecode(path)) == filename for path in paths
    )


class _RefreshHandler(FileSystemEventHandler):
    def __init__(self, watched: Watched, signal):
        super().__init__()
        self._watched = watched
        self._signal = signal

    def on_any_event(self, event: FileSystemEvent) -> None:
        if is_event_about_file(self._watched.name, event):
            self._watched.refresh()
            self._signal.put(True)


def start_watcher(watched: Watched, signal) -> Observer:
    """Start watching the file's directory in a background thread.

    On every change to the file the points are reloaded and ``True`` is put
    on the ``signal`` queue. The directory is watched rather than the file so
    that its creation and removal are seen too. Returns the running observer.
    """
    observer = Observer()
    observer.daemon = True
    observer.schedule(
        _RefreshHandler(watched, signal), str(watched.path.parent), recursive=False
    )
    observer.start()
    return observer