"""Reading JSON-lines logs into named series of points."""

from __future__ import annotations

import json
import math
import os
from typing import Iterable, Optional, Union

Point = tuple[float, float]
Series = dict[str, list[Point]]


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-standard JSON constant: {name}")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def _parse_int(text: str) -> float:
    try:
        return float(int(text))
    except OverflowError as err:
        raise ValueError(f"number out of range: {text}") from err


def _decode(line: Union[str, bytes]) -> Optional[dict]:
    """Decode one line into a JSON object, or None if it is not one."""
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        value = json.loads(
            line,
            parse_constant=_reject_constant,
            parse_float=_parse_float,
            parse_int=_parse_int,
        )
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse(stream: Iterable[Union[str, bytes]]) -> Series:
    """Collect the numeric fields of each JSON object line into series.

    Lines that are not JSON objects are skipped and do not count as epochs;
    every valid line is one epoch, numbered from zero. Non-numeric fields
    are ignored.
    """
    points: Series = {}
    objects = (obj for obj in map(_decode, stream) if obj is not None)
    for epoch, obj in enumerate(objects):
        for key, value in obj.items():
            if _is_number(value):
                points.setdefault(key, []).append((float(epoch), float(value)))
    return points


def parse_file(path: Union[str, os.PathLike]) -> Series:
    """Parse the JSON-lines file at ``path``."""
    with open(path, "rb") as handle:
        return parse(handle)