"""JSON point lists: the ``-j`` startup file and the ``S`` console dump."""

import json
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import structlog

from ..core.geometry import Bounds
from ..core.point_set import Point, as_point
from ..errors import InputError

logger = structlog.get_logger()


def parse_points(data: Any, bounds: Optional[Bounds] = None) -> List[Point]:
    """
    Convert decoded JSON into points.

    Accepts a list whose entries are ``[x, y]`` pairs or ``{"x": .., "y": ..}``
    objects.

    Args:
        data: Decoded JSON value
        bounds: When given, every point must lie inside it

    Raises:
        InputError: on any malformed or out-of-range entry
    """
    if not isinstance(data, list):
        raise InputError(f"Expected a JSON array of points, got {type(data).__name__}")

    points = []
    for position, entry in enumerate(data):
        if isinstance(entry, dict):
            if set(entry) != {"x", "y"}:
                raise InputError(
                    f"Point {position}: expected keys 'x' and 'y', got {sorted(entry)}"
                )
            entry = (entry["x"], entry["y"])
        try:
            point = as_point(entry)
        except InputError as exc:
            raise InputError(f"Point {position}: {exc}") from exc
        if bounds is not None and not bounds.contains(point.x, point.y):
            raise InputError(
                f"Point {position}: ({point.x}, {point.y}) lies outside "
                f"{bounds.width:g}x{bounds.height:g} drawing area"
            )
        points.append(point)
    return points


def load_points(path: Union[str, Path], bounds: Optional[Bounds] = None) -> List[Point]:
    """
    Read a JSON point list from disk.

    Raises:
        InputError: if the file can't be read, isn't JSON, or holds bad points
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Can't read points file {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputError(f"Can't parse {path} as JSON: {exc}") from exc

    points = parse_points(data, bounds)
    logger.info("Loaded points", path=str(path), count=len(points))
    return points


def dumps_points(points: Sequence[Point]) -> str:
    """Serialize points as a compact JSON array of pairs, in order."""
    return json.dumps([[p.x, p.y] for p in points], separators=(",", ":"))
