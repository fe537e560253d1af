"""Ordered collection of Voronoi sites."""

import math
import numbers
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import structlog

from ..config import DEFAULT_RANDOM_COUNT
from ..errors import ConfigError, InputError
from .geometry import Bounds

logger = structlog.get_logger()

# Two clicks closer than this on both axes land on the same point
DUPLICATE_EPSILON = 0.001


class Point(NamedTuple):
    """Screen coordinates of a site."""
    x: float
    y: float


def _coordinate(value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InputError(f"Coordinate must be a number, got {value!r}")
    if isinstance(value, np.generic):
        value = value.item()
    try:
        as_float = float(value)
    except OverflowError as exc:
        raise InputError("Coordinate is too large to represent as a float") from exc
    if not math.isfinite(as_float):
        raise InputError(f"Coordinate must be finite, got {value!r}")
    return value


def as_point(value) -> Point:
    """
    Validate an (x, y) pair and return it as a Point.

    Integer coordinates stay integers so a dump reproduces its input.

    Raises:
        InputError: if value is not a pair of finite numbers
    """
    if isinstance(value, Point):
        return Point(_coordinate(value.x), _coordinate(value.y))
    if isinstance(value, (str, bytes)):
        raise InputError(f"Expected an (x, y) pair, got {value!r}")
    try:
        x, y = value
    except (TypeError, ValueError) as exc:
        raise InputError(f"Expected an (x, y) pair, got {value!r}") from exc
    return Point(_coordinate(x), _coordinate(y))


class PointSet:
    """
    Sites in insertion order.

    Insertion order decides ownership of tied regions and is what the
    console dump reproduces. Duplicates are allowed.
    """

    def __init__(self, points: Optional[Iterable] = None):
        self._points: List[Point] = []
        if points is not None:
            self.replace(points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"PointSet({self._points!r})"

    def append(self, point) -> Point:
        """Add a point at the end and return it."""
        p = as_point(point)
        self._points.append(p)
        return p

    def replace(self, points: Iterable) -> None:
        """
        Install a new sequence of points verbatim.

        The whole input is validated before anything changes, so a failure
        leaves the current contents untouched.

        Raises:
            InputError: if any entry is malformed
        """
        validated = [as_point(p) for p in points]
        self._points = validated
        logger.debug("Point set replaced", count=len(validated))

    def clear(self) -> None:
        self._points = []

    def random_fill(self, bounds: Bounds, n: int = DEFAULT_RANDOM_COUNT,
                    rng: Optional[np.random.Generator] = None) -> None:
        """
        Replace contents with n points drawn uniformly inside bounds.

        Args:
            bounds: Rectangle to sample from
            n: Number of points, zero leaves the set empty
            rng: Random generator; a fresh unseeded one when omitted

        Raises:
            ConfigError: if n is negative or bounds are empty
        """
        if n < 0:
            raise ConfigError(f"Random point count must be non-negative, got {n}")
        bounds.validate()
        rng = rng if rng is not None else np.random.default_rng()

        xs = rng.uniform(bounds.x_min, bounds.x_max, n)
        ys = rng.uniform(bounds.y_min, bounds.y_max, n)
        self._points = [Point(float(x), float(y)) for x, y in zip(xs, ys)]
        logger.debug("Random points generated", count=n)

    def snapshot(self) -> Tuple[Point, ...]:
        """Immutable copy of the current points in insertion order."""
        return tuple(self._points)

    def contains_near(self, point, epsilon: float = DUPLICATE_EPSILON) -> bool:
        """True if an existing point lies within epsilon on both axes."""
        p = as_point(point)
        return any(
            abs(p.x - q.x) < epsilon and abs(p.y - q.y) < epsilon
            for q in self._points
        )


def to_array(points: Sequence[Point]) -> np.ndarray:
    """Points as a float array of shape (n, 2)."""
    if len(points) == 0:
        return np.empty((0, 2), dtype=float)
    return np.array(points, dtype=float)
