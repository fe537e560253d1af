"""Rectangle and polygon helpers used to clip Voronoi cells."""

import math
from typing import List, NamedTuple, Tuple

import numpy as np

from ..errors import ConfigError

# Edge label for polygon sides lying on the bounding rectangle
BORDER = -1

# Relative tolerance, scaled by the rectangle size
EPSILON = 1e-9


class Bounds(NamedTuple):
    """Axis aligned drawing rectangle."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @classmethod
    def from_size(cls, width: float, height: float) -> "Bounds":
        return cls(0.0, 0.0, float(width), float(height))

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def tolerance(self) -> float:
        """Absolute distance below which two coordinates are treated as equal."""
        return EPSILON * max(self.width, self.height, 1.0)

    def validate(self) -> "Bounds":
        """Return self, or raise ConfigError for an empty or non-finite rectangle."""
        if not all(math.isfinite(v) for v in self):
            raise ConfigError(f"Bounds must be finite, got {tuple(self)}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(
                f"Bounds must have positive width and height, got {self.width}x{self.height}"
            )
        return self

    def contains(self, x: float, y: float) -> bool:
        """Inclusive containment test."""
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def corners(self) -> np.ndarray:
        """Rectangle vertices in counter-clockwise order."""
        return np.array([
            [self.x_min, self.y_min],
            [self.x_max, self.y_min],
            [self.x_max, self.y_max],
            [self.x_min, self.y_max],
        ], dtype=float)


def polygon_area(vertices: np.ndarray) -> float:
    """Signed shoelace area, positive for counter-clockwise vertices."""
    if len(vertices) < 3:
        return 0.0
    x = vertices[:, 0]
    y = vertices[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def polygon_radius(vertices: np.ndarray, center: np.ndarray) -> float:
    """Largest distance from center to any vertex."""
    if len(vertices) == 0:
        return 0.0
    return float(np.max(np.hypot(vertices[:, 0] - center[0], vertices[:, 1] - center[1])))


def point_in_polygon(vertices: np.ndarray, x: float, y: float, tol: float = 0.0) -> bool:
    """Test a point against a convex counter-clockwise polygon, boundary included."""
    n = len(vertices)
    if n < 3:
        return False
    for k in range(n):
        ax, ay = vertices[k]
        bx, by = vertices[(k + 1) % n]
        length = math.hypot(bx - ax, by - ay)
        if length == 0:
            continue
        # Signed distance to the left of edge a->b
        cross = ((bx - ax) * (y - ay) - (by - ay) * (x - ax)) / length
        if cross < -tol:
            return False
    return True


def bisector_halfplane(site: np.ndarray, other: np.ndarray) -> Tuple[np.ndarray, float]:
    """
    Half-plane of points at least as close to site as to other.

    Returns (normal, offset) such that the half-plane is
    ``dot(normal, p) <= offset``.
    """
    normal = other - site
    # Midpoint form: the difference of squared norms cancels for close sites
    offset = float(np.dot(normal, 0.5 * (site + other)))
    return normal, offset


def clip_polygon(vertices: np.ndarray, labels: List[int],
                 normal: np.ndarray, offset: float, label: int,
                 tol: float) -> Tuple[np.ndarray, List[int]]:
    """
    Clip a convex polygon to the half-plane ``dot(normal, p) <= offset``.

    Sutherland-Hodgman against a single line. ``labels[k]`` names whatever
    produced the side from vertex k to vertex k + 1; sides created along the
    clipping line get ``label``.

    Args:
        vertices: Counter-clockwise polygon vertices, shape (k, 2)
        labels: One label per side
        normal: Half-plane normal (need not be unit length)
        offset: Half-plane offset
        label: Label for new sides along the clip line
        tol: Distance within which a vertex counts as on the line

    Returns:
        Tuple of (clipped vertices, clipped labels); empty when nothing is left
    """
    n = len(vertices)
    if n == 0:
        return vertices, labels

    norm = float(np.hypot(normal[0], normal[1]))
    dist = (vertices @ normal - offset) / norm

    if np.all(dist <= tol):
        return vertices, labels
    if np.all(dist >= -tol):
        return np.empty((0, 2)), []

    out_vertices = []
    out_labels = []
    for k in range(n):
        j = (k + 1) % n
        cur, nxt = vertices[k], vertices[j]
        d_cur, d_nxt = dist[k], dist[j]

        if d_cur <= tol:
            out_vertices.append(cur)
            if d_nxt <= tol:
                out_labels.append(labels[k])
            elif d_cur >= -tol:
                # Leaving from a vertex on the line
                out_labels.append(label)
            else:
                t = d_cur / (d_cur - d_nxt)
                out_labels.append(labels[k])
                out_vertices.append(cur + t * (nxt - cur))
                out_labels.append(label)
        elif d_nxt < -tol:
            t = d_cur / (d_cur - d_nxt)
            out_vertices.append(cur + t * (nxt - cur))
            out_labels.append(labels[k])

    return _drop_degenerate(np.array(out_vertices, dtype=float), out_labels, tol)


def _drop_degenerate(vertices: np.ndarray, labels: List[int],
                     tol: float) -> Tuple[np.ndarray, List[int]]:
    """Remove zero-length sides; collapse to empty below three vertices."""
    keep_vertices = []
    keep_labels = []
    n = len(vertices)
    for k in range(n):
        nxt = vertices[(k + 1) % n]
        if math.hypot(nxt[0] - vertices[k][0], nxt[1] - vertices[k][1]) <= tol:
            continue
        keep_vertices.append(vertices[k])
        keep_labels.append(labels[k])

    if len(keep_vertices) < 3:
        return np.empty((0, 2)), []
    return np.array(keep_vertices, dtype=float), keep_labels
