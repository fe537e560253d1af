"""Bounded Voronoi diagram construction."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np
import structlog
from scipy.spatial import cKDTree

from .geometry import (
    BORDER, Bounds, bisector_halfplane, clip_polygon, polygon_area, polygon_radius
)
from .point_set import Point, to_array

logger = structlog.get_logger()

# Nearest neighbours fetched per KD-tree query before widening the search
INITIAL_NEIGHBOURS = 16


class RenderMode(Enum):
    """How a diagram is meant to be drawn."""
    FILLED = "filled"
    WIREFRAME = "wireframe"

    def toggled(self) -> "RenderMode":
        return RenderMode.WIREFRAME if self is RenderMode.FILLED else RenderMode.FILLED


@dataclass(frozen=True)
class Edge:
    """A boundary segment between two cells, or a cell and the border."""
    start: Tuple[float, float]
    end: Tuple[float, float]
    left_site: int
    right_site: Optional[int]  # None on the rectangle border

    @property
    def on_border(self) -> bool:
        return self.right_site is None

    def as_segment(self) -> List[Tuple[float, float]]:
        return [self.start, self.end]


@dataclass
class Cell:
    """Region of the rectangle owned by one site."""
    index: int
    site: Point
    polygon: np.ndarray          # (k, 2) counter-clockwise, empty when degenerate
    edge_labels: List[int]       # edge_labels[k] owns polygon[k] -> polygon[k + 1]
    neighbors: List[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.polygon) == 0

    @property
    def area(self) -> float:
        return polygon_area(self.polygon)


@dataclass
class Diagram:
    """All cells of a point set inside a rectangle."""
    bounds: Bounds
    mode: RenderMode
    cells: List[Cell]
    edges: List[Edge]

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def is_empty(self) -> bool:
        return not self.cells

    @property
    def sites(self) -> np.ndarray:
        return to_array([cell.site for cell in self.cells])

    def polygons(self) -> List[np.ndarray]:
        """Cell polygons in site order, for area fill."""
        return [cell.polygon for cell in self.cells]

    def primitives(self):
        """Whatever the diagram's mode draws: polygons or edges."""
        if self.mode is RenderMode.WIREFRAME:
            return self.edges
        return self.polygons()

    def total_area(self) -> float:
        return sum(cell.area for cell in self.cells)

    def cell_at(self, x: float, y: float) -> Optional[int]:
        """
        Index of the site nearest to (x, y).

        Ties go to the lowest insertion index; None for an empty diagram.
        """
        if not self.cells:
            return None
        sites = self.sites
        d2 = (sites[:, 0] - x) ** 2 + (sites[:, 1] - y) ** 2
        # argmin returns the first minimum
        return int(np.argmin(d2))


def _shadowed_sites(points: Sequence[Point]) -> List[bool]:
    """Flag sites that repeat the coordinates of an earlier site."""
    seen = set()
    flags = []
    for p in points:
        key = (float(p.x), float(p.y))
        flags.append(key in seen)
        seen.add(key)
    return flags


def _build_cell(i: int, coords: np.ndarray, tree: cKDTree, shadowed: List[bool],
                bounds: Bounds) -> Tuple[np.ndarray, List[int]]:
    """
    Clip the bounding rectangle down to the cell of site i.

    Other sites are visited nearest first. A site at distance d can only
    cut the cell if d / 2 is below the distance from site i to its farthest
    remaining vertex, so the walk stops as soon as that fails.
    """
    tol = bounds.tolerance
    polygon = bounds.corners()
    labels = [BORDER] * 4

    if shadowed[i]:
        return np.empty((0, 2)), []

    site = coords[i]
    n = len(coords)
    radius = polygon_radius(polygon, site)
    visited = {i}
    k = min(n, INITIAL_NEIGHBOURS)

    while True:
        distances, indices = tree.query(site, k=k)
        distances = np.atleast_1d(distances)
        indices = np.atleast_1d(indices)

        for d, j in zip(distances, indices):
            j = int(j)
            if j in visited:
                continue
            visited.add(j)
            if shadowed[j] or d == 0:
                continue
            if d / 2.0 > radius + tol:
                return polygon, labels

            normal, offset = bisector_halfplane(site, coords[j])
            polygon, labels = clip_polygon(polygon, labels, normal, offset, j, tol)
            if len(polygon) == 0:
                return polygon, labels
            radius = polygon_radius(polygon, site)

        if k >= n:
            return polygon, labels
        k = min(n, k * 2)


def _collect_edges(cells: List[Cell], tol: float) -> List[Edge]:
    """Each shared side once (from the lower index cell), plus border sides."""
    edges = []
    for cell in cells:
        m = len(cell.polygon)
        for k, label in enumerate(cell.edge_labels):
            if label != BORDER and label < cell.index:
                continue
            a = cell.polygon[k]
            b = cell.polygon[(k + 1) % m]
            if np.hypot(*(b - a)) <= tol:
                continue
            edges.append(Edge(
                start=(float(a[0]), float(a[1])),
                end=(float(b[0]), float(b[1])),
                left_site=cell.index,
                right_site=None if label == BORDER else int(label),
            ))
    return edges


def build_diagram(points: Sequence[Point], bounds: Bounds,
                  mode: RenderMode = RenderMode.FILLED) -> Diagram:
    """
    Compute the Voronoi diagram of points clipped to bounds.

    Pure function of its arguments. Every point of the rectangle belongs to
    the cell of its nearest site; ties go to the lowest insertion index, and
    a site repeating an earlier one gets an empty cell.

    Args:
        points: Sites in insertion order
        bounds: Drawing rectangle
        mode: Rendering mode recorded on the result

    Returns:
        Diagram with one cell per input point

    Raises:
        ConfigError: if bounds has no area
    """
    bounds.validate()
    points = [Point(p[0], p[1]) for p in points]
    if not points:
        return Diagram(bounds=bounds, mode=mode, cells=[], edges=[])

    coords = to_array(points)
    tree = cKDTree(coords)
    shadowed = _shadowed_sites(points)

    cells = []
    for i, site in enumerate(points):
        polygon, labels = _build_cell(i, coords, tree, shadowed, bounds)
        cells.append(Cell(index=i, site=site, polygon=polygon, edge_labels=labels))

    # Symmetric adjacency even where rounding hides a sliver on one side
    adjacency = [set() for _ in cells]
    for cell in cells:
        for label in cell.edge_labels:
            if label != BORDER:
                adjacency[cell.index].add(label)
                adjacency[label].add(cell.index)
    for cell in cells:
        cell.neighbors = sorted(adjacency[cell.index])

    edges = _collect_edges(cells, bounds.tolerance)

    logger.debug("Voronoi diagram built",
                 sites=len(points), edges=len(edges), mode=mode.value)
    return Diagram(bounds=bounds, mode=mode, cells=cells, edges=edges)
