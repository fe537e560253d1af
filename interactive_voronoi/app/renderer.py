"""Draws a Diagram onto a matplotlib Axes."""

from typing import Optional

import numpy as np
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection, PolyCollection

from ..core.voronoi_builder import Diagram, RenderMode

WIREFRAME_COLOR = (0.0, 0.0, 1.0, 1.0)
WIREFRAME_WIDTH = 2.0
SITE_COLOR = (0.0, 0.0, 0.0, 1.0)
SITE_SIZE = 16.0
BACKGROUND_COLOR = (1.0, 1.0, 1.0, 1.0)


class DiagramRenderer:
    """
    Paints diagrams in screen coordinates: origin top left, y pointing down.
    """

    def __init__(self, ax: Axes):
        self.ax = ax

    def _reset_axes(self, diagram: Diagram) -> None:
        bounds = diagram.bounds
        self.ax.clear()
        self.ax.set_xlim(bounds.x_min, bounds.x_max)
        self.ax.set_ylim(bounds.y_max, bounds.y_min)
        self.ax.set_aspect("equal")
        self.ax.set_facecolor(BACKGROUND_COLOR)
        self.ax.set_axis_off()

    def draw(self, diagram: Diagram, colors: Optional[np.ndarray] = None) -> None:
        """
        Replace whatever the axes show with the diagram.

        Args:
            diagram: Diagram to draw
            colors: RGBA fill color per cell, used in filled mode
        """
        self._reset_axes(diagram)

        if diagram.mode is RenderMode.WIREFRAME:
            segments = [edge.as_segment() for edge in diagram.edges]
            if segments:
                self.ax.add_collection(LineCollection(
                    segments, colors=[WIREFRAME_COLOR], linewidths=WIREFRAME_WIDTH
                ))
        else:
            polygons = []
            facecolors = []
            for cell in diagram.cells:
                if cell.is_empty:
                    continue
                polygons.append(cell.polygon)
                if colors is not None and cell.index < len(colors):
                    facecolors.append(colors[cell.index])
                else:
                    facecolors.append(BACKGROUND_COLOR)
            if polygons:
                self.ax.add_collection(PolyCollection(
                    polygons, facecolors=facecolors, edgecolors="none"
                ))

        if not diagram.is_empty:
            sites = diagram.sites
            self.ax.scatter(sites[:, 0], sites[:, 1], s=SITE_SIZE, c=[SITE_COLOR], zorder=3)
