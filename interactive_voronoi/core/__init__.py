"""
Geometric core: point sets and Voronoi construction.
"""

from .geometry import Bounds
from .point_set import Point, PointSet, as_point
from .voronoi_builder import Cell, Diagram, Edge, RenderMode, build_diagram

__all__ = ['Bounds', 'Point', 'PointSet', 'as_point',
           'Cell', 'Diagram', 'Edge', 'RenderMode', 'build_diagram']
