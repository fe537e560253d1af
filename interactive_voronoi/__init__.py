"""Interactive Voronoi diagram demo."""

__version__ = "0.1.0"
