#!/usr/bin/env python3
"""
Build a few diagrams without opening a window.

Shows the pieces the interactive demo wires together:
1. Random points from a seeded generator
2. Filled and wireframe diagrams of the same points
3. The console dump format
"""

from interactive_voronoi.core import Bounds, PointSet, RenderMode, build_diagram
from interactive_voronoi.io import dumps_points
from interactive_voronoi.utils.random import make_rng


def main():
    bounds = Bounds.from_size(1280, 720)
    points = PointSet()

    print("=== Interactive Voronoi Demo ===\n")

    # 1. Random points
    print("1. Placing 20 random points...")
    points.random_fill(bounds, 20, make_rng(7))
    print(f"   - {len(points)} points inside {bounds.width:g}x{bounds.height:g}")

    # 2. Filled diagram
    print("\n2. Building filled diagram...")
    filled = build_diagram(points.snapshot(), bounds, RenderMode.FILLED)
    print(f"   - Cells: {len(filled)}")
    print(f"   - Total area: {filled.total_area():.1f} (rectangle {bounds.area:.1f})")
    largest = max(filled.cells, key=lambda cell: cell.area)
    print(f"   - Largest cell: site {largest.index} with {len(largest.neighbors)} neighbours")

    # 3. Wireframe
    print("\n3. Building wireframe...")
    wireframe = build_diagram(points.snapshot(), bounds, RenderMode.WIREFRAME)
    border = sum(1 for edge in wireframe.edges if edge.on_border)
    print(f"   - Edges: {len(wireframe.edges)} ({border} on the border)")

    # 4. Dump
    print("\n4. Console dump of the first three points:")
    print(f"   {dumps_points(points.snapshot()[:3])}")


if __name__ == "__main__":
    main()
