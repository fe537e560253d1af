"""
Random number generation utilities.

Every consumer receives its generator explicitly so a seed given on the
command line reproduces both point layouts and cell colors.
"""

from typing import Optional

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the generator used for random points and colors.

    Args:
        seed: Seed for reproducible runs, None for fresh entropy

    Returns:
        NumPy Generator instance
    """
    return np.random.default_rng(seed)


def random_colors(rng: np.random.Generator, count: int) -> np.ndarray:
    """Opaque RGBA colors with random channels, shape (count, 4)."""
    colors = np.ones((count, 4), dtype=float)
    colors[:, :3] = rng.random((count, 3))
    return colors
