"""
Reading and writing point lists.
"""

from .json_points import dumps_points, load_points, parse_points

__all__ = ['dumps_points', 'load_points', 'parse_points']
