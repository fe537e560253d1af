"""
Interactive front end: state, input handling, drawing and the CLI.
"""

from .controller import AppState, InputController
from .renderer import DiagramRenderer

__all__ = ['AppState', 'InputController', 'DiagramRenderer']
