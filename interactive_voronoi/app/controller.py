"""Application state and the input controller driving it."""

import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, TextIO

import numpy as np
import structlog

from ..config import DEFAULT_RANDOM_COUNT, Settings
from ..core.geometry import Bounds
from ..core.point_set import PointSet
from ..core.voronoi_builder import Diagram, RenderMode, build_diagram
from ..io.json_points import dumps_points, load_points
from ..utils.random import make_rng, random_colors

logger = structlog.get_logger()


@dataclass
class AppState:
    """Everything the event loop owns between frames."""
    bounds: Bounds
    points: PointSet = field(default_factory=PointSet)
    mode: RenderMode = RenderMode.FILLED
    random_count: int = DEFAULT_RANDOM_COUNT
    rng: np.random.Generator = field(default_factory=make_rng)
    colors: np.ndarray = field(default_factory=lambda: np.empty((0, 4)))
    diagram: Optional[Diagram] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppState":
        """
        Build the initial state, loading the JSON point file if configured.

        Raises:
            ConfigError: if the window size is unusable
            InputError: if the point file is malformed
        """
        bounds = Bounds.from_size(settings.width, settings.height).validate()
        state = cls(
            bounds=bounds,
            mode=RenderMode.WIREFRAME if settings.lines_only else RenderMode.FILLED,
            random_count=settings.random_count,
            rng=make_rng(settings.seed),
        )
        if settings.json_path is not None:
            state.points.replace(load_points(settings.json_path, bounds))
        state.recolor()
        return state

    def recolor(self) -> None:
        self.colors = random_colors(self.rng, len(self.points))

    def sync_colors(self) -> None:
        """Keep one color per point, coloring new points at random."""
        missing = len(self.points) - len(self.colors)
        if missing > 0:
            self.colors = np.vstack([self.colors, random_colors(self.rng, missing)])
        elif missing < 0:
            self.colors = self.colors[:len(self.points)]

    def invalidate(self) -> None:
        self.diagram = None

    def current_diagram(self) -> Diagram:
        """Diagram for the current points, rebuilt only after a change."""
        if self.diagram is None:
            self.diagram = build_diagram(self.points.snapshot(), self.bounds, self.mode)
        return self.diagram


class InputController:
    """
    Translates clicks and key presses into state changes.

    Handlers return True when the window needs a redraw.
    """

    def __init__(self, state: AppState, out: Optional[TextIO] = None):
        self.state = state
        self.out = out
        self._key_actions: Dict[str, Callable[[], bool]] = {
            "n": self.clear,
            "r": self.randomize,
            "l": self.toggle_mode,
            "c": self.recolor,
            "s": self.dump,
        }

    def on_click(self, x: float, y: float) -> bool:
        """Add a point under the cursor unless one is already there."""
        if not self.state.bounds.contains(x, y):
            return False
        if self.state.points.contains_near((x, y)):
            logger.debug("Point already there, not added", x=x, y=y)
            return False
        self.state.points.append((float(x), float(y)))
        self.state.sync_colors()
        self.state.invalidate()
        logger.debug("Point added", x=x, y=y, count=len(self.state.points))
        return True

    def on_key(self, key: Optional[str]) -> bool:
        """Run the action bound to key; unknown keys do nothing."""
        if not key:
            return False
        action = self._key_actions.get(key.lower())
        if action is None:
            return False
        return action()

    def clear(self) -> bool:
        self.state.points.clear()
        self.state.sync_colors()
        self.state.invalidate()
        logger.info("Points cleared")
        return True

    def randomize(self) -> bool:
        self.state.points.random_fill(self.state.bounds, self.state.random_count, self.state.rng)
        self.state.recolor()
        self.state.invalidate()
        logger.info("Random points placed", count=self.state.random_count)
        return True

    def toggle_mode(self) -> bool:
        self.state.mode = self.state.mode.toggled()
        self.state.invalidate()
        logger.info("Render mode changed", mode=self.state.mode.value)
        return True

    def recolor(self) -> bool:
        self.state.recolor()
        return True

    def dump(self) -> bool:
        """Print the points as JSON in insertion order."""
        out = self.out if self.out is not None else sys.stdout
        print(dumps_points(self.state.points.snapshot()), file=out)
        return False
