"""Command line entry point and matplotlib event loop."""

import argparse
import sys
from typing import List, Optional

import structlog

from ..config import Settings, load_settings
from ..errors import VoronoiError
from ..log import configure_logging
from .controller import AppState, InputController
from .renderer import DiagramRenderer

logger = structlog.get_logger()

WINDOW_TITLE = "Interactive Voronoi"
DPI = 100

# Letters the demo binds; matplotlib's own shortcuts for them are removed
BOUND_KEYS = {"n", "N", "r", "R", "l", "L", "c", "C", "s", "S"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="interactive-voronoi",
        description="Click to place points and watch their Voronoi diagram. "
                    "Keys: N clear, R random points, L toggle outlines, "
                    "C recolor, S print points as JSON, Esc quit.",
    )
    parser.add_argument(
        "-l", "--lines-only", action="store_true", default=None,
        help="Don't color polygons, just outline them",
    )
    parser.add_argument(
        "-r", "--random-count", type=int, metavar="RANDOMCOUNT",
        help="On keypress R, put this many random points on-screen (default 50)",
    )
    parser.add_argument(
        "-j", "--json-dots", dest="json_path", metavar="JSON",
        help="Load dots from a JSON file of [x, y] pairs",
    )
    parser.add_argument("--width", type=int, help="Window width in pixels")
    parser.add_argument("--height", type=int, help="Window height in pixels")
    parser.add_argument("--seed", type=int, help="Seed for random points and colors")
    parser.add_argument("--log-level", help="Logging level (default WARNING)")
    return parser


def parse_settings(argv: Optional[List[str]] = None) -> Settings:
    """Parse argv into Settings; CLI flags override the environment."""
    args = build_parser().parse_args(argv)
    return load_settings(**vars(args))


def _keymap_overrides() -> dict:
    """rcParams with the demo's keys stripped from matplotlib's defaults."""
    import matplotlib

    overrides = {}
    for name, keys in matplotlib.rcParams.items():
        if name.startswith("keymap."):
            overrides[name] = [k for k in keys if k not in BOUND_KEYS]
    overrides["keymap.quit"] = list(overrides.get("keymap.quit", [])) + ["escape"]
    overrides["toolbar"] = "None"
    return overrides


def run(state: AppState) -> None:
    """Open the window and block until it is closed."""
    import matplotlib.pyplot as plt

    with plt.rc_context(_keymap_overrides()):
        width, height = state.bounds.width, state.bounds.height
        fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI)
        if fig.canvas.manager is not None:
            fig.canvas.manager.set_window_title(WINDOW_TITLE)
        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))

        controller = InputController(state)
        renderer = DiagramRenderer(ax)

        def redraw():
            renderer.draw(state.current_diagram(), state.colors)
            fig.canvas.draw_idle()

        def on_click(event):
            if event.inaxes is not ax or event.xdata is None:
                return
            if controller.on_click(event.xdata, event.ydata):
                redraw()

        def on_key(event):
            if controller.on_key(event.key):
                redraw()

        fig.canvas.mpl_connect("button_release_event", on_click)
        fig.canvas.mpl_connect("key_release_event", on_key)

        redraw()
        logger.info("Window opened", width=width, height=height,
                    points=len(state.points), mode=state.mode.value)
        plt.show()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the demo; returns the process exit status."""
    try:
        settings = parse_settings(argv)
    except VoronoiError as exc:
        configure_logging()
        logger.error("Startup failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level, settings.log_format)

    try:
        state = AppState.from_settings(settings)
    except VoronoiError as exc:
        logger.error("Startup failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    run(state)
    return 0


if __name__ == "__main__":
    sys.exit(main())
