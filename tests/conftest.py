"""Shared test configuration."""

import matplotlib

# Renderer and CLI tests must never open a window
matplotlib.use("Agg")
