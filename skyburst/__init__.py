"""Firework particle systems, a draw-call recording renderer, and puzzle and graph solvers."""

__version__ = "0.1.0"