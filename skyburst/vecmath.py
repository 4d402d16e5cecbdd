"""Vector formatting and random sampling helpers."""

from __future__ import annotations

import math
import random
from typing import Iterable, Sequence

import numpy as np

pi = math.pi
infinity = math.inf

_default_rng = random.Random()


def _rng(rng: random.Random | None) -> random.Random:
    return _default_rng if rng is None else rng


def format_vector(v: Iterable[float]) -> str:
    """Format components with ten-wide fixed notation, separated by commas."""
    return ", ".join(f"{float(x):10f}" for x in v)


def format_matrix(m: Sequence[Iterable[float]]) -> str:
    """Format each m[i] in turn as a vector; the parts are joined with no separator."""
    return "".join(format_vector(part) for part in m)


def random_float(
    low: float = 0.0, high: float = 1.0, rng: random.Random | None = None
) -> float:
    """Return a uniform float in [low, high)."""
    return low + (high - low) * _rng(rng).random()


def random_unit_cube(rng: random.Random | None = None) -> np.ndarray:
    """Return a point uniformly sampled in the cube [-0.5, 0.5)^3."""
    r = _rng(rng)
    return np.array([random_float(-0.5, 0.5, r) for _ in range(3)])


def random_unit_square(rng: random.Random | None = None) -> np.ndarray:
    """Return a point in the square [-0.5, 0.5)^2 with z set to 0."""
    r = _rng(rng)
    return np.array([random_float(-0.5, 0.5, r), random_float(-0.5, 0.5, r), 0.0])


def random_unit_sphere(rng: random.Random | None = None) -> np.ndarray:
    """Return a cube sample whose length is below 1."""
    r = _rng(rng)
    while True:
        p = random_unit_cube(r)
        if np.linalg.norm(p) < 1.0:
            return p


def random_unit_disk(rng: random.Random | None = None) -> np.ndarray:
    """Return a square sample whose length is below 1."""
    r = _rng(rng)
    while True:
        p = random_unit_square(r)
        if np.linalg.norm(p) < 1.0:
            return p


def random_hemisphere(
    normal: Sequence[float], rng: random.Random | None = None
) -> np.ndarray:
    """Return a random direction on the same side as ``normal``."""
    p = random_unit_sphere(rng)
    if float(np.dot(p, np.asarray(normal, dtype=float))) > 0.0:
        return p
    return -p


def random_unit_vector(rng: random.Random | None = None) -> np.ndarray:
    """Return a random vector of length 1."""
    p = random_unit_sphere(rng)
    return p / np.linalg.norm(p)


def near_zero(v: Iterable[float]) -> bool:
    """Return True if every component is smaller than 1e-8 in magnitude."""
    return all(abs(float(x)) < 1e-8 for x in v)