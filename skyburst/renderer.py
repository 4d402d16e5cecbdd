"""A billboard renderer that keeps its camera state and records draw calls.

Nothing is drawn here: every quad or fire sprite becomes a :class:`DrawCall`.
A front end projects those calls with :meth:`Renderer.project` and paints them.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from .image import Image, PathType

FIRE_TEXTURE = "textures/ParticleFirecloud.png"
FIRE_ROWS = 4
FIRE_COLS = 8


class BlendMode(Enum):
    """How a sprite is combined with what is already on screen."""

    DEFAULT = 0
    ADD = 1
    ALPHA = 2


@dataclass(frozen=True)
class DrawCall:
    """One sprite to be drawn, with the render state it was issued under."""

    kind: str
    position: tuple[float, float, float]
    color: tuple[float, float, float, float]
    size: float
    texture_id: int | None
    blend_mode: BlendMode
    rows: int = 1
    cols: int = 1
    time: float = 0.0


def _vector(values: Sequence[float], length: int, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (length,):
        raise ValueError(f"{name} must have {length} components, got shape {array.shape}")
    return array


def perspective_matrix(
    fov_radians: float, aspect: float, near: float, far: float
) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    if aspect == 0:
        raise ValueError("aspect ratio must not be zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = np.tan(fov_radians / 2.0)
    if tan_half == 0:
        raise ValueError("field of view must not be zero")
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def ortho_matrix(
    minx: float, maxx: float, miny: float, maxy: float, minz: float, maxz: float
) -> np.ndarray:
    """Right-handed orthographic projection mapping the box to [-1, 1] cubed."""
    if minx == maxx or miny == maxy or minz == maxz:
        raise ValueError("orthographic box must have non-zero extent")
    m = np.eye(4)
    m[0, 0] = 2.0 / (maxx - minx)
    m[1, 1] = 2.0 / (maxy - miny)
    m[2, 2] = -2.0 / (maxz - minz)
    m[0, 3] = -(maxx + minx) / (maxx - minx)
    m[1, 3] = -(maxy + miny) / (maxy - miny)
    m[2, 3] = -(maxz + minz) / (maxz - minz)
    return m


def look_at_matrix(
    eye: Sequence[float], center: Sequence[float], up: Sequence[float] = (0.0, 1.0, 0.0)
) -> np.ndarray:
    """Right-handed view matrix for a camera at ``eye`` looking at ``center``."""
    eye_v = _vector(eye, 3, "eye")
    forward = _vector(center, 3, "center") - eye_v
    length = np.linalg.norm(forward)
    if length == 0:
        raise ValueError("eye and center must differ")
    forward /= length
    side = np.cross(forward, _vector(up, 3, "up"))
    side_length = np.linalg.norm(side)
    if side_length == 0:
        raise ValueError("up must not be parallel to the viewing direction")
    side /= side_length
    true_up = np.cross(side, forward)
    m = np.eye(4)
    m[0, :3] = side
    m[1, :3] = true_up
    m[2, :3] = -forward
    m[0, 3] = -np.dot(side, eye_v)
    m[1, 3] = -np.dot(true_up, eye_v)
    m[2, 3] = np.dot(forward, eye_v)
    return m


def load_shader_source(filename: PathType) -> str:
    """Return the text of a shader file."""
    with open(filename, encoding="utf-8") as handle:
        return handle.read()


class Renderer:
    """Camera, textures and a list of recorded sprite draws."""

    def __init__(self) -> None:
        self._initialized = False
        self.vertex_source = ""
        self.fragment_source = ""
        self.fire_texture_path: PathType = FIRE_TEXTURE
        self._projection = np.eye(4)
        self._view = np.eye(4)
        self._lookfrom = np.zeros(3)
        self._textures: dict[int, Image] = {}
        self._texture_ids = itertools.count(1)
        self._fire_texture_id: int | None = None
        self._texture: int | None = None
        self._blend = BlendMode.DEFAULT
        self._active = False
        self._calls: list[DrawCall] = []
        self._start = time.monotonic()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def camera_position(self) -> np.ndarray:
        return self._lookfrom.copy()

    @property
    def projection(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def view(self) -> np.ndarray:
        return self._view.copy()

    @property
    def blend_mode(self) -> BlendMode:
        return self._blend

    @property
    def active(self) -> bool:
        """True between :meth:`begin` and :meth:`end`."""
        return self._active

    @property
    def textures(self) -> dict[int, Image]:
        return dict(self._textures)

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("renderer has not been initialized")

    def init(self, vertex: PathType, fragment: PathType) -> None:
        """Load the shader sources and mark the renderer ready."""
        vertex_source = load_shader_source(vertex)
        fragment_source = load_shader_source(fragment)
        self.vertex_source = vertex_source
        self.fragment_source = fragment_source
        self._initialized = True

    def load_texture(self, filename: PathType) -> int:
        """Load an image file and return a new texture id for it."""
        image = Image.load(filename)
        texture_id = next(self._texture_ids)
        self._textures[texture_id] = image
        return texture_id

    def perspective(
        self, fov_radians: float, aspect: float, near: float, far: float
    ) -> None:
        self._projection = perspective_matrix(fov_radians, aspect, near, far)

    def ortho(
        self, minx: float, maxx: float, miny: float, maxy: float, minz: float, maxz: float
    ) -> None:
        self._projection = ortho_matrix(minx, maxx, miny, maxy, minz, maxz)

    def look_at(self, lookfrom: Sequence[float], lookat: Sequence[float]) -> None:
        self._view = look_at_matrix(lookfrom, lookat, (0.0, 1.0, 0.0))
        self._lookfrom = _vector(lookfrom, 3, "lookfrom").copy()

    def view_projection(self) -> np.ndarray:
        return self._projection @ self._view

    def project(self, pos: Sequence[float]) -> np.ndarray | None:
        """Return normalised device coordinates of ``pos``, or None if it is behind the camera."""
        point = np.append(_vector(pos, 3, "pos"), 1.0)
        clip = self.view_projection() @ point
        if clip[3] <= 0:
            return None
        return clip[:3] / clip[3]

    def begin(self, texture_id: int | None, mode: BlendMode) -> None:
        """Start a batch of sprites drawn with one texture and blend mode."""
        self._require_initialized()
        self._texture = texture_id
        self._blend = BlendMode(mode)
        self._active = True

    def _record(
        self,
        kind: str,
        pos: Sequence[float],
        color: Sequence[float],
        size: float,
        texture_id: int | None,
        **extra: float,
    ) -> None:
        position = tuple(float(v) for v in _vector(pos, 3, "pos"))
        rgba = tuple(float(v) for v in _vector(color, 4, "color"))
        self._calls.append(
            DrawCall(kind, position, rgba, float(size), texture_id, self._blend, **extra)
        )

    def quad(self, pos: Sequence[float], color: Sequence[float], size: float) -> None:
        """Record a camera-facing square centred at ``pos``."""
        self._require_initialized()
        self._record("quad", pos, color, size, self._texture)

    def fire(self, pos: Sequence[float], color: Sequence[float], size: float) -> None:
        """Record an animated fire sprite using the fire texture sheet."""
        self._require_initialized()
        if self._fire_texture_id is None:
            self._fire_texture_id = self.load_texture(self.fire_texture_path)
        self._record(
            "fire",
            pos,
            color,
            size,
            self._fire_texture_id,
            rows=FIRE_ROWS,
            cols=FIRE_COLS,
            time=time.monotonic() - self._start,
        )

    def end(self) -> None:
        self._require_initialized()
        self._active = False
        self._texture = None

    def take_draw_calls(self) -> list[DrawCall]:
        """Return the draw calls recorded so far and start a new list."""
        calls, self._calls = self._calls, []
        return calls