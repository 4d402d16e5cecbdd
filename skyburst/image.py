"""A small RGB(A) raster image backed by a numpy array."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from os import PathLike
from typing import Sequence, Union

import numpy as np
from PIL import Image as PILImage

PathType = Union[str, "PathLike[str]"]


@dataclass(frozen=True)
class Pixel:
    """An 8-bit RGB colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in 0..255, got {value}")


class Image:
    """Pixels stored row by row; a new image is black and has three channels."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self._data = np.zeros((height, width, 3), dtype=np.uint8)

    @classmethod
    def load(cls, filename: PathType) -> "Image":
        """Read an image file; rows are flipped so that row 0 is the bottom line.

        Images with transparency keep four channels, all others get three.
        """
        with PILImage.open(filename) as source:
            has_alpha = "A" in source.getbands() or "transparency" in source.info
            converted = source.convert("RGBA" if has_alpha else "RGB")
            array = np.asarray(converted, dtype=np.uint8)
        image = cls()
        image._data = np.ascontiguousarray(array[::-1])
        return image

    def save(self, filename: PathType) -> None:
        """Write the RGB channels as a PNG, row 0 first."""
        rgb = np.ascontiguousarray(self._data[:, :, :3])
        PILImage.fromarray(rgb).save(filename, format="PNG")

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def channels(self) -> int:
        return self._data.shape[2]

    @property
    def data(self) -> np.ndarray:
        """The pixel array of shape (height, width, channels)."""
        return self._data

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                f"pixel ({row}, {col}) outside {self.height}x{self.width} image"
            )

    def get(self, row: int, col: int) -> Pixel:
        self._check(row, col)
        r, g, b = (int(v) for v in self._data[row, col, :3])
        return Pixel(r, g, b)

    def set(self, row: int, col: int, pixel: Pixel) -> None:
        self._check(row, col)
        self._data[row, col, :3] = (pixel.r, pixel.g, pixel.b)

    def get_vec3(self, row: int, col: int) -> np.ndarray:
        """Return the colour with components scaled to [0, 1]."""
        self._check(row, col)
        return self._data[row, col, :3].astype(float) / 255.0

    def set_vec3(self, row: int, col: int, color: Sequence[float]) -> None:
        """Set a colour given with components in [0, 1]."""
        self._check(row, col)
        scaled = np.asarray(color, dtype=float)[:3] * 255.999
        self._data[row, col, :3] = np.clip(scaled, 0, 255).astype(np.uint8)

    def __copy__(self) -> "Image":
        duplicate = Image()
        duplicate._data = self._data.copy()
        return duplicate

    def __deepcopy__(self, memo: dict) -> "Image":
        return copy.copy(self)