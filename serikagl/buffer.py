"""Two-dimensional pixel buffers with nearest and bilinear sampling."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional, Sequence, Union

import numpy as np

PixelValue = Union[float, int, Sequence[float], np.ndarray]


class FilterMode(Enum):
    """How a buffer is sampled between pixel centres."""

    NEAREST = 0
    LINEAR = 1


class Buffer:
    """A width x height grid of pixels, each holding a fixed number of components.

    Pixels are stored row by row, so the pixel at ``(x, y)`` sits at flat
    index ``x + y * width``. The element type of the buffer is the numpy
    dtype of ``default``: pass e.g. ``np.zeros(4, dtype=np.uint8)`` for an
    RGBA8 buffer.
    """

    def __init__(self, width: int, height: int, default: PixelValue = 0.0) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"buffer size must not be negative: {width}x{height}")
        value = np.atleast_1d(np.asarray(default))
        if value.ndim != 1:
            raise ValueError("a pixel value must be a scalar or a flat sequence")
        self._dtype = value.dtype
        self._data = np.empty((height, width, value.size), dtype=self._dtype)
        self._data[...] = value

    @classmethod
    def from_array(cls, pixels: Any, *, dtype: Any = None) -> "Buffer":
        """Build a buffer from an array shaped (height, width) or (height, width, components)."""
        array = np.asarray(pixels) if dtype is None else np.asarray(pixels, dtype=dtype)
        if array.ndim == 2:
            array = array[..., np.newaxis]
        if array.ndim != 3:
            raise ValueError("pixel array must have two or three dimensions")
        buffer = cls(0, 0, np.zeros(array.shape[2], dtype=array.dtype))
        buffer._data = np.array(array, dtype=array.dtype)
        return buffer

    @staticmethod
    def calc_index(x: int, y: int, width: int) -> int:
        """Flat index of ``(x, y)`` in a buffer of the given width."""
        return x + y * width

    def index(self, x: int, y: int) -> int:
        """Flat index of ``(x, y)`` in this buffer."""
        return self.calc_index(x, y, self.width)

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def components(self) -> int:
        """Number of components per pixel."""
        return self._data.shape[2]

    @property
    def size(self) -> int:
        """Number of pixels."""
        return self.width * self.height

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel_clamped(self, x: int, y: int) -> np.ndarray:
        """Writable view of the pixel nearest to ``(x, y)`` inside the buffer."""
        x = min(max(int(x), 0), self.width - 1)
        y = min(max(int(y), 0), self.height - 1)
        return self._data[y, x]

    def get_pixel(self, x: float, y: float) -> np.ndarray:
        """Copy of the pixel at ``(x, y)``; zeros outside the buffer."""
        x, y = int(x), int(y)
        if not self._inside(x, y):
            return np.zeros(self.components, dtype=self._dtype)
        return self._data[y, x].copy()

    def sample_2d(
        self, u: float, v: float, filter_mode: FilterMode = FilterMode.NEAREST
    ) -> np.ndarray:
        """Sample at texture coordinates ``(u, v)`` scaled to the buffer size."""
        x, y = u * self.width, v * self.height
        if filter_mode is FilterMode.NEAREST:
            return self.get_pixel(x, y)
        if filter_mode is FilterMode.LINEAR:
            x1, y1 = int(x), int(y)
            x2, y2 = x1 + 1, y1 + 1
            q11 = self.get_pixel(x1, y1).astype(float)
            q21 = self.get_pixel(x2, y1).astype(float)
            q12 = self.get_pixel(x1, y2).astype(float)
            q22 = self.get_pixel(x2, y2).astype(float)

            def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
                return a + (b - a) * t

            r1 = lerp(q11, q21, x - x1)
            r2 = lerp(q12, q22, x - x1)
            return lerp(r1, r2, y - y1).astype(self._dtype)
        return np.zeros(self.components, dtype=self._dtype)

    def set(self, x: int, y: int, value: PixelValue) -> None:
        """Store ``value`` at ``(x, y)``."""
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        self._data[y, x] = value

    def clear(self) -> None:
        """Set every component of every pixel to zero."""
        self._data.fill(0)

    def copy_from(
        self, other: "Buffer", convert: Optional[Callable[[np.ndarray], PixelValue]] = None
    ) -> "Buffer":
        """Take the size and pixels of ``other``, converted to this buffer's type.

        Without ``convert`` each component is cast to this buffer's dtype;
        otherwise ``convert`` maps each source pixel to the new pixel value.
        """
        source = other.raw_data()
        if convert is None:
            data = np.array(source, dtype=self._dtype)
        elif other.width and other.height:
            rows = [
                [np.atleast_1d(np.asarray(convert(pixel), dtype=self._dtype)) for pixel in row]
                for row in source
            ]
            data = np.array(rows, dtype=self._dtype)
        else:
            data = np.empty((other.height, other.width, self.components), dtype=self._dtype)
        self._data = data
        return self

    def raw_data(self) -> np.ndarray:
        """Read-only view of the pixels, shaped (height, width, components)."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def __repr__(self) -> str:
        return (
            f"Buffer(width={self.width}, height={self.height}, "
            f"components={self.components}, dtype={self._dtype})"
        )