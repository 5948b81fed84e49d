"""Reading and writing RGBA images, and turning float images into greyscale."""

from __future__ import annotations

import os
from typing import Any, Optional, Sequence, Union

import numpy as np
from PIL import Image

from serikagl.buffer import Buffer

_COMPONENT_MODES = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}
_FLT_MAX = float(np.finfo(np.float32).max)
_FLT_MIN = float(np.finfo(np.float32).tiny)

PathLike = Union[str, os.PathLike]


def read_image_rgba(path: PathLike, flip_y: bool = False) -> Buffer:
    """Load an image file into an RGBA ``uint8`` buffer.

    Unless ``flip_y`` is set, rows are flipped so that row 0 of the buffer is
    the bottom row of the image.
    """
    with Image.open(path) as image:
        image.load()
        if image.mode not in _COMPONENT_MODES.values():
            image = image.convert("RGBA")
        pixels = np.asarray(image, dtype=np.uint8)
    if pixels.ndim == 2:
        pixels = pixels[..., np.newaxis]

    height, width, components = pixels.shape
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    if components == 1:
        rgba[..., :3] = pixels
        rgba[..., 3] = 255
    elif components == 2:
        rgba[..., :3] = pixels[..., :1]
        rgba[..., 3] = pixels[..., 1]
    elif components == 3:
        rgba[..., :3] = pixels
        rgba[..., 3] = 255
    else:
        rgba[...] = pixels[..., :4]

    if not flip_y:
        rgba = rgba[::-1]
    return Buffer.from_array(rgba)


def _as_bytes(data: Any) -> np.ndarray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8)
    return np.asarray(data).astype(np.uint8, copy=False).reshape(-1)


def write_image(
    filename: PathLike,
    width: int,
    height: int,
    components: int,
    data: Any,
    stride: Optional[int] = None,
    flip_y: bool = False,
) -> None:
    """Write 8-bit pixel rows to a PNG file.

    ``stride`` is the distance in bytes between the starts of two rows and
    defaults to ``width * components``. With ``flip_y`` the rows are written
    bottom to top.
    """
    if components not in _COMPONENT_MODES:
        raise ValueError(f"unsupported number of components: {components}")
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive: {width}x{height}")
    row_bytes = width * components
    stride = row_bytes if stride is None else stride
    if stride < row_bytes:
        raise ValueError(f"stride {stride} is shorter than a row of {row_bytes} bytes")

    flat = _as_bytes(data)
    needed = stride * (height - 1) + row_bytes
    if flat.size < needed:
        raise ValueError(f"image data holds {flat.size} bytes, {needed} needed")

    rows = np.stack([flat[y * stride : y * stride + row_bytes] for y in range(height)])
    pixels = rows.reshape(height, width, components)
    if components == 1:
        pixels = pixels[..., 0]
    if flip_y:
        pixels = pixels[::-1]
    Image.fromarray(np.ascontiguousarray(pixels)).save(filename, format="PNG")


def write_buffer(filename: PathLike, buffer: Buffer, flip_y: bool = False) -> None:
    """Write a buffer of 8-bit pixels to a PNG file."""
    write_image(
        filename,
        buffer.width,
        buffer.height,
        buffer.components,
        buffer.raw_data().astype(np.uint8),
        buffer.width * buffer.components,
        flip_y,
    )


def convert_float_image(src: Sequence[float], width: int, height: int) -> Buffer:
    """Map a float image, such as a depth map, onto an RGBA greyscale buffer.

    The smallest value becomes black and the largest white; alpha is 255.
    """
    count = width * height
    values = np.asarray(src, dtype=np.float32).reshape(-1)
    if values.size < count:
        raise ValueError(f"source holds {values.size} values, {count} needed")
    values = values[:count].astype(np.float64)

    rgba = np.zeros((height, width, 4), dtype=np.uint8)
    rgba[..., 3] = 255
    if count:
        low = min(_FLT_MAX, float(values.min()))
        high = max(_FLT_MIN, float(values.max()))
        span = high - low
        normalized = (values - low) / span if span > 0 else np.zeros_like(values)
        grey = np.clip(np.trunc(normalized * 255.0), 0, 255).astype(np.uint8)
        rgba[..., :3] = grey.reshape(height, width, 1)
    return Buffer.from_array(rgba)