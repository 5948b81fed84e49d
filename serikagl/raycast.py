"""Primary rays from screen pixels, hemisphere test samples and radiance clamping."""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from serikagl.buffer import Buffer
from serikagl.geometry import Ray
from serikagl.mathutils import gray_code, sobol, uniform_hemisphere_sample_by_volume

_RADIANCE_LOW = np.array([0.0, 0.0, 0.0, 255.0])
_RADIANCE_HIGH = np.array([255.0, 255.0, 255.0, 255.0])
_UP = (0.0, 1.0, 0.0)


def screen_to_world_ray(
    mouse_x: float,
    mouse_y: float,
    screen_width: int,
    screen_height: int,
    eye: Sequence[float],
    view_matrix: Any,
    fov: float,
    aspect: float,
    near: float,
    jitter_radius: float = 0.0,
    sobol_index: int = 0,
) -> Ray:
    """Ray from the camera at ``eye`` through pixel ``(mouse_x, mouse_y)``.

    ``view_matrix`` is a 4x4 world-to-camera matrix acting on column vectors
    (``view @ p``); ``fov`` is the vertical field of view in degrees. The ray
    passes through the pixel centre, moved by up to ``jitter_radius`` pixels
    along each axis using the Sobol sequence at ``sobol_index``.
    """
    if screen_width <= 0 or screen_height <= 0:
        raise ValueError(f"screen size must be positive: {screen_width}x{screen_height}")
    view = np.asarray(view_matrix, dtype=float).reshape(4, 4)
    camera_to_world = np.linalg.inv(view)

    tan_half_fov = math.tan(math.radians(fov * 0.5))
    if jitter_radius:
        x_offset = 0.5 + (sobol(0, sobol_index) * 2.0 - 1.0) * jitter_radius
        y_offset = 0.5 + (sobol(1, sobol_index) * 2.0 - 1.0) * jitter_radius
    else:
        x_offset = y_offset = 0.5

    x = (2.0 * (mouse_x + x_offset) / screen_width - 1.0) * aspect * tan_half_fov * near
    y = (1.0 - 2.0 * (mouse_y + y_offset) / screen_height) * tan_half_fov * near
    local = np.array([x, y, -near, 0.0])

    direction = (camera_to_world @ local)[:3]
    length = float(np.linalg.norm(direction))
    if length == 0.0:
        raise ValueError("ray direction is degenerate")
    return Ray(eye, direction / length)


def hemisphere_test_points(num_samples: int = 1024) -> np.ndarray:
    """Points filling the upper unit hemisphere, from Gray-coded Sobol indices.

    Returns an array shaped ``(num_samples, 3)``.
    """
    if num_samples < 0:
        raise ValueError(f"number of samples must not be negative: {num_samples}")
    points = [
        uniform_hemisphere_sample_by_volume(
            (0.0, 0.0, 0.0), _UP, True, 0, gray_code(i)
        )[0]
        for i in range(num_samples)
    ]
    return np.array(points, dtype=float).reshape(num_samples, 3)


def clamp_radiance_buffer(buffer: Buffer) -> Buffer:
    """Clamp accumulated RGBA radiance to [0, 255] with opaque alpha, as 8-bit pixels."""
    if buffer.components != 4:
        raise ValueError(f"radiance buffer needs 4 components, has {buffer.components}")
    clamped = np.clip(np.asarray(buffer.raw_data(), dtype=float), _RADIANCE_LOW, _RADIANCE_HIGH)
    return Buffer.from_array(np.trunc(clamped).astype(np.uint8))