"""Point, directional and spot lights and their shader-side data."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import Sequence

import numpy as np


class LightType(IntEnum):
    """Kind of light as seen by shaders."""

    NO_LIGHT = 0
    POINT = 1
    DIRECTIONAL = 2
    SPOT = 3


def _vec3(value: Sequence[float]) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3).copy()


def _zeros() -> np.ndarray:
    return np.zeros(3)


@dataclass
class LightData:
    """Parameters of one light in the layout the shaders read."""

    light_type: LightType = LightType.POINT
    position: np.ndarray = field(default_factory=_zeros)
    direction: np.ndarray = field(default_factory=_zeros)
    ambient: np.ndarray = field(default_factory=_zeros)
    diffuse: np.ndarray = field(default_factory=_zeros)
    specular: np.ndarray = field(default_factory=_zeros)
    constant: float = 0.0
    linear: float = 0.0
    quadratic: float = 0.0
    cutoff: float = 0.0
    outer_cutoff: float = 0.0

    def copy(self) -> "LightData":
        """Deep copy, so the vectors are not shared."""
        values = {}
        for item in fields(self):
            value = getattr(self, item.name)
            values[item.name] = value.copy() if isinstance(value, np.ndarray) else value
        return LightData(**values)


class Light:
    """A light source placed in the scene."""

    def __init__(self) -> None:
        self._data = LightData(light_type=LightType.POINT)
        self._position = np.zeros(3)

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def type(self) -> LightType:
        return LightType(self._data.light_type)

    def set_position(self, position: Sequence[float]) -> None:
        """Move the light."""
        self._position = _vec3(position)
        self._data.position = _vec3(position)

    def set_as_point_light(
        self,
        position: Sequence[float],
        ambient: Sequence[float],
        diffuse: Sequence[float],
        specular: Sequence[float],
        constant: float,
        linear: float,
        quadratic: float,
    ) -> None:
        """Make this a point light with the given colours and attenuation."""
        self.set_position(position)
        self._data.ambient = _vec3(ambient)
        self._data.diffuse = _vec3(diffuse)
        self._data.specular = _vec3(specular)
        self._data.constant = float(constant)
        self._data.linear = float(linear)
        self._data.quadratic = float(quadratic)
        self._data.light_type = LightType.POINT

    def set_as_directional_light(
        self,
        direction: Sequence[float],
        ambient: Sequence[float],
        diffuse: Sequence[float],
        specular: Sequence[float],
    ) -> None:
        """Make this a directional light shining along ``direction``."""
        self._data.direction = _vec3(direction)
        self._data.ambient = _vec3(ambient)
        self._data.diffuse = _vec3(diffuse)
        self._data.specular = _vec3(specular)
        self._data.light_type = LightType.DIRECTIONAL

    def set_as_spot_light(
        self,
        position: Sequence[float],
        direction: Sequence[float],
        cutoff: float,
        outer_cutoff: float,
    ) -> None:
        """Make this a spot light with inner and outer cone cutoffs."""
        self.set_position(position)
        self._data.direction = _vec3(direction)
        self._data.cutoff = float(cutoff)
        self._data.outer_cutoff = float(outer_cutoff)
        self._data.light_type = LightType.SPOT

    def set_color(self, color: Sequence[float]) -> None:
        """Use ``color`` for the ambient, diffuse and specular terms."""
        self._data.ambient = _vec3(color)
        self._data.diffuse = _vec3(color)
        self._data.specular = _vec3(color)

    def set_light_diffuse(self, diffuse: Sequence[float]) -> None:
        """Change only the diffuse colour."""
        self._data.diffuse = _vec3(diffuse)

    def serialize(self) -> LightData:
        """Copy of the light's shader data."""
        return self._data.copy()

    def deserialize(self, data: LightData) -> "Light":
        """Replace the light's shader data with a copy of ``data``."""
        self._data = data.copy()
        return self

    def is_point_light(self) -> bool:
        return self._data.light_type == LightType.POINT