"""Rays, intersections, planes, vertex attributes and debug primitives."""

from __future__ import annotations

import abc
import itertools
from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag
from typing import Any, Optional, Protocol, Sequence, Tuple

import numpy as np

from serikagl.utils import format_vec3

FLOAT_MAX = float(np.finfo(np.float32).max)


def _vec3(value: Sequence[float]) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3)


class Ray:
    """A half-line ``origin + t * direction``."""

    def __init__(
        self, origin: Sequence[float], direction: Sequence[float], t: float = 0.0
    ) -> None:
        self.origin = _vec3(origin)
        self.t = float(t)
        self.t_min = 0.0
        self.t_max = FLOAT_MAX
        self.set_direction(direction)

    def set_direction(self, direction: Sequence[float]) -> None:
        """Replace the direction and its component-wise inverse."""
        self.direction = _vec3(direction)
        with np.errstate(divide="ignore"):
            self.direction_inv = 1.0 / self.direction

    def at(self, t: float) -> np.ndarray:
        """Point reached at parameter ``t``."""
        return self.origin + self.direction * t

    def __str__(self) -> str:
        return (
            f"[origin:={format_vec3(self.origin)}, "
            f"direction={format_vec3(self.direction)}, time={self.t:g}]\n"
        )


class Material(Protocol):
    """What an intersection needs from a surface material."""

    def has_emission(self) -> bool: ...

    def emission(self) -> np.ndarray: ...

    def eval_radiance(
        self, wi: np.ndarray, wo: np.ndarray, normal: np.ndarray, u: float, v: float
    ) -> np.ndarray: ...


@dataclass
class Intersection:
    """Result of tracing a ray against the scene."""

    hit: bool = False
    impact_point: np.ndarray = field(default_factory=lambda: np.zeros(3))
    tex_coords: np.ndarray = field(default_factory=lambda: np.zeros(2))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    trace_distance: float = FLOAT_MAX
    material: Optional[Material] = None
    primitive: Optional["Intersectable"] = None

    def has_emission(self) -> bool:
        """Whether the surface that was hit emits light."""
        return self.material is not None and bool(self.material.has_emission())

    def emission(self) -> np.ndarray:
        """Emitted radiance of the surface, zero without a material."""
        if self.material is None:
            return np.zeros(3)
        return np.asarray(self.material.emission(), dtype=float)

    def eval_radiance(
        self, wi: Sequence[float], wo: Sequence[float], normal: Sequence[float]
    ) -> np.ndarray:
        """Evaluate the material at the hit's texture coordinates."""
        if self.material is None:
            return np.zeros(3)
        u, v = float(self.tex_coords[0]), float(self.tex_coords[1])
        return np.asarray(
            self.material.eval_radiance(_vec3(wi), _vec3(wo), _vec3(normal), u, v),
            dtype=float,
        )


class Intersectable(abc.ABC):
    """Anything a ray can be traced against."""

    @abc.abstractmethod
    def intersect(self, ray: Ray) -> bool:
        """Quick hit test."""

    @abc.abstractmethod
    def get_intersection(self, ray: Ray) -> Intersection:
        """Full hit record for ``ray``."""

    @abc.abstractmethod
    def bounds(self) -> Any:
        """Axis-aligned bounds of the object."""

    @abc.abstractmethod
    def area(self) -> float:
        """Surface area."""

    @abc.abstractmethod
    def sample(self) -> Tuple[Intersection, float]:
        """Sample a point on the surface; returns the point and its pdf."""

    @abc.abstractmethod
    def has_emit(self) -> bool:
        """Whether the object emits light."""

    @abc.abstractmethod
    def transform(self, matrix: Any) -> None:
        """Apply a 4x4 transform."""


class PlaneIntersects(IntEnum):
    """How a shape lies relative to a plane."""

    CROSS = 0
    TANGENT = 1
    FRONT = 2
    BACK = 3


class Plane:
    """Plane ``dot(normal, p) + d = 0`` with a unit normal."""

    def __init__(self) -> None:
        self._normal = np.zeros(3)
        self._d = 0.0

    def set(self, normal: Sequence[float], point: Sequence[float]) -> None:
        """Define the plane through ``point`` facing ``normal``."""
        n = _vec3(normal)
        length = float(np.linalg.norm(n))
        if length == 0.0:
            raise ValueError("plane normal must not be zero")
        self._normal = n / length
        self._d = -float(np.dot(self._normal, _vec3(point)))

    def distance(self, point: Sequence[float]) -> float:
        """Signed distance from ``point`` to the plane."""
        return float(np.dot(self._normal, _vec3(point))) + self._d

    @property
    def normal(self) -> np.ndarray:
        return self._normal.copy()

    @property
    def d(self) -> float:
        return self._d


class FrustumClipMask(IntFlag):
    """Bits marking the clip-space planes a point lies outside of."""

    POSITIVE_X = 1 << 0
    NEGATIVE_X = 1 << 1
    POSITIVE_Y = 1 << 2
    NEGATIVE_Y = 1 << 3
    POSITIVE_Z = 1 << 4
    NEGATIVE_Z = 1 << 5


FRUSTUM_CLIP_MASKS: Tuple[FrustumClipMask, ...] = tuple(FrustumClipMask)

FRUSTUM_CLIP_PLANES: Tuple[Tuple[float, float, float, float], ...] = (
    (-1, 0, 0, 1),
    (1, 0, 0, 1),
    (0, -1, 0, 1),
    (0, 1, 0, 1),
    (0, 0, -1, 1),
    (0, 0, 1, 1),
)


class VertexAttribute(Enum):
    """Kinds of per-vertex data a geometry can carry."""

    POSITION = 0
    TEX_COORD = 1
    NORMAL = 2


class BufferAttribute:
    """A flat array of 32-bit floats grouped into elements of ``elem_size``."""

    def __init__(self, data: Sequence[float] = (), elem_size: int = 0) -> None:
        self._data = np.array(data, dtype=np.float32).reshape(-1)
        self.elem_size = int(elem_size)
        self.vbo = 0
        self.pipeline_ready = False

    @property
    def data(self) -> np.ndarray:
        return self._data

    def size(self) -> int:
        """Number of floats held."""
        return int(self._data.size)

    def byte_size(self) -> int:
        """Size of the data in bytes."""
        return int(self._data.nbytes)

    def empty(self) -> bool:
        return self._data.size == 0

    def __len__(self) -> int:
        return self.size()

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __setitem__(self, index: int, value: float) -> None:
        self._data[index] = value


_point_ids = itertools.count(1)
_line_ids = itertools.count(1)


@dataclass
class FPoint:
    """A debug point shown for ``persist_time`` seconds."""

    position: np.ndarray
    persist_time: float = 0.0
    point_size: float = 1.0
    vao: int = 0
    uuid: int = field(default_factory=lambda: next(_point_ids))

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)


@dataclass
class FLine:
    """A debug line segment shown for ``persist_time`` seconds."""

    start: np.ndarray
    end: np.ndarray
    persist_time: float = 0.0
    vao: int = 0
    uuid: int = field(default_factory=lambda: next(_line_ids))

    def __post_init__(self) -> None:
        self.start = _vec3(self.start)
        self.end = _vec3(self.end)


def _flatten(groups: Sequence[Sequence[Sequence[float]]]) -> Tuple[float, ...]:
    return tuple(float(v) for face in groups for vertex in face for v in vertex)


CUBE_VERTICES: Tuple[float, ...] = _flatten(
    (
        ((-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1)),  # front
        ((-1, -1, -1), (1, -1, -1), (1, 1, -1), (-1, 1, -1)),  # back
        ((-1, -1, -1), (-1, -1, 1), (-1, 1, 1), (-1, 1, -1)),  # left
        ((1, -1, -1), (1, -1, 1), (1, 1, 1), (1, 1, -1)),  # right
        ((-1, 1, -1), (1, 1, -1), (1, 1, 1), (-1, 1, 1)),  # top
        ((-1, -1, -1), (1, -1, -1), (1, -1, 1), (-1, -1, 1)),  # bottom
    )
)

_FACE_UV = ((0, 0), (1, 0), (1, 1), (0, 1))
CUBE_UVS: Tuple[float, ...] = _flatten(
    (_FACE_UV, ((1, 0), (0, 0), (0, 1), (1, 1)), _FACE_UV, _FACE_UV, _FACE_UV, _FACE_UV)
)

CUBE_NORMALS: Tuple[float, ...] = _flatten(
    tuple(
        (normal,) * 4
        for normal in ((0, 0, 1), (0, 0, -1), (-1, 0, 0), (1, 0, 0), (0, 1, 0), (0, -1, 0))
    )
)

CUBE_INDICES: Tuple[int, ...] = (
    0, 1, 2, 2, 3, 0,
    4, 6, 5, 6, 4, 7,
    8, 9, 10, 10, 11, 8,
    12, 14, 13, 14, 12, 15,
    16, 18, 17, 18, 16, 19,
    20, 21, 22, 22, 23, 20,
)

CUBE_REVERSE_FACE_INDICES: Tuple[int, ...] = (
    0, 2, 1, 2, 0, 3,
    4, 5, 6, 6, 7, 4,
    8, 10, 9, 10, 8, 11,
    12, 13, 14, 14, 15, 12,
    16, 17, 18, 18, 19, 16,
    20, 22, 21, 22, 20, 23,
)