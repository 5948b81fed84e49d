"""Thread-safe registry of debug points, lines and triangles to be drawn."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

import numpy as np

from serikagl.geometry import FLine, FPoint

_triangle_ids = itertools.count(1)

T = TypeVar("T")


def _vec3(value: Sequence[float]) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3).copy()


@dataclass
class DebugTriangle:
    """A debug triangle shown for ``persist_time`` seconds."""

    v0: np.ndarray
    v1: np.ndarray
    v2: np.ndarray
    persist_time: float = 0.0
    vao: int = 0
    uuid: int = field(default_factory=lambda: next(_triangle_ids))

    def __post_init__(self) -> None:
        self.v0 = _vec3(self.v0)
        self.v1 = _vec3(self.v1)
        self.v2 = _vec3(self.v2)

    @property
    def normal(self) -> np.ndarray:
        """Unit normal of the counter-clockwise face, zero if degenerate."""
        n = np.cross(self.v1 - self.v0, self.v2 - self.v0)
        length = float(np.linalg.norm(n))
        return n / length if length > 0.0 else np.zeros(3)


class _Registry(Dict[int, T]):
    pass


class DebugPrimitives:
    """Holds debug primitives by id; each kind has its own lock."""

    def __init__(self) -> None:
        self._points: Dict[int, FPoint] = {}
        self._lines: Dict[int, FLine] = {}
        self._triangles: Dict[int, DebugTriangle] = {}
        self._point_lock = threading.RLock()
        self._line_lock = threading.RLock()
        self._triangle_lock = threading.RLock()

    @property
    def points(self) -> List[FPoint]:
        with self._point_lock:
            return list(self._points.values())

    @property
    def lines(self) -> List[FLine]:
        with self._line_lock:
            return list(self._lines.values())

    @property
    def triangles(self) -> List[DebugTriangle]:
        with self._triangle_lock:
            return list(self._triangles.values())

    def draw_point(
        self, position: Sequence[float], persist_time: float = 0.0, point_size: float = 1.0
    ) -> FPoint:
        """Register a point and return it."""
        point = FPoint(position, persist_time)
        point.point_size = float(point_size)
        with self._point_lock:
            self._points[point.uuid] = point
        return point

    def draw_line(
        self, start: Sequence[float], end: Sequence[float], persist_time: float = 0.0
    ) -> FLine:
        """Register a line segment and return it."""
        line = FLine(start, end, persist_time)
        with self._line_lock:
            self._lines[line.uuid] = line
        return line

    def draw_triangle(
        self,
        v0: Sequence[float],
        v1: Sequence[float],
        v2: Sequence[float],
        persist_time: float = 0.0,
    ) -> DebugTriangle:
        """Register a triangle and return it."""
        triangle = DebugTriangle(v0, v1, v2, persist_time)
        with self._triangle_lock:
            self._triangles[triangle.uuid] = triangle
        return triangle

    def handle(
        self,
        on_point: Optional[Callable[[FPoint], None]] = None,
        on_line: Optional[Callable[[FLine], None]] = None,
        on_triangle: Optional[Callable[[DebugTriangle], None]] = None,
    ) -> None:
        """Pass every registered primitive to the callback for its kind."""
        if on_point is not None:
            with self._point_lock:
                for point in list(self._points.values()):
                    on_point(point)
        if on_line is not None:
            with self._line_lock:
                for line in list(self._lines.values()):
                    on_line(line)
        if on_triangle is not None:
            with self._triangle_lock:
                for triangle in list(self._triangles.values()):
                    on_triangle(triangle)

    def remove_all(self) -> None:
        """Forget every registered primitive."""
        with self._point_lock:
            self._points.clear()
        with self._line_lock:
            self._lines.clear()
        with self._triangle_lock:
            self._triangles.clear()

    def remove_point(self, uuid: int) -> None:
        """Forget the point with ``uuid``, if any."""
        with self._point_lock:
            self._points.pop(uuid, None)

    def remove_line(self, uuid: int) -> None:
        """Forget the line with ``uuid``, if any."""
        with self._line_lock:
            self._lines.pop(uuid, None)

    def remove_triangle(self, uuid: int) -> None:
        """Forget the triangle with ``uuid``, if any."""
        with self._triangle_lock:
            self._triangles.pop(uuid, None)