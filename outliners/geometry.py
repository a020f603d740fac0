from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from PyQt6.QtCore import QPointF, QRectF


@dataclass(frozen=True)
class Vector:
    x: float
    y: float

    def plus(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def minus(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def times(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar)

    def dot(self, other: Vector) -> Vector:
        """Componentwise product, used to scale a direction by an extent."""
        return Vector(self.x * other.x, self.y * other.y)

    def map(self, transformation: Callable[[float], float]) -> Vector:
        return Vector(transformation(self.x), transformation(self.y))

    def min(self, other: Vector) -> Vector:
        return Vector(min(self.x, other.x), min(self.y, other.y))

    def max(self, other: Vector) -> Vector:
        return Vector(max(self.x, other.x), max(self.y, other.y))

    def delta_to_reach(self, other: Vector) -> Vector:
        return other.minus(self)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector:
        """Unit vector in the same direction; the zero vector maps to (1, 0)."""
        length = self.length()
        if length == 0 or not math.isfinite(length):
            return Vector(1.0, 0.0)
        return Vector(self.x / length, self.y / length)

    def to_qpointf(self) -> QPointF:
        return QPointF(self.x, self.y)

    @staticmethod
    def from_qpointf(value: QPointF) -> Vector:
        return Vector(value.x(), value.y())


def point(x: float, y: float) -> Vector:
    return Vector(x, y)


def sum_of(*vectors: Vector) -> Vector:
    total = Vector(0.0, 0.0)
    for vector in vectors:
        total = total.plus(vector)
    return total


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    def origin(self) -> Vector:
        return Vector(self.x, self.y)

    def extent(self) -> Vector:
        return Vector(self.width, self.height)

    def center(self) -> Vector:
        return Vector(self.x + (self.width / 2.0), self.y + (self.height / 2.0))

    def contains(self, position: Vector) -> bool:
        return (
            self.left <= position.x <= self.right
            and self.top <= position.y <= self.bottom
        )

    def delta_to_reach(self, other: Box) -> Vector:
        return self.origin().delta_to_reach(other.origin())

    def moved_by(self, delta: Vector) -> Box:
        return Box(self.x + delta.x, self.y + delta.y, self.width, self.height)

    def to_rect(self) -> QRectF:
        return QRectF(self.x, self.y, self.width, self.height)

    @staticmethod
    def at(origin: Vector, extent: Vector) -> Box:
        return Box(origin.x, origin.y, max(0.0, extent.x), max(0.0, extent.y))

    @staticmethod
    def from_rect(rect: QRectF) -> Box:
        return Box(rect.x(), rect.y(), max(0.0, rect.width()), max(0.0, rect.height()))


class Line:
    """Line through two points, evaluated as a function of x or of y."""

    def __init__(self, start: Vector, end: Vector) -> None:
        self.start = start
        self.end = end
        self._delta = start.delta_to_reach(end)

    def y_for(self, x: float) -> float:
        if self._delta.x == 0:
            return (self.start.y + self.end.y) / 2.0
        return (self._delta.y / self._delta.x) * (x - self.start.x) + self.start.y

    def x_for(self, y: float) -> float:
        if self._delta.y == 0:
            return self.end.x
        return (self._delta.x / self._delta.y) * (y - self.start.y) + self.start.x

    def point_at_x(self, x: float) -> Vector:
        if self._delta.x == 0:
            return Vector(x, self.end.y)
        return Vector(x, self.y_for(x))

    def point_at_y(self, y: float) -> Vector:
        return Vector(self.x_for(y), y)

    def is_below(self, position: Vector) -> bool:
        """True when the line passes below ``position`` (larger y on screen)."""
        return self.y_for(position.x) > position.y
