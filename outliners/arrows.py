from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from PyQt6.QtGui import QPainterPath

from .constants import ARROW_CONTROL_DECIMALS, ARROW_START_CONTROL_MIN
from .geometry import Box, Line, Vector, point


EDGE_TOP = "top"
EDGE_LEFT = "left"
EDGE_RIGHT = "right"
EDGE_BOTTOM = "bottom"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class CurvePath:
    """A cubic curve in coordinates relative to ``origin``."""

    origin: Vector
    size: Vector
    start: Vector
    start_control: Vector
    end_control: Vector
    end: Vector

    def svg_path(self) -> str:
        parts = [self.start, self.start_control, self.end_control, self.end]
        p1, c1, c2, p2 = (f"{_format_number(p.x)},{_format_number(p.y)}" for p in parts)
        return f"M {p1} C {c1} {c2} {p2}"

    def bounding_box(self) -> Box:
        return Box.at(self.origin, self.size)

    def to_painter_path(self) -> QPainterPath:
        path = QPainterPath(self.start.to_qpointf())
        path.cubicTo(
            self.start_control.to_qpointf(),
            self.end_control.to_qpointf(),
            self.end.to_qpointf(),
        )
        return path


def landing_edge(target_box: Box, source: Vector) -> str:
    diagonal1 = Line(
        point(target_box.left, target_box.top),
        point(target_box.right, target_box.bottom),
    )
    diagonal2 = Line(
        point(target_box.right, target_box.top),
        point(target_box.left, target_box.bottom),
    )
    above_diagonal1 = diagonal1.is_below(source)
    above_diagonal2 = diagonal2.is_below(source)

    if above_diagonal1 and above_diagonal2:
        return EDGE_TOP
    if above_diagonal1:
        return EDGE_RIGHT
    if above_diagonal2:
        return EDGE_LEFT
    return EDGE_BOTTOM


def end_point_targeting_box(target_box: Box, source: Vector) -> Vector:
    line_to_center = Line(source, target_box.center())
    edge = landing_edge(target_box, source)
    if edge == EDGE_TOP:
        return line_to_center.point_at_y(target_box.top)
    if edge == EDGE_RIGHT:
        return line_to_center.point_at_x(target_box.right)
    if edge == EDGE_LEFT:
        return line_to_center.point_at_x(target_box.left)
    return line_to_center.point_at_y(target_box.bottom)


def end_control_targeting_box(target_box: Box, source: Vector) -> Vector:
    return target_box.center().delta_to_reach(source).normalized()


class Arrow:
    def __init__(
        self,
        start: Vector,
        end: Vector | Box,
        end_control: Vector | None = None,
    ) -> None:
        self._start = start
        self._end_box: Box | None = None
        self._listeners: list[Callable[[Arrow], None]] = []
        if isinstance(end, Box):
            self._end_box = end
            self._end = end_point_targeting_box(end, start)
            self._end_control = end_control_targeting_box(end, start)
        else:
            self._end = end
            self._end_control = (
                end_control.normalized()
                if end_control is not None
                else self._default_end_control_for(end)
            )
        self._curve = self._compute_curve()

    def subscribe(self, listener: Callable[[Arrow], None]) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[Arrow], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start(self) -> Vector:
        return self._start

    def end(self) -> Vector | Box:
        return self._end_box if self._end_box is not None else self._end

    def end_position(self) -> Vector:
        return self._end

    def end_box(self) -> Box | None:
        return self._end_box

    def end_control(self) -> Vector:
        return self._end_control

    def is_tracking_box(self) -> bool:
        return self._end_box is not None

    def curve(self) -> CurvePath:
        return self._curve

    def update_start(self, new_start: Vector) -> None:
        self._start = new_start
        if self._end_box is not None:
            self._retarget_box(self._end_box)
        self._redraw()

    def update_end_to_point(self, new_end: Vector, new_end_control: Vector | None = None) -> None:
        self._end = new_end
        self._end_box = None
        self._end_control = (
            new_end_control.normalized()
            if new_end_control is not None
            else self._default_end_control_for(new_end)
        )
        self._redraw()

    def attach_end_to_box(self, end_box: Box) -> None:
        self._end_box = end_box
        self._retarget_box(end_box)
        self._redraw()

    def _retarget_box(self, end_box: Box) -> None:
        self._end = end_point_targeting_box(end_box, self._start)
        self._end_control = end_control_targeting_box(end_box, self._start)

    def _default_end_control_for(self, end: Vector) -> Vector:
        return end.delta_to_reach(self._start).normalized()

    def _compute_curve(self) -> CurvePath:
        bound_start = self._start.min(self._end)
        bound_end = self._start.max(self._end)
        bound_extent = bound_start.delta_to_reach(bound_end)

        relative_from = bound_start.delta_to_reach(self._start)
        relative_to = bound_start.delta_to_reach(self._end)

        if self._start.x < self._end.x:
            start_offset = max(ARROW_START_CONTROL_MIN, bound_extent.x / 2.0)
        else:
            start_offset = ARROW_START_CONTROL_MIN
        start_control = relative_from.plus(point(start_offset, 0.0))
        end_control = relative_to.plus(self._end_control.dot(bound_extent)).map(
            lambda n: round(n, ARROW_CONTROL_DECIMALS)
        )
        return CurvePath(
            origin=bound_start,
            size=bound_extent.map(lambda n: max(1.0, n)),
            start=relative_from,
            start_control=start_control,
            end_control=end_control,
            end=relative_to,
        )

    def _redraw(self) -> None:
        self._curve = self._compute_curve()
        for listener in list(self._listeners):
            listener(self)


def draw_new_arrow(start: Vector, end: Vector, end_control: Vector | None = None) -> Arrow:
    return Arrow(start, end, end_control)


def draw_new_arrow_to_box(start: Vector, end_box: Box) -> Arrow:
    return Arrow(start, end_box)
