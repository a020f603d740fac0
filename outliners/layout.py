from __future__ import annotations

from .constants import (
    HANDLE_INSET,
    HANDLE_SIZE,
    PANEL_CLOSE_BUTTON_SIZE,
    PANEL_FOOTER_HEIGHT,
    PANEL_HEADER_HEIGHT,
    PANEL_MIN_WIDTH,
    PANEL_PADDING,
    PANEL_ROW_HEIGHT,
    VALUE_PANEL_OFFSET,
)
from .geometry import Box, Vector, point


class PanelLayout:
    def __init__(
        self,
        header_height: float = PANEL_HEADER_HEIGHT,
        row_height: float = PANEL_ROW_HEIGHT,
        min_width: float = PANEL_MIN_WIDTH,
    ) -> None:
        self.header_height = header_height
        self.row_height = row_height
        self.min_width = min_width
        self.footer_height = PANEL_FOOTER_HEIGHT

    def size_for(self, row_count: int, width: float | None = None) -> Vector:
        height = self.header_height + (row_count * self.row_height) + self.footer_height
        return point(max(self.min_width, width or 0.0), height)

    def header_box(self, panel_box: Box) -> Box:
        return Box(panel_box.x, panel_box.y, panel_box.width, self.header_height)

    def close_button_box(self, panel_box: Box) -> Box:
        size = PANEL_CLOSE_BUTTON_SIZE
        return Box(
            panel_box.right - PANEL_PADDING - size,
            panel_box.y + ((self.header_height - size) / 2.0),
            size,
            size,
        )

    def row_top(self, panel_box: Box, index: int) -> float:
        return panel_box.y + self.header_height + (index * self.row_height)

    def row_box(self, panel_box: Box, index: int) -> Box:
        return Box(panel_box.x, self.row_top(panel_box, index), panel_box.width, self.row_height)

    def handle_center(self, panel_box: Box, index: int) -> Vector:
        return point(
            panel_box.right - HANDLE_INSET,
            self.row_top(panel_box, index) + (self.row_height / 2.0),
        )

    def handle_box(self, panel_box: Box, index: int) -> Box:
        center = self.handle_center(panel_box, index)
        half = HANDLE_SIZE / 2.0
        return Box(center.x - half, center.y - half, HANDLE_SIZE, HANDLE_SIZE)

    def value_panel_position(self, panel_box: Box, index: int) -> Vector:
        return self.handle_center(panel_box, index).plus(point(*VALUE_PANEL_OFFSET))
