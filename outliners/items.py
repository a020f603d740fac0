from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPen, QPolygonF
from PyQt6.QtWidgets import QGraphicsPathItem, QGraphicsRectItem

from .arrows import Arrow
from .associations import Association
from .config import ViewerConfig
from .constants import (
    ARROW_HEAD_SIZE,
    ARROW_LINE_WIDTH,
    ARROW_START_DOT_RADIUS,
    ARROW_STYLE_FADED,
    ARROW_STYLE_HIDDEN,
    DEFAULT_HEADER_COLOR,
    DEFAULT_PANEL_COLOR,
    HANDLE_SIZE,
    MARKER_DRAGGING,
    MARKER_HOVERED,
    MARKER_MOVING,
    MARKER_SHAKING,
    NAME_COLUMN_SHARE,
    PANEL_CLOSE_BUTTON_SIZE,
    PANEL_MAX_WIDTH,
    PANEL_PADDING,
)
from .geometry import Box, point
from .panels import Panel

DRAGGING_ARROW_Z = 1_000_000.0
KIND_HEADER_COLORS = {
    "error": "#F2C4C4",
    "function": "#D6E8D0",
    "primitive": "#E8E4D0",
}


def _draw_arrowhead(
    painter: QPainter, start: QPointF, end: QPointF, color: QColor, size: float
) -> None:
    angle = end - start
    length = (angle.x() ** 2 + angle.y() ** 2) ** 0.5
    if length == 0:
        return
    ux = angle.x() / length
    uy = angle.y() / length
    left = QPointF(end.x() - ux * size - uy * (size / 2.0), end.y() - uy * size + ux * (size / 2.0))
    right = QPointF(end.x() - ux * size + uy * (size / 2.0), end.y() - uy * size - ux * (size / 2.0))
    painter.save()
    painter.setBrush(color)
    painter.setPen(Qt.PenStyle.NoPen)
    painter.drawPolygon(QPolygonF([end, left, right]))
    painter.restore()


def _local_rect(box: Box, origin: Box) -> QRectF:
    return QRectF(box.x - origin.x, box.y - origin.y, box.width, box.height)


class PanelItem(QGraphicsRectItem):
    def __init__(self, panel: Panel, config: ViewerConfig) -> None:
        super().__init__()
        self.panel = panel
        self.config = config
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.fit_to_contents()
        self.sync_from_panel()

    def preferred_width(self) -> float:
        """Width that shows the title and every field name without eliding."""
        panel = self.panel
        title_font = QFont()
        title_font.setBold(True)
        needed = (
            QFontMetricsF(title_font).horizontalAdvance(panel.title())
            + PANEL_CLOSE_BUTTON_SIZE
            + (PANEL_PADDING * 4)
        )
        metrics = QFontMetricsF(QFont())
        handle_room = -panel.layout.handle_box(Box(0.0, 0.0, 0.0, 0.0), 0).x
        for slot in panel.slots:
            text_width = metrics.horizontalAdvance(slot.name()) / NAME_COLUMN_SHARE
            needed = max(needed, text_width + (PANEL_PADDING * 2) + handle_room)
        return min(PANEL_MAX_WIDTH, needed)

    def fit_to_contents(self) -> None:
        width = self.preferred_width()
        if width > self.panel.size.x:
            self.panel.resize(point(width, self.panel.size.y))

    def sync_from_panel(self) -> None:
        box = self.panel.box()
        self.prepareGeometryChange()
        self.setPos(QPointF(box.x, box.y))
        self.setRect(QRectF(0.0, 0.0, box.width, box.height))
        self.update()

    def paint(self, painter: QPainter, option, widget=None) -> None:
        panel = self.panel
        box = panel.box()
        layout = panel.layout
        rect = self.rect()
        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)

        border = QColor(self.config.arrow_color)
        border_width = 1.0
        if panel.has_marker(MARKER_HOVERED) or panel.has_marker(MARKER_SHAKING):
            border = QColor(self.config.hover_color)
            border_width = 3.0
        painter.setPen(QPen(border, border_width))
        painter.setBrush(QBrush(QColor(DEFAULT_PANEL_COLOR)))
        painter.drawRoundedRect(rect, 4.0, 4.0)

        header = _local_rect(layout.header_box(box), box)
        header_color = KIND_HEADER_COLORS.get(panel.kind(), DEFAULT_HEADER_COLOR)
        if panel.has_marker(MARKER_MOVING):
            header_color = QColor(header_color).darker(110).name()
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(header_color)))
        painter.drawRect(header.adjusted(1.0, 1.0, -1.0, 0.0))

        title_font = QFont(painter.font())
        title_font.setBold(True)
        painter.setFont(title_font)
        painter.setPen(QColor(20, 20, 20))
        close_rect = _local_rect(layout.close_button_box(box), box)
        title_rect = QRectF(
            header.left() + PANEL_PADDING,
            header.top(),
            max(0.0, close_rect.left() - header.left() - (PANEL_PADDING * 2)),
            header.height(),
        )
        metrics = QFontMetricsF(title_font)
        title = metrics.elidedText(panel.title(), Qt.TextElideMode.ElideRight, title_rect.width())
        painter.drawText(title_rect, Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft, title)
        painter.drawText(close_rect, Qt.AlignmentFlag.AlignCenter, "×")

        painter.setFont(QFont(painter.font().family()))
        metrics = QFontMetricsF(painter.font())
        for index, slot in enumerate(panel.slots):
            row = _local_rect(layout.row_box(box, index), box)
            handle = _local_rect(layout.handle_box(box, index), box)
            text_width = max(0.0, handle.left() - row.left() - (PANEL_PADDING * 2))
            name_width = text_width * NAME_COLUMN_SHARE
            painter.setPen(QColor(90, 90, 90) if slot.internal else QColor(20, 20, 20))
            name_rect = QRectF(row.left() + PANEL_PADDING, row.top(), name_width, row.height())
            value_rect = QRectF(
                name_rect.right() + PANEL_PADDING,
                row.top(),
                max(0.0, text_width - name_width - PANEL_PADDING),
                row.height(),
            )
            flags = Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft
            painter.drawText(
                name_rect,
                flags,
                metrics.elidedText(slot.name(), Qt.TextElideMode.ElideRight, name_rect.width()),
            )
            painter.drawText(
                value_rect,
                flags,
                metrics.elidedText(slot.value_text(), Qt.TextElideMode.ElideRight, value_rect.width()),
            )
            handle_color = QColor(self.config.arrow_color)
            if slot.handle.has_marker(MARKER_DRAGGING):
                handle_color = QColor(self.config.hover_color)
            painter.setPen(QPen(handle_color, 1.5))
            if panel.association_for(slot.selector) is not None:
                painter.setBrush(QBrush(handle_color))
            else:
                painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawEllipse(handle.center(), HANDLE_SIZE / 2.0 - 1.0, HANDLE_SIZE / 2.0 - 1.0)
        painter.restore()


class ArrowItem(QGraphicsPathItem):
    def __init__(self, association: Association, config: ViewerConfig) -> None:
        super().__init__()
        self.association = association
        self.config = config
        self.base_z = 0.0
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.association.arrow.subscribe(self._on_arrow_changed)
        self.sync_from_association()

    def detach(self) -> None:
        self.association.arrow.unsubscribe(self._on_arrow_changed)

    def _on_arrow_changed(self, arrow: Arrow) -> None:
        self.sync_from_association()

    def sync_from_association(self) -> None:
        curve = self.association.arrow.curve()
        self.prepareGeometryChange()
        self.setPos(curve.origin.to_qpointf())
        self.setPath(curve.to_painter_path())
        pen = QPen(QColor(self.config.arrow_color))
        pen.setWidth(ARROW_LINE_WIDTH)
        self.setPen(pen)
        style = self.association.style
        self.setVisible(style != ARROW_STYLE_HIDDEN)
        self.setOpacity(self.config.faded_opacity if style == ARROW_STYLE_FADED else 1.0)
        self.setZValue(DRAGGING_ARROW_Z if self.association.is_dragging() else self.base_z)

    def boundingRect(self) -> QRectF:
        margin = ARROW_HEAD_SIZE + ARROW_LINE_WIDTH
        return super().boundingRect().adjusted(-margin, -margin, margin, margin)

    def paint(self, painter: QPainter, option, widget=None) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        super().paint(painter, option, widget)
        curve = self.association.arrow.curve()
        color = self.pen().color()
        if self.association.end_handle.has_marker(MARKER_DRAGGING):
            color = QColor(self.config.hover_color)
        _draw_arrowhead(
            painter,
            curve.end_control.to_qpointf(),
            curve.end.to_qpointf(),
            color,
            ARROW_HEAD_SIZE,
        )
        painter.save()
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(color)
        painter.drawEllipse(curve.start.to_qpointf(), ARROW_START_DOT_RADIUS, ARROW_START_DOT_RADIUS)
        painter.restore()
