from __future__ import annotations

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QGraphicsView

from .constants import MOUSE_POINTER_ID
from .dragging import (
    POINTER_CANCEL,
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    PRIMARY_BUTTON,
    PointerEvent,
)
from .elements import ArrowEndHandle, CloseButton, PanelHeader, SlotHandle
from .geometry import Vector
from .scene import OutlinerScene

SECONDARY_BUTTON = 2


class OutlinerView(QGraphicsView):
    """Turns mouse input into pointer events for the world's router."""

    def __init__(self, scene: OutlinerScene) -> None:
        super().__init__(scene)
        self.world = scene.world
        self.setRenderHints(self.renderHints() | QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setMouseTracking(True)
        self.viewport().setMouseTracking(True)
        self._sync_scroll_offset()

    def _sync_scroll_offset(self) -> None:
        self.world.set_scroll_offset(Vector.from_qpointf(self.mapToScene(0, 0)))

    def _pointer_event(self, kind: str, event, button: int = PRIMARY_BUTTON) -> PointerEvent:
        client = Vector.from_qpointf(QPointF(event.position()))
        page = client.plus(self.world.scroll_offset)
        return PointerEvent(
            kind=kind,
            pointer_id=MOUSE_POINTER_ID,
            client_position=client,
            target=self.world.element_at(page),
            button=button,
        )

    def _dispatch(self, pointer_event: PointerEvent, event) -> bool:
        handled = self.world.router.dispatch(pointer_event)
        if handled:
            event.accept()
        return handled

    def mousePressEvent(self, event) -> None:
        button = PRIMARY_BUTTON if event.button() == Qt.MouseButton.LeftButton else SECONDARY_BUTTON
        if self._dispatch(self._pointer_event(POINTER_DOWN, event, button), event):
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if self._dispatch(self._pointer_event(POINTER_MOVE, event), event):
            return
        self._update_cursor(event)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            if self._dispatch(self._pointer_event(POINTER_UP, event), event):
                self._update_cursor(event)
                return
        super().mouseReleaseEvent(event)

    def keyPressEvent(self, event) -> None:
        if event.key() == Qt.Key.Key_Escape and self.world.router.has_capture(MOUSE_POINTER_ID):
            self.cancel_drag()
            event.accept()
            return
        super().keyPressEvent(event)

    def focusOutEvent(self, event) -> None:
        self.cancel_drag()
        super().focusOutEvent(event)

    def cancel_drag(self) -> None:
        if not self.world.router.has_capture(MOUSE_POINTER_ID):
            return
        self.world.router.dispatch(
            PointerEvent(kind=POINTER_CANCEL, pointer_id=MOUSE_POINTER_ID, client_position=Vector(0.0, 0.0))
        )

    def scrollContentsBy(self, dx: int, dy: int) -> None:
        super().scrollContentsBy(dx, dy)
        self._sync_scroll_offset()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._sync_scroll_offset()

    def _update_cursor(self, event) -> None:
        page = Vector.from_qpointf(QPointF(event.position())).plus(self.world.scroll_offset)
        element = self.world.element_at(page)
        if isinstance(element, (SlotHandle, ArrowEndHandle)):
            self.viewport().setCursor(Qt.CursorShape.CrossCursor)
        elif isinstance(element, PanelHeader):
            self.viewport().setCursor(Qt.CursorShape.OpenHandCursor)
        elif isinstance(element, CloseButton):
            self.viewport().setCursor(Qt.CursorShape.PointingHandCursor)
        else:
            self.viewport().unsetCursor()
