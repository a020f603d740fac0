from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .constants import MARKER_DRAGGABLE, MARKER_DRAGGING
from .elements import Element
from .geometry import Vector, point

logger = logging.getLogger(__name__)

POINTER_DOWN = "down"
POINTER_MOVE = "move"
POINTER_UP = "up"
POINTER_CANCEL = "cancel"

PRIMARY_BUTTON = 0


@dataclass(frozen=True)
class PointerEvent:
    kind: str
    pointer_id: int
    client_position: Vector
    target: Element | None = None
    button: int = PRIMARY_BUTTON
    is_primary: bool = True


@dataclass
class DragSession:
    grabbed: Element
    on_drag: Callable[[Vector, Vector], None] | None = None
    on_drop: Callable[[Vector], None] | None = None
    on_cancel: Callable[[], None] | None = None


class DragGesture:
    """One pointer-down to up/cancel interaction, owned by a single pointer id."""

    def __init__(
        self,
        router: PointerRouter,
        controller: DragController,
        session: DragSession,
        pointer_id: int,
        position: Vector,
    ) -> None:
        self.router = router
        self.controller = controller
        self.session = session
        self.pointer_id = pointer_id
        self.last_position = position
        self.moved = False
        self.ended = False

    @property
    def grabbed(self) -> Element:
        return self.session.grabbed

    def move(self, position: Vector) -> None:
        if self.ended:
            return
        delta = self.last_position.delta_to_reach(position)
        self.last_position = position
        self.moved = True
        if self.session.on_drag is not None:
            self.session.on_drag(position, delta)

    def drop(self, position: Vector) -> None:
        if self.ended:
            return
        self.last_position = position
        self._finish()
        logger.debug("Drop of %r at %s", self.grabbed, position)
        if self.session.on_drop is not None:
            self.session.on_drop(position)
        if not self.moved and self.controller.on_click is not None:
            self.controller.on_click()

    def cancel(self) -> None:
        if self.ended:
            return
        self._finish()
        logger.debug("Drag of %r cancelled", self.grabbed)
        if self.session.on_cancel is not None:
            self.session.on_cancel()

    def _finish(self) -> None:
        self.ended = True
        self.controller.element.remove_marker(MARKER_DRAGGING)
        self.grabbed.remove_marker(MARKER_DRAGGING)
        self.router.release(self.pointer_id, self)


class DragController:
    def __init__(
        self,
        element: Element,
        on_grab: Callable[[Vector], DragSession | None],
        on_click: Callable[[], None] | None = None,
    ) -> None:
        self.element = element
        self.on_grab = on_grab
        self.on_click = on_click
        element.add_marker(MARKER_DRAGGABLE)

    def begin(self, router: PointerRouter, event: PointerEvent) -> DragGesture | None:
        if not event.is_primary or event.button != PRIMARY_BUTTON:
            return None
        if event.target is not self.element:
            return None
        position = router.page_position(event)
        session = self.on_grab(position)
        if session is None:
            return None
        gesture = DragGesture(router, self, session, event.pointer_id, position)
        router.capture(event.pointer_id, gesture)
        self.element.add_marker(MARKER_DRAGGING)
        session.grabbed.add_marker(MARKER_DRAGGING)
        logger.debug("Drag of %r started at %s", session.grabbed, position)
        return gesture


class PointerRouter:
    """Delivers pointer events to draggable elements, honouring captures."""

    def __init__(self, scroll_offset: Callable[[], Vector] | None = None) -> None:
        self._scroll_offset = scroll_offset or (lambda: point(0.0, 0.0))
        self._controllers: dict[int, DragController] = {}
        self._captures: dict[int, DragGesture] = {}

    def page_position(self, event: PointerEvent) -> Vector:
        return event.client_position.plus(self._scroll_offset())

    def listen(self, element: Element, controller: DragController) -> None:
        self._controllers[id(element)] = controller

    def forget(self, element: Element) -> None:
        self._controllers.pop(id(element), None)

    def controller_for(self, element: Element | None) -> DragController | None:
        if element is None:
            return None
        controller = self._controllers.get(id(element))
        if controller is None or controller.element is not element:
            return None
        return controller

    def has_capture(self, pointer_id: int) -> bool:
        return pointer_id in self._captures

    def gesture_for(self, pointer_id: int) -> DragGesture | None:
        return self._captures.get(pointer_id)

    def capture(self, pointer_id: int, gesture: DragGesture) -> None:
        for other in list(self._captures.values()):
            if other is not gesture and other.grabbed is gesture.grabbed:
                other.cancel()
        previous = self._captures.get(pointer_id)
        if previous is not None and previous is not gesture:
            previous.cancel()
        self._captures[pointer_id] = gesture

    def release(self, pointer_id: int, gesture: DragGesture | None = None) -> None:
        current = self._captures.get(pointer_id)
        if current is None:
            return
        if gesture is not None and current is not gesture:
            return
        del self._captures[pointer_id]

    def cancel_all(self) -> None:
        for gesture in list(self._captures.values()):
            gesture.cancel()

    def dispatch(self, event: PointerEvent) -> bool:
        gesture = self._captures.get(event.pointer_id)
        if gesture is not None:
            if event.kind == POINTER_MOVE:
                gesture.move(self.page_position(event))
                return True
            if event.kind == POINTER_UP:
                gesture.drop(self.page_position(event))
                return True
            if event.kind == POINTER_CANCEL:
                gesture.cancel()
                return True
            if event.kind == POINTER_DOWN:
                gesture.cancel()
        if event.kind != POINTER_DOWN:
            return False
        controller = self.controller_for(event.target)
        if controller is None:
            return False
        return controller.begin(self, event) is not None
