from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .arrows import Arrow
from .constants import (
    ARROW_STYLE_FADED,
    ARROW_STYLE_HIDDEN,
    ARROW_STYLE_NORMAL,
    MARKER_HOVERED,
    NEW_ASSOCIATION_GRAB_OFFSET,
)
from .dragging import DragController, DragSession
from .elements import ArrowEndHandle
from .geometry import Vector, point
from .values import same_value

if TYPE_CHECKING:
    from .panels import Panel
    from .slots import Slot
    from .world import World

logger = logging.getLogger(__name__)


class Association:
    """Live arrow from one field of ``owner`` to the panel showing its value.

    While a retargeting drag is in progress the end either follows the
    pointer or tracks the panel under it (the hover candidate). Dropping
    onto a candidate assigns the candidate's inspected value to the field.
    """

    def __init__(
        self,
        world: World,
        slot: Slot,
        owner: Panel,
        value_panel: Panel | None = None,
        end: Vector | None = None,
    ) -> None:
        self.world = world
        self.slot = slot
        self.owner = owner
        self.selector = slot.selector
        self.value_panel = value_panel
        self.end_handle = ArrowEndHandle(self)
        self.candidate: Panel | None = None
        self.style = ARROW_STYLE_NORMAL
        self.removed = False
        self._dragging = False
        self._moved = False
        self._generation = 0

        start = owner.handle_center(slot)
        if value_panel is not None:
            self.arrow = Arrow(start, value_panel.box())
            value_panel.register_incoming(self)
        else:
            self.arrow = Arrow(start, end if end is not None else start)
        owner.register_outgoing(self)
        world.router.listen(self.end_handle, DragController(self.end_handle, self._grab_end))
        world.register_association(self)
        self.refresh_style()
        logger.info("Association %s created", self)

    def is_dragging(self) -> bool:
        return self._dragging

    def is_bound(self) -> bool:
        return self.value_panel is not None and not self.removed

    # Dragging

    def drag_session(self) -> DragSession:
        """Start a retargeting drag; callbacks of any earlier session go inert."""
        self._generation += 1
        generation = self._generation
        self._dragging = True
        self._moved = False

        def current() -> bool:
            return generation == self._generation

        def on_drag(position: Vector, delta: Vector) -> None:
            if current():
                self.on_drag(position, delta)

        def on_drop(position: Vector) -> None:
            if current():
                self.on_drop(position)

        def on_cancel() -> None:
            if current():
                self.on_cancel()

        return DragSession(
            grabbed=self.end_handle,
            on_drag=on_drag,
            on_drop=on_drop,
            on_cancel=on_cancel,
        )

    def _grab_end(self, position: Vector) -> DragSession | None:
        if self.removed:
            return None
        return self.drag_session()

    def on_drag(self, position: Vector, delta: Vector) -> None:
        if self.removed:
            return
        self._moved = True
        candidate = self.world.panel_at(position)
        if candidate is not self.candidate:
            self._clear_candidate()
            if candidate is not None:
                self.candidate = candidate
                candidate.add_marker(MARKER_HOVERED)
                self.world.notify_panel_changed(candidate)
        if candidate is not None:
            self.arrow.attach_end_to_box(candidate.box())
        else:
            self.arrow.update_end_to_point(position)
        self.refresh_style()

    def on_drop(self, position: Vector) -> None:
        if self.removed:
            return
        candidate = self.candidate
        self._clear_candidate()
        if candidate is None:
            self._dragging = False
            if self._moved:
                logger.info("Association %s dropped on empty space", self)
                self.remove()
            else:
                self._settle()
            return
        self._assign_from(candidate)

    def on_cancel(self) -> None:
        if self.removed:
            return
        self._dragging = False
        self._clear_candidate()
        self._settle()

    def _settle(self) -> None:
        if self.value_panel is None:
            self.remove()
        else:
            self.update_position()

    def _assign_from(self, candidate: Panel) -> None:
        # Still dragging through the owner refresh; no value panel is bound yet.
        result = self.slot.assign(candidate.inspected_value)
        if result.failed:
            self._dragging = False
            self._settle()
            self.world.open_panel(result.error, self.owner.value_panel_position(self.slot))
            return
        self.owner.refresh()
        self._dragging = False
        if self.removed:
            return
        current = self.slot.current_value()
        if current.failed:
            logger.info("Reading back %s failed after assignment", self.slot.name())
            self.remove()
            return
        target = self.world.panel_for(current.value)
        if target is None:
            self.remove()
            return
        self._retarget(target)
        target.shake()

    def _clear_candidate(self) -> None:
        candidate = self.candidate
        if candidate is None:
            return
        self.candidate = None
        candidate.remove_marker(MARKER_HOVERED)
        self.world.notify_panel_changed(candidate)

    def _retarget(self, target: Panel) -> None:
        if self.value_panel is not target:
            if self.value_panel is not None:
                self.value_panel.remove_incoming(self)
            self.value_panel = target
            target.register_incoming(self)
            logger.info("Association %s now points at %s", self, target)
        self.update_position()

    # Refresh

    def update_position(self) -> None:
        if self.removed:
            return
        start = self.owner.handle_center(self.slot)
        if self._dragging:
            self.arrow.update_start(start)
        elif self.value_panel is None or self.value_panel.closed:
            self.remove()
            return
        else:
            self.arrow.update_start(start)
            self.arrow.attach_end_to_box(self.value_panel.box())
        self.refresh_style()

    def update(self) -> None:
        if self.removed or self._dragging:
            return
        if not self.slot.is_present():
            logger.info("Field %s is gone; removing its arrow", self.slot.name())
            self.remove()
            return
        current = self.slot.current_value()
        if current.failed:
            self.remove()
            return
        if self.value_panel is not None and same_value(
            current.value, self.value_panel.inspected_value
        ):
            self.update_position()
            return
        target = self.world.panel_for(current.value)
        if target is None:
            self.remove()
            return
        self._retarget(target)
        target.shake()

    def remove(self) -> None:
        if self.removed:
            return
        self.removed = True
        self._dragging = False
        self._clear_candidate()
        self.owner.remove_outgoing(self)
        if self.value_panel is not None:
            self.value_panel.remove_incoming(self)
        self.world.router.forget(self.end_handle)
        self.world.unregister_association(self)
        logger.info("Association %s removed", self)

    # Style

    def compute_style(self) -> str:
        target = self.candidate if self._dragging else self.value_panel
        if target is None or target is self.owner:
            return ARROW_STYLE_NORMAL
        if self.world.is_drawn_after(target, self.owner):
            if target.box().contains(self.arrow.start()):
                return ARROW_STYLE_HIDDEN
        elif self.owner.box().contains(self.arrow.end_position()):
            return ARROW_STYLE_FADED
        return ARROW_STYLE_NORMAL

    def refresh_style(self) -> None:
        style = self.compute_style()
        if style != self.style:
            self.style = style
            self.world.notify_association_changed(self)

    def __repr__(self) -> str:
        return f"<Association {self.owner.title()} {self.slot.name()}>"


def drag_from_handle(world: World, panel: Panel, slot: Slot, position: Vector) -> DragSession:
    existing = panel.association_for(slot.selector)
    if existing is not None and not existing.removed:
        return existing.drag_session()
    association = Association(
        world,
        slot,
        panel,
        end=position.plus(point(*NEW_ASSOCIATION_GRAB_OFFSET)),
    )
    return association.drag_session()
