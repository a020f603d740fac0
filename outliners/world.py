from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Hashable

from PyQt6.QtCore import QObject, pyqtSignal

from .associations import Association, drag_from_handle
from .constants import (
    ARROW_END_HANDLE_SIZE,
    ARROW_STYLE_HIDDEN,
    DEFAULT_PANEL_POSITION,
    MARKER_MOVING,
)
from .dragging import DragController, DragSession, PointerRouter
from .elements import Element
from .geometry import Box, Vector, point
from .layout import PanelLayout
from .panels import Panel
from .slots import Slot
from .values import value_key

logger = logging.getLogger(__name__)


class World(QObject):
    panels_changed = pyqtSignal()
    arrows_changed = pyqtSignal()
    panel_changed = pyqtSignal(object)
    association_changed = pyqtSignal(object)
    panel_shaken = pyqtSignal(object)
    refresh_requested = pyqtSignal()

    def __init__(self, layout: PanelLayout | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.layout = layout or PanelLayout()
        self.scroll_offset = point(0.0, 0.0)
        self.router = PointerRouter(lambda: self.scroll_offset)
        self._panels: list[Panel] = []
        self._panels_by_value: dict[Hashable, Panel] = {}
        self._associations: list[Association] = []
        self.refresh_requested.connect(self.update)

    # Panels

    def panels(self) -> list[Panel]:
        return list(self._panels)

    def panel_for(self, value: object) -> Panel | None:
        return self._panels_by_value.get(value_key(value))

    def panel_at(self, position: Vector) -> Panel | None:
        for panel in reversed(self._panels):
            if panel.is_at(position):
                return panel
        return None

    def open_panel(self, value: object, position: Vector | None = None) -> Panel:
        existing = self.panel_for(value)
        if existing is not None:
            return existing
        if position is None:
            position = point(*DEFAULT_PANEL_POSITION)
        panel = Panel(self, value, position, self.layout)
        self._panels.append(panel)
        self._panels_by_value[value_key(value)] = panel
        self.router.listen(
            panel.header,
            DragController(panel.header, lambda _position: self._grab_panel(panel)),
        )
        self.router.listen(
            panel.close_button,
            DragController(
                panel.close_button,
                lambda _position: DragSession(panel.close_button),
                on_click=lambda: self.close_panel(panel),
            ),
        )
        self.listen_to_slots(panel)
        logger.info("Opened %s at %s", panel, position)
        self.panels_changed.emit()
        return panel

    def close_panel(self, panel: Panel) -> None:
        if panel.closed or panel not in self._panels:
            return
        for association in panel.all_relationships():
            association.remove()
        panel.closed = True
        self._panels.remove(panel)
        self._panels_by_value.pop(value_key(panel.inspected_value), None)
        self.router.forget(panel.header)
        self.router.forget(panel.close_button)
        for slot in panel.slots:
            self.router.forget(slot.handle)
        logger.info("Closed %s", panel)
        self.panels_changed.emit()

    def listen_to_slots(self, panel: Panel) -> None:
        for slot in panel.slots:
            if self.router.controller_for(slot.handle) is not None:
                continue
            self.router.listen(
                slot.handle,
                DragController(
                    slot.handle,
                    lambda position, slot=slot: drag_from_handle(self, panel, slot, position),
                    on_click=lambda slot=slot: self.inspect_slot(panel, slot),
                ),
            )

    def element_at(self, position: Vector) -> Element | None:
        for association in reversed(self._associations):
            if not association.is_bound() or association.style == ARROW_STYLE_HIDDEN:
                continue
            tip = association.arrow.end_position()
            half = ARROW_END_HANDLE_SIZE / 2.0
            if Box(tip.x - half, tip.y - half, ARROW_END_HANDLE_SIZE, ARROW_END_HANDLE_SIZE).contains(
                position
            ):
                return association.end_handle
        panel = self.panel_at(position)
        if panel is None:
            return None
        box = panel.box()
        if self.layout.close_button_box(box).contains(position):
            return panel.close_button
        for slot in panel.slots:
            if panel.handle_box(slot).contains(position):
                return slot.handle
        if self.layout.header_box(box).contains(position):
            return panel.header
        return None

    def raise_panel(self, panel: Panel) -> None:
        if not self._panels or self._panels[-1] is panel or panel not in self._panels:
            return
        self._panels.remove(panel)
        self._panels.append(panel)
        for association in self._associations:
            association.refresh_style()
        self.panels_changed.emit()

    def is_drawn_after(self, first: Panel, second: Panel) -> bool:
        if first not in self._panels or second not in self._panels:
            return False
        return self._panels.index(first) > self._panels.index(second)

    def _grab_panel(self, panel: Panel) -> DragSession:
        self.raise_panel(panel)
        panel.add_marker(MARKER_MOVING)

        def stop_moving(*_args) -> None:
            panel.remove_marker(MARKER_MOVING)
            self.notify_panel_changed(panel)

        return DragSession(
            panel.header,
            on_drag=lambda _position, delta: panel.move(delta),
            on_drop=stop_moving,
            on_cancel=stop_moving,
        )

    # Associations

    def associations(self) -> list[Association]:
        return list(self._associations)

    def association_for(self, owner_value: object, selector: Hashable) -> Association | None:
        panel = self.panel_for(owner_value)
        if panel is None:
            return None
        return panel.association_for(selector)

    def register_association(self, association: Association) -> None:
        self._associations.append(association)
        self.arrows_changed.emit()

    def unregister_association(self, association: Association) -> None:
        if association in self._associations:
            self._associations.remove(association)
            self.arrows_changed.emit()

    def inspect_slot(self, panel: Panel, slot: Slot) -> Association | None:
        association = panel.association_for(slot.selector)
        if association is not None:
            value_panel = association.value_panel
            association.remove()
            if (
                value_panel is not None
                and value_panel is not panel
                and value_panel.position == value_panel.default_position
                and value_panel.number_of_associations() == 0
            ):
                self.close_panel(value_panel)
            return None
        result = slot.current_value()
        position = panel.value_panel_position(slot)
        if result.failed:
            self.open_panel(result.error, position)
            return None
        value_panel = self.open_panel(result.value, position)
        return Association(self, slot, panel, value_panel)

    # Refresh

    def update(self) -> None:
        for panel in list(self._panels):
            if not panel.closed:
                panel.refresh()
        for association in list(self._associations):
            association.update()

    def watch(self, future: Future) -> Future:
        future.add_done_callback(lambda _future: self.refresh_requested.emit())
        return future

    def set_scroll_offset(self, offset: Vector) -> None:
        self.scroll_offset = offset

    def notify_panel_changed(self, panel: Panel) -> None:
        self.panel_changed.emit(panel)

    def notify_association_changed(self, association: Association) -> None:
        self.association_changed.emit(association)
