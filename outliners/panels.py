from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Hashable

from .constants import MARKER_SHAKING
from .elements import CloseButton, Markable, PanelHeader
from .geometry import Box, Vector
from .layout import PanelLayout
from .slots import Slot, slots_for
from .values import kind_of, title_for

if TYPE_CHECKING:
    from .associations import Association
    from .world import World

logger = logging.getLogger(__name__)


class Panel(Markable):
    """A floating outliner showing the fields of one inspected value."""

    def __init__(
        self,
        world: World,
        inspected_value: object,
        position: Vector,
        layout: PanelLayout | None = None,
    ) -> None:
        super().__init__()
        self.world = world
        self.inspected_value = inspected_value
        self.position = position
        self.layout = layout or PanelLayout()
        self.header = PanelHeader(self)
        self.close_button = CloseButton(self)
        self.slots: list[Slot] = self._bind(slots_for(inspected_value))
        self.size = self.layout.size_for(len(self.slots))
        self.default_position = position
        self.closed = False
        self.associations_starting: dict[Hashable, Association] = {}
        self.associations_ending: set[Association] = set()

    def title(self) -> str:
        return title_for(self.inspected_value)

    def kind(self) -> str:
        return kind_of(self.inspected_value)

    def box(self) -> Box:
        return Box.at(self.position, self.size)

    def is_at(self, position: Vector) -> bool:
        return not self.closed and self.box().contains(position)

    def slot_for(self, selector: Hashable) -> Slot | None:
        for slot in self.slots:
            if slot.selector == selector:
                return slot
        return None

    def slot_index(self, slot: Slot) -> int:
        for index, candidate in enumerate(self.slots):
            if candidate is slot:
                return index
        return max(0, len(self.slots) - 1)

    def handle_center(self, slot: Slot) -> Vector:
        return self.layout.handle_center(self.box(), self.slot_index(slot))

    def handle_box(self, slot: Slot) -> Box:
        return self.layout.handle_box(self.box(), self.slot_index(slot))

    def value_panel_position(self, slot: Slot) -> Vector:
        return self.layout.value_panel_position(self.box(), self.slot_index(slot))

    # Relationship registry

    def register_outgoing(self, association: Association) -> None:
        previous = self.associations_starting.get(association.selector)
        if previous is not None and previous is not association:
            previous.remove()
        self.associations_starting[association.selector] = association

    def remove_outgoing(self, association: Association) -> None:
        if self.associations_starting.get(association.selector) is association:
            del self.associations_starting[association.selector]

    def register_incoming(self, association: Association) -> None:
        self.associations_ending.add(association)

    def remove_incoming(self, association: Association) -> None:
        self.associations_ending.discard(association)

    def association_for(self, selector: Hashable) -> Association | None:
        return self.associations_starting.get(selector)

    def all_relationships(self) -> list[Association]:
        relationships = list(self.associations_starting.values())
        for association in self.associations_ending:
            if association not in relationships:
                relationships.append(association)
        return relationships

    def number_of_associations(self) -> int:
        return len(self.all_relationships())

    def update_positions(self) -> None:
        for association in self.all_relationships():
            association.update_position()

    # Geometry

    def move(self, delta: Vector) -> None:
        self.move_to(self.position.plus(delta))

    def move_to(self, position: Vector) -> None:
        if position == self.position:
            return
        self.position = position
        self.update_positions()
        self.world.notify_panel_changed(self)

    def resize(self, size: Vector) -> None:
        if size == self.size:
            return
        self.size = size
        self.update_positions()
        self.world.notify_panel_changed(self)

    def refresh(self) -> None:
        current = {slot.selector: slot for slot in self.slots}
        fresh: list[Slot] = []
        for slot in slots_for(self.inspected_value):
            existing = current.pop(slot.selector, None)
            fresh.append(existing if existing is not None else self._bind([slot])[0])
        for vanished in current.values():
            self.world.router.forget(vanished.handle)
            association = self.associations_starting.get(vanished.selector)
            if association is not None and not association.is_dragging():
                logger.info("Field %s vanished from %s", vanished.name(), self.title())
                association.remove()
        self.slots = fresh
        self.world.listen_to_slots(self)
        self.size = self.layout.size_for(len(self.slots), self.size.x)
        self.update_positions()
        self.world.notify_panel_changed(self)

    def shake(self) -> None:
        self.add_marker(MARKER_SHAKING)
        self.world.panel_shaken.emit(self)

    def stop_shaking(self) -> None:
        if self.has_marker(MARKER_SHAKING):
            self.remove_marker(MARKER_SHAKING)
            self.world.notify_panel_changed(self)

    def _bind(self, slots: list[Slot]) -> list[Slot]:
        for slot in slots:
            slot.panel = self
        return slots

    def __repr__(self) -> str:
        return f"<Panel {self.title()}>"
