from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .associations import Association
    from .panels import Panel
    from .slots import Slot


class Markable:
    """Something the canvas renders, carrying visual state markers."""

    def __init__(self) -> None:
        self.markers: set[str] = set()

    def add_marker(self, marker: str) -> None:
        self.markers.add(marker)

    def remove_marker(self, marker: str) -> None:
        self.markers.discard(marker)

    def has_marker(self, marker: str) -> bool:
        return marker in self.markers


class Element(Markable):
    role = "element"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {sorted(self.markers)}>"


class PanelHeader(Element):
    role = "header"

    def __init__(self, panel: Panel) -> None:
        super().__init__()
        self.panel = panel


class CloseButton(Element):
    role = "close"

    def __init__(self, panel: Panel) -> None:
        super().__init__()
        self.panel = panel


class SlotHandle(Element):
    role = "slot-handle"

    def __init__(self, slot: Slot) -> None:
        super().__init__()
        self.slot = slot


class ArrowEndHandle(Element):
    role = "arrow-end"

    def __init__(self, association: Association) -> None:
        super().__init__()
        self.association = association
