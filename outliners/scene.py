from __future__ import annotations

from PyQt6.QtCore import QRectF, QTimer
from PyQt6.QtWidgets import QGraphicsScene

from .associations import Association
from .config import ViewerConfig
from .items import ArrowItem, PanelItem
from .panels import Panel
from .world import World

SCENE_MARGIN = 400.0


class OutlinerScene(QGraphicsScene):
    def __init__(self, world: World, config: ViewerConfig | None = None) -> None:
        super().__init__()
        self.world = world
        self.config = config or ViewerConfig()
        self.panel_items: dict[int, PanelItem] = {}
        self.arrow_items: dict[int, ArrowItem] = {}

        self.world.panels_changed.connect(self.refresh_items)
        self.world.arrows_changed.connect(self.refresh_items)
        self.world.panel_changed.connect(self.sync_panel)
        self.world.association_changed.connect(self.sync_association)
        self.world.panel_shaken.connect(self.start_shaking)

        self.refresh_items()

    def refresh_items(self) -> None:
        panels = self.world.panels()
        associations = self.world.associations()

        new_panel_items: dict[int, PanelItem] = {}
        for panel in panels:
            item = self.panel_items.get(id(panel))
            if item is None or item.panel is not panel:
                item = PanelItem(panel, self.config)
                self.addItem(item)
            else:
                item.sync_from_panel()
            new_panel_items[id(panel)] = item
        for key, item in self.panel_items.items():
            if new_panel_items.get(key) is not item:
                self.removeItem(item)
        self.panel_items = new_panel_items

        new_arrow_items: dict[int, ArrowItem] = {}
        for association in associations:
            item = self.arrow_items.get(id(association))
            if item is None or item.association is not association:
                item = ArrowItem(association, self.config)
                self.addItem(item)
            new_arrow_items[id(association)] = item
        for key, item in self.arrow_items.items():
            if new_arrow_items.get(key) is not item:
                item.detach()
                self.removeItem(item)
        self.arrow_items = new_arrow_items

        self._apply_z_order()
        self._update_scene_rect()

    def _apply_z_order(self) -> None:
        for index, panel in enumerate(self.world.panels()):
            item = self.panel_items.get(id(panel))
            if item is not None:
                item.setZValue(index * 2)
            for association in panel.associations_starting.values():
                arrow_item = self.arrow_items.get(id(association))
                if arrow_item is not None:
                    arrow_item.base_z = (index * 2) + 1
                    arrow_item.sync_from_association()

    def _update_scene_rect(self) -> None:
        rect = QRectF(0.0, 0.0, 1.0, 1.0)
        for item in self.panel_items.values():
            rect = rect.united(item.sceneBoundingRect())
        self.setSceneRect(rect.adjusted(0.0, 0.0, SCENE_MARGIN, SCENE_MARGIN))

    def sync_panel(self, panel: Panel) -> None:
        item = self.panel_items.get(id(panel))
        if item is None or item.panel is not panel:
            return
        item.fit_to_contents()
        item.sync_from_panel()
        if not self.sceneRect().contains(item.sceneBoundingRect()):
            self._update_scene_rect()

    def sync_association(self, association: Association) -> None:
        item = self.arrow_items.get(id(association))
        if item is None or item.association is not association:
            return
        item.sync_from_association()

    def start_shaking(self, panel: Panel) -> None:
        self.sync_panel(panel)
        QTimer.singleShot(max(0, self.config.shake_duration_ms), panel.stop_shaking)

    def panel_item_for(self, panel: Panel) -> PanelItem | None:
        return self.panel_items.get(id(panel))

    def arrow_item_for(self, association: Association) -> ArrowItem | None:
        return self.arrow_items.get(id(association))
