from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor

from PyQt6.QtCore import QSettings
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QApplication, QMainWindow

from .config import ViewerConfig, load_config
from .constants import APP_NAME
from .demo import price_order, sample_objects
from .geometry import point
from .logging_config import setup_logging
from .scene import OutlinerScene
from .view import OutlinerView
from .world import World

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, config: ViewerConfig | None = None) -> None:
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.settings = QSettings(APP_NAME, APP_NAME)
        self.config = config or ViewerConfig()
        self.world = World(parent=self)
        self.scene = OutlinerScene(self.world, self.config)
        self.view = OutlinerView(self.scene)
        self.setCentralWidget(self.view)
        self.executor = ThreadPoolExecutor(max_workers=1)
        self.objects = sample_objects()

        self._build_actions()
        self._restore_window_settings()
        self.open_samples()

    def _build_actions(self) -> None:
        menu = self.menuBar().addMenu("&View")

        refresh_action = QAction("&Refresh", self)
        refresh_action.setShortcut(QKeySequence("F5"))
        refresh_action.triggered.connect(self.world.update)
        menu.addAction(refresh_action)

        samples_action = QAction("Open &Samples", self)
        samples_action.triggered.connect(self.open_samples)
        menu.addAction(samples_action)

        price_action = QAction("&Price First Order", self)
        price_action.triggered.connect(self.price_first_order)
        menu.addAction(price_action)

        menu.addSeparator()
        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        menu.addAction(quit_action)

    def open_samples(self) -> None:
        self.world.open_panel(self.objects["first"], point(40.0, 40.0))
        self.world.open_panel(self.objects["alice"], point(420.0, 60.0))
        self.world.open_panel(self.objects["bob"], point(420.0, 320.0))

    def price_first_order(self) -> None:
        order = self.objects["first"]
        logger.info("Pricing order %s", order.number)
        self.world.watch(self.executor.submit(price_order, order))

    def closeEvent(self, event) -> None:
        self.view.cancel_drag()
        self._save_window_settings()
        self.executor.shutdown(wait=False, cancel_futures=True)
        event.accept()

    def _restore_window_settings(self) -> None:
        geometry = self.settings.value("window/geometry")
        if geometry:
            self.restoreGeometry(geometry)
        else:
            self.resize(1000, 700)
        state = self.settings.value("window/state")
        if state:
            self.restoreState(state)

    def _save_window_settings(self) -> None:
        self.settings.setValue("window/geometry", self.saveGeometry())
        self.settings.setValue("window/state", self.saveState())
        self.settings.sync()


def run() -> int:
    setup_logging()
    config, created = load_config()
    setup_logging(config.log_level)
    if created:
        logger.info("Edit %s to change colours and timings.", config.path)
    app = QApplication(sys.argv)
    window = MainWindow(config)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(run())
