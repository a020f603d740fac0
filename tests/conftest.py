"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from outliners.constants import MOUSE_POINTER_ID  # noqa: E402
from outliners.dragging import (  # noqa: E402
    POINTER_CANCEL,
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    PointerEvent,
)
from outliners.geometry import Vector, point  # noqa: E402
from outliners.world import World  # noqa: E402


class Record:
    """Plain object with whatever attributes it is given."""

    def __init__(self, **fields) -> None:
        for name, value in fields.items():
            setattr(self, name, value)


def press(world, element, position: Vector, pointer_id: int = MOUSE_POINTER_ID, **kwargs) -> bool:
    return world.router.dispatch(
        PointerEvent(POINTER_DOWN, pointer_id, position, target=element, **kwargs)
    )


def move(world, position: Vector, pointer_id: int = MOUSE_POINTER_ID) -> bool:
    return world.router.dispatch(PointerEvent(POINTER_MOVE, pointer_id, position))


def release(world, position: Vector, pointer_id: int = MOUSE_POINTER_ID) -> bool:
    return world.router.dispatch(PointerEvent(POINTER_UP, pointer_id, position))


def cancel(world, pointer_id: int = MOUSE_POINTER_ID) -> bool:
    return world.router.dispatch(PointerEvent(POINTER_CANCEL, pointer_id, point(0.0, 0.0)))


def drag(world, element, *positions: Vector, pointer_id: int = MOUSE_POINTER_ID) -> None:
    """Press on ``element`` at the first position, move through the rest, release at the last."""
    press(world, element, positions[0], pointer_id)
    for position in positions[1:]:
        move(world, position, pointer_id)
    release(world, positions[-1], pointer_id)


def click(world, element, position: Vector) -> None:
    press(world, element, position)
    release(world, position)


@pytest.fixture
def world():
    return World()


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
