"""Tests for the world registry, refresh passes and hit testing."""

from __future__ import annotations

from concurrent.futures import Future

from outliners.constants import MARKER_MOVING, MARKER_SHAKING
from outliners.geometry import point
from tests.conftest import Record, click, drag, move, press, release


def test_one_panel_per_value(world):
    value = Record()
    first = world.open_panel(value, point(0, 0))
    assert world.open_panel(value, point(500, 500)) is first
    assert first.position == point(0, 0)
    assert world.open_panel(5) is world.open_panel(5)
    assert world.open_panel(5) is not world.open_panel(5.0)
    assert world.open_panel(1) is not world.open_panel(True)
    assert world.open_panel(Record()) is not first


def test_panel_at_prefers_front_most(world):
    back = world.open_panel(Record(), point(0, 0))
    front = world.open_panel(Record(), point(100, 10))
    assert world.panel_at(point(150, 30)) is front
    assert world.panel_at(point(50, 30)) is back
    assert world.panel_at(point(900, 900)) is None
    world.raise_panel(back)
    assert world.panel_at(point(150, 30)) is back
    assert world.panels() == [front, back]
    assert world.is_drawn_after(back, front)
    assert not world.is_drawn_after(front, back)


def test_signals_follow_panels_and_arrows(world):
    panel_events = []
    arrow_events = []
    world.panels_changed.connect(lambda: panel_events.append("panels"))
    world.arrows_changed.connect(lambda: arrow_events.append("arrows"))
    owner = world.open_panel({"child": Record()}, point(0, 0))
    association = world.inspect_slot(owner, owner.slot_for("child"))
    association.remove()
    association.remove()
    assert panel_events == ["panels", "panels"]
    assert arrow_events == ["arrows", "arrows"]


def test_inspect_slot_opens_panel_at_default_offset(world):
    inner = Record()
    owner = world.open_panel({"child": inner}, point(10, 10))
    association = world.inspect_slot(owner, owner.slot_for("child"))
    assert association.value_panel is world.panel_for(inner)
    assert association.value_panel.position == point(266, 49)
    assert world.association_for(owner.inspected_value, "child") is association
    assert world.association_for(Record(), "child") is None


class Guarded:
    @property
    def secret(self):
        raise PermissionError("no peeking")


def test_inspect_unreadable_slot_opens_error_panel(world):
    owner = world.open_panel(Guarded(), point(0, 0))
    assert world.inspect_slot(owner, owner.slot_for("secret")) is None
    assert world.associations() == []
    errors = [p for p in world.panels() if isinstance(p.inspected_value, PermissionError)]
    assert len(errors) == 1
    assert errors[0].title() == "PermissionError: no peeking"


def test_update_redirects_to_open_panel_for_new_value(world):
    first = Record(n=1)
    second = Record(n=2)
    outer = {"child": first}
    owner = world.open_panel(outer, point(0, 0))
    association = world.inspect_slot(owner, owner.slot_for("child"))
    first_panel = association.value_panel
    second_panel = world.open_panel(second, point(400, 400))

    outer["child"] = second
    world.update()

    assert world.associations() == [association]
    assert association.value_panel is second_panel
    assert first_panel.associations_ending == set()
    assert second_panel.associations_ending == {association}
    assert second_panel.has_marker(MARKER_SHAKING)


def test_update_removes_arrow_when_no_panel_shows_new_value(world):
    outer = {"child": Record()}
    owner = world.open_panel(outer, point(0, 0))
    association = world.inspect_slot(owner, owner.slot_for("child"))
    outer["child"] = Record()
    world.update()
    assert association.removed
    assert world.associations() == []


def test_update_removes_arrow_of_deleted_attribute(world):
    value = Record(child=Record())
    owner = world.open_panel(value, point(0, 0))
    association = world.inspect_slot(owner, owner.slot_for("child"))
    del value.child
    world.update()
    assert association.removed
    assert owner.slot_for("child") is None


def test_update_keeps_matching_primitive(world):
    outer = {"count": 3}
    owner = world.open_panel(outer, point(0, 0))
    association = world.inspect_slot(owner, owner.slot_for("count"))
    outer["count"] = 3
    world.update()
    assert not association.removed
    outer["count"] = 3.0
    world.update()
    assert association.removed


def test_watched_future_triggers_refresh(world):
    first = Record()
    second = Record()
    outer = {"child": first}
    owner = world.open_panel(outer, point(0, 0))
    association = world.inspect_slot(owner, owner.slot_for("child"))
    second_panel = world.open_panel(second, point(400, 400))
    future = world.watch(Future())

    outer["child"] = second
    assert association.value_panel is not second_panel
    future.set_result("done")
    assert association.value_panel is second_panel


def test_element_at_finds_interactive_parts(world):
    owner = world.open_panel({"child": Record()}, point(0, 0))
    slot = owner.slot_for("child")
    assert world.element_at(point(100, 10)) is owner.header
    assert world.element_at(point(204, 14)) is owner.close_button
    assert world.element_at(point(206, 39)) is slot.handle
    assert world.element_at(point(100, 50)) is None
    assert world.element_at(point(900, 900)) is None

    association = world.inspect_slot(owner, slot)
    assert world.element_at(association.arrow.end_position()) is association.end_handle


def test_dragging_header_moves_and_raises_panel(world):
    panel = world.open_panel(Record(), point(0, 0))
    other = world.open_panel(Record(), point(300, 0))
    press(world, panel.header, point(10, 10))
    assert world.panels()[-1] is panel
    assert panel.has_marker(MARKER_MOVING)
    move(world, point(30, 15))
    move(world, point(40, 25))
    release(world, point(40, 25))
    assert panel.position == point(30, 15)
    assert not panel.has_marker(MARKER_MOVING)
    assert world.is_drawn_after(panel, other)


def test_close_button_click_closes_panel(world):
    panel = world.open_panel(Record(), point(0, 0))
    click(world, panel.close_button, point(204, 14))
    assert panel.closed
    assert world.panels() == []


def test_dragging_off_close_button_does_not_close(world):
    panel = world.open_panel(Record(), point(0, 0))
    drag(world, panel.close_button, point(204, 14), point(150, 80))
    assert not panel.closed


def test_scroll_offset_converts_client_positions(world):
    panel = world.open_panel(Record(), point(0, 0))
    world.set_scroll_offset(point(0, 100))
    press(world, panel.header, point(10, -90))
    move(world, point(20, -90))
    release(world, point(20, -90))
    assert panel.position == point(10, 0)
