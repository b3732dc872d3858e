import pytest

from geoconstruct.model import Circle, Line, PerpendicularBisector, PerpendicularLine, Point
from geoconstruct.pending import PendingPerpendicularBisector
from geoconstruct.store import ElementStore


def _two_points_and_line():
    a = Point(0, 0)
    b = Point(10, 0)
    return a, b, Line(p1_id=a.id, p2_id=b.id)


def test_batch_is_one_history_entry():
    store = ElementStore()
    store.add_element(Point(-5, -5))
    before = store.elements

    store.add_elements_batch(_two_points_and_line())
    assert len(store.elements) == 4

    store.undo()
    assert store.elements == before
    assert store.can_redo


def test_sequential_commits_undo_to_empty_baseline():
    store = ElementStore()
    for idx in range(5):
        store.add_element(Point(idx, idx))
    for _ in range(5):
        store.undo()
    assert store.elements == ()
    assert not store.can_undo
    store.undo()
    assert store.elements == ()


def test_redo_restores_identical_state():
    store = ElementStore()
    store.add_elements_batch(_two_points_and_line())
    after = store.elements
    store.undo()
    store.redo()
    assert store.elements == after
    assert not store.can_redo


def test_new_commit_after_undo_discards_redo_branch():
    store = ElementStore()
    store.add_element(Point(0, 0))
    store.add_element(Point(1, 1))
    store.undo()
    assert store.can_redo
    store.add_element(Point(2, 2))
    assert not store.can_redo
    assert [p.x for p in store.points()] == [0.0, 2.0]


def test_duplicate_id_is_rejected():
    store = ElementStore()
    a = Point(0, 0)
    store.add_element(a)
    with pytest.raises(ValueError):
        store.add_element(a)
    with pytest.raises(ValueError):
        store.add_elements_batch([Point(1, 1, id="x"), Point(2, 2, id="x")])
    assert len(store.history) == 2


def test_update_element_is_narrowed_by_type():
    store = ElementStore()
    a, b, line = _two_points_and_line()
    store.add_elements_batch([a, b, line])

    store.update_element(a.id, x=3, y=4)
    moved = store.get(a.id)
    assert (moved.x, moved.y) == (3.0, 4.0)
    assert moved.id == a.id

    with pytest.raises(ValueError):
        store.update_element(line.id, x=1)
    with pytest.raises(ValueError):
        store.update_element(a.id, id="other")


def test_unknown_ids_do_not_touch_history():
    store = ElementStore()
    store.add_element(Point(0, 0))
    size = len(store.history)
    store.update_element("missing", x=1)
    store.remove_element("missing")
    assert len(store.history) == size


def test_remove_cascades_and_undoes_atomically():
    store = ElementStore()
    a, b, line = _two_points_and_line()
    c = Point(3, 7)
    circle = Circle(center_id=a.id, radius_point_id=c.id)
    perp = PerpendicularLine(point_id=c.id, reference_id=line.id)
    bisector = PerpendicularBisector(p1_id=b.id, p2_id=c.id)
    store.add_elements_batch([a, b, line, c, circle, perp, bisector])
    before = store.elements

    store.remove_element(a.id)
    remaining = {el.id for el in store.elements}
    assert remaining == {b.id, c.id, bisector.id}

    store.undo()
    assert store.elements == before


def test_remove_clears_selection():
    store = ElementStore()
    a = Point(0, 0)
    store.add_element(a)
    store.set_selected_element_id(a.id)
    store.set_hovered_element_id(a.id)
    store.remove_element(a.id)
    assert store.selected_element_id is None
    assert store.hovered_element_id is None


def test_clear_canvas_is_undoable():
    store = ElementStore()
    store.add_elements_batch(_two_points_and_line())
    before = store.elements
    store.clear_canvas()
    assert store.elements == ()
    store.undo()
    assert store.elements == before


def test_labels_must_be_unique():
    store = ElementStore()
    a = Point(0, 0, label="A")
    b = Point(1, 0)
    store.add_elements_batch([a, b])
    with pytest.raises(ValueError):
        store.update_element(b.id, label="A")
    with pytest.raises(ValueError):
        Point(0, 0, label="AB")


def test_tool_switch_discards_pending():
    store = ElementStore()
    store.start_construction(PendingPerpendicularBisector(first_id="a"))
    assert store.is_drawing
    store.set_selected_tool("circle")
    assert store.pending is None
    assert store.selected_tool == "circle"
    with pytest.raises(ValueError):
        store.set_selected_tool("lasso")


def test_elements_view_is_a_copy():
    store = ElementStore()
    store.add_element(Point(0, 0))
    view = store.elements
    store.add_element(Point(1, 1))
    assert len(view) == 1
    assert len(store.history.current) == 2


def test_revision_moves_with_every_element_change():
    store = ElementStore()
    seen = [store.revision]
    a = Point(0, 0)
    store.add_element(a)
    seen.append(store.revision)
    store.update_element(a.id, x=1.0)
    seen.append(store.revision)
    store.undo()
    seen.append(store.revision)
    store.redo()
    seen.append(store.revision)
    assert len(set(seen)) == len(seen)

    # transient state leaves it alone
    store.set_selected_tool("line")
    store.set_hovered_element_id(a.id)
    store.update_element("missing", x=2.0)
    assert store.revision == seen[-1]


def test_tool_names_follow_declared_order():
    from geoconstruct.store import TOOLS

    assert TOOLS[0] == "select"
    assert TOOLS[-1] == "label"
    assert len(TOOLS) == len(set(TOOLS)) == 9
