"""Example session: drop a perpendicular from a point onto a line and mark the foot."""

from geoconstruct import ConstructionSession, ElementStore, print_elements

ZOOM = 10.0


def main() -> None:
    store = ElementStore()
    session = ConstructionSession(store)
    session.set_zoom(ZOOM)

    store.set_selected_tool("line")
    session.click(0, 0)
    session.click(12, 4)

    store.set_selected_tool("point")
    session.click(2, 9)

    store.set_selected_tool("perpendicular_line")
    session.click(2, 9)
    session.click(6, 2)

    # the foot is where the perpendicular crosses the base line
    store.set_selected_tool("intersect")
    session.pointer_move(4.7, 1.57)
    foot = session.intersection_candidate
    session.click(4.7, 1.57)

    print(f"Foot candidate: {foot}")
    print(print_elements(store.elements), end="")

    store.undo()
    print(f"After undo: {len(store.elements)} element(s), can_redo={store.can_redo}")


if __name__ == "__main__":
    main()
