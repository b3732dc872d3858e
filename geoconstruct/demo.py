from . import ConstructionSession, ElementStore, parse_script, print_elements, run_script

DEMO = """
# circle at A through B, a vertical line, then pick both crossings
zoom 10
tool circle
click 0 0
click 10 0
tool line
click 5 -20
click 5 20
tool perpendicular_bisector
click 0 0
click 10 0
tool intersect
move 5 8.66
click 5 8.66
move 5 -8.66
click 5 -8.66
tool label
click 0 0
click 10 0
"""


def run():
    store = ElementStore()
    session = ConstructionSession(store)
    run_script(parse_script(DEMO), session)
    print(f"Elements ({len(store.elements)}):")
    print(print_elements(store.elements), end="")
    print(f"can_undo={store.can_undo} can_redo={store.can_redo}")


if __name__ == "__main__":
    run()
