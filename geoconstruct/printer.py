"""Text rendering of elements, one line each, naming points by label."""

from typing import Iterable, Mapping, Optional

from .model import (
    AngleBisector,
    Circle,
    Element,
    Line,
    PerpendicularBisector,
    PerpendicularLine,
    Point,
)


def _num(value: float) -> str:
    rounded = round(value, 6)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:g}"


def point_name(element_id: str, scene: Mapping[str, Element]) -> str:
    """Label of the referenced point, or ``#`` plus a short id prefix."""

    el = scene.get(element_id)
    if isinstance(el, Point) and el.label:
        return el.label
    if el is None:
        return f"?{element_id[:6]}"
    return f"#{element_id[:6]}"


def _ref_str(element_id: str, scene: Mapping[str, Element]) -> str:
    el = scene.get(element_id)
    if el is None:
        return f"?{element_id[:6]}"
    if isinstance(el, Point):
        return point_name(element_id, scene)
    if isinstance(el, PerpendicularLine):
        # one level only; nested references are named by their through-point
        return f"perpendicular at {point_name(el.point_id, scene)}"
    return format_element(el, scene)


def format_element(el: Element, scene: Optional[Mapping[str, Element]] = None) -> str:
    scene = scene if scene is not None else {}
    if isinstance(el, Point):
        name = el.label or f"#{el.id[:6]}"
        state = "fixed" if el.is_fixed else "derived"
        return f"point {name} ({_num(el.x)}, {_num(el.y)}) {state}"
    if isinstance(el, Line):
        return f"line {point_name(el.p1_id, scene)}-{point_name(el.p2_id, scene)}"
    if isinstance(el, Circle):
        return (
            f"circle center {point_name(el.center_id, scene)} "
            f"through {point_name(el.radius_point_id, scene)}"
        )
    if isinstance(el, PerpendicularBisector):
        return f"perp-bisector of {point_name(el.p1_id, scene)}-{point_name(el.p2_id, scene)}"
    if isinstance(el, PerpendicularLine):
        return f"perpendicular at {point_name(el.point_id, scene)} to ({_ref_str(el.reference_id, scene)})"
    if isinstance(el, AngleBisector):
        return (
            f"angle-bisector {point_name(el.p1_id, scene)}-"
            f"{point_name(el.vertex_id, scene)}-{point_name(el.p2_id, scene)}"
        )
    raise ValueError(f"unsupported element {el!r}")


def print_elements(elements: Iterable[Element]) -> str:
    items = list(elements)
    scene = {el.id: el for el in items}
    lines = [format_element(el, scene) for el in items]
    return "\n".join(lines) + ("\n" if lines else "")
