from geoconstruct.model import (
    AngleBisector,
    Circle,
    Line,
    PerpendicularBisector,
    PerpendicularLine,
    Point,
)
from geoconstruct.printer import format_element, print_elements


def _scene():
    a = Point(0, 0, label="A", id="a")
    b = Point(10, 0, label="B", id="b")
    c = Point(2.5, 7, id="c0ffee42")
    d = Point(5, 8.660254, is_fixed=False, label="D", id="d")
    return [a, b, c, d]


def test_points_show_label_coords_and_state():
    a, _, c, d = _scene()
    assert format_element(a) == "point A (0, 0) fixed"
    assert format_element(c) == "point #c0ffee (2.5, 7) fixed"
    assert format_element(d) == "point D (5, 8.66025) derived"


def test_constructions_name_their_references():
    points = _scene()
    line = Line(p1_id="a", p2_id="b", id="l")
    elements = points + [
        line,
        Circle(center_id="a", radius_point_id="b"),
        PerpendicularBisector(p1_id="a", p2_id="b"),
        PerpendicularLine(point_id="c0ffee42", reference_id="l"),
        AngleBisector(vertex_id="a", p1_id="b", p2_id="c0ffee42"),
    ]

    out = print_elements(elements).splitlines()
    assert out[4:] == [
        "line A-B",
        "circle center A through B",
        "perp-bisector of A-B",
        "perpendicular at #c0ffee to (line A-B)",
        "angle-bisector B-A-#c0ffee",
    ]


def test_nested_perpendicular_and_missing_reference():
    points = _scene()
    line = Line(p1_id="a", p2_id="b", id="l")
    inner = PerpendicularLine(point_id="a", reference_id="l", id="p1")
    outer = PerpendicularLine(point_id="b", reference_id="p1")
    dangling = Line(p1_id="a", p2_id="gone")
    scene = {el.id: el for el in points + [line, inner, outer, dangling]}

    assert format_element(outer, scene) == "perpendicular at B to (perpendicular at A)"
    assert format_element(dangling, scene) == "line A-?gone"


def test_empty_listing():
    assert print_elements([]) == ""
