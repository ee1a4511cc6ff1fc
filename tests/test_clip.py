import pytest

from geobox.clip import (
    clip_bound,
    collection,
    geometry,
    line_string,
    multi_line_string,
    multi_point,
    multi_polygon,
    polygon,
    ring,
)
from geobox.geometry import (
    Bound,
    Collection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Ring,
)


def B(x0, y0, x1, y1):
    return Bound(Point(x0, y0), Point(x1, y1))


def _flatten(lines):
    return [c for line in lines for p in line for c in p]


FLOAT_BOUND = B(-91.93359375, 42.29356419217009, -91.7578125, 42.42345651793831)
FLOAT_INPUT = [
    (-86.66015624999999, 42.22851735620852), (-81.474609375, 38.51378825951165),
    (-85.517578125, 37.125286284966776), (-85.8251953125, 38.95940879245423),
    (-90.087890625, 39.53793974517628), (-91.93359375, 42.32606244456202),
    (-86.66015624999999, 42.22851735620852),
]

CLIP_LINE_INPUT = [
    (-10, 10), (10, 10), (10, -10), (20, -10), (20, 10), (40, 10),
    (40, 20), (20, 20), (20, 40), (10, 40), (10, 20), (5, 20), (-10, 20),
]
CLIP_LINE_OUTPUT = MultiLineString([
    [(0, 10), (10, 10), (10, 0)],
    [(20, 0), (20, 10), (30, 10)],
    [(30, 20), (20, 20), (20, 30)],
    [(10, 30), (10, 20), (5, 20), (0, 20)],
])


@pytest.mark.parametrize(
    "bound, line, expected",
    [
        (B(0, 0, 30, 30), CLIP_LINE_INPUT, CLIP_LINE_OUTPUT),
        (
            B(0, 0, 20, 20),
            [(10, -10), (10, 30), (20, 30), (20, -10)],
            MultiLineString([[(10, 0), (10, 20)], [(20, 20), (20, 0)]]),
        ),
        (
            B(0, 0, 20, 20),
            [(1, 1), (2, 2), (3, 3)],
            MultiLineString([[(1, 1), (2, 2), (3, 3)]]),
        ),
        (
            B(1, 1, 6, 6),
            [(2, 3), (1, 4), (2, 5), (2, 6), (3, 5), (4, 6), (5, 5), (5, 7), (0, 7), (0, 3), (2, 3)],
            MultiLineString([
                [(2, 3), (1, 4), (2, 5), (2, 6), (3, 5), (4, 6), (5, 5), (5, 6)],
                [(1, 3), (2, 3)],
            ]),
        ),
    ],
)
def test_line_string(bound, line, expected):
    assert line_string(bound, line) == expected


def test_line_string_nothing_in_bound():
    assert line_string(B(0, 0, 2, 2), [(10, 10), (20, 20), (30, 30)]) is None


def test_line_string_empty_input():
    assert line_string(B(0, 0, 2, 2), []) is None


def test_line_string_floating_point():
    result = line_string(FLOAT_BOUND, FLOAT_INPUT)
    expected = [[
        (-91.91208030440808, 42.29356419217009),
        (-91.93359375, 42.32606244456202),
        (-91.7578125, 42.3228109416169),
    ]]
    assert [len(line) for line in result] == [3]
    assert _flatten(result) == pytest.approx(_flatten(expected), rel=1e-12)


@pytest.mark.parametrize(
    "bound, line, expected",
    [
        (
            B(0, 0, 20, 20),
            [(10, -10), (10, 30), (20, 30), (20, -10)],
            MultiLineString([[(10, 0), (10, 20)]]),
        ),
        (
            B(1, 1, 6, 6),
            [(2, 3), (1, 4), (2, 5), (2, 6), (3, 5), (4, 6), (5, 5), (5, 7), (0, 7), (0, 3), (2, 3)],
            MultiLineString([
                [(2, 3), (1, 4)],
                [(1, 4), (2, 5), (2, 6)],
                [(2, 6), (3, 5), (4, 6)],
                [(4, 6), (5, 5), (5, 6)],
                [(1, 3), (2, 3)],
            ]),
        ),
    ],
)
def test_line_string_open_bound(bound, line, expected):
    assert line_string(bound, line, open_bound=True) == expected


def test_line_string_open_bound_floating_point():
    result = line_string(FLOAT_BOUND, FLOAT_INPUT, open_bound=True)
    expected = [
        [(-91.91208030440808, 42.29356419217009), (-91.93359375, 42.32606244456202)],
        [(-91.93359375, 42.32606244456202), (-91.7578125, 42.3228109416169)],
    ]
    assert [len(line) for line in result] == [2, 2]
    assert _flatten(result) == pytest.approx(_flatten(expected), rel=1e-12)


@pytest.mark.parametrize(
    "bound, r, expected",
    [
        (
            B(0, 0, 30, 30),
            [
                (-10, 10), (0, 10), (10, 10), (10, 5), (10, -5),
                (10, -10), (20, -10), (20, 10), (40, 10), (40, 20),
                (20, 20), (20, 40), (10, 40), (10, 20), (5, 20), (-10, 20),
            ],
            Ring([
                (0, 10), (0, 10), (10, 10), (10, 5), (10, 0),
                (20, 0), (20, 10), (30, 10), (30, 20), (20, 20),
                (20, 30), (10, 30), (10, 20), (5, 20), (0, 20),
            ]),
        ),
        (
            B(0, 0, 10, 10),
            [(3, 3), (5, 3), (5, 5), (3, 5), (3, 3)],
            Ring([(3, 3), (5, 3), (5, 5), (3, 5), (3, 3)]),
        ),
        (
            B(1, 1, 2, 2),
            [(0, 0), (3, 0), (3, 3), (0, 3), (0, 0)],
            Ring([(1, 2), (1, 1), (2, 1), (2, 2), (1, 2)]),
        ),
        (
            B(1, 1, 3, 3),
            [(0, 2), (2, 0), (4, 2), (2, 4), (0, 2)],
            Ring([(1, 1), (1, 1), (3, 1), (3, 1), (3, 3), (3, 3), (1, 3), (1, 3), (1, 1)]),
        ),
        (
            B(0.5, 0.5, 3.5, 3.5),
            [(0, 2), (2, 4), (4, 2), (2, 0), (0, 2)],
            Ring([
                (0.5, 2.5), (1.5, 3.5), (2.5, 3.5), (3.5, 2.5), (3.5, 1.5),
                (2.5, 0.5), (1.5, 0.5), (0.5, 1.5), (0.5, 2.5),
            ]),
        ),
        (
            B(1, 1, 4, 4),
            [(2, 0), (3, 0), (3, 5), (2, 5)],
            Ring([(3, 1), (3, 4)]),
        ),
        (
            B(0, 0, 1.5, 1.5),
            [(1, 1), (2, 1), (2, 2), (1, 2), (1, 1)],
            Ring([(1, 1), (1.5, 1), (1.5, 1.5), (1, 1.5), (1, 1)]),
        ),
    ],
)
def test_ring(bound, r, expected):
    assert ring(bound, r) == expected


SQUARE = [(1, 1), (2, 1), (2, 2), (1, 2), (1, 1)]


@pytest.mark.parametrize(
    "bound",
    [
        B(-1, -1, 0, 0),
        B(3, -1, 4, 0),
        B(3, 3, 4, 4),
        B(-1, 3, 0, 4),
        B(-1, -1, 0, 3),
        B(3, -1, 4, 3),
        B(-1, 3, 3, 3),
        B(-1, -1, 3, 0),
        B(-1, 3, 3, 4),
    ],
)
def test_ring_completely_outside(bound):
    assert ring(bound, SQUARE) is None


@pytest.mark.parametrize(
    "open_bound, expected",
    [
        (False, MultiLineString([[(1, 1), (2, 1), (2, 2), (2, 2)]])),
        (True, MultiLineString([[(1, 1), (2, 1)]])),
    ],
)
def test_multi_line_string(open_bound, expected):
    mls = MultiLineString([[(1, 1), (2, 1), (2, 2), (3, 3)]])
    assert multi_line_string(B(0, 0, 2, 2), mls, open_bound=open_bound) == expected


def test_multi_line_string_all_outside():
    mls = MultiLineString([[(5, 5), (6, 6)], [(7, 7), (8, 8)]])
    assert multi_line_string(B(0, 0, 2, 2), mls) is None


@pytest.mark.parametrize(
    "b1, b2, expected",
    [
        (B(0, 1, 3, 4), B(1, 2, 4, 5), B(1, 2, 3, 4)),
        (B(0, 1, 3, 4), B(1, 2, 2, 3), B(1, 2, 2, 3)),
        (B(0, 1, 3, 4), B(0, 1, 3, 4), B(0, 1, 3, 4)),
        (B(1, 1, 0, 0), B(0, 1, 3, 4), B(0, 1, 3, 4)),
    ],
)
def test_clip_bound(b1, b2, expected):
    assert clip_bound(b1, b2) == expected


@pytest.mark.parametrize(
    "b1, b2",
    [
        (B(0, 1, 3, 4), B(4, 5, 5, 6)),
        (B(1, 1, 0, 0), B(1, 1, 0, 0)),
    ],
)
def test_clip_bound_empty(b1, b2):
    assert clip_bound(b1, b2).is_empty()


def test_geometry_example():
    result = geometry(B(0, 0, 30, 30), LineString(CLIP_LINE_INPUT))
    assert result == CLIP_LINE_OUTPUT


UNIT = B(-1, -1, 1, 1)


@pytest.mark.parametrize(
    "g, expected",
    [
        (MultiPoint([(0, 0), (5, 5)]), Point(0, 0)),
        (
            MultiLineString([[(0, 0), (5, 5)], [(6, 6), (7, 7)]]),
            LineString([(0, 0), (1, 1)]),
        ),
        (
            MultiPolygon([
                [[(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]],
                [[(2, 2), (3, 2), (3, 3), (2, 3), (2, 2)]],
            ]),
            Polygon([[(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]]),
        ),
    ],
)
def test_geometry_collapses_single_member(g, expected):
    assert geometry(UNIT, g) == expected


SAMPLES = [
    Point(0.5, 0.5),
    MultiPoint([(0, 0), (3, 3)]),
    LineString([(-3, 0), (3, 0)]),
    MultiLineString([[(-3, 0), (3, 0)], [(0, -3), (0, 3)]]),
    Ring([(-2, -2), (2, -2), (2, 2), (-2, 2), (-2, -2)]),
    Polygon([[(-2, -2), (2, -2), (2, 2), (-2, 2), (-2, -2)]]),
    MultiPolygon([[[(0, 0), (3, 0), (3, 3), (0, 3), (0, 0)]]]),
    Collection([Point(0, 0), LineString([(-3, 0), (3, 0)])]),
    B(0, 0, 5, 5),
]


@pytest.mark.parametrize("g", SAMPLES)
def test_geometry_result_within_bound(g):
    result = geometry(UNIT, g)
    rb = result.bound()
    assert UNIT.contains(rb.min) and UNIT.contains(rb.max)


def test_geometry_none():
    assert geometry(UNIT, None) is None


def test_geometry_outside_bound():
    assert geometry(UNIT, Point(5, 5)) is None


def test_geometry_bound():
    assert geometry(UNIT, B(0, 0, 5, 5)) == B(0, 0, 1, 1)


def test_geometry_unsupported_type():
    with pytest.raises(TypeError):
        geometry(UNIT, "not a geometry")


def test_multi_point_filters():
    assert multi_point(UNIT, [(0, 0), (2, 2), (1, 1)]) == MultiPoint([(0, 0), (1, 1)])


def test_multi_point_none_inside():
    assert multi_point(UNIT, [(2, 2), (3, 3)]) is None


def test_polygon_drops_outside_inner_ring():
    p = Polygon([
        [(-2, -2), (2, -2), (2, 2), (-2, 2), (-2, -2)],
        [(1.5, 1.5), (1.8, 1.5), (1.8, 1.8), (1.5, 1.8), (1.5, 1.5)],
        [(0, 0), (0.5, 0), (0.5, 0.5), (0, 0.5), (0, 0)],
    ])
    result = polygon(UNIT, p)
    assert result == Polygon([
        [(-1, 1), (-1, -1), (1, -1), (1, 1), (-1, 1)],
        [(0, 0), (0.5, 0), (0.5, 0.5), (0, 0.5), (0, 0)],
    ])


def test_polygon_outer_outside():
    assert polygon(UNIT, [[(5, 5), (6, 5), (6, 6), (5, 6), (5, 5)]]) is None


def test_polygon_empty():
    assert polygon(UNIT, Polygon()) is None


def test_multi_polygon_all_outside():
    mp = MultiPolygon([[[(5, 5), (6, 5), (6, 6), (5, 6), (5, 5)]]])
    assert multi_polygon(UNIT, mp) is None


def test_collection_drops_outside_members():
    c = Collection([Point(0, 0), Point(5, 5), LineString([(0, 0), (0.5, 0.5)])])
    assert collection(UNIT, c) == Collection([Point(0, 0), LineString([(0, 0), (0.5, 0.5)])])


def test_collection_all_outside():
    assert collection(UNIT, Collection([Point(5, 5)])) is None