"""Clipping of geometries to a bounding box."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

from .geometry import (
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

_LEFT = 1
_RIGHT = 2
_BOTTOM = 4
_TOP = 8


def _points(seq: Iterable) -> List[Point]:
    return [Point(*p) for p in seq]


def _bit_code(b: Bound, p: Point) -> int:
    """Position of the point relative to the box; the boundary counts as inside.

    The codes are laid out as:
            left  mid  right
       top  1001  1000  1010
       mid  0001  0000  0010
    bottom  0101  0100  0110
    """
    code = 0
    if p.x < b.min.x:
        code |= _LEFT
    elif p.x > b.max.x:
        code |= _RIGHT

    if p.y < b.min.y:
        code |= _BOTTOM
    elif p.y > b.max.y:
        code |= _TOP

    return code


def _bit_code_open(b: Bound, p: Point) -> int:
    """Like the closed bit code, but the boundary counts as outside."""
    code = 0
    if p.x <= b.min.x:
        code |= _LEFT
    elif p.x >= b.max.x:
        code |= _RIGHT

    if p.y <= b.min.y:
        code |= _BOTTOM
    elif p.y >= b.max.y:
        code |= _TOP

    return code


def _intersect(box: Bound, edge: int, a: Point, b: Point) -> Point:
    """Intersect a segment with one of the four lines making up the box."""
    if edge & _TOP:
        return Point(a.x + (b.x - a.x) * (box.max.y - a.y) / (b.y - a.y), box.max.y)
    if edge & _BOTTOM:
        return Point(a.x + (b.x - a.x) * (box.min.y - a.y) / (b.y - a.y), box.min.y)
    if edge & _RIGHT:
        return Point(box.max.x, a.y + (b.y - a.y) * (box.max.x - a.x) / (b.x - a.x))
    if edge & _LEFT:
        return Point(box.min.x, a.y + (b.y - a.y) * (box.min.x - a.x) / (b.x - a.x))
    raise ValueError("segment does not cross any edge of the box")


def _line(box: Bound, points: Sequence[Point], open_bound: bool) -> MultiLineString:
    """Cut a line into the pieces that lie within the box."""
    if not points:
        return MultiLineString()

    code_of: Callable[[Bound, Point], int] = _bit_code_open if open_bound else _bit_code
    out: List[List[Point]] = []
    current = 0

    def push(p: Point) -> None:
        if current >= len(out):
            out.append([])
        out[current].append(p)

    last = len(points) - 1
    code_a = code_of(box, points[0])
    for i, (a, b) in enumerate(zip(points, points[1:]), start=1):
        code_b = code_of(box, b)
        end_code = code_b

        # A segment may cross the box more than once, e.g. across a corner.
        while True:
            if code_a | code_b == 0:
                push(a)
                if code_b != end_code:
                    # the segment left the box
                    push(b)
                    if i < last:
                        current += 1
                elif i == last:
                    push(b)
                break
            if code_a & code_b:
                # both on the same outer side, nothing of it is kept
                break
            if code_a:
                a = _intersect(box, code_a, a, b)
                code_a = _bit_code(box, a)
            else:
                b = _intersect(box, code_b, a, b)
                code_b = _bit_code(box, b)

        code_a = end_code

    return MultiLineString(out)


def _ring(box: Bound, points: List[Point]) -> Optional[Ring]:
    """Clip a ring against each side of the box in turn."""
    if not points:
        return Ring()

    init_closed = points[0] == points[-1]

    for edge in (_LEFT, _RIGHT, _BOTTOM, _TOP):
        out: List[Point] = []
        # a ring that is not closed is not implicitly closed
        prev = points[-1] if init_closed else points[0]
        prev_inside = not (_bit_code(box, prev) & edge)

        for p in points:
            inside = not (_bit_code(box, p) & edge)
            if inside != prev_inside:
                out.append(_intersect(box, edge, prev, p))
            if inside:
                out.append(p)
            prev, prev_inside = p, inside

        if not out:
            return None
        points = out

    if init_closed and points[0] != points[-1]:
        points.append(points[0])

    return Ring(points)


def geometry(b: Bound, g):
    """Clip any geometry to the bound, returning None if nothing is left.

    Multi geometries with a single remaining member collapse to that member.
    """
    if g is None:
        return None

    kinds = (
        Point, MultiPoint, LineString, MultiLineString, Ring,
        Polygon, MultiPolygon, Collection, Bound,
    )
    if not isinstance(g, kinds):
        raise TypeError(f"geometry type not supported: {type(g).__name__}")

    if not b.intersects(g.bound()):
        return None

    if isinstance(g, Point):
        return g
    if isinstance(g, Bound):
        result = clip_bound(b, g)
        return None if result.is_empty() else result
    if isinstance(g, Ring):
        return ring(b, g)
    if isinstance(g, Polygon):
        return polygon(b, g)

    if isinstance(g, MultiPoint):
        parts = multi_point(b, g)
    elif isinstance(g, LineString):
        parts = line_string(b, g)
    elif isinstance(g, MultiLineString):
        parts = multi_line_string(b, g)
    elif isinstance(g, MultiPolygon):
        parts = multi_polygon(b, g)
    else:
        parts = collection(b, g)

    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    return parts


def multi_point(b: Bound, mp) -> Optional[MultiPoint]:
    """Keep the points within the bound; None if there are none."""
    result = MultiPoint(p for p in _points(mp) if b.contains(p))
    return result or None


def line_string(b: Bound, ls, open_bound: bool = False) -> Optional[MultiLineString]:
    """Clip the line string to the bound.

    With open_bound, lines along the sides are dropped and a point on the
    boundary splits the line.
    """
    result = _line(b, _points(ls), open_bound)
    return result or None


def multi_line_string(b: Bound, mls, open_bound: bool = False) -> Optional[MultiLineString]:
    """Clip every line string and return all the pieces together."""
    result = MultiLineString()
    for ls in mls:
        result.extend(_line(b, _points(ls), open_bound))
    return result or None


def ring(b: Bound, r) -> Optional[Ring]:
    """Clip the ring to the bound; None if nothing is left."""
    result = _ring(b, _points(r))
    return result or None


def polygon(b: Bound, p) -> Optional[Polygon]:
    """Clip the polygon, dropping inner rings that fall outside the bound."""
    if not p:
        return None

    outer = ring(b, p[0])
    if outer is None:
        return None

    result = Polygon([outer])
    for inner in p[1:]:
        clipped = ring(b, inner)
        if clipped is not None:
            result.append(clipped)
    return result


def multi_polygon(b: Bound, mp) -> Optional[MultiPolygon]:
    """Clip each polygon, dropping those outside the bound."""
    result = MultiPolygon()
    for p in mp:
        clipped = polygon(b, p)
        if clipped is not None:
            result.append(clipped)
    return result or None


def collection(b: Bound, c) -> Optional[Collection]:
    """Clip each member, dropping those outside the bound."""
    result = Collection()
    for g in c:
        clipped = geometry(b, g)
        if clipped is not None:
            result.append(clipped)
    return result or None


def clip_bound(b: Bound, bound: Bound) -> Bound:
    """Intersect two bounds; the result may be empty."""
    if b.is_empty():
        return bound
    if bound.is_empty():
        return b

    return Bound(
        Point(max(b.min.x, bound.min.x), max(b.min.y, bound.min.y)),
        Point(min(b.max.x, bound.max.x), min(b.max.y, bound.max.y)),
    )