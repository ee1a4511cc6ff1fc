"""Clipping of areas to a bounding box that keeps rings well formed.

Rings cut by the box are rejoined by walking around the box boundary in the
requested orientation, so the result is made of simple, closed polygons.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from . import clip as _clip
from .clip import _bit_code_open
from .geometry import (
    Bound,
    Collection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Orientation,
    Point,
    Polygon,
    Ring,
)

_NOT_ON_SIDE = 0xFF

# Codes of the regions around the box:
#         left  mid  right
#    top     9     8    10
#    mid     1     0     2
# bottom     5     4     6
# For each region, the next one when walking around the box.
_NEXTS = {
    Orientation.CW: (-1, 9, 6, -1, 5, 1, 4, -1, 10, 8, 2),
    Orientation.CCW: (-1, 5, 10, -1, 6, 4, 2, -1, 9, 1, 8),
}

_GEOMETRY_TYPES = (
    Point,
    MultiPoint,
    LineString,
    MultiLineString,
    Ring,
    Polygon,
    MultiPolygon,
    Collection,
    Bound,
)


def _point_for(b: Bound, code: int) -> Point:
    """A representative point on the side or corner of the given region."""
    mid_x = (b.max.x + b.min.x) / 2
    mid_y = (b.max.y + b.min.y) / 2
    points = {
        1: Point(b.min.x, mid_y),
        2: Point(b.max.x, mid_y),
        4: Point(mid_x, b.min.y),
        5: Point(b.min.x, b.min.y),
        6: Point(b.max.x, b.min.y),
        8: Point(mid_x, b.max.y),
        9: Point(b.min.x, b.max.y),
        10: Point(b.max.x, b.max.y),
    }
    try:
        return points[code]
    except KeyError:
        raise ValueError(f"invalid region code: {code}") from None


def _point_side(b: Bound, p: Point) -> int:
    """Side of the box the point lies on.

         4
        +-+
      1 | | 3
        +-+
         2
    """
    if p.y == b.max.y:
        return 4
    if p.y == b.min.y:
        return 2
    if p.x == b.max.x:
        return 3
    if p.x == b.min.x:
        return 1
    return _NOT_ON_SIDE


@dataclass(eq=False)
class _Endpoint:
    point: Point
    start: bool
    side: int
    index: int
    used: bool = False
    partner: Optional["_Endpoint"] = field(default=None, repr=False)
    position: int = 0

    def before(self, lines: Sequence[Sequence[Point]]) -> Point:
        """The point next to this endpoint along its line."""
        line = lines[self.index]
        return line[0] if self.start else line[-2]


def _less(a: _Endpoint, b: _Endpoint, lines) -> bool:
    """Order endpoints around the box: by side, then by position on it.

    Endpoints at the same place are ordered by the neighbouring point, so
    lines that are "above" come first.
    """
    if a.side != b.side:
        return a.side < b.side

    if a.side == 1:
        if a.point.y != b.point.y:
            return a.point.y >= b.point.y
        return a.before(lines).y >= b.before(lines).y
    if a.side == 2:
        if a.point.x != b.point.x:
            return a.point.x < b.point.x
        return a.before(lines).x < b.before(lines).x
    if a.side == 3:
        if a.point.y != b.point.y:
            return a.point.y < b.point.y
        return a.before(lines).y < b.before(lines).y
    if a.side == 4:
        if a.point.x != b.point.x:
            return a.point.x >= b.point.x
        return a.before(lines).x >= b.before(lines).x

    raise ValueError("endpoint is not on the boundary of the bound")


def _sort_endpoints(endpoints: List[_Endpoint], lines, orientation) -> None:
    """Sort in place; counter-clockwise order for CCW, reversed otherwise.

    An insertion sort is used because equal endpoints compare as "less" in
    both directions and the resulting order is part of the algorithm.
    """
    if orientation == Orientation.CCW:
        def less(a, b):
            return _less(a, b, lines)
    else:
        def less(a, b):
            return _less(b, a, lines)

    for i in range(1, len(endpoints)):
        j = i
        while j > 0 and less(endpoints[j], endpoints[j - 1]):
            endpoints[j], endpoints[j - 1] = endpoints[j - 1], endpoints[j]
            j -= 1


def _around_bound(box: Bound, points, orientation) -> Optional[Ring]:
    """Join the endpoints of a line by wrapping around the box.

    Both endpoints must lie outside the open box. Returns a new ring.
    """
    if orientation not in (Orientation.CCW, Orientation.CW):
        raise ValueError("invalid orientation")
    if not points:
        return None

    out = [Point(*p) for p in points]
    nexts = _NEXTS[Orientation(orientation)]

    first, last = out[0], out[-1]
    target = _bit_code_open(box, first)
    current = _bit_code_open(box, last)
    if target == 0 or current == 0:
        raise ValueError("endpoints must be outside bound")

    if current == target:
        # Both endpoints in the same region: their order decides whether
        # they are simply connected or the line goes all the way around.
        endpoints = [
            _Endpoint(first, True, _point_side(box, first), 0),
            _Endpoint(last, False, _point_side(box, last), 0),
        ]
        _sort_endpoints(endpoints, [out], orientation)
        if not endpoints[0].start:
            if first != out[-1]:
                out.append(first)
            return Ring(out)

    current = nexts[current]
    while current != target:
        out.append(_point_for(box, current))
        current = nexts[current]

    out.append(first)
    return Ring(out)


def _join_sections(box: Bound, out: List[List[Point]]) -> None:
    """Rejoin pieces of a closed ring whose ends meet inside the box."""
    i = 0
    while i < len(out):
        end = out[i][-1]
        if end.x == box.min.x or box.max.x == end.x or end.y == box.min.y or box.max.y == end.y:
            # only endpoints strictly inside the box are joined
            i += 1
            continue

        j = 0
        while j < len(out):
            if i != j and out[j][0] == end:
                out[i].extend(out[j][1:])
                i -= 1
                out[j] = out[-1]
                out.pop()
            j += 1
        i += 1


def _clip_rings(box: Bound, rings) -> Tuple[List[List[Point]], List[Ring]]:
    """Clip rings to the box.

    Returns the open pieces with endpoints on the boundary and the rings
    lying wholly inside the box.
    """
    pieces: List[List[Point]] = []
    for r in rings:
        pts = [Point(*p) for p in r]
        if not pts:
            continue
        if pts[0] != pts[-1] and (box.contains(pts[0]) or box.contains(pts[-1])):
            pts.append(pts[0])

        clipped = _clip.line_string(box, pts, open_bound=True)
        if not clipped:
            continue

        out = [list(ls) for ls in clipped]
        if pts[0] == pts[-1]:
            _join_sections(box, out)
        pieces.extend(out)

    open_lines: List[List[Point]] = []
    closed: List[Ring] = []
    for ls in pieces:
        if ls[0] == ls[-1] and _point_side(box, ls[0]) == _NOT_ON_SIDE:
            closed.append(Ring(ls))
        else:
            open_lines.append(ls)
    return open_lines, closed


def _smart_wrap(box: Bound, lines, orientation) -> MultiPolygon:
    """Connect open lines with endpoints on the boundary into polygons."""
    lines = [[Point(*p) for p in ls] for ls in lines]

    points: List[_Endpoint] = []
    for index, line in enumerate(lines):
        start = _Endpoint(line[0], True, _point_side(box, line[0]), index)
        end = _Endpoint(line[-1], False, _point_side(box, line[-1]), index)
        start.partner, end.partner = end, start
        points.extend((start, end))

    _sort_endpoints(points, lines, orientation)
    for position, ep in enumerate(points):
        ep.position = position

    result = MultiPolygon()
    current: List[Point] = []
    count = len(points)
    i = 0
    while i < 2 * count:
        ep = points[i % count]
        if ep.used:
            i += 1
            continue

        if not ep.start:
            if not current:
                current = list(lines[ep.index])
                ep.used = True
            i += 1
            continue

        if not current:
            i += 1
            continue
        ep.used = True

        # the previous endpoint was an end, connect it to this start
        if ep.point == current[-1]:
            wrap: List[Point] = [Point(), Point()]
        else:
            wrap = _around_bound(box, [ep.point, current[-1]], orientation)

        if ep.point == current[0]:
            current.extend(wrap[2:])
            result.append(Polygon([Ring(current)]))
            current = []
            i = 0  # start over looking for unused endpoints
            continue

        if len(wrap) > 2:
            current.extend(wrap[2:-1])
        current.extend(lines[ep.index])
        ep.partner.used = True
        i = ep.partner.position + 1

    return result


def _polygon_contains(outer: Sequence[Point], r: Sequence[Point]) -> bool:
    """True if any point of the ring is inside the outer ring."""
    if not outer:
        return False
    previous = [outer[-1], *outer[:-1]]
    for x, y in r:
        inside = False
        for (xi, yi), (xj, yj) in zip(outer, previous):
            if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
                inside = not inside
        if inside:
            return True
    return False


def _add_to_multi_polygon(mp: MultiPolygon, r: Ring) -> MultiPolygon:
    """Add the ring as a hole of the first polygon that holds it."""
    for p in mp:
        if _polygon_contains(p[0], r):
            p.append(r)
            break
    return mp


def geometry(box: Bound, g, orientation):
    """Clip the geometry to the box, wrapping areas along the boundary.

    Geometries that are not areas are clipped plainly. Rings that are not
    closed and have an endpoint in the box are implicitly closed. A single
    remaining polygon or member is returned by itself; None if nothing is left.
    """
    if g is None:
        return None
    if not isinstance(g, _GEOMETRY_TYPES):
        raise TypeError(f"geometry type not supported: {type(g).__name__}")

    if g.dimensions() != 2 or isinstance(g, Bound):
        return _clip.geometry(box, g)

    if isinstance(g, Collection):
        result = Collection()
        for member in g:
            clipped = geometry(box, member, orientation)
            if clipped is not None:
                result.append(clipped)
        if len(result) == 1:
            return result[0]
        return result or None

    if isinstance(g, Ring):
        mp = ring(box, g, orientation)
    elif isinstance(g, Polygon):
        mp = polygon(box, g, orientation)
    else:
        mp = multi_polygon(box, g, orientation)

    if not mp:
        return None
    if len(mp) == 1:
        return mp[0]
    return mp


def ring(box: Bound, r, orientation) -> Optional[MultiPolygon]:
    """Clip a ring to the box; the result may be several polygons."""
    if not r:
        return None

    open_lines, closed = _clip_rings(box, [r])
    if not open_lines:
        if not closed:
            return None  # everything outside the box
        return MultiPolygon([Polygon([r])])  # everything inside the box

    return _smart_wrap(box, open_lines, orientation) or None


def polygon(box: Bound, p, orientation) -> Optional[MultiPolygon]:
    """Clip a polygon to the box; the result may be several polygons."""
    if not p:
        return None

    open_lines, closed = _clip_rings(box, p)
    if not open_lines:
        if not closed:
            return None
        return MultiPolygon([p])

    result = _smart_wrap(box, open_lines, orientation)
    if len(result) == 1:
        result[0].extend(closed)
    else:
        for r in closed:
            _add_to_multi_polygon(result, r)
    return result or None


def multi_polygon(box: Bound, mp, orientation) -> Optional[MultiPolygon]:
    """Clip every polygon to the box and connect what touches the edges."""
    if not mp:
        return None
    if any(len(p) == 0 for p in mp):
        raise ValueError("polygon has no rings")

    outers, closed_outers = _clip_rings(box, [p[0] for p in mp])
    if not outers:
        if not closed_outers:
            return None
        return MultiPolygon(mp)

    inner_rings = [r for p in mp for r in p[1:]]
    inners, closed_inners = _clip_rings(box, inner_rings)

    result = _smart_wrap(box, outers + inners, orientation)
    for outer in closed_outers:
        result.append(Polygon([outer]))
    for inner in closed_inners:
        _add_to_multi_polygon(result, inner)
    return result or None