"""Planar geometry types, bounding boxes and deep copying."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Iterable, NamedTuple, Optional, Union

EARTH_RADIUS = 6378137.0
"""Radius of the earth in meters, matching WGS84 Web Mercator (EPSG:3857)."""

DEFAULT_ROUNDING_FACTOR = 1e6
"""Default rounding factor: six decimal places."""


class Orientation(IntEnum):
    """Winding order of the points in a polygon or closed ring."""

    CCW = 1
    CW = -1


class Point(NamedTuple):
    """A point in the plane."""

    x: float = 0.0
    y: float = 0.0

    def bound(self) -> "Bound":
        """Return the degenerate bound that holds only this point."""
        return Bound(self, self)

    def dimensions(self) -> int:
        """A point is a 0d object."""
        return 0

    def geojson_type(self) -> str:
        """Return the GeoJSON type name."""
        return "Point"

    def clone(self) -> "Point":
        """Points are immutable, so the copy is the point itself."""
        return self


def _as_point(value) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(x, y)


class _GeometryList(list):
    """A list of geometry parts that keeps its type on slicing and comparison."""

    __slots__ = ()
    __hash__ = None  # type: ignore[assignment]

    # Converts each item on construction; None keeps items as given.
    _coerce: Optional[Callable] = None

    def __init__(self, items: Iterable = ()) -> None:
        coerce = self._coerce
        super().__init__(items if coerce is None else map(coerce, items))

    def __getitem__(self, index):
        result = super().__getitem__(index)
        if isinstance(index, slice):
            return type(self)(result)
        return result

    def __eq__(self, other) -> bool:
        if isinstance(other, _GeometryList) and type(other) is not type(self):
            return False
        return list.__eq__(self, other)

    def __ne__(self, other) -> bool:
        return not self.__eq__(other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list.__repr__(self)})"


class _PointSequence(_GeometryList):
    __slots__ = ()
    _coerce = staticmethod(_as_point)


def _points_bound(points: Iterable[Point]) -> "Bound":
    points = list(points)
    if not points:
        return EMPTY_BOUND
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return Bound(Point(min(xs), min(ys)), Point(max(xs), max(ys)))


class MultiPoint(_PointSequence):
    """A set of points."""

    __slots__ = ()

    def bound(self) -> "Bound":
        """Return the smallest bound holding every point."""
        return _points_bound(self)

    def dimensions(self) -> int:
        return 0

    def geojson_type(self) -> str:
        return "MultiPoint"

    def clone(self) -> "MultiPoint":
        """Return a copy of the points."""
        return MultiPoint(self)


class LineString(_PointSequence):
    """A path through a sequence of points."""

    __slots__ = ()

    def bound(self) -> "Bound":
        """Return the smallest bound holding every point."""
        return _points_bound(self)

    def dimensions(self) -> int:
        return 1

    def geojson_type(self) -> str:
        return "LineString"

    def clone(self) -> "LineString":
        """Return a copy of the line."""
        return LineString(self)


class Ring(_PointSequence):
    """A closed loop of points bounding an area."""

    __slots__ = ()

    def bound(self) -> "Bound":
        """Return the smallest bound holding every point."""
        return _points_bound(self)

    def dimensions(self) -> int:
        return 2

    def geojson_type(self) -> str:
        return "Polygon"

    def clone(self) -> "Ring":
        """Return a copy of the ring."""
        return Ring(self)

    def closed(self) -> bool:
        """True if the first and last points are equal."""
        return len(self) != 0 and self[0] == self[-1]


def _union_of(bounds: Iterable["Bound"]) -> "Bound":
    result: Optional[Bound] = None
    for b in bounds:
        result = b if result is None else result.union(b)
    return EMPTY_BOUND if result is None else result


def _as_line_string(value) -> LineString:
    return value if isinstance(value, LineString) else LineString(value)


def _as_ring(value) -> Ring:
    return value if isinstance(value, Ring) else Ring(value)


class MultiLineString(_GeometryList):
    """A set of line strings."""

    __slots__ = ()
    _coerce = staticmethod(_as_line_string)

    def bound(self) -> "Bound":
        return _union_of(ls.bound() for ls in self)

    def dimensions(self) -> int:
        return 1

    def geojson_type(self) -> str:
        return "MultiLineString"

    def clone(self) -> "MultiLineString":
        return MultiLineString(ls.clone() for ls in self)


class Polygon(_GeometryList):
    """An outer ring followed by any number of holes."""

    __slots__ = ()
    _coerce = staticmethod(_as_ring)

    def bound(self) -> "Bound":
        if not self:
            return EMPTY_BOUND
        return self[0].bound()

    def dimensions(self) -> int:
        return 2

    def geojson_type(self) -> str:
        return "Polygon"

    def clone(self) -> "Polygon":
        return Polygon(r.clone() for r in self)


def _as_polygon(value) -> Polygon:
    return value if isinstance(value, Polygon) else Polygon(value)


class MultiPolygon(_GeometryList):
    """A set of polygons."""

    __slots__ = ()
    _coerce = staticmethod(_as_polygon)

    def bound(self) -> "Bound":
        return _union_of(p.bound() for p in self)

    def dimensions(self) -> int:
        return 2

    def geojson_type(self) -> str:
        return "MultiPolygon"

    def clone(self) -> "MultiPolygon":
        return MultiPolygon(p.clone() for p in self)


class Collection(_GeometryList):
    """A heterogeneous collection of geometries."""

    __slots__ = ()

    def bound(self) -> "Bound":
        return _union_of(g.bound() for g in self if g is not None)

    def dimensions(self) -> int:
        """The largest dimension of the members, -1 when empty."""
        return max((g.dimensions() for g in self if g is not None), default=-1)

    def geojson_type(self) -> str:
        return "GeometryCollection"

    def clone(self) -> "Collection":
        return Collection(clone(g) for g in self)


@dataclass(frozen=True)
class Bound:
    """A closed axis-aligned rectangle."""

    min: Point = field(default_factory=Point)
    max: Point = field(default_factory=Point)

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", _as_point(self.min))
        object.__setattr__(self, "max", _as_point(self.max))

    def geojson_type(self) -> str:
        return "Polygon"

    def dimensions(self) -> int:
        return 2

    def to_polygon(self) -> Polygon:
        """Return the bound as a single-ring polygon."""
        return Polygon([self.to_ring()])

    def to_ring(self) -> Ring:
        """Return the boundary of the box as a counter-clockwise ring."""
        return Ring(
            [
                self.min,
                Point(self.max.x, self.min.y),
                self.max,
                Point(self.min.x, self.max.y),
                self.min,
            ]
        )

    def extend(self, point) -> "Bound":
        """Return the bound grown to include the point."""
        point = _as_point(point)
        if self.contains(point):
            return self
        return Bound(
            Point(min(self.min.x, point.x), min(self.min.y, point.y)),
            Point(max(self.max.x, point.x), max(self.max.y, point.y)),
        )

    def union(self, other: "Bound") -> "Bound":
        """Return the bound grown to hold the other bound too."""
        if other.is_empty():
            return self
        return (
            self.extend(other.min)
            .extend(other.max)
            .extend(other.left_top())
            .extend(other.right_bottom())
        )

    def contains(self, point) -> bool:
        """True if the point is inside or on the boundary."""
        x, y = point
        if y < self.min.y or self.max.y < y:
            return False
        if x < self.min.x or self.max.x < x:
            return False
        return True

    def intersects(self, other: "Bound") -> bool:
        """True if the bounds overlap or touch."""
        return not (
            self.max.x < other.min.x
            or self.min.x > other.max.x
            or self.max.y < other.min.y
            or self.min.y > other.max.y
        )

    def pad(self, d: float) -> "Bound":
        """Return the bound extended by d in every direction."""
        return Bound(
            Point(self.min.x - d, self.min.y - d),
            Point(self.max.x + d, self.max.y + d),
        )

    def center(self) -> Point:
        return Point((self.min.x + self.max.x) / 2.0, (self.min.y + self.max.y) / 2.0)

    def top(self) -> float:
        return self.max.y

    def bottom(self) -> float:
        return self.min.y

    def right(self) -> float:
        return self.max.x

    def left(self) -> float:
        return self.min.x

    def left_top(self) -> Point:
        return Point(self.left(), self.top())

    def right_bottom(self) -> Point:
        return Point(self.right(), self.bottom())

    def is_empty(self) -> bool:
        """True if the bound is malformed, with min past max on an axis."""
        return self.min.x > self.max.x or self.min.y > self.max.y

    def is_zero(self) -> bool:
        """True if both corners are the origin."""
        return self.min == Point() and self.max == Point()

    def bound(self) -> "Bound":
        return self

    def clone(self) -> "Bound":
        return self


EMPTY_BOUND = Bound(Point(1.0, 1.0), Point(-1.0, -1.0))

Geometry = Union[
    Point, MultiPoint, LineString, MultiLineString, Ring, Polygon, MultiPolygon, Collection, Bound
]

DistanceFunc = Callable[[Point, Point], float]
Projection = Callable[[Point], Point]

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


def clone(g):
    """Return a deep copy of the geometry; None stays None."""
    if g is None:
        return None
    if not isinstance(g, _GEOMETRY_TYPES):
        raise TypeError(f"geometry type not supported: {type(g).__name__}")
    return g.clone()