# geobox

Planar geometry types and the clipping of geometry to a bounding box. The
package has no dependencies outside the standard library.

## Geometry types

`geobox.geometry` defines these types:

- `Point`: a named tuple `(x, y)`.
- `MultiPoint`, `LineString` and `Ring`: lists of points. A plain `(x, y)`
  tuple given as an item is turned into a `Point`.
- `MultiLineString`, `Polygon` and `MultiPolygon`: lists of line strings,
  rings and polygons. A `Polygon` is its outer ring followed by its holes.
- `Collection`: a list of any geometries.
- `Bound`: a frozen dataclass with `min` and `max` corners. It describes a
  closed, axis-aligned box.

Every type has `bound()`, `dimensions()`, `geojson_type()` and `clone()`.
`Ring.closed()` is true when the first and last points are equal. The
list-based types keep their type when sliced. They compare equal only to a
list of the same type or to a plain list.

`Bound` has these methods: `extend(point)`, `union(other)`,
`contains(point)`, `intersects(other)`, `pad(d)`, `center()`, `top()`,
`bottom()`, `left()`, `right()`, `left_top()`, `right_bottom()`,
`to_ring()`, which returns a counter-clockwise ring, `to_polygon()`,
`is_empty()` and `is_zero()`. `contains` and `intersects` count the boundary
as inside. Each of these methods returns a new bound and leaves the
original unchanged.

The module also defines:

- `Orientation`: an enum with the members `CCW` (1) and `CW` (-1).
- `clone(g)`: returns a deep copy of any geometry. It returns `None` for
  `None` and raises `TypeError` for a type it does not know.
- `EMPTY_BOUND`: a bound whose `min` lies past its `max`, so it is empty.
- `EARTH_RADIUS`: the radius of the earth in meters.
- `DEFAULT_ROUNDING_FACTOR`: the default rounding factor, `1e6`.

```python
from geobox.geometry import Bound, Point

box = Bound(Point(0, 0), Point(3, 5))
box.extend(Point(6, -1)) == Bound(Point(0, -1), Point(6, 5))   # True
box.contains(Point(2, 1))                                      # True
box.pad(1) == Bound(Point(-1, -1), Point(4, 6))                # True
```

## Clipping

`geobox.clip` clips geometry to a `Bound`. Lines are cut segment by segment
against the box. Rings are clipped against each side of the box in turn. A
clipped ring that was closed is closed again.

- `geometry(b, g)`: clips any geometry type. It returns `None` when nothing
  is left. A multi geometry or collection with one member left is returned
  as that member.
- `multi_point(b, mp)`: keeps the points that lie in the box.
- `line_string(b, ls, open_bound=False)`: returns a `MultiLineString` of the
  pieces inside the box.
- `multi_line_string(b, mls, open_bound=False)`: clips every line and
  returns all the pieces in one `MultiLineString`.
- `ring(b, r)`: clips a ring.
- `polygon(b, p)`: clips a polygon and drops the holes that fall outside
  the box.
- `multi_polygon(b, mp)`: clips every polygon and drops those that fall
  outside the box.
- `collection(b, c)`: clips every member of a collection.
- `clip_bound(b, bound)`: returns the intersection of two bounds. The
  result may be empty. If either bound is empty, the other is returned.

Apart from `clip_bound`, these functions return `None` when nothing is
left. With `open_bound=True` the boundary counts as outside the box. Pieces
that run along a side are dropped, and a line that touches the boundary is
split there.

```python
from geobox import clip
from geobox.geometry import Bound, LineString, Point

box = Bound(Point(0, 0), Point(30, 30))
line = LineString([(-10, 10), (10, 10), (10, -10)])
clip.geometry(box, line)   # LineString through (0, 10), (10, 10), (10, 0)
```

## Smart clipping

`geobox.smartclip` clips areas so that the pieces are simple, closed
polygons. Where a ring is cut by the box, its pieces are joined again by
running along the box boundary in the `Orientation` you give. A ring that
is not closed and has an endpoint inside the box is closed first.

- `ring(box, r, orientation)`, `polygon(box, p, orientation)` and
  `multi_polygon(box, mp, orientation)`: each returns a `MultiPolygon`, or
  `None` when nothing is left. A hole that lies wholly inside the box is
  kept in the polygon that contains it.
- `geometry(box, g, orientation)`: handles rings, polygons, multipolygons
  and collections. It passes points, lines and bounds to `clip.geometry`.
  A single polygon or collection member that is left is returned by itself.

An orientation other than `CCW` or `CW` raises `ValueError`.
`multi_polygon` also raises `ValueError` when one of its polygons has no
rings.

```python
from geobox import smartclip
from geobox.geometry import Bound, Orientation, Point, Ring

box = Bound(Point(1, 1), Point(6, 6))
r = Ring([(0, 2), (2, 2), (2, 3), (0, 3)])
smartclip.ring(box, r, Orientation.CCW)
# one polygon: (1, 2), (2, 2), (2, 3), (1, 3), (1, 2)
```

## What the package does not do

The package has no reading or writing of data formats such as WKB, GeoJSON
or database values. It has no distance, area or projection functions. It
has no command-line tool.

## Tests

```
pip install -e ".[test]"
pytest
```