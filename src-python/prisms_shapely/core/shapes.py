"""
Copyright 2026 prisms-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

===============================================================================
SHAPES
===============================================================================
Immutable 2D outlines of the refracting bodies.

Every shape answers the same questions:
- get_intersections(ray): all boundary crossings in front of the ray
- contains_point(p): is p inside the body
- translated_instance(dx, dy) / rotated_instance(angle, pivot): new shapes
- rotation_center(): pivot used when the user rotates the body
- reference_point(): corner used to anchor the rotation handle (or None)
- to_shapely(): the outline as a Shapely polygon (arcs sampled)

Boundaries are a list of straight edges plus at most one circular arc. All
variants route their boundary through get_intersections(), the only place
where normals are oriented against the incoming ray.

Classes:
- Polygon: closed chain of straight edges
- Circle: full circle
- SemiCircle: diameter edge plus half-circle arc
- DivergingLens: three rectangle edges plus an inward-bulging half arc
===============================================================================
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

from shapely.geometry import Point as ShapelyPoint, Polygon as ShapelyPolygon

from .geometry import Arc, Line, Point, geometry
from .ray import Intersection

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry
    from .ray import Ray


# Vertices used to approximate an arc in to_shapely()
ARC_QUAD_SEGMENTS = 32

# Below this absolute signed area a polygon has no usable centroid
_MIN_CENTROID_AREA = 1e-300


def get_intersections(
    edges: Sequence[Line],
    arc: Optional[Arc],
    center: Optional[Point],
    ray: 'Ray'
) -> List[Intersection]:
    """
    Intersect a ray with a boundary made of straight edges and one arc.

    The geometric normal of an edge is its direction rotated by +90 degrees;
    the normal of an arc point is the radius vector from ``center``. Either
    is negated when it points along the ray, so that every returned normal
    satisfies dot(unit_normal, ray.direction) <= 0.

    Args:
        edges: Straight boundary segments, in boundary order.
        arc: Curved boundary piece, or None.
        center: Center used for arc normals (default: the arc's center).
        ray: Anything with ``tail`` and ``direction`` points.

    Returns:
        Intersections in edge order followed by arc hits (nearest first).
        Zero-length edges are skipped.
    """
    intersections: List[Intersection] = []

    for edge in edges:
        hit = geometry.ray_segment_intersection(ray.tail, ray.direction, edge)
        if hit is None:
            continue
        normal = geometry.normalize_vec(
            geometry.rotate_vec(geometry.subtract(edge.p2, edge.p1), math.pi / 2)
        )
        if normal is None:
            continue
        intersections.append(Intersection(hit[1], _facing(normal, ray.direction)))

    if arc is not None:
        if center is None:
            center = arc.center
        hits = geometry.ray_circle_intersections(ray.tail, ray.direction, arc.center, arc.radius)
        for _, point in hits:
            if not arc.contains_angle(geometry.angle_of(geometry.subtract(point, arc.center))):
                continue
            normal = geometry.normalize_vec(geometry.subtract(point, center))
            if normal is None:
                continue
            intersections.append(Intersection(point, _facing(normal, ray.direction)))

    return intersections


def _facing(normal: Point, direction: Point) -> Point:
    # Orient the normal against the incoming ray
    if geometry.dot(normal, direction) > 0:
        return geometry.scale(normal, -1)
    return normal


def shoelace_centroid(points: Sequence[Point]) -> Point:
    """
    Area-weighted centroid of a closed polygon.

    Uses the signed area as-is, so the result is the same for either
    winding. A polygon with (numerically) zero area falls back to the mean
    of its vertices.

    Args:
        points: Polygon vertices in boundary order.

    Returns:
        The centroid.
    """
    cx = 0.0
    cy = 0.0
    area = 0.0
    count = len(points)
    for i in range(count):
        p = points[i]
        q = points[(i + 1) % count]
        n = p.x * q.y - q.x * p.y
        area += n
        cx += (p.x + q.x) * n
        cy += (p.y + q.y) * n
    area *= 0.5

    if abs(area) < _MIN_CENTROID_AREA or not math.isfinite(area):
        return Point(
            sum(p.x for p in points) / count,
            sum(p.y for p in points) / count
        )

    f = 1.0 / (6.0 * area)
    return Point(cx * f, cy * f)


def _as_points(points: Sequence) -> Tuple[Point, ...]:
    return tuple(p if isinstance(p, Point) else Point(float(p[0]), float(p[1])) for p in points)


def _check_reference_index(index: int, count: int) -> None:
    if not 0 <= index < count:
        raise ValueError(
            f"reference_point_index must be in [0, {count - 1}], got {index}"
        )


class Shape:
    """
    Interface shared by every shape variant.

    Subclasses are immutable: the transforms return new instances.
    """

    kind = 'shape'

    def translated_instance(self, dx: float, dy: float) -> 'Shape':
        raise NotImplementedError("Subclasses must implement translated_instance()")

    def rotated_instance(self, angle: float, pivot: Point) -> 'Shape':
        raise NotImplementedError("Subclasses must implement rotated_instance()")

    def contains_point(self, point: Point) -> bool:
        raise NotImplementedError("Subclasses must implement contains_point()")

    def get_intersections(self, ray: 'Ray') -> List[Intersection]:
        edges, arc, center = self.boundary()
        return get_intersections(edges, arc, center, ray)

    def boundary(self) -> Tuple[List[Line], Optional[Arc], Optional[Point]]:
        """Return (edges, arc, arc_center) describing the outline."""
        raise NotImplementedError("Subclasses must implement boundary()")

    def rotation_center(self) -> Point:
        raise NotImplementedError("Subclasses must implement rotation_center()")

    def reference_point(self) -> Optional[Point]:
        return None

    def to_shapely(self) -> 'BaseGeometry':
        raise NotImplementedError("Subclasses must implement to_shapely()")

    def _key(self) -> tuple:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))


class Polygon(Shape):
    """
    A closed polygon; edge i joins vertex i to vertex (i + 1) % n.

    Attributes:
        points (tuple): Vertices, in boundary order (either winding)
        reference_point_index (int): Vertex used as the rotation handle
    """

    kind = 'polygon'

    def __init__(self, points: Sequence, reference_point_index: int = 0) -> None:
        """
        Initialize a polygon.

        Args:
            points: At least three vertices (Points or (x, y) pairs)
            reference_point_index: Index of the rotation-handle vertex

        Raises:
            ValueError: If fewer than 3 vertices are given or the reference
                index is out of range.
        """
        self.points: Tuple[Point, ...] = _as_points(points)
        if len(self.points) < 3:
            raise ValueError(
                f"A polygon needs at least 3 points, got {len(self.points)}"
            )
        _check_reference_index(reference_point_index, len(self.points))
        self.reference_point_index = reference_point_index
        self.centroid = shoelace_centroid(self.points)
        self._polygon = ShapelyPolygon([p.to_tuple() for p in self.points])

    def translated_instance(self, dx: float, dy: float) -> 'Polygon':
        return Polygon(
            [Point(p.x + dx, p.y + dy) for p in self.points],
            self.reference_point_index
        )

    def rotated_instance(self, angle: float, pivot: Point) -> 'Polygon':
        return Polygon(
            [geometry.rotate_point(p, angle, pivot) for p in self.points],
            self.reference_point_index
        )

    def contains_point(self, point: Point) -> bool:
        return self._polygon.contains(point.to_shapely())

    def boundary(self) -> Tuple[List[Line], Optional[Arc], Optional[Point]]:
        count = len(self.points)
        edges = [Line(self.points[i], self.points[(i + 1) % count]) for i in range(count)]
        return edges, None, None

    def rotation_center(self) -> Point:
        return self.centroid

    def reference_point(self) -> Point:
        return self.points[self.reference_point_index]

    def signed_area(self) -> float:
        """Shoelace signed area (positive for counterclockwise vertices)."""
        count = len(self.points)
        total = 0.0
        for i in range(count):
            p = self.points[i]
            q = self.points[(i + 1) % count]
            total += p.x * q.y - q.x * p.y
        return 0.5 * total

    def to_shapely(self) -> ShapelyPolygon:
        return self._polygon

    def _key(self) -> tuple:
        return (self.points, self.reference_point_index)

    def __repr__(self) -> str:
        return f"Polygon(points={list(self.points)}, reference_point_index={self.reference_point_index})"


class Circle(Shape):
    """
    A full circle. Rotating it has no visible effect, so rotation is the identity.
    """

    kind = 'circle'

    def __init__(self, center, radius: float) -> None:
        """
        Initialize a circle.

        Args:
            center: Center point (Point or (x, y) pair)
            radius: Radius, must be positive

        Raises:
            ValueError: If the radius is not positive.
        """
        self.center: Point = _as_points([center])[0]
        if not radius > 0:
            raise ValueError(f"Circle radius must be positive, got {radius}")
        self.radius = float(radius)

    def translated_instance(self, dx: float, dy: float) -> 'Circle':
        return Circle(Point(self.center.x + dx, self.center.y + dy), self.radius)

    def rotated_instance(self, angle: float, pivot: Point) -> 'Circle':
        return self

    def contains_point(self, point: Point) -> bool:
        return geometry.distance(point, self.center) <= self.radius

    def boundary(self) -> Tuple[List[Line], Optional[Arc], Optional[Point]]:
        return [], Arc(self.center, self.radius), self.center

    def rotation_center(self) -> Point:
        return self.center

    def to_shapely(self) -> ShapelyPolygon:
        return self.center.to_shapely().buffer(self.radius, quad_segs=ARC_QUAD_SEGMENTS)

    def _key(self) -> tuple:
        return (self.center, self.radius)

    def __repr__(self) -> str:
        return f"Circle(center={self.center}, radius={self.radius})"


class SemiCircle(Shape):
    """
    Half of a disk, bounded by its diameter and a half-circle arc.

    The diameter runs from points[0] to points[1]; the arc bulges to the
    side reached by turning the vector center -> points[1] clockwise.

    Attributes:
        points (tuple): The two ends of the diameter
        radius (float): Radius of the arc
        center (Point): Midpoint of the diameter
        reference_point_index (int): End used as the rotation handle
    """

    kind = 'semicircle'

    def __init__(self, points: Sequence, radius: float, reference_point_index: int = 1) -> None:
        self.points: Tuple[Point, ...] = _as_points(points)
        if len(self.points) != 2:
            raise ValueError(
                f"A semicircle needs exactly 2 points, got {len(self.points)}"
            )
        if not radius > 0:
            raise ValueError(f"SemiCircle radius must be positive, got {radius}")
        _check_reference_index(reference_point_index, 2)
        self.radius = float(radius)
        self.reference_point_index = reference_point_index
        self.center = geometry.midpoint(self.points[0], self.points[1])

        start = geometry.subtract(self.points[1], self.center)
        self._mid_angle = geometry.angle_of(start) - math.pi / 2
        self._arc_direction = geometry.rotate_vec(
            geometry.normalize_vec(start) or Point(1.0, 0.0), -math.pi / 2
        )

    def translated_instance(self, dx: float, dy: float) -> 'SemiCircle':
        return SemiCircle(
            [Point(p.x + dx, p.y + dy) for p in self.points],
            self.radius,
            self.reference_point_index
        )

    def rotated_instance(self, angle: float, pivot: Point) -> 'SemiCircle':
        return SemiCircle(
            [geometry.rotate_point(p, angle, pivot) for p in self.points],
            self.radius,
            self.reference_point_index
        )

    def contains_point(self, point: Point) -> bool:
        offset = geometry.subtract(point, self.center)
        return (geometry.length(offset) <= self.radius
                and geometry.dot(offset, self._arc_direction) >= 0)

    def arc(self) -> Arc:
        return Arc(self.center, self.radius, self._mid_angle, math.pi / 2)

    def boundary(self) -> Tuple[List[Line], Optional[Arc], Optional[Point]]:
        return [Line(self.points[0], self.points[1])], self.arc(), self.center

    def rotation_center(self) -> Point:
        return self.center

    def reference_point(self) -> Point:
        return self.points[self.reference_point_index]

    def to_shapely(self) -> ShapelyPolygon:
        arc = self.arc()
        steps = 2 * ARC_QUAD_SEGMENTS
        coords = [
            arc.point_at(arc.mid_angle - arc.half_span + 2 * arc.half_span * i / steps).to_tuple()
            for i in range(steps + 1)
        ]
        return ShapelyPolygon(coords)

    def _key(self) -> tuple:
        return (self.points, self.radius, self.reference_point_index)

    def __repr__(self) -> str:
        return f"SemiCircle(points={list(self.points)}, radius={self.radius})"


class DivergingLens(Shape):
    """
    A concave lens: a rectangle whose side points[3] -> points[0] is replaced
    by a half-circle arc bulging into the rectangle.

    The arc is centred on the midpoint of points[0] and points[3]. The body
    is the rectangle minus the disk.

    Attributes:
        points (tuple): The four rectangle corners, in boundary order
        radius (float): Radius of the concave arc
        reference_point_index (int): Corner used as the rotation handle
    """

    kind = 'diverging_lens'

    def __init__(self, points: Sequence, radius: float, reference_point_index: int = 2) -> None:
        self.points: Tuple[Point, ...] = _as_points(points)
        if len(self.points) != 4:
            raise ValueError(
                f"A diverging lens needs exactly 4 points, got {len(self.points)}"
            )
        if not radius > 0:
            raise ValueError(f"DivergingLens radius must be positive, got {radius}")
        _check_reference_index(reference_point_index, 4)
        self.radius = float(radius)
        self.reference_point_index = reference_point_index
        self.center = geometry.midpoint(self.points[0], self.points[3])
        self.centroid = shoelace_centroid(self.points)

        start = geometry.subtract(self.points[0], self.center)
        self._mid_angle = geometry.angle_of(start) - math.pi / 2
        self._rectangle = ShapelyPolygon([p.to_tuple() for p in self.points])

    def translated_instance(self, dx: float, dy: float) -> 'DivergingLens':
        return DivergingLens(
            [Point(p.x + dx, p.y + dy) for p in self.points],
            self.radius,
            self.reference_point_index
        )

    def rotated_instance(self, angle: float, pivot: Point) -> 'DivergingLens':
        return DivergingLens(
            [geometry.rotate_point(p, angle, pivot) for p in self.points],
            self.radius,
            self.reference_point_index
        )

    def contains_point(self, point: Point) -> bool:
        return (self._rectangle.contains(point.to_shapely())
                and geometry.distance(point, self.center) > self.radius)

    def arc(self) -> Arc:
        return Arc(self.center, self.radius, self._mid_angle, math.pi / 2)

    def boundary(self) -> Tuple[List[Line], Optional[Arc], Optional[Point]]:
        edges = [Line(self.points[i], self.points[i + 1]) for i in range(3)]
        return edges, self.arc(), self.center

    def rotation_center(self) -> Point:
        return self.centroid

    def reference_point(self) -> Point:
        return self.points[self.reference_point_index]

    def to_shapely(self) -> 'BaseGeometry':
        disk = ShapelyPoint(self.center.x, self.center.y).buffer(
            self.radius, quad_segs=ARC_QUAD_SEGMENTS
        )
        return self._rectangle.difference(disk)

    def _key(self) -> tuple:
        return (self.points, self.radius, self.reference_point_index)

    def __repr__(self) -> str:
        return f"DivergingLens(points={list(self.points)}, radius={self.radius})"
