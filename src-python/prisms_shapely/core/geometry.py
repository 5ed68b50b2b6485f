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
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple
from shapely.geometry import Point as ShapelyPoint

from .constants import DEGENERATE_LENGTH


@dataclass(frozen=True)
class Point:
    """
    A point (or free vector) in 2D space.
    Can be converted to a Shapely Point.
    """
    x: float
    y: float

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True)
class Line:
    """
    A line in 2D space, defined by two points.
    Used as a segment (p1 and p2 are the endpoints) for shape edges.
    """
    p1: Point
    p2: Point


@dataclass(frozen=True)
class Arc:
    """
    A circular arc, described by its angular midpoint and half-span.

    A full circle is an arc with half_span = pi. A half circle centred on
    direction ``mid_angle`` has half_span = pi / 2.

    Attributes:
        center: Center of the supporting circle.
        radius: Radius of the supporting circle.
        mid_angle: Angle (radians) of the arc's midpoint seen from the center.
        half_span: Half of the angular extent of the arc (radians).
    """
    center: Point
    radius: float
    mid_angle: float = 0.0
    half_span: float = math.pi

    def contains_angle(self, angle: float, tol: float = 1e-12) -> bool:
        """Test whether a polar angle (about the center) lies on the arc."""
        if self.half_span >= math.pi:
            return True
        diff = (angle - self.mid_angle + math.pi) % (2 * math.pi) - math.pi
        return abs(diff) <= self.half_span + tol

    def point_at(self, angle: float) -> Point:
        return Point(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle)
        )


class Geometry:
    """
    Vector and intersection helpers on Point, Line and Arc.

    Points double as free vectors. Rays are passed as an origin point plus a
    direction vector; only hits in front of the origin count.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        return Point(x, y)

    @staticmethod
    def line(p1: Point, p2: Point) -> Line:
        """Segment from p1 to p2."""
        return Line(p1, p2)

    @staticmethod
    def add(p1: Point, p2: Point) -> Point:
        return Point(p1.x + p2.x, p1.y + p2.y)

    @staticmethod
    def subtract(p1: Point, p2: Point) -> Point:
        """Vector from p2 to p1."""
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def scale(p1: Point, factor: float) -> Point:
        return Point(p1.x * factor, p1.y * factor)

    @staticmethod
    def point_along(origin: Point, direction: Point, t: float) -> Point:
        """Return origin + t * direction."""
        return Point(origin.x + direction.x * t, origin.y + direction.y * t)

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def cross(p1: Point, p2: Point) -> float:
        """z-component of the 2D cross product; positive when p2 is counterclockwise of p1."""
        return p1.x * p2.y - p1.y * p2.x

    @staticmethod
    def ray_segment_intersection(
        origin: Point, direction: Point, seg: Line
    ) -> Optional[Tuple[float, Point]]:
        """
        Intersect a ray with a line segment.

        Solves origin + t * direction = seg.p1 + s * (seg.p2 - seg.p1) for
        t > 0 and 0 <= s <= 1.

        Args:
            origin: Ray tail.
            direction: Ray direction (need not be normalized).
            seg: The segment.

        Returns:
            (t, point) for a hit in front of the tail, or None. Rays parallel
            to the segment never hit it.
        """
        edge = Geometry.subtract(seg.p2, seg.p1)
        denominator = Geometry.cross(direction, edge)
        if abs(denominator) < 1e-300:
            return None

        offset = Geometry.subtract(seg.p1, origin)
        t = Geometry.cross(offset, edge) / denominator
        s = Geometry.cross(offset, direction) / denominator

        if t <= 0 or s < 0 or s > 1:
            return None
        return t, Geometry.point_along(origin, direction, t)

    @staticmethod
    def ray_circle_intersections(
        origin: Point, direction: Point, center: Point, radius: float
    ) -> List[Tuple[float, Point]]:
        """
        Calculate the intersections of a ray and a circle.

        Args:
            origin: Ray tail.
            direction: Ray direction (need not be normalized).
            center: Circle center.
            radius: Circle radius.

        Returns:
            List of (t, point) pairs with t > 0, nearest first (0 to 2 entries;
            a tangent ray yields a single entry).
        """
        a = Geometry.dot(direction, direction)
        if a < DEGENERATE_LENGTH ** 2:
            return []

        offset = Geometry.subtract(origin, center)
        b = 2 * Geometry.dot(offset, direction)
        c = Geometry.dot(offset, offset) - radius * radius

        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return []

        root = math.sqrt(discriminant)
        roots = sorted({(-b - root) / (2 * a), (-b + root) / (2 * a)})

        return [
            (t, Geometry.point_along(origin, direction, t))
            for t in roots
            if t > 0
        ]

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        return math.sqrt(Geometry.distance_squared(p1, p2))

    @staticmethod
    def distance_squared(p1: Point, p2: Point) -> float:
        d = Geometry.subtract(p1, p2)
        return d.x ** 2 + d.y ** 2

    @staticmethod
    def length(p1: Point) -> float:
        return math.hypot(p1.x, p1.y)

    @staticmethod
    def midpoint(p1: Point, p2: Point) -> Point:
        return Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)

    @staticmethod
    def normalize_vec(p1: Point) -> Optional[Point]:
        """
        Unit vector along p1.

        Returns:
            The unit vector, or None if the vector is too short (or not
            finite) to have a direction
        """
        len_val = Geometry.length(p1)
        if not math.isfinite(len_val) or len_val < DEGENERATE_LENGTH:
            return None
        return Point(p1.x / len_val, p1.y / len_val)

    @staticmethod
    def rotate_vec(p1: Point, angle: float) -> Point:
        """Rotate a vector counterclockwise by angle (radians)."""
        c, s = math.cos(angle), math.sin(angle)
        return Point(p1.x * c - p1.y * s, p1.x * s + p1.y * c)

    @staticmethod
    def rotate_point(p1: Point, angle: float, center: Point) -> Point:
        """
        Rotate a point about a center by the given angle in radians.

        Args:
            p1: Point to rotate
            angle: Rotation angle in radians (counterclockwise)
            center: Pivot

        Returns:
            Rotated point
        """
        rotated = Geometry.rotate_vec(Geometry.subtract(p1, center), angle)
        return Geometry.add(rotated, center)

    @staticmethod
    def angle_of(p1: Point) -> float:
        """Polar angle of a vector, in radians."""
        return math.atan2(p1.y, p1.x)


# Shared instance
geometry = Geometry()


# Example usage and testing
if __name__ == "__main__":
    p1 = geometry.point(0, 0)
    p2 = geometry.point(3, 4)
    print(f"Distance between {p1} and {p2}: {geometry.distance(p1, p2)}")

    seg = geometry.line(geometry.point(2, -1), geometry.point(2, 1))
    hit = geometry.ray_segment_intersection(p1, geometry.point(1, 0), seg)
    print(f"Ray from {p1} along +x hits {seg} at: {hit}")

    hits = geometry.ray_circle_intersections(
        geometry.point(-5, 0), geometry.point(1, 0), p1, 1.0
    )
    print(f"Ray/circle hits: {hits}")

    rotated = geometry.rotate_vec(geometry.point(1, 0), math.pi / 2)
    print(f"Rotated vector (90 degrees): {rotated}")
