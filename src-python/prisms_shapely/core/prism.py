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

from typing import List, Optional, Tuple, Union, TYPE_CHECKING

from .geometry import Point
from .ray import Intersection
from .shapes import Shape

if TYPE_CHECKING:
    from .ray import Ray


class Prism:
    """
    A refracting body placed in the scene.

    The base shape is kept in local coordinates; the body in the scene is
    the base shape translated by ``position``. Rotation turns the base shape
    about its own rotation center, so a prism spins in place.

    Attributes:
        shape (Shape): Base shape in local coordinates
        position (Point): Offset of the base shape in the scene
        kind (str): Type name ('triangle', 'circle', ...)
    """

    def __init__(
        self,
        shape: Shape,
        position: Union[Point, Tuple[float, float]] = (0.0, 0.0),
        kind: Optional[str] = None
    ) -> None:
        """
        Initialize a prism.

        Args:
            shape: Base shape in local coordinates.
            position: Offset of the shape in the scene.
            kind: Type name; defaults to the shape's kind.
        """
        self.shape: Shape = shape
        self.position: Point = position if isinstance(position, Point) else Point(*position)
        self.kind: str = kind if kind is not None else shape.kind

    @property
    def translated_shape(self) -> Shape:
        """The shape as placed in the scene."""
        return self.shape.translated_instance(self.position.x, self.position.y)

    def translate(self, dx: float, dy: float) -> None:
        """Move the prism by (dx, dy)."""
        self.position = Point(self.position.x + dx, self.position.y + dy)

    def rotate(self, angle: float) -> None:
        """
        Rotate the prism in place.

        Args:
            angle: Rotation angle in radians (counterclockwise).
        """
        self.shape = self.shape.rotated_instance(angle, self.shape.rotation_center())

    def contains(self, point: Point) -> bool:
        return self.translated_shape.contains_point(point)

    def get_intersections(self, ray: 'Ray') -> List[Intersection]:
        return self.translated_shape.get_intersections(ray)

    def reference_point(self) -> Optional[Point]:
        """Rotation-handle anchor in scene coordinates, or None."""
        return self.translated_shape.reference_point()

    def copy(self) -> 'Prism':
        return Prism(self.shape, self.position, self.kind)

    def __repr__(self) -> str:
        return f"Prism(kind='{self.kind}', position=({self.position.x}, {self.position.y}))"
