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
from typing import Optional, Tuple

from .constants import SPEED_OF_LIGHT, RAY_LINE_WIDTH
from .geometry import Point, geometry


@dataclass(frozen=True)
class Ray:
    """
    A single immutable ray, used in the propagation algorithm.

    Attributes:
        tail (Point): Starting point
        direction (Point): Unit direction vector
        power (float): Fraction of the laser power carried (0.0 to 1.0)
        wavelength_in_medium (float): Wavelength in the current medium (m)
        index_of_refraction (float): Index of the medium the ray travels in
        frequency (float): Frequency (Hz); fixes the vacuum wavelength
    """
    tail: Point
    direction: Point
    power: float
    wavelength_in_medium: float
    index_of_refraction: float
    frequency: float

    @classmethod
    def create(
        cls,
        tail: Point,
        direction: Point,
        power: float,
        wavelength: float,
        index_of_refraction: float
    ) -> Optional['Ray']:
        """
        Build a ray from its vacuum wavelength.

        Args:
            tail: Starting point
            direction: Direction (normalized here)
            power: Power fraction, clamped to [0, 1]
            wavelength: Vacuum wavelength (m)
            index_of_refraction: Index of the medium at the tail

        Returns:
            The ray, or None if the direction is degenerate.
        """
        unit = geometry.normalize_vec(direction)
        if unit is None:
            return None
        return cls(
            tail=tail,
            direction=unit,
            power=min(1.0, max(0.0, power)),
            wavelength_in_medium=wavelength / index_of_refraction,
            index_of_refraction=index_of_refraction,
            frequency=SPEED_OF_LIGHT / wavelength,
        )

    @property
    def base_wavelength(self) -> float:
        """Wavelength of this ray if it wasn't inside a medium (m)."""
        return SPEED_OF_LIGHT / self.frequency

    def spawn(
        self,
        tail: Point,
        direction: Point,
        power: float,
        index_of_refraction: Optional[float] = None
    ) -> Optional['Ray']:
        """
        Create a child ray with the same vacuum wavelength.

        Args:
            tail: New starting point
            direction: New direction (normalized here)
            power: New power fraction
            index_of_refraction: Index of the new medium (default: unchanged)

        Returns:
            The child ray, or None if the direction is degenerate.
        """
        if index_of_refraction is None:
            index_of_refraction = self.index_of_refraction
        return Ray.create(tail, direction, power, self.base_wavelength, index_of_refraction)


@dataclass(frozen=True)
class Intersection:
    """
    Where a ray crosses a shape boundary.

    The unit normal always points against the incoming ray:
    dot(unit_normal, incident_direction) <= 0.
    """
    point: Point
    unit_normal: Point


@dataclass(frozen=True)
class LightRay:
    """
    A render primitive: one straight piece of a propagated ray.

    Produced fresh on every recomputation; never mutated.

    Attributes:
        tail (Point): Start of the segment
        tip (Point): End of the segment
        index_of_refraction (float): Index of the medium along the segment
        wavelength_in_medium (float): Wavelength inside that medium (m)
        wavelength_in_vacuum (float): Vacuum wavelength (m)
        power (float): Power fraction carried along the segment
        color (tuple): (r, g, b) of the vacuum wavelength, 0-255
        line_width (float): Stroke width in model units
    """
    tail: Point
    tip: Point
    index_of_refraction: float
    wavelength_in_medium: float
    wavelength_in_vacuum: float
    power: float
    color: Tuple[int, int, int]
    line_width: float = RAY_LINE_WIDTH

    @property
    def wavelength_nm(self) -> float:
        return self.wavelength_in_vacuum * 1e9

    @property
    def length(self) -> float:
        return geometry.distance(self.tail, self.tip)

    def is_finite(self) -> bool:
        return self.tail.is_finite() and self.tip.is_finite() and math.isfinite(self.power)
