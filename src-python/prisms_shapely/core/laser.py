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
from typing import Tuple, Union

from .constants import (
    SPEED_OF_LIGHT,
    WAVELENGTH_RED,
    LASER_MIN_WAVELENGTH,
    LASER_MAX_WAVELENGTH,
)
from .geometry import Point, geometry


class Laser:
    """
    The light source: a beam leaving the emission point towards the pivot.

    Attributes:
        pivot (Point): Point the laser rotates about; the beam aims at it
        emission_point (Point): Where the light comes out
        on (bool): Whether the laser emits
        power (float): Emitted power fraction (default: 1.0)
        wavelength (float): Vacuum wavelength in metres
    """

    def __init__(
        self,
        emission_point: Union[Point, Tuple[float, float]] = (-1.0, 0.0),
        pivot: Union[Point, Tuple[float, float]] = (0.0, 0.0),
        wavelength: float = WAVELENGTH_RED,
        power: float = 1.0,
        on: bool = True
    ) -> None:
        """
        Initialize a laser.

        Args:
            emission_point: Where the light comes out.
            pivot: Point the beam aims at; must differ from emission_point.
            wavelength: Vacuum wavelength in metres (380-700 nm).
            power: Emitted power fraction in [0, 1].
            on: Whether the laser emits.

        Raises:
            ValueError: If the wavelength or power is out of range, or the
                two points coincide.
        """
        self.pivot: Point = pivot if isinstance(pivot, Point) else Point(*pivot)
        self.emission_point: Point = (
            emission_point if isinstance(emission_point, Point) else Point(*emission_point)
        )
        if geometry.normalize_vec(geometry.subtract(self.pivot, self.emission_point)) is None:
            raise ValueError("Laser emission point and pivot must be distinct")
        self.on: bool = on
        self._wavelength = WAVELENGTH_RED
        self._power = 1.0
        self.wavelength = wavelength
        self.power = power

    @classmethod
    def from_angle(
        cls,
        emission_point: Union[Point, Tuple[float, float]],
        angle: float,
        **kwargs
    ) -> 'Laser':
        """
        Create a laser at ``emission_point`` shooting along ``angle`` (radians).
        """
        tail = emission_point if isinstance(emission_point, Point) else Point(*emission_point)
        pivot = Point(tail.x + math.cos(angle), tail.y + math.sin(angle))
        return cls(emission_point=tail, pivot=pivot, **kwargs)

    @property
    def wavelength(self) -> float:
        """Vacuum wavelength in metres."""
        return self._wavelength

    @wavelength.setter
    def wavelength(self, value: float) -> None:
        """Set the wavelength with validation."""
        nm = value * 1e9
        if not LASER_MIN_WAVELENGTH - 1e-9 <= nm <= LASER_MAX_WAVELENGTH + 1e-9:
            raise ValueError(
                f"Invalid laser wavelength {nm:.1f} nm. "
                f"Valid range: {LASER_MIN_WAVELENGTH}-{LASER_MAX_WAVELENGTH} nm"
            )
        self._wavelength = value

    @property
    def power(self) -> float:
        return self._power

    @power.setter
    def power(self, value: float) -> None:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"Invalid laser power {value}. Valid range: 0-1")
        self._power = value

    @property
    def frequency(self) -> float:
        return SPEED_OF_LIGHT / self._wavelength

    @property
    def direction(self) -> Point:
        """Unit vector from the emission point towards the pivot."""
        return geometry.normalize_vec(geometry.subtract(self.pivot, self.emission_point))

    @property
    def distance_from_pivot(self) -> float:
        return geometry.distance(self.pivot, self.emission_point)

    @property
    def angle(self) -> float:
        """
        Angle of the emission point about the pivot, in radians.

        The beam travels in the opposite direction (angle + pi).
        """
        return geometry.angle_of(self.direction) + math.pi

    def set_angle(self, angle: float) -> None:
        """Swing the emission point around the pivot to the given angle."""
        distance = self.distance_from_pivot
        self.emission_point = Point(
            distance * math.cos(angle) + self.pivot.x,
            distance * math.sin(angle) + self.pivot.y
        )

    def translate(self, dx: float, dy: float) -> None:
        """Move the whole laser (pivot and emission point)."""
        self.pivot = Point(self.pivot.x + dx, self.pivot.y + dy)
        self.emission_point = Point(self.emission_point.x + dx, self.emission_point.y + dy)

    def __repr__(self) -> str:
        return (f"Laser(emission_point={self.emission_point}, pivot={self.pivot}, "
                f"wavelength={self._wavelength * 1e9:.1f}nm, on={self.on})")
