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
INTERFACE PHYSICS
===============================================================================
What happens to a ray at one boundary between two media: vector Snell's
law for the refracted direction, mirror reflection, total internal
reflection, and the unpolarized Fresnel power split.

Conventions: L is the incident unit direction, N the unit normal at the hit
point oriented against the ray (dot(N, L) <= 0), n1 the index the ray
travels in and n2 the index on the far side.
===============================================================================
"""

import math
from dataclasses import dataclass
from typing import Optional

from .geometry import Point, geometry


@dataclass(frozen=True)
class InterfaceResult:
    """
    Outcome of one ray/interface interaction.

    Attributes:
        cos_theta1: Cosine of the angle of incidence
        cos_theta2: Cosine of the angle of refraction (sqrt of |radicand|)
        total_internal_reflection: True when no refracted ray exists
        reflected_direction: Unit direction of the reflected ray
        refracted_direction: Unit direction of the refracted ray, or None
            under TIR or for a degenerate direction
        reflectance: Reflected power fraction R in [0, 1]
        transmittance: Transmitted power fraction T in [0, 1]
    """
    cos_theta1: float
    cos_theta2: float
    total_internal_reflection: bool
    reflected_direction: Point
    refracted_direction: Optional[Point]
    reflectance: float
    transmittance: float


def reflectance_s(n1: float, n2: float, cos_theta1: float, cos_theta2: float) -> float:
    """Fresnel power reflectance for s-polarized light."""
    denominator = n1 * cos_theta1 + n2 * cos_theta2
    if denominator == 0:
        return 1.0
    return ((n1 * cos_theta1 - n2 * cos_theta2) / denominator) ** 2


def reflectance_p(n1: float, n2: float, cos_theta1: float, cos_theta2: float) -> float:
    """Fresnel power reflectance for p-polarized light."""
    denominator = n2 * cos_theta1 + n1 * cos_theta2
    if denominator == 0:
        return 1.0
    return ((n2 * cos_theta1 - n1 * cos_theta2) / denominator) ** 2


def reflected_power(n1: float, n2: float, cos_theta1: float, cos_theta2: float) -> float:
    """
    Unpolarized Fresnel reflectance: the mean of the s and p reflectances.

    At normal incidence this is ((n1 - n2) / (n1 + n2)) ** 2.

    Returns:
        R clamped to [0, 1]
    """
    r = 0.5 * (reflectance_s(n1, n2, cos_theta1, cos_theta2)
               + reflectance_p(n1, n2, cos_theta1, cos_theta2))
    return min(1.0, max(0.0, r))


def transmitted_power(n1: float, n2: float, cos_theta1: float, cos_theta2: float) -> float:
    """Unpolarized Fresnel transmittance T = 1 - R, clamped to [0, 1]."""
    return min(1.0, max(0.0, 1.0 - reflected_power(n1, n2, cos_theta1, cos_theta2)))


def interact(direction: Point, normal: Point, n1: float, n2: float) -> InterfaceResult:
    """
    Compute the reflected and refracted rays at an interface.

    Args:
        direction: Incident unit direction L
        normal: Unit normal N oriented against L
        n1: Index of the incident medium
        n2: Index of the far medium

    Returns:
        InterfaceResult with both directions and the power split.
        Under total internal reflection R = 1, T = 0 and there is no
        refracted direction.
    """
    cos_theta1 = geometry.dot(normal, geometry.scale(direction, -1))
    ratio = n1 / n2
    radicand = 1 - ratio * ratio * (1 - cos_theta1 * cos_theta1)
    tir = radicand < 0
    cos_theta2 = math.sqrt(abs(radicand))

    reflected = geometry.normalize_vec(
        geometry.add(direction, geometry.scale(normal, 2 * cos_theta1))
    ) or direction

    # Vector form of Snell's law; the normal term changes sign with cos_theta1
    if cos_theta1 > 0:
        normal_term = ratio * cos_theta1 - cos_theta2
    else:
        normal_term = ratio * cos_theta1 + cos_theta2
    refracted = None
    if not tir:
        refracted = geometry.normalize_vec(
            geometry.add(geometry.scale(direction, ratio), geometry.scale(normal, normal_term))
        )

    if tir:
        reflectance, transmittance = 1.0, 0.0
    else:
        reflectance = reflected_power(n1, n2, cos_theta1, cos_theta2)
        transmittance = transmitted_power(n1, n2, cos_theta1, cos_theta2)

    return InterfaceResult(
        cos_theta1=cos_theta1,
        cos_theta2=cos_theta2,
        total_internal_reflection=tir,
        reflected_direction=reflected,
        refracted_direction=refracted,
        reflectance=reflectance,
        transmittance=transmittance,
    )
