"""
Copyright 2026 prisms-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
Fresnel Equation Utilities
===============================================================================
Closed-form answers for a flat boundary between two media, with angles in
degrees.

The simulator (core/refraction.py) works on direction vectors and never
sees an angle. These helpers give the expected numbers for a pair of
indices and an angle of incidence, without building a scene, so the engine
can be cross-checked against textbook values.

Nothing here prints.
===============================================================================
"""

from __future__ import annotations
import math
from typing import Dict, Optional

from ..core.geometry import Point
from ..core.refraction import interact, reflectance_p, reflectance_s


def _refraction_sine(n1: float, n2: float, theta_i_deg: float) -> float:
    return n1 * math.sin(math.radians(theta_i_deg)) / n2


def fresnel_split(n1: float, n2: float, theta_i_deg: float) -> Dict[str, float]:
    """
    Power split at a flat boundary, per polarization and unpolarized.

    Args:
        n1: Index on the incident side.
        n2: Index on the far side.
        theta_i_deg: Angle between the ray and the surface normal, degrees.

    Returns:
        Dict with 'R_s' and 'R_p' (per-polarization reflectance), 'R' (their
        mean), 'T' (1 - R) and 'theta_t_deg' (refraction angle).

    Raises:
        ValueError: Beyond the critical angle, where nothing is transmitted.
    """
    sin_t = _refraction_sine(n1, n2, theta_i_deg)
    if abs(sin_t) > 1.0:
        raise ValueError(
            f"No refracted ray at {theta_i_deg:.2f}° for n1={n1}, n2={n2}: "
            f"beyond the critical angle of {critical_angle(n1, n2):.2f}°"
        )

    cos_i = math.cos(math.radians(theta_i_deg))
    cos_t = math.sqrt(1.0 - sin_t ** 2)
    r_s = reflectance_s(n1, n2, cos_i, cos_t)
    r_p = reflectance_p(n1, n2, cos_i, cos_t)
    r = (r_s + r_p) / 2
    return {
        'R_s': r_s,
        'R_p': r_p,
        'R': r,
        'T': 1.0 - r,
        'theta_t_deg': math.degrees(math.asin(sin_t)),
    }


def unpolarized_reflectance(n1: float, n2: float, theta_i_deg: float) -> float:
    """Reflected power fraction for unpolarized light; 1.0 under TIR."""
    if abs(_refraction_sine(n1, n2, theta_i_deg)) > 1.0:
        return 1.0
    return fresnel_split(n1, n2, theta_i_deg)['R']


def critical_angle(n1: float, n2: float) -> float:
    """
    Smallest angle of incidence (degrees) giving total internal reflection.

    Raises:
        ValueError: If n1 <= n2; light entering a denser medium always
            refracts.
    """
    if not n1 > n2:
        raise ValueError(f"Critical angle undefined for n1={n1} <= n2={n2}")
    return math.degrees(math.asin(n2 / n1))


def brewster_angle(n1: float, n2: float) -> float:
    """Angle of incidence (degrees) at which p-polarized light is fully transmitted."""
    return math.degrees(math.atan2(n2, n1))


def engine_split(n1: float, n2: float, theta_i_deg: float) -> Dict[str, object]:
    """
    The same boundary, evaluated by the simulator's vector model.

    The boundary is the x axis with its normal along +y; the ray comes down
    onto it from above.

    Returns:
        Dict with 'R', 'T', 'tir' and 'theta_t_deg' (None under TIR), laid
        out like fresnel_split() for direct comparison.
    """
    theta_i = math.radians(theta_i_deg)
    result = interact(Point(math.sin(theta_i), -math.cos(theta_i)), Point(0.0, 1.0), n1, n2)

    theta_t_deg: Optional[float] = None
    refracted = result.refracted_direction
    if refracted is not None:
        theta_t_deg = math.degrees(math.atan2(abs(refracted.x), abs(refracted.y)))
    return {
        'R': result.reflectance,
        'T': result.transmittance,
        'tir': result.total_internal_reflection,
        'theta_t_deg': theta_t_deg,
    }
