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
MEDIA AND DISPERSION
===============================================================================
Materials the light travels through.

A Medium maps a vacuum wavelength (in metres) to an index of refraction. The
curve is a Sellmeier fit for borosilicate glass blended with the index of
air, scaled so that the index at the reference wavelength (red, 650 nm)
equals the substance's nominal index. Indices near 1 therefore behave like
air (almost no dispersion) and higher indices disperse like glass.

Classes:
- DispersionFunction: wavelength -> index curve for one reference index
- Medium: immutable material (name, dispersion, mystery/custom flags)

Module attributes:
- AIR, WATER, GLASS, DIAMOND, MYSTERY_A, MYSTERY_B: preset media
- SUBSTANCES: the presets, in display order
- medium_color(): display color of a medium from its red-light index
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple

from .constants import WAVELENGTH_RED


# Sellmeier coefficients (C terms in m^2)
_SELLMEIER_B = (1.03961212, 0.231792344, 1.01046945)
_SELLMEIER_C = (6.00069867e-3 * 1e-12, 2.00179144e-2 * 1e-12, 1.03560653e2 * 1e-12)

DIAMOND_INDEX_OF_REFRACTION_FOR_RED_LIGHT = 2.419


def sellmeier_index(wavelength: float) -> float:
    """
    Index of refraction of the reference glass.

    Args:
        wavelength: Vacuum wavelength in metres.

    Returns:
        The Sellmeier index at that wavelength.
    """
    l2 = wavelength * wavelength
    total = 1.0
    for b, c in zip(_SELLMEIER_B, _SELLMEIER_C):
        total += b * l2 / (l2 - c)
    return math.sqrt(total)


def air_index(wavelength: float) -> float:
    """
    Index of refraction of air (Ciddor-style two-term fit).

    Args:
        wavelength: Vacuum wavelength in metres.

    Returns:
        The index of air at that wavelength.
    """
    inv_um2 = (wavelength * 1e6) ** -2
    return 1 + 5792105e-8 / (238.0185 - inv_um2) + 167917e-8 / (57.362 - inv_um2)


@dataclass(frozen=True)
class DispersionFunction:
    """
    Wavelength-dependent index of refraction anchored at a reference point.

    Attributes:
        reference_index: Index of refraction at the reference wavelength.
        reference_wavelength: Reference wavelength in metres (default: red).
    """
    reference_index: float
    reference_wavelength: float = WAVELENGTH_RED

    def __post_init__(self) -> None:
        if not self.reference_index > 0:
            raise ValueError(
                f"reference_index must be positive, got {self.reference_index}"
            )

    @property
    def glass_fraction(self) -> float:
        """Blend weight of the glass curve (clamped at 0, unbounded above)."""
        n_air = air_index(self.reference_wavelength)
        n_glass = sellmeier_index(self.reference_wavelength)
        x = (self.reference_index - n_air) / (n_glass - n_air)
        return max(0.0, x)

    def index_of_refraction(self, wavelength: float) -> float:
        """
        Index of refraction at a vacuum wavelength.

        Args:
            wavelength: Vacuum wavelength in metres.

        Returns:
            The blended index.
        """
        x = self.glass_fraction
        return x * sellmeier_index(wavelength) + (1 - x) * air_index(wavelength)

    def __call__(self, wavelength: float) -> float:
        return self.index_of_refraction(wavelength)


@dataclass(frozen=True)
class Medium:
    """
    An immutable optical material.

    Attributes:
        name: Display name.
        index_for_red: Nominal index of refraction for red light.
        is_mystery: True if the index is hidden from the user.
        is_custom: True for a user-chosen index (not one of the presets).
        dispersion: The dispersion curve derived from index_for_red.
    """
    name: str
    index_for_red: float
    is_mystery: bool = False
    is_custom: bool = False
    dispersion: DispersionFunction = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'dispersion', DispersionFunction(self.index_for_red))

    @classmethod
    def custom(cls, index_for_red: float) -> 'Medium':
        """Create a medium with a user-chosen index for red light."""
        return cls('custom', index_for_red, is_mystery=False, is_custom=True)

    def index_of_refraction(self, wavelength: float) -> float:
        """Index of refraction at a vacuum wavelength (metres)."""
        return self.dispersion.index_of_refraction(wavelength)

    @property
    def index_of_refraction_for_red_light(self) -> float:
        return self.index_of_refraction(WAVELENGTH_RED)

    @property
    def color(self) -> Tuple[int, int, int]:
        return medium_color(self.index_of_refraction_for_red_light)


AIR = Medium('air', 1.000293)
WATER = Medium('water', 1.333)
GLASS = Medium('glass', 1.5)
DIAMOND = Medium('diamond', DIAMOND_INDEX_OF_REFRACTION_FOR_RED_LIGHT)
MYSTERY_A = Medium('mystery A', DIAMOND_INDEX_OF_REFRACTION_FOR_RED_LIGHT, is_mystery=True)
MYSTERY_B = Medium('mystery B', 1.4, is_mystery=True)

SUBSTANCES = (AIR, WATER, GLASS, DIAMOND, MYSTERY_A, MYSTERY_B)


# =============================================================================
# Display colors
# =============================================================================

AIR_COLOR = (255, 255, 255)
WATER_COLOR = (198, 226, 246)
GLASS_COLOR = (171, 169, 212)
DIAMOND_COLOR = (78, 79, 164)


def _blend(a: Tuple[int, int, int], b: Tuple[int, int, int], ratio: float) -> Tuple[int, int, int]:
    return tuple(
        int(round(min(255.0, max(0.0, ca * (1 - ratio) + cb * ratio))))
        for ca, cb in zip(a, b)
    )


def medium_color(index_for_red: float) -> Tuple[int, int, int]:
    """
    Display color for a medium, interpolated between the preset colors.

    Args:
        index_for_red: The medium's index of refraction for red light.

    Returns:
        (r, g, b) in 0-255. Air is white, denser media get darker and bluer.
    """
    water = WATER.index_of_refraction_for_red_light
    glass = GLASS.index_of_refraction_for_red_light
    diamond = DIAMOND.index_of_refraction_for_red_light

    if index_for_red < water:
        return _blend(AIR_COLOR, WATER_COLOR, (index_for_red - 1.0) / (water - 1.0))
    if index_for_red < glass:
        return _blend(WATER_COLOR, GLASS_COLOR, (index_for_red - water) / (glass - water))
    if index_for_red < diamond:
        return _blend(GLASS_COLOR, DIAMOND_COLOR, (index_for_red - glass) / (diamond - glass))
    return DIAMOND_COLOR
