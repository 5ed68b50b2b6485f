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

from typing import Tuple


def wavelength_to_rgb(wavelength: float) -> Tuple[int, int, int]:
    """
    Convert a wavelength (in nm) to an RGB color tuple.

    Based on approximation of CIE color matching functions.
    Returns values in range 0-255.

    Args:
        wavelength (float): Wavelength in nanometers (380-780 nm)

    Returns:
        tuple: (r, g, b) values from 0-255
    """
    # Clamp to visible range
    wavelength = max(380, min(780, wavelength))

    # Approximate RGB from wavelength using piecewise linear functions
    if wavelength < 440:
        r = -(wavelength - 440) / (440 - 380)
        g = 0.0
        b = 1.0
    elif wavelength < 490:
        r = 0.0
        g = (wavelength - 440) / (490 - 440)
        b = 1.0
    elif wavelength < 510:
        r = 0.0
        g = 1.0
        b = -(wavelength - 510) / (510 - 490)
    elif wavelength < 580:
        r = (wavelength - 510) / (580 - 510)
        g = 1.0
        b = 0.0
    elif wavelength < 645:
        r = 1.0
        g = -(wavelength - 645) / (645 - 580)
        b = 0.0
    else:
        r = 1.0
        g = 0.0
        b = 0.0

    # Intensity correction at spectrum edges
    if wavelength < 420:
        factor = 0.3 + 0.7 * (wavelength - 380) / (420 - 380)
    elif wavelength > 700:
        factor = 0.3 + 0.7 * (780 - wavelength) / (780 - 700)
    else:
        factor = 1.0

    return (
        int(255 * r * factor),
        int(255 * g * factor),
        int(255 * b * factor)
    )


def rgb_to_css(color: Tuple[int, int, int]) -> str:
    """Format an (r, g, b) tuple as a CSS rgb() string."""
    r, g, b = (int(round(c)) for c in color[:3])
    return f"rgb({r},{g},{b})"
