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

"""
Constants used throughout the prisms engine.

Model lengths are in metres, the same unit as the wavelengths, so the
prism prototypes are only a few micrometres across. Display wavelengths
(the ones fed to the color functions) are in nanometres.
"""

# =============================================================================
# Propagation
# =============================================================================

# Recursion stops past this depth (reflective cavities would never end)
MAX_RECURSION_DEPTH = 50

# Rays weaker than this fraction of the laser power are not propagated
MIN_RAY_POWER = 0.001

# Distance a new ray is stepped off an interface before the next
# containment test. Tuned for float64 coordinates.
INTERFACE_EPSILON = 1e-12

# Below this length a direction vector is considered degenerate
DEGENERATE_LENGTH = 1e-15

# Length of the segment drawn for a ray that leaves the scene
# ("to infinity" is one unit step along the direction)
DEFAULT_RAY_EXTENT = 1.0

# =============================================================================
# Physics
# =============================================================================

SPEED_OF_LIGHT = 2.99792458e8   # m/s
WAVELENGTH_RED = 650e-9         # m, reference wavelength for dispersion
CHARACTERISTIC_LENGTH = WAVELENGTH_RED

# Laser wavelength bounds (in nanometers)
LASER_MIN_WAVELENGTH = 380
LASER_MAX_WAVELENGTH = 700

# White light sampling (in nanometers, both ends included)
WHITE_LIGHT_MIN_WAVELENGTH = 400
WHITE_LIGHT_MAX_WAVELENGTH = 700
WHITE_LIGHT_SAMPLES = 16

# Perpendicular spacing of the parallel beams in "many rays" mode
MANY_RAYS_SPACING = WAVELENGTH_RED / 2

# =============================================================================
# Rendering
# =============================================================================

# Rendered width of a ray, in model units
RAY_LINE_WIDTH = CHARACTERISTIC_LENGTH / 2

# Monochromatic rays at or below this power are not stroked
MIN_STROKE_POWER = 1e-6

# Length of a drawn surface normal, in model units
NORMAL_LINE_LENGTH = CHARACTERISTIC_LENGTH * 4

# White light compositor: channel increment per rasterized sample,
# white clamp, and over-saturation factor of the tone map
WHITE_LIGHT_BRIGHTNESS = 0.017
WHITE_LIMIT = 0.2
OVERSATURATION_SCALE = 4.0
