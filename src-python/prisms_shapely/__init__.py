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

Prisms Shapely
==============

Light bending through prisms: a 2D ray tracer with Snell's law, Fresnel
reflection, total internal reflection and dispersion, using Shapely for
computational geometry.

Main modules:
- core: Propagation engine (Scene, PrismsSimulator, shapes, media, renderers)
- optical_elements: Stock prism shapes
- analysis: Fresnel utilities and render saving
- examples: Example simulations and demonstrations

Quick start:
    from prisms_shapely.core.scene import Scene
    from prisms_shapely.optical_elements import triangle
    from prisms_shapely.core.simulator import recompute
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import PrismsSimulator, recompute
from .core.ray import Ray, LightRay

__all__ = [
    'Scene',
    'PrismsSimulator',
    'recompute',
    'Ray',
    'LightRay',
    '__version__',
]
