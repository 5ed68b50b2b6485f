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
Analysis Utilities
===============================================================================
Helpers that sit outside the simulation loop:

- Fresnel equations at a given angle, to cross-check the engine
- Saving renders (SVG, optional PNG) with a JSON-serializable descriptor
===============================================================================
"""

from .fresnel_utils import (
    fresnel_split,
    unpolarized_reflectance,
    critical_angle,
    brewster_angle,
    engine_split,
)
from .render_result import (
    save_render,
    render_scene,
    reset_render_counter,
    summarize_scene,
)

__all__ = [
    # Fresnel utilities
    'fresnel_split',
    'unpolarized_reflectance',
    'critical_angle',
    'brewster_angle',
    'engine_split',
    # Render result
    'save_render',
    'render_scene',
    'reset_render_counter',
    'summarize_scene',
]
