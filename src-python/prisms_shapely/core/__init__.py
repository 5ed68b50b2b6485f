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

from .geometry import geometry, Point, Line, Arc, Geometry
from . import constants
from .medium import Medium, DispersionFunction, AIR, WATER, GLASS, DIAMOND, SUBSTANCES
from .shapes import Shape, Polygon, Circle, SemiCircle, DivergingLens
from .ray import Ray, Intersection, LightRay
from .prism import Prism
from .laser import Laser
from .scene import Scene, SceneSnapshot
from .simulator import PrismsSimulator, RenderOutput, recompute
from .white_light import WhiteLightCompositor, ModelViewTransform
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Point', 'Line', 'Arc', 'Geometry',
    'constants',
    'Medium', 'DispersionFunction', 'AIR', 'WATER', 'GLASS', 'DIAMOND', 'SUBSTANCES',
    'Shape', 'Polygon', 'Circle', 'SemiCircle', 'DivergingLens',
    'Ray', 'Intersection', 'LightRay',
    'Prism',
    'Laser',
    'Scene', 'SceneSnapshot',
    'PrismsSimulator', 'RenderOutput', 'recompute',
    'WhiteLightCompositor', 'ModelViewTransform',
    'SVGRenderer'
]
