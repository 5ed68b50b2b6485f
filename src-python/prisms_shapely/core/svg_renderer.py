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
from typing import Optional, Union

import numpy as np
import svgwrite

from .colors import rgb_to_css
from .constants import MIN_STROKE_POWER, NORMAL_LINE_LENGTH
from .geometry import geometry
from .ray import Intersection, LightRay
from .scene import Scene, SceneSnapshot
from .shapes import Circle, Shape
from .white_light import ModelViewTransform, WhiteLightCompositor, clip_segment_to_rect, lit_pixels


def power_to_opacity(power: float) -> float:
    """
    Stroke opacity of a monochromatic ray.

    Args:
        power (float): Power fraction carried by the ray

    Returns:
        float: sqrt(power), clipped to [0, 1]
    """
    if not power > 0:
        return 0.0
    return min(1.0, math.sqrt(power))


class SVGRenderer:
    """
    SVG renderer for the prisms scene.

    The SVG is organized into layers (bottom to top):
    - background: Environment medium color
    - objects: Prisms
    - rays: Light rays (strokes, or the white-light raster)
    - normals: Surface normals at the intersections

    Coordinate System:
        The renderer uses a Y-up coordinate system (positive Y points upward),
        which matches the model. This is achieved by applying a vertical flip
        transformation to the vector layers. The white-light raster is drawn
        in pixel coordinates (Y down) through its own transform.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        user_viewbox (tuple): Visible model region (min_x, min_y, width, height), Y-up
        viewbox (tuple): The same region in SVG's Y-down convention
        dwg (svgwrite.Drawing): The SVG drawing object
        transform (ModelViewTransform): Model -> pixel mapping of the canvas
    """

    def __init__(self, width=800, height=600, viewbox=None, metadata_level='full',
                 background='white'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 600)
            viewbox (tuple or None): Visible model region as (min_x, min_y, width, height)
                                    in Y-up coordinates. If None, uses (0, 0, width, height)
            metadata_level (str): Controls how much metadata to embed.
                - 'none': No metadata (smallest files)
                - 'standard': id + inkscape:label + class
                - 'full': All of 'standard' plus data-* attributes
            background (str): CSS fill of the background (default: 'white')
        """
        if metadata_level not in ('none', 'standard', 'full'):
            raise ValueError(
                f"Invalid metadata_level '{metadata_level}'. "
                f"Valid options: ('none', 'standard', 'full')"
            )
        self.width = width
        self.height = height
        self.metadata_level = metadata_level
        self.user_viewbox = viewbox if viewbox is not None else (0, 0, width, height)
        self.transform = ModelViewTransform(self.user_viewbox, width, height)

        # Convert user's Y-up viewbox to SVG's Y-down viewbox
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        # profile='full' enables data-* attributes; debug=False accepts the
        # Inkscape namespace
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)
        self.dwg['xmlns:inkscape'] = 'http://www.inkscape.org/namespaces/inkscape'

        self.background = self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill=background,
            id='background'
        ))

        self.layer_objects = self.dwg.add(self.dwg.g(
            id='layer-objects',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Prisms'}
        ))
        self.layer_rays = self.dwg.add(self.dwg.g(
            id='layer-rays',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Rays'}
        ))
        self.layer_normals = self.dwg.add(self.dwg.g(
            id='layer-normals',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Normals'}
        ))

    def _normalize_coord(self, value):
        """
        Normalize a coordinate value: -0.0 and values within 1e-300 of zero become 0.0.
        """
        if value == 0.0 or abs(value) < 1e-300:
            return 0.0
        return value

    def set_background(self, fill):
        """Set the background fill (CSS color string)."""
        self.background['fill'] = fill

    def draw_prism(self, shape: Shape, fill='rgb(171,169,212)', fill_opacity=1.0,
                   stroke='gray', stroke_width=None, label=None):
        """
        Draw a prism outline.

        Circles are drawn exactly; other shapes are drawn from their Shapely
        outline (arcs sampled).

        Args:
            shape (Shape): The shape, in scene coordinates
            fill (str): CSS fill color
            fill_opacity (float): Fill opacity 0.0-1.0
            stroke (str): CSS stroke color
            stroke_width (float or None): Outline width in model units.
                If None, one pixel.
            label (str or None): Optional inkscape:label
        """
        if stroke_width is None:
            stroke_width = 1.0 / self.transform.scale_x

        style = dict(fill=fill, fill_opacity=fill_opacity, stroke=stroke, stroke_width=stroke_width)
        if isinstance(shape, Circle):
            element = self.dwg.circle(
                center=(shape.center.x, shape.center.y), r=shape.radius, **style
            )
        else:
            outline = shape.to_shapely()
            polygons = getattr(outline, 'geoms', [outline])
            element = self.dwg.g()
            for polygon in polygons:
                points = [
                    (self._normalize_coord(x), self._normalize_coord(y))
                    for x, y in polygon.exterior.coords
                ]
                element.add(self.dwg.polygon(points=points, **style))

        if self.metadata_level != 'none':
            element['class'] = f'prism {shape.kind}'
            element['inkscape:label'] = label or shape.kind
        self.layer_objects.add(element)
        return element

    def draw_light_ray(self, light_ray: LightRay, zoom=1.0, color=None):
        """
        Stroke a monochromatic ray segment.

        Opacity is sqrt(power); the width is the ray's line width times zoom.
        Rays at or below MIN_STROKE_POWER, rays with non-finite endpoints and
        rays outside the viewbox are skipped.

        Args:
            light_ray (LightRay): The segment to draw
            zoom (float): Width multiplier (default: 1.0)
            color (str or None): CSS color override (default: the ray's color)

        Returns:
            The svgwrite line, or None if nothing was drawn
        """
        if light_ray.power <= MIN_STROKE_POWER or not light_ray.is_finite():
            return None

        min_x, min_y, vb_width, vb_height = self.user_viewbox
        clipped = clip_segment_to_rect(
            light_ray.tail.x, light_ray.tail.y, light_ray.tip.x, light_ray.tip.y,
            min_x, min_y, min_x + vb_width, min_y + vb_height
        )
        if clipped is None:
            return None
        x1, y1, x2, y2 = (self._normalize_coord(v) for v in clipped)

        line = self.dwg.line(
            start=(x1, y1),
            end=(x2, y2),
            stroke=color or rgb_to_css(light_ray.color),
            stroke_width=light_ray.line_width * zoom,
            stroke_opacity=power_to_opacity(light_ray.power),
            stroke_linecap='round',
        )

        if self.metadata_level != 'none':
            line['class'] = 'ray'
            line['inkscape:label'] = f'{light_ray.wavelength_nm:.0f}nm p={light_ray.power:.3f}'

        if self.metadata_level == 'full':
            line['data-power'] = f'{light_ray.power:.6g}'
            line['data-wavelength-nm'] = f'{light_ray.wavelength_nm:.1f}'
            line['data-index'] = f'{light_ray.index_of_refraction:.6f}'

        self.layer_rays.add(line)
        return line

    def draw_white_light(self, image: np.ndarray):
        """
        Composite a tone-mapped white-light image onto the rays layer.

        Each lit pixel becomes a 1x1 rectangle; transparent pixels are not
        drawn.

        Args:
            image (np.ndarray): (height, width, 4) float RGBA from
                WhiteLightCompositor, on this renderer's pixel grid

        Returns:
            The svgwrite group holding the pixels
        """
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        group = self.dwg.g(
            id='white-light',
            transform=(f'translate({min_x},{-(min_y + vb_height)}) '
                       f'scale({1.0 / self.transform.scale_x},{1.0 / self.transform.scale_y})'),
        )
        for x, y, (r, g, b, a) in lit_pixels(image):
            group.add(self.dwg.rect(
                insert=(x, y),
                size=(1, 1),
                fill=rgb_to_css((r * 255, g * 255, b * 255)),
                fill_opacity=round(a, 4),
            ))
        # Pixel coordinates are already Y-down: keep the group out of the flipped layers
        self.dwg.elements.insert(self.dwg.elements.index(self.layer_rays), group)
        return group

    def draw_normal(self, intersection: Intersection, length=NORMAL_LINE_LENGTH,
                    color='black', stroke_width=None):
        """
        Draw a surface normal centred on an intersection point.

        Args:
            intersection (Intersection): Hit point and unit normal
            length (float): Total length of the line, in model units
            color (str): CSS stroke color
            stroke_width (float or None): Width in model units (None: one pixel)
        """
        if stroke_width is None:
            stroke_width = 1.0 / self.transform.scale_x
        half = geometry.scale(intersection.unit_normal, length / 2)
        p1 = geometry.add(intersection.point, half)
        p2 = geometry.subtract(intersection.point, half)
        line = self.dwg.line(
            start=(p1.x, p1.y),
            end=(p2.x, p2.y),
            stroke=color,
            stroke_width=stroke_width,
            stroke_dasharray=f'{length / 10},{length / 20}',
        )
        if self.metadata_level != 'none':
            line['class'] = 'normal'
        self.layer_normals.add(line)
        return line

    def draw_scene(self, scene: Union[Scene, SceneSnapshot], output, zoom=1.0,
                   normal_length=NORMAL_LINE_LENGTH):
        """
        Draw a whole frame: background, prisms, rays and (optionally) normals.

        Args:
            scene (Scene or SceneSnapshot): Source of the media and prism shapes
            output (RenderOutput): Rays and intersections from recompute()
            zoom (float): Width multiplier for monochromatic strokes
            normal_length (float): Length of the drawn normals

        Returns:
            np.ndarray or None: The white-light image in white mode, else None
        """
        snapshot = scene.snapshot() if isinstance(scene, Scene) else scene

        self.set_background(rgb_to_css(snapshot.environment_medium.color))
        prism_fill = rgb_to_css(snapshot.prism_medium.color)
        for shape in snapshot.shapes:
            self.draw_prism(shape, fill=prism_fill)

        image = None
        white = output.color_mode == 'white'
        if white:
            compositor = WhiteLightCompositor(self.transform)
            image = compositor.composite(output.light_rays)
            self.draw_white_light(image)
        else:
            for light_ray in output.light_rays:
                self.draw_light_ray(light_ray, zoom=zoom)

        if output.show_normals:
            color = 'white' if white else 'black'
            for intersection in output.intersections:
                self.draw_normal(intersection, length=normal_length, color=color)

        return image

    def save(self, filename: Optional[str] = None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (default: 'output.svg')
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(filename)

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()
