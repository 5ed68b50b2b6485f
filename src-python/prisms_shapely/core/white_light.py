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
WHITE LIGHT COMPOSITOR
===============================================================================
Additive color mixing for white-light mode.

Painting translucent strokes on top of each other mixes colors
subtractively, so overlapping spectral rays would never add up to white.
Instead every ray is rasterized with Bresenham's line algorithm into a dense
per-pixel accumulator:

    rgb[y, x]       += color / 255 * WHITE_LIGHT_BRIGHTNESS
    intensity[y, x] += power

Each rasterized sample also touches (x + 1, y) and (x, y + 1) so shallow
lines do not look sparse. Once every ray of the frame is in, each touched
pixel is tone-mapped:

    m       = max(r, g, b)
    channel = clamp(channel / m * OVERSATURATION_SCALE - WHITE_LIMIT, 0, 1 - WHITE_LIMIT)
    alpha   = clamp(sqrt(intensity * m), 0, 1)

Untouched pixels stay fully transparent. The tone map is non-linear, so it
runs once per complete frame on a freshly reset accumulator.

Classes:
- ModelViewTransform: maps Y-up model coordinates onto the Y-down pixel grid
- WhiteLightCompositor: accumulator + tone map

Functions:
- clip_segment_to_rect(): Liang-Barsky clipping
- bresenham_line(): integer grid cells of a segment
===============================================================================
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import numpy as np

from .constants import WHITE_LIGHT_BRIGHTNESS, WHITE_LIMIT, OVERSATURATION_SCALE
from .geometry import Point
from .ray import LightRay


class ModelViewTransform:
    """
    Maps model coordinates (Y up) onto a pixel grid (Y down).

    Attributes:
        viewbox (tuple): Visible model region (min_x, min_y, width, height)
        width (int): Grid width in pixels
        height (int): Grid height in pixels
    """

    def __init__(self, viewbox: Tuple[float, float, float, float], width: int, height: int) -> None:
        min_x, min_y, vb_width, vb_height = viewbox
        if not (vb_width > 0 and vb_height > 0):
            raise ValueError(f"Viewbox must have a positive size, got {viewbox}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Pixel grid must have a positive size, got {width}x{height}")
        self.viewbox = viewbox
        self.width = width
        self.height = height
        self.scale_x = width / vb_width
        self.scale_y = height / vb_height

    def model_to_view(self, point: Point) -> Tuple[float, float]:
        """Model point -> (column, row) in fractional pixels."""
        min_x, min_y, _, vb_height = self.viewbox
        return (
            (point.x - min_x) * self.scale_x,
            (min_y + vb_height - point.y) * self.scale_y,
        )

    def view_to_model(self, x: float, y: float) -> Point:
        min_x, min_y, _, vb_height = self.viewbox
        return Point(min_x + x / self.scale_x, min_y + vb_height - y / self.scale_y)


def clip_segment_to_rect(
    x1: float, y1: float, x2: float, y2: float,
    min_x: float, min_y: float, max_x: float, max_y: float
) -> Optional[Tuple[float, float, float, float]]:
    """
    Clip a line segment to an axis-aligned rectangle.

    Uses the Liang-Barsky algorithm.

    Returns:
        (x1, y1, x2, y2) of the clipped segment, or None if the segment
        lies completely outside.
    """
    dx = x2 - x1
    dy = y2 - y1
    t0, t1 = 0.0, 1.0

    for p, q in ((-dx, x1 - min_x), (dx, max_x - x1), (-dy, y1 - min_y), (dy, max_y - y1)):
        if abs(p) < 1e-12:
            # Parallel to this edge
            if q < 0:
                return None
        else:
            t = q / p
            if p < 0:
                t0 = max(t0, t)
            else:
                t1 = min(t1, t)

    if t0 > t1:
        return None
    return (x1 + t0 * dx, y1 + t0 * dy, x1 + t1 * dx, y1 + t1 * dy)


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Tuple[int, int]]:
    """
    Integer grid cells visited by a segment, from (x0, y0) to (x1, y1).

    Both end cells are included.
    """
    cells = []
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy
    while True:
        cells.append((x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy
    return cells


class WhiteLightCompositor:
    """
    Dense additive accumulator with a per-frame tone map.

    Attributes:
        transform (ModelViewTransform): Model -> pixel mapping
        brightness (float): Channel increment per rasterized sample (k)
        white_limit (float): Amount subtracted so colors do not wash out
        scale (float): Over-saturation factor applied before the clamp
        rgb (np.ndarray): (height, width, 3) running channel sums
        intensity (np.ndarray): (height, width) running power sums
        touched (np.ndarray): (height, width) True where any sample landed
    """

    def __init__(
        self,
        transform: ModelViewTransform,
        brightness: float = WHITE_LIGHT_BRIGHTNESS,
        white_limit: float = WHITE_LIMIT,
        scale: float = OVERSATURATION_SCALE
    ) -> None:
        self.transform = transform
        self.brightness = brightness
        self.white_limit = white_limit
        self.scale = scale
        shape = (transform.height, transform.width)
        self.rgb = np.zeros(shape + (3,), dtype=np.float64)
        self.intensity = np.zeros(shape, dtype=np.float64)
        self.touched = np.zeros(shape, dtype=bool)

    @property
    def width(self) -> int:
        return self.transform.width

    @property
    def height(self) -> int:
        return self.transform.height

    def reset(self) -> None:
        """Clear the accumulator for a new frame."""
        self.rgb.fill(0.0)
        self.intensity.fill(0.0)
        self.touched.fill(False)

    def pixel_path(self, light_ray: LightRay) -> List[Tuple[int, int]]:
        """
        Grid cells of a ray's tip -> tail path, clipped to the canvas.

        Returns:
            List of (x, y) cells; empty when the ray misses the canvas or
            has non-finite endpoints.
        """
        if not light_ray.is_finite():
            return []
        x1, y1 = self.transform.model_to_view(light_ray.tip)
        x2, y2 = self.transform.model_to_view(light_ray.tail)
        clipped = clip_segment_to_rect(x1, y1, x2, y2, 0, 0, self.width - 1, self.height - 1)
        if clipped is None:
            return []
        cx1, cy1, cx2, cy2 = (int(round(v)) for v in clipped)
        return bresenham_line(cx1, cy1, cx2, cy2)

    def add_ray(self, light_ray: LightRay) -> int:
        """
        Rasterize one ray into the accumulator.

        Args:
            light_ray: The ray; zero-power rays are skipped

        Returns:
            Number of rasterized samples (before neighbour spreading)
        """
        if not light_ray.power > 0:
            return 0
        cells = self.pixel_path(light_ray)
        if not cells:
            return 0

        base = np.asarray(cells, dtype=np.intp)
        xs = np.concatenate([base[:, 0], base[:, 0] + 1, base[:, 0]])
        ys = np.concatenate([base[:, 1], base[:, 1], base[:, 1] + 1])
        inside = (xs < self.width) & (ys < self.height)
        xs = xs[inside]
        ys = ys[inside]

        term = np.asarray(light_ray.color[:3], dtype=np.float64) / 255.0 * self.brightness
        np.add.at(self.rgb, (ys, xs), term)
        np.add.at(self.intensity, (ys, xs), light_ray.power)
        self.touched[ys, xs] = True
        return len(cells)

    def add_rays(self, light_rays: Iterable[LightRay]) -> None:
        for light_ray in light_rays:
            self.add_ray(light_ray)

    def tone_map(self) -> np.ndarray:
        """
        Convert the accumulated sums into an RGBA image.

        Returns:
            (height, width, 4) float array with channels and alpha in [0, 1].
            Untouched pixels, and pixels whose channels sum to zero, are
            fully transparent.
        """
        image = np.zeros((self.height, self.width, 4), dtype=np.float64)
        m = self.rgb.max(axis=2)
        lit = self.touched & (m > 0)
        if not lit.any():
            return image

        m_lit = m[lit][:, None]
        channels = np.clip(
            self.rgb[lit] / m_lit * self.scale - self.white_limit,
            0.0,
            1.0 - self.white_limit
        )
        alpha = np.clip(np.sqrt(self.intensity[lit] * m[lit]), 0.0, 1.0)

        image[lit, :3] = channels
        image[lit, 3] = alpha
        return image

    def composite(self, light_rays: Iterable[LightRay]) -> np.ndarray:
        """
        Render one complete frame: reset, rasterize every ray, tone-map.

        Args:
            light_rays: All rays of the frame

        Returns:
            (height, width, 4) float RGBA image
        """
        self.reset()
        self.add_rays(light_rays)
        return self.tone_map()


def to_rgba8(image: np.ndarray) -> np.ndarray:
    """Convert a float RGBA image to uint8 (0-255)."""
    return np.round(np.clip(image, 0.0, 1.0) * 255).astype(np.uint8)


def lit_pixels(image: np.ndarray) -> Iterable[Tuple[int, int, Tuple[float, float, float, float]]]:
    """
    Yield (x, y, (r, g, b, a)) for every pixel with a non-zero alpha.
    """
    ys, xs = np.nonzero(image[:, :, 3] > 0)
    for y, x in zip(ys.tolist(), xs.tolist()):
        r, g, b, a = image[y, x].tolist()
        yield x, y, (r, g, b, a)
