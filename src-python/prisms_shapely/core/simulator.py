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

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Union

import numpy as np

from .colors import wavelength_to_rgb
from .constants import (
    MAX_RECURSION_DEPTH,
    MIN_RAY_POWER,
    INTERFACE_EPSILON,
    WHITE_LIGHT_MIN_WAVELENGTH,
    WHITE_LIGHT_MAX_WAVELENGTH,
)
from .geometry import Point, geometry
from .ray import Intersection, LightRay, Ray
from .refraction import interact
from .scene import Scene, SceneSnapshot
from .shapes import Shape


@dataclass
class RenderOutput:
    """
    Result of one recomputation.

    Attributes:
        light_rays (list): LightRay segments, in emission order
        intersections (list): Recorded Intersection points for the normal overlay
        color_mode (str): Color mode the rays were computed for
        show_normals (bool): Whether the caller should draw the normals
    """
    light_rays: List[LightRay] = field(default_factory=list)
    intersections: List[Intersection] = field(default_factory=list)
    color_mode: str = 'monochromatic'
    show_normals: bool = False


def white_light_wavelengths(samples: int) -> List[float]:
    """
    Vacuum wavelengths (m) sampled evenly across the visible band.

    Args:
        samples: Number of samples (>= 2); both band edges are included.

    Returns:
        List of wavelengths in metres, shortest first.
    """
    nm = np.linspace(WHITE_LIGHT_MIN_WAVELENGTH, WHITE_LIGHT_MAX_WAVELENGTH, samples)
    return [float(w) * 1e-9 for w in nm]


class PrismsSimulator:
    """
    Recursive ray propagation through the prisms of one scene snapshot.

    Each incident ray is traced to its nearest boundary crossing, where it
    splits into a reflected and a refracted child according to Snell's law
    and the Fresnel equations. Recursion stops past MAX_RECURSION_DEPTH or
    when a ray carries less than MIN_RAY_POWER.

    The simulator holds no state between runs: ``run()`` clears everything
    and rebuilds the output from the snapshot.

    Attributes:
        snapshot (SceneSnapshot): The frozen scene being traced
        verbose (int): Verbosity level
            0 = silent (no debug output)
            1 = verbose (one line per propagated ray)
            2 = very verbose/debug (interface physics)
        light_rays (list): LightRay segments of the current run
        intersections (list): Intersections recorded in the current run
        traced_ray_count (int): Number of rays propagated
        depth_limited_count (int): Rays dropped at the recursion limit
        weak_ray_count (int): Rays dropped below the power floor
        warning (str or None): Warning message from the last run
    """

    def __init__(self, snapshot: SceneSnapshot, verbose: int = 0) -> None:
        """
        Initialize the simulator.

        Args:
            snapshot (SceneSnapshot): The scene to trace
            verbose (int): Verbosity level (default: 0)
        """
        self.snapshot: SceneSnapshot = snapshot
        self.verbose: int = verbose
        self.light_rays: List[LightRay] = []
        self.intersections: List[Intersection] = []
        self.traced_ray_count: int = 0
        self.depth_limited_count: int = 0
        self.weak_ray_count: int = 0
        self.warning: Optional[str] = None

    def run(self) -> RenderOutput:
        """
        Trace every ray the laser emits.

        Returns:
            RenderOutput with the LightRay segments and intersections
        """
        self.light_rays = []
        self.intersections = []
        self.traced_ray_count = 0
        self.depth_limited_count = 0
        self.weak_ray_count = 0
        self.warning = None

        snapshot = self.snapshot
        laser = snapshot.laser
        if laser.on:
            laser_in_prism = self._inside_any_prism(laser.emission_point)
            for tail in self._beam_tails():
                self._emit(tail, laser.direction, laser.power, laser_in_prism)

        if self.depth_limited_count:
            self.warning = (
                f"{self.depth_limited_count} ray(s) reached the recursion limit "
                f"of {MAX_RECURSION_DEPTH} interactions and were dropped"
            )

        if self.verbose >= 1:
            print(f"\n### SIMULATOR traced {self.traced_ray_count} rays, "
                  f"{len(self.light_rays)} segments, {len(self.intersections)} intersections")
            if self.warning:
                print(f"  WARNING: {self.warning}")

        return RenderOutput(
            light_rays=list(self.light_rays),
            intersections=list(self.intersections),
            color_mode=snapshot.color_mode,
            show_normals=snapshot.show_normals,
        )

    def _beam_tails(self) -> List[Point]:
        """Tails of the parallel beams (a single tail unless many_rays > 1)."""
        laser = self.snapshot.laser
        count = self.snapshot.many_rays
        if count == 1:
            return [laser.emission_point]
        perpendicular = geometry.rotate_vec(laser.direction, math.pi / 2)
        spacing = self.snapshot.many_rays_spacing
        return [
            geometry.point_along(laser.emission_point, perpendicular, (i - (count - 1) / 2) * spacing)
            for i in range(count)
        ]

    def _emit(self, tail: Point, direction: Point, power: float, laser_in_prism: bool) -> None:
        """Start the propagation of one beam, once per wavelength sample in white mode."""
        snapshot = self.snapshot
        start_medium = snapshot.prism_medium if laser_in_prism else snapshot.environment_medium

        if snapshot.color_mode == 'white':
            wavelengths = white_light_wavelengths(snapshot.white_light_samples)
            last = len(wavelengths) - 1
            for i, wavelength in enumerate(wavelengths):
                ray = Ray.create(tail, direction, power, wavelength,
                                 start_medium.index_of_refraction(wavelength))
                if ray is not None:
                    # Only the spectrum's extremes feed the normal overlay
                    self.propagate(ray, 0, record_intersections=(i == 0 or i == last))
        else:
            wavelength = snapshot.laser.wavelength
            ray = Ray.create(tail, direction, power, wavelength,
                             start_medium.index_of_refraction(wavelength))
            if ray is not None:
                self.propagate(ray, 0, record_intersections=True)

    def propagate(self, incident: Ray, depth: int, record_intersections: bool = True) -> None:
        """
        Trace one ray and, recursively, its reflected and refracted children.

        Appends to ``self.light_rays`` and ``self.intersections``.

        Args:
            incident: The ray to trace
            depth: Number of interactions that led to this ray
            record_intersections: Whether hit points feed the normal overlay
        """
        if depth > MAX_RECURSION_DEPTH:
            self.depth_limited_count += 1
            return
        if incident.power < MIN_RAY_POWER:
            self.weak_ray_count += 1
            return

        self.traced_ray_count += 1
        L = incident.direction
        n1 = incident.index_of_refraction

        intersection = self._find_nearest_intersection(incident)

        if self.verbose >= 1:
            print(f"  depth={depth} tail=({incident.tail.x:.4g}, {incident.tail.y:.4g}) "
                  f"power={incident.power:.4f} lambda={incident.base_wavelength * 1e9:.1f}nm "
                  f"hit={intersection is not None}")

        if intersection is None:
            # No intersection: the ray keeps going one display step
            tip = geometry.point_along(incident.tail, L, self.snapshot.ray_extent)
            self.light_rays.append(self._light_ray(incident, tip))
            return

        if record_intersections:
            self.intersections.append(intersection)

        point = intersection.point
        probe = geometry.point_along(point, L, INTERFACE_EPSILON)
        n2 = self._index_at(probe, incident.base_wavelength)

        result = interact(L, intersection.unit_normal, n1, n2)

        if self.verbose >= 2:
            print(f"    n1={n1:.6f} n2={n2:.6f} cos1={result.cos_theta1:.6f} "
                  f"cos2={result.cos_theta2:.6f} R={result.reflectance:.6f} "
                  f"T={result.transmittance:.6f} TIR={result.total_internal_reflection}")

        # The incident segment itself, tail -> hit point
        self.light_rays.append(self._light_ray(incident, point))

        if self.snapshot.show_reflections or result.total_internal_reflection:
            reflected = incident.spawn(
                geometry.point_along(point, L, -INTERFACE_EPSILON),
                result.reflected_direction,
                incident.power * result.reflectance,
            )
            if reflected is not None:
                self.propagate(reflected, depth + 1, record_intersections)

        if result.transmittance > 0 and result.refracted_direction is not None:
            refracted = incident.spawn(
                probe,
                result.refracted_direction,
                incident.power * result.transmittance,
                index_of_refraction=n2,
            )
            if refracted is not None:
                self.propagate(refracted, depth + 1, record_intersections)

    def _find_nearest_intersection(self, ray: Ray) -> Optional[Intersection]:
        """
        Find the boundary crossing closest to the ray's tail.

        Candidates are collected in prism order, then boundary order; min()
        keeps the first of several equidistant candidates.
        """
        candidates: List[Intersection] = []
        for shape in self.snapshot.shapes:
            candidates.extend(shape.get_intersections(ray))
        if not candidates:
            return None
        return min(candidates, key=lambda hit: geometry.distance_squared(hit.point, ray.tail))

    def _inside_any_prism(self, point: Point) -> bool:
        return any(shape.contains_point(point) for shape in self.snapshot.shapes)

    def _index_at(self, point: Point, wavelength: float) -> float:
        """Index of refraction at a point: prism medium inside any prism, else environment."""
        if self._inside_any_prism(point):
            return self.snapshot.prism_medium.index_of_refraction(wavelength)
        return self.snapshot.environment_medium.index_of_refraction(wavelength)

    @staticmethod
    def _light_ray(ray: Ray, tip: Point) -> LightRay:
        return LightRay(
            tail=ray.tail,
            tip=tip,
            index_of_refraction=ray.index_of_refraction,
            wavelength_in_medium=ray.wavelength_in_medium,
            wavelength_in_vacuum=ray.base_wavelength,
            power=ray.power,
            color=wavelength_to_rgb(ray.base_wavelength * 1e9),
        )


def recompute(source: Union[Scene, SceneSnapshot], verbose: int = 0) -> RenderOutput:
    """
    Compute the rays for a scene state from scratch.

    This is a pure function of its input: the same snapshot always yields
    an equal RenderOutput. Callers decide when to call it (see Scene.update()).

    Args:
        source: A Scene (snapshotted here) or a SceneSnapshot
        verbose (int): Verbosity level passed to the simulator

    Returns:
        RenderOutput with the LightRay segments and intersections
    """
    snapshot = source.snapshot() if isinstance(source, Scene) else source
    return PrismsSimulator(snapshot, verbose=verbose).run()


def trace_ray(
    ray: Ray,
    shapes: Sequence[Shape],
    snapshot: SceneSnapshot,
    verbose: int = 0
) -> RenderOutput:
    """
    Propagate a single prepared ray through the given shapes.

    The shapes replace the snapshot's prisms; the media and flags come from
    the snapshot. Useful for examining one interaction in isolation.

    Args:
        ray: The incident ray
        shapes: Shapes in scene coordinates
        snapshot: Source of the media and display flags
        verbose (int): Verbosity level

    Returns:
        RenderOutput for that one ray
    """
    simulator = PrismsSimulator(replace(snapshot, shapes=tuple(shapes)), verbose=verbose)
    simulator.propagate(ray, 0)
    return RenderOutput(
        light_rays=list(simulator.light_rays),
        intersections=list(simulator.intersections),
        color_mode=snapshot.color_mode,
        show_normals=snapshot.show_normals,
    )
