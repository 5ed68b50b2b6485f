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

import uuid as uuid_module
from dataclasses import dataclass
from typing import List, Optional, Tuple, TYPE_CHECKING

from .constants import DEFAULT_RAY_EXTENT, MANY_RAYS_SPACING, WHITE_LIGHT_SAMPLES
from .geometry import Point
from .laser import Laser
from .medium import AIR, GLASS, Medium
from .prism import Prism
from .shapes import Shape

if TYPE_CHECKING:
    from .simulator import RenderOutput


@dataclass(frozen=True)
class LaserState:
    """Immutable copy of the laser settings used for one recomputation."""
    on: bool
    emission_point: Point
    direction: Point
    wavelength: float
    power: float


@dataclass(frozen=True)
class SceneSnapshot:
    """
    Everything the engine reads, frozen at one point in time.

    Attributes:
        laser: Laser settings
        environment_medium: Medium around the prisms
        prism_medium: Medium the prisms are made of
        shapes: Prism outlines in scene coordinates, in insertion order
        color_mode: 'monochromatic' or 'white'
        many_rays: Number of parallel beams
        many_rays_spacing: Perpendicular distance between beams
        white_light_samples: Wavelength samples per beam in white mode
        show_reflections: Propagate partial reflections
        show_normals: Draw normals at the recorded intersections
        ray_extent: Length drawn for rays that leave the scene
    """
    laser: LaserState
    environment_medium: Medium
    prism_medium: Medium
    shapes: Tuple[Shape, ...]
    color_mode: str = 'monochromatic'
    many_rays: int = 1
    many_rays_spacing: float = MANY_RAYS_SPACING
    white_light_samples: int = WHITE_LIGHT_SAMPLES
    show_reflections: bool = False
    show_normals: bool = False
    ray_extent: float = DEFAULT_RAY_EXTENT


class Scene:
    """
    Editable state of the prisms interaction.

    The scene owns the laser, the two media, the prisms and the display
    flags. It is the producer of engine inputs: ``snapshot()`` freezes it
    and ``update()`` recomputes the rays only when something changed.

    Attributes:
        laser (Laser): The light source
        environment_medium (Medium): Medium around the prisms (default: air)
        prism_medium (Medium): Medium of every prism (default: glass)
        prisms (list): Prisms, in insertion order
        color_mode (str): 'monochromatic' (one wavelength) or 'white'
        many_rays (int): Number of parallel beams (1 = single ray)
        many_rays_spacing (float): Perpendicular distance between beams
        white_light_samples (int): Wavelength samples per beam in white mode
        show_reflections (bool): Propagate partial reflections (TIR always is)
        show_normals (bool): Draw surface normals at intersections
        ray_extent (float): Length drawn for rays that leave the scene
        dirty (bool): True when the cached output is stale
        error (str or None): Error message from the last run
        warning (str or None): Warning message from the last run
        name (str or None): Optional name for the scene (used in exports)
    """

    VALID_COLOR_MODES = ('monochromatic', 'white')

    def __init__(self, laser: Optional[Laser] = None) -> None:
        """Initialize a scene with an air environment and glass prisms."""
        self.laser: Laser = laser if laser is not None else Laser()
        self._environment_medium: Medium = AIR
        self._prism_medium: Medium = GLASS
        self.prisms: List[Prism] = []
        self._color_mode = 'monochromatic'
        self._many_rays = 1
        self._many_rays_spacing = MANY_RAYS_SPACING
        self._white_light_samples = WHITE_LIGHT_SAMPLES
        self._show_reflections = False
        self._show_normals = False
        self._ray_extent = DEFAULT_RAY_EXTENT
        self.error: Optional[str] = None
        self.warning: Optional[str] = None
        self.name: Optional[str] = None
        self.uuid: str = str(uuid_module.uuid4())
        self.dirty = True
        self._output: Optional['RenderOutput'] = None
        self._output_snapshot: Optional[SceneSnapshot] = None

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    @property
    def environment_medium(self) -> Medium:
        return self._environment_medium

    @environment_medium.setter
    def environment_medium(self, value: Medium) -> None:
        self._environment_medium = value
        self.dirty = True

    @property
    def prism_medium(self) -> Medium:
        return self._prism_medium

    @prism_medium.setter
    def prism_medium(self, value: Medium) -> None:
        self._prism_medium = value
        self.dirty = True

    @property
    def color_mode(self) -> str:
        """Get the color mode."""
        return self._color_mode

    @color_mode.setter
    def color_mode(self, value: str) -> None:
        """Set the color mode with validation."""
        if value not in self.VALID_COLOR_MODES:
            raise ValueError(
                f"Invalid color_mode '{value}'. "
                f"Valid options: {self.VALID_COLOR_MODES}"
            )
        self._color_mode = value
        self.dirty = True

    @property
    def many_rays(self) -> int:
        return self._many_rays

    @many_rays.setter
    def many_rays(self, value: int) -> None:
        if int(value) != value or value < 1:
            raise ValueError(f"Invalid many_rays {value}. Must be an integer >= 1")
        self._many_rays = int(value)
        self.dirty = True

    @property
    def many_rays_spacing(self) -> float:
        return self._many_rays_spacing

    @many_rays_spacing.setter
    def many_rays_spacing(self, value: float) -> None:
        if not value > 0:
            raise ValueError(f"Invalid many_rays_spacing {value}. Must be positive")
        self._many_rays_spacing = value
        self.dirty = True

    @property
    def white_light_samples(self) -> int:
        return self._white_light_samples

    @white_light_samples.setter
    def white_light_samples(self, value: int) -> None:
        if int(value) != value or value < 2:
            raise ValueError(f"Invalid white_light_samples {value}. Must be an integer >= 2")
        self._white_light_samples = int(value)
        self.dirty = True

    @property
    def show_reflections(self) -> bool:
        return self._show_reflections

    @show_reflections.setter
    def show_reflections(self, value: bool) -> None:
        self._show_reflections = bool(value)
        self.dirty = True

    @property
    def show_normals(self) -> bool:
        return self._show_normals

    @show_normals.setter
    def show_normals(self, value: bool) -> None:
        self._show_normals = bool(value)
        self.dirty = True

    @property
    def ray_extent(self) -> float:
        return self._ray_extent

    @ray_extent.setter
    def ray_extent(self, value: float) -> None:
        if not value > 0:
            raise ValueError(f"Invalid ray_extent {value}. Must be positive")
        self._ray_extent = value
        self.dirty = True

    # -------------------------------------------------------------------------
    # Prisms
    # -------------------------------------------------------------------------

    def add_prism(self, prism: Prism) -> Prism:
        """
        Add a prism to the scene.

        Args:
            prism: The prism to add

        Returns:
            The same prism, for chaining
        """
        self.prisms.append(prism)
        self.dirty = True
        return prism

    def remove_prism(self, prism: Prism) -> None:
        self.prisms.remove(prism)
        self.dirty = True

    def clear_prisms(self) -> None:
        self.prisms = []
        self.dirty = True

    def is_laser_in_prism(self) -> bool:
        """True if the emission point lies inside any prism."""
        return any(prism.contains(self.laser.emission_point) for prism in self.prisms)

    # -------------------------------------------------------------------------
    # Recomputation
    # -------------------------------------------------------------------------

    def mark_dirty(self) -> None:
        """Flag the cached output as stale (e.g. after editing a prism in place)."""
        self.dirty = True

    def snapshot(self) -> SceneSnapshot:
        """Freeze the current state for the engine."""
        laser = LaserState(
            on=self.laser.on,
            emission_point=self.laser.emission_point,
            direction=self.laser.direction,
            wavelength=self.laser.wavelength,
            power=self.laser.power,
        )
        return SceneSnapshot(
            laser=laser,
            environment_medium=self._environment_medium,
            prism_medium=self._prism_medium,
            shapes=tuple(prism.translated_shape for prism in self.prisms),
            color_mode=self._color_mode,
            many_rays=self._many_rays,
            many_rays_spacing=self._many_rays_spacing,
            white_light_samples=self._white_light_samples,
            show_reflections=self._show_reflections,
            show_normals=self._show_normals,
            ray_extent=self._ray_extent,
        )

    def update(self, verbose: int = 0) -> 'RenderOutput':
        """
        Return the rays for the current state, recomputing only if needed.

        The output is rebuilt from scratch when the scene is dirty or its
        snapshot differs from the one the cached output was built from
        (which catches in-place edits of the laser or a prism).

        Args:
            verbose (int): Verbosity level passed to the simulator

        Returns:
            RenderOutput: The rays and intersections
        """
        from .simulator import PrismsSimulator

        snapshot = self.snapshot()
        if self.dirty or self._output is None or snapshot != self._output_snapshot:
            simulator = PrismsSimulator(snapshot, verbose=verbose)
            self._output = simulator.run()
            self.error = None
            self.warning = simulator.warning
            self._output_snapshot = snapshot
            self.dirty = False
        return self._output

    def get_display_name(self) -> str:
        """Scene name, or a short uuid-based name if unnamed."""
        if self.name:
            return self.name
        return f"scene_{self.uuid[:8]}"

    def __repr__(self) -> str:
        return (f"Scene(prisms={len(self.prisms)}, color_mode='{self._color_mode}', "
                f"environment='{self._environment_medium.name}', prism='{self._prism_medium.name}')")
