"""
Prisms demo: a laser through the stock prisms, in red and in white light.

Run with:
    python examples/prisms_demo/prisms_demo.py

SVG files (and PNGs, if cairosvg is installed) are written to
examples/prisms_demo/output/.
"""

import sys
import os

# Add the src-python directory to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from prisms_shapely.analysis import critical_angle, render_scene
from prisms_shapely.core.constants import CHARACTERISTIC_LENGTH
from prisms_shapely.core.laser import Laser
from prisms_shapely.core.medium import DIAMOND, WATER
from prisms_shapely.core.scene import Scene
from prisms_shapely.optical_elements.prisms import PROTOTYPE_SIZE, prism_prototypes, triangle

# Visible region around the origin (Y-up), in metres
L = CHARACTERISTIC_LENGTH
VIEWBOX = (-20 * L, -12 * L, 40 * L, 24 * L)


def make_scene(prism):
    """A laser 15 wavelengths left of the origin, shooting +x at a prism on the origin."""
    scene = Scene(Laser(emission_point=(-15 * L, 0.5 * L), pivot=(0.0, 0.5 * L)))
    scene.ray_extent = 2e-4
    scene.add_prism(prism)
    return scene


def dispersion_demo(output_dir, verbose=0):
    """Red laser, then white light, through the equilateral prism."""
    print("Laser through an equilateral glass prism...\n")

    scene = make_scene(triangle(size=2 * PROTOTYPE_SIZE))
    scene.name = 'triangle'
    scene.laser.set_angle(scene.laser.angle + 0.15)

    result = render_scene(scene, output_dir, VIEWBOX, prefix='mono',
                          description='650 nm laser through a glass triangle', verbose=verbose)
    print(f"Segments: {result['scene_summary']['segment_count']}")
    print(f"Saved to: {result['svg_path']}")

    scene.color_mode = 'white'
    scene.show_normals = True
    result = render_scene(scene, output_dir, VIEWBOX, prefix='white',
                          description='White light fanned out by a glass triangle', verbose=verbose)
    print(f"Segments (white light): {result['scene_summary']['segment_count']}")
    print(f"Saved to: {result['svg_path']}")


def prototypes_demo(output_dir, verbose=0):
    """One frame per stock prism, with partial reflections."""
    print("\nStock prisms with reflections...\n")

    for prism in prism_prototypes():
        scene = make_scene(prism)
        scene.name = prism.kind
        scene.show_reflections = True
        result = render_scene(scene, output_dir, VIEWBOX, prefix=prism.kind,
                              description=f'Laser through the {prism.kind} prism', verbose=verbose)
        summary = result['scene_summary']
        print(f"  {prism.kind:15s} {summary['segment_count']:3d} segments -> {result['svg_path']}")
        if summary['warning']:
            print(f"    Warning: {summary['warning']}")


def media_demo(output_dir, verbose=0):
    """Diamond in water: a higher index contrast and a different critical angle."""
    print("\nDiamond prism in water...\n")

    n_diamond = DIAMOND.index_for_red
    n_water = WATER.index_for_red
    print(f"Critical angle diamond -> water: {critical_angle(n_diamond, n_water):.2f} deg")

    scene = make_scene(triangle(size=2 * PROTOTYPE_SIZE))
    scene.name = 'diamond_in_water'
    scene.environment_medium = WATER
    scene.prism_medium = DIAMOND
    scene.many_rays = 5
    scene.show_reflections = True
    result = render_scene(scene, output_dir, VIEWBOX, prefix='diamond',
                          description='Five parallel beams through diamond in water', verbose=verbose)
    print(f"Segments: {result['scene_summary']['segment_count']}")
    print(f"Saved to: {result['svg_path']}")


if __name__ == '__main__':
    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    os.makedirs(output_dir, exist_ok=True)

    dispersion_demo(output_dir)
    prototypes_demo(output_dir)
    media_demo(output_dir)
