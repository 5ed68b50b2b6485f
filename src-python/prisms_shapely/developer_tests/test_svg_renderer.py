"""
===============================================================================
SVG RENDERER TESTS
===============================================================================

Tests for core/svg_renderer.py:

1. STROKES
   - Opacity is sqrt(power)
   - Invisible, non-finite and off-canvas rays are skipped
   - Metadata levels

2. SCENES
   - Monochromatic frame: prisms, ray strokes, normals
   - White-light frame: raster group instead of strokes

3. OUTPUT
   - to_string() and save()

Run with:
    python developer_tests/test_svg_renderer.py

Or with pytest:
    pytest developer_tests/test_svg_renderer.py -v
===============================================================================
"""

import sys
import math
import tempfile
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import numpy as np
import pytest

from prisms_shapely.core.geometry import Point
from prisms_shapely.core.laser import Laser
from prisms_shapely.core.prism import Prism
from prisms_shapely.core.ray import LightRay
from prisms_shapely.core.scene import Scene
from prisms_shapely.core.shapes import Circle, Polygon
from prisms_shapely.core.svg_renderer import SVGRenderer, power_to_opacity


# =============================================================================
# TEST CONFIGURATION
# =============================================================================

TOLERANCE = 1e-12
VIEWBOX = (-2.0, -6.0, 14.0, 12.0)


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def block_scene():
    """Laser at (-1, 0) shooting +x into a glass block spanning x = 0..10."""
    scene = Scene(Laser(emission_point=(-1.0, 0.0), pivot=(0.0, 0.0)))
    scene.add_prism(Prism(Polygon([(0, -5), (10, -5), (10, 5), (0, 5)])))
    return scene


def make_renderer(**kwargs):
    return SVGRenderer(width=700, height=600, viewbox=VIEWBOX, **kwargs)


def red_segment(tail=(0.0, 0.0), tip=(1.0, 0.0), power=1.0):
    return LightRay(Point(*tail), Point(*tip), 1.0, 650e-9, 650e-9, power, (255, 0, 0))


# =============================================================================
# STROKES
# =============================================================================

def test_power_to_opacity():
    print("\n" + "=" * 60)
    print("TEST: Stroke Opacity")
    print("=" * 60)

    assert_close(power_to_opacity(0.25), 0.5, msg="sqrt(0.25)")
    assert_close(power_to_opacity(1.0), 1.0, msg="Full power")
    assert power_to_opacity(0.0) == 0.0
    assert power_to_opacity(-1.0) == 0.0
    assert power_to_opacity(math.nan) == 0.0
    print("  opacity = sqrt(power), 0 for non-positive power - PASS")


def test_skipped_strokes():
    print("\n" + "=" * 60)
    print("TEST: Skipped Strokes")
    print("=" * 60)

    renderer = make_renderer()
    assert renderer.draw_light_ray(red_segment(power=1e-9)) is None
    assert renderer.draw_light_ray(red_segment(tail=(50.0, 50.0), tip=(60.0, 50.0))) is None
    assert renderer.draw_light_ray(red_segment(tip=(math.inf, 0.0))) is None
    assert '<line' not in renderer.to_string()
    print("  Invisible, off-canvas and non-finite rays - PASS")


def test_stroke_attributes():
    print("\n" + "=" * 60)
    print("TEST: Stroke Attributes")
    print("=" * 60)

    renderer = make_renderer()
    line = renderer.draw_light_ray(red_segment(tail=(-10.0, 0.0), tip=(1.0, 0.0), power=0.25), zoom=2.0)
    assert line is not None
    assert_close(line['x1'], -2.0, msg="Clipped to the viewbox")
    assert_close(line['stroke-opacity'], 0.5, msg="Opacity")
    assert line['stroke'] == 'rgb(255,0,0)'
    svg = renderer.to_string()
    assert 'class="ray"' in svg
    assert 'data-power="0.25"' in svg
    assert 'data-wavelength-nm="650.0"' in svg
    print("  Clipping, opacity, color and full metadata - PASS")

    renderer = make_renderer(metadata_level='none')
    renderer.draw_light_ray(red_segment())
    svg = renderer.to_string()
    assert '<line' in svg
    assert 'class="ray"' not in svg and 'data-power' not in svg
    print("  metadata_level='none' - PASS")

    with pytest.raises(ValueError):
        make_renderer(metadata_level='verbose')
    print("  Invalid metadata level rejected - PASS")


def test_draw_prism():
    print("\n" + "=" * 60)
    print("TEST: Prism Outlines")
    print("=" * 60)

    renderer = make_renderer()
    renderer.draw_prism(Polygon([(0, 0), (4, 0), (0, 3)]), label='wedge')
    renderer.draw_prism(Circle((5.0, 0.0), 2.0))
    svg = renderer.to_string()
    assert '<polygon' in svg
    assert '<circle' in svg
    assert 'inkscape:label="wedge"' in svg
    assert 'class="prism polygon"' in svg and 'class="prism circle"' in svg
    print("  Polygon and circle prisms - PASS")


# =============================================================================
# SCENES
# =============================================================================

def test_monochromatic_scene():
    print("\n" + "=" * 60)
    print("TEST: Monochromatic Frame")
    print("=" * 60)

    scene = block_scene()
    scene.show_normals = True
    output = scene.update()
    renderer = make_renderer()
    image = renderer.draw_scene(scene, output)
    assert image is None, "No raster in monochromatic mode"

    svg = renderer.to_string()
    assert svg.count('class="ray"') == len(output.light_rays) == 3
    assert 'stroke-opacity' in svg
    assert svg.count('class="normal"') == len(output.intersections)
    assert 'white-light' not in svg
    print(f"  {len(output.light_rays)} strokes, {len(output.intersections)} normals - PASS")


def test_white_light_scene():
    print("\n" + "=" * 60)
    print("TEST: White-Light Frame")
    print("=" * 60)

    scene = block_scene()
    scene.color_mode = 'white'
    scene.show_normals = True
    output = scene.update()
    renderer = make_renderer()
    image = renderer.draw_scene(scene, output)

    assert isinstance(image, np.ndarray)
    assert image.shape == (600, 700, 4)
    assert image[:, :, 3].any(), "Some pixels are lit"
    svg = renderer.to_string()
    assert 'id="white-light"' in svg
    assert 'class="ray"' not in svg, "White light is rasterized, not stroked"
    assert svg.count('<rect') == 1 + int((image[:, :, 3] > 0).sum())
    assert 'stroke="white"' in svg, "Normals are white in white-light mode"

    elements = renderer.dwg.elements
    assert elements.index(renderer.layer_rays) > elements.index(renderer.layer_objects)
    print(f"  {int((image[:, :, 3] > 0).sum())} lit pixels - PASS")


# =============================================================================
# OUTPUT
# =============================================================================

def test_save_and_to_string():
    print("\n" + "=" * 60)
    print("TEST: Save")
    print("=" * 60)

    scene = block_scene()
    renderer = make_renderer()
    renderer.draw_scene(scene.snapshot(), scene.update())
    svg = renderer.to_string()
    assert svg.startswith('<svg')
    assert 'id="background"' in svg

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / 'frame.svg'
        renderer.save(str(path))
        assert path.exists()
        assert '<line' in path.read_text(encoding='utf-8')
    print("  to_string() and save() - PASS")


# =============================================================================
# TEST RUNNER
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SVG RENDERER TESTS")
    print("=" * 78)

    tests = [
        ("Stroke Opacity", test_power_to_opacity),
        ("Skipped Strokes", test_skipped_strokes),
        ("Stroke Attributes", test_stroke_attributes),
        ("Prism Outlines", test_draw_prism),
        ("Monochromatic Frame", test_monochromatic_scene),
        ("White-Light Frame", test_white_light_scene),
        ("Save", test_save_and_to_string),
    ]

    passed = 0
    failed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            failed += 1
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
