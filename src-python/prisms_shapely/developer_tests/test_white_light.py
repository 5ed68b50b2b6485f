"""
===============================================================================
WHITE LIGHT COMPOSITOR TESTS
===============================================================================

Tests for core/white_light.py:

1. RASTERIZATION
   - Bresenham cells, Liang-Barsky clipping, model -> pixel mapping
   - Neighbour spreading and skipped rays

2. TONE MAP
   - Single-wavelength rays keep their hue
   - Overlapping spectral rays add up to white
   - Untouched and zero-channel pixels stay transparent

3. FRAMES
   - composite() resets the accumulator between frames

Run with:
    python developer_tests/test_white_light.py

Or with pytest:
    pytest developer_tests/test_white_light.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import numpy as np
import pytest

from prisms_shapely.core.colors import wavelength_to_rgb
from prisms_shapely.core.constants import WHITE_LIGHT_BRIGHTNESS
from prisms_shapely.core.geometry import Point
from prisms_shapely.core.ray import LightRay
from prisms_shapely.core.white_light import (
    ModelViewTransform, WhiteLightCompositor,
    bresenham_line, clip_segment_to_rect, lit_pixels, to_rgba8,
)


# =============================================================================
# TEST CONFIGURATION
# =============================================================================

TOLERANCE = 1e-9
K = WHITE_LIGHT_BRIGHTNESS


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def horizontal_ray(wavelength_nm=650.0, power=1.0, color=None, y=5.0):
    """A ray from x=1 to x=8 on a 10 x 10 model grid (one unit per pixel)."""
    return LightRay(
        tail=Point(1.0, y),
        tip=Point(8.0, y),
        index_of_refraction=1.0,
        wavelength_in_medium=wavelength_nm * 1e-9,
        wavelength_in_vacuum=wavelength_nm * 1e-9,
        power=power,
        color=color if color is not None else wavelength_to_rgb(wavelength_nm),
    )


def make_compositor():
    return WhiteLightCompositor(ModelViewTransform((0.0, 0.0, 10.0, 10.0), 10, 10))


# =============================================================================
# RASTERIZATION
# =============================================================================

def test_bresenham():
    print("\n" + "=" * 60)
    print("TEST: Bresenham Line")
    print("=" * 60)

    assert bresenham_line(0, 0, 3, 0) == [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert bresenham_line(0, 0, 2, 2) == [(0, 0), (1, 1), (2, 2)]
    assert bresenham_line(3, 1, 0, 1) == [(3, 1), (2, 1), (1, 1), (0, 1)]
    assert bresenham_line(4, 4, 4, 4) == [(4, 4)]

    steep = bresenham_line(0, 0, 1, 5)
    assert steep[0] == (0, 0) and steep[-1] == (1, 5)
    assert len(steep) == 6, "One cell per row on a steep line"
    print("  Horizontal, diagonal, reversed, single-cell and steep lines - PASS")


def test_clipping():
    print("\n" + "=" * 60)
    print("TEST: Liang-Barsky Clipping")
    print("=" * 60)

    clipped = clip_segment_to_rect(-5, 0, 5, 0, 0, -1, 2, 1)
    assert clipped is not None
    for got, want in zip(clipped, (0.0, 0.0, 2.0, 0.0)):
        assert_close(got, want, msg="Clipped coordinate")
    print(f"  Crossing segment -> {clipped} - PASS")

    assert clip_segment_to_rect(-5, 5, 5, 5, 0, -1, 2, 1) is None
    assert clip_segment_to_rect(3, 0, 4, 0, 0, -1, 2, 1) is None
    print("  Segments outside the rectangle - PASS")

    assert clip_segment_to_rect(0.5, 0.5, 1.5, 0.5, 0, 0, 2, 2) == (0.5, 0.5, 1.5, 0.5)
    print("  Segment fully inside is unchanged - PASS")


def test_model_to_view():
    print("\n" + "=" * 60)
    print("TEST: Model -> Pixel Mapping")
    print("=" * 60)

    transform = ModelViewTransform((-1.0, -2.0, 4.0, 4.0), 200, 200)
    x, y = transform.model_to_view(Point(-1.0, 2.0))
    assert_close(x, 0.0, msg="Top-left column")
    assert_close(y, 0.0, msg="Top-left row")
    x, y = transform.model_to_view(Point(1.0, 0.0))
    assert_close(x, 100.0, msg="Center column")
    assert_close(y, 100.0, msg="Center row (Y flipped)")
    back = transform.view_to_model(x, y)
    assert_close(back.x, 1.0, msg="Round-trip x")
    assert_close(back.y, 0.0, msg="Round-trip y")
    print("  Y-up model onto Y-down pixels - PASS")

    with pytest.raises(ValueError):
        ModelViewTransform((0.0, 0.0, 1.0, 1.0), 0, 10)
    with pytest.raises(ValueError):
        ModelViewTransform((0.0, 0.0, 0.0, 1.0), 10, 10)
    print("  Non-positive canvas rejected - PASS")


def test_skipped_rays():
    print("\n" + "=" * 60)
    print("TEST: Skipped Rays")
    print("=" * 60)

    compositor = make_compositor()
    assert compositor.add_ray(horizontal_ray(power=0.0)) == 0
    outside = horizontal_ray(y=50.0)
    assert compositor.add_ray(outside) == 0
    broken = LightRay(Point(0.0, 0.0), Point(math.inf, 0.0), 1.0, 1e-6, 1e-6, 1.0, (255, 0, 0))
    assert compositor.pixel_path(broken) == []
    assert not compositor.touched.any()
    print("  Zero-power, off-canvas and non-finite rays leave the accumulator empty - PASS")


# =============================================================================
# TONE MAP
# =============================================================================

def test_single_red_ray():
    print("\n" + "=" * 60)
    print("TEST: Tone Map, Single Red Ray")
    print("=" * 60)

    compositor = make_compositor()
    samples = compositor.add_ray(horizontal_ray(650.0))
    assert samples == 8, f"Expected 8 cells from x=1 to x=8, got {samples}"
    image = compositor.tone_map()

    # Pixel (4, 5): its own sample plus the right-neighbour spread of (3, 5)
    r, g, b, a = image[5, 4]
    assert_close(r, 0.8, msg="Red channel")
    assert_close(g, 0.0, msg="Green channel")
    assert_close(b, 0.0, msg="Blue channel")
    # alpha = sqrt(intensity * m) = sqrt(2 * 2k)
    assert_close(a, 2 * math.sqrt(K), msg="Alpha from two hits")
    print(f"  Pixel (4, 5): rgba=({r:.3f}, {g:.3f}, {b:.3f}, {a:.4f}) - PASS")

    # First cell has no left neighbour; the row below only gets the down spread
    assert_close(image[5, 1, 3], math.sqrt(K), msg="First cell alpha")
    assert_close(image[6, 4, 3], math.sqrt(K), msg="Down-spread alpha")
    assert image[5, 9, 3] > 0, "Right spread of the last cell"
    assert image[4, 4, 3] == 0, "Row above is untouched"
    assert image[5, 0, 3] == 0, "Left of the first cell is untouched"
    print("  Neighbour spreading to (x+1, y) and (x, y+1) only - PASS")


def test_blue_ray_hue():
    print("\n" + "=" * 60)
    print("TEST: Tone Map, Blue Ray")
    print("=" * 60)

    compositor = make_compositor()
    image = compositor.composite([horizontal_ray(450.0)])
    r, g, b, a = image[5, 4]
    assert_close(r, 0.0, msg="Red channel")
    assert_close(g, 0.6, msg="Green channel")
    assert_close(b, 0.8, msg="Blue channel")
    print(f"  450 nm -> ({r:.3f}, {g:.3f}, {b:.3f}) - PASS")


def test_spectral_overlap_is_white():
    print("\n" + "=" * 60)
    print("TEST: Additive Mixing")
    print("=" * 60)

    compositor = make_compositor()
    rays = [horizontal_ray(nm) for nm in (650.0, 530.0, 450.0)]
    image = compositor.composite(rays)
    r, g, b, a = image[5, 4]
    for channel, value in zip("rgb", (r, g, b)):
        assert_close(value, 0.8, msg=f"{channel} channel")
    assert 0.0 < a <= 1.0
    print(f"  Red + green + blue -> ({r:.2f}, {g:.2f}, {b:.2f}), alpha {a:.3f} - PASS")


def test_transparent_pixels():
    print("\n" + "=" * 60)
    print("TEST: Transparent Pixels")
    print("=" * 60)

    compositor = make_compositor()
    image = compositor.composite([horizontal_ray(color=(0, 0, 0))])
    assert compositor.touched[5, 4], "Black ray still touches its pixels"
    assert not image[:, :, 3].any(), "Zero max channel gives a transparent pixel"
    assert np.isfinite(image).all()
    print("  Black ray: touched but transparent, no NaN - PASS")

    image = compositor.composite([])
    assert not image.any()
    assert list(lit_pixels(image)) == []
    print("  Empty frame - PASS")


def test_alpha_saturates():
    print("\n" + "=" * 60)
    print("TEST: Alpha Clamp")
    print("=" * 60)

    compositor = make_compositor()
    image = compositor.composite([horizontal_ray(650.0)] * 200)
    assert image[:, :, 3].max() <= 1.0
    assert_close(image[5, 4, 3], 1.0, msg="Saturated alpha")
    print("  Alpha clamped to 1 - PASS")


# =============================================================================
# FRAMES
# =============================================================================

def test_composite_resets():
    print("\n" + "=" * 60)
    print("TEST: Per-Frame Reset")
    print("=" * 60)

    compositor = make_compositor()
    rays = [horizontal_ray(650.0), horizontal_ray(450.0, y=2.0)]
    first = compositor.composite(rays)
    second = compositor.composite(rays)
    assert np.array_equal(first, second), "Recompositing the same rays gives the same image"

    rgba8 = to_rgba8(first)
    assert rgba8.dtype == np.uint8
    assert rgba8[5, 4, 0] == round(0.8 * 255)
    pixels = list(lit_pixels(first))
    assert all(a > 0 for _, _, (_, _, _, a) in pixels)
    assert len(pixels) == int((first[:, :, 3] > 0).sum())
    print(f"  Identical frames, {len(pixels)} lit pixels - PASS")


# =============================================================================
# TEST RUNNER
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("WHITE LIGHT COMPOSITOR TESTS")
    print("=" * 78)

    tests = [
        ("Bresenham Line", test_bresenham),
        ("Liang-Barsky Clipping", test_clipping),
        ("Model -> Pixel Mapping", test_model_to_view),
        ("Skipped Rays", test_skipped_rays),
        ("Single Red Ray", test_single_red_ray),
        ("Blue Ray", test_blue_ray_hue),
        ("Additive Mixing", test_spectral_overlap_is_white),
        ("Transparent Pixels", test_transparent_pixels),
        ("Alpha Clamp", test_alpha_saturates),
        ("Per-Frame Reset", test_composite_resets),
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
