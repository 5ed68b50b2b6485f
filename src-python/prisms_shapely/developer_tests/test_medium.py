"""
===============================================================================
MEDIUM AND LASER TESTS
===============================================================================

Tests for core/medium.py and core/laser.py:

1. DISPERSION
   - Nominal index reproduced at the reference wavelength (650 nm)
   - Normal dispersion (blue bends more than red)
   - Near-air media barely disperse

2. SUBSTANCES
   - Presets, custom media, validation
   - Display colors

3. LASER
   - Direction, angle, set_angle(), translate()
   - Wavelength / power validation

Run with:
    python developer_tests/test_medium.py

Or with pytest:
    pytest developer_tests/test_medium.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import pytest

from prisms_shapely.core.constants import SPEED_OF_LIGHT, WAVELENGTH_RED
from prisms_shapely.core.laser import Laser
from prisms_shapely.core.medium import (
    AIR, WATER, GLASS, DIAMOND, MYSTERY_A, MYSTERY_B, SUBSTANCES,
    AIR_COLOR, GLASS_COLOR, DIAMOND_COLOR,
    DispersionFunction, Medium, medium_color,
)


# =============================================================================
# TEST CONFIGURATION
# =============================================================================

TOLERANCE = 1e-9


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


# =============================================================================
# DISPERSION
# =============================================================================

def test_reference_index_reproduced():
    print("\n" + "=" * 60)
    print("TEST: Index at the Reference Wavelength")
    print("=" * 60)

    for medium in (AIR, WATER, GLASS, DIAMOND):
        n = medium.index_of_refraction(WAVELENGTH_RED)
        assert_close(n, medium.index_for_red, msg=f"{medium.name} at 650 nm")
        assert_close(medium.index_of_refraction_for_red_light, medium.index_for_red,
                     msg=f"{medium.name} red-light property")
        print(f"  {medium.name:8s} n(650 nm) = {n:.9f} - PASS")


def test_normal_dispersion():
    print("\n" + "=" * 60)
    print("TEST: Normal Dispersion")
    print("=" * 60)

    for medium in (WATER, GLASS, DIAMOND):
        blue = medium.index_of_refraction(400e-9)
        red = medium.index_of_refraction(700e-9)
        assert blue > red, f"{medium.name}: n(400)={blue} should exceed n(700)={red}"
        print(f"  {medium.name:8s} n(400)={blue:.5f} > n(700)={red:.5f} - PASS")

    spread_air = AIR.index_of_refraction(400e-9) - AIR.index_of_refraction(700e-9)
    spread_glass = GLASS.index_of_refraction(400e-9) - GLASS.index_of_refraction(700e-9)
    assert spread_air < spread_glass / 100, "Air should barely disperse"
    print(f"  Air spread {spread_air:.2e} << glass spread {spread_glass:.2e} - PASS")

    dispersion = DispersionFunction(1.5)
    assert_close(dispersion(500e-9), GLASS.index_of_refraction(500e-9), msg="__call__")


def test_dispersion_validation():
    print("\n" + "=" * 60)
    print("TEST: Dispersion Validation")
    print("=" * 60)

    with pytest.raises(ValueError):
        DispersionFunction(0.0)
    with pytest.raises(ValueError):
        Medium('bad', -1.0)
    print("  Non-positive reference index raises ValueError - PASS")


# =============================================================================
# SUBSTANCES
# =============================================================================

def test_substances():
    print("\n" + "=" * 60)
    print("TEST: Substances")
    print("=" * 60)

    assert SUBSTANCES == (AIR, WATER, GLASS, DIAMOND, MYSTERY_A, MYSTERY_B)
    assert MYSTERY_A.is_mystery and MYSTERY_B.is_mystery
    assert not GLASS.is_mystery
    print("  Presets and mystery flags - PASS")

    custom = Medium.custom(1.7)
    assert custom.is_custom
    assert custom.name == 'custom'
    assert_close(custom.index_of_refraction(WAVELENGTH_RED), 1.7, msg="custom index")
    print("  Medium.custom() - PASS")


def test_medium_colors():
    print("\n" + "=" * 60)
    print("TEST: Medium Colors")
    print("=" * 60)

    assert AIR.color == AIR_COLOR, f"Air should be white, got {AIR.color}"
    assert GLASS.color == GLASS_COLOR, f"Glass color mismatch: {GLASS.color}"
    assert DIAMOND.color == DIAMOND_COLOR, f"Diamond color mismatch: {DIAMOND.color}"
    assert Medium.custom(3.0).color == DIAMOND_COLOR, "Above diamond stays diamond"
    print("  Anchor colors - PASS")

    # Between water and glass every channel lies between the anchors
    mid = medium_color(1.4)
    water = WATER.color
    for c, lo, hi in zip(mid, GLASS_COLOR, water):
        assert min(lo, hi) <= c <= max(lo, hi), f"Channel {c} outside [{lo}, {hi}]"
    print(f"  n=1.4 -> {mid} - PASS")


# =============================================================================
# LASER
# =============================================================================

def test_laser_direction_and_angle():
    print("\n" + "=" * 60)
    print("TEST: Laser Direction and Angle")
    print("=" * 60)

    laser = Laser(emission_point=(-1.0, 0.0), pivot=(0.0, 0.0))
    assert_close(laser.direction.x, 1.0, msg="direction x")
    assert_close(laser.direction.y, 0.0, msg="direction y")
    assert_close(laser.angle, math.pi, msg="angle")
    assert_close(laser.frequency, SPEED_OF_LIGHT / WAVELENGTH_RED, tol=1.0, msg="frequency")
    print("  Default laser shoots along +x - PASS")

    laser.set_angle(math.pi / 2)
    assert_close(laser.emission_point.x, 0.0, msg="emission x")
    assert_close(laser.emission_point.y, 1.0, msg="emission y")
    assert_close(laser.direction.y, -1.0, msg="direction after set_angle")
    print("  set_angle() swings the emission point about the pivot - PASS")

    laser.translate(2.0, 3.0)
    assert_close(laser.pivot.x, 2.0, msg="pivot x")
    assert_close(laser.emission_point.y, 4.0, msg="emission y after translate")
    assert_close(laser.direction.y, -1.0, msg="direction unchanged by translate")
    print("  translate() - PASS")

    aimed = Laser.from_angle((0.0, 0.0), math.pi / 4)
    assert_close(aimed.direction.x, math.sqrt(0.5), msg="from_angle x")
    assert_close(aimed.direction.y, math.sqrt(0.5), msg="from_angle y")
    print("  from_angle() - PASS")


def test_laser_validation():
    print("\n" + "=" * 60)
    print("TEST: Laser Validation")
    print("=" * 60)

    with pytest.raises(ValueError):
        Laser(wavelength=800e-9)
    with pytest.raises(ValueError):
        Laser(wavelength=300e-9)
    with pytest.raises(ValueError):
        Laser(power=1.5)
    with pytest.raises(ValueError):
        Laser(emission_point=(1.0, 1.0), pivot=(1.0, 1.0))

    laser = Laser(wavelength=380e-9)
    laser.wavelength = 700e-9
    assert_close(laser.wavelength, 700e-9, tol=1e-18, msg="band edge accepted")
    print("  Out-of-range wavelength/power and coincident points rejected - PASS")


# =============================================================================
# TEST RUNNER
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("MEDIUM AND LASER TESTS")
    print("=" * 78)

    tests = [
        ("Reference Index", test_reference_index_reproduced),
        ("Normal Dispersion", test_normal_dispersion),
        ("Dispersion Validation", test_dispersion_validation),
        ("Substances", test_substances),
        ("Medium Colors", test_medium_colors),
        ("Laser Direction", test_laser_direction_and_angle),
        ("Laser Validation", test_laser_validation),
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
