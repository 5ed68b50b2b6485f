"""
Copyright 2026 prisms-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
PRISM PROTOTYPES
===============================================================================
The stock bodies offered in the prism toolbox, all centred on the local
origin and sized from one characteristic length ``a`` (default: ten red
wavelengths).

Vertex layouts (before translation):

    Coordinate system: +X = East, +Y = North

    Triangle (equilateral, side a)        Trapezoid (base a, top a/2)

             V2                                V3-----V2
            /  \\                               /         \\
           /    \\                             /           \\
          V0----V1 <- reference                V0-----------V1 <- reference

    Square (side a)                        Semicircle (radius a/2)

          V0-----V1                                  V0
          |       |                                 /|
          |       |                                ( |
          V3-----V2 <- reference                    \\|
                                                     V1 <- reference
                                           (arc bulges to the west)

    Diverging lens (r = a/2, width 1.2 r, height 2 r)

          V0--------V1
           )        |
          (         |
           )        |
          V3--------V2 <- reference
    (concave arc centred on the V0-V3 midpoint)

Every factory returns a fresh Prism, so prototypes can be edited freely.
===============================================================================
"""

from __future__ import annotations

import math
from typing import List, Tuple, Union

from ...core.constants import CHARACTERISTIC_LENGTH
from ...core.geometry import Point
from ...core.prism import Prism
from ...core.shapes import Circle, DivergingLens, Polygon, SemiCircle


# Characteristic size of the stock prisms
PROTOTYPE_SIZE = 10 * CHARACTERISTIC_LENGTH

PositionLike = Union[Point, Tuple[float, float]]


def triangle(size: float = PROTOTYPE_SIZE, position: PositionLike = (0.0, 0.0)) -> Prism:
    """
    Equilateral triangle with side ``size``, centroid on the origin.

    Args:
        size: Side length.
        position: Where the prism is placed in the scene.

    Returns:
        A new Prism of kind 'triangle'.
    """
    a = size
    shape = Polygon(
        [
            (-a / 2, -a / (2 * math.sqrt(3))),
            (a / 2, -a / (2 * math.sqrt(3))),
            (0.0, a / math.sqrt(3)),
        ],
        reference_point_index=1
    )
    return Prism(shape, position, kind='triangle')


def trapezoid(size: float = PROTOTYPE_SIZE, position: PositionLike = (0.0, 0.0)) -> Prism:
    """Isosceles trapezoid: base ``size``, top ``size / 2``, 60-degree flanks."""
    a = size
    h = a * math.sqrt(3) / 4
    shape = Polygon(
        [(-a / 2, -h), (a / 2, -h), (a / 4, h), (-a / 4, h)],
        reference_point_index=1
    )
    return Prism(shape, position, kind='trapezoid')


def square(size: float = PROTOTYPE_SIZE, position: PositionLike = (0.0, 0.0)) -> Prism:
    """Square with side ``size``, centred on the origin."""
    a = size
    shape = Polygon(
        [(-a / 2, a / 2), (a / 2, a / 2), (a / 2, -a / 2), (-a / 2, -a / 2)],
        reference_point_index=2
    )
    return Prism(shape, position, kind='square')


def circle(size: float = PROTOTYPE_SIZE, position: PositionLike = (0.0, 0.0)) -> Prism:
    """Disk of diameter ``size``."""
    return Prism(Circle((0.0, 0.0), size / 2), position, kind='circle')


def semicircle(size: float = PROTOTYPE_SIZE, position: PositionLike = (0.0, 0.0)) -> Prism:
    """Half disk of diameter ``size`` with a vertical diameter, bulging west."""
    r = size / 2
    shape = SemiCircle([(0.0, r), (0.0, -r)], r, reference_point_index=1)
    return Prism(shape, position, kind='semicircle')


def diverging_lens(size: float = PROTOTYPE_SIZE, position: PositionLike = (0.0, 0.0)) -> Prism:
    """Concave lens of height ``size``; the west side is the concave arc."""
    r = size / 2
    shape = DivergingLens(
        [(-0.6 * r, r), (0.6 * r, r), (0.6 * r, -r), (-0.6 * r, -r)],
        r,
        reference_point_index=2
    )
    return Prism(shape, position, kind='diverging_lens')


def prism_prototypes(size: float = PROTOTYPE_SIZE) -> List[Prism]:
    """
    One of each stock prism, in toolbox order.

    Args:
        size: Characteristic size shared by all prototypes.

    Returns:
        Fresh Prism instances at the origin.
    """
    return [
        triangle(size),
        trapezoid(size),
        square(size),
        circle(size),
        semicircle(size),
        diverging_lens(size),
    ]
