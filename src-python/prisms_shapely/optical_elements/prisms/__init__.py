"""
Copyright 2026 prisms-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
PRISMS SUB-MODULE
===============================================================================
Stock prisms, built from one characteristic size.

Factory Functions:
- triangle(): equilateral triangle
- trapezoid(): isosceles trapezoid
- square(): square
- circle(): full disk
- semicircle(): half disk
- diverging_lens(): concave lens
- prism_prototypes(): one of each, in toolbox order
===============================================================================
"""

from .prototypes import (
    PROTOTYPE_SIZE,
    triangle,
    trapezoid,
    square,
    circle,
    semicircle,
    diverging_lens,
    prism_prototypes,
)

__all__ = [
    'PROTOTYPE_SIZE',
    # Factory functions
    'triangle',
    'trapezoid',
    'square',
    'circle',
    'semicircle',
    'diverging_lens',
    'prism_prototypes',
]
