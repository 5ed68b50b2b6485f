"""
Copyright 2026 prisms-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
OPTICAL ELEMENTS MODULE
===============================================================================
Top-level module for convenient optical element constructors.

Sub-modules:
- prisms: the stock prism shapes

The constructors compute vertex geometry from a single size, so users never
have to specify raw vertex coordinates for the standard bodies.
===============================================================================
"""

from .prisms import (
    PROTOTYPE_SIZE,
    # Factory functions
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
