"""
Analysis functions - depend on operators layer.

Separated from builders to maintain clean layering:
    builders → spec
    analysis → operators → spec

Includes:
- propagation: embedding test, flip, BFS propagation, entry points
- consistency: conflicting adjacent pairs after (or before) orientation
"""

from .propagation import (
    orientation,
    change_orientation,
    orient_cell,
    orient_component,
    orient_cells,
    orient_complex,
    orient,
)

from .consistency import (
    conflicting_pairs,
    orientation_conflicts,
    is_consistently_oriented,
)
