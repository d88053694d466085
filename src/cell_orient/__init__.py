"""
CELL_ORIENT - Consistent orientation of cell complexes
======================================================

NO mesh I/O. NO plotting.

Structure:
    spec/       - Constants and cell complex contract (Cell, CellComplex, Simplex)
    builders/   - Simplicial complex construction and fixture complexes
    operators/  - Shared-face adjacency, graph primitives, boundary operators
    analysis/   - Orientation propagation and consistency checks

Typical use:
    comp = build_simplicial_complex(points, triangles)
    orient_complex(comp)
"""

from . import spec
from . import builders
from . import operators
from . import analysis

from .spec import Cell, CellComplex, Simplex, validate_complex
from .builders import build_simplicial_complex
from .analysis import (
    orientation,
    change_orientation,
    orient_cell,
    orient_component,
    orient_cells,
    orient_complex,
    orient,
    is_consistently_oriented,
)

__version__ = "0.1.0"
