"""
Complex builders - construction only, no operators dependency.

EXPORTS:
- Generic: build_simplicial_complex (points + top simplices → CellComplex)
- Fixtures: triangle, triangle strip, tetrahedron/octahedron surfaces,
  Möbius strip, tetrahedral block
"""

# === Generic construction ===
from .simplicial import build_simplicial_complex, permutation_sign

# === Fixture complexes ===
from .polyhedra import (
    build_triangle,
    build_triangle_strip,
    build_tetrahedron_surface,
    build_octahedron_surface,
    build_mobius_strip,
    build_tetrahedral_block,
)
