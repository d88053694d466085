"""Operators - shared-face adjacency, graph primitives, signed boundary operators."""

from .adjacency import adjacency, shared_face, FaceMap

from .graph import (
    connected_components,
    bfs,
)

from .incidence import (
    build_boundary_operator,
    build_boundary_operators,
)
