"""
Operator Tests for cell_orient
==============================

Shared-face adjacency, graph primitives and builder topology counts.

Run: python -m pytest tests/core/test_operators.py -v
"""

import pytest
import numpy as np
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from cell_orient.builders import (
    build_triangle_strip,
    build_tetrahedron_surface,
    build_octahedron_surface,
    build_mobius_strip,
    build_tetrahedral_block,
)
from cell_orient.operators import (
    adjacency,
    bfs,
    connected_components,
    build_boundary_operator,
)
from cell_orient.spec import BFS_UNREACHABLE, NO_PREDECESSOR, Cell, validate_complex


# =============================================================================
# TEST A: Builder topology
# =============================================================================

@pytest.mark.parametrize("builder, counts", [
    (build_tetrahedron_surface, [4, 6, 4]),
    (build_octahedron_surface, [6, 12, 8]),
    (build_tetrahedral_block, [8, 19, 18, 6]),
    (lambda: build_triangle_strip(3), [8, 13, 6]),
    (lambda: build_mobius_strip(5), [10, 20, 10]),
])
def test_builder_counts(builder, counts):
    """A.1: Cells per level match V, E, F (, C)."""
    comp = builder()
    assert comp.counts() == counts
    is_valid, errors = validate_complex(comp, strict=False)
    assert is_valid, errors


def test_euler_characteristic():
    """A.2: χ = Σ (-1)^k n_k: sphere 2, disk 1, Möbius 0."""
    def chi(comp):
        return sum((-1) ** k * n for k, n in enumerate(comp.counts()))

    assert chi(build_octahedron_surface()) == 2
    assert chi(build_triangle_strip(4)) == 1
    assert chi(build_tetrahedral_block()) == 1
    assert chi(build_mobius_strip(7)) == 0


# =============================================================================
# TEST B: Shared-face adjacency
# =============================================================================

def test_strip_adjacency_is_a_path():
    """B.1: Strip triangles are linked only through shared edges, in a chain."""
    comp = build_triangle_strip(2)
    cells = comp.top
    adj, faces = adjacency(cells)

    expected = np.zeros((4, 4))
    for i in range(3):
        expected[i, i + 1] = expected[i + 1, i] = 1
    assert np.array_equal(adj.toarray(), expected)
    assert len(faces) == 6


def test_face_map_both_orderings():
    """B.2: faces[(a, b)] and faces[(b, a)] are the same shared cell."""
    comp = build_octahedron_surface()
    adj, faces = adjacency(comp.top)

    for (a, b), f in faces.items():
        assert faces[(b, a)] is f
        assert a in f.parents and b in f.parents
    assert len(faces) == 2 * 12  # one per edge, both orderings


def test_adjacency_ignores_parents_outside_collection():
    """B.3: A subset only sees its own shared faces."""
    comp = build_triangle_strip(2)
    subset = [comp.top[0], comp.top[2]]
    adj, faces = adjacency(subset)
    assert adj.nnz == 0
    assert faces == {}


def test_adjacency_mixed_levels_stay_apart():
    """B.4: A triangle and its own edge share no child, so they are not linked."""
    comp = build_triangle_strip(1)
    edge = next(c for c in comp.cells[1] if comp.top[0] in c.parents)
    adj, faces = adjacency([comp.top[0], edge])
    assert adj.nnz == 0
    assert faces == {}


def test_adjacency_rejects_repeated_cell():
    """B.5: The same cell twice would make indices ambiguous."""
    comp = build_triangle_strip(1)
    with pytest.raises(ValueError, match="more than once"):
        adjacency([comp.top[0], comp.top[0]])


def test_boundary_operator_level_checked():
    """B.6: D_K only exists for 2 ≤ K ≤ comp.K."""
    comp = build_triangle_strip(1)
    with pytest.raises(ValueError, match="level"):
        build_boundary_operator(comp, 1)
    with pytest.raises(ValueError, match="level"):
        build_boundary_operator(comp, 4)


# =============================================================================
# TEST C: Graph primitives
# =============================================================================

def test_bfs_path_with_isolated_node():
    """C.1: Distances and predecessors on 0-1-2 plus isolated 3."""
    adj = np.array([
        [0, 1, 0, 0],
        [1, 0, 1, 0],
        [0, 1, 0, 0],
        [0, 0, 0, 0],
    ])
    dists, preds = bfs(adj, 0)

    assert list(dists) == [0, 1, 2, BFS_UNREACHABLE]
    assert list(preds) == [NO_PREDECESSOR, 0, 1, NO_PREDECESSOR]


def test_bfs_tie_break_lowest_index():
    """C.2: On a square 0-1-3-2-0, node 3 is reached through 1, not 2."""
    adj = np.zeros((4, 4))
    for i, j in [(0, 1), (0, 2), (1, 3), (2, 3)]:
        adj[i, j] = adj[j, i] = 1

    dists, preds = bfs(adj, 0)

    assert list(dists) == [0, 1, 1, 2]
    assert preds[3] == 1


def test_bfs_root_checked():
    """C.3: Root must be a node."""
    with pytest.raises(ValueError, match="out of range"):
        bfs(np.zeros((2, 2)), 2)


def test_connected_components_labels():
    """C.4: Two disjoint edges plus a lone node → 3 components."""
    adj = np.zeros((5, 5))
    for i, j in [(0, 1), (2, 3)]:
        adj[i, j] = adj[j, i] = 1

    count, labels = connected_components(adj)

    assert count == 3
    assert labels[0] == labels[1]
    assert labels[2] == labels[3]
    assert len({labels[0], labels[2], labels[4]}) == 3


def test_components_of_disjoint_surfaces():
    """C.5: Two tetrahedron surfaces in one collection are two components."""
    a = build_tetrahedron_surface()
    b = build_tetrahedron_surface()
    adj, _ = adjacency(a.top + b.top)
    count, labels = connected_components(adj)

    assert count == 2
    assert len(set(labels[:4])) == 1 and len(set(labels[4:])) == 1


def test_adjacency_rejects_non_square():
    """C.6: Graph primitives need a square matrix."""
    with pytest.raises(ValueError, match="square"):
        connected_components(np.zeros((2, 3)))


def test_cell_identity_keys():
    """C.7: Cells with equal coordinates are still distinct keys."""
    a = Cell([(0, 0)], K=1)
    b = Cell([(0, 0)], K=1)
    assert a != b
    assert len({a: 1, b: 2}) == 2
    assert a.dim == 0 and a.N == 2
