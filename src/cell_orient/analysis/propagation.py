"""
Orientation Propagation
=======================

Assign a consistent orientation to the top cells of a complex.

ENTRY POINTS:
    orient_cell(cell)          single cell: embedding test or its one parent
    orient_cells(cells)        cell collection: BFS per component
    orient_complex(comp)       whole complex
    orient(obj)                dispatches on the three types above

PIPELINE (orient_cells):
    adjacency(cells) → connected_components → per component:
        orient_cell(root), then BFS from root; each cell c2 with BFS parent c1
        is flipped iff the shared face f has f.parents[c1] == f.parents[c2]
        (adjacent cells must induce OPPOSITE orientations on f).

ORDER:
    Cells are processed by stable sort of BFS distance: equal distances go in
    ascending index order. The decision for c2 reads only flags owned by c2
    and by its predecessor, which is final one band earlier, so the order
    inside a band does not change the result.

NON-ORIENTABLE INPUT:
    Not an error. The pass finishes and a warning is logged listing how many
    adjacent pairs still conflict.
"""

import logging
from typing import Sequence

import numpy as np

from ..operators.adjacency import FaceMap, adjacency, shared_face
from ..operators.graph import bfs, connected_components
from ..spec.constants import EPS_DET
from ..spec.structures import Cell, CellComplex, Simplex
from .consistency import conflicting_pairs

logger = logging.getLogger(__name__)


def orientation(cell: Cell) -> int:
    """
    Orientation of a top simplex relative to the embedding space R^N.

    Args:
        cell: cell with K == N + 1 and N + 1 points

    Returns:
        +1 or -1 from sign det[p1 - p0, ..., pN - p0]; 0 if degenerate,
        i.e. |det| ≤ EPS_DET · Π|p_i - p0|

    FAIL-FAST:
        Raises ValueError when K != N + 1.
    """
    if cell.K != cell.N + 1:
        raise ValueError(
            f"orientation() requires K == N + 1, got K={cell.K}, N={cell.N}"
        )

    W = Simplex(cell).wedge_vectors()
    det = np.linalg.det(W)
    scale = np.prod(np.linalg.norm(W, axis=0))

    if abs(det) <= EPS_DET * scale:
        return 0
    return 1 if det > 0 else -1


def change_orientation(cell: Cell) -> Cell:
    """
    Reverse the orientation of `cell` and return it.

    Swaps the first two points (if there are two) and negates the agreement
    flag of every relation the cell takes part in, on the child side for
    children. Applying it twice restores points and flags exactly.
    """
    if len(cell.points) >= 2:
        cell.points[0], cell.points[1] = cell.points[1], cell.points[0]
    for parent in list(cell.parents):
        cell.parents[parent] = not cell.parents[parent]
    for child in cell.children:
        child.parents[cell] = not child.parents[cell]
    return cell


def orient_cell(cell: Cell) -> Cell:
    """
    Orient a single cell where it can decide on its own.

    - No parents and simplicial at the ambient dimension (K == #points == N+1):
      flip if orientation() < 0; a degenerate cell is left as is.
    - Exactly one parent whose flag is False: flip to agree with it.
    - Anything else: unchanged.
    """
    num_parents = len(cell.parents)
    if num_parents == 0 and cell.K == len(cell.points) == cell.N + 1:
        if orientation(cell) < 0:
            change_orientation(cell)
    elif num_parents == 1 and not next(iter(cell.parents.values())):
        change_orientation(cell)
    return cell


def orient_component(cells: Sequence[Cell], adj, faces: FaceMap, root: int) -> Sequence[Cell]:
    """
    Orient the connected component of `cells` containing cells[root].

    Args:
        cells: cells of the component (any other cells are left untouched)
        adj, faces: output of adjacency(cells), or the component's block of it
        root: index of the seed cell

    Returns:
        cells (mutated in place). If the component is orientable, every cell
        reachable from root ends consistent with root.
    """
    orient_cell(cells[root])
    dists, predecessors = bfs(adj, root)

    # exclude unreachables and the root
    reached = np.flatnonzero(dists > 0)
    n_flipped = 0
    for j in reached[np.argsort(dists[reached], kind="stable")]:
        i = int(predecessors[j])
        c1, c2 = cells[i], cells[j]
        f = shared_face(faces, cells, i, int(j))
        if f.parents[c1] == f.parents[c2]:
            change_orientation(c2)
            n_flipped += 1

    logger.debug("[orient_component] root %r, %d cells, %d flipped",
                 cells[root].label, len(reached) + 1, n_flipped)

    remaining = conflicting_pairs(cells, adj, faces, nodes=np.append(reached, root))
    if remaining:
        logger.warning(
            "[orient_component] component of root %r is not consistently orientable: "
            "%d conflicting adjacent pairs, first %s", cells[root].label, len(remaining), remaining[0]
        )

    return cells


def orient_cells(cells: Sequence[Cell]) -> Sequence[Cell]:
    """
    Orient every connected component of `cells` consistently, if possible.

    Cells of different levels never share a face, so a mixed collection
    splits into per-level components. Components are processed by
    descending root K, ties in component label order; the root is the
    lowest-index cell of its component.

    Each component is handed to orient_component as its own contiguous
    block of the adjacency matrix, so the pass costs O(n + E) overall.
    Return `cells`.
    """
    if len(cells) == 0:
        return cells

    adj, faces = adjacency(cells)
    count, labels = connected_components(adj)

    # stable: members of a component keep ascending index order
    perm = np.argsort(labels, kind="stable")
    bounds = np.searchsorted(labels[perm], np.arange(count + 1))
    blocks = adj[perm][:, perm].tocsr()
    blocks.sort_indices()

    logger.debug("[orient_cells] %d cells in %d components", len(cells), count)

    # start with highest dimensional component
    for c in sorted(range(count), key=lambda c: -cells[perm[bounds[c]]].K):
        lo, hi = int(bounds[c]), int(bounds[c + 1])
        members = [cells[i] for i in perm[lo:hi]]
        orient_component(members, blocks[lo:hi, lo:hi], faces, 0)
    return cells


def orient_complex(comp: CellComplex) -> CellComplex:
    """
    Orient the top cells of `comp`.

    If K == N + 1 each top cell is oriented from the embedding on its own.
    Otherwise the top cells are oriented consistently with each other, if
    such an orientation exists. Return `comp`.
    """
    if comp.K == comp.N + 1:
        for cell in comp.top:
            orient_cell(cell)
    else:
        orient_cells(comp.top)
    return comp


def orient(obj):
    """Dispatch to orient_cell / orient_cells / orient_complex by argument type."""
    if isinstance(obj, Cell):
        return orient_cell(obj)
    if isinstance(obj, CellComplex):
        return orient_complex(obj)
    if isinstance(obj, (list, tuple)) and all(isinstance(c, Cell) for c in obj):
        return orient_cells(obj)
    raise TypeError(
        f"orient() takes a Cell, a sequence of Cells or a CellComplex, got {type(obj).__name__}"
    )
