"""Consistency diagnostics for oriented same-level cell collections."""

from typing import Iterable, List, Optional, Sequence, Tuple

from scipy.sparse import triu

from ..operators.adjacency import FaceMap, adjacency, shared_face
from ..spec.structures import Cell


def conflicting_pairs(cells: Sequence[Cell], adj, faces: FaceMap,
                      nodes: Optional[Iterable[int]] = None) -> List[Tuple[int, int]]:
    """
    Adjacent pairs (i, j), i < j, whose shared face has EQUAL flags relative
    to both cells, i.e. the two cells induce the same orientation on it.

    Args:
        cells: same-level cells
        adj, faces: output of adjacency(cells)
        nodes: restrict to pairs with both ends in this index set

    Returns:
        sorted list of conflicting index pairs
    """
    keep = None if nodes is None else {int(v) for v in nodes}
    upper = triu(adj, k=1).tocoo()

    pairs = []
    for i, j in sorted(zip(upper.row.tolist(), upper.col.tolist())):
        if keep is not None and (i not in keep or j not in keep):
            continue
        f = shared_face(faces, cells, i, j)
        if f.parents[cells[i]] == f.parents[cells[j]]:
            pairs.append((i, j))
    return pairs


def orientation_conflicts(cells: Sequence[Cell]) -> List[Tuple[int, int]]:
    """Build adjacency for `cells` and list the conflicting pairs."""
    adj, faces = adjacency(cells)
    return conflicting_pairs(cells, adj, faces)


def is_consistently_oriented(cells: Sequence[Cell]) -> bool:
    return not orientation_conflicts(cells)
