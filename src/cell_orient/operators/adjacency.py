"""
Shared-Face Adjacency
=====================

For a cell collection, build:
    adj:   (n, n) symmetric csr_matrix, adj[i, j] = 1 iff cells i, j share a face
    faces: dict (cells[i], cells[j]) -> shared face, BOTH orderings present

Only faces listed in the cells' own `children` count, so parents outside the
collection never create edges. Cells of different levels never share a
child, so a mixed collection splits into per-level components.

If two cells share several faces, the first one met (cell order, then child
order) is recorded.
"""

import itertools
import logging
from collections import defaultdict
from typing import Dict, Sequence, Tuple

import numpy as np
from scipy.sparse import csr_matrix

from ..spec.structures import Cell

logger = logging.getLogger(__name__)

FaceMap = Dict[Tuple[Cell, Cell], Cell]


def adjacency(cells: Sequence[Cell]) -> Tuple[csr_matrix, FaceMap]:
    """
    Build the shared-face adjacency graph and face map of `cells`.

    Args:
        cells: cells to link, usually one level K

    Returns:
        adj: (n, n) csr_matrix with unit weights and sorted indices
        faces: face map keyed by ordered cell pairs

    FAIL-FAST:
        Raises ValueError on a cell listed twice.
    """
    n = len(cells)
    if len({id(c) for c in cells}) != n:
        raise ValueError("adjacency() got the same cell more than once")

    # face -> indices of cells in the collection bounded by it (insertion ordered)
    bounded_by = defaultdict(list)
    for i, cell in enumerate(cells):
        for child in cell.children:
            bounded_by[child].append(i)

    rows, cols = [], []
    faces: FaceMap = {}
    for face, idxs in bounded_by.items():
        for i, j in itertools.combinations(idxs, 2):
            a, b = cells[i], cells[j]
            if (a, b) in faces:
                continue
            faces[(a, b)] = face
            faces[(b, a)] = face
            rows += [i, j]
            cols += [j, i]

    adj = csr_matrix((np.ones(len(rows)), (rows, cols)), shape=(n, n))
    adj.sort_indices()

    logger.debug("[adjacency] %d cells, %d adjacent pairs", n, len(rows) // 2)
    return adj, faces


def shared_face(faces: FaceMap, cells: Sequence[Cell], i: int, j: int) -> Cell:
    """
    Look up the face shared by cells[i] and cells[j].

    FAIL-FAST:
        Raises ValueError if the pair is missing, i.e. the graph and the face
        map disagree.
    """
    face = faces.get((cells[i], cells[j]))
    if face is None:
        raise ValueError(
            f"Face map has no entry for adjacent cells ({i}, {j}); "
            f"adjacency graph and face map are inconsistent"
        )
    return face
