"""
Simplicial Complex Construction
===============================

Build a CellComplex (all levels, parent/child relations, agreement flags)
from vertex coordinates and a list of top simplices.

ORDERING CONVENTION:
    - Top simplices keep the vertex order they were given in (this is the
      orientation the caller chose, consistent or not).
    - Every lower cell stores its vertices in ascending index order.

AGREEMENT FLAG:
    For parent [v0, ..., vk] the face omitting v_i has induced sign (-1)^i
    relative to the ordering [v0, .., v̂i, .., vk]. The flag is True iff
    induced sign × sign(permutation to the face's stored order) = +1.
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..spec.structures import Cell, CellComplex, validate_complex

logger = logging.getLogger(__name__)


def permutation_sign(seq: Sequence, ref: Sequence) -> int:
    """
    Sign of the permutation taking `ref` to `seq`.

    Args:
        seq, ref: sequences holding the same distinct items

    Returns:
        +1 for an even permutation, -1 for an odd one

    Example:
        permutation_sign([1, 0, 2], [0, 1, 2]) → -1
    """
    if len(seq) != len(ref) or set(seq) != set(ref) or len(set(ref)) != len(ref):
        raise ValueError(f"Not a permutation: {list(seq)} of {list(ref)}")

    pos = {v: i for i, v in enumerate(ref)}
    perm = [pos[v] for v in seq]

    # Parity from cycle decomposition: sign = (-1)^(n - n_cycles)
    visited = [False] * len(perm)
    n_cycles = 0
    for start in range(len(perm)):
        if visited[start]:
            continue
        n_cycles += 1
        j = start
        while not visited[j]:
            visited[j] = True
            j = perm[j]

    return -1 if (len(perm) - n_cycles) % 2 else +1


def _validate_simplices(simplices, n_V: int) -> None:
    errors = []
    if not simplices:
        errors.append("No simplices given")
    else:
        m = len(simplices[0])
        if m < 1:
            errors.append("Simplices must have at least one vertex")
        seen = set()
        for s_idx, s in enumerate(simplices):
            if len(s) != m:
                errors.append(f"Simplex {s_idx}: has {len(s)} vertices, expected {m}")
                break  # Don't spam
            if len(set(s)) != len(s):
                errors.append(f"Simplex {s_idx}: has repeated vertices {list(s)}")
                break
            if any(v < 0 or v >= n_V for v in s):
                errors.append(f"Simplex {s_idx}: vertex index out of bounds [0, {n_V - 1}]")
                break
            key = tuple(sorted(s))
            if key in seen:
                errors.append(f"Simplex {s_idx}: duplicate of an earlier simplex {key}")
                break
            seen.add(key)

    if errors:
        raise ValueError(f"Simplicial input violation: {errors}")


def build_simplicial_complex(points,
                             simplices: Sequence[Sequence[int]],
                             N: Optional[int] = None) -> CellComplex:
    """
    Build every level of the simplicial complex spanned by `simplices`.

    Args:
        points: (V, N) vertex coordinates
        simplices: top simplices as vertex index sequences, all the same length
        N: ambient dimension (defaults to points.shape[1])

    Returns:
        CellComplex with cells[k] = cells of level K = k + 1. Top cells
        follow the input order; lower levels are sorted by vertex ids.
        Each cell's `label` is its sorted vertex id tuple.
    """
    P = np.asarray(points, dtype=float)
    if P.ndim != 2:
        raise ValueError(f"points must be a (V, N) array, got shape {P.shape}")
    if N is None:
        N = P.shape[1]
    if P.shape[1] != N:
        raise ValueError(f"points have dimension {P.shape[1]}, expected N={N}")

    simplices = [list(s) for s in simplices]
    _validate_simplices(simplices, len(P))
    top_K = len(simplices[0])

    # order[cell] = vertex ids in the cell's stored order
    order: Dict[Cell, List[int]] = {}
    by_key: List[Dict[tuple, Cell]] = [dict() for _ in range(top_K)]

    top = []
    for s in simplices:
        cell = Cell([P[v] for v in s], K=top_K, N=N, label=tuple(sorted(s)))
        order[cell] = list(s)
        by_key[top_K - 1][cell.label] = cell
        top.append(cell)

    frontier = top
    for K in range(top_K, 1, -1):
        created = []
        for parent in frontier:
            ids = order[parent]
            for i in range(K):
                face_ids = ids[:i] + ids[i + 1:]
                key = tuple(sorted(face_ids))
                face = by_key[K - 2].get(key)
                if face is None:
                    face = Cell([P[v] for v in key], K=K - 1, N=N, label=key)
                    order[face] = list(key)
                    by_key[K - 2][key] = face
                    created.append(face)
                induced = (-1) ** i * permutation_sign(face_ids, key)
                parent.add_child(face, agrees=(induced == +1))
        frontier = created

    levels = [sorted(by_key[k].values(), key=lambda c: c.label) for k in range(top_K - 1)]
    levels.append(top)

    comp = CellComplex(N=N, cells=levels)
    validate_complex(comp, strict=True)

    logger.debug("[build_simplicial_complex] N=%d, cells per level %s", N, comp.counts())
    return comp
