"""
Signed Boundary Operators
=========================

Pure combinatorics - read from agreement flags, NO geometry.

DEFINITION (level K ≥ 2, rows = level K cells, columns = level K-1 cells):
    D_K[i, j] = +1 if face j bounds cell i and face j agrees with cell i
    D_K[i, j] = -1 if face j bounds cell i and disagrees
    D_K[i, j] =  0 otherwise

    For a simplicial complex D_2 is the edge-vertex incidence (d₀ analogue)
    and D_3 the face-edge incidence (d₁ analogue).

EXACTNESS:
    D_K D_{K-1} = 0   (∂∂ = 0)

    Holds for ANY choice of cell orientations, so it survives every flip:
    flipping cell c negates row c of D_K and column c of D_{K+1}.
"""

import logging
from typing import Dict

import numpy as np

from ..spec.constants import EPS_CLOSE
from ..spec.structures import CellComplex

logger = logging.getLogger(__name__)


def build_boundary_operator(comp: CellComplex, K: int) -> np.ndarray:
    """
    Build D_K from the agreement flags of `comp`.

    Args:
        comp: cell complex
        K: level of the row cells, 2 ≤ K ≤ comp.K

    Returns:
        D: (n_K, n_{K-1}) dense matrix with entries in {-1, 0, +1}

    FAIL-FAST:
        Raises ValueError if a child is not among the level K-1 cells.
    """
    if K < 2 or K > comp.K:
        raise ValueError(f"Boundary operator level must be in [2, {comp.K}], got {K}")

    rows = comp.cells[K - 1]
    cols = comp.cells[K - 2]
    col_index = {cell: j for j, cell in enumerate(cols)}

    D = np.zeros((len(rows), len(cols)))
    for i, cell in enumerate(rows):
        for child in cell.children:
            if child not in col_index:
                raise ValueError(
                    f"Level K={K} cell {i} has a child outside level K={K - 1}"
                )
            D[i, col_index[child]] = +1 if child.parents[cell] else -1

    return D


def build_boundary_operators(comp: CellComplex, verify: bool = True) -> Dict[int, np.ndarray]:
    """
    Build every boundary operator of `comp`.

    Args:
        comp: cell complex
        verify: if True (default), check D_K D_{K-1} = 0 for every K

    Returns:
        dict K -> D_K for K = 2..comp.K
    """
    ops = {K: build_boundary_operator(comp, K) for K in range(2, comp.K + 1)}

    if verify:
        for K in range(3, comp.K + 1):
            prod = ops[K] @ ops[K - 1]
            # Using if/raise instead of assert for -O robustness
            if np.max(np.abs(prod), initial=0.0) > EPS_CLOSE:
                raise ValueError(
                    f"Exactness failed: ||D_{K} D_{K - 1}|| = {np.linalg.norm(prod)}"
                )
        logger.debug("[build_boundary_operators] exactness verified for K=2..%d", comp.K)

    return ops
